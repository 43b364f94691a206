"""
MemoPad Backend — Database Session Management
===============================================

What:  Async SQLAlchemy engine, session factory, and FastAPI dependency.
How:   Creates an async engine with connection pooling, provides a session
       dependency that commits on success and rolls back on error.
Who:   Used by route handlers via FastAPI's dependency injection system.
When:  Engine is created at module import and disposed at shutdown;
       sessions are created per-request.

Transaction boundary:
    One request == one transaction. Multi-statement operations (the email
    check followed by the insert on signup, the memo purge followed by the
    user delete on account deletion) either commit together or not at all.
"""

from typing import Any, AsyncGenerator, Dict

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase

from app.config import settings
from app.exceptions import ConflictError, DatabaseError


def _engine_options(url: str) -> Dict[str, Any]:
    """Pool arguments for server databases; SQLite picks its own pool class."""
    options: Dict[str, Any] = {"echo": settings.log_level == "DEBUG"}
    if not url.startswith("sqlite"):
        options.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            pool_recycle=3600,
        )
    return options


# ── Engine Configuration ──────────────────────────────────────────────────
engine: AsyncEngine = create_async_engine(
    settings.sqlalchemy_url,
    **_engine_options(settings.sqlalchemy_url),
)

# ── Session Factory ───────────────────────────────────────────────────────
# expire_on_commit=False: attributes stay readable after the request commits
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy ORM models (shared metadata for Alembic)."""
    pass


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Creates a new session from the factory
        2. Yields it to the route handler (the handler performs queries)
        3. On success: commits the transaction
        4. On error: rolls back the transaction and re-raises
        5. Always: closes the session (returns connection to pool)

    Example usage in a route:
        @router.post("/getMemo")
        async def get_memos(db: AsyncSession = Depends(get_db_session)):
            ...

    Raises:
        Any exception from the handler is propagated to the global error
        handlers after the rollback.
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


async def commit_session(session: AsyncSession) -> None:
    """
    Commit the request transaction early.

    Handlers call this before writing anything outside the database (the
    session store, cookies), so those writes only happen once the rows are
    durable. The dependency's own commit afterwards is a no-op.

    Raises:
        ConflictError: A unique constraint failed at commit time
        DatabaseError: Any other commit failure
    """
    try:
        await session.commit()
    except IntegrityError as e:
        raise ConflictError() from e
    except SQLAlchemyError as e:
        raise DatabaseError(context={"operation": "commit"}) from e


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def create_tables() -> None:
    """
    What:  Creates all tables registered on Base.metadata if missing.
    When:  At startup when DB_CREATE_TABLES is enabled.
    """
    # Import models so they register with Base.metadata
    from app.models import memo, user  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def dispose_engine() -> None:
    """
    What:  Gracefully closes all connections in the pool.
    When:  Called during application shutdown (lifespan handler).
    """
    await engine.dispose()
