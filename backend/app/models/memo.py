"""
MemoPad Backend — Memo SQLAlchemy Model
=========================================

What:  ORM model representing the `memos` table.
Who:   Used by MemoService for CRUD operations and by Alembic.

Timestamps:
    created_at / updated_at are naive wall-clock DATETIME values truncated
    to the second. The API renders them as 'YYYY-MM-DD HH:MM:SS'.
    created_at is written once on insert; updated_at is rewritten on every
    edit, so updated_at >= created_at always holds.

Query Patterns:
    - List a user's memos: SELECT ... WHERE user_id = :id ORDER BY memo_id
      → Uses idx_memos_user_id
    - Single memo: SELECT ... WHERE memo_id = :id → primary key
"""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class Memo(Base):
    """A text note owned by one user."""

    __tablename__ = "memos"

    memo_id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    # Owner id comes from the request body; it is not cross-checked against the session
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id"),
        nullable=False,
        comment="Owning user",
    )

    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    content: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        comment="Creation time, second precision; immutable",
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        comment="Last edit time, second precision",
    )

    __table_args__ = (
        Index("idx_memos_user_id", "user_id"),
    )

    def __repr__(self) -> str:
        return (
            f"<Memo(memo_id={self.memo_id}, user_id={self.user_id}, "
            f"updated_at='{self.updated_at}')>"
        )
