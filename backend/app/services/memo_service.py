"""
MemoPad Backend — Memo Service
================================

What:  Create, edit, delete and list memos.
How:   SQLAlchemy 2.0 statements against the request's AsyncSession.
Who:   Called by the memo route handlers (app/routes/memos.py).

Timestamps:
    `now` defaults to local wall-clock time truncated to the second.
    create() sets created_at = updated_at = now; edit() only moves
    updated_at. Callers may pass `now` explicitly (tests do).

Ownership:
    The owner id is whatever the client sent. It is not compared with
    the caller's session.
"""

import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import DatabaseError, NotFoundError
from app.models.memo import Memo
from app.models.user import User

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now().replace(microsecond=0)


class MemoService:
    """Business logic layer for memo operations."""

    async def create(
        self,
        db: AsyncSession,
        owner_id: int,
        title: str,
        content: str,
        now: Optional[datetime] = None,
    ) -> Memo:
        """
        Insert a memo and return it with its generated memo_id.

        Raises:
            DatabaseError: Insert failed (including an unknown owner when
                the database enforces the foreign key)
        """
        stamp = (now or _now()).replace(microsecond=0)
        memo = Memo(
            user_id=owner_id,
            title=title,
            content=content,
            created_at=stamp,
            updated_at=stamp,
        )
        try:
            db.add(memo)
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Memo create error for user %s: %s", owner_id, str(e))
            raise DatabaseError(
                message="Memo create error",
                context={"operation": "create_memo", "user_id": owner_id},
            ) from e

        logger.info("Memo %s created for user %s", memo.memo_id, owner_id)
        return memo

    async def get(self, db: AsyncSession, memo_id: int) -> Memo:
        """
        Fetch one memo by id.

        Raises:
            NotFoundError: No memo with this id
        """
        try:
            result = await db.execute(select(Memo).where(Memo.memo_id == memo_id))
            memo = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error fetching memo %s: %s", memo_id, str(e))
            raise DatabaseError(context={"operation": "get_memo", "memo_id": memo_id}) from e

        if memo is None:
            raise NotFoundError(resource="memo", resource_id=memo_id, message="Memo not found")
        return memo

    async def edit(
        self,
        db: AsyncSession,
        memo_id: int,
        title: str,
        content: str,
        now: Optional[datetime] = None,
    ) -> Memo:
        """
        Replace title and content, stamp updated_at, keep created_at.

        Raises:
            NotFoundError: No memo with this id
        """
        memo = await self.get(db, memo_id)

        stamp = (now or _now()).replace(microsecond=0)
        memo.title = title
        memo.content = content
        memo.updated_at = max(stamp, memo.created_at)
        try:
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error updating memo %s: %s", memo_id, str(e))
            raise DatabaseError(context={"operation": "edit_memo", "memo_id": memo_id}) from e

        logger.info("Memo %s edited", memo_id)
        return memo

    async def delete(self, db: AsyncSession, memo_id: int) -> None:
        """
        Delete one memo.

        Raises:
            NotFoundError: No row was affected
        """
        try:
            result = await db.execute(delete(Memo).where(Memo.memo_id == memo_id))
        except SQLAlchemyError as e:
            logger.error("Database error deleting memo %s: %s", memo_id, str(e))
            raise DatabaseError(context={"operation": "delete_memo", "memo_id": memo_id}) from e

        if result.rowcount == 0:
            raise NotFoundError(resource="memo", resource_id=memo_id, message="Memo not found")
        logger.info("Memo %s deleted", memo_id)

    async def list_by_owner(self, db: AsyncSession, owner_id: int) -> List[Memo]:
        """
        All memos of one user, oldest first (by memo_id).

        Returns an empty list for a user with no memos.

        Raises:
            NotFoundError: No user with this id
        """
        try:
            owner = await db.execute(select(User.id).where(User.id == owner_id))
            if owner.scalar_one_or_none() is None:
                raise NotFoundError(resource="user", resource_id=owner_id, message="User not found")

            result = await db.execute(
                select(Memo).where(Memo.user_id == owner_id).order_by(Memo.memo_id)
            )
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error("Database error listing memos of user %s: %s", owner_id, str(e))
            raise DatabaseError(context={"operation": "list_memos", "user_id": owner_id}) from e


memo_service = MemoService()
