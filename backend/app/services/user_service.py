"""
MemoPad Backend — User Service (Account Business Logic)
=========================================================

What:  Signup, authentication, profile edit and account deletion.
How:   Queries and mutates the users/memos tables through the request's
       AsyncSession and delegates password work to PasswordService.
Who:   Called by the account route handlers (app/routes/auth.py).
When:  Once per account request; the route commits or rolls back.

Sessions are NOT touched here. The route handler decides what to write
into the SessionStore after a service call succeeds.

Error Handling Strategy:
    Lookups that miss raise NotFoundError, password mismatches raise
    UnauthorizedError, duplicate emails raise ConflictError. Any other
    SQLAlchemy failure is wrapped in DatabaseError.
"""

import logging
from typing import Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import (
    ConflictError,
    DatabaseError,
    NotFoundError,
    UnauthorizedError,
)
from app.models.memo import Memo
from app.models.user import User
from app.services.password_service import PasswordService, password_service

logger = logging.getLogger(__name__)


class UserService:
    """
    Business logic layer for user accounts.

    Stateless apart from the injected PasswordService; every call receives
    the request's database session.
    """

    def __init__(self, passwords: Optional[PasswordService] = None):
        self.passwords = passwords or password_service

    # ── Lookups ───────────────────────────────────────────────────────────

    async def find_by_email(self, db: AsyncSession, email: str) -> Optional[User]:
        try:
            result = await db.execute(select(User).where(User.email == email))
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error looking up user by email: %s", str(e))
            raise DatabaseError(context={"operation": "find_by_email"}) from e

    async def find_by_id(self, db: AsyncSession, user_id: int) -> Optional[User]:
        try:
            result = await db.execute(select(User).where(User.id == user_id))
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error looking up user %s: %s", user_id, str(e))
            raise DatabaseError(context={"operation": "find_by_id", "user_id": user_id}) from e

    # ── Signup / Login ────────────────────────────────────────────────────

    async def signup(
        self,
        db: AsyncSession,
        name: str,
        email: str,
        password: str,
    ) -> User:
        """
        Register a new account.

        Workflow:
            1. Reject the email if it is already registered
            2. Hash the password
            3. Insert and flush to obtain the generated id

        Raises:
            ConflictError: Email already in use (including a concurrent
                signup that wins the UNIQUE constraint)
            HashingError: bcrypt failure
            DatabaseError: Insert failed for another reason
        """
        if await self.find_by_email(db, email) is not None:
            logger.info("Signup rejected: email already registered")
            raise ConflictError(context={"email": email})

        digest = await self.passwords.hash(password)
        user = User(name=name, email=email, password=digest)

        try:
            db.add(user)
            await db.flush()
        except IntegrityError as e:
            logger.info("Signup lost uniqueness race for email")
            raise ConflictError(context={"email": email}) from e
        except SQLAlchemyError as e:
            logger.error("Database error inserting user: %s", str(e))
            raise DatabaseError(
                message="Error in registering user.",
                context={"operation": "signup"},
            ) from e

        logger.info("User %s signed up", user.id)
        return user

    async def authenticate(self, db: AsyncSession, email: str, password: str) -> User:
        """
        Check an email/password pair.

        Raises:
            NotFoundError: No user with this email
            UnauthorizedError: Password does not match
        """
        user = await self.find_by_email(db, email)
        if user is None:
            logger.info("Login failed: user not found")
            raise NotFoundError(resource="user", message="User not found")

        if not await self.passwords.verify(password, user.password):
            logger.info("Login failed for user %s: bad password", user.id)
            raise UnauthorizedError()

        logger.info("User %s authenticated", user.id)
        return user

    # ── Profile ───────────────────────────────────────────────────────────

    async def edit_profile(
        self,
        db: AsyncSession,
        user_id: int,
        current_password: str,
        new_name: Optional[str] = None,
        new_email: Optional[str] = None,
        new_password: Optional[str] = None,
    ) -> User:
        """
        Update any subset of name, email and password.

        Omitted fields keep their stored values. The password is always
        re-hashed: with `new_password` if given, else with `current_password`.

        Raises:
            NotFoundError: Unknown user id
            UnauthorizedError: `current_password` does not match
            ConflictError: `new_email` belongs to another account
        """
        user = await self.find_by_id(db, user_id)
        if user is None:
            raise NotFoundError(resource="user", resource_id=user_id, message="User not found")

        name = new_name if new_name is not None else user.name
        email = new_email if new_email is not None else user.email

        if not await self.passwords.verify(current_password, user.password):
            logger.info("Profile edit for user %s rejected: bad password", user_id)
            raise UnauthorizedError(message="Invalid password")

        if email != user.email:
            owner = await self.find_by_email(db, email)
            if owner is not None and owner.id != user.id:
                raise ConflictError(context={"email": email})

        digest = await self.passwords.hash(
            new_password if new_password is not None else current_password
        )

        user.name = name
        user.email = email
        user.password = digest
        try:
            await db.flush()
        except IntegrityError as e:
            raise ConflictError(context={"email": email}) from e
        except SQLAlchemyError as e:
            logger.error("Database error updating user %s: %s", user_id, str(e))
            raise DatabaseError(context={"operation": "edit_profile", "user_id": user_id}) from e

        logger.info("User %s updated profile", user_id)
        return user

    # ── Deletion ──────────────────────────────────────────────────────────

    async def delete_account(self, db: AsyncSession, user_id: int) -> int:
        """
        Delete a user and every memo they own.

        Memos go first, then the user row. Both statements run in the
        request transaction; if the user does not exist the NotFoundError
        rolls the memo delete back with it.

        Returns:
            Number of memos removed.

        Raises:
            NotFoundError: Unknown user id
        """
        try:
            memo_result = await db.execute(delete(Memo).where(Memo.user_id == user_id))
            user_result = await db.execute(delete(User).where(User.id == user_id))
        except SQLAlchemyError as e:
            logger.error("Database error deleting user %s: %s", user_id, str(e))
            raise DatabaseError(context={"operation": "delete_account", "user_id": user_id}) from e

        if user_result.rowcount == 0:
            raise NotFoundError(resource="user", resource_id=user_id, message="User not found")

        memos_deleted = memo_result.rowcount or 0
        logger.info("User %s deleted along with %d memos", user_id, memos_deleted)
        return memos_deleted


user_service = UserService()
