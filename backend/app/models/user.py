"""
MemoPad Backend — User SQLAlchemy Model
=========================================

What:  ORM model representing the `users` table.
Who:   Used by UserService for account operations and by Alembic.
When:  Inserted on signup, updated on profile edit, deleted on account deletion.

Table Design:
    - id: integer autoincrement, surfaced to clients as `userId`
    - email: UNIQUE; the login key. The constraint backs up the
      application-level check so two concurrent signups cannot both insert.
    - password: bcrypt digest. Never serialized to clients.
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class User(Base):
    """
    A registered account.

    Lifecycle:
        1. Created by signup
        2. name / email / password mutated by profile edit
        3. Deleted by account deletion, after its memos are deleted
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Display name",
    )

    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        comment="Login key, unique across users",
    )

    password: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="bcrypt digest of the password",
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}')>"
