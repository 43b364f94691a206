"""Create users and memos tables

Revision ID: 001
Revises: None
Create Date: 2024-05-01 00:00:00.000000

What:  Creates `users` (accounts) and `memos` (per-user notes).
How:   Portable column types only, so the same migration runs on PostgreSQL,
       MySQL and SQLite.

Rollback: downgrade() drops both tables (destroys all data).
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(255), nullable=False, comment="Display name"),
        sa.Column("email", sa.String(255), nullable=False, comment="Login key, unique across users"),
        sa.Column("password", sa.String(255), nullable=False, comment="bcrypt digest of the password"),
        sa.PrimaryKeyConstraint("id"),
        # Backs the application-level duplicate check on signup
        sa.UniqueConstraint("email", name="uq_users_email"),
    )

    op.create_table(
        "memos",
        sa.Column("memo_id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False, comment="Owning user"),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False, comment="Creation time, second precision; immutable"),
        sa.Column("updated_at", sa.DateTime(), nullable=False, comment="Last edit time, second precision"),
        sa.PrimaryKeyConstraint("memo_id"),
        # No ON DELETE CASCADE: account deletion removes memos explicitly first
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], name="fk_memos_user_id"),
    )

    op.create_index("idx_memos_user_id", "memos", ["user_id"])


def downgrade() -> None:
    """Drop both tables. memos first because of the foreign key."""
    op.drop_index("idx_memos_user_id", table_name="memos")
    op.drop_table("memos")
    op.drop_table("users")
