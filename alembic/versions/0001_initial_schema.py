"""Initial schema: users table with audit and soft-delete columns.

Revision ID: 0001
Revises:
Create Date: 2026-10-19
"""

from __future__ import annotations

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid, primary_key=True),
        sa.Column("name", sa.Text, nullable=False),
        sa.Column("email", sa.Text, nullable=False),
        sa.Column("platform", sa.Text, nullable=True),
        sa.Column("created_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("created_user_id", sa.Uuid, nullable=True),
        sa.Column("updated_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("updated_user_id", sa.Uuid, nullable=True),
        sa.Column("deleted_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("deleted_user_id", sa.Uuid, nullable=True),
    )
    op.create_index("ix_users_deleted_date", "users", ["deleted_date"])


def downgrade() -> None:
    op.drop_index("ix_users_deleted_date", table_name="users")
    op.drop_table("users")
