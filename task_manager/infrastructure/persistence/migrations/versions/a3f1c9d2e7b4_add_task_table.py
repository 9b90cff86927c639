"""add task table

Revision ID: a3f1c9d2e7b4
Revises:
Create Date: 2026-10-19

Task record owned by the identity that created it (owner_id = auth user id).
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

revision: str = "a3f1c9d2e7b4"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "task",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("owner_id", sa.String(length=128), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column(
            "status", sa.String(length=32), nullable=False, server_default="pending"
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "status IN ('pending', 'in-progress', 'done')", name="ck_task_status"
        ),
        sa.CheckConstraint("length(btrim(title)) > 0", name="ck_task_title_not_blank"),
    )
    op.create_index("ix_task_owner_id", "task", ["owner_id"], unique=False)
    op.create_index(
        "ix_task_owner_created", "task", ["owner_id", "created_at"], unique=False
    )


def downgrade() -> None:
    op.drop_index("ix_task_owner_created", table_name="task")
    op.drop_index("ix_task_owner_id", table_name="task")
    op.drop_table("task")
