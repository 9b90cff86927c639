"""enable RLS on task for owner isolation

Revision ID: b7e2d4f6a8c1
Revises: a3f1c9d2e7b4
Create Date: 2026-10-19

Policy: only rows where owner_id equals current_setting('app.current_user_id').
The application sets app.current_user_id (transaction-local) at the start of
each request from the verified JWT. FORCE makes the policy apply to the table
owner too. Migrations and admin scripts should use a role with BYPASSRLS; the
app role must not.
"""

from typing import Sequence, Union

from alembic import op

revision: str = "b7e2d4f6a8c1"
down_revision: Union[str, Sequence[str], None] = "a3f1c9d2e7b4"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("ALTER TABLE task ENABLE ROW LEVEL SECURITY")
    op.execute("ALTER TABLE task FORCE ROW LEVEL SECURITY")
    op.execute(
        "CREATE POLICY task_owner_isolation ON task "
        "USING (owner_id = current_setting('app.current_user_id', true)) "
        "WITH CHECK (owner_id = current_setting('app.current_user_id', true))"
    )


def downgrade() -> None:
    op.execute("DROP POLICY IF EXISTS task_owner_isolation ON task")
    op.execute("ALTER TABLE task NO FORCE ROW LEVEL SECURITY")
    op.execute("ALTER TABLE task DISABLE ROW LEVEL SECURITY")
