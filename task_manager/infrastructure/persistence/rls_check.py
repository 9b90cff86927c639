"""RLS (row-level security) check for the task table.

Used by the readiness endpoint and scripts/verify_rls_roles. Returns an
RLSCheckResult rather than printing or exiting; the caller decides between
503 and a non-zero exit code.
"""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import urlparse

import asyncpg

from task_manager.core.constants import RLS_TASK_POLICY_NAME

TASK_TABLE = "task"


@dataclass
class RLSCheckResult:
    """Outcome of the checks; message is safe to log or return."""

    ok: bool
    message: str


async def _role_problem(
    conn: asyncpg.Connection, role: str, *, must_bypass: bool
) -> str | None:
    """Return why role fails its BYPASSRLS expectation, or None if it is fine."""
    bypass = await conn.fetchval(
        "SELECT rolbypassrls FROM pg_roles WHERE rolname = $1", role
    )
    if bypass is None:
        return f"Role not found: {role}"
    if bypass and not must_bypass:
        return f"RLS check failed: app role '{role}' has BYPASSRLS. Run: ALTER ROLE {role} NOBYPASSRLS;"
    if must_bypass and not bypass:
        return f"RLS check failed: migrator role '{role}' lacks BYPASSRLS. Run: ALTER ROLE {role} BYPASSRLS;"
    return None


async def _policy_problem(conn: asyncpg.Connection) -> str | None:
    """Return why the task table is not protected by the ownership policy, or None."""
    flags = await conn.fetchrow(
        "SELECT relrowsecurity, relforcerowsecurity FROM pg_class "
        "WHERE relname = $1 AND relkind = 'r'",
        TASK_TABLE,
    )
    if flags is None:
        return f"RLS check failed: table '{TASK_TABLE}' does not exist. Run: alembic upgrade head"
    if not flags["relrowsecurity"] or not flags["relforcerowsecurity"]:
        return f"RLS check failed: row level security is not enabled and forced on '{TASK_TABLE}'."
    found = await conn.fetchval(
        "SELECT count(*) FROM pg_policies WHERE tablename = $1 AND policyname = $2",
        TASK_TABLE,
        RLS_TASK_POLICY_NAME,
    )
    if not found:
        return f"RLS check failed: policy '{RLS_TASK_POLICY_NAME}' not found on '{TASK_TABLE}'."
    return None


async def run_rls_check(
    database_url: str,
    app_role: str | None = None,
    migrator_role: str | None = None,
    check_policies: bool = False,
) -> RLSCheckResult:
    """Run the role checks and, when check_policies is set, the policy check.

    Args:
        database_url: postgresql:// or postgresql+asyncpg:// URL.
        app_role: Role the service connects as; must NOT have BYPASSRLS.
            Defaults to the username in database_url.
        migrator_role: If set, must have BYPASSRLS.
        check_policies: Require RLS enabled and forced on the task table and
            the ownership policy to exist.
    """
    app_role = app_role or urlparse(database_url).username
    if not app_role:
        return RLSCheckResult(
            ok=False,
            message="App role not set and DATABASE_URL has no username.",
        )

    try:
        conn = await asyncpg.connect(
            database_url.replace("postgresql+asyncpg://", "postgresql://", 1)
        )
    except (OSError, asyncpg.PostgresError) as e:
        return RLSCheckResult(ok=False, message=f"Failed to connect: {type(e).__name__}")

    try:
        problem = await _role_problem(conn, app_role, must_bypass=False)
        if problem is None and migrator_role:
            problem = await _role_problem(conn, migrator_role, must_bypass=True)
        if problem is None and check_policies:
            problem = await _policy_problem(conn)
    finally:
        await conn.close()

    if problem:
        return RLSCheckResult(ok=False, message=problem)
    return RLSCheckResult(ok=True, message="RLS checks passed.")
