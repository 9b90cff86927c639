"""Verify RLS configuration for the task table.

The app role must NOT have BYPASSRLS; an optional migrator role must have it;
optionally the task ownership policy must be installed.

Usage:
    APP_ROLE=task_app python -m scripts.verify_rls_roles
    VERIFY_RLS_MIGRATOR_ROLE=task_migrator APP_ROLE=task_app python -m scripts.verify_rls_roles
    VERIFY_RLS_POLICIES=1 python -m scripts.verify_rls_roles

Reads DATABASE_URL from settings. APP_ROLE defaults to the user in
DATABASE_URL. Exits 0 if checks pass, 1 otherwise.
"""

from __future__ import annotations

import asyncio
import os
import sys

from task_manager.core.config import get_settings
from task_manager.infrastructure.persistence.rls_check import run_rls_check


async def _main() -> int:
    result = await run_rls_check(
        database_url=get_settings().database_url,
        app_role=os.environ.get("VERIFY_RLS_APP_ROLE") or os.environ.get("APP_ROLE"),
        migrator_role=os.environ.get("VERIFY_RLS_MIGRATOR_ROLE"),
        check_policies=os.environ.get("VERIFY_RLS_POLICIES", "").lower() in ("1", "true", "yes"),
    )
    print(result.message, file=sys.stdout if result.ok else sys.stderr)
    return 0 if result.ok else 1


def main() -> None:
    sys.exit(asyncio.run(_main()))


if __name__ == "__main__":
    main()
