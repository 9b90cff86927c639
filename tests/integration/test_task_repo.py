"""Task repository integration tests. Require Postgres; session is rolled back after each test."""

import pytest
from sqlalchemy import text

from task_manager.application.dtos.task import TaskCreate, TaskListQuery, TaskUpdate
from task_manager.core.constants import RLS_CURRENT_USER_SETTING
from task_manager.domain.enums import TaskStatus
from task_manager.domain.exceptions import TaskNotFoundException
from task_manager.infrastructure.persistence.database import set_current_user
from task_manager.infrastructure.persistence.repositories import TaskRepository


@pytest.mark.requires_db
async def test_create_and_get(db_session) -> None:
    """Create a task then get it back with server-assigned fields."""
    await set_current_user(db_session, "it-user-1")
    repo = TaskRepository(db_session)
    created = await repo.create("it-user-1", TaskCreate(title="Write report"))
    assert created.id
    assert created.status == TaskStatus.PENDING
    assert created.created_at.tzinfo is not None

    found = await repo.get(created.id, "it-user-1")
    assert found == created


@pytest.mark.requires_db
async def test_update_bumps_updated_at(db_session) -> None:
    await set_current_user(db_session, "it-user-1")
    repo = TaskRepository(db_session)
    created = await repo.create("it-user-1", TaskCreate(title="t"))
    updated = await repo.update(
        created.id,
        "it-user-1",
        TaskUpdate(status=TaskStatus.DONE, fields_set=frozenset({"status"})),
    )
    assert updated.status == TaskStatus.DONE
    assert updated.title == "t"
    assert updated.updated_at > created.updated_at


@pytest.mark.requires_db
async def test_owner_filter_hides_other_owner(db_session) -> None:
    """The repository owner filter holds even for a role that bypasses RLS."""
    await set_current_user(db_session, "it-user-1")
    repo = TaskRepository(db_session)
    created = await repo.create("it-user-1", TaskCreate(title="private"))
    with pytest.raises(TaskNotFoundException):
        await repo.get(created.id, "it-user-2")
    assert await repo.list("it-user-2", TaskListQuery()) == []


@pytest.mark.requires_db
async def test_delete_twice(db_session) -> None:
    await set_current_user(db_session, "it-user-1")
    repo = TaskRepository(db_session)
    created = await repo.create("it-user-1", TaskCreate(title="t"))
    deleted = await repo.delete(created.id, "it-user-1")
    assert deleted.id == created.id
    with pytest.raises(TaskNotFoundException):
        await repo.delete(created.id, "it-user-1")


@pytest.mark.requires_db
async def test_set_current_user_is_visible_to_policy(db_session) -> None:
    await set_current_user(db_session, "it-user-1")
    value = await db_session.scalar(
        text("SELECT current_setting(:name, true)"), {"name": RLS_CURRENT_USER_SETTING}
    )
    assert value == "it-user-1"


@pytest.mark.requires_db
async def test_set_current_user_rejects_malformed_id(db_session) -> None:
    with pytest.raises(ValueError):
        await set_current_user(db_session, "x' OR '1'='1")


@pytest.mark.requires_db
async def test_rls_policy_hides_rows_from_other_identity(db_session) -> None:
    """Raw SQL without an owner filter still sees only the current identity's rows."""
    bypasses = await db_session.scalar(
        text("SELECT rolsuper OR rolbypassrls FROM pg_roles WHERE rolname = current_user")
    )
    if bypasses:
        pytest.skip("Connected role bypasses RLS; run with the application role")
    await set_current_user(db_session, "it-user-1")
    created = await TaskRepository(db_session).create("it-user-1", TaskCreate(title="rls"))

    await set_current_user(db_session, "it-user-2")
    count = await db_session.scalar(
        text("SELECT count(*) FROM task WHERE id = :id"), {"id": created.id}
    )
    assert count == 0
