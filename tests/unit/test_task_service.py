"""Unit tests for TaskService against the in-memory repository."""

from unittest.mock import AsyncMock

import pytest

from task_manager.application.results import ErrorKind, Failure, Success
from task_manager.application.services.authorization_service import (
    AccessDecision,
    TaskAccessGuard,
)
from task_manager.application.use_cases.tasks import TaskService
from task_manager.domain.enums import TaskStatus
from task_manager.domain.exceptions import (
    StorageFailureException,
    TaskConflictException,
)
from task_manager.domain.value_objects.identity import Identity
from tests.fakes import InMemoryTaskRepository


class _AllowAllGuard(TaskAccessGuard):
    """Guard that never denies; leaves only the storage-side owner scope."""

    def authorize(self, identity, action, owner_id=None) -> AccessDecision:
        return AccessDecision.allow()


@pytest.fixture
def service(task_repo: InMemoryTaskRepository) -> TaskService:
    return TaskService(task_repo)


async def _create(service: TaskService, identity: Identity, title: str = "Write report"):
    result = await service.create_task(identity, {"title": title})
    assert isinstance(result, Success)
    return result.value


class TestCreate:
    async def test_create_sets_owner_and_default_status(
        self, service: TaskService, u1: Identity
    ) -> None:
        result = await service.create_task(u1, {"title": "Write report"})
        assert isinstance(result, Success)
        task = result.value
        assert task.title == "Write report"
        assert task.status == TaskStatus.PENDING
        assert task.owner_id == u1.id
        assert task.id

    @pytest.mark.parametrize("title", ["", "   "])
    async def test_blank_title_never_reaches_repository(
        self, service: TaskService, task_repo: InMemoryTaskRepository, u1: Identity, title: str
    ) -> None:
        result = await service.create_task(u1, {"title": title})
        assert isinstance(result, Failure)
        assert result.kind == ErrorKind.VALIDATION_ERROR
        assert result.details["violations"][0]["field"] == "title"
        assert task_repo.calls == []
        assert task_repo.rows == {}

    async def test_client_supplied_owner_is_ignored(
        self, service: TaskService, u1: Identity
    ) -> None:
        result = await service.create_task(u1, {"title": "t", "owner_id": "user-2"})
        assert isinstance(result, Success)
        assert result.value.owner_id == u1.id

    async def test_round_trip(self, service: TaskService, u1: Identity) -> None:
        created = await service.create_task(
            u1, {"title": " Plan sprint ", "description": "Q3", "status": "in-progress"}
        )
        assert isinstance(created, Success)
        fetched = await service.get_task(u1, created.value.id)
        assert isinstance(fetched, Success)
        assert fetched.value == created.value
        assert fetched.value.title == "Plan sprint"
        assert fetched.value.description == "Q3"
        assert fetched.value.status == TaskStatus.IN_PROGRESS
        assert fetched.value.created_at == fetched.value.updated_at


class TestOwnership:
    async def test_write_report_scenario(
        self, service: TaskService, u1: Identity, u2: Identity
    ) -> None:
        task = await _create(service, u1)
        assert (task.title, task.status, task.owner_id) == ("Write report", TaskStatus.PENDING, u1.id)

        updated = await service.update_task(u1, task.id, {"status": "done"})
        assert isinstance(updated, Success)
        assert updated.value.status == TaskStatus.DONE
        assert updated.value.updated_at > task.created_at

        foreign = await service.get_task(u2, task.id)
        assert isinstance(foreign, Failure)
        assert foreign.kind == ErrorKind.NOT_FOUND

    async def test_foreign_update_and_delete_do_not_mutate(
        self, service: TaskService, task_repo: InMemoryTaskRepository, u1: Identity, u2: Identity
    ) -> None:
        task = await _create(service, u1)
        update = await service.update_task(u2, task.id, {"title": "hijacked"})
        delete = await service.delete_task(u2, task.id)
        assert isinstance(update, Failure) and update.kind == ErrorKind.NOT_FOUND
        assert isinstance(delete, Failure) and delete.kind == ErrorKind.NOT_FOUND
        assert task_repo.rows[task.id] == task

    async def test_foreign_task_answers_like_a_missing_one_at_either_layer(
        self, u1: Identity, u2: Identity
    ) -> None:
        """The repository scope and the guard give the same NOT_FOUND failure."""
        for repo in (
            InMemoryTaskRepository(enforce_owner_policy=True),
            InMemoryTaskRepository(enforce_owner_policy=False),
        ):
            service = TaskService(repo)
            task = await _create(service, u1)
            foreign = await service.get_task(u2, task.id)
            missing = await service.get_task(u2, "no-such-task")
            assert isinstance(foreign, Failure) and isinstance(missing, Failure)
            assert foreign.kind == missing.kind == ErrorKind.NOT_FOUND
            assert foreign.message == f"Task not found: {task.id}"
            assert foreign.details == {"resource_type": "task", "resource_id": task.id}

    async def test_storage_scope_blocks_when_guard_is_bypassed(
        self, task_repo: InMemoryTaskRepository, u1: Identity, u2: Identity
    ) -> None:
        service = TaskService(task_repo, _AllowAllGuard())
        task = await _create(service, u1)
        for result in (
            await service.get_task(u2, task.id),
            await service.update_task(u2, task.id, {"title": "hijacked"}),
            await service.delete_task(u2, task.id),
        ):
            assert isinstance(result, Failure)
            assert result.kind == ErrorKind.NOT_FOUND
        listed = await service.list_tasks(u2)
        assert isinstance(listed, Success) and listed.value == []
        assert task_repo.rows[task.id] == task

    async def test_guard_blocks_when_storage_scope_is_bypassed(
        self, u1: Identity, u2: Identity
    ) -> None:
        repo = InMemoryTaskRepository(enforce_owner_policy=False)
        service = TaskService(repo)
        task = await _create(service, u1)
        update = await service.update_task(u2, task.id, {"title": "hijacked"})
        delete = await service.delete_task(u2, task.id)
        assert isinstance(update, Failure) and update.kind == ErrorKind.NOT_FOUND
        assert isinstance(delete, Failure) and delete.kind == ErrorKind.NOT_FOUND
        assert "update" not in repo.calls
        assert "delete" not in repo.calls
        listed = await service.list_tasks(u2)
        assert isinstance(listed, Success) and listed.value == []


class TestList:
    async def test_lists_only_own_tasks_newest_first(
        self, service: TaskService, u1: Identity, u2: Identity
    ) -> None:
        first = await _create(service, u1, "first")
        for i in range(5):
            await _create(service, u2, f"other {i}")
        second = await _create(service, u1, "second")
        result = await service.list_tasks(u1)
        assert isinstance(result, Success)
        assert [t.id for t in result.value] == [second.id, first.id]

    async def test_status_filter_and_paging(self, service: TaskService, u1: Identity) -> None:
        a = await _create(service, u1, "a")
        b = await _create(service, u1, "b")
        await service.update_task(u1, a.id, {"status": "done"})
        done = await service.list_tasks(u1, {"status": "done"})
        assert isinstance(done, Success)
        assert [t.id for t in done.value] == [a.id]
        page = await service.list_tasks(u1, {"skip": 1, "limit": 1})
        assert isinstance(page, Success)
        assert [t.id for t in page.value] == [a.id]
        assert b.id not in [t.id for t in page.value]

    async def test_invalid_query_is_validation_error(
        self, service: TaskService, task_repo: InMemoryTaskRepository, u1: Identity
    ) -> None:
        result = await service.list_tasks(u1, {"limit": 1000})
        assert isinstance(result, Failure)
        assert result.kind == ErrorKind.VALIDATION_ERROR
        assert task_repo.calls == []


class TestUpdateAndDelete:
    async def test_blank_title_update_never_reaches_repository(
        self, service: TaskService, task_repo: InMemoryTaskRepository, u1: Identity
    ) -> None:
        task = await _create(service, u1)
        task_repo.calls.clear()
        result = await service.update_task(u1, task.id, {"title": " "})
        assert isinstance(result, Failure)
        assert result.kind == ErrorKind.VALIDATION_ERROR
        assert task_repo.calls == []

    async def test_partial_update_keeps_other_fields(
        self, service: TaskService, u1: Identity
    ) -> None:
        created = await service.create_task(u1, {"title": "t", "description": "keep me"})
        assert isinstance(created, Success)
        result = await service.update_task(u1, created.value.id, {"status": "in-progress"})
        assert isinstance(result, Success)
        assert result.value.description == "keep me"
        assert result.value.title == "t"
        assert result.value.status == TaskStatus.IN_PROGRESS

    async def test_status_may_move_backwards(self, service: TaskService, u1: Identity) -> None:
        task = await _create(service, u1)
        await service.update_task(u1, task.id, {"status": "done"})
        result = await service.update_task(u1, task.id, {"status": "pending"})
        assert isinstance(result, Success)
        assert result.value.status == TaskStatus.PENDING

    async def test_update_missing_task(self, service: TaskService, u1: Identity) -> None:
        result = await service.update_task(u1, "missing", {"title": "x"})
        assert isinstance(result, Failure)
        assert result.kind == ErrorKind.NOT_FOUND

    async def test_delete_twice(self, service: TaskService, u1: Identity) -> None:
        task = await _create(service, u1)
        first = await service.delete_task(u1, task.id)
        second = await service.delete_task(u1, task.id)
        assert isinstance(first, Success)
        assert first.value.id == task.id
        assert isinstance(second, Failure)
        assert second.kind == ErrorKind.NOT_FOUND
        gone = await service.get_task(u1, task.id)
        assert isinstance(gone, Failure) and gone.kind == ErrorKind.NOT_FOUND


class TestRepositoryErrors:
    async def test_conflict_maps_to_conflict(self, u1: Identity) -> None:
        repo = AsyncMock()
        repo.create.side_effect = TaskConflictException()
        result = await TaskService(repo).create_task(u1, {"title": "t"})
        assert isinstance(result, Failure)
        assert result.kind == ErrorKind.CONFLICT

    async def test_storage_failure_maps_without_backend_text(self, u1: Identity) -> None:
        repo = AsyncMock()
        repo.list.side_effect = StorageFailureException("list")
        result = await TaskService(repo).list_tasks(u1)
        assert isinstance(result, Failure)
        assert result.kind == ErrorKind.STORAGE_FAILURE
        assert result.details == {"operation": "list"}
