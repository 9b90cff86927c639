"""Task API: thin routes delegating to TaskService.

Bodies are taken as raw JSON and handed to the service, which owns
validation. An OperationResult becomes either the task payload or the
structured error body with the status mapped from its kind.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, Query, Request
from fastapi.responses import JSONResponse

from task_manager.api.v1.dependencies import get_current_identity, get_task_service
from task_manager.application.results import Failure, OperationResult
from task_manager.application.use_cases.tasks import TaskService
from task_manager.core.exception_handlers import status_for
from task_manager.core.limiter import limit_writes
from task_manager.domain.value_objects.identity import Identity
from task_manager.schemas.task import TASK_ERROR_RESPONSES, TaskResponse

router = APIRouter(responses=TASK_ERROR_RESPONSES)


def _failure_response(failure: Failure) -> JSONResponse:
    return JSONResponse(
        status_code=status_for(failure.kind.value), content=failure.to_dict()
    )


def _task_or_error(result: OperationResult) -> TaskResponse | JSONResponse:
    if isinstance(result, Failure):
        return _failure_response(result)
    return TaskResponse.model_validate(result.value)


@router.get("", response_model=list[TaskResponse])
async def list_tasks(
    identity: Annotated[Identity, Depends(get_current_identity)],
    service: Annotated[TaskService, Depends(get_task_service)],
    status: str | None = Query(default=None, description="pending, in-progress or done"),
    skip: int = Query(default=0),
    limit: int | None = Query(default=None),
):
    """List the caller's tasks, newest first."""
    result = await service.list_tasks(
        identity, {"status": status, "skip": skip, "limit": limit}
    )
    if isinstance(result, Failure):
        return _failure_response(result)
    return [TaskResponse.model_validate(t) for t in result.value]


@router.post("", response_model=TaskResponse, status_code=201)
@limit_writes
async def create_task(
    request: Request,
    identity: Annotated[Identity, Depends(get_current_identity)],
    service: Annotated[TaskService, Depends(get_task_service)],
    payload: Annotated[Any, Body()] = None,
):
    """Create a task owned by the caller. Unknown fields are ignored."""
    result = await service.create_task(identity, payload)
    return _task_or_error(result)


@router.get("/{task_id}", response_model=TaskResponse)
async def get_task(
    task_id: str,
    identity: Annotated[Identity, Depends(get_current_identity)],
    service: Annotated[TaskService, Depends(get_task_service)],
):
    """Get one of the caller's tasks."""
    return _task_or_error(await service.get_task(identity, task_id))


@router.patch("/{task_id}", response_model=TaskResponse)
@limit_writes
async def update_task(
    request: Request,
    task_id: str,
    identity: Annotated[Identity, Depends(get_current_identity)],
    service: Annotated[TaskService, Depends(get_task_service)],
    payload: Annotated[Any, Body()] = None,
):
    """Partially update one of the caller's tasks (title, description, status)."""
    return _task_or_error(await service.update_task(identity, task_id, payload))


@router.delete("/{task_id}", response_model=TaskResponse)
@limit_writes
async def delete_task(
    request: Request,
    task_id: str,
    identity: Annotated[Identity, Depends(get_current_identity)],
    service: Annotated[TaskService, Depends(get_task_service)],
):
    """Delete one of the caller's tasks and return it. Repeating the call is 404."""
    return _task_or_error(await service.delete_task(identity, task_id))
