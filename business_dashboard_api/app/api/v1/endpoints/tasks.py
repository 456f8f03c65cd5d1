"""
Task endpoints for API v1.

Besides CRUD over the ``task`` table, these routes drive the per‑task
timers.  Starting a timer that is already running, or stopping one
that is not, answers ``409 Conflict``.
"""

from typing import List

from fastapi import APIRouter, status

from business_dashboard_api.app.schemas.task import TaskCreate, TaskRead, TaskStatusUpdate, TaskUpdate
from business_dashboard_api.app.schemas.time_tracking import ActiveTimer, TimeLog
from business_dashboard_api.app.services.task_service import TaskService


router = APIRouter()


@router.get("/", response_model=List[TaskRead])
async def list_tasks() -> List[TaskRead]:
    """List all tasks ordered by due date, each with its time tracking state."""
    return await TaskService.get_all_tasks()


@router.get("/{task_id}", response_model=TaskRead)
async def get_task(task_id: int) -> TaskRead:
    return await TaskService.get_task_by_id(task_id)


@router.post("/", response_model=TaskRead, status_code=status.HTTP_201_CREATED)
async def create_task(task: TaskCreate) -> TaskRead:
    return await TaskService.create_task(task)


@router.put("/{task_id}", response_model=TaskRead)
async def update_task(task_id: int, updates: TaskUpdate) -> TaskRead:
    return await TaskService.update_task(task_id, updates)


@router.patch("/{task_id}/status", response_model=TaskRead)
async def update_task_status(task_id: int, body: TaskStatusUpdate) -> TaskRead:
    return await TaskService.update_task_status(task_id, body.status)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_task(task_id: int) -> None:
    """Delete a task together with its time tracking state."""
    await TaskService.delete_task(task_id)


@router.post("/{task_id}/timer/start", response_model=ActiveTimer)
async def start_timer(task_id: int) -> ActiveTimer:
    return await TaskService.start_task_timer(task_id)


@router.post("/{task_id}/timer/stop", response_model=TimeLog)
async def stop_timer(task_id: int) -> TimeLog:
    """Stop the running timer and return the recorded session."""
    return await TaskService.stop_task_timer(task_id)


@router.get("/{task_id}/time-logs", response_model=List[TimeLog])
async def get_time_logs(task_id: int) -> List[TimeLog]:
    return await TaskService.get_task_time_logs(task_id)
