"""
Business logic for tasks.

Tasks are stored in the ``task`` table and reference their project
through the ``project_id`` lookup field.  Every task returned by this
service carries a snapshot of its timer state from
``TimeTrackingService``; the ``time_tracking`` column of the store is
read but superseded by that snapshot.

Deleting a task also removes its timer state, once the store has
confirmed the deletion.
"""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from business_dashboard_api.app.core.record_store import ASC, OrderBy
from business_dashboard_api.app.schemas.task import TaskCreate, TaskRead, TaskUpdate
from business_dashboard_api.app.schemas.time_tracking import ActiveTimer, TimeLog
from business_dashboard_api.app.services.record_service import RecordService
from business_dashboard_api.app.services.time_tracking_service import TimeTrackingService


logger = logging.getLogger(__name__)


class TaskService(RecordService):
    """Accessor for task records and their timers."""

    table = "task"
    entity = "task"
    fields = ("title", "priority", "status", "due_date", "time_tracking", "project_id")
    order_by = (OrderBy("due_date", ASC),)
    field_map = {
        "title": "title",
        "priority": "priority",
        "status": "status",
        "due_date": "due_date",
        "project_id": "project_id",
    }
    lookup_fields = ("project_id",)
    read_model = TaskRead

    @classmethod
    async def _with_timer_state(cls, record: Dict[str, Any]) -> TaskRead:
        task_id = record["Id"]
        return TaskRead(
            id=task_id,
            time_tracking=await TimeTrackingService.get_timer_state(task_id),
            **cls.from_store(record),
        )

    # ------------------------------------------------------------------
    # Records
    # ------------------------------------------------------------------
    @classmethod
    async def get_all_tasks(cls) -> List[TaskRead]:
        """Return all tasks ordered by due date, with their timer state."""
        return [await cls._with_timer_state(record) for record in await cls._fetch_all()]

    @classmethod
    async def get_task_by_id(cls, task_id: int) -> TaskRead:
        return await cls._with_timer_state(await cls._fetch_one(task_id))

    @classmethod
    async def create_task(cls, data: TaskCreate) -> TaskRead:
        """Create a task.  Priority defaults to ``medium``, status to ``todo``."""
        values = data.model_dump(exclude_none=True)
        values["priority"] = data.priority or "medium"
        values["status"] = data.status or "todo"
        return await cls._with_timer_state(await cls._create(values))

    @classmethod
    async def update_task(cls, task_id: int, updates: TaskUpdate) -> TaskRead:
        record = await cls._update(task_id, updates.model_dump(exclude_none=True))
        return await cls._with_timer_state(record)

    @classmethod
    async def update_task_status(cls, task_id: int, status: str) -> TaskRead:
        return await cls.update_task(task_id, TaskUpdate(status=status))

    @classmethod
    async def delete_task(cls, task_id: int) -> None:
        await cls._delete(task_id)
        await TimeTrackingService.delete_timer_state(task_id)
        logger.info("Deleted task %s", task_id)

    # ------------------------------------------------------------------
    # Timers
    # ------------------------------------------------------------------
    @classmethod
    async def start_task_timer(cls, task_id: int, now: Optional[datetime] = None) -> ActiveTimer:
        return await TimeTrackingService.start_timer(task_id, now=now)

    @classmethod
    async def stop_task_timer(cls, task_id: int, now: Optional[datetime] = None) -> TimeLog:
        return await TimeTrackingService.stop_timer(task_id, now=now)

    @classmethod
    async def get_task_time_logs(cls, task_id: int) -> List[TimeLog]:
        return await TimeTrackingService.get_time_logs(task_id)
