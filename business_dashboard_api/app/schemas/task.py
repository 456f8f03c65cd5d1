"""
Pydantic models for task data.

A task read from the store is returned together with a snapshot of its
timer state (see ``schemas.time_tracking``).  The timer state lives in
this process only and is not written back to the store.
"""

from datetime import date
from typing import Optional

from pydantic import BaseModel, Field

from .time_tracking import TimerState


class TaskCreate(BaseModel):
    """Schema for creating a task."""

    title: str = Field(..., examples=["Draft homepage copy"])
    priority: str = Field("medium", examples=["high"])
    status: str = Field("todo", examples=["todo"])
    due_date: Optional[date] = Field(None, examples=["2025-04-15"])
    project_id: Optional[int] = Field(None, examples=[1])


class TaskUpdate(BaseModel):
    """Schema for updating a task.  Unset fields are left unchanged."""

    title: str | None = None
    priority: str | None = None
    status: str | None = None
    due_date: date | None = None
    project_id: int | None = None


class TaskStatusUpdate(BaseModel):
    status: str = Field(..., examples=["in-progress"])


class TaskRead(BaseModel):
    """Schema for reading a task, including its time tracking state."""

    id: int
    title: Optional[str] = None
    priority: Optional[str] = None
    status: Optional[str] = None
    due_date: Optional[str] = None
    project_id: Optional[int] = None
    time_tracking: TimerState = Field(default_factory=TimerState)

    model_config = {
        "from_attributes": True,
    }
