"""
Pydantic models for per‑task time tracking.

Durations and ``total_time`` are whole milliseconds.  ``TimeLog.date``
is the UTC calendar date (``YYYY-MM-DD``) on which the session started.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class ActiveTimer(BaseModel):
    """The in‑progress session of a task."""

    task_id: int
    start_time: datetime


class TimeLog(BaseModel):
    """A completed logging session."""

    id: int
    start_time: datetime
    end_time: datetime
    duration: int = Field(..., ge=0)
    date: str


class TimerState(BaseModel):
    """Accumulated tracked time, the running session if any and past sessions."""

    total_time: int = 0
    active_timer: Optional[ActiveTimer] = None
    time_logs: List[TimeLog] = Field(default_factory=list)
