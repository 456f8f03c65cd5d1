"""
Per‑task time tracking.

Each task may have at most one running timer.  Stopping the timer
turns the session into a ``TimeLog`` entry and adds its duration to the
task's ``total_time``.  All durations are whole milliseconds.

Timer state is kept behind the ``TimerStateStore`` interface.  The
default ``InMemoryTimerStateStore`` lives in process memory, so all
timer state is lost when the process restarts; tasks then start again
from an empty state.  A persistent implementation can be installed
with :func:`set_timer_state_store` without touching callers.

Every read‑check‑write sequence runs while holding the store's lock for
that task, so two concurrent ``start_timer`` calls for the same task
cannot both succeed.  The critical sections contain no ``await``; the
locks are plain ``threading`` locks and are safe for coroutines and
worker threads alike.
"""

from __future__ import annotations

import itertools
import logging
import threading
import weakref
from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone
from typing import ContextManager, Dict, List, Optional

from business_dashboard_api.app.core.errors import NoActiveTimerError, TimerAlreadyRunningError
from business_dashboard_api.app.schemas.time_tracking import ActiveTimer, TimeLog, TimerState


logger = logging.getLogger(__name__)


class TimerStateStore(ABC):
    """Keyed storage for ``TimerState`` values.

    ``get`` and ``put`` exchange copies; callers hold ``lock(task_id)``
    around a read‑modify‑write.
    """

    @abstractmethod
    def get(self, task_id: int) -> Optional[TimerState]:
        ...

    @abstractmethod
    def put(self, task_id: int, state: TimerState) -> None:
        ...

    @abstractmethod
    def delete(self, task_id: int) -> None:
        ...

    @abstractmethod
    def lock(self, task_id: int) -> ContextManager:
        """Return the lock serialising updates for ``task_id``."""

    @abstractmethod
    def new_log_id(self) -> int:
        """Return an identifier not used by any earlier time log."""


class InMemoryTimerStateStore(TimerStateStore):
    """Process‑local timer state with one lock per task id."""

    def __init__(self) -> None:
        self._states: Dict[int, TimerState] = {}
        self._locks: weakref.WeakValueDictionary[int, threading.Lock] = weakref.WeakValueDictionary()
        self._guard = threading.Lock()
        self._log_ids = itertools.count(1)

    def get(self, task_id: int) -> Optional[TimerState]:
        state = self._states.get(task_id)
        return state.model_copy(deep=True) if state is not None else None

    def put(self, task_id: int, state: TimerState) -> None:
        self._states[task_id] = state.model_copy(deep=True)

    def delete(self, task_id: int) -> None:
        self._states.pop(task_id, None)

    def lock(self, task_id: int) -> threading.Lock:
        # An entry lives only while some caller holds or waits on the
        # lock, so ids that are never used again leave nothing behind.
        with self._guard:
            lock = self._locks.get(task_id)
            if lock is None:
                lock = threading.Lock()
                self._locks[task_id] = lock
            return lock

    def new_log_id(self) -> int:
        with self._guard:
            return next(self._log_ids)


_store: Optional[TimerStateStore] = None
_store_lock = threading.Lock()


def get_timer_state_store() -> TimerStateStore:
    global _store
    with _store_lock:
        if _store is None:
            _store = InMemoryTimerStateStore()
        return _store


def set_timer_state_store(store: Optional[TimerStateStore]) -> None:
    """Install ``store``; ``None`` resets to a fresh in‑memory store on next use."""
    global _store
    with _store_lock:
        _store = store


def _utc(moment: Optional[datetime]) -> datetime:
    if moment is None:
        return datetime.now(timezone.utc)
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


def _milliseconds(delta: timedelta) -> int:
    return delta // timedelta(milliseconds=1)


class TimeTrackingService:
    """Start, stop and inspect task timers."""

    @classmethod
    async def start_timer(cls, task_id: int, now: Optional[datetime] = None) -> ActiveTimer:
        """Start the timer of a task.

        The task's state is created on first use.  Raises
        ``TimerAlreadyRunningError`` if a timer is already running; the
        running timer is left untouched.  Returns a copy of the new
        active timer.
        """
        store = get_timer_state_store()
        started_at = _utc(now)
        with store.lock(task_id):
            state = store.get(task_id) or TimerState()
            if state.active_timer is not None:
                raise TimerAlreadyRunningError(task_id)
            state.active_timer = ActiveTimer(task_id=task_id, start_time=started_at)
            store.put(task_id, state)
        logger.info("Started timer for task %s at %s", task_id, started_at.isoformat())
        return state.active_timer.model_copy()

    @classmethod
    async def stop_timer(cls, task_id: int, now: Optional[datetime] = None) -> TimeLog:
        """Stop the running timer of a task and record the session.

        Raises ``NoActiveTimerError`` if no timer is running; state is
        left unchanged.  A session whose end lies before its start (a
        clock step backwards) is recorded with a duration of 0.
        Returns a copy of the new log entry.
        """
        store = get_timer_state_store()
        ended_at = _utc(now)
        with store.lock(task_id):
            state = store.get(task_id)
            if state is None or state.active_timer is None:
                raise NoActiveTimerError(task_id)
            started_at = state.active_timer.start_time
            duration = _milliseconds(ended_at - started_at)
            if duration < 0:
                logger.warning(
                    "Timer for task %s stopped %d ms before it started; recording 0",
                    task_id,
                    -duration,
                )
                duration = 0
            entry = TimeLog(
                id=store.new_log_id(),
                start_time=started_at,
                end_time=ended_at,
                duration=duration,
                date=started_at.astimezone(timezone.utc).date().isoformat(),
            )
            state.time_logs.append(entry)
            state.total_time += duration
            state.active_timer = None
            store.put(task_id, state)
        logger.info("Stopped timer for task %s after %d ms", task_id, duration)
        return entry.model_copy()

    @classmethod
    async def get_time_logs(cls, task_id: int) -> List[TimeLog]:
        """Return the completed sessions of a task, oldest first."""
        state = get_timer_state_store().get(task_id)
        return list(state.time_logs) if state is not None else []

    @classmethod
    async def get_timer_state(cls, task_id: int) -> TimerState:
        """Return a snapshot of a task's timer state.

        Tasks that never had a timer get the empty default state; it is
        not stored.
        """
        return get_timer_state_store().get(task_id) or TimerState()

    @classmethod
    async def delete_timer_state(cls, task_id: int) -> None:
        store = get_timer_state_store()
        with store.lock(task_id):
            store.delete(task_id)
        logger.debug("Removed timer state for task %s", task_id)
