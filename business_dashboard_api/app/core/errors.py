"""
Exception types shared by the services and the API layer.

Remote store failures, timer rule violations and input validation
failures are kept in separate hierarchies so that callers can tell
them apart.  The API maps each family to its own HTTP status code in
``app.main``.
"""


class RecordStoreError(Exception):
    """The record store reported a failure or could not be reached."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class PartialWriteError(RecordStoreError):
    """One or more records in a write batch were rejected.

    ``message`` is taken from the first failing record.
    """

    def __init__(self, message: str, failed_results: list | None = None) -> None:
        super().__init__(message)
        self.failed_results = failed_results or []


class RecordNotFoundError(RecordStoreError, LookupError):
    """A lookup by identifier returned no record."""


class RecordValidationError(ValueError):
    """Input rejected before any call to the record store was made."""


class TimerStateError(Exception):
    """Base class for violations of the per‑task timer rules."""

    def __init__(self, task_id: int, message: str) -> None:
        super().__init__(message)
        self.task_id = task_id
        self.message = message


class TimerAlreadyRunningError(TimerStateError):
    def __init__(self, task_id: int) -> None:
        super().__init__(task_id, "Timer already running for this task")


class NoActiveTimerError(TimerStateError):
    def __init__(self, task_id: int) -> None:
        super().__init__(task_id, "No active timer for this task")
