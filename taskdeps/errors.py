"""Errors raised by the scheduler core."""

from typing import Hashable, Optional


class SchedulerError(Exception):
    """Base class for scheduler errors."""

    def __init__(self, message: Optional[str] = None):
        self._message = message

        args = (message,) if message else ()
        super().__init__(*args)

    @property
    def message(self) -> Optional[str]:
        return self._message


class InvalidGraph(SchedulerError):
    """Raised when a task graph cannot be scheduled."""

    def __init__(self, reason: str):
        super().__init__(f"Invalid task graph: {reason}.")
        self._reason = reason

    @property
    def reason(self) -> str:
        return self._reason


class InvalidStep(SchedulerError):
    """Raised when a step is requested with an unusable time delta."""

    def __init__(self, delta: float, reason: str):
        super().__init__(f"Invalid step of {delta}: {reason}.")
        self._delta = delta
        self._reason = reason

    @property
    def delta(self) -> float:
        return self._delta

    @property
    def reason(self) -> str:
        return self._reason


class AssignmentError(SchedulerError):
    """Raised when a worker/task assignment breaks the pool's contract."""

    def __init__(self, worker_id: int, task_id: Optional[Hashable], reason: str):
        super().__init__(f"Cannot assign {task_id} to worker {worker_id}: {reason}.")
        self._worker_id = worker_id
        self._task_id = task_id

    @property
    def worker_id(self) -> int:
        return self._worker_id

    @property
    def task_id(self) -> Optional[Hashable]:
        return self._task_id


class TaskNotFound(SchedulerError, KeyError):
    """Raised when a task id is not part of the graph."""

    def __init__(self, task_id: Hashable):
        super().__init__(f"Task not found: {task_id}.")
        self._task_id = task_id

    @property
    def task_id(self) -> Hashable:
        return self._task_id

    def __str__(self):
        return self.message or ""
