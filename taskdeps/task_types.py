"""Data types for the dependency-aware task scheduler."""

from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Hashable, Iterable, Optional

TaskId = Hashable


class TaskStatus(Enum):
    """Status of a task. Tasks only ever move forward through these states."""

    PENDING = "pending"
    READY = "ready"
    RUNNING = "running"
    DONE = "done"


@dataclass(frozen=True)
class TaskSpec:
    """Static description of a task as supplied when a graph is built."""

    id: TaskId
    label: str
    dependencies: Iterable[TaskId] = ()
    duration: float = 1.0

    def __str__(self):
        return f"TaskSpec({self.id})"


@dataclass
class TaskNode:
    """A task inside a scheduling run."""

    id: TaskId
    label: str
    dependencies: FrozenSet[TaskId]
    duration: float
    status: TaskStatus = TaskStatus.PENDING
    assigned_worker: Optional[int] = None
    started_at: Optional[float] = None
    finished_at: Optional[float] = None
    progress: float = 0.0

    def __str__(self):
        return f"Task({self.id}, {self.status.value}, {self.progress:.0f}%)"


@dataclass
class Activity:
    """One span of a worker's timeline: the task it ran and when."""

    task_id: TaskId
    label: str
    start: float
    end: Optional[float] = None

    def span(self, now: float) -> float:
        """Length of the span, counting an open span up to `now`."""
        end = self.end if self.end is not None else now
        return end - self.start


@dataclass
class Worker:
    """An execution slot that runs at most one task at a time."""

    id: int
    current_task: Optional[TaskId] = None
    tasks_executed: int = 0
    activities: list = field(default_factory=list)

    def is_idle(self) -> bool:
        return self.current_task is None

    def __str__(self):
        task = self.current_task if self.current_task is not None else "idle"
        return f"Worker({self.id}, {task})"
