"""Read-only statistics derived from a scheduling run."""

from dataclasses import asdict, dataclass
from typing import TYPE_CHECKING, Any, Dict

from task_types import TaskStatus

if TYPE_CHECKING:
    from scheduler import SchedulerRun


@dataclass(frozen=True)
class Statistics:
    """Counts and utilization of a run at one instant."""

    total_tasks: int
    completed_count: int
    running_count: int
    ready_count: int
    pending_count: int
    total_workers: int
    elapsed_time: float
    worker_utilization: float
    busy_time: float
    mean_utilization: float

    @property
    def is_complete(self) -> bool:
        return self.completed_count == self.total_tasks

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["is_complete"] = self.is_complete
        return data

    def __str__(self):
        return (
            f"Stats({self.completed_count}/{self.total_tasks} done, "
            f"{self.running_count} running, {self.ready_count} ready, "
            f"t={self.elapsed_time:.1f}, util={self.worker_utilization:.1f}%)"
        )


def compute_statistics(run: "SchedulerRun") -> Statistics:
    """Derive statistics without changing the run."""
    counts = {status: 0 for status in TaskStatus}
    for task in run.graph.all_tasks():
        counts[task.status] += 1

    total_workers = len(run.pool)
    running = counts[TaskStatus.RUNNING]
    utilization = running / total_workers * 100 if total_workers else 0.0

    busy = run.pool.busy_time(run.clock)
    capacity = total_workers * run.clock
    mean = busy / capacity * 100 if capacity else 0.0

    return Statistics(
        total_tasks=len(run.graph),
        completed_count=counts[TaskStatus.DONE],
        running_count=running,
        ready_count=counts[TaskStatus.READY],
        pending_count=counts[TaskStatus.PENDING],
        total_workers=total_workers,
        elapsed_time=run.clock,
        worker_utilization=utilization,
        busy_time=busy,
        mean_utilization=mean,
    )
