"""Bounded pool of workers that run one task each."""

from typing import Dict, List, Optional

from errors import AssignmentError
from task_types import Activity, TaskId, TaskNode, TaskStatus, Worker


class WorkerPool:
    """Tracks which worker, if any, is running which task."""

    def __init__(self, num_workers: int):
        if isinstance(num_workers, bool) or not isinstance(num_workers, int):
            raise ValueError(f"worker count must be an integer, not {num_workers!r}")
        if num_workers < 0:
            raise ValueError(f"worker count must not be negative, not {num_workers}")

        self.num_workers = num_workers
        self.workers: List[Worker] = [Worker(i) for i in range(num_workers)]

    def __len__(self) -> int:
        return self.num_workers

    def _worker(self, worker_id: int) -> Worker:
        if not 0 <= worker_id < self.num_workers:
            raise AssignmentError(worker_id, None, "no such worker")
        return self.workers[worker_id]

    def idle_workers(self) -> List[int]:
        """Ids of idle workers in id order."""
        return [w.id for w in self.workers if w.is_idle()]

    def busy_workers(self) -> List[int]:
        return [w.id for w in self.workers if not w.is_idle()]

    def holder_of(self, task_id: TaskId) -> Optional[int]:
        """Id of the worker running a task, or None."""
        for worker in self.workers:
            if worker.current_task == task_id:
                return worker.id
        return None

    def assign(self, worker_id: int, task: TaskNode, now: float):
        """Start a ready task on an idle worker."""
        worker = self._worker(worker_id)

        if not worker.is_idle():
            raise AssignmentError(
                worker_id, task.id, f"worker is busy with {worker.current_task!r}"
            )
        if task.status != TaskStatus.READY:
            raise AssignmentError(
                worker_id, task.id, f"task is {task.status.value}, not ready"
            )

        worker.current_task = task.id
        worker.tasks_executed += 1
        worker.activities.append(Activity(task.id, task.label, start=now))

        task.status = TaskStatus.RUNNING
        task.assigned_worker = worker_id
        task.started_at = now
        task.progress = 0.0

    def release(self, worker_id: int, now: float) -> TaskId:
        """Free a worker whose task has finished and return that task's id."""
        worker = self._worker(worker_id)

        if worker.is_idle():
            raise AssignmentError(worker_id, None, "worker is already idle")

        task_id = worker.current_task
        worker.current_task = None
        worker.activities[-1].end = now
        return task_id

    def timeline(self) -> Dict[int, List[Activity]]:
        """Per-worker history of the spans each worker spent on a task."""
        return {w.id: list(w.activities) for w in self.workers}

    def busy_time(self, now: float) -> float:
        """Total time all workers have spent running tasks up to `now`."""
        return sum(a.span(now) for w in self.workers for a in w.activities)
