"""Greedy list scheduler that advances a task DAG in discrete steps."""

import math
from dataclasses import dataclass, field, replace
from numbers import Real
from typing import Any, Dict, Iterable, List, Optional

from errors import InvalidStep
from readiness import ready_candidates, update_readiness
from run_statistics import Statistics, compute_statistics
from task_graph import SpecLike, TaskGraph
from task_types import Activity, TaskId, TaskNode, TaskStatus, Worker
from worker_pool import WorkerPool

# Fractional deltas accumulate rounding error in the clock
COMPLETION_TOLERANCE = 1e-9


@dataclass
class StepResult:
    """Transitions made by one step."""

    clock: float
    completed: List[TaskId] = field(default_factory=list)
    promoted: List[TaskId] = field(default_factory=list)
    started: List[TaskId] = field(default_factory=list)
    finished_on: Dict[TaskId, int] = field(default_factory=dict)

    def changed(self) -> bool:
        return bool(self.completed or self.promoted or self.started)


@dataclass
class Snapshot:
    """Copy of a run's state for display."""

    clock: float
    tasks: List[TaskNode]
    workers: List[Worker]
    timeline: Dict[int, List[Activity]]
    statistics: Statistics

    def to_dict(self) -> Dict[str, Any]:
        """Plain structure of built-in types, ready for json.dumps."""
        return {
            "clock": self.clock,
            "tasks": [
                {
                    "id": t.id,
                    "label": t.label,
                    "dependencies": sorted(t.dependencies, key=str),
                    "duration": t.duration,
                    "status": t.status.value,
                    "assigned_worker": t.assigned_worker,
                    "started_at": t.started_at,
                    "finished_at": t.finished_at,
                    "progress": t.progress,
                }
                for t in self.tasks
            ],
            "workers": [
                {
                    "id": w.id,
                    "current_task": w.current_task,
                    "tasks_executed": w.tasks_executed,
                }
                for w in self.workers
            ],
            "timeline": {
                wid: [
                    {
                        "task_id": a.task_id,
                        "label": a.label,
                        "start": a.start,
                        "end": a.end,
                    }
                    for a in activities
                ]
                for wid, activities in self.timeline.items()
            },
            "statistics": self.statistics.to_dict(),
        }


class SchedulerRun:
    """State of one scheduling session: graph, workers and simulated clock.

    Root tasks are dispatched as soon as the run is created, so the first
    call to `step` already advances them.
    """

    def __init__(self, specs: Iterable[SpecLike], num_workers: int):
        self.graph = TaskGraph(specs)
        self.pool = WorkerPool(num_workers)
        self.clock = 0.0
        self._dispatch()

    @property
    def num_workers(self) -> int:
        return len(self.pool)

    @property
    def workers(self) -> List[Worker]:
        return self.pool.workers

    def fresh(self) -> "SchedulerRun":
        """A new run over the same tasks and worker count."""
        return SchedulerRun(self.graph.specs, self.num_workers)

    def is_complete(self) -> bool:
        return all(t.status == TaskStatus.DONE for t in self.graph.all_tasks())

    def _check_delta(self, delta: float):
        if isinstance(delta, bool) or not isinstance(delta, Real):
            raise InvalidStep(delta, "time delta must be a number")
        if math.isnan(delta) or math.isinf(delta):
            raise InvalidStep(delta, "time delta must be finite")
        if delta < 0:
            raise InvalidStep(delta, "simulated time cannot run backwards")
        if delta == 0 and self.is_complete():
            raise InvalidStep(delta, "run is already complete")

    def step(self, delta: float) -> StepResult:
        """Advance the run by `delta` units of simulated time."""
        self._check_delta(delta)

        if self.is_complete():
            return StepResult(clock=self.clock)

        now = self.clock + delta
        result = StepResult(clock=now)

        for task in self.graph.all_tasks():
            if task.status != TaskStatus.RUNNING:
                continue

            elapsed = now - task.started_at
            task.progress = min(100.0, 100.0 * elapsed / task.duration)

            if elapsed >= task.duration * (1 - COMPLETION_TOLERANCE):
                task.status = TaskStatus.DONE
                task.progress = 100.0
                task.finished_at = now
                worker_id = task.assigned_worker
                task.assigned_worker = None
                self.pool.release(worker_id, now)
                result.finished_on[task.id] = worker_id
                result.completed.append(task.id)

        self.clock = now

        result.promoted = ready_candidates(self)
        update_readiness(self)

        result.started = self._dispatch()
        return result

    def _dispatch(self) -> List[TaskId]:
        """Give the first ready tasks to the lowest-numbered idle workers."""
        ready = [t for t in self.graph.all_tasks() if t.status == TaskStatus.READY]
        started = []

        for worker_id, task in zip(self.pool.idle_workers(), ready):
            self.pool.assign(worker_id, task, self.clock)
            started.append(task.id)

        return started

    def run_to_completion(self, delta: float, max_steps: Optional[int] = None) -> int:
        """Step with a fixed delta until every task is done; return the step count."""
        if delta == 0:
            raise InvalidStep(delta, "a zero delta never finishes a run")
        if self.num_workers == 0 and not self.is_complete():
            raise InvalidStep(delta, "a run without workers never finishes")

        steps = 0
        while not self.is_complete():
            if max_steps is not None and steps >= max_steps:
                raise InvalidStep(delta, f"run did not finish within {max_steps} steps")
            self.step(delta)
            steps += 1

        return steps

    def statistics(self) -> Statistics:
        return compute_statistics(self)

    def snapshot(self) -> Snapshot:
        return Snapshot(
            clock=self.clock,
            tasks=[replace(t) for t in self.graph.all_tasks()],
            workers=[
                replace(w, activities=[replace(a) for a in w.activities])
                for w in self.workers
            ],
            timeline={
                wid: [replace(a) for a in activities]
                for wid, activities in self.pool.timeline().items()
            },
            statistics=self.statistics(),
        )
