"""Promotion of pending tasks whose dependencies have all finished."""

from typing import TYPE_CHECKING, List

from task_types import TaskId, TaskStatus

if TYPE_CHECKING:
    from scheduler import SchedulerRun


def ready_candidates(run: "SchedulerRun") -> List[TaskId]:
    """Ids of pending tasks that could be promoted right now."""
    graph = run.graph
    return [
        task.id
        for task in graph.all_tasks()
        if task.status == TaskStatus.PENDING
        and all(graph[dep].status == TaskStatus.DONE for dep in task.dependencies)
    ]


def update_readiness(run: "SchedulerRun") -> None:
    """Move every pending task with all dependencies done to READY.

    Tasks that are already past PENDING are never touched, so calling this
    repeatedly has no further effect.
    """
    for task_id in ready_candidates(run):
        run.graph[task_id].status = TaskStatus.READY
