"""Static dependency structure of the tasks in a scheduling run."""

import math
from collections import deque
from dataclasses import replace
from numbers import Real
from typing import Any, Dict, FrozenSet, Iterable, List, Mapping, Tuple, Union

from errors import InvalidGraph, TaskNotFound
from task_types import TaskId, TaskNode, TaskSpec, TaskStatus

SpecLike = Union[TaskSpec, Mapping[str, Any]]


def _dependency_tuple(task_id: TaskId, deps: Iterable[TaskId]) -> Tuple[TaskId, ...]:
    if isinstance(deps, str):
        raise InvalidGraph(
            f"task {task_id!r} lists dependencies as a string {deps!r}, not a collection"
        )
    return tuple(deps)


def to_spec(item: SpecLike) -> TaskSpec:
    """Accept either a TaskSpec or a plain record with the same fields.

    Dependencies are copied into a tuple so the spec can be read again when
    a run is rebuilt.
    """
    if isinstance(item, TaskSpec):
        return replace(
            item, dependencies=_dependency_tuple(item.id, item.dependencies)
        )

    if not isinstance(item, Mapping) or "id" not in item:
        raise InvalidGraph(f"cannot read task record {item!r}")
    if "duration" not in item:
        raise InvalidGraph(f"task {item['id']!r} has no duration")

    # The original demo graph spells dependencies as "deps"
    deps = item.get("dependencies", item.get("deps", ()))
    return TaskSpec(
        id=item["id"],
        label=item.get("label", str(item["id"])),
        dependencies=_dependency_tuple(item["id"], deps),
        duration=item["duration"],
    )


class TaskGraph:
    """Tasks and their dependency edges.

    The edges are fixed at construction. Only the per-task status fields
    change afterwards, and only the scheduler loop changes them.
    """

    def __init__(self, specs: Iterable[SpecLike]):
        self.specs: List[TaskSpec] = [to_spec(item) for item in specs]
        self.tasks: Dict[TaskId, TaskNode] = {}
        self.dependents: Dict[TaskId, List[TaskId]] = {}

        for spec in self.specs:
            if spec.id in self.tasks:
                raise InvalidGraph(f"duplicate task id {spec.id!r}")
            if (
                isinstance(spec.duration, bool)
                or not isinstance(spec.duration, Real)
                or not 0 < spec.duration < math.inf
            ):
                raise InvalidGraph(
                    f"task {spec.id!r} has unusable duration {spec.duration!r}"
                )
            self.tasks[spec.id] = TaskNode(
                id=spec.id,
                label=spec.label,
                dependencies=frozenset(spec.dependencies),
                duration=spec.duration,
            )
            self.dependents[spec.id] = []

        for task in self.tasks.values():
            for dep in task.dependencies:
                if dep not in self.tasks:
                    raise InvalidGraph(
                        f"task {task.id!r} depends on unknown task {dep!r}"
                    )
                self.dependents[dep].append(task.id)

        self.order: List[TaskId] = self._kahn()

        # Dependency-free tasks are ready from the start
        for task in self.tasks.values():
            if not task.dependencies:
                task.status = TaskStatus.READY

    def _kahn(self) -> List[TaskId]:
        """Topological order, ties broken by construction order."""
        remaining = {tid: len(task.dependencies) for tid, task in self.tasks.items()}
        queue = deque(tid for tid, count in remaining.items() if count == 0)
        order = []

        while queue:
            tid = queue.popleft()
            order.append(tid)
            for child in self.dependents[tid]:
                remaining[child] -= 1
                if remaining[child] == 0:
                    queue.append(child)

        if len(order) != len(self.tasks):
            stuck = [tid for tid, count in remaining.items() if count > 0]
            raise InvalidGraph(f"dependency cycle among {stuck!r}")

        return order

    def __len__(self) -> int:
        return len(self.tasks)

    def __contains__(self, task_id: TaskId) -> bool:
        return task_id in self.tasks

    def __getitem__(self, task_id: TaskId) -> TaskNode:
        try:
            return self.tasks[task_id]
        except KeyError:
            raise TaskNotFound(task_id) from None

    def dependencies_of(self, task_id: TaskId) -> FrozenSet[TaskId]:
        """Ids of the tasks that must be done before this one starts."""
        return self[task_id].dependencies

    def dependents_of(self, task_id: TaskId) -> List[TaskId]:
        """Ids of the tasks waiting on this one, in construction order."""
        if task_id not in self.tasks:
            raise TaskNotFound(task_id)
        return list(self.dependents[task_id])

    def all_tasks(self) -> List[TaskNode]:
        """Every task in construction order."""
        return list(self.tasks.values())

    def topological_order(self) -> List[TaskId]:
        return list(self.order)

    def total_work(self) -> float:
        return sum(task.duration for task in self.tasks.values())

    def critical_path_length(self) -> float:
        """Longest duration-weighted chain; no schedule can finish sooner."""
        finish: Dict[TaskId, float] = {}
        for tid in self.order:
            task = self.tasks[tid]
            start = max((finish[dep] for dep in task.dependencies), default=0.0)
            finish[tid] = start + task.duration
        return max(finish.values(), default=0.0)
