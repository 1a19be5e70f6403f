"""The data-pipeline graph used by the task-dependency demo."""

from typing import List

from task_types import TaskSpec


def demo_graph() -> List[TaskSpec]:
    """Six tasks: A feeds B and C, which feed D and E, which join in F.

    Durations are in milliseconds of simulated time.
    """
    return [
        TaskSpec("A", "Load Data", (), 1200),
        TaskSpec("B", "Preprocess", ("A",), 1000),
        TaskSpec("C", "Filter Data", ("A",), 800),
        TaskSpec("D", "Transform", ("B",), 900),
        TaskSpec("E", "Validate", ("C",), 700),
        TaskSpec("F", "Combine Results", ("D", "E"), 1100),
    ]


def linear_chain(duration: float = 100) -> List[TaskSpec]:
    """A -> B -> C with equal durations."""
    return [
        TaskSpec("A", "First", (), duration),
        TaskSpec("B", "Second", ("A",), duration),
        TaskSpec("C", "Third", ("B",), duration),
    ]


def diamond() -> List[TaskSpec]:
    """A fans out to B and C, which join in D."""
    return [
        TaskSpec("A", "Split", (), 100),
        TaskSpec("B", "Left", ("A",), 50),
        TaskSpec("C", "Right", ("A",), 50),
        TaskSpec("D", "Join", ("B", "C"), 10),
    ]
