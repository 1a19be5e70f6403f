"""Tests for promotion of pending tasks."""

from demo_graph import demo_graph
from readiness import ready_candidates, update_readiness
from scheduler import SchedulerRun
from task_types import TaskStatus


def _idle_run():
    # No workers, so nothing is dispatched and statuses can be set by hand
    return SchedulerRun(demo_graph(), num_workers=0)


def test_nothing_promoted_while_root_unfinished():
    run = _idle_run()
    assert ready_candidates(run) == []
    update_readiness(run)
    assert run.graph["B"].status == TaskStatus.PENDING


def test_finishing_root_promotes_its_dependents_in_order():
    run = _idle_run()
    run.graph["A"].status = TaskStatus.DONE

    assert ready_candidates(run) == ["B", "C"]
    update_readiness(run)

    assert run.graph["B"].status == TaskStatus.READY
    assert run.graph["C"].status == TaskStatus.READY
    assert run.graph["D"].status == TaskStatus.PENDING


def test_join_waits_for_every_dependency():
    run = _idle_run()
    for tid in "ABCD":
        run.graph[tid].status = TaskStatus.DONE
    update_readiness(run)
    assert run.graph["F"].status == TaskStatus.PENDING

    run.graph["E"].status = TaskStatus.DONE
    update_readiness(run)
    assert run.graph["F"].status == TaskStatus.READY


def test_update_is_idempotent_and_leaves_later_states_alone():
    run = _idle_run()
    run.graph["A"].status = TaskStatus.DONE
    run.graph["B"].status = TaskStatus.RUNNING

    update_readiness(run)
    update_readiness(run)

    assert run.graph["B"].status == TaskStatus.RUNNING
    assert run.graph["C"].status == TaskStatus.READY
    assert ready_candidates(run) == []
