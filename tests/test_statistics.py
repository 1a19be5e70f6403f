"""Tests for statistics derived from a run."""

import pytest

from demo_graph import diamond, linear_chain
from run_statistics import compute_statistics
from scheduler import SchedulerRun


def test_initial_statistics():
    stats = compute_statistics(SchedulerRun(diamond(), num_workers=2))
    assert stats.total_tasks == 4
    assert stats.running_count == 1
    assert stats.ready_count == 0
    assert stats.pending_count == 3
    assert stats.completed_count == 0
    assert stats.elapsed_time == 0
    assert stats.worker_utilization == 50
    assert stats.mean_utilization == 0
    assert not stats.is_complete


def test_utilization_follows_running_tasks():
    run = SchedulerRun(diamond(), num_workers=2)
    run.step(100)
    assert run.statistics().worker_utilization == 100

    run.step(50)
    stats = run.statistics()
    assert stats.completed_count == 3
    assert stats.running_count == 1
    assert stats.worker_utilization == 50


def test_ready_tasks_are_counted_while_waiting_for_a_worker():
    run = SchedulerRun(diamond(), num_workers=1)
    run.step(100)
    stats = run.statistics()
    assert stats.running_count == 1
    assert stats.ready_count == 1
    assert stats.worker_utilization == 100


def test_mean_utilization_over_whole_run():
    run = SchedulerRun(diamond(), num_workers=2)
    run.run_to_completion(50)
    stats = run.statistics()

    assert stats.is_complete
    assert stats.elapsed_time == 200
    # D holds its worker until the step that sees it finish
    assert stats.busy_time == 100 + 50 + 50 + 50
    assert stats.mean_utilization == pytest.approx(62.5)


def test_single_worker_chain_is_fully_utilized():
    run = SchedulerRun(linear_chain(100), num_workers=1)
    run.run_to_completion(50)
    assert run.statistics().mean_utilization == pytest.approx(100)


def test_no_workers_means_no_utilization():
    stats = SchedulerRun(diamond(), num_workers=0).statistics()
    assert stats.total_workers == 0
    assert stats.worker_utilization == 0
    assert stats.ready_count == 1


def test_statistics_do_not_change_the_run():
    run = SchedulerRun(diamond(), num_workers=2)
    run.step(60)
    first = run.statistics()
    second = run.statistics()
    assert first == second
    assert run.clock == 60
    assert "1 running" in str(first)
