"""Tests for the tick-driven simulation process."""

import pytest
from asimpy import Environment, Process

from demo_graph import demo_graph, linear_chain
from driver import TickDriver, simulate
from scheduler import SchedulerRun


def test_simulate_runs_chain_to_completion():
    driver = simulate(linear_chain(100), num_workers=1, tick_interval=50, verbose=False)
    run = driver.scheduler_run

    assert run.is_complete()
    assert run.clock == 300
    assert driver.ticks == 6
    assert driver.finished_at == 300


def test_speed_scales_simulated_time_per_tick():
    driver = simulate(
        linear_chain(100), num_workers=1, tick_interval=25, speed=2, verbose=False
    )
    assert driver.scheduler_run.clock == 300
    assert driver.ticks == 6
    assert driver.finished_at == 150


@pytest.mark.parametrize("num_workers", [1, 2, 3, 4])
def test_demo_graph_finishes_for_any_worker_count(num_workers):
    driver = simulate(demo_graph(), num_workers=num_workers, verbose=False)
    stats = driver.scheduler_run.statistics()
    assert stats.is_complete
    assert stats.elapsed_time >= driver.scheduler_run.graph.critical_path_length()


def test_verbose_run_narrates_transitions(capsys):
    simulate(linear_chain(100), num_workers=1, tick_interval=50)
    out = capsys.readouterr().out

    assert "[0.0] Worker 0: Started A" in out
    assert "[100.0] Worker 0: Finished A" in out
    assert "[100.0] B is ready" in out
    assert "All 3 tasks done after 6 ticks" in out
    assert "=== Statistics ===" in out
    assert "Worker 0: executed=3 (A, B, C)" in out


def test_paused_driver_does_not_advance():
    env = Environment()
    run = SchedulerRun(linear_chain(100), num_workers=1)
    driver = TickDriver(env, run, tick_interval=50, verbose=False)
    driver.pause()

    env.run(until=500)

    assert run.clock == 0
    assert driver.ticks == 0
    assert not run.is_complete()


class Unpauser(Process):
    """Unpauses a driver after a delay."""

    def init(self, driver: TickDriver, delay: float):
        self.driver = driver
        self.delay = delay

    async def run(self):
        await self.timeout(self.delay)
        self.driver.unpause()


def test_unpaused_driver_finishes_the_run():
    env = Environment()
    run = SchedulerRun(linear_chain(100), num_workers=1)
    driver = TickDriver(env, run, tick_interval=50, verbose=False)
    driver.pause()
    Unpauser(env, driver, 175)

    env.run(until=1000)

    # Ticks at 50, 100 and 150 are skipped while paused
    assert run.is_complete()
    assert run.clock == 300
    assert driver.ticks == 6
    assert driver.finished_at == 450


def test_halted_driver_exits_immediately():
    env = Environment()
    run = SchedulerRun(linear_chain(100), num_workers=1)
    driver = TickDriver(env, run, tick_interval=50, verbose=False)
    driver.halt()

    env.run(until=500)

    assert run.clock == 0
    assert driver.finished_at is None


def test_reset_swaps_in_a_fresh_run():
    env = Environment()
    run = SchedulerRun(linear_chain(100), num_workers=1)
    run.step(150)
    driver = TickDriver(env, run, verbose=False)
    driver.pause()

    fresh = driver.reset()

    assert fresh is driver.scheduler_run
    assert fresh is not run
    assert fresh.clock == 0
    assert not driver.paused


@pytest.mark.parametrize("kwargs", [{"tick_interval": 0}, {"speed": -1}])
def test_driver_rejects_bad_settings(kwargs):
    run = SchedulerRun(linear_chain(), num_workers=1)
    with pytest.raises(ValueError):
        TickDriver(Environment(), run, verbose=False, **kwargs)
