"""Simulation process that drives a scheduling run on a fixed tick."""

from typing import Iterable, Optional

from asimpy import Environment, Process

from scheduler import SchedulerRun, StepResult
from task_graph import SpecLike

DEFAULT_TICK_INTERVAL = 100
DEFAULT_SPEED = 1.0
DEFAULT_WORKERS = 3


class TickDriver(Process):
    """Calls `step` once per tick; the only writer of its run.

    Each tick of `tick_interval` environment time advances the run by
    `tick_interval * speed` units of simulated task time.
    """

    def init(
        self,
        scheduler_run: SchedulerRun,
        tick_interval: float = DEFAULT_TICK_INTERVAL,
        speed: float = DEFAULT_SPEED,
        verbose: bool = True,
    ):
        if tick_interval <= 0:
            raise ValueError(f"tick interval must be positive, not {tick_interval}")
        if speed <= 0:
            raise ValueError(f"speed must be positive, not {speed}")

        self.scheduler_run = scheduler_run
        self.tick_interval = tick_interval
        self.speed = speed
        self.verbose = verbose
        self.paused = False
        self.stopped = False
        self.ticks = 0
        self.finished_at: Optional[float] = None

    def pause(self):
        self.paused = True

    def unpause(self):
        self.paused = False

    def halt(self):
        self.stopped = True

    def reset(self) -> SchedulerRun:
        """Start over with the same tasks and worker count."""
        self.scheduler_run = self.scheduler_run.fresh()
        self.ticks = 0
        self.finished_at = None
        self.paused = False
        return self.scheduler_run

    async def run(self):
        """Main loop: wait a tick, then advance the run."""
        if self.verbose:
            for task in self.scheduler_run.graph.all_tasks():
                if task.assigned_worker is not None:
                    self._report_start(task.id)

        while not self.stopped and not self.scheduler_run.is_complete():
            await self.timeout(self.tick_interval)

            if self.paused:
                continue

            result = self.scheduler_run.step(self.tick_interval * self.speed)
            self.ticks += 1

            if self.verbose:
                self._report(result)

        if self.scheduler_run.is_complete():
            self.finished_at = self.now
            if self.verbose:
                print(
                    f"[{self.now:.1f}] All {len(self.scheduler_run.graph)} tasks done "
                    f"after {self.ticks} ticks"
                )

    def _report(self, result: StepResult):
        graph = self.scheduler_run.graph

        for task_id in result.completed:
            task = graph[task_id]
            print(
                f"[{self.now:.1f}] Worker {result.finished_on[task_id]}: "
                f"Finished {task_id} ({task.label})"
            )

        for task_id in result.promoted:
            print(f"[{self.now:.1f}] {task_id} is ready")

        for task_id in result.started:
            self._report_start(task_id)

    def _report_start(self, task_id):
        task = self.scheduler_run.graph[task_id]
        print(
            f"[{self.now:.1f}] Worker {task.assigned_worker}: "
            f"Started {task_id} ({task.label}, {task.duration})"
        )


def print_statistics(scheduler_run: SchedulerRun):
    """Print the final statistics block for a run."""
    stats = scheduler_run.statistics()

    print("\n=== Statistics ===")
    print(f"Tasks completed: {stats.completed_count}/{stats.total_tasks}")
    print(f"Elapsed time: {stats.elapsed_time:.1f}")
    print(f"Mean utilization: {stats.mean_utilization:.1f}%")

    for worker in scheduler_run.workers:
        ran = ", ".join(str(a.task_id) for a in worker.activities) or "-"
        print(f"Worker {worker.id}: executed={worker.tasks_executed} ({ran})")


def simulate(
    specs: Iterable[SpecLike],
    num_workers: int = DEFAULT_WORKERS,
    tick_interval: float = DEFAULT_TICK_INTERVAL,
    speed: float = DEFAULT_SPEED,
    verbose: bool = True,
) -> TickDriver:
    """Run a task graph to completion in a fresh environment."""
    env = Environment()
    scheduler_run = SchedulerRun(specs, num_workers)
    driver = TickDriver(
        env, scheduler_run, tick_interval=tick_interval, speed=speed, verbose=verbose
    )

    # Enough ticks for the whole graph run serially, plus rounding slack
    graph = scheduler_run.graph
    horizon = graph.total_work() / speed + tick_interval * (len(graph) + 2)
    env.run(until=horizon)

    if verbose:
        print_statistics(driver.scheduler_run)

    return driver
