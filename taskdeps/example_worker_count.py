"""Experiment with different worker counts on the same graph."""

from demo_graph import demo_graph
from driver import simulate
from task_graph import TaskGraph


def run_worker_count_experiment():
    """Compare makespan and utilization as workers are added."""
    graph = TaskGraph(demo_graph())
    total_work = graph.total_work()
    critical_path = graph.critical_path_length()

    print(f"Total work: {total_work:.0f}")
    print(f"Critical path: {critical_path:.0f}")

    for num_workers in [1, 2, 3, 4]:
        driver = simulate(demo_graph(), num_workers=num_workers, verbose=False)
        stats = driver.scheduler_run.statistics()

        speedup = total_work / stats.elapsed_time
        print(
            f"\nWorkers: {num_workers}\n"
            f"  Makespan: {stats.elapsed_time:.0f}\n"
            f"  Speedup: {speedup:.2f}x\n"
            f"  Mean utilization: {stats.mean_utilization:.1f}%"
        )


if __name__ == "__main__":
    run_worker_count_experiment()
