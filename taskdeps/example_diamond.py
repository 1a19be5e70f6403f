"""Diamond-shaped graph with enough and too few workers."""

from demo_graph import diamond
from driver import simulate


def run_diamond_simulation():
    """Show B and C running side by side, then one after the other."""
    for num_workers in [2, 1]:
        print(f"\n{'=' * 60}")
        print(f"Diamond with {num_workers} worker(s)")
        print("=" * 60)

        driver = simulate(diamond(), num_workers=num_workers, tick_interval=10)

        join = driver.scheduler_run.graph["D"]
        print(f"D started at {join.started_at:.1f}")


if __name__ == "__main__":
    run_diamond_simulation()
