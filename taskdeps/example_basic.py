"""Basic dependency-aware scheduling simulation."""

from demo_graph import demo_graph
from driver import simulate


def run_basic_simulation():
    """Run the data-pipeline graph on three workers."""
    simulate(demo_graph(), num_workers=3)


if __name__ == "__main__":
    run_basic_simulation()
