#!/usr/bin/env python3
"""
Reactive Lens Performance Benchmarks

This script measures how the store scales along the axes that matter to an
interactive application and prints the results with rich formatting.

Usage:
    python scripts/benchmark.py            # Run all benchmarks
    python scripts/benchmark.py --config   # Show current benchmark configuration
    python scripts/benchmark.py --quiet    # Only show the final table

Configuration:
    Adjust the constants at the top of the file to change benchmark parameters.
"""

import argparse
import sys
import time
from typing import Any, Callable, Dict

# Add the project root to the Python path
sys.path.insert(0, ".")

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from reactive_lens import Store, history, lenses

# Configuration constants - adjust these to change benchmark behavior
TIME_LIMIT_SECONDS = 1.0  # Maximum time allowed per operation
STARTING_N = 10  # Starting workload size
SCALE_FACTOR = 1.5  # How much to multiply N by each iteration
MAX_N = 2_000_000  # Stop scaling here even if still under the time limit
MAX_ZOOM_DEPTH = 500  # Cap for the deep zoom workload, whose lens calls nest one frame per level


def _nested_state(depth: int) -> Any:
    state: Any = 0
    for _ in range(depth):
        state = {"child": state, "sibling": 1}
    return state


class StoreBenchmark:
    """Rich-formatted display for store benchmarking."""

    def __init__(self, quiet: bool = False):
        self.console = Console()
        self.quiet = quiet
        self.results: Dict[str, Dict[str, Any]] = {}

    def run_benchmarks(self):
        """Run all benchmarks and display results."""
        start_time = time.time()
        self._display_header()

        self._run("writes", "Root Writes", self._root_writes)
        self._run("fanout", "Listener Fan-out", self._listener_fanout)
        self._run("zoom", "Deep Zoom Write", self._deep_zoom, max_n=MAX_ZOOM_DEPTH)
        self._run("batch", "Batched Writes", self._batched_writes)
        self._run("history", "History Checkpoints", self._history_checkpoints)

        self._display_final_results(start_time)

    # ------------------------------------------------------------------
    # Workloads: each takes n and returns the number of operations done
    # ------------------------------------------------------------------

    def _root_writes(self, n: int) -> int:
        store = Store.init(0)
        store.on(lambda _v: None)
        for i in range(n):
            store.set(i)
        return n

    def _listener_fanout(self, n: int) -> int:
        store = Store.init(0)
        for _ in range(n):
            store.on(lambda _v: None)
        store.set(1)
        return n

    def _deep_zoom(self, n: int) -> int:
        store = Store.init(_nested_state(n))
        leaf = store.zoom(lenses.seq(lenses.identity(), *[lenses.at("child")] * n))
        leaf.set(1)
        assert leaf.get() == 1
        return n

    def _batched_writes(self, n: int) -> int:
        store = Store.init({"count": 0})
        count = store.at("count")
        calls = []
        store.on(calls.append)

        def body():
            for _ in range(n):
                count.modify(lambda c: c + 1)

        store.transaction(body)
        assert len(calls) == 1
        return n

    def _history_checkpoints(self, n: int) -> int:
        store = Store.init(history.init(0))
        for i in range(n):
            store.modify(history.advance_to(i))
        for _ in range(n):
            store.modify(history.undo)
        return 2 * n

    # ------------------------------------------------------------------
    # Harness
    # ------------------------------------------------------------------

    def _run(
        self, key: str, name: str, operation: Callable[[int], int], max_n: int = MAX_N
    ):
        if not self.quiet:
            self.console.print(f"[yellow]Running {name} benchmark...[/yellow]")
        result = self._run_adaptive_benchmark(operation, max_n)
        self.results[key] = dict(result, name=name)
        if not self.quiet:
            self.console.print(
                f"[green]✓[/green] {name}: {result['operations_per_second']:,.0f} ops/sec "
                f"({result['max_n']:,} items)"
            )

    def _run_adaptive_benchmark(
        self, operation: Callable[[int], int], max_n: int = MAX_N
    ) -> Dict[str, Any]:
        """Scale the workload until it takes TIME_LIMIT_SECONDS or reaches `max_n`."""
        n = STARTING_N
        while True:
            start_time = time.perf_counter()
            ops_performed = operation(n)
            operation_time = max(time.perf_counter() - start_time, 1e-9)

            result = {
                "max_n": n,
                "operation_time": operation_time,
                "operations_per_second": ops_performed / operation_time,
            }
            if operation_time >= TIME_LIMIT_SECONDS or n >= max_n:
                return result
            n = min(int(n * SCALE_FACTOR) + 1, max_n)

    def _display_header(self):
        header = Panel(
            Align.center("Reactive Lens Performance Benchmark Suite"),
            title="Reactive Lens Benchmarks",
            border_style="blue",
        )
        self.console.print(header)
        self.console.print()

    def _display_final_results(self, start_time: float):
        elapsed = time.time() - start_time

        table = Table(title="Final Benchmark Results")
        table.add_column("Benchmark", style="cyan", no_wrap=True)
        table.add_column("Max Workload", style="magenta", justify="right")
        table.add_column("Performance", style="green", justify="right")
        table.add_column("Latency", style="yellow", justify="right")

        for result in self.results.values():
            latency_us = result["operation_time"] / max(result["max_n"], 1) * 1e6
            table.add_row(
                result["name"],
                f"{result['max_n']:,}",
                f"{result['operations_per_second'] / 1000:.1f}K ops/sec",
                f"{latency_us:.2f}μs",
            )

        self.console.print()
        self.console.print(table)
        self.console.print()
        self.console.print(f"[dim]Benchmark completed in {elapsed:.2f} seconds[/dim]")


def print_config():
    """Print the current benchmark configuration."""
    print("Reactive Lens Benchmark Configuration:")
    print(f"  TIME_LIMIT_SECONDS: {TIME_LIMIT_SECONDS}")
    print(f"  STARTING_N: {STARTING_N}")
    print(f"  SCALE_FACTOR: {SCALE_FACTOR}")
    print(f"  MAX_N: {MAX_N}")
    print(f"  MAX_ZOOM_DEPTH: {MAX_ZOOM_DEPTH}")


def main():
    """Main entry point for the benchmark script."""
    parser = argparse.ArgumentParser(description="Reactive Lens Performance Benchmarks")
    parser.add_argument(
        "--config", action="store_true", help="Show current benchmark configuration"
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output, show only final results",
    )

    args = parser.parse_args()

    if args.config:
        print_config()
        return

    if not args.quiet:
        print_config()
        print()

    StoreBenchmark(quiet=args.quiet).run_benchmarks()


if __name__ == "__main__":
    main()
