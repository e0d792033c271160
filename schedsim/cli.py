from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .algorithms import ALGORITHMS, run_algorithm
from .config import DEFAULT_ALGORITHMS, DEFAULT_QUANTUM, LOG_LEVELS, default_log_level
from .gantt import build_rich_gantt
from .metrics import compare_algorithms, compute_metrics
from .models import Process, SimulationResult
from .workload_io import generate_workload, load_workload, save_workload

logger = logging.getLogger(__name__)


def _add_workload_arguments(parser: argparse.ArgumentParser) -> None:
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "--workload",
        "-w",
        help="Path to JSON or CSV workload file.",
    )
    source.add_argument(
        "--random",
        type=int,
        metavar="N",
        help="Simulate N randomly generated processes instead of a file (0 picks 3-7).",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for --random, for reproducible workloads.",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="schedsim",
        description="CPU scheduling simulator (FCFS, SJF, SRTF, RR, Priority, Priority preemptive).",
    )
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        default=default_log_level(),
        help="Logging verbosity (default: WARNING, or SCHEDSIM_LOG_LEVEL).",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Run a scheduling algorithm on a workload.")
    run_parser.add_argument(
        "--algorithm",
        "-a",
        required=True,
        help=f"Algorithm to use ({', '.join(ALGORITHMS)}).",
    )
    _add_workload_arguments(run_parser)
    run_parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=None,
        help="Time quantum for round-robin (ignored by the other algorithms).",
    )

    compare_parser = subparsers.add_parser(
        "compare",
        help="Run multiple algorithms on the same workload and compare average metrics.",
    )
    _add_workload_arguments(compare_parser)
    compare_parser.add_argument(
        "--algorithms",
        "-a",
        nargs="+",
        default=list(DEFAULT_ALGORITHMS),
        help=f"Algorithms to compare (default: {' '.join(DEFAULT_ALGORITHMS)}).",
    )
    compare_parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=DEFAULT_QUANTUM,
        help=f"Time quantum used for RR when included (default: {DEFAULT_QUANTUM}).",
    )

    generate_parser = subparsers.add_parser("generate", help="Write a random workload file.")
    generate_parser.add_argument(
        "count",
        type=int,
        nargs="?",
        default=None,
        help="Number of processes (default: random 3-7).",
    )
    generate_parser.add_argument("--seed", type=int, default=None, help="Random seed.")
    generate_parser.add_argument(
        "--output",
        "-o",
        required=True,
        help="Destination .json or .csv file.",
    )

    return parser


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _workload_from_args(args: argparse.Namespace) -> List[Process]:
    if args.workload is not None:
        return load_workload(Path(args.workload))

    count = args.random or None
    processes = generate_workload(count, seed=args.seed)
    logger.info("Generated %d random processes (seed=%s)", len(processes), args.seed)
    return processes


def _print_result(result: SimulationResult, console: Console) -> None:
    console.print(f"[bold]Algorithm:[/bold] {result.algorithm}")
    if result.quantum is not None:
        console.print(f"[bold]Quantum:[/bold] {result.quantum}")

    console.print()

    panel, time_marks = build_rich_gantt(result.gantt_chart)
    console.print(panel)
    if time_marks:
        console.print(time_marks)

    console.print()

    show_priority = result.algorithm.startswith("Priority")
    headers = ["PID", "Arrive", "Burst"]
    if show_priority:
        headers.append("Priority")
    headers += ["Complete", "Turnaround", "Wait"]

    proc_table = Table(title="Per-process metrics", box=box.SIMPLE_HEAVY)
    for h in headers:
        justify = "center" if h in {"PID", "Priority"} else "right"
        proc_table.add_column(h, justify=justify)

    for p in result.processes:
        row = [f"P{p.pid}", str(p.arrival_time), str(p.burst_time)]
        if show_priority:
            row.append(str(p.priority))
        row += [str(p.completion_time), str(p.turnaround_time), str(p.waiting_time)]
        proc_table.add_row(*row)

    console.print(proc_table)
    console.print()

    metrics = compute_metrics(result)
    sys_table = Table(title="Summary", box=box.SIMPLE_HEAVY)
    sys_table.add_column("Metric")
    sys_table.add_column("Value", justify="right")

    sys_table.add_row("Avg waiting", f"{metrics.avg_waiting_time:.2f}")
    sys_table.add_row("Avg turnaround", f"{metrics.avg_turnaround_time:.2f}")
    sys_table.add_row("Throughput (proc/time)", f"{metrics.throughput:.4f}")
    sys_table.add_row("CPU utilization", f"{metrics.cpu_utilization*100:.1f}%")
    sys_table.add_row("Total time", str(result.total_time))

    console.print(sys_table)


def _print_comparison(processes: List[Process], algorithms: List[str], quantum: int, console: Console) -> None:
    summary_table = Table(title="Algorithm comparison", box=box.SIMPLE_HEAVY)
    summary_table.add_column("Algorithm")
    summary_table.add_column("Quantum", justify="right")
    summary_table.add_column("Avg waiting", justify="right")
    summary_table.add_column("Avg turnaround", justify="right")
    summary_table.add_column("Throughput", justify="right")

    for row in compare_algorithms(processes, algorithms, quantum=quantum):
        summary_table.add_row(
            row.algorithm,
            "" if row.result.quantum is None else str(row.result.quantum),
            f"{row.metrics.avg_waiting_time:.2f}",
            f"{row.metrics.avg_turnaround_time:.2f}",
            f"{row.metrics.throughput:.4f}",
        )

    console.print(summary_table)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.log_level)

    console = Console()

    try:
        if args.command == "run":
            processes = _workload_from_args(args)
            result = run_algorithm(args.algorithm, processes, quantum=args.quantum)
            _print_result(result, console)
            return 0

        if args.command == "compare":
            processes = _workload_from_args(args)
            _print_comparison(processes, args.algorithms, args.quantum, console)
            return 0

        if args.command == "generate":
            processes = generate_workload(args.count, seed=args.seed)
            path = save_workload(processes, args.output)
            console.print(f"Wrote {len(processes)} processes to [green]{path}[/green]")
            return 0
    except (ValueError, OSError) as exc:
        console.print(f"Error: {exc}", style="red", markup=False)
        return 2

    parser.error(f"Unknown command: {args.command}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
