from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional

from .algorithms import ALGORITHMS, run_algorithm
from .config import DEFAULT_ALGORITHMS, DEFAULT_QUANTUM
from .errors import UnknownAlgorithmError
from .models import Metrics, Process, SimulationResult


def compute_metrics(result: SimulationResult) -> Metrics:
    """
    Compute averages, throughput and CPU utilization for a finished run.

    Throughput and utilization are 0.0 when nothing ran (total_time == 0).
    """
    processes = result.processes
    if not processes:
        return Metrics(avg_waiting_time=0.0, avg_turnaround_time=0.0, throughput=0.0)

    n = len(processes)
    total_time = result.total_time
    cpu_busy_time = sum(interval.duration for interval in result.gantt_chart)

    return Metrics(
        avg_waiting_time=sum(p.waiting_time for p in processes) / n,
        avg_turnaround_time=sum(p.turnaround_time for p in processes) / n,
        throughput=n / total_time if total_time > 0 else 0.0,
        cpu_busy_time=cpu_busy_time,
        cpu_utilization=cpu_busy_time / total_time if total_time > 0 else 0.0,
    )


@dataclass
class ComparisonRow:
    algorithm: str
    result: SimulationResult
    metrics: Metrics


def compare_algorithms(
    processes: Iterable[Process],
    algorithms: Optional[List[str]] = None,
    quantum: int = DEFAULT_QUANTUM,
) -> List[ComparisonRow]:
    """
    Run several algorithms on the same workload and summarize each run.

    Every algorithm gets its own copy of the input; unknown names are
    rejected before anything runs.
    """
    processes = list(processes)
    names = list(algorithms) if algorithms is not None else list(DEFAULT_ALGORITHMS)
    for name in names:
        if name.lower() not in ALGORITHMS:
            raise UnknownAlgorithmError(name)

    rows: List[ComparisonRow] = []
    for name in names:
        result = run_algorithm(name, [p.fresh_copy() for p in processes], quantum=quantum)
        rows.append(ComparisonRow(algorithm=result.algorithm, result=result, metrics=compute_metrics(result)))
    return rows
