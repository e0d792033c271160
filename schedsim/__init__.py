"""
CPU scheduling simulator.

Deterministic simulations of FCFS, SJF, SRTF, Round Robin and Priority
scheduling, reporting per-process timings and a Gantt timeline.
"""

from .algorithms import ALGORITHMS, run_algorithm
from .metrics import compare_algorithms, compute_metrics
from .models import GanttInterval, Metrics, Process, SimulationResult

__all__ = [
    "ALGORITHMS",
    "GanttInterval",
    "Metrics",
    "Process",
    "SimulationResult",
    "compare_algorithms",
    "compute_metrics",
    "run_algorithm",
]
