from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from typing import Callable, Deque, Dict, Iterable, List, MutableSequence, Optional, Tuple

from .errors import InvalidQuantumError, UnknownAlgorithmError
from .models import Process, SimulationResult, is_strict_int, validate_processes
from .timeline import TimelineBuilder

logger = logging.getLogger(__name__)


def _intake(processes: Iterable[Process]) -> Tuple[List[Process], Dict[int, int]]:
    """
    Validate the input and return fresh working copies in arrival order,
    together with each pid's position in the caller's list (final tie-break).
    """
    originals = list(processes)
    validate_processes(originals)

    order = {p.pid: idx for idx, p in enumerate(originals)}
    intake = sorted(
        (p.fresh_copy() for p in originals),
        key=lambda p: (p.arrival_time, order[p.pid]),
    )
    return intake, order


def _admit(pending: Deque[Process], ready: MutableSequence[Process], time: int) -> None:
    while pending and pending[0].arrival_time <= time:
        ready.append(pending.popleft())


def _idle_until(pending: Deque[Process], time: int, algorithm: str) -> int:
    next_arrival = pending[0].arrival_time
    logger.debug("%s: CPU idle from t=%d to t=%d", algorithm, time, next_arrival)
    return next_arrival


def _result(
    algorithm: str,
    intake: List[Process],
    finished: Dict[int, Process],
    timeline: TimelineBuilder,
    total_time: int,
    quantum: Optional[int] = None,
) -> SimulationResult:
    # Every admitted process must come back completed.
    missing = [p.pid for p in intake if p.pid not in finished]
    if missing:
        raise RuntimeError(f"{algorithm}: processes never completed: {missing}")

    return SimulationResult(
        algorithm=algorithm,
        processes=[finished[p.pid] for p in intake],
        gantt_chart=timeline.intervals,
        total_time=total_time,
        quantum=quantum,
    )


def fcfs(processes: Iterable[Process]) -> SimulationResult:
    """
    First-Come First-Served (non-preemptive).

    Processes run to completion in arrival order; ties keep input order.
    """
    intake, _ = _intake(processes)

    time = 0
    timeline = TimelineBuilder()
    finished: Dict[int, Process] = {}

    for p in intake:
        if time < p.arrival_time:
            logger.debug("FCFS: CPU idle from t=%d to t=%d", time, p.arrival_time)
            time = p.arrival_time

        timeline.append(p.pid, time, p.burst_time)
        time += p.burst_time
        finished[p.pid] = p.finished_at(time)

    return _result("FCFS", intake, finished, timeline, time)


def sjf(processes: Iterable[Process]) -> SimulationResult:
    """
    Shortest Job First (non-preemptive).

    At each decision point, among processes that have arrived and not yet
    run, choose the smallest burst time (tie-breaker: earlier arrival, then
    input order).
    """
    intake, order = _intake(processes)
    pending: Deque[Process] = deque(intake)
    ready: List[Process] = []

    time = 0
    timeline = TimelineBuilder()
    finished: Dict[int, Process] = {}

    while pending or ready:
        _admit(pending, ready, time)

        if not ready:
            time = _idle_until(pending, time, "SJF")
            continue

        p = min(ready, key=lambda x: (x.burst_time, x.arrival_time, order[x.pid]))
        ready.remove(p)

        timeline.append(p.pid, time, p.burst_time)
        time += p.burst_time
        finished[p.pid] = p.finished_at(time)

    return _result("SJF", intake, finished, timeline, time)


def _run_selective(
    algorithm: str,
    processes: Iterable[Process],
    metric: Callable[[Process], int],
    preemptive: bool,
) -> SimulationResult:
    """
    Shared loop for SRTF and both Priority variants.

    The process with the smallest ``metric`` wins. When ``preemptive`` is set,
    a waiting process strictly better than the running one takes the CPU and
    the running one goes back to the ready queue; on a tie the running
    process keeps it.

    Time jumps straight to the next event (an arrival or the running
    process finishing) instead of stepping one unit at a time. Nothing can
    change the choice between those events, and the timeline coalesces
    adjacent slices, so the chart is the same as with unit steps.
    """
    intake, order = _intake(processes)
    pending: Deque[Process] = deque(intake)
    ready: List[Process] = []
    current: Optional[Process] = None

    def rank(p: Process) -> Tuple[int, int, int]:
        return (metric(p), p.arrival_time, order[p.pid])

    time = 0
    timeline = TimelineBuilder()
    finished: Dict[int, Process] = {}

    while pending or ready or current is not None:
        _admit(pending, ready, time)

        if ready:
            best = min(ready, key=rank)
            if current is None:
                ready.remove(best)
                current = best
            elif preemptive and metric(best) < metric(current):
                logger.debug("%s: t=%d P%d preempted by P%d", algorithm, time, current.pid, best.pid)
                ready.remove(best)
                ready.append(current)
                current = best

        if current is None:
            time = _idle_until(pending, time, algorithm)
            continue

        run_time = current.remaining_time
        if pending:
            run_time = min(run_time, pending[0].arrival_time - time)

        timeline.append(current.pid, time, run_time)
        current.remaining_time -= run_time
        time += run_time

        if current.remaining_time == 0:
            logger.debug("%s: t=%d P%d completed", algorithm, time, current.pid)
            finished[current.pid] = current.finished_at(time)
            current = None

    return _result(algorithm, intake, finished, timeline, time)


def srtf(processes: Iterable[Process]) -> SimulationResult:
    """
    Shortest Remaining Time First (preemptive SJF).
    """
    return _run_selective("SRTF", processes, lambda p: p.remaining_time, preemptive=True)


def priority(processes: Iterable[Process], preemptive: bool = False) -> SimulationResult:
    """
    Priority scheduling. Lower numeric priority value means higher priority.

    Non-preemptive by default: a started process runs to completion. With
    ``preemptive`` a newly ready process with a strictly lower value takes
    the CPU.
    """
    name = "Priority (preemptive)" if preemptive else "Priority"
    return _run_selective(name, processes, lambda p: p.priority, preemptive=preemptive)


def priority_preemptive(processes: Iterable[Process]) -> SimulationResult:
    return priority(processes, preemptive=True)


def round_robin(processes: Iterable[Process], quantum: Optional[int]) -> SimulationResult:
    """
    Round Robin scheduling with a fixed time quantum.

    Processes that arrive while a slice runs join the queue before the
    process that was just preempted.
    """
    if not is_strict_int(quantum) or quantum < 1:
        raise InvalidQuantumError(quantum)

    intake, _ = _intake(processes)
    pending: Deque[Process] = deque(intake)
    ready: Deque[Process] = deque()

    time = 0
    timeline = TimelineBuilder()
    finished: Dict[int, Process] = {}

    while pending or ready:
        _admit(pending, ready, time)

        if not ready:
            time = _idle_until(pending, time, "Round Robin")
            continue

        p = ready.popleft()
        run_time = min(quantum, p.remaining_time)

        timeline.append(p.pid, time, run_time)
        p.remaining_time -= run_time
        time += run_time

        _admit(pending, ready, time)

        if p.remaining_time > 0:
            ready.append(p)
        else:
            logger.debug("Round Robin: t=%d P%d completed", time, p.pid)
            finished[p.pid] = p.finished_at(time)

    return _result("Round Robin", intake, finished, timeline, time, quantum=quantum)


@dataclass(frozen=True)
class Algorithm:
    name: str
    func: Callable[..., SimulationResult]
    uses_quantum: bool = False


ALGORITHMS: Dict[str, Algorithm] = {
    "fcfs": Algorithm("FCFS", fcfs),
    "sjf": Algorithm("SJF", sjf),
    "srtf": Algorithm("SRTF", srtf),
    "rr": Algorithm("Round Robin", round_robin, uses_quantum=True),
    "priority": Algorithm("Priority", priority),
    "priority_preemptive": Algorithm("Priority (preemptive)", priority_preemptive),
}


def run_algorithm(name: str, processes: Iterable[Process], quantum: Optional[int] = None) -> SimulationResult:
    """
    Dispatch to the requested algorithm. Quantum is only passed to
    algorithms that use one (Round Robin) and ignored otherwise.
    """
    key = name.lower()
    if key not in ALGORITHMS:
        raise UnknownAlgorithmError(name)

    algorithm = ALGORITHMS[key]
    if algorithm.uses_quantum:
        return algorithm.func(processes, quantum)
    return algorithm.func(processes)
