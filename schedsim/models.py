from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Iterable, List, Optional

from .errors import InvalidProcessError


@dataclass
class Process:
    pid: int
    arrival_time: int
    burst_time: int
    priority: int = 0
    remaining_time: Optional[int] = None
    completion_time: Optional[int] = None
    turnaround_time: Optional[int] = None
    waiting_time: Optional[int] = None

    def __post_init__(self) -> None:
        if self.remaining_time is None:
            self.remaining_time = self.burst_time

    @property
    def is_complete(self) -> bool:
        return self.completion_time is not None

    def fresh_copy(self) -> "Process":
        """
        Independent record carrying only the static inputs, ready to be simulated.
        """
        return Process(
            pid=self.pid,
            arrival_time=self.arrival_time,
            burst_time=self.burst_time,
            priority=self.priority,
        )

    def finished_at(self, completion_time: int) -> "Process":
        """
        Return a completed copy of this record; the receiver is left untouched.
        """
        turnaround_time = completion_time - self.arrival_time
        return replace(
            self,
            remaining_time=0,
            completion_time=completion_time,
            turnaround_time=turnaround_time,
            waiting_time=turnaround_time - self.burst_time,
        )


@dataclass
class GanttInterval:
    """
    One maximal contiguous span of CPU time given to a single process.
    """

    pid: int
    start_time: int
    duration: int

    @property
    def end_time(self) -> int:
        return self.start_time + self.duration


@dataclass
class SimulationResult:
    algorithm: str
    processes: List[Process] = field(default_factory=list)
    gantt_chart: List[GanttInterval] = field(default_factory=list)
    total_time: int = 0
    quantum: Optional[int] = None


@dataclass
class Metrics:
    avg_waiting_time: float
    avg_turnaround_time: float
    throughput: float
    cpu_busy_time: int = 0
    cpu_utilization: float = 0.0


def is_strict_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_processes(processes: Iterable[Process]) -> None:
    """
    Reject malformed input before any strategy runs.

    Raises InvalidProcessError naming the offending pid and field.
    """
    seen: set[int] = set()
    for p in processes:
        if not is_strict_int(p.pid) or p.pid < 1:
            raise InvalidProcessError(p.pid, "pid", "must be an integer >= 1")
        if p.pid in seen:
            raise InvalidProcessError(p.pid, "pid", "is not unique")
        seen.add(p.pid)

        if not is_strict_int(p.arrival_time) or p.arrival_time < 0:
            raise InvalidProcessError(p.pid, "arrival_time", "must be an integer >= 0")
        if not is_strict_int(p.burst_time) or p.burst_time < 1:
            raise InvalidProcessError(p.pid, "burst_time", "must be an integer >= 1")
        if not is_strict_int(p.priority):
            raise InvalidProcessError(p.pid, "priority", "must be an integer")
