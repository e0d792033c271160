from __future__ import annotations

from typing import List

from .models import GanttInterval


class TimelineBuilder:
    """
    Accumulates CPU allocation intervals for a Gantt chart.

    Consecutive slices of the same process that touch are merged, so the
    chart only shows real context switches no matter how finely the caller
    steps through time. Idle time is never recorded.
    """

    def __init__(self) -> None:
        self._intervals: List[GanttInterval] = []

    def append(self, pid: int, start_time: int, duration: int) -> None:
        if duration <= 0:
            return

        if self._intervals:
            last = self._intervals[-1]
            if start_time < last.end_time:
                raise ValueError(
                    f"Interval for {pid} at t={start_time} overlaps {last.pid} ending at t={last.end_time}"
                )
            if last.pid == pid and last.end_time == start_time:
                last.duration += duration
                return

        self._intervals.append(GanttInterval(pid=pid, start_time=start_time, duration=duration))

    @property
    def intervals(self) -> List[GanttInterval]:
        return [GanttInterval(i.pid, i.start_time, i.duration) for i in self._intervals]

    @property
    def end_time(self) -> int:
        return self._intervals[-1].end_time if self._intervals else 0

    def __len__(self) -> int:
        return len(self._intervals)
