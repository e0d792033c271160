from __future__ import annotations

from typing import Dict, List

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .models import GanttInterval

COLORS = ["red", "green", "yellow", "blue", "magenta", "cyan"]


def _label(pid: int, width: int) -> str:
    return f"P{pid}"[:width].ljust(width)


def render_gantt(intervals: List[GanttInterval]) -> str:
    """
    Plain-text Gantt chart; idle gaps are drawn as dots.
    """
    if not intervals:
        return "(no execution)"

    line = "|"
    labels = " "
    time_marks = "0"
    last_time = 0

    for interval in intervals:
        idle_gap = interval.start_time - last_time
        if idle_gap > 0:
            line += "." * idle_gap
            labels += " " * idle_gap
            last_time = interval.start_time
            time_marks += f"{last_time:>3}"

        width = max(1, interval.duration)
        line += "=" * width
        labels += _label(interval.pid, width)
        last_time = interval.end_time
        time_marks += f"{last_time:>3}"

    line += "|"

    return "\n".join(
        [
            "Gantt Chart:",
            line,
            labels,
            time_marks,
        ]
    )


def build_rich_gantt(intervals: List[GanttInterval]) -> tuple[Panel, str]:
    """
    Build a Rich Panel containing a colored Gantt chart and a string with time marks.
    """
    if not intervals:
        return Panel("No execution", title="Gantt Chart"), ""

    pid_to_color: Dict[int, str] = {}

    def pid_color(pid: int) -> str:
        if pid not in pid_to_color:
            pid_to_color[pid] = COLORS[len(pid_to_color) % len(COLORS)]
        return pid_to_color[pid]

    timeline = Text()
    labels = Text()
    time_marks = "0"
    last_time = 0

    for interval in intervals:
        idle_gap = interval.start_time - last_time
        if idle_gap > 0:
            timeline.append(" " * idle_gap)
            labels.append(" " * idle_gap)
            last_time = interval.start_time
            time_marks += f"{last_time:>3}"

        width = max(1, interval.duration)
        timeline.append(" " * width, style=f"on {pid_color(interval.pid)}")
        labels.append(_label(interval.pid, width), style="bold")

        last_time = interval.end_time
        time_marks += f"{last_time:>3}"

    table = Table.grid(padding=(0, 0))
    table.add_row(timeline)
    table.add_row(labels)

    return Panel.fit(table, title="Gantt Chart"), time_marks
