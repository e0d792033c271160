from __future__ import annotations

import os

DEFAULT_QUANTUM = 2

DEFAULT_ALGORITHMS = ["fcfs", "sjf", "srtf", "rr", "priority", "priority_preemptive"]

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def default_log_level() -> str:
    """
    Log level used when --log-level is not given (SCHEDSIM_LOG_LEVEL, else WARNING).
    """
    level = os.environ.get("SCHEDSIM_LOG_LEVEL", "WARNING").upper()
    return level if level in LOG_LEVELS else "WARNING"
