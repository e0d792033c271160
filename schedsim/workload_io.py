from __future__ import annotations

import csv
import json
import random
from pathlib import Path
from typing import Any, Iterable, List, Mapping, Optional

from .errors import InvalidProcessError
from .models import Process, validate_processes

FIELDS = ["pid", "arrival_time", "burst_time", "priority"]

# Accept the camelCase keys used by browser front-ends as well.
_ALIASES = {
    "arrival_time": "arrivalTime",
    "burst_time": "burstTime",
}


def load_workload(path: str | Path) -> List[Process]:
    """
    Load a workload from a JSON or CSV file into a list of Process objects.
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix == ".json":
        processes = _load_json(path)
    elif suffix == ".csv":
        processes = _load_csv(path)
    else:
        raise ValueError(f"Unsupported workload format: {suffix} (use .json or .csv)")

    validate_processes(processes)
    return processes


def _load_json(path: Path) -> List[Process]:
    with path.open("r", encoding="utf-8") as f:
        raw = json.load(f)

    if not isinstance(raw, list):
        raise ValueError("JSON workload must be a list of process objects")

    return [_process_from_mapping(entry) for entry in raw]


def _load_csv(path: Path) -> List[Process]:
    processes: List[Process] = []
    with path.open("r", encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        for row in reader:
            processes.append(_process_from_mapping(row))
    return processes


def _as_int(value: Any) -> int:
    if isinstance(value, bool):
        raise TypeError("booleans are not integers")
    if isinstance(value, float) and not value.is_integer():
        raise ValueError(f"{value!r} is not a whole number")
    if isinstance(value, str):
        value = value.strip()
    return int(value)


def _field(mapping: Mapping[str, Any], name: str) -> Any:
    if name in mapping and mapping[name] not in (None, ""):
        return mapping[name]
    alias = _ALIASES.get(name)
    if alias and mapping.get(alias) not in (None, ""):
        return mapping[alias]
    return None


def _process_from_mapping(mapping) -> Process:
    if not isinstance(mapping, Mapping):
        raise InvalidProcessError(None, "entry", f"must be an object, got {mapping!r}")

    pid_raw = _field(mapping, "pid")
    values = {}
    for name in ("pid", "arrival_time", "burst_time"):
        raw = _field(mapping, name)
        if raw is None:
            raise InvalidProcessError(pid_raw, name, "is required")
        try:
            values[name] = _as_int(raw)
        except (TypeError, ValueError) as exc:
            raise InvalidProcessError(pid_raw, name, f"must be an integer (got {raw!r})") from exc

    priority_raw = _field(mapping, "priority")
    try:
        priority = _as_int(priority_raw) if priority_raw is not None else 0
    except (TypeError, ValueError) as exc:
        raise InvalidProcessError(pid_raw, "priority", f"must be an integer (got {priority_raw!r})") from exc

    return Process(
        pid=values["pid"],
        arrival_time=values["arrival_time"],
        burst_time=values["burst_time"],
        priority=priority,
    )


def save_workload(processes: Iterable[Process], path: str | Path) -> Path:
    """
    Write the static inputs of a workload (no computed fields) as JSON or CSV.
    """
    path = Path(path)
    suffix = path.suffix.lower()
    rows = [{name: getattr(p, name) for name in FIELDS} for p in processes]

    if suffix == ".json":
        with path.open("w", encoding="utf-8") as f:
            json.dump(rows, f, indent=2)
            f.write("\n")
    elif suffix == ".csv":
        with path.open("w", encoding="utf-8", newline="") as f:
            writer = csv.DictWriter(f, fieldnames=FIELDS)
            writer.writeheader()
            writer.writerows(rows)
    else:
        raise ValueError(f"Unsupported workload format: {suffix} (use .json or .csv)")

    return path


def generate_workload(count: Optional[int] = None, seed: Optional[int] = None) -> List[Process]:
    """
    Build a random workload: 3-7 processes unless ``count`` is given,
    arrivals in 0-4, bursts in 1-10, priorities in 1-10.

    The same seed always produces the same workload.
    """
    rng = random.Random(seed)
    if count is None:
        count = rng.randint(3, 7)
    if count < 1:
        raise ValueError(f"Workload size must be at least 1 (got {count})")

    return [
        Process(
            pid=pid,
            arrival_time=rng.randint(0, 4),
            burst_time=rng.randint(1, 10),
            priority=rng.randint(1, 10),
        )
        for pid in range(1, count + 1)
    ]
