from __future__ import annotations

from typing import Any, Optional


class SchedulingError(ValueError):
    """Base class for every request the engine refuses to simulate."""


class InvalidProcessError(SchedulingError):
    def __init__(self, pid: Any, field: str, message: str) -> None:
        self.pid = pid
        self.field = field
        super().__init__(f"Invalid process {pid!r}: {field} {message}")


class InvalidQuantumError(SchedulingError):
    def __init__(self, quantum: Optional[Any]) -> None:
        self.quantum = quantum
        super().__init__(f"Round Robin requires an integer quantum >= 1 (got {quantum!r})")


class UnknownAlgorithmError(SchedulingError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown algorithm '{name}'")
