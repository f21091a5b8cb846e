from __future__ import annotations


class InvalidProcessSet(ValueError):
    """Raised when a process set cannot be enumerated (bad lengths, arrivals or ids)."""


class TimelineCorrupt(RuntimeError):
    """Raised when a timeline does not hold what its process set says it should."""
