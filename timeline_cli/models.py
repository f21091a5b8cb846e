from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

Timeline = Tuple[str, ...]


@dataclass(frozen=True)
class Process:
    pid: str
    run_length: int
    arrival_time: int


@dataclass(frozen=True)
class Baseline:
    """
    The sorted multiset of time slots and the number of distinct ways to arrange it.
    """

    timeline: Timeline
    total: int


@dataclass(frozen=True)
class ProcessMetrics:
    pid: str
    arrival_time: int
    run_length: int
    finish_index: int
    turnaround_time: int
    wait_time: int


@dataclass(frozen=True)
class TimelineMetrics:
    timeline: Timeline
    processes: Tuple[ProcessMetrics, ...]
    avg_turnaround: float
    avg_wait: float


@dataclass(frozen=True)
class Candidate:
    """
    One enumerated arrangement and whether it respects every arrival time.
    """

    index: int
    timeline: Timeline
    valid: bool


@dataclass
class EvaluationResult:
    processes: List[Process]
    baseline: Baseline
    valid: List[TimelineMetrics] = field(default_factory=list)
    candidates_seen: int = 0
    complete: bool = True
    average: Optional[str] = None


def format_timeline(timeline: Timeline) -> str:
    """
    Render a timeline as text: "AAB" for one-letter pids, "P1|P1|P2" otherwise.
    """
    if all(len(pid) == 1 for pid in timeline):
        return "".join(timeline)
    return "|".join(timeline)
