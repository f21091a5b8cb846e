from __future__ import annotations

import logging
from typing import List, Sequence

from .config import AverageMode
from .errors import TimelineCorrupt
from .models import Process, ProcessMetrics, TimelineMetrics

logger = logging.getLogger(__name__)


def _process_metrics(timeline: Sequence[str], p: Process) -> ProcessMetrics:
    try:
        # Last slot the process occupies.
        finish_index = len(timeline) - 1 - list(reversed(timeline)).index(p.pid)
    except ValueError:
        raise TimelineCorrupt(f"Process {p.pid} never appears in timeline {''.join(timeline)!r}") from None

    if finish_index < p.arrival_time:
        raise TimelineCorrupt(
            f"Process {p.pid} finishes at {finish_index}, before its arrival time {p.arrival_time}"
        )

    turnaround_time = finish_index - p.arrival_time + 1  # slot 0 counts
    wait_time = sum(1 for j in range(p.arrival_time, finish_index) if timeline[j] != p.pid)

    logger.debug("Turnaround time for process %s: %d", p.pid, turnaround_time)
    logger.debug("Wait time for process %s: %d", p.pid, wait_time)

    return ProcessMetrics(
        pid=p.pid,
        arrival_time=p.arrival_time,
        run_length=p.run_length,
        finish_index=finish_index,
        turnaround_time=turnaround_time,
        wait_time=wait_time,
    )


def summarize_process_metrics(
    processes: Sequence[ProcessMetrics],
    average: AverageMode = AverageMode.UNWEIGHTED,
) -> dict:
    """
    Return the average turnaround and wait time across processes. The weighted
    mode weights each process by its run length.
    """
    if not processes:
        return {"avg_turnaround": 0.0, "avg_wait": 0.0}

    if average == AverageMode.WEIGHTED:
        weights = [p.run_length for p in processes]
    else:
        weights = [1] * len(processes)

    total = sum(weights)
    return {
        "avg_turnaround": sum(w * p.turnaround_time for w, p in zip(weights, processes)) / total,
        "avg_wait": sum(w * p.wait_time for w, p in zip(weights, processes)) / total,
    }


def compute_metrics(
    timeline: Sequence[str],
    processes: Sequence[Process],
    average: AverageMode = AverageMode.UNWEIGHTED,
) -> TimelineMetrics:
    """
    Per-process turnaround and wait times for a valid timeline, plus their averages.

    Turnaround runs from the arrival slot to the last occupied slot inclusive.
    Wait counts the slots between arrival and that last slot in which some
    other process runs, so interrupted processes accumulate every gap.
    """
    per_process = tuple(_process_metrics(timeline, p) for p in processes)
    summary = summarize_process_metrics(per_process, average)
    return TimelineMetrics(
        timeline=tuple(timeline),
        processes=per_process,
        avg_turnaround=summary["avg_turnaround"],
        avg_wait=summary["avg_wait"],
    )


def best_timelines(results: Sequence[TimelineMetrics], key: str = "avg_turnaround") -> List[TimelineMetrics]:
    """
    All timelines tied for the smallest value of `key` (avg_turnaround or avg_wait),
    in the order they were discovered.
    """
    if key not in {"avg_turnaround", "avg_wait"}:
        raise ValueError(f"Unknown metric: {key} (use avg_turnaround or avg_wait)")
    if not results:
        return []

    lowest = min(getattr(r, key) for r in results)
    return [r for r in results if getattr(r, key) == lowest]
