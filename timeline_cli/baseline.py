from __future__ import annotations

import logging
from math import comb
from typing import Iterable, List, Sequence

from .errors import InvalidProcessSet
from .models import Baseline, Process, Timeline

logger = logging.getLogger(__name__)


def validate_process_set(processes: Sequence[Process]) -> None:
    """
    Reject process sets the enumerator cannot work with.
    """
    if not processes:
        raise InvalidProcessSet("Process set is empty")

    seen: set[str] = set()
    for p in processes:
        if not isinstance(p.pid, str) or not p.pid:
            raise InvalidProcessSet(f"Process id must be a non-empty string: {p!r}")
        if p.pid in seen:
            raise InvalidProcessSet(f"Duplicate process id: {p.pid}")
        seen.add(p.pid)

        if not _is_int(p.run_length) or p.run_length < 1:
            raise InvalidProcessSet(f"Process {p.pid}: run_length must be an integer >= 1, got {p.run_length!r}")
        if not _is_int(p.arrival_time) or p.arrival_time < 0:
            raise InvalidProcessSet(
                f"Process {p.pid}: arrival_time must be an integer >= 0, got {p.arrival_time!r}"
            )


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def multinomial(counts: Iterable[int]) -> int:
    """
    Exact (sum counts)! / prod(count!) built up as a product of binomials.
    """
    total = 0
    result = 1
    for k in counts:
        total += k
        result *= comb(total, k)
    return result


def build_baseline(processes: Sequence[Process]) -> Baseline:
    """
    Expand each process into run_length slots, in process-set order, and count
    the distinct arrangements of that multiset.

    The enumerator has to start from the smallest arrangement, so the slots are
    sorted when the ids were not given in ascending order.
    """
    validate_process_set(processes)

    slots: List[str] = []
    for p in processes:
        slots.extend([p.pid] * p.run_length)

    timeline: Timeline = tuple(slots)
    if any(a > b for a, b in zip(timeline, timeline[1:])):
        logger.debug("Process ids are not ascending; sorting %d slots", len(timeline))
        timeline = tuple(sorted(timeline))

    total = multinomial(p.run_length for p in processes)
    logger.debug("Baseline %s with %d distinct arrangements", timeline, total)
    return Baseline(timeline=timeline, total=total)
