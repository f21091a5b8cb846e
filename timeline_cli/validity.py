from __future__ import annotations

import logging
from typing import List, Sequence, Tuple

from .models import Process

logger = logging.getLogger(__name__)


def find_violations(timeline: Sequence[str], processes: Sequence[Process]) -> List[Tuple[str, int]]:
    """
    Return (pid, slot) for every slot that runs a process before its arrival time.
    """
    violations: List[Tuple[str, int]] = []
    for p in processes:
        logger.debug("Checking process %s for validity", p.pid)
        for j in range(min(p.arrival_time, len(timeline))):
            if timeline[j] == p.pid:
                logger.debug("   NOT valid because process %s cannot be scheduled at time %d", p.pid, j)
                violations.append((p.pid, j))
    return violations


def is_valid(timeline: Sequence[str], processes: Sequence[Process]) -> bool:
    """
    A timeline is valid when no process occupies a slot earlier than its arrival time.
    """
    return not find_violations(timeline, processes)
