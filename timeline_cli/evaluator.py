from __future__ import annotations

import logging
from typing import Callable, List, Optional, Sequence

from .baseline import build_baseline
from .config import RunConfig
from .metrics import compute_metrics
from .models import Candidate, EvaluationResult, Process, format_timeline
from .permutations import enumerate_timelines
from .validity import is_valid

logger = logging.getLogger(__name__)

CandidateHook = Callable[[Candidate], Optional[bool]]


def evaluate(
    processes: Sequence[Process],
    config: Optional[RunConfig] = None,
    on_candidate: Optional[CandidateHook] = None,
) -> EvaluationResult:
    """
    Enumerate every distinct timeline for `processes`, keep the ones that respect
    arrival times and compute their metrics.

    `on_candidate` is called with each enumerated timeline; returning False
    stops the enumeration early and the result is flagged incomplete.
    """
    config = config or RunConfig()
    procs: List[Process] = list(processes)
    baseline = build_baseline(procs)

    result = EvaluationResult(processes=procs, baseline=baseline, average=config.average.value)

    for index, timeline in enumerate(enumerate_timelines(baseline.timeline)):
        valid = is_valid(timeline, procs)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("%s %s", format_timeline(timeline), "valid" if valid else "NOT valid")
        result.candidates_seen += 1

        if valid:
            result.valid.append(compute_metrics(timeline, procs, config.average))

        if on_candidate is not None and on_candidate(Candidate(index=index, timeline=timeline, valid=valid)) is False:
            if result.candidates_seen < baseline.total:
                logger.info("Enumeration stopped after %d of %d timelines", result.candidates_seen, baseline.total)
                result.complete = False
            break

    logger.debug("%d of %d timelines are valid", len(result.valid), result.candidates_seen)
    return result
