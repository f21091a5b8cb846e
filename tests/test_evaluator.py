import logging
from itertools import permutations

from timeline_cli.config import AverageMode, RunConfig
from timeline_cli.evaluator import evaluate
from timeline_cli.models import Process


def _procs():
    return [
        Process("A", run_length=2, arrival_time=0),
        Process("B", run_length=2, arrival_time=1),
        Process("C", run_length=1, arrival_time=2),
    ]


def _first_index_ok(timeline, procs):
    return all(timeline.index(p.pid) >= p.arrival_time for p in procs)


def test_keeps_only_arrival_respecting_timelines():
    res = evaluate([Process("A", 2, 0), Process("B", 1, 1)])
    assert ["".join(m.timeline) for m in res.valid] == ["AAB", "ABA"]
    assert res.candidates_seen == 3
    assert res.complete


def test_matches_brute_force_oracle():
    procs = _procs()
    res = evaluate(procs)

    oracle = sorted(t for t in set(permutations("AABBC")) if _first_index_ok(t, procs))
    assert [m.timeline for m in res.valid] == oracle
    assert res.candidates_seen == res.baseline.total == 30


def test_late_arrival_leaves_nothing_valid():
    res = evaluate([Process("A", 2, 0), Process("B", 1, 3)])
    assert res.valid == []
    assert res.candidates_seen == 3


def test_hook_sees_every_candidate():
    seen = []
    res = evaluate(_procs(), on_candidate=seen.append)
    assert [c.index for c in seen] == list(range(30))
    assert sum(c.valid for c in seen) == len(res.valid)


def test_hook_can_stop_early():
    res = evaluate(_procs(), on_candidate=lambda c: c.index < 1)
    assert res.candidates_seen == 2
    assert not res.complete


def test_average_mode_passes_through():
    procs = [Process("A", 2, 0), Process("B", 1, 1)]
    res = evaluate(procs, RunConfig(average=AverageMode.WEIGHTED))
    assert res.average == "weighted"
    assert [round(m.avg_wait, 3) for m in res.valid] == [0.333, 0.667]


def test_stopping_on_last_candidate_is_still_complete():
    res = evaluate([Process("A", 2, 0), Process("B", 1, 1)], on_candidate=lambda c: c.index < 2)
    assert res.candidates_seen == 3
    assert res.complete


def test_candidate_text_only_built_when_debugging(monkeypatch, caplog):
    calls = []
    monkeypatch.setattr("timeline_cli.evaluator.format_timeline", lambda t: calls.append(t) or "".join(t))

    caplog.set_level(logging.WARNING, logger="timeline_cli.evaluator")
    evaluate(_procs())
    assert calls == []

    caplog.set_level(logging.DEBUG, logger="timeline_cli.evaluator")
    evaluate(_procs())
    assert len(calls) == 30
