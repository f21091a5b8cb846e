import pytest

from timeline_cli.config import AverageMode
from timeline_cli.errors import TimelineCorrupt
from timeline_cli.metrics import best_timelines, compute_metrics, summarize_process_metrics
from timeline_cli.models import Process


def test_two_single_slot_processes():
    m = compute_metrics(("A", "B"), [Process("A", 1, 0), Process("B", 1, 0)])
    a, b = m.processes
    assert (a.turnaround_time, a.wait_time) == (1, 0)
    assert (b.turnaround_time, b.wait_time) == (2, 1)
    assert m.avg_turnaround == pytest.approx(1.5)
    assert m.avg_wait == pytest.approx(0.5)


def test_interrupted_process_counts_every_gap():
    procs = [Process("A", 2, 0), Process("B", 1, 1)]
    m = compute_metrics(("A", "B", "A"), procs)
    a, b = m.processes
    assert a.finish_index == 2
    assert (a.turnaround_time, a.wait_time) == (3, 1)
    assert (b.turnaround_time, b.wait_time) == (1, 0)
    assert m.avg_turnaround == pytest.approx(2.0)
    assert m.avg_wait == pytest.approx(0.5)


def test_weighted_average_uses_run_length():
    procs = [Process("A", 2, 0), Process("B", 1, 1)]
    m = compute_metrics(("A", "B", "A"), procs, AverageMode.WEIGHTED)
    assert m.avg_turnaround == pytest.approx(7 / 3)
    assert m.avg_wait == pytest.approx(2 / 3)


def test_missing_process_is_corrupt():
    with pytest.raises(TimelineCorrupt):
        compute_metrics(("A", "A"), [Process("A", 2, 0), Process("B", 1, 0)])


def test_finish_before_arrival_is_corrupt():
    with pytest.raises(TimelineCorrupt):
        compute_metrics(("B", "A"), [Process("A", 1, 0), Process("B", 1, 1)])


def test_compute_metrics_is_idempotent():
    procs = [Process("A", 2, 0), Process("B", 2, 1)]
    timeline = ("A", "B", "A", "B")
    assert compute_metrics(timeline, procs) == compute_metrics(timeline, procs)


def test_summarize_empty():
    assert summarize_process_metrics([]) == {"avg_turnaround": 0.0, "avg_wait": 0.0}


def test_best_timelines_picks_shortest_first():
    procs = [Process("A", 2, 0), Process("B", 1, 0)]
    results = [compute_metrics(t, procs) for t in [("A", "A", "B"), ("A", "B", "A"), ("B", "A", "A")]]

    best = best_timelines(results, "avg_turnaround")
    assert [r.timeline for r in best] == [("B", "A", "A")]
    assert best_timelines(results, "avg_wait") == best


def test_best_timelines_keeps_ties_in_order():
    procs = [Process("A", 1, 0), Process("B", 1, 0)]
    results = [compute_metrics(t, procs) for t in [("A", "B"), ("B", "A")]]
    assert best_timelines(results) == results


def test_best_timelines_unknown_metric():
    with pytest.raises(ValueError):
        best_timelines([], "avg_response")
