from timeline_cli.models import Process
from timeline_cli.validity import find_violations, is_valid


def _procs():
    return [Process("A", run_length=2, arrival_time=0), Process("B", run_length=1, arrival_time=1)]


def test_arrival_constraint():
    procs = _procs()
    assert is_valid(("A", "A", "B"), procs)
    assert is_valid(("A", "B", "A"), procs)
    assert not is_valid(("B", "A", "A"), procs)


def test_violations_report_pid_and_slot():
    assert find_violations(("B", "A", "A"), _procs()) == [("B", 0)]
    assert find_violations(("A", "B", "A"), _procs()) == []


def test_arrival_past_end_invalidates_every_slot():
    procs = [Process("A", 1, 0), Process("B", 1, 5)]
    assert not is_valid(("A", "B"), procs)
    assert not is_valid(("B", "A"), procs)


def test_is_deterministic():
    procs = _procs()
    results = {is_valid(("B", "A", "A"), procs) for _ in range(3)}
    assert results == {False}
