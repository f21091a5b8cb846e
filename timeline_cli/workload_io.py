from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import List

from .errors import InvalidProcessSet
from .models import Process

DEFAULT_WORKLOAD = (
    Process("A", run_length=4, arrival_time=0),
    Process("B", run_length=4, arrival_time=1),
    Process("C", run_length=4, arrival_time=2),
)


def default_workload() -> List[Process]:
    return list(DEFAULT_WORKLOAD)


def load_workload(path: str | Path) -> List[Process]:
    """
    Load a process set from a JSON or CSV file into a list of Process objects.
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix == ".json":
        return _load_json(path)
    if suffix == ".csv":
        return _load_csv(path)

    raise ValueError(f"Unsupported workload format: {suffix} (use .json or .csv)")


def _load_json(path: Path) -> List[Process]:
    with path.open("r", encoding="utf-8") as f:
        raw = json.load(f)

    if not isinstance(raw, list):
        raise InvalidProcessSet("JSON workload must be a list of process objects")

    return [_process_from_mapping(entry) for entry in raw]


def _load_csv(path: Path) -> List[Process]:
    processes: List[Process] = []
    with path.open("r", encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        for row in reader:
            processes.append(_process_from_mapping(row))
    return processes


def _process_from_mapping(mapping) -> Process:
    try:
        pid = str(mapping["pid"]).strip()
        run_length_val = mapping.get("run_length")
        if run_length_val in (None, ""):
            run_length_val = mapping["cycles"]
        run_length = int(run_length_val)
        arrival_time = int(mapping["arrival_time"])
    except (AttributeError, KeyError, TypeError, ValueError) as exc:
        raise InvalidProcessSet(f"Invalid process entry: {mapping!r}") from exc

    return Process(pid=pid, run_length=run_length, arrival_time=arrival_time)
