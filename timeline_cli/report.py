from __future__ import annotations

import csv
import io
from math import factorial, prod
from pathlib import Path
from typing import Dict, List, Sequence

from rich import box
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .models import Baseline, EvaluationResult, Process, Timeline, TimelineMetrics, format_timeline

CSV_HEADER = ["timeline", "avg_tt", "avg_wt"]


def describe_processes(processes: Sequence[Process]) -> List[str]:
    return [
        f"{p.pid} of length {p.run_length} arriving at time {p.arrival_time}"
        for p in processes
    ]


def describe_baseline(processes: Sequence[Process], baseline: Baseline) -> List[str]:
    """
    The "ingredients" line and the factorial form of the arrangement count.
    """
    numerator = factorial(len(baseline.timeline))
    denominator = prod(factorial(p.run_length) for p in processes)
    return [
        f"Execution timeline ingredients: {format_timeline(baseline.timeline)}",
        f"{numerator} / {denominator} = {baseline.total} total permutations",
    ]


def result_lines(results: Sequence[TimelineMetrics], precision: int = 3) -> List[str]:
    return [
        f"{format_timeline(r.timeline)}: avgTT = {r.avg_turnaround:.{precision}f}"
        f"  avgWT = {r.avg_wait:.{precision}f}"
        for r in results
    ]


def csv_rows(results: Sequence[TimelineMetrics]) -> List[List[str]]:
    rows = [list(CSV_HEADER)]
    for r in results:
        rows.append([format_timeline(r.timeline), f"{r.avg_turnaround:.6f}", f"{r.avg_wait:.6f}"])
    return rows


def render_csv(results: Sequence[TimelineMetrics]) -> str:
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerows(csv_rows(results))
    return buf.getvalue()


def write_csv(results: Sequence[TimelineMetrics], path: str | Path) -> Path:
    path = Path(path)
    with path.open("w", encoding="utf-8", newline="") as f:
        writer = csv.writer(f, lineterminator="\n")
        writer.writerows(csv_rows(results))
    return path


def build_process_table(processes: Sequence[Process]) -> Table:
    table = Table(title="Processes", box=box.SIMPLE_HEAVY)
    table.add_column("PID", justify="center")
    table.add_column("Run length", justify="right")
    table.add_column("Arrive", justify="right")
    for p in processes:
        table.add_row(p.pid, str(p.run_length), str(p.arrival_time))
    return table


def build_results_table(result: EvaluationResult, precision: int = 3) -> Table:
    """
    One row per valid timeline, best averages highlighted.
    """
    table = Table(
        title=f"{len(result.valid)} Valid Timelines",
        caption=None if result.complete else f"stopped after {result.candidates_seen} of {result.baseline.total}",
        box=box.SIMPLE_HEAVY,
    )
    table.add_column("#", justify="right")
    table.add_column("Timeline")
    table.add_column("Avg turnaround", justify="right")
    table.add_column("Avg wait", justify="right")

    if not result.valid:
        return table

    best_tt = min(r.avg_turnaround for r in result.valid)
    best_wt = min(r.avg_wait for r in result.valid)

    for idx, r in enumerate(result.valid, start=1):
        tt = f"{r.avg_turnaround:.{precision}f}"
        wt = f"{r.avg_wait:.{precision}f}"
        table.add_row(
            str(idx),
            format_timeline(r.timeline),
            f"[bold green]{tt}[/bold green]" if r.avg_turnaround == best_tt else tt,
            f"[bold green]{wt}[/bold green]" if r.avg_wait == best_wt else wt,
        )
    return table


def build_metrics_table(metrics: TimelineMetrics) -> Table:
    table = Table(title=f"Per-process metrics: {format_timeline(metrics.timeline)}", box=box.SIMPLE_HEAVY)
    for h in ["PID", "Arrive", "Run length", "Finish", "Turnaround", "Wait"]:
        table.add_column(h, justify="center" if h == "PID" else "right")
    for p in metrics.processes:
        table.add_row(
            p.pid,
            str(p.arrival_time),
            str(p.run_length),
            str(p.finish_index),
            str(p.turnaround_time),
            str(p.wait_time),
        )
    return table


def build_rich_timeline(timeline: Timeline, title: str = "Timeline") -> tuple[Panel, str]:
    """
    Build a Rich Panel with one coloured cell per time slot and a string of slot indices.
    """
    if not timeline:
        return Panel("No execution", title=title), ""

    colors = ["red", "green", "yellow", "blue", "magenta", "cyan"]
    pid_to_color: Dict[str, str] = {}

    def pid_color(pid: str) -> str:
        if pid not in pid_to_color:
            idx = len(pid_to_color) % len(colors)
            pid_to_color[pid] = colors[idx]
        return pid_to_color[pid]

    width = max(max(len(pid) for pid in timeline), len(str(len(timeline) - 1))) + 1
    strip = Text()
    labels = Text()
    time_marks = ""

    for t, pid in enumerate(timeline):
        strip.append(" " * width, style=f"on {pid_color(pid)}")
        labels.append(pid.ljust(width), style="bold")
        time_marks += str(t).ljust(width)

    table = Table.grid(padding=(0, 0))
    table.add_row(strip)
    table.add_row(labels)

    return Panel.fit(table, title=title), time_marks.rstrip()
