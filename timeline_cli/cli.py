from __future__ import annotations

import argparse
from pathlib import Path
from typing import List, Optional

from rich.console import Console

from .baseline import build_baseline
from .config import AverageMode, RunConfig, configure_logging
from .errors import InvalidProcessSet, TimelineCorrupt
from .evaluator import evaluate
from .metrics import best_timelines
from .models import Candidate, EvaluationResult, Process, format_timeline
from .report import (
    build_metrics_table,
    build_process_table,
    build_results_table,
    build_rich_timeline,
    describe_baseline,
    describe_processes,
    render_csv,
    result_lines,
    write_csv,
)
from .workload_io import default_workload, load_workload

EXIT_INVALID_INPUT = 2
EXIT_INTERNAL_ERROR = 3


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def _non_negative_int(value: str) -> int:
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be 0 or more, got {number}")
    return number


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--workload",
        "-w",
        default=None,
        help="Path to JSON or CSV process set (default: built-in A/B/C set, 4 slots each, arriving at 0/1/2).",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Log the per-process validity and metric explanations.",
    )


def _add_average_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--average",
        choices=[m.value for m in AverageMode],
        default=AverageMode.UNWEIGHTED.value,
        help="Plain mean over processes, or mean weighted by run length (default: unweighted).",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="timeline-cli",
        description="Exhaustively evaluate every single-CPU interleaving of a process set.",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Enumerate all timelines and report metrics for the valid ones.")
    _add_common_arguments(run_parser)
    _add_average_argument(run_parser)
    run_parser.add_argument(
        "--csv",
        action="store_true",
        help="Also print the valid timelines as CSV (timeline,avg_tt,avg_wt).",
    )
    run_parser.add_argument(
        "--csv-out",
        default=None,
        help="Write the CSV to this path.",
    )
    run_parser.add_argument(
        "--show-candidates",
        action="store_true",
        help="List every enumerated timeline with its validity.",
    )
    run_parser.add_argument(
        "--limit",
        type=_positive_int,
        default=None,
        help="Stop after this many enumerated timelines.",
    )
    run_parser.add_argument(
        "--table",
        action="store_true",
        help="Render the valid timelines as a table with the best averages highlighted.",
    )
    run_parser.add_argument(
        "--precision",
        type=_non_negative_int,
        default=3,
        help="Decimal places for averages in the report (default: 3).",
    )

    best_parser = subparsers.add_parser("best", help="Show the timelines with the lowest average metrics.")
    _add_common_arguments(best_parser)
    _add_average_argument(best_parser)
    best_parser.add_argument(
        "--metric",
        choices=["turnaround", "wait"],
        default="turnaround",
        help="Metric to minimise (default: turnaround).",
    )

    count_parser = subparsers.add_parser("count", help="Show the baseline and number of distinct timelines.")
    _add_common_arguments(count_parser)

    return parser


def _load_processes(workload: Optional[str]) -> List[Process]:
    if workload is None:
        return default_workload()
    return load_workload(Path(workload))


def _config_from_args(args: argparse.Namespace) -> RunConfig:
    return RunConfig(
        debug=args.debug,
        csv=getattr(args, "csv", False),
        csv_out=getattr(args, "csv_out", None),
        show_candidates=getattr(args, "show_candidates", False),
        average=AverageMode(getattr(args, "average", AverageMode.UNWEIGHTED.value)),
        precision=getattr(args, "precision", 3),
    )


def _print_header(processes: List[Process], console: Console) -> None:
    baseline = build_baseline(processes)
    console.print("[bold]Processes:[/bold]")
    for line in describe_processes(processes):
        console.print(line, highlight=False)
    console.print()
    for line in describe_baseline(processes, baseline):
        console.print(line, highlight=False)


def _print_result(result: EvaluationResult, config: RunConfig, console: Console, table: bool = False) -> None:
    console.print()
    console.print(f"[bold]{len(result.valid)} Valid Timelines:[/bold]")
    if table:
        console.print(build_results_table(result, config.precision))
    else:
        for line in result_lines(result.valid, config.precision):
            console.out(line, highlight=False)

    if not result.complete:
        console.print(
            f"[yellow]Stopped after {result.candidates_seen} of {result.baseline.total} timelines.[/yellow]"
        )

    if config.csv:
        console.print()
        console.out(render_csv(result.valid), end="", highlight=False)

    if config.csv_out:
        path = write_csv(result.valid, config.csv_out)
        console.print(f"[dim]CSV written to {path}[/dim]")


def _run(args: argparse.Namespace, config: RunConfig, console: Console) -> int:
    processes = _load_processes(args.workload)
    _print_header(processes, console)

    def on_candidate(candidate: Candidate) -> bool:
        if config.show_candidates:
            status = "valid" if candidate.valid else "[red]NOT valid[/red]"
            console.print(f"{format_timeline(candidate.timeline)} {status}", highlight=False)
        return args.limit is None or candidate.index + 1 < args.limit

    result = evaluate(processes, config, on_candidate=on_candidate)
    _print_result(result, config, console, table=args.table)
    return 0


def _best(args: argparse.Namespace, config: RunConfig, console: Console) -> int:
    processes = _load_processes(args.workload)
    result = evaluate(processes, config)
    console.print(build_process_table(processes))
    key = "avg_turnaround" if args.metric == "turnaround" else "avg_wait"
    best = best_timelines(result.valid, key)
    if not best:
        console.print("[yellow]No valid timelines: some process arrives after the last time slot.[/yellow]")
        return 0

    console.print(f"[bold]{len(best)} timeline(s) with the lowest {key}:[/bold]")
    for metrics in best:
        panel, marks = build_rich_timeline(metrics.timeline, title=format_timeline(metrics.timeline))
        console.print(panel)
        console.print(marks, highlight=False)
        console.print(build_metrics_table(metrics))
    return 0


def _count(args: argparse.Namespace, config: RunConfig, console: Console) -> int:
    processes = _load_processes(args.workload)
    _print_header(processes, console)
    return 0


COMMANDS = {
    "run": _run,
    "best": _best,
    "count": _count,
}


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    console = Console()
    config = _config_from_args(args)
    configure_logging(config.debug)
    if config.debug:
        console.print("Running in DEBUG mode.")

    command = COMMANDS.get(args.command)
    if command is None:
        parser.error(f"Unknown command: {args.command}")
        return 1

    try:
        return command(args, config, console)
    except TimelineCorrupt as exc:
        console.print(f"[red]Internal error: {exc}[/red]")
        return EXIT_INTERNAL_ERROR
    except (InvalidProcessSet, ValueError, OSError) as exc:
        console.print(f"[red]Error: {exc}[/red]")
        return EXIT_INVALID_INPUT


if __name__ == "__main__":
    raise SystemExit(main())
