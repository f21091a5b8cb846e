from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler


class AverageMode(str, Enum):
    UNWEIGHTED = "unweighted"
    WEIGHTED = "weighted"


@dataclass(frozen=True)
class RunConfig:
    """
    Options for one run, built once by the CLI and handed to the evaluator and reporter.
    """

    debug: bool = False
    csv: bool = False
    csv_out: Optional[str] = None
    show_candidates: bool = False
    average: AverageMode = AverageMode.UNWEIGHTED
    precision: int = 3


def configure_logging(debug: bool, console: Optional[Console] = None) -> None:
    """
    Route log records through rich. Debug mode surfaces the per-process
    validity and metric explanations emitted by the core modules.
    """
    handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=False,
        show_path=debug,
        markup=False,
    )
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(message)s",
        handlers=[handler],
        force=True,
    )
