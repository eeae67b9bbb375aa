"""Reporting exports and backend selection."""
from __future__ import annotations

from enum import Enum

from .base import Reporter, ReporterConfig
from .console import ConsoleReporter
from .exercism import ExercismReporter
from .json_reporter import JsonReporter
from .junit import JunitReporter
from .styling import AnsiStyler, PlainStyler


class ReportFormat(Enum):
    CONSOLE = "console"
    JSON = "json"
    JUNIT = "junit"
    EXERCISM = "exercism"


def create_reporter(
    fmt: ReportFormat,
    config: ReporterConfig,
    *,
    use_color: bool = True,
    verbose: bool = False,
) -> Reporter:
    """Resolve the configured format into a reporter instance."""

    if fmt is ReportFormat.CONSOLE:
        styler = AnsiStyler() if use_color else PlainStyler()
        return ConsoleReporter(config, styler=styler, verbose=verbose)
    if fmt is ReportFormat.JSON:
        return JsonReporter(config)
    if fmt is ReportFormat.JUNIT:
        return JunitReporter(config)
    if fmt is ReportFormat.EXERCISM:
        return ExercismReporter(config)
    raise ValueError(f"Unsupported report format {fmt!r}")


__all__ = [
    "AnsiStyler",
    "ConsoleReporter",
    "ExercismReporter",
    "JsonReporter",
    "JunitReporter",
    "PlainStyler",
    "ReportFormat",
    "Reporter",
    "ReporterConfig",
    "create_reporter",
]
