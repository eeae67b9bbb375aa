"""Reporter interface definitions."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Sequence

from verdict.core.kind import KindResult
from verdict.core.results import TestResult


@dataclass(frozen=True)
class ReporterConfig:
    """Run parameters reporters echo back for reproduction."""

    seed: int
    fuzz_runs: int
    globs: Sequence[str] = field(default_factory=tuple)
    paths: Sequence[str] = field(default_factory=tuple)


class Reporter:
    """Interface for output renderers.

    Reporters keep no state between calls: every method maps its inputs to the
    text to write, or ``None`` when the event produces no output.
    """

    def __init__(self, config: ReporterConfig) -> None:
        self.config = config

    def on_begin(self, tests_count: int) -> Optional[str]:  # pragma: no cover - interface
        raise NotImplementedError

    def on_result(self, result: TestResult) -> Optional[str]:  # pragma: no cover - interface
        raise NotImplementedError

    def on_end(self, kind: KindResult, results: Sequence[TestResult]) -> Optional[str]:  # pragma: no cover
        raise NotImplementedError
