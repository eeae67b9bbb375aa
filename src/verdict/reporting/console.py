"""Console reporter rendering failures and the run summary for humans."""
from __future__ import annotations

from typing import List, Optional, Sequence

from verdict.version import __version__
from verdict.core.coverage import NoCoverage, coverage_table
from verdict.core.kind import InvalidSuite, KindResult, Status, status_headline
from verdict.core.results import Failed, TestResult, summarize

from .base import Reporter, ReporterConfig
from .failures import format_failed
from .styling import PlainStyler


class ConsoleReporter(Reporter):
    """Human-readable reporter; passing tests stay quiet unless verbose."""

    def __init__(
        self,
        config: ReporterConfig,
        *,
        styler: Optional[PlainStyler] = None,
        verbose: bool = False,
    ) -> None:
        super().__init__(config)
        self._style = styler or PlainStyler()
        self._verbose = verbose

    def on_begin(self, tests_count: int) -> Optional[str]:
        title = f"verdict {__version__}"
        command = f"verdict run --seed {self.config.seed} --fuzz {self.config.fuzz_runs}"
        if self.config.paths:
            command += " " + " ".join(self.config.paths)
        return "\n".join(
            [
                "",
                title,
                "-" * len(title),
                "",
                f"Running {_plural(tests_count, 'test')}. To reproduce these results later, run:",
                self._style.bold(command),
                "",
            ]
        )

    def on_result(self, result: TestResult) -> Optional[str]:
        if isinstance(result, Failed):
            marker = self._style.yellow("◦ TODO") if result.todos else self._style.red("✗")
            lines = self._labels(result.labels, marker)
            lines.append("")
            lines.extend(_indent(format_failed(result)))
            lines.extend(self._logs(result.logs))
            lines.append("")
            return "\n".join(lines)
        reports = [report for report in result.coverage_reports if not isinstance(report, NoCoverage)]
        if not reports and not self._verbose:
            return None
        lines = self._labels(result.labels, self._style.green("✓"))
        for report in reports:
            lines.append("")
            lines.extend(_indent("\n".join(coverage_table(report))))
        if self._verbose:
            lines.extend(self._logs(result.logs))
        if reports:
            lines.append("")
        return "\n".join(lines)

    def on_end(self, kind: KindResult, results: Sequence[TestResult]) -> Optional[str]:
        if isinstance(kind, InvalidSuite):
            return self._style.red("Your tests are invalid:") + "\n" + kind.message + "\n"
        summary = summarize(results)
        headline = status_headline(kind, summary)
        lines = [self._headline(headline.status, headline.text()), ""]
        lines.append(f"Duration: {summary.total_duration:.0f} ms")
        lines.append(f"Passed:   {summary.passed_count}")
        lines.append(f"Failed:   {summary.failed_count}")
        if summary.todo_count:
            lines.append(f"Todo:     {summary.todo_count}")
            for result in results:
                if isinstance(result, Failed) and result.todos:
                    lines.append(self._style.dim("  " + " > ".join(reversed(result.labels))))
        lines.append("")
        return "\n".join(lines)

    def _headline(self, status: Status, text: str) -> str:
        if status is Status.PASSED:
            return self._style.green(text)
        if status is Status.INCOMPLETE:
            return self._style.yellow(text)
        return self._style.red(text)

    def _labels(self, labels: Sequence[str], marker: str) -> List[str]:
        if not labels:
            return [marker]
        lines = [f"{marker} {self._style.bold(labels[0])}"]
        lines.extend(self._style.dim(f"  ↳ {label}") for label in labels[1:])
        return lines

    def _logs(self, logs: Sequence[str]) -> List[str]:
        if not logs:
            return []
        lines = ["", self._style.dim("    with debug logs:"), ""]
        lines.extend(_indent("\n".join(logs)))
        return lines


def _indent(text: str, prefix: str = "    ") -> List[str]:
    return [prefix + line if line else line for line in text.splitlines()]


def _plural(count: int, noun: str) -> str:
    return f"{count} {noun}" if count == 1 else f"{count} {noun}s"
