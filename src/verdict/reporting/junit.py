"""JUnit XML reporter."""
from __future__ import annotations

import xml.etree.ElementTree as ET
from typing import Optional, Sequence

from verdict.core.kind import KindResult, RunKind
from verdict.core.results import Failed, TestResult, summarize

from .base import Reporter
from .failures import format_failed, outermost_first


class JunitReporter(Reporter):
    """Writes a single ``<testsuite>`` document once the run is over.

    Invalid suites have no dedicated element and render as an empty suite.
    """

    suite_name = "verdict"

    def on_begin(self, tests_count: int) -> Optional[str]:
        return None

    def on_result(self, result: TestResult) -> Optional[str]:
        return None

    def on_end(self, kind: KindResult, results: Sequence[TestResult]) -> Optional[str]:
        summary = summarize(results)
        suite = ET.Element(
            "testsuite",
            {
                "name": self.suite_name,
                "package": self.suite_name,
                "hostname": "-",
                "tests": str(len(results)),
                "failures": str(sum(1 for result in results if _is_failure(result))),
                "errors": "0",
                "skipped": "1" if kind is RunKind.SKIPPING else "0",
                "time": _seconds(summary.total_duration),
            },
        )
        for result in results:
            suite.append(_testcase(result))
        body = ET.tostring(suite, encoding="unicode")
        return f'<?xml version="1.0" encoding="UTF-8"?>\n{body}'


def _testcase(result: TestResult) -> ET.Element:
    labels = outermost_first(result.labels)
    attributes = {
        "classname": " > ".join(labels[:-1]),
        "name": labels[-1] if labels else "",
        "time": _seconds(result.duration),
    }
    if result.logs:
        attributes["system-out"] = "\n".join(result.logs)
    case = ET.Element("testcase", attributes)
    if isinstance(result, Failed):
        message = format_failed(result)
        tag = "failure" if _is_failure(result) else "skipped"
        child = ET.SubElement(case, tag, {"message": message})
        if result.logs:
            child.set("system-out", "\n".join(result.logs))
    return case


def _seconds(duration_ms: float) -> str:
    return f"{duration_ms / 1000:.3f}"


def _is_failure(result: TestResult) -> bool:
    """Todos take precedence, so a result with todos is rendered as skipped."""

    return isinstance(result, Failed) and bool(result.failures) and not result.todos
