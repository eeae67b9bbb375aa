"""Result data structures produced by running a test, and the run summary."""
from __future__ import annotations

import json
from dataclasses import dataclass, replace
from typing import Any, Dict, Iterable, List, Sequence, Tuple, Union

from verdict.errors import WireDecodeError

from .coverage import CoverageReport, decode_coverage, encode_coverage
from .expectation import Expectation, Pass, is_todo
from .failure import Failure, decode_failure, encode_failure


@dataclass(frozen=True)
class Passed:
    """Outcome of a test whose expectations all held.

    Labels are ordered innermost first: the test description, then each
    enclosing group.
    """

    labels: Tuple[str, ...]
    duration: float = 0.0
    logs: Tuple[str, ...] = ()
    coverage_reports: Tuple[CoverageReport, ...] = ()


@dataclass(frozen=True)
class Failed:
    """Outcome of a test with at least one todo or failing expectation."""

    labels: Tuple[str, ...]
    duration: float = 0.0
    logs: Tuple[str, ...] = ()
    todos: Tuple[str, ...] = ()
    failures: Tuple[Failure, ...] = ()
    coverage_reports: Tuple[CoverageReport, ...] = ()


TestResult = Union[Passed, Failed]


@dataclass(frozen=True)
class Summary:
    total_duration: float = 0.0
    passed_count: int = 0
    failed_count: int = 0
    todo_count: int = 0


def from_expectations(labels: Sequence[str], expectations: Iterable[Expectation]) -> TestResult:
    """Fold the expectation outcomes of one test into its result.

    Each partition is built by prepending, so the last expectation evaluated
    comes first in ``todos`` and ``failures``.
    """

    successes: List[CoverageReport] = []
    todos: List[str] = []
    failures: List[Failure] = []
    failure_coverage: List[CoverageReport] = []
    for expectation in expectations:
        if isinstance(expectation, Pass):
            successes.insert(0, expectation.coverage)
        elif is_todo(expectation):
            todos.insert(0, expectation.failure.description)
        else:
            failures.insert(0, expectation.failure)
            failure_coverage.insert(0, expectation.coverage)
    if not todos and not failures:
        return Passed(labels=tuple(labels), coverage_reports=tuple(successes))
    return Failed(
        labels=tuple(labels),
        todos=tuple(todos),
        failures=tuple(failures),
        coverage_reports=tuple(failure_coverage),
    )


def with_run_details(result: TestResult, duration: float, logs: Sequence[str]) -> TestResult:
    """Return a copy of ``result`` carrying the externally measured run data."""

    return replace(result, duration=float(duration), logs=tuple(logs))


def summarize(results: Iterable[TestResult]) -> Summary:
    total_duration = 0.0
    passed = failed = todo = 0
    for result in results:
        total_duration += result.duration
        if isinstance(result, Passed):
            passed += 1
            continue
        if result.failures:
            failed += 1
        if result.todos:
            todo += 1
    return Summary(
        total_duration=total_duration,
        passed_count=passed,
        failed_count=failed,
        todo_count=todo,
    )


def encode_result(result: TestResult) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "type": "Passed" if isinstance(result, Passed) else "Failed",
        "labels": list(result.labels),
        "duration": result.duration,
        "logs": list(result.logs),
        "coverageReports": [encode_coverage(report) for report in result.coverage_reports],
    }
    if isinstance(result, Failed):
        payload["todos"] = list(result.todos)
        payload["failures"] = [encode_failure(failure) for failure in result.failures]
    return payload


def decode_result(value: Any) -> TestResult:
    if not isinstance(value, dict):
        raise WireDecodeError("Test result must be an object")
    tag = value.get("type")
    labels = _strings(value, "labels")
    duration = value.get("duration", 0.0)
    if not isinstance(duration, (int, float)) or isinstance(duration, bool):
        raise WireDecodeError("Test result 'duration' must be a number")
    logs = _strings(value, "logs")
    reports = value.get("coverageReports")
    if not isinstance(reports, list):
        raise WireDecodeError("Test result 'coverageReports' must be a list")
    coverage = tuple(decode_coverage(report) for report in reports)
    if tag == "Passed":
        return Passed(labels=labels, duration=float(duration), logs=logs, coverage_reports=coverage)
    if tag == "Failed":
        failures = value.get("failures")
        if not isinstance(failures, list):
            raise WireDecodeError("Test result 'failures' must be a list")
        return Failed(
            labels=labels,
            duration=float(duration),
            logs=logs,
            todos=_strings(value, "todos"),
            failures=tuple(decode_failure(failure) for failure in failures),
            coverage_reports=coverage,
        )
    raise WireDecodeError(f"Unknown test result type {tag!r}")


def dumps_result(result: TestResult) -> str:
    return json.dumps(encode_result(result))


def loads_result(text: str) -> TestResult:
    try:
        value = json.loads(text)
    except json.JSONDecodeError as exc:
        raise WireDecodeError(f"Test result is not valid JSON: {exc}") from exc
    return decode_result(value)


def _strings(value: Dict[str, Any], key: str) -> Tuple[str, ...]:
    items = value.get(key)
    if not isinstance(items, list) or not all(isinstance(item, str) for item in items):
        raise WireDecodeError(f"Test result '{key}' must be a list of strings")
    return tuple(items)
