"""JSON reporter emitting one event object per line."""
from __future__ import annotations

import json
from typing import Any, Dict, List, Optional, Sequence

from jsonschema import validate

from verdict.core.failure import encode_reason
from verdict.core.kind import InvalidSuite, KindResult, RunKind
from verdict.core.results import Failed, TestResult, summarize

from .base import Reporter
from .failures import outermost_first
from .schema import RUN_COMPLETE_SCHEMA, RUN_START_SCHEMA, TEST_COMPLETED_SCHEMA


class JsonReporter(Reporter):
    """Newline-delimited JSON events; numbers are written as strings."""

    def on_begin(self, tests_count: int) -> Optional[str]:
        return _dump(
            {
                "event": "runStart",
                "testCount": str(tests_count),
                "initialSeed": str(self.config.seed),
                "fuzzRuns": str(self.config.fuzz_runs),
                "globs": list(self.config.globs),
                "paths": list(self.config.paths),
            },
            RUN_START_SCHEMA,
        )

    def on_result(self, result: TestResult) -> Optional[str]:
        failures: List[Any] = []
        status = "pass"
        if isinstance(result, Failed):
            if result.todos:
                status = "todo"
                failures = list(result.todos)
            else:
                status = "fail"
                failures = [
                    {
                        "given": failure.given,
                        "message": failure.description,
                        "reason": encode_reason(failure.reason),
                    }
                    for failure in result.failures
                ]
        return _dump(
            {
                "event": "testCompleted",
                "status": status,
                "labels": outermost_first(result.labels),
                "failures": failures,
                "duration": _ms(result.duration),
            },
            TEST_COMPLETED_SCHEMA,
        )

    def on_end(self, kind: KindResult, results: Sequence[TestResult]) -> Optional[str]:
        summary = summarize(results)
        return _dump(
            {
                "event": "runComplete",
                "passed": str(summary.passed_count),
                "failed": str(summary.failed_count),
                "duration": _ms(summary.total_duration),
                "autoFail": _auto_fail(kind, summary.todo_count),
            },
            RUN_COMPLETE_SCHEMA,
        )


def _auto_fail(kind: KindResult, todo_count: int) -> Optional[str]:
    if isinstance(kind, InvalidSuite):
        return kind.message
    if kind is RunKind.ONLY:
        return "Test.only was used"
    if kind is RunKind.SKIPPING:
        return "Test.skip was used"
    if todo_count > 0:
        return "Test.todo was used"
    return None


def _ms(duration: float) -> str:
    return str(int(round(duration)))


def _dump(payload: Dict[str, Any], schema: Dict[str, Any]) -> str:
    validate(instance=payload, schema=schema)
    return json.dumps(payload, ensure_ascii=False)
