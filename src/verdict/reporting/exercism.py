"""Reporter for the exercism test runner interface, version 3."""
from __future__ import annotations

import json
import re
from typing import Any, Dict, Optional, Sequence

from jsonschema import validate

from verdict.core.kind import EXIT_SUCCESS, InvalidSuite, KindResult, exit_code
from verdict.core.results import Failed, TestResult, summarize

from .base import Reporter
from .failures import format_failed, outermost_first
from .schema import EXERCISM_SCHEMA

OUTPUT_LIMIT = 500
TRUNCATION_NOTICE = "... Output was truncated. Please limit to 500 chars"

_TASK_LABEL = re.compile(r"^\s*(\d+)\b")


class ExercismReporter(Reporter):
    """Emits the whole exercism document at the end of the run."""

    def on_begin(self, tests_count: int) -> Optional[str]:
        return None

    def on_result(self, result: TestResult) -> Optional[str]:
        return None

    def on_end(self, kind: KindResult, results: Sequence[TestResult]) -> Optional[str]:
        if isinstance(kind, InvalidSuite):
            payload: Dict[str, Any] = {
                "version": 3,
                "status": "error",
                "message": kind.message,
                "tests": [],
            }
        else:
            passed = exit_code(kind, summarize(results)) == EXIT_SUCCESS
            payload = {
                "version": 3,
                "status": "pass" if passed else "fail",
                "tests": [_test_entry(result) for result in results],
            }
        validate(instance=payload, schema=EXERCISM_SCHEMA)
        return json.dumps(payload, ensure_ascii=False, indent=2)


def _test_entry(result: TestResult) -> Dict[str, Any]:
    labels = outermost_first(result.labels)
    failed = isinstance(result, Failed)
    return {
        "name": labels[-1] if labels else "",
        "task_id": _task_id(labels[:-1]),
        "status": "fail" if failed else "pass",
        "message": format_failed(result) if failed else None,
        "output": _output(result.logs),
        "test_code": None,
    }


def _task_id(ancestors: Sequence[str]) -> Optional[int]:
    """Tasks are numbered groups, e.g. ``describe "2 - totals" [...]``."""

    for label in ancestors:
        match = _TASK_LABEL.match(label)
        if match:
            return int(match.group(1))
    return None


def _output(logs: Sequence[str]) -> Optional[str]:
    if not logs:
        return None
    text = "\n".join(logs)
    if len(text) <= OUTPUT_LIMIT:
        return text
    return text[: OUTPUT_LIMIT - len(TRUNCATION_NOTICE)] + TRUNCATION_NOTICE
