"""Plain-text rendering of failures shared by the reporters."""
from __future__ import annotations

from typing import List, Sequence

from verdict.core.failure import (
    CollectionDiff,
    Comparison,
    Custom,
    Equality,
    Failure,
    Invalid,
    ListDiff,
    Todo,
)
from verdict.core.results import Failed


def format_failure(failure: Failure) -> str:
    body = _format_reason(failure)
    if failure.given is not None:
        return f"Given {failure.given}\n\n{body}"
    return body


def format_failed(result: Failed) -> str:
    """Todos hide the failures of a result until they are resolved."""

    if result.todos:
        return "\n".join(f"TODO: {todo}" for todo in result.todos)
    return "\n\n".join(format_failure(failure) for failure in result.failures)


def outermost_first(labels: Sequence[str]) -> List[str]:
    return list(reversed(labels))


def _format_reason(failure: Failure) -> str:
    reason = failure.reason
    if isinstance(reason, (Custom, Invalid)):
        return failure.description
    if isinstance(reason, Todo):
        return f"TODO: {failure.description}"
    if isinstance(reason, Equality):
        return _comparison_box(reason.actual, failure.description, reason.expected)
    if isinstance(reason, Comparison):
        return _comparison_box(reason.first, failure.description, reason.second)
    if isinstance(reason, ListDiff):
        return _list_diff(failure.description, reason)
    if isinstance(reason, CollectionDiff):
        lines = [_comparison_box(reason.actual, failure.description, reason.expected), ""]
        if reason.extra:
            lines.append(f"These items are extra: [{', '.join(reason.extra)}]")
        if reason.missing:
            lines.append(f"These items are missing: [{', '.join(reason.missing)}]")
        return "\n".join(lines).rstrip()
    raise TypeError(f"Unsupported failure reason {reason!r}")


def _comparison_box(top: str, description: str, bottom: str) -> str:
    return "\n".join([top, "╷", f"│ {description}", "╵", bottom])


def _list_diff(description: str, diff: ListDiff) -> str:
    expected = f"[{', '.join(diff.expected)}]"
    actual = f"[{', '.join(diff.actual)}]"
    lines = [_comparison_box(actual, description, expected), ""]
    if len(diff.expected) != len(diff.actual):
        lines.append(
            f"Expected {len(diff.expected)} elements but got {len(diff.actual)}."
        )
    for index, (want, got) in enumerate(zip(diff.expected, diff.actual)):
        if want != got:
            lines.append(f"The first diff is at index {index}: it was `{got}`, but `{want}` was expected.")
            break
    return "\n".join(lines).rstrip()
