"""Assertion failure records and their wire encoding."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Sequence, Tuple, Union

from verdict.errors import WireDecodeError


class InvalidReason(Enum):
    EMPTY_LIST = "EmptyList"
    NONPOSITIVE_FUZZ_COUNT = "NonpositiveFuzzCount"
    INVALID_FUZZER = "InvalidFuzzer"
    BAD_DESCRIPTION = "BadDescription"
    DUPLICATED_NAME = "DuplicatedName"
    COVERAGE_INSUFFICIENT = "CoverageInsufficient"
    COVERAGE_BUG = "CoverageBug"


@dataclass(frozen=True)
class Custom:
    pass


@dataclass(frozen=True)
class Equality:
    expected: str
    actual: str


@dataclass(frozen=True)
class Comparison:
    first: str
    second: str


@dataclass(frozen=True)
class ListDiff:
    expected: Tuple[str, ...]
    actual: Tuple[str, ...]


@dataclass(frozen=True)
class CollectionDiff:
    expected: str
    actual: str
    extra: Tuple[str, ...]
    missing: Tuple[str, ...]


@dataclass(frozen=True)
class Todo:
    pass


@dataclass(frozen=True)
class Invalid:
    reason: InvalidReason


Reason = Union[Custom, Equality, Comparison, ListDiff, CollectionDiff, Todo, Invalid]


@dataclass(frozen=True)
class Failure:
    """Why a single expectation did not hold."""

    given: Optional[str]
    description: str
    reason: Reason


def encode_reason(reason: Reason) -> Dict[str, Any]:
    if isinstance(reason, Custom):
        return {"type": "Custom", "data": None}
    if isinstance(reason, Equality):
        return {"type": "Equality", "data": {"expected": reason.expected, "actual": reason.actual}}
    if isinstance(reason, Comparison):
        return {"type": "Comparison", "data": {"first": reason.first, "second": reason.second}}
    if isinstance(reason, ListDiff):
        return {"type": "ListDiff", "data": {"expected": list(reason.expected), "actual": list(reason.actual)}}
    if isinstance(reason, CollectionDiff):
        return {
            "type": "CollectionDiff",
            "data": {
                "expected": reason.expected,
                "actual": reason.actual,
                "extra": list(reason.extra),
                "missing": list(reason.missing),
            },
        }
    if isinstance(reason, Todo):
        return {"type": "TODO", "data": None}
    if isinstance(reason, Invalid):
        return {"type": "Invalid", "data": reason.reason.value}
    raise TypeError(f"Unsupported failure reason {reason!r}")


def decode_reason(value: Any) -> Reason:
    tag, data = _tagged(value, "reason")
    if tag == "Custom":
        return Custom()
    if tag == "TODO":
        return Todo()
    if tag == "Equality":
        return Equality(expected=_text(data, "expected"), actual=_text(data, "actual"))
    if tag == "Comparison":
        return Comparison(first=_text(data, "first"), second=_text(data, "second"))
    if tag == "ListDiff":
        return ListDiff(expected=_texts(data, "expected"), actual=_texts(data, "actual"))
    if tag == "CollectionDiff":
        return CollectionDiff(
            expected=_text(data, "expected"),
            actual=_text(data, "actual"),
            extra=_texts(data, "extra"),
            missing=_texts(data, "missing"),
        )
    if tag == "Invalid":
        try:
            return Invalid(InvalidReason(data))
        except ValueError as exc:
            raise WireDecodeError(f"Unknown invalid reason {data!r}") from exc
    raise WireDecodeError(f"Unknown reason type {tag!r}")


def encode_failure(failure: Failure) -> Dict[str, Any]:
    return {
        "given": failure.given,
        "description": failure.description,
        "reason": encode_reason(failure.reason),
    }


def decode_failure(value: Any) -> Failure:
    if not isinstance(value, dict):
        raise WireDecodeError("Failure must be an object")
    given = value.get("given")
    if given is not None and not isinstance(given, str):
        raise WireDecodeError("Failure 'given' must be a string or null")
    if "reason" not in value:
        raise WireDecodeError("Failure is missing 'reason'")
    return Failure(
        given=given,
        description=_text(value, "description"),
        reason=decode_reason(value["reason"]),
    )


def _tagged(value: Any, what: str) -> Tuple[str, Any]:
    if not isinstance(value, dict) or not isinstance(value.get("type"), str):
        raise WireDecodeError(f"Expected a tagged {what} object, got {value!r}")
    return value["type"], value.get("data")


def _text(data: Any, key: str) -> str:
    if not isinstance(data, dict) or not isinstance(data.get(key), str):
        raise WireDecodeError(f"Missing string field '{key}'")
    return data[key]


def _texts(data: Any, key: str) -> Tuple[str, ...]:
    items = data.get(key) if isinstance(data, dict) else None
    if not isinstance(items, list) or not all(isinstance(item, str) for item in items):
        raise WireDecodeError(f"Field '{key}' must be a list of strings")
    return tuple(items)


def strings(values: Sequence[Any]) -> Tuple[str, ...]:
    """Render arbitrary values the way failure records store them."""

    return tuple(repr(value) for value in values)
