"""Expectation outcomes consumed by the result fold."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Optional, Union

from .coverage import CoverageReport, NoCoverage
from .failure import (
    CollectionDiff,
    Comparison,
    Custom,
    Equality,
    Failure,
    ListDiff,
    Reason,
    Todo,
    strings,
)


@dataclass(frozen=True)
class Pass:
    coverage: CoverageReport = field(default_factory=NoCoverage)


@dataclass(frozen=True)
class Fail:
    failure: Failure
    coverage: CoverageReport = field(default_factory=NoCoverage)


Expectation = Union[Pass, Fail]


def is_todo(expectation: Expectation) -> bool:
    return isinstance(expectation, Fail) and isinstance(expectation.failure.reason, Todo)


def pass_() -> Expectation:
    return Pass()


def fail(description: str) -> Expectation:
    return _failed(description, Custom())


def todo(description: str) -> Expectation:
    return _failed(description, Todo())


def ok(condition: bool, description: str = "Expect.ok") -> Expectation:
    return Pass() if condition else fail(description)


def equal(expected: Any, actual: Any) -> Expectation:
    if expected == actual:
        return Pass()
    return _failed("Expect.equal", Equality(expected=repr(expected), actual=repr(actual)))


def not_equal(expected: Any, actual: Any) -> Expectation:
    if expected != actual:
        return Pass()
    return _failed("Expect.notEqual", Equality(expected=repr(expected), actual=repr(actual)))


def less_than(bound: Any, actual: Any) -> Expectation:
    return _compare("Expect.lessThan", actual < bound, actual, bound)


def at_most(bound: Any, actual: Any) -> Expectation:
    return _compare("Expect.atMost", actual <= bound, actual, bound)


def greater_than(bound: Any, actual: Any) -> Expectation:
    return _compare("Expect.greaterThan", actual > bound, actual, bound)


def at_least(bound: Any, actual: Any) -> Expectation:
    return _compare("Expect.atLeast", actual >= bound, actual, bound)


def equal_lists(expected: Iterable[Any], actual: Iterable[Any]) -> Expectation:
    expected_items, actual_items = list(expected), list(actual)
    if expected_items == actual_items:
        return Pass()
    return _failed(
        "Expect.equalLists",
        ListDiff(expected=strings(expected_items), actual=strings(actual_items)),
    )


def equal_sets(expected: Iterable[Any], actual: Iterable[Any]) -> Expectation:
    expected_set, actual_set = set(expected), set(actual)
    if expected_set == actual_set:
        return Pass()
    return _failed(
        "Expect.equalSets",
        CollectionDiff(
            expected=repr(_sorted(expected_set)),
            actual=repr(_sorted(actual_set)),
            extra=strings(_sorted(actual_set - expected_set)),
            missing=strings(_sorted(expected_set - actual_set)),
        ),
    )


def with_given(expectation: Expectation, given: Optional[str]) -> Expectation:
    """Attach the generated input that produced a failing expectation."""

    if isinstance(expectation, Pass):
        return expectation
    failure = expectation.failure
    return Fail(
        failure=Failure(given=given, description=failure.description, reason=failure.reason),
        coverage=expectation.coverage,
    )


def _compare(description: str, holds: bool, actual: Any, bound: Any) -> Expectation:
    if holds:
        return Pass()
    return _failed(description, Comparison(first=repr(actual), second=repr(bound)))


def _failed(description: str, reason: Reason) -> Expectation:
    return Fail(failure=Failure(given=None, description=description, reason=reason))


def _sorted(values: set) -> list:
    try:
        return sorted(values)
    except TypeError:
        return sorted(values, key=repr)
