"""Declarative test suite tree."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional, Sequence, Tuple, Union

from verdict.core.expectation import Expectation

from .fuzzers import Fuzzer

ClassifyFn = Callable[[Any], Sequence[str]]


@dataclass(frozen=True)
class UnitTest:
    description: str
    body: Callable[[], Expectation]


@dataclass(frozen=True)
class FuzzTest:
    description: str
    fuzzer: Any
    body: Callable[[Any], Expectation]
    classify: Optional[ClassifyFn] = None


@dataclass(frozen=True)
class TodoTest:
    description: str


@dataclass(frozen=True)
class Labeled:
    label: str
    tests: Tuple["Test", ...]


@dataclass(frozen=True)
class Batch:
    tests: Tuple["Test", ...]


@dataclass(frozen=True)
class Only:
    test: "Test"


@dataclass(frozen=True)
class Skipped:
    test: "Test"


Test = Union[UnitTest, FuzzTest, TodoTest, Labeled, Batch, Only, Skipped]


def test(description: str, body: Callable[[], Expectation]) -> Test:
    return UnitTest(description=description, body=body)


def fuzz(
    fuzzer: Fuzzer,
    description: str,
    body: Callable[[Any], Expectation],
    *,
    classify: Optional[ClassifyFn] = None,
) -> Test:
    """Property test run against ``fuzz_runs`` values drawn from ``fuzzer``.

    ``classify`` maps each generated value to labels; their distribution is
    attached to the result as a coverage report.
    """

    return FuzzTest(description=description, fuzzer=fuzzer, body=body, classify=classify)


def todo(description: str) -> Test:
    return TodoTest(description=description)


def describe(label: str, tests: Sequence[Test]) -> Test:
    return Labeled(label=label, tests=tuple(tests))


def concat(tests: Sequence[Test]) -> Test:
    return Batch(tests=tuple(tests))


def only(test: Test) -> Test:
    return Only(test=test)


def skip(test: Test) -> Test:
    return Skipped(test=test)


# Keep pytest from collecting the builder as a test function.
test.__test__ = False  # type: ignore[attr-defined]
