"""Turn a declarative suite into seeded, indexed runnable tests."""
from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple, Union

import numpy as np

from verdict.core import expectation as expect
from verdict.core.coverage import CoverageToReport, NoCoverage, coverage_count
from verdict.core.expectation import Expectation, Fail, Pass
from verdict.core.failure import Failure, Invalid, InvalidReason
from verdict.core.kind import InvalidSuite, RunKind
from verdict.core.results import TestResult, from_expectations

from .fuzzers import Fuzzer
from .tree import Batch, FuzzTest, Labeled, Only, Skipped, Test, TodoTest, UnitTest


@dataclass(frozen=True)
class Runner:
    """One runnable leaf test; labels are innermost first."""

    labels: Tuple[str, ...]
    run: Callable[[], List[Expectation]]


@dataclass(frozen=True)
class SeededRunners:
    kind: RunKind
    runners: Tuple[Runner, ...]


@dataclass(frozen=True)
class _Leaf:
    path: Tuple[str, ...]
    test: Union[UnitTest, FuzzTest, TodoTest]
    only: bool
    skipped: bool


def from_test(
    suite: Test,
    *,
    initial_seed: int,
    fuzz_runs: int,
    filter: Optional[str] = None,
) -> Union[SeededRunners, InvalidSuite]:
    """Classify ``suite`` and seed every runnable leaf.

    Seeds are drawn for every leaf in declaration order before any narrowing,
    so a test sees the same fuzz samples whatever filter is used.
    """

    if fuzz_runs < 1:
        return InvalidSuite(f"Test runner run count must be at least 1, not {fuzz_runs}")
    problems = _validate(suite, top_level=True)
    if problems:
        return InvalidSuite("\n".join(problems))
    leaves = list(_flatten(suite, (), only=False, skipped=False))
    master_rng = np.random.default_rng(initial_seed)
    seeds = [int(master_rng.integers(0, 2**32 - 1)) for _ in leaves]
    seeded = list(zip(leaves, seeds))

    if any(leaf.only for leaf in leaves):
        kind = RunKind.ONLY
        selected = [(leaf, seed) for leaf, seed in seeded if leaf.only and not leaf.skipped]
    else:
        kind = RunKind.SKIPPING if any(leaf.skipped for leaf in leaves) else RunKind.PLAIN
        selected = [
            (leaf, seed)
            for leaf, seed in seeded
            if not leaf.skipped and _matches(leaf, filter)
        ]
    runners = tuple(_make_runner(leaf, seed, fuzz_runs) for leaf, seed in selected)
    return SeededRunners(kind=kind, runners=runners)


def run(test_id: int, seeded: SeededRunners) -> Optional[TestResult]:
    """Run the test at ``test_id``; unknown ids produce no result."""

    if not 0 <= test_id < len(seeded.runners):
        return None
    runner = seeded.runners[test_id]
    return from_expectations(runner.labels, runner.run())


def _validate(test: Test, *, top_level: bool = False) -> List[str]:
    problems: List[str] = []
    if isinstance(test, (UnitTest, FuzzTest, TodoTest)):
        if not test.description.strip():
            problems.append(_invalid_message(InvalidReason.BAD_DESCRIPTION, test.description))
        if isinstance(test, FuzzTest) and not isinstance(test.fuzzer, Fuzzer):
            problems.append(_invalid_message(InvalidReason.INVALID_FUZZER, test.description))
        return problems
    if isinstance(test, (Only, Skipped)):
        return _validate(test.test, top_level=top_level)
    if isinstance(test, Labeled):
        if not test.label.strip():
            problems.append(_invalid_message(InvalidReason.BAD_DESCRIPTION, test.label))
        if not _has_leaf(test):
            problems.append(_invalid_message(InvalidReason.EMPTY_LIST, test.label))
            return problems
    elif isinstance(test, Batch):
        if top_level and not _has_leaf(test):
            problems.append(_invalid_message(InvalidReason.EMPTY_LIST, ""))
            return problems
    else:
        raise TypeError(f"Not a test: {test!r}")
    # Nested batches share their parent's namespace, which already checked them.
    if isinstance(test, Labeled) or top_level:
        seen: set = set()
        for name in _names(test.tests):
            if name in seen:
                problems.append(_invalid_message(InvalidReason.DUPLICATED_NAME, name))
            seen.add(name)
    for child in test.tests:
        problems.extend(_validate(child))
    return problems


def _invalid_message(reason: InvalidReason, name: str) -> str:
    if reason is InvalidReason.BAD_DESCRIPTION:
        return "This test has a blank description. Let's give it a useful one!"
    if reason is InvalidReason.EMPTY_LIST:
        if name:
            return f'This `describe "{name}"` has no tests in it. Let\'s give it some!'
        return "The test suite has no tests in it. Let's give it some!"
    if reason is InvalidReason.DUPLICATED_NAME:
        return (
            f"A test group contains multiple tests named '{name}'. "
            "Do some renaming so that tests have unique names."
        )
    if reason is InvalidReason.INVALID_FUZZER:
        return f"The fuzz test '{name}' was given something that is not a Fuzzer."
    return f"{reason.value}: {name}"


def _names(tests: Sequence[Test]) -> List[str]:
    names: List[str] = []
    for test in tests:
        while isinstance(test, (Only, Skipped)):
            test = test.test
        if isinstance(test, Batch):
            names.extend(_names(test.tests))
        elif isinstance(test, Labeled):
            names.append(test.label)
        else:
            names.append(test.description)
    return names


def _has_leaf(test: Test) -> bool:
    if isinstance(test, (Only, Skipped)):
        return _has_leaf(test.test)
    if isinstance(test, (Labeled, Batch)):
        return any(_has_leaf(child) for child in test.tests)
    return True


def _flatten(test: Test, path: Tuple[str, ...], *, only: bool, skipped: bool):
    if isinstance(test, Only):
        yield from _flatten(test.test, path, only=True, skipped=skipped)
    elif isinstance(test, Skipped):
        yield from _flatten(test.test, path, only=only, skipped=True)
    elif isinstance(test, Labeled):
        for child in test.tests:
            yield from _flatten(child, path + (test.label,), only=only, skipped=skipped)
    elif isinstance(test, Batch):
        for child in test.tests:
            yield from _flatten(child, path, only=only, skipped=skipped)
    else:
        yield _Leaf(path=path + (test.description,), test=test, only=only, skipped=skipped)


def _matches(leaf: _Leaf, filter: Optional[str]) -> bool:
    if not filter:
        return True
    return any(filter in label for label in leaf.path)


def _make_runner(leaf: _Leaf, seed: int, fuzz_runs: int) -> Runner:
    labels = tuple(reversed(leaf.path))
    test = leaf.test
    if isinstance(test, TodoTest):
        return Runner(labels=labels, run=lambda: [expect.todo(test.description)])
    if isinstance(test, UnitTest):
        return Runner(labels=labels, run=lambda: [_call(test.body)])
    return Runner(labels=labels, run=lambda: _run_fuzz(test, seed, fuzz_runs))


def _run_fuzz(test: FuzzTest, seed: int, fuzz_runs: int) -> List[Expectation]:
    rng = np.random.default_rng(seed)
    counts: Counter = Counter()
    for _ in range(fuzz_runs):
        try:
            value = test.fuzzer.generate(rng)
        except Exception as exc:
            failure = Failure(
                given=None,
                description=f"Fuzzer {test.fuzzer.name} raised {type(exc).__name__}: {exc}",
                reason=Invalid(InvalidReason.INVALID_FUZZER),
            )
            return [Fail(failure=failure)]
        if test.classify is not None:
            try:
                labels = tuple(test.classify(value))
            except Exception as exc:
                failed = expect.fail(f"Classifier raised {type(exc).__name__}: {exc}")
                return [expect.with_given(failed, repr(value))]
            counts[labels] += 1
        outcome = _call(test.body, value)
        if isinstance(outcome, Fail):
            return [expect.with_given(outcome, repr(value))]
    if test.classify is None:
        return [Pass(coverage=NoCoverage())]
    return [Pass(coverage=CoverageToReport(coverage_count=coverage_count(counts), runs_elapsed=fuzz_runs))]


def _call(body: Callable[..., Expectation], *args) -> Expectation:
    try:
        outcome = body(*args)
    except Exception as exc:
        return expect.fail(f"Test raised {type(exc).__name__}: {exc}")
    if not isinstance(outcome, (Pass, Fail)):
        return expect.fail(f"Test returned {outcome!r} instead of an expectation")
    return outcome
