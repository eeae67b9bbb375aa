from __future__ import annotations

import itertools
import json

import pytest

from verdict.core import expectation as expect
from verdict.core.coverage import (
    CoverageCheckFailed,
    CoverageCheckSucceeded,
    CoverageToReport,
    NoCoverage,
    coverage_count,
)
from verdict.core.expectation import Fail, Pass
from verdict.core.failure import (
    CollectionDiff,
    Comparison,
    Custom,
    Equality,
    Failure,
    Invalid,
    InvalidReason,
    ListDiff,
    Todo,
    decode_failure,
    encode_failure,
)
from verdict.core.results import (
    Failed,
    Passed,
    Summary,
    decode_result,
    dumps_result,
    encode_result,
    from_expectations,
    loads_result,
    summarize,
    with_run_details,
)
from verdict.errors import WireDecodeError


def test_all_passing_expectations_yield_passed() -> None:
    coverage = CoverageToReport(coverage_count=coverage_count({("small",): 3}), runs_elapsed=3)
    result = from_expectations(["works", "Group"], [Pass(), Pass(coverage=coverage)])
    assert isinstance(result, Passed)
    assert result.labels == ("works", "Group")
    assert result.coverage_reports == (coverage, NoCoverage())
    assert result.duration == 0.0
    assert result.logs == ()


def test_empty_expectation_list_is_a_pass() -> None:
    assert from_expectations(["nothing"], []) == Passed(labels=("nothing",))


def test_any_todo_or_failure_yields_failed() -> None:
    todo_only = from_expectations(["t"], [expect.pass_(), expect.todo("later")])
    failure_only = from_expectations(["f"], [expect.equal(1, 2)])
    assert isinstance(todo_only, Failed)
    assert todo_only.todos == ("later",)
    assert todo_only.failures == ()
    assert isinstance(failure_only, Failed)
    assert failure_only.failures[0].reason == Equality(expected="1", actual="2")
    assert failure_only.coverage_reports == (NoCoverage(),)


def test_partitions_are_in_reverse_evaluation_order() -> None:
    result = from_expectations(
        ["order"],
        [expect.fail("first"), expect.todo("a"), expect.fail("second"), expect.todo("b")],
    )
    assert isinstance(result, Failed)
    assert result.todos == ("b", "a")
    assert [failure.description for failure in result.failures] == ["second", "first"]


def test_with_run_details_returns_new_value() -> None:
    original = Passed(labels=("x",))
    updated = with_run_details(original, 12.5, ["line"])
    assert original.duration == 0.0
    assert updated == Passed(labels=("x",), duration=12.5, logs=("line",))


def test_summary_counts(passed_result, failed_result, todo_result) -> None:
    both = Failed(
        labels=("both",),
        duration=2.0,
        todos=("unfinished",),
        failures=(Failure(given=None, description="boom", reason=Custom()),),
    )
    summary = summarize([passed_result, failed_result, todo_result, both])
    assert summary == Summary(total_duration=11.0, passed_count=1, failed_count=2, todo_count=2)


def test_summary_of_nothing_is_zero() -> None:
    assert summarize([]) == Summary()


def test_summary_is_order_independent(passed_result, failed_result, todo_result) -> None:
    results = [passed_result, failed_result, todo_result, passed_result]
    expected = summarize(results)
    for permutation in itertools.permutations(results):
        assert summarize(permutation) == expected


ALL_REASONS = [
    Custom(),
    Equality(expected="1", actual="2"),
    Comparison(first="3", second="4"),
    ListDiff(expected=("1", "2"), actual=("1",)),
    CollectionDiff(expected="{1, 2}", actual="{2, 3}", extra=("3",), missing=("1",)),
    Todo(),
] + [Invalid(reason) for reason in InvalidReason]

ALL_COVERAGE = [
    NoCoverage(),
    CoverageToReport(coverage_count=coverage_count({("a", "b"): 2, (): 1}), runs_elapsed=3),
    CoverageCheckSucceeded(coverage_count=coverage_count({("a",): 5}), runs_elapsed=5),
    CoverageCheckFailed(
        coverage_count=coverage_count({("odd",): 1}),
        runs_elapsed=10,
        bad_label="odd",
        bad_label_percentage=10.0,
        expected_coverage="at least 40%",
    ),
]


@pytest.mark.parametrize("reason", ALL_REASONS)
@pytest.mark.parametrize("given", [None, "42"])
def test_failure_codec_is_lossless(reason, given) -> None:
    failure = Failure(given=given, description="desc", reason=reason)
    assert decode_failure(json.loads(json.dumps(encode_failure(failure)))) == failure


def test_result_codec_is_lossless() -> None:
    failures = tuple(Failure(given=None, description=str(i), reason=r) for i, r in enumerate(ALL_REASONS))
    results = [
        Passed(labels=(), coverage_reports=tuple(ALL_COVERAGE)),
        Passed(labels=("a", "b"), duration=1.5, logs=("x", "y")),
        Failed(labels=("c",), duration=2.0, todos=("t",), failures=failures, coverage_reports=tuple(ALL_COVERAGE)),
        Failed(labels=("d",)),
    ]
    for result in results:
        assert loads_result(dumps_result(result)) == result
        assert decode_result(encode_result(result)) == result


def test_encoded_result_is_tagged(failed_result) -> None:
    payload = encode_result(failed_result)
    assert payload["type"] == "Failed"
    assert payload["failures"][0]["reason"] == {
        "type": "Equality",
        "data": {"expected": "'foo'", "actual": "'bar'"},
    }


def test_coverage_counts_are_key_value_pairs() -> None:
    report = CoverageToReport(coverage_count=coverage_count({("x", "y"): 4}), runs_elapsed=4)
    payload = encode_result(Passed(labels=("p",), coverage_reports=(report,)))
    assert payload["coverageReports"][0]["data"]["coverageCount"] == [[["x", "y"], 4]]


@pytest.mark.parametrize(
    "text",
    [
        "not json",
        '{"type": "Skipped", "labels": [], "logs": [], "coverageReports": []}',
        '{"type": "Passed", "labels": "nope", "logs": [], "coverageReports": []}',
        '{"type": "Failed", "labels": [], "logs": [], "coverageReports": [], "todos": []}',
        '{"type": "Failed", "labels": [], "logs": [], "coverageReports": [], "todos": [],'
        ' "failures": [{"description": "d", "reason": {"type": "Nope", "data": null}}]}',
    ],
)
def test_malformed_wire_results_raise(text: str) -> None:
    with pytest.raises(WireDecodeError):
        loads_result(text)


def test_fail_expectation_keeps_given() -> None:
    outcome = expect.with_given(expect.less_than(3, 5), "5")
    assert isinstance(outcome, Fail)
    assert outcome.failure.given == "5"
    assert outcome.failure.reason == Comparison(first="5", second="3")
