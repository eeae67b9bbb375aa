from __future__ import annotations

import json
import threading

import pytest

from verdict.core import expectation as expect
from verdict.core import log
from verdict.core.kind import InvalidSuite, RunKind
from verdict.core.results import Failed, Passed
from verdict.reporting import JsonReporter
from verdict.runner import LocalBoundary, MemorySink, RawResult, RunCoordinator, State, dispatch
from verdict.suite import fuzzers, runners, tree


def _logging_body(name):
    def body():
        log(f"running {name}")
        return expect.pass_()

    return body


def _suite():
    return tree.describe(
        "Dispatch",
        [
            tree.test("first", _logging_body("first")),
            tree.test("second", lambda: expect.equal(1, 2)),
            tree.fuzz(fuzzers.integers(0, 10), "third", lambda n: expect.at_most(10, n)),
        ],
    )


@pytest.mark.parametrize("workers", [1, 4])
def test_dispatch_runs_every_test(reporter_config, workers) -> None:
    seeded = runners.from_test(_suite(), initial_seed=9, fuzz_runs=20)
    sink = MemorySink()
    coordinator = RunCoordinator(JsonReporter(reporter_config), sink)
    dispatch(LocalBoundary(seeded), coordinator, workers=workers)
    assert sink.finish_calls == 1
    assert sink.exit_code == 2
    assert sink.tests_count == 3
    by_name = {result.labels[0]: result for result in coordinator.results}
    assert isinstance(by_name["first"], Passed)
    assert by_name["first"].logs == ("running first",)
    assert isinstance(by_name["second"], Failed)
    assert isinstance(by_name["third"], Passed)
    assert json.loads(sink.writes[-1])["event"] == "runComplete"


def test_local_boundary_reports_kind_and_count() -> None:
    boundary = LocalBoundary(runners.from_test(tree.only(tree.test("a", expect.pass_)), initial_seed=0, fuzz_runs=1))
    assert boundary.ask_tests_count() == ("Only", 1)
    raw = boundary.run_test(0)
    assert isinstance(raw, RawResult)
    assert raw.test_id == 0
    assert raw.duration >= 0
    assert boundary.run_test(1) is None


def test_invalid_suite_never_runs_tests(reporter_config) -> None:
    invalid = InvalidSuite("describe \"Empty\" has no tests")
    boundary = LocalBoundary(invalid)
    assert boundary.ask_tests_count()[1] == 0
    assert boundary.run_test(0) is None
    sink = MemorySink()
    coordinator = RunCoordinator(JsonReporter(reporter_config), sink)
    dispatch(boundary, coordinator, workers=2)
    assert coordinator.kind == invalid
    assert sink.exit_code == 2
    assert json.loads(sink.writes[0])["autoFail"] == invalid.message


class _CountingBoundary:
    """Boundary returning canned passing results, optionally with gaps."""

    def __init__(self, missing=()):
        self.missing = set(missing)

    def ask_tests_count(self):
        return "Plain", 3

    def run_test(self, test_id):
        if test_id in self.missing:
            return None
        return RawResult(duration=1.0, result=json.dumps(
            {"type": "Passed", "labels": [f"t{test_id}"], "duration": 0, "logs": [], "coverageReports": []}
        ), test_id=test_id)


def test_coordinator_is_driven_from_calling_thread(reporter_config, monkeypatch) -> None:
    sink = MemorySink()
    coordinator = RunCoordinator(JsonReporter(reporter_config), sink)
    threads = set()
    original = coordinator.receive

    def recording_receive(raw):
        threads.add(threading.current_thread())
        original(raw)

    monkeypatch.setattr(coordinator, "receive", recording_receive)
    dispatch(_CountingBoundary(), coordinator, workers=3)
    assert threads == {threading.current_thread()}
    assert sink.exit_code == 0


def test_missing_results_leave_run_unfinished(reporter_config) -> None:
    sink = MemorySink()
    coordinator = RunCoordinator(JsonReporter(reporter_config), sink)
    dispatch(_CountingBoundary(missing={1}), coordinator)
    assert coordinator.kind is RunKind.PLAIN
    assert len(coordinator.results) == 2
    assert not sink.finished


class _CrashingBoundary(_CountingBoundary):
    def run_test(self, test_id):
        if test_id == 1:
            raise RuntimeError("worker blew up")
        return super().run_test(test_id)


@pytest.mark.parametrize("workers", [1, 2])
def test_crashing_worker_still_finishes_run(reporter_config, workers) -> None:
    sink = MemorySink()
    coordinator = RunCoordinator(JsonReporter(reporter_config), sink)
    dispatch(_CrashingBoundary(), coordinator, workers=workers)
    assert coordinator.dropped == 1
    assert len(coordinator.results) == 2
    assert sink.finish_calls == 1
    assert sink.exit_code == 2
    assert json.loads(sink.writes[-1])["event"] == "runComplete"


def test_raising_classifier_does_not_stop_other_tests(reporter_config) -> None:
    def classify(value):
        raise ValueError("bad classify")

    suite = tree.describe(
        "Mixed",
        [
            tree.fuzz(fuzzers.integers(0, 3), "classified", lambda n: expect.pass_(), classify=classify),
            tree.test("plain", expect.pass_),
        ],
    )
    seeded = runners.from_test(suite, initial_seed=1, fuzz_runs=10)
    sink = MemorySink()
    coordinator = RunCoordinator(JsonReporter(reporter_config), sink)
    dispatch(LocalBoundary(seeded), coordinator, workers=2)
    assert coordinator.state is State.FINISHED
    by_name = {result.labels[0]: result for result in coordinator.results}
    assert isinstance(by_name["classified"], Failed)
    assert isinstance(by_name["plain"], Passed)
    assert sink.exit_code == 2
