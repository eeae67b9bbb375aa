from __future__ import annotations

import json
import textwrap
import xml.etree.ElementTree as ET

import pytest
from click.testing import CliRunner

from verdict import __version__
from verdict.cli.main import cli, main

PASSING = """
from verdict.core import expectation as expect
from verdict.suite import describe, test

suite = describe("Math", [
    test("adds", lambda: expect.equal(2, 1 + 1)),
    test("multiplies", lambda: expect.equal(6, 2 * 3)),
])
"""

FAILING = """
from verdict.core import expectation as expect
from verdict.suite import describe, test, todo

suite = describe("Text", [
    test("upper", lambda: expect.equal("FOO", "foo".lower())),
    todo("handle unicode"),
])
"""

INVALID = """
from verdict.core import expectation as expect
from verdict.suite import describe, test

suite = describe("Dupes", [
    test("same", expect.pass_),
    test("same", expect.pass_),
])
"""


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def suite_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    def write(name: str, source: str) -> str:
        path = tmp_path / name
        path.write_text(textwrap.dedent(source), encoding="utf-8")
        return str(path)

    return write


def test_version_flag(runner) -> None:
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert result.output.strip() == f"verdict {__version__}"


def test_run_help_lists_options(runner) -> None:
    result = runner.invoke(cli, ["run", "-h"])
    assert result.exit_code == 0
    for option in ("--seed", "--fuzz", "--filter", "--report", "--workers", "--no-color"):
        assert option in result.output


def test_passing_suite_exits_cleanly(runner, suite_file) -> None:
    path = suite_file("math_suite.py", PASSING)
    result = runner.invoke(cli, ["run", path, "--seed", "3", "--no-color"])
    assert result.exit_code == 0, result.output
    assert "Running 2 tests" in result.output
    assert f"--seed 3 --fuzz 100 {path}" in result.output
    assert "TEST RUN PASSED" in result.output


def test_failing_suite_reports_failure_and_todo(runner, suite_file) -> None:
    path = suite_file("text_suite.py", FAILING)
    result = runner.invoke(cli, ["run", path, "--seed", "3", "--no-color"])
    assert result.exit_code == 2
    assert "✗ upper" in result.output
    assert "◦ TODO handle unicode" in result.output
    assert "TEST RUN FAILED" in result.output
    assert "Todo:     1" in result.output


def test_json_report_is_line_delimited(runner, suite_file) -> None:
    path = suite_file("math_suite.py", PASSING)
    result = runner.invoke(cli, ["run", path, "--seed", "3", "--report", "json", "--workers", "2"])
    assert result.exit_code == 0
    events = [json.loads(line) for line in result.stdout.splitlines() if line.strip()]
    assert events[0]["event"] == "runStart"
    assert events[0]["initialSeed"] == "3"
    assert events[0]["paths"] == [path]
    completed = [event for event in events if event["event"] == "testCompleted"]
    assert sorted(event["labels"][-1] for event in completed) == ["adds", "multiplies"]
    assert completed[0]["labels"][:2] == ["math_suite", "Math"]
    assert events[-1] == {"event": "runComplete", "passed": "2", "failed": "0", "duration": events[-1]["duration"], "autoFail": None}


def test_junit_report(runner, suite_file) -> None:
    path = suite_file("text_suite.py", FAILING)
    result = runner.invoke(cli, ["run", path, "--report", "junit"])
    assert result.exit_code == 2
    body = result.stdout.split("\n", 1)[1]
    suite = ET.fromstring(body)
    assert suite.get("tests") == "2"
    assert suite.get("failures") == "1"
    assert len(suite.findall("testcase/skipped")) == 1


def test_filter_narrows_run(runner, suite_file) -> None:
    path = suite_file("math_suite.py", PASSING)
    result = runner.invoke(cli, ["run", path, "--filter", "multi", "--report", "json"])
    events = [json.loads(line) for line in result.stdout.splitlines() if line.strip()]
    assert events[0]["testCount"] == "1"
    assert result.exit_code == 0


def test_invalid_suite_exits_with_failure(runner, suite_file) -> None:
    path = suite_file("dupes.py", INVALID)
    result = runner.invoke(cli, ["run", path, "--no-color"])
    assert result.exit_code == 2
    assert "Your tests are invalid:" in result.output
    assert "same" in result.output


def test_nonpositive_fuzz_runs_is_invalid(runner, suite_file) -> None:
    path = suite_file("math_suite.py", PASSING)
    result = runner.invoke(cli, ["run", path, "--fuzz", "0", "--report", "exercism"])
    assert result.exit_code == 2
    payload = json.loads(result.stdout)
    assert payload["status"] == "error"
    assert "at least 1, not 0" in payload["message"]


def test_missing_suite_is_a_usage_error(runner, suite_file) -> None:
    result = runner.invoke(cli, ["run", "nowhere.py"])
    assert result.exit_code == 1
    assert "Suite source file not found" in result.output


def test_no_suites_is_a_usage_error(runner, suite_file) -> None:
    result = runner.invoke(cli, ["run"])
    assert result.exit_code == 1
    assert "No test suites given" in result.output


def test_config_file_supplies_suites(runner, suite_file, tmp_path) -> None:
    path = suite_file("math_suite.py", PASSING)
    (tmp_path / "verdict.yaml").write_text(f"seed: 8\nreport: json\nsuites:\n  - {path}\n", encoding="utf-8")
    result = runner.invoke(cli, ["run"])
    assert result.exit_code == 0
    assert json.loads(result.stdout.splitlines()[0])["initialSeed"] == "8"


def test_main_returns_exit_code(suite_file, capsys) -> None:
    path = suite_file("math_suite.py", PASSING)
    assert main(["run", path, "--seed", "1", "--report", "junit"]) == 0
    assert "<testsuite" in capsys.readouterr().out


def test_suite_raising_at_import_is_a_usage_error(runner, suite_file) -> None:
    path = suite_file("broken.py", "raise RuntimeError('boom at import')\n")
    result = runner.invoke(cli, ["run", path])
    assert result.exit_code == 1
    assert not isinstance(result.exception, RuntimeError)
    assert "boom at import" in result.output
