import pytest

from verdict.core.failure import Equality, Failure
from verdict.core.results import Failed, Passed
from verdict.logging_config import configure_logging
from verdict.reporting import ReporterConfig


@pytest.fixture(autouse=True)
def quiet_logging() -> None:
    """Reset diagnostics to the current stderr at warning level for each test."""

    configure_logging()


@pytest.fixture
def reporter_config() -> ReporterConfig:
    return ReporterConfig(seed=42, fuzz_runs=100, globs=("tests/*.py",), paths=("tests/example.py",))


@pytest.fixture
def passed_result() -> Passed:
    return Passed(labels=("adds numbers", "Math"), duration=3.0)


@pytest.fixture
def failed_result() -> Failed:
    failure = Failure(given=None, description="Expect.equal", reason=Equality(expected="'foo'", actual="'bar'"))
    return Failed(labels=("compares strings", "Text"), duration=5.0, logs=("checking",), failures=(failure,))


@pytest.fixture
def todo_result() -> Failed:
    return Failed(labels=("later", "Backlog"), duration=1.0, todos=("write this test",))
