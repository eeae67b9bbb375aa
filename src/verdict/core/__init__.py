"""Core result model exposed at the package level."""
from .capture import capture_logs, log
from .coverage import (
    CoverageCheckFailed,
    CoverageCheckSucceeded,
    CoverageReport,
    CoverageToReport,
    NoCoverage,
)
from .expectation import Expectation, Fail, Pass
from .failure import Failure, InvalidReason, Reason
from .kind import InvalidSuite, KindResult, RunKind, exit_code, status_headline
from .results import Failed, Passed, Summary, TestResult, from_expectations, summarize

__all__ = [
    "CoverageCheckFailed",
    "CoverageCheckSucceeded",
    "CoverageReport",
    "CoverageToReport",
    "Expectation",
    "Fail",
    "Failed",
    "Failure",
    "InvalidReason",
    "InvalidSuite",
    "KindResult",
    "NoCoverage",
    "Pass",
    "Passed",
    "Reason",
    "RunKind",
    "Summary",
    "TestResult",
    "capture_logs",
    "exit_code",
    "from_expectations",
    "log",
    "status_headline",
    "summarize",
]
