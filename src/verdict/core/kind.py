"""Run classification and the decisions derived from it."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

from verdict.errors import WireDecodeError

from .results import Summary


class RunKind(Enum):
    PLAIN = "Plain"
    ONLY = "Only"
    SKIPPING = "Skipping"


@dataclass(frozen=True)
class InvalidSuite:
    """The suite could not be run; ``message`` explains why."""

    message: str


KindResult = Union[RunKind, InvalidSuite]

EXIT_SUCCESS = 0
EXIT_FAILURE = 2


class Status(Enum):
    PASSED = "PASSED"
    FAILED = "FAILED"
    INCOMPLETE = "INCOMPLETE"
    INVALID = "INVALID"


@dataclass(frozen=True)
class Headline:
    status: Status
    reason: str = ""

    def text(self) -> str:
        if self.status is Status.INVALID:
            return f"TEST RUN INVALID: {self.reason}"
        if self.reason:
            return f"TEST RUN {self.status.value} because {self.reason}"
        return f"TEST RUN {self.status.value}"


def status_headline(kind: KindResult, summary: Summary) -> Headline:
    if isinstance(kind, InvalidSuite):
        return Headline(Status.INVALID, kind.message)
    if summary.failed_count > 0:
        return Headline(Status.FAILED)
    if kind is RunKind.ONLY:
        return Headline(Status.INCOMPLETE, "Test.only was used")
    if kind is RunKind.SKIPPING:
        return Headline(Status.INCOMPLETE, "Test.skip was used")
    if summary.todo_count == 1:
        return Headline(Status.INCOMPLETE, "there is 1 TODO remaining")
    if summary.todo_count > 1:
        return Headline(Status.INCOMPLETE, f"there are {summary.todo_count} TODOs remaining")
    return Headline(Status.PASSED)


def exit_code(kind: KindResult, summary: Summary) -> int:
    """Only a plain run without failures or todos counts as a clean pass."""

    if kind is RunKind.PLAIN and summary.failed_count + summary.todo_count == 0:
        return EXIT_SUCCESS
    return EXIT_FAILURE


def encode_kind(kind: KindResult) -> str:
    if isinstance(kind, InvalidSuite):
        return f"Invalid:{kind.message}"
    return kind.value


def decode_kind(text: str) -> KindResult:
    if text.startswith("Invalid:"):
        return InvalidSuite(text[len("Invalid:"):])
    try:
        return RunKind(text)
    except ValueError as exc:
        raise WireDecodeError(f"Unknown run kind {text!r}") from exc
