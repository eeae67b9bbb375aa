"""Message-driven coordinator collecting results and deciding the outcome."""
from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Deque, List, Optional, Protocol, Sequence, Set, Tuple, Union

from verdict.core.kind import EXIT_FAILURE, InvalidSuite, KindResult, exit_code
from verdict.core.results import TestResult, decode_result, loads_result, summarize, with_run_details
from verdict.errors import WireDecodeError
from verdict.logging_config import get_logger
from verdict.reporting.base import Reporter

logger = get_logger(__name__)


class State(Enum):
    IDLE = "idle"
    AWAITING_RESULTS = "awaiting_results"
    SUMMARIZING = "summarizing"
    FINISHED = "finished"
    INVALID_SUITE = "invalid_suite"


@dataclass(frozen=True)
class RawResult:
    """A result as it arrives from the execution boundary.

    ``result`` is the wire form of a test result (JSON text or the decoded
    JSON object); ``duration`` is in milliseconds.
    """

    duration: float
    result: Any
    logs: Sequence[str] = field(default_factory=tuple)
    test_id: Optional[int] = None


class Sink(Protocol):
    def write(self, text: str) -> None:
        ...

    def signal_finished(self, exit_code: int, tests_count: int) -> None:
        ...


@dataclass(frozen=True)
class _Restart:
    kind: KindResult
    tests_count: int


@dataclass(frozen=True)
class _Incoming:
    raw: RawResult


@dataclass(frozen=True)
class _Lost:
    test_id: Optional[int]
    error: str


@dataclass(frozen=True)
class _Summarize:
    generation: int


@dataclass(frozen=True)
class _Finish:
    generation: int


_Message = Union[_Restart, _Incoming, _Lost, _Summarize, _Finish]


class RunCoordinator:
    """Serializes every state change of a run through one message queue.

    Phase advances (summarize, finish) are queued behind the message that
    triggered them, so output written for that message reaches the sink
    first. Calls must come from a single thread.
    """

    def __init__(self, reporter: Reporter, sink: Sink) -> None:
        self._reporter = reporter
        self._sink = sink
        self._queue: Deque[_Message] = deque()
        self._draining = False
        self._generation = 0
        self.state = State.IDLE
        self.kind: Optional[KindResult] = None
        self.tests_count = 0
        self.dropped = 0
        self._results: List[TestResult] = []
        self._seen_ids: Set[int] = set()

    @property
    def results(self) -> Tuple[TestResult, ...]:
        return tuple(self._results)

    def restart(self, kind: KindResult, tests_count: int) -> None:
        self._post(_Restart(kind=kind, tests_count=tests_count))

    def receive(self, raw: RawResult) -> None:
        self._post(_Incoming(raw=raw))

    def lose(self, test_id: Optional[int], error: str) -> None:
        """Account for a test whose execution crashed before yielding a result.

        It counts towards completion like an undecodable result and fails
        the run.
        """

        self._post(_Lost(test_id=test_id, error=error))

    def _post(self, message: _Message) -> None:
        self._queue.append(message)
        if self._draining:
            return
        self._draining = True
        try:
            while self._queue:
                self._handle(self._queue.popleft())
        finally:
            self._draining = False

    def _handle(self, message: _Message) -> None:
        if isinstance(message, _Restart):
            self._on_restart(message)
        elif isinstance(message, _Incoming):
            self._on_incoming(message.raw)
        elif isinstance(message, _Lost):
            self._on_lost(message)
        elif isinstance(message, _Summarize):
            if message.generation == self._generation:
                self._on_summarize()
        elif isinstance(message, _Finish):
            if message.generation == self._generation:
                self._on_finish()

    def _on_restart(self, message: _Restart) -> None:
        self._generation += 1
        self._results = []
        self._seen_ids = set()
        self.dropped = 0
        self.kind = message.kind
        self.tests_count = message.tests_count
        logger.debug("run_restarted", kind=str(message.kind), tests_count=message.tests_count)
        if isinstance(message.kind, InvalidSuite):
            self.tests_count = 0
            self.state = State.INVALID_SUITE
            self._queue.append(_Summarize(self._generation))
            return
        if message.tests_count == 0:
            self.state = State.SUMMARIZING
            self._queue.append(_Summarize(self._generation))
            return
        self.state = State.AWAITING_RESULTS
        self._write(self._reporter.on_begin(message.tests_count))

    def _accepts(self, test_id: Optional[int]) -> bool:
        if self.state is not State.AWAITING_RESULTS:
            logger.warning("result_ignored", state=self.state.value, test_id=test_id)
            return False
        if test_id is not None:
            if test_id in self._seen_ids:
                logger.warning("duplicate_result_dropped", test_id=test_id)
                return False
            self._seen_ids.add(test_id)
        return True

    def _on_lost(self, message: _Lost) -> None:
        if not self._accepts(message.test_id):
            return
        self.dropped += 1
        logger.error("crashed_test_dropped", test_id=message.test_id, error=message.error)
        self._check_complete()

    def _on_incoming(self, raw: RawResult) -> None:
        if not self._accepts(raw.test_id):
            return
        try:
            decoded = loads_result(raw.result) if isinstance(raw.result, str) else decode_result(raw.result)
        except WireDecodeError as exc:
            # Counted towards completion so the run cannot wedge; the exit
            # code is forced to failure in _on_finish.
            self.dropped += 1
            logger.warning("undecodable_result_dropped", test_id=raw.test_id, error=str(exc))
        else:
            result = with_run_details(decoded, raw.duration, raw.logs)
            self._results.append(result)
            self._write(self._reporter.on_result(result))
        self._check_complete()

    def _check_complete(self) -> None:
        if len(self._results) + self.dropped >= self.tests_count:
            self.state = State.SUMMARIZING
            self._queue.append(_Summarize(self._generation))

    def _on_summarize(self) -> None:
        assert self.kind is not None
        self._write(self._reporter.on_end(self.kind, self.results))
        self._queue.append(_Finish(self._generation))

    def _on_finish(self) -> None:
        assert self.kind is not None
        code = exit_code(self.kind, summarize(self._results))
        if self.dropped:
            code = EXIT_FAILURE
        if self.state is not State.INVALID_SUITE:
            self.state = State.FINISHED
        logger.debug("run_finished", exit_code=code, tests_count=self.tests_count, dropped=self.dropped)
        self._sink.signal_finished(code, self.tests_count)

    def _write(self, text: Optional[str]) -> None:
        if text is not None:
            self._sink.write(text)
