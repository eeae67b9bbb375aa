"""Execution boundary and the worker pool feeding the coordinator."""
from __future__ import annotations

import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Optional, Protocol, Tuple, Union

from verdict.core.capture import capture_logs
from verdict.core.kind import InvalidSuite, decode_kind, encode_kind
from verdict.core.results import dumps_result
from verdict.logging_config import get_logger
from verdict.suite.runners import SeededRunners, run

from .coordinator import RawResult, RunCoordinator

logger = get_logger(__name__)


class ExecutionBoundary(Protocol):
    """Where tests actually run: this process, a pool, or another process."""

    def ask_tests_count(self) -> Tuple[str, int]:
        ...

    def run_test(self, test_id: int) -> Optional[RawResult]:
        ...


class LocalBoundary:
    """Runs seeded tests in this process and hands back wire-encoded results."""

    def __init__(self, seeded: Union[SeededRunners, InvalidSuite]) -> None:
        self._seeded = seeded

    def ask_tests_count(self) -> Tuple[str, int]:
        if isinstance(self._seeded, InvalidSuite):
            return encode_kind(self._seeded), 0
        return encode_kind(self._seeded.kind), len(self._seeded.runners)

    def run_test(self, test_id: int) -> Optional[RawResult]:
        if isinstance(self._seeded, InvalidSuite):
            return None
        with capture_logs() as logs:
            start = time.perf_counter()
            result = run(test_id, self._seeded)
            duration_ms = (time.perf_counter() - start) * 1000
        if result is None:
            return None
        return RawResult(
            duration=duration_ms,
            result=dumps_result(result),
            logs=tuple(logs),
            test_id=test_id,
        )


def dispatch(boundary: ExecutionBoundary, coordinator: RunCoordinator, *, workers: int = 1) -> None:
    """Run every test through ``boundary`` and feed results in arrival order.

    Workers only execute tests; all coordinator calls happen on this thread.
    A test whose execution raises is reported to the coordinator as lost.
    """

    kind_text, tests_count = boundary.ask_tests_count()
    kind = decode_kind(kind_text)
    coordinator.restart(kind, tests_count)
    if isinstance(kind, InvalidSuite) or tests_count == 0:
        return
    logger.debug("dispatch_started", tests_count=tests_count, workers=workers)
    with ThreadPoolExecutor(max_workers=max(1, workers)) as pool:
        futures = {pool.submit(boundary.run_test, test_id): test_id for test_id in range(tests_count)}
        for future in as_completed(futures):
            test_id = futures[future]
            try:
                raw = future.result()
            except Exception as exc:
                coordinator.lose(test_id, f"{type(exc).__name__}: {exc}")
                continue
            if raw is None:
                logger.warning("no_result_for_test", test_id=test_id)
                continue
            coordinator.receive(raw)
