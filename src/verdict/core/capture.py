"""Per-test debug log capture."""
from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator, List, Optional

_LOGS: ContextVar[Optional[List[str]]] = ContextVar("verdict_test_logs", default=None)


def log(message: str) -> None:
    """Record a debug line for the test currently running.

    Outside of a running test the message is discarded.
    """

    buffer = _LOGS.get()
    if buffer is not None:
        buffer.append(str(message))


@contextmanager
def capture_logs() -> Iterator[List[str]]:
    buffer: List[str] = []
    token = _LOGS.set(buffer)
    try:
        yield buffer
    finally:
        _LOGS.reset(token)
