"""Output sinks receiving reporter text and the run outcome."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, TextIO

import click


class StreamSink:
    """Echoes reporter output to a text stream (stdout by default)."""

    def __init__(self, stream: Optional[TextIO] = None, *, color: Optional[bool] = None) -> None:
        self._stream = stream
        self._color = color
        self.exit_code: Optional[int] = None
        self.tests_count = 0

    @property
    def finished(self) -> bool:
        return self.exit_code is not None

    def write(self, text: str) -> None:
        click.echo(text, file=self._stream, color=self._color)

    def signal_finished(self, exit_code: int, tests_count: int) -> None:
        self.exit_code = exit_code
        self.tests_count = tests_count


@dataclass
class MemorySink:
    """Collects output in memory; used when the caller post-processes reports."""

    writes: List[str] = field(default_factory=list)
    exit_code: Optional[int] = None
    tests_count: int = 0
    finish_calls: int = 0

    @property
    def finished(self) -> bool:
        return self.exit_code is not None

    @property
    def text(self) -> str:
        return "\n".join(self.writes)

    def write(self, text: str) -> None:
        self.writes.append(text)

    def signal_finished(self, exit_code: int, tests_count: int) -> None:
        self.exit_code = exit_code
        self.tests_count = tests_count
        self.finish_calls += 1
