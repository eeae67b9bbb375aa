"""Text styling strategies for console output."""
from __future__ import annotations

import click


class PlainStyler:
    """Leaves text untouched."""

    def red(self, text: str) -> str:
        return text

    def green(self, text: str) -> str:
        return text

    def yellow(self, text: str) -> str:
        return text

    def dim(self, text: str) -> str:
        return text

    def bold(self, text: str) -> str:
        return text


class AnsiStyler(PlainStyler):
    """Wraps text in ANSI escape sequences."""

    def red(self, text: str) -> str:
        return click.style(text, fg="red")

    def green(self, text: str) -> str:
        return click.style(text, fg="green")

    def yellow(self, text: str) -> str:
        return click.style(text, fg="yellow")

    def dim(self, text: str) -> str:
        return click.style(text, dim=True)

    def bold(self, text: str) -> str:
        return click.style(text, bold=True)
