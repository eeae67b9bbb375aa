"""verdict package initialization."""
from __future__ import annotations

from colorama import just_fix_windows_console

from .logging_config import configure_logging
from .version import __version__

__all__ = [
    "__version__",
    "bootstrap",
]

_BOOTSTRAPPED = False


def bootstrap(*, verbose: bool = False) -> None:
    """Initialize terminal state once and (re)configure logging verbosity."""

    global _BOOTSTRAPPED
    configure_logging(verbose=verbose)
    if _BOOTSTRAPPED:
        return
    just_fix_windows_console()
    _BOOTSTRAPPED = True
