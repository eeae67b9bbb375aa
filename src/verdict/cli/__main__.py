"""Module entry point for ``python -m verdict.cli``."""

from __future__ import annotations

from verdict.cli.main import main


if __name__ == "__main__":
    raise SystemExit(main())
