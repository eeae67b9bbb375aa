"""Helpers for loading user-provided suites from modules or source files."""
from __future__ import annotations

import importlib
import importlib.machinery
import importlib.util
import sys
from pathlib import Path
from typing import List, Sequence, Tuple

from verdict.errors import SuiteLoadError
from verdict.logging_config import get_logger

from .tree import Batch, FuzzTest, Labeled, Only, Skipped, Test, TodoTest, UnitTest, concat, describe

logger = get_logger(__name__)

DEFAULT_ATTRIBUTE = "suite"
_TEST_TYPES = (UnitTest, FuzzTest, TodoTest, Labeled, Batch, Only, Skipped)


def load_suite(target: str) -> Tuple[str, Test]:
    """Load one suite from ``path/to/file.py[:attr]`` or ``package.module[:attr]``.

    Returns the display name used as the outermost label and the suite.
    """

    location, _, attr = target.partition(":")
    attr = attr or DEFAULT_ATTRIBUTE
    if location.endswith(".py"):
        module = _load_source(Path(location))
        name = Path(location).stem
    else:
        try:
            module = importlib.import_module(location)
        except Exception as exc:
            raise SuiteLoadError(f"Cannot import suite module '{location}': {type(exc).__name__}: {exc}") from exc
        name = location
    if not hasattr(module, attr):
        raise SuiteLoadError(f"'{location}' has no attribute '{attr}'")
    suite = getattr(module, attr)
    if callable(suite) and not isinstance(suite, _TEST_TYPES):
        try:
            suite = suite()
        except Exception as exc:
            raise SuiteLoadError(f"'{location}:{attr}' raised {type(exc).__name__}: {exc}") from exc
    if not isinstance(suite, _TEST_TYPES):
        raise SuiteLoadError(f"'{location}:{attr}' is not a test suite (got {type(suite).__name__})")
    logger.debug("suite_loaded", target=target, name=name)
    return name, suite


def load_suites(targets: Sequence[str]) -> Test:
    """Load every target, each grouped under its module name."""

    if not targets:
        raise SuiteLoadError("No test suites given")
    groups: List[Test] = []
    for target in targets:
        name, suite = load_suite(target)
        groups.append(describe(name, [suite]))
    return concat(groups)


def _load_source(source: Path):
    path = source.expanduser().resolve()
    if not path.exists():
        raise SuiteLoadError(f"Suite source file not found: {path}")
    module_name = f"verdict_suite_{path.stem}_{hash(str(path)) & 0xFFFF:x}"
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise SuiteLoadError(f"Unable to load module from {path}")
    module = importlib.util.module_from_spec(spec)
    loader = spec.loader
    assert isinstance(loader, importlib.machinery.SourceFileLoader)  # type: ignore[attr-defined]
    sys.modules[module_name] = module
    try:
        loader.exec_module(module)
    except Exception as exc:
        sys.modules.pop(module_name, None)
        raise SuiteLoadError(f"Cannot import suite file {path}: {type(exc).__name__}: {exc}") from exc
    return module
