"""Run settings loaded from ``verdict.yaml`` and overridden by the CLI."""
from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Mapping, Optional, Tuple

import numpy as np
import yaml
from jsonschema import Draft7Validator

from verdict.errors import ConfigError
from verdict.reporting import ReportFormat

DEFAULT_CONFIG_NAME = "verdict.yaml"
DEFAULT_FUZZ_RUNS = 100

SETTINGS_SCHEMA = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "additionalProperties": False,
    "properties": {
        "seed": {"type": "integer", "minimum": 0},
        "fuzz_runs": {"type": "integer"},
        "report": {"enum": [fmt.value for fmt in ReportFormat]},
        "filter": {"type": ["string", "null"]},
        "workers": {"type": "integer", "minimum": 1},
        "color": {"type": "boolean"},
        "verbose": {"type": "boolean"},
        "suites": {"type": "array", "items": {"type": "string"}},
        "globs": {"type": "array", "items": {"type": "string"}},
    },
}

_validator = Draft7Validator(SETTINGS_SCHEMA)


@dataclass(frozen=True)
class RunSettings:
    seed: Optional[int] = None
    fuzz_runs: int = DEFAULT_FUZZ_RUNS
    report: ReportFormat = ReportFormat.CONSOLE
    filter: Optional[str] = None
    workers: int = 1
    color: bool = True
    verbose: bool = False
    suites: Tuple[str, ...] = field(default_factory=tuple)
    globs: Tuple[str, ...] = field(default_factory=tuple)

    def resolved_seed(self) -> "RunSettings":
        """Fill in a random seed when none was configured."""

        if self.seed is not None:
            return self
        return replace(self, seed=int(np.random.default_rng().integers(0, 2**31 - 1)))


def load_settings(path: Optional[str] = None) -> RunSettings:
    """Read settings from ``path``, or ``verdict.yaml`` in the working directory.

    A missing default file yields the default settings; a missing explicit
    path is an error.
    """

    if path is None:
        candidate = Path.cwd() / DEFAULT_CONFIG_NAME
        if not candidate.exists():
            return RunSettings()
    else:
        candidate = Path(path).expanduser()
        if not candidate.exists():
            raise ConfigError(f"Config file {candidate} does not exist")
    try:
        raw = yaml.safe_load(candidate.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Config file {candidate} is not valid YAML: {exc}") from exc
    if not isinstance(raw, Mapping):
        raise ConfigError("Config file must contain a mapping at the top level")
    errors = sorted(_validator.iter_errors(raw), key=lambda e: list(e.path))
    if errors:
        messages = "; ".join(f"{'/'.join(map(str, err.path)) or 'root'}: {err.message}" for err in errors)
        raise ConfigError(f"Config validation failed: {messages}")
    return _from_mapping(raw)


def apply_overrides(settings: RunSettings, **overrides: Any) -> RunSettings:
    """Return ``settings`` with every non-None override applied."""

    known = {item.name for item in fields(RunSettings)}
    unknown = set(overrides) - known
    if unknown:
        raise ConfigError(f"Unknown settings: {', '.join(sorted(unknown))}")
    values = {key: value for key, value in overrides.items() if value is not None}
    if "report" in values and not isinstance(values["report"], ReportFormat):
        values["report"] = ReportFormat(values["report"])
    return replace(settings, **values)


def _from_mapping(raw: Mapping[str, Any]) -> RunSettings:
    values = dict(raw)
    if "report" in values:
        values["report"] = ReportFormat(values["report"])
    for key in ("suites", "globs"):
        if key in values:
            values[key] = tuple(values[key])
    return RunSettings(**values)
