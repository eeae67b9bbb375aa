"""Exception hierarchy for verdict."""
from __future__ import annotations


class VerdictError(Exception):
    """Base exception for all verdict failures."""


class ConfigError(VerdictError):
    """Raised for invalid run settings or configuration files."""


class WireDecodeError(VerdictError):
    """Raised when a transported value cannot be decoded."""


class SuiteLoadError(VerdictError):
    """Raised when a test suite cannot be imported or is not a suite."""
