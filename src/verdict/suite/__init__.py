"""Declarative suites and their seeded runners."""
from . import fuzzers
from .fuzzers import Fuzzer
from .loader import load_suite, load_suites
from .runners import Runner, SeededRunners, from_test, run
from .tree import Test, concat, describe, fuzz, only, skip, test, todo

__all__ = [
    "Fuzzer",
    "Runner",
    "SeededRunners",
    "Test",
    "concat",
    "describe",
    "from_test",
    "fuzz",
    "fuzzers",
    "load_suite",
    "load_suites",
    "only",
    "run",
    "skip",
    "test",
    "todo",
]
