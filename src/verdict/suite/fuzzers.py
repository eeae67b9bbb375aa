"""Random value generators for fuzz tests."""
from __future__ import annotations

import string as _string
from dataclasses import dataclass
from typing import Any, Callable, Sequence

import numpy as np

GenerateFn = Callable[[np.random.Generator], Any]


@dataclass(frozen=True)
class Fuzzer:
    """Draws one value per call from a seeded generator."""

    generate: GenerateFn
    name: str = "fuzzer"

    def map(self, fn: Callable[[Any], Any]) -> "Fuzzer":
        return Fuzzer(lambda rng: fn(self.generate(rng)), name=f"map({self.name})")


def integers(low: int = -(2**31), high: int = 2**31 - 1) -> Fuzzer:
    if low > high:
        raise ValueError(f"integers() needs low <= high, got {low} > {high}")
    return Fuzzer(lambda rng: int(rng.integers(low, high, endpoint=True)), name=f"integers({low}, {high})")


def floats(low: float = -1e6, high: float = 1e6) -> Fuzzer:
    if low > high:
        raise ValueError(f"floats() needs low <= high, got {low} > {high}")
    return Fuzzer(lambda rng: float(rng.uniform(low, high)), name=f"floats({low}, {high})")


def booleans() -> Fuzzer:
    return Fuzzer(lambda rng: bool(rng.integers(0, 2)), name="booleans")


def constant(value: Any) -> Fuzzer:
    return Fuzzer(lambda rng: value, name=f"constant({value!r})")


def one_of(values: Sequence[Any]) -> Fuzzer:
    options = list(values)
    if not options:
        raise ValueError("one_of() needs at least one value")
    return Fuzzer(lambda rng: options[int(rng.integers(0, len(options)))], name="one_of")


def strings(max_length: int = 10, alphabet: str = _string.ascii_letters + _string.digits) -> Fuzzer:
    def generate(rng: np.random.Generator) -> str:
        length = int(rng.integers(0, max_length, endpoint=True))
        picks = rng.integers(0, len(alphabet), size=length)
        return "".join(alphabet[int(index)] for index in picks)

    return Fuzzer(generate, name=f"strings({max_length})")


def lists_of(item: Fuzzer, max_length: int = 10) -> Fuzzer:
    def generate(rng: np.random.Generator) -> list:
        length = int(rng.integers(0, max_length, endpoint=True))
        return [item.generate(rng) for _ in range(length)]

    return Fuzzer(generate, name=f"lists_of({item.name})")
