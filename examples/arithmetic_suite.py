"""Example suite; run with ``verdict run examples/arithmetic_suite.py``."""
from verdict.core import expectation as expect
from verdict.core import log
from verdict.suite import describe, fuzz, fuzzers, test, todo


def _sum_is_commutative(pair):
    a, b = pair
    log(f"checking {a} + {b}")
    return expect.equal(a + b, b + a)


suite = describe(
    "Arithmetic",
    [
        describe(
            "1 - addition",
            [
                test("adds small numbers", lambda: expect.equal(4, 2 + 2)),
                fuzz(
                    fuzzers.lists_of(fuzzers.integers(-100, 100), max_length=2).map(
                        lambda xs: (xs + [0, 0])[:2]
                    ),
                    "is commutative",
                    _sum_is_commutative,
                    classify=lambda pair: ["negative"] if min(pair) < 0 else ["non-negative"],
                ),
            ],
        ),
        describe(
            "2 - ordering",
            [
                fuzz(fuzzers.integers(0, 9), "digits stay below ten", lambda n: expect.less_than(10, n)),
                test("sorts a list", lambda: expect.equal_lists([1, 2, 3], sorted([3, 1, 2]))),
            ],
        ),
        todo("division by zero"),
    ],
)
