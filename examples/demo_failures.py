"""Every check in here fails on purpose; run it to see what reports look like.

    pytest -p testy.plugin examples/demo_failures.py
"""

from dataclasses import dataclass


@dataclass
class Pair:
    x: float
    y: float


def check_even(t, n):
    t = t.uplevel(1).label("Testing", n)
    if n % 2 != 0:
        t.error("Value is not even")


def test_demo(testy):
    testy.true(1 + 1 == 3)
    testy.false(2 == 2)
    testy.equal(1, 2)
    testy.equal(1.0, 1)
    testy.equal("foo\tbar", "foo\tbaz")
    testy.equal(True, False)
    testy.equal(Pair(1.0, 1.0), Pair(1.1, 1.0))
    testy.unequal(42, 42)
    check_even(testy, 3)
