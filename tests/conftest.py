"""Pytest fixtures for SpeedType tests."""

import random

import pytest

from speedtype.words import FixedWordSupplier, RandomWordSupplier, load_dictionary


class FakeClock:
    """Manually advanced stand-in for time.monotonic."""

    def __init__(self, now: float = 100.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def fixed_supplier() -> FixedWordSupplier:
    """Every word is 'abc', so every word span is 'abc ' (4 chars)."""
    return FixedWordSupplier("abc")


@pytest.fixture
def english_supplier() -> RandomWordSupplier:
    return RandomWordSupplier(load_dictionary("english"), rng=random.Random(1234))
