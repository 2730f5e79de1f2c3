"""
conftest.py — shared pytest fixtures for the Evolvera test suite.
"""

import pytest

from evolvera.civilization import Civilization, Domain


class ScriptedRng:
    """Stand-in for random.Random that replays fixed draws.

    ``ints`` feeds randrange(), ``floats`` feeds random().  Running out of
    scripted values is a test bug, so it raises instead of guessing.
    """

    def __init__(self, ints=(), floats=()):
        self.ints   = list(ints)
        self.floats = list(floats)

    def randrange(self, n):
        v = self.ints.pop(0)
        assert 0 <= v < n, f"scripted {v} out of range for randrange({n})"
        return v

    def random(self):
        return self.floats.pop(0)


@pytest.fixture
def civ():
    return Civilization()


@pytest.fixture
def make_civ():
    """Build a civilization with selected domain values overridden by name."""
    def _make(ni=5.0, **values):
        c = Civilization(ni=ni)
        for name, v in values.items():
            c.domains[Domain.parse(name)] = float(v)
        return c
    return _make


@pytest.fixture
def scripted_rng():
    return ScriptedRng
