"""Shared fixtures for game tests."""

import pytest

from tests.helpers import make_game


@pytest.fixture
def game():
    """A game on an empty board; spawns land on the first empty cell as a 2."""
    return make_game([[0] * 4 for _ in range(4)])
