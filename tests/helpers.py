"""Test helpers shared across the game tests."""

from game2048 import Game2048

FIXED_TIME = 100.0


class ScriptedRandom:
    """
    Stand-in for a numpy Generator with predictable answers.

    integers() pops from `indices` (0 once exhausted, i.e. the first empty
    cell) and random() pops from `rolls` (0.5 once exhausted, i.e. a 2).
    """

    def __init__(self, indices=(), rolls=()):
        self.indices = list(indices)
        self.rolls = list(rolls)

    def integers(self, high):
        value = self.indices.pop(0) if self.indices else 0
        assert 0 <= value < high
        return value

    def random(self):
        return self.rolls.pop(0) if self.rolls else 0.5


def fixed_clock():
    return FIXED_TIME


def set_board(game, board):
    """Put a game on a given board with no leftover move info."""
    game.board = [list(row) for row in board]
    game.new_tiles = []
    game.merged_tiles = []
    return game


def make_game(board=None, rng=None, **kwargs):
    """Game2048 with scripted randomness and a fixed clock, optionally on a given board."""
    game = Game2048(random_source=ScriptedRandom(), clock=fixed_clock, **kwargs)
    if board is not None:
        set_board(game, board)
    # swapped in after the starting tiles so scripted answers reach the test
    if rng is not None:
        game.rng = rng
    return game


# full board with no empty cell and no equal neighbours
STUCK_BOARD = [
    [2, 4, 2, 4],
    [4, 2, 4, 2],
    [2, 4, 2, 4],
    [4, 2, 4, 2],
]
