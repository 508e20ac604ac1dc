"""
core game logic and mechanics
"""
import time

import numpy as np

from .config import BOARD_SIZE, SPAWN_FOUR_PROBABILITY, SPAWN_VALUES, WIN_TILE
from .errors import InvalidDirectionError
from .logging_config import get_logger
from .state import DOWN, LEFT, RIGHT, UP, GameState, MergedTile, NewTile, parse_direction
from .storage import BestScoreStore

logger = get_logger(__name__)


def can_move(grid):
    """true if the grid has an empty cell or two adjacent equal tiles"""
    size = len(grid)

    # check for empty cells
    for i in range(size):
        for j in range(size):
            if grid[i][j] == 0:
                return True

    # check for possible merges horizontally and vertically
    for i in range(size):
        for j in range(size):
            if j < size - 1 and grid[i][j] == grid[i][j + 1]:
                return True
            if i < size - 1 and grid[i][j] == grid[i + 1][j]:
                return True

    return False


class Game2048:
    def __init__(self, size=BOARD_SIZE, random_source=None, best_score_store=None, clock=time.time):
        """
        initialize a game and spawn the two starting tiles

        args:
            size: board dimension (4 for the real game)
            random_source: object with integers(high) and random(), a
                numpy Generator unless a seeded one is passed in
            best_score_store: BestScoreStore used to load and save the best score
            clock: returns the timestamp recorded for merges
        """
        self.size = size
        self.rng = random_source if random_source is not None else np.random.default_rng()
        self.best_score_store = best_score_store if best_score_store is not None else BestScoreStore()
        self.clock = clock

        self.best_score = self.best_score_store.read_best_score()
        self.initialize()

    def initialize(self):
        """empty board, fresh score and flags, two random tiles"""
        self.board = [[0 for _ in range(self.size)] for _ in range(self.size)]
        self.score = 0
        self.has_won = False
        self.game_over = False
        self.last_move = None
        self.new_tiles = []
        self.merged_tiles = []

        # add two starting tiles
        self.add_random_tile()
        self.add_random_tile()

    def empty_cells(self):
        return [(i, j) for i in range(self.size) for j in range(self.size) if self.board[i][j] == 0]

    def add_random_tile(self):
        """add a random tile (2 or 4) to an empty space"""
        empty_cells = self.empty_cells()
        if not empty_cells:
            return False

        row, col = empty_cells[int(self.rng.integers(len(empty_cells)))]
        value = SPAWN_VALUES[1] if self.rng.random() < SPAWN_FOUR_PROBABILITY else SPAWN_VALUES[0]
        self.board[row][col] = value
        self.new_tiles.append(NewTile(row, col, value))
        return True

    def process_line(self, line):
        """
        slide one row or column towards index 0 and merge equal neighbours

        a tile merges at most once per move: [2, 2, 2, 2] -> [4, 4, 0, 0]
        """
        # all non-zero values in this line
        tiles = [v for v in line if v != 0]

        merged_line = []
        i = 0
        while i < len(tiles):
            if i < len(tiles) - 1 and tiles[i] == tiles[i + 1]:
                merged_value = tiles[i] * 2
                merged_line.append(merged_value)
                self.score += merged_value
                self.merged_tiles.append(MergedTile(merged_value, self.clock()))
                if merged_value == WIN_TILE and not self.has_won:
                    self.has_won = True
                    logger.info("Reached %d with score %d", WIN_TILE, self.score)
                i += 2  # skip the next tile since we merged it
            else:
                merged_line.append(tiles[i])
                i += 1

        # pad with zeros to the board size
        merged_line += [0] * (self.size - len(merged_line))
        return merged_line

    def move_left(self):
        moved = False
        for i in range(self.size):
            new_row = self.process_line(self.board[i])
            if new_row != self.board[i]:
                moved = True
                self.board[i] = new_row
        return moved

    def move_right(self):
        # reverse the row, collapse left, reverse back
        moved = False
        for i in range(self.size):
            new_row = self.process_line(self.board[i][::-1])[::-1]
            if new_row != self.board[i]:
                moved = True
                self.board[i] = new_row
        return moved

    def move_up(self):
        moved = False
        for j in range(self.size):
            column = [self.board[i][j] for i in range(self.size)]
            new_column = self.process_line(column)
            if new_column != column:
                moved = True
                self._set_column(j, new_column)
        return moved

    def move_down(self):
        moved = False
        for j in range(self.size):
            column = [self.board[i][j] for i in range(self.size)]
            new_column = self.process_line(column[::-1])[::-1]
            if new_column != column:
                moved = True
                self._set_column(j, new_column)
        return moved

    def _set_column(self, j, column):
        for i in range(self.size):
            self.board[i][j] = column[i]

    def move(self, direction):
        """
        make a move in the specified direction

        returns True if the board changed. nothing happens (and False is
        returned) when the game is over, the direction is unknown or no
        tile can slide that way
        """
        if self.game_over:
            return False

        try:
            direction = parse_direction(direction)
        except InvalidDirectionError as e:
            logger.warning("Rejected move: %s", e)
            return False

        # transient move info only describes this move
        self.new_tiles = []
        self.merged_tiles = []
        self.last_move = direction

        moved = False
        if direction == LEFT:
            moved = self.move_left()
        elif direction == RIGHT:
            moved = self.move_right()
        elif direction == UP:
            moved = self.move_up()
        elif direction == DOWN:
            moved = self.move_down()

        if not moved:
            return False

        self.add_random_tile()
        self._update_best_score()
        logger.debug("Moved %s, score %d", direction, self.score)

        # check if game is over
        if not self.can_move():
            self.game_over = True
            logger.info("Game over with score %d", self.score)

        return True

    def _update_best_score(self):
        if self.score > self.best_score:
            self.best_score = self.score
            self.best_score_store.write_best_score(self.best_score)

    def can_move(self):
        """check if any move can still change the board"""
        return can_move(self.board)

    def restart(self):
        """start a new game, keeping the best score"""
        self.initialize()

    def get_game_state(self):
        """snapshot of the current game; later moves never change it"""
        return GameState.from_board(
            self.board,
            score=self.score,
            best_score=self.best_score,
            has_won=self.has_won,
            game_over=self.game_over,
            new_tiles=self.new_tiles,
            merged_tiles=self.merged_tiles,
            last_move=self.last_move,
        )
