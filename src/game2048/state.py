"""
immutable snapshots of the game and helpers to read them
"""
from dataclasses import dataclass, field
from typing import Optional, Tuple

from .errors import InvalidDirectionError

UP = 'up'
DOWN = 'down'
LEFT = 'left'
RIGHT = 'right'
DIRECTIONS = (UP, DOWN, LEFT, RIGHT)


def parse_direction(direction) -> str:
    """normalize a direction symbol, raising InvalidDirectionError if unknown"""
    if isinstance(direction, str):
        symbol = direction.strip().lower()
        if symbol in DIRECTIONS:
            return symbol
    raise InvalidDirectionError(direction)


@dataclass(frozen=True)
class NewTile:
    """a tile spawned by the most recent move (or restart)"""
    row: int
    col: int
    value: int


@dataclass(frozen=True)
class MergedTile:
    """a merge produced by the most recent move"""
    value: int
    timestamp: float


@dataclass(frozen=True)
class GameState:
    """
    read-only view of the engine after a move or restart

    grid rows are tuples, so holding on to a snapshot never exposes
    later changes made by the engine
    """
    grid: Tuple[Tuple[int, ...], ...]
    score: int = 0
    best_score: int = 0
    has_won: bool = False
    game_over: bool = False
    new_tiles: Tuple[NewTile, ...] = field(default_factory=tuple)
    merged_tiles: Tuple[MergedTile, ...] = field(default_factory=tuple)
    last_move: Optional[str] = None

    @classmethod
    def from_board(cls, board, **kwargs) -> "GameState":
        """build a snapshot from a mutable list-of-lists board"""
        grid = tuple(tuple(int(v) for v in row) for row in board)
        for name in ('new_tiles', 'merged_tiles'):
            if name in kwargs:
                kwargs[name] = tuple(kwargs[name])
        return cls(grid=grid, **kwargs)

    @property
    def size(self) -> int:
        return len(self.grid)

    def highest_tile(self) -> int:
        return max((max(row) for row in self.grid), default=0)

    def grid_sum(self) -> int:
        return sum(sum(row) for row in self.grid)

    def empty_cells(self):
        return [(r, c) for r, row in enumerate(self.grid) for c, v in enumerate(row) if v == 0]

    def is_new_tile(self, row, col) -> bool:
        return any(tile.row == row and tile.col == col for tile in self.new_tiles)

    def is_merged_value(self, value, now, window) -> bool:
        """true if a merge produced `value` less than `window` seconds before `now`"""
        return any(
            tile.value == value and now - tile.timestamp < window
            for tile in self.merged_tiles
        )


def format_score(score) -> str:
    """format a score with thousands separators"""
    return f"{score:,}"


def format_board(state: GameState) -> str:
    """text rendering of a snapshot (for the console and for logs)"""
    width = state.size * 5 + 1
    lines = [f"Score: {format_score(state.score)}  Best: {format_score(state.best_score)}"]
    lines.append("-" * width)
    for row in state.grid:
        cells = "".join("    |" if cell == 0 else f"{cell:4}|" for cell in row)
        lines.append("|" + cells)
    lines.append("-" * width)
    if state.game_over:
        lines.append("GAME OVER!")
    elif state.has_won:
        lines.append("YOU WIN!")
    return "\n".join(lines)
