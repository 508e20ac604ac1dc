"""
2048 sliding-tile game: grid engine, snapshots, best score storage and a pygame front end
"""
from .errors import Game2048Error, InvalidDirectionError, PersistenceError
from .game import Game2048, can_move
from .state import DIRECTIONS, DOWN, LEFT, RIGHT, UP, GameState, MergedTile, NewTile, format_board
from .storage import BestScoreStore, JsonFileStore, MemoryStore

__version__ = "0.1.0"
