"""
game constants and default locations
"""
import os
from pathlib import Path

# board
BOARD_SIZE = 4
WIN_TILE = 2048

# spawning: 90% chance for 2 and 10% chance for 4
SPAWN_VALUES = (2, 4)
SPAWN_FOUR_PROBABILITY = 0.1

# persistence
BEST_SCORE_KEY = "best2048Score"
HOME_ENV_VAR = "GAME2048_HOME"
BEST_SCORE_FILENAME = "best_score.json"

# input
MIN_SWIPE_DISTANCE = 50  # pixels

# presentation timings (seconds)
NEW_TILE_HIGHLIGHT = 0.2
MERGE_HIGHLIGHT = 0.3
CONFETTI_DURATION = 3.0

# GUI geometry
CELL_SIZE = 100
CELL_MARGIN = 10
HEADER_HEIGHT = 120
CONTROLS_HEIGHT = 90
BUTTON_SIZE = 60
BUTTON_GAP = 10
NEW_GAME_BUTTON = (120, 36)  # width, height
FPS = 60


def default_best_score_path():
    """where the GUI keeps the best score unless told otherwise"""
    home = os.environ.get(HOME_ENV_VAR)
    base = Path(home) if home else Path.home() / ".game2048"
    return base / BEST_SCORE_FILENAME
