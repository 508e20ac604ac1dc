"""
exceptions raised by the game package
"""


class Game2048Error(Exception):
    """base class for all game errors"""


class InvalidDirectionError(Game2048Error, ValueError):
    """a move was requested with a symbol that is not up/down/left/right"""

    def __init__(self, direction):
        super().__init__(f"Invalid direction: {direction!r}. Must be 'up', 'down', 'left' or 'right'")
        self.direction = direction


class PersistenceError(Game2048Error):
    """the best score store could not be read or written"""
