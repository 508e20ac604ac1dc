"""
celebration triggers for the presentation layer
"""
from .config import WIN_TILE


def win_transition(previous, current):
    """true when has_won flips from false to true between two snapshots"""
    was_won = previous.has_won if previous is not None else False
    return current.has_won and not was_won


class MilestoneTracker:
    """remembers which big tiles (powers of two >= threshold) were already celebrated"""

    def __init__(self, threshold=WIN_TILE):
        self.threshold = threshold
        self.seen = set()

    def reset(self):
        self.seen.clear()

    def update(self, state):
        """milestone values on the grid for the first time, smallest first"""
        on_grid = {v for row in state.grid for v in row if v >= self.threshold}
        fresh = sorted(on_grid - self.seen)
        self.seen.update(fresh)
        return fresh
