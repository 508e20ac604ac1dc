import argparse
import sys
import time

import numpy as np
import pygame

from .config import (
    BUTTON_GAP,
    BUTTON_SIZE,
    CELL_MARGIN,
    CELL_SIZE,
    CONFETTI_DURATION,
    CONTROLS_HEIGHT,
    FPS,
    HEADER_HEIGHT,
    MERGE_HIGHLIGHT,
    NEW_GAME_BUTTON,
    NEW_TILE_HIGHLIGHT,
    default_best_score_path,
)
from .controls import CONTINUE, QUIT, RESTART, ControlEvents
from .game import Game2048
from .logging_config import get_logger, setup_logging
from .milestones import MilestoneTracker, win_transition
from .state import DOWN, LEFT, RIGHT, UP, format_score
from .storage import BestScoreStore, JsonFileStore

logger = get_logger(__name__)


COLORS = {
    'background': (248, 250, 252),
    'grid_background': (187, 173, 160),
    'empty_cell': (205, 193, 180),
    'text_dark': (119, 110, 101),
    'text_light': (249, 246, 242),
    'header_text': (51, 65, 85),
    'button': (143, 122, 102),
    'new_outline': (250, 204, 21),
    'merge_outline': (244, 114, 182),
    'overlay': (15, 23, 42, 180),
}

TILE_COLORS = {
    2: (238, 228, 218),
    4: (237, 224, 200),
    8: (242, 177, 121),
    16: (245, 149, 99),
    32: (246, 124, 95),
    64: (246, 94, 59),
    128: (237, 207, 114),
    256: (237, 204, 97),
    512: (237, 200, 80),
    1024: (237, 197, 63),
    2048: (237, 194, 46),
    4096: (238, 90, 82),
    8192: (237, 76, 97),
    16384: (242, 177, 121),
}
BEYOND_TILE_COLOR = (60, 58, 50)


def tile_color(value):
    """background color for a tile value (0 is an empty cell)"""
    if value == 0:
        return COLORS['empty_cell']
    return TILE_COLORS.get(value, BEYOND_TILE_COLOR)


def text_color(value):
    return COLORS['text_dark'] if value <= 4 else COLORS['text_light']


def arrow_points(rect, direction):
    """triangle pointing in direction, inset in rect"""
    inset = rect.width // 4
    left, top = rect.left + inset, rect.top + inset
    right, bottom = rect.right - inset, rect.bottom - inset
    cx, cy = rect.center
    return {
        UP: [(cx, top), (right, bottom), (left, bottom)],
        DOWN: [(left, top), (right, top), (cx, bottom)],
        LEFT: [(left, cy), (right, top), (right, bottom)],
        RIGHT: [(left, top), (right, cy), (left, bottom)],
    }[direction]


CONFETTI_COLORS = np.array([
    (244, 63, 94),
    (250, 204, 21),
    (34, 197, 94),
    (59, 130, 246),
    (168, 85, 247),
])


class Confetti:
    """falling particles shown on a win or milestone"""

    def __init__(self, width, height, count=150, rng=None):
        self.width = width
        self.height = height
        self.count = count
        self.rng = rng if rng is not None else np.random.default_rng()
        self.started = None

    def start(self, now):
        self.started = now
        self.pos = np.column_stack([
            self.rng.uniform(0, self.width, self.count),
            self.rng.uniform(-self.height, 0, self.count),
        ])
        self.vel = np.column_stack([
            self.rng.uniform(-40, 40, self.count),
            self.rng.uniform(120, 260, self.count),
        ])
        self.colors = CONFETTI_COLORS[self.rng.integers(len(CONFETTI_COLORS), size=self.count)]

    def active(self, now):
        return self.started is not None and now - self.started < CONFETTI_DURATION

    def stop(self):
        self.started = None

    def update(self, dt):
        self.pos += self.vel * dt

    def draw(self, screen):
        for (x, y), color in zip(self.pos, self.colors):
            if 0 <= y < self.height:
                pygame.draw.rect(screen, tuple(int(c) for c in color), (int(x), int(y), 6, 10))


class GameGUI:
    def __init__(self, game=None):
        """initialize game GUI"""
        pygame.init()
        self.game = game if game is not None else Game2048()

        # window size
        grid_size = self.game.size * CELL_SIZE + (self.game.size + 1) * CELL_MARGIN
        self.window_width = grid_size
        self.window_height = HEADER_HEIGHT + grid_size + CONTROLS_HEIGHT

        # create window
        self.screen = pygame.display.set_mode((self.window_width, self.window_height))
        pygame.display.set_caption("2048 Game")

        # fonts
        self.font_large = pygame.font.Font(None, 48)
        self.font_medium = pygame.font.Font(None, 36)
        self.font_small = pygame.font.Font(None, 24)

        # game clock
        self.clock = pygame.time.Clock()

        self.buttons = self.layout_buttons(grid_size)
        self.controls = ControlEvents((self.window_width, self.window_height), self.buttons)
        self.milestones = MilestoneTracker()
        self.confetti = Confetti(self.window_width, self.window_height)
        self._reset_view()

    def layout_buttons(self, grid_size):
        """rects for the New Game button and the row of arrow buttons under the grid"""
        width, height = NEW_GAME_BUTTON
        buttons = {RESTART: pygame.Rect(self.window_width - width - 20, 62, width, height)}

        row_width = 4 * BUTTON_SIZE + 3 * BUTTON_GAP
        x = (self.window_width - row_width) // 2
        y = HEADER_HEIGHT + grid_size + (CONTROLS_HEIGHT - BUTTON_SIZE) // 2
        for direction in (LEFT, UP, DOWN, RIGHT):
            buttons[direction] = pygame.Rect(x, y, BUTTON_SIZE, BUTTON_SIZE)
            x += BUTTON_SIZE + BUTTON_GAP
        return buttons

    def _reset_view(self):
        """forget overlays and highlights, show the engine's current state"""
        self.state = self.game.get_game_state()
        self.state_time = time.time()
        self.show_win = False
        self.show_game_over = self.state.game_over
        self.milestones.reset()
        self.milestones.update(self.state)
        self.confetti.stop()

    def refresh(self):
        """pick up the engine's state after a move and decide which overlays to show"""
        previous = self.state
        self.state = self.game.get_game_state()
        self.state_time = time.time()

        milestones = self.milestones.update(self.state)
        if win_transition(previous, self.state) or milestones:
            logger.info("Celebrating %s", milestones or "the win")
            self.show_win = True
            self.confetti.start(self.state_time)

        if self.state.game_over and not previous.game_over:
            self.show_game_over = True

    def draw_board(self, now):
        """draw the game board"""
        # clear screen with background color
        self.screen.fill(COLORS['background'])

        self.draw_header()

        # draw the grid background
        grid_rect = pygame.Rect(0, HEADER_HEIGHT, self.window_width, self.window_width)
        pygame.draw.rect(self.screen, COLORS['grid_background'], grid_rect)

        # draw cells
        for row in range(self.state.size):
            for col in range(self.state.size):
                self.draw_cell(row, col, now)

        self.draw_buttons()

    def draw_header(self):
        """draw the header with score, best score and instructions"""
        score_text = self.font_large.render(f"Score: {format_score(self.state.score)}", True, COLORS['header_text'])
        self.screen.blit(score_text, (20, 20))

        best_text = self.font_small.render(f"Best: {format_score(self.state.best_score)}", True, COLORS['header_text'])
        self.screen.blit(best_text, (self.window_width - best_text.get_width() - 20, 30))

        instruction_surface = self.font_small.render("Arrows/WASD or swipe to move", True, COLORS['header_text'])
        self.screen.blit(instruction_surface, (20, 70))

        restart_text = self.font_small.render("R restarts, ESC quits", True, COLORS['header_text'])
        self.screen.blit(restart_text, (20, 95))

    def draw_cell(self, row, col, now):
        """draw a single cell of the grid"""
        value = self.state.grid[row][col]

        # cell position
        x = col * (CELL_SIZE + CELL_MARGIN) + CELL_MARGIN
        y = row * (CELL_SIZE + CELL_MARGIN) + CELL_MARGIN + HEADER_HEIGHT

        # draw cell background
        cell_rect = pygame.Rect(x, y, CELL_SIZE, CELL_SIZE)
        pygame.draw.rect(self.screen, tile_color(value), cell_rect, border_radius=8)

        if value == 0:
            return

        # highlight fresh tiles and recent merges
        if self.state.is_new_tile(row, col) and now - self.state_time < NEW_TILE_HIGHLIGHT:
            pygame.draw.rect(self.screen, COLORS['new_outline'], cell_rect, width=4, border_radius=8)
        elif self.state.is_merged_value(value, now, MERGE_HIGHLIGHT):
            pygame.draw.rect(self.screen, COLORS['merge_outline'], cell_rect, width=4, border_radius=8)

        # choose font size based on number of digits
        if value < 100:
            font = self.font_large
        elif value < 1000:
            font = self.font_medium
        else:
            font = self.font_small

        text_surface = font.render(str(value), True, text_color(value))

        # center the text in the cell
        text_rect = text_surface.get_rect()
        text_rect.center = (x + CELL_SIZE // 2, y + CELL_SIZE // 2)
        self.screen.blit(text_surface, text_rect)

    def draw_buttons(self):
        """New Game in the header, arrows below the grid"""
        for command, rect in self.buttons.items():
            pygame.draw.rect(self.screen, COLORS['button'], rect, border_radius=6)
            if command == RESTART:
                label = self.font_small.render("New Game", True, COLORS['text_light'])
                self.screen.blit(label, label.get_rect(center=rect.center))
            else:
                pygame.draw.polygon(self.screen, COLORS['text_light'], arrow_points(rect, command))

    def draw_overlay(self, title, lines):
        """dim the board and show a message box"""
        overlay = pygame.Surface((self.window_width, self.window_height), pygame.SRCALPHA)
        overlay.fill(COLORS['overlay'])
        self.screen.blit(overlay, (0, 0))

        y = self.window_height // 3
        title_surface = self.font_large.render(title, True, COLORS['text_light'])
        self.screen.blit(title_surface, title_surface.get_rect(center=(self.window_width // 2, y)))
        for line in lines:
            y += 40
            surface = self.font_small.render(line, True, COLORS['text_light'])
            self.screen.blit(surface, surface.get_rect(center=(self.window_width // 2, y)))

    def handle_command(self, command):
        """apply one input command, returns False when the player quits"""
        if command == QUIT:
            return False

        if command == RESTART:
            self.game.restart()
            self._reset_view()
            logger.info("Game restarted")
        elif command == CONTINUE:
            self.show_win = False
            self.confetti.stop()
        elif not self.show_win and not self.show_game_over:
            if self.game.move(command):
                self.refresh()

        return True  # continue

    def run(self):
        """main loop"""
        logger.info("2048 started, best score %d", self.state.best_score)

        running = True
        while running:
            dt = self.clock.tick(FPS) / 1000.0
            now = time.time()

            for command in self.controls.commands(pygame.event.get()):
                running = self.handle_command(command)
                if not running:
                    break

            self.draw_board(now)

            if self.confetti.active(now):
                self.confetti.update(dt)
                self.confetti.draw(self.screen)

            if self.show_game_over:
                self.draw_overlay("Game Over!", [
                    "No more moves available.",
                    f"Final Score: {format_score(self.state.score)}",
                    "Press R to try again",
                ])
            elif self.show_win:
                self.draw_overlay("You Win!", [
                    f"You reached the {self.state.highest_tile()} tile!",
                    f"Your Score: {format_score(self.state.score)}",
                    "Press C to continue, R for a new game",
                ])

            # update display
            pygame.display.flip()

        pygame.quit()


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Play 2048")
    parser.add_argument("--best-score-file", type=str, default=None,
                        help="JSON file holding the best score (default: ~/.game2048/best_score.json)")
    parser.add_argument("--seed", type=int, default=None, help="Seed for tile spawning")
    parser.add_argument("--log-level", type=str, default="INFO", help="Logging level")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    setup_logging(args.log_level)

    path = args.best_score_file or default_best_score_path()
    game = Game2048(
        random_source=np.random.default_rng(args.seed),
        best_score_store=BestScoreStore(JsonFileStore(path)),
    )

    try:
        GameGUI(game).run()
    except pygame.error as e:
        logger.error("Error running game: %s", e)
        pygame.quit()
        sys.exit(1)


if __name__ == "__main__":
    main()
