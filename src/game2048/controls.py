"""
keyboard, swipe and on-screen button input -> game commands

commands are the four direction symbols plus 'restart', 'continue' and 'quit'
"""
import pygame

from .config import MIN_SWIPE_DISTANCE
from .state import DOWN, LEFT, RIGHT, UP

RESTART = 'restart'
CONTINUE = 'continue'
QUIT = 'quit'

KEY_BINDINGS = {
    pygame.K_LEFT: LEFT,
    pygame.K_a: LEFT,
    pygame.K_RIGHT: RIGHT,
    pygame.K_d: RIGHT,
    pygame.K_UP: UP,
    pygame.K_w: UP,
    pygame.K_DOWN: DOWN,
    pygame.K_s: DOWN,
    pygame.K_r: RESTART,
    pygame.K_c: CONTINUE,
    pygame.K_RETURN: CONTINUE,
    pygame.K_ESCAPE: QUIT,
}


def direction_for_key(key):
    """command for a pygame key code, None if the key is not bound"""
    return KEY_BINDINGS.get(key)


def swipe_direction(start, end, min_distance=MIN_SWIPE_DISTANCE):
    """
    direction of a drag from start to end (pixel positions)

    the longer axis wins; drags shorter than min_distance on that axis
    are ignored and return None
    """
    dx = end[0] - start[0]
    dy = end[1] - start[1]

    if max(abs(dx), abs(dy)) < min_distance:
        return None

    if abs(dx) > abs(dy):
        return RIGHT if dx > 0 else LEFT
    return DOWN if dy > 0 else UP


class SwipeTracker:
    """
    follows one pointer (mouse button or finger) from press to release

    a second finger touching down cancels the gesture
    """

    def __init__(self, min_distance=MIN_SWIPE_DISTANCE):
        self.min_distance = min_distance
        self.start = None
        self.fingers = set()
        self.cancelled = False

    def press(self, pos, finger_id=None):
        if finger_id is not None:
            self.fingers.add(finger_id)
            if len(self.fingers) > 1:
                self.cancelled = True
                return
        self.start = pos
        self.cancelled = False

    def release(self, pos, finger_id=None):
        """end the gesture, returning a direction or None"""
        if finger_id is not None:
            self.fingers.discard(finger_id)

        start, self.start = self.start, None
        if start is None or self.cancelled:
            if not self.fingers:
                self.cancelled = False
            return None
        return swipe_direction(start, pos, self.min_distance)


def button_at(buttons, pos):
    """command of the button (command -> pygame.Rect) under pos, or None"""
    for command, rect in buttons.items():
        if rect.collidepoint(int(pos[0]), int(pos[1])):
            return command
    return None


class ControlEvents:
    """
    translates pygame events into game commands

    buttons maps commands to screen rects; a click or tap inside one
    fires its command straight away and does not start a swipe
    """

    def __init__(self, window_size, buttons=None, min_distance=MIN_SWIPE_DISTANCE):
        self.window_size = window_size
        self.buttons = dict(buttons or {})
        self.swipe = SwipeTracker(min_distance)

    def _finger_pos(self, event):
        # finger coordinates are normalized to 0..1
        width, height = self.window_size
        return event.x * width, event.y * height

    def command_for(self, event):
        """the command an event stands for, or None"""
        if event.type == pygame.QUIT:
            return QUIT
        if event.type == pygame.KEYDOWN:
            return direction_for_key(event.key)
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            # touch input also shows up as emulated mouse events
            if getattr(event, 'touch', False):
                return None
            command = button_at(self.buttons, event.pos)
            if command is not None:
                return command
            self.swipe.press(event.pos)
        elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
            if getattr(event, 'touch', False):
                return None
            return self.swipe.release(event.pos)
        elif event.type == pygame.FINGERDOWN:
            pos = self._finger_pos(event)
            command = button_at(self.buttons, pos)
            if command is not None:
                return command
            self.swipe.press(pos, event.finger_id)
        elif event.type == pygame.FINGERUP:
            return self.swipe.release(self._finger_pos(event), event.finger_id)
        return None

    def commands(self, events):
        """lazily yield the commands found in an event stream"""
        for event in events:
            command = self.command_for(event)
            if command is not None:
                yield command
