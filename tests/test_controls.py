"""Tests for keyboard and swipe input."""

import pygame
import pytest

from game2048.controls import (
    CONTINUE,
    QUIT,
    RESTART,
    ControlEvents,
    SwipeTracker,
    button_at,
    direction_for_key,
    swipe_direction,
)


@pytest.mark.parametrize("key, command", [
    (pygame.K_LEFT, 'left'),
    (pygame.K_a, 'left'),
    (pygame.K_RIGHT, 'right'),
    (pygame.K_d, 'right'),
    (pygame.K_UP, 'up'),
    (pygame.K_w, 'up'),
    (pygame.K_DOWN, 'down'),
    (pygame.K_s, 'down'),
    (pygame.K_r, RESTART),
    (pygame.K_c, CONTINUE),
    (pygame.K_ESCAPE, QUIT),
])
def test_key_bindings(key, command):
    assert direction_for_key(key) == command


def test_unbound_key():
    assert direction_for_key(pygame.K_q) is None


class TestSwipeDirection:
    @pytest.mark.parametrize("end, expected", [
        ((160, 100), 'right'),
        ((40, 100), 'left'),
        ((100, 170), 'down'),
        ((100, 30), 'up'),
        ((160, 130), 'right'),   # x dominates
        ((120, 20), 'up'),       # y dominates
    ])
    def test_dominant_axis(self, end, expected):
        assert swipe_direction((100, 100), end) == expected

    def test_short_drag_is_ignored(self):
        assert swipe_direction((100, 100), (149, 120)) is None

    def test_threshold_is_inclusive(self):
        assert swipe_direction((100, 100), (150, 100)) == 'right'

    def test_equal_axes_go_vertical(self):
        assert swipe_direction((0, 0), (60, 60)) == 'down'

    def test_custom_threshold(self):
        assert swipe_direction((0, 0), (20, 0), min_distance=10) == 'right'


class TestSwipeTracker:
    def test_mouse_drag(self):
        tracker = SwipeTracker()
        tracker.press((10, 10))
        assert tracker.release((10, 100)) == 'down'

    def test_release_without_press(self):
        assert SwipeTracker().release((10, 100)) is None

    def test_second_finger_cancels(self):
        tracker = SwipeTracker()
        tracker.press((0, 0), finger_id=1)
        tracker.press((5, 5), finger_id=2)

        assert tracker.release((200, 0), finger_id=1) is None
        assert tracker.release((200, 0), finger_id=2) is None

        # next single-finger gesture works again
        tracker.press((0, 0), finger_id=3)
        assert tracker.release((0, -80), finger_id=3) == 'up'


class TestControlEvents:
    def make_events(self):
        return ControlEvents((400, 400))

    def test_keys_and_quit(self):
        events = [
            pygame.event.Event(pygame.KEYDOWN, key=pygame.K_LEFT),
            pygame.event.Event(pygame.KEYDOWN, key=pygame.K_q),
            pygame.event.Event(pygame.KEYDOWN, key=pygame.K_w),
            pygame.event.Event(pygame.QUIT),
        ]
        assert list(self.make_events().commands(events)) == ['left', 'up', QUIT]

    def test_mouse_swipe(self):
        events = [
            pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=(300, 200)),
            pygame.event.Event(pygame.MOUSEBUTTONUP, button=1, pos=(100, 210)),
        ]
        assert list(self.make_events().commands(events)) == ['left']

    def test_right_button_is_ignored(self):
        events = [
            pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=3, pos=(300, 200)),
            pygame.event.Event(pygame.MOUSEBUTTONUP, button=3, pos=(100, 210)),
        ]
        assert list(self.make_events().commands(events)) == []

    def test_finger_swipe_uses_window_pixels(self):
        events = [
            pygame.event.Event(pygame.FINGERDOWN, finger_id=0, x=0.5, y=0.5),
            pygame.event.Event(pygame.FINGERUP, finger_id=0, x=0.5, y=0.6),
        ]
        # 0.1 of a 400 px window is 40 px, below the threshold
        assert list(self.make_events().commands(events)) == []

        events[1] = pygame.event.Event(pygame.FINGERUP, finger_id=0, x=0.5, y=0.7)
        assert list(self.make_events().commands(events)) == ['down']

    def test_commands_are_lazy(self):
        def endless():
            while True:
                yield pygame.event.Event(pygame.KEYDOWN, key=pygame.K_r)

        commands = self.make_events().commands(endless())
        assert [next(commands) for _ in range(3)] == [RESTART] * 3


class TestButtons:
    BUTTONS = {
        RESTART: pygame.Rect(300, 60, 120, 36),
        'left': pygame.Rect(90, 500, 60, 60),
        'right': pygame.Rect(300, 500, 60, 60),
    }

    def make_events(self):
        return ControlEvents((450, 600), self.BUTTONS)

    def test_button_at(self):
        assert button_at(self.BUTTONS, (310, 70)) == RESTART
        assert button_at(self.BUTTONS, (100, 520)) == 'left'
        assert button_at(self.BUTTONS, (10, 10)) is None

    def test_click_on_button(self):
        events = [
            pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=(320, 520)),
            pygame.event.Event(pygame.MOUSEBUTTONUP, button=1, pos=(320, 520)),
        ]
        assert list(self.make_events().commands(events)) == ['right']

    def test_button_press_does_not_start_swipe(self):
        # dragging off a button is not a swipe
        events = [
            pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=(100, 520)),
            pygame.event.Event(pygame.MOUSEBUTTONUP, button=1, pos=(100, 300)),
        ]
        assert list(self.make_events().commands(events)) == ['left']

    def test_tap_on_button(self):
        # (0.7, 0.12) of a 450x600 window is (315, 72), inside New Game
        events = [
            pygame.event.Event(pygame.FINGERDOWN, finger_id=0, x=0.7, y=0.12),
            pygame.event.Event(pygame.FINGERUP, finger_id=0, x=0.7, y=0.12),
        ]
        assert list(self.make_events().commands(events)) == [RESTART]

    def test_swipe_outside_buttons_still_works(self):
        events = [
            pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=(200, 300)),
            pygame.event.Event(pygame.MOUSEBUTTONUP, button=1, pos=(200, 200)),
        ]
        assert list(self.make_events().commands(events)) == ['up']
