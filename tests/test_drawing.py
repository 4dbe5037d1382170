"""
Tests for the OpenCV rendering
==============================
"""

import numpy as np
import pytest

from gesture_carousel.carousel import CarouselController
from gesture_carousel.drawing import draw_carousel, draw_hand_landmarks, draw_status, project_item
from gesture_carousel.gestures import GestureEvent
from gesture_carousel.models.items import DEFAULT_ITEMS
from gesture_carousel.models.landmarks import NB_HAND_LANDMARKS, Landmark


@pytest.fixture
def image():
    return np.zeros((480, 640, 3), dtype=np.uint8)


class TestProjection:
    def test_front_item(self):
        x, y, depth = project_item(0, (320, 240), 250, 0)
        assert (x, y) == (320, 240)
        assert depth == pytest.approx(1)

    def test_side_and_back_items(self):
        x, _, depth = project_item(90, (320, 240), 250, 0)
        assert x == 570
        assert depth == pytest.approx(0, abs=1e-9)
        _, _, depth = project_item(180, (320, 240), 250, 0)
        assert depth == pytest.approx(-1)

    def test_selected_item_always_in_front(self):
        controller = CarouselController(DEFAULT_ITEMS)
        for _ in range(11):
            state = controller.advance()
            angle = state.rotation_angle + state.item_angle(state.selected_index)
            assert project_item(angle, (0, 0), 100, 0)[2] == pytest.approx(1)


class TestDrawing:
    def test_draw_carousel(self, image):
        state = CarouselController(DEFAULT_ITEMS).state
        result = draw_carousel(state, image)
        assert result.shape == image.shape
        assert result.any()

    def test_draw_hand_landmarks(self, image):
        hand = [Landmark(0.5, 0.5)] * NB_HAND_LANDMARKS
        result = draw_hand_landmarks([hand], image)
        assert result[240, 320].any()

    def test_draw_mirrored_hand_landmarks(self, image):
        hand = [Landmark(0.25, 0.5)] * NB_HAND_LANDMARKS
        result = draw_hand_landmarks([hand], image, mirroring=True)
        assert result[240, 480].any()
        assert not result[240, 160].any()

    def test_draw_status(self, image):
        result = draw_status(
            image, last_gesture=GestureEvent.SWIPE_LEFT, suspended=True, description="Mist between trees."
        )
        assert result.any()
