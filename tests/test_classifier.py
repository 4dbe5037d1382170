"""
Tests for the swipe classifier
==============================
"""

import pytest

from gesture_carousel.classifier import ClassifierState, SwipeClassifier
from gesture_carousel.config import ClassifierConfig
from gesture_carousel.gestures import GestureEvent
from gesture_carousel.models.landmarks import NB_HAND_LANDMARKS, HandLandmark, Landmark


def make_hand(x: float, tracked: HandLandmark = HandLandmark.MIDDLE_FINGER_MCP, others_x: float = 0.9) -> list:
    """Hand whose tracked landmark is at `x`, every other landmark far away at `others_x`."""
    hand = [Landmark(others_x, 0.5)] * NB_HAND_LANDMARKS
    hand[tracked] = Landmark(x, 0.5)
    return hand


class TestSwipeClassifier:
    """Per-frame swipe detection."""

    @pytest.fixture
    def classifier(self):
        return SwipeClassifier(ClassifierConfig(cooldown_ms=800, swipe_threshold=0.05))

    def test_defaults(self):
        classifier = SwipeClassifier()
        assert classifier.config.cooldown_ms == 800
        assert classifier.config.swipe_threshold == 0.05
        assert classifier.state == ClassifierState()

    def test_first_sample_never_emits(self, classifier):
        assert classifier.observe(Landmark(0.9, 0.5), 0) is None
        assert classifier.state.last_observed_x == 0.9
        assert classifier.state.last_event_timestamp is None

    def test_reference_scenario(self, classifier):
        assert classifier.observe(Landmark(0.40, 0.5), 0) is None
        assert classifier.observe(Landmark(0.50, 0.5), 100) == GestureEvent.SWIPE_RIGHT
        assert classifier.observe(Landmark(0.60, 0.5), 200) is None
        assert classifier.observe(Landmark(0.70, 0.5), 900) == GestureEvent.SWIPE_RIGHT
        assert classifier.state.last_event_timestamp == 900

    def test_swipe_left(self, classifier):
        classifier.observe(Landmark(0.6, 0.5), 0)
        assert classifier.observe(Landmark(0.4, 0.5), 33) == GestureEvent.SWIPE_LEFT
        assert classifier.state.last_event_timestamp == 33

    def test_small_moves_emit_nothing(self, classifier):
        classifier.observe(Landmark(0.50, 0.5), 0)
        assert classifier.observe(Landmark(0.52, 0.5), 33) is None
        assert classifier.observe(Landmark(0.49, 0.5), 66) is None
        assert classifier.state.last_event_timestamp is None

    def test_slow_swipe_is_missed(self, classifier):
        """A long move split in small steps never crosses the per-frame threshold."""
        events = [classifier.observe(Landmark(0.2 + i * 0.04, 0.5), i * 33) for i in range(15)]
        assert events == [None] * 15

    @pytest.mark.parametrize("delta", [10.0, -10.0, 0.5, -0.5])
    def test_cooldown_blocks_any_delta(self, classifier, delta):
        classifier.observe(Landmark(0.5, 0.5), 0)
        first = classifier.observe(Landmark(0.6, 0.5), 100)
        assert first == GestureEvent.SWIPE_RIGHT
        assert classifier.observe(Landmark(0.6 + delta, 0.5), 899) is None

    def test_cooldown_still_records_position(self, classifier):
        classifier.observe(Landmark(0.5, 0.5), 0)
        classifier.observe(Landmark(0.6, 0.5), 100)
        classifier.observe(Landmark(0.9, 0.5), 500)
        assert classifier.state.last_observed_x == 0.9
        # The delta after the cooldown is computed from the last recorded position, not the one of the swipe
        assert classifier.observe(Landmark(0.92, 0.5), 1000) is None

    def test_cooldown_ends_exactly_after_delay(self, classifier):
        classifier.observe(Landmark(0.5, 0.5), 0)
        classifier.observe(Landmark(0.6, 0.5), 100)
        classifier.observe(Landmark(0.6, 0.5), 899)
        assert classifier.observe(Landmark(0.4, 0.5), 900) == GestureEvent.SWIPE_LEFT

    @pytest.mark.parametrize(
        "start, end",
        [
            (0.0, 0.05),  # exactly +threshold
            (0.05, 0.0),  # exactly -threshold
        ],
    )
    def test_threshold_is_strict(self, classifier, start, end):
        classifier.observe(Landmark(start, 0.5), 0)
        assert classifier.observe(Landmark(end, 0.5), 33) is None

    @pytest.mark.parametrize(
        "start, end, expected",
        [
            (0.0, 0.0501, GestureEvent.SWIPE_RIGHT),
            (0.0501, 0.0, GestureEvent.SWIPE_LEFT),
        ],
    )
    def test_threshold_plus_epsilon(self, classifier, start, end, expected):
        classifier.observe(Landmark(start, 0.5), 0)
        assert classifier.observe(Landmark(end, 0.5), 33) == expected

    def test_reset(self, classifier):
        classifier.observe(Landmark(0.5, 0.5), 0)
        classifier.observe(Landmark(0.6, 0.5), 100)
        classifier.reset()
        assert classifier.state == ClassifierState()
        # No cooldown and no previous position anymore
        assert classifier.observe(Landmark(0.9, 0.5), 150) is None
        assert classifier.observe(Landmark(0.7, 0.5), 180) == GestureEvent.SWIPE_LEFT


class TestObserveHands:
    """Selection of the tracked landmark in the detected hands."""

    def test_uses_tracked_landmark_of_first_hand(self):
        classifier = SwipeClassifier()
        classifier.observe_hands([make_hand(0.4)], 0)
        assert classifier.state.last_observed_x == 0.4
        assert classifier.observe_hands([make_hand(0.5)], 100) == GestureEvent.SWIPE_RIGHT

    def test_other_hands_are_ignored(self):
        classifier = SwipeClassifier()
        classifier.observe_hands([make_hand(0.4), make_hand(0.1)], 0)
        assert classifier.observe_hands([make_hand(0.41), make_hand(0.9)], 100) is None
        assert classifier.state.last_observed_x == 0.41

    def test_configured_landmark(self):
        config = ClassifierConfig(tracked_landmark=HandLandmark.WRIST)
        classifier = SwipeClassifier(config)
        classifier.observe_hands([make_hand(0.3, tracked=HandLandmark.WRIST)], 0)
        assert classifier.state.last_observed_x == 0.3

    def test_position_kept_when_hand_lost_by_default(self):
        classifier = SwipeClassifier()
        classifier.observe_hands([make_hand(0.4)], 0)
        assert classifier.observe_hands([], 33) is None
        assert classifier.state.last_observed_x == 0.4
        # The swipe is computed across the tracking gap
        assert classifier.observe_hands([make_hand(0.6)], 60_000) == GestureEvent.SWIPE_RIGHT

    def test_position_forgotten_when_hand_lost_if_configured(self):
        classifier = SwipeClassifier(ClassifierConfig(reset_on_hand_lost=True))
        classifier.observe_hands([make_hand(0.4)], 0)
        classifier.observe_hands([], 33)
        assert classifier.state.last_observed_x is None
        assert classifier.observe_hands([make_hand(0.6)], 66) is None

    def test_hand_lost_keeps_cooldown(self):
        classifier = SwipeClassifier(ClassifierConfig(reset_on_hand_lost=True))
        classifier.observe_hands([make_hand(0.4)], 0)
        classifier.observe_hands([make_hand(0.5)], 100)
        classifier.hand_lost()
        assert classifier.state.last_event_timestamp == 100
