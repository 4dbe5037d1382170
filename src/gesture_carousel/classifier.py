"""Turn the per-frame position of a hand into discrete swipe events."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from .config import ClassifierConfig
from .gestures import GestureEvent
from .models.landmarks import HandLandmarks, Landmark

logger = logging.getLogger(__name__)


@dataclass
class ClassifierState:
    last_event_timestamp: int | None = None  # Timestamp (ms) of the last emitted swipe
    last_observed_x: float | None = None  # X of the tracked landmark in the previous observed frame

    def in_cooldown(self, now: int, cooldown: int) -> bool:
        """Check if a swipe was emitted less than `cooldown` ms before `now`."""
        if self.last_event_timestamp is None:
            return False
        return now - self.last_event_timestamp < cooldown


class SwipeClassifier:
    """Detect left/right swipes from the horizontal motion of one landmark.

    Each observed frame is compared to the previous one only: a swipe is emitted when the tracked landmark moved
    more than the threshold since the last frame. After a swipe, frames keep being recorded but nothing is emitted
    until the cooldown is over, so one physical swipe spanning many frames yields one event.
    """

    def __init__(self, config: ClassifierConfig | None = None) -> None:
        self.config = config or ClassifierConfig()
        self.state = ClassifierState()

    def observe(self, landmark: Landmark, now: int) -> GestureEvent | None:
        """Record the tracked landmark of a frame taken at `now` (ms), and return the swipe it completes, if any."""
        state = self.state
        event: GestureEvent | None = None

        if not state.in_cooldown(now, self.config.cooldown_ms) and state.last_observed_x is not None:
            delta = landmark.x - state.last_observed_x
            if delta > self.config.swipe_threshold:
                event = GestureEvent.SWIPE_RIGHT
            elif delta < -self.config.swipe_threshold:
                event = GestureEvent.SWIPE_LEFT

            if event is not None:
                state.last_event_timestamp = now
                logger.debug("%s detected at %dms (delta=%.3f)", event.name, now, delta)

        state.last_observed_x = landmark.x
        return event

    def observe_hands(self, hands: Sequence[HandLandmarks], now: int) -> GestureEvent | None:
        """Observe the tracked landmark of the first hand of a frame. Other hands are ignored."""
        if not hands:
            self.hand_lost()
            return None
        return self.observe(hands[0][self.config.tracked_landmark], now)

    def hand_lost(self) -> None:
        """Called for frames without any hand."""
        if self.config.reset_on_hand_lost and self.state.last_observed_x is not None:
            logger.debug("Hand lost, forgetting last observed position")
            self.state.last_observed_x = None

    def reset(self) -> None:
        """Forget everything, as when tracking stops."""
        self.state = ClassifierState()
