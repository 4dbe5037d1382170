from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import TypeAlias

from .carousel import CarouselController, CarouselState
from .classifier import SwipeClassifier
from .gestures import GestureEvent
from .models.landmarks import HandLandmarks

logger = logging.getLogger(__name__)

GestureListener: TypeAlias = Callable[[GestureEvent, CarouselState], None]


class GestureSession:
    """Route the swipes detected in a stream of frames to a carousel.

    While suspended (an edit dialog is open), frames are not observed at all. Tracking restarts from scratch on
    resume.
    """

    def __init__(
        self,
        classifier: SwipeClassifier,
        controller: CarouselController,
        on_gesture: GestureListener | None = None,
    ) -> None:
        self.classifier = classifier
        self.controller = controller
        self.on_gesture = on_gesture
        self._suspended = False

    @property
    def suspended(self) -> bool:
        return self._suspended

    def suspend(self) -> None:
        if not self._suspended:
            logger.debug("Gesture tracking suspended")
        self._suspended = True

    def resume(self) -> None:
        if self._suspended:
            logger.debug("Gesture tracking resumed")
            self.classifier.reset()
        self._suspended = False

    def process_hands(self, hands: Sequence[HandLandmarks], now: int) -> GestureEvent | None:
        """Handle the hands detected in a frame taken at `now` (ms)."""
        if self._suspended:
            return None

        event = self.classifier.observe_hands(hands, now)
        if event is None:
            return None

        state = self.controller.dispatch(event)
        logger.debug("%s -> item %d (%s)", event.name, state.selected_index, state.selected_item.title)
        if self.on_gesture is not None:
            self.on_gesture(event, state)
        return event
