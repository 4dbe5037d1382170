from __future__ import annotations

from enum import Enum


class GestureEvent(str, Enum):
    SWIPE_LEFT = "Swipe_Left"  # Hand moved toward lower x between two frames
    SWIPE_RIGHT = "Swipe_Right"  # Hand moved toward higher x between two frames


# A left swipe moves forward through the items, a right swipe goes back
ADVANCING_GESTURES: set[GestureEvent] = {GestureEvent.SWIPE_LEFT}
RETREATING_GESTURES: set[GestureEvent] = {GestureEvent.SWIPE_RIGHT}
