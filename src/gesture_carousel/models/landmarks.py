from __future__ import annotations

from collections.abc import Sequence
from enum import IntEnum
from typing import TYPE_CHECKING, Any, NamedTuple, TypeAlias

if TYPE_CHECKING:
    from ..mediapipe import NormalizedLandmark


class HandLandmark(IntEnum):
    """MediaPipe hand landmark indices."""

    WRIST = 0
    THUMB_CMC = 1
    THUMB_MCP = 2
    THUMB_IP = 3
    THUMB_TIP = 4
    INDEX_FINGER_MCP = 5
    INDEX_FINGER_PIP = 6
    INDEX_FINGER_DIP = 7
    INDEX_FINGER_TIP = 8
    MIDDLE_FINGER_MCP = 9
    MIDDLE_FINGER_PIP = 10
    MIDDLE_FINGER_DIP = 11
    MIDDLE_FINGER_TIP = 12
    RING_FINGER_MCP = 13
    RING_FINGER_PIP = 14
    RING_FINGER_DIP = 15
    RING_FINGER_TIP = 16
    PINKY_MCP = 17
    PINKY_PIP = 18
    PINKY_DIP = 19
    PINKY_TIP = 20


NB_HAND_LANDMARKS = len(HandLandmark)

# Landmark pairs to join when drawing a hand
HAND_CONNECTIONS: list[tuple[HandLandmark, HandLandmark]] = [
    # Palm
    (HandLandmark.WRIST, HandLandmark.THUMB_CMC),
    (HandLandmark.WRIST, HandLandmark.INDEX_FINGER_MCP),
    (HandLandmark.INDEX_FINGER_MCP, HandLandmark.MIDDLE_FINGER_MCP),
    (HandLandmark.MIDDLE_FINGER_MCP, HandLandmark.RING_FINGER_MCP),
    (HandLandmark.RING_FINGER_MCP, HandLandmark.PINKY_MCP),
    (HandLandmark.WRIST, HandLandmark.PINKY_MCP),
    # Thumb
    (HandLandmark.THUMB_CMC, HandLandmark.THUMB_MCP),
    (HandLandmark.THUMB_MCP, HandLandmark.THUMB_IP),
    (HandLandmark.THUMB_IP, HandLandmark.THUMB_TIP),
    # Index
    (HandLandmark.INDEX_FINGER_MCP, HandLandmark.INDEX_FINGER_PIP),
    (HandLandmark.INDEX_FINGER_PIP, HandLandmark.INDEX_FINGER_DIP),
    (HandLandmark.INDEX_FINGER_DIP, HandLandmark.INDEX_FINGER_TIP),
    # Middle
    (HandLandmark.MIDDLE_FINGER_MCP, HandLandmark.MIDDLE_FINGER_PIP),
    (HandLandmark.MIDDLE_FINGER_PIP, HandLandmark.MIDDLE_FINGER_DIP),
    (HandLandmark.MIDDLE_FINGER_DIP, HandLandmark.MIDDLE_FINGER_TIP),
    # Ring
    (HandLandmark.RING_FINGER_MCP, HandLandmark.RING_FINGER_PIP),
    (HandLandmark.RING_FINGER_PIP, HandLandmark.RING_FINGER_DIP),
    (HandLandmark.RING_FINGER_DIP, HandLandmark.RING_FINGER_TIP),
    # Pinky
    (HandLandmark.PINKY_MCP, HandLandmark.PINKY_PIP),
    (HandLandmark.PINKY_PIP, HandLandmark.PINKY_DIP),
    (HandLandmark.PINKY_DIP, HandLandmark.PINKY_TIP),
]


class Landmark(NamedTuple):
    """A hand landmark in normalized detector space.

    Attributes:
        x: X coordinate relative to the frame width (0 to 1)
        y: Y coordinate relative to the frame height (0 to 1)
        z: Depth relative to the wrist (smaller is closer to the camera)
    """

    x: float
    y: float
    z: float = 0.0

    @classmethod
    def from_normalized(cls, normalized_landmark: NormalizedLandmark) -> Landmark:
        """Create a Landmark from a MediaPipe normalized landmark, kept in detector space."""
        return cls(x=normalized_landmark.x, y=normalized_landmark.y, z=normalized_landmark.z)

    def mirrored(self) -> Landmark:
        """The same landmark seen in a horizontally flipped image. Only meant for display."""
        return self._replace(x=1 - self.x)

    def to_pixels(self, width: int, height: int) -> tuple[int, int]:
        """Get the (x, y) position in an image of the given size."""
        return int(round(self.x * width)), int(round(self.y * height))

    def to_dict(self) -> dict[str, Any]:
        return {"x": self.x, "y": self.y, "z": self.z}


HandLandmarks: TypeAlias = Sequence[Landmark]  # The 21 landmarks of one hand, ordered as HandLandmark
