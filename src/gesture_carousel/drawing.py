from collections.abc import Sequence
from math import cos, radians, sin
from typing import TYPE_CHECKING, TypeAlias

import cv2  # type: ignore[import-untyped]

from .carousel import CarouselState
from .gestures import GestureEvent
from .models.landmarks import HAND_CONNECTIONS, HandLandmark, HandLandmarks

if TYPE_CHECKING:
    from .recognizer import StreamInfo

OpenCVImage: TypeAlias = cv2.typing.MatLike  # Type alias for images (numpy arrays)

# Colors (BGR format for OpenCV)
CYAN = (238, 211, 34)
WHITE = (255, 255, 255)
GREY = (110, 110, 110)
DARK = (26, 26, 26)
PURPLE = (247, 85, 168)
RED = (68, 68, 239)

CARD_WIDTH = 150
CARD_HEIGHT = 90
FONT = cv2.FONT_HERSHEY_SIMPLEX

HELP_LINES = [
    "Swipe hand left/right to rotate",
    "n: next  p: previous",
    "e: edit text  u: replace media  i: describe",
    "h: hide help  q/ESC: quit",
]


def draw_hand_landmarks(
    hands: Sequence[HandLandmarks],
    image: OpenCVImage,
    tracked: HandLandmark = HandLandmark.MIDDLE_FINGER_MCP,
    mirroring: bool = False,
) -> OpenCVImage:
    """Draw the detected hands, the first one with its tracked landmark highlighted.

    Landmarks are in detector space: pass `mirroring` when `image` is the horizontally flipped frame.
    """
    height, width = image.shape[:2]
    for hand_index, hand in enumerate(hands):
        points = [(landmark.mirrored() if mirroring else landmark).to_pixels(width, height) for landmark in hand]
        for start, end in HAND_CONNECTIONS:
            cv2.line(image, points[start], points[end], CYAN if hand_index == 0 else GREY, 2)
        for point in points:
            cv2.circle(image, point, 3, WHITE, -1)
        if hand_index == 0:
            cv2.circle(image, points[tracked], 8, PURPLE, 2)
    return image


def project_item(angle: float, center: tuple[int, int], radius: int, tilt: float) -> tuple[int, int, float]:
    """Project an item placed at `angle` (degrees) on the ring.

    Returns the (x, y) position of the center of its card and its depth, from -1 (back of the ring) to 1 (front).
    """
    depth = cos(radians(angle))
    x = center[0] + int(round(radius * sin(radians(angle))))
    # The ring is seen from slightly above or below depending on the tilt
    y = center[1] - int(round(radius * depth * sin(radians(tilt))))
    return x, y, depth


def draw_card(
    image: OpenCVImage, title: str, theme: str, center: tuple[int, int], scale: float, selected: bool
) -> None:
    half_width = int(CARD_WIDTH * scale / 2)
    half_height = int(CARD_HEIGHT * scale / 2)
    top_left = (center[0] - half_width, center[1] - half_height)
    bottom_right = (center[0] + half_width, center[1] + half_height)

    cv2.rectangle(image, top_left, bottom_right, DARK, -1)
    cv2.rectangle(image, top_left, bottom_right, CYAN if selected else GREY, 2 if selected else 1)

    text_x = top_left[0] + 6
    cv2.putText(image, title, (text_x, center[1]), FONT, 0.5 * scale, WHITE if selected else GREY, 1, cv2.LINE_AA)
    cv2.putText(
        image, theme.upper(), (text_x, center[1] + int(20 * scale)), FONT, 0.35 * scale, CYAN, 1, cv2.LINE_AA
    )


def draw_carousel(state: CarouselState, image: OpenCVImage, radius: int = 250, tilt: float = -10.0) -> OpenCVImage:
    """Draw the items of the carousel on a ring, turned by the carousel rotation, the selected one in front."""
    height, width = image.shape[:2]
    center = (width // 2, height // 2)

    overlay = image.copy()
    projected = []
    for index, item in enumerate(state.items):
        x, y, depth = project_item(state.rotation_angle + state.item_angle(index), center, radius, tilt)
        projected.append((depth, index, item, (x, y)))

    # Farthest first so front cards are drawn over back ones
    for depth, index, item, position in sorted(projected, key=lambda p: p[0]):
        scale = 0.6 + 0.4 * (depth + 1) / 2
        draw_card(overlay, item.title, item.theme, position, scale, index == state.selected_index)

    return cv2.addWeighted(overlay, 0.85, image, 0.15, 0)


def draw_status(
    image: OpenCVImage,
    stream_info: "StreamInfo | None" = None,
    last_gesture: GestureEvent | None = None,
    suspended: bool = False,
    show_help: bool = True,
    description: str | None = None,
) -> OpenCVImage:
    height, width = image.shape[:2]
    line_y = 20

    if stream_info is not None:
        cv2.putText(image, f"FPS: {stream_info.frames_fps:.1f}", (10, line_y), FONT, 0.5, WHITE, 1, cv2.LINE_AA)
        line_y += 20

    if last_gesture is not None:
        cv2.putText(image, f"Last: {last_gesture.name}", (10, line_y), FONT, 0.5, CYAN, 1, cv2.LINE_AA)

    if suspended:
        cv2.putText(image, "EDITING - see terminal", (10, height - 20), FONT, 0.7, RED, 2, cv2.LINE_AA)
    elif show_help:
        for offset, line in enumerate(reversed(HELP_LINES)):
            cv2.putText(image, line, (10, height - 15 - offset * 18), FONT, 0.45, GREY, 1, cv2.LINE_AA)

    if description:
        # Rough wrap on the width of the frame
        max_chars = max(20, width // 9)
        words = description.split()
        lines: list[str] = []
        for word in words:
            if lines and len(lines[-1]) + len(word) + 1 <= max_chars:
                lines[-1] += f" {word}"
            else:
                lines.append(word)
        for offset, line in enumerate(lines):
            cv2.putText(image, line, (10, 60 + offset * 18), FONT, 0.45, PURPLE, 1, cv2.LINE_AA)

    return image
