"""Browse a carousel of pictures by swiping a hand in front of a camera."""

from .carousel import CarouselController, CarouselState
from .classifier import ClassifierState, SwipeClassifier
from .config import Config
from .gestures import GestureEvent
from .models import DEFAULT_ITEMS, HandLandmark, Landmark, MediaKind, PhotoItem
from .session import GestureSession

__all__ = [
    # Core classes
    "SwipeClassifier",
    "ClassifierState",
    "CarouselController",
    "CarouselState",
    "GestureSession",
    # Models
    "GestureEvent",
    "HandLandmark",
    "Landmark",
    "MediaKind",
    "PhotoItem",
    "DEFAULT_ITEMS",
    # Configuration
    "Config",
]
