from .items import DEFAULT_ITEMS, EDITABLE_FIELDS, MediaKind, PhotoItem, patch_from_media_path
from .landmarks import HAND_CONNECTIONS, HandLandmark, HandLandmarks, Landmark

__all__ = [
    "DEFAULT_ITEMS",
    "EDITABLE_FIELDS",
    "MediaKind",
    "PhotoItem",
    "patch_from_media_path",
    "HAND_CONNECTIONS",
    "HandLandmark",
    "HandLandmarks",
    "Landmark",
]
