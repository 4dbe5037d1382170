from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

VIDEO_EXTENSIONS = {".mp4", ".webm", ".mov", ".mkv", ".avi", ".m4v", ".ogv"}

DEFAULT_UPLOAD_TITLE = "Custom Image"
UPLOAD_THEME = "User Upload"


class MediaKind(str, Enum):
    IMAGE = "image"
    VIDEO = "video"


class PhotoItem(BaseModel):
    """One entry of the carousel."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(description="Identity of the item, never changes")
    url: str = Field(description="Location of the image or video")
    title: str = Field(description="Title shown on the card")
    theme: str = Field(description="Theme shown under the title")
    media_kind: MediaKind = Field(MediaKind.IMAGE, description="Whether the url points to an image or a video")

    @property
    def is_video(self) -> bool:
        return self.media_kind == MediaKind.VIDEO


EDITABLE_FIELDS: frozenset[str] = frozenset(name for name in PhotoItem.model_fields if name != "id")


DEFAULT_ITEMS: tuple[PhotoItem, ...] = (
    PhotoItem(id=1, url="https://picsum.photos/id/10/600/1067", title="Misty Forest", theme="Mysterious Nature"),
    PhotoItem(id=2, url="https://picsum.photos/id/28/600/1067", title="Forest Path", theme="Adventure"),
    PhotoItem(id=3, url="https://picsum.photos/id/49/600/1067", title="Misty Coast", theme="Tranquility"),
    PhotoItem(id=4, url="https://picsum.photos/id/54/600/1067", title="Deep Canyon", theme="Vastness"),
    PhotoItem(id=5, url="https://picsum.photos/id/60/600/1067", title="Office Tech", theme="Productivity"),
    PhotoItem(id=6, url="https://picsum.photos/id/119/600/1067", title="Metal Work", theme="Industrial"),
    PhotoItem(id=7, url="https://picsum.photos/id/164/600/1067", title="City Boat", theme="Urban Life"),
    PhotoItem(id=8, url="https://picsum.photos/id/180/600/1067", title="Laptop Work", theme="Focus"),
)


def media_kind_for_path(path: Path | str) -> MediaKind:
    return MediaKind.VIDEO if Path(path).suffix.lower() in VIDEO_EXTENSIONS else MediaKind.IMAGE


def patch_from_media_path(path: Path | str) -> dict[str, Any]:
    """Build the fields to apply to the selected item when its media is replaced by a local file.

    The title is taken from the file name (up to its first dot), the theme marks the item as uploaded.
    """
    path = Path(path).expanduser()
    title = path.name.split(".")[0] or DEFAULT_UPLOAD_TITLE
    return {
        "url": path.resolve().as_uri(),
        "title": title,
        "theme": UPLOAD_THEME,
        "media_kind": media_kind_for_path(path),
    }
