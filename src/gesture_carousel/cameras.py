from __future__ import annotations

import glob
import logging
import re
from collections.abc import Iterable
from typing import NamedTuple

from linuxpy.video.device import (  # type: ignore[import-untyped]
    BufferType,
    Device,
    PixelFormat,
)

logger = logging.getLogger(__name__)

VIDEO_DEVICE_RE = re.compile(r"/dev/video(\d+)$")


class CameraInfo(NamedTuple):
    device_index: int
    name: str
    height: int
    width: int
    format: PixelFormat

    def __str__(self) -> str:
        return f"[{self.device_index}] {self.name} - {self.width}x{self.height} @ {self.format.name}"


def read_camera_info(device_path: str) -> CameraInfo | None:
    """Get the capture information of a video device, or None if it is not a usable color camera."""
    match = VIDEO_DEVICE_RE.search(device_path)
    if match is None:
        return None

    with Device(device_path) as device:
        # Only keep devices that support video capture
        if not any(f.type == BufferType.VIDEO_CAPTURE for f in device.info.formats):
            return None

        current_format = device.get_format(BufferType.VIDEO_CAPTURE)
        # Infrared cameras only provide GREY frames, useless for hand tracking
        if current_format.pixel_format == PixelFormat.GREY:
            return None

        return CameraInfo(
            device_index=int(match.group(1)),
            name=device.info.card,
            height=current_format.height,
            width=current_format.width,
            format=current_format.pixel_format,
        )


def list_cameras() -> list[CameraInfo]:
    """List all available cameras and return a list of CameraInfo objects."""
    cameras = []
    for device_path in sorted(glob.glob("/dev/video*")):
        try:
            camera_info = read_camera_info(device_path)
        except OSError as exc:
            logger.debug("Skipping %s: %s", device_path, exc)
            continue
        if camera_info is not None:
            cameras.append(camera_info)
    return cameras


def filter_cameras(cameras: Iterable[CameraInfo], name: str | None) -> list[CameraInfo]:
    """Keep the cameras whose name contains `name` (case insensitive). No filter keeps everything."""
    if not name:
        return list(cameras)
    name = name.lower()
    return [camera for camera in cameras if name in camera.name.lower()]
