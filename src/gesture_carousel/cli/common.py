from __future__ import annotations

import logging
import os
import sys

import cv2  # type: ignore[import-untyped]
import typer

from ..cameras import CameraInfo, filter_cameras, list_cameras
from ..carousel import CarouselController
from ..classifier import SwipeClassifier
from ..config import Config
from ..session import GestureListener, GestureSession

app = typer.Typer(help="Browse a carousel of pictures by swiping your hand in front of a camera.")

DEFAULT_USER_CONFIG_PATH = Config.get_user_path()

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(verbose: bool = False) -> None:
    """Send the logs of the package to stderr."""
    logger = logging.getLogger("gesture_carousel")
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)

    # Configure handler if logger doesn't have one
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
        logger.propagate = False  # Don't propagate to root logger


def build_session(config: Config, on_gesture: GestureListener | None = None) -> GestureSession:
    """Create a carousel from the configured items, and a session feeding it with swipes."""
    return GestureSession(
        SwipeClassifier(config.classifier),
        CarouselController(config.carousel.items),
        on_gesture=on_gesture,
    )


def pick_camera(filter_name: str | None = None) -> CameraInfo | None:
    """List cameras and let user pick one. Returns selected CameraInfo or None.

    Args:
        filter_name: Optional string to filter cameras by name (case insensitive)
    """
    cameras = list_cameras()

    if not cameras:
        print("No cameras found!", file=sys.stderr)
        return None

    cameras = filter_cameras(cameras, filter_name)
    if not cameras:
        print(f"No cameras found matching '{filter_name}'", file=sys.stderr)
        return None

    if len(cameras) == 1:
        selected = cameras[0]
        print(f"Auto-selected camera: {selected}")
        return selected

    print(f"Cameras matching '{filter_name}':" if filter_name else "Available cameras:")
    cam_dict = {}
    for cam in cameras:
        print(f"  {cam}")
        cam_dict[cam.device_index] = cam

    valid_indices = ", ".join(map(str, sorted(cam_dict)))

    while True:
        choice = input(f"\nSelect camera ({valid_indices} or q to quit): ")
        if choice.lower() == "q":
            return None
        try:
            return cam_dict[int(choice)]
        except (ValueError, KeyError):
            print(f"Invalid choice. Please enter one of: {valid_indices}", file=sys.stderr)


def init_camera_capture(
    camera_info: CameraInfo, window_title: str | None, desired_size: int
) -> tuple[cv2.VideoCapture | None, str | None]:
    """Initialize camera capture, set resolution, and open a preview window unless `window_title` is None."""
    cap = cv2.VideoCapture(camera_info.device_index)

    if not cap.isOpened():
        print(f"Error: Could not open camera {camera_info.device_index}", file=sys.stderr)
        return None, None

    # Calculate dimensions based on desired_size while maintaining aspect ratio
    aspect_ratio = camera_info.width / camera_info.height
    if camera_info.width > camera_info.height:
        width = desired_size
        height = int(desired_size / aspect_ratio)
    else:
        height = desired_size
        width = int(desired_size * aspect_ratio)

    cap.set(cv2.CAP_PROP_FRAME_WIDTH, width)
    cap.set(cv2.CAP_PROP_FRAME_HEIGHT, height)
    cap.set(cv2.CAP_PROP_FOURCC, cv2.VideoWriter.fourcc(*"MJPG"))  # Use MJPEG for better performance
    cap.set(cv2.CAP_PROP_FPS, 30)

    cap_fps = cap.get(cv2.CAP_PROP_FPS)
    height = int(cap.get(cv2.CAP_PROP_FRAME_HEIGHT))
    width = int(cap.get(cv2.CAP_PROP_FRAME_WIDTH))

    print(f"Camera {camera_info.name} opened successfully at {width}x{height} with FPS: {cap_fps:.2f}")

    if window_title is None:
        return cap, None

    window_name = f"{window_title} - {camera_info.name}"
    cv2.namedWindow(window_name, cv2.WINDOW_NORMAL)

    return cap, window_name


def window_closed(window_name: str) -> bool:
    try:
        return cv2.getWindowProperty(window_name, cv2.WND_PROP_VISIBLE) < 1
    except cv2.error:
        return True


def env_flag(name: str) -> bool | None:
    """Read a boolean environment variable. None if not set or not understood."""
    value = os.getenv(name, "").strip().lower()
    if value in ("false", "0", "no"):
        return False
    if value in ("true", "1", "yes"):
        return True
    return None


def determine_gpu_usage(gpu: bool | None, config: Config) -> bool:
    """Determine whether to use GPU based on CLI argument, environment variable, and config.

    Priority order:
    1. CLI argument (--gpu / --no-gpu)
    2. Environment variable (GESTURE_CAROUSEL_USE_GPU)
    3. Config file (config.cli.use_gpu)
    """
    use_gpu = gpu
    if use_gpu is None:
        use_gpu = env_flag("GESTURE_CAROUSEL_USE_GPU")
    if use_gpu is None:
        use_gpu = config.cli.use_gpu

    if use_gpu:
        print("Using GPU acceleration (may fall back to CPU if GPU is unavailable)")
    else:
        print("Using CPU processing")

    return use_gpu


def determine_mirror_mode(mirror: bool | None, config: Config) -> bool:
    """Determine whether to use mirror mode based on CLI argument, environment variable, and config.

    Priority order:
    1. CLI argument (--mirror / --no-mirror)
    2. Environment variable (GESTURE_CAROUSEL_MIRROR)
    3. Config file (config.cli.mirror)
    """
    use_mirror = mirror
    if use_mirror is None:
        use_mirror = env_flag("GESTURE_CAROUSEL_MIRROR")
    if use_mirror is None:
        use_mirror = config.cli.mirror

    if use_mirror:
        print("Mirror mode enabled (video output will be horizontally flipped, swipe directions are unchanged)")
    else:
        print("Mirror mode disabled")

    return use_mirror
