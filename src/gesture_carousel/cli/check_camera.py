from __future__ import annotations

import sys
import time
from pathlib import Path
from typing import cast

import cv2  # type: ignore[import-untyped]
import typer

from ..cameras import CameraInfo
from ..config import Config
from . import options
from .common import app, determine_mirror_mode, init_camera_capture, pick_camera, window_closed


def check_camera(camera_info: CameraInfo, show_preview: bool, mirror: bool, desired_size: int) -> None:
    """Check camera functionality without hand tracking."""
    cap, window_name = init_camera_capture(camera_info, "Camera Preview" if show_preview else None, desired_size)
    if cap is None:
        return

    if not show_preview:
        print("Camera check completed successfully.")
        cap.release()
        return

    print("Press 'q' or ESC to quit")

    fps = 0.0
    frame_count = 0
    fps_timer = time.time()

    try:
        while True:
            ret, frame = cap.read()
            if not ret:
                print("Error: Failed to capture frame", file=sys.stderr)
                break

            frame_count += 1
            current_time = time.time()
            if current_time - fps_timer >= 1.0:  # Update FPS every second
                fps = frame_count / (current_time - fps_timer)
                frame_count = 0
                fps_timer = current_time

            if mirror:
                frame = cv2.flip(frame, 1)

            # Semi-transparent header with the FPS
            overlay = frame.copy()
            cv2.rectangle(overlay, (0, 0), (frame.shape[1], 30), (0, 0, 0), -1)
            frame = cv2.addWeighted(overlay, 0.7, frame, 0.3, 0)
            cv2.putText(frame, f"FPS: {fps:.2f}", (10, 20), cv2.FONT_HERSHEY_SIMPLEX, 0.5, (0, 255, 0), 1, cv2.LINE_AA)

            cv2.imshow(cast(str, window_name), frame)

            key = cv2.waitKey(1) & 0xFF
            if key == ord("q") or key == 27:  # 'q' or ESC
                break
            if window_closed(cast(str, window_name)):
                break
    finally:
        cap.release()
        cv2.destroyAllWindows()


@app.command(name="check-camera")
def check_camera_cmd(
    camera: str | None = options.camera,
    preview: bool = typer.Option(True, "--preview/--no-preview", help="Show visual preview window"),
    mirror: bool | None = options.mirror,
    size: int | None = options.size,
    config_path: Path | None = options.config,
) -> None:
    """Check camera functionality without hand tracking."""
    config = Config.load(config_path)

    use_mirror = determine_mirror_mode(mirror, config)
    final_camera = camera if camera is not None else config.cli.camera
    final_size = size if size is not None else config.cli.size

    selected = pick_camera(final_camera)

    if selected:
        print(f"\nSelected: {selected}")
        check_camera(selected, show_preview=preview, mirror=use_mirror, desired_size=final_size)
    else:
        print("\nNo camera selected.")
