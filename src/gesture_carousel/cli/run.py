from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import TYPE_CHECKING, cast

import cv2  # type: ignore[import-untyped]
import typer

from ..cameras import CameraInfo
from ..carousel import CarouselState
from ..config import Config
from ..description import DescriptionService, describe_in_background
from ..drawing import OpenCVImage, draw_carousel, draw_hand_landmarks, draw_status
from ..gestures import GestureEvent
from ..models.items import PhotoItem, patch_from_media_path
from . import options
from .common import (
    app,
    build_session,
    determine_gpu_usage,
    determine_mirror_mode,
    init_camera_capture,
    pick_camera,
    setup_logging,
    window_closed,
)

if TYPE_CHECKING:
    from ..recognizer import StreamInfo

DEFAULT_MODEL_PATH = "hand_landmarker.task"
LOADING_DESCRIPTION_TEXT = "Loading description..."


class CarouselApp:
    """Keyboard controls and overlays around a gesture session."""

    def __init__(self, config: Config, window_name: str | None = None) -> None:
        self.config = config
        self.session = build_session(config, on_gesture=self.on_gesture)
        self.description_service = DescriptionService(config.description.api_key, config.description.model)
        self.descriptions: dict[int, str] = {}
        self.last_gesture: GestureEvent | None = None
        self.show_help = True
        self.window_name = window_name
        self.last_frame: OpenCVImage | None = None  # Camera frame with the carousel, before the status overlay

    @property
    def state(self) -> CarouselState:
        return self.session.controller.state

    def on_gesture(self, event: GestureEvent, state: CarouselState) -> None:
        self.last_gesture = event

    def on_description(self, item: PhotoItem, text: str) -> None:
        self.descriptions[item.id] = text

    def render_status(self, frame: OpenCVImage, stream_info: StreamInfo | None = None) -> OpenCVImage:
        return draw_status(
            frame,
            stream_info,
            last_gesture=self.last_gesture,
            suspended=self.session.suspended,
            show_help=self.show_help,
            description=self.descriptions.get(self.state.selected_item.id),
        )

    def show_suspended(self) -> None:
        """Redraw the last frame with the editing banner, the frame loop being blocked by the terminal prompt."""
        if self.window_name is None or self.last_frame is None:
            return
        cv2.imshow(self.window_name, self.render_status(self.last_frame.copy()))
        cv2.waitKey(1)

    def edit_selected(self) -> None:
        """Ask for a new title and theme for the selected item. Swipes are ignored meanwhile."""
        item = self.state.selected_item
        self.session.suspend()
        self.show_suspended()
        try:
            title = typer.prompt("Title", default=item.title)
            theme = typer.prompt("Theme / Subtitle", default=item.theme)
            self.session.controller.replace_selected(title=title, theme=theme)
            self.descriptions.pop(item.id, None)
        finally:
            self.session.resume()

    def replace_selected_media(self) -> None:
        """Ask for a local image or video to use for the selected item. Swipes are ignored meanwhile."""
        item = self.state.selected_item
        self.session.suspend()
        self.show_suspended()
        try:
            path = Path(typer.prompt("Path of the new image or video")).expanduser()
            if not path.is_file():
                print(f"File {path} not found, item left unchanged.", file=sys.stderr)
                return
            self.session.controller.replace_selected(**patch_from_media_path(path))
            self.descriptions.pop(item.id, None)
        finally:
            self.session.resume()

    def describe_selected(self) -> None:
        item = self.state.selected_item
        self.descriptions[item.id] = LOADING_DESCRIPTION_TEXT
        describe_in_background(self.description_service, item, self.on_description)

    def auto_describe(self) -> None:
        """With `description.auto`, describe the selected item when it has no description yet."""
        if self.config.description.auto and self.state.selected_item.id not in self.descriptions:
            self.describe_selected()

    def handle_key(self, key: int) -> bool:
        """Apply a key press. Returns False when the user asked to quit."""
        if key in (ord("q"), 27):  # 'q' or ESC
            return False
        if key == ord("n"):
            self.session.controller.advance()
        elif key == ord("p"):
            self.session.controller.retreat()
        elif key == ord("e"):
            self.edit_selected()
        elif key == ord("u"):
            self.replace_selected_media()
        elif key == ord("i"):
            self.describe_selected()
        elif key == ord("h"):
            self.show_help = not self.show_help
        return True


def run_carousel(
    camera_info: CameraInfo,
    config: Config,
    mirror: bool,
    use_gpu: bool,
    desired_size: int,
) -> None:
    """Show the carousel over the camera preview, driven by hand swipes and the keyboard."""
    # Imported here to keep MediaPipe out of the commands that don't need it
    from ..recognizer import HandRecognizer

    cap, window_name = init_camera_capture(camera_info, "Gesture Carousel", desired_size)
    if cap is None:
        return

    carousel_app = CarouselApp(config, window_name)

    print("Loading hand landmarker model...")

    try:
        with HandRecognizer(
            os.getenv("GESTURE_CAROUSEL_MODEL_PATH", "").strip() or DEFAULT_MODEL_PATH,
            use_gpu=use_gpu,
            mirroring=mirror,
        ) as recognizer:
            print("Hand landmarker loaded successfully")
            print("Press 'q' or ESC to quit")

            for frame, stream_info, result in recognizer.handle_opencv_capture(cap, mirror_frames=mirror):
                # Landmarks are in the coordinates of the raw frame, only their drawing follows the mirroring
                carousel_app.session.process_hands(result.hand_landmarks, result.timestamp)
                carousel_app.auto_describe()

                frame = draw_hand_landmarks(
                    result.hand_landmarks, frame, config.classifier.tracked_landmark, mirroring=mirror
                )
                frame = draw_carousel(carousel_app.state, frame, config.carousel.radius, config.carousel.tilt)
                carousel_app.last_frame = frame
                cv2.imshow(cast(str, window_name), carousel_app.render_status(frame.copy(), stream_info))

                if not carousel_app.handle_key(cv2.waitKey(1) & 0xFF):
                    break
                if window_closed(cast(str, window_name)):
                    break
    except RuntimeError as exc:
        print(f"\nError loading hand landmarker: {exc}", file=sys.stderr)
        raise typer.Exit(1) from exc
    finally:
        cap.release()
        cv2.destroyAllWindows()


@app.callback(invoke_without_command=True)
def run_cmd(
    ctx: typer.Context,
    camera: str | None = options.camera,
    mirror: bool | None = options.mirror,
    size: int | None = options.size,
    gpu: bool | None = options.gpu,
    config_path: Path | None = options.config,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logs"),
) -> None:
    """Run the gesture carousel on the selected camera.

    The default config location is platform-specific and will be shown if the config file is not found.
    """
    setup_logging(verbose)

    # If a subcommand is being invoked, don't run the default behavior
    if ctx.invoked_subcommand is not None:
        return

    config = Config.load(config_path)

    final_camera = camera if camera is not None else config.cli.camera
    final_size = size if size is not None else config.cli.size
    use_mirror = determine_mirror_mode(mirror, config)
    use_gpu = determine_gpu_usage(gpu, config)

    selected = pick_camera(final_camera)

    if selected:
        print(f"\nSelected: {selected}")
        run_carousel(selected, config=config, mirror=use_mirror, use_gpu=use_gpu, desired_size=final_size)
    else:
        print("\nNo camera selected.")
