from __future__ import annotations

import logging
import os
import time
import urllib.request
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import Any, ClassVar, NamedTuple, TypeAlias, TypeVar

import cv2

from .mediapipe import (
    BaseOptions,
    HandLandmarker,
    HandLandmarkerOptions,
    RunningMode,
    mp,
)
from .models.landmarks import Landmark

OpenCVImage: TypeAlias = cv2.typing.MatLike  # Type alias for images (numpy arrays)

logger = logging.getLogger(__name__)


@dataclass
class RecognizerResult:
    hand_landmarks: list[list[Landmark]]  # One list of 21 landmarks per detected hand
    timestamp: int  # Timestamp (ms) of the recognized frame
    recognized_image: mp.Image | None = None  # The image that was recognized


class HandRecognizer:
    model_url: ClassVar[str] = (
        "https://storage.googleapis.com/mediapipe-models/hand_landmarker/hand_landmarker/float16/1/hand_landmarker.task"
    )

    def __init__(self, model_path: str, use_gpu: bool = True, mirroring: bool = False, num_hands: int = 1) -> None:
        self.last_result: RecognizerResult | None = None
        self.last_timestamp: int = -1

        self.check_model(model_path)

        self.mirroring = mirroring

        self.landmarker: HandLandmarker | None = HandLandmarker.create_from_options(
            HandLandmarkerOptions(
                base_options=BaseOptions(
                    model_asset_path=model_path,
                    delegate=BaseOptions.Delegate.GPU if use_gpu else BaseOptions.Delegate.CPU,
                ),
                running_mode=RunningMode.VIDEO,
                num_hands=num_hands,
                min_hand_detection_confidence=0.5,
                min_hand_presence_confidence=0.5,
                min_tracking_confidence=0.5,
            )
        )

    def check_model(self, model_path: str) -> None:
        if os.path.exists(model_path):
            return
        logger.info("Model file '%s' not found. Downloading...", model_path)
        try:
            urllib.request.urlretrieve(self.model_url, model_path)
        except OSError as exc:
            raise RuntimeError(f"Could not download model from {self.model_url}: {exc}") from exc
        logger.info("Successfully downloaded model to '%s'", model_path)

    @staticmethod
    def convert_image_from_opencv(frame: OpenCVImage) -> mp.Image:
        # Convert frame to RGB (opencv BGR not supported by MediaPipe)
        rgb_frame = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
        return mp.Image(image_format=mp.ImageFormat.SRGB, data=rgb_frame)

    def next_timestamp(self, timestamp: int) -> int:
        """MediaPipe rejects frames whose timestamp is not strictly greater than the previous one."""
        timestamp = max(timestamp, self.last_timestamp + 1)
        self.last_timestamp = timestamp
        return timestamp

    def recognize_image_from_opencv(self, frame: OpenCVImage, timestamp: int) -> RecognizerResult:
        return self.recognize_image(self.convert_image_from_opencv(frame), timestamp)

    def recognize_image(self, image: mp.Image, timestamp: int) -> RecognizerResult:
        if self.landmarker is None:
            raise RuntimeError("Recognizer is closed.")
        timestamp = self.next_timestamp(timestamp)
        result = self.landmarker.detect_for_video(image, timestamp)
        self.last_result = RecognizerResult(
            hand_landmarks=[  # Convert MediaPipe landmarks to our Landmark model
                [Landmark.from_normalized(landmark) for landmark in landmarks]
                for landmarks in result.hand_landmarks
            ],
            timestamp=timestamp,
            recognized_image=image,
        )
        return self.last_result

    def close(self) -> None:
        """Close the landmarker and release resources."""
        if self.landmarker:
            self.landmarker.close()
            self.landmarker = None

    def __enter__(self) -> HandRecognizer:
        return self

    def __exit__(self, exc_type: type[BaseException] | None, exc_val: BaseException | None, exc_tb: object) -> None:
        self.close()

    def _handle_frames_generic(
        self,
        frames: Iterator[T],
        recognize_fn: Callable[[T, int], RecognizerResult],
    ) -> Iterator[tuple[T, StreamInfo, RecognizerResult]]:
        """Generic frame handling logic for both mp.Image and OpenCVImage frames."""
        start_time = time.perf_counter()
        frames_count = 0

        for frame in frames:
            frames_count += 1
            elapsed_time = time.perf_counter() - start_time

            result = recognize_fn(frame, int(elapsed_time * 1000))
            image = result.recognized_image

            stream_info = StreamInfo(
                frames_count=frames_count,
                frames_fps=frames_count / elapsed_time if elapsed_time > 0 else 0,
                timestamp=result.timestamp,
                width=image.width if image is not None else 0,
                height=image.height if image is not None else 0,
                mirroring=self.mirroring,
            )

            yield frame, stream_info, result

    def handle_frames(self, frames: FramesIterator) -> ResultsGenerator:
        """Read frames from the provided frames provider."""
        return self._handle_frames_generic(frames, self.recognize_image)

    def handle_frames_from_opencv(self, frames: OpenCVFramesIterator) -> ResultsGeneratorWithOpenCVFrame:
        """Read frames from the provided OpenCV frames provider."""
        return self._handle_frames_generic(frames, self.recognize_image_from_opencv)

    def handle_opencv_capture(
        self, cap: cv2.VideoCapture, mirror_frames: bool = False
    ) -> ResultsGeneratorWithOpenCVFrame:
        """Read frames from an OpenCV VideoCapture object.

        With `mirror_frames`, frames are flipped horizontally before being yielded, for display only. Recognition
        always runs on the original frame and landmarks stay in its coordinates.
        """

        def frames_provider() -> OpenCVFramesIterator:
            while True:
                ret, frame = cap.read()
                if not ret:
                    break
                yield frame

        for frame, stream_info, result in self.handle_frames_from_opencv(frames_provider()):
            yield (cv2.flip(frame, 1) if mirror_frames else frame), stream_info, result


class StreamInfo(NamedTuple):
    frames_count: int  # Total number of frames from iterator
    frames_fps: float  # FPS of the frame iterator (recognition included)
    timestamp: int  # Timestamp (ms) given to the landmarker for this frame
    width: int  # Width of the image
    height: int  # Height of the image
    mirroring: bool = False  # Whether the frames are displayed mirrored (landmarks are never mirrored)

    def to_dict(self) -> dict[str, Any]:
        return self._asdict()


T = TypeVar("T")
ResultsGenerator: TypeAlias = Iterator[tuple[mp.Image, StreamInfo, RecognizerResult]]
ResultsGeneratorWithOpenCVFrame: TypeAlias = Iterator[tuple[OpenCVImage, StreamInfo, RecognizerResult]]
FramesIterator: TypeAlias = Iterator[mp.Image]
OpenCVFramesIterator: TypeAlias = Iterator[OpenCVImage]
