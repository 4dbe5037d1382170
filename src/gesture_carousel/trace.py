"""Recorded hand positions, to replay swipes without a camera."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import NamedTuple

from pydantic import BaseModel, Field, TypeAdapter, model_validator

from .carousel import CarouselState
from .gestures import GestureEvent
from .models.landmarks import NB_HAND_LANDMARKS, HandLandmarks, Landmark
from .session import GestureSession


class TraceSample(BaseModel):
    t: int = Field(ge=0, description="Timestamp (ms) of the frame")
    x: float | None = Field(None, description="Horizontal position (normalized) of the tracked landmark")
    y: float = Field(0.5, description="Vertical position (normalized) of the tracked landmark")
    hand: bool = Field(True, description="Whether a hand was detected in the frame")

    @model_validator(mode="after")
    def check_position(self) -> TraceSample:
        if self.hand and self.x is None:
            raise ValueError("A sample with a hand needs an `x` value")
        return self

    def to_hands(self) -> list[HandLandmarks]:
        """Build the hands of the frame: none, or one hand with every landmark at the sample position."""
        if not self.hand or self.x is None:
            return []
        return [[Landmark(self.x, self.y)] * NB_HAND_LANDMARKS]


TraceAdapter = TypeAdapter(list[TraceSample])


class ReplayStep(NamedTuple):
    sample: TraceSample
    event: GestureEvent | None
    state: CarouselState


def load_trace(path: Path | str) -> list[TraceSample]:
    """Load a JSON list of samples such as `[{"t": 0, "x": 0.4}, {"t": 33, "hand": false}]`."""
    return TraceAdapter.validate_json(Path(path).read_bytes())


def replay(session: GestureSession, samples: Iterable[TraceSample]) -> Iterator[ReplayStep]:
    """Feed each sample to the session as a frame."""
    for sample in samples:
        event = session.process_hands(sample.to_hands(), sample.t)
        yield ReplayStep(sample, event, session.controller.state)
