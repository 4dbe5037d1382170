import logging
from pathlib import Path

import platformdirs
from pydantic import BaseModel, Field, field_validator

from .models.items import DEFAULT_ITEMS, PhotoItem
from .models.landmarks import HandLandmark

logger = logging.getLogger(__name__)


class ClassifierConfig(BaseModel):
    cooldown_ms: int = Field(800, ge=0, description="Minimum delay (ms) between two emitted swipes")
    swipe_threshold: float = Field(
        0.05, gt=0, description="Minimum horizontal move (normalized) between two frames to emit a swipe"
    )
    tracked_landmark: HandLandmark = Field(
        HandLandmark.MIDDLE_FINGER_MCP, description="Index of the landmark followed to detect swipes"
    )
    reset_on_hand_lost: bool = Field(
        False, description="Forget the last observed position when a frame has no hand"
    )


class CarouselConfig(BaseModel):
    items: list[PhotoItem] = Field(
        default_factory=lambda: list(DEFAULT_ITEMS),
        min_length=1,
        description="Items shown in the carousel, in order",
    )
    radius: int = Field(250, gt=0, description="Radius (pixels) of the carousel ring when drawn")
    tilt: float = Field(-10.0, description="Tilt (degrees) of the carousel ring when drawn")

    @field_validator("items")
    @classmethod
    def check_unique_ids(cls, items: list[PhotoItem]) -> list[PhotoItem]:
        ids = [item.id for item in items]
        if len(set(ids)) != len(ids):
            raise ValueError(f"Carousel item ids must be unique, got {ids}")
        return items


class DescriptionConfig(BaseModel):
    model: str = Field("gemini-2.5-flash", description="Gemini model used to describe items")
    api_key: str | None = Field(None, description="Gemini API key. Default: GOOGLE_API_KEY environment variable")
    auto: bool = Field(False, description="Fetch a description whenever the selected item has none yet")


class CLIConfig(BaseModel):
    """Configuration for CLI settings."""

    camera: str | None = Field(None, description="Camera name filter for auto-selection")
    mirror: bool = Field(
        False, description="Mirror the video output horizontally (display only, swipes are detected on the raw frame)"
    )
    size: int = Field(1280, description="Maximum dimension for camera capture resolution")
    use_gpu: bool = Field(False, description="Run the hand landmarker on the GPU")


class Config(BaseModel):
    classifier: ClassifierConfig = Field(
        default_factory=lambda: ClassifierConfig(), description="Swipe detection configuration"
    )
    carousel: CarouselConfig = Field(default_factory=lambda: CarouselConfig(), description="Carousel configuration")
    description: DescriptionConfig = Field(
        default_factory=lambda: DescriptionConfig(), description="Item description service configuration"
    )
    cli: CLIConfig = Field(default_factory=lambda: CLIConfig(), description="CLI configuration")

    @classmethod
    def get_user_path(cls) -> Path:
        app_name = "gesture-carousel"
        config_dir = Path(platformdirs.user_config_dir(app_name))
        return config_dir / "config.json"

    @classmethod
    def validate_path(cls, path: Path | str | None) -> Path:
        if path is None:
            path = cls.get_user_path()
        elif isinstance(path, str):
            path = Path(path)

        return path.resolve()

    @classmethod
    def load(cls, path: Path | str | None = None) -> "Config":
        path = cls.validate_path(path)

        if not path.exists():
            logger.info("Config file %s does not exist. Using default config.", path)
            return cls()

        if not path.is_file():
            raise ValueError(f"Path {path} exists and is not a file.")

        try:
            return cls.model_validate_json(path.read_text())
        except ValueError as exc:
            logger.error("Error loading config from %s: %s", path, exc)
            logger.warning("Using default config.")
            return cls()

    def save(self, path: Path | str | None = None) -> None:
        path = self.validate_path(path)

        if path.exists() and not path.is_file():
            raise ValueError(f"Path {path} exists and is not a file.")

        path.parent.mkdir(parents=True, exist_ok=True)
        try:
            path.write_text(self.model_dump_json(indent=2))
        except OSError as exc:
            logger.error("Error saving config to %s: %s", path, exc)
            raise
