"""Configuration settings for Vignettify."""

from enum import Enum
from pathlib import Path
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from vignettify.exceptions import InvalidConfigurationError

ColorChannel = Annotated[int, Field(ge=0, le=255)]

# Predominantly blue, the starting colour of the original tool
DEFAULT_BORDER_COLOR: tuple[int, int, int] = (20, 20, 240)


class VignetteShape(str, Enum):
    """Figure traced by the vignette boundaries."""

    CIRCLE = "circle"
    ELLIPSE = "ellipse"
    DIAMOND = "diamond"
    SQUARE = "square"
    RECTANGLE = "rectangle"


class VignetteConfig(BaseModel):
    """Configuration for a single vignette transform.

    Instances are immutable; any change produces a new config and
    therefore a new gradation table.
    """

    model_config = ConfigDict(frozen=True)

    shape: VignetteShape = Field(
        default=VignetteShape.ELLIPSE,
        description="Figure used for the inner and outer boundaries",
    )
    orientation_degrees: float = Field(
        default=0.0,
        description="Rotation of the figure about its centre (ignored for circles)",
    )
    coverage_percent: float = Field(
        default=80.0,
        gt=0.0,
        description="Size of the preserved region as a percentage of width/height",
    )
    band_width_pixels: int = Field(
        default=60,
        gt=0,
        description="Thickness of the transition band in pixels",
    )
    gradation_steps: int = Field(
        default=32,
        gt=0,
        description="Number of discrete sub-bands approximating the blend",
    )
    center_offset_x_percent: float = Field(
        default=0.0,
        description="Horizontal centre displacement as a percentage of half the width",
    )
    center_offset_y_percent: float = Field(
        default=0.0,
        description="Vertical centre displacement as a percentage of half the height",
    )
    border_color: tuple[ColorChannel, ColorChannel, ColorChannel] = Field(
        default=DEFAULT_BORDER_COLOR,
        description="RGB colour used outside the outer boundary",
    )

    @property
    def effective_orientation(self) -> float:
        """Orientation actually applied; a circle has no orientation."""
        if self.shape is VignetteShape.CIRCLE:
            return 0.0
        return self.orientation_degrees


def make_vignette_config(**values: Any) -> VignetteConfig:
    """Build a VignetteConfig, reporting failures as configuration errors.

    Args:
        **values: Field values for VignetteConfig

    Returns:
        Validated VignetteConfig

    Raises:
        InvalidConfigurationError: If any value fails validation
    """
    try:
        return VignetteConfig(**values)
    except ValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first["loc"]) or "config"
        raise InvalidConfigurationError(field, first["msg"]) from e


class PreviewConfig(BaseModel):
    """Configuration for the reduced-size preview."""

    viewport_size: int = Field(
        default=600,
        ge=16,
        le=4096,
        description="Longest side of the preview in pixels",
    )


class ProcessingConfig(BaseModel):
    """Configuration for pixel compositing."""

    max_workers: int | None = Field(
        default=None,
        description="Max worker processes (None = auto)",
    )
    rows_per_chunk: int = Field(
        default=64,
        ge=1,
        description="Image rows handed to each worker task",
    )
    parallel_threshold_pixels: int = Field(
        default=250_000,
        ge=0,
        description="Images smaller than this are composited in-process",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class VignettizerSettings(BaseModel):
    """Main application settings."""

    vignette: VignetteConfig = Field(default_factory=VignetteConfig)
    preview: PreviewConfig = Field(default_factory=PreviewConfig)
    processing: ProcessingConfig = Field(default_factory=ProcessingConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> VignettizerSettings:
    """Get default application settings."""
    return VignettizerSettings()
