"""Configuration settings for Imprint."""

from pathlib import Path
from typing import Annotated

from pydantic import BaseModel, Field

DEFAULT_WATERMARK_ANGLE = -0.16
DEFAULT_ROTATION_PAD = 10.0

Channel = Annotated[int, Field(ge=0, le=255)]


class WatermarkConfig(BaseModel):
    """Configuration for watermark layout and text lines.

    Angles are in radians. Sizes are in pixels of the unscaled watermark
    canvas, before it is fitted to the base image.
    """

    angle: float = Field(
        default=DEFAULT_WATERMARK_ANGLE,
        ge=-6.2832,
        le=6.2832,
        description="Rotation applied to the watermark canvas (radians)",
    )
    scale: float = Field(
        default=0.9,
        gt=0.0,
        le=1.0,
        description="Fraction of the shorter base dimension covered by the watermark",
    )
    font_size: float = Field(
        default=128.0,
        gt=0.0,
        description="Point size for watermark text lines",
    )
    line_spacing: float = Field(
        default=0.0,
        ge=0.0,
        le=2.0,
        description="Extra spacing per line as a fraction of the line height",
    )
    color: tuple[Channel, Channel, Channel, Channel] = Field(
        default=(255, 0, 0, 255),
        description="RGBA color for watermark text",
    )


class OutputConfig(BaseModel):
    """Configuration for encoding the processed image.

    Output is always PNG so the alpha channel survives paper-paste.
    """

    compress_level: int = Field(
        default=6,
        ge=0,
        le=9,
        description="PNG zlib compression level",
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


class ImprintSettings(BaseModel):
    """Main application settings."""

    watermark: WatermarkConfig = Field(default_factory=WatermarkConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> ImprintSettings:
    """Get default application settings."""
    return ImprintSettings()
