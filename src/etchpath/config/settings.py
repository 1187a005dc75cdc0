"""Configuration settings for Etchpath."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field


class EtchMode(str, Enum):
    """How the image is turned into head movements."""

    RASTER = "raster"
    STENCIL = "stencil"


class CommentStyle(str, Enum):
    """G-code comment syntax."""

    SEMICOLON = "semicolon"
    PARENTHESES = "parentheses"


class ImageConfig(BaseModel):
    """Configuration for image binarization."""

    white_threshold: float = Field(
        default=0.5,
        ge=0.0,
        le=1.0,
        description="Perceptual luminance at or above which a pixel is white",
    )
    mode: EtchMode = Field(
        default=EtchMode.RASTER,
        description="Etch mode (raster scanlines or stencil outlines)",
    )


class PhysicalConfig(BaseModel):
    """Physical machine parameters.

    Speeds are in millimeters per minute, distances in millimeters.
    The origin is the machine position of the image's top-left pixel.
    """

    pixel_size: float = Field(
        default=0.02,
        gt=0.0,
        description="Size of each pixel (mm per pixel)",
    )
    origin_x: float = Field(
        default=70.0,
        description="X coordinate of the image's top-left corner, in mm",
    )
    origin_y: float = Field(
        default=140.0,
        description="Y coordinate of the image's top-left corner, in mm",
    )
    z_height: float | None = Field(
        default=50.0,
        description="Z height during etching in mm (None = leave Z alone)",
    )
    travel_speed: float = Field(
        default=1000.0,
        gt=0.0,
        description="Head speed with the laser off, in mm/min",
    )
    etch_speed: float = Field(
        default=100.0,
        gt=0.0,
        description="Head speed with the laser on, in mm/min",
    )
    passes: int = Field(
        default=1,
        ge=1,
        description="Number of times the main etch route is repeated",
    )


class GcodeConfig(BaseModel):
    """Machine command strings and output formatting."""

    laser_off_command: str = Field(
        default="M107",
        description="Command that turns the laser off",
    )
    laser_low_command: str = Field(
        default="M106 S16",
        description="Command that turns the laser on at low power (trace preview)",
    )
    laser_high_command: str = Field(
        default="M106 S255",
        description="Command that turns the laser on at full power",
    )
    move_command: str = Field(
        default="G0",
        description="Command used for moves",
    )
    comment_style: CommentStyle = Field(
        default=CommentStyle.SEMICOLON,
        description="Comment syntax",
    )
    home_xy: bool = Field(
        default=False,
        description="Home the X and Y axes before etching",
    )


class PreviewConfig(BaseModel):
    """Pre-etch boundary trace preview."""

    enabled: bool = Field(
        default=True,
        description="Trace the image bounds with the laser on low power before etching",
    )
    delay_ms: int = Field(
        default=5000,
        ge=0,
        description="Pause in milliseconds at the start and end of the trace",
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


class EtchSettings(BaseModel):
    """Main application settings."""

    image: ImageConfig = Field(default_factory=ImageConfig)
    physical: PhysicalConfig = Field(default_factory=PhysicalConfig)
    gcode: GcodeConfig = Field(default_factory=GcodeConfig)
    preview: PreviewConfig = Field(default_factory=PreviewConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> EtchSettings:
    """Get default application settings."""
    return EtchSettings()
