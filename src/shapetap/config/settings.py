"""Configuration settings for Shapetap."""

from pathlib import Path

from pydantic import BaseModel, Field

from shapetap.domain.color import PALETTE, Color


class GeometryConfig(BaseModel):
    """Configuration for stroking, flattening and hit testing."""

    flatten_tolerance: float = Field(
        default=0.1,
        gt=0.0,
        le=5.0,
        description="Maximum distance between a curve and its flattened polyline",
    )
    circle_segments: int = Field(
        default=16,
        ge=8,
        le=128,
        description="Polygon sides used for round joins and caps",
    )
    min_tap_width: float = Field(
        default=35.0,
        gt=0.0,
        le=200.0,
        description="Minimum width of a shape's tap target",
    )
    bounds_margin: float = Field(
        default=1.0,
        ge=0.0,
        le=10.0,
        description="Extra margin added around stroke bounds for redraws",
    )


class GeneratorConfig(BaseModel):
    """Configuration for random shape generation."""

    min_size: float = Field(
        default=44.0,
        gt=0.0,
        description="Minimum width and height of a generated shape",
    )
    min_line_width: int = Field(
        default=1,
        ge=1,
        le=64,
        description="Smallest generated line width",
    )
    max_line_width: int = Field(
        default=16,
        ge=1,
        le=64,
        description="Largest generated line width",
    )
    palette: list[Color] = Field(
        default_factory=lambda: list(PALETTE),
        min_length=1,
        description="Colours a generated shape can be stroked with",
    )
    add_inset: float = Field(
        default=10.0,
        ge=0.0,
        description="Distance kept from the canvas edge when adding shapes",
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


class ShapetapSettings(BaseModel):
    """Main application settings."""

    geometry: GeometryConfig = Field(default_factory=GeometryConfig)
    generator: GeneratorConfig = Field(default_factory=GeneratorConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> ShapetapSettings:
    """Get default application settings."""
    return ShapetapSettings()
