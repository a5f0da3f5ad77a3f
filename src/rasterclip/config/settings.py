"""Configuration settings for Rasterclip."""

from pathlib import Path

from pydantic import BaseModel, Field


class RasterConfig(BaseModel):
    """Configuration for rasterization."""

    step_major_axis: bool = Field(
        default=False,
        description="Let the stepwise algorithm step along Y for steep segments",
    )


class ClipConfig(BaseModel):
    """Tolerances for midpoint-subdivision clipping.

    The extent and length thresholds are tuning knobs that trade accuracy
    for work, not exact geometric limits.
    """

    rect_max_depth: int = Field(
        default=10,
        ge=1,
        le=32,
        description="Subdivision depth after which a rectangle piece is accepted as is",
    )
    rect_min_extent: float = Field(
        default=0.5,
        gt=0.0,
        description="Pieces narrower than this on both axes are accepted as points",
    )
    polygon_max_depth: int = Field(
        default=12,
        ge=1,
        le=32,
        description="Subdivision depth after which a polygon piece is classified by its midpoint",
    )
    polygon_min_length_sq: float = Field(
        default=1.0,
        gt=0.0,
        description="Squared length below which a polygon piece is classified by its midpoint",
    )
    merge_fragments: bool = Field(
        default=True,
        description="Join consecutive fragments that share an endpoint",
    )


class ProcessingConfig(BaseModel):
    """Configuration for batch processing."""

    max_workers: int | None = Field(
        default=None,
        description="Max worker processes (None = auto, 1 = run inline)",
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


class RasterClipSettings(BaseModel):
    """Main application settings."""

    raster: RasterConfig = Field(default_factory=RasterConfig)
    clip: ClipConfig = Field(default_factory=ClipConfig)
    processing: ProcessingConfig = Field(default_factory=ProcessingConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> RasterClipSettings:
    """Get default application settings."""
    return RasterClipSettings()
