"""Configuration management for rasterclip.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- RasterConfig: Rasterization settings
- ClipConfig: Subdivision clipping tolerances
- ProcessingConfig: Batch processing settings
- LoggingConfig: Logging settings
- RasterClipSettings: Main application settings
"""

from rasterclip.config.settings import (
    ClipConfig,
    LoggingConfig,
    ProcessingConfig,
    RasterClipSettings,
    RasterConfig,
    get_default_settings,
)

__all__ = [
    "ClipConfig",
    "LoggingConfig",
    "ProcessingConfig",
    "RasterClipSettings",
    "RasterConfig",
    "get_default_settings",
]
