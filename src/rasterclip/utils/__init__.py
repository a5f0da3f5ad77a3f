"""Utility functions for rasterclip.

This module provides utility functions including:

- Logging setup and configuration
- Batch progress and statistics tracking
"""

from rasterclip.utils.logging import (
    ProcessingLogger,
    ProcessingStats,
    configure_logging,
)

__all__ = [
    "ProcessingLogger",
    "ProcessingStats",
    "configure_logging",
]
