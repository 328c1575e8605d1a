"""Utility functions for vignettify.

This module provides utility functions including:

- Logging setup and configuration
- Progress and statistics tracking for compositing runs
"""

from vignettify.utils.logging import (
    ProcessingLogger,
    ProcessingStats,
    configure_logging,
)

__all__ = [
    "ProcessingLogger",
    "ProcessingStats",
    "configure_logging",
]
