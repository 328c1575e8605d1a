"""Configuration management for vignettify.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- VignetteShape: The five supported vignette figures
- VignetteConfig: One immutable vignette transform request
- PreviewConfig: Preview viewport settings
- ProcessingConfig: Parallel compositing settings
- LoggingConfig: Logging settings
- VignettizerSettings: Main application settings
"""

from vignettify.config.settings import (
    DEFAULT_BORDER_COLOR,
    LoggingConfig,
    PreviewConfig,
    ProcessingConfig,
    VignetteConfig,
    VignetteShape,
    VignettizerSettings,
    get_default_settings,
    make_vignette_config,
)

__all__ = [
    "DEFAULT_BORDER_COLOR",
    "LoggingConfig",
    "PreviewConfig",
    "ProcessingConfig",
    "VignetteConfig",
    "VignetteShape",
    "VignettizerSettings",
    "get_default_settings",
    "make_vignette_config",
]
