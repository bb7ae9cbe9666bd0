"""Configuration management for imprint.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- WatermarkConfig: Watermark layout and text settings
- OutputConfig: Output encoding settings
- LoggingConfig: Logging settings
- ImprintSettings: Main application settings
"""

from imprint.config.settings import (
    ImprintSettings,
    LoggingConfig,
    OutputConfig,
    WatermarkConfig,
    get_default_settings,
)

__all__ = [
    "ImprintSettings",
    "LoggingConfig",
    "OutputConfig",
    "WatermarkConfig",
    "get_default_settings",
]
