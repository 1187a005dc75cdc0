"""Configuration management for etchpath.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- ImageConfig: Threshold and etch mode
- PhysicalConfig: Pixel size, origin, speeds and passes
- GcodeConfig: Machine command strings and comment style
- PreviewConfig: Pre-etch boundary trace settings
- LoggingConfig: Logging settings
- EtchSettings: Main application settings
"""

from etchpath.config.settings import (
    CommentStyle,
    EtchMode,
    EtchSettings,
    GcodeConfig,
    ImageConfig,
    LoggingConfig,
    PhysicalConfig,
    PreviewConfig,
    get_default_settings,
)

__all__ = [
    "CommentStyle",
    "EtchMode",
    "EtchSettings",
    "GcodeConfig",
    "ImageConfig",
    "LoggingConfig",
    "PhysicalConfig",
    "PreviewConfig",
    "get_default_settings",
]
