"""Configuration management for foldcut.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- GeometryConfig: Kernel and ring builder tolerances
- CreaseConfig: Crease extraction tolerances
- ExportConfig: Result export settings
- LoggingConfig: Logging settings
- FoldCutSettings: Main application settings
"""

from foldcut.config.settings import (
    CreaseConfig,
    ExportConfig,
    FoldCutSettings,
    GeometryConfig,
    LoggingConfig,
    get_default_settings,
)

__all__ = [
    "CreaseConfig",
    "ExportConfig",
    "FoldCutSettings",
    "GeometryConfig",
    "LoggingConfig",
    "get_default_settings",
]
