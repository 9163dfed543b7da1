"""Configuration management for shapetap.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- GeometryConfig: Stroking and hit testing tolerances
- GeneratorConfig: Random shape generation settings
- LoggingConfig: Logging settings
- ShapetapSettings: Main application settings
"""

from shapetap.config.settings import (
    GeneratorConfig,
    GeometryConfig,
    LoggingConfig,
    ShapetapSettings,
    get_default_settings,
)

__all__ = [
    "GeneratorConfig",
    "GeometryConfig",
    "LoggingConfig",
    "ShapetapSettings",
    "get_default_settings",
]
