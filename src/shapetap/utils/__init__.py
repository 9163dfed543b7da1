"""Utility functions for shapetap.

This module provides utility functions including:

- Logging setup and configuration
- Session statistics for editing and hit testing
"""

from shapetap.utils.logging import (
    SessionLogger,
    SessionStats,
    configure_logging,
    get_logger,
)

__all__ = [
    "SessionLogger",
    "SessionStats",
    "configure_logging",
    "get_logger",
]
