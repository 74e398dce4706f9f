"""Utility functions for foldcut.

This module provides utility functions including:

- Logging setup and configuration
- Run statistics tracking
"""

from foldcut.utils.logging import (
    RunLogger,
    RunStats,
    configure_logging,
    get_logger,
)

__all__ = [
    "RunLogger",
    "RunStats",
    "configure_logging",
    "get_logger",
]
