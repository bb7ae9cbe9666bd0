"""Utility functions for imprint.

This module provides utility functions including:

- Logging setup and configuration
- Per-operation progress and timing statistics
"""

from imprint.utils.logging import (
    ProcessingLogger,
    ProcessingStats,
    configure_logging,
)

__all__ = [
    "ProcessingLogger",
    "ProcessingStats",
    "configure_logging",
]
