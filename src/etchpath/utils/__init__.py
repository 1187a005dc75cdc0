"""Utility functions for etchpath.

This module provides utility functions including:

- Logging setup and configuration
- Processing statistics and stage logging
"""

from etchpath.utils.logging import (
    ProcessingLogger,
    ProcessingStats,
    configure_logging,
)

__all__ = [
    "ProcessingLogger",
    "ProcessingStats",
    "configure_logging",
]
