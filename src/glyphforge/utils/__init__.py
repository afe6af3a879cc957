"""Utility functions for glyphforge.

This module provides logging setup and batch statistics.
"""

from glyphforge.utils.logging import (
    ProcessingLogger,
    ProcessingStats,
    configure_logging,
)

__all__ = [
    "ProcessingLogger",
    "ProcessingStats",
    "configure_logging",
]
