"""Configuration management for glyphforge.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- BinarizeConfig: Threshold selection
- TracerConfig: Boundary tracing limits
- BudgetConfig: Simplification rounds, downscaling and size budget
- CodepointConfig: Private-use allocation range
- FontConfig: Assembled font metrics
- ProcessingConfig: Batch processing settings
- LoggingConfig: Logging settings
- GlyphForgeSettings: Main application settings
"""

from glyphforge.config.settings import (
    PUA_END,
    PUA_START,
    BinarizeConfig,
    BudgetConfig,
    CodepointConfig,
    FontConfig,
    GlyphForgeSettings,
    LoggingConfig,
    ProcessingConfig,
    TracerConfig,
    get_default_settings,
)

__all__ = [
    "PUA_END",
    "PUA_START",
    "BinarizeConfig",
    "BudgetConfig",
    "CodepointConfig",
    "FontConfig",
    "GlyphForgeSettings",
    "LoggingConfig",
    "ProcessingConfig",
    "TracerConfig",
    "get_default_settings",
]
