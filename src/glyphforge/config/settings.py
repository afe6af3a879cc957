"""Configuration settings for GlyphForge."""

from pathlib import Path

from pydantic import BaseModel, Field, model_validator

PUA_START = 0xE000
PUA_END = 0xF8FF


class BinarizeConfig(BaseModel):
    """Configuration for turning pixels into a black/white mask."""

    threshold: int | None = Field(
        default=None,
        ge=0,
        le=255,
        description="Explicit luminance threshold (None = automatic Otsu threshold)",
    )
    alpha_cutoff: int = Field(
        default=128,
        ge=1,
        le=255,
        description="Minimum alpha for a pixel to count as opaque",
    )


class TracerConfig(BaseModel):
    """Configuration for boundary tracing."""

    min_contour_length: int = Field(
        default=4,
        ge=3,
        description="Contours with fewer points are discarded as noise",
    )
    iteration_factor: float = Field(
        default=1.0,
        gt=0.0,
        le=8.0,
        description="Walk step cap as a multiple of grid area",
    )


class BudgetConfig(BaseModel):
    """Configuration for the size-budgeted simplification loop."""

    max_bytes: int = Field(
        default=250_000,
        ge=64,
        description="Maximum serialized glyph path size in bytes",
    )
    initial_epsilon: float = Field(
        default=2.0,
        ge=0.0,
        description="Douglas-Peucker tolerance of the first round (grid units)",
    )
    epsilon_growth: float = Field(
        default=1.8,
        gt=1.0,
        le=10.0,
        description="Tolerance multiplier applied after each oversized round",
    )
    max_rounds: int = Field(
        default=5,
        ge=1,
        le=20,
        description="Number of simplification rounds before trimming",
    )
    downscale_after_round: int = Field(
        default=3,
        ge=1,
        description="Round after which the source grid is downscaled",
    )
    downscale_factor: float = Field(
        default=0.75,
        gt=0.0,
        lt=1.0,
        description="Scale applied to the grid when downscaling",
    )
    min_downscale_size: int = Field(
        default=16,
        ge=1,
        description="Downscaling never shrinks a side below this many pixels",
    )
    trim_fraction: float = Field(
        default=1 / 3,
        gt=0.0,
        lt=1.0,
        description="Fraction of subpaths dropped by the last-resort trim",
    )
    max_dimension: int | None = Field(
        default=128,
        ge=16,
        description="Grids larger than this are shrunk before tracing (None = never)",
    )
    placeholder_fraction: float = Field(
        default=0.6,
        gt=0.0,
        le=1.0,
        description="Side of the placeholder square relative to the shorter image side",
    )
    timeout_seconds: float | None = Field(
        default=15.0,
        gt=0.0,
        description="Wall-clock limit for one conversion (None = unlimited)",
    )


class CodepointConfig(BaseModel):
    """Configuration for automatic code point allocation."""

    range_start: int = Field(default=PUA_START, ge=0, le=0x10FFFF)
    range_end: int = Field(default=PUA_END, ge=0, le=0x10FFFF)
    random_attempts: int = Field(
        default=1000,
        ge=0,
        description="Random draws before falling back to a linear scan",
    )

    @model_validator(mode="after")
    def _check_range(self) -> "CodepointConfig":
        if self.range_end < self.range_start:
            raise ValueError("range_end must not be below range_start")
        return self


class FontConfig(BaseModel):
    """Metrics and naming for assembled fonts."""

    units_per_em: int = Field(default=1000, ge=16, le=16384)
    ascender: int = Field(default=800, ge=0)
    descender: int = Field(default=-200, le=0)
    advance_width: int = Field(default=600, ge=0)
    style_name: str = Field(default="Regular", min_length=1)
    version: str = Field(default="1.000")
    curve_tolerance: float = Field(
        default=1.0,
        gt=0.0,
        description="Maximum cubic-to-quadratic approximation error in font units",
    )


class ProcessingConfig(BaseModel):
    """Configuration for batch processing."""

    max_workers: int | None = Field(
        default=None,
        description="Max worker processes (None = auto)",
    )
    image_suffixes: list[str] = Field(
        default_factory=lambda: [".png", ".bmp", ".gif", ".jpg", ".jpeg", ".svg"],
        description="File suffixes picked up when building from a directory",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class GlyphForgeSettings(BaseModel):
    """Main application settings."""

    binarize: BinarizeConfig = Field(default_factory=BinarizeConfig)
    tracer: TracerConfig = Field(default_factory=TracerConfig)
    budget: BudgetConfig = Field(default_factory=BudgetConfig)
    codepoints: CodepointConfig = Field(default_factory=CodepointConfig)
    font: FontConfig = Field(default_factory=FontConfig)
    processing: ProcessingConfig = Field(default_factory=ProcessingConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> GlyphForgeSettings:
    """Get default application settings."""
    return GlyphForgeSettings()
