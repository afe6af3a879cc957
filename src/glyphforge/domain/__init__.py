"""Domain models for glyphforge.

This module contains the core domain models representing pixel grids, masks,
contours, glyph paths, glyphs and fonts. All models are designed to be:

- Immutable where possible (using frozen dataclasses)
- Serializable for inter-process communication (parallel processing)
- Independent of fonttools and image codec details

Key classes:
- PixelGrid: Decoded RGBA image
- BinaryMask: Foreground/background grid
- Point, Contour: Traced boundary loops
- GlyphPath: Sanitized SVG outline with bounding box
- Glyph, FontArtifact: Font assembly inputs and output
- VectorizeResult: Outcome of one vectorization call
"""

from glyphforge.domain.contour import Contour, Point, WindingDirection
from glyphforge.domain.glyph import (
    EMPTY_PATH,
    NOTDEF_NAME,
    PAINT,
    SVG_NS,
    FontArtifact,
    FontMetrics,
    Glyph,
    GlyphPath,
    VectorizeResult,
    VectorizeStatus,
    format_number,
    glyph_name_for,
    svg_document,
)
from glyphforge.domain.raster import BinaryMask, PixelGrid

__all__: list[str] = [
    # Enums
    "VectorizeStatus",
    "WindingDirection",
    # Raster types
    "BinaryMask",
    "PixelGrid",
    # Geometry types
    "Contour",
    "Point",
    # Glyph and font types
    "EMPTY_PATH",
    "NOTDEF_NAME",
    "PAINT",
    "SVG_NS",
    "FontArtifact",
    "FontMetrics",
    "Glyph",
    "GlyphPath",
    "VectorizeResult",
    "format_number",
    "glyph_name_for",
    "svg_document",
]
