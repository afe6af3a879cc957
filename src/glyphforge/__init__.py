"""GlyphForge - Turn glyph images into vector outlines and fonts.

GlyphForge vectorizes raster glyph images (binarize, trace, simplify under a
size budget) into sanitized single-colour SVG paths, and assembles sets of
such paths into a compiled TrueType font addressable by Unicode code point.

Example:
    $ glyphforge build ./letters --family "Hand Drawn"

This will vectorize every image in ./letters and write Hand-Drawn-Regular.ttf.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
