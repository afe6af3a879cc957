"""Codec layer for glyphforge.

This module handles every byte-level format the pipeline touches, keeping
the vectorization core free of file formats.

Key responsibilities:
- Decode raster images into RGBA pixel grids (Pillow)
- Draw SVG glyph paths into TrueType outlines (fontTools pens)
- Import glyph outlines from existing TTF/OTF fonts
- Write compiled fonts to disk

Key classes:
- FontReader: Load fonts and extract glyph paths
- FontWriter: Save compiled fonts
"""

from glyphforge.io.image import decode_pixel_grid, image_to_pixel_grid, load_pixel_grid
from glyphforge.io.reader import FontReader
from glyphforge.io.writer import FontWriter

__all__ = [
    "FontReader",
    "FontWriter",
    "decode_pixel_grid",
    "image_to_pixel_grid",
    "load_pixel_grid",
]
