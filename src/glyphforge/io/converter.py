"""Converters between SVG glyph paths and fontTools outlines.

Glyph paths live in SVG space: y grows downwards inside a viewBox of
arbitrary size. Font outlines live in font units with y growing upwards from
the baseline. ``em_transform`` maps one onto the other: the viewBox is
scaled uniformly to fit the advance width and the ascender-to-descender
height, centred in both, and flipped vertically.
"""

import re
from typing import Any

from fontTools.misc.transform import Transform
from fontTools.pens.boundsPen import BoundsPen
from fontTools.pens.cu2quPen import Cu2QuPen
from fontTools.pens.svgPathPen import SVGPathPen
from fontTools.pens.transformPen import TransformPen
from fontTools.pens.ttGlyphPen import TTGlyphPen
from fontTools.svgLib.path import SVGPath

from glyphforge.domain import FontMetrics, GlyphPath, format_number, svg_document
from glyphforge.exceptions import InvalidPathError

_NUMBER = re.compile(r"[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?")


def parse_svg(path: GlyphPath) -> SVGPath:
    """Parse a glyph path's document with fontTools.

    Raises:
        InvalidPathError: If the document is not well-formed
    """
    try:
        return SVGPath.fromstring(path.svg.encode("utf-8"))
    except SyntaxError as e:
        raise InvalidPathError(str(e)) from e


def view_box(outline: SVGPath, path: GlyphPath) -> tuple[float, float, float, float]:
    """Return (min_x, min_y, width, height) of the document's viewBox.

    Falls back to an origin-anchored box of the path's recorded size.
    """
    raw = outline.root.get("viewBox")
    if raw:
        values = [float(v) for v in _NUMBER.findall(raw)]
        if len(values) == 4 and values[2] > 0 and values[3] > 0:
            return values[0], values[1], values[2], values[3]
    return 0.0, 0.0, path.width, path.height


def em_transform(
    box: tuple[float, float, float, float],
    metrics: FontMetrics,
    advance_width: int,
) -> Transform:
    """Affine map from viewBox coordinates into font units.

    Args:
        box: (min_x, min_y, width, height) of the source viewBox
        metrics: Font metrics supplying ascender and descender
        advance_width: Horizontal advance of the target glyph

    Returns:
        Transform that scales, flips and centres the viewBox
    """
    min_x, min_y, width, height = box
    em_height = metrics.ascender - metrics.descender

    scale = em_height / height
    if advance_width > 0:
        scale = min(scale, advance_width / width)

    offset_x = (advance_width - width * scale) / 2 - min_x * scale
    top = metrics.ascender - (em_height - height * scale) / 2
    offset_y = top + min_y * scale

    return Transform(scale, 0, 0, -scale, offset_x, offset_y)


def glyph_path_to_ttglyph(
    path: GlyphPath,
    metrics: FontMetrics,
    advance_width: int,
    max_err: float = 1.0,
) -> Any:
    """Draw a glyph path into a TrueType ``glyf`` glyph.

    Cubic segments are approximated with quadratics within ``max_err`` font
    units. The vertical flip keeps the picture upright, so contours that run
    clockwise on screen stay clockwise in font space, as TrueType expects.

    Args:
        path: Sanitized glyph path
        metrics: Font metrics
        advance_width: Glyph advance in font units
        max_err: Cubic-to-quadratic approximation tolerance

    Returns:
        fontTools ``Glyph`` object ready for ``FontBuilder.setupGlyf``

    Raises:
        InvalidPathError: If the document cannot be parsed or drawn
    """
    tt_pen = TTGlyphPen(None)
    if path.is_empty():
        return tt_pen.glyph()

    outline = parse_svg(path)
    transform = em_transform(view_box(outline, path), metrics, advance_width)
    pen = TransformPen(Cu2QuPen(tt_pen, max_err), transform)

    try:
        outline.draw(pen)
    except (ValueError, IndexError, KeyError, AssertionError) as e:
        raise InvalidPathError(f"unreadable path data: {e}") from e

    return tt_pen.glyph()


def glyph_to_glyph_path(
    glyph: Any,
    metrics: FontMetrics,
    advance_width: int,
) -> GlyphPath:
    """Convert a fontTools glyph-set glyph into an SVG glyph path.

    The viewBox spans the advance width and the ascender-to-descender height
    so the outline round-trips through ``em_transform`` at unit scale.

    Args:
        glyph: Glyph from ``TTFont.getGlyphSet()``
        metrics: Metrics of the source font
        advance_width: Advance width of the source glyph

    Returns:
        GlyphPath in screen coordinates
    """
    height = metrics.ascender - metrics.descender
    width = advance_width if advance_width > 0 else height
    flip = Transform(1, 0, 0, -1, 0, metrics.ascender)

    svg_pen = SVGPathPen(None, ntos=format_number)
    glyph.draw(TransformPen(svg_pen, flip))
    bounds_pen = BoundsPen(None)
    glyph.draw(TransformPen(bounds_pen, flip))

    bbox = bounds_pen.bounds or (0.0, 0.0, 0.0, 0.0)
    return GlyphPath(
        svg=svg_document(svg_pen.getCommands(), width, height),
        bbox=tuple(float(v) for v in bbox),  # type: ignore[arg-type]
        width=float(width),
        height=float(height),
    )
