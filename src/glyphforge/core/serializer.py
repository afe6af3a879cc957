"""SVG serialization of simplified contours.

Contours become the subpaths of a single ``<path>`` element painted with
``currentColor``: straight segments between consecutive points, each subpath
closed with ``Z``. Winding is normalised first so non-zero filling renders
holes.
"""

from glyphforge.core.analyzer import ContourAnalyzer
from glyphforge.core.geometry import bounding_box, signed_area
from glyphforge.domain import Contour, GlyphPath, Point, format_number, svg_document


def drawable_contours(contours: list[Contour]) -> list[Contour]:
    """Contours that enclose area, in their original order.

    Loops with fewer than three points, and collinear loops such as the walk
    around a one-pixel-wide stroke, fill nothing and are left out.
    """
    return [c for c in contours if len(c.points) >= 3 and signed_area(c.points) != 0]


def subpath_data(contour: Contour) -> str:
    """Path data for one closed contour: ``M x y L x y ... Z``."""
    first, *rest = contour.points
    parts = [f"M {format_number(first.x)} {format_number(first.y)}"]
    parts.extend(f"L {format_number(p.x)} {format_number(p.y)}" for p in rest)
    parts.append("Z")
    return " ".join(parts)


def placeholder_contour(width: int, height: int, fraction: float = 0.6) -> Contour:
    """A centred square covering ``fraction`` of the shorter image side.

    Args:
        width: Image width in grid units
        height: Image height in grid units
        fraction: Side length relative to ``min(width, height)``

    Returns:
        Four-point clockwise contour
    """
    side = max(1, round(min(width, height) * fraction))
    x0 = (width - side) // 2
    y0 = (height - side) // 2
    return Contour(
        points=[
            Point(x0, y0),
            Point(x0 + side, y0),
            Point(x0 + side, y0 + side),
            Point(x0, y0 + side),
        ]
    )


class PathSerializer:
    """Turns contours into a GlyphPath.

    Example:
        serializer = PathSerializer()
        glyph_path = serializer.serialize(contours, width=64, height=64)
    """

    def __init__(self, analyzer: ContourAnalyzer | None = None) -> None:
        self.analyzer = analyzer or ContourAnalyzer()

    def serialize(self, contours: list[Contour], width: float, height: float) -> GlyphPath:
        """Serialize contours into an SVG document sized width x height.

        Contours that enclose no area are skipped.

        Args:
            contours: Simplified contours in emission order
            width: viewBox width
            height: viewBox height

        Returns:
            GlyphPath with the document text and the outline bounding box
        """
        oriented = self.analyzer.orient(drawable_contours(contours))
        path_data = " ".join(subpath_data(c) for c in oriented)
        return GlyphPath(
            svg=svg_document(path_data, width, height),
            bbox=bounding_box(oriented),
            width=float(width),
            height=float(height),
        )
