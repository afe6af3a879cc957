"""Sanitization of caller-supplied SVG glyphs.

Uploaded vector glyphs are cleaned before they may enter a font:

- ``<image>`` tags and ``data:image`` href attributes are removed
- ``<foreignObject>`` and ``<script>`` blocks and DOCTYPE declarations are removed
- ``style`` attributes are removed
- ``fill``/``stroke`` values other than ``none`` become ``currentColor``
- the SVG namespace is added when missing

Anything that still references raster data after cleaning is rejected with
EmbeddedRasterRejectedError rather than silently degraded.
"""

import re

from fontTools.pens.boundsPen import BoundsPen
from fontTools.svgLib.path import SVGPath

from glyphforge.domain import SVG_NS, GlyphPath
from glyphforge.exceptions import EmbeddedRasterRejectedError, InvalidPathError

_IMAGE_TAG = re.compile(r"<image\b[^>]*>(?:\s*</image\s*>)?", re.IGNORECASE)
_DATA_HREF = re.compile(
    r"""\s(?:xlink:)?href\s*=\s*(?:"\s*data:image[^"]*"|'\s*data:image[^']*')""",
    re.IGNORECASE,
)
_FOREIGN_OBJECT = re.compile(
    r"<foreignObject\b[^>]*>.*?</foreignObject\s*>", re.IGNORECASE | re.DOTALL
)
_SCRIPT = re.compile(r"<script\b[^>]*>.*?</script\s*>", re.IGNORECASE | re.DOTALL)
_DOCTYPE = re.compile(r"<!DOCTYPE[^>\[]*(?:\[[^\]]*\])?\s*>", re.IGNORECASE)
_STYLE_ATTR = re.compile(r"""\sstyle\s*=\s*(?:"[^"]*"|'[^']*')""", re.IGNORECASE)
_FILL = re.compile(r"""\bfill\s*=\s*(?:"(?!none")[^"]*"|'(?!none')[^']*')""", re.IGNORECASE)
_STROKE = re.compile(
    r"""\bstroke\s*=\s*(?:"(?!none")[^"]*"|'(?!none')[^']*')""", re.IGNORECASE
)
_SVG_OPEN = re.compile(r"<svg\b", re.IGNORECASE)
_XMLNS = re.compile(r"""<svg\b[^>]*\sxmlns\s*=""", re.IGNORECASE)

_RASTER_DATA = re.compile(r"data:\s*image/", re.IGNORECASE)
_RASTER_MARKERS = (
    ("<image", re.compile(r"<image\b", re.IGNORECASE)),
    ("<foreignObject", re.compile(r"<foreignObject\b", re.IGNORECASE)),
    ("data:image/", _RASTER_DATA),
)

_NUMBER = re.compile(r"[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?")


def clean_svg(svg: str) -> str:
    """Apply the cleaning policy without validating the result.

    Args:
        svg: Caller-supplied SVG text

    Returns:
        Cleaned SVG text

    Raises:
        InvalidPathError: If the text has no ``<svg`` root
    """
    if not _SVG_OPEN.search(svg):
        raise InvalidPathError("no <svg> element found")

    cleaned = _IMAGE_TAG.sub("", svg)
    cleaned = _DATA_HREF.sub("", cleaned)
    cleaned = _FILL.sub('fill="currentColor"', cleaned)
    cleaned = _STROKE.sub('stroke="currentColor"', cleaned)
    cleaned = _STYLE_ATTR.sub("", cleaned)
    cleaned = _FOREIGN_OBJECT.sub("", cleaned)
    cleaned = _SCRIPT.sub("", cleaned)
    cleaned = _DOCTYPE.sub("", cleaned)

    if not _XMLNS.search(cleaned):
        cleaned = _SVG_OPEN.sub(f'<svg xmlns="{SVG_NS}"', cleaned, count=1)

    return cleaned


def find_raster_reference(svg: str) -> str | None:
    """Return the first raster marker present in the text, if any."""
    for label, pattern in _RASTER_MARKERS:
        if pattern.search(svg):
            return label
    return None


def find_parsed_raster_reference(root) -> str | None:
    """Return the first raster marker in a parsed element tree, if any.

    Element names are compared without their namespace, and attribute values
    and text are checked after entity decoding.
    """
    for element in root.iter():
        if not isinstance(element.tag, str):
            continue
        local_name = element.tag.rsplit("}", 1)[-1].lower()
        if local_name == "image":
            return "<image"
        if local_name == "foreignobject":
            return "<foreignObject"

        values = [*element.attrib.values(), element.text or "", element.tail or ""]
        if any(_RASTER_DATA.search(value) for value in values):
            return "data:image/"
    return None


def sanitize_svg(svg: str) -> GlyphPath:
    """Clean caller-supplied SVG and measure it.

    Args:
        svg: SVG document text

    Returns:
        GlyphPath holding the cleaned document

    Raises:
        InvalidPathError: If the text is not a parseable SVG document
        EmbeddedRasterRejectedError: If raster content survives cleaning
    """
    cleaned = clean_svg(svg)

    found = find_raster_reference(cleaned)
    if found is not None:
        raise EmbeddedRasterRejectedError(found)

    try:
        outline = SVGPath.fromstring(cleaned.encode("utf-8"))
    except SyntaxError as e:
        raise InvalidPathError(str(e)) from e

    # Character references and namespace prefixes only resolve once parsed.
    found = find_parsed_raster_reference(outline.root)
    if found is not None:
        raise EmbeddedRasterRejectedError(found)

    pen = BoundsPen(None)
    try:
        outline.draw(pen)
    except (ValueError, IndexError, KeyError) as e:
        raise InvalidPathError(f"unreadable path data: {e}") from e

    bbox = pen.bounds or (0.0, 0.0, 0.0, 0.0)
    width, height = _canvas_size(outline.root, bbox)

    return GlyphPath(
        svg=cleaned,
        bbox=tuple(float(v) for v in bbox),  # type: ignore[arg-type]
        width=width,
        height=height,
    )


def _canvas_size(root, bbox: tuple[float, float, float, float]) -> tuple[float, float]:
    """Canvas size from viewBox, then width/height, then the outline extent."""
    view_box = root.get("viewBox")
    if view_box:
        values = [float(v) for v in _NUMBER.findall(view_box)]
        if len(values) == 4 and values[2] > 0 and values[3] > 0:
            return values[2], values[3]

    width = _length(root.get("width"))
    height = _length(root.get("height"))
    if width and height:
        return width, height

    return max(float(bbox[2]), 1.0), max(float(bbox[3]), 1.0)


def _length(value: str | None) -> float | None:
    if not value or value.strip().endswith("%"):
        return None
    match = _NUMBER.match(value.strip())
    if match is None:
        return None
    number = float(match.group())
    return number if number > 0 else None
