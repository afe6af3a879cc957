"""Tests for caller-supplied SVG sanitization."""

import pytest
from fontTools.svgLib.path import SVGPath

from glyphforge.core.sanitizer import (
    clean_svg,
    find_parsed_raster_reference,
    find_raster_reference,
    sanitize_svg,
)
from glyphforge.exceptions import EmbeddedRasterRejectedError, InvalidPathError

SQUARE = '<path d="M0 0 L10 0 L10 10 L0 10 Z" />'


class TestCleanSvg:
    """Tests for the cleaning policy."""

    def test_colours_become_current_color(self):
        svg = '<svg viewBox="0 0 24 24"><path d="M0 0 L1 1 Z" fill="#f00" stroke=\'blue\'/></svg>'

        cleaned = clean_svg(svg)

        assert 'fill="currentColor"' in cleaned
        assert 'stroke="currentColor"' in cleaned
        assert "#f00" not in cleaned
        assert "blue" not in cleaned

    def test_fill_none_kept(self):
        cleaned = clean_svg('<svg><path d="M0 0 Z" fill="none"/></svg>')

        assert 'fill="none"' in cleaned

    def test_style_attributes_removed(self):
        cleaned = clean_svg('<svg><path style="fill:red;opacity:0.5" d="M0 0 Z"/></svg>')

        assert "style" not in cleaned
        assert "opacity" not in cleaned

    def test_namespace_added(self):
        cleaned = clean_svg("<svg><g/></svg>")

        assert cleaned.startswith('<svg xmlns="http://www.w3.org/2000/svg"')

    def test_existing_namespace_kept_once(self):
        cleaned = clean_svg('<svg xmlns="http://www.w3.org/2000/svg"><g/></svg>')

        assert cleaned.count("xmlns=") == 1

    def test_raster_and_script_content_removed(self):
        svg = (
            "<!DOCTYPE svg>"
            "<svg>"
            '<image href="data:image/png;base64,AAAA" width="4" height="4"/>'
            '<use xlink:href="data:image/png;base64,AAAA"/>'
            "<foreignObject><div>hi</div></foreignObject>"
            "<script>alert(1)</script>"
            "</svg>"
        )

        cleaned = clean_svg(svg)

        assert "<image" not in cleaned
        assert "data:image" not in cleaned
        assert "foreignObject" not in cleaned
        assert "<script" not in cleaned
        assert "DOCTYPE" not in cleaned
        assert find_raster_reference(cleaned) is None

    def test_missing_svg_root(self):
        with pytest.raises(InvalidPathError):
            clean_svg("<html><body/></html>")


class TestSanitizeSvg:
    """Tests for sanitize_svg."""

    def test_measures_outline(self):
        path = sanitize_svg(f'<svg viewBox="0 0 24 24">{SQUARE}</svg>')

        assert path.bbox == (0.0, 0.0, 10.0, 10.0)
        assert path.width == 24.0
        assert path.height == 24.0

    def test_size_from_width_and_height(self):
        path = sanitize_svg(f'<svg width="32px" height="16">{SQUARE}</svg>')

        assert (path.width, path.height) == (32.0, 16.0)

    def test_size_falls_back_to_outline(self):
        path = sanitize_svg(f'<svg width="100%">{SQUARE}</svg>')

        assert (path.width, path.height) == (10.0, 10.0)

    def test_raster_left_in_style_element_rejected(self):
        """Test raster data that cleaning cannot strip is rejected."""
        svg = (
            "<svg><style>.a { background: url(data:image/png;base64,AAAA) }</style>"
            f"{SQUARE}</svg>"
        )

        with pytest.raises(EmbeddedRasterRejectedError, match="data:image/"):
            sanitize_svg(svg)

    def test_entity_encoded_raster_data_rejected(self):
        """Test a character reference cannot hide a data URI from rejection."""
        svg = (
            "<svg><style>path { fill: url(&#100;ata:image/png;base64,AAAA) }</style>"
            f"{SQUARE}</svg>"
        )

        with pytest.raises(EmbeddedRasterRejectedError, match="data:image/"):
            sanitize_svg(svg)

    def test_prefixed_image_element_rejected(self):
        """Test an image element under a namespace prefix is still found."""
        svg = (
            '<svg xmlns:s="http://www.w3.org/2000/svg">'
            '<s:image href="&#100;ata:image/png;base64,AAAA" width="4" height="4"/>'
            f"{SQUARE}</svg>"
        )

        with pytest.raises(EmbeddedRasterRejectedError, match="image"):
            sanitize_svg(svg)

    def test_prefixed_foreign_object_rejected(self):
        svg = (
            '<svg xmlns:s="http://www.w3.org/2000/svg">'
            f"<s:foreignObject><s:g/></s:foreignObject>{SQUARE}</svg>"
        )

        with pytest.raises(EmbeddedRasterRejectedError, match="foreignObject"):
            sanitize_svg(svg)

    def test_clean_document_passes_tree_check(self):
        svg = f'<svg viewBox="0 0 24 24"><g id="data-layer">{SQUARE}</g></svg>'

        outline = SVGPath.fromstring(clean_svg(svg).encode("utf-8"))

        assert find_parsed_raster_reference(outline.root) is None

    def test_malformed_document(self):
        with pytest.raises(InvalidPathError):
            sanitize_svg('<svg><path d="M0 0"</svg>')

    def test_not_svg(self):
        with pytest.raises(InvalidPathError, match="no <svg> element"):
            sanitize_svg("just text")
