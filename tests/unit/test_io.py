"""Unit tests for the codec layer.

Tests for image decoding, the SVG/TrueType converters, FontReader and FontWriter.
"""

from io import BytesIO
from pathlib import Path
from unittest.mock import patch

import pytest
from fontTools.ttLib import TTFont
from PIL import Image

from glyphforge.core.assembler import FontAssembler
from glyphforge.core.serializer import PathSerializer, placeholder_contour
from glyphforge.domain import EMPTY_PATH, FontMetrics, GlyphPath
from glyphforge.exceptions import FontLoadError, FontSaveError, InvalidImageError, InvalidPathError
from glyphforge.io.converter import em_transform, glyph_path_to_ttglyph, parse_svg, view_box
from glyphforge.io.image import decode_pixel_grid, image_to_pixel_grid, load_pixel_grid
from glyphforge.io.reader import FontReader
from glyphforge.io.writer import FontWriter


def png_bytes(image: Image.Image) -> bytes:
    buffer = BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def metrics() -> FontMetrics:
    return FontMetrics(family_name="Test")


@pytest.fixture
def square_path() -> GlyphPath:
    return PathSerializer().serialize([placeholder_contour(20, 20)], 20, 20)


@pytest.fixture
def font_file(tmp_path: Path, square_path: GlyphPath) -> Path:
    """A compiled two-glyph font on disk."""
    assembler = FontAssembler()
    artifact = assembler.assemble("Reader Test", [("0041", square_path), ("E000", square_path)])
    path = tmp_path / "ReaderTest-Regular.ttf"
    path.write_bytes(assembler.compile(artifact))
    return path


class TestImageDecoding:
    """Tests for Pillow-backed decoding."""

    def test_decode_png(self):
        image = Image.new("RGBA", (3, 2), (255, 255, 255, 255))
        image.putpixel((1, 0), (10, 20, 30, 255))

        grid = decode_pixel_grid(png_bytes(image))

        assert (grid.width, grid.height) == (3, 2)
        assert grid.pixel(1, 0) == (10, 20, 30, 255)
        assert grid.pixel(0, 1) == (255, 255, 255, 255)

    def test_palette_and_greyscale_converted(self):
        grid = image_to_pixel_grid(Image.new("L", (2, 2), 0))

        assert grid.pixel(1, 1) == (0, 0, 0, 255)

    def test_empty_data(self):
        with pytest.raises(InvalidImageError, match="empty image data"):
            decode_pixel_grid(b"")

    def test_garbage_data(self):
        with pytest.raises(InvalidImageError):
            decode_pixel_grid(b"\x89PNG but not really")

    def test_load_missing_file(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            load_pixel_grid(tmp_path / "missing.png")

    def test_load_file(self, tmp_path: Path):
        target = tmp_path / "glyph.png"
        Image.new("RGB", (4, 5), "black").save(target)

        grid = load_pixel_grid(target)

        assert (grid.width, grid.height) == (4, 5)


class TestConverter:
    """Tests for SVG to TrueType conversion."""

    def test_em_transform_square_canvas(self, metrics: FontMetrics):
        """Test a square canvas fills the advance and centres between the metrics."""
        transform = em_transform((0, 0, 10, 10), metrics, 600)

        assert transform.transformPoint((0, 0)) == pytest.approx((0, 600))
        assert transform.transformPoint((10, 10)) == pytest.approx((600, 0))

    def test_em_transform_tall_canvas(self, metrics: FontMetrics):
        """Test a tall canvas is limited by the em height and centred horizontally."""
        transform = em_transform((0, 0, 10, 20), metrics, 600)

        assert transform.transformPoint((0, 0)) == pytest.approx((50, 800))
        assert transform.transformPoint((10, 20)) == pytest.approx((550, -200))

    def test_em_transform_offset_view_box(self, metrics: FontMetrics):
        shifted = em_transform((5, 5, 10, 10), metrics, 600)

        assert shifted.transformPoint((5, 5)) == pytest.approx((0, 600))

    def test_view_box_fallback(self):
        path = GlyphPath(
            svg='<svg xmlns="http://www.w3.org/2000/svg"><path d="M0 0 L1 0 L1 1 Z"/></svg>',
            bbox=(0, 0, 1, 1),
            width=8,
            height=4,
        )

        assert view_box(parse_svg(path), path) == (0.0, 0.0, 8, 4)

    def test_square_glyph(self, square_path: GlyphPath, metrics: FontMetrics):
        glyph = glyph_path_to_ttglyph(square_path, metrics, 600)

        assert glyph.numberOfContours == 1
        coordinates = list(glyph.coordinates)
        assert (120, 480) in coordinates
        assert (480, 120) in coordinates

    def test_outer_contour_clockwise_in_font_space(
        self, square_path: GlyphPath, metrics: FontMetrics
    ):
        """Test filled shapes keep TrueType's clockwise outer winding."""
        coordinates = list(glyph_path_to_ttglyph(square_path, metrics, 600).coordinates)

        area = 0.0
        for i, (x0, y0) in enumerate(coordinates):
            x1, y1 = coordinates[(i + 1) % len(coordinates)]
            area += x0 * y1 - x1 * y0

        assert area < 0

    def test_cubic_curves_become_quadratic(self, metrics: FontMetrics):
        path = GlyphPath(
            svg=(
                '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 10 10">'
                '<path d="M 0 5 C 0 0 10 0 10 5 C 10 10 0 10 0 5 Z"/></svg>'
            ),
            bbox=(0, 0, 10, 10),
            width=10,
            height=10,
        )

        glyph = glyph_path_to_ttglyph(path, metrics, 600)

        assert glyph.numberOfContours == 1
        assert any(flag & 1 == 0 for flag in glyph.flags)

    def test_empty_path(self, metrics: FontMetrics):
        glyph = glyph_path_to_ttglyph(EMPTY_PATH, metrics, 600)

        assert glyph.numberOfContours == 0

    def test_malformed_svg(self, metrics: FontMetrics):
        path = GlyphPath(svg="<svg><path", bbox=(0, 0, 1, 1), width=1, height=1)

        with pytest.raises(InvalidPathError):
            glyph_path_to_ttglyph(path, metrics, 600)


class TestFontReader:
    """Tests for FontReader class."""

    def test_init(self):
        path = Path("test.ttf")
        reader = FontReader(path)
        assert reader._font_path == path
        assert reader._font is None

    def test_load_nonexistent_file(self):
        reader = FontReader(Path("nonexistent.ttf"))
        with pytest.raises(FileNotFoundError):
            reader.load()

    def test_format_before_load(self):
        """Test accessing format before loading raises RuntimeError."""
        reader = FontReader(Path("test.ttf"))
        with pytest.raises(RuntimeError, match="Font not loaded"):
            _ = reader.format

    def test_iter_before_load(self):
        reader = FontReader(Path("test.ttf"))
        with pytest.raises(RuntimeError, match="Font not loaded"):
            list(reader.iter_glyph_paths())

    def test_load_invalid_font(self, tmp_path: Path):
        bogus = tmp_path / "bogus.ttf"
        bogus.write_bytes(b"definitely not a font")

        with pytest.raises(FontLoadError):
            FontReader(bogus).load()

    def test_properties(self, font_file: Path):
        with FontReader(font_file) as reader:
            assert reader.format == "TrueType"
            assert reader.family_name == "Reader Test"
            assert reader.glyph_count == 3
            assert reader.metrics.ascender == 800
            assert reader.metrics.descender == -200
            assert reader.metrics.style_name == "Regular"

    def test_iter_glyph_paths(self, font_file: Path):
        """Test encoded glyphs come back as SVG paths in code point order."""
        with FontReader(font_file) as reader:
            paths = list(reader.iter_glyph_paths())

        assert [cp for cp, _ in paths] == [0x41, 0xE000]
        path = paths[0][1]
        assert 'viewBox="0 0 600 1000"' in path.svg
        assert 'fill="currentColor"' in path.svg
        assert path.bbox == pytest.approx((120, 320, 480, 680))

    def test_imported_path_recompiles_in_place(self, font_file: Path):
        """Test an imported glyph lands on the same outline when rebuilt."""
        with FontReader(font_file) as reader:
            _, path = next(reader.iter_glyph_paths())

        assembler = FontAssembler()
        font = TTFont(BytesIO(assembler.compile(assembler.assemble("Again", [("41", path)]))))
        glyph = font["glyf"]["uni0041"]

        assert (glyph.xMin, glyph.yMin, glyph.xMax, glyph.yMax) == (120, 120, 480, 480)

    def test_close(self, font_file: Path):
        reader = FontReader(font_file)
        reader.load()
        reader.close()

        assert reader._font is None


class TestFontWriter:
    """Tests for FontWriter class."""

    def test_get_output_path(self):
        path = FontWriter.get_output_path(Path("/fonts"), "My Icons")

        assert path == Path("/fonts/My-Icons-Regular.ttf")

    def test_get_output_path_style(self):
        path = FontWriter.get_output_path(Path("out"), "Icons", "Semi Bold")

        assert path.name == "Icons-SemiBold.ttf"

    def test_write_creates_directories(self, tmp_path: Path, font_file: Path):
        target = tmp_path / "nested" / "dir" / "out.ttf"

        written = FontWriter(target).write(font_file.read_bytes())

        assert written == target
        assert target.read_bytes() == font_file.read_bytes()

    def test_write_rejects_invalid_font(self, tmp_path: Path):
        target = tmp_path / "out.ttf"

        with pytest.raises(FontSaveError, match="not a valid font"):
            FontWriter(target).write(b"garbage bytes")

        assert not target.exists()

    def test_write_without_verification(self, tmp_path: Path):
        target = tmp_path / "raw.bin"

        FontWriter(target).write(b"raw", verify=False)

        assert target.read_bytes() == b"raw"

    def test_write_os_error(self, tmp_path: Path, font_file: Path):
        writer = FontWriter(tmp_path / "out.ttf")

        with patch.object(Path, "write_bytes", side_effect=OSError("disk full")):
            with pytest.raises(FontSaveError, match="disk full"):
                writer.write(font_file.read_bytes())
