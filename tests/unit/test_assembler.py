"""Tests for font assembly, compilation and the glyph workspace."""

import random
import threading
from io import BytesIO

import pytest
from fontTools.ttLib import TTFont

from glyphforge.config import CodepointConfig, FontConfig
from glyphforge.core.assembler import FontAssembler
from glyphforge.core.serializer import PathSerializer, placeholder_contour
from glyphforge.core.workspace import FontWorkspace
from glyphforge.domain import EMPTY_PATH, GlyphPath
from glyphforge.exceptions import (
    CodepointRangeExhaustedError,
    DuplicateCodepointError,
    InvalidCodepointError,
)


@pytest.fixture
def square_path() -> GlyphPath:
    """Centred placeholder square in a 20x20 canvas."""
    return PathSerializer().serialize([placeholder_contour(20, 20)], 20, 20)


@pytest.fixture
def assembler() -> FontAssembler:
    return FontAssembler(FontConfig())


class TestFontAssembler:
    """Tests for FontAssembler."""

    def test_glyph_order(self, assembler: FontAssembler, square_path: GlyphPath):
        """Test notdef comes first and coded glyphs ascend."""
        artifact = assembler.assemble(
            "Test Icons",
            [("E001", square_path), ("0041", square_path), (0xE000, square_path)],
        )

        assert artifact.glyph_order == [".notdef", "uni0041", "uniE000", "uniE001"]
        assert artifact.notdef.path is EMPTY_PATH
        assert all(g.advance_width == 600 for g in artifact.glyphs)
        assert artifact.metrics.family_name == "Test Icons"

    def test_order_independent_of_input(self, assembler: FontAssembler, square_path: GlyphPath):
        forwards = assembler.assemble("A", [("0041", square_path), ("0042", square_path)])
        backwards = assembler.assemble("A", [("0042", square_path), ("0041", square_path)])

        assert forwards.glyph_order == backwards.glyph_order

    def test_custom_notdef(self, assembler: FontAssembler, square_path: GlyphPath):
        artifact = assembler.assemble("A", [], notdef=square_path)

        assert artifact.notdef.path is square_path
        assert artifact.codepoints == []

    def test_duplicate_codepoints_rejected(
        self, assembler: FontAssembler, square_path: GlyphPath
    ):
        with pytest.raises(DuplicateCodepointError):
            assembler.assemble("A", [("0041", square_path), ("U+41", square_path)])

    def test_invalid_codepoint_rejected(self, assembler: FontAssembler, square_path: GlyphPath):
        with pytest.raises(InvalidCodepointError):
            assembler.assemble("A", [("xyz", square_path)])

    def test_compile_produces_valid_font(self, assembler: FontAssembler, square_path: GlyphPath):
        """Test the compiled binary reopens with the expected tables."""
        artifact = assembler.assemble("Test Icons", [("0041", square_path), ("E000", square_path)])

        font = TTFont(BytesIO(assembler.compile(artifact)))

        assert font.getGlyphOrder() == [".notdef", "uni0041", "uniE000"]
        assert font.getBestCmap() == {0x41: "uni0041", 0xE000: "uniE000"}
        assert font["head"].unitsPerEm == 1000
        assert font["hhea"].ascent == 800
        assert font["hhea"].descent == -200
        assert font["OS/2"].sTypoAscender == 800
        assert font["hmtx"]["uni0041"][0] == 600
        assert font["name"].getBestFamilyName() == "Test Icons"
        assert font["name"].getDebugName(6) == "TestIcons-Regular"

    def test_outline_placed_in_em(self, assembler: FontAssembler, square_path: GlyphPath):
        """Test the 20x20 canvas is scaled into the advance and centred vertically."""
        artifact = assembler.assemble("A", [("0041", square_path)])

        font = TTFont(BytesIO(assembler.compile(artifact)))
        glyph = font["glyf"]["uni0041"]

        assert (glyph.xMin, glyph.yMin, glyph.xMax, glyph.yMax) == (120, 120, 480, 480)
        assert font["hmtx"]["uni0041"] == (600, 120)

    def test_notdef_is_empty(self, assembler: FontAssembler):
        font = TTFont(BytesIO(assembler.compile(assembler.assemble("A", []))))

        assert font["glyf"][".notdef"].numberOfContours == 0

    def test_custom_metrics(self, square_path: GlyphPath):
        assembler = FontAssembler(
            FontConfig(units_per_em=2048, ascender=1638, descender=-410, advance_width=1024)
        )

        font = TTFont(BytesIO(assembler.compile(assembler.assemble("A", [("41", square_path)]))))

        assert font["head"].unitsPerEm == 2048
        assert font["hmtx"]["uni0041"][0] == 1024


class TestFontWorkspace:
    """Tests for FontWorkspace."""

    def test_add_with_requested_codepoint(self, square_path: GlyphPath):
        workspace = FontWorkspace("Test")

        assigned = workspace.add_glyph(square_path, "u+0041")

        assert assigned == "0041"
        assert "0041" in workspace
        assert 0x41 in workspace
        assert len(workspace) == 1

    def test_add_allocates_private_use(self, square_path: GlyphPath):
        workspace = FontWorkspace("Test", rng=random.Random(1))

        assigned = workspace.add_glyph(square_path)

        assert 0xE000 <= int(assigned, 16) <= 0xF8FF
        assert workspace.used_codepoints == [assigned]

    def test_duplicate_rejected(self, square_path: GlyphPath):
        workspace = FontWorkspace("Test")
        workspace.add_glyph(square_path, "0041")

        with pytest.raises(DuplicateCodepointError):
            workspace.add_glyph(square_path, "41")

        assert len(workspace) == 1

    def test_add_glyphs_and_remove(self, square_path: GlyphPath):
        workspace = FontWorkspace("Test")
        workspace.add_glyphs([("0042", square_path), ("0041", square_path)])

        assert workspace.used_codepoints == ["0041", "0042"]
        assert workspace.remove_glyph("0041") is square_path
        assert workspace.remove_glyph("0041") is None
        assert workspace.used_codepoints == ["0042"]

    def test_range_exhausted(self, square_path: GlyphPath):
        config = CodepointConfig(range_start=0xE000, range_end=0xE001)
        workspace = FontWorkspace("Test", codepoint_config=config)
        workspace.add_glyph(square_path)
        workspace.add_glyph(square_path)

        with pytest.raises(CodepointRangeExhaustedError):
            workspace.add_glyph(square_path)

    def test_concurrent_additions_get_distinct_codepoints(self, square_path: GlyphPath):
        """Test parallel adds never hand out the same code point."""
        config = CodepointConfig(range_start=0xE000, range_end=0xE03F, random_attempts=2)
        workspace = FontWorkspace("Test", codepoint_config=config)
        assigned: list[str] = []
        lock = threading.Lock()

        def worker() -> None:
            for _ in range(8):
                codepoint = workspace.add_glyph(square_path)
                with lock:
                    assigned.append(codepoint)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(assigned) == 64
        assert len(set(assigned)) == 64
        assert len(workspace) == 64

    def test_compile(self, square_path: GlyphPath):
        workspace = FontWorkspace("Workspace Icons")
        workspace.add_glyph(square_path, "E000")

        font = TTFont(BytesIO(workspace.compile()))

        assert font.getBestCmap() == {0xE000: "uniE000"}
        assert font["name"].getBestFamilyName() == "Workspace Icons"
