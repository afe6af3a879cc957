"""Font reader for importing existing fonts.

FontReader loads a TTF/OTF file and yields its encoded glyphs as SVG glyph
paths, so an existing font can seed a workspace.
"""

from collections.abc import Iterator
from pathlib import Path

from fontTools.ttLib import TTFont, TTLibError

from glyphforge.domain import FontMetrics, GlyphPath
from glyphforge.exceptions import FontLoadError
from glyphforge.io.converter import glyph_to_glyph_path


class FontReader:
    """Loads TTF/OTF fonts and extracts encoded glyph outlines.

    Example:
        with FontReader(Path("icons.ttf")) as reader:
            for codepoint, path in reader.iter_glyph_paths():
                workspace.add_glyph(path, codepoint)
    """

    def __init__(self, font_path: Path) -> None:
        """Initialize the font reader.

        Args:
            font_path: Path to the TTF or OTF font file
        """
        self._font_path = font_path
        self._font: TTFont | None = None

    def load(self) -> None:
        """Load the font file.

        Raises:
            FileNotFoundError: If font file does not exist
            FontLoadError: If the file is not a readable font
        """
        if not self._font_path.exists():
            raise FileNotFoundError(f"Font file not found: {self._font_path}")

        try:
            self._font = TTFont(str(self._font_path))
        except (TTLibError, OSError, AssertionError) as e:
            raise FontLoadError(str(self._font_path), str(e)) from e

    def _require_font(self) -> TTFont:
        if self._font is None:
            raise RuntimeError("Font not loaded. Call load() first.")
        return self._font

    @property
    def format(self) -> str:
        """'OpenType' for CFF-flavoured fonts, 'TrueType' otherwise."""
        font = self._require_font()
        if "CFF " in font or "CFF2" in font:
            return "OpenType"
        return "TrueType"

    @property
    def family_name(self) -> str:
        """Family name from the name table, falling back to the file stem."""
        name_table = self._require_font().get("name")
        if name_table is not None:
            family = name_table.getBestFamilyName()
            if family:
                return family
        return self._font_path.stem

    @property
    def metrics(self) -> FontMetrics:
        """Vertical metrics of the loaded font."""
        font = self._require_font()
        hhea = font.get("hhea")
        ascender = hhea.ascent if hhea is not None else font["head"].unitsPerEm  # type: ignore[attr-defined]
        descender = hhea.descent if hhea is not None else 0  # type: ignore[attr-defined]
        name_table = font.get("name")
        style = name_table.getBestSubFamilyName() if name_table is not None else None
        return FontMetrics(
            family_name=self.family_name,
            style_name=style or "Regular",
            units_per_em=font["head"].unitsPerEm,  # type: ignore[attr-defined]
            ascender=ascender,
            descender=descender,
        )

    @property
    def glyph_count(self) -> int:
        """Total number of glyphs, encoded or not."""
        return self._require_font()["maxp"].numGlyphs  # type: ignore[attr-defined]

    def iter_glyph_paths(self) -> Iterator[tuple[int, GlyphPath]]:
        """Yield (code point, path) for every glyph in the best cmap.

        Code points come in ascending order. A glyph mapped from several code
        points is yielded once per code point.
        """
        font = self._require_font()
        cmap = font.getBestCmap() or {}
        glyph_set = font.getGlyphSet()
        hmtx = font.get("hmtx")
        metrics = self.metrics

        for codepoint in sorted(cmap):
            name = cmap[codepoint]
            if name not in glyph_set:
                continue
            advance = hmtx[name][0] if hmtx is not None and name in hmtx.metrics else 0
            yield codepoint, glyph_to_glyph_path(glyph_set[name], metrics, advance)

    def close(self) -> None:
        """Close the font file and free resources."""
        if self._font is not None:
            self._font.close()
            self._font = None

    def __enter__(self) -> "FontReader":
        """Context manager entry."""
        self.load()
        return self

    def __exit__(self, _exc_type: object, _exc_val: object, _exc_tb: object) -> None:
        """Context manager exit."""
        self.close()
