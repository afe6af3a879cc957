"""Font assembly from vectorized glyphs.

The assembler turns a set of (code point, glyph path) pairs into a
FontArtifact and compiles that artifact into a TrueType binary. Glyph order
is always ``.notdef`` first, then coded glyphs by ascending code point, so
assembling the same input twice yields the same glyph order and outlines.
"""

from collections.abc import Iterable
from io import BytesIO

import structlog
from fontTools.fontBuilder import FontBuilder

from glyphforge.config import FontConfig
from glyphforge.core.codepoints import format_codepoint, normalize_codepoint
from glyphforge.domain import EMPTY_PATH, FontArtifact, FontMetrics, Glyph, GlyphPath
from glyphforge.exceptions import DuplicateCodepointError
from glyphforge.io.converter import glyph_path_to_ttglyph


class FontAssembler:
    """Builds FontArtifacts and compiles them with fontTools.

    Example:
        assembler = FontAssembler(FontConfig())
        artifact = assembler.assemble("My Icons", [("E000", path)])
        data = assembler.compile(artifact)
    """

    def __init__(
        self,
        config: FontConfig | None = None,
        logger: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        self.config = config or FontConfig()
        self._logger = logger

    def metrics_for(self, family_name: str) -> FontMetrics:
        """Family metrics for a new font under this configuration."""
        return FontMetrics(
            family_name=family_name,
            style_name=self.config.style_name,
            units_per_em=self.config.units_per_em,
            ascender=self.config.ascender,
            descender=self.config.descender,
            version=self.config.version,
        )

    def assemble(
        self,
        family_name: str,
        pairs: Iterable[tuple[str | int, GlyphPath]],
        notdef: GlyphPath | None = None,
    ) -> FontArtifact:
        """Combine glyph paths into an ordered artifact.

        Args:
            family_name: Font family name
            pairs: (code point, path) pairs in any order
            notdef: Outline of the fallback glyph (empty when omitted)

        Returns:
            FontArtifact with notdef first and coded glyphs ascending

        Raises:
            InvalidCodepointError: If a code point cannot be parsed
            DuplicateCodepointError: If two pairs share a code point
        """
        advance = self.config.advance_width
        coded: dict[int, Glyph] = {}

        for raw_codepoint, path in pairs:
            codepoint = normalize_codepoint(raw_codepoint)
            if codepoint in coded:
                raise DuplicateCodepointError(format_codepoint(codepoint))
            coded[codepoint] = Glyph(codepoint=codepoint, path=path, advance_width=advance)

        glyphs = [Glyph(codepoint=None, path=notdef or EMPTY_PATH, advance_width=advance)]
        glyphs.extend(coded[cp] for cp in sorted(coded))

        return FontArtifact(metrics=self.metrics_for(family_name), glyphs=glyphs)

    def compile(self, artifact: FontArtifact) -> bytes:
        """Serialize an artifact to a TrueType font binary.

        Raises:
            DuplicateCodepointError: If the artifact maps a code point twice
            InvalidPathError: If a glyph's SVG cannot be drawn
        """
        seen: set[int] = set()
        for codepoint in artifact.codepoints:
            if codepoint in seen:
                raise DuplicateCodepointError(format_codepoint(codepoint))
            seen.add(codepoint)

        metrics = artifact.metrics
        builder = FontBuilder(metrics.units_per_em, isTTF=True)
        builder.setupGlyphOrder(artifact.glyph_order)
        builder.setupCharacterMap({g.codepoint: g.name for g in artifact.coded_glyphs})

        builder.setupGlyf(
            {
                glyph.name: glyph_path_to_ttglyph(
                    glyph.path,
                    metrics,
                    glyph.advance_width,
                    max_err=self.config.curve_tolerance,
                )
                for glyph in artifact.glyphs
            }
        )

        glyf_table = builder.font["glyf"]
        builder.setupHorizontalMetrics(
            {
                glyph.name: (glyph.advance_width, getattr(glyf_table[glyph.name], "xMin", 0))
                for glyph in artifact.glyphs
            }
        )
        builder.setupHorizontalHeader(ascent=metrics.ascender, descent=metrics.descender)
        builder.setupNameTable(
            {
                "familyName": metrics.family_name,
                "styleName": metrics.style_name,
                "uniqueFontIdentifier": f"{metrics.postscript_name};{metrics.version}",
                "fullName": metrics.full_name,
                "psName": metrics.postscript_name,
                "version": f"Version {metrics.version}",
            }
        )
        builder.setupOS2(
            sTypoAscender=metrics.ascender,
            sTypoDescender=metrics.descender,
            sTypoLineGap=0,
            usWinAscent=metrics.ascender,
            usWinDescent=abs(metrics.descender),
        )
        builder.setupPost()

        buffer = BytesIO()
        builder.save(buffer)
        data = buffer.getvalue()

        if self._logger is not None:
            self._logger.info(
                "Font compiled",
                family=metrics.family_name,
                glyphs=len(artifact.glyphs),
                size=len(data),
            )
        return data
