"""Glyph, font and vectorization result models.

This module defines the output side of the pipeline: sanitized vector paths,
glyphs that pair a path with a code point, the assembled font artifact, and
the result record returned by a vectorization call.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from glyphforge.exceptions import DegradedResultError

NOTDEF_NAME = ".notdef"
SVG_NS = "http://www.w3.org/2000/svg"
PAINT = "currentColor"


def format_number(value: float) -> str:
    """Compact decimal form: integers without a fraction, others to 2 places."""
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.2f}".rstrip("0").rstrip(".")


def svg_document(path_data: str, width: float, height: float) -> str:
    """Wrap path data in a minimal single-colour SVG document."""
    w, h = format_number(width), format_number(height)
    header = f'<svg xmlns="{SVG_NS}" viewBox="0 0 {w} {h}" width="{w}" height="{h}">'
    if not path_data:
        return f"{header}\n</svg>"
    return f'{header}\n  <path d="{path_data}" fill="{PAINT}" />\n</svg>'


def glyph_name_for(codepoint: int | None) -> str:
    """Return the production glyph name for a code point.

    Follows the AGL convention: ``uniXXXX`` inside the BMP, ``uXXXXX``
    beyond it, and ``.notdef`` for the fallback glyph.
    """
    if codepoint is None:
        return NOTDEF_NAME
    if codepoint <= 0xFFFF:
        return f"uni{codepoint:04X}"
    return f"u{codepoint:05X}"


class VectorizeStatus(str, Enum):
    """Outcome of a vectorization call."""

    OK = "ok"
    PLACEHOLDER = "placeholder"
    TRIMMED = "trimmed"

    @property
    def degraded(self) -> bool:
        """True when the glyph is a fallback or a trimmed result."""
        return self is not VectorizeStatus.OK


@dataclass(frozen=True)
class GlyphPath:
    """A sanitized single-colour SVG outline.

    Attributes:
        svg: SVG document text using only ``currentColor`` as paint
        bbox: (min_x, min_y, max_x, max_y) of the outline in viewBox units
        width: viewBox width
        height: viewBox height
    """

    svg: str
    bbox: tuple[float, float, float, float]
    width: float
    height: float

    @property
    def size(self) -> int:
        """Serialized size in bytes (UTF-8)."""
        return len(self.svg.encode("utf-8"))

    def is_empty(self) -> bool:
        """True when the outline covers no area."""
        min_x, min_y, max_x, max_y = self.bbox
        return max_x <= min_x or max_y <= min_y

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC."""
        return {
            "svg": self.svg,
            "bbox": list(self.bbox),
            "width": self.width,
            "height": self.height,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GlyphPath":
        """Deserialize from dictionary."""
        return cls(
            svg=data["svg"],
            bbox=tuple(data["bbox"]),  # type: ignore[arg-type]
            width=data["width"],
            height=data["height"],
        )


EMPTY_PATH = GlyphPath(
    svg=svg_document("", 1, 1),
    bbox=(0.0, 0.0, 0.0, 0.0),
    width=1.0,
    height=1.0,
)


@dataclass
class Glyph:
    """A single font character.

    Attributes:
        codepoint: Unicode code point (None for the notdef glyph)
        path: Vector outline
        advance_width: Horizontal advance in font units
    """

    codepoint: int | None
    path: GlyphPath
    advance_width: int

    @property
    def name(self) -> str:
        """Production glyph name."""
        return glyph_name_for(self.codepoint)

    def is_notdef(self) -> bool:
        """True for the fallback glyph."""
        return self.codepoint is None


@dataclass(frozen=True)
class FontMetrics:
    """Family metadata shared by every glyph in a font."""

    family_name: str
    style_name: str = "Regular"
    units_per_em: int = 1000
    ascender: int = 800
    descender: int = -200
    version: str = "1.000"

    @property
    def full_name(self) -> str:
        return f"{self.family_name} {self.style_name}"

    @property
    def postscript_name(self) -> str:
        family = "".join(ch for ch in self.family_name if ch.isalnum() or ch == "-")
        style = "".join(ch for ch in self.style_name if ch.isalnum())
        return f"{family or 'Untitled'}-{style or 'Regular'}"


@dataclass
class FontArtifact:
    """An assembled font: notdef first, then coded glyphs by ascending code point.

    Attributes:
        metrics: Family metadata
        glyphs: Ordered glyph list
    """

    metrics: FontMetrics
    glyphs: list[Glyph]

    @property
    def notdef(self) -> Glyph:
        return self.glyphs[0]

    @property
    def coded_glyphs(self) -> list[Glyph]:
        return [g for g in self.glyphs if not g.is_notdef()]

    @property
    def codepoints(self) -> list[int]:
        return [g.codepoint for g in self.glyphs if g.codepoint is not None]

    @property
    def glyph_order(self) -> list[str]:
        return [g.name for g in self.glyphs]

    def get(self, codepoint: int) -> Glyph | None:
        """Find the glyph mapped to a code point."""
        for glyph in self.glyphs:
            if glyph.codepoint == codepoint:
                return glyph
        return None


@dataclass
class VectorizeResult:
    """Result of one vectorization call.

    Degraded outcomes are not errors: the path is always usable, and
    ``degradations`` records what was given up so callers can warn.

    Attributes:
        path: Sanitized vector outline
        status: OK, PLACEHOLDER or TRIMMED
        epsilon: Simplification tolerance of the final round
        rounds: Number of simplification rounds run
        contour_count: Contours present in the emitted path
        degradations: Recoverable conditions met along the way
    """

    path: GlyphPath
    status: VectorizeStatus
    epsilon: float = 0.0
    rounds: int = 0
    contour_count: int = 0
    degradations: tuple[DegradedResultError, ...] = field(default_factory=tuple)

    @property
    def degraded(self) -> bool:
        return self.status.degraded

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC."""
        return {
            "path": self.path.to_dict(),
            "status": self.status.value,
            "epsilon": self.epsilon,
            "rounds": self.rounds,
            "contour_count": self.contour_count,
            "degradations": [str(d) for d in self.degradations],
        }
