"""In-memory font workspace.

A workspace holds the glyphs of one font while they are being added. Adding
a glyph reads the used code points, resolves or allocates a code point,
rejects duplicates and stores the glyph as one step under the workspace
lock, so concurrent adds can never hand out the same code point and an
assembled snapshot never sees a half-applied add. Persistent stores that
replace this class must guard the same sequence per font.
"""

import random
import threading
from collections.abc import Iterable

import structlog

from glyphforge.config import CodepointConfig, FontConfig
from glyphforge.core.assembler import FontAssembler
from glyphforge.core.codepoints import format_codepoint, normalize_codepoint, resolve_codepoint
from glyphforge.domain import FontArtifact, GlyphPath


class FontWorkspace:
    """Glyph collection of a single font, safe for concurrent additions.

    Example:
        workspace = FontWorkspace("My Icons")
        codepoint = workspace.add_glyph(result.path)          # allocated in the PUA
        workspace.add_glyph(other_path, codepoint="0041")     # caller-chosen
        data = workspace.compile()
    """

    def __init__(
        self,
        family_name: str,
        font_config: FontConfig | None = None,
        codepoint_config: CodepointConfig | None = None,
        rng: random.Random | None = None,
        logger: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        self.family_name = family_name
        self.codepoint_config = codepoint_config or CodepointConfig()
        self.assembler = FontAssembler(font_config, logger=logger)
        self._rng = rng or random.Random()
        self._logger = logger
        self._glyphs: dict[int, GlyphPath] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._glyphs)

    def __contains__(self, codepoint: str | int) -> bool:
        key = normalize_codepoint(codepoint)
        with self._lock:
            return key in self._glyphs

    @property
    def used_codepoints(self) -> list[str]:
        """Used code points as uppercase hex strings, ascending."""
        with self._lock:
            return [format_codepoint(cp) for cp in sorted(self._glyphs)]

    def add_glyph(self, path: GlyphPath, codepoint: str | int | None = None) -> str:
        """Store a glyph, allocating a private-use code point when none is given.

        Returns:
            The code point assigned, as an uppercase hex string

        Raises:
            InvalidCodepointError: If ``codepoint`` cannot be parsed
            DuplicateCodepointError: If ``codepoint`` is already used
            CodepointRangeExhaustedError: If no private-use value is free
        """
        with self._lock:
            assigned = resolve_codepoint(
                codepoint,
                self._glyphs.keys(),
                config=self.codepoint_config,
                rng=self._rng,
            )
            self._glyphs[assigned] = path

        if self._logger is not None:
            self._logger.debug(
                "Glyph added",
                family=self.family_name,
                codepoint=format_codepoint(assigned),
                allocated=codepoint is None,
            )
        return format_codepoint(assigned)

    def add_glyphs(self, pairs: Iterable[tuple[str | int | None, GlyphPath]]) -> list[str]:
        """Add several glyphs; stops at the first failure."""
        return [self.add_glyph(path, codepoint) for codepoint, path in pairs]

    def remove_glyph(self, codepoint: str | int) -> GlyphPath | None:
        """Drop a glyph, returning its path if it was present."""
        key = normalize_codepoint(codepoint)
        with self._lock:
            return self._glyphs.pop(key, None)

    def assemble(self, notdef: GlyphPath | None = None) -> FontArtifact:
        """Assemble a consistent snapshot of the current glyph set."""
        with self._lock:
            snapshot = list(self._glyphs.items())
        return self.assembler.assemble(self.family_name, snapshot, notdef=notdef)

    def compile(self, notdef: GlyphPath | None = None) -> bytes:
        """Assemble and compile the current glyph set to a font binary."""
        return self.assembler.compile(self.assemble(notdef=notdef))
