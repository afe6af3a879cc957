"""Exception hierarchy for GlyphForge."""


class GlyphForgeError(Exception):
    """Base exception for all GlyphForge errors."""

    pass


class VectorizeError(GlyphForgeError):
    """Errors raised while turning an image into a glyph path."""

    pass


class InvalidImageError(VectorizeError):
    """Pixel grid cannot be constructed from the supplied data."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Invalid image: {reason}")


class ConversionTimeoutError(VectorizeError):
    """Vectorization exceeded its allotted wall-clock time."""

    def __init__(self, timeout_seconds: float) -> None:
        self.timeout_seconds = timeout_seconds
        super().__init__(f"Conversion timed out after {timeout_seconds:g}s")


class DegradedResultError(VectorizeError):
    """A recoverable condition; attached to a result, never raised by the pipeline."""

    pass


class NoUsableContoursError(DegradedResultError):
    """Mask produced no traceable boundaries; a placeholder shape was emitted."""

    def __init__(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        super().__init__(f"No usable contours in {width}x{height} image")


class OutputTooLargeError(DegradedResultError):
    """Serialized path exceeded its budget even after trimming."""

    def __init__(self, size: int, budget: int) -> None:
        self.size = size
        self.budget = budget
        super().__init__(f"Glyph path is {size} bytes, budget is {budget} bytes")


class PathError(GlyphForgeError):
    """Errors related to caller-supplied vector paths."""

    pass


class InvalidPathError(PathError):
    """Vector input is not a usable SVG document."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Invalid SVG: {reason}")


class EmbeddedRasterRejectedError(PathError):
    """Vector input still references raster or foreign content after cleaning."""

    def __init__(self, found: str) -> None:
        self.found = found
        super().__init__(
            f"SVG cannot contain embedded images ({found}). Only vector paths are allowed."
        )


class CodepointError(GlyphForgeError):
    """Errors related to code point selection."""

    pass


class InvalidCodepointError(CodepointError):
    """Code point string is not a valid hexadecimal value."""

    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__(f"Invalid code point '{value}'")


class DuplicateCodepointError(CodepointError):
    """Code point is already used in the target font."""

    def __init__(self, codepoint: str) -> None:
        self.codepoint = codepoint
        super().__init__(f"Glyph with code point {codepoint} already exists")


class CodepointRangeExhaustedError(CodepointError):
    """No free private-use code point remains."""

    def __init__(self, start: int, end: int) -> None:
        self.start = start
        self.end = end
        super().__init__(
            f"No available code points left in range U+{start:04X}..U+{end:04X}"
        )


class FontError(GlyphForgeError):
    """Errors related to font loading or saving."""

    pass


class FontLoadError(FontError):
    """Error loading a font file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load font '{path}': {reason}")


class FontSaveError(FontError):
    """Error saving a font file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to save font '{path}': {reason}")
