"""Raster types consumed by the vectorization pipeline.

This module defines the two pixel-level types:
- PixelGrid: An immutable, already-decoded RGBA image
- BinaryMask: A foreground/background grid derived from a PixelGrid

Both are flat, row-major buffers indexed by ``y * width + x``.
"""

from dataclasses import dataclass
from typing import Any

from glyphforge.exceptions import InvalidImageError

CHANNELS = 4


@dataclass(frozen=True, slots=True)
class PixelGrid:
    """A decoded RGBA image.

    Attributes:
        width: Number of columns
        height: Number of rows
        data: ``width * height * 4`` bytes of RGBA samples, row-major
    """

    width: int
    height: int
    data: bytes

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise InvalidImageError(f"zero dimensions ({self.width}x{self.height})")
        expected = self.width * self.height * CHANNELS
        if len(self.data) != expected:
            raise InvalidImageError(
                f"expected {expected} RGBA bytes for {self.width}x{self.height}, "
                f"got {len(self.data)}"
            )
        if not isinstance(self.data, bytes):
            object.__setattr__(self, "data", bytes(self.data))

    @classmethod
    def solid(
        cls, width: int, height: int, rgba: tuple[int, int, int, int]
    ) -> "PixelGrid":
        """Create a grid filled with a single colour."""
        if width <= 0 or height <= 0:
            raise InvalidImageError(f"zero dimensions ({width}x{height})")
        return cls(width=width, height=height, data=bytes(rgba) * (width * height))

    @property
    def area(self) -> int:
        """Number of pixels in the grid."""
        return self.width * self.height

    def pixel(self, x: int, y: int) -> tuple[int, int, int, int]:
        """Return the RGBA sample at (x, y)."""
        offset = (y * self.width + x) * CHANNELS
        r, g, b, a = self.data[offset : offset + CHANNELS]
        return (r, g, b, a)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC."""
        return {"width": self.width, "height": self.height, "data": self.data}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PixelGrid":
        """Deserialize from dictionary."""
        return cls(width=data["width"], height=data["height"], data=data["data"])


@dataclass(slots=True)
class BinaryMask:
    """A foreground/background grid.

    Attributes:
        width: Number of columns (equals the source grid)
        height: Number of rows (equals the source grid)
        data: One byte per pixel, 1 for foreground and 0 for background
        threshold: Luminance threshold the mask was produced with
    """

    width: int
    height: int
    data: bytearray
    threshold: int = 0

    @classmethod
    def from_rows(cls, rows: list[str], foreground: str = "#") -> "BinaryMask":
        """Build a mask from text rows, mainly for fixtures and debugging.

        Args:
            rows: Equal-length strings, one per row
            foreground: Character marking a foreground pixel

        Returns:
            BinaryMask with the same dimensions as the text block
        """
        height = len(rows)
        width = len(rows[0]) if rows else 0
        data = bytearray(width * height)
        for y, row in enumerate(rows):
            for x, char in enumerate(row):
                if char == foreground:
                    data[y * width + x] = 1
        return cls(width=width, height=height, data=data)

    def is_foreground(self, x: int, y: int) -> bool:
        """Check a pixel; coordinates outside the grid count as background."""
        if x < 0 or y < 0 or x >= self.width or y >= self.height:
            return False
        return self.data[y * self.width + x] == 1

    def foreground_count(self) -> int:
        """Number of foreground pixels."""
        return sum(self.data)

    def is_empty(self) -> bool:
        """True when no pixel is foreground."""
        return not any(self.data)

    def to_rows(self, foreground: str = "#", background: str = ".") -> list[str]:
        """Render the mask as text rows."""
        return [
            "".join(
                foreground if self.data[y * self.width + x] else background
                for x in range(self.width)
            )
            for y in range(self.height)
        ]
