"""Core geometric types for contour representation.

This module defines the fundamental geometric types used throughout glyphforge:
- Point: A 2D grid point
- Contour: A closed boundary loop
- WindingDirection: Enum for contour winding direction

Coordinates are grid units with the y axis pointing down, as in the source image.
"""

from dataclasses import dataclass, field
from enum import Enum, auto


class WindingDirection(Enum):
    """Contour winding direction, as seen on screen (y axis down).

    Filled regions are emitted clockwise and holes counter-clockwise so that
    non-zero filling renders holes.
    """

    CLOCKWISE = auto()
    COUNTER_CLOCKWISE = auto()


@dataclass(frozen=True, slots=True)
class Point:
    """A point in 2D grid space.

    Immutable and hashable for use in sets/dicts.

    Attributes:
        x: Column (grid units)
        y: Row (grid units)
    """

    x: float
    y: float


@dataclass
class Contour:
    """A closed loop of grid points.

    The first point logically connects back to the last; the closing point
    is not repeated.

    Attributes:
        points: List of points forming the contour
        direction: Winding direction (None until calculated)
    """

    points: list[Point]
    direction: WindingDirection | None = field(default=None)
    _cached_area: float | None = field(default=None, repr=False, init=False, compare=False)
    _cached_bbox: tuple[float, float, float, float] | None = field(
        default=None, repr=False, init=False, compare=False
    )

    def __len__(self) -> int:
        return len(self.points)

    def signed_area(self) -> float:
        """Calculate signed area using shoelace formula.

        With the y axis pointing down, positive area means the loop runs
        clockwise on screen.

        Returns:
            Signed area of the contour
        """
        if self._cached_area is not None:
            return self._cached_area

        n = len(self.points)
        if n < 3:
            self._cached_area = 0.0
            return 0.0

        area = 0.0
        for i in range(n):
            j = (i + 1) % n
            area += self.points[i].x * self.points[j].y
            area -= self.points[j].x * self.points[i].y

        self._cached_area = area / 2.0
        return self._cached_area

    def bounding_box(self) -> tuple[float, float, float, float]:
        """Calculate bounding box of the contour.

        Returns:
            Tuple of (min_x, min_y, max_x, max_y)
        """
        if self._cached_bbox is not None:
            return self._cached_bbox

        if not self.points:
            self._cached_bbox = (0.0, 0.0, 0.0, 0.0)
            return self._cached_bbox

        xs = [p.x for p in self.points]
        ys = [p.y for p in self.points]

        self._cached_bbox = (min(xs), min(ys), max(xs), max(ys))
        return self._cached_bbox

    def reversed(self) -> "Contour":
        """Return a copy running the other way, starting at the same point."""
        if not self.points:
            return Contour(points=[])
        flipped = None
        if self.direction is WindingDirection.CLOCKWISE:
            flipped = WindingDirection.COUNTER_CLOCKWISE
        elif self.direction is WindingDirection.COUNTER_CLOCKWISE:
            flipped = WindingDirection.CLOCKWISE
        return Contour(
            points=[self.points[0], *reversed(self.points[1:])],
            direction=flipped,
        )
