"""Boundary tracing over a binary mask.

A foreground pixel is a boundary pixel when at least one of its 8 neighbours
is background; neighbours outside the grid count as background. Tracing scans
the grid row by row and, from every unvisited boundary pixel, walks the
boundary Moore-style: the 8 directions are tried clockwise starting a quarter
turn left of the direction of arrival, and the walk steps to the first
unvisited boundary neighbour. A walk ends when it gets back to its start
pixel, runs into a dead end, or hits the step cap.

Visited state lives in a flat ``bytearray`` indexed by ``y * width + x``.
Because the scan is row-major, contour order is fully determined by the mask.
"""

from glyphforge.config import TracerConfig
from glyphforge.core.deadline import Deadline
from glyphforge.domain import BinaryMask, Contour, Point

# Clockwise on screen (y axis down), starting east.
DIRECTIONS: tuple[tuple[int, int], ...] = (
    (1, 0),
    (1, 1),
    (0, 1),
    (-1, 1),
    (-1, 0),
    (-1, -1),
    (0, -1),
    (1, -1),
)

# Offset added to the arrival direction to start the scan a quarter turn left.
LEFT_TURN = 6

# Walks start heading east: the row-major scan has already passed the
# neighbours above and to the left.
INITIAL_DIRECTION = 0


def boundary_map(mask: BinaryMask) -> bytearray:
    """Flag every foreground pixel that touches background.

    Args:
        mask: Source mask

    Returns:
        bytearray with 1 at boundary pixels, 0 elsewhere
    """
    width, height, data = mask.width, mask.height, mask.data
    flags = bytearray(width * height)

    for y in range(height):
        row = y * width
        for x in range(width):
            if not data[row + x]:
                continue
            for dx, dy in DIRECTIONS:
                nx, ny = x + dx, y + dy
                if nx < 0 or ny < 0 or nx >= width or ny >= height:
                    flags[row + x] = 1
                    break
                if not data[ny * width + nx]:
                    flags[row + x] = 1
                    break

    return flags


class ContourTracer:
    """Extracts closed boundary loops from a mask.

    The tracer is stateless between calls and safe for use in worker processes.

    Example:
        tracer = ContourTracer(TracerConfig())
        contours = tracer.trace(mask)
    """

    def __init__(self, config: TracerConfig | None = None) -> None:
        self.config = config or TracerConfig()

    def trace(self, mask: BinaryMask, deadline: Deadline | None = None) -> list[Contour]:
        """Trace every boundary loop in the mask.

        Args:
            mask: Foreground/background grid
            deadline: Optional wall-clock limit, checked once per row

        Returns:
            Contours in scan order; loops shorter than the configured
            minimum length are dropped as noise

        Raises:
            ConversionTimeoutError: If the deadline passes mid-scan
        """
        width, height = mask.width, mask.height
        boundary = boundary_map(mask)
        visited = bytearray(width * height)
        max_steps = max(1, int(self.config.iteration_factor * width * height))
        min_length = self.config.min_contour_length

        contours: list[Contour] = []
        for y in range(height):
            if deadline is not None:
                deadline.check()
            row = y * width
            for x in range(width):
                index = row + x
                if visited[index] or not boundary[index]:
                    continue
                points = self._walk(x, y, boundary, visited, width, height, max_steps)
                if len(points) >= min_length:
                    contours.append(Contour(points=points))

        return contours

    def _walk(
        self,
        start_x: int,
        start_y: int,
        boundary: bytearray,
        visited: bytearray,
        width: int,
        height: int,
        max_steps: int,
    ) -> list[Point]:
        """Follow the boundary from a start pixel until it closes or stalls."""
        points = [Point(start_x, start_y)]
        visited[start_y * width + start_x] = 1

        x, y = start_x, start_y
        direction = INITIAL_DIRECTION

        for _ in range(max_steps):
            step: tuple[int, int, int] | None = None

            for turn in range(8):
                candidate = (direction + LEFT_TURN + turn) % 8
                dx, dy = DIRECTIONS[candidate]
                nx, ny = x + dx, y + dy
                if nx < 0 or ny < 0 or nx >= width or ny >= height:
                    continue
                index = ny * width + nx
                if not boundary[index]:
                    continue
                if nx == start_x and ny == start_y and len(points) > 2:
                    return points
                if visited[index]:
                    continue
                step = (nx, ny, candidate)
                break

            if step is None:
                break

            x, y, direction = step
            visited[y * width + x] = 1
            points.append(Point(x, y))

        return points


def trace_contours(
    mask: BinaryMask,
    config: TracerConfig | None = None,
    deadline: Deadline | None = None,
) -> list[Contour]:
    """Convenience wrapper around ContourTracer.trace."""
    return ContourTracer(config).trace(mask, deadline=deadline)
