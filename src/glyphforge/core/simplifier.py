"""Douglas-Peucker contour simplification.

The span between a contour's first and last point is split at the point
farthest from the segment joining them whenever that distance exceeds the
tolerance; otherwise the span collapses to its two endpoints. Spans are kept
on an explicit stack so deep splits cannot exhaust the interpreter stack, and
the loop is capped at twice the point count.
"""

from glyphforge.core.deadline import Deadline
from glyphforge.core.geometry import point_segment_distance
from glyphforge.domain import Contour, Point


def simplify_points(points: list[Point], epsilon: float) -> list[Point]:
    """Simplify an ordered point list at tolerance epsilon.

    Args:
        points: Ordered points; first and last are always kept
        epsilon: Maximum allowed distance of a dropped point from the kept outline.
            Zero keeps every point.

    Returns:
        A subsequence of ``points``
    """
    n = len(points)
    if n <= 2 or epsilon <= 0:
        return list(points)

    keep = bytearray(n)
    keep[0] = 1
    keep[n - 1] = 1

    stack = [(0, n - 1)]
    guard = 2 * n
    while stack and guard > 0:
        guard -= 1
        first, last = stack.pop()
        if last - first < 2:
            continue

        start, end = points[first], points[last]
        max_distance = 0.0
        split = first
        for index in range(first + 1, last):
            distance = point_segment_distance(points[index], start, end)
            if distance > max_distance:
                max_distance = distance
                split = index

        if max_distance > epsilon:
            keep[split] = 1
            stack.append((split, last))
            stack.append((first, split))

    return [point for index, point in enumerate(points) if keep[index]]


def simplify_contour(contour: Contour, epsilon: float) -> Contour:
    """Simplify a single contour, preserving its winding tag."""
    return Contour(points=simplify_points(contour.points, epsilon), direction=contour.direction)


def simplify_contours(
    contours: list[Contour],
    epsilon: float,
    deadline: Deadline | None = None,
) -> list[Contour]:
    """Simplify every contour at the same tolerance.

    Raises:
        ConversionTimeoutError: If the deadline passes between contours
    """
    simplified: list[Contour] = []
    for contour in contours:
        if deadline is not None:
            deadline.check()
        simplified.append(simplify_contour(contour, epsilon))
    return simplified
