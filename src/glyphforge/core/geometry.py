"""Geometric operations on grid points and contours.

This module provides core mathematical utilities for:
- Signed area calculation (shoelace formula)
- Point-in-polygon testing (ray casting algorithm)
- Point-to-segment distance
- Bounding boxes over several contours

All functions are pure, stateless, and designed for use in parallel processing.
"""

import math
from collections.abc import Iterable

from glyphforge.domain import Contour, Point


def signed_area(points: list[Point]) -> float:
    """Calculate signed area of a polygon using the shoelace formula.

    With the y axis pointing down (image coordinates):
    - Positive area: clockwise on screen
    - Negative area: counter-clockwise on screen

    Args:
        points: List of points forming the polygon boundary

    Returns:
        Signed area in square units. Returns 0.0 for degenerate polygons.

    Examples:
        >>> p1 = Point(0.0, 0.0)
        >>> p2 = Point(1.0, 0.0)
        >>> p3 = Point(1.0, 1.0)
        >>> p4 = Point(0.0, 1.0)
        >>> signed_area([p1, p2, p3, p4])
        1.0
        >>> signed_area([p1, p4, p3, p2])
        -1.0
    """
    n = len(points)
    if n < 3:
        return 0.0

    area = 0.0
    for i in range(n):
        j = (i + 1) % n
        area += points[i].x * points[j].y
        area -= points[j].x * points[i].y

    return area / 2.0


def point_in_polygon(point: Point, polygon: list[Point]) -> bool:
    """Determine if a point is inside a polygon using ray casting algorithm.

    Casts a horizontal ray from the point to the right and counts intersections
    with polygon edges. Odd number of intersections = inside, even = outside.

    Args:
        point: The point to test
        polygon: List of points forming the polygon boundary

    Returns:
        True if point is inside polygon, False otherwise

    Examples:
        >>> square = [Point(0.0, 0.0), Point(2.0, 0.0), Point(2.0, 2.0), Point(0.0, 2.0)]
        >>> point_in_polygon(Point(1.0, 1.0), square)
        True
        >>> point_in_polygon(Point(3.0, 3.0), square)
        False
    """
    n = len(polygon)
    if n < 3:
        return False

    inside = False
    x, y = point.x, point.y
    j = n - 1

    for i in range(n):
        xi, yi = polygon[i].x, polygon[i].y
        xj, yj = polygon[j].x, polygon[j].y

        if ((yi > y) != (yj > y)) and (x < (xj - xi) * (y - yi) / (yj - yi) + xi):
            inside = not inside

        j = i

    return inside


def point_segment_distance(point: Point, seg_start: Point, seg_end: Point) -> float:
    """Distance from a point to the closest point of a line segment.

    Projects the point onto the infinite line, then clamps the parametric
    position to [0, 1] so the nearest point stays on the segment.

    Args:
        point: The point to measure from
        seg_start: Start point of line segment
        seg_end: End point of line segment

    Returns:
        Euclidean distance to the segment

    Examples:
        >>> point_segment_distance(Point(1.0, 1.0), Point(0.0, 0.0), Point(2.0, 0.0))
        1.0
        >>> point_segment_distance(Point(5.0, 0.0), Point(0.0, 0.0), Point(2.0, 0.0))
        3.0
    """
    dx = seg_end.x - seg_start.x
    dy = seg_end.y - seg_start.y

    segment_length_sq = dx * dx + dy * dy
    if segment_length_sq < 1e-10:
        return math.hypot(point.x - seg_start.x, point.y - seg_start.y)

    t = ((point.x - seg_start.x) * dx + (point.y - seg_start.y) * dy) / segment_length_sq
    t = max(0.0, min(1.0, t))

    nearest_x = seg_start.x + t * dx
    nearest_y = seg_start.y + t * dy
    return math.hypot(point.x - nearest_x, point.y - nearest_y)


def bounding_box(contours: Iterable[Contour]) -> tuple[float, float, float, float]:
    """Union of the bounding boxes of several contours.

    Returns:
        (min_x, min_y, max_x, max_y), or all zeros when there are no points
    """
    boxes = [c.bounding_box() for c in contours if c.points]
    if not boxes:
        return (0.0, 0.0, 0.0, 0.0)
    return (
        min(b[0] for b in boxes),
        min(b[1] for b in boxes),
        max(b[2] for b in boxes),
        max(b[3] for b in boxes),
    )
