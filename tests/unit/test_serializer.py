"""Tests for contour nesting and SVG serialization."""

import pytest

from glyphforge.core.analyzer import ContourAnalyzer
from glyphforge.core.serializer import (
    PathSerializer,
    drawable_contours,
    placeholder_contour,
    subpath_data,
)
from glyphforge.domain import Contour, Point, WindingDirection


@pytest.fixture
def outer() -> Contour:
    """10x10 square, clockwise on screen."""
    return Contour(points=[Point(0, 0), Point(10, 0), Point(10, 10), Point(0, 10)])


@pytest.fixture
def inner() -> Contour:
    """4x4 square inside ``outer``, also clockwise as the tracer emits it."""
    return Contour(points=[Point(2, 2), Point(6, 2), Point(6, 6), Point(2, 6)])


class TestContourAnalyzer:
    """Tests for nesting detection and winding normalisation."""

    def test_nesting(self, outer: Contour, inner: Contour):
        hierarchy = ContourAnalyzer().analyze([outer, inner])

        assert hierarchy.outer_contours == [0]
        assert hierarchy.holes == [1]
        assert hierarchy.nodes[1].parent == 0
        assert hierarchy.nodes[0].children == [1]
        assert hierarchy.has_holes()

    def test_separate_shapes_are_both_outer(self, inner: Contour):
        other = Contour(points=[Point(20, 0), Point(24, 0), Point(24, 4), Point(20, 4)])

        hierarchy = ContourAnalyzer().analyze([inner, other])

        assert hierarchy.outer_contours == [0, 1]
        assert not hierarchy.has_holes()

    def test_orient_reverses_holes(self, outer: Contour, inner: Contour):
        """Test holes end up counter-clockwise, filled shapes clockwise."""
        oriented = ContourAnalyzer().orient([outer, inner])

        assert oriented[0].direction is WindingDirection.CLOCKWISE
        assert oriented[0].signed_area() > 0
        assert oriented[1].direction is WindingDirection.COUNTER_CLOCKWISE
        assert oriented[1].signed_area() < 0
        assert oriented[1].points[0] == Point(2, 2)

    def test_orient_fixes_counter_clockwise_outer(self, outer: Contour):
        oriented = ContourAnalyzer().orient([outer.reversed()])

        assert oriented[0].signed_area() > 0

    def test_island_inside_hole_is_filled(self, outer: Contour, inner: Contour):
        """Test depth 2 contours are filled again."""
        island = Contour(points=[Point(3, 3), Point(5, 3), Point(5, 5), Point(3, 5)])

        hierarchy = ContourAnalyzer().analyze([outer, inner, island])

        assert hierarchy.nodes[2].depth == 2
        assert hierarchy.outer_contours == [0, 2]


class TestPathSerializer:
    """Tests for PathSerializer."""

    def test_subpath_data(self):
        contour = Contour(points=[Point(0, 0), Point(4, 0), Point(4, 4), Point(0, 4)])

        assert subpath_data(contour) == "M 0 0 L 4 0 L 4 4 L 0 4 Z"

    def test_fractional_coordinates(self):
        contour = Contour(points=[Point(0.5, 0), Point(4.25, 0), Point(4, 1.125)])

        assert subpath_data(contour) == "M 0.5 0 L 4.25 0 L 4 1.12 Z"

    def test_single_square(self, outer: Contour):
        path = PathSerializer().serialize([outer], 12, 12)

        assert 'd="M 0 0 L 10 0 L 10 10 L 0 10 Z"' in path.svg
        assert 'viewBox="0 0 12 12"' in path.svg
        assert 'fill="currentColor"' in path.svg
        assert path.bbox == (0, 0, 10, 10)
        assert path.width == 12.0
        assert path.height == 12.0

    def test_hole_is_reversed_in_output(self, outer: Contour, inner: Contour):
        path = PathSerializer().serialize([outer, inner], 10, 10)

        assert "M 0 0 L 10 0 L 10 10 L 0 10 Z M 2 2 L 2 6 L 6 6 L 6 2 Z" in path.svg

    def test_degenerate_contours_skipped(self, outer: Contour):
        line = Contour(points=[Point(1, 1), Point(2, 2)])

        path = PathSerializer().serialize([line, outer], 10, 10)

        assert path.svg.count("M ") == 1

    def test_collinear_loop_skipped(self, outer: Contour):
        """Test a walk around a hairline stroke is not emitted as a subpath."""
        hairline = Contour(points=[Point(1, 5), Point(2, 5), Point(3, 5), Point(2, 5)])

        path = PathSerializer().serialize([hairline], 10, 10)

        assert "<path" not in path.svg
        assert drawable_contours([hairline, outer]) == [outer]

    def test_nothing_to_draw(self):
        path = PathSerializer().serialize([], 8, 8)

        assert "<path" not in path.svg
        assert path.is_empty()


class TestPlaceholder:
    """Tests for the placeholder square."""

    def test_square_image(self):
        contour = placeholder_contour(20, 20)

        assert contour.bounding_box() == (4, 4, 16, 16)
        assert contour.signed_area() > 0

    def test_uses_shorter_side(self):
        contour = placeholder_contour(20, 10)

        assert contour.points[0] == Point(7, 2)
        assert contour.bounding_box() == (7, 2, 13, 8)

    def test_tiny_image_has_visible_side(self):
        contour = placeholder_contour(1, 1)

        assert contour.bounding_box() == (0, 0, 1, 1)
