"""Tests for boundary tracing."""

import pytest

from glyphforge.config import TracerConfig
from glyphforge.core.deadline import Deadline
from glyphforge.core.tracer import ContourTracer, boundary_map, trace_contours
from glyphforge.domain import BinaryMask, Point
from glyphforge.exceptions import ConversionTimeoutError


def square_mask(size: int, margin: int = 0) -> BinaryMask:
    """A filled square of side ``size`` with a background margin."""
    total = size + 2 * margin
    rows = []
    for y in range(total):
        inside_y = margin <= y < margin + size
        rows.append(
            "".join(
                "#" if inside_y and margin <= x < margin + size else "."
                for x in range(total)
            )
        )
    return BinaryMask.from_rows(rows)


class TestBoundaryMap:
    """Tests for boundary pixel detection."""

    def test_interior_pixels_excluded(self):
        mask = BinaryMask.from_rows(["###", "###", "###"])

        flags = boundary_map(mask)

        assert flags[4] == 0
        assert sum(flags) == 8

    def test_grid_edge_counts_as_background(self):
        """Test pixels on the grid border are boundary pixels."""
        flags = boundary_map(BinaryMask.from_rows(["##", "##"]))

        assert list(flags) == [1, 1, 1, 1]


class TestContourTracer:
    """Tests for ContourTracer."""

    @pytest.fixture
    def tracer(self) -> ContourTracer:
        return ContourTracer(TracerConfig())

    def test_filled_square(self, tracer: ContourTracer):
        """Test a 10x10 square traces to one loop over its 36 border pixels."""
        contours = tracer.trace(square_mask(10))

        assert len(contours) == 1
        points = contours[0].points
        assert len(points) == 36
        assert points[0] == Point(0, 0)
        assert points[1] == Point(1, 0)
        assert contours[0].bounding_box() == (0, 0, 9, 9)

    def test_square_runs_clockwise(self, tracer: ContourTracer):
        """Test the walk goes clockwise on screen (positive area, y down)."""
        contour = tracer.trace(square_mask(10, margin=2))[0]

        assert contour.points[0] == Point(2, 2)
        assert contour.signed_area() > 0

    def test_two_separate_squares(self, tracer: ContourTracer):
        """Test disjoint shapes give one loop each, in scan order."""
        mask = BinaryMask.from_rows(
            [
                ".........",
                ".###.###.",
                ".###.###.",
                ".###.###.",
                ".........",
            ]
        )

        contours = tracer.trace(mask)

        assert [len(c) for c in contours] == [8, 8]
        assert contours[0].points[0] == Point(1, 1)
        assert contours[1].points[0] == Point(5, 1)

    def test_small_block(self, tracer: ContourTracer):
        contours = tracer.trace(BinaryMask.from_rows(["##", "##"]))

        assert len(contours) == 1
        assert contours[0].points == [Point(0, 0), Point(1, 0), Point(1, 1), Point(0, 1)]

    def test_ring_gives_outer_and_inner_loops(self, tracer: ContourTracer):
        """Test a 2-pixel-thick ring yields its outer edge and the hole's edge."""
        rows = []
        for y in range(10):
            rows.append(
                "".join("." if 2 <= x <= 7 and 2 <= y <= 7 else "#" for x in range(10))
            )

        contours = tracer.trace(BinaryMask.from_rows(rows))

        assert [len(c) for c in contours] == [36, 28]
        assert contours[1].points[0] == Point(1, 1)

    def test_single_pixel_is_noise(self, tracer: ContourTracer):
        """Test loops shorter than the minimum length are dropped."""
        mask = BinaryMask.from_rows(["...", ".#.", "..."])

        assert tracer.trace(mask) == []

    def test_empty_mask(self, tracer: ContourTracer):
        assert tracer.trace(BinaryMask.from_rows(["....", "...."])) == []

    def test_deterministic(self, tracer: ContourTracer):
        """Test the same mask always produces the same contours."""
        mask = BinaryMask.from_rows([".##.#", "###.#", ".#..#"])

        first = [c.points for c in tracer.trace(mask)]
        second = [c.points for c in tracer.trace(mask)]

        assert first == second

    def test_expired_deadline(self, tracer: ContourTracer):
        with pytest.raises(ConversionTimeoutError):
            tracer.trace(square_mask(10), deadline=Deadline(0.0))

    def test_step_cap_bounds_walk(self):
        """Test a tiny step cap cuts the walk short."""
        tracer = ContourTracer(TracerConfig(iteration_factor=0.05, min_contour_length=3))

        contours = tracer.trace(square_mask(10))

        # cap is int(0.05 * 100) = 5 steps after the start pixel
        assert len(contours[0]) == 6

    def test_trace_contours_wrapper(self):
        assert len(trace_contours(square_mask(4))) == 1
