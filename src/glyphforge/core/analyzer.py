"""Contour nesting and winding normalisation.

Traced contours come out in whatever direction the boundary walk happened to
take. Before serialisation they are nested with point-in-polygon tests and
re-oriented so that filled regions (even depth) run clockwise on screen and
holes (odd depth) run counter-clockwise. With non-zero filling that renders
counters such as the hole in "O" correctly, both in SVG and in the font.
"""

from dataclasses import dataclass

from glyphforge.core.geometry import point_in_polygon, signed_area
from glyphforge.domain import Contour, WindingDirection


@dataclass
class ContourNode:
    """A node in the contour nesting tree.

    Attributes:
        index: Index of this contour in the input list
        parent: Index of the innermost enclosing contour (None if top-level)
        children: Indices of directly enclosed contours
        depth: Nesting depth (0 for top-level)
    """

    index: int
    parent: int | None
    children: list[int]
    depth: int

    @property
    def is_hole(self) -> bool:
        return self.depth % 2 == 1


@dataclass
class ContourHierarchy:
    """Nesting of a set of contours.

    Attributes:
        nodes: One node per input contour, in input order
    """

    nodes: list[ContourNode]

    @property
    def outer_contours(self) -> list[int]:
        return [node.index for node in self.nodes if not node.is_hole]

    @property
    def holes(self) -> list[int]:
        return [node.index for node in self.nodes if node.is_hole]

    def has_holes(self) -> bool:
        return any(node.is_hole for node in self.nodes)


class ContourAnalyzer:
    """Builds the nesting tree of traced contours and fixes their winding.

    The analyzer is stateless and safe for use in parallel processing.
    """

    def analyze(self, contours: list[Contour]) -> ContourHierarchy:
        """Determine which contours enclose which.

        A contour's first point is tested against every other contour; the
        enclosing contour with the smallest area is its parent.

        Args:
            contours: Contours to nest

        Returns:
            ContourHierarchy with one node per contour
        """
        areas = [abs(signed_area(c.points)) for c in contours]
        parents: list[int | None] = []

        for idx, contour in enumerate(contours):
            parent: int | None = None
            if contour.points:
                probe = contour.points[0]
                for other_idx, other in enumerate(contours):
                    if other_idx == idx or areas[other_idx] <= areas[idx]:
                        continue
                    if not point_in_polygon(probe, other.points):
                        continue
                    if parent is None or areas[other_idx] < areas[parent]:
                        parent = other_idx
            parents.append(parent)

        nodes = [
            ContourNode(index=idx, parent=parent, children=[], depth=0)
            for idx, parent in enumerate(parents)
        ]
        for node in nodes:
            if node.parent is not None:
                nodes[node.parent].children.append(node.index)

        for node in nodes:
            depth = 0
            parent = node.parent
            while parent is not None and depth < len(nodes):
                depth += 1
                parent = nodes[parent].parent
            node.depth = depth

        return ContourHierarchy(nodes=nodes)

    def orient(self, contours: list[Contour]) -> list[Contour]:
        """Return contours re-wound for non-zero filling.

        Filled regions run clockwise on screen, holes counter-clockwise.
        Degenerate (zero-area) contours keep their point order.

        Args:
            contours: Contours in emission order

        Returns:
            New contours in the same order with ``direction`` set
        """
        hierarchy = self.analyze(contours)
        oriented: list[Contour] = []

        for contour, node in zip(contours, hierarchy.nodes):
            wanted = (
                WindingDirection.COUNTER_CLOCKWISE
                if node.is_hole
                else WindingDirection.CLOCKWISE
            )
            area = signed_area(contour.points)
            actual = WindingDirection.CLOCKWISE if area >= 0 else WindingDirection.COUNTER_CLOCKWISE

            if area != 0 and actual is not wanted:
                flipped = contour.reversed()
                oriented.append(Contour(points=flipped.points, direction=wanted))
            else:
                oriented.append(Contour(points=list(contour.points), direction=wanted))

        return oriented
