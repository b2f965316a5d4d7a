"""
Bodies and their vertex rings.

A Body starts as a circular footprint (center and radius). PolygonBuilder
fills in its vertices, GrowthResolver rescales them along the angles they
were sampled at. Each Body exclusively owns its vertices.
"""

import math
import numpy as np
from dataclasses import dataclass, field
from typing import List, Tuple

from .config import BoundingBox, Circle, Point
from .geometry import (
    bounding_box,
    box_strictly_contains,
    circles_overlap,
    polygon_area,
    rings_intersect,
)

# Gap required between two footprints before they count as overlapping
FOOTPRINT_MARGIN = 3.0


@dataclass(eq=False)
class Vertex:
    """A perimeter vertex of a body."""
    position: Point
    placement_angle: float
    sort_angle: float = 0.0


@dataclass(eq=False)
class Body:
    """A polygonal region grown from a circular footprint."""
    center: Point
    radius: float
    side_count: int
    vertices: List[Vertex] = field(default_factory=list)

    @property
    def positions(self) -> np.ndarray:
        if not self.vertices:
            return np.empty((0, 2))
        return np.array([v.position for v in self.vertices])

    @property
    def footprint(self) -> Circle:
        return (float(self.center[0]), float(self.center[1]), float(self.radius))

    def bounding_box(self) -> BoundingBox:
        return bounding_box(self.positions)

    def area(self) -> float:
        return polygon_area(self.positions)

    def grow(self, radius: float) -> None:
        """Set a new radius and move every vertex along its placement angle."""
        self.radius = radius
        if not self.vertices:
            return
        angles = np.array([v.placement_angle for v in self.vertices])
        points = self.center + radius * np.column_stack([np.cos(angles), np.sin(angles)])
        for vertex, point in zip(self.vertices, points):
            vertex.position = point

    def snapshot(self) -> Tuple[float, np.ndarray]:
        return self.radius, self.positions.copy()

    def restore(self, state: Tuple[float, np.ndarray]) -> None:
        radius, positions = state
        self.radius = radius
        for vertex, point in zip(self.vertices, positions):
            vertex.position = point.copy()

    def sort_vertices(self) -> None:
        """
        Order vertices by angle around the center.

        The first vertex's angle is the start; any later vertex with a smaller
        angle is shifted by a full turn so the ring is traversed in one sweep.
        """
        start = None
        for vertex in self.vertices:
            dx = vertex.position[0] - self.center[0]
            dy = vertex.position[1] - self.center[1]
            angle = math.atan2(dy, dx)
            if start is None:
                start = angle
            elif angle < start:
                angle += 2 * math.pi
            vertex.sort_angle = angle
        self.vertices.sort(key=lambda v: v.sort_angle)

    def overlaps(self, other: "Body", margin: float = FOOTPRINT_MARGIN) -> bool:
        """Coarse footprint overlap."""
        return circles_overlap(self.center, self.radius, other.center, other.radius, margin)

    def strong_overlap(self, other: "Body", margin: float = FOOTPRINT_MARGIN) -> bool:
        """
        Polygon overlap: crossing edges or one bounding box strictly
        containing the other. Bodies whose footprints are apart never
        strongly overlap.
        """
        if not self.overlaps(other, margin):
            return False

        if rings_intersect(self.positions, other.positions):
            return True

        own_box = self.bounding_box()
        other_box = other.bounding_box()
        return box_strictly_contains(own_box, other_box) or box_strictly_contains(other_box, own_box)
