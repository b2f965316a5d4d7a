"""
Geometry utilities for region generation.

Contains:
- MapBounds: the rectangle every body has to stay inside
- Stateless primitives: distances, circle overlap, bounding boxes,
  segment intersection and polygon area
"""

import numpy as np
from dataclasses import dataclass
from typing import Tuple

from .config import BoundingBox, Point


@dataclass(frozen=True)
class MapBounds:
    """Handles containment checks against the map rectangle."""
    width: float
    height: float

    def contains_point(self, point: Point) -> bool:
        """Strict containment; points on the edge are off the map."""
        x, y = point[0], point[1]
        return bool(0 < x < self.width and 0 < y < self.height)

    def contains_box(self, box: BoundingBox, inset: float = 0.0) -> bool:
        """Check that a bounding box lies strictly inside the inset rectangle."""
        xmin, xmax, ymin, ymax = box
        return bool(
            xmin > inset and xmax < self.width - inset and
            ymin > inset and ymax < self.height - inset
        )

    def inset_corners(self, inset: float) -> Tuple[np.ndarray, np.ndarray]:
        """Lower-left and upper-right corners of the inset rectangle."""
        low = np.array([inset, inset], dtype=float)
        high = np.array([self.width - inset, self.height - inset], dtype=float)
        return low, high

    def ray_exit_distance(self, origin: Point, angle: float) -> float:
        """Distance along a ray from an interior point to the map edge."""
        direction = np.array([np.cos(angle), np.sin(angle)])
        limits = np.array([self.width, self.height])
        exits = []
        for axis in range(2):
            d = direction[axis]
            if d > 0:
                exits.append((limits[axis] - origin[axis]) / d)
            elif d < 0:
                exits.append(-origin[axis] / d)
        return float(min(exits)) if exits else float('inf')


def distance(p: Point, q: Point) -> float:
    """Euclidean distance between two points."""
    return float(np.hypot(q[0] - p[0], q[1] - p[1]))


def circles_overlap(
    center_a: Point, radius_a: float, center_b: Point, radius_b: float, margin: float = 0.0
) -> bool:
    """True when two circles are closer than the sum of their radii plus margin."""
    return distance(center_a, center_b) <= radius_a + radius_b + margin


def circle_overlaps(
    centers: np.ndarray, radii: np.ndarray, center: Point, radius: float, margin: float = 0.0
) -> np.ndarray:
    """Vectorized circle overlap of one circle against many."""
    if len(centers) == 0:
        return np.zeros(0, dtype=bool)
    distances = np.linalg.norm(centers - center, axis=1)
    return distances <= radii + radius + margin


def vertex_crowded(existing: np.ndarray, point: Point, radius: float) -> bool:
    """
    Proximity check for vertices of one body.

    A vertex crowds another when it lies within ``radius - 1`` of it, where
    ``radius`` is the radius of the circle the vertices were sampled on.
    """
    if len(existing) == 0:
        return False
    distances = np.linalg.norm(np.asarray(existing) - point, axis=1)
    return bool(np.any(distances <= radius - 1))


def bounding_box(points: np.ndarray) -> BoundingBox:
    """Axis-aligned bounding box as (xmin, xmax, ymin, ymax)."""
    if len(points) == 0:
        return (float('inf'), float('-inf'), float('inf'), float('-inf'))
    points = np.asarray(points, dtype=float)
    mins = points.min(axis=0)
    maxs = points.max(axis=0)
    return (float(mins[0]), float(maxs[0]), float(mins[1]), float(maxs[1]))


def box_strictly_contains(outer: BoundingBox, inner: BoundingBox) -> bool:
    return bool(
        outer[0] < inner[0] and outer[1] > inner[1] and
        outer[2] < inner[2] and outer[3] > inner[3]
    )


def segments_intersect(p0: Point, p1: Point, p2: Point, p3: Point) -> bool:
    """
    Parametric segment intersection test.

    Parallel and collinear segments have a zero denominator and are treated
    as non-intersecting.
    """
    s1_x, s1_y = p1[0] - p0[0], p1[1] - p0[1]
    s2_x, s2_y = p3[0] - p2[0], p3[1] - p2[1]

    denom = -s2_x * s1_y + s1_x * s2_y
    if denom == 0:
        return False

    s = (-s1_y * (p0[0] - p2[0]) + s1_x * (p0[1] - p2[1])) / denom
    t = (s2_x * (p0[1] - p2[1]) - s2_y * (p0[0] - p2[0])) / denom

    return bool(0 <= s <= 1 and 0 <= t <= 1)


def ring_edges(ring: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """Start and end points of each edge of a closed ring."""
    ring = np.asarray(ring, dtype=float)
    return ring, np.roll(ring, -1, axis=0)


def rings_intersect(ring_a: np.ndarray, ring_b: np.ndarray) -> bool:
    """Vectorized check whether any edge of one closed ring crosses the other."""
    if len(ring_a) < 2 or len(ring_b) < 2:
        return False

    a_start, a_end = ring_edges(ring_a)
    b_start, b_end = ring_edges(ring_b)

    s1 = (a_end - a_start)[:, np.newaxis, :]
    s2 = (b_end - b_start)[np.newaxis, :, :]
    offsets = a_start[:, np.newaxis, :] - b_start[np.newaxis, :, :]

    denom = -s2[..., 0] * s1[..., 1] + s1[..., 0] * s2[..., 1]
    s_num = -s1[..., 1] * offsets[..., 0] + s1[..., 0] * offsets[..., 1]
    t_num = s2[..., 0] * offsets[..., 1] - s2[..., 1] * offsets[..., 0]

    with np.errstate(divide='ignore', invalid='ignore'):
        s = s_num / denom
        t = t_num / denom

    hits = (denom != 0) & (s >= 0) & (s <= 1) & (t >= 0) & (t <= 1)
    return bool(np.any(hits))


def polygon_area(points: np.ndarray) -> float:
    """Area of a simple polygon (shoelace formula)."""
    if len(points) < 3:
        return 0.0
    points = np.asarray(points, dtype=float)
    x, y = points[:, 0], points[:, 1]
    return float(abs(np.dot(x, np.roll(y, -1)) - np.dot(y, np.roll(x, -1))) / 2)
