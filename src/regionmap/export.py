"""
Flatten generated bodies into plain coordinates for consumers that do not
want to depend on the Body objects.
"""

import numpy as np
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from .bodies import Body
from .config import Circle
from .geometry import MapBounds

Coordinate = Tuple[int, int]


@dataclass
class MapExport:
    """Integer coordinates of every polygon plus a start and goal point."""
    coordinates: List[List[Coordinate]] = field(default_factory=list)
    circles: List[Circle] = field(default_factory=list)
    start: Coordinate = (0, 0)
    goal: Coordinate = (0, 0)


def _round(value: float) -> int:
    return int(np.floor(value + 0.5))


def density(bodies: Sequence[Body], bounds: MapBounds, inset: float = 5.0) -> float:
    """Fraction of the map inside its ``inset`` border covered by polygons."""
    covered = sum(body.area() for body in bodies)
    return covered / ((bounds.width - 2 * inset) * (bounds.height - 2 * inset))


def export_map(
    bodies: Sequence[Body], bounds: MapBounds, rng: Optional[np.random.Generator] = None
) -> MapExport:
    """
    Round every vertex to the nearest integer coordinate.

    The start sits 3 units in from the left edge and the goal 3 units in from
    the right edge, both at a random height in the middle half of the map.
    """
    rng = rng if rng is not None else np.random.default_rng()

    coordinates = [
        [(_round(x), _round(y)) for x, y in body.positions]
        for body in bodies
    ]

    low = int(bounds.height // 4)
    high = int(3 * bounds.height // 4)
    start = (3, int(rng.integers(low, high, endpoint=True)))
    goal = (_round(bounds.width) - 3, int(rng.integers(low, high, endpoint=True)))

    return MapExport(
        coordinates=coordinates,
        circles=[body.footprint for body in bodies],
        start=start,
        goal=goal,
    )
