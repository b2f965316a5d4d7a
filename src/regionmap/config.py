"""
Configuration and type definitions for region map generation.
"""

import numpy as np
from dataclasses import dataclass
from typing import Optional, Tuple

# Type aliases
Point = np.ndarray
Circle = Tuple[float, float, float]  # (x, y, radius)
BoundingBox = Tuple[float, float, float, float]  # (xmin, xmax, ymin, ymax)


@dataclass
class RegionConfig:
    """
    Configuration parameters for the region generator.

    Placement:
        seed_radius: Radius of the footprint used while searching for a free center
        placement_margin: Extra gap required between two footprints
        shrink_step: Decrement applied to an expanding footprint that overlaps
        map_inset: Distance from the map edge that centers and grown shapes keep
        min_sides, max_sides: Inclusive range of polygon side counts

    Search limits:
        max_placement_attempts: Candidate centers tried per body before giving up
        sample_batch_size: Candidate centers sampled per iteration
        max_restarts: Full placement restarts after an unsatisfiable body
        vertex_soft_attempts: Samples after which a crowded vertex is accepted
        vertex_hard_attempts: Samples after which an off-map vertex is pulled in

    Growth:
        enable_growth: Run the growth stage at all
        growth_factor: First radius tried, as a multiple of the placed radius
        growth_step: Decrement applied while a grown shape is rejected
        max_growth_steps: Hard ceiling on decrements per body
        strict_growth: Raise instead of restoring a body that cannot settle

    Density fill:
        target_density: Covered fraction of the bordered map to reach
        fill_min_radius_divisor, fill_max_radius_divisor: Radius range as map width divided by these
        max_fill_attempts: Candidate polygons tried per added body
        max_fill_bodies: Bodies on the map before the fill starts over
        fill_growth_factor, fill_growth_step: Growth used after filling
    """
    # Placement
    seed_radius: float = 20.0
    placement_margin: float = 3.0
    shrink_step: float = 5.0
    map_inset: float = 5.0
    min_sides: int = 3
    max_sides: int = 6

    # Search limits
    max_placement_attempts: int = 10000
    sample_batch_size: int = 50
    max_restarts: int = 25
    vertex_soft_attempts: int = 50
    vertex_hard_attempts: int = 500

    # Growth
    enable_growth: bool = True
    growth_factor: float = 1.5
    growth_step: float = 1.0
    max_growth_steps: int = 100000
    strict_growth: bool = False

    # Density fill
    target_density: float = 0.5
    fill_min_radius_divisor: float = 45.0
    fill_max_radius_divisor: float = 5.0
    max_fill_attempts: int = 500
    max_fill_bodies: int = 35
    fill_growth_factor: float = 2.0
    fill_growth_step: float = 2.0

    # Randomness and output
    seed: Optional[int] = None
    verbose: bool = False


@dataclass
class GenerationProgress:
    """Tracks the current state of a generation run."""
    bodies_placed: int = 0
    placement_attempts: int = 0
    restarts: int = 0
    vertices_crowded: int = 0
    vertices_clamped: int = 0
    bodies_grown: int = 0
    growth_skipped: int = 0
    phase: str = ""

    def __str__(self) -> str:
        phase_str = f"[{self.phase}] " if self.phase else ""
        return (
            f"{phase_str}Placed: {self.bodies_placed} | "
            f"Attempts: {self.placement_attempts} | Restarts: {self.restarts} | "
            f"Crowded: {self.vertices_crowded} | Clamped: {self.vertices_clamped} | "
            f"Grown: {self.bodies_grown} | Skipped: {self.growth_skipped}"
        )
