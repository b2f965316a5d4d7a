"""
regionmap - Procedural maps of irregular, non-overlapping polygonal regions.

Usage:
    from regionmap import generate, RegionConfig

    # Basic usage
    bodies = generate(600, 350, 12)

    # Reproducible output
    config = RegionConfig(seed=42, verbose=True)
    bodies = generate(600, 350, 12, config)

    # Without the growth stage
    config = RegionConfig(enable_growth=False)
    generator = RegionGenerator(600, 350, 12, config)
    bodies = generator.generate()

    # Keep adding regions until half the map is covered
    bodies = generate_to_density(600, 350, 0.5)

Each body exposes ``center``, ``radius`` and ``vertices`` (sorted by angle,
each with a ``position``) for drawing a circle outline and a closed polygon.

Pipeline:
    - Placement: non-overlapping circular footprints via rejection sampling
    - Polygons: random perimeter vertices, sorted into ring order
    - Growth: each polygon scaled up until it would overlap or leave the map
"""

from .config import RegionConfig, GenerationProgress, BoundingBox, Circle, Point
from .errors import RegionMapError, InvalidInput, ConstraintUnsatisfiable
from .geometry import MapBounds
from .bodies import Body, Vertex
from .generator import RegionGenerator, generate, generate_to_density
from .export import MapExport, export_map, density

__all__ = [
    "generate",
    "generate_to_density",
    "RegionGenerator",
    "RegionConfig",
    "GenerationProgress",
    "MapBounds",
    "Body",
    "Vertex",
    "MapExport",
    "export_map",
    "density",
    "RegionMapError",
    "InvalidInput",
    "ConstraintUnsatisfiable",
    "BoundingBox",
    "Circle",
    "Point",
]

__version__ = "0.1.0"
