import numpy as np
from typing import List, Optional, Tuple

from .bodies import Body, Vertex
from .config import GenerationProgress, Point, RegionConfig
from .errors import ConstraintUnsatisfiable, InvalidInput
from .export import density
from .geometry import MapBounds, circle_overlaps, vertex_crowded


def _validate(width: float, height: float, count: int, config: RegionConfig) -> None:
    if width <= 10 or height <= 10:
        raise InvalidInput(f"map must be larger than 10x10, got {width}x{height}")
    if count < 1:
        raise InvalidInput(f"body count must be at least 1, got {count}")
    if not 3 <= config.min_sides <= config.max_sides:
        raise InvalidInput(
            f"side range must satisfy 3 <= min_sides <= max_sides, "
            f"got [{config.min_sides}, {config.max_sides}]"
        )


class RegionGenerator:
    """Packs irregular polygonal regions into a rectangular map."""

    def __init__(
        self,
        width: float,
        height: float,
        count: int,
        config: Optional[RegionConfig] = None,
        rng: Optional[np.random.Generator] = None,
    ):
        self.config = config or RegionConfig()
        _validate(width, height, count, self.config)

        self.bounds = MapBounds(float(width), float(height))
        self.count = int(count)
        self.rng = rng if rng is not None else np.random.default_rng(self.config.seed)

        # Footprint radii scale with the map area and the number of bodies
        self.max_radius = 2 * np.sqrt(self.bounds.width * self.bounds.height) / self.count
        self.min_radius = self.bounds.width / 50

        self.bodies: List[Body] = []
        self.progress = GenerationProgress()

    def _get_arrays(self) -> Tuple[np.ndarray, np.ndarray]:
        if not self.bodies:
            return np.empty((0, 2)), np.empty(0)
        centers = np.array([b.center for b in self.bodies])
        radii = np.array([b.radius for b in self.bodies])
        return centers, radii

    # =========================================================================
    # Body Placement
    # =========================================================================

    def _sample_centers(self, count: int) -> np.ndarray:
        low, high = self.bounds.inset_corners(self.config.map_inset)
        return self.rng.uniform(low, high, size=(count, 2))

    def _new_body(self, center: Point, radius: float) -> Body:
        sides = int(self.rng.integers(self.config.min_sides, self.config.max_sides + 1))
        return Body(center=np.array(center, dtype=float), radius=float(radius), side_count=sides)

    def _overlaps_placed(self, center: Point, radius: float) -> bool:
        centers, radii = self._get_arrays()
        return bool(np.any(circle_overlaps(centers, radii, center, radius, self.config.placement_margin)))

    def _find_free_center(self) -> Point:
        """Sample candidate centers in batches until a seed footprint fits."""
        cfg = self.config
        centers, radii = self._get_arrays()
        attempts = 0

        while attempts < cfg.max_placement_attempts:
            batch = min(cfg.sample_batch_size, cfg.max_placement_attempts - attempts)
            candidates = self._sample_centers(batch)

            dists = np.linalg.norm(candidates[:, np.newaxis, :] - centers[np.newaxis, :, :], axis=2)
            blocked = np.any(dists <= radii + cfg.seed_radius + cfg.placement_margin, axis=1)
            free = np.flatnonzero(~blocked)

            if len(free) > 0:
                used = int(free[0]) + 1
                self.progress.placement_attempts += used
                return candidates[free[0]]

            attempts += batch
            self.progress.placement_attempts += batch

        raise ConstraintUnsatisfiable(
            "body placement", attempts, f"body {len(self.bodies)} of {self.count}"
        )

    def _expand_radius(self, center: Point) -> float:
        """Shrink a random large radius until the footprint clears earlier bodies."""
        cfg = self.config
        target = float(self.rng.uniform(0.75 * self.max_radius, self.max_radius))
        radius = target

        while radius > cfg.seed_radius and self._overlaps_placed(center, radius):
            radius -= cfg.shrink_step

        # The seed radius is known to fit
        if target >= cfg.seed_radius:
            radius = max(radius, cfg.seed_radius)
        return radius

    def _place_all(self) -> None:
        self.bodies = []

        first_center = self._sample_centers(1)[0]
        low, high = sorted((self.min_radius, self.max_radius))
        first_radius = self.rng.uniform(low, high)
        self.bodies.append(self._new_body(first_center, first_radius))

        for _ in range(1, self.count):
            center = self._find_free_center()
            radius = self._expand_radius(center)
            self.bodies.append(self._new_body(center, radius))

        self.progress.bodies_placed = len(self.bodies)

    def place_bodies(self) -> List[Body]:
        """
        Seed ``count`` footprints that do not overlap one another.

        A run that cannot place a body starts over from an empty map, up to
        ``max_restarts`` times, before the failure propagates.
        """
        self.progress.phase = "placement"

        for restart in range(self.config.max_restarts + 1):
            try:
                self._place_all()
                break
            except ConstraintUnsatisfiable as exc:
                if restart == self.config.max_restarts:
                    raise
                self.progress.restarts += 1
                if self.config.verbose:
                    print(f"{self.progress} - starting over: {exc}")

        if self.config.verbose:
            print(self.progress)

        return self.bodies

    # =========================================================================
    # Polygon Building
    # =========================================================================

    def _pull_onto_map(self, body: Body, angle: float) -> Point:
        """Move a point back along its ray until it is one unit inside the map."""
        exit_distance = self.bounds.ray_exit_distance(body.center, angle)
        reach = max(min(body.radius, exit_distance - 1.0), 0.0)
        return body.center + reach * np.array([np.cos(angle), np.sin(angle)])

    def _sample_vertex(self, body: Body, existing: np.ndarray) -> Vertex:
        cfg = self.config
        attempts = 0

        while True:
            angle = float(self.rng.uniform(0, 2 * np.pi))
            point = body.center + body.radius * np.array([np.cos(angle), np.sin(angle)])
            attempts += 1

            if self.bounds.contains_point(point):
                if not vertex_crowded(existing, point, body.radius):
                    return Vertex(position=point, placement_angle=angle)
                if attempts >= cfg.vertex_soft_attempts:
                    self.progress.vertices_crowded += 1
                    return Vertex(position=point, placement_angle=angle)
            elif attempts >= cfg.vertex_hard_attempts:
                self.progress.vertices_clamped += 1
                return Vertex(position=self._pull_onto_map(body, angle), placement_angle=angle)

    def build_polygon(self, body: Body) -> Body:
        """
        Sample ``side_count`` vertices on the body's circle and sort them
        into ring order. Calling this again resamples every vertex.
        """
        body.vertices = []
        for _ in range(body.side_count):
            vertex = self._sample_vertex(body, body.positions)
            body.vertices.append(vertex)

        body.sort_vertices()
        return body

    def build_polygons(self) -> None:
        self.progress.phase = "polygons"
        for body in self.bodies:
            self.build_polygon(body)

        if self.config.verbose:
            print(self.progress)

    # =========================================================================
    # Growth
    # =========================================================================

    def _strongly_overlaps_any(self, index: int) -> bool:
        body = self.bodies[index]
        centers, radii = self._get_arrays()

        near = circle_overlaps(centers, radii, body.center, body.radius, self.config.placement_margin)
        near[index] = False

        for other_idx in np.flatnonzero(near):
            if body.strong_overlap(self.bodies[other_idx], self.config.placement_margin):
                return True
        return False

    def _fits_map(self, body: Body) -> bool:
        return self.bounds.contains_box(body.bounding_box(), self.config.map_inset)

    def grow_body(
        self, index: int, factor: Optional[float] = None, step: Optional[float] = None
    ) -> List[float]:
        """
        Grow one body as far as overlap and map edges allow.

        Starts at ``factor`` (default ``growth_factor``) times the current
        radius and steps down until the shape fits. Growth never shrinks a
        body: once the next radius would fall below the placed one, the body
        is put back exactly as it was. Returns the radii tried, in order.
        """
        cfg = self.config
        factor = cfg.growth_factor if factor is None else factor
        step = cfg.growth_step if step is None else step
        body = self.bodies[index]
        state = body.snapshot()
        floor = body.radius

        radius = body.radius * factor
        body.grow(radius)
        tried = [radius]
        steps = 0

        while self._strongly_overlaps_any(index) or not self._fits_map(body):
            radius -= step
            steps += 1

            if radius < floor or steps > cfg.max_growth_steps:
                body.restore(state)
                self.progress.growth_skipped += 1
                if cfg.strict_growth:
                    raise ConstraintUnsatisfiable("growth", steps, f"body {index}")
                if cfg.verbose:
                    print(f"{self.progress} - growth skipped for body {index}")
                return tried

            body.grow(radius)
            tried.append(radius)

        self.progress.bodies_grown += 1
        return tried

    def grow_bodies(self) -> None:
        self.progress.phase = "growth"
        for index in range(len(self.bodies)):
            self.grow_body(index)

        if self.config.verbose:
            print(self.progress)

    # =========================================================================
    # Density Fill
    # =========================================================================

    def _random_polygon(self, min_radius: float, max_radius: float) -> Optional[Body]:
        """A random polygon, or None when a vertex had to be pulled onto the map."""
        center = self._sample_centers(1)[0]
        radius = self.rng.uniform(min_radius, max_radius)
        body = self._new_body(center, radius)

        clamped = self.progress.vertices_clamped
        self.build_polygon(body)
        if self.progress.vertices_clamped > clamped:
            return None
        return body

    def _add_clear_polygon(self, min_radius: float, max_radius: float) -> Body:
        cfg = self.config
        for _ in range(cfg.max_fill_attempts):
            self.progress.placement_attempts += 1
            body = self._random_polygon(min_radius, max_radius)
            if body is None:
                continue
            if not any(other.strong_overlap(body, cfg.placement_margin) for other in self.bodies):
                return body

        raise ConstraintUnsatisfiable(
            "density fill", cfg.max_fill_attempts, f"body {len(self.bodies) + 1}"
        )

    def _restart_fill(self, reason: str) -> None:
        if self.progress.restarts >= self.config.max_restarts:
            raise ConstraintUnsatisfiable("density fill", self.progress.restarts, reason)
        self.progress.restarts += 1
        self.bodies = []
        if self.config.verbose:
            print(f"{self.progress} - starting over: {reason}")

    def fill_to_density(self, target_density: Optional[float] = None) -> List[Body]:
        """
        Add random polygons until they cover ``target_density`` of the map
        inside its border, then grow them.

        Candidates that strongly overlap an existing body are redrawn. A fill
        that collects ``max_fill_bodies`` bodies, or cannot add one, starts
        over from an empty map, up to ``max_restarts`` times. The body count
        given to the generator is not used here.
        """
        cfg = self.config
        target = cfg.target_density if target_density is None else target_density
        if not 0 < target < 1:
            raise InvalidInput(f"target density must be between 0 and 1, got {target}")

        self.progress = GenerationProgress(phase="density fill")
        self.bodies = []
        min_radius = self.bounds.width / cfg.fill_min_radius_divisor
        max_radius = self.bounds.width / cfg.fill_max_radius_divisor

        while density(self.bodies, self.bounds, cfg.map_inset) < target:
            if len(self.bodies) >= cfg.max_fill_bodies:
                self._restart_fill(f"{len(self.bodies)} bodies without reaching {target}")
                continue
            try:
                body = self._add_clear_polygon(min_radius, max_radius)
            except ConstraintUnsatisfiable as exc:
                self._restart_fill(str(exc))
                continue
            self.bodies.append(body)
            self.progress.bodies_placed = len(self.bodies)

        if cfg.verbose:
            print(self.progress)

        self.progress.phase = "growth"
        for index in range(len(self.bodies)):
            self.grow_body(index, cfg.fill_growth_factor, cfg.fill_growth_step)

        self.progress.phase = "done"
        if cfg.verbose:
            print(f"Done! {self.progress}")

        return self.bodies

    # =========================================================================
    # Main Entry Points
    # =========================================================================

    def generate(self) -> List[Body]:
        """
        Run placement, polygon building and (optionally) growth.

        Returns:
            The bodies, each with a sorted vertex ring.
        """
        self.progress = GenerationProgress()
        self.bodies = []

        self.place_bodies()
        self.build_polygons()
        if self.config.enable_growth:
            self.grow_bodies()

        self.progress.phase = "done"
        if self.config.verbose:
            print(f"Done! {self.progress}")

        return self.bodies


def generate(
    width: float,
    height: float,
    count: int,
    config: Optional[RegionConfig] = None,
    rng: Optional[np.random.Generator] = None,
) -> List[Body]:
    """Generate ``count`` polygonal regions on a ``width x height`` map."""
    return RegionGenerator(width, height, count, config, rng).generate()


def generate_to_density(
    width: float,
    height: float,
    target_density: Optional[float] = None,
    config: Optional[RegionConfig] = None,
    rng: Optional[np.random.Generator] = None,
) -> List[Body]:
    """Fill a ``width x height`` map with regions until ``target_density`` is covered."""
    return RegionGenerator(width, height, 1, config, rng).fill_to_density(target_density)
