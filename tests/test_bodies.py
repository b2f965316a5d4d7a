import math
import unittest
import numpy as np
from regionmap.bodies import Body, Vertex


def make_body(cx, cy, radius, angles):
    """Build a body with vertices at the given placement angles, sorted."""
    center = np.array([cx, cy], dtype=float)
    body = Body(center=center, radius=radius, side_count=len(angles))
    body.vertices = [
        Vertex(position=center + radius * np.array([math.cos(a), math.sin(a)]), placement_angle=a)
        for a in angles
    ]
    body.sort_vertices()
    return body


DIAMOND = [0.0, math.pi / 2, math.pi, 3 * math.pi / 2]
SQUARE = [math.pi / 4, 3 * math.pi / 4, 5 * math.pi / 4, 7 * math.pi / 4]


class TestBodyShape(unittest.TestCase):

    # --- Test Growth Rescaling ---

    def test_grow_moves_vertices_along_placement_angles(self):
        body = make_body(50, 50, 10.0, DIAMOND)
        body.grow(20.0)

        self.assertEqual(body.radius, 20.0)
        distances = np.linalg.norm(body.positions - body.center, axis=1)
        np.testing.assert_allclose(distances, 20.0)
        np.testing.assert_allclose(body.vertices[0].position, [70.0, 50.0], atol=1e-9)

    def test_grow_keeps_vertex_order(self):
        body = make_body(50, 50, 10.0, [0.3, 2.0, 4.1, 5.5])
        before = [v.placement_angle for v in body.vertices]
        body.grow(3.0)
        self.assertEqual([v.placement_angle for v in body.vertices], before)

    def test_snapshot_restore(self):
        body = make_body(50, 50, 10.0, DIAMOND)
        state = body.snapshot()
        body.grow(40.0)
        body.restore(state)

        self.assertEqual(body.radius, 10.0)
        np.testing.assert_allclose(body.positions, state[1])

    # --- Test Ring Ordering ---

    def test_sort_wraps_angles_below_start(self):
        """Angles smaller than the first vertex's are shifted by a full turn."""
        body = make_body(0, 0, 10.0, [math.pi / 2, 0.0, 3 * math.pi / 2, math.pi])
        angles = [v.sort_angle for v in body.vertices]

        self.assertAlmostEqual(angles[0], math.pi / 2)
        self.assertAlmostEqual(angles[-1], 2 * math.pi)
        self.assertTrue(all(b > a for a, b in zip(angles, angles[1:])))

    # --- Test Measurements ---

    def test_bounding_box_and_area(self):
        body = make_body(50, 50, 10.0, SQUARE)
        half = 10.0 / math.sqrt(2)
        xmin, xmax, ymin, ymax = body.bounding_box()

        self.assertAlmostEqual(xmin, 50 - half)
        self.assertAlmostEqual(xmax, 50 + half)
        self.assertAlmostEqual(ymin, 50 - half)
        self.assertAlmostEqual(ymax, 50 + half)
        self.assertAlmostEqual(body.area(), 200.0)

    def test_footprint(self):
        body = make_body(12, 34, 5.0, DIAMOND)
        self.assertEqual(body.footprint, (12.0, 34.0, 5.0))


class TestBodyOverlap(unittest.TestCase):

    def test_footprint_overlap_uses_margin(self):
        a = make_body(50, 50, 10.0, DIAMOND)
        b = make_body(72, 50, 10.0, DIAMOND)
        self.assertTrue(a.overlaps(b))
        self.assertFalse(a.overlaps(b, margin=1))

    def test_crossing_edges_overlap(self):
        a = make_body(50, 50, 10.0, DIAMOND)
        b = make_body(60, 50, 10.0, DIAMOND)
        self.assertTrue(a.strong_overlap(b))
        self.assertTrue(b.strong_overlap(a))

    def test_distant_bodies_do_not_overlap(self):
        a = make_body(50, 50, 10.0, DIAMOND)
        b = make_body(200, 200, 10.0, DIAMOND)
        self.assertFalse(a.strong_overlap(b))

    def test_close_footprints_without_contact(self):
        """Footprints within the margin but polygons apart are not a strong overlap."""
        a = make_body(50, 50, 10.0, DIAMOND)
        b = make_body(72, 50, 10.0, DIAMOND)
        self.assertFalse(a.strong_overlap(b))

    def test_containment_overlaps_both_ways(self):
        outer = make_body(50, 50, 30.0, SQUARE)
        inner = make_body(50, 50, 5.0, DIAMOND)
        self.assertTrue(outer.strong_overlap(inner))
        self.assertTrue(inner.strong_overlap(outer))


if __name__ == '__main__':
    unittest.main()
