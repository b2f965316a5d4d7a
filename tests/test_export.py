import math
import unittest
import numpy as np
from regionmap import Body, MapBounds, RegionConfig, Vertex, density, export_map, generate


def square_body(cx, cy, radius):
    center = np.array([cx, cy], dtype=float)
    angles = [math.pi / 4, 3 * math.pi / 4, 5 * math.pi / 4, 7 * math.pi / 4]
    body = Body(center=center, radius=radius, side_count=4)
    body.vertices = [
        Vertex(position=center + radius * np.array([math.cos(a), math.sin(a)]), placement_angle=a)
        for a in angles
    ]
    body.sort_vertices()
    return body


class TestExport(unittest.TestCase):
    def setUp(self):
        self.bounds = MapBounds(100.0, 80.0)
        self.body = square_body(50, 40, 10.0)

    def test_coordinates_are_rounded(self):
        exported = export_map([self.body], self.bounds, np.random.default_rng(0))

        self.assertEqual(len(exported.coordinates), 1)
        self.assertEqual(
            sorted(exported.coordinates[0]),
            [(43, 33), (43, 47), (57, 33), (57, 47)],
        )
        self.assertEqual(exported.circles, [(50.0, 40.0, 10.0)])

    def test_start_and_goal_sit_on_opposite_edges(self):
        exported = export_map([self.body], self.bounds, np.random.default_rng(1))

        self.assertEqual(exported.start[0], 3)
        self.assertEqual(exported.goal[0], 97)
        for _, y in (exported.start, exported.goal):
            self.assertTrue(20 <= y <= 60)

    def test_density(self):
        """Coverage is measured against the map inside its 5 unit border."""
        self.assertAlmostEqual(density([self.body], self.bounds), 200.0 / (90.0 * 70.0))
        self.assertAlmostEqual(density([self.body], self.bounds, inset=0), 200.0 / 8000.0)
        self.assertEqual(density([], self.bounds), 0.0)

    def test_generated_map_exports(self):
        bodies = generate(800, 600, 10, RegionConfig(seed=17))
        exported = export_map(bodies, MapBounds(800.0, 600.0))

        self.assertEqual(len(exported.coordinates), 10)
        for body, coords in zip(bodies, exported.coordinates):
            self.assertEqual(len(coords), body.side_count)
        self.assertTrue(0 < density(bodies, MapBounds(800.0, 600.0)) < 1)


if __name__ == '__main__':
    unittest.main()
