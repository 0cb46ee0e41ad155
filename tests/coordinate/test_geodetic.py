import unittest
import numpy as np

from pyskycheck.coordinate.geodetic import haversine_distance
from pyskycheck.core.constants import RE_MEAN_KM


class TestHaversine(unittest.TestCase):

    def test_same_point_is_zero(self):
        for lat, lon in [(0.0, 0.0), (48.85, 2.35), (-89.9, 179.9), (90.0, 0.0)]:
            self.assertEqual(haversine_distance(lat, lon, lat, lon), 0.0)

    def test_symmetric(self):
        d1 = haversine_distance(35.68, 139.77, 40.71, -74.01)
        d2 = haversine_distance(40.71, -74.01, 35.68, 139.77)
        self.assertAlmostEqual(d1, d2, places=9)

    def test_known_distances(self):
        # Paris - London
        self.assertAlmostEqual(haversine_distance(48.8566, 2.3522, 51.5074, -0.1278), 343.5, delta=2.0)
        self.assertAlmostEqual(haversine_distance(0.0, 0.0, 0.0, 90.0), RE_MEAN_KM * np.pi / 2, places=6)
        self.assertAlmostEqual(haversine_distance(0.0, 0.0, 0.0, 180.0), RE_MEAN_KM * np.pi, places=6)

    def test_across_antimeridian(self):
        self.assertAlmostEqual(haversine_distance(0.0, 179.5, 0.0, -179.5),
                               RE_MEAN_KM * np.radians(1.0), places=6)

    def test_triangle_inequality(self):
        a, b, c = (10.0, 20.0), (-35.0, 150.0), (60.0, -45.0)
        ab = haversine_distance(*a, *b)
        bc = haversine_distance(*b, *c)
        ac = haversine_distance(*a, *c)
        self.assertLessEqual(ac, ab + bc + 1e-9)

    def test_custom_radius(self):
        self.assertAlmostEqual(haversine_distance(0.0, 0.0, 0.0, 90.0, radius=1.0), np.pi / 2)


if __name__ == '__main__':
    unittest.main()
