import unittest
import numpy as np

from pyskycheck.celestial.refraction import apply_atmospheric_refraction, refraction_correction
from pyskycheck.core.errors import InvalidInputError


class TestRefraction(unittest.TestCase):

    def test_passthrough_below_cutoff(self):
        for h in [-1.0001, -5.0, -45.0, -90.0]:
            self.assertEqual(apply_atmospheric_refraction(h), h)
            self.assertEqual(refraction_correction(h), 0.0)

    def test_continuous_at_high_boundary(self):
        below = apply_atmospheric_refraction(15.0)
        above = apply_atmospheric_refraction(15.0 + 1e-9)
        self.assertAlmostEqual(below, above, delta=0.005)

    def test_continuous_at_low_boundary(self):
        below = apply_atmospheric_refraction(-0.575)
        above = apply_atmospheric_refraction(-0.575 + 1e-9)
        self.assertAlmostEqual(below, above, delta=0.005)

    def test_known_values(self):
        # Tangent law at 45 degrees, standard atmosphere
        self.assertAlmostEqual(refraction_correction(45.0), 0.00452 * 1013.25 / 288.0, places=6)
        # About half a degree at the horizon
        r0 = refraction_correction(0.0)
        self.assertGreater(r0, 0.4)
        self.assertLess(r0, 0.6)

    def test_decreases_with_elevation(self):
        h = np.linspace(-0.5, 89.0, 200)
        r = [refraction_correction(x) for x in h]
        self.assertTrue(np.all(np.diff(r) < 0))

    def test_zenith_clamped(self):
        self.assertLessEqual(apply_atmospheric_refraction(90.0), 90.0)
        self.assertLessEqual(apply_atmospheric_refraction(89.9999), 90.0)

    def test_pressure_and_temperature(self):
        base = refraction_correction(5.0)
        self.assertGreater(refraction_correction(5.0, pressure=1050.0), base)
        self.assertGreater(refraction_correction(5.0, temperature=-20.0), base)
        self.assertEqual(refraction_correction(5.0, pressure=0.0), 0.0)

    def test_invalid_inputs(self):
        with self.assertRaises(InvalidInputError):
            refraction_correction(float('nan'))
        with self.assertRaises(InvalidInputError):
            refraction_correction(10.0, pressure=-1.0)
        with self.assertRaises(InvalidInputError):
            refraction_correction(10.0, temperature=-300.0)


if __name__ == '__main__':
    unittest.main()
