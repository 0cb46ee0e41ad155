import unittest
from datetime import datetime, timedelta, timezone

import numpy as np

from pyskycheck.celestial.solar import (
    expected_sun_position, greenwich_mean_sidereal_time, solar_position,
    sun_delta, sun_equatorial, sun_horizontal, sun_phase
)
from pyskycheck.core.data_structures import CelestialPosition, GeoObserver, SunPhase
from pyskycheck.core.errors import InvalidInputError
from pyskycheck.core.time import datetime_to_jd

UTC = timezone.utc


class TestSolarEphemeris(unittest.TestCase):

    def setUp(self):
        self.origin = GeoObserver(0.0, 0.0, 0.0)
        self.j2000 = datetime(2000, 1, 1, 12, tzinfo=UTC)

    def test_equatorial_j2000(self):
        ra, dec, dist, _ = sun_equatorial(np.array([2451545.0]))
        self.assertAlmostEqual(ra[0] % 360.0, 281.29, delta=0.05)
        self.assertAlmostEqual(dec[0], -23.03, delta=0.05)
        self.assertAlmostEqual(dist[0], 0.9833, delta=0.0005)

    def test_sidereal_time_j2000(self):
        self.assertAlmostEqual(float(greenwich_mean_sidereal_time(np.array([2451545.0]))[0]),
                               280.46061837, places=6)

    def test_reference_position(self):
        sun = solar_position(self.origin, self.j2000)
        self.assertAlmostEqual(sun.azimuth, 178.06, delta=0.5)
        self.assertAlmostEqual(sun.elevation, 66.95, delta=0.5)
        self.assertAlmostEqual(sun.distance, 0.9833, delta=0.001)
        self.assertTrue(sun.is_daytime)

    def test_day_events(self):
        sun = solar_position(self.origin, self.j2000)
        day = datetime(2000, 1, 1, tzinfo=UTC)
        self.assertTrue(day + timedelta(hours=12, minutes=2) < sun.solar_noon < day + timedelta(hours=12, minutes=5))
        self.assertTrue(day + timedelta(hours=5, minutes=55) < sun.sunrise < day + timedelta(hours=6, minutes=5))
        self.assertTrue(day + timedelta(hours=18, minutes=2) < sun.sunset < day + timedelta(hours=18, minutes=12))

    def test_transit_is_highest_point(self):
        sun = solar_position(self.origin, self.j2000)
        at_noon = solar_position(self.origin, sun.solar_noon)
        for minutes in (-30, 30):
            other = solar_position(self.origin, sun.solar_noon + timedelta(minutes=minutes))
            self.assertLess(other.elevation, at_noon.elevation)

    def test_night(self):
        sun = solar_position(self.origin, datetime(2000, 1, 1, 0, tzinfo=UTC))
        self.assertAlmostEqual(sun.elevation, -67.0, delta=1.0)
        self.assertFalse(sun.is_daytime)

    def test_equinox_noon_elevation(self):
        obs = GeoObserver(51.5, 0.0, 0.0)
        noon = solar_position(obs, datetime(2024, 3, 20, 12, tzinfo=UTC)).solar_noon
        sun = solar_position(obs, noon)
        self.assertAlmostEqual(sun.elevation, 38.6, delta=0.5)
        self.assertAlmostEqual(sun.azimuth, 180.0, delta=0.1)

    def test_daytime_flag_matches_elevation(self):
        obs = GeoObserver(35.68, 139.77, 40.0)
        start = datetime(2024, 6, 1, tzinfo=UTC)
        for hour in range(0, 24, 3):
            sun = solar_position(obs, start + timedelta(hours=hour))
            self.assertEqual(sun.is_daytime, sun.elevation > 0)
            self.assertGreaterEqual(sun.azimuth, 0.0)
            self.assertLess(sun.azimuth, 360.0)

    def test_polar_day_uses_query_instant(self):
        when = datetime(2024, 6, 21, 12, tzinfo=UTC)
        sun = solar_position(GeoObserver(80.0, 0.0), when)
        self.assertEqual(sun.sunrise, when)
        self.assertEqual(sun.sunset, when)
        self.assertTrue(sun.is_daytime)

    def test_polar_night_uses_query_instant(self):
        when = datetime(2024, 6, 21, 12, tzinfo=UTC)
        sun = solar_position(GeoObserver(-80.0, 0.0), when)
        self.assertEqual(sun.sunrise, when)
        self.assertEqual(sun.sunset, when)
        self.assertFalse(sun.is_daytime)

    def test_refraction_raises_low_sun(self):
        when = datetime(2000, 1, 1, 6, 30, tzinfo=UTC)
        true_sun = solar_position(self.origin, when)
        apparent = solar_position(self.origin, when, refraction=True)
        self.assertGreater(apparent.elevation, true_sun.elevation)
        self.assertEqual(apparent.azimuth, true_sun.azimuth)

    def test_posix_seconds_timestamp(self):
        a = solar_position(self.origin, 946728000.0)
        b = solar_position(self.origin, self.j2000)
        self.assertAlmostEqual(a.elevation, b.elevation, places=9)

    def test_expected_position_matches(self):
        full = solar_position(self.origin, self.j2000)
        quick = expected_sun_position(self.origin, self.j2000)
        self.assertIsInstance(quick, CelestialPosition)
        self.assertAlmostEqual(quick.azimuth, full.azimuth, places=9)
        self.assertAlmostEqual(quick.elevation, full.elevation, places=9)

    def test_vectorized_horizontal(self):
        jd = datetime_to_jd(self.j2000) + np.array([0.0, 0.25, 0.5])
        az, el, H, dist = sun_horizontal(jd, 0.0, 0.0)
        self.assertEqual(az.shape, (3,))
        self.assertTrue(np.all((H >= -180.0) & (H < 180.0)))
        self.assertLess(el[2], 0.0)

    def test_invalid_timestamp(self):
        with self.assertRaises(InvalidInputError):
            solar_position(self.origin, "2000-01-01")
        with self.assertRaises(InvalidInputError):
            solar_position(self.origin, float('nan'))


class TestSunDeltaAndPhase(unittest.TestCase):

    def test_delta_wraps_azimuth(self):
        delta = sun_delta(CelestialPosition(1.0, 10.0), CelestialPosition(359.0, 12.0))
        self.assertAlmostEqual(delta.azimuth, 2.0)
        self.assertAlmostEqual(delta.elevation, -2.0)
        self.assertEqual(delta.to_dict(), {"azimuth": delta.azimuth, "elevation": delta.elevation})

    def test_phase_bands(self):
        cases = [
            (45.0, SunPhase.DAY),
            (0.01, SunPhase.DAY),
            (0.0, SunPhase.CIVIL_TWILIGHT),
            (-3.0, SunPhase.CIVIL_TWILIGHT),
            (-6.0, SunPhase.NAUTICAL_TWILIGHT),
            (-11.9, SunPhase.NAUTICAL_TWILIGHT),
            (-12.0, SunPhase.ASTRONOMICAL_TWILIGHT),
            (-17.9, SunPhase.ASTRONOMICAL_TWILIGHT),
            (-18.0, SunPhase.NIGHT),
            (-60.0, SunPhase.NIGHT),
        ]
        for elevation, phase in cases:
            self.assertIs(sun_phase(elevation), phase, msg=str(elevation))

    def test_phase_rejects_nan(self):
        with self.assertRaises(InvalidInputError):
            sun_phase(float('nan'))


if __name__ == '__main__':
    unittest.main()
