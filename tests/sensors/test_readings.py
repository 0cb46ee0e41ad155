import unittest

from pyskycheck.core.data_structures import CelestialPosition, GeoObserver, SensorStatus, SensorType
from pyskycheck.core.errors import InvalidInputError
from pyskycheck.sensors.readings import (
    BarometerReading, GPSFix, MagnetometerReading, SensorSnapshot, SunObservation,
    pressure_to_altitude
)


class TestBarometricFormula(unittest.TestCase):

    def test_sea_level(self):
        self.assertAlmostEqual(pressure_to_altitude(1013.25), 0.0)

    def test_about_one_kilometre(self):
        self.assertAlmostEqual(pressure_to_altitude(899.0), 998.0, delta=8.0)

    def test_custom_reference(self):
        self.assertAlmostEqual(pressure_to_altitude(1020.0, sea_level_pressure=1020.0), 0.0)
        self.assertLess(pressure_to_altitude(1020.0), 0.0)

    def test_invalid_pressure(self):
        for bad in (0.0, -5.0, float('nan')):
            with self.assertRaises(InvalidInputError):
                pressure_to_altitude(bad)


class TestReadings(unittest.TestCase):

    def setUp(self):
        self.fix = GPSFix(latitude=35.68, longitude=139.77, altitude=40.0, accuracy=5.0,
                          satellites=9, timestamp=1700000000000.0)

    def test_fix_validity(self):
        self.assertTrue(self.fix.is_valid())
        self.assertIs(self.fix.status(), SensorStatus.ACTIVE)
        bad = GPSFix(latitude=35.68, longitude=139.77, altitude=40.0, accuracy=float('nan'))
        self.assertFalse(bad.is_valid())
        self.assertIs(bad.status(), SensorStatus.ERROR)

    def test_fix_observer(self):
        self.assertEqual(self.fix.observer(), GeoObserver(35.68, 139.77, 40.0))
        with self.assertRaises(InvalidInputError):
            GPSFix(latitude=95.0, longitude=0.0, altitude=0.0, accuracy=3.0).observer()

    def test_fix_dict_names(self):
        d = GPSFix(latitude=1.0, longitude=2.0, altitude=3.0, accuracy=4.0,
                   altitude_accuracy=6.0, timestamp=10.0).to_dict()
        self.assertIn("altitudeAccuracy", d)
        self.assertNotIn("altitude_accuracy", d)
        self.assertEqual(d["timestamp"], 10.0)
        self.assertEqual(GPSFix.from_dict(d).altitude_accuracy, 6.0)

    def test_default_timestamp(self):
        reading = MagnetometerReading(heading=12.0)
        self.assertGreater(reading.timestamp, 1.6e12)

    def test_barometer_from_pressure(self):
        baro = BarometerReading.from_pressure(899.0, temperature=12.0, timestamp=5.0)
        self.assertAlmostEqual(baro.altitude_estimate, pressure_to_altitude(899.0))
        self.assertEqual(baro.to_dict()["altitudeEstimate"], baro.altitude_estimate)
        self.assertEqual(baro.timestamp, 5.0)

    def test_sun_observation(self):
        obs = SunObservation(azimuth=180.0, elevation=45.0, timestamp=1.0)
        self.assertEqual(obs.position(), CelestialPosition(180.0, 45.0))


class TestSensorSnapshot(unittest.TestCase):

    def test_statuses(self):
        snap = SensorSnapshot(
            gps=GPSFix(latitude=0.0, longitude=0.0, altitude=0.0, accuracy=3.0),
            magnetometer=MagnetometerReading(heading=float('inf')),
        )
        statuses = snap.statuses()
        self.assertIs(statuses[SensorType.GPS], SensorStatus.ACTIVE)
        self.assertIs(statuses[SensorType.MAGNETOMETER], SensorStatus.ERROR)
        self.assertIs(statuses[SensorType.BAROMETER], SensorStatus.OFFLINE)
        self.assertIs(statuses[SensorType.SUN], SensorStatus.OFFLINE)

    def test_dict_round_trip(self):
        snap = SensorSnapshot(
            gps=GPSFix(latitude=48.85, longitude=2.35, altitude=35.0, accuracy=4.0, timestamp=1.0),
            barometer=BarometerReading(pressure=1009.0, altitude_estimate=35.5, timestamp=2.0),
            timestamp=3.0,
        )
        d = snap.to_dict()
        self.assertIsNone(d["magnetometer"])
        self.assertIsNone(d["sun"])
        self.assertEqual(d["barometer"]["altitudeEstimate"], 35.5)
        self.assertEqual(SensorSnapshot.from_dict(d), snap)


if __name__ == '__main__':
    unittest.main()
