import unittest
from datetime import datetime, timezone

from pyskycheck.celestial.solar import SunDelta
from pyskycheck.core.data_structures import MagneticFieldModel, SunPosition, ValidationStatus
from pyskycheck.sensors.readings import GPSFix, MagnetometerReading, SensorSnapshot
from pyskycheck.validation.consensus import ConsensusOutput
from pyskycheck.validation.result import CelestialData, Timings, ValidationResult

UTC = timezone.utc


class TestValidationResult(unittest.TestCase):

    def setUp(self):
        self.snapshot = SensorSnapshot(
            gps=GPSFix(latitude=40.0, longitude=-105.0, altitude=1600.0, accuracy=4.5, timestamp=1000.0),
            magnetometer=MagnetometerReading(heading=9.0, accuracy=2.0, timestamp=1000.0),
            timestamp=1000.0,
        )
        self.celestial = CelestialData(
            sun=SunPosition(170.0, 30.0, 0.99, is_daytime=True,
                            sunrise=datetime(2024, 3, 20, 13, 5, tzinfo=UTC),
                            sunset=datetime(2024, 3, 21, 1, 15, tzinfo=UTC),
                            solar_noon=datetime(2024, 3, 20, 19, 7, 30, 500000, tzinfo=UTC)),
            magnetic_field=MagneticFieldModel(7.9, 65.0, 20000.0, 47000.0, 19800.0, 2750.0, 42600.0),
        )
        self.consensus = ConsensusOutput(
            score=93.2,
            status=ValidationStatus.NOMINAL,
            contributions={"sun": 100.0, "magnetometer": 0.0, "gps": 85.0},
            outliers=("magnetometer",),
        )

    def make_result(self):
        return ValidationResult.from_consensus(
            self.consensus,
            id="1710958800000-abc123xyz",
            timestamp=1710958800000,
            sun_delta=SunDelta(0.5, -0.25),
            magnetic_delta=1.1,
            altitude_delta=None,
            snapshot=self.snapshot,
            celestial_data=self.celestial,
            confidence=0.6,
            timings=Timings(prediction_ms=1.5, crypto_ms=0.0, total_ms=2.0),
        )

    def test_consensus_values_kept_exactly(self):
        result = self.make_result()
        self.assertIs(result.status, self.consensus.status)
        self.assertEqual(result.integrity_score, self.consensus.score)
        self.assertAlmostEqual(result.sensor_consensus, 0.932)
        self.assertEqual(result.gps_accuracy, 4.5)
        self.assertEqual(result.outliers, ("magnetometer",))

    def test_exported_field_names(self):
        d = self.make_result().to_dict()
        for key in ["id", "timestamp", "status", "integrityScore", "sunDelta", "magneticDelta",
                    "altitudeDelta", "gpsAccuracy", "sensorConsensus", "confidence", "snapshot",
                    "celestialData", "timings"]:
            self.assertIn(key, d)
        self.assertEqual(d["status"], "NOMINAL")
        self.assertIsNone(d["altitudeDelta"])
        self.assertEqual(d["sunDelta"], {"azimuth": 0.5, "elevation": -0.25})
        self.assertEqual(d["timings"], {"predictionMs": 1.5, "cryptoMs": 0.0, "totalMs": 2.0})
        self.assertEqual(set(d["celestialData"]), {"sun", "magneticField"})
        self.assertEqual(d["celestialData"]["sun"]["solarNoon"], "2024-03-20T19:07:30.500Z")
        self.assertEqual(d["snapshot"]["gps"]["accuracy"], 4.5)

    def test_from_dict_restores_result(self):
        result = self.make_result()
        self.assertEqual(ValidationResult.from_dict(result.to_dict()), result)

    def test_immutable(self):
        result = self.make_result()
        with self.assertRaises(AttributeError):
            result.integrity_score = 10.0


if __name__ == '__main__':
    unittest.main()
