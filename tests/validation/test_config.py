import unittest

from pyskycheck.core.data_structures import SensorType
from pyskycheck.core.errors import InvalidInputError
from pyskycheck.validation.config import (
    DEFAULT_VALIDATION_CONFIG, ConsensusMethod, ConsensusWeights, ValidationConfig,
    get_validation_config
)


class TestConsensusWeights(unittest.TestCase):

    def test_defaults(self):
        w = ConsensusWeights()
        self.assertEqual(w.to_dict(), {"gps": 0.25, "sun": 0.30, "stars": 0.15,
                                       "magnetometer": 0.20, "barometer": 0.10})

    def test_weight_lookup(self):
        w = ConsensusWeights()
        self.assertEqual(w.weight_for("sun"), 0.30)
        self.assertEqual(w.weight_for(SensorType.BAROMETER), 0.10)
        with self.assertRaises(ValueError):
            w.weight_for("compass")

    def test_invalid_weights(self):
        with self.assertRaises(InvalidInputError):
            ConsensusWeights(sun=-0.1)
        with self.assertRaises(InvalidInputError):
            ConsensusWeights(gps=float('nan'))
        with self.assertRaises(ValueError):
            ConsensusWeights.from_dict({"gps": 0.5, "lidar": 0.5})

    def test_partial_dict(self):
        w = ConsensusWeights.from_dict({"stars": 0.0, "barometer": 0.0})
        self.assertEqual(w.stars, 0.0)
        self.assertEqual(w.gps, 0.25)


class TestValidationConfig(unittest.TestCase):

    def test_defaults(self):
        cfg = get_validation_config()
        self.assertIs(cfg, DEFAULT_VALIDATION_CONFIG)
        self.assertEqual(cfg.integrity_threshold, 85.0)
        self.assertEqual(cfg.azimuth_tolerance, 15.0)
        self.assertEqual(cfg.elevation_tolerance, 10.0)
        self.assertEqual(cfg.altitude_delta_max, 100.0)
        self.assertIs(cfg.consensus_method, ConsensusMethod.WEIGHTED)
        self.assertTrue(cfg.outlier_detection)
        self.assertTrue(cfg.kalman_filter)
        self.assertTrue(cfg.use_barometric_cross_check)
        self.assertTrue(cfg.apply_refraction_correction)
        self.assertEqual(cfg.weights, ConsensusWeights())

    def test_exported_keys(self):
        d = ValidationConfig().to_dict()
        self.assertEqual(set(d), {
            "integrityThreshold", "azimuthTolerance", "elevationTolerance", "altitudeDeltaMax",
            "consensusMethod", "outlierDetection", "kalmanFilter", "weights",
            "useBarometricCrossCheck", "applyRefractionCorrection",
        })
        self.assertEqual(d["consensusMethod"], "weighted")
        self.assertEqual(d["weights"]["sun"], 0.30)
        self.assertEqual(ValidationConfig.from_dict(d), ValidationConfig())

    def test_from_dict_accepts_both_spellings(self):
        cfg = ValidationConfig.from_dict({
            "azimuthTolerance": 5.0,
            "elevation_tolerance": 4.0,
            "outlierDetection": False,
            "weights": {"gps": 0.5, "sun": 0.5, "stars": 0.0, "magnetometer": 0.0, "barometer": 0.0},
        })
        self.assertEqual(cfg.azimuth_tolerance, 5.0)
        self.assertEqual(cfg.elevation_tolerance, 4.0)
        self.assertFalse(cfg.outlier_detection)
        self.assertIsInstance(cfg.weights, ConsensusWeights)
        self.assertEqual(cfg.weights.gps, 0.5)

    def test_unknown_keys_rejected(self):
        with self.assertRaises(ValueError):
            ValidationConfig.from_dict({"theme": "dark"})

    def test_unknown_method_rejected(self):
        with self.assertRaises(ValueError):
            ValidationConfig(consensus_method="median")
        self.assertIs(ValidationConfig(consensus_method="majority").consensus_method,
                      ConsensusMethod.MAJORITY)

    def test_negative_tolerance_rejected(self):
        with self.assertRaises(InvalidInputError):
            ValidationConfig(azimuth_tolerance=-1.0)

    def test_updated_is_a_copy(self):
        cfg = ValidationConfig()
        changed = cfg.updated(use_barometric_cross_check=False, azimuth_tolerance=20.0)
        self.assertFalse(changed.use_barometric_cross_check)
        self.assertEqual(changed.azimuth_tolerance, 20.0)
        self.assertTrue(cfg.use_barometric_cross_check)
        self.assertEqual(changed.weights, cfg.weights)


if __name__ == '__main__':
    unittest.main()
