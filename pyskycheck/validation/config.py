# Copyright 2024 inuex35
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Validation configuration records"""

from dataclasses import dataclass, field, fields, replace
from enum import Enum

from ..core.data_structures import SensorType
from ..core.errors import InvalidInputError, require_finite


class ConsensusMethod(str, Enum):
    """Strategy for fusing per-source scores. Only WEIGHTED is implemented."""
    WEIGHTED = "weighted"
    MAJORITY = "majority"
    BAYESIAN = "bayesian"


@dataclass(frozen=True)
class ConsensusWeights:
    """Relative weight of each evidence source.

    Weights are non-negative and need not sum to 1; the consensus divides by
    the total weight of the sources it actually uses.
    """
    gps: float = 0.25
    sun: float = 0.30
    stars: float = 0.15
    magnetometer: float = 0.20
    barometer: float = 0.10

    def __post_init__(self):
        for f in fields(self):
            w = require_finite(f"weights.{f.name}", getattr(self, f.name))
            if w < 0.0:
                raise InvalidInputError(f"weights.{f.name} must be non-negative, got {w}")
            object.__setattr__(self, f.name, w)

    def weight_for(self, source) -> float:
        """Weight of a source given as SensorType or its name"""
        return getattr(self, SensorType(source).value)

    def to_dict(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_dict(cls, data: dict) -> "ConsensusWeights":
        unknown = set(data) - {f.name for f in fields(cls)}
        if unknown:
            raise ValueError(f"Unknown weight keys: {sorted(unknown)}")
        return cls(**data)


# attribute name -> exported (camelCase) key
_CONFIG_KEYS = {
    "integrity_threshold": "integrityThreshold",
    "azimuth_tolerance": "azimuthTolerance",
    "elevation_tolerance": "elevationTolerance",
    "altitude_delta_max": "altitudeDeltaMax",
    "consensus_method": "consensusMethod",
    "outlier_detection": "outlierDetection",
    "kalman_filter": "kalmanFilter",
    "weights": "weights",
    "use_barometric_cross_check": "useBarometricCrossCheck",
    "apply_refraction_correction": "applyRefractionCorrection",
}


@dataclass(frozen=True)
class ValidationConfig:
    """Options of a validation cycle.

    Attributes
    ----------
    integrity_threshold : float
        Score the UI treats as trustworthy (informational, default: 85)
    azimuth_tolerance : float
        Acceptable sun azimuth error, degrees (default: 15)
    elevation_tolerance : float
        Acceptable sun elevation error, degrees (default: 10)
    altitude_delta_max : float
        Acceptable GPS/barometer altitude disagreement, meters (default: 100)
    consensus_method : ConsensusMethod
        Fusion strategy (default: weighted)
    outlier_detection : bool
        Exclude sources scoring below the outlier threshold (default: True)
    kalman_filter : bool
        Reserved; no filtering is applied (default: True)
    weights : ConsensusWeights
        Per-source weights
    use_barometric_cross_check : bool
        Score the barometer against the GPS altitude when available (default: True)
    apply_refraction_correction : bool
        Compare against the refracted (apparent) sun elevation (default: True)
    """
    integrity_threshold: float = 85.0
    azimuth_tolerance: float = 15.0
    elevation_tolerance: float = 10.0
    altitude_delta_max: float = 100.0
    consensus_method: ConsensusMethod = ConsensusMethod.WEIGHTED
    outlier_detection: bool = True
    kalman_filter: bool = True
    weights: ConsensusWeights = field(default_factory=ConsensusWeights)
    use_barometric_cross_check: bool = True
    apply_refraction_correction: bool = True

    def __post_init__(self):
        for name in ("integrity_threshold", "azimuth_tolerance", "elevation_tolerance", "altitude_delta_max"):
            value = require_finite(name, getattr(self, name))
            if value < 0.0:
                raise InvalidInputError(f"{name} must be non-negative, got {value}")
            object.__setattr__(self, name, value)
        object.__setattr__(self, "consensus_method", ConsensusMethod(self.consensus_method))
        if isinstance(self.weights, dict):
            object.__setattr__(self, "weights", ConsensusWeights.from_dict(self.weights))

    def updated(self, **changes) -> "ValidationConfig":
        """Copy with some options replaced (snake_case names)"""
        return replace(self, **changes)

    def to_dict(self) -> dict:
        out = {}
        for attr, key in _CONFIG_KEYS.items():
            value = getattr(self, attr)
            if attr == "weights":
                value = value.to_dict()
            elif attr == "consensus_method":
                value = value.value
            out[key] = value
        return out

    @classmethod
    def from_dict(cls, data: dict) -> "ValidationConfig":
        """
        Build a config from exported (camelCase) or snake_case keys.

        Missing keys keep their defaults; unknown keys raise ValueError.
        """
        by_key = {key: attr for attr, key in _CONFIG_KEYS.items()}
        kwargs = {}
        for key, value in data.items():
            if key in by_key:
                kwargs[by_key[key]] = value
            elif key in _CONFIG_KEYS:
                kwargs[key] = value
            else:
                raise ValueError(f"Unknown validation config key: {key}")
        return cls(**kwargs)


DEFAULT_VALIDATION_CONFIG = ValidationConfig()


def get_validation_config() -> ValidationConfig:
    """The default configuration"""
    return DEFAULT_VALIDATION_CONFIG
