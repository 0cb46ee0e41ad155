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

"""Validation result record"""

from dataclasses import dataclass, field
from typing import NamedTuple, Optional

from ..celestial.solar import SunDelta
from ..core.data_structures import MagneticFieldModel, SunPosition, ValidationStatus
from ..sensors.readings import SensorSnapshot
from .consensus import ConsensusOutput


class Timings(NamedTuple):
    """Cycle timings in milliseconds"""
    prediction_ms: float = 0.0
    crypto_ms: float = 0.0
    total_ms: float = 0.0

    def to_dict(self) -> dict:
        return {"predictionMs": self.prediction_ms, "cryptoMs": self.crypto_ms, "totalMs": self.total_ms}

    @classmethod
    def from_dict(cls, data: dict) -> "Timings":
        return cls(data["predictionMs"], data["cryptoMs"], data["totalMs"])


@dataclass(frozen=True)
class CelestialData:
    """Model references a result was computed against"""
    sun: SunPosition
    magnetic_field: MagneticFieldModel

    def to_dict(self) -> dict:
        return {"sun": self.sun.to_dict(), "magneticField": self.magnetic_field.to_dict()}

    @classmethod
    def from_dict(cls, data: dict) -> "CelestialData":
        return cls(SunPosition.from_dict(data["sun"]), MagneticFieldModel.from_dict(data["magneticField"]))


@dataclass(frozen=True)
class ValidationResult:
    """
    Outcome of one validation cycle.

    Attributes
    ----------
    id : str
        Unique result identifier
    timestamp : float
        Creation time, milliseconds since the POSIX epoch
    status : ValidationStatus
        Consensus classification
    integrity_score : float
        Consensus score, 0-100
    sun_delta : SunDelta
        Observed minus expected sun azimuth/elevation (deg)
    magnetic_delta : float
        Compass heading minus expected declination (deg, signed shortest)
    altitude_delta : float or None
        GPS minus barometric altitude (m); None without a barometer
    gps_accuracy : float
        Horizontal accuracy reported with the fix (m)
    sensor_consensus : float
        integrity_score / 100
    confidence : float
        Share of the available evidence weight that was not an outlier, 0-1
    snapshot : SensorSnapshot
        Readings the cycle used
    celestial_data : CelestialData
        Sun and geomagnetic references
    timings : Timings
        Cycle timings
    contributions : dict
        Per-source consensus sub-scores
    outliers : tuple
        Sources rejected by the consensus
    """
    id: str
    timestamp: float
    status: ValidationStatus
    integrity_score: float
    sun_delta: SunDelta
    magnetic_delta: float
    altitude_delta: Optional[float]
    gps_accuracy: float
    sensor_consensus: float
    confidence: float
    snapshot: SensorSnapshot
    celestial_data: CelestialData
    timings: Timings = Timings()
    contributions: dict = field(default_factory=dict)
    outliers: tuple = ()

    @classmethod
    def from_consensus(cls, consensus: ConsensusOutput, *, id: str, timestamp: float,
                       sun_delta: SunDelta, magnetic_delta: float, altitude_delta: Optional[float],
                       snapshot: SensorSnapshot, celestial_data: CelestialData,
                       confidence: float, timings: Timings = Timings()) -> "ValidationResult":
        """Result carrying the consensus score and status unchanged"""
        return cls(
            id=id,
            timestamp=timestamp,
            status=consensus.status,
            integrity_score=consensus.score,
            sun_delta=sun_delta,
            magnetic_delta=magnetic_delta,
            altitude_delta=altitude_delta,
            gps_accuracy=snapshot.gps.accuracy,
            sensor_consensus=consensus.score / 100.0,
            confidence=confidence,
            snapshot=snapshot,
            celestial_data=celestial_data,
            timings=timings,
            contributions=dict(consensus.contributions),
            outliers=tuple(consensus.outliers),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "timestamp": self.timestamp,
            "status": self.status.value,
            "integrityScore": self.integrity_score,
            "sunDelta": self.sun_delta.to_dict(),
            "magneticDelta": self.magnetic_delta,
            "altitudeDelta": self.altitude_delta,
            "gpsAccuracy": self.gps_accuracy,
            "sensorConsensus": self.sensor_consensus,
            "confidence": self.confidence,
            "snapshot": self.snapshot.to_dict(),
            "celestialData": self.celestial_data.to_dict(),
            "timings": self.timings.to_dict(),
            "contributions": dict(self.contributions),
            "outliers": list(self.outliers),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ValidationResult":
        delta = data["sunDelta"]
        return cls(
            id=data["id"],
            timestamp=data["timestamp"],
            status=ValidationStatus(data["status"]),
            integrity_score=data["integrityScore"],
            sun_delta=SunDelta(delta["azimuth"], delta["elevation"]),
            magnetic_delta=data["magneticDelta"],
            altitude_delta=data.get("altitudeDelta"),
            gps_accuracy=data["gpsAccuracy"],
            sensor_consensus=data["sensorConsensus"],
            confidence=data["confidence"],
            snapshot=SensorSnapshot.from_dict(data["snapshot"]),
            celestial_data=CelestialData.from_dict(data["celestialData"]),
            timings=Timings.from_dict(data["timings"]) if "timings" in data else Timings(),
            contributions=dict(data.get("contributions", {})),
            outliers=tuple(data.get("outliers", ())),
        )
