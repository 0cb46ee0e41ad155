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

"""GNSS, magnetometer, barometer and optical sun readings"""

from dataclasses import dataclass, field
from typing import Optional

from ..core.constants import BARO_EXPONENT, BARO_SCALE_M, STD_PRESSURE_HPA
from ..core.data_structures import CelestialPosition, GeoObserver, SensorStatus, SensorType
from ..core.errors import InvalidInputError, require_finite
from .sensor_base import SensorReading, now_ms

__all__ = [
    "pressure_to_altitude", "GPSFix", "MagnetometerReading", "BarometerReading",
    "SunObservation", "SensorSnapshot",
]


def pressure_to_altitude(pressure: float, sea_level_pressure: float = STD_PRESSURE_HPA) -> float:
    """
    Barometric altitude from static pressure (international barometric formula).

    Parameters
    ----------
    pressure : float
        Static pressure (hPa)
    sea_level_pressure : float, optional
        Reference sea level pressure (hPa, default: 1013.25)

    Returns
    -------
    float
        Altitude in meters
    """
    p = require_finite("pressure", pressure)
    p0 = require_finite("sea_level_pressure", sea_level_pressure)
    if p <= 0.0 or p0 <= 0.0:
        raise InvalidInputError(f"pressures must be positive, got {p} and {p0}")
    return BARO_SCALE_M * (1.0 - (p / p0) ** BARO_EXPONENT)


@dataclass(frozen=True)
class GPSFix(SensorReading):
    """GNSS position fix.

    Attributes
    ----------
    latitude, longitude : float
        Position in degrees
    altitude : float
        Height in meters
    accuracy : float
        Horizontal accuracy (m, 1-sigma as reported by the receiver)
    altitude_accuracy : float, optional
        Vertical accuracy (m)
    heading : float, optional
        Course over ground (deg)
    speed : float, optional
        Ground speed (m/s)
    satellites : int, optional
        Satellites used in the fix
    """
    latitude: float
    longitude: float
    altitude: float
    accuracy: float
    altitude_accuracy: Optional[float] = None
    heading: Optional[float] = None
    speed: Optional[float] = None
    satellites: Optional[int] = None

    _JSON_NAMES = {"altitude_accuracy": "altitudeAccuracy"}

    def observer(self) -> GeoObserver:
        """The fix as an observer location (validates the coordinates)"""
        return GeoObserver(self.latitude, self.longitude, self.altitude)


@dataclass(frozen=True)
class MagnetometerReading(SensorReading):
    """Compass heading with the raw field vector (sensor frame, uT)"""
    heading: float
    accuracy: float = 0.0
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0


@dataclass(frozen=True)
class BarometerReading(SensorReading):
    """Static pressure (hPa) with its altitude estimate (m)"""
    pressure: float
    altitude_estimate: float
    temperature: Optional[float] = None

    _JSON_NAMES = {"altitude_estimate": "altitudeEstimate"}

    @classmethod
    def from_pressure(cls, pressure: float, sea_level_pressure: float = STD_PRESSURE_HPA,
                      temperature: Optional[float] = None, timestamp: Optional[float] = None):
        """Reading whose altitude estimate comes from the barometric formula"""
        return cls(
            pressure=pressure,
            altitude_estimate=pressure_to_altitude(pressure, sea_level_pressure),
            temperature=temperature,
            timestamp=now_ms() if timestamp is None else timestamp,
        )


@dataclass(frozen=True)
class SunObservation(SensorReading):
    """Sun direction measured by an optical sensor (deg)"""
    azimuth: float
    elevation: float

    def position(self) -> CelestialPosition:
        return CelestialPosition(self.azimuth, self.elevation)


@dataclass(frozen=True)
class SensorSnapshot:
    """Readings gathered for one validation cycle.

    Attributes
    ----------
    gps : GPSFix, optional
    magnetometer : MagnetometerReading, optional
    barometer : BarometerReading, optional
    sun : SunObservation, optional
    timestamp : float
        Snapshot time in milliseconds since the POSIX epoch
    """
    gps: Optional[GPSFix] = None
    magnetometer: Optional[MagnetometerReading] = None
    barometer: Optional[BarometerReading] = None
    sun: Optional[SunObservation] = None
    timestamp: float = field(default_factory=now_ms)

    _READING_TYPES = (
        (SensorType.GPS, "gps", GPSFix),
        (SensorType.MAGNETOMETER, "magnetometer", MagnetometerReading),
        (SensorType.BAROMETER, "barometer", BarometerReading),
        (SensorType.SUN, "sun", SunObservation),
    )

    def statuses(self) -> dict[SensorType, SensorStatus]:
        """OFFLINE when a reading is absent, ACTIVE or ERROR by its validity"""
        out = {}
        for sensor, attr, _ in self._READING_TYPES:
            reading = getattr(self, attr)
            out[sensor] = SensorStatus.OFFLINE if reading is None else reading.status()
        return out

    def to_dict(self) -> dict:
        out = {}
        for _, attr, _ in self._READING_TYPES:
            reading = getattr(self, attr)
            out[attr] = None if reading is None else reading.to_dict()
        out["timestamp"] = self.timestamp
        return out

    @classmethod
    def from_dict(cls, data: dict) -> "SensorSnapshot":
        kwargs = {}
        for _, attr, reading_cls in cls._READING_TYPES:
            if data.get(attr) is not None:
                kwargs[attr] = reading_cls.from_dict(data[attr])
        if "timestamp" in data:
            kwargs["timestamp"] = data["timestamp"]
        return cls(**kwargs)
