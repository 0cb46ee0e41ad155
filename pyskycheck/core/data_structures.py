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

"""Core data structures for celestial and geomagnetic integrity checks"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

from .errors import InvalidInputError, require_finite, validate_observer
from .time import from_iso, to_iso


class ValidationStatus(str, Enum):
    """Integrity classification of a validation cycle.

    Attributes
    ----------
    NOMINAL : str
        All references agree with the reported fix and heading
    DRIFT : str
        Moderate disagreement, consistent with sensor drift
    UNCERTAIN : str
        Too much disagreement to trust the fix, too little to call spoofing
    SPOOFING : str
        Disagreement pattern consistent with a spoofed fix
    """
    NOMINAL = "NOMINAL"
    DRIFT = "DRIFT"
    UNCERTAIN = "UNCERTAIN"
    SPOOFING = "SPOOFING"


class SensorStatus(str, Enum):
    """Availability of a single sensor"""
    OFFLINE = "offline"
    INITIALIZING = "initializing"
    ACTIVE = "active"
    ERROR = "error"


class SensorType(str, Enum):
    """Evidence sources known to the consensus.

    Values are the source names used in consensus contributions and outliers.
    STARS has a weight slot but no scorer yet.
    """
    GPS = "gps"
    SUN = "sun"
    STARS = "stars"
    MAGNETOMETER = "magnetometer"
    BAROMETER = "barometer"


class SunPhase(str, Enum):
    """Illumination phase from the sun's elevation"""
    DAY = "day"
    CIVIL_TWILIGHT = "civil_twilight"
    NAUTICAL_TWILIGHT = "nautical_twilight"
    ASTRONOMICAL_TWILIGHT = "astronomical_twilight"
    NIGHT = "night"


@dataclass(frozen=True)
class GeoObserver:
    """Observer location.

    Attributes
    ----------
    latitude : float
        Geodetic latitude in degrees, [-90, 90]
    longitude : float
        Longitude in degrees, east positive, [-180, 180]
    altitude : float
        Height above sea level in meters

    Raises
    ------
    InvalidInputError
        On construction with non-finite or out-of-range values
    """
    latitude: float
    longitude: float
    altitude: float = 0.0

    def __post_init__(self):
        lat, lon, alt = validate_observer(self.latitude, self.longitude, self.altitude)
        object.__setattr__(self, "latitude", lat)
        object.__setattr__(self, "longitude", lon)
        object.__setattr__(self, "altitude", alt)


@dataclass(frozen=True)
class CelestialPosition:
    """Horizontal position of a celestial body.

    Attributes
    ----------
    azimuth : float
        Degrees clockwise from true north, [0, 360)
    elevation : float
        Degrees above the horizon, [-90, 90]
    distance : float, optional
        Distance in astronomical units
    """
    azimuth: float
    elevation: float
    distance: Optional[float] = None

    def __post_init__(self):
        require_finite("azimuth", self.azimuth)
        el = require_finite("elevation", self.elevation)
        if not -90.0 <= el <= 90.0:
            raise InvalidInputError(f"elevation must be in [-90, 90], got {el}")
        if self.distance is not None:
            require_finite("distance", self.distance)

    def to_dict(self) -> dict:
        out = {"azimuth": self.azimuth, "elevation": self.elevation}
        if self.distance is not None:
            out["distance"] = self.distance
        return out

    @classmethod
    def from_dict(cls, data: dict) -> "CelestialPosition":
        return cls(data["azimuth"], data["elevation"], data.get("distance"))


@dataclass(frozen=True)
class SunPosition(CelestialPosition):
    """Sun position with the day's rise, set and transit instants (UTC)"""
    is_daytime: bool = False
    sunrise: Optional[datetime] = None
    sunset: Optional[datetime] = None
    solar_noon: Optional[datetime] = None

    def to_dict(self) -> dict:
        out = super().to_dict()
        out["isDaytime"] = self.is_daytime
        out["sunrise"] = to_iso(self.sunrise) if self.sunrise else None
        out["sunset"] = to_iso(self.sunset) if self.sunset else None
        out["solarNoon"] = to_iso(self.solar_noon) if self.solar_noon else None
        return out

    @classmethod
    def from_dict(cls, data: dict) -> "SunPosition":
        def _t(key):
            return from_iso(data[key]) if data.get(key) else None
        return cls(
            data["azimuth"], data["elevation"], data.get("distance"),
            is_daytime=bool(data.get("isDaytime", False)),
            sunrise=_t("sunrise"), sunset=_t("sunset"), solar_noon=_t("solarNoon"),
        )

    def as_position(self) -> CelestialPosition:
        """Drop the event times"""
        return CelestialPosition(self.azimuth, self.elevation, self.distance)


@dataclass(frozen=True)
class MagneticFieldModel:
    """Geomagnetic field at a point.

    Attributes
    ----------
    declination : float
        Angle from true north to magnetic north, degrees (east positive)
    inclination : float
        Dip below horizontal, degrees (down positive)
    horizontal_intensity : float
        H in nT
    total_intensity : float
        F in nT
    north_component : float
        X in nT
    east_component : float
        Y in nT
    vertical_component : float
        Z in nT (down positive)
    """
    declination: float
    inclination: float
    horizontal_intensity: float
    total_intensity: float
    north_component: float
    east_component: float
    vertical_component: float

    _KEYS = (
        ("declination", "declination"),
        ("inclination", "inclination"),
        ("horizontal_intensity", "horizontalIntensity"),
        ("total_intensity", "totalIntensity"),
        ("north_component", "northComponent"),
        ("east_component", "eastComponent"),
        ("vertical_component", "verticalComponent"),
    )

    def to_dict(self) -> dict:
        return {key: getattr(self, attr) for attr, key in self._KEYS}

    @classmethod
    def from_dict(cls, data: dict) -> "MagneticFieldModel":
        return cls(**{attr: float(data[key]) for attr, key in cls._KEYS})
