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

"""Exception types"""

import math


class InvalidInputError(ValueError):
    """Input outside the domain of a computation (non-finite, out of range, malformed)"""


def require_finite(name: str, value) -> float:
    """Return value as float, raising InvalidInputError if it is not a finite number"""
    if isinstance(value, bool):
        raise InvalidInputError(f"{name} must be a number, got {value!r}")
    if not isinstance(value, (int, float)):
        try:
            value = float(value)
        except (TypeError, ValueError):
            raise InvalidInputError(f"{name} must be a number, got {value!r}") from None
    if not math.isfinite(value):
        raise InvalidInputError(f"{name} must be finite, got {value!r}")
    return float(value)


def validate_observer(latitude, longitude, altitude=0.0) -> tuple[float, float, float]:
    """
    Check an observer location.

    Parameters:
    -----------
    latitude : float
        Latitude in degrees, [-90, 90]
    longitude : float
        Longitude in degrees, [-180, 180]
    altitude : float
        Height in meters (any finite value)

    Returns:
    --------
    tuple[float, float, float]
        The validated (latitude, longitude, altitude) as floats

    Raises:
    -------
    InvalidInputError
        If any component is non-finite or out of range
    """
    lat = require_finite("latitude", latitude)
    lon = require_finite("longitude", longitude)
    alt = require_finite("altitude", altitude)
    if not -90.0 <= lat <= 90.0:
        raise InvalidInputError(f"latitude must be in [-90, 90], got {lat}")
    if not -180.0 <= lon <= 180.0:
        raise InvalidInputError(f"longitude must be in [-180, 180], got {lon}")
    return lat, lon, alt
