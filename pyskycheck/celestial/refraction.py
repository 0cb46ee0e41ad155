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

"""Atmospheric refraction of celestial elevations

Three regimes, selected on the apparent elevation h (degrees):

- h > 15: tangent law (Meeus), R = 0.00452 P / ((273 + T) tan h)
- -0.575 < h <= 15: Saemundsson near-horizon formula, in arcminutes
- -1 <= h <= -0.575: below-horizon tail, -20.774 / tan h arcseconds

Below -1 degree the elevation is returned unchanged. P is pressure in hPa,
T temperature in deg C. Adjacent regimes agree to about 0.001 degree at
their shared boundaries.
"""

import numpy as np

from ..core.constants import (
    REFRACTION_CUTOFF,
    REFRACTION_HIGH_LIMIT,
    REFRACTION_LOW_LIMIT,
    STD_PRESSURE_HPA,
    STD_TEMPERATURE_C,
)
from ..core.errors import InvalidInputError, require_finite


def refraction_correction(apparent_elevation: float,
                          pressure: float = STD_PRESSURE_HPA,
                          temperature: float = STD_TEMPERATURE_C) -> float:
    """
    Refraction angle to add to an elevation.

    Parameters
    ----------
    apparent_elevation : float
        Elevation in degrees
    pressure : float, optional
        Atmospheric pressure in hPa (default: 1013.25)
    temperature : float, optional
        Air temperature in deg C (default: 15)

    Returns
    -------
    float
        Refraction in degrees (0 below -1 degree)

    Raises
    ------
    InvalidInputError
        For non-finite inputs, negative pressure or temperature at or below
        absolute zero
    """
    h = require_finite("apparent_elevation", apparent_elevation)
    pressure = require_finite("pressure", pressure)
    temperature = require_finite("temperature", temperature)
    if pressure < 0.0:
        raise InvalidInputError(f"pressure must be non-negative, got {pressure}")
    if temperature <= -273.0:
        raise InvalidInputError(f"temperature must be above absolute zero, got {temperature}")

    if h < REFRACTION_CUTOFF:
        return 0.0

    p_ratio = pressure / STD_PRESSURE_HPA
    t_ratio = 283.0 / (273.0 + temperature)

    if h > REFRACTION_HIGH_LIMIT:
        return 0.00452 * pressure / ((273.0 + temperature) * np.tan(np.radians(h)))
    if h > REFRACTION_LOW_LIMIT:
        arcmin = 1.02 / np.tan(np.radians(h + 10.3 / (h + 5.11)))
        return p_ratio * t_ratio * arcmin / 60.0
    arcsec = -20.774 / np.tan(np.radians(h))
    return p_ratio * t_ratio * arcsec / 3600.0


def apply_atmospheric_refraction(apparent_elevation: float,
                                 pressure: float = STD_PRESSURE_HPA,
                                 temperature: float = STD_TEMPERATURE_C) -> float:
    """
    Elevation corrected for atmospheric refraction.

    Parameters
    ----------
    apparent_elevation : float
        Elevation in degrees
    pressure : float, optional
        Atmospheric pressure in hPa (default: 1013.25)
    temperature : float, optional
        Air temperature in deg C (default: 15)

    Returns
    -------
    float
        Corrected elevation in degrees, never above 90. Passthrough below -1.

    Examples
    --------
    >>> apply_atmospheric_refraction(-5.0)
    -5.0
    """
    r = refraction_correction(apparent_elevation, pressure, temperature)
    return float(min(apparent_elevation + r, 90.0))
