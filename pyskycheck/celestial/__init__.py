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

"""
Celestial and geomagnetic reference models.

- Solar ephemeris: sun azimuth/elevation/distance for an observer and
  instant, sunrise/sunset/solar noon search, sun delta and illumination phase
- Atmospheric refraction with three elevation regimes
- Geomagnetic main field: degree-4 spherical-harmonic synthesis with
  fixed epoch-2020 coefficients, declination and heading correction

Examples
--------
>>> from datetime import datetime, timezone
>>> from pyskycheck.core import GeoObserver
>>> from pyskycheck.celestial import solar_position, get_magnetic_declination
>>> sun = solar_position(GeoObserver(0.0, 0.0), datetime(2000, 1, 1, 12, tzinfo=timezone.utc))
>>> decl = get_magnetic_declination(40.0, -105.0)
"""

from .legendre import associated_legendre_table, schmidt_factors
from .magnetic import (
    IGRF_G,
    IGRF_H,
    correct_magnetic_heading,
    get_magnetic_declination,
    magnetic_field,
)
from .refraction import apply_atmospheric_refraction, refraction_correction
from .solar import (
    SunDelta,
    expected_sun_position,
    greenwich_mean_sidereal_time,
    solar_position,
    sun_delta,
    sun_equatorial,
    sun_horizontal,
    sun_phase,
)

__all__ = [
    'associated_legendre_table', 'schmidt_factors',
    'IGRF_G', 'IGRF_H', 'magnetic_field', 'get_magnetic_declination', 'correct_magnetic_heading',
    'apply_atmospheric_refraction', 'refraction_correction',
    'SunDelta', 'solar_position', 'expected_sun_position', 'sun_delta', 'sun_phase',
    'sun_equatorial', 'sun_horizontal', 'greenwich_mean_sidereal_time',
]
