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
Geomagnetic main-field model.

Spherical-harmonic synthesis of the internal field truncated at degree and
order 4, using Gauss coefficients of the International Geomagnetic Reference
Field for epoch 2020.0. The coefficients are fixed: there is no secular
variation, so the model drifts from the real field by roughly 0.1 degree of
declination per year away from the epoch, and the degree-4 truncation leaves
errors of several degrees in places. This is a consistency reference, not a
navigation-grade field model.
"""

import logging
from typing import Optional

import numpy as np

from ..coordinate.wrap import normalize_angle
from ..core.constants import GEOMAG_EPOCH, GEOMAG_NMAX, GEOMAG_REF_RADIUS_KM, POLE_EPS
from ..core.data_structures import MagneticFieldModel
from ..core.errors import InvalidInputError, require_finite, validate_observer
from .legendre import associated_legendre_table

logger = logging.getLogger(__name__)

# Gauss coefficients (nT), IGRF epoch 2020.0, indexed [n, m]
IGRF_G = np.array([
    [0.0, 0.0, 0.0, 0.0, 0.0],
    [-29404.8, -1450.9, 0.0, 0.0, 0.0],
    [-2499.6, 2982.0, 1677.0, 0.0, 0.0],
    [1363.2, -2381.2, 1236.2, 525.7, 0.0],
    [903.0, 809.5, 86.3, -309.4, 48.0],
])
IGRF_H = np.array([
    [0.0, 0.0, 0.0, 0.0, 0.0],
    [0.0, 4652.5, 0.0, 0.0, 0.0],
    [0.0, -2991.6, -734.6, 0.0, 0.0],
    [0.0, -82.1, 241.9, -543.4, 0.0],
    [0.0, 281.9, -158.4, 199.7, -349.7],
])
IGRF_G.flags.writeable = False
IGRF_H.flags.writeable = False


def magnetic_field(latitude: float, longitude: float, altitude_km: float = 0.0,
                   year: Optional[float] = None, n_max: int = GEOMAG_NMAX) -> MagneticFieldModel:
    """
    Expected geomagnetic field vector at a point.

    Parameters
    ----------
    latitude : float
        Latitude in degrees, [-90, 90] (treated as geocentric)
    longitude : float
        Longitude in degrees, [-180, 180]
    altitude_km : float, optional
        Height above the reference sphere in km (default: 0)
    year : float, optional
        Decimal year. Accepted for interface compatibility and ignored: the
        coefficients are fixed at epoch 2020.0.
    n_max : int, optional
        Truncation degree, 1..4 (default: 4)

    Returns
    -------
    MagneticFieldModel
        Declination and inclination (deg), intensities and X/Y/Z components
        (nT, Z positive down)

    Raises
    ------
    InvalidInputError
        For out-of-range location, a point at or below the earth's centre, or
        an unsupported truncation degree

    Notes
    -----
    Within 1e-10 of cos(latitude) = 0 the colatitude derivative and the east
    component are undefined; both contribute zero, so X = Y = 0 and the
    declination comes out as 0 at the poles.
    """
    lat, lon, alt = validate_observer(latitude, longitude, altitude_km)
    if isinstance(n_max, bool) or not isinstance(n_max, (int, np.integer)) or not 1 <= n_max <= GEOMAG_NMAX:
        raise InvalidInputError(f"n_max must be an integer in [1, {GEOMAG_NMAX}], got {n_max!r}")
    a = GEOMAG_REF_RADIUS_KM
    r = a + alt
    if r <= 0.0:
        raise InvalidInputError(f"altitude_km must be above -{a} km, got {alt}")
    if year is not None and require_finite("year", year) != GEOMAG_EPOCH:
        logger.debug(f"Geomagnetic coefficients are fixed at {GEOMAG_EPOCH}; ignoring year={year}")

    phi = np.radians(lat)
    lam = np.radians(lon)
    sin_phi = np.sin(phi)
    cos_phi = np.cos(phi)
    P, dP = associated_legendre_table(n_max, sin_phi, cos_phi)

    n, m = np.tril_indices(n_max + 1)
    keep = n >= 1
    n, m = n[keep], m[keep]

    g = IGRF_G[n, m]
    h = IGRF_H[n, m]
    ratio = (a / r) ** (n + 2)
    cos_ml = np.cos(m * lam)
    sin_ml = np.sin(m * lam)
    gh = g * cos_ml + h * sin_ml

    if abs(cos_phi) < POLE_EPS:
        # Signed zeros would turn atan2 into a 180 degree declination
        X = Y = 0.0
    else:
        X = float(np.sum(ratio * gh * dP[n, m]))
        Y = float(np.sum(ratio * m * (g * sin_ml - h * cos_ml) * P[n, m]) / cos_phi)
    Z = float(-np.sum(ratio * (n + 1) * gh * P[n, m]))

    H = np.hypot(X, Y)
    F = np.hypot(H, Z)
    return MagneticFieldModel(
        declination=float(np.degrees(np.arctan2(Y, X))),
        inclination=float(np.degrees(np.arctan2(Z, H))),
        horizontal_intensity=float(H),
        total_intensity=float(F),
        north_component=X,
        east_component=Y,
        vertical_component=Z,
    )


def get_magnetic_declination(latitude: float, longitude: float, altitude_km: float = 0.0) -> float:
    """Expected magnetic declination (deg, east positive)"""
    return magnetic_field(latitude, longitude, altitude_km).declination


def correct_magnetic_heading(compass_heading: float, declination: float) -> float:
    """
    True heading from a magnetic compass heading.

    Parameters
    ----------
    compass_heading : float
        Heading relative to magnetic north (deg)
    declination : float
        Magnetic declination (deg, east positive)

    Returns
    -------
    float
        Heading relative to true north, [0, 360)
    """
    return normalize_angle(compass_heading + declination)
