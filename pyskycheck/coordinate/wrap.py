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
Angle conversion and wrapping utilities.

Scalar helpers (normalize_angle, angle_difference) validate their input and
raise on NaN/Infinity. The array kernels (wrapTo360, wrapTo180) are compiled
with numba for the vectorized ephemeris scans and pass NaN through.
"""

import math

import numpy as np
from numba import njit

from ..core.constants import D2R, R2D
from ..core.errors import InvalidInputError


@njit(cache=True)
def wrapTo360(v1):
    """
    Wrap angles to [0, 360) degrees.

    Parameters
    ----------
    v1 : ndarray
        Vector of angles in degrees (float64)

    Returns
    -------
    v2 : ndarray
        Vector of angles in [0, 360)
    """
    v2 = np.mod(v1, 360.0)
    # np.mod of a tiny negative rounds up to exactly 360
    v2[v2 >= 360.0] = 0.0
    return v2


@njit(cache=True)
def wrapTo180(v1):
    """
    Wrap angles to [-180, 180) degrees.

    Parameters
    ----------
    v1 : ndarray
        Vector of angles in degrees (float64)

    Returns
    -------
    v2 : ndarray
        Vector of angles in [-180, 180)
    """
    return wrapTo360(v1 + 180.0) - 180.0


def degrees_to_radians(degrees):
    """Degrees to radians (scalar or array)"""
    return degrees * D2R


def radians_to_degrees(radians):
    """Radians to degrees (scalar or array)"""
    return radians * R2D


def _check_angle(name, value):
    if not math.isfinite(value):
        raise InvalidInputError(f"{name} must be a finite angle, got {value!r}")


def normalize_angle(angle: float) -> float:
    """
    Normalize an angle to [0, 360) degrees.

    Parameters
    ----------
    angle : float
        Angle in degrees, any finite value

    Returns
    -------
    float
        Equivalent angle in [0, 360)

    Raises
    ------
    InvalidInputError
        If angle is NaN or infinite
    """
    _check_angle("angle", angle)
    a = math.fmod(angle, 360.0)
    if a < 0.0:
        a += 360.0
    if a >= 360.0:
        a -= 360.0
    # fmod keeps the sign of a zero result
    return a + 0.0


def angle_difference(a: float, b: float) -> float:
    """
    Signed shortest angular distance from b to a, in degrees.

    The result lies in [-180, 180] and is exactly antisymmetric:
    angle_difference(a, b) == -angle_difference(b, a). A half turn comes out as
    +180 or -180.

    Parameters
    ----------
    a, b : float
        Angles in degrees

    Returns
    -------
    float
        a - b reduced to the nearest equivalent angle

    Examples
    --------
    >>> angle_difference(10.0, 350.0)
    20.0
    >>> angle_difference(350.0, 10.0)
    -20.0
    """
    _check_angle("a", a)
    _check_angle("b", b)
    return math.remainder(a - b, 360.0)
