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
Associated Legendre functions for spherical-harmonic field synthesis.

Values are filled bottom-up in a triangular table from the seeds P(0,0),
P(1,0), P(1,1), the sectorial recurrence for m = n, the n, n-1 step, and the
three-term recurrence in n for m < n - 1. The Ferrers functions carry no
Condon-Shortley phase and are Schmidt semi-normalized at the end, the
convention of geomagnetic Gauss coefficients.
"""

import logging
from math import factorial, sqrt

import numpy as np

from ..core.constants import POLE_EPS

logger = logging.getLogger(__name__)


def schmidt_factors(n_max: int) -> np.ndarray:
    """Schmidt semi-normalization S(n, m) = sqrt((2 - d_m0) (n-m)! / (n+m)!)"""
    S = np.zeros((n_max + 1, n_max + 1))
    for n in range(n_max + 1):
        S[n, 0] = 1.0
        for m in range(1, n + 1):
            S[n, m] = sqrt(2.0 * factorial(n - m) / factorial(n + m))
    return S


def associated_legendre_table(n_max: int, sin_lat: float, cos_lat: float):
    """
    Schmidt semi-normalized P(n, m) and dP/d(colatitude).

    Parameters
    ----------
    n_max : int
        Maximum degree
    sin_lat : float
        sin(latitude) = cos(colatitude), the Legendre argument
    cos_lat : float
        cos(latitude) = sin(colatitude), non-negative

    Returns
    -------
    P : ndarray, shape (n_max+1, n_max+1)
        P[n, m] for m <= n, zero above the diagonal
    dP : ndarray, shape (n_max+1, n_max+1)
        Derivative with respect to colatitude. All zero when
        |cos_lat| < POLE_EPS, where the recurrence divides by zero.
    """
    x = sin_lat
    s = cos_lat
    # One spare column so P[n, m + 1] exists for the derivative
    P = np.zeros((n_max + 1, n_max + 2))
    P[0, 0] = 1.0
    if n_max >= 1:
        P[1, 0] = x
        P[1, 1] = s
    for n in range(2, n_max + 1):
        P[n, n] = (2 * n - 1) * s * P[n - 1, n - 1]
        P[n, n - 1] = (2 * n - 1) * x * P[n - 1, n - 1]
        for m in range(n - 1):
            P[n, m] = ((2 * n - 1) * x * P[n - 1, m] - (n + m - 1) * P[n - 2, m]) / (n - m)

    dP = np.zeros((n_max + 1, n_max + 1))
    if abs(s) < POLE_EPS:
        logger.debug("Legendre derivative at a pole: using zero contribution")
    else:
        m = np.arange(n_max + 1)
        dP = m * (x / s) * P[:, :-1] - P[:, 1:]
        dP = np.tril(dP)

    S = schmidt_factors(n_max)
    return S * P[:, :-1], S * dP
