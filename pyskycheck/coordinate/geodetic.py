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

"""Great-circle computations"""

import numpy as np

from ..core.constants import RE_MEAN_KM


def haversine_distance(lat1: float, lon1: float, lat2: float, lon2: float,
                       radius: float = RE_MEAN_KM) -> float:
    """
    Great-circle distance between two points on a sphere.

    Parameters:
    -----------
    lat1, lon1 : float
        First point (deg, deg)
    lat2, lon2 : float
        Second point (deg, deg)
    radius : float
        Sphere radius (km), mean earth radius by default

    Returns:
    --------
    distance : float
        Distance along the sphere (km)
    """
    phi1 = np.radians(lat1)
    phi2 = np.radians(lat2)
    dphi = np.radians(lat2 - lat1)
    dlam = np.radians(lon2 - lon1)

    a = np.sin(dphi / 2)**2 + np.cos(phi1) * np.cos(phi2) * np.sin(dlam / 2)**2
    a = min(max(float(a), 0.0), 1.0)
    c = 2 * np.arctan2(np.sqrt(a), np.sqrt(1 - a))
    return float(radius * c)
