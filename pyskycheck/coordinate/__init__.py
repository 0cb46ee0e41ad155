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

"""Angle and great-circle utilities

- Angle conversion, normalization to [0, 360) and signed shortest difference
- Numba-compiled array wrapping kernels
- Haversine distance on a spherical earth
"""

from .geodetic import haversine_distance
from .wrap import (
    angle_difference,
    degrees_to_radians,
    normalize_angle,
    radians_to_degrees,
    wrapTo180,
    wrapTo360,
)

__all__ = [
    'angle_difference', 'degrees_to_radians', 'normalize_angle', 'radians_to_degrees',
    'wrapTo180', 'wrapTo360',
    'haversine_distance',
]
