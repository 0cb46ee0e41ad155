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

"""Core module.

Fundamental pieces shared by every other sub-package:

- **Constants**: unit conversions, earth and geomagnetic reference values,
  refraction regime limits, consensus thresholds and status bands
- **Data Structures**: observer, celestial position, sun position and
  magnetic field records, plus the status/phase/sensor enumerations
- **Time**: UTC coercion, Julian dates, epoch milliseconds and local
  solar-day bounds
- **Errors**: InvalidInputError and the input validators that raise it

Example Usage:
    >>> from pyskycheck.core import GeoObserver, ValidationStatus
    >>> obs = GeoObserver(48.85, 2.35, 35.0)
    >>> ValidationStatus("NOMINAL")
    <ValidationStatus.NOMINAL: 'NOMINAL'>
"""

from .constants import *
from .data_structures import *
from .errors import *
from .time import *
