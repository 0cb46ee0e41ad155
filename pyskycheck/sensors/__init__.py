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
Sensor readings consumed by the validation cycle.

Acquisition is the platform's job; this package only holds what it hands
over:

- GPSFix: position fix with accuracy
- MagnetometerReading: compass heading and raw field vector
- BarometerReading: static pressure and altitude estimate
- SunObservation: sun direction from an optical sensor
- SensorSnapshot: one cycle's readings with per-sensor status

Examples:
    >>> from pyskycheck.core import SensorType
    >>> from pyskycheck.sensors import GPSFix, SensorSnapshot
    >>> snap = SensorSnapshot(gps=GPSFix(latitude=35.0, longitude=139.0, altitude=40.0, accuracy=5.0))
    >>> snap.statuses()[SensorType.GPS]
    <SensorStatus.ACTIVE: 'active'>
"""

from .readings import *
from .sensor_base import *
