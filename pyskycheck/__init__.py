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
PySkyCheck - Celestial and geomagnetic integrity checks for position fixes

Checks that a reported GPS fix and compass heading agree with the sun's
predicted position and the expected geomagnetic declination, and fuses the
agreement into an integrity score with a drift/spoofing classification.
"""

__version__ = "1.0.0"
__author__ = "PySkyCheck Development Team"
__title__ = "pyskycheck"
__description__ = "Celestial and geomagnetic integrity checks for position fixes"

from .core import *
from .coordinate import *
from .celestial import *
from .sensors import *
from .validation import *
