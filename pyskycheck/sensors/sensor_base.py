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

"""Base sensor reading types"""

import time
from dataclasses import dataclass, field, fields
from typing import ClassVar

import numpy as np

from ..core.data_structures import SensorStatus

__all__ = ["SensorReading", "now_ms"]


def now_ms() -> float:
    """Current wall-clock time in milliseconds since the POSIX epoch"""
    return time.time() * 1000.0


@dataclass(frozen=True)
class SensorReading:
    """Base class for a timestamped sensor reading.

    Subclasses declare their fields in JSON order and list the ones that
    serialize under a different name in ``_JSON_NAMES``.

    Attributes
    ----------
    timestamp : float
        Acquisition time in milliseconds since the POSIX epoch
    """
    timestamp: float = field(default_factory=now_ms, kw_only=True)

    _JSON_NAMES: ClassVar[dict] = {}

    def numeric_values(self) -> np.ndarray:
        """All non-None numeric fields as a float array"""
        values = [getattr(self, f.name) for f in fields(self)]
        return np.array([v for v in values if isinstance(v, (int, float)) and not isinstance(v, bool)],
                        dtype=float)

    def is_valid(self) -> bool:
        """Check if the reading is usable.

        Returns
        -------
        bool
            True if every numeric field is finite, False otherwise
        """
        return bool(np.all(np.isfinite(self.numeric_values())))

    def status(self) -> SensorStatus:
        """ACTIVE for a valid reading, ERROR otherwise"""
        return SensorStatus.ACTIVE if self.is_valid() else SensorStatus.ERROR

    def to_dict(self) -> dict:
        names = self._JSON_NAMES
        return {names.get(f.name, f.name): getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_dict(cls, data: dict):
        names = cls._JSON_NAMES
        kwargs = {}
        for f in fields(cls):
            key = names.get(f.name, f.name)
            if key in data:
                kwargs[f.name] = data[key]
        return cls(**kwargs)
