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

"""Bounded, newest-first history of validation results"""

from collections import deque
from typing import Optional

import numpy as np
import pandas as pd

from ..core.constants import ANOMALY_WINDOW, MAX_HISTORY_SIZE
from ..core.data_structures import ValidationStatus
from ..core.errors import InvalidInputError
from .anomaly import AnomalyResult, detect_anomalies
from .result import ValidationResult

HISTORY_COLUMNS = [
    'id', 'time', 'status', 'integrityScore', 'sunDeltaAzimuth', 'sunDeltaElevation',
    'magneticDelta', 'altitudeDelta', 'gpsAccuracy', 'sensorConsensus', 'confidence',
    'latitude', 'longitude', 'altitude', 'totalMs',
]


class ValidationHistory:
    """
    Rolling record of validation results, newest first.

    Adding a result at capacity evicts the oldest one. The container does no
    locking; callers with several producers serialize writes themselves.

    Parameters
    ----------
    max_size : int, optional
        Capacity (default: 1000)

    Examples
    --------
    >>> history = ValidationHistory(max_size=50)
    >>> history.add(result)
    >>> history.detect_anomaly(result.integrity_score)
    """

    def __init__(self, max_size: int = MAX_HISTORY_SIZE):
        if isinstance(max_size, bool) or not isinstance(max_size, (int, np.integer)) or max_size < 1:
            raise InvalidInputError(f"max_size must be a positive integer, got {max_size!r}")
        self.max_size = int(max_size)
        self._results = deque(maxlen=self.max_size)

    def add(self, result: ValidationResult):
        self._results.appendleft(result)

    def clear(self):
        self._results.clear()

    def latest(self) -> Optional[ValidationResult]:
        return self._results[0] if self._results else None

    def __len__(self):
        return len(self._results)

    def __iter__(self):
        return iter(self._results)

    def __getitem__(self, index):
        return self._results[index]

    def window(self, n: int) -> list:
        """The n newest results"""
        return list(self._results)[:max(0, n)]

    def average_integrity(self) -> float:
        if not self._results:
            return 0.0
        return float(np.mean([r.integrity_score for r in self._results]))

    def spoofing_count(self) -> int:
        return sum(1 for r in self._results if r.status is ValidationStatus.SPOOFING)

    def status_counts(self) -> dict:
        counts = {status: 0 for status in ValidationStatus}
        for r in self._results:
            counts[r.status] += 1
        return counts

    def score_series(self) -> list:
        """{score, timestamp} entries, newest first"""
        return [{'score': r.integrity_score, 'timestamp': r.timestamp} for r in self._results]

    def detect_anomaly(self, current_score: float, window_size: int = ANOMALY_WINDOW) -> AnomalyResult:
        """Z-score test of a score against the newest entries"""
        return detect_anomalies(self.score_series(), current_score, window_size)

    def to_dataframe(self) -> pd.DataFrame:
        """
        One row per result, newest first.

        Returns
        -------
        pd.DataFrame
            Columns of HISTORY_COLUMNS; ``time`` is a UTC timestamp
        """
        rows = []
        for r in self._results:
            gps = r.snapshot.gps
            rows.append([
                r.id, r.timestamp, r.status.value, r.integrity_score,
                r.sun_delta.azimuth, r.sun_delta.elevation, r.magnetic_delta,
                np.nan if r.altitude_delta is None else r.altitude_delta,
                r.gps_accuracy, r.sensor_consensus, r.confidence,
                gps.latitude if gps else np.nan,
                gps.longitude if gps else np.nan,
                gps.altitude if gps else np.nan,
                r.timings.total_ms,
            ])
        df = pd.DataFrame(rows, columns=HISTORY_COLUMNS)
        df['time'] = pd.to_datetime(df['time'].astype(float), unit='ms', utc=True)
        return df
