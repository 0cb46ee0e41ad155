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

"""Z-score anomaly test of an integrity score against recent history"""

import logging
from collections.abc import Mapping
from typing import NamedTuple

import numpy as np

from ..core.constants import ANOMALY_WINDOW, ANOMALY_ZSCORE, FLAT_STD_EPS
from ..core.errors import InvalidInputError, require_finite

logger = logging.getLogger(__name__)


class AnomalyResult(NamedTuple):
    is_anomaly: bool
    zscore: float

    def to_dict(self) -> dict:
        return {"isAnomaly": self.is_anomaly, "zscore": self.zscore}


def _entry_score(entry) -> float:
    if isinstance(entry, Mapping):
        value = entry["score"]
    elif hasattr(entry, "integrity_score"):
        value = entry.integrity_score
    elif hasattr(entry, "score"):
        value = entry.score
    else:
        value = entry
    return require_finite("history score", value)


def detect_anomalies(history, current_score: float, window_size: int = ANOMALY_WINDOW) -> AnomalyResult:
    """
    Flag a score that is far from the trailing window of history.

    Parameters
    ----------
    history : sequence
        Past entries, newest first: mappings with a ``score`` key, objects
        with ``integrity_score`` or ``score``, or plain numbers
    current_score : float
        Score under test
    window_size : int, optional
        Number of newest entries forming the baseline (default: 10)

    Returns
    -------
    AnomalyResult
        ``(False, 0.0)`` while fewer than ``window_size`` entries exist or
        when the window is flat; otherwise the z-score and whether
        ``|z| > 2.5``

    Raises
    ------
    InvalidInputError
        For a window size below 1 or a non-finite score
    """
    if isinstance(window_size, bool) or not isinstance(window_size, (int, np.integer)) or window_size < 1:
        raise InvalidInputError(f"window_size must be a positive integer, got {window_size!r}")
    current = require_finite("current_score", current_score)

    entries = list(history)
    if len(entries) < window_size:
        return AnomalyResult(False, 0.0)

    scores = np.array([_entry_score(e) for e in entries[:window_size]], dtype=float)
    mean = scores.mean()
    std = scores.std()
    if std < FLAT_STD_EPS:
        logger.debug(f"Flat anomaly window (mean={mean:.2f}); no z-score")
        return AnomalyResult(False, 0.0)

    z = float((current - mean) / std)
    is_anomaly = abs(z) > ANOMALY_ZSCORE
    if is_anomaly:
        logger.info(f"Integrity score {current:.1f} is anomalous: z={z:.2f} over {window_size} entries")
    return AnomalyResult(is_anomaly, z)
