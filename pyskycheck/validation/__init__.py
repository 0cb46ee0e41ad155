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
Validation cycle: consensus scoring, results, history and anomaly checks.

- calculate_consensus: weighted fusion of sun, magnetometer, barometer and
  GPS agreement scores with outlier rejection and status classification
- run_validation: one complete cycle from a sensor snapshot
- ValidationHistory: bounded newest-first result history
- detect_anomalies: z-score test of a score against recent history
"""

from .anomaly import AnomalyResult, detect_anomalies
from .config import (
    DEFAULT_VALIDATION_CONFIG,
    ConsensusMethod,
    ConsensusWeights,
    ValidationConfig,
    get_validation_config,
)
from .consensus import (
    ConsensusInput,
    ConsensusOutput,
    barometer_score,
    calculate_consensus,
    classify_score,
    magnetometer_score,
    round_score,
    sun_score,
)
from .history import ValidationHistory
from .result import CelestialData, Timings, ValidationResult
from .validator import check_tolerances, generate_result_id, run_validation

__all__ = [
    'AnomalyResult', 'detect_anomalies',
    'DEFAULT_VALIDATION_CONFIG', 'ConsensusMethod', 'ConsensusWeights', 'ValidationConfig',
    'get_validation_config',
    'ConsensusInput', 'ConsensusOutput', 'calculate_consensus', 'classify_score', 'round_score',
    'sun_score', 'magnetometer_score', 'barometer_score',
    'ValidationHistory',
    'CelestialData', 'Timings', 'ValidationResult',
    'run_validation', 'check_tolerances', 'generate_result_id',
]
