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
Weighted consensus of independent references.

Each available source is scored 0-100 by how well the observation agrees
with its reference:

- sun: azimuth and elevation error (2 and 3 points per degree), averaged
- magnetometer: heading error against the expected declination, 2 points per degree
- barometer: GPS/barometric altitude disagreement, 1 point per meter
- gps: fixed baseline of 85 (the fix is what is being validated)

Sources scoring below 30 are outliers and drop out of the weighted average.
Two or more outliers classify the cycle as SPOOFING whatever the average.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Optional

from ..coordinate.wrap import angle_difference
from ..core.constants import (
    BARO_ALTITUDE_PENALTY,
    DRIFT_MIN_SCORE,
    GPS_BASELINE_SCORE,
    MAG_HEADING_PENALTY,
    NOMINAL_MIN_SCORE,
    OUTLIER_THRESHOLD,
    SPOOFING_OUTLIER_COUNT,
    SUN_AZIMUTH_PENALTY,
    SUN_ELEVATION_PENALTY,
    UNCERTAIN_MIN_SCORE,
)
from ..core.data_structures import CelestialPosition, GeoObserver, SensorType, ValidationStatus
from ..core.errors import require_finite
from ..logger import TRACE
from .config import ConsensusMethod, ConsensusWeights

logger = logging.getLogger(__name__)

# Lower score bound of each status, highest first; anything lower is SPOOFING
STATUS_BANDS = (
    (NOMINAL_MIN_SCORE, ValidationStatus.NOMINAL),
    (DRIFT_MIN_SCORE, ValidationStatus.DRIFT),
    (UNCERTAIN_MIN_SCORE, ValidationStatus.UNCERTAIN),
)


@dataclass(frozen=True)
class ConsensusInput:
    """Observed and expected values for one consensus evaluation.

    Attributes
    ----------
    gps_position : GeoObserver
        Reported fix
    sun_expected : CelestialPosition, optional
        Sun position predicted for the fix
    magnetic_observed : float
        Compass heading (deg)
    magnetic_expected : float
        Expected declination (deg)
    sun_observed : CelestialPosition, optional
        Measured sun position; the sun source is skipped without it
    barometer_alt : float, optional
        Barometric altitude (m); the barometer source is skipped without it
    weights : ConsensusWeights
        Source weights
    """
    gps_position: GeoObserver
    sun_expected: Optional[CelestialPosition]
    magnetic_observed: float
    magnetic_expected: float
    sun_observed: Optional[CelestialPosition] = None
    barometer_alt: Optional[float] = None
    weights: ConsensusWeights = field(default_factory=ConsensusWeights)


@dataclass(frozen=True)
class ConsensusOutput:
    """Fused score, classification and per-source breakdown.

    Attributes
    ----------
    score : float
        Weighted score in [0, 100], rounded to one decimal
    status : ValidationStatus
        Classification
    contributions : dict[str, float]
        Sub-score of every evaluated source
    outliers : tuple[str, ...]
        Sources whose sub-score fell below the outlier threshold, in
        evaluation order. They are excluded from the weighted average unless
        outlier detection is off, in which case they are only reported
    """
    score: float
    status: ValidationStatus
    contributions: dict
    outliers: tuple = ()

    def to_dict(self) -> dict:
        return {
            "score": self.score,
            "status": self.status.value,
            "contributions": dict(self.contributions),
            "outliers": list(self.outliers),
        }


def sun_score(observed: CelestialPosition, expected: CelestialPosition) -> float:
    """Mean of the azimuth and elevation agreement scores"""
    az_diff = abs(angle_difference(observed.azimuth, expected.azimuth))
    el_diff = abs(observed.elevation - expected.elevation)
    az_score = max(0.0, 100.0 - az_diff * SUN_AZIMUTH_PENALTY)
    el_score = max(0.0, 100.0 - el_diff * SUN_ELEVATION_PENALTY)
    return (az_score + el_score) / 2.0


def magnetometer_score(observed_heading: float, expected_declination: float) -> float:
    diff = abs(angle_difference(observed_heading, expected_declination))
    return max(0.0, 100.0 - diff * MAG_HEADING_PENALTY)


def barometer_score(gps_altitude: float, barometer_altitude: float) -> float:
    diff = abs(require_finite("gps altitude", gps_altitude) - require_finite("barometer_alt", barometer_altitude))
    return max(0.0, 100.0 - diff * BARO_ALTITUDE_PENALTY)


def classify_score(score: float) -> ValidationStatus:
    """Status band of a score"""
    for lower, status in STATUS_BANDS:
        if score >= lower:
            return status
    return ValidationStatus.SPOOFING


def round_score(score: float) -> float:
    """Round half up to one decimal"""
    return math.floor(score * 10.0 + 0.5) / 10.0


def calculate_consensus(consensus_input: ConsensusInput,
                        outlier_detection: bool = True,
                        method: ConsensusMethod = ConsensusMethod.WEIGHTED) -> ConsensusOutput:
    """
    Fuse the per-source agreement scores into one classified score.

    Parameters
    ----------
    consensus_input : ConsensusInput
        Observations, references and weights
    outlier_detection : bool, optional
        When False, outliers are still reported and still force SPOOFING
        when two or more disagree, but stay in the weighted average
        (default: True)
    method : ConsensusMethod, optional
        Fusion strategy; only WEIGHTED is available

    Returns
    -------
    ConsensusOutput
        Score (0 when no source carries weight), status, contributions and
        outliers

    Raises
    ------
    NotImplementedError
        For the reserved MAJORITY and BAYESIAN strategies
    """
    method = ConsensusMethod(method)
    if method is not ConsensusMethod.WEIGHTED:
        raise NotImplementedError(f"Consensus method '{method.value}' is not implemented")

    inp = consensus_input
    weights = inp.weights
    scores = {}

    if inp.sun_observed is not None and inp.sun_expected is not None:
        scores[SensorType.SUN] = sun_score(inp.sun_observed, inp.sun_expected)
    scores[SensorType.MAGNETOMETER] = magnetometer_score(inp.magnetic_observed, inp.magnetic_expected)
    if inp.barometer_alt is not None:
        scores[SensorType.BAROMETER] = barometer_score(inp.gps_position.altitude, inp.barometer_alt)
    scores[SensorType.GPS] = GPS_BASELINE_SCORE

    outliers = [source for source, score in scores.items()
                if source is not SensorType.GPS and score < OUTLIER_THRESHOLD]

    weighted_score = 0.0
    total_weight = 0.0
    for source, score in scores.items():
        if outlier_detection and source in outliers:
            continue
        w = weights.weight_for(source)
        weighted_score += score * w
        total_weight += w
        logger.log(TRACE, f"consensus {source.value}: score={score:.1f} weight={w:.3f}")

    if total_weight > 0:
        final_score = weighted_score / total_weight
    else:
        logger.debug("No weighted source in consensus; score is 0")
        final_score = 0.0

    status = classify_score(final_score)
    if outliers:
        names = ", ".join(o.value for o in outliers)
        if outlier_detection:
            logger.info(f"Consensus outliers excluded: {names}")
        else:
            logger.info(f"Consensus outliers kept (outlier detection off): {names}")
    if len(outliers) >= SPOOFING_OUTLIER_COUNT:
        status = ValidationStatus.SPOOFING

    if status is ValidationStatus.SPOOFING:
        logger.warning(f"Spoofing suspected: score={final_score:.1f}, outliers={len(outliers)}")

    return ConsensusOutput(
        score=round_score(final_score),
        status=status,
        contributions={source.value: score for source, score in scores.items()},
        outliers=tuple(o.value for o in outliers),
    )
