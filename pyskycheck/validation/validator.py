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
One validation cycle: references, consensus and the result record.

The cycle is pure apart from reading the clock. Either it returns a complete
ValidationResult or it raises before anything is built.
"""

import logging
import time
from typing import Callable, Optional

import numpy as np

from ..celestial.magnetic import magnetic_field
from ..celestial.solar import SunDelta, solar_position, sun_delta
from ..coordinate.wrap import angle_difference
from ..core.constants import STD_TEMPERATURE_C
from ..core.errors import InvalidInputError
from ..core.time import epoch_ms, from_epoch_ms, to_utc_datetime
from ..sensors.readings import SensorSnapshot
from .config import DEFAULT_VALIDATION_CONFIG, ValidationConfig
from .consensus import ConsensusInput, ConsensusOutput, calculate_consensus
from .result import CelestialData, Timings, ValidationResult

logger = logging.getLogger(__name__)

_rng = np.random.default_rng()

ID_SUFFIX_LENGTH = 9


def generate_result_id(now_ms: Optional[float] = None) -> str:
    """'<epoch-ms>-<9 random base-36 characters>'"""
    if now_ms is None:
        now_ms = time.time() * 1000.0
    suffix = np.base_repr(int(_rng.integers(36 ** ID_SUFFIX_LENGTH)), 36).lower()
    return f"{int(now_ms)}-{suffix.zfill(ID_SUFFIX_LENGTH)}"


def _require_reading(snapshot: SensorSnapshot, name: str, mandatory: bool):
    reading = getattr(snapshot, name)
    if reading is None:
        if mandatory:
            raise InvalidInputError(f"snapshot has no {name} reading")
        return None
    if not reading.is_valid():
        raise InvalidInputError(f"{name} reading has non-finite values: {reading}")
    return reading


def _confidence(consensus: ConsensusOutput, config: ValidationConfig) -> float:
    weights = config.weights
    available = sum(weights.weight_for(s) for s in consensus.contributions)
    if available <= 0.0:
        return 1.0
    rejected = sum(weights.weight_for(s) for s in consensus.outliers)
    return 1.0 - rejected / available


def run_validation(snapshot: SensorSnapshot,
                   config: ValidationConfig = DEFAULT_VALIDATION_CONFIG,
                   now=None,
                   id_factory: Optional[Callable[[float], str]] = None) -> ValidationResult:
    """
    Validate a sensor snapshot against the sun and geomagnetic references.

    Parameters
    ----------
    snapshot : SensorSnapshot
        Readings of this cycle; GPS and magnetometer are mandatory
    config : ValidationConfig, optional
        Cycle options (default: DEFAULT_VALIDATION_CONFIG)
    now : datetime or float, optional
        Validation instant (datetime or POSIX seconds); defaults to the
        snapshot timestamp
    id_factory : callable, optional
        Builds the result id from the epoch-ms timestamp
        (default: generate_result_id)

    Returns
    -------
    ValidationResult
        Classified result with deltas, references and timings

    Raises
    ------
    InvalidInputError
        For a missing GPS fix or magnetometer reading, a reading with
        non-finite values, or an invalid position or instant
    NotImplementedError
        For a reserved consensus method
    """
    if config is None:
        config = DEFAULT_VALIDATION_CONFIG
    start = time.perf_counter()

    gps = _require_reading(snapshot, "gps", mandatory=True)
    magnetometer = _require_reading(snapshot, "magnetometer", mandatory=True)
    barometer = _require_reading(snapshot, "barometer", mandatory=False)
    sun_obs = _require_reading(snapshot, "sun", mandatory=False)

    when = from_epoch_ms(snapshot.timestamp) if now is None else to_utc_datetime(now)
    observer = gps.observer()
    if config.kalman_filter:
        logger.debug("kalman_filter is reserved; readings are used unfiltered")

    if barometer is not None:
        temperature = STD_TEMPERATURE_C if barometer.temperature is None else barometer.temperature
        sun = solar_position(observer, when, refraction=config.apply_refraction_correction,
                             pressure=barometer.pressure, temperature=temperature)
    else:
        sun = solar_position(observer, when, refraction=config.apply_refraction_correction)
    field = magnetic_field(observer.latitude, observer.longitude, observer.altitude / 1000.0)
    prediction_ms = (time.perf_counter() - start) * 1000.0

    baro_alt = None
    if barometer is not None and config.use_barometric_cross_check:
        baro_alt = barometer.altitude_estimate
    sun_observed = sun_obs.position() if sun_obs is not None else None

    consensus = calculate_consensus(
        ConsensusInput(
            gps_position=observer,
            sun_expected=sun.as_position(),
            magnetic_observed=magnetometer.heading,
            magnetic_expected=field.declination,
            sun_observed=sun_observed,
            barometer_alt=baro_alt,
            weights=config.weights,
        ),
        outlier_detection=config.outlier_detection,
        method=config.consensus_method,
    )

    delta = sun_delta(sun_observed, sun) if sun_observed is not None else SunDelta(0.0, 0.0)
    altitude_delta = None
    if barometer is not None:
        altitude_delta = observer.altitude - barometer.altitude_estimate

    timestamp = epoch_ms(when)
    result_id = (id_factory or generate_result_id)(timestamp)
    total_ms = (time.perf_counter() - start) * 1000.0

    result = ValidationResult.from_consensus(
        consensus,
        id=result_id,
        timestamp=timestamp,
        sun_delta=delta,
        magnetic_delta=angle_difference(magnetometer.heading, field.declination),
        altitude_delta=altitude_delta,
        snapshot=snapshot,
        celestial_data=CelestialData(sun=sun, magnetic_field=field),
        confidence=_confidence(consensus, config),
        timings=Timings(prediction_ms=prediction_ms, crypto_ms=0.0, total_ms=total_ms),
    )
    logger.info(f"Validation {result.id}: {result.status.value} score={result.integrity_score:.1f}")
    return result


def check_tolerances(result: ValidationResult,
                     config: ValidationConfig = DEFAULT_VALIDATION_CONFIG) -> dict:
    """
    Compare a result's deltas with the configured tolerances.

    Informational only; the status classification is not affected.

    Returns
    -------
    dict
        ``azimuth``, ``elevation``, ``altitude`` and ``integrity`` flags,
        True when within tolerance. ``altitude`` is True without a barometer.
    """
    return {
        "azimuth": abs(result.sun_delta.azimuth) <= config.azimuth_tolerance,
        "elevation": abs(result.sun_delta.elevation) <= config.elevation_tolerance,
        "altitude": result.altitude_delta is None or abs(result.altitude_delta) <= config.altitude_delta_max,
        "integrity": result.integrity_score >= config.integrity_threshold,
    }
