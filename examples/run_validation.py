#!/usr/bin/env python3
"""
Integrity validation example using PySkyCheck

This example demonstrates:
1. Building sensor snapshots from a GPS fix, compass and barometer
2. Running validation cycles against the sun and geomagnetic references
3. Keeping a rolling history and checking new scores for anomalies
4. Exporting the history as a pandas DataFrame

The first cycles are consistent with the reported fix. Later cycles report a
position about 800 km away while the compass and sun sensor still see the
sky of the true location, the signature of a spoofed fix.
"""

from datetime import datetime, timedelta, timezone

import numpy as np

from pyskycheck.celestial import get_magnetic_declination, solar_position
from pyskycheck.core import GeoObserver, epoch_ms
from pyskycheck.logger import setup_logger
from pyskycheck.sensors import BarometerReading, GPSFix, MagnetometerReading, SensorSnapshot, SunObservation
from pyskycheck.validation import ValidationHistory, check_tolerances, run_validation

TRUE_POSITION = GeoObserver(35.6586, 139.7454, 40.0)     # Tokyo
SPOOFED_POSITION = GeoObserver(33.5902, 130.4017, 10.0)  # Fukuoka


def make_snapshot(when, reported, rng):
    """Sensor readings at `when`: GPS reports `reported`, the rest see TRUE_POSITION"""
    ms = epoch_ms(when)
    sun = solar_position(TRUE_POSITION, when, refraction=True)
    declination = get_magnetic_declination(TRUE_POSITION.latitude, TRUE_POSITION.longitude,
                                           TRUE_POSITION.altitude / 1000.0)
    return SensorSnapshot(
        gps=GPSFix(latitude=reported.latitude, longitude=reported.longitude,
                   altitude=reported.altitude + rng.normal(0.0, 3.0), accuracy=4.0,
                   satellites=11, timestamp=ms),
        magnetometer=MagnetometerReading(heading=declination + rng.normal(0.0, 1.5),
                                         accuracy=3.0, timestamp=ms),
        barometer=BarometerReading.from_pressure(1008.5, temperature=18.0, timestamp=ms),
        sun=SunObservation(azimuth=sun.azimuth + rng.normal(0.0, 0.5),
                           elevation=sun.elevation + rng.normal(0.0, 0.5), timestamp=ms),
        timestamp=ms,
    )


def main():
    logger = setup_logger("pyskycheck", level="INFO")
    rng = np.random.default_rng(42)
    history = ValidationHistory(max_size=100)

    start = datetime(2024, 3, 20, 3, 0, tzinfo=timezone.utc)   # midday in Tokyo
    for i in range(15):
        when = start + timedelta(seconds=2 * i)
        reported = TRUE_POSITION if i < 12 else SPOOFED_POSITION
        result = run_validation(make_snapshot(when, reported, rng), now=when)

        anomaly = history.detect_anomaly(result.integrity_score)
        history.add(result)

        flags = check_tolerances(result)
        logger.info(f"cycle {i:2d}: {result.status.value:9s} score={result.integrity_score:5.1f} "
                    f"sun_daz={result.sun_delta.azimuth:+7.2f} mag_delta={result.magnetic_delta:+6.2f} "
                    f"z={anomaly.zscore:+.2f} tolerances={flags}")
        if anomaly.is_anomaly:
            logger.warning(f"cycle {i}: score {result.integrity_score:.1f} is anomalous (z={anomaly.zscore:.2f})")

    df = history.to_dataframe()
    print(df[['time', 'status', 'integrityScore', 'sunDeltaAzimuth', 'magneticDelta', 'altitudeDelta']])
    print(f"Average integrity: {history.average_integrity():.1f}, spoofing cycles: {history.spoofing_count()}")


if __name__ == "__main__":
    main()
