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
Solar ephemeris.

Low-precision analytic solar theory (Meeus, "Astronomical Algorithms",
ch. 25, as used by the NOAA solar calculator), good to about 0.01 degree in
direction between 1950 and 2050. The apparent equatorial position is rotated
to the observer's horizon with the apparent sidereal time and corrected for
topocentric parallax.

Rise, set and transit are searched on the observer's local mean-solar
calendar day: a coarse scan at EVENT_SCAN_STEP_MIN minute steps brackets the
crossing and scipy's brentq refines it. When the day has no such crossing
(polar day or night) the query instant is reported instead.

UTC is used in place of UT1 and TT; the resulting error (about a minute of
time in the theory's argument) is far below the theory's accuracy.
"""

import logging
from datetime import datetime
from typing import NamedTuple

import numpy as np
from scipy.optimize import brentq

from ..coordinate.wrap import angle_difference, wrapTo180, wrapTo360
from ..core.constants import (
    ASTRONOMICAL_TWILIGHT,
    AU_KM,
    CIVIL_TWILIGHT,
    DAYS_PER_CENTURY,
    EVENT_SCAN_STEP_MIN,
    JD_J2000,
    NAUTICAL_TWILIGHT,
    RE_WGS84_KM,
    STD_PRESSURE_HPA,
    STD_TEMPERATURE_C,
    SUNRISE_ALTITUDE,
)
from ..core.data_structures import CelestialPosition, GeoObserver, SunPhase, SunPosition
from ..core.errors import require_finite
from ..core.time import datetime_to_jd, jd_to_datetime, local_solar_day_bounds, round_to_ms, to_utc_datetime
from .refraction import apply_atmospheric_refraction

logger = logging.getLogger(__name__)


class SunDelta(NamedTuple):
    """Observed minus expected sun position (degrees)"""
    azimuth: float
    elevation: float

    def to_dict(self) -> dict:
        return {"azimuth": self.azimuth, "elevation": self.elevation}


def sun_equatorial(jd):
    """
    Apparent geocentric equatorial coordinates of the sun.

    Parameters
    ----------
    jd : ndarray
        Julian days (UTC)

    Returns
    -------
    ra : ndarray
        Apparent right ascension (deg)
    dec : ndarray
        Apparent declination (deg)
    dist : ndarray
        Earth-sun distance (AU)
    eqeq : ndarray
        Equation of the equinoxes (deg)
    """
    T = (jd - JD_J2000) / DAYS_PER_CENTURY

    L0 = 280.46646 + T * (36000.76983 + T * 0.0003032)
    M = np.radians(357.52911 + T * (35999.05029 - 0.0001537 * T))
    e = 0.016708634 - T * (0.000042037 + 0.0000001267 * T)

    # Equation of center
    C = (np.sin(M) * (1.914602 - T * (0.004817 + 0.000014 * T))
         + np.sin(2 * M) * (0.019993 - 0.000101 * T)
         + np.sin(3 * M) * 0.000289)
    true_long = L0 + C
    nu = M + np.radians(C)
    dist = 1.000001018 * (1 - e**2) / (1 + e * np.cos(nu))

    # Nutation and aberration
    omega = np.radians(125.04 - 1934.136 * T)
    lam = np.radians(true_long - 0.00569 - 0.00478 * np.sin(omega))
    eps0 = 23.0 + (26.0 + (21.448 - T * (46.815 + T * (0.00059 - T * 0.001813))) / 60.0) / 60.0
    eps = np.radians(eps0 + 0.00256 * np.cos(omega))

    ra = np.degrees(np.arctan2(np.cos(eps) * np.sin(lam), np.cos(lam)))
    dec = np.degrees(np.arcsin(np.sin(eps) * np.sin(lam)))
    eqeq = -0.00478 * np.sin(omega) * np.cos(eps)
    return ra, dec, dist, eqeq


def greenwich_mean_sidereal_time(jd):
    """GMST in degrees, [0, 360)"""
    T = (jd - JD_J2000) / DAYS_PER_CENTURY
    gmst = (280.46061837 + 360.98564736629 * (jd - JD_J2000)
            + T**2 * (0.000387933 - T / 38710000.0))
    return wrapTo360(np.asarray(gmst, dtype=np.float64))


def sun_horizontal(jd, latitude: float, longitude: float, altitude: float = 0.0):
    """
    Topocentric horizontal coordinates of the sun (vectorized over time).

    Parameters
    ----------
    jd : array_like
        Julian days (UTC)
    latitude, longitude : float
        Observer position (deg)
    altitude : float
        Observer height (m)

    Returns
    -------
    azimuth : ndarray
        Degrees clockwise from true north, [0, 360)
    elevation : ndarray
        Geometric (unrefracted) elevation in degrees
    hour_angle : ndarray
        Local hour angle in degrees, [-180, 180)
    dist : ndarray
        Earth-sun distance (AU)
    """
    jd = np.atleast_1d(np.asarray(jd, dtype=np.float64))
    ra, dec, dist, eqeq = sun_equatorial(jd)
    last = greenwich_mean_sidereal_time(jd) + eqeq + longitude
    H = wrapTo180(np.asarray(last - ra, dtype=np.float64))

    phi = np.radians(latitude)
    d = np.radians(dec)
    h = np.radians(H)

    sin_el = np.sin(phi) * np.sin(d) + np.cos(phi) * np.cos(d) * np.cos(h)
    el = np.arcsin(np.clip(sin_el, -1.0, 1.0))
    az = np.degrees(np.arctan2(-np.cos(d) * np.sin(h),
                               np.sin(d) * np.cos(phi) - np.cos(d) * np.cos(h) * np.sin(phi)))

    # Topocentric parallax in elevation
    rho = (RE_WGS84_KM + altitude / 1000.0) / (dist * AU_KM)
    el = el - np.arcsin(rho * np.cos(el))

    return wrapTo360(np.asarray(az, dtype=np.float64)), np.degrees(el), H, dist


def _refine(func, jd_a: float, jd_b: float) -> datetime:
    # Event times are kept to whole milliseconds, the precision they serialize at
    return round_to_ms(jd_to_datetime(brentq(func, jd_a, jd_b, xtol=1e-7)))


def _day_events(observer: GeoObserver, when: datetime):
    """Sunrise, sunset and solar noon on the local solar day containing `when`"""
    lat, lon, alt = observer.latitude, observer.longitude, observer.altitude
    start, _ = local_solar_day_bounds(when, lon)
    jd0 = datetime_to_jd(start)
    grid = jd0 + np.arange(0.0, 1440.0 + EVENT_SCAN_STEP_MIN, EVENT_SCAN_STEP_MIN) / 1440.0

    _, el, H, _ = sun_horizontal(grid, lat, lon, alt)
    f = el - SUNRISE_ALTITUDE

    def altitude_above_horizon(jd):
        return sun_horizontal(jd, lat, lon, alt)[1][0] - SUNRISE_ALTITUDE

    def hour_angle(jd):
        return sun_horizontal(jd, lat, lon, alt)[2][0]

    rises = np.nonzero((f[:-1] < 0) & (f[1:] >= 0))[0]
    sets = np.nonzero((f[:-1] >= 0) & (f[1:] < 0))[0]
    # Skip the -180/+180 wrap of the hour angle
    transits = np.nonzero((H[:-1] < 0) & (H[1:] >= 0) & (H[1:] - H[:-1] < 180.0))[0]

    sunrise = sunset = solar_noon = None
    if rises.size:
        i = rises[0]
        sunrise = _refine(altitude_above_horizon, grid[i], grid[i + 1])
    if sets.size:
        i = sets[0]
        sunset = _refine(altitude_above_horizon, grid[i], grid[i + 1])
    if transits.size:
        i = transits[0]
        solar_noon = _refine(hour_angle, grid[i], grid[i + 1])

    if sunrise is None or sunset is None:
        logger.debug(f"No sun rise/set at lat={lat:.3f} lon={lon:.3f} on day starting {start.isoformat()}; "
                     f"using query instant")
    if solar_noon is None:
        logger.debug(f"No solar transit found at lat={lat:.3f} lon={lon:.3f}; using query instant")

    return sunrise or when, sunset or when, solar_noon or when


def solar_position(observer: GeoObserver, timestamp,
                   refraction: bool = False,
                   pressure: float = STD_PRESSURE_HPA,
                   temperature: float = STD_TEMPERATURE_C) -> SunPosition:
    """
    Sun position for an observer and instant, with the day's events.

    Parameters
    ----------
    observer : GeoObserver
        Observer location
    timestamp : datetime or float
        Query instant (naive datetimes are UTC, numbers are POSIX seconds)
    refraction : bool, optional
        Apply atmospheric refraction to the elevation (default: False, true
        geometric elevation)
    pressure : float, optional
        Pressure for the refraction correction (hPa)
    temperature : float, optional
        Temperature for the refraction correction (deg C)

    Returns
    -------
    SunPosition
        Azimuth, elevation, distance (AU), daytime flag, and the sunrise,
        sunset and solar noon of the local solar day (UTC). Missing events
        are replaced by the query instant.

    Raises
    ------
    InvalidInputError
        For a malformed timestamp
    """
    when = to_utc_datetime(timestamp)
    az, el, _, dist = sun_horizontal(datetime_to_jd(when), observer.latitude,
                                     observer.longitude, observer.altitude)
    azimuth = float(az[0])
    elevation = float(el[0])
    if refraction:
        elevation = apply_atmospheric_refraction(elevation, pressure, temperature)

    sunrise, sunset, solar_noon = _day_events(observer, when)

    return SunPosition(
        azimuth=azimuth,
        elevation=elevation,
        distance=float(dist[0]),
        is_daytime=elevation > 0,
        sunrise=sunrise,
        sunset=sunset,
        solar_noon=solar_noon,
    )


def expected_sun_position(observer: GeoObserver, timestamp, refraction: bool = False) -> CelestialPosition:
    """Sun azimuth/elevation/distance without the event search"""
    when = to_utc_datetime(timestamp)
    az, el, _, dist = sun_horizontal(datetime_to_jd(when), observer.latitude,
                                     observer.longitude, observer.altitude)
    elevation = float(el[0])
    if refraction:
        elevation = apply_atmospheric_refraction(elevation)
    return CelestialPosition(float(az[0]), elevation, float(dist[0]))


def sun_delta(observed: CelestialPosition, expected: CelestialPosition) -> SunDelta:
    """
    Observed minus expected sun position.

    The azimuth difference is the signed shortest angle, so 359 vs 1 degree
    is a 2 degree error, not 358. Elevation is a plain difference.
    """
    return SunDelta(
        azimuth=angle_difference(observed.azimuth, expected.azimuth),
        elevation=observed.elevation - expected.elevation,
    )


def sun_phase(elevation: float) -> SunPhase:
    """
    Illumination phase for a sun elevation (degrees).

    Bands: day above 0, civil twilight down to -6, nautical to -12,
    astronomical to -18, night below. Each band excludes its upper bound.
    """
    elevation = require_finite("elevation", elevation)
    if elevation > 0.0:
        return SunPhase.DAY
    if elevation > CIVIL_TWILIGHT:
        return SunPhase.CIVIL_TWILIGHT
    if elevation > NAUTICAL_TWILIGHT:
        return SunPhase.NAUTICAL_TWILIGHT
    if elevation > ASTRONOMICAL_TWILIGHT:
        return SunPhase.ASTRONOMICAL_TWILIGHT
    return SunPhase.NIGHT
