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

"""UTC time handling and Julian dates"""

import math
from datetime import datetime, timedelta, timezone

import numpy as np

from .constants import JD_UNIX_EPOCH, SECONDS_PER_DAY
from .errors import InvalidInputError

UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def to_utc_datetime(ts) -> datetime:
    """
    Coerce a timestamp to a timezone-aware UTC datetime.

    Parameters:
    -----------
    ts : datetime or float
        A datetime (naive values are taken as UTC) or POSIX seconds

    Returns:
    --------
    datetime
        Aware datetime in UTC

    Raises:
    -------
    InvalidInputError
        For booleans, strings, None or non-finite numbers
    """
    if isinstance(ts, datetime):
        if ts.tzinfo is None:
            return ts.replace(tzinfo=timezone.utc)
        return ts.astimezone(timezone.utc)
    if isinstance(ts, bool) or not isinstance(ts, (int, float, np.integer, np.floating)):
        raise InvalidInputError(f"timestamp must be a datetime or POSIX seconds, got {ts!r}")
    if not math.isfinite(ts):
        raise InvalidInputError(f"timestamp must be finite, got {ts!r}")
    try:
        return UNIX_EPOCH + timedelta(seconds=float(ts))
    except OverflowError:
        raise InvalidInputError(f"timestamp out of range: {ts!r}") from None


def datetime_to_jd(dt: datetime) -> float:
    """Julian day (UTC) of a datetime"""
    dt = to_utc_datetime(dt)
    return (dt - UNIX_EPOCH).total_seconds() / SECONDS_PER_DAY + JD_UNIX_EPOCH


def jd_to_datetime(jd: float) -> datetime:
    """UTC datetime of a Julian day"""
    return UNIX_EPOCH + timedelta(days=float(jd) - JD_UNIX_EPOCH)


def round_to_ms(dt: datetime) -> datetime:
    """Round a UTC datetime to the nearest whole millisecond"""
    return UNIX_EPOCH + timedelta(milliseconds=epoch_ms(dt))


def epoch_ms(dt: datetime) -> int:
    """Milliseconds since the POSIX epoch"""
    dt = to_utc_datetime(dt)
    return int(round((dt - UNIX_EPOCH).total_seconds() * 1000.0))


def from_epoch_ms(ms: float) -> datetime:
    """UTC datetime from milliseconds since the POSIX epoch"""
    return to_utc_datetime(float(ms) / 1000.0)


def to_iso(dt: datetime) -> str:
    """ISO-8601 UTC string with millisecond precision and a 'Z' suffix"""
    return to_utc_datetime(dt).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def from_iso(text: str) -> datetime:
    """Parse the output of to_iso (or any ISO-8601 string) to UTC"""
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return to_utc_datetime(datetime.fromisoformat(text))


def local_solar_day_bounds(dt: datetime, longitude: float) -> tuple[datetime, datetime]:
    """
    Start and end of the local mean-solar calendar day containing dt.

    Local mean time is UTC shifted by longitude/15 hours, so days line up with
    the observer's sun rather than with Greenwich.

    Parameters:
    -----------
    dt : datetime
        Query instant
    longitude : float
        Observer longitude in degrees (east positive)

    Returns:
    --------
    tuple[datetime, datetime]
        (start, end) in UTC, end = start + 24h
    """
    offset = timedelta(hours=longitude / 15.0)
    local = to_utc_datetime(dt) + offset
    midnight = local.replace(hour=0, minute=0, second=0, microsecond=0)
    start = midnight - offset
    return start, start + timedelta(days=1)
