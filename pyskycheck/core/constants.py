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

"""Physical constants and scoring thresholds"""

import numpy as np

# Unit conversions
R2D = 180.0 / np.pi            # radians to degrees
D2R = np.pi / 180.0            # degrees to radians

# Earth parameters
RE_MEAN_KM = 6371.0            # mean earth radius for great-circle distance (km)
RE_WGS84_KM = 6378.137         # earth equatorial radius (km)
AU_KM = 149597870.7            # astronomical unit (km)

# Geomagnetic reference model
GEOMAG_REF_RADIUS_KM = 6371.2  # geomagnetic reference radius (km)
GEOMAG_EPOCH = 2020.0          # epoch of the fixed spherical-harmonic coefficients
GEOMAG_NMAX = 4                # truncation degree of the expansion
POLE_EPS = 1e-10               # |cos(lat)| below this is treated as a pole

# Julian dates
JD_UNIX_EPOCH = 2440587.5      # julian day of 1970-01-01T00:00:00Z
JD_J2000 = 2451545.0           # julian day of J2000.0
DAYS_PER_CENTURY = 36525.0
SECONDS_PER_DAY = 86400.0

# Solar ephemeris
SUN_HORIZONTAL_PARALLAX = 8.794 / 3600.0  # equatorial horizontal parallax at 1 AU (deg)
SUNRISE_ALTITUDE = -0.8333               # rise/set altitude of upper limb incl. refraction (deg)
EVENT_SCAN_STEP_MIN = 10.0               # coarse scan step for rise/set/transit search (min)

# Atmospheric refraction
STD_PRESSURE_HPA = 1013.25     # standard sea level pressure (hPa)
STD_TEMPERATURE_C = 15.0       # standard temperature (deg C)
REFRACTION_HIGH_LIMIT = 15.0   # above: tangent formula (deg)
REFRACTION_LOW_LIMIT = -0.575  # between this and high limit: near-horizon formula (deg)
REFRACTION_CUTOFF = -1.0       # below: no correction (deg)

# Twilight bands (sun elevation, deg)
CIVIL_TWILIGHT = -6.0
NAUTICAL_TWILIGHT = -12.0
ASTRONOMICAL_TWILIGHT = -18.0

# Barometric altitude
BARO_EXPONENT = 0.1903
BARO_SCALE_M = 44330.0

# ============================================================================
# CONSENSUS SCORING
# ============================================================================
GPS_BASELINE_SCORE = 85.0      # fixed GPS sub-score
OUTLIER_THRESHOLD = 30.0       # sub-scores below this are outliers
SUN_AZIMUTH_PENALTY = 2.0      # score points per degree of azimuth error
SUN_ELEVATION_PENALTY = 3.0    # score points per degree of elevation error
MAG_HEADING_PENALTY = 2.0      # score points per degree of heading error
BARO_ALTITUDE_PENALTY = 1.0    # score points per metre of altitude error
SPOOFING_OUTLIER_COUNT = 2     # this many outliers forces SPOOFING

# Status bands (lower bounds, descending)
NOMINAL_MIN_SCORE = 85.0
DRIFT_MIN_SCORE = 60.0
UNCERTAIN_MIN_SCORE = 40.0

# ============================================================================
# ANOMALY DETECTION / HISTORY
# ============================================================================
ANOMALY_WINDOW = 10            # trailing window size
ANOMALY_ZSCORE = 2.5           # |z| above this is an anomaly
FLAT_STD_EPS = 1e-9            # std below this is a flat window
MAX_HISTORY_SIZE = 1000
