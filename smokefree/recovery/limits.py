"""Model limits — fixed contract values, not tunables.

Validation rejects values outside these ranges; sanitization clamps into them.
"""

from __future__ import annotations

MAX_SMOKING_YEARS = 80.0

MAX_CONSUMPTION_QUANTITY = 2000.0
MIN_CONSUMPTION_INTERVAL_COUNT = 1.0
MAX_CONSUMPTION_INTERVAL_COUNT = 365.0
MAX_CIGS_PER_DAY = 80.0

MIN_AGE = 18
MAX_AGE = 100
FALLBACK_AGE = 30  # used when DOB is missing or in the future

MIN_WEIGHT_KG = 30.0
MAX_WEIGHT_KG = 300.0
DEFAULT_WEIGHT_KG = 70.0

MIN_HEIGHT_CM = 120.0
MAX_HEIGHT_CM = 240.0
DEFAULT_HEIGHT_CM = 170.0

MAX_PREVIEW_DAYS = 3650
FULL_RECOVERY_THRESHOLD = 0.995

DAYS_PER_YEAR = 365.25  # average Gregorian year
CIGS_PER_PACK = 20

# Enumerations accepted on raw inputs. The first entry is the sanitize default.
SMOKING_LENGTH_MODES: tuple[str, ...] = ("exact_dates", "approx_years")
CONSUMPTION_UNITS: tuple[str, ...] = ("cigarettes", "packs")
INTERVAL_UNITS: tuple[str, ...] = ("days", "weeks")
WEIGHT_UNITS: tuple[str, ...] = ("kg", "lb")
HEIGHT_UNITS: tuple[str, ...] = ("cm", "in")
BIOLOGICAL_SEXES: tuple[str, ...] = ("other", "female", "male")
