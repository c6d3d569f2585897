"""Pure derived-metric functions — math only, never raises."""

from __future__ import annotations

import math


def clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


def clamp01(value: float) -> float:
    return clamp(value, 0.0, 1.0)


# ---------------------------------------------------------------------------
# Body metrics
# ---------------------------------------------------------------------------

BMR_SEX_OFFSET: dict[str, float] = {"male": 5.0, "female": -161.0, "other": -78.0}
HEART_RATE_SEX_OFFSET: dict[str, float] = {"male": -1.0, "female": 1.0, "other": 0.0}

METABOLISM_BASELINE_BMR = 1600.0
METABOLISM_REFERENCE_WEIGHT_KG = 70.0
METABOLISM_MIN = 0.80
METABOLISM_MAX = 1.25


def bmi(weight_kg: float, height_cm: float) -> float:
    """Body mass index. Zero height yields 0 instead of dividing by zero."""
    height_m = height_cm / 100.0
    if height_m <= 0:
        return 0.0
    return weight_kg / (height_m**2)


def bmr_mifflin_st_jeor(weight_kg: float, height_cm: float, age_years: float, sex: str) -> float:
    """Mifflin-St Jeor BMR in kcal/day; "other" uses the blended −78 offset."""
    base = 10.0 * weight_kg + 6.25 * height_cm - 5.0 * age_years
    return base + BMR_SEX_OFFSET.get(sex, BMR_SEX_OFFSET["other"])


def metabolism_factor(bmr_kcal: float, weight_kg: float) -> float:
    """Blend of BMR ratio (0.62) and weight scaling (0.38), clamped to [0.80, 1.25]."""
    bmr_ratio = bmr_kcal / METABOLISM_BASELINE_BMR
    weight_ratio = math.sqrt(max(weight_kg, 0.0) / METABOLISM_REFERENCE_WEIGHT_KG)
    return clamp(0.62 * bmr_ratio + 0.38 * weight_ratio, METABOLISM_MIN, METABOLISM_MAX)


def metabolism_category(factor: float) -> str:
    if factor < 0.95:
        return "slower"
    if factor > 1.07:
        return "faster"
    return "average"


def baseline_resting_heart_rate(age_years: float, sex: str, bmi_value: float, metabolism: float) -> float:
    """Resting heart rate before any smoking effects, clamped to [52, 95] bpm."""
    bpm = (
        70.0
        + HEART_RATE_SEX_OFFSET.get(sex, 0.0)
        + 0.22 * (age_years - 35.0)
        + 0.75 * (bmi_value - 22.0)
        + 10.0 * (1.0 - metabolism)
    )
    return clamp(bpm, 52.0, 95.0)


# ---------------------------------------------------------------------------
# Exposure
# ---------------------------------------------------------------------------

def pack_years(cigs_per_day: float, smoking_years: float) -> float:
    return (cigs_per_day / 20) * smoking_years


def normalized_tar(tar_mg: float) -> float:
    return clamp01((tar_mg - 6.0) / 14.0)


def normalized_nicotine(nicotine_mg: float) -> float:
    return clamp01((nicotine_mg - 0.4) / 1.3)


def chemistry_multiplier(tar_mg: float, nicotine_mg: float) -> float:
    """Brand chemistry scaling for pack-years, between 0.86 and 1.20."""
    blend = 0.68 * normalized_tar(tar_mg) + 0.32 * normalized_nicotine(nicotine_mg)
    return 0.86 + 0.34 * blend


def effective_pack_years(base_pack_years: float, tar_mg: float, nicotine_mg: float) -> float:
    return base_pack_years * chemistry_multiplier(tar_mg, nicotine_mg)
