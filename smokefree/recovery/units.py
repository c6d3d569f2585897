"""Pure unit conversions — weight, height, consumption quantity and interval.

Every converter is the identity when both units match. Conversions do not
round; callers that display converted values go through `convert_numberish`.
"""

from __future__ import annotations

import math
import sys
from typing import Callable

from smokefree.recovery.limits import CIGS_PER_PACK

LB_PER_KG = 2.2046226218
CM_PER_IN = 2.54
DAYS_PER_WEEK = 7


def round_to(value: float, decimals: int) -> float:
    """Round half up to `decimals` places."""
    factor = 10**decimals
    return math.floor((value + sys.float_info.epsilon) * factor + 0.5) / factor


def convert_numberish(
    value: float | None,
    converter: Callable[[float], float],
    decimals: int,
) -> float | None:
    """Convert an optional form value. Empty stays empty, never NaN or 0."""
    if value is None or not math.isfinite(value):
        return None
    return round_to(converter(value), decimals)


def convert_weight(value: float, from_unit: str, to_unit: str) -> float:
    if from_unit == to_unit:
        return value
    return value * LB_PER_KG if from_unit == "kg" else value / LB_PER_KG


def convert_height(value: float, from_unit: str, to_unit: str) -> float:
    if from_unit == to_unit:
        return value
    return value / CM_PER_IN if from_unit == "cm" else value * CM_PER_IN


def convert_consumption_quantity_for_unit(quantity: float, from_unit: str, to_unit: str) -> float:
    """Cigarettes <-> packs of 20."""
    if from_unit == to_unit:
        return quantity
    return quantity / CIGS_PER_PACK if from_unit == "cigarettes" else quantity * CIGS_PER_PACK


def convert_consumption_quantity_for_interval(quantity: float, from_unit: str, to_unit: str) -> float:
    """Rescale a quantity so the implied daily rate stays the same.

    10 per day becomes 70 per week, and back.
    """
    if from_unit == to_unit:
        return quantity
    return quantity * DAYS_PER_WEEK if from_unit == "days" else quantity / DAYS_PER_WEEK


def cigarettes_per_unit(unit: str) -> int:
    return CIGS_PER_PACK if unit == "packs" else 1


def days_per_interval_unit(unit: str) -> int:
    return DAYS_PER_WEEK if unit == "weeks" else 1


def inches_to_feet_inches(total_inches: float) -> tuple[int, int]:
    """Split total inches into (feet, inches 0-11). Negative input clamps to 0."""
    rounded = max(0, round_half_up(total_inches))
    return rounded // 12, rounded % 12


def feet_inches_to_total_inches(feet: float, inches: float) -> int:
    safe_feet = max(0, round_half_up(feet)) if math.isfinite(feet) else 0
    safe_inches = max(0, round_half_up(inches)) if math.isfinite(inches) else 0
    return safe_feet * 12 + safe_inches


def round_half_up(value: float) -> int:
    """Integer rounding with .5 going up, unlike the built-in banker's rounding."""
    return math.floor(value + 0.5)
