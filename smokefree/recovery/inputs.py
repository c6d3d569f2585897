"""Input model — strict validation and best-effort sanitization.

`validate_inputs` reports every bad field at once and only yields a value when
the whole record is usable. `sanitize_inputs` never fails: it clamps, falls
back and derives, and drives the live preview while a form is mid-edit.
Both return the same derived record for inputs that are already valid.
"""

from __future__ import annotations

from datetime import date, datetime

from smokefree.recovery import physiology
from smokefree.recovery.brands import DEFAULT_BRAND_ID, get_brand_by_id, is_known_brand
from smokefree.recovery.dates import (
    days_before,
    days_between,
    format_iso_date,
    local_day,
    parse_iso_date,
    shift_years,
    whole_years_between,
)
from smokefree.recovery.limits import (
    BIOLOGICAL_SEXES,
    CONSUMPTION_UNITS,
    DAYS_PER_YEAR,
    DEFAULT_HEIGHT_CM,
    DEFAULT_WEIGHT_KG,
    FALLBACK_AGE,
    HEIGHT_UNITS,
    INTERVAL_UNITS,
    MAX_AGE,
    MAX_CIGS_PER_DAY,
    MAX_CONSUMPTION_INTERVAL_COUNT,
    MAX_CONSUMPTION_QUANTITY,
    MAX_HEIGHT_CM,
    MAX_SMOKING_YEARS,
    MAX_WEIGHT_KG,
    MIN_AGE,
    MIN_CONSUMPTION_INTERVAL_COUNT,
    MIN_HEIGHT_CM,
    MIN_WEIGHT_KG,
    SMOKING_LENGTH_MODES,
    WEIGHT_UNITS,
)
from smokefree.recovery.models import Inputs, ValidatedInputs, ValidationResult
from smokefree.recovery.physiology import clamp
from smokefree.recovery.units import (
    cigarettes_per_unit,
    convert_height,
    convert_weight,
    days_per_interval_unit,
    round_half_up,
)

MAX_SMOKING_SPAN_DAYS = round_half_up(MAX_SMOKING_YEARS * DAYS_PER_YEAR)


# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------

def smoking_years_by_dates(start_iso: str, quit_iso: str) -> float | None:
    """Whole days between the two dates over 365.25. None if either is invalid."""
    start = parse_iso_date(start_iso)
    quit_day = parse_iso_date(quit_iso)
    if start is None or quit_day is None:
        return None
    return max(0, days_between(start, quit_day)) / DAYS_PER_YEAR


def estimate_cigs_per_day(
    unit: str,
    quantity: float | None,
    interval_unit: str,
    interval_count: float | None,
) -> float | None:
    """Cigarettes/day implied by "quantity unit per count interval_unit"."""
    if quantity is None or interval_count is None or interval_count <= 0:
        return None
    return quantity * cigarettes_per_unit(unit) / (interval_count * days_per_interval_unit(interval_unit))


def infer_dob_from_age_years(age_years: float, now: date | datetime) -> str:
    return format_iso_date(shift_years(local_day(now), -round_half_up(age_years)))


def default_inputs(now: date | datetime) -> Inputs:
    """Starting profile for a new user: 8 years at 10/day, quitting today."""
    today = local_day(now)
    return Inputs(
        smoking_length_mode="exact_dates",
        smoking_start_date_iso=format_iso_date(shift_years(today, -8)),
        approx_smoking_years=8,
        quit_date_iso=format_iso_date(today),
        consumption_unit="cigarettes",
        consumption_quantity=10,
        consumption_interval_unit="days",
        consumption_interval_count=1,
        cigarette_brand_id=DEFAULT_BRAND_ID,
        dob_iso=infer_dob_from_age_years(35, now),
        biological_sex="other",
        weight_value=DEFAULT_WEIGHT_KG,
        weight_unit="kg",
        height_value=DEFAULT_HEIGHT_CM,
        height_unit="cm",
    )


def _fmt(value: float) -> str:
    return f"{value:g}"


def _validate_range(label: str, value: float | None, lo: float, hi: float) -> str | None:
    if value is None:
        return f"Enter {label.lower()}."
    if value < lo or value > hi:
        return f"{label} must be between {_fmt(lo)} and {_fmt(hi)}."
    return None


def _pick(value: str, allowed: tuple[str, ...]) -> str:
    """Known enum value, or the documented default (first entry)."""
    return value if value in allowed else allowed[0]


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------

def validate_inputs(inputs: Inputs, now: date | datetime) -> ValidationResult:
    """Check every field independently. Errors are keyed by the form field name."""
    errors: dict[str, str] = {}
    today = local_day(now)

    quit_day = parse_iso_date(inputs.quit_date_iso)
    if quit_day is None:
        errors["quitDateISO"] = "Enter a valid quit date."
    elif quit_day > today:
        errors["quitDateISO"] = "Quit date cannot be in the future."

    if inputs.smoking_length_mode not in SMOKING_LENGTH_MODES:
        errors["smokingLengthMode"] = "Choose exact dates or approximate years."
    elif inputs.smoking_length_mode == "exact_dates":
        start = parse_iso_date(inputs.smoking_start_date_iso)
        if start is None:
            errors["smokingStartDateISO"] = "Enter a valid smoking start date."
        elif quit_day is not None and start > quit_day:
            errors["smokingStartDateISO"] = "Smoking start date must be on or before quit date."
        elif quit_day is not None and days_between(start, quit_day) > MAX_SMOKING_SPAN_DAYS:
            errors["smokingStartDateISO"] = f"Smoking period cannot exceed {_fmt(MAX_SMOKING_YEARS)} years."
    else:
        years_error = _validate_range(
            "Approximate smoking years", inputs.approx_smoking_years, 0, MAX_SMOKING_YEARS
        )
        if years_error:
            errors["approxSmokingYears"] = years_error

    _validate_consumption(inputs, errors)

    dob = parse_iso_date(inputs.dob_iso)
    if dob is None:
        errors["dobISO"] = "Enter a valid date of birth."
    elif dob > today:
        errors["dobISO"] = "Date of birth cannot be in the future."
    elif not MIN_AGE <= whole_years_between(dob, today) <= MAX_AGE:
        errors["dobISO"] = f"Age must be between {MIN_AGE} and {MAX_AGE}."

    if inputs.biological_sex not in BIOLOGICAL_SEXES:
        errors["biologicalSex"] = "Select female, male or other."

    _validate_body(inputs, errors)

    if not is_known_brand(inputs.cigarette_brand_id):
        errors["cigaretteBrandId"] = "Select a known cigarette brand."

    if errors:
        return ValidationResult(value=None, errors=errors)

    return ValidationResult(value=sanitize_inputs(inputs, now), errors={})


def _validate_consumption(inputs: Inputs, errors: dict[str, str]) -> None:
    unit_ok = inputs.consumption_unit in CONSUMPTION_UNITS
    if not unit_ok:
        errors["consumptionUnit"] = "Choose cigarettes or packs."

    interval_unit_ok = inputs.consumption_interval_unit in INTERVAL_UNITS
    if not interval_unit_ok:
        errors["consumptionIntervalUnit"] = "Choose days or weeks."

    quantity_error = _validate_range(
        "Consumption quantity", inputs.consumption_quantity, 0, MAX_CONSUMPTION_QUANTITY
    )
    if quantity_error:
        errors["consumptionQuantity"] = quantity_error

    count_error = _validate_range(
        "Interval count",
        inputs.consumption_interval_count,
        MIN_CONSUMPTION_INTERVAL_COUNT,
        MAX_CONSUMPTION_INTERVAL_COUNT,
    )
    if count_error:
        errors["consumptionIntervalCount"] = count_error

    if quantity_error or count_error or not unit_ok or not interval_unit_ok:
        return

    rate = estimate_cigs_per_day(
        inputs.consumption_unit,
        inputs.consumption_quantity,
        inputs.consumption_interval_unit,
        inputs.consumption_interval_count,
    )
    if rate is not None and rate > MAX_CIGS_PER_DAY:
        errors["consumptionQuantity"] = (
            f"That is {rate:.1f} cigarettes/day; max supported is {_fmt(MAX_CIGS_PER_DAY)}."
        )


def _validate_body(inputs: Inputs, errors: dict[str, str]) -> None:
    if inputs.weight_unit not in WEIGHT_UNITS:
        errors["weightUnit"] = "Choose kg or lb."
    elif inputs.weight_value is None:
        errors["weightValue"] = "Enter weight."
    else:
        weight_kg = convert_weight(inputs.weight_value, inputs.weight_unit, "kg")
        if not MIN_WEIGHT_KG <= weight_kg <= MAX_WEIGHT_KG:
            errors["weightValue"] = (
                f"Weight is outside supported range ({_fmt(MIN_WEIGHT_KG)}-{_fmt(MAX_WEIGHT_KG)} kg)."
            )

    if inputs.height_unit not in HEIGHT_UNITS:
        errors["heightUnit"] = "Choose cm or in."
    elif inputs.height_value is None:
        errors["heightValue"] = "Enter height."
    else:
        height_cm = convert_height(inputs.height_value, inputs.height_unit, "cm")
        if not MIN_HEIGHT_CM <= height_cm <= MAX_HEIGHT_CM:
            errors["heightValue"] = (
                f"Height is outside supported range ({_fmt(MIN_HEIGHT_CM)}-{_fmt(MAX_HEIGHT_CM)} cm)."
            )


# ---------------------------------------------------------------------------
# Sanitization
# ---------------------------------------------------------------------------

def sanitize_inputs(inputs: Inputs, now: date | datetime) -> ValidatedInputs:
    """Clamp and fall back until the record is usable. Idempotent, never raises."""
    today = local_day(now)
    mode = _pick(inputs.smoking_length_mode, SMOKING_LENGTH_MODES)

    quit_day = parse_iso_date(inputs.quit_date_iso)
    if quit_day is None or quit_day > today:
        quit_day = today

    approx_years: float | None = None
    if inputs.approx_smoking_years is not None:
        approx_years = clamp(inputs.approx_smoking_years, 0.0, MAX_SMOKING_YEARS)

    start = parse_iso_date(inputs.smoking_start_date_iso)
    if start is None:
        start = days_before(quit_day, round_half_up((approx_years or 0.0) * DAYS_PER_YEAR))
    start = min(start, quit_day)
    if days_between(start, quit_day) > MAX_SMOKING_SPAN_DAYS:
        start = days_before(quit_day, MAX_SMOKING_SPAN_DAYS)

    years_by_dates = days_between(start, quit_day) / DAYS_PER_YEAR
    if approx_years is None:
        approx_years = years_by_dates
    smoking_years = years_by_dates if mode == "exact_dates" else approx_years

    unit = _pick(inputs.consumption_unit, CONSUMPTION_UNITS)
    interval_unit = _pick(inputs.consumption_interval_unit, INTERVAL_UNITS)
    interval_count = clamp(
        inputs.consumption_interval_count if inputs.consumption_interval_count is not None else 1.0,
        MIN_CONSUMPTION_INTERVAL_COUNT,
        MAX_CONSUMPTION_INTERVAL_COUNT,
    )
    quantity = clamp(
        inputs.consumption_quantity if inputs.consumption_quantity is not None else 0.0,
        0.0,
        MAX_CONSUMPTION_QUANTITY,
    )
    cigs_per_day = estimate_cigs_per_day(unit, quantity, interval_unit, interval_count) or 0.0
    if cigs_per_day > MAX_CIGS_PER_DAY:
        # scale the quantity down so the implied rate is exactly the cap
        quantity = (
            MAX_CIGS_PER_DAY * interval_count * days_per_interval_unit(interval_unit) / cigarettes_per_unit(unit)
        )
    cigs_per_day = min(
        estimate_cigs_per_day(unit, quantity, interval_unit, interval_count) or 0.0,
        MAX_CIGS_PER_DAY,
    )

    dob = parse_iso_date(inputs.dob_iso)
    if dob is None or dob > today:
        dob = shift_years(today, -FALLBACK_AGE)
    else:
        whole_age = whole_years_between(dob, today)
        if whole_age < MIN_AGE:
            dob = shift_years(today, -MIN_AGE)
        elif whole_age > MAX_AGE:
            dob = shift_years(today, -MAX_AGE)
    age_years = clamp(days_between(dob, today) / DAYS_PER_YEAR, MIN_AGE, MAX_AGE)

    sex = _pick(inputs.biological_sex, BIOLOGICAL_SEXES)

    weight_unit = _pick(inputs.weight_unit, WEIGHT_UNITS)
    weight_kg = DEFAULT_WEIGHT_KG
    if inputs.weight_value is not None:
        weight_kg = clamp(convert_weight(inputs.weight_value, weight_unit, "kg"), MIN_WEIGHT_KG, MAX_WEIGHT_KG)

    height_unit = _pick(inputs.height_unit, HEIGHT_UNITS)
    height_cm = DEFAULT_HEIGHT_CM
    if inputs.height_value is not None:
        height_cm = clamp(convert_height(inputs.height_value, height_unit, "cm"), MIN_HEIGHT_CM, MAX_HEIGHT_CM)

    brand = get_brand_by_id(inputs.cigarette_brand_id)

    bmi = physiology.bmi(weight_kg, height_cm)
    bmr = physiology.bmr_mifflin_st_jeor(weight_kg, height_cm, age_years, sex)
    metabolism = physiology.metabolism_factor(bmr, weight_kg)
    base_pack_years = physiology.pack_years(cigs_per_day, smoking_years)

    return ValidatedInputs(
        smoking_length_mode=mode,
        smoking_start_date_iso=format_iso_date(start),
        approx_smoking_years=approx_years,
        quit_date_iso=format_iso_date(quit_day),
        consumption_unit=unit,
        consumption_quantity=quantity,
        consumption_interval_unit=interval_unit,
        consumption_interval_count=interval_count,
        cigarette_brand_id=brand.id,
        dob_iso=format_iso_date(dob),
        biological_sex=sex,
        weight_kg=weight_kg,
        height_cm=height_cm,
        smoking_years=smoking_years,
        cigs_per_day=cigs_per_day,
        packs_per_week=cigs_per_day * 7 / 20,
        age_years=age_years,
        bmi=bmi,
        bmr_kcal_per_day=bmr,
        metabolism_factor=metabolism,
        metabolism_category=physiology.metabolism_category(metabolism),
        baseline_resting_heart_rate_bpm=physiology.baseline_resting_heart_rate(age_years, sex, bmi, metabolism),
        brand_name=brand.name,
        nicotine_mg_per_cig=brand.nicotine_mg,
        tar_mg_per_cig=brand.tar_mg,
        pack_years=base_pack_years,
        effective_pack_years=physiology.effective_pack_years(base_pack_years, brand.tar_mg, brand.nicotine_mg),
        daily_nicotine_mg=cigs_per_day * brand.nicotine_mg,
        daily_tar_mg=cigs_per_day * brand.tar_mg,
    )
