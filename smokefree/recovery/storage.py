"""Persisted state shape and the one-time legacy migration.

Two payloads may exist for a profile: the versioned v2 state and the
unversioned three-field inputs of the first release. A readable v2 payload
wins; otherwise legacy inputs are migrated with no earned badges. Anything
unreadable is logged and discarded so callers fall back to defaults.
"""

from __future__ import annotations

import logging
from datetime import date, datetime

from pydantic import ValidationError

from smokefree.recovery.brands import DEFAULT_BRAND_ID
from smokefree.recovery.dates import add_days_to_iso
from smokefree.recovery.inputs import infer_dob_from_age_years
from smokefree.recovery.limits import DAYS_PER_YEAR, DEFAULT_HEIGHT_CM, DEFAULT_WEIGHT_KG
from smokefree.recovery.models import Inputs, LegacyInputs, StoredState
from smokefree.recovery.units import round_half_up

logger = logging.getLogger(__name__)

STATE_KEY_V2 = "sfl_state_v2"
LEGACY_KEY = "sfl_inputs_v1"

LEGACY_DEFAULT_AGE = 35


def migrate_legacy_inputs(legacy: LegacyInputs, now: date | datetime) -> Inputs:
    """Map the three-field shape onto full inputs.

    The start date is inferred as years * 365.25 days (rounded) before quitting;
    body metrics and brand take the documented defaults.
    """
    start_iso = legacy.quit_date_iso
    if legacy.years_smoking is not None:
        offset = round_half_up(legacy.years_smoking * DAYS_PER_YEAR)
        start_iso = add_days_to_iso(legacy.quit_date_iso, -offset) or legacy.quit_date_iso

    return Inputs(
        smoking_length_mode="exact_dates",
        smoking_start_date_iso=start_iso,
        approx_smoking_years=legacy.years_smoking,
        quit_date_iso=legacy.quit_date_iso,
        consumption_unit="cigarettes",
        consumption_quantity=legacy.cigs_per_day,
        consumption_interval_unit="days",
        consumption_interval_count=1,
        cigarette_brand_id=DEFAULT_BRAND_ID,
        dob_iso=infer_dob_from_age_years(LEGACY_DEFAULT_AGE, now),
        biological_sex="other",
        weight_value=DEFAULT_WEIGHT_KG,
        weight_unit="kg",
        height_value=DEFAULT_HEIGHT_CM,
        height_unit="cm",
    )


def parse_stored_state(raw: str) -> StoredState | None:
    """Schema-validate a v2 payload. Wrong version, bad inputs or bad JSON → None."""
    try:
        return StoredState.model_validate_json(raw)
    except ValidationError as exc:
        logger.warning("Discarding unreadable v2 state (%d errors)", exc.error_count())
        return None


def parse_legacy_inputs(raw: str) -> LegacyInputs | None:
    try:
        return LegacyInputs.model_validate_json(raw)
    except ValidationError as exc:
        logger.warning("Discarding unreadable legacy inputs (%d errors)", exc.error_count())
        return None


def load_stored_state(
    raw_v2: str | None,
    raw_legacy: str | None,
    now: date | datetime,
) -> StoredState | None:
    if raw_v2:
        state = parse_stored_state(raw_v2)
        if state is not None:
            return state

    if not raw_legacy:
        return None

    legacy = parse_legacy_inputs(raw_legacy)
    if legacy is None:
        return None

    logger.info("Migrating legacy inputs (quit date %s) to schema v2", legacy.quit_date_iso)
    return StoredState(
        schema_version=2,
        inputs=migrate_legacy_inputs(legacy, now),
        earned_badge_ids=[],
    )


def dump_stored_state(state: StoredState) -> str:
    return state.model_dump_json(by_alias=True)
