"""Recovery HTTP router — the model's computation entry points."""

from __future__ import annotations

import logging
from dataclasses import asdict
from datetime import date, datetime
from zoneinfo import ZoneInfo

from fastapi import APIRouter, Depends, HTTPException, Query

from smokefree.auth import verify_api_key
from smokefree.config import settings
from smokefree.recovery.brands import list_brands
from smokefree.recovery.curve import compute_recovery_state, estimate_full_recovery_day
from smokefree.recovery.dates import days_since, parse_iso_date
from smokefree.recovery.inputs import sanitize_inputs, validate_inputs
from smokefree.recovery.milestones import list_badges
from smokefree.recovery.models import Inputs, RecoveryState, StateRequest, ValidatedInputs, ValidationResult
from smokefree.recovery.stages import stage_timeline

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/recovery", tags=["recovery"])


def _parse_date(value: str, name: str) -> date:
    parsed = parse_iso_date(value)
    if parsed is None:
        raise HTTPException(status_code=422, detail=f"Invalid date for '{name}': {value}")
    return parsed


def resolve_today(value: str | None) -> date:
    """Explicit `today` query value, else the current date in the configured timezone."""
    if value is None:
        return datetime.now(ZoneInfo(settings.default_tz)).date()
    return _parse_date(value, "today")


# ---------------------------------------------------------------------------
# Reference data
# ---------------------------------------------------------------------------


@router.get("/brands")
async def brands_list(_: str = Depends(verify_api_key)) -> list[dict]:
    return [asdict(b) for b in list_brands()]


@router.get("/badges")
async def badges_list(_: str = Depends(verify_api_key)) -> list[dict]:
    return [asdict(b) for b in list_badges()]


@router.get("/stages")
async def stages_list(
    _: str = Depends(verify_api_key),
    quit_date: str = Query(..., description="Quit date (YYYY-MM-DD)"),
    today: str | None = Query(default=None, description="Reference day (YYYY-MM-DD)"),
) -> list[dict]:
    _parse_date(quit_date, "quit_date")
    return stage_timeline(quit_date, days_since(quit_date, resolve_today(today)))


# ---------------------------------------------------------------------------
# Model
# ---------------------------------------------------------------------------


@router.post("/validate", response_model=ValidationResult)
async def validate(
    inputs: Inputs,
    _: str = Depends(verify_api_key),
    today: str | None = Query(default=None, description="Reference day (YYYY-MM-DD)"),
) -> ValidationResult:
    result = validate_inputs(inputs, resolve_today(today))
    if not result.is_valid:
        logger.debug("Validation failed for fields: %s", ", ".join(sorted(result.errors)))
    return result


@router.post("/sanitize", response_model=ValidatedInputs)
async def sanitize(
    inputs: Inputs,
    _: str = Depends(verify_api_key),
    today: str | None = Query(default=None, description="Reference day (YYYY-MM-DD)"),
) -> ValidatedInputs:
    return sanitize_inputs(inputs, resolve_today(today))


@router.post("/full-recovery-day")
async def full_recovery_day(
    inputs: Inputs,
    _: str = Depends(verify_api_key),
    today: str | None = Query(default=None, description="Reference day (YYYY-MM-DD)"),
) -> dict[str, int]:
    validated = sanitize_inputs(inputs, resolve_today(today))
    return {"full_recovery_day": estimate_full_recovery_day(validated)}


@router.post("/state", response_model=RecoveryState)
async def recovery_state(
    request: StateRequest,
    _: str = Depends(verify_api_key),
    today: str | None = Query(default=None, description="Reference day (YYYY-MM-DD)"),
) -> RecoveryState:
    """Live preview: sanitized inputs, so a half-edited form still renders."""
    now = resolve_today(today)
    validated = sanitize_inputs(request.inputs, now)
    return compute_recovery_state(validated, request.preview_days, now, request.full_recovery_day)
