"""Profile endpoints — committed inputs and earned badges per profile."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from smokefree.auth import verify_api_key
from smokefree.db import get_session
from smokefree.recovery import store
from smokefree.recovery.curve import compute_recovery_state
from smokefree.recovery.dates import days_since
from smokefree.recovery.inputs import sanitize_inputs, validate_inputs
from smokefree.recovery.milestones import get_earned_badge_ids, merge_earned_badge_ids
from smokefree.recovery.models import Inputs, RecoveryState, StoredState
from smokefree.recovery.router import resolve_today

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/recovery/profiles", tags=["profiles"])


async def _load_or_404(session: AsyncSession, profile_id: str, today: str | None) -> StoredState:
    state = await store.load_profile_state(session, profile_id, resolve_today(today))
    if state is None:
        raise HTTPException(status_code=404, detail=f"Unknown profile: {profile_id}")
    return state


@router.get("/{profile_id}", response_model=StoredState)
async def profile_detail(
    profile_id: str,
    session: AsyncSession = Depends(get_session),
    _: str = Depends(verify_api_key),
    today: str | None = Query(default=None, description="Reference day (YYYY-MM-DD)"),
) -> StoredState:
    return await _load_or_404(session, profile_id, today)


@router.put("/{profile_id}", response_model=StoredState)
async def profile_commit(
    profile_id: str,
    inputs: Inputs,
    session: AsyncSession = Depends(get_session),
    _: str = Depends(verify_api_key),
    today: str | None = Query(default=None, description="Reference day (YYYY-MM-DD)"),
) -> StoredState:
    """Commit validated inputs and union in any badges the streak has unlocked."""
    now = resolve_today(today)
    result = validate_inputs(inputs, now)
    if result.value is None:
        raise HTTPException(status_code=422, detail={"errors": result.errors})

    existing = await store.load_profile_state(session, profile_id, now)
    unlocked = get_earned_badge_ids(days_since(result.value.quit_date_iso, now))
    earned = merge_earned_badge_ids(existing.earned_badge_ids if existing else [], unlocked)

    state = StoredState(schema_version=2, inputs=inputs, earned_badge_ids=earned)
    await store.save_profile_state(session, profile_id, state)
    return state


@router.get("/{profile_id}/state", response_model=RecoveryState)
async def profile_state(
    profile_id: str,
    session: AsyncSession = Depends(get_session),
    _: str = Depends(verify_api_key),
    today: str | None = Query(default=None, description="Reference day (YYYY-MM-DD)"),
    preview_days: float | None = Query(default=None, description="Day to preview (default: actual streak)"),
) -> RecoveryState:
    stored = await _load_or_404(session, profile_id, today)
    now = resolve_today(today)
    validated = sanitize_inputs(stored.inputs, now)
    day = preview_days if preview_days is not None else days_since(validated.quit_date_iso, now)
    return compute_recovery_state(validated, day, now)
