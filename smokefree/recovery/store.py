"""Database access for persisted profile state.

Table recovery_profile_state:
  profile_id (text), state_key (text), payload (text, JSON),
  updated_at (timestamptz), PRIMARY KEY (profile_id, state_key)

state_key is "sfl_state_v2" for versioned state or "sfl_inputs_v1" for rows
written by the first release. Payloads are stored as JSON text and parsed by
`storage`, which owns the schema and the legacy migration.
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from smokefree.recovery.models import StoredState
from smokefree.recovery.storage import LEGACY_KEY, STATE_KEY_V2, dump_stored_state, load_stored_state

logger = logging.getLogger(__name__)

_UPSERT_SQL = (
    "INSERT INTO recovery_profile_state (profile_id, state_key, payload, updated_at) "
    "VALUES (:profile_id, :state_key, :payload, now()) "
    "ON CONFLICT (profile_id, state_key) "
    "DO UPDATE SET payload = EXCLUDED.payload, updated_at = EXCLUDED.updated_at"
)


async def fetch_payloads(session: AsyncSession, profile_id: str) -> dict[str, str]:
    """Raw payloads for a profile keyed by state_key. Empty dict when nothing is stored."""
    query = (
        "SELECT state_key, payload "
        "FROM recovery_profile_state "
        "WHERE profile_id = :profile_id"
    )
    result = await session.execute(text(query), {"profile_id": profile_id})
    columns = result.keys()
    rows: list[dict[str, Any]] = [dict(zip(columns, r)) for r in result.fetchall()]
    return {row["state_key"]: row["payload"] for row in rows if isinstance(row.get("payload"), str)}


async def load_profile_state(
    session: AsyncSession,
    profile_id: str,
    now: date | datetime,
) -> StoredState | None:
    payloads = await fetch_payloads(session, profile_id)
    state = load_stored_state(payloads.get(STATE_KEY_V2), payloads.get(LEGACY_KEY), now)
    if state is None and payloads:
        logger.warning("Profile %s has stored rows but no readable state", profile_id)
    return state


async def save_profile_state(session: AsyncSession, profile_id: str, state: StoredState) -> None:
    """Upsert the v2 payload. Legacy rows are left untouched; v2 always wins on read."""
    await session.execute(
        text(_UPSERT_SQL),
        {"profile_id": profile_id, "state_key": STATE_KEY_V2, "payload": dump_stored_state(state)},
    )
    await session.commit()
    logger.info("Saved profile %s (%d badges)", profile_id, len(state.earned_badge_ids))
