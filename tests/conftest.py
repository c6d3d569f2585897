"""Shared fixtures for the test suite."""

from __future__ import annotations

from datetime import date
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient

from smokefree.db import get_session
from smokefree.main import app
from smokefree.recovery.models import Inputs

NOW = date(2026, 2, 26)

BASE_INPUTS: dict[str, Any] = {
    "smokingLengthMode": "exact_dates",
    "smokingStartDateISO": "2018-01-10",
    "approxSmokingYears": 8,
    "quitDateISO": "2026-01-10",
    "consumptionUnit": "cigarettes",
    "consumptionQuantity": 10,
    "consumptionIntervalUnit": "days",
    "consumptionIntervalCount": 1,
    "cigaretteBrandId": "average-us-king",
    "dobISO": "1991-01-10",
    "biologicalSex": "other",
    "weightValue": 70,
    "weightUnit": "kg",
    "heightValue": 170,
    "heightUnit": "cm",
}


def make_inputs(**overrides: Any) -> Inputs:
    """Build Inputs from BASE_INPUTS; overrides use the camelCase keys."""
    payload = {**BASE_INPUTS, **overrides}
    return Inputs.model_validate(payload)


# ---------------------------------------------------------------------------
# Fake DB session (no real Postgres needed)
# ---------------------------------------------------------------------------

class FakeSession:
    """Minimal stand-in for AsyncSession; records statements and commits."""

    def __init__(self, rows: list[dict[str, Any]] | None = None):
        self._rows = rows or []
        self.executed: list[tuple[str, dict[str, Any]]] = []
        self.commits = 0

    async def execute(self, stmt, params=None):
        self.executed.append((str(stmt), dict(params or {})))
        return FakeResult(self._rows)

    async def commit(self):
        self.commits += 1

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        pass


class FakeResult:
    def __init__(self, rows: list[dict[str, Any]]):
        self._rows = rows
        self._keys = list(rows[0].keys()) if rows else []

    def keys(self):
        return self._keys

    def fetchall(self):
        return [tuple(r[k] for k in self._keys) for r in self._rows]


def make_state_row(state_key: str, payload: str) -> dict[str, Any]:
    """Helper to build a fake recovery_profile_state row dict."""
    return {"state_key": state_key, "payload": payload}


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture()
def fake_session():
    """Return a FakeSession with no rows (override _rows in tests if needed)."""
    return FakeSession()


@pytest.fixture()
def override_session(fake_session):
    """Override the FastAPI dependency so no real DB is needed."""
    async def _override():
        yield fake_session

    app.dependency_overrides[get_session] = _override
    yield fake_session
    app.dependency_overrides.clear()


@pytest.fixture()
async def client(override_session):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
