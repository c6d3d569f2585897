"""Milestone badge catalog — configuration only.

Badges unlock from the actual smoke-free streak. Earned ids are merged, never
revoked, so editing the quit date backwards keeps what was already earned.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable


@dataclass(frozen=True, slots=True)
class MilestoneBadge:
    id: str
    day: int
    title: str
    detail: str
    source_key: str


MILESTONE_BADGES: tuple[MilestoneBadge, ...] = (
    MilestoneBadge(
        id="day-1",
        day=1,
        title="24 Hours Smoke-Free",
        detail="Carbon monoxide levels can move toward a healthier range after one day.",
        source_key="CDC-01",
    ),
    MilestoneBadge(
        id="day-3",
        day=3,
        title="72 Hours",
        detail="Nicotine withdrawal is often strongest in the first three days.",
        source_key="NHS-01",
    ),
    MilestoneBadge(
        id="day-14",
        day=14,
        title="Two Weeks",
        detail="Breathing comfort and circulation can begin to noticeably improve.",
        source_key="CDC-02",
    ),
    MilestoneBadge(
        id="day-30",
        day=30,
        title="One Month",
        detail="Cough and mucus symptoms often reduce as airway clearance improves.",
        source_key="PAPER-01",
    ),
    MilestoneBadge(
        id="day-90",
        day=90,
        title="Three Months",
        detail="Lung function trend can improve in the first few smoke-free months.",
        source_key="NHS-02",
    ),
    MilestoneBadge(
        id="day-180",
        day=180,
        title="Six Months",
        detail="Respiratory irritation may continue easing with sustained abstinence.",
        source_key="PAPER-02",
    ),
    MilestoneBadge(
        id="day-365",
        day=365,
        title="One Year",
        detail="Major cardiovascular risk reduction is expected after one year.",
        source_key="CDC-03",
    ),
    MilestoneBadge(
        id="day-730",
        day=730,
        title="Two Years",
        detail="Longer smoke-free periods support ongoing respiratory recovery.",
        source_key="WHO-01",
    ),
)


def list_badges() -> list[MilestoneBadge]:
    return list(MILESTONE_BADGES)


def get_badge(badge_id: str) -> MilestoneBadge | None:
    for badge in MILESTONE_BADGES:
        if badge.id == badge_id:
            return badge
    return None


def get_earned_badge_ids(days_smoke_free: int) -> list[str]:
    return [badge.id for badge in MILESTONE_BADGES if days_smoke_free >= badge.day]


def merge_earned_badge_ids(existing: Iterable[str], unlocked: Iterable[str]) -> list[str]:
    """Union of both lists, first-seen order, no duplicates."""
    return list(dict.fromkeys([*existing, *unlocked]))


def normalize_badge_ids(value: Any) -> list[str]:
    """Keep non-empty string ids from a persisted value; anything else yields []."""
    if not isinstance(value, list):
        return []
    return list(dict.fromkeys(v for v in value if isinstance(v, str) and v))
