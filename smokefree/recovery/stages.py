"""Recovery activity stages — what the lungs are working on at a given day."""

from __future__ import annotations

from dataclasses import dataclass

from smokefree.recovery.dates import add_days_to_iso


@dataclass(frozen=True, slots=True)
class RecoveryStage:
    id: str
    start_day: int
    end_day: int
    title: str
    detail: str


RECOVERY_STAGES: tuple[RecoveryStage, ...] = (
    RecoveryStage(
        id="co-clearance",
        start_day=0,
        end_day=2,
        title="Gas exchange reset starts",
        detail="Carbon monoxide washout and oxygen transport begin normalizing in early quit days.",
    ),
    RecoveryStage(
        id="airway-reactivity",
        start_day=3,
        end_day=21,
        title="Airway reactivity is recalibrating",
        detail="Inflamed bronchi can still feel irritable as nicotine withdrawal and airway cleanup overlap.",
    ),
    RecoveryStage(
        id="mucociliary-repair",
        start_day=22,
        end_day=120,
        title="Mucociliary clearance improves",
        detail="Cilia function and mucus handling improve, often reducing cough and chest congestion.",
    ),
    RecoveryStage(
        id="deep-remodeling",
        start_day=121,
        end_day=365,
        title="Longer airway remodeling",
        detail="Inflammation gradually drops while airway tissue continues structural recovery.",
    ),
    RecoveryStage(
        id="long-tail",
        start_day=366,
        end_day=3650,
        title="Long-tail stabilization",
        detail="Recovery continues at a slower pace with sustained smoke-free behavior.",
    ),
)


def stage_status(current_days: int, stage: RecoveryStage) -> str:
    """"done" once past the stage, "next" before it, otherwise "active"."""
    if current_days > stage.end_day:
        return "done"
    if current_days < stage.start_day:
        return "next"
    return "active"


def stage_timeline(quit_date_iso: str, current_days: int) -> list[dict]:
    """Stages with status and calendar window; windows fall back to the quit date string."""
    return [
        {
            "id": stage.id,
            "title": stage.title,
            "detail": stage.detail,
            "start_day": stage.start_day,
            "end_day": stage.end_day,
            "status": stage_status(current_days, stage),
            "window_start": add_days_to_iso(quit_date_iso, stage.start_day) or quit_date_iso,
            "window_end": add_days_to_iso(quit_date_iso, stage.end_day) or quit_date_iso,
        }
        for stage in RECOVERY_STAGES
    ]
