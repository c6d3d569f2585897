"""Recovery curve engine — the per-day lung model.

Each subscore relaxes exponentially from a start value (day 0, driven by
cumulative exposure and daily chemical load) toward a residual floor. Cilia
function is the one recovery indicator: it rises toward a ceiling instead.
Simulated time runs at `day * metabolism_factor`.

All values here are fixed contract constants: changing any of them changes
every fixture computed from this module.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime

from smokefree.recovery.dates import days_since
from smokefree.recovery.limits import FULL_RECOVERY_THRESHOLD, MAX_PREVIEW_DAYS
from smokefree.recovery.models import RecoveryState, ValidatedInputs
from smokefree.recovery.physiology import clamp, clamp01

EXPOSURE_RATE = 0.085  # per effective pack-year
TAR_LOAD_REFERENCE_MG = 480.0  # daily tar that saturates the tar load term
NICOTINE_LOAD_REFERENCE_MG = 40.0  # daily nicotine that saturates the nicotine term
DEGENERATE_RANGE_EPSILON = 1e-9

TAU_DAYS: dict[str, float] = {
    "soot_load": 60.0,
    "inflammation": 140.0,
    "mucus": 110.0,
    "cilia_function": 120.0,
    "tar_burden": 190.0,
    "nicotine_dependence": 46.0,
    "dopamine_tolerance": 236.0,
}

# Cilia function is excluded: it measures recovery, not burden.
DIRTINESS_WEIGHTS: dict[str, float] = {
    "soot_load": 0.33,
    "inflammation": 0.24,
    "mucus": 0.15,
    "tar_burden": 0.12,
    "nicotine_dependence": 0.08,
    "dopamine_tolerance": 0.08,
}


@dataclass(frozen=True, slots=True)
class SubscoreCurve:
    start: float
    target: float  # floor for burdens, ceiling for cilia function
    tau: float
    rising: bool = False

    def at(self, effective_day: float) -> float:
        decay = math.exp(-effective_day / self.tau)
        if self.rising:
            return self.target - (self.target - self.start) * decay
        return self.target + (self.start - self.target) * decay


@dataclass(frozen=True, slots=True)
class CurveContext:
    """Everything about a profile the curve needs, computed once."""

    exposure: float
    metabolism_factor: float
    curves: dict[str, SubscoreCurve]
    start_overall: float
    floor_overall: float


@dataclass(frozen=True, slots=True)
class CurvePoint:
    subscores: dict[str, float]
    overall_dirtiness: float
    recovery_percent: float


def exposure_from_pack_years(effective_pack_years: float) -> float:
    """Saturating exposure: each extra pack-year adds less harm than the last."""
    return clamp01(1.0 - math.exp(-EXPOSURE_RATE * effective_pack_years))


def weighted_dirtiness(values: dict[str, float]) -> float:
    return clamp01(sum(weight * values[name] for name, weight in DIRTINESS_WEIGHTS.items()))


def build_curve_context(validated: ValidatedInputs) -> CurveContext:
    e = exposure_from_pack_years(validated.effective_pack_years)
    tar = clamp01(validated.daily_tar_mg / TAR_LOAD_REFERENCE_MG)
    nic = clamp01(validated.daily_nicotine_mg / NICOTINE_LOAD_REFERENCE_MG)

    # (start, floor) pairs; a never-smoker starts on the floor
    bounds: dict[str, tuple[float, float]] = {
        "soot_load": (0.03 + 0.92 * e + 0.05 * tar, 0.03 + 0.18 * e),
        "inflammation": (0.07 + 0.84 * e + 0.05 * tar, 0.07 + 0.26 * e),
        "mucus": (0.02 + 0.80 * e + 0.04 * tar, 0.02 + 0.10 * e),
        "tar_burden": (0.01 + 0.70 * e + 0.25 * tar, 0.01 + 0.15 * e),
        "nicotine_dependence": (0.01 + 0.30 * e + 0.60 * nic, 0.01 + 0.03 * nic),
        "dopamine_tolerance": (0.02 + 0.35 * e + 0.45 * nic, 0.02 + 0.08 * e),
    }
    curves = {
        name: SubscoreCurve(start=clamp01(start), target=clamp01(floor), tau=TAU_DAYS[name])
        for name, (start, floor) in bounds.items()
    }
    curves["cilia_function"] = SubscoreCurve(
        start=clamp01(0.95 - 0.70 * e),
        target=clamp01(0.95 - 0.25 * e),
        tau=TAU_DAYS["cilia_function"],
        rising=True,
    )

    return CurveContext(
        exposure=e,
        metabolism_factor=validated.metabolism_factor,
        curves=curves,
        start_overall=weighted_dirtiness({name: c.start for name, c in curves.items()}),
        floor_overall=weighted_dirtiness({name: c.target for name, c in curves.items()}),
    )


def evaluate_curve(context: CurveContext, day: float) -> CurvePoint:
    effective_day = max(0.0, day) * context.metabolism_factor
    subscores = {name: clamp01(curve.at(effective_day)) for name, curve in context.curves.items()}
    overall = weighted_dirtiness(subscores)

    span = context.start_overall - context.floor_overall
    if abs(span) < DEGENERATE_RANGE_EPSILON:
        recovery = 1.0
    else:
        recovery = clamp01((context.start_overall - overall) / span)

    return CurvePoint(subscores=subscores, overall_dirtiness=overall, recovery_percent=recovery)


def estimate_full_recovery_day(validated: ValidatedInputs) -> int:
    """First whole day whose recovery reaches the threshold, scanning forward from 0.

    Returns MAX_PREVIEW_DAYS when the curve never gets there.
    """
    context = build_curve_context(validated)
    for day in range(MAX_PREVIEW_DAYS + 1):
        if evaluate_curve(context, day).recovery_percent >= FULL_RECOVERY_THRESHOLD:
            return day
    return MAX_PREVIEW_DAYS


# ---------------------------------------------------------------------------
# Cardio
# ---------------------------------------------------------------------------

def resting_heart_rate(validated: ValidatedInputs, point: CurvePoint) -> float:
    s = point.subscores
    exposure_penalty = min(validated.effective_pack_years / 20.0, 5.0)
    recovery_penalty = 8.0 * s["nicotine_dependence"] + 6.0 * s["inflammation"] + 3.0 * s["dopamine_tolerance"]
    bpm = validated.baseline_resting_heart_rate_bpm + exposure_penalty + recovery_penalty - 3.0 * point.recovery_percent
    return clamp(bpm, 48.0, 112.0)


def respiration_rate(heart_rate_bpm: float, point: CurvePoint) -> float:
    s = point.subscores
    rate = heart_rate_bpm / 4.7 + 3.0 * s["inflammation"] + 2.0 * s["mucus"] - 1.2 * s["cilia_function"]
    return clamp(rate, 10.0, 24.0)


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def compute_recovery_state(
    validated: ValidatedInputs,
    preview_days: float,
    now: date | datetime,
    full_recovery_day: int | None = None,
) -> RecoveryState:
    """Snapshot of the model at `preview_days` after quitting.

    The preview is rounded and clamped into [0, full recovery day]; previewing
    past the asymptote shows nothing new.
    """
    full_day = full_recovery_day if full_recovery_day is not None else estimate_full_recovery_day(validated)
    full_day = int(clamp(full_day, 0, MAX_PREVIEW_DAYS))
    day = int(clamp(math.floor(preview_days + 0.5) if math.isfinite(preview_days) else 0, 0, full_day))
    since_quit = days_since(validated.quit_date_iso, now)

    point = evaluate_curve(build_curve_context(validated), day)
    heart_rate = resting_heart_rate(validated, point)
    s = point.subscores

    return RecoveryState(
        soot_load=s["soot_load"],
        inflammation=s["inflammation"],
        mucus=s["mucus"],
        cilia_function=s["cilia_function"],
        tar_burden=s["tar_burden"],
        nicotine_dependence=s["nicotine_dependence"],
        dopamine_tolerance=s["dopamine_tolerance"],
        overall_dirtiness=point.overall_dirtiness,
        recovery_percent=point.recovery_percent,
        preview_days=day,
        days_since_quit=since_quit,
        full_recovery_day=full_day,
        is_projected=day > since_quit,
        resting_heart_rate_bpm=heart_rate,
        respiration_rate_per_min=respiration_rate(heart_rate, point),
        pack_years=validated.pack_years,
        effective_pack_years=validated.effective_pack_years,
    )
