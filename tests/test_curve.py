"""Tests for the recovery curve engine."""

import math

import pytest

from smokefree.recovery.curve import (
    DIRTINESS_WEIGHTS,
    build_curve_context,
    compute_recovery_state,
    estimate_full_recovery_day,
    evaluate_curve,
    exposure_from_pack_years,
)
from smokefree.recovery.inputs import sanitize_inputs
from smokefree.recovery.limits import FULL_RECOVERY_THRESHOLD
from tests.conftest import NOW, make_inputs

BURDENS = ("soot_load", "inflammation", "mucus", "tar_burden", "nicotine_dependence", "dopamine_tolerance")


@pytest.fixture()
def heavy_smoker():
    return sanitize_inputs(
        make_inputs(
            smokingStartDateISO="2006-01-01",
            consumptionUnit="packs",
            consumptionQuantity=2,
            biologicalSex="male",
            weightValue=82,
            heightValue=178,
            dobISO="1982-01-01",
        ),
        NOW,
    )


@pytest.fixture()
def never_smoker():
    return sanitize_inputs(make_inputs(consumptionQuantity=0), NOW)


class TestExposure:
    def test_zero(self):
        assert exposure_from_pack_years(0) == 0

    def test_saturates(self):
        assert exposure_from_pack_years(10) < exposure_from_pack_years(20) < 1
        assert exposure_from_pack_years(1000) == pytest.approx(1.0)

    def test_weights_sum_to_one(self):
        assert sum(DIRTINESS_WEIGHTS.values()) == pytest.approx(1.0)


class TestCurveShape:
    def test_monotone_over_time(self, heavy_smoker):
        context = build_curve_context(heavy_smoker)
        previous = evaluate_curve(context, 0)
        for day in range(1, 1500, 7):
            point = evaluate_curve(context, day)
            assert point.overall_dirtiness <= previous.overall_dirtiness + 1e-12
            assert point.recovery_percent >= previous.recovery_percent - 1e-12
            for name in BURDENS:
                assert point.subscores[name] <= previous.subscores[name] + 1e-12
            assert point.subscores["cilia_function"] >= previous.subscores["cilia_function"] - 1e-12
            previous = point

    def test_strictly_improves_at_checkpoints(self, heavy_smoker):
        context = build_curve_context(heavy_smoker)
        day0, day30, day365 = (evaluate_curve(context, day) for day in (0, 30, 365))
        for name in BURDENS:
            assert day0.subscores[name] > day30.subscores[name] > day365.subscores[name]
        assert day0.subscores["cilia_function"] < day30.subscores["cilia_function"] < day365.subscores["cilia_function"]
        assert day0.overall_dirtiness > day30.overall_dirtiness > day365.overall_dirtiness
        assert day0.recovery_percent < day30.recovery_percent < day365.recovery_percent

    def test_values_in_unit_interval(self, heavy_smoker):
        context = build_curve_context(heavy_smoker)
        for day in (0, 1, 30, 365, 3650):
            point = evaluate_curve(context, day)
            assert all(0 <= v <= 1 for v in point.subscores.values())
            assert 0 <= point.overall_dirtiness <= 1
            assert 0 <= point.recovery_percent <= 1

    def test_day_zero_is_no_recovery(self, heavy_smoker):
        assert evaluate_curve(build_curve_context(heavy_smoker), 0).recovery_percent == pytest.approx(0, abs=1e-9)

    def test_heavier_smoker_starts_dirtier(self, heavy_smoker):
        light = sanitize_inputs(make_inputs(consumptionQuantity=3), NOW)
        heavy_start = evaluate_curve(build_curve_context(heavy_smoker), 0).overall_dirtiness
        light_start = evaluate_curve(build_curve_context(light), 0).overall_dirtiness
        assert heavy_start > light_start

    def test_never_smoker_is_fully_recovered(self, never_smoker):
        point = evaluate_curve(build_curve_context(never_smoker), 0)
        assert point.recovery_percent == 1.0

    def test_negative_day_is_day_zero(self, heavy_smoker):
        context = build_curve_context(heavy_smoker)
        assert evaluate_curve(context, -5) == evaluate_curve(context, 0)


class TestFullRecoveryDay:
    def test_first_day_over_threshold(self, heavy_smoker):
        full_day = estimate_full_recovery_day(heavy_smoker)
        context = build_curve_context(heavy_smoker)
        assert 0 < full_day < 3650
        assert evaluate_curve(context, full_day).recovery_percent >= FULL_RECOVERY_THRESHOLD
        assert evaluate_curve(context, full_day - 1).recovery_percent < FULL_RECOVERY_THRESHOLD

    def test_never_smoker_day_zero(self, never_smoker):
        assert estimate_full_recovery_day(never_smoker) == 0

    def test_deterministic(self, heavy_smoker):
        assert estimate_full_recovery_day(heavy_smoker) == estimate_full_recovery_day(heavy_smoker)


class TestRecoveryState:
    def test_preview_clamped_to_full_recovery(self, heavy_smoker):
        full_day = estimate_full_recovery_day(heavy_smoker)
        state = compute_recovery_state(heavy_smoker, full_day + 500, NOW)
        assert state.preview_days == full_day
        assert state.full_recovery_day == full_day
        assert state.recovery_percent > 0.99

    def test_preview_rounding(self, heavy_smoker):
        assert compute_recovery_state(heavy_smoker, 10.4, NOW).preview_days == 10
        assert compute_recovery_state(heavy_smoker, 10.5, NOW).preview_days == 11
        assert compute_recovery_state(heavy_smoker, -3, NOW).preview_days == 0
        assert compute_recovery_state(heavy_smoker, math.nan, NOW).preview_days == 0

    def test_explicit_full_recovery_day(self, heavy_smoker):
        state = compute_recovery_state(heavy_smoker, 400, NOW, full_recovery_day=100)
        assert state.full_recovery_day == 100
        assert state.preview_days == 100

    def test_projection_flag(self, heavy_smoker):
        # quit 2026-01-10, so 47 smoke-free days on NOW
        actual = compute_recovery_state(heavy_smoker, 10, NOW)
        projected = compute_recovery_state(heavy_smoker, 100, NOW)
        assert actual.days_since_quit == 47
        assert not actual.is_projected
        assert projected.is_projected

    def test_deterministic(self, heavy_smoker):
        assert compute_recovery_state(heavy_smoker, 30, NOW) == compute_recovery_state(heavy_smoker, 30, NOW)

    def test_carries_exposure(self, heavy_smoker):
        state = compute_recovery_state(heavy_smoker, 0, NOW)
        assert state.pack_years == pytest.approx(heavy_smoker.pack_years)
        assert state.effective_pack_years == pytest.approx(heavy_smoker.effective_pack_years)


class TestCardio:
    def test_ranges(self, heavy_smoker):
        for day in (0, 30, 365, 2000):
            state = compute_recovery_state(heavy_smoker, day, NOW)
            assert 48 <= state.resting_heart_rate_bpm <= 112
            assert 10 <= state.respiration_rate_per_min <= 24

    def test_heart_rate_drops_with_recovery(self, heavy_smoker):
        start = compute_recovery_state(heavy_smoker, 0, NOW)
        later = compute_recovery_state(heavy_smoker, 365, NOW)
        assert later.resting_heart_rate_bpm < start.resting_heart_rate_bpm

    def test_never_smoker_near_baseline(self, never_smoker):
        state = compute_recovery_state(never_smoker, 0, NOW)
        assert state.resting_heart_rate_bpm < never_smoker.baseline_resting_heart_rate_bpm
