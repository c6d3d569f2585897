"""Tests for the persisted state shape and legacy migration."""

import json

from smokefree.recovery.inputs import infer_dob_from_age_years
from smokefree.recovery.models import LegacyInputs, StoredState
from smokefree.recovery.storage import (
    dump_stored_state,
    load_stored_state,
    migrate_legacy_inputs,
    parse_stored_state,
)
from tests.conftest import BASE_INPUTS, NOW, make_inputs

LEGACY_RAW = json.dumps({"yearsSmoking": 7, "cigsPerDay": 10, "quitDateISO": "2026-02-10"})


def _v2_raw(**overrides) -> str:
    payload = {"schemaVersion": 2, "inputs": BASE_INPUTS, "earnedBadgeIds": ["day-1", "day-3"]}
    payload.update(overrides)
    return json.dumps(payload)


class TestLegacyMigration:
    def test_migrates_three_fields(self):
        state = load_stored_state(None, LEGACY_RAW, NOW)
        assert state is not None
        assert state.schema_version == 2
        assert state.earned_badge_ids == []
        inputs = state.inputs
        assert inputs.smoking_length_mode == "exact_dates"
        assert inputs.smoking_start_date_iso == "2019-02-10"
        assert inputs.approx_smoking_years == 7
        assert inputs.quit_date_iso == "2026-02-10"
        assert inputs.consumption_quantity == 10
        assert inputs.consumption_unit == "cigarettes"
        assert inputs.dob_iso == infer_dob_from_age_years(35, NOW)
        assert inputs.weight_value == 70
        assert inputs.height_value == 170

    def test_missing_years_starts_on_quit_date(self):
        legacy = LegacyInputs(years_smoking=None, cigs_per_day=5, quit_date_iso="2026-02-10")
        assert migrate_legacy_inputs(legacy, NOW).smoking_start_date_iso == "2026-02-10"

    def test_start_before_calendar_floor_falls_back_to_quit_date(self):
        raw = json.dumps({"yearsSmoking": 7, "cigsPerDay": 10, "quitDateISO": "0001-01-05"})
        state = load_stored_state(None, raw, NOW)
        assert state.inputs.smoking_start_date_iso == "0001-01-05"
        assert state.inputs.approx_smoking_years == 7

    def test_corrupt_legacy(self):
        assert load_stored_state(None, "{not json", NOW) is None
        assert load_stored_state(None, json.dumps({"cigsPerDay": 10}), NOW) is None


class TestV2:
    def test_parse(self):
        state = parse_stored_state(_v2_raw())
        assert state.inputs == make_inputs()
        assert state.earned_badge_ids == ["day-1", "day-3"]

    def test_dump_uses_persisted_keys(self):
        state = parse_stored_state(_v2_raw())
        data = json.loads(dump_stored_state(state))
        assert data["schemaVersion"] == 2
        assert data["earnedBadgeIds"] == ["day-1", "day-3"]
        assert data["inputs"]["quitDateISO"] == "2026-01-10"
        assert parse_stored_state(dump_stored_state(state)) == state

    def test_wrong_version_rejected(self):
        assert parse_stored_state(_v2_raw(schemaVersion=3)) is None

    def test_missing_version_rejected(self):
        raw = json.dumps({"inputs": BASE_INPUTS, "earnedBadgeIds": []})
        assert parse_stored_state(raw) is None

    def test_corrupt_json(self):
        assert parse_stored_state("{") is None

    def test_bad_badge_list_normalized(self):
        state = parse_stored_state(_v2_raw(earnedBadgeIds="day-1"))
        assert state.earned_badge_ids == []

    def test_v2_wins_over_legacy(self):
        state = load_stored_state(_v2_raw(), LEGACY_RAW, NOW)
        assert state.inputs.quit_date_iso == "2026-01-10"
        assert state.earned_badge_ids == ["day-1", "day-3"]

    def test_unreadable_v2_falls_back_to_legacy(self):
        state = load_stored_state("garbage", LEGACY_RAW, NOW)
        assert state.inputs.quit_date_iso == "2026-02-10"

    def test_nothing_stored(self):
        assert load_stored_state(None, None, NOW) is None

    def test_model_is_valid_stored_state(self):
        assert isinstance(load_stored_state(_v2_raw(), None, NOW), StoredState)
