"""Recovery model records — Pydantic v2 models.

`Inputs` and `StoredState` use the camelCase keys of the persisted/form shape;
derived records (`ValidatedInputs`, `RecoveryState`) are snake_case.
"""

from __future__ import annotations

import math
from typing import Annotated, Any, Literal

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, field_validator

from smokefree.recovery.milestones import normalize_badge_ids


def _numberish(value: Any) -> float | None:
    """Finite number or the empty marker. "" means the field is blank."""
    if value is None or (isinstance(value, str) and value == ""):
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError("must be a number or empty")
    if not math.isfinite(value):
        raise ValueError("must be a finite number")
    return float(value)


Numberish = Annotated[float | None, BeforeValidator(_numberish)]


class Inputs(BaseModel):
    """Raw, user-editable inputs. Strings are kept as typed so validation can flag them."""

    model_config = ConfigDict(populate_by_name=True)

    smoking_length_mode: str = Field(alias="smokingLengthMode")
    smoking_start_date_iso: str = Field(alias="smokingStartDateISO")
    approx_smoking_years: Numberish = Field(alias="approxSmokingYears")
    quit_date_iso: str = Field(alias="quitDateISO")
    consumption_unit: str = Field(alias="consumptionUnit")
    consumption_quantity: Numberish = Field(alias="consumptionQuantity")
    consumption_interval_unit: str = Field(alias="consumptionIntervalUnit")
    consumption_interval_count: Numberish = Field(alias="consumptionIntervalCount")
    cigarette_brand_id: str = Field(alias="cigaretteBrandId")
    dob_iso: str = Field(alias="dobISO")
    biological_sex: str = Field(alias="biologicalSex")
    weight_value: Numberish = Field(alias="weightValue")
    weight_unit: str = Field(alias="weightUnit")
    height_value: Numberish = Field(alias="heightValue")
    height_unit: str = Field(alias="heightUnit")


class ValidatedInputs(BaseModel):
    """Fully derived inputs in canonical units. Never partially populated."""

    model_config = ConfigDict(frozen=True)

    smoking_length_mode: str
    smoking_start_date_iso: str
    approx_smoking_years: float
    quit_date_iso: str
    consumption_unit: str
    consumption_quantity: float
    consumption_interval_unit: str
    consumption_interval_count: float
    cigarette_brand_id: str
    dob_iso: str
    biological_sex: str
    weight_kg: float
    height_cm: float

    smoking_years: float
    cigs_per_day: float
    packs_per_week: float
    age_years: float
    bmi: float
    bmr_kcal_per_day: float
    metabolism_factor: float
    metabolism_category: str  # "slower" | "average" | "faster"
    baseline_resting_heart_rate_bpm: float
    brand_name: str
    nicotine_mg_per_cig: float
    tar_mg_per_cig: float
    pack_years: float
    effective_pack_years: float
    daily_nicotine_mg: float
    daily_tar_mg: float

    def to_inputs(self) -> Inputs:
        """Raw inputs equivalent to this record, in kg/cm."""
        return Inputs(
            smoking_length_mode=self.smoking_length_mode,
            smoking_start_date_iso=self.smoking_start_date_iso,
            approx_smoking_years=self.approx_smoking_years,
            quit_date_iso=self.quit_date_iso,
            consumption_unit=self.consumption_unit,
            consumption_quantity=self.consumption_quantity,
            consumption_interval_unit=self.consumption_interval_unit,
            consumption_interval_count=self.consumption_interval_count,
            cigarette_brand_id=self.cigarette_brand_id,
            dob_iso=self.dob_iso,
            biological_sex=self.biological_sex,
            weight_value=self.weight_kg,
            weight_unit="kg",
            height_value=self.height_cm,
            height_unit="cm",
        )


class ValidationResult(BaseModel):
    value: ValidatedInputs | None = None
    errors: dict[str, str] = Field(default_factory=dict)  # Inputs alias -> message

    @property
    def is_valid(self) -> bool:
        return self.value is not None


class RecoveryState(BaseModel):
    """Per-day snapshot handed to the presentation layer."""

    model_config = ConfigDict(frozen=True)

    soot_load: float
    inflammation: float
    mucus: float
    cilia_function: float
    tar_burden: float
    nicotine_dependence: float
    dopamine_tolerance: float
    overall_dirtiness: float
    recovery_percent: float

    preview_days: int
    days_since_quit: int
    full_recovery_day: int
    is_projected: bool

    resting_heart_rate_bpm: float
    respiration_rate_per_min: float

    pack_years: float
    effective_pack_years: float


class StateRequest(BaseModel):
    inputs: Inputs
    preview_days: float = 0
    full_recovery_day: int | None = None


# ---------------------------------------------------------------------------
# Persisted shapes
# ---------------------------------------------------------------------------

class StoredState(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    schema_version: Literal[2] = Field(alias="schemaVersion")
    inputs: Inputs
    earned_badge_ids: list[str] = Field(default_factory=list, alias="earnedBadgeIds")

    @field_validator("earned_badge_ids", mode="before")
    @classmethod
    def _normalize_badges(cls, value: Any) -> list[str]:
        return normalize_badge_ids(value)


class LegacyInputs(BaseModel):
    """Unversioned three-field inputs written by the first release."""

    model_config = ConfigDict(populate_by_name=True)

    years_smoking: Numberish = Field(alias="yearsSmoking")
    cigs_per_day: Numberish = Field(alias="cigsPerDay")
    quit_date_iso: str = Field(alias="quitDateISO")
