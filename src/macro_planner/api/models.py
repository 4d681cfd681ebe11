"""Pydantic models for API request payloads."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, model_validator

from macro_planner.domain.entries import EntrySource

MIN_PARSE_TEXT_LENGTH = 10


def has_any_macro(protein_g: float, carbs_g: float, fat_g: float) -> bool:
    """Return True when at least one macro is nonzero."""
    return protein_g != 0 or carbs_g != 0 or fat_g != 0


class GoalWeightPayload(BaseModel):
    """Goal weight update."""

    goal_weight_lb: float = Field(gt=0, allow_inf_nan=False)


class EntryCreatePayload(BaseModel):
    """New food entry."""

    model_config = ConfigDict(populate_by_name=True)

    logged_at: datetime = Field(alias="datetime")
    label: str = ""
    protein_g: float = Field(default=0, ge=0, allow_inf_nan=False)
    carbs_g: float = Field(default=0, ge=0, allow_inf_nan=False)
    fat_g: float = Field(default=0, ge=0, allow_inf_nan=False)
    source: EntrySource = "manual"
    raw_text: str | None = Field(default=None, alias="rawText")

    @model_validator(mode="after")
    def _require_macro(self) -> "EntryCreatePayload":
        if not has_any_macro(self.protein_g, self.carbs_g, self.fat_g):
            raise ValueError("Enter at least one macro value.")
        return self


class EntryUpdatePayload(BaseModel):
    """Partial update of a food entry."""

    model_config = ConfigDict(populate_by_name=True)

    logged_at: datetime | None = Field(default=None, alias="datetime")
    label: str | None = None
    protein_g: float | None = Field(default=None, ge=0, allow_inf_nan=False)
    carbs_g: float | None = Field(default=None, ge=0, allow_inf_nan=False)
    fat_g: float | None = Field(default=None, ge=0, allow_inf_nan=False)


class ParseRequest(BaseModel):
    """Free-text meal description to estimate."""

    text: str = Field(min_length=MIN_PARSE_TEXT_LENGTH)


class CredentialPayload(BaseModel):
    """External-service API key."""

    model_config = ConfigDict(str_strip_whitespace=True)

    api_key: str = Field(min_length=1)
