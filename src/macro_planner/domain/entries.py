"""Domain models for food entries."""

from dataclasses import dataclass
from datetime import datetime
from typing import Literal

EntrySource = Literal["manual", "ai"]


@dataclass(frozen=True)
class EntryDraft:
    """Author-supplied fields of a food entry before it is stored."""

    logged_at: datetime
    label: str
    protein_g: float
    carbs_g: float
    fat_g: float
    source: EntrySource = "manual"
    raw_text: str | None = None


@dataclass(frozen=True)
class FoodEntry:
    """A stored meal or snack with its derived fields."""

    id: str
    logged_at: datetime
    date_key: str
    label: str
    protein_g: float
    carbs_g: float
    fat_g: float
    calories: int
    source: EntrySource
    raw_text: str | None = None
