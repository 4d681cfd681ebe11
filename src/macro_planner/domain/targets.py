"""Daily nutrition targets."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Targets:
    """Daily calorie, macro and water targets derived from a goal weight."""

    daily_calories: int
    protein_grams: int
    protein_calories: int
    fat_calories: int
    fat_grams: int
    carb_calories: int
    carb_grams: int
    water_oz: int


@dataclass(frozen=True)
class TargetFormula:
    """How one target is calculated, with a worked example."""

    title: str
    formula: str
    example: str
