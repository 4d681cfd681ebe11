"""Domain models for daily statistics."""

from dataclasses import dataclass

from macro_planner.domain.targets import Targets


@dataclass(frozen=True)
class DailyTotals:
    """Summed macros for one local calendar day."""

    day: str
    calories: int
    protein_g: float
    carbs_g: float
    fat_g: float


@dataclass(frozen=True)
class RemainingMacros:
    """Targets minus consumed totals; negative when over target."""

    calories: int
    protein_g: float
    carbs_g: float
    fat_g: float


@dataclass(frozen=True)
class TodaySummary:
    """Today's totals alongside targets when a goal weight is set."""

    totals: DailyTotals
    targets: Targets | None
    remaining: RemainingMacros | None
