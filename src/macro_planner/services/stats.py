"""Daily statistics over logged entries."""

from dataclasses import dataclass
from datetime import date, datetime, timedelta, tzinfo

from macro_planner.domain.entries import FoodEntry
from macro_planner.domain.stats import DailyTotals, RemainingMacros, TodaySummary
from macro_planner.domain.targets import Targets
from macro_planner.services.calculations import derive_targets
from macro_planner.services.entries import EntryStore
from macro_planner.services.goals import GoalStore

DEFAULT_HISTORY_DAYS = 30


@dataclass
class StatsService:
    """Service for today's totals and the recent daily macro series."""

    entry_store: EntryStore
    goal_store: GoalStore
    timezone: tzinfo | None = None

    def get_today(self, now: datetime | None = None) -> TodaySummary:
        """Return today's totals with targets and remaining macros."""
        today = self._today(now)
        totals = _aggregate_day(today.isoformat(), self.entry_store.get_all())
        goal_weight = self.goal_store.get()
        if goal_weight is None:
            return TodaySummary(totals=totals, targets=None, remaining=None)
        targets = derive_targets(goal_weight)
        return TodaySummary(
            totals=totals,
            targets=targets,
            remaining=_remaining(targets, totals),
        )

    def get_daily(
        self, days: int = DEFAULT_HISTORY_DAYS, now: datetime | None = None
    ) -> list[DailyTotals]:
        """Return per-day totals for the last ``days`` days, oldest first."""
        if days < 1:
            raise ValueError("days must be at least 1")
        today = self._today(now)
        entries = self.entry_store.get_all()
        start = today - timedelta(days=days - 1)
        return [
            _aggregate_day((start + timedelta(days=offset)).isoformat(), entries)
            for offset in range(days)
        ]

    def _today(self, now: datetime | None) -> date:
        current = now or datetime.now(tz=self.timezone)
        if current.tzinfo is None:
            return current.date()
        return current.astimezone(self.timezone).date()


def _aggregate_day(day: str, entries: list[FoodEntry]) -> DailyTotals:
    calories = 0
    protein = 0.0
    carbs = 0.0
    fat = 0.0
    for entry in entries:
        if entry.date_key != day:
            continue
        calories += entry.calories
        protein += entry.protein_g
        carbs += entry.carbs_g
        fat += entry.fat_g
    return DailyTotals(
        day=day,
        calories=calories,
        protein_g=round(protein, 1),
        carbs_g=round(carbs, 1),
        fat_g=round(fat, 1),
    )


def _remaining(targets: Targets, totals: DailyTotals) -> RemainingMacros:
    return RemainingMacros(
        calories=targets.daily_calories - totals.calories,
        protein_g=round(targets.protein_grams - totals.protein_g, 1),
        carbs_g=round(targets.carb_grams - totals.carbs_g, 1),
        fat_g=round(targets.fat_grams - totals.fat_g, 1),
    )
