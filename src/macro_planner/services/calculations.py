"""Pure functions for derived calorie, date and target values."""

import math
from datetime import datetime, tzinfo

from macro_planner.domain.targets import TargetFormula, Targets

CALORIES_PER_GRAM_PROTEIN = 4
CALORIES_PER_GRAM_CARBS = 4
CALORIES_PER_GRAM_FAT = 9

CALORIES_PER_LB = 12
PROTEIN_GRAMS_PER_LB = 1
FAT_CALORIE_SHARE = 0.25
WATER_OZ_PER_LB = 0.5


def round_half_up(value: float) -> int:
    """Round to the nearest integer, with halves rounding toward +infinity."""
    return math.floor(value + 0.5)


def derive_calories(protein_g: float, carbs_g: float, fat_g: float) -> int:
    """Return calories for the given macro grams.

    Inputs are not clamped; negative grams produce negative calories.
    """
    return round_half_up(
        protein_g * CALORIES_PER_GRAM_PROTEIN
        + carbs_g * CALORIES_PER_GRAM_CARBS
        + fat_g * CALORIES_PER_GRAM_FAT
    )


def ensure_aware(instant: datetime, tz: tzinfo | None = None) -> datetime:
    """Attach a timezone to naive datetimes.

    Naive values are read as wall-clock time in ``tz``, or in the system
    local timezone when ``tz`` is None.
    """
    if instant.tzinfo is not None:
        return instant
    if tz is not None:
        return instant.replace(tzinfo=tz)
    return instant.astimezone()


def derive_date_key(instant: datetime, tz: tzinfo | None = None) -> str:
    """Return the YYYY-MM-DD calendar date of an instant in ``tz``."""
    local = ensure_aware(instant, tz).astimezone(tz)
    return f"{local.year:04d}-{local.month:02d}-{local.day:02d}"


def derive_targets(goal_weight_lb: float) -> Targets:
    """Derive daily targets from a goal body weight in pounds.

    Every step rounds before feeding the next one, so carb calories are the
    remainder after the already-rounded protein and fat calories.
    """
    if not math.isfinite(goal_weight_lb) or goal_weight_lb <= 0:
        raise ValueError("Goal weight must be a positive number")

    daily_calories = round_half_up(goal_weight_lb * CALORIES_PER_LB)
    protein_grams = round_half_up(goal_weight_lb * PROTEIN_GRAMS_PER_LB)
    protein_calories = round_half_up(protein_grams * CALORIES_PER_GRAM_PROTEIN)
    fat_calories = round_half_up(daily_calories * FAT_CALORIE_SHARE)
    fat_grams = round_half_up(fat_calories / CALORIES_PER_GRAM_FAT)
    carb_calories = daily_calories - protein_calories - fat_calories
    carb_grams = round_half_up(carb_calories / CALORIES_PER_GRAM_CARBS)

    return Targets(
        daily_calories=daily_calories,
        protein_grams=protein_grams,
        protein_calories=protein_calories,
        fat_calories=fat_calories,
        fat_grams=fat_grams,
        carb_calories=carb_calories,
        carb_grams=carb_grams,
        water_oz=round_half_up(goal_weight_lb * WATER_OZ_PER_LB),
    )


FORMULA_TITLE = "How this is calculated"


def explain_targets(goal_weight_lb: float) -> dict[str, TargetFormula]:
    """Describe each target formula, worked through for a goal weight."""
    targets = derive_targets(goal_weight_lb)
    weight = f"{goal_weight_lb:g}"
    return {
        "daily_calories": TargetFormula(
            title=FORMULA_TITLE,
            formula="Daily calories = goal weight x 12",
            example=(
                f"Example: {weight} lb x 12 = {targets.daily_calories} cal/day"
            ),
        ),
        "protein": TargetFormula(
            title=FORMULA_TITLE,
            formula=(
                "Protein grams = goal weight x 1\n"
                "Protein calories = protein grams x 4"
            ),
            example=(
                f"Example: {weight} lb -> {targets.protein_grams} g"
                f" -> {targets.protein_calories} cal"
            ),
        ),
        "fat": TargetFormula(
            title=FORMULA_TITLE,
            formula=(
                "Fat calories = daily calories x 0.25\n"
                "Fat grams = fat calories / 9"
            ),
            example=(
                f"Example: {targets.daily_calories} cal -> {targets.fat_calories} cal"
                f" -> {targets.fat_grams} g"
            ),
        ),
        "carbs": TargetFormula(
            title=FORMULA_TITLE,
            formula=(
                "Carb calories = daily calories - protein calories - fat calories\n"
                "Carb grams = carb calories / 4"
            ),
            example=(
                f"Example: {targets.daily_calories} - {targets.protein_calories}"
                f" - {targets.fat_calories} = {targets.carb_calories} cal"
                f" -> {targets.carb_grams} g"
            ),
        ),
    }
