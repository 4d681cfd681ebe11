"""Tests for derived-value functions."""

import math
from datetime import UTC, datetime

import pytest

from macro_planner.services.calculations import (
    derive_calories,
    derive_date_key,
    derive_targets,
    explain_targets,
    round_half_up,
)
from tests.conftest import NEW_YORK


def test_round_half_up_rounds_halves_toward_positive_infinity() -> None:
    assert round_half_up(2.5) == 3
    assert round_half_up(3.5) == 4
    assert round_half_up(-2.5) == -2
    assert round_half_up(66.666) == 67


def test_derive_calories_uses_atwater_factors() -> None:
    assert derive_calories(10, 20, 5) == 165
    assert derive_calories(0, 0, 0) == 0


def test_derive_calories_rounds_half_up() -> None:
    assert derive_calories(0.125, 0, 0) == 1
    assert derive_calories(2.5, 2.5, 0) == 20


def test_derive_calories_does_not_clamp_negative_input() -> None:
    assert derive_calories(-1, 0, 0) == -4


def test_derive_date_key_projects_to_local_calendar_day() -> None:
    instant = datetime(2024, 3, 1, 3, 30, tzinfo=UTC)

    assert derive_date_key(instant, NEW_YORK) == "2024-02-29"
    assert derive_date_key(instant, UTC) == "2024-03-01"


def test_derive_date_key_zero_pads_and_reads_naive_as_local() -> None:
    assert derive_date_key(datetime(2024, 1, 5, 23, 0), NEW_YORK) == "2024-01-05"


def test_derive_targets_for_200_lb() -> None:
    targets = derive_targets(200)

    assert targets.daily_calories == 2400
    assert targets.protein_grams == 200
    assert targets.protein_calories == 800
    assert targets.fat_calories == 600
    assert targets.fat_grams == 67
    assert targets.carb_calories == 1000
    assert targets.carb_grams == 250
    assert targets.water_oz == 100


def test_derive_targets_rounds_each_step_before_the_next() -> None:
    targets = derive_targets(150.5)

    assert targets.daily_calories == 1806
    assert targets.protein_grams == 151
    assert targets.protein_calories == 604
    assert targets.fat_calories == 452
    assert targets.fat_grams == 50
    assert targets.carb_calories == 750
    assert targets.carb_grams == 188
    assert targets.water_oz == 75


@pytest.mark.parametrize("weight", [0, -5, math.nan, math.inf])
def test_derive_targets_rejects_invalid_weight(weight: float) -> None:
    with pytest.raises(ValueError):
        derive_targets(weight)


def test_explain_targets_works_through_200_lb() -> None:
    formulas = explain_targets(200)

    assert list(formulas) == ["daily_calories", "protein", "fat", "carbs"]
    assert formulas["daily_calories"].formula == "Daily calories = goal weight x 12"
    assert formulas["daily_calories"].example == "Example: 200 lb x 12 = 2400 cal/day"
    assert formulas["protein"].example == "Example: 200 lb -> 200 g -> 800 cal"
    assert formulas["fat"].example == "Example: 2400 cal -> 600 cal -> 67 g"
    assert formulas["carbs"].example == (
        "Example: 2400 - 800 - 600 = 1000 cal -> 250 g"
    )
    assert all(f.title == "How this is calculated" for f in formulas.values())


def test_explain_targets_uses_rounded_values() -> None:
    formulas = explain_targets(150.5)

    assert formulas["daily_calories"].example == (
        "Example: 150.5 lb x 12 = 1806 cal/day"
    )
    assert formulas["protein"].example == "Example: 150.5 lb -> 151 g -> 604 cal"
    assert formulas["carbs"].example == (
        "Example: 1806 - 604 - 452 = 750 cal -> 188 g"
    )
