"""Tests for the menu planning engine (no database involved)."""

from collections import Counter

import pytest

from core.exceptions import InsufficientDataError, ValidationError
from schemas.menu_schema import GenerateMenuRequest, MealPayload
from services.meal_providers import CatalogMealProvider
from services.menu_generator import (
    CHANGE_FREQUENCIES,
    SLOT_PATTERNS,
    MenuGenerator,
    UserPreferences,
    block_length,
    contains_excluded,
    slots_per_day,
    validate_generation_request,
)

TARGETS = {"calories": 2000, "protein": 150, "carbs": 200, "fat": 67}


def make_prefs(**overrides):
    return UserPreferences(daily_targets=dict(TARGETS), **overrides)


def plan(prefs=None, **request):
    generator = MenuGenerator(CatalogMealProvider())
    return generator.plan(GenerateMenuRequest(**request), prefs or make_prefs())


def meals_of_day(planned, day):
    return [m for m in planned if m.day_number == day]


def simple_meal(name, meal_type="breakfast", cost=1.0, **macros):
    values = {"calories": 500, "protein": 37, "carbs": 50, "fat": 17}
    values.update(macros)
    return MealPayload(
        name=name,
        meal_type=meal_type,
        ingredients=[{"name": "base", "quantity": 1, "unit": "piece", "category": "pantry", "estimated_cost": cost}],
        **values,
    )


def test_three_main_produces_slot_per_day():
    planned = plan(days=3, meals_per_day="3_main")
    assert len(planned) == 9
    for day in (1, 2, 3):
        day_meals = meals_of_day(planned, day)
        assert [m.meal_type for m in day_meals] == ["breakfast", "lunch", "dinner"]
        assert [m.slot_index for m in day_meals] == [0, 1, 2]
        assert [m.meal_time for m in day_meals] == ["08:00", "13:00", "19:00"]


def test_snack_pattern_has_five_slots_and_distinct_snacks():
    planned = plan(days=2, meals_per_day="3_plus_2_snacks")
    assert len(planned) == 10
    day_one = meals_of_day(planned, 1)
    assert [m.meal_type for m in day_one] == ["breakfast", "snack", "lunch", "snack", "dinner"]
    snacks = [m.name for m in day_one if m.meal_type == "snack"]
    assert snacks[0] != snacks[1]


def test_intermediate_pattern():
    planned = plan(days=1, meals_per_day="2_plus_1_intermediate")
    assert [m.meal_type for m in planned] == ["breakfast", "intermediate", "dinner"]


@pytest.mark.parametrize("include_leftovers", [False, True])
@pytest.mark.parametrize("frequency", CHANGE_FREQUENCIES)
@pytest.mark.parametrize("pattern", sorted(SLOT_PATTERNS))
@pytest.mark.parametrize("days", [1, 30])
def test_menu_has_one_meal_per_day_and_slot(days, pattern, frequency, include_leftovers):
    planned = plan(days=days, meals_per_day=pattern, meal_change_frequency=frequency,
                   include_leftovers=include_leftovers)
    assert len(planned) == days * slots_per_day(pattern)
    assert {m.day_number for m in planned} == set(range(1, days + 1))
    for day in range(1, days + 1):
        assert [m.slot_index for m in meals_of_day(planned, day)] == list(range(slots_per_day(pattern)))


def test_daily_frequency_does_not_repeat_before_pool_is_exhausted():
    pool_size = len(CatalogMealProvider().candidates("breakfast", 0, None))
    planned = plan(days=pool_size + 2, meals_per_day="3_main", meal_change_frequency="daily")
    breakfasts = [m.name for m in planned if m.meal_type == "breakfast"]
    assert len(set(breakfasts[:pool_size])) == pool_size
    assert max(Counter(breakfasts).values()) == 2


def test_every_three_days_repeats_within_block():
    planned = plan(days=7, meal_change_frequency="every_3_days")
    names = {day: [m.name for m in meals_of_day(planned, day)] for day in range(1, 8)}
    assert names[1] == names[2] == names[3]
    assert names[4] == names[5] == names[6]


def test_weekly_frequency_repeats_first_week():
    planned = plan(days=9, meal_change_frequency="weekly")
    first = [m.name for m in meals_of_day(planned, 1)]
    for day in range(2, 8):
        assert [m.name for m in meals_of_day(planned, day)] == first


def test_automatic_block_length_depends_on_duration():
    assert block_length("automatic", 7) == 2
    assert block_length("automatic", 14) == 3
    assert block_length("daily", 30) == 1
    assert block_length("weekly", 3) == 7


def test_meal_times_omitted_when_not_fixed():
    planned = plan(days=2, same_meal_times=False)
    assert all(m.meal_time is None for m in planned)


def test_leftovers_reuse_previous_dinner_as_lunch():
    planned = plan(days=4, include_leftovers=True)
    for day in range(2, 5):
        lunch = next(m for m in meals_of_day(planned, day) if m.meal_type == "lunch")
        dinner_before = next(m for m in meals_of_day(planned, day - 1) if m.meal_type == "dinner")
        assert lunch.is_leftover
        assert lunch.name == f"{dinner_before.name} (leftovers)"
        assert lunch.payload.calories == dinner_before.payload.calories
    first_lunch = next(m for m in meals_of_day(planned, 1) if m.meal_type == "lunch")
    assert not first_lunch.is_leftover


def test_dietary_preference_is_a_hard_constraint():
    planned = plan(make_prefs(dietary_preferences=["vegan"]), days=5)
    assert all("vegan" in m.payload.dietary_tags for m in planned)


def test_excluded_ingredients_never_appear():
    planned = plan(make_prefs(excluded_terms=["chicken", "egg"]), days=7)
    for meal in planned:
        assert not contains_excluded(meal.payload, ["chicken", "egg"])
        assert "chicken" not in meal.name.lower()


def test_unsatisfiable_constraints_raise_insufficient_data():
    with pytest.raises(InsufficientDataError) as exc_info:
        plan(make_prefs(dietary_preferences=["vegan", "keto"]), days=2)
    assert exc_info.value.status_code == 400


def test_plan_is_deterministic():
    first = [(m.day_number, m.name) for m in plan(days=6, meals_per_day="3_plus_2_snacks")]
    second = [(m.day_number, m.name) for m in plan(days=6, meals_per_day="3_plus_2_snacks")]
    assert first == second


@pytest.mark.parametrize("request_kwargs,field", [
    ({"days": 0}, "days"),
    ({"days": 31}, "days"),
    ({"meals_per_day": "4_main"}, "mealsPerDay"),
    ({"meal_change_frequency": "monthly"}, "mealChangeFrequency"),
])
def test_invalid_parameters_are_rejected(request_kwargs, field):
    with pytest.raises(ValidationError) as exc_info:
        validate_generation_request(GenerateMenuRequest(**request_kwargs))
    assert exc_info.value.status_code == 400
    assert exc_info.value.details == {"field": field}


def test_feedback_steers_selection_between_equal_meals():
    generator = MenuGenerator(CatalogMealProvider())
    pool = [simple_meal("Alpha Bowl"), simple_meal("Beta Bowl")]
    slot = {"calories": 500, "protein": 37, "carbs": 50, "fat": 17}

    assert generator.select(pool, slot, make_prefs(), Counter(), strict_variety=False).name == "Alpha Bowl"
    disliked = make_prefs(disliked_names={"alpha bowl"})
    assert generator.select(pool, slot, disliked, Counter(), strict_variety=False).name == "Beta Bowl"
    liked = make_prefs(liked_names={"beta bowl"})
    assert generator.select(pool, slot, liked, Counter(), strict_variety=False).name == "Beta Bowl"


def test_variety_penalty_prefers_unused_meal():
    generator = MenuGenerator(CatalogMealProvider())
    pool = [simple_meal("Alpha Bowl"), simple_meal("Beta Bowl")]
    slot = {"calories": 500, "protein": 37, "carbs": 50, "fat": 17}
    used = Counter({"Alpha Bowl": 1})
    assert generator.select(pool, slot, make_prefs(), used, strict_variety=False).name == "Beta Bowl"


def test_budget_keeps_affordable_or_cheapest_meals():
    generator = MenuGenerator(CatalogMealProvider())
    pool = [simple_meal("Cheap", cost=2.0), simple_meal("Mid", cost=5.0), simple_meal("Pricey", cost=9.0)]
    affordable = generator.filter_candidates(pool, make_prefs(), budget_per_meal=6.0)
    assert [m.name for m in affordable] == ["Cheap", "Mid"]
    cheapest = generator.filter_candidates(pool, make_prefs(), budget_per_meal=1.0)
    assert [m.name for m in cheapest] == ["Cheap"]


def test_exclusions_match_whole_words():
    eggs = simple_meal("Hard-Boiled Eggs", meal_type="snack")
    eggs.ingredients[0].name = "eggs"
    eggplant = simple_meal("Roasted Eggplant", meal_type="dinner")
    eggplant.ingredients[0].name = "eggplant"

    assert not contains_excluded(eggs, ["oil"])
    assert contains_excluded(eggs, ["egg"])
    assert contains_excluded(eggs, ["eggs"])
    assert not contains_excluded(eggplant, ["egg"])
    assert contains_excluded(eggplant, ["eggplant"])


def test_exclusions_match_allergens_and_multiword_ingredients():
    meal = simple_meal("Apple Slices", meal_type="snack")
    meal.ingredients[0].name = "peanut butter"
    meal.allergens = ["peanuts"]

    assert contains_excluded(meal, ["peanut"])
    assert contains_excluded(meal, ["peanuts"])
    assert contains_excluded(meal, ["peanut butter"])
    assert not contains_excluded(meal, ["nuts"])
