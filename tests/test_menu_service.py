"""Tests for recommended menu persistence and mutations."""

from datetime import date
from typing import get_args

import pytest

from conftest import add_questionnaire
from core.exceptions import (
    BudgetMissingError,
    InsufficientDataError,
    NotFoundError,
    QuestionnaireMissingError,
    UpstreamServiceError,
    ValidationError,
)
from data.meal_catalog import MEAL_CATALOG
from database import models
from schemas.menu_schema import GenerateMenuRequest, MealType, ReplaceMealPreferences, load_json_list
from services.meal_providers import CatalogMealProvider, MealProvider
from services.menu_generator import DIET_TAGS, SLOT_PATTERNS, slots_per_day
from services.menu_service import RecommendedMenuService


class FailingProvider(MealProvider):
    name = "failing"

    def candidates(self, meal_type, count, context):
        raise UpstreamServiceError("Menu generation service is unavailable, please try again", provider=self.name)


def one_of_each_type():
    """A catalog with exactly one meal per main meal type."""
    seen = {}
    for entry in MEAL_CATALOG:
        seen.setdefault(entry["meal_type"], entry)
    return [seen["breakfast"], seen["lunch"], seen["dinner"]]


def generate(service, db, user, **request):
    return service.generate_menu(db, user.id, GenerateMenuRequest(**request))


def test_generate_persists_menu_meals_and_ingredients(db, user, questionnaire, menu_service):
    menu = generate(menu_service, db, user, days=3)

    assert db.query(models.RecommendedMenu).count() == 1
    assert len(menu.meals) == 9
    assert all(meal.ingredients for meal in menu.meals)
    assert menu.title == "3-Day Balanced Menu"
    assert menu.days_count == 3
    assert menu.meal_pattern == "3_main"
    assert menu.total_calories == pytest.approx(sum(m.calories for m in menu.meals), abs=0.1)
    assert menu.estimated_cost == pytest.approx(sum(m.estimated_cost for m in menu.meals), abs=0.01)


def test_generate_respects_questionnaire_allergies(db, user, questionnaire, menu_service):
    menu = generate(menu_service, db, user, days=7, meals_per_day="3_plus_2_snacks")
    for meal in menu.meals:
        assert "peanuts" not in load_json_list(meal.allergens)
        assert all("peanut" not in i.name for i in meal.ingredients)


def test_generate_uses_requested_preferences(db, user, questionnaire, menu_service):
    menu = generate(menu_service, db, user, days=2, dietary_preferences=["Vegan"], excluded_ingredients=["tofu"])
    assert menu.dietary_category == "vegan"
    for meal in menu.meals:
        assert "vegan" in load_json_list(meal.dietary_tags)
        assert all("tofu" not in i.name for i in meal.ingredients)


@pytest.mark.parametrize("pattern", sorted(SLOT_PATTERNS))
@pytest.mark.parametrize("style", ["balanced", *sorted(DIET_TAGS)])
def test_every_dietary_style_fills_every_pattern(db, user, menu_service, style, pattern):
    add_questionnaire(db, user, dietary_style=style)
    menu = generate(menu_service, db, user, days=2, meals_per_day=pattern)
    assert len(menu.meals) == 2 * slots_per_day(pattern)
    if style != "balanced":
        assert all(style in load_json_list(meal.dietary_tags) for meal in menu.meals)


@pytest.mark.parametrize("meal_type", get_args(MealType))
@pytest.mark.parametrize("tag", sorted(DIET_TAGS))
def test_catalog_offers_a_choice_for_every_tag_and_meal_type(tag, meal_type):
    matching = [e["name"] for e in MEAL_CATALOG if e["meal_type"] == meal_type and tag in e["dietary_tags"]]
    assert len(matching) >= 2


def test_invalid_request_persists_nothing(db, user, questionnaire, menu_service):
    with pytest.raises(ValidationError):
        generate(menu_service, db, user, days=31)
    assert db.query(models.RecommendedMenu).count() == 0
    assert db.query(models.RecommendedMeal).count() == 0


def test_provider_failure_persists_nothing(db, user, questionnaire):
    service = RecommendedMenuService(FailingProvider())
    with pytest.raises(UpstreamServiceError) as exc_info:
        generate(service, db, user, days=2)
    assert exc_info.value.status_code == 503
    assert exc_info.value.details["retryable"] is True
    assert db.query(models.RecommendedMenu).count() == 0


def test_generate_requires_questionnaire(db, user, menu_service):
    with pytest.raises(QuestionnaireMissingError) as exc_info:
        generate(menu_service, db, user, days=2)
    assert "questionnaire" in exc_info.value.message


def test_budget_preference_requires_budget(db, user, menu_service):
    add_questionnaire(db, user, budget=None)
    with pytest.raises(BudgetMissingError):
        generate(menu_service, db, user, days=2, dietary_preferences=["budget_friendly"])
    menu = generate(menu_service, db, user, days=1, dietary_preferences=["budget_friendly"], budget=40)
    assert len(menu.meals) == 3


def test_unsatisfiable_preferences_raise(db, user, questionnaire, menu_service):
    with pytest.raises(InsufficientDataError):
        generate(menu_service, db, user, days=1, dietary_preferences=["vegan", "keto"])
    assert db.query(models.RecommendedMenu).count() == 0


def test_list_menus_newest_first_and_scoped(db, user, other_user, questionnaire, menu_service):
    add_questionnaire(db, other_user)
    first = generate(menu_service, db, user, days=1)
    second = generate(menu_service, db, user, days=2)
    generate(menu_service, db, other_user, days=1)

    menus = menu_service.list_menus(db, user.id)
    assert [m.menu_id for m in menus] == [second.menu_id, first.menu_id]


def test_get_menu_of_other_user_is_not_found(db, user, other_user, questionnaire, menu_service):
    menu = generate(menu_service, db, user, days=1)
    with pytest.raises(NotFoundError) as exc_info:
        menu_service.get_menu(db, other_user.id, menu.menu_id)
    assert exc_info.value.message == "Menu not found"


def test_replace_meal_keeps_slot_and_updates_totals(db, user, questionnaire, menu_service):
    menu = generate(menu_service, db, user, days=3)
    target = menu.meals[0]
    slot = (target.meal_id, target.day_number, target.meal_type, target.meal_time)
    names_before = {m.name for m in menu.meals}

    replaced = menu_service.replace_meal(db, user.id, menu.menu_id, target.meal_id)

    assert (replaced.meal_id, replaced.day_number, replaced.meal_type, replaced.meal_time) == slot
    assert replaced.name not in names_before
    assert replaced.ingredients
    menu = menu_service.get_menu(db, user.id, menu.menu_id)
    assert menu.total_calories == pytest.approx(sum(m.calories for m in menu.meals), abs=0.1)
    assert menu.estimated_cost == pytest.approx(sum(m.estimated_cost for m in menu.meals), abs=0.01)


def test_replace_meal_honors_exclusions_and_calorie_cap(db, user, questionnaire, menu_service):
    menu = generate(menu_service, db, user, days=1)
    dinner = next(m for m in menu.meals if m.meal_type == "dinner")
    prefs = ReplaceMealPreferences(excluded_ingredients=["chicken"], max_calories=560)

    replaced = menu_service.replace_meal(db, user.id, menu.menu_id, dinner.meal_id, prefs)

    assert "chicken" not in replaced.name.lower()
    assert replaced.calories <= 560


def test_replace_meal_in_foreign_menu_leaves_it_untouched(db, user, other_user, questionnaire, menu_service):
    menu = generate(menu_service, db, user, days=1)
    meal = menu.meals[0]
    original_name = meal.name

    with pytest.raises(NotFoundError):
        menu_service.replace_meal(db, other_user.id, menu.menu_id, meal.meal_id)

    db.expire_all()
    assert db.get(models.RecommendedMeal, meal.meal_id).name == original_name


def test_replace_meal_not_in_menu(db, user, questionnaire, menu_service):
    first = generate(menu_service, db, user, days=1)
    second = generate(menu_service, db, user, days=1)
    with pytest.raises(NotFoundError) as exc_info:
        menu_service.replace_meal(db, user.id, first.menu_id, second.meals[0].meal_id)
    assert exc_info.value.message == "Meal not found"


def test_replace_meal_without_alternative(db, user, questionnaire):
    service = RecommendedMenuService(CatalogMealProvider(one_of_each_type()))
    menu = generate(service, db, user, days=1)
    with pytest.raises(InsufficientDataError) as exc_info:
        service.replace_meal(db, user.id, menu.menu_id, menu.meals[0].meal_id)
    assert exc_info.value.message == "No alternative meal available"


def test_goal_filter_falls_back_to_full_pool():
    class Current:
        protein, calories, carbs = 20, 400, 40

    provider = CatalogMealProvider()
    pool = provider.candidates("breakfast", 8, None)
    higher = RecommendedMenuService._apply_goal_filter(pool, Current, "higher_protein")
    assert higher and all(c.protein > 20 for c in higher)
    assert len(higher) < len(pool)
    impossible = type("Current", (), {"protein": 500, "calories": 400, "carbs": 40})
    assert RecommendedMenuService._apply_goal_filter(pool, impossible, "higher_protein") == pool


def test_favorite_toggle_and_explicit_set(db, user, questionnaire, menu_service):
    menu = generate(menu_service, db, user, days=1)
    meal_id = menu.meals[0].meal_id

    assert menu_service.set_favorite(db, user.id, menu.menu_id, meal_id) is True
    assert menu_service.set_favorite(db, user.id, menu.menu_id, meal_id) is False
    assert menu_service.set_favorite(db, user.id, menu.menu_id, meal_id, True) is True
    assert menu_service.set_favorite(db, user.id, menu.menu_id, meal_id, True) is True
    assert db.get(models.RecommendedMeal, meal_id).is_favorite is True


def test_feedback_is_recorded_and_feeds_preferences(db, user, questionnaire, menu_service):
    menu = generate(menu_service, db, user, days=1)
    meal = menu.meals[0]

    menu_service.record_feedback(db, user.id, menu.menu_id, meal.meal_id, liked=False)
    menu_service.record_feedback(db, user.id, menu.menu_id, meal.meal_id, liked=False)

    assert db.query(models.MealFeedback).filter(models.MealFeedback.meal_id == meal.meal_id).count() == 2
    assert db.get(models.RecommendedMeal, meal.meal_id).liked is False
    prefs = menu_service.build_preferences(db, user.id, GenerateMenuRequest(days=1))
    assert meal.name.lower() in prefs.disliked_names
    assert not prefs.liked_names


def test_start_today_activates_one_menu(db, user, questionnaire, menu_service):
    first = generate(menu_service, db, user, days=1)
    second = generate(menu_service, db, user, days=1)
    today = date(2026, 3, 2)

    menu_service.start_today(db, user.id, first.menu_id, today=today)
    started = menu_service.start_today(db, user.id, second.menu_id, today=today)

    assert started.is_active is True
    assert started.started_at == today
    assert db.get(models.RecommendedMenu, first.menu_id).is_active is False


def test_shopping_list_is_stable_and_sums_costs(db, user, questionnaire, menu_service):
    menu = generate(menu_service, db, user, days=3)

    first = menu_service.shopping_list(db, user.id, menu.menu_id)
    second = menu_service.shopping_list(db, user.id, menu.menu_id)

    assert first == second
    assert list(first["categories"]) == sorted(first["categories"])
    items = [item for items in first["categories"].values() for item in items]
    assert first["total_estimated_cost"] == pytest.approx(sum(i["estimated_cost"] for i in items), abs=0.01)
    ingredient_cost = sum(i.estimated_cost or 0 for m in menu.meals for i in m.ingredients)
    assert first["total_estimated_cost"] == pytest.approx(ingredient_cost, abs=0.05)
