"""Unit tests for shopping list aggregation."""

from types import SimpleNamespace

from services.shopping_list import build_shopping_list


def ingredient(name, quantity, unit, category, cost):
    return SimpleNamespace(name=name, quantity=quantity, unit=unit, category=category, estimated_cost=cost)


def make_menu():
    breakfast = SimpleNamespace(meal_id=1, ingredients=[
        ingredient("Eggs", 2, "piece", "protein", 0.6),
        ingredient("spinach", 30, "g", "produce", 0.4),
    ])
    lunch = SimpleNamespace(meal_id=2, ingredients=[
        ingredient("eggs", 1, "piece", "protein", 0.3),
        ingredient("olive oil", 10, "ml", "pantry", None),
        ingredient("spinach", 1, "bunch", "produce", 1.5),
    ])
    return SimpleNamespace(menu_id=7, meals=[breakfast, lunch])


def test_merges_same_name_and_unit_within_category():
    result = build_shopping_list(make_menu())
    protein = result["categories"]["protein"]
    assert protein == [{"name": "eggs", "quantity": 3, "unit": "piece", "estimated_cost": 0.9, "meal_count": 2}]
    # different units stay separate
    assert [(i["name"], i["unit"]) for i in result["categories"]["produce"]] == [("spinach", "bunch"), ("spinach", "g")]


def test_missing_cost_counts_as_zero_and_totals_add_up():
    result = build_shopping_list(make_menu())
    assert result["categories"]["pantry"][0]["estimated_cost"] == 0
    assert result["category_totals"] == {"pantry": 0.0, "produce": 1.9, "protein": 0.9}
    assert result["total_estimated_cost"] == 2.8
    assert list(result["categories"]) == ["pantry", "produce", "protein"]


def test_empty_menu():
    result = build_shopping_list(SimpleNamespace(menu_id=1, meals=[]))
    assert result == {"menu_id": 1, "total_estimated_cost": 0.0, "categories": {}, "category_totals": {}}
