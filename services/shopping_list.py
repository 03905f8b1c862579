"""Shopping list derivation for a recommended menu.

Walks every meal x ingredient, groups by ingredient category and merges
lines with the same (name, unit) inside a category. Ingredients without a
cost contribute zero. Output ordering is fixed (categories and items sorted
by name) so deriving twice from the same menu gives identical results.
"""

from collections import defaultdict
from typing import Dict

from core.logger import get_logger

logger = get_logger("services.shopping_list")


def build_shopping_list(menu) -> Dict:
    """Aggregate a menu's ingredients into a category-grouped shopping list.

    Args:
        menu: RecommendedMenu ORM object with meals and ingredients loaded.

    Returns:
        Dict with `menu_id`, `total_estimated_cost`, `categories`
        (category -> list of items) and `category_totals`.
    """
    merged: Dict[str, Dict[tuple, Dict]] = defaultdict(dict)
    for meal in menu.meals:
        for ingredient in meal.ingredients:
            category = (ingredient.category or "other").lower()
            key = (ingredient.name.strip().lower(), (ingredient.unit or "piece").lower())
            item = merged[category].get(key)
            if item is None:
                item = {"name": key[0], "quantity": 0.0, "unit": key[1], "cost": 0.0, "meals": set()}
                merged[category][key] = item
            item["quantity"] += ingredient.quantity or 0
            item["cost"] += ingredient.estimated_cost or 0
            item["meals"].add(meal.meal_id)

    categories = {}
    category_totals = {}
    total = 0.0
    for category in sorted(merged):
        items = []
        subtotal = 0.0
        for key in sorted(merged[category]):
            item = merged[category][key]
            cost = round(item["cost"], 2)
            subtotal += cost
            items.append({
                "name": item["name"],
                "quantity": round(item["quantity"], 2),
                "unit": item["unit"],
                "estimated_cost": cost,
                "meal_count": len(item["meals"]),
            })
        categories[category] = items
        category_totals[category] = round(subtotal, 2)
        total += subtotal

    logger.info("Shopping list for menu %s: %s categories, total=%.2f", menu.menu_id, len(categories), total)
    return {
        "menu_id": menu.menu_id,
        "total_estimated_cost": round(total, 2),
        "categories": categories,
        "category_totals": category_totals,
    }
