"""Menu generation engine.

Turns generation parameters and a user's preferences into a day-by-slot
plan of meals. The engine is pure: it reads candidates from a
`MealProvider` and returns `PlannedMeal` objects; persistence happens in
`services.menu_service`.

Selection per slot:

1. Drop candidates containing excluded ingredients, allergens or disliked
   foods, and those missing a required dietary tag.
2. Keep candidates within the slot's share of the daily budget, or the
   cheapest ones when none fit.
3. Score by calorie and macro proximity to the slot target, plus a bonus
   for meals the user liked before and a penalty for disliked ones.
4. Variety: under ``daily`` only the least-used candidates remain
   eligible; otherwise each prior use costs a fixed penalty.

Ties prefer unused meals, then name order, so a fixed input always yields
the same menu.
"""

import re
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Set

from core.exceptions import InsufficientDataError, ValidationError
from core.logger import get_logger
from schemas.menu_schema import MealPayload
from services.meal_providers import MealProvider, MealRequestContext
from services.nutrition_calculator import nutrition_calculator

logger = get_logger("services.menu_generator")

MIN_DAYS = 1
MAX_DAYS = 30

DIET_TAGS = {"vegetarian", "vegan", "keto", "gluten_free", "high-protein"}
BUDGET_PREFERENCE = "budget_friendly"


@dataclass(frozen=True)
class Slot:
    meal_type: str
    share: float
    default_time: str


SLOT_PATTERNS: Dict[str, Sequence[Slot]] = {
    "3_main": (
        Slot("breakfast", 0.25, "08:00"),
        Slot("lunch", 0.40, "13:00"),
        Slot("dinner", 0.35, "19:00"),
    ),
    "3_plus_2_snacks": (
        Slot("breakfast", 0.22, "08:00"),
        Slot("snack", 0.08, "10:30"),
        Slot("lunch", 0.32, "13:00"),
        Slot("snack", 0.08, "16:30"),
        Slot("dinner", 0.30, "19:30"),
    ),
    "2_plus_1_intermediate": (
        Slot("breakfast", 0.30, "08:00"),
        Slot("intermediate", 0.25, "12:30"),
        Slot("dinner", 0.45, "19:00"),
    ),
}

CHANGE_FREQUENCIES = ("daily", "every_3_days", "weekly", "automatic")


def slots_per_day(meals_per_day: str) -> int:
    return len(SLOT_PATTERNS[meals_per_day])


def block_length(frequency: str, days: int) -> int:
    """Number of consecutive days that share the same meals."""
    if frequency == "every_3_days":
        return 3
    if frequency == "weekly":
        return 7
    if frequency == "automatic":
        return 2 if days <= 7 else 3
    return 1


def validate_generation_request(request) -> None:
    """Reject out-of-range parameters before any generation work."""
    if not isinstance(request.days, int) or not MIN_DAYS <= request.days <= MAX_DAYS:
        raise ValidationError(f"Days must be between {MIN_DAYS} and {MAX_DAYS}", field="days")
    if request.meals_per_day not in SLOT_PATTERNS:
        raise ValidationError("Invalid meals per day option", field="mealsPerDay")
    if request.meal_change_frequency not in CHANGE_FREQUENCIES:
        raise ValidationError("Invalid meal change frequency option", field="mealChangeFrequency")


@dataclass
class UserPreferences:
    """Everything about the user that constrains or steers selection."""

    daily_targets: Dict[str, float]
    dietary_preferences: List[str] = field(default_factory=list)
    excluded_terms: List[str] = field(default_factory=list)
    daily_budget: Optional[float] = None
    liked_names: Set[str] = field(default_factory=set)
    disliked_names: Set[str] = field(default_factory=set)

    @property
    def required_tags(self) -> List[str]:
        return [p for p in self.dietary_preferences if p in DIET_TAGS]

    @property
    def dietary_style(self) -> str:
        tags = self.required_tags
        return tags[0] if tags else "balanced"


@dataclass
class PlannedMeal:
    day_number: int
    slot_index: int
    meal_type: str
    meal_time: Optional[str]
    payload: MealPayload
    is_leftover: bool = False

    @property
    def name(self) -> str:
        if self.is_leftover:
            return f"{self.payload.name} (leftovers)"
        return self.payload.name


def _term_pattern(term: str) -> "re.Pattern[str]":
    # "eggs" and "egg" match each other; "egg" never matches "eggplant".
    stem = term[:-1] if len(term) > 3 and term.endswith("s") else term
    return re.compile(rf"\b{re.escape(stem)}(?:e?s)?\b")


def contains_excluded(meal: MealPayload, excluded_terms: Sequence[str]) -> bool:
    """True when an excluded term appears as a whole word in the meal's name, ingredients or allergens."""
    if not excluded_terms:
        return False
    haystack = [meal.name.lower(), *(i.name.lower() for i in meal.ingredients), *meal.allergens]
    patterns = [_term_pattern(term) for term in excluded_terms]
    return any(pattern.search(text) for pattern in patterns for text in haystack)


class MenuGenerator:
    """Plans meals for every day x slot of a menu."""

    def __init__(self, provider: MealProvider, variety_penalty: float = 15.0,
                 liked_bonus: float = 10.0, disliked_penalty: float = 25.0):
        self.provider = provider
        self.variety_penalty = variety_penalty
        self.liked_bonus = liked_bonus
        self.disliked_penalty = disliked_penalty

    def filter_candidates(self, candidates: List[MealPayload], prefs: UserPreferences,
                          budget_per_meal: Optional[float]) -> List[MealPayload]:
        """Apply hard constraints (exclusions, diet tags) and the soft budget cap."""
        required = prefs.required_tags
        pool = [
            m for m in candidates
            if not contains_excluded(m, prefs.excluded_terms)
            and all(tag in m.dietary_tags for tag in required)
        ]
        if budget_per_meal is not None and pool:
            affordable = [m for m in pool if m.estimated_cost <= budget_per_meal]
            if affordable:
                pool = affordable
            else:
                cheapest = min(m.estimated_cost for m in pool)
                pool = [m for m in pool if m.estimated_cost == cheapest]
                logger.info("No meal within %.2f budget; using cheapest at %.2f", budget_per_meal, cheapest)
        return pool

    def score_meal(self, meal: MealPayload, target_calories: float,
                   target_macros: Dict[str, float], dietary_style: str = "balanced") -> float:
        """Heuristic fit of a meal to a slot's calorie and macro targets.

        For high-protein diets protein proximity is weighted more heavily
        and protein-dense meals get a bonus.
        """
        cal_diff = abs(meal.calories - target_calories)
        cal_score = max(0, 30 - (cal_diff / max(1, target_calories)) * 30)

        if dietary_style == "high-protein":
            protein_weight, carb_weight = 3.0, 0.5
            protein_pct = (meal.protein * 4) / max(1, meal.calories)
            protein_bonus = 20 if protein_pct >= 0.35 else (10 if protein_pct >= 0.30 else 0)
        else:
            protein_weight, carb_weight, protein_bonus = 1.0, 1.0, 0

        p_diff = abs(meal.protein - target_macros["protein"]) * protein_weight
        c_diff = abs(meal.carbs - target_macros["carbs"]) * carb_weight
        f_diff = abs(meal.fat - target_macros["fat"])
        denom = (target_macros["protein"] * protein_weight + target_macros["carbs"] * carb_weight
                 + max(1, target_macros["fat"]))
        macro_penalty = (p_diff + c_diff + f_diff) / max(1, denom)
        macro_score = max(0, 50 - macro_penalty * 50) + protein_bonus
        return cal_score + macro_score

    def select(self, pool: List[MealPayload], slot_targets: Dict[str, float], prefs: UserPreferences,
               used: Counter, strict_variety: bool) -> MealPayload:
        """Pick the best meal for one slot from an already filtered pool."""
        if strict_variety:
            least = min(used[m.name] for m in pool)
            pool = [m for m in pool if used[m.name] == least]

        def total_score(meal: MealPayload) -> float:
            score = self.score_meal(meal, slot_targets["calories"], slot_targets, prefs.dietary_style)
            key = meal.name.lower()
            if key in prefs.liked_names:
                score += self.liked_bonus
            if key in prefs.disliked_names:
                score -= self.disliked_penalty
            if not strict_variety:
                score -= self.variety_penalty * used[meal.name]
            return round(score, 6)

        ranked = sorted(pool, key=lambda m: (-total_score(m), used[m.name], m.name))
        return ranked[0]

    def plan(self, request, prefs: UserPreferences) -> List[PlannedMeal]:
        """Produce a PlannedMeal for every day x slot implied by the request.

        Raises:
            ValidationError: Parameters out of range.
            InsufficientDataError: No candidate satisfies the constraints for a slot.
            UpstreamServiceError: The provider failed (propagated).
        """
        validate_generation_request(request)
        slots = SLOT_PATTERNS[request.meals_per_day]
        block = block_length(request.meal_change_frequency, request.days)
        strict_variety = request.meal_change_frequency == "daily"
        fresh_days = len(range(1, request.days + 1, block))
        has_leftover_pair = any(s.meal_type == "lunch" for s in slots) and any(s.meal_type == "dinner" for s in slots)

        pools: Dict[str, List[MealPayload]] = {}
        for meal_type in dict.fromkeys(s.meal_type for s in slots):
            share = sum(s.share for s in slots if s.meal_type == meal_type) / sum(
                1 for s in slots if s.meal_type == meal_type)
            context = MealRequestContext(
                target_calories=prefs.daily_targets["calories"] * share,
                dietary_preferences=list(prefs.dietary_preferences),
                excluded_ingredients=list(prefs.excluded_terms),
                budget_per_meal=prefs.daily_budget * share if prefs.daily_budget is not None else None,
            )
            candidates = self.provider.candidates(meal_type, min(fresh_days * 2 + 2, 12), context)
            pools[meal_type] = candidates
            logger.debug("Provider %s returned %s %s candidates", self.provider.name, len(candidates), meal_type)

        used: Counter = Counter()
        by_day: Dict[int, List[PlannedMeal]] = {}
        for day in range(1, request.days + 1):
            block_start = ((day - 1) // block) * block + 1
            day_meals = []
            for index, slot in enumerate(slots):
                meal_time = slot.default_time if request.same_meal_times else None
                if day != block_start:
                    source = by_day[block_start][index]
                    day_meals.append(PlannedMeal(day, index, slot.meal_type, meal_time, source.payload, source.is_leftover))
                    continue
                if request.include_leftovers and has_leftover_pair and slot.meal_type == "lunch" and day > 1:
                    previous_dinner = next(m for m in by_day[day - 1] if m.meal_type == "dinner")
                    leftover = previous_dinner.payload.model_copy(update={"meal_type": "lunch"})
                    day_meals.append(PlannedMeal(day, index, "lunch", meal_time, leftover, is_leftover=True))
                    continue

                budget = prefs.daily_budget * slot.share if prefs.daily_budget is not None else None
                pool = self.filter_candidates(pools[slot.meal_type], prefs, budget)
                if not pool:
                    raise InsufficientDataError(f"No {slot.meal_type} meals match your preferences and exclusions")
                targets = nutrition_calculator.split_for_slot(prefs.daily_targets, slot.share)
                chosen = self.select(pool, targets, prefs, used, strict_variety)
                used[chosen.name] += 1
                day_meals.append(PlannedMeal(day, index, slot.meal_type, meal_time, chosen))
            by_day[day] = day_meals

        planned = [m for day in sorted(by_day) for m in by_day[day]]
        logger.info("Planned %s meals over %s days (pattern=%s, frequency=%s, distinct=%s)",
                    len(planned), request.days, request.meals_per_day, request.meal_change_frequency, len(used))
        return planned
