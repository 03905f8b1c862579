"""Recommended menu operations.

Each public method is one request-scoped read-modify-write against the
caller's own menus. Ownership is always checked through the menu's
`user_id`; a menu or meal that is missing or belongs to someone else is
reported as not found.

Menu-level totals (calories, macros, fiber, cost) are computed at
generation time and recomputed whenever a meal's content is replaced.
"""

import json
from datetime import date
from typing import Dict, List, Optional, Tuple

from sqlalchemy.orm import Session, selectinload

from core.exceptions import (
    BudgetMissingError,
    InsufficientDataError,
    NotFoundError,
    QuestionnaireMissingError,
)
from core.logger import get_logger
from core.repository import transaction
from database import models
from schemas.menu_schema import GenerateMenuRequest, MealPayload, ReplaceMealPreferences, load_json_list
from services.content_recommender import content_recommender
from services.meal_providers import MealProvider, MealRequestContext, create_meal_provider
from services.menu_generator import (
    BUDGET_PREFERENCE,
    DIET_TAGS,
    MenuGenerator,
    PlannedMeal,
    UserPreferences,
    contains_excluded,
    validate_generation_request,
)
from services.nutrition_calculator import nutrition_calculator
from services.shopping_list import build_shopping_list

logger = get_logger("services.menu_service")

GOAL_WEIGHT = 0.5


def _normalize_terms(*groups) -> List[str]:
    terms = []
    for group in groups:
        for term in group or []:
            cleaned = str(term).strip().lower()
            if cleaned and cleaned not in terms:
                terms.append(cleaned)
    return terms


def _ingredient_rows(payload: MealPayload) -> List[models.RecommendedIngredient]:
    return [
        models.RecommendedIngredient(
            name=i.name,
            quantity=i.quantity,
            unit=i.unit,
            category=i.category,
            calories=i.calories,
            protein=i.protein,
            carbs=i.carbs,
            fat=i.fat,
            estimated_cost=i.estimated_cost,
        )
        for i in payload.ingredients
    ]


def _apply_payload(meal: models.RecommendedMeal, payload: MealPayload, name: Optional[str] = None) -> None:
    """Copy meal content onto an ORM row, keeping its slot and identity."""
    meal.name = name or payload.name
    meal.calories = payload.calories
    meal.protein = payload.protein
    meal.carbs = payload.carbs
    meal.fat = payload.fat
    meal.fiber = payload.fiber
    meal.prep_time_minutes = payload.prep_time_minutes
    meal.difficulty = payload.difficulty
    meal.instructions = payload.instructions
    meal.allergens = json.dumps(payload.allergens)
    meal.dietary_tags = json.dumps(payload.dietary_tags)
    meal.estimated_cost = payload.estimated_cost
    meal.ingredients = _ingredient_rows(payload)


def recompute_totals(menu: models.RecommendedMenu) -> None:
    """Set the menu's aggregate totals to the sum over its current meals."""
    meals = list(menu.meals)
    menu.total_calories = round(sum(m.calories or 0 for m in meals), 1)
    menu.total_protein = round(sum(m.protein or 0 for m in meals), 1)
    menu.total_carbs = round(sum(m.carbs or 0 for m in meals), 1)
    menu.total_fat = round(sum(m.fat or 0 for m in meals), 1)
    menu.total_fiber = round(sum(m.fiber or 0 for m in meals), 1)
    menu.estimated_cost = round(sum(m.estimated_cost or 0 for m in meals), 2)


class RecommendedMenuService:
    """Menu generation and mutation operations scoped to one user."""

    def __init__(self, provider: Optional[MealProvider] = None):
        self._provider = provider

    @property
    def provider(self) -> MealProvider:
        if self._provider is None:
            self._provider = create_meal_provider()
        return self._provider

    # Reads

    def list_menus(self, db: Session, user_id: int) -> List[models.RecommendedMenu]:
        """Return the user's menus, newest first, with meals and ingredients."""
        return (
            db.query(models.RecommendedMenu)
            .options(selectinload(models.RecommendedMenu.meals).selectinload(models.RecommendedMeal.ingredients))
            .filter(models.RecommendedMenu.user_id == user_id)
            .order_by(models.RecommendedMenu.created_at.desc(), models.RecommendedMenu.menu_id.desc())
            .all()
        )

    def get_menu(self, db: Session, user_id: int, menu_id: int) -> models.RecommendedMenu:
        """Return one of the user's menus.

        Raises:
            NotFoundError: Menu does not exist or belongs to another user.
        """
        menu = (
            db.query(models.RecommendedMenu)
            .options(selectinload(models.RecommendedMenu.meals).selectinload(models.RecommendedMeal.ingredients))
            .filter(models.RecommendedMenu.menu_id == menu_id, models.RecommendedMenu.user_id == user_id)
            .first()
        )
        if menu is None:
            raise NotFoundError("Menu", menu_id)
        return menu

    def _get_owned_meal(self, db: Session, user_id: int, menu_id: int,
                        meal_id: int) -> Tuple[models.RecommendedMenu, models.RecommendedMeal]:
        menu = self.get_menu(db, user_id, menu_id)
        meal = next((m for m in menu.meals if m.meal_id == meal_id), None)
        if meal is None:
            raise NotFoundError("Meal", meal_id)
        return menu, meal

    def debug_summary(self, db: Session, user_id: int) -> Dict:
        menus = self.list_menus(db, user_id)
        return {
            "user_id": user_id,
            "menu_count": len(menus),
            "menus": [
                {
                    "menu_id": menu.menu_id,
                    "title": menu.title,
                    "created_at": menu.created_at.isoformat() if menu.created_at else None,
                    "meals_count": len(menu.meals),
                    "total_ingredients": sum(len(m.ingredients) for m in menu.meals),
                    "sample_meals": [
                        {
                            "meal_id": m.meal_id,
                            "name": m.name,
                            "meal_type": m.meal_type,
                            "ingredients_count": len(m.ingredients),
                        }
                        for m in menu.meals[:2]
                    ],
                }
                for menu in menus
            ],
        }

    # Generation

    def _feedback_names(self, db: Session, user_id: int) -> Tuple[set, set]:
        """Names the user last liked / disliked, from the feedback log."""
        latest: Dict[str, bool] = {}
        rows = (
            db.query(models.MealFeedback)
            .filter(models.MealFeedback.user_id == user_id)
            .order_by(models.MealFeedback.created_at, models.MealFeedback.feedback_id)
            .all()
        )
        for row in rows:
            latest[row.meal_name.replace(" (leftovers)", "").lower()] = row.liked
        liked = {name for name, value in latest.items() if value}
        disliked = {name for name, value in latest.items() if not value}
        return liked, disliked

    def build_preferences(self, db: Session, user_id: int, request: GenerateMenuRequest) -> UserPreferences:
        """Combine the questionnaire, goals, feedback and request into preferences.

        Raises:
            QuestionnaireMissingError: The user has not completed onboarding.
            BudgetMissingError: Budget-driven preferences without a budget.
        """
        questionnaire = (
            db.query(models.UserQuestionnaire).filter(models.UserQuestionnaire.user_id == user_id).first()
        )
        if questionnaire is None:
            raise QuestionnaireMissingError()

        if request.dietary_preferences:
            dietary_preferences = _normalize_terms(request.dietary_preferences)
        else:
            dietary_preferences = _normalize_terms([questionnaire.dietary_style])
        dietary_preferences = [p for p in dietary_preferences if p != "balanced"]

        budget = request.budget if request.budget is not None else questionnaire.daily_food_budget
        if BUDGET_PREFERENCE in dietary_preferences and budget is None:
            raise BudgetMissingError()

        style = next((p for p in dietary_preferences if p in DIET_TAGS), questionnaire.dietary_style)
        if request.target_calories:
            targets = nutrition_calculator.targets_for_calories(request.target_calories, style)
        else:
            plan = db.query(models.NutritionPlan).filter(models.NutritionPlan.user_id == user_id).first()
            if plan is not None:
                targets = {
                    "calories": plan.goal_calories,
                    "protein": plan.goal_protein_g,
                    "carbs": plan.goal_carbs_g,
                    "fat": plan.goal_fats_g,
                }
            else:
                targets = nutrition_calculator.daily_targets(questionnaire)

        liked, disliked = self._feedback_names(db, user_id)
        return UserPreferences(
            daily_targets=targets,
            dietary_preferences=dietary_preferences,
            excluded_terms=_normalize_terms(
                request.excluded_ingredients,
                load_json_list(questionnaire.allergies),
                load_json_list(questionnaire.disliked_foods),
            ),
            daily_budget=budget,
            liked_names=liked,
            disliked_names=disliked,
        )

    def generate_menu(self, db: Session, user_id: int, request: GenerateMenuRequest) -> models.RecommendedMenu:
        """Generate and persist a personalized menu.

        Validation happens before any database or provider work. The menu,
        its meals and their ingredients are written in one transaction.
        """
        validate_generation_request(request)
        prefs = self.build_preferences(db, user_id, request)
        planned = MenuGenerator(self.provider).plan(request, prefs)

        category = prefs.dietary_style if prefs.required_tags else "balanced"
        menu = models.RecommendedMenu(
            user_id=user_id,
            title=f"{request.days}-Day {category.replace('_', ' ').title()} Menu",
            days_count=request.days,
            dietary_category=category,
            meal_pattern=request.meals_per_day,
            meal_change_frequency=request.meal_change_frequency,
        )
        menu.meals = [self._meal_row(p) for p in planned]
        recompute_totals(menu)
        menu.description = (
            f"{len(planned)} meals over {request.days} days, about "
            f"{menu.total_calories / request.days:.0f} kcal per day, estimated cost {menu.estimated_cost:.2f}"
        )

        with transaction(db):
            db.add(menu)
        logger.info("Menu %s generated for user %s: %s meals, %.0f kcal",
                    menu.menu_id, user_id, len(planned), menu.total_calories)
        return self.get_menu(db, user_id, menu.menu_id)

    def _meal_row(self, planned: PlannedMeal) -> models.RecommendedMeal:
        meal = models.RecommendedMeal(
            meal_type=planned.meal_type,
            day_number=planned.day_number,
            slot_index=planned.slot_index,
            meal_time=planned.meal_time,
            is_favorite=False,
        )
        _apply_payload(meal, planned.payload, name=planned.name)
        return meal

    # Mutations

    def replace_meal(self, db: Session, user_id: int, menu_id: int, meal_id: int,
                     preferences: Optional[ReplaceMealPreferences] = None) -> models.RecommendedMeal:
        """Swap a meal's content for a similar alternative in the same slot.

        Raises:
            NotFoundError: Menu or meal not owned by the caller.
            InsufficientDataError: No acceptable alternative exists.
        """
        preferences = preferences or ReplaceMealPreferences()
        menu, meal = self._get_owned_meal(db, user_id, menu_id, meal_id)

        questionnaire = (
            db.query(models.UserQuestionnaire).filter(models.UserQuestionnaire.user_id == user_id).first()
        )
        excluded = _normalize_terms(
            preferences.excluded_ingredients,
            load_json_list(questionnaire.allergies) if questionnaire else [],
            load_json_list(questionnaire.disliked_foods) if questionnaire else [],
        )
        style = (preferences.dietary_style or (questionnaire.dietary_style if questionnaire else "") or "").lower()
        in_menu = {m.name.replace(" (leftovers)", "").lower() for m in menu.meals}

        context = MealRequestContext(
            target_calories=preferences.max_calories or meal.calories,
            dietary_preferences=[style] if style in DIET_TAGS else [],
            excluded_ingredients=excluded,
            avoid_names=sorted(in_menu),
        )
        pool = [
            c for c in self.provider.candidates(meal.meal_type, 6, context)
            if c.name.lower() not in in_menu
            and not contains_excluded(c, excluded)
            and (style not in DIET_TAGS or style in c.dietary_tags)
            and (preferences.max_calories is None or c.calories <= preferences.max_calories)
        ]
        pool = self._apply_goal_filter(pool, meal, preferences.goal)
        if not pool:
            raise InsufficientDataError("No alternative meal available")

        ranked = content_recommender.rank_similar(meal, pool)
        best_index, _ = max(ranked, key=lambda r: (r[1] + self._goal_bonus(pool[r[0]], meal, preferences.goal), -r[0]))
        replacement = pool[best_index]

        with transaction(db):
            old_name = meal.name
            _apply_payload(meal, replacement)
            meal.is_favorite = False
            meal.liked = None
            recompute_totals(menu)
        logger.info("Replaced meal %s in menu %s: %r -> %r", meal_id, menu_id, old_name, replacement.name)
        db.refresh(meal)
        return meal

    @staticmethod
    def _apply_goal_filter(pool: List[MealPayload], current, goal: str) -> List[MealPayload]:
        if goal == "higher_protein":
            directed = [c for c in pool if c.protein > current.protein]
        elif goal == "lower_calories":
            directed = [c for c in pool if c.calories < current.calories]
        elif goal == "lower_carbs":
            directed = [c for c in pool if c.carbs < current.carbs]
        else:
            return pool
        return directed or pool

    @staticmethod
    def _goal_bonus(candidate: MealPayload, current, goal: str) -> float:
        if goal == "higher_protein":
            return GOAL_WEIGHT * (candidate.protein - current.protein) / max(1, current.protein)
        if goal == "lower_calories":
            return GOAL_WEIGHT * (current.calories - candidate.calories) / max(1, current.calories)
        if goal == "lower_carbs":
            return GOAL_WEIGHT * (current.carbs - candidate.carbs) / max(1, current.carbs)
        return 0.0

    def set_favorite(self, db: Session, user_id: int, menu_id: int, meal_id: int,
                     is_favorite: Optional[bool] = None) -> bool:
        """Set the favorite flag, or toggle it when `is_favorite` is None."""
        _, meal = self._get_owned_meal(db, user_id, menu_id, meal_id)
        with transaction(db):
            meal.is_favorite = (not meal.is_favorite) if is_favorite is None else bool(is_favorite)
            new_state = meal.is_favorite
        logger.info("Meal %s favorite=%s (user %s)", meal_id, new_state, user_id)
        return new_state

    def record_feedback(self, db: Session, user_id: int, menu_id: int, meal_id: int,
                        liked: bool) -> models.MealFeedback:
        """Append a like/dislike record and update the meal's feedback flag."""
        _, meal = self._get_owned_meal(db, user_id, menu_id, meal_id)
        feedback = models.MealFeedback(
            user_id=user_id, menu_id=menu_id, meal_id=meal_id, meal_name=meal.name, liked=liked
        )
        with transaction(db):
            db.add(feedback)
            meal.liked = liked
        logger.info("Feedback recorded: user=%s meal=%s liked=%s", user_id, meal_id, liked)
        return feedback

    def shopping_list(self, db: Session, user_id: int, menu_id: int) -> Dict:
        return build_shopping_list(self.get_menu(db, user_id, menu_id))

    def start_today(self, db: Session, user_id: int, menu_id: int,
                    today: Optional[date] = None) -> models.RecommendedMenu:
        """Make this menu the user's active one, starting today."""
        menu = self.get_menu(db, user_id, menu_id)
        with transaction(db):
            (
                db.query(models.RecommendedMenu)
                .filter(models.RecommendedMenu.user_id == user_id, models.RecommendedMenu.menu_id != menu_id)
                .update({models.RecommendedMenu.is_active: False}, synchronize_session="fetch")
            )
            menu.is_active = True
            menu.started_at = today or date.today()
        logger.info("Menu %s started on %s for user %s", menu_id, menu.started_at, user_id)
        return menu


recommended_menu_service = RecommendedMenuService()
