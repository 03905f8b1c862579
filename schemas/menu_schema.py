"""Schemas for recommended menus, their meals and mutation requests.

`MealPayload` is the strict shape every meal must have before it is
persisted, whichever provider produced it. Request models accept the
camelCase names the mobile client sends as well as snake_case.
"""

import json
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

MealType = Literal["breakfast", "lunch", "dinner", "snack", "intermediate"]


def load_json_list(raw) -> List[str]:
    """Decode a JSON-encoded list column; anything unparsable is empty."""
    if raw is None:
        return []
    if isinstance(raw, (list, tuple)):
        return [str(v) for v in raw]
    try:
        value = json.loads(raw)
    except (TypeError, ValueError):
        return []
    return [str(v) for v in value] if isinstance(value, list) else []


class IngredientPayload(BaseModel):
    """Ingredient line of a meal payload."""

    name: str = Field(..., min_length=1)
    quantity: float = Field(1, ge=0)
    unit: str = "piece"
    category: str = "other"
    calories: Optional[float] = Field(None, ge=0)
    protein: Optional[float] = Field(None, ge=0)
    carbs: Optional[float] = Field(None, ge=0)
    fat: Optional[float] = Field(None, ge=0)
    estimated_cost: Optional[float] = Field(None, ge=0)

    @field_validator("category", "unit", mode="before")
    @classmethod
    def _normalize_label(cls, value, info: ValidationInfo):
        if value is None or str(value).strip() == "":
            return "other" if info.field_name == "category" else "piece"
        return str(value).strip().lower()


class MealPayload(BaseModel):
    """Meal content as produced by a provider, validated before persisting."""

    name: str = Field(..., min_length=1)
    meal_type: MealType
    calories: float = Field(..., ge=0)
    protein: float = Field(..., ge=0)
    carbs: float = Field(..., ge=0)
    fat: float = Field(..., ge=0)
    fiber: float = Field(0, ge=0)
    prep_time_minutes: Optional[int] = Field(None, ge=0)
    difficulty: Optional[str] = None
    instructions: Optional[str] = None
    allergens: List[str] = []
    dietary_tags: List[str] = []
    ingredients: List[IngredientPayload] = Field(..., min_length=1)

    @field_validator("meal_type", mode="before")
    @classmethod
    def _lower_meal_type(cls, value):
        return value.strip().lower() if isinstance(value, str) else value

    @field_validator("dietary_tags", "allergens", mode="before")
    @classmethod
    def _lower_tags(cls, value):
        if value is None:
            return []
        if isinstance(value, str):
            value = [value]
        return [str(v).strip().lower() for v in value]

    @property
    def estimated_cost(self) -> float:
        return round(sum(i.estimated_cost or 0 for i in self.ingredients), 2)


class GenerateMenuRequest(BaseModel):
    """Parameters for generating a personalized multi-day menu.

    Ranges are checked by the generator so that direct service callers get
    the same validation as HTTP callers.
    """

    model_config = ConfigDict(populate_by_name=True)

    days: int = Field(7, examples=[7], description="Number of days, 1-30")
    meals_per_day: str = Field("3_main", alias="mealsPerDay", examples=["3_plus_2_snacks"])
    meal_change_frequency: str = Field("daily", alias="mealChangeFrequency", examples=["every_3_days"])
    include_leftovers: bool = Field(False, alias="includeLeftovers")
    same_meal_times: bool = Field(True, alias="sameMealTimes")
    target_calories: Optional[float] = Field(None, alias="targetCalories", gt=0)
    dietary_preferences: Optional[List[str]] = Field(None, alias="dietaryPreferences")
    excluded_ingredients: Optional[List[str]] = Field(None, alias="excludedIngredients")
    budget: Optional[float] = Field(None, ge=0, description="Daily food budget")


class ReplaceMealPreferences(BaseModel):
    """Optional steering for a meal replacement."""

    model_config = ConfigDict(populate_by_name=True)

    excluded_ingredients: List[str] = Field([], alias="excludedIngredients")
    dietary_style: Optional[str] = Field(None, alias="dietaryStyle")
    max_calories: Optional[float] = Field(None, alias="maxCalories", gt=0)
    goal: Literal["similar", "higher_protein", "lower_calories", "lower_carbs"] = "similar"


class ReplaceMealRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    meal_id: int = Field(..., alias="mealId")
    preferences: ReplaceMealPreferences = Field(default_factory=ReplaceMealPreferences)


class FavoriteMealRequest(BaseModel):
    """Set the favorite flag, or toggle it when `isFavorite` is omitted."""

    model_config = ConfigDict(populate_by_name=True)

    meal_id: int = Field(..., alias="mealId")
    is_favorite: Optional[bool] = Field(None, alias="isFavorite")


class MealFeedbackRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    meal_id: int = Field(..., alias="mealId")
    liked: bool


class IngredientOut(BaseModel):
    ingredient_id: int
    name: str
    quantity: float
    unit: str
    category: str
    calories: Optional[float] = None
    protein: Optional[float] = None
    carbs: Optional[float] = None
    fat: Optional[float] = None
    estimated_cost: Optional[float] = None

    @classmethod
    def from_model(cls, ingredient) -> "IngredientOut":
        return cls(
            ingredient_id=ingredient.ingredient_id,
            name=ingredient.name,
            quantity=ingredient.quantity,
            unit=ingredient.unit,
            category=ingredient.category,
            calories=ingredient.calories,
            protein=ingredient.protein,
            carbs=ingredient.carbs,
            fat=ingredient.fat,
            estimated_cost=ingredient.estimated_cost,
        )


class MealOut(BaseModel):
    """Representation of a recommended meal in responses."""

    meal_id: int
    menu_id: int
    name: str
    meal_type: str
    day_number: int
    meal_time: Optional[str] = None
    calories: float
    protein: float
    carbs: float
    fat: float
    fiber: float
    prep_time_minutes: Optional[int] = None
    difficulty: Optional[str] = None
    instructions: Optional[str] = None
    allergens: List[str] = []
    dietary_tags: List[str] = []
    estimated_cost: float = 0
    is_favorite: bool = False
    liked: Optional[bool] = None
    ingredients: List[IngredientOut] = []

    @classmethod
    def from_model(cls, meal) -> "MealOut":
        return cls(
            meal_id=meal.meal_id,
            menu_id=meal.menu_id,
            name=meal.name,
            meal_type=meal.meal_type,
            day_number=meal.day_number,
            meal_time=meal.meal_time,
            calories=meal.calories,
            protein=meal.protein,
            carbs=meal.carbs,
            fat=meal.fat,
            fiber=meal.fiber or 0,
            prep_time_minutes=meal.prep_time_minutes,
            difficulty=meal.difficulty,
            instructions=meal.instructions,
            allergens=load_json_list(meal.allergens),
            dietary_tags=load_json_list(meal.dietary_tags),
            estimated_cost=meal.estimated_cost or 0,
            is_favorite=bool(meal.is_favorite),
            liked=meal.liked,
            ingredients=[IngredientOut.from_model(i) for i in meal.ingredients],
        )


class MenuOut(BaseModel):
    """Representation of a recommended menu with its meals."""

    menu_id: int
    user_id: int
    title: str
    description: Optional[str] = None
    days_count: int
    dietary_category: str
    meal_pattern: str
    meal_change_frequency: str
    total_calories: float
    total_protein: float
    total_carbs: float
    total_fat: float
    total_fiber: float
    estimated_cost: float
    is_active: bool
    started_at: Optional[str] = None
    created_at: str
    meals: List[MealOut] = []

    @classmethod
    def from_model(cls, menu) -> "MenuOut":
        return cls(
            menu_id=menu.menu_id,
            user_id=menu.user_id,
            title=menu.title,
            description=menu.description,
            days_count=menu.days_count,
            dietary_category=menu.dietary_category,
            meal_pattern=menu.meal_pattern,
            meal_change_frequency=menu.meal_change_frequency,
            total_calories=menu.total_calories,
            total_protein=menu.total_protein,
            total_carbs=menu.total_carbs,
            total_fat=menu.total_fat,
            total_fiber=menu.total_fiber,
            estimated_cost=menu.estimated_cost,
            is_active=bool(menu.is_active),
            started_at=menu.started_at.isoformat() if menu.started_at else None,
            created_at=menu.created_at.isoformat() if menu.created_at else "",
            meals=[MealOut.from_model(m) for m in menu.meals],
        )


class ShoppingItem(BaseModel):
    name: str
    quantity: float
    unit: str
    estimated_cost: float
    meal_count: int


class ShoppingList(BaseModel):
    """Category-grouped ingredients of a menu with summed costs."""

    menu_id: int
    total_estimated_cost: float
    categories: Dict[str, List[ShoppingItem]]
    category_totals: Dict[str, float]
