"""Schemas for logged (consumed) meals."""

from pydantic import BaseModel, Field
from typing import Optional


class ConsumedMealCreate(BaseModel):
    """A meal the user ate, entered manually or from an analysis result."""

    name: str = Field(..., min_length=1, examples=["Chicken salad"])
    calories: float = Field(..., ge=0)
    protein_g: float = Field(0, ge=0)
    carbs_g: float = Field(0, ge=0)
    fats_g: float = Field(0, ge=0)
    fiber_g: Optional[float] = Field(None, ge=0)


class ConsumedMealOut(ConsumedMealCreate):
    id: int
    created_at: str

    @classmethod
    def from_model(cls, meal) -> "ConsumedMealOut":
        return cls(
            id=meal.id,
            name=meal.name,
            calories=meal.calories,
            protein_g=meal.protein_g,
            carbs_g=meal.carbs_g,
            fats_g=meal.fats_g,
            fiber_g=meal.fiber_g,
            created_at=meal.created_at.isoformat(),
        )
