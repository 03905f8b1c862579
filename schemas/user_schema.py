"""Schemas for user registration and the onboarding questionnaire."""

from pydantic import BaseModel, Field
from typing import List, Optional


class UserCreateRequest(BaseModel):
    """Request payload for registering a user."""

    name: str = Field(..., min_length=1, examples=["Dana Levi"], description="User's full name")
    email: str = Field(..., min_length=3, pattern=r"^[^@\s]+@[^@\s]+$", examples=["dana@example.com"])


class UserResponse(BaseModel):
    id: int
    name: str
    email: str
    created_at: str


class UserCreatedResponse(UserResponse):
    """Registration result; `api_token` is shown only once."""

    api_token: str


class QuestionnaireRequest(BaseModel):
    """Onboarding answers used to compute goals and personalize menus."""

    age: int = Field(..., ge=13, le=100, examples=[30], description="Age in years (13-100)")
    gender: str = Field(..., examples=["female"], description="Gender (male/female)")
    height_cm: float = Field(..., ge=100, le=250, examples=[165.0])
    weight_kg: float = Field(..., ge=30, le=300, examples=[62.0])
    activity_level: str = Field("sedentary", examples=["moderately_active"], description="Activity level: sedentary, lightly_active, moderately_active, very_active, extremely_active")
    main_goal: str = Field("maintain", examples=["weight_loss"], description="weight_loss, muscle_gain, maintain")
    dietary_style: str = Field("balanced", examples=["vegetarian"], description="balanced, vegetarian, vegan, keto, gluten_free, high-protein")
    allergies: List[str] = Field(default=[], examples=[["peanuts"]])
    disliked_foods: List[str] = Field(default=[], examples=[["mushrooms"]])
    daily_food_budget: Optional[float] = Field(None, ge=0, examples=[60.0])


class QuestionnaireResponse(QuestionnaireRequest):
    goal_calories: float
    goal_protein_g: float
    goal_carbs_g: float
    goal_fats_g: float
