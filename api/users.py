"""User API router.

Registration, the caller's profile and the onboarding questionnaire.
Saving the questionnaire recomputes the user's daily nutrition plan with
the `NutritionCalculator`.
"""

import json
import secrets

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from api.deps import get_current_user
from core.exceptions import NotFoundError, ValidationError
from core.logger import get_logger
from core.repository import save, transaction
from database import models
from database.deps import get_db_read, get_db_write
from schemas import (
    DataResponse,
    QuestionnaireRequest,
    QuestionnaireResponse,
    UserCreatedResponse,
    UserCreateRequest,
    UserResponse,
)
from schemas.menu_schema import load_json_list
from services.nutrition_calculator import nutrition_calculator

logger = get_logger("api.users")
router = APIRouter(prefix="/users", tags=["users"])


def _questionnaire_response(questionnaire: models.UserQuestionnaire,
                            plan: models.NutritionPlan) -> QuestionnaireResponse:
    return QuestionnaireResponse(
        age=questionnaire.age,
        gender=questionnaire.gender,
        height_cm=questionnaire.height_cm,
        weight_kg=questionnaire.weight_kg,
        activity_level=questionnaire.activity_level,
        main_goal=questionnaire.main_goal,
        dietary_style=questionnaire.dietary_style,
        allergies=load_json_list(questionnaire.allergies),
        disliked_foods=load_json_list(questionnaire.disliked_foods),
        daily_food_budget=questionnaire.daily_food_budget,
        goal_calories=plan.goal_calories,
        goal_protein_g=plan.goal_protein_g,
        goal_carbs_g=plan.goal_carbs_g,
        goal_fats_g=plan.goal_fats_g,
    )


@router.post("", response_model=DataResponse[UserCreatedResponse], status_code=201)
def create_user(payload: UserCreateRequest, db: Session = Depends(get_db_write)):
    """Register a user and issue an API token.

    Raises:
        ValidationError: The email is already registered.
    """
    email = payload.email.strip().lower()
    if db.query(models.User).filter(models.User.email == email).first():
        raise ValidationError("Email is already registered", field="email")

    user = save(db, models.User(name=payload.name.strip(), email=email, api_token=secrets.token_urlsafe(32)))
    logger.info("User %s registered with id=%s", user.email, user.id)
    return DataResponse(
        data=UserCreatedResponse(
            id=user.id,
            name=user.name,
            email=user.email,
            created_at=user.created_at.isoformat(),
            api_token=user.api_token,
        ),
        message="User created successfully",
    )


@router.get("/me", response_model=DataResponse[UserResponse])
def get_me(user: models.User = Depends(get_current_user)):
    return DataResponse(
        data=UserResponse(id=user.id, name=user.name, email=user.email, created_at=user.created_at.isoformat())
    )


@router.put("/me/questionnaire", response_model=DataResponse[QuestionnaireResponse])
def save_questionnaire(
    payload: QuestionnaireRequest,
    user: models.User = Depends(get_current_user),
    db: Session = Depends(get_db_write),
):
    """Create or update the questionnaire and refresh the nutrition plan."""
    questionnaire = (
        db.query(models.UserQuestionnaire).filter(models.UserQuestionnaire.user_id == user.id).first()
    )
    plan = db.query(models.NutritionPlan).filter(models.NutritionPlan.user_id == user.id).first()

    with transaction(db):
        if questionnaire is None:
            questionnaire = models.UserQuestionnaire(user_id=user.id)
            db.add(questionnaire)
        questionnaire.age = payload.age
        questionnaire.gender = payload.gender
        questionnaire.height_cm = payload.height_cm
        questionnaire.weight_kg = payload.weight_kg
        questionnaire.activity_level = payload.activity_level
        questionnaire.main_goal = payload.main_goal
        questionnaire.dietary_style = payload.dietary_style
        questionnaire.allergies = json.dumps([a.strip().lower() for a in payload.allergies if a.strip()])
        questionnaire.disliked_foods = json.dumps([d.strip().lower() for d in payload.disliked_foods if d.strip()])
        questionnaire.daily_food_budget = payload.daily_food_budget

        targets = nutrition_calculator.daily_targets(questionnaire)
        if plan is None:
            plan = models.NutritionPlan(user_id=user.id)
            db.add(plan)
        plan.goal_calories = targets["calories"]
        plan.goal_protein_g = targets["protein"]
        plan.goal_carbs_g = targets["carbs"]
        plan.goal_fats_g = targets["fat"]

    logger.info("Questionnaire saved for user %s: %s kcal/day", user.id, plan.goal_calories)
    return DataResponse(data=_questionnaire_response(questionnaire, plan), message="Questionnaire saved")


@router.get("/me/questionnaire", response_model=DataResponse[QuestionnaireResponse])
def get_questionnaire(user: models.User = Depends(get_current_user), db: Session = Depends(get_db_read)):
    questionnaire = (
        db.query(models.UserQuestionnaire).filter(models.UserQuestionnaire.user_id == user.id).first()
    )
    plan = db.query(models.NutritionPlan).filter(models.NutritionPlan.user_id == user.id).first()
    if questionnaire is None or plan is None:
        raise NotFoundError("Questionnaire")
    return DataResponse(data=_questionnaire_response(questionnaire, plan))
