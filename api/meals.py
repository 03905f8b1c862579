"""Meals API router.

Meal history: meals the caller actually ate. Today's entries feed the chat
assistant's intake summary.
"""

from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from api.deps import get_current_user
from core.logger import get_logger
from core.repository import save
from database import models
from database.deps import get_db_read, get_db_write
from schemas import ConsumedMealCreate, ConsumedMealOut, DataResponse

logger = get_logger("api.meals")
router = APIRouter(prefix="/meals", tags=["meals"])


@router.get("", response_model=DataResponse[List[ConsumedMealOut]])
def list_meals(
    limit: int = Query(50, ge=1, le=500),
    user: models.User = Depends(get_current_user),
    db: Session = Depends(get_db_read),
):
    """Return the caller's logged meals, newest first.

    Args:
        limit (int): Maximum number of meals to return.
    """
    meals = (
        db.query(models.ConsumedMeal)
        .filter(models.ConsumedMeal.user_id == user.id)
        .order_by(models.ConsumedMeal.created_at.desc(), models.ConsumedMeal.id.desc())
        .limit(limit)
        .all()
    )
    return DataResponse(data=[ConsumedMealOut.from_model(m) for m in meals])


@router.post("", response_model=DataResponse[ConsumedMealOut], status_code=201)
def log_meal(
    payload: ConsumedMealCreate,
    user: models.User = Depends(get_current_user),
    db: Session = Depends(get_db_write),
):
    meal = save(db, models.ConsumedMeal(user_id=user.id, **payload.model_dump()))
    logger.info("User %s logged meal %r (%.0f kcal)", user.id, meal.name, meal.calories)
    return DataResponse(data=ConsumedMealOut.from_model(meal), message="Meal logged")
