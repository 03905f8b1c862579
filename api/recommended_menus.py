"""Recommended menus API router.

Generation, reads and per-meal mutations of the caller's menus. Every
route is scoped to the authenticated user; another user's menu is
reported as not found.
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from api.deps import get_current_user, get_menu_service
from core.logger import get_logger
from database import models
from database.deps import get_db_read, get_db_write
from schemas import (
    DataResponse,
    FavoriteMealRequest,
    GenerateMenuRequest,
    MealFeedbackRequest,
    MealOut,
    MenuOut,
    ReplaceMealRequest,
    ShoppingList,
)
from services.menu_service import RecommendedMenuService

logger = get_logger("api.recommended_menus")
router = APIRouter(prefix="/recommended-menus", tags=["recommended-menus"])


@router.get("", response_model=DataResponse[List[MenuOut]])
def list_menus(
    user: models.User = Depends(get_current_user),
    db: Session = Depends(get_db_read),
    service: RecommendedMenuService = Depends(get_menu_service),
):
    """Return the caller's menus, newest first."""
    menus = service.list_menus(db, user.id)
    return DataResponse(data=[MenuOut.from_model(m) for m in menus])


@router.get("/debug", response_model=DataResponse[Dict[str, Any]])
def debug_menus(
    user: models.User = Depends(get_current_user),
    db: Session = Depends(get_db_read),
    service: RecommendedMenuService = Depends(get_menu_service),
):
    """Per-menu meal and ingredient counts for troubleshooting."""
    return DataResponse(data=service.debug_summary(db, user.id))


@router.get("/{menu_id}", response_model=DataResponse[MenuOut])
def get_menu(
    menu_id: int,
    user: models.User = Depends(get_current_user),
    db: Session = Depends(get_db_read),
    service: RecommendedMenuService = Depends(get_menu_service),
):
    return DataResponse(data=MenuOut.from_model(service.get_menu(db, user.id, menu_id)))


@router.post("/generate", response_model=DataResponse[MenuOut], status_code=201)
def generate_menu(
    payload: GenerateMenuRequest,
    user: models.User = Depends(get_current_user),
    db: Session = Depends(get_db_write),
    service: RecommendedMenuService = Depends(get_menu_service),
):
    """Generate and store a personalized multi-day menu.

    Args:
        payload: `GenerateMenuRequest` (days, pattern, change frequency, overrides).

    Returns:
        The stored menu with all meals and ingredients.

    Raises:
        ValidationError: Days, pattern or frequency out of range.
        QuestionnaireMissingError: The user has not onboarded.
        BudgetMissingError: Budget preference without a budget.
        InsufficientDataError: No meal fits the constraints for some slot.
        UpstreamServiceError: The meal provider failed.
    """
    logger.info("Generating menu for user %s: days=%s pattern=%s frequency=%s",
                user.id, payload.days, payload.meals_per_day, payload.meal_change_frequency)
    menu = service.generate_menu(db, user.id, payload)
    return DataResponse(data=MenuOut.from_model(menu), message="Menu generated successfully")


@router.post("/{menu_id}/replace-meal", response_model=DataResponse[MealOut])
def replace_meal(
    menu_id: int,
    payload: ReplaceMealRequest,
    user: models.User = Depends(get_current_user),
    db: Session = Depends(get_db_write),
    service: RecommendedMenuService = Depends(get_menu_service),
):
    meal = service.replace_meal(db, user.id, menu_id, payload.meal_id, payload.preferences)
    return DataResponse(data=MealOut.from_model(meal), message="Meal replaced successfully")


@router.post("/{menu_id}/favorite-meal", response_model=DataResponse[Dict[str, Any]])
def favorite_meal(
    menu_id: int,
    payload: FavoriteMealRequest,
    user: models.User = Depends(get_current_user),
    db: Session = Depends(get_db_write),
    service: RecommendedMenuService = Depends(get_menu_service),
):
    """Set the favorite flag, or toggle it when `isFavorite` is omitted."""
    state = service.set_favorite(db, user.id, menu_id, payload.meal_id, payload.is_favorite)
    message = "Meal marked as favorite" if state else "Meal removed from favorites"
    return DataResponse(data={"meal_id": payload.meal_id, "is_favorite": state}, message=message)


@router.post("/{menu_id}/meal-feedback", response_model=DataResponse[Dict[str, Any]])
def meal_feedback(
    menu_id: int,
    payload: MealFeedbackRequest,
    user: models.User = Depends(get_current_user),
    db: Session = Depends(get_db_write),
    service: RecommendedMenuService = Depends(get_menu_service),
):
    feedback = service.record_feedback(db, user.id, menu_id, payload.meal_id, payload.liked)
    return DataResponse(
        data={"feedback_id": feedback.feedback_id, "meal_id": payload.meal_id, "liked": payload.liked},
        message="Feedback recorded successfully",
    )


@router.get("/{menu_id}/shopping-list", response_model=DataResponse[ShoppingList])
def shopping_list(
    menu_id: int,
    user: models.User = Depends(get_current_user),
    db: Session = Depends(get_db_read),
    service: RecommendedMenuService = Depends(get_menu_service),
):
    """Category-grouped ingredients of the menu with estimated costs."""
    return DataResponse(data=ShoppingList(**service.shopping_list(db, user.id, menu_id)))


@router.post("/{menu_id}/start-today", response_model=DataResponse[MenuOut])
def start_today(
    menu_id: int,
    user: models.User = Depends(get_current_user),
    db: Session = Depends(get_db_write),
    service: RecommendedMenuService = Depends(get_menu_service),
):
    menu = service.start_today(db, user.id, menu_id)
    return DataResponse(data=MenuOut.from_model(menu), message="Menu started for today")
