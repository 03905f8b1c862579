"""Pydantic schema package for request and response models."""

from .envelope import DataResponse, SuccessResponse
from .menu_schema import (
    MealPayload,
    IngredientPayload,
    GenerateMenuRequest,
    ReplaceMealRequest,
    FavoriteMealRequest,
    MealFeedbackRequest,
    MenuOut,
    MealOut,
    ShoppingList,
)
from .chat_schema import ChatMessageRequest, ChatReply, ChatExchange
from .user_schema import UserCreateRequest, UserCreatedResponse, UserResponse, QuestionnaireRequest, QuestionnaireResponse
from .meal_schema import ConsumedMealCreate, ConsumedMealOut

__all__ = [
    "DataResponse",
    "SuccessResponse",
    "MealPayload",
    "IngredientPayload",
    "GenerateMenuRequest",
    "ReplaceMealRequest",
    "FavoriteMealRequest",
    "MealFeedbackRequest",
    "MenuOut",
    "MealOut",
    "ShoppingList",
    "ChatMessageRequest",
    "ChatReply",
    "ChatExchange",
    "UserCreateRequest",
    "UserCreatedResponse",
    "UserResponse",
    "QuestionnaireRequest",
    "QuestionnaireResponse",
    "ConsumedMealCreate",
    "ConsumedMealOut",
]
