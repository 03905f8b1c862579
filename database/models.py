"""SQLAlchemy ORM models for the nutrition menu service.

Tables cover users and their onboarding questionnaire, nutrition goals and
logged meals, recommended menus (menu -> meals -> ingredients), meal
feedback, and chat exchanges. List-valued columns (allergies, tags) are
stored as JSON-encoded text. Models stay behavior-free; business logic
lives in `services`.
"""

from sqlalchemy import Column, Integer, String, Float, DateTime, Date, ForeignKey, Text, Boolean
from sqlalchemy.orm import declarative_base, relationship
from datetime import datetime

Base = declarative_base()


class User(Base):
    """ORM model representing an application user."""

    __tablename__ = "users"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, nullable=False, unique=True, index=True)
    api_token = Column(String, nullable=False, unique=True, index=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    questionnaire = relationship(
        "UserQuestionnaire", back_populates="user", uselist=False, cascade="all, delete-orphan"
    )


class UserQuestionnaire(Base):
    """Onboarding answers used to personalize menus and chat."""

    __tablename__ = "user_questionnaires"
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, unique=True)
    age = Column(Integer, nullable=False)
    gender = Column(String, nullable=False)
    height_cm = Column(Float, nullable=False)
    weight_kg = Column(Float, nullable=False)
    activity_level = Column(String, nullable=False, default="sedentary")
    main_goal = Column(String, nullable=False, default="maintain")
    dietary_style = Column(String, nullable=False, default="balanced")
    allergies = Column(Text, nullable=True)
    disliked_foods = Column(Text, nullable=True)
    daily_food_budget = Column(Float, nullable=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    user = relationship("User", back_populates="questionnaire")


class NutritionPlan(Base):
    """Daily nutrition goals for a user."""

    __tablename__ = "nutrition_plans"
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, unique=True)
    goal_calories = Column(Float, nullable=False)
    goal_protein_g = Column(Float, nullable=False)
    goal_carbs_g = Column(Float, nullable=False)
    goal_fats_g = Column(Float, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)


class ConsumedMeal(Base):
    """A meal the user actually ate (meal history)."""

    __tablename__ = "consumed_meals"
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String, nullable=False)
    calories = Column(Float, nullable=False, default=0)
    protein_g = Column(Float, nullable=False, default=0)
    carbs_g = Column(Float, nullable=False, default=0)
    fats_g = Column(Float, nullable=False, default=0)
    fiber_g = Column(Float, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, index=True)


class RecommendedMenu(Base):
    """A persisted multi-day meal plan owned by one user."""

    __tablename__ = "recommended_menus"
    menu_id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    days_count = Column(Integer, nullable=False)
    dietary_category = Column(String, nullable=False, default="balanced")
    meal_pattern = Column(String, nullable=False, default="3_main")
    meal_change_frequency = Column(String, nullable=False, default="daily")
    total_calories = Column(Float, nullable=False, default=0)
    total_protein = Column(Float, nullable=False, default=0)
    total_carbs = Column(Float, nullable=False, default=0)
    total_fat = Column(Float, nullable=False, default=0)
    total_fiber = Column(Float, nullable=False, default=0)
    estimated_cost = Column(Float, nullable=False, default=0)
    is_active = Column(Boolean, nullable=False, default=False)
    started_at = Column(Date, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    meals = relationship(
        "RecommendedMeal",
        back_populates="menu",
        cascade="all, delete-orphan",
        order_by=lambda: [RecommendedMeal.day_number, RecommendedMeal.slot_index],
    )


class RecommendedMeal(Base):
    """One meal occupying a (day_number, meal_type) slot of a menu."""

    __tablename__ = "recommended_meals"
    meal_id = Column(Integer, primary_key=True, index=True)
    menu_id = Column(Integer, ForeignKey("recommended_menus.menu_id"), nullable=False, index=True)
    name = Column(String, nullable=False)
    meal_type = Column(String, nullable=False)
    day_number = Column(Integer, nullable=False)
    slot_index = Column(Integer, nullable=False, default=0)
    meal_time = Column(String, nullable=True)
    calories = Column(Float, nullable=False)
    protein = Column(Float, nullable=False)
    carbs = Column(Float, nullable=False)
    fat = Column(Float, nullable=False)
    fiber = Column(Float, nullable=False, default=0)
    prep_time_minutes = Column(Integer, nullable=True)
    difficulty = Column(String, nullable=True)
    instructions = Column(Text, nullable=True)
    allergens = Column(Text, nullable=True)
    dietary_tags = Column(Text, nullable=True)
    estimated_cost = Column(Float, nullable=False, default=0)
    is_favorite = Column(Boolean, nullable=False, default=False)
    liked = Column(Boolean, nullable=True)

    menu = relationship("RecommendedMenu", back_populates="meals")
    ingredients = relationship(
        "RecommendedIngredient",
        back_populates="meal",
        cascade="all, delete-orphan",
        order_by=lambda: RecommendedIngredient.ingredient_id,
    )


class RecommendedIngredient(Base):
    """Ingredient line owned by exactly one meal."""

    __tablename__ = "recommended_ingredients"
    ingredient_id = Column(Integer, primary_key=True, index=True)
    meal_id = Column(Integer, ForeignKey("recommended_meals.meal_id"), nullable=False, index=True)
    name = Column(String, nullable=False)
    quantity = Column(Float, nullable=False, default=1)
    unit = Column(String, nullable=False, default="piece")
    category = Column(String, nullable=False, default="other")
    calories = Column(Float, nullable=True)
    protein = Column(Float, nullable=True)
    carbs = Column(Float, nullable=True)
    fat = Column(Float, nullable=True)
    estimated_cost = Column(Float, nullable=True)

    meal = relationship("RecommendedMeal", back_populates="ingredients")


class MealFeedback(Base):
    """Append-only like/dislike record for a recommended meal."""

    __tablename__ = "meal_feedback"
    feedback_id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    menu_id = Column(Integer, ForeignKey("recommended_menus.menu_id"), nullable=True)
    meal_id = Column(Integer, ForeignKey("recommended_meals.meal_id"), nullable=True)
    meal_name = Column(String, nullable=False)
    liked = Column(Boolean, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)


class ChatMessage(Base):
    """One user message / assistant response exchange."""

    __tablename__ = "chat_messages"
    message_id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    user_message = Column(Text, nullable=False)
    ai_response = Column(Text, nullable=False)
    language = Column(String, nullable=False, default="english")
    created_at = Column(DateTime, default=datetime.utcnow, index=True)
