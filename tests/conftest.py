"""Shared fixtures: an isolated in-memory database, seeded users and an API client."""

import json

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from api.deps import get_chat_service, get_menu_service
from core.repository import save, save_all
from database import init_db, models
from database.deps import get_db_read, get_db_write
from services.chat_service import ChatService
from services.meal_providers import CatalogMealProvider
from services.menu_service import RecommendedMenuService


@pytest.fixture
def engine():
    """Fresh in-memory SQLite database per test."""
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    session = sessionmaker(bind=engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def user(db):
    return save(db, models.User(name="Dana Levi", email="dana@example.com", api_token="token-dana"))


@pytest.fixture
def other_user(db):
    return save(db, models.User(name="Omer Cohen", email="omer@example.com", api_token="token-omer"))


def add_questionnaire(db, user, dietary_style="balanced", allergies=None, disliked=None, budget=60.0):
    """Store a questionnaire and a 2000 kcal nutrition plan for `user`."""
    questionnaire = models.UserQuestionnaire(
        user_id=user.id,
        age=30,
        gender="female",
        height_cm=165,
        weight_kg=62,
        activity_level="moderately_active",
        main_goal="maintain",
        dietary_style=dietary_style,
        allergies=json.dumps(allergies or []),
        disliked_foods=json.dumps(disliked or []),
        daily_food_budget=budget,
    )
    plan = models.NutritionPlan(
        user_id=user.id, goal_calories=2000, goal_protein_g=150, goal_carbs_g=200, goal_fats_g=67
    )
    save_all(db, [questionnaire, plan])
    return questionnaire


@pytest.fixture
def questionnaire(db, user):
    return add_questionnaire(db, user, allergies=["peanuts"])


@pytest.fixture
def menu_service():
    return RecommendedMenuService(CatalogMealProvider())


@pytest.fixture
def chat_service():
    return ChatService(client=None, use_default_client=False, history_window=10)


@pytest.fixture
def auth_headers(user):
    return {"Authorization": f"Bearer {user.api_token}"}


@pytest.fixture
def client(db, menu_service, chat_service):
    """TestClient wired to the in-memory session and local providers."""
    from main import app

    def override_db():
        yield db

    app.dependency_overrides[get_db_read] = override_db
    app.dependency_overrides[get_db_write] = override_db
    app.dependency_overrides[get_menu_service] = lambda: menu_service
    app.dependency_overrides[get_chat_service] = lambda: chat_service
    try:
        yield TestClient(app, raise_server_exceptions=False)
    finally:
        app.dependency_overrides.clear()
