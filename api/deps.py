"""Shared FastAPI dependencies: caller authentication and service lookup.

The caller is identified by an API token sent either as
``Authorization: Bearer <token>`` or in the ``auth_token`` cookie.
Services are resolved through functions so tests can swap them with
``app.dependency_overrides``.
"""

from typing import Optional

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from core.exceptions import AuthenticationError
from database import models
from database.deps import get_db_read
from services.chat_service import ChatService, chat_service
from services.menu_service import RecommendedMenuService, recommended_menu_service

AUTH_COOKIE = "auth_token"


def _extract_token(request: Request) -> Optional[str]:
    header = request.headers.get("Authorization", "")
    scheme, _, credentials = header.partition(" ")
    if scheme.lower() == "bearer" and credentials.strip():
        return credentials.strip()
    return request.cookies.get(AUTH_COOKIE) or None


def get_current_user(request: Request, db: Session = Depends(get_db_read)) -> models.User:
    """Resolve the authenticated user or raise `AuthenticationError`."""
    token = _extract_token(request)
    if not token:
        raise AuthenticationError()
    user = db.query(models.User).filter(models.User.api_token == token).first()
    if user is None:
        raise AuthenticationError("Invalid authentication token")
    return user


def get_menu_service() -> RecommendedMenuService:
    return recommended_menu_service


def get_chat_service() -> ChatService:
    return chat_service
