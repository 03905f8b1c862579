"""Async REST client for the Nutrition Assistant API.

Wraps `httpx.AsyncClient` with bearer authentication, per-call timeouts
and envelope unwrapping. Concurrent identical GETs issued through one
client share a single network request via `InFlightRegistry`.
"""

import asyncio
import hashlib
import json
from typing import Any, Awaitable, Callable, Dict, Hashable, Iterable, Optional, Tuple

import httpx

from core.logger import get_logger

logger = get_logger("client.api_client")

DEFAULT_TIMEOUT = 30.0
GENERATE_TIMEOUT = 60.0
SHOPPING_LIST_TIMEOUT = 15.0


class ApiError(Exception):
    """A failed API call: error envelope, HTTP error, timeout or network failure."""

    def __init__(self, message: str, status_code: Optional[int] = None, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details

    @property
    def retryable(self) -> bool:
        return self.status_code is None or self.status_code >= 500


def request_signature(method: str, path: str, params: Optional[Dict[str, Any]] = None,
                      body: Any = None) -> Tuple[Hashable, ...]:
    """Identity of a request: method, path, sorted query and a body hash."""
    query: Iterable[Tuple[str, str]] = sorted((str(k), str(v)) for k, v in (params or {}).items() if v is not None)
    digest = None
    if body is not None:
        digest = hashlib.sha256(json.dumps(body, sort_keys=True, default=str).encode("utf-8")).hexdigest()
    return method.upper(), path, tuple(query), digest


class InFlightRegistry:
    """Shares one pending request among concurrent callers with the same key.

    The entry is removed as soon as the request settles, success or
    failure, so a later call always hits the network again.
    """

    def __init__(self):
        self._pending: Dict[Hashable, asyncio.Future] = {}

    def __len__(self) -> int:
        return len(self._pending)

    def __contains__(self, key: Hashable) -> bool:
        return key in self._pending

    async def run(self, key: Hashable, factory: Callable[[], Awaitable[Any]]) -> Any:
        existing = self._pending.get(key)
        if existing is not None:
            logger.debug("Joining in-flight request %s", key)
            return await asyncio.shield(existing)

        async def settle():
            try:
                return await factory()
            finally:
                self._pending.pop(key, None)

        task = asyncio.ensure_future(settle())
        self._pending[key] = task
        return await asyncio.shield(task)


class NutritionApiClient:
    """Typed-ish access to every API route; returns the `data` of the envelope."""

    def __init__(self, base_url: str, token: Optional[str] = None,
                 transport: Optional[httpx.AsyncBaseTransport] = None, timeout: float = DEFAULT_TIMEOUT):
        self.token = token
        self.timeout = timeout
        self.in_flight = InFlightRegistry()
        self.http_client = httpx.AsyncClient(base_url=base_url, transport=transport, timeout=timeout)

    async def __aenter__(self) -> "NutritionApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()

    def _headers(self) -> Dict[str, str]:
        if self.token:
            return {"Authorization": f"Bearer {self.token}"}
        return {}

    async def request(self, method: str, path: str, params: Optional[Dict[str, Any]] = None,
                      body: Any = None, timeout: Optional[float] = None) -> Any:
        """Send a request and unwrap the response envelope.

        Identical concurrent GETs are coalesced; other methods always go out.

        Raises:
            ApiError: Non-2xx status, ``success: false``, timeout or transport error.
        """
        if method.upper() == "GET":
            key = request_signature(method, path, params, body)
            return await self.in_flight.run(key, lambda: self._send(method, path, params, body, timeout))
        return await self._send(method, path, params, body, timeout)

    async def _send(self, method: str, path: str, params: Optional[Dict[str, Any]], body: Any,
                    timeout: Optional[float]) -> Any:
        query = {k: v for k, v in (params or {}).items() if v is not None}
        try:
            response = await self.http_client.request(
                method,
                path,
                params=query or None,
                json=body,
                headers=self._headers(),
                timeout=timeout or self.timeout,
            )
        except httpx.TimeoutException as exc:
            logger.warning("%s %s timed out", method, path)
            raise ApiError("Request timed out") from exc
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, path, exc)
            raise ApiError(f"Network error: {exc}") from exc

        try:
            payload = response.json()
        except ValueError:
            payload = None

        if response.is_error or (isinstance(payload, dict) and payload.get("success") is False):
            if isinstance(payload, dict):
                message = payload.get("error") or payload.get("detail") or response.reason_phrase
                details = payload.get("details")
            else:
                message, details = response.reason_phrase or "Request failed", None
            raise ApiError(str(message), status_code=response.status_code, details=details)

        if isinstance(payload, dict) and "data" in payload:
            return payload["data"]
        return payload

    # Users and onboarding

    async def register(self, name: str, email: str) -> Dict[str, Any]:
        """Create a user; the returned token is stored on the client."""
        user = await self.request("POST", "/users", body={"name": name, "email": email})
        self.token = user["api_token"]
        return user

    async def get_me(self) -> Dict[str, Any]:
        return await self.request("GET", "/users/me")

    async def save_questionnaire(self, answers: Dict[str, Any]) -> Dict[str, Any]:
        return await self.request("PUT", "/users/me/questionnaire", body=answers)

    async def get_questionnaire(self) -> Dict[str, Any]:
        return await self.request("GET", "/users/me/questionnaire")

    async def log_meal(self, meal: Dict[str, Any]) -> Dict[str, Any]:
        return await self.request("POST", "/meals", body=meal)

    async def list_meals(self, limit: int = 50) -> list:
        return await self.request("GET", "/meals", params={"limit": limit})

    # Recommended menus

    async def list_menus(self) -> list:
        return await self.request("GET", "/recommended-menus")

    async def get_menu(self, menu_id: int) -> Dict[str, Any]:
        return await self.request("GET", f"/recommended-menus/{menu_id}")

    async def generate_menu(self, **options: Any) -> Dict[str, Any]:
        """Generate a menu; options use the API's camelCase names (``mealsPerDay`` etc.)."""
        return await self.request("POST", "/recommended-menus/generate", body=options, timeout=GENERATE_TIMEOUT)

    async def replace_meal(self, menu_id: int, meal_id: int,
                           preferences: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        body = {"mealId": meal_id, "preferences": preferences or {}}
        return await self.request("POST", f"/recommended-menus/{menu_id}/replace-meal", body=body)

    async def favorite_meal(self, menu_id: int, meal_id: int, is_favorite: Optional[bool] = None) -> Dict[str, Any]:
        body: Dict[str, Any] = {"mealId": meal_id}
        if is_favorite is not None:
            body["isFavorite"] = is_favorite
        return await self.request("POST", f"/recommended-menus/{menu_id}/favorite-meal", body=body)

    async def meal_feedback(self, menu_id: int, meal_id: int, liked: bool) -> Dict[str, Any]:
        return await self.request("POST", f"/recommended-menus/{menu_id}/meal-feedback",
                                  body={"mealId": meal_id, "liked": liked})

    async def shopping_list(self, menu_id: int) -> Dict[str, Any]:
        return await self.request("GET", f"/recommended-menus/{menu_id}/shopping-list",
                                  timeout=SHOPPING_LIST_TIMEOUT)

    async def start_today(self, menu_id: int) -> Dict[str, Any]:
        return await self.request("POST", f"/recommended-menus/{menu_id}/start-today")

    # Chat

    async def send_chat_message(self, message: str, language: str = "english") -> Dict[str, Any]:
        return await self.request("POST", "/chat/message", body={"message": message, "language": language})

    async def chat_history(self, limit: int = 50) -> list:
        return await self.request("GET", "/chat/history", params={"limit": limit})

    async def clear_chat_history(self) -> Dict[str, Any]:
        return await self.request("DELETE", "/chat/history")

    async def health(self) -> Dict[str, Any]:
        return await self.request("GET", "/health")
