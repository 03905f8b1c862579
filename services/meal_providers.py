"""Meal content providers for menu generation and meal replacement.

A provider returns candidate meals for one meal type; the generator then
applies the user's constraints and picks among them. Two providers exist:

- `CatalogMealProvider`: the built-in catalog, deterministic.
- `OpenAIMealProvider`: asks a hosted model for candidates. Its output is
  untrusted, so every candidate is validated against `MealPayload` and a
  batch without any valid candidate is requested again.

`create_meal_provider()` picks the hosted provider when an API key is
configured and the catalog otherwise.
"""

import json
from dataclasses import dataclass, field
from typing import Dict, List, Optional

import openai
from pydantic import ValidationError as PydanticValidationError

from core.config import get_settings
from core.exceptions import UpstreamServiceError
from core.logger import get_logger
from data.meal_catalog import MEAL_CATALOG
from schemas.menu_schema import MealPayload
from services.llm_client import get_openai_client

logger = get_logger("services.meal_providers")


@dataclass
class MealRequestContext:
    """What the caller needs from a batch of candidates."""

    target_calories: float
    dietary_preferences: List[str] = field(default_factory=list)
    excluded_ingredients: List[str] = field(default_factory=list)
    budget_per_meal: Optional[float] = None
    avoid_names: List[str] = field(default_factory=list)


class MealProvider:
    """Base class for sources of candidate meals."""

    name = "base"

    def candidates(self, meal_type: str, count: int, context: MealRequestContext) -> List[MealPayload]:
        raise NotImplementedError


def parse_meal_candidates(raw_items, meal_type: str) -> List[MealPayload]:
    """Validate raw candidate dicts, keeping only well-formed meals of `meal_type`."""
    valid = []
    for item in raw_items or []:
        if not isinstance(item, dict):
            logger.warning("Dropping non-object meal candidate: %r", item)
            continue
        item = {**item, "meal_type": item.get("meal_type") or meal_type}
        try:
            payload = MealPayload.model_validate(item)
        except PydanticValidationError as exc:
            logger.warning("Dropping invalid meal candidate %r: %s", item.get("name"), exc.errors()[:3])
            continue
        if payload.meal_type != meal_type:
            logger.warning("Dropping candidate %r for slot %s: meal_type=%s", payload.name, meal_type, payload.meal_type)
            continue
        valid.append(payload)
    return valid


class CatalogMealProvider(MealProvider):
    """Serves candidates from the built-in meal catalog."""

    name = "catalog"

    def __init__(self, catalog: Optional[List[Dict]] = None):
        self._by_type: Dict[str, List[MealPayload]] = {}
        for entry in catalog if catalog is not None else MEAL_CATALOG:
            for payload in parse_meal_candidates([entry], entry.get("meal_type")):
                self._by_type.setdefault(payload.meal_type, []).append(payload)

    def candidates(self, meal_type: str, count: int, context: MealRequestContext) -> List[MealPayload]:
        # The catalog is small; callers filter and rank the whole pool.
        return list(self._by_type.get(meal_type, []))


MENU_PROMPT = """You are a dietitian creating {meal_type} options for a meal plan.
Return a JSON object {{"meals": [...]}} with {count} different meals.
Each meal must have: name, meal_type ("{meal_type}"), calories, protein, carbs, fat, fiber
(numbers, grams except calories), prep_time_minutes, difficulty (easy/medium/hard),
instructions, allergens (list), dietary_tags (list), and ingredients: a list of
objects with name, quantity, unit, category (produce, protein, dairy, grains, pantry,
canned, frozen, bakery, spices, dairy_alternatives, other) and estimated_cost.
Target about {calories:.0f} kcal per meal.
Dietary preferences: {preferences}.
Never use these ingredients: {excluded}.
{budget_line}Avoid these meals already planned: {avoid}."""


class OpenAIMealProvider(MealProvider):
    """Requests candidate meals from an OpenAI chat model as JSON."""

    name = "openai"

    def __init__(self, client, model: str, max_attempts: int = 3):
        self.client = client
        self.model = model
        self.max_attempts = max(1, max_attempts)

    def _prompt(self, meal_type: str, count: int, context: MealRequestContext) -> str:
        budget_line = ""
        if context.budget_per_meal is not None:
            budget_line = f"Keep the ingredient cost under {context.budget_per_meal:.2f} per meal.\n"
        return MENU_PROMPT.format(
            meal_type=meal_type,
            count=count,
            calories=context.target_calories,
            preferences=", ".join(context.dietary_preferences) or "none",
            excluded=", ".join(context.excluded_ingredients) or "none",
            budget_line=budget_line,
            avoid=", ".join(context.avoid_names) or "none",
        )

    def _request(self, prompt: str) -> str:
        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": "You answer only with valid JSON."},
                    {"role": "user", "content": prompt},
                ],
                response_format={"type": "json_object"},
                temperature=0.8,
            )
        except openai.OpenAIError as exc:
            logger.error("Menu provider request failed: %s", exc)
            raise UpstreamServiceError("Menu generation service is unavailable, please try again", provider=self.name) from exc
        return response.choices[0].message.content or ""

    def candidates(self, meal_type: str, count: int, context: MealRequestContext) -> List[MealPayload]:
        prompt = self._prompt(meal_type, count, context)
        for attempt in range(1, self.max_attempts + 1):
            content = self._request(prompt)
            try:
                data = json.loads(content)
            except ValueError:
                logger.warning("Attempt %s: provider returned non-JSON content for %s", attempt, meal_type)
                continue
            raw = data.get("meals") if isinstance(data, dict) else data
            valid = parse_meal_candidates(raw if isinstance(raw, list) else [], meal_type)
            if valid:
                logger.info("Provider returned %s valid %s candidates (attempt %s)", len(valid), meal_type, attempt)
                return valid
            logger.warning("Attempt %s: no valid %s candidates in provider output", attempt, meal_type)
        raise UpstreamServiceError(
            f"Menu generation service returned no valid {meal_type} meals, please try again",
            provider=self.name,
        )


def create_meal_provider() -> MealProvider:
    """Return the hosted provider when configured, otherwise the catalog."""
    client = get_openai_client()
    if client is None:
        return CatalogMealProvider()
    settings = get_settings()
    return OpenAIMealProvider(client, settings.openai_menu_model, settings.menu_provider_max_attempts)
