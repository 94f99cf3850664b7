"""Recipe generation from fridge contents."""

import json
import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Protocol

from pydantic import ValidationError

from freshfocus.domain.ingredients import Ingredient
from freshfocus.domain.preferences import UserPreferences
from freshfocus.domain.recipes import Recipe

logger = logging.getLogger(__name__)

_HEALTH_SCORE = {"type": "number", "minimum": 0, "maximum": 100}

RECIPE_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "recipes": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "id": {"type": "string"},
                    "name": {"type": "string"},
                    "description": {"type": "string"},
                    "ingredients": {"type": "array", "items": {"type": "string"}},
                    "instructions": {"type": "array", "items": {"type": "string"}},
                    "prepTime": {"type": "string"},
                    "healthIndicators": {
                        "type": "object",
                        "properties": {
                            "protein": _HEALTH_SCORE,
                            "veggies": _HEALTH_SCORE,
                            "carbs": _HEALTH_SCORE,
                        },
                        "required": ["protein", "veggies", "carbs"],
                        "additionalProperties": False,
                    },
                    "tags": {"type": "array", "items": {"type": "string"}},
                },
                "required": [
                    "id",
                    "name",
                    "description",
                    "ingredients",
                    "instructions",
                    "prepTime",
                    "healthIndicators",
                    "tags",
                ],
                "additionalProperties": False,
            },
        }
    },
    "required": ["recipes"],
    "additionalProperties": False,
}


class RecipeClient(Protocol):
    """Interface for LLM recipe generation."""

    async def generate(
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        schema: dict[str, object],
        prompt: str,
    ) -> str:
        """Return the raw structured output text."""


@dataclass
class RecipeService:
    """Holds the current recipe suggestions and refreshes them on demand."""

    client: RecipeClient
    model: str
    reasoning_effort: str | None
    store: bool
    recipe_count: int = 3
    recipes: list[Recipe] = field(default_factory=list)
    busy: bool = False

    async def generate(
        self, ingredients: Sequence[Ingredient], preferences: UserPreferences
    ) -> bool:
        """Replace the recipe collection; returns True when a request succeeded.

        Nothing is sent for an empty ingredient list or while a request is
        already in flight. Failed requests keep the previous recipes.
        """
        if not ingredients:
            return False
        if self.busy:
            logger.info("Recipe generation already in progress")
            return False
        self.busy = True
        try:
            raw = await self.client.generate(
                model=self.model,
                reasoning_effort=self.reasoning_effort,
                store=self.store,
                schema=RECIPE_SCHEMA,
                prompt=build_recipe_prompt(
                    ingredients, preferences, self.recipe_count
                ),
            )
        except Exception:
            logger.exception(
                "Recipe generation failed",
                extra={"ingredient_count": len(ingredients)},
            )
            return False
        finally:
            self.busy = False
        self.recipes = parse_recipes(raw)
        return True


def build_recipe_prompt(
    ingredients: Sequence[Ingredient], preferences: UserPreferences, count: int
) -> str:
    """Render ingredients and preferences into the generation prompt."""
    ingredient_list = ", ".join(
        f"{item.name} ({_format_quantity(item.quantity)} {item.unit}, "
        f"{item.expiry_risk.value} status)"
        for item in ingredients
    )
    restrictions = ", ".join(preferences.dietary_restrictions) or "none"
    lines = [
        f"Based on these ingredients: {ingredient_list}.",
        f"User preferences: {restrictions}, "
        f"Goal: {preferences.fitness_goal.value}.",
    ]
    if preferences.tastes:
        lines.append(f"Tastes: {', '.join(preferences.tastes)}.")
    lines.extend(
        [
            "Prioritize using ingredients marked as 'soon' or 'expired' "
            "to reduce waste.",
            f"Generate {count} healthy, balanced recipes.",
            "Include health indicators (0-100) for protein, veggies, and carbs.",
        ]
    )
    return "\n".join(lines)


def parse_recipes(raw: str) -> list[Recipe]:
    """Parse model output, skipping recipes that fail validation.

    Output that is not JSON, or has no recipe list, yields an empty list.
    """
    try:
        data = json.loads(raw or "[]")
    except ValueError:
        logger.warning("Failed to parse recipe response")
        return []
    if isinstance(data, dict):
        data = data.get("recipes", [])
    if not isinstance(data, list):
        logger.warning("Recipe response has no recipe list")
        return []
    recipes: list[Recipe] = []
    for entry in data:
        try:
            recipes.append(Recipe.model_validate(entry))
        except ValidationError:
            logger.warning("Skipping malformed recipe")
    return recipes


def _format_quantity(quantity: float) -> str:
    return f"{quantity:g}"
