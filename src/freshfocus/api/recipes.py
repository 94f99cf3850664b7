"""Recipe, preference and statistics endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Request

from freshfocus.api.schemas import GenerateRequest, PreferencesUpdate, stats_to_dict
from freshfocus.domain.preferences import DIETARY_OPTIONS
from freshfocus.services.preferences import preferences_to_dict

if TYPE_CHECKING:
    from freshfocus.containers import AppContainer
    from freshfocus.services.fridge import FridgeController

router = APIRouter(tags=["recipes"])


def _fridge(request: Request) -> FridgeController:
    container: AppContainer = request.app.state.container
    return container.fridge


def _recipes_payload(fridge: FridgeController) -> dict[str, object]:
    service = fridge.recipe_service
    return {
        "busy": service.busy,
        "recipes": [recipe.model_dump(by_alias=True) for recipe in service.recipes],
    }


@router.post("/recipes/generate")
async def generate_recipes(
    payload: GenerateRequest, request: Request
) -> dict[str, object]:
    """Generate recipes from the whole fridge or the current selection."""
    fridge = _fridge(request)
    if payload.source == "selection":
        generated = await fridge.generate_from_selection()
    else:
        generated = await fridge.generate_recipes()
    return {"generated": generated, **_recipes_payload(fridge)}


@router.get("/recipes")
async def list_recipes(request: Request) -> dict[str, object]:
    """Return the latest recipe suggestions."""
    return _recipes_payload(_fridge(request))


@router.get("/preferences")
async def get_preferences(request: Request) -> dict[str, object]:
    preferences = _fridge(request).preferences_service.get()
    return {
        **preferences_to_dict(preferences),
        "dietaryOptions": list(DIETARY_OPTIONS),
    }


@router.put("/preferences")
async def update_preferences(
    payload: PreferencesUpdate, request: Request
) -> dict[str, object]:
    """Replace any provided preference fields."""
    updated = _fridge(request).preferences_service.update(
        dietary_restrictions=payload.dietary_restrictions,
        fitness_goal=payload.fitness_goal,
        tastes=payload.tastes,
    )
    return preferences_to_dict(updated)


@router.post("/preferences/restrictions/{label}")
async def toggle_restriction(label: str, request: Request) -> dict[str, object]:
    """Toggle a dietary restriction on or off."""
    updated = _fridge(request).preferences_service.toggle_restriction(label)
    return preferences_to_dict(updated)


@router.get("/stats")
async def get_stats(request: Request) -> dict[str, object]:
    """Return usage and waste figures for the dashboard."""
    return stats_to_dict(_fridge(request).stats())
