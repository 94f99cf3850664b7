"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from pathlib import Path

from openai import AsyncOpenAI
from supabase import Client, create_client

from freshfocus.adapters.file_kv_store import FileKeyValueStore
from freshfocus.adapters.openai_recipe_client import OpenAIRecipeClient
from freshfocus.adapters.openai_vision_client import OpenAIVisionClient
from freshfocus.adapters.supabase_identity_provider import SupabaseIdentityProvider
from freshfocus.adapters.supabase_kv_store import SupabaseKeyValueStore
from freshfocus.config import Settings, parse_storage_backend
from freshfocus.services.fridge import FridgeController
from freshfocus.services.inventory import IngredientStore, KeyValueStore
from freshfocus.services.preferences import PreferencesService
from freshfocus.services.recipes import RecipeService
from freshfocus.services.scan import ScanIntake
from freshfocus.services.users import UserService
from freshfocus.services.vision import VisionService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    fridge: FridgeController
    user_service: UserService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_key
    )
    kv_store = _build_kv_store(resolved_settings, supabase_client)
    openai_client = AsyncOpenAI(api_key=resolved_settings.openai_api_key)
    vision_service = VisionService(
        client=OpenAIVisionClient(client=openai_client),
        model=resolved_settings.openai_model,
        reasoning_effort=resolved_settings.openai_reasoning_effort,
        store=resolved_settings.openai_store,
    )
    recipe_service = RecipeService(
        client=OpenAIRecipeClient(client=openai_client),
        model=resolved_settings.openai_model,
        reasoning_effort=resolved_settings.openai_reasoning_effort,
        store=resolved_settings.openai_store,
        recipe_count=resolved_settings.recipe_count,
    )
    fridge = FridgeController(
        store=IngredientStore.load(kv_store),
        vision_service=vision_service,
        recipe_service=recipe_service,
        preferences_service=PreferencesService.load(kv_store),
        scan_intake=ScanIntake(suppress_empty=resolved_settings.scan_suppress_empty),
    )
    user_service = UserService(SupabaseIdentityProvider(supabase_client))

    async def close_resources() -> None:
        await openai_client.close()

    return AppContainer(
        settings=resolved_settings,
        fridge=fridge,
        user_service=user_service,
        close_resources=close_resources,
    )


def _build_kv_store(settings: Settings, supabase_client: Client) -> KeyValueStore:
    if parse_storage_backend(settings.storage_backend) == "supabase":
        return SupabaseKeyValueStore(supabase_client)
    return FileKeyValueStore(Path(settings.data_dir))
