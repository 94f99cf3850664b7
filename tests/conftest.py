"""Shared test fixtures."""

import json
from dataclasses import dataclass, field
from uuid import uuid4

import pytest

from freshfocus.config import Settings
from freshfocus.containers import AppContainer
from freshfocus.domain.models import UserRecord
from freshfocus.services.fridge import FridgeController
from freshfocus.services.inventory import IngredientStore, KeyValueStore
from freshfocus.services.preferences import PreferencesService
from freshfocus.services.recipes import RecipeClient, RecipeService
from freshfocus.services.users import (
    AuthenticationError,
    IdentityProvider,
    UserService,
)
from freshfocus.services.vision import VisionClient, VisionService

SCAN_PAYLOAD = {
    "items": [
        {"name": "Milk", "quantity": "1 carton", "estimatedDaysLeft": 3},
        {"name": "Spinach", "quantity": "2", "estimatedDaysLeft": 10},
    ]
}

RECIPE_PAYLOAD = {
    "recipes": [
        {
            "id": "recipe-1",
            "name": "Spinach Omelette",
            "description": "Quick eggs with greens.",
            "ingredients": ["2 eggs", "1 cup spinach"],
            "instructions": ["Whisk eggs.", "Cook with spinach."],
            "prepTime": "10 mins",
            "healthIndicators": {"protein": 70, "veggies": 60, "carbs": 10},
            "tags": ["Vegetarian", "High Protein"],
        }
    ]
}


@dataclass
class InMemoryKeyValueStore(KeyValueStore):
    """In-memory key-value store for tests."""

    values: dict[str, str] = field(default_factory=dict)
    writes: list[str] = field(default_factory=list)
    fail_reads: bool = False
    fail_writes: bool = False

    def get(self, key: str) -> str | None:
        if self.fail_reads:
            raise OSError("storage unavailable")
        return self.values.get(key)

    def set(self, key: str, value: str) -> None:
        if self.fail_writes:
            raise OSError("disk full")
        self.values[key] = value
        self.writes.append(key)


@dataclass
class FakeVisionClient(VisionClient):
    """Fake vision client returning a fixed payload."""

    payload: str = json.dumps(SCAN_PAYLOAD)
    error: Exception | None = None
    calls: list[str] = field(default_factory=list)

    async def extract(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        image_data_url: str,
        schema: dict[str, object],
        prompt: str,
    ) -> str:
        self.calls.append(image_data_url)
        if self.error is not None:
            raise self.error
        return self.payload


@dataclass
class FakeRecipeClient(RecipeClient):
    """Fake recipe client that records prompts."""

    payload: str = json.dumps(RECIPE_PAYLOAD)
    error: Exception | None = None
    prompts: list[str] = field(default_factory=list)

    async def generate(
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        schema: dict[str, object],
        prompt: str,
    ) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.payload


@dataclass
class FakeIdentityProvider(IdentityProvider):
    """In-memory identity provider keyed by email."""

    accounts: dict[str, tuple[str, UserRecord]] = field(default_factory=dict)

    def register(self, email: str, password: str) -> UserRecord:
        if email in self.accounts:
            raise AuthenticationError("User already registered")
        user = UserRecord(id=str(uuid4()), email=email)
        self.accounts[email] = (password, user)
        return user

    def sign_in(self, email: str, password: str) -> UserRecord:
        account = self.accounts.get(email)
        if account is None or account[0] != password:
            raise AuthenticationError("Invalid login credentials")
        return account[1]


@dataclass
class FakeFrameSource:
    """Frame source that records whether it was released."""

    frame: bytes = b"\xff\xd8\xffframe"
    fail_on_open: bool = False
    fail_on_read: bool = False
    opened: bool = False
    released: bool = False

    async def open(self) -> None:
        if self.fail_on_open:
            raise RuntimeError("camera busy")
        self.opened = True

    async def read_frame(self) -> bytes:
        if self.fail_on_read:
            raise RuntimeError("camera disconnected")
        return self.frame

    async def release(self) -> None:
        self.released = True


def build_fridge(
    kv: InMemoryKeyValueStore | None = None,
    vision_client: FakeVisionClient | None = None,
    recipe_client: FakeRecipeClient | None = None,
) -> FridgeController:
    """Create a controller wired to in-memory fakes."""
    resolved_kv = kv or InMemoryKeyValueStore()
    return FridgeController(
        store=IngredientStore.load(resolved_kv),
        vision_service=VisionService(
            client=vision_client or FakeVisionClient(),
            model="gpt-5.2",
            reasoning_effort="low",
            store=False,
        ),
        recipe_service=RecipeService(
            client=recipe_client or FakeRecipeClient(),
            model="gpt-5.2",
            reasoning_effort="low",
            store=False,
        ),
        preferences_service=PreferencesService.load(resolved_kv),
    )


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        openai_api_key="openai-key",
        supabase_url="https://example.supabase.co",
        supabase_key="header.payload.signature",
        data_dir=str(tmp_path),
    )


@pytest.fixture
def kv_store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def vision_client() -> FakeVisionClient:
    return FakeVisionClient()


@pytest.fixture
def recipe_client() -> FakeRecipeClient:
    return FakeRecipeClient()


@pytest.fixture
def fridge(
    kv_store: InMemoryKeyValueStore,
    vision_client: FakeVisionClient,
    recipe_client: FakeRecipeClient,
) -> FridgeController:
    return build_fridge(kv_store, vision_client, recipe_client)


@pytest.fixture
def container(settings: Settings, fridge: FridgeController) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        fridge=fridge,
        user_service=UserService(FakeIdentityProvider()),
        close_resources=close_resources,
    )
