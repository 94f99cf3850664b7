"""Tests for Supabase adapter implementations."""

from dataclasses import dataclass, field

import pytest
from supabase import AuthError

from freshfocus.adapters.supabase_identity_provider import SupabaseIdentityProvider
from freshfocus.adapters.supabase_kv_store import SupabaseKeyValueStore
from freshfocus.services.users import AuthenticationError


@dataclass
class FakeResponse:
    data: list[dict[str, object]] | None


@dataclass
class FakeTable:
    name: str
    response_queue: dict[str, list[list[dict[str, object]]]] = field(
        default_factory=lambda: {"select": [], "upsert": []}
    )
    last_payload: object | None = None
    last_conflict: str | None = None
    last_filters: list[tuple[str, object]] = field(default_factory=list)

    def queue(self, action: str, data: list[dict[str, object]]) -> None:
        self.response_queue[action].append(data)

    def select(self, *_args) -> "FakeTable":
        self._action = "select"
        return self

    def upsert(self, payload, on_conflict: str = "") -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "upsert"
        self.last_payload = payload
        self.last_conflict = on_conflict
        return self

    def eq(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append((column, value))
        return self

    def limit(self, _count: int) -> "FakeTable":
        return self

    def execute(self) -> FakeResponse:
        action = getattr(self, "_action", "select")
        queue = self.response_queue.get(action, [])
        data = queue.pop(0) if queue else []
        return FakeResponse(data=data)


@dataclass
class FakeUser:
    id: str
    email: str | None


@dataclass
class FakeAuthResponse:
    user: FakeUser | None


@dataclass
class FakeAuth:
    user: FakeUser | None = None
    error: Exception | None = None
    calls: list[tuple[str, dict[str, str]]] = field(default_factory=list)

    def sign_up(self, credentials: dict[str, str]) -> FakeAuthResponse:
        return self._respond("sign_up", credentials)

    def sign_in_with_password(self, credentials: dict[str, str]) -> FakeAuthResponse:
        return self._respond("sign_in_with_password", credentials)

    def _respond(self, name: str, credentials: dict[str, str]) -> FakeAuthResponse:
        self.calls.append((name, credentials))
        if self.error is not None:
            raise self.error
        return FakeAuthResponse(user=self.user)


@dataclass
class FakeSupabaseClient:
    tables: dict[str, FakeTable] = field(default_factory=dict)
    auth: FakeAuth = field(default_factory=FakeAuth)

    def table(self, name: str) -> FakeTable:
        if name not in self.tables:
            self.tables[name] = FakeTable(name=name)
        return self.tables[name]


def test_supabase_kv_store_get() -> None:
    client = FakeSupabaseClient()
    table = client.table("kv_store")
    table.queue("select", [{"value": '{"version":1,"ingredients":[]}'}])

    store = SupabaseKeyValueStore(client)

    assert store.get("freshfocus_ingredients") == '{"version":1,"ingredients":[]}'
    assert ("key", "freshfocus_ingredients") in table.last_filters
    assert store.get("missing") is None


def test_supabase_kv_store_set_upserts_by_key() -> None:
    client = FakeSupabaseClient()
    store = SupabaseKeyValueStore(client)

    store.set("freshfocus_preferences", "{}")

    table = client.table("kv_store")
    assert table.last_conflict == "key"
    assert table.last_payload["key"] == "freshfocus_preferences"
    assert table.last_payload["value"] == "{}"


def test_supabase_identity_provider_register() -> None:
    client = FakeSupabaseClient()
    client.auth.user = FakeUser(id="user-1", email="cook@example.com")

    user = SupabaseIdentityProvider(client).register("cook@example.com", "secret")

    assert user.id == "user-1"
    assert client.auth.calls[0] == (
        "sign_up",
        {"email": "cook@example.com", "password": "secret"},
    )


def test_supabase_identity_provider_wraps_auth_errors() -> None:
    client = FakeSupabaseClient()
    client.auth.error = AuthError("Invalid login credentials", None)

    with pytest.raises(AuthenticationError) as excinfo:
        SupabaseIdentityProvider(client).sign_in("cook@example.com", "wrong")

    assert excinfo.value.message == "Invalid login credentials"


def test_supabase_identity_provider_requires_user() -> None:
    client = FakeSupabaseClient()

    with pytest.raises(AuthenticationError):
        SupabaseIdentityProvider(client).sign_in("cook@example.com", "secret")
