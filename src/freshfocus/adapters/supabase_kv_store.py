"""Supabase-backed key-value store."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from freshfocus.services.inventory import KeyValueStore


@dataclass
class SupabaseKeyValueStore(KeyValueStore):
    """Supabase implementation storing blobs in the kv_store table."""

    client: Client

    def get(self, key: str) -> str | None:
        """Return the stored value for key, if present."""
        response = (
            self.client.table("kv_store")
            .select("value")
            .eq("key", key)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return response.data[0].get("value")

    def set(self, key: str, value: str) -> None:
        """Insert or replace the value for key."""
        self.client.table("kv_store").upsert(
            {
                "key": key,
                "value": value,
                "updated_at": datetime.now(tz=UTC).isoformat(),
            },
            on_conflict="key",
        ).execute()
