"""Ingredient store with key-value persistence."""

import json
import logging
import math
from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from typing import Protocol
from uuid import uuid4

from freshfocus.domain.expiry import DEFAULT_DAYS_LEFT, ExpiryRisk
from freshfocus.domain.ingredients import Ingredient, IngredientDraft, UsageEvent

logger = logging.getLogger(__name__)

INGREDIENTS_KEY = "freshfocus_ingredients"
SCHEMA_VERSION = 1
DEFAULT_NAME = "Unknown"
DEFAULT_UNIT = "pcs"
DEFAULT_CATEGORY = "General"
DEFAULT_QUANTITY = 1.0


class KeyValueStore(Protocol):
    """Persistence interface for small string blobs."""

    def get(self, key: str) -> str | None:
        """Return the stored value for key, if present."""

    def set(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value."""


@dataclass
class IngredientStore:
    """Ordered ingredient collection, most recently added first."""

    kv: KeyValueStore
    key: str = INGREDIENTS_KEY
    _items: list[Ingredient] = field(default_factory=list)

    @classmethod
    def load(cls, kv: KeyValueStore, key: str = INGREDIENTS_KEY) -> "IngredientStore":
        """Hydrate a store from its persisted blob, starting empty on failure."""
        try:
            raw = kv.get(key)
        except Exception:
            logger.exception("Failed to read ingredient blob", extra={"key": key})
            raw = None
        items = deserialize_ingredients(raw) if raw else []
        return cls(kv=kv, key=key, _items=items)

    def all(self) -> list[Ingredient]:
        """Return every record, including used-up ones."""
        return list(self._items)

    def active(self) -> list[Ingredient]:
        """Return records that still have quantity left."""
        return [item for item in self._items if item.is_active]

    def filter_by_risk(self, risk: ExpiryRisk | None) -> list[Ingredient]:
        """Return active records in a risk tier, or all active ones."""
        if risk is None:
            return self.active()
        return [item for item in self.active() if item.expiry_risk == risk]

    def get(self, ingredient_id: str) -> Ingredient | None:
        """Return a record by id, if present."""
        for item in self._items:
            if item.id == ingredient_id:
                return item
        return None

    def add(self, drafts: Iterable[IngredientDraft]) -> list[Ingredient]:
        """Create records for drafts and prepend them to the store."""
        now = datetime.now(tz=UTC)
        created = [_build_ingredient(draft, now) for draft in drafts]
        if not created:
            return []
        self._commit(created + self._items)
        return created

    def use(self, ingredient_id: str, amount: float) -> Ingredient | None:
        """Consume amount of an ingredient, never going below zero."""
        if not _is_positive_number(amount):
            return None
        for index, item in enumerate(self._items):
            if item.id != ingredient_id:
                continue
            consumed = min(float(amount), item.quantity)
            if consumed <= 0:
                return item
            updated = replace(
                item,
                quantity=max(0.0, item.quantity - float(amount)),
                usage_history=(
                    *item.usage_history,
                    UsageEvent(amount=consumed, used_at=datetime.now(tz=UTC)),
                ),
            )
            items = list(self._items)
            items[index] = updated
            self._commit(items)
            return updated
        return None

    def decrease(self, ingredient_id: str) -> Ingredient | None:
        """Consume a single unit of an ingredient."""
        return self.use(ingredient_id, 1)

    def delete(self, ingredient_id: str) -> bool:
        """Remove a record; return whether anything was removed."""
        remaining = [item for item in self._items if item.id != ingredient_id]
        if len(remaining) == len(self._items):
            return False
        self._commit(remaining)
        return True

    def _commit(self, items: list[Ingredient]) -> None:
        # Memory only changes once the write has succeeded.
        self.kv.set(self.key, serialize_ingredients(items))
        self._items = items


def serialize_ingredients(items: Iterable[Ingredient]) -> str:
    """Serialize records into the versioned JSON envelope."""
    payload = {
        "version": SCHEMA_VERSION,
        "ingredients": [ingredient_to_dict(item) for item in items],
    }
    return json.dumps(payload, ensure_ascii=False, separators=(",", ":"))


def deserialize_ingredients(raw: str) -> list[Ingredient]:
    """Parse a persisted blob; corrupt data yields an empty list."""
    try:
        data = json.loads(raw)
    except (TypeError, ValueError):
        logger.warning("Ingredient blob is not valid JSON; starting empty")
        return []

    if isinstance(data, list):
        rows = data
    elif isinstance(data, dict):
        version = data.get("version")
        if version != SCHEMA_VERSION:
            logger.warning(
                "Unsupported ingredient blob version; starting empty",
                extra={"version": version},
            )
            return []
        rows = data.get("ingredients")
        if not isinstance(rows, list):
            logger.warning("Ingredient blob has no ingredient list; starting empty")
            return []
    else:
        logger.warning("Ingredient blob has an unexpected shape; starting empty")
        return []

    items: list[Ingredient] = []
    for row in rows:
        try:
            items.append(ingredient_from_dict(row))
        except (AttributeError, KeyError, OverflowError, TypeError, ValueError):
            logger.warning("Skipping malformed ingredient record")
    return items


def ingredient_to_dict(item: Ingredient) -> dict[str, object]:
    """Return the wire representation of an ingredient."""
    return {
        "id": item.id,
        "name": item.name,
        "category": item.category,
        "addedDate": item.added_date.isoformat(),
        "quantity": item.quantity,
        "originalQuantity": item.original_quantity,
        "unit": item.unit,
        "estimatedDaysLeft": item.estimated_days_left,
        "expiryRisk": item.expiry_risk.value,
        "usageHistory": [
            {"usedAmount": event.amount, "usedDate": event.used_at.isoformat()}
            for event in item.usage_history
        ],
    }


def ingredient_from_dict(row: dict[str, object]) -> Ingredient:
    """Build an ingredient from its wire representation.

    The stored expiryRisk is ignored and recomputed from estimatedDaysLeft.
    """
    if not isinstance(row, dict):
        raise TypeError("ingredient record must be an object")
    quantity = float(row["quantity"])
    history = row.get("usageHistory") or []
    if not isinstance(history, list):
        raise TypeError("usageHistory must be a list")
    return Ingredient(
        id=str(row["id"]),
        name=str(row.get("name") or DEFAULT_NAME),
        category=str(row.get("category") or DEFAULT_CATEGORY),
        added_date=_parse_datetime(row.get("addedDate")),
        quantity=max(0.0, quantity),
        original_quantity=float(row.get("originalQuantity", quantity)),
        unit=str(row.get("unit") or DEFAULT_UNIT),
        estimated_days_left=math.ceil(float(row["estimatedDaysLeft"])),
        usage_history=tuple(
            UsageEvent(
                amount=float(event["usedAmount"]),
                used_at=_parse_datetime(event.get("usedDate")),
            )
            for event in history
        ),
    )


def coerce_quantity(value: object) -> float:
    """Return a non-negative quantity, or the default for malformed input."""
    number = _to_number(value)
    if number is None or number < 0:
        return DEFAULT_QUANTITY
    return number


def coerce_days_left(value: object) -> int:
    """Return whole days left; fractions round up so the tier is unchanged."""
    number = _to_number(value)
    if number is None:
        return DEFAULT_DAYS_LEFT
    return math.ceil(number)


def _build_ingredient(draft: IngredientDraft, now: datetime) -> Ingredient:
    quantity = coerce_quantity(draft.quantity)
    return Ingredient(
        id=str(uuid4()),
        name=_clean_text(draft.name) or DEFAULT_NAME,
        category=_clean_text(draft.category) or DEFAULT_CATEGORY,
        added_date=now,
        quantity=quantity,
        original_quantity=quantity,
        unit=_clean_text(draft.unit) or DEFAULT_UNIT,
        estimated_days_left=coerce_days_left(draft.estimated_days_left),
    )


def _to_number(value: object) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    if not math.isfinite(number):
        return None
    return number


def _is_positive_number(value: object) -> bool:
    number = _to_number(value)
    return number is not None and number > 0


def _clean_text(value: str | None) -> str:
    if not isinstance(value, str):
        return ""
    return value.strip()


def _parse_datetime(value: object) -> datetime:
    if isinstance(value, str) and value:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=UTC)
        return parsed
    return datetime.now(tz=UTC)
