"""Domain models for fridge ingredients."""

from dataclasses import dataclass
from datetime import datetime

from freshfocus.domain.expiry import ExpiryRisk, classify_expiry


@dataclass(frozen=True)
class UsageEvent:
    """A single consumption of an ingredient."""

    amount: float
    used_at: datetime


@dataclass(frozen=True)
class Ingredient:
    """An ingredient record owned by the ingredient store."""

    id: str
    name: str
    category: str
    added_date: datetime
    quantity: float
    original_quantity: float
    unit: str
    estimated_days_left: int
    usage_history: tuple[UsageEvent, ...] = ()

    @property
    def expiry_risk(self) -> ExpiryRisk:
        """Risk tier, always derived from estimated_days_left."""
        return classify_expiry(self.estimated_days_left)

    @property
    def is_active(self) -> bool:
        """Ingredients with nothing left are kept for stats but hidden."""
        return self.quantity > 0


@dataclass(frozen=True)
class IngredientDraft:
    """Partial ingredient proposed by manual entry or a confirmed scan.

    Values are loosely typed: scan results carry quantities as
    strings, and the store coerces anything malformed to a default.
    """

    name: str | None = None
    quantity: object = None
    unit: str | None = None
    estimated_days_left: object = None
    category: str | None = None
