"""Usage and waste statistics for the inventory."""

from collections.abc import Iterable
from dataclasses import dataclass

from freshfocus.domain.expiry import ExpiryRisk
from freshfocus.domain.ingredients import Ingredient
from freshfocus.domain.stats import WasteStats


@dataclass
class StatsService:
    """Service for computing dashboard figures."""

    def summarize(self, ingredients: Iterable[Ingredient]) -> WasteStats:
        """Aggregate usage and waste across all records."""
        used = 0.0
        soon = 0
        wasted = 0
        active = 0
        for item in ingredients:
            used += max(0.0, item.original_quantity - item.quantity)
            if item.expiry_risk == ExpiryRisk.SOON:
                soon += 1
            elif item.expiry_risk == ExpiryRisk.EXPIRED:
                wasted += 1
            if item.is_active:
                active += 1
        return WasteStats(used=used, soon=soon, wasted=wasted, active=active)
