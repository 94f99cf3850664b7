"""Ingredient selection for recipe requests."""

from dataclasses import dataclass, field

from freshfocus.domain.ingredients import Ingredient
from freshfocus.services.inventory import IngredientStore


@dataclass
class SelectionSet:
    """Tracks ingredient ids chosen for the next recipe request."""

    _ids: set[str] = field(default_factory=set)

    @property
    def ids(self) -> frozenset[str]:
        """Currently selected ingredient ids."""
        return frozenset(self._ids)

    def select(self, ingredient_id: str, included: bool) -> None:
        """Add or remove an id; repeating either is a no-op."""
        if included:
            self._ids.add(ingredient_id)
        else:
            self._ids.discard(ingredient_id)

    def clear(self) -> None:
        """Drop every selected id."""
        self._ids.clear()

    def selected(self, store: IngredientStore) -> list[Ingredient]:
        """Return selected active records in store order."""
        return [item for item in store.active() if item.id in self._ids]
