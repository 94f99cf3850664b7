"""User preference service."""

import json
import logging
from collections.abc import Iterable
from dataclasses import dataclass, field, replace

from freshfocus.domain.preferences import FitnessGoal, UserPreferences
from freshfocus.services.inventory import KeyValueStore

logger = logging.getLogger(__name__)

PREFERENCES_KEY = "freshfocus_preferences"


@dataclass
class PreferencesService:
    """Holds and persists the preferences used for recipe requests."""

    kv: KeyValueStore
    key: str = PREFERENCES_KEY
    _current: UserPreferences = field(default_factory=UserPreferences)

    @classmethod
    def load(
        cls, kv: KeyValueStore, key: str = PREFERENCES_KEY
    ) -> "PreferencesService":
        """Hydrate preferences, falling back to defaults on any failure."""
        try:
            raw = kv.get(key)
        except Exception:
            logger.exception("Failed to read preferences", extra={"key": key})
            raw = None
        current = _parse_preferences(raw) if raw else UserPreferences()
        return cls(kv=kv, key=key, _current=current)

    def get(self) -> UserPreferences:
        """Return the current preferences."""
        return self._current

    def toggle_restriction(self, label: str) -> UserPreferences:
        """Add a dietary restriction, or remove it when already present."""
        cleaned = label.strip()
        if not cleaned:
            return self._current
        restrictions = self._current.dietary_restrictions
        if cleaned in restrictions:
            updated = tuple(item for item in restrictions if item != cleaned)
        else:
            updated = (*restrictions, cleaned)
        return self._save(replace(self._current, dietary_restrictions=updated))

    def set_fitness_goal(self, goal: FitnessGoal) -> UserPreferences:
        """Replace the fitness goal."""
        return self._save(replace(self._current, fitness_goal=goal))

    def set_tastes(self, tastes: Iterable[str]) -> UserPreferences:
        """Replace the taste list."""
        return self._save(replace(self._current, tastes=_unique_labels(tastes)))

    def update(
        self,
        dietary_restrictions: Iterable[str] | None = None,
        fitness_goal: FitnessGoal | None = None,
        tastes: Iterable[str] | None = None,
    ) -> UserPreferences:
        """Replace any provided fields at once."""
        current = self._current
        if dietary_restrictions is not None:
            current = replace(
                current, dietary_restrictions=_unique_labels(dietary_restrictions)
            )
        if fitness_goal is not None:
            current = replace(current, fitness_goal=fitness_goal)
        if tastes is not None:
            current = replace(current, tastes=_unique_labels(tastes))
        return self._save(current)

    def _save(self, preferences: UserPreferences) -> UserPreferences:
        self.kv.set(self.key, json.dumps(preferences_to_dict(preferences)))
        self._current = preferences
        return preferences


def preferences_to_dict(preferences: UserPreferences) -> dict[str, object]:
    """Return the wire representation of preferences."""
    return {
        "dietaryRestrictions": list(preferences.dietary_restrictions),
        "fitnessGoal": preferences.fitness_goal.value,
        "tastes": list(preferences.tastes),
    }


def _parse_preferences(raw: str) -> UserPreferences:
    try:
        data = json.loads(raw)
        return UserPreferences(
            dietary_restrictions=_unique_labels(data.get("dietaryRestrictions", [])),
            fitness_goal=FitnessGoal(data.get("fitnessGoal", FitnessGoal.BALANCED)),
            tastes=_unique_labels(data.get("tastes", [])),
        )
    except (AttributeError, TypeError, ValueError):
        logger.warning("Stored preferences are malformed; using defaults")
        return UserPreferences()


def _unique_labels(labels: Iterable[str]) -> tuple[str, ...]:
    seen: list[str] = []
    for label in labels:
        cleaned = str(label).strip()
        if cleaned and cleaned not in seen:
            seen.append(cleaned)
    return tuple(seen)
