"""User preference models."""

from dataclasses import dataclass
from enum import Enum


class FitnessGoal(str, Enum):
    """Fitness goal that steers recipe generation."""

    NONE = "none"
    HIGH_PROTEIN = "high-protein"
    LOW_CARB = "low-carb"
    BALANCED = "balanced"
    WEIGHT_LOSS = "weight-loss"


DIETARY_OPTIONS: tuple[str, ...] = ("Vegetarian", "Gluten-Free", "Dairy-Free", "Keto")


@dataclass(frozen=True)
class UserPreferences:
    """Settings that parameterize recipe generation requests."""

    dietary_restrictions: tuple[str, ...] = ()
    fitness_goal: FitnessGoal = FitnessGoal.BALANCED
    tastes: tuple[str, ...] = ()
