"""Models for generated recipes."""

import math
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator


class HealthIndicators(BaseModel):
    """Scores from 0 to 100 describing a recipe's balance."""

    model_config = ConfigDict(frozen=True)

    protein: float = 0.0
    veggies: float = 0.0
    carbs: float = 0.0

    @field_validator("protein", "veggies", "carbs", mode="before")
    @classmethod
    def clamp_score(cls, value: object) -> float:
        """Pull model scores into 0-100; unusable values become 0."""
        try:
            score = float(value)
        except (TypeError, ValueError):
            return 0.0
        if not math.isfinite(score):
            return 0.0
        return min(100.0, max(0.0, score))


class Recipe(BaseModel):
    """A recipe suggestion returned by the generation model."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(default_factory=lambda: str(uuid4()))
    name: str
    description: str = ""
    ingredients: list[str] = Field(default_factory=list)
    instructions: list[str] = Field(default_factory=list)
    prep_time: str = Field(default="", alias="prepTime")
    health_indicators: HealthIndicators = Field(
        default_factory=HealthIndicators, alias="healthIndicators"
    )
    tags: list[str] = Field(default_factory=list)
