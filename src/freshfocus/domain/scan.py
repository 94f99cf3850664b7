"""Models for fridge scan results and their review."""

import math
from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from freshfocus.domain.expiry import (
    DEFAULT_DAYS_LEFT,
    ExpiryRisk,
    classify_expiry,
)


class ScanItem(BaseModel):
    """Single ingredient proposed by the image analysis model.

    Every field may be missing or null; the defaults fill the gaps.
    """

    model_config = ConfigDict(populate_by_name=True)

    name: str = ""
    quantity: str | float = "1"
    estimated_days_left: float = Field(
        default=DEFAULT_DAYS_LEFT, alias="estimatedDaysLeft"
    )

    @field_validator("name", mode="before")
    @classmethod
    def default_name(cls, value: object) -> object:
        return "" if value is None else value

    @field_validator("quantity", mode="before")
    @classmethod
    def default_quantity(cls, value: object) -> object:
        return "1" if value is None else value

    @field_validator("estimated_days_left", mode="before")
    @classmethod
    def default_days_left(cls, value: object) -> float:
        if isinstance(value, bool):
            return DEFAULT_DAYS_LEFT
        try:
            days = float(value)
        except (TypeError, ValueError):
            return DEFAULT_DAYS_LEFT
        return days if math.isfinite(days) else DEFAULT_DAYS_LEFT


class ScanState(str, Enum):
    """Lifecycle of a scan review."""

    IDLE = "idle"
    REVIEWING = "reviewing"
    COMMITTING = "committing"


@dataclass(frozen=True)
class ScanDraft:
    """Editable staged row awaiting user confirmation."""

    name: str
    quantity: object
    unit: str
    estimated_days_left: int

    @property
    def expiry_risk(self) -> ExpiryRisk:
        """Risk tier for the currently chosen expiry."""
        return classify_expiry(self.estimated_days_left)
