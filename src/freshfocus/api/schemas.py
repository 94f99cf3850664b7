"""Request models and response shaping for the HTTP API."""

from datetime import date
from typing import Literal

from pydantic import BaseModel, Field

from freshfocus.domain.preferences import FitnessGoal
from freshfocus.domain.scan import ScanDraft
from freshfocus.domain.stats import WasteStats
from freshfocus.services.scan import ScanIntake


class Credentials(BaseModel):
    """Email and password submitted to the identity provider."""

    email: str
    password: str


class ManualIngredient(BaseModel):
    """Hand-entered ingredient with a calendar expiry date."""

    name: str
    quantity: float | str = 1
    unit: str = "pcs"
    expiry_date: date | None = None


class UseRequest(BaseModel):
    amount: float = Field(gt=0)


class SelectionRequest(BaseModel):
    included: bool


class ScanRequest(BaseModel):
    """Base64 encoded frame, optionally as a data URL."""

    image_base64: str


class ScanItemEdit(BaseModel):
    name: str | None = None
    quantity: float | str | None = None
    unit: str | None = None
    expiry_date: date | None = None


class GenerateRequest(BaseModel):
    source: Literal["all", "selection"] = "all"


class PreferencesUpdate(BaseModel):
    dietary_restrictions: list[str] | None = None
    fitness_goal: FitnessGoal | None = None
    tastes: list[str] | None = None


def scan_draft_to_dict(draft: ScanDraft) -> dict[str, object]:
    """Return the wire representation of a staged scan row."""
    return {
        "name": draft.name,
        "quantity": draft.quantity,
        "unit": draft.unit,
        "estimatedDaysLeft": draft.estimated_days_left,
        "expiryRisk": draft.expiry_risk.value,
    }


def scan_state_to_dict(intake: ScanIntake) -> dict[str, object]:
    """Return the review state and its staged rows."""
    return {
        "state": intake.state.value,
        "items": [scan_draft_to_dict(draft) for draft in intake.drafts],
    }


def stats_to_dict(stats: WasteStats) -> dict[str, object]:
    return {
        "used": stats.used,
        "soon": stats.soon,
        "wasted": stats.wasted,
        "active": stats.active,
    }
