"""Domain models for inventory statistics."""

from dataclasses import dataclass


@dataclass(frozen=True)
class WasteStats:
    """Usage and waste figures for the dashboard."""

    used: float
    soon: int
    wasted: int
    active: int
