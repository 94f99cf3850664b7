"""Expiry risk classification and date arithmetic."""

import math
from datetime import date, datetime, time, timedelta
from enum import Enum

SOON_THRESHOLD_DAYS = 7
DEFAULT_DAYS_LEFT = 7


class ExpiryRisk(str, Enum):
    """Risk tier derived from the estimated days left."""

    FRESH = "fresh"
    SOON = "soon"
    EXPIRED = "expired"


def classify_expiry(days_left: int) -> ExpiryRisk:
    """Map a days-remaining value to its risk tier."""
    if days_left <= 0:
        return ExpiryRisk.EXPIRED
    if days_left <= SOON_THRESHOLD_DAYS:
        return ExpiryRisk.SOON
    return ExpiryRisk.FRESH


def days_until(target: date | datetime, today: date | None = None) -> int:
    """Return whole days from midnight today until target, floored at 0."""
    current = today or date.today()
    if isinstance(current, datetime):
        current = current.date()
    if isinstance(target, datetime):
        midnight = datetime.combine(current, time.min, tzinfo=target.tzinfo)
        seconds = (target - midnight).total_seconds()
        return max(0, math.ceil(seconds / timedelta(days=1).total_seconds()))
    return max(0, (target - current).days)


def expiry_date_for(days_left: int, today: date | None = None) -> date:
    """Return the calendar date that is days_left days after today."""
    current = today or date.today()
    return current + timedelta(days=days_left)
