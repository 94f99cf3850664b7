"""Domain models for FreshFocus accounts."""

from dataclasses import dataclass


@dataclass(frozen=True)
class UserRecord:
    """Opaque handle for an authenticated user."""

    id: str
    email: str | None
