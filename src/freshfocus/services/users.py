"""Account registration and sign-in."""

import logging
from dataclasses import dataclass
from typing import Protocol

from freshfocus.domain.models import UserRecord

logger = logging.getLogger(__name__)


class AuthenticationError(Exception):
    """Identity provider failure with a message meant for the user."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class IdentityProvider(Protocol):
    """Interface for the external identity provider."""

    def register(self, email: str, password: str) -> UserRecord:
        """Create an account and return its user handle."""

    def sign_in(self, email: str, password: str) -> UserRecord:
        """Authenticate and return the user handle."""


@dataclass
class UserService:
    """Application service for account actions."""

    provider: IdentityProvider

    def register(self, email: str, password: str) -> UserRecord:
        """Register a new account; provider errors propagate unchanged."""
        try:
            user = self.provider.register(email, password)
        except AuthenticationError as exc:
            logger.info("Registration rejected: %s", exc.message)
            raise
        logger.info("Registered user", extra={"user_id": user.id})
        return user

    def sign_in(self, email: str, password: str) -> UserRecord:
        """Sign in to an existing account."""
        try:
            user = self.provider.sign_in(email, password)
        except AuthenticationError as exc:
            logger.info("Sign-in rejected: %s", exc.message)
            raise
        logger.info("Signed in user", extra={"user_id": user.id})
        return user
