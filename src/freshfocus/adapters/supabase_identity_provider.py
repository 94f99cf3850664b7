"""Supabase Auth identity provider."""

from dataclasses import dataclass

from supabase import AuthError, Client

from freshfocus.domain.models import UserRecord
from freshfocus.services.users import AuthenticationError, IdentityProvider


@dataclass
class SupabaseIdentityProvider(IdentityProvider):
    """Email and password accounts through Supabase Auth."""

    client: Client

    def register(self, email: str, password: str) -> UserRecord:
        """Create an account with Supabase Auth."""
        try:
            response = self.client.auth.sign_up(
                {"email": email, "password": password}
            )
        except AuthError as exc:
            raise AuthenticationError(str(exc)) from exc
        return _to_user(response.user)

    def sign_in(self, email: str, password: str) -> UserRecord:
        """Sign in with Supabase Auth."""
        try:
            response = self.client.auth.sign_in_with_password(
                {"email": email, "password": password}
            )
        except AuthError as exc:
            raise AuthenticationError(str(exc)) from exc
        return _to_user(response.user)


def _to_user(user: object | None) -> UserRecord:
    if user is None:
        raise AuthenticationError("Authentication failed")
    return UserRecord(id=str(user.id), email=getattr(user, "email", None))
