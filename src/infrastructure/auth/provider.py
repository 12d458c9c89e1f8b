"""Authentication provider and identity directory protocols."""

from dataclasses import dataclass
from typing import Optional, Protocol


@dataclass
class TokenUser:
    """Represents a user extracted from an auth token.

    ``id`` is the identity provider's opaque subject, not a local row id.
    """

    id: str
    email: Optional[str] = None
    display_name: Optional[str] = None
    avatar_url: Optional[str] = None
    role: Optional[str] = None


@dataclass(frozen=True)
class IdentityUser:
    """User record as returned by the identity provider's user API."""

    id: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    image_url: Optional[str] = None

    @property
    def display_name(self) -> Optional[str]:
        full = " ".join(p for p in (self.first_name, self.last_name) if p)
        return full or None


class IAuthProvider(Protocol):
    """Protocol for authentication providers."""

    async def validate_token(self, token: str) -> Optional[TokenUser]:
        """
        Validate an authentication token.

        Args:
            token: The bearer token to validate

        Returns:
            TokenUser if valid, None if invalid
        """
        ...

    def create_token(self, user: TokenUser) -> str:
        """
        Create an authentication token for a user.

        Args:
            user: The user to create a token for

        Returns:
            The generated token string
        """
        ...


class IIdentityDirectory(Protocol):
    """Lookup of users held by the external identity provider."""

    async def get_user(self, user_id: str) -> Optional[IdentityUser]:
        """Return the user, or None if the provider does not know them.

        Raises:
            IdentityProviderError: If the provider could not be reached
        """
        ...
