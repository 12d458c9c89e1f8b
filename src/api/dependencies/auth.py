"""Authentication dependencies for FastAPI.

Protected routes take ``CurrentUser``; public reads take ``OptionalUser``
so that a signed-in viewer gets viewer-relative stats.
"""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from core.exceptions import AuthenticationError, AuthorizationError, ErrorCode
from infrastructure.auth.jwt_provider import JWTAuthProvider
from infrastructure.auth.provider import TokenUser

bearer_scheme = HTTPBearer(auto_error=False, description="Identity provider session token")

_auth_provider: JWTAuthProvider | None = None


def get_auth_provider() -> JWTAuthProvider:
    """Return the process-wide token validator."""
    global _auth_provider
    if _auth_provider is None:
        _auth_provider = JWTAuthProvider()
    return _auth_provider


Credentials = Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)]


async def get_current_user(
    credentials: Credentials,
    auth_provider: JWTAuthProvider = Depends(get_auth_provider),
) -> TokenUser:
    """
    Resolve the caller from the bearer token.

    Raises:
        AuthenticationError: UNAUTHORIZED without a token, INVALID_TOKEN
            when the token does not verify
    """
    if credentials is None:
        raise AuthenticationError(
            message="Authorization header required",
            error_code=ErrorCode.UNAUTHORIZED,
        )

    caller = await auth_provider.validate_token(credentials.credentials)
    if caller is None:
        raise AuthenticationError(
            message="Invalid or expired token",
            error_code=ErrorCode.INVALID_TOKEN,
        )
    return caller


async def get_optional_user(
    credentials: Credentials,
    auth_provider: JWTAuthProvider = Depends(get_auth_provider),
) -> TokenUser | None:
    """The caller when a valid token was sent; anonymous otherwise, never an error."""
    if credentials is None:
        return None
    return await auth_provider.validate_token(credentials.credentials)


def require_owner(caller: TokenUser, user_id: str, action: str) -> None:
    """Reject writes to a profile the caller does not own."""
    if caller.id != user_id:
        raise AuthorizationError(f"You can only {action} your own profile")


CurrentUser = Annotated[TokenUser, Depends(get_current_user)]
OptionalUser = Annotated[TokenUser | None, Depends(get_optional_user)]
