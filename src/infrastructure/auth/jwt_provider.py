"""JWT authentication provider implementation.

Supports identity-provider session tokens (RS256/ES256 via JWKS) and
locally-created tokens (HS256 for tests).

Session token payload structure:
    {
        "sub": "user_2abc...",
        "email": "user@example.com",
        "name": "Jane Doe",
        "image_url": "https://img.example.com/jane.png",
        "exp": 1234567890
    }

Only ``sub`` is required; every other claim is optional.
"""

import logging
from datetime import datetime, timedelta
from typing import Any, Optional

import httpx
from jose import jwt
from jose.exceptions import JOSEError

from core.config import settings
from infrastructure.auth.provider import TokenUser

logger = logging.getLogger(__name__)

ASYMMETRIC_ALGORITHMS = ("RS256", "ES256")

# Module-level JWKS cache (fetched once, reused across requests)
_jwks_cache: dict[str, Any] | None = None


async def _get_jwks_keys(jwks_url: str) -> dict[str, Any]:
    """Fetch and cache JWKS keys from the identity provider."""
    global _jwks_cache
    if _jwks_cache is not None:
        return _jwks_cache

    if not jwks_url:
        return {}

    try:
        async with httpx.AsyncClient() as client:
            response = await client.get(jwks_url, timeout=10.0)
            response.raise_for_status()
            jwks_data = response.json()
    except (httpx.HTTPError, ValueError):
        logger.exception("Failed to fetch JWKS from %s", jwks_url)
        return {}

    _jwks_cache = {}
    for key_data in jwks_data.get("keys", []):
        kid = key_data.get("kid")
        if kid:
            _jwks_cache[kid] = key_data
    logger.info("Fetched %d JWKS keys", len(_jwks_cache))
    return _jwks_cache


def _clear_jwks_cache() -> None:
    global _jwks_cache
    _jwks_cache = None


class JWTAuthProvider:
    """JWT-based authentication provider.

    Handles validation of both identity-provider (RS256/ES256) and
    locally-created (HS256) JWTs.
    """

    def __init__(
        self,
        secret_key: str = settings.jwt_secret_key,
        algorithm: str = settings.jwt_algorithm,
        expire_minutes: int = settings.jwt_expire_minutes,
        jwks_url: str = settings.identity_jwks_url,
        allow_local_tokens: Optional[bool] = None,
    ) -> None:
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._expire_minutes = expire_minutes
        self._jwks_url = jwks_url
        # Production only trusts tokens signed by the identity provider
        if allow_local_tokens is None:
            allow_local_tokens = not settings.is_production
        self._allow_local_tokens = allow_local_tokens

    async def validate_token(self, token: str) -> Optional[TokenUser]:
        """
        Validate a JWT token and extract user info.

        Detects the signing algorithm from the token header:
        - RS256/ES256 (identity provider): validates via JWKS public key
        - HS256 (local/test): validates via shared secret, outside
          production only

        Args:
            token: The JWT to validate

        Returns:
            TokenUser if valid, None if invalid or expired
        """
        try:
            header = jwt.get_unverified_header(token)
            alg = header.get("alg", self._algorithm)

            if alg in ASYMMETRIC_ALGORITHMS:
                payload = await self._validate_with_jwks(token, header, alg)
            elif not self._allow_local_tokens:
                logger.warning("Rejected locally signed token (alg=%s)", alg)
                return None
            else:
                payload = jwt.decode(
                    token,
                    self._secret_key,
                    algorithms=[self._algorithm],
                    options={"verify_aud": False},
                )
        except JOSEError:
            return None

        if payload is None:
            return None

        user_id = payload.get("sub")
        if not user_id:
            return None

        metadata = payload.get("user_metadata") or {}
        display_name = (
            payload.get("name")
            or metadata.get("display_name")
            or metadata.get("full_name")
            or _join_names(payload.get("first_name"), payload.get("last_name"))
        )
        avatar_url = payload.get("image_url") or payload.get("picture") or metadata.get("avatar_url")

        return TokenUser(
            id=str(user_id),
            email=payload.get("email"),
            display_name=display_name,
            avatar_url=avatar_url,
            role=payload.get("role"),
        )

    async def _validate_with_jwks(self, token: str, header: dict, alg: str) -> Optional[dict]:
        """Validate an asymmetrically signed JWT using JWKS public keys."""
        kid = header.get("kid")
        if not kid:
            return None

        jwks_keys = await _get_jwks_keys(self._jwks_url)
        key_data = jwks_keys.get(kid)
        if not key_data:
            # Unknown kid, refetch once in case keys were rotated
            _clear_jwks_cache()
            jwks_keys = await _get_jwks_keys(self._jwks_url)
            key_data = jwks_keys.get(kid)
            if not key_data:
                logger.warning("JWKS key not found for kid=%s", kid)
                return None

        return jwt.decode(
            token,
            key_data,
            algorithms=[alg],
            options={"verify_aud": False},
        )

    def create_token(self, user: TokenUser) -> str:
        """
        Create a JWT token for a user (HS256, used for tests).

        Args:
            user: The user to create a token for

        Returns:
            The generated JWT string
        """
        expire = datetime.utcnow() + timedelta(minutes=self._expire_minutes)

        payload: dict = {"sub": user.id, "exp": expire}
        if user.email:
            payload["email"] = user.email
        if user.display_name:
            payload["name"] = user.display_name
        if user.avatar_url:
            payload["image_url"] = user.avatar_url
        if user.role:
            payload["role"] = user.role

        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)


def _join_names(first: Optional[str], last: Optional[str]) -> Optional[str]:
    full = " ".join(p for p in (first, last) if p)
    return full or None
