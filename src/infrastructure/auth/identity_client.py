"""HTTP client for the identity provider's backend user API."""

from typing import Optional

import httpx
import structlog

from core.config import settings
from core.exceptions import IdentityProviderError
from infrastructure.auth.provider import IdentityUser

logger = structlog.get_logger()


class HttpIdentityDirectory:
    """Looks users up via ``GET {api_url}/users/{user_id}``.

    The transport is injectable so tests can use ``httpx.MockTransport``.
    """

    def __init__(
        self,
        api_url: str = settings.identity_api_url,
        secret_key: str = settings.identity_secret_key,
        timeout: float = settings.identity_timeout_seconds,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._api_url = api_url.rstrip("/")
        self._secret_key = secret_key
        self._timeout = timeout
        self._transport = transport

    async def get_user(self, user_id: str) -> Optional[IdentityUser]:
        if not self._secret_key:
            logger.debug("identity_lookup_skipped", reason="no_secret_key")
            return None

        url = f"{self._api_url}/users/{user_id}"
        headers = {"Authorization": f"Bearer {self._secret_key}"}
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                response = await client.get(url, headers=headers)
        except httpx.HTTPError as e:
            raise IdentityProviderError(f"Identity provider unreachable: {e}") from e

        if response.status_code == 404:
            return None
        if response.is_error:
            raise IdentityProviderError(
                f"Identity provider returned {response.status_code}"
            )

        try:
            body = response.json()
        except ValueError as e:
            raise IdentityProviderError("Identity provider returned invalid JSON") from e

        return IdentityUser(
            id=body.get("id") or user_id,
            first_name=body.get("first_name"),
            last_name=body.get("last_name"),
            image_url=body.get("image_url"),
        )
