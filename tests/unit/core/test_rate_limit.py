"""Unit tests for rate limit keying and the 429 envelope."""

import orjson
import pytest
from starlette.requests import Request

from core import rate_limit
from core.rate_limit import client_address, rate_limit_exceeded_handler


def _request(headers: dict[str, str] | None = None, client: str = "10.0.0.5") -> Request:
    return Request(
        {
            "type": "http",
            "method": "GET",
            "path": "/api/profiles",
            "headers": [(k.lower().encode(), v.encode()) for k, v in (headers or {}).items()],
            "client": (client, 51234),
        }
    )


class TestClientAddress:
    def test_uses_socket_address_by_default(self):
        request = _request({"X-Forwarded-For": "203.0.113.9"})

        assert client_address(request) == "10.0.0.5"

    def test_uses_first_forwarded_hop_when_trusted(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setattr(rate_limit.settings, "trust_forwarded_for", True)
        request = _request({"X-Forwarded-For": "203.0.113.9, 10.0.0.1"})

        assert client_address(request) == "203.0.113.9"

    def test_falls_back_when_header_empty(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setattr(rate_limit.settings, "trust_forwarded_for", True)

        assert client_address(_request({"X-Forwarded-For": ""})) == "10.0.0.5"


class TestRateLimitExceededHandler:
    async def test_renders_error_envelope(self):
        response = await rate_limit_exceeded_handler(_request(), Exception("10 per 1 minute"))

        assert response.status_code == 429
        assert response.headers["retry-after"] == "60"
        body = orjson.loads(response.body)
        assert body["error_code"] == "RATE_LIMIT_EXCEEDED"
        assert body["error"] == "Rate limit exceeded: 10 per 1 minute"
