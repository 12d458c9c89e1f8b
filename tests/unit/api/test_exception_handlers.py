"""Unit tests for exception handlers."""

import json
from unittest.mock import MagicMock

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.exc import OperationalError, SQLAlchemyError

from api.exception_handlers import setup_exception_handlers
from core.exceptions import AlreadyFollowingError, AuthorizationError, ProfileNotFoundError


def _create_test_app() -> FastAPI:
    app = FastAPI()
    setup_exception_handlers(app)
    return app


def _registered_handler(app: FastAPI, exc_class: type):
    handler = app.exception_handlers.get(exc_class)
    assert handler is not None, f"No handler registered for {exc_class.__name__}"
    return handler


class TestExceptionHandlers:
    @pytest.mark.asyncio
    async def test_app_exception_returns_error_envelope(self) -> None:
        app = _create_test_app()

        @app.get("/raise-app")
        async def _() -> None:
            raise ProfileNotFoundError("user_missing")

        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as c:
            response = await c.get("/raise-app")

        assert response.status_code == 404
        body = response.json()
        assert body["error"] == "Profile not found"
        assert body["error_code"] == "PROFILE_NOT_FOUND"
        assert body["details"]["profile"] == "user_missing"

    @pytest.mark.asyncio
    async def test_conflict_is_reported_as_400(self) -> None:
        app = _create_test_app()

        @app.post("/follow")
        async def _() -> None:
            raise AlreadyFollowingError("user_b")

        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as c:
            response = await c.post("/follow")

        assert response.status_code == 400
        assert response.json()["error_code"] == "ALREADY_FOLLOWING"

    @pytest.mark.asyncio
    async def test_authorization_error_is_403(self) -> None:
        app = _create_test_app()

        @app.put("/profiles/x")
        async def _() -> None:
            raise AuthorizationError()

        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as c:
            response = await c.put("/profiles/x")

        assert response.status_code == 403
        assert response.json()["error_code"] == "FORBIDDEN"

    @pytest.mark.asyncio
    async def test_http_exception_returns_standard_format(self) -> None:
        from starlette.exceptions import HTTPException

        app = _create_test_app()

        @app.get("/raise-http")
        async def _() -> None:
            raise HTTPException(status_code=405, detail="Method Not Allowed")

        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as c:
            response = await c.get("/raise-http")

        assert response.status_code == 405
        body = response.json()
        assert body["error_code"] == "HTTP_ERROR"
        assert body["error"] == "Method Not Allowed"

    @pytest.mark.asyncio
    async def test_validation_error_returns_400_with_field_details(self) -> None:
        from pydantic import BaseModel, Field

        app = _create_test_app()

        class Body(BaseModel):
            following_id: str = Field(..., min_length=1)

        @app.post("/validate")
        async def _(body: Body) -> dict[str, bool]:
            return {"ok": True}

        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as c:
            response = await c.post("/validate", json={"following_id": ""})

        assert response.status_code == 400
        body = response.json()
        assert body["error_code"] == "VALIDATION_ERROR"
        assert body["details"][0]["field"] == "body.following_id"

    @pytest.mark.asyncio
    async def test_database_error_returns_500_without_statement(self) -> None:
        app = _create_test_app()
        mock_request = MagicMock()
        mock_request.state.request_id = "req-db"

        handler = _registered_handler(app, SQLAlchemyError)
        exc = OperationalError("SELECT secret FROM profiles", {}, Exception("gone"))

        response = await handler(mock_request, exc)  # type: ignore[misc]

        assert response.status_code == 500
        body = json.loads(response.body)
        assert body["error_code"] == "DATABASE_ERROR"
        assert "secret" not in body["error"]
        assert body["details"] == {"request_id": "req-db"}

    @pytest.mark.asyncio
    async def test_unhandled_exception_returns_generic_500(self) -> None:
        app = _create_test_app()
        mock_request = MagicMock()
        mock_request.state.request_id = "test-req-id"

        handler = _registered_handler(app, Exception)

        response = await handler(mock_request, RuntimeError("db password is hunter2"))  # type: ignore[misc]

        assert response.status_code == 500
        body = json.loads(response.body)
        assert body["error_code"] == "INTERNAL_ERROR"
        assert body["error"] == "An unexpected error occurred"
        assert body["details"] == {"request_id": "test-req-id"}
