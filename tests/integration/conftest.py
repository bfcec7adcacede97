"""Shared fixtures for integration tests.

Every test gets a freshly created application so settings changed through
environment variables take effect. Tracing is disabled to keep the global
tracer provider untouched.
"""

from collections.abc import AsyncGenerator, Generator

import pytest
from fastapi import FastAPI, Request, Response
from fastapi.testclient import TestClient
from httpx import ASGITransport, AsyncClient
from starlette.middleware.base import RequestResponseEndpoint

from papercontest.api.main import create_app
from papercontest.core.config import get_settings
from papercontest.core.error_context import _get_sensitive_fields

TEST_USER_HEADER = "X-Test-User"


@pytest.fixture(autouse=True)
def clear_settings_cache(monkeypatch: pytest.MonkeyPatch) -> Generator[None]:
    """Load settings from a clean, tracing-free environment."""
    monkeypatch.setenv("OBSERVABILITY_CONFIG__ENABLE_TRACING", "false")
    # Debug mode makes Starlette answer unhandled errors with an HTML traceback
    monkeypatch.setenv("DEBUG", "false")
    monkeypatch.delenv("ENVIRONMENT", raising=False)
    monkeypatch.delenv("API_PREFIX", raising=False)
    get_settings.cache_clear()
    _get_sensitive_fields.cache_clear()
    yield
    get_settings.cache_clear()
    _get_sensitive_fields.cache_clear()


@pytest.fixture
def production_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Switch the application to production behavior."""
    monkeypatch.setenv("ENVIRONMENT", "production")
    get_settings.cache_clear()


@pytest.fixture
def app() -> FastAPI:
    """Create an application with a stand-in authentication guard.

    The guard attaches ``{"id": <header>, "name": "Li Hua"}`` as the current
    user when the test user header is present.
    """
    application = create_app(get_settings())

    @application.middleware("http")
    async def attach_test_user(
        request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if user_id := request.headers.get(TEST_USER_HEADER):
            request.state.user = {"id": int(user_id), "name": "Li Hua"}
        return await call_next(request)

    return application


@pytest.fixture
def client(app: FastAPI) -> Generator[TestClient]:
    """Synchronous client that returns 500 responses instead of raising."""
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client


@pytest.fixture
async def async_client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """Asynchronous client bound to the application."""
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as test_client:
        yield test_client
