"""
Integration Test Fixtures.

Fixtures for integration tests - uses the real application, real
YAML configuration and a real database session.
These fixtures build on the root conftest.py database fixtures.
"""

from collections.abc import AsyncGenerator, Awaitable, Callable
from dataclasses import dataclass
from typing import Any
from unittest.mock import MagicMock, patch

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from beyondnp.backend.core.database import get_db_session
from beyondnp.backend.repositories.user import UserRepository

API = "/api"
TEST_JWT_SECRET = "test-secret-key-for-testing-only"


# =============================================================================
# Mock Settings Helper
# =============================================================================


def _create_mock_settings() -> Any:
    """Secrets normally read from config/.env."""
    settings = MagicMock()
    settings.db_password = ""
    settings.jwt_secret = TEST_JWT_SECRET
    settings.smtp_password = ""
    return settings


# =============================================================================
# API Client Fixtures
# =============================================================================


@pytest.fixture
async def client(
    db_session: AsyncSession,
) -> AsyncGenerator[AsyncClient, None]:
    """
    Create a test client with database session override.

    The client uses the test database session, so every request in a
    test sees the writes of the requests before it, and everything is
    rolled back after the test.

    Usage:
        async def test_health_endpoint(client: AsyncClient):
            response = await client.get("/health")
            assert response.status_code == 200
    """
    async def override_get_db_session() -> AsyncGenerator[AsyncSession, None]:
        yield db_session

    with patch("beyondnp.backend.core.config.get_settings") as mock_config_settings, \
         patch("beyondnp.backend.core.security.get_settings") as mock_security_settings:
        mock_settings = _create_mock_settings()
        mock_config_settings.return_value = mock_settings
        mock_security_settings.return_value = mock_settings

        from beyondnp.backend.main import create_app

        app = create_app()
        app.dependency_overrides[get_db_session] = override_get_db_session

        async with AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://test",
        ) as test_client:
            yield test_client

        app.dependency_overrides.clear()


# =============================================================================
# Account Fixtures
# =============================================================================


@dataclass
class TestAccount:
    """A registered, verified account and its bearer token."""

    __test__ = False

    id: str
    name: str
    email: str
    password: str
    token: str

    @property
    def headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}


RegisterUser = Callable[[str, str, str], Awaitable[dict[str, Any]]]


@pytest.fixture
def register_user(client: AsyncClient) -> RegisterUser:
    """
    Register an account through the API and return its response data.

    Usage:
        async def test_register(register_user):
            data = await register_user("Alice", "alice@example.com", "secret123")
    """
    async def _register(name: str, email: str, password: str) -> dict[str, Any]:
        response = await client.post(
            f"{API}/users/register",
            json={"name": name, "email": email, "password": password},
        )
        assert response.status_code == 201, response.text
        return response.json()["data"]

    return _register


@pytest.fixture
def verification_code(db_session: AsyncSession) -> Callable[[str], Awaitable[str]]:
    """Read the code that would have been emailed to an address."""
    async def _code(email: str) -> str:
        user = await UserRepository(db_session).get_by_email(email)
        assert user is not None and user.email_verification_code is not None
        return user.email_verification_code

    return _code


@pytest.fixture
def create_account(
    client: AsyncClient,
    register_user: RegisterUser,
    verification_code: Callable[[str], Awaitable[str]],
) -> Callable[..., Awaitable[TestAccount]]:
    """Register an account and verify it with its emailed code."""
    async def _create(
        name: str = "Alice",
        email: str = "alice@example.com",
        password: str = "secret123",
    ) -> TestAccount:
        await register_user(name, email, password)
        code = await verification_code(email)

        response = await client.post(
            f"{API}/users/verify-email",
            json={"email": email, "verificationCode": code},
        )
        assert response.status_code == 200, response.text
        data = response.json()["data"]
        return TestAccount(
            id=data["id"],
            name=name,
            email=email,
            password=password,
            token=data["token"],
        )

    return _create


@pytest.fixture
async def alice(create_account) -> TestAccount:
    """A verified account."""
    return await create_account()


@pytest.fixture
async def bob(create_account) -> TestAccount:
    """A second verified account, for ownership checks."""
    return await create_account(name="Bob", email="bob@example.com", password="hunter22")


@pytest.fixture
def auth_headers(alice: TestAccount) -> dict[str, str]:
    """
    Provide authentication headers for API requests.

    Usage:
        async def test_protected_endpoint(client: AsyncClient, auth_headers: dict):
            response = await client.get("/api/users/profile", headers=auth_headers)
            assert response.status_code == 200
    """
    return alice.headers


# =============================================================================
# API Response Assertion Helpers
# =============================================================================


class ApiAssertions:
    """Helper class for API response assertions."""

    @staticmethod
    def assert_success(response: Any, expected_status: int = 200) -> dict[str, Any]:
        """
        Assert API response is successful.

        Args:
            response: httpx Response object
            expected_status: Expected HTTP status code

        Returns:
            Response JSON data

        Raises:
            AssertionError: If response is not successful
        """
        assert response.status_code == expected_status, (
            f"Expected status {expected_status}, got {response.status_code}: "
            f"{response.text}"
        )
        data = response.json()
        assert data.get("success") is True, f"Response not successful: {data}"
        assert "timestamp" in data["metadata"]
        return data

    @staticmethod
    def assert_error(
        response: Any,
        expected_status: int,
        expected_message: str | None = None,
    ) -> dict[str, Any]:
        """
        Assert API response is an error.

        Args:
            response: httpx Response object
            expected_status: Expected HTTP status code
            expected_message: Exact error message (optional)

        Returns:
            Response JSON data

        Raises:
            AssertionError: If response is not an error or messages don't match
        """
        assert response.status_code == expected_status, (
            f"Expected status {expected_status}, got {response.status_code}: "
            f"{response.text}"
        )
        data = response.json()
        assert data.get("success") is False, f"Response should be error: {data}"
        assert data.get("message"), f"Missing error message: {data}"

        if expected_message:
            assert data["message"] == expected_message, (
                f"Expected message {expected_message!r}, got {data['message']!r}"
            )

        return data

    @staticmethod
    def assert_validation_error(
        response: Any,
        field: str | None = None,
    ) -> dict[str, Any]:
        """
        Assert API response is a request validation error (400).

        Args:
            response: httpx Response object
            field: Field expected at the start of the message (optional)

        Returns:
            Response JSON data
        """
        data = ApiAssertions.assert_error(response, 400)

        if field:
            assert data["message"].startswith(field), (
                f"Expected validation error for field '{field}', got: {data['message']}"
            )

        return data


@pytest.fixture
def api() -> ApiAssertions:
    """Provide API assertion helpers."""
    return ApiAssertions()
