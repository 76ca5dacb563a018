"""
Unit Test Fixtures.

Fixtures for unit tests - all external dependencies are mocked.
Unit tests should be fast and isolated, never touching real databases.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from beyondnp.backend.core.config_schema import (
    ApplicationSchema,
    DatabaseSchema,
    EmailSchema,
    LoggingSchema,
    SecuritySchema,
)


# =============================================================================
# Database Mock Fixtures
# =============================================================================


@pytest.fixture
def mock_db_session() -> AsyncMock:
    """
    Mock database session for unit tests.

    Provides a fully mocked AsyncSession with common methods.

    Usage:
        def test_service(mock_db_session: AsyncMock):
            service = NoteService(mock_db_session, "user-1")
    """
    session = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.flush = AsyncMock()
    session.refresh = AsyncMock()
    session.execute = AsyncMock()
    session.add = MagicMock()
    session.delete = AsyncMock()
    return session


@pytest.fixture
def mock_db_result() -> MagicMock:
    """
    Mock database query result.

    Use this to mock the result of session.execute().

    Usage:
        def test_query(mock_db_session, mock_db_result):
            mock_db_result.scalar_one_or_none.return_value = note
            mock_db_session.execute.return_value = mock_db_result
    """
    result = MagicMock()
    result.scalar_one_or_none = MagicMock(return_value=None)
    result.scalar_one = MagicMock(return_value=0)
    result.scalars = MagicMock()
    result.scalars.return_value.all = MagicMock(return_value=[])
    result.scalars.return_value.first = MagicMock(return_value=None)
    return result


# =============================================================================
# Settings Mock Fixtures
# =============================================================================


@pytest.fixture
def mock_settings() -> MagicMock:
    """
    Mock secrets (config/.env).

    Usage:
        def test_with_settings(mock_settings):
            with patch("module.get_settings", return_value=mock_settings):
                # Test code that uses settings
    """
    settings = MagicMock()
    settings.db_password = "test_pass"
    settings.jwt_secret = "test-secret-key"
    settings.smtp_password = "smtp-pass"
    return settings


@pytest.fixture
def mock_app_config() -> MagicMock:
    """
    YAML application configuration built from the real schemas.

    Usage:
        def test_with_config(mock_app_config):
            with patch("module.get_app_config", return_value=mock_app_config):
                # Test code that uses app config
    """
    config = MagicMock()
    config.application = ApplicationSchema(
        name="Test App",
        version="1.0.0",
        description="Test application",
        environment="test",
        debug=True,
        api_prefix="/api",
        client_url="http://localhost:3000",
        server={"host": "127.0.0.1", "port": 8000},
        cors={"origins": []},
    )
    config.database = DatabaseSchema(
        driver="sqlite+aiosqlite",
        host="localhost",
        port=5432,
        name="test.db",
        user="test_user",
        pool_size=5,
        max_overflow=10,
        pool_timeout=30,
        pool_recycle=1800,
        echo=False,
    )
    config.logging = LoggingSchema(
        level="DEBUG",
        format="console",
        handlers={
            "console": {"enabled": True},
            "file": {
                "enabled": False,
                "path": "logs/system.jsonl",
                "max_bytes": 10485760,
                "backup_count": 5,
            },
        },
    )
    config.security = SecuritySchema(
        jwt={
            "algorithm": "HS256",
            "access_token_expire_minutes": 30,
            "audience": "beyondnp-test",
        },
        verification={"code_length": 6, "code_expire_minutes": 10},
    )
    config.email = EmailSchema(
        enabled=False,
        sender="Beyond NP <no-reply@test.local>",
        smtp={
            "host": "smtp.test.local",
            "port": 587,
            "username": "",
            "use_tls": True,
            "timeout_seconds": 5,
        },
    )
    return config


# =============================================================================
# Logging Mock Fixtures
# =============================================================================


@pytest.fixture
def mock_logger() -> MagicMock:
    """
    Mock logger for testing logging calls.

    Usage:
        def test_logging(mock_logger):
            with patch("module.logger", mock_logger):
                # Test code that logs
                mock_logger.info.assert_called_once()
    """
    logger = MagicMock()
    logger.debug = MagicMock()
    logger.info = MagicMock()
    logger.warning = MagicMock()
    logger.error = MagicMock()
    logger.exception = MagicMock()
    return logger
