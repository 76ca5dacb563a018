"""
Unit Tests for Base Service.

Tests the BaseService class methods and error handling.
"""

from unittest.mock import AsyncMock, patch

import pytest
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from beyondnp.backend.core.exceptions import (
    ConflictError,
    DatabaseError,
    ValidationError,
)
from beyondnp.backend.services.base import BaseService, OwnedService


class TestBaseServiceInit:
    """Tests for BaseService initialization."""

    def test_init_stores_session(self):
        mock_session = AsyncMock()

        service = BaseService(mock_session)

        assert service.session is mock_session
        assert service._logger is not None

    def test_owned_service_keeps_user_id(self):
        service = OwnedService(AsyncMock(), "user-1")
        assert service.user_id == "user-1"


class TestExecuteDbOperation:
    """Tests for _execute_db_operation method."""

    @pytest.fixture
    def service(self):
        return BaseService(AsyncMock())

    async def test_returns_result_on_success(self, service):
        async def successful_operation():
            return {"id": "123"}

        result = await service._execute_db_operation("test_operation", successful_operation())

        assert result == {"id": "123"}

    async def test_raises_conflict_on_unique_violation(self, service):
        async def failing_operation():
            raise IntegrityError("statement", {}, Exception("UNIQUE constraint failed"))

        with pytest.raises(ConflictError, match="already exists"):
            await service._execute_db_operation("create_collection", failing_operation())

    async def test_raises_database_error_on_other_integrity_error(self, service):
        async def failing_operation():
            raise IntegrityError("statement", {}, Exception("foreign key constraint"))

        with pytest.raises(DatabaseError, match="constraint violation"):
            await service._execute_db_operation("create_note", failing_operation())

    async def test_raises_database_error_on_sqlalchemy_error(self, service):
        async def failing_operation():
            raise SQLAlchemyError("Connection lost")

        with pytest.raises(DatabaseError) as exc_info:
            await service._execute_db_operation("fetch_data", failing_operation())

        assert "Connection lost" not in exc_info.value.message


class TestValidateRequired:
    """Tests for _validate_required method."""

    @pytest.fixture
    def service(self):
        return BaseService(AsyncMock())

    def test_passes_when_all_fields_present(self, service):
        service._validate_required({"title": "SOP", "content": "draft"}, ["title", "content"])

    def test_missing_none_and_blank_are_all_reported(self, service):
        with pytest.raises(ValidationError) as exc_info:
            service._validate_required(
                {"content": None, "collection_id": "   "},
                ["title", "content", "collection_id"],
                message="Please provide title, content and collection",
            )

        assert exc_info.value.message == "Please provide title, content and collection"
        assert exc_info.value.details == {
            "missing_fields": ["title", "content", "collection_id"],
        }

    def test_default_message(self, service):
        with pytest.raises(ValidationError, match="Required fields missing"):
            service._validate_required({}, ["email"])


class TestLoggingMethods:
    """Tests for logging helper methods."""

    @pytest.fixture
    def service(self):
        return BaseService(AsyncMock())

    def test_log_operation_includes_service_name(self, service):
        with patch.object(service._logger, "info") as mock_info:
            service._log_operation("Creating collection", user_id="123")

        extra = mock_info.call_args[1]["extra"]
        assert extra["service"] == "BaseService"
        assert extra["user_id"] == "123"

    def test_log_debug_includes_service_name(self, service):
        with patch.object(service._logger, "debug") as mock_debug:
            service._log_debug("Processing step", step=1)

        extra = mock_debug.call_args[1]["extra"]
        assert extra["service"] == "BaseService"
        assert extra["step"] == 1
