"""
Tests for the global error handlers and the logging setup
"""

import json
import logging

import pytest
import structlog
from httpx import AsyncClient
from sqlalchemy.exc import IntegrityError, OperationalError
from starlette.requests import Request

from ngo_admin.core.error_handlers import entity_for_path, sqlalchemy_error_handler
from ngo_admin.core.logging_config import request_logger, setup_logging


def make_request(path: str, method: str = "POST") -> Request:
    return Request({
        "type": "http",
        "method": method,
        "path": path,
        "headers": [],
        "query_string": b"",
    })


def integrity_failure() -> IntegrityError:
    return IntegrityError("INSERT INTO ...", {}, Exception("constraint failed"))


class TestDatabaseErrors:
    """Constraint violations are reported in terms of the entity being saved"""

    def test_entity_for_path(self):
        assert entity_for_path("/api/v1/legal-cases/").name == "legal-cases"
        assert entity_for_path("/api/v1/subscribers/123").name == "subscribers"
        assert entity_for_path("/api/v1/sections/events") is None
        assert entity_for_path("/health") is None

    @pytest.mark.asyncio
    async def test_integrity_error_on_unique_entity_is_a_duplicate(self):
        response = await sqlalchemy_error_handler(make_request("/api/v1/legal-cases/"), integrity_failure())

        assert response.status_code == 409
        body = json.loads(response.body)
        assert body["status"] is False
        assert body["error_type"] == "DuplicateRecordError"
        assert body["details"] == {"field": "case_number"}
        assert body["message"] == "A case with this case_number already exists"

    @pytest.mark.asyncio
    async def test_integrity_error_without_unique_fields_is_a_bad_request(self):
        response = await sqlalchemy_error_handler(make_request("/api/v1/events/abc", "PUT"), integrity_failure())

        assert response.status_code == 400
        body = json.loads(response.body)
        assert body["error_type"] == "RecordValidationError"
        assert body["message"] == "Database integrity constraint violation"

    @pytest.mark.asyncio
    async def test_other_database_errors_are_server_errors(self):
        error = OperationalError("SELECT 1", {}, Exception("database is locked"))
        response = await sqlalchemy_error_handler(make_request("/api/v1/events/", "GET"), error)

        assert response.status_code == 500
        body = json.loads(response.body)
        assert body["error_type"] == "DatabaseError"
        assert body["details"] == {"operation": "GET"}
        assert "locked" not in body["message"]


class TestHttpErrors:

    @pytest.mark.asyncio
    async def test_unknown_route_uses_error_envelope(self, client: AsyncClient):
        response = await client.get("/api/v1/donations/")

        assert response.status_code == 404
        body = response.json()
        assert body["status"] is False
        assert body["error_type"] == "HTTPException"
        assert body["message"] == "Not Found"

    @pytest.mark.asyncio
    async def test_wrong_method(self, client: AsyncClient):
        response = await client.delete("/api/v1/events/")

        assert response.status_code == 405
        assert response.json()["error_type"] == "HTTPException"


class TestLoggingSetup:

    @pytest.fixture
    def log_dir(self, tmp_path):
        setup_logging(log_level="INFO", log_dir=str(tmp_path), file_logging=True)
        yield tmp_path
        setup_logging(log_level="INFO", file_logging=False)

    @staticmethod
    def read_lines(path):
        for handler in logging.getLogger().handlers + logging.getLogger("access").handlers:
            handler.flush()
        return [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines() if line]

    def test_access_log_line_carries_request_fields(self, log_dir):
        request_logger.log_request("GET", "/api/v1/events/", 200, 0.01234, request_id="req-1")

        entries = self.read_lines(log_dir / "access.log")
        assert len(entries) == 1
        entry = entries[0]
        assert entry["level"] == "INFO"
        assert entry["method"] == "GET"
        assert entry["endpoint"] == "/api/v1/events/"
        assert entry["status_code"] == 200
        assert entry["request_id"] == "req-1"
        assert entry["response_time"] == 0.0123

        # Access lines stay out of the application log
        assert not any(e.get("request_id") == "req-1" for e in self.read_lines(log_dir / "app.log"))

    def test_failed_requests_log_at_error_level(self, log_dir):
        request_logger.log_request("POST", "/api/v1/events/", 503, 0.5)
        request_logger.log_request("GET", "/api/v1/events/x", 404, 0.1)

        levels = [entry["level"] for entry in self.read_lines(log_dir / "access.log")]
        assert levels == ["ERROR", "WARNING"]

    def test_application_events_reach_app_and_error_logs(self, log_dir):
        logger = structlog.get_logger("ngo_admin.tests")
        logger.info("record_created", entity="events")
        logger.error("save_sync_failed", entity="café")

        app_messages = [json.loads(entry["message"]) for entry in self.read_lines(log_dir / "app.log")]
        assert [m["event"] for m in app_messages] == ["record_created", "save_sync_failed"]
        assert app_messages[1]["entity"] == "café"

        errors = self.read_lines(log_dir / "error.log")
        assert len(errors) == 1
        assert errors[0]["level"] == "ERROR"
