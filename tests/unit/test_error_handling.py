"""Unit tests for error handling middleware and PII filtering."""

import json
from unittest.mock import Mock

import pytest
from fastapi import Request
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import IntegrityError

from envelope_budget.api.middleware.error_handler import (
    handle_budget_error,
    handle_generic_error,
    handle_integrity_error,
    handle_validation_error,
)
from envelope_budget.api.middleware.logging import filter_pii
from envelope_budget.core.errors import ERROR_CATALOG, get_error, is_retryable
from envelope_budget.core.exceptions import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    UpstreamError,
    ValidationError,
)


@pytest.fixture
def request_mock():
    request = Mock(spec=Request)
    request.url.path = "/api/v1/envelopes"
    request.method = "POST"
    return request


class TestBudgetErrorHandler:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "exc,status",
        [
            (ValidationError("RULE_002"), 400),
            (AuthenticationError("AUTH_001"), 401),
            (NotFoundError("ENV_001"), 404),
            (ConflictError("RULE_001"), 409),
            (UpstreamError("BANK_002"), 502),
        ],
    )
    async def test_status_per_exception(self, request_mock, exc, status):
        response = await handle_budget_error(request_mock, exc)

        assert response.status_code == status
        body = json.loads(response.body)
        assert body["error_code"] == exc.error_code
        assert body["message"] == ERROR_CATALOG[exc.error_code]["message"]
        assert set(body) == {"error_code", "message", "user_message", "suggestion", "retry_allowed"}

    @pytest.mark.asyncio
    async def test_explicit_status_overrides_default(self, request_mock):
        response = await handle_budget_error(request_mock, ValidationError("BANK_004", http_status=403))
        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_authentication_error_sets_challenge(self, request_mock):
        response = await handle_budget_error(request_mock, AuthenticationError("AUTH_001"))
        assert response.headers["www-authenticate"] == "Bearer"


class TestValidationErrorHandler:
    @pytest.mark.asyncio
    async def test_field_messages_joined(self, request_mock):
        exc = RequestValidationError(
            [
                {"loc": ("body", "amount"), "msg": "Input should be greater than 0", "type": "greater_than"},
                {"loc": ("body", "type"), "msg": "Field required", "type": "missing"},
            ]
        )

        response = await handle_validation_error(request_mock, exc)

        assert response.status_code == 400
        body = json.loads(response.body)
        assert body["error_code"] == "VAL_001"
        assert "body.amount: Input should be greater than 0" in body["message"]
        assert "body.type: Field required" in body["message"]


class TestIntegrityErrorHandler:
    @pytest.mark.asyncio
    async def test_unique_violation_is_conflict(self, request_mock):
        exc = IntegrityError("INSERT ...", {}, Exception("UNIQUE constraint failed: users.email"))

        response = await handle_integrity_error(request_mock, exc)

        assert response.status_code == 409
        assert json.loads(response.body)["error_code"] == "DB_002"

    @pytest.mark.asyncio
    async def test_other_integrity_error(self, request_mock):
        exc = IntegrityError("INSERT ...", {}, Exception("NOT NULL constraint failed"))

        response = await handle_integrity_error(request_mock, exc)

        assert response.status_code == 500
        assert json.loads(response.body)["error_code"] == "DB_001"


class TestGenericErrorHandler:
    @pytest.mark.asyncio
    async def test_internal_details_hidden(self, request_mock):
        response = await handle_generic_error(request_mock, RuntimeError("access-sandbox-secret leaked"))

        assert response.status_code == 500
        body = response.body.decode()
        assert "SYS_001" in body
        assert "access-sandbox-secret" not in body


class TestErrorCatalog:
    def test_unknown_code_has_fallback(self):
        assert get_error("NOPE_999")["code"] == "UNKNOWN"

    def test_upstream_errors_retryable(self):
        assert is_retryable("BANK_002") is True
        assert is_retryable("RULE_001") is False


class TestPIIFiltering:
    def test_bank_tokens_masked(self):
        text = "exchanged for access-sandbox-5cd6e1b1-1b5b-459d-9284-366e2da89755"
        assert filter_pii(text) == "exchanged for [BANK_TOKEN]"

    def test_bearer_masked(self):
        assert filter_pii("Authorization: Bearer eyJhbGciOi.abc.def") == "Authorization: Bearer [TOKEN]"

    def test_card_number_masked(self):
        assert "[CARD]" in filter_pii("card 4111 1111 1111 1111 declined")

    def test_email_masked(self):
        assert filter_pii("contact jane.doe@example.com") == "contact [EMAIL]"

    def test_empty_text(self):
        assert filter_pii("") == ""
