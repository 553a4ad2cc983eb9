"""Unit tests for the HTTP exception handlers"""
import pytest
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.testclient import TestClient
from pydantic import BaseModel

from branchpoint.api.exception_handlers import (
    branchpoint_error_handler,
    not_found_error_handler,
    unhandled_exception_handler,
    validation_error_handler,
    validation_exception_handler,
)
from branchpoint.decision.error_codes import ErrorCodeDictionary
from branchpoint.exceptions import (
    BranchPointError,
    GenerationError,
    NotFoundError,
    StateTransitionError,
    ValidationError,
)


class Payload(BaseModel):
    count: int


@pytest.fixture
def handler_client():
    """Minimal app raising each error type"""
    app = FastAPI()
    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(NotFoundError, not_found_error_handler)
    app.add_exception_handler(BranchPointError, branchpoint_error_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    @app.get("/validation")
    async def raise_validation():
        raise ValidationError(ErrorCodeDictionary.DECISION_001)

    @app.get("/transition")
    async def raise_transition():
        raise StateTransitionError(ErrorCodeDictionary.DECISION_004, entity_id="decision_1")

    @app.get("/missing")
    async def raise_not_found():
        raise NotFoundError(ErrorCodeDictionary.DECISION_002, entity_id="decision_1")

    @app.get("/generation")
    async def raise_generation():
        raise GenerationError(ErrorCodeDictionary.GENERATION_007)

    @app.get("/crash")
    async def crash():
        raise RuntimeError("boom")

    @app.post("/body")
    async def body(payload: Payload):
        return {"count": payload.count}

    return TestClient(app, raise_server_exceptions=False)


class TestExceptionHandlers:
    """Tests for error envelopes and status codes"""

    def test_validation_error_is_400(self, handler_client):
        response = handler_client.get("/validation")

        assert response.status_code == 400
        body = response.json()
        assert body["path"] == "/validation"
        assert body["error"]["code"] == "DECISION_001"
        assert body["error"]["message"] == "Title is required"
        assert body["error"]["remediation_steps"]

    def test_state_transition_error_is_400(self, handler_client):
        response = handler_client.get("/transition")

        assert response.status_code == 400
        assert response.json()["error"]["entity_id"] == "decision_1"

    def test_not_found_is_404(self, handler_client):
        response = handler_client.get("/missing")

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "DECISION_002"

    def test_other_engine_errors_are_500(self, handler_client):
        response = handler_client.get("/generation")

        assert response.status_code == 500
        assert response.json()["error"]["code"] == "GENERATION_007"

    def test_unexpected_error_is_500(self, handler_client):
        response = handler_client.get("/crash")

        assert response.status_code == 500
        assert response.json()["error"]["code"] == "SYSTEM_001"
        assert "boom" not in response.text

    def test_request_validation_is_400(self, handler_client):
        response = handler_client.post("/body", json={"count": "many"})

        assert response.status_code == 400
        error = response.json()["error"]
        assert error["code"] == "SYSTEM_002"
        assert error["context"]["details"][0]["loc"] == ["body", "count"]
