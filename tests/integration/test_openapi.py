"""
Integration tests for OpenAPI documentation.

Verifies OpenAPI schema is correctly generated for all endpoints.
"""

import pytest
from fastapi.testclient import TestClient

from src.api.main import app


@pytest.fixture
def schema() -> dict:
    """Fetch the OpenAPI schema from the application."""
    response = TestClient(app).get("/openapi.json")
    assert response.status_code == 200
    return response.json()


class TestOpenAPISchema:
    """Tests for OpenAPI schema generation."""

    def test_title_and_version(self, schema: dict) -> None:
        assert schema["info"]["title"] == "signup"
        assert schema["info"]["version"] == "0.1.0"

    def test_register_endpoint_documented(self, schema: dict) -> None:
        register = schema["paths"]["/api/register"]["post"]
        assert register["summary"] == "Register a new user"
        assert {"201", "400", "409", "500"} <= set(register["responses"])

    def test_verify_email_endpoint_documented(self, schema: dict) -> None:
        verify = schema["paths"]["/api/verify-email"]["post"]
        assert verify["summary"] == "Verify an email address"
        assert {"200", "400", "500"} <= set(verify["responses"])

    def test_register_request_schema(self, schema: dict) -> None:
        register_request = schema["components"]["schemas"]["RegisterRequest"]
        assert set(register_request["properties"]) == {"name", "email", "password"}
        assert set(register_request["required"]) == {"name", "email", "password"}

    def test_user_response_has_no_password(self, schema: dict) -> None:
        user_schemas = [
            definition
            for name, definition in schema["components"]["schemas"].items()
            if name.startswith("UserResponse")
        ]
        assert user_schemas
        for definition in user_schemas:
            assert "password" not in definition["properties"]
            assert "createdAt" in definition["properties"]
