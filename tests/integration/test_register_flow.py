"""
Integration tests for the complete registration flow.

Runs the real application (lifespan included) with the in-memory store.
The email verifier is the real CleanSignupsVerifier with its HTTP traffic
routed to an httpx.MockTransport standing in for the provider.
"""

import json
from collections.abc import Iterator

import httpx
import pytest
from fastapi.testclient import TestClient

from src.adapters.verifier.cleansignups import CleanSignupsVerifier
from src.api.dependencies import get_email_verifier
from src.api.main import app
from src.client.form import EmailStatus, RegistrationFormController


class FakeProvider:
    """Scriptable stand-in for the verification provider's HTTP API."""

    def __init__(self) -> None:
        self.temporary_domains: set[str] = set()
        self.down = False
        self.requests: list[dict] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        if self.down:
            raise httpx.ConnectError("provider down", request=request)
        body = json.loads(request.content)
        self.requests.append(body)
        domain = body["email"].rsplit("@", 1)[-1].lower()
        if domain in self.temporary_domains:
            return httpx.Response(
                200,
                json={"isValid": True, "isTemporary": True, "qualityScore": 5, "risks": ["disposable_domain"]},
            )
        return httpx.Response(200, json={"isValid": True, "isTemporary": False, "qualityScore": 95})


@pytest.fixture
def provider() -> FakeProvider:
    return FakeProvider()


@pytest.fixture
def client(provider: FakeProvider) -> Iterator[TestClient]:
    """Application client with a fresh in-memory store per test."""
    verifier = CleanSignupsVerifier(
        httpx.Client(transport=httpx.MockTransport(provider)),
        endpoint="https://verifier.test/verify",
        api_key="test-key",
    )
    app.dependency_overrides[get_email_verifier] = lambda: verifier
    try:
        with TestClient(app) as test_client:
            yield test_client
    finally:
        app.dependency_overrides.clear()


JANE = {"name": "Jane Doe", "email": "jane@example.com", "password": "Str0ng!Pass"}


class TestRegisterFlow:
    """End-to-end registration through the HTTP API."""

    def test_register_returns_201_without_password(self, client: TestClient) -> None:
        response = client.post("/api/register", json=JANE)

        assert response.status_code == 201
        user = response.json()["user"]
        assert user["name"] == "Jane Doe"
        assert user["email"] == "jane@example.com"
        assert user["verified"] is False
        assert "password" not in user

    def test_same_email_twice_returns_201_then_409(self, client: TestClient) -> None:
        assert client.post("/api/register", json=JANE).status_code == 201
        assert client.post("/api/register", json=JANE).status_code == 409

    def test_emails_unique_case_insensitively(self, client: TestClient) -> None:
        emails = ["jane@example.com", "JANE@EXAMPLE.COM", "Jane@Example.Com", "john@example.com"]
        statuses = [client.post("/api/register", json={**JANE, "email": e}).status_code for e in emails]

        assert statuses == [201, 409, 409, 201]

    def test_disposable_email_rejected(self, client: TestClient, provider: FakeProvider) -> None:
        provider.temporary_domains.add("mailinator.com")

        response = client.post("/api/register", json={**JANE, "email": "jane@mailinator.com"})

        assert response.status_code == 400
        assert response.json()["field"] == "email"
        assert client.app.state.repository.get_by_email("jane@mailinator.com") is None

    def test_provider_outage_does_not_block(self, client: TestClient, provider: FakeProvider) -> None:
        provider.down = True

        response = client.post("/api/register", json=JANE)

        assert response.status_code == 201

    def test_each_registration_calls_provider_once(self, client: TestClient, provider: FakeProvider) -> None:
        client.post("/api/register", json=JANE)
        assert provider.requests == [{"email": "jane@example.com"}]

    def test_created_user_retrievable_from_store(self, client: TestClient) -> None:
        user_id = client.post("/api/register", json=JANE).json()["user"]["id"]

        stored = client.app.state.repository.get_by_id(user_id)
        assert stored is not None
        assert stored.password_hash.startswith("$2b$12$")


class TestFormAgainstApp:
    """The form controller driving the real application."""

    def test_full_form_session(self, client: TestClient, provider: FakeProvider) -> None:
        provider.temporary_domains.add("mailinator.com")
        form = RegistrationFormController(client)

        form.set_name("Jane Doe")
        form.set_email("jane@mailinator.com")
        assert form.blur_email() is EmailStatus.INVALID

        form.set_email("jane@example.com")
        assert form.blur_email() is EmailStatus.VALID

        form.set_password("Str0ng!Pass")
        assert form.password_strength == 5

        form.set_terms_accepted(True)
        outcome = form.submit()

        assert outcome.success is True
        assert form.email_status is EmailStatus.IDLE
        assert client.app.state.repository.get_by_email("jane@example.com") is not None


class TestHealth:
    def test_health_check(self, client: TestClient) -> None:
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}
