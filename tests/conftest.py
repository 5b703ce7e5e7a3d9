"""
Shared test fixtures and configuration.

This module provides pytest fixtures for:
- An in-memory user repository with a cheap bcrypt cost
- A scriptable stub email verifier
- A FastAPI test application wired to both
"""

from collections.abc import Iterator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from src.adapters.repository.memory import InMemoryUserRepository
from src.api.errors import register_exception_handlers
from src.api.routes import router
from src.domain.ports import EmailVerdict

# bcrypt's minimum cost; keeps hashing fast in tests that don't check the cost.
FAST_BCRYPT_COST = 4


class StubVerifier:
    """EmailVerifier double that returns a fixed verdict and records calls."""

    def __init__(self, verdict: EmailVerdict | None = None) -> None:
        self.verdict = verdict or EmailVerdict(is_valid=True, is_temporary=False, quality_score=0.9)
        self.calls: list[str] = []

    def verify(self, email: str) -> EmailVerdict:
        self.calls.append(email)
        return self.verdict


@pytest.fixture
def repository() -> InMemoryUserRepository:
    return InMemoryUserRepository(bcrypt_cost=FAST_BCRYPT_COST)


@pytest.fixture
def verifier() -> StubVerifier:
    return StubVerifier()


@pytest.fixture
def app(repository: InMemoryUserRepository, verifier: StubVerifier) -> FastAPI:
    """Create test FastAPI application with the /api router and handlers."""
    test_app = FastAPI()
    register_exception_handlers(test_app)
    test_app.include_router(router, prefix="/api")
    test_app.state.repository = repository
    test_app.state.verifier = verifier
    return test_app


@pytest.fixture
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app) as test_client:
        yield test_client
