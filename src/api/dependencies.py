"""
FastAPI dependencies - Dependency injection factories.

This module provides Depends() factories for injecting
domain services and infrastructure adapters into routes.
"""

from fastapi import Depends, Request

from src.domain.ports import EmailVerifier, UserRepository
from src.domain.registration import RegistrationService


def get_repository(request: Request) -> UserRepository:
    """
    Get the user repository from app state.

    The repository is created during app lifespan startup and stored in app.state.
    """
    return request.app.state.repository


def get_email_verifier(request: Request) -> EmailVerifier:
    """Get the email verifier from app state."""
    return request.app.state.verifier


def get_registration_service(
    repository: UserRepository = Depends(get_repository),
    verifier: EmailVerifier = Depends(get_email_verifier),
) -> RegistrationService:
    """
    Create registration service with injected dependencies.

    Wires together the repository and email verifier for the domain service.
    """
    return RegistrationService(repository=repository, verifier=verifier)
