"""
Domain exceptions - Semantic error types for registration.

This module defines domain-specific exceptions that communicate
business rule violations without leaking infrastructure details.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .ports import EmailVerdict


class RegistrationError(Exception):
    """Base class for registration domain errors."""

    pass


class DuplicateEmail(RegistrationError):
    """An account already uses this email (case-insensitive)."""

    pass


class EmailQualityRejected(RegistrationError):
    """The verifier flagged the email as temporary or invalid."""

    def __init__(self, email: str, verdict: EmailVerdict) -> None:
        super().__init__(email)
        self.email = email
        self.verdict = verdict


class VerifierUnavailable(RegistrationError):
    """The email verification provider could not produce a verdict."""

    pass
