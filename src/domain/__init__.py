"""
Domain layer - Pure business logic with zero framework imports.

This package contains the core business logic for user registration.
It defines its own port interfaces for infrastructure abstraction,
so storage and the email verifier can be swapped without touching it.
"""

from .exceptions import (
    DuplicateEmail,
    EmailQualityRejected,
    RegistrationError,
    VerifierUnavailable,
)
from .passwords import hash_password
from .ports import EmailVerdict, EmailVerifier, NewUser, User, UserRepository
from .registration import RegistrationService

__all__ = [
    "DuplicateEmail",
    "EmailQualityRejected",
    "EmailVerdict",
    "EmailVerifier",
    "NewUser",
    "RegistrationError",
    "RegistrationService",
    "User",
    "UserRepository",
    "VerifierUnavailable",
    "hash_password",
]
