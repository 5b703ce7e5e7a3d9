"""
Port interfaces - Protocol definitions for infrastructure abstraction.

This module defines the interfaces (ports) that the domain requires
from infrastructure, plus the plain value types that cross them.
Adapters implement these protocols.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Protocol


@dataclass(frozen=True)
class NewUser:
    """Registration input. The password is plaintext until the store hashes it."""

    name: str
    email: str
    password: str = field(repr=False)


@dataclass(frozen=True)
class User:
    """
    Persisted user account.

    `verified` defaults to False and no code path in this system sets it.
    """

    id: str
    name: str
    email: str
    password_hash: str = field(repr=False)
    created_at: datetime
    verified: bool = False


@dataclass(frozen=True)
class EmailVerdict:
    """
    Quality verdict for one email address.

    `error` is only set when the verifier was unreachable and the
    verdict is the permissive fallback.
    """

    is_valid: bool
    is_temporary: bool
    quality_score: float | None = None
    risks: list[str] = field(default_factory=list)
    error: str | None = None

    @property
    def rejected(self) -> bool:
        return self.is_temporary or not self.is_valid

    @classmethod
    def permissive(cls, error: str | None = None) -> "EmailVerdict":
        """Verdict used when the provider fails: accept the address."""
        return cls(is_valid=True, is_temporary=False, error=error)


class UserRepository(Protocol):
    """Port interface for user account persistence."""

    def get_by_id(self, user_id: str) -> User | None:
        """Return the user with this id, or None."""
        ...

    def get_by_email(self, email: str) -> User | None:
        """Return the user whose email matches case-insensitively, or None."""
        ...

    def create(self, new_user: NewUser) -> User:
        """
        Persist a new user account.

        Hashes the plaintext password with bcrypt, generates a fresh
        identifier and stamps the creation time.

        Args:
            new_user: Validated registration input

        Returns:
            The stored User

        Raises:
            DuplicateEmail: If an account already uses the email
        """
        ...


class EmailVerifier(Protocol):
    """Port interface for the external email quality check."""

    def verify(self, email: str) -> EmailVerdict:
        """
        Classify an email address.

        Implementations must not raise on provider failure; they return
        EmailVerdict.permissive() instead.
        """
        ...
