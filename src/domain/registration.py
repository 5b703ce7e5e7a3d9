"""
Registration domain service.

This module contains the core business logic for user registration:

    input -> email quality check -> uniqueness check + hash -> persisted User

The verifier is consulted exactly once per call. A rejected verdict stops
the flow before the repository is touched. Uniqueness, hashing, id
generation and timestamps are the repository's job.

Verifier outages never reach this layer: the verifier adapter degrades to
a permissive verdict, so registration keeps working without the provider.
"""

import logging
from dataclasses import dataclass

from .exceptions import EmailQualityRejected
from .ports import EmailVerdict, EmailVerifier, NewUser, User, UserRepository

logger = logging.getLogger(__name__)


@dataclass
class RegistrationService:
    """
    Domain service for user registration.

    Orchestrates the registration flow: email normalization,
    email quality screening and account persistence.
    """

    repository: UserRepository
    verifier: EmailVerifier

    def verify_email(self, email: str) -> EmailVerdict:
        """
        Screen an email address with the verifier.

        Args:
            email: Address to check (whitespace is stripped)

        Returns:
            The accepting EmailVerdict

        Raises:
            EmailQualityRejected: If the address is temporary or invalid
        """
        normalized_email = self._normalize_email(email)
        verdict = self.verifier.verify(normalized_email)
        if verdict.rejected:
            logger.info("Email rejected by verifier: %s risks=%s", normalized_email, verdict.risks)
            raise EmailQualityRejected(normalized_email, verdict)
        return verdict

    def register(self, new_user: NewUser) -> User:
        """
        Register a new user account.

        Args:
            new_user: Validated name, email and plaintext password

        Returns:
            The stored User (still carrying the password hash)

        Raises:
            EmailQualityRejected: If the verifier flags the email
            DuplicateEmail: If the email is already registered
        """
        normalized = NewUser(
            name=new_user.name.strip(),
            email=self._normalize_email(new_user.email),
            password=new_user.password,
        )
        self.verify_email(normalized.email)

        user = self.repository.create(normalized)
        logger.info("Registered user %s (%s)", user.id, user.email)
        return user

    def _normalize_email(self, email: str) -> str:
        """
        Normalize email address for storage and lookup.

        Only strips whitespace; casing is preserved and every lookup
        compares case-insensitively.
        """
        return email.strip()
