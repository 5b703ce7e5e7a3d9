"""Client package - Registration form state driven over the HTTP API."""

from .form import (
    EmailStatus,
    Notice,
    NoticeVariant,
    RegistrationFormController,
    SubmitOutcome,
    password_strength,
    strength_label,
)

__all__ = [
    "EmailStatus",
    "Notice",
    "NoticeVariant",
    "RegistrationFormController",
    "SubmitOutcome",
    "password_strength",
    "strength_label",
]
