"""
Registration form controller - Client-side state for the signup form.

Holds the form fields and the UI state that goes with them:

- email status: idle -> validating -> valid | invalid, driven by blur_email()
  calling POST /api/verify-email
- password strength: 0-5, recomputed on every set_password()
- notices: blocking or result messages the view shows as toasts

Field validation uses the same RegisterRequest model as the server, so the
client and the API agree on what a well-formed registration is.
"""

import logging
import re
from dataclasses import dataclass
from enum import Enum

import httpx
from pydantic import ValidationError

from src.api.errors import field_errors
from src.api.models import RegisterRequest, VerifyEmailRequest

logger = logging.getLogger(__name__)

# Each satisfied check adds one point of strength.
_STRENGTH_CHECKS = (
    lambda p: len(p) >= 8,
    lambda p: re.search(r"[a-z]", p) is not None,
    lambda p: re.search(r"[A-Z]", p) is not None,
    lambda p: re.search(r"[0-9]", p) is not None,
    lambda p: re.search(r"[^A-Za-z0-9]", p) is not None,
)

_STRENGTH_LABELS = {
    0: "Enter at least 8 characters",
    1: "Weak password",
    2: "Fair password",
    3: "Fair password",
    4: "Good password",
    5: "Strong password",
}


class EmailStatus(str, Enum):
    """
    Email field state.

    Transitions:
    - IDLE -> VALIDATING (blur with a well-formed address)
    - VALIDATING -> VALID (verify-email answered 2xx)
    - VALIDATING -> INVALID (any other outcome)
    - any -> IDLE (email edited, or form reset)
    """

    IDLE = "idle"
    VALIDATING = "validating"
    VALID = "valid"
    INVALID = "invalid"


class NoticeVariant(str, Enum):
    DEFAULT = "default"
    DESTRUCTIVE = "destructive"


@dataclass(frozen=True)
class Notice:
    """A message for the user, rendered by the view as a toast."""

    title: str
    description: str
    variant: NoticeVariant = NoticeVariant.DEFAULT


@dataclass(frozen=True)
class SubmitOutcome:
    """Result of a submit() call."""

    submitted: bool
    success: bool
    notice: Notice | None = None
    field_errors: dict[str, str] | None = None


def password_strength(password: str) -> int:
    """Score a password 0-5, one point per satisfied check."""
    return sum(1 for check in _STRENGTH_CHECKS if check(password))


def strength_label(strength: int) -> str:
    return _STRENGTH_LABELS.get(strength, _STRENGTH_LABELS[0])


class RegistrationFormController:
    """
    State holder for the registration form.

    Args:
        client: httpx.Client whose base_url points at the API server
    """

    def __init__(self, client: httpx.Client) -> None:
        self._client = client
        self.notices: list[Notice] = []
        self.reset()

    def reset(self) -> None:
        """Return every field and status to its initial value."""
        self.name = ""
        self.email = ""
        self.password = ""
        self.terms_accepted = False
        self.email_status = EmailStatus.IDLE
        self.password_strength = 0

    @property
    def strength_label(self) -> str:
        return strength_label(self.password_strength)

    def set_name(self, value: str) -> None:
        self.name = value

    def set_email(self, value: str) -> None:
        if value != self.email:
            self.email_status = EmailStatus.IDLE
        self.email = value

    def set_password(self, value: str) -> None:
        self.password = value
        self.password_strength = password_strength(value)

    def set_terms_accepted(self, accepted: bool) -> None:
        self.terms_accepted = accepted

    def validate(self) -> dict[str, str]:
        """
        Check the fields against the registration schema.

        Returns:
            Mapping of field name to the first error message; empty when valid
        """
        try:
            RegisterRequest(name=self.name, email=self.email, password=self.password)
        except ValidationError as exc:
            errors: dict[str, str] = {}
            for error in field_errors(exc.errors()):
                errors.setdefault(error.field, error.message)
            return errors
        return {}

    def blur_email(self) -> EmailStatus:
        """
        Verify the email with the server when the field loses focus.

        Empty or malformed addresses are left alone; the field error is
        shown by validate() instead.
        """
        if not self.email or not self._email_well_formed():
            return self.email_status

        self.email_status = EmailStatus.VALIDATING
        try:
            response = self._client.post("/api/verify-email", json={"email": self.email})
        except httpx.HTTPError as exc:
            logger.warning("Email verification request failed: %s", exc)
            self.email_status = EmailStatus.INVALID
            return self.email_status

        self.email_status = EmailStatus.VALID if response.is_success else EmailStatus.INVALID
        return self.email_status

    def submit(self) -> SubmitOutcome:
        """
        Submit the registration if the form is ready.

        Blocks without a request when fields are invalid, when the terms are
        not accepted, or when the email has not been verified. On success
        every field is reset.
        """
        errors = self.validate()
        if errors:
            return SubmitOutcome(submitted=False, success=False, field_errors=errors)

        if not self.terms_accepted:
            return self._blocked(
                Notice(
                    "Terms Required",
                    "You must agree to the terms and conditions",
                    NoticeVariant.DESTRUCTIVE,
                )
            )

        if self.email_status is not EmailStatus.VALID:
            return self._blocked(
                Notice(
                    "Email Verification Required",
                    "Please ensure your email address is verified",
                    NoticeVariant.DESTRUCTIVE,
                )
            )

        payload = {"name": self.name, "email": self.email, "password": self.password}
        try:
            response = self._client.post("/api/register", json=payload)
        except httpx.HTTPError as exc:
            logger.warning("Registration request failed: %s", exc)
            return self._failed("Registration failed. Please try again.")

        if response.status_code != httpx.codes.CREATED:
            return self._failed(_response_message(response))

        notice = Notice(
            "Registration Successful!",
            "Your account has been created successfully. Please check your email to verify your account.",
        )
        self.notices.append(notice)
        self.reset()
        return SubmitOutcome(submitted=True, success=True, notice=notice)

    def _email_well_formed(self) -> bool:
        try:
            VerifyEmailRequest(email=self.email)
        except ValidationError:
            return False
        return True

    def _blocked(self, notice: Notice) -> SubmitOutcome:
        self.notices.append(notice)
        return SubmitOutcome(submitted=False, success=False, notice=notice)

    def _failed(self, message: str) -> SubmitOutcome:
        notice = Notice("Registration Failed", message, NoticeVariant.DESTRUCTIVE)
        self.notices.append(notice)
        return SubmitOutcome(submitted=True, success=False, notice=notice)


def _response_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return "Registration failed. Please try again."
