"""
API request and response models.

Pydantic models for FastAPI endpoint validation and OpenAPI schema generation.
JSON field names are camelCase on the wire; the client form controller
validates with the same RegisterRequest model before submitting.
"""

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, BeforeValidator, ConfigDict, EmailStr, Field, StringConstraints
from pydantic.alias_generators import to_camel

from src.domain.ports import User


def _strip(value: object) -> object:
    return value.strip() if isinstance(value, str) else value


# Surrounding whitespace is dropped before the syntax check; passwords are never stripped.
StrippedEmail = Annotated[EmailStr, BeforeValidator(_strip)]
DisplayName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=2)]


class CamelModel(BaseModel):
    """Base model that serializes field names as camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RegisterRequest(BaseModel):
    """Request model for user registration."""

    name: DisplayName = Field(..., description="Full name (min 2 characters)")
    email: StrippedEmail
    password: str = Field(..., min_length=8, description="User password (min 8 characters)")


class VerifyEmailRequest(BaseModel):
    """Request model for the standalone email quality check."""

    email: StrippedEmail


class VerifyEmailResponse(CamelModel):
    """Response model for an accepted email."""

    message: str = "Email is valid"
    is_valid: bool = True
    is_temporary: bool = False


class EmailRejectedResponse(CamelModel):
    """Response model for an email the verifier flagged."""

    message: str
    is_temporary: bool
    is_valid: bool
    risks: list[str] = Field(default_factory=list)


class UserResponse(CamelModel):
    """
    Public view of a user account.

    Built field by field from the domain User; there is no password field.
    """

    id: str
    name: str
    email: str
    verified: bool
    created_at: datetime

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            verified=user.verified,
            created_at=user.created_at,
        )


class RegisterResponse(BaseModel):
    """Response model for successful registration."""

    message: str
    user: UserResponse


class FieldError(BaseModel):
    """One schema violation on a request field."""

    field: str
    message: str


class ErrorResponse(BaseModel):
    """Standard error response model."""

    message: str
    field: str | None = None
    errors: list[FieldError] | None = None
