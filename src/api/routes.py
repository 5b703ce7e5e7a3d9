"""
API routes - Registration endpoints.

This module defines the HTTP endpoints:
- POST /api/verify-email - Screen an email address with the verifier
- POST /api/register - Create a user account
"""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from src.api.dependencies import get_registration_service
from src.api.models import (
    EmailRejectedResponse,
    ErrorResponse,
    RegisterRequest,
    RegisterResponse,
    UserResponse,
    VerifyEmailRequest,
    VerifyEmailResponse,
)
from src.domain.exceptions import DuplicateEmail, EmailQualityRejected
from src.domain.ports import NewUser
from src.domain.registration import RegistrationService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["registration"])


def _error(status_code: int, body: ErrorResponse | EmailRejectedResponse) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(by_alias=True, exclude_none=True),
    )


@router.post(
    "/verify-email",
    response_model=VerifyEmailResponse,
    responses={
        400: {"model": EmailRejectedResponse, "description": "Email is temporary or invalid"},
        500: {"model": ErrorResponse, "description": "Unexpected error"},
    },
    summary="Verify an email address",
    description="Check an email address with the email quality provider "
    "before registering. Temporary and invalid addresses are rejected.",
)
def verify_email(
    request_data: VerifyEmailRequest,
    service: RegistrationService = Depends(get_registration_service),
):
    """
    Screen an email address.

    - **email**: Address to check
    """
    try:
        service.verify_email(request_data.email)
    except EmailQualityRejected as exc:
        return _error(
            status.HTTP_400_BAD_REQUEST,
            EmailRejectedResponse(
                message="Please use a valid email address",
                is_temporary=exc.verdict.is_temporary,
                is_valid=exc.verdict.is_valid,
                risks=exc.verdict.risks,
            ),
        )
    except Exception:
        logger.exception("Email verification error")
        return _error(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            ErrorResponse(message="Unable to verify email at this time"),
        )
    return VerifyEmailResponse()


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse, "description": "Validation or email quality failure"},
        409: {"model": ErrorResponse, "description": "Email already registered"},
        500: {"model": ErrorResponse, "description": "Unexpected error"},
    },
    summary="Register a new user",
    description="Submit name, email and password to create an account. "
    "The email is screened by the email quality provider first.",
)
def register(
    request_data: RegisterRequest,
    service: RegistrationService = Depends(get_registration_service),
):
    """
    Register a new user.

    - **name**: Full name (minimum 2 characters)
    - **email**: Valid email address, unique across accounts
    - **password**: Password (minimum 8 characters)

    The response never contains the password or its hash.
    """
    new_user = NewUser(
        name=request_data.name,
        email=str(request_data.email),
        password=request_data.password,
    )
    try:
        user = service.register(new_user)
    except EmailQualityRejected:
        return _error(
            status.HTTP_400_BAD_REQUEST,
            ErrorResponse(
                message="Please use a valid email address. "
                "Temporary or disposable emails are not allowed.",
                field="email",
            ),
        )
    except DuplicateEmail:
        return _error(
            status.HTTP_409_CONFLICT,
            ErrorResponse(message="An account with this email already exists", field="email"),
        )
    except Exception:
        logger.exception("Registration error")
        return _error(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            ErrorResponse(message="Registration failed. Please try again."),
        )

    return RegisterResponse(message="Registration successful", user=UserResponse.from_user(user))
