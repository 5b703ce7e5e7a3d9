"""
API exception handlers.

Schema violations are answered with 400 and per-field messages instead of
FastAPI's default 422.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from src.api.models import ErrorResponse, FieldError

logger = logging.getLogger(__name__)


def field_errors(errors: list[dict]) -> list[FieldError]:
    """
    Flatten pydantic error dicts into FieldError entries.

    The field is the last location component ("body" and list indices are
    dropped). Messages lose pydantic's "Value error, " prefix.
    """
    result = []
    for error in errors:
        loc = [
            str(part)
            for part in error.get("loc", ())
            if part != "body" and not isinstance(part, int)
        ]
        message = error.get("msg", "Invalid value").removeprefix("Value error, ")
        result.append(FieldError(field=loc[-1] if loc else "body", message=message))
    return result


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    body = ErrorResponse(message="Validation failed", errors=field_errors(exc.errors()))
    logger.info("Rejected %s %s: %d field error(s)", request.method, request.url.path, len(body.errors))
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=body.model_dump(exclude_none=True),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the API's exception handlers to an application."""
    app.add_exception_handler(RequestValidationError, request_validation_handler)
