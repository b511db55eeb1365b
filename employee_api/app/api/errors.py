"""
Exception handlers turning validation errors into 400 responses.

Both the validation pipeline's ``ValidationFailure`` and FastAPI's own
``RequestValidationError`` (raised when a body or query string cannot
be parsed at all) are rendered as the same problem-details shape::

    {"type": "...", "title": "One or more validation errors occurred.",
     "status": 400, "errors": {"FirstName": ["'First Name' must not be empty."]}}
"""

import logging
from typing import Any, Dict, Sequence, Union

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from employee_api.app.core.validation import ErrorReport, ValidationFailure

logger = logging.getLogger(__name__)

PROBLEM_TYPE = "https://tools.ietf.org/html/rfc9110#section-15.5.1"
PROBLEM_TITLE = "One or more validation errors occurred."


def problem_details(errors: ErrorReport) -> Dict[str, Any]:
    return {
        "type": PROBLEM_TYPE,
        "title": PROBLEM_TITLE,
        "status": status.HTTP_400_BAD_REQUEST,
        "errors": errors,
    }


def format_location(location: Sequence[Union[str, int]]) -> str:
    """Render an error location as ``Benefits[0].Cost``.

    The leading ``body``/``query``/``path`` element is dropped unless it
    is all there is.
    """
    parts = list(location[1:]) or list(location)
    key = ""
    for part in parts:
        if isinstance(part, int):
            key += f"[{part}]"
        else:
            key += f".{part}" if key else str(part)
    return key


async def validation_failure_handler(request: Request, exc: ValidationFailure) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=problem_details(exc.errors),
    )


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors: ErrorReport = {}
    for error in exc.errors():
        errors.setdefault(format_location(error.get("loc", ())), []).append(error.get("msg", ""))
    logger.info("Rejected malformed request to %s: %s", request.url.path, ", ".join(errors))
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=problem_details(errors),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ValidationFailure, validation_failure_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
