import logging
from typing import Any, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from handyman.core.provider_status import InvalidTransition

logger = logging.getLogger(__name__)

# substrings of the unique-violation message -> what the client sees
CONFLICT_MESSAGES = {
    "users.email": "User with this email already exists",
    "ix_users_email": "User with this email already exists",
    "uq_services_name_category": "Service with this name already exists in this category",
    "services.name": "Service with this name already exists in this category",
}


def error_body(message: str, details: Optional[Any] = None) -> dict:
    body = {"error": message}
    if details is not None:
        body["details"] = details
    return body


def conflict_message(exc: IntegrityError) -> str:
    raw = str(exc.orig) if exc.orig is not None else str(exc)
    for needle, message in CONFLICT_MESSAGES.items():
        if needle in raw:
            return message
    return "Duplicate value"


def flatten_validation_errors(errors) -> list[str]:
    messages = []
    for err in errors:
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
        field = ".".join(loc)
        messages.append(f"{field}: {err.get('msg')}" if field else err.get("msg"))
    return messages


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code >= 500:
        logger.error("HTTP error %s at %s: %s", exc.status_code, request.url.path, exc.detail)
    if isinstance(exc.detail, dict) and "error" in exc.detail:
        content = exc.detail
    else:
        content = error_body(str(exc.detail))
    return JSONResponse(status_code=exc.status_code, content=content, headers=getattr(exc, "headers", None))


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    details = flatten_validation_errors(exc.errors())
    logger.info("Validation error at %s: %s", request.url.path, details)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body("Validation error", details),
    )


async def integrity_error_handler(request: Request, exc: IntegrityError):
    message = conflict_message(exc)
    logger.info("Conflict at %s: %s", request.url.path, message)
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=error_body(message))


async def invalid_transition_handler(request: Request, exc: InvalidTransition):
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=error_body(str(exc)))


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error at %s: %s", request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body("Internal server error"),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)
    app.add_exception_handler(InvalidTransition, invalid_transition_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
