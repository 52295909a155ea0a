"""
Custom exception hierarchy for Streakboard.

Rule: every HTTP error has a machine-readable `code` string so the bot
front end can branch on it without parsing English messages. A repeated
check-in is a domain rejection (409) and never looks like a store outage (503).
"""
from __future__ import annotations

import logging
from datetime import date
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from sqlalchemy.exc import SQLAlchemyError
from starlette import status

from streakboard.schemas.common import ErrorDetail

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Exception classes
# ---------------------------------------------------------------------------

class StreakboardException(Exception):
    """Base class for all application-level errors."""
    http_status: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "INTERNAL_ERROR"

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.details:
            payload["details"] = self.details
        return payload


class AlreadyCheckedInError(StreakboardException):
    http_status = status.HTTP_409_CONFLICT
    code = "ALREADY_CHECKED_IN"
    reason = "AlreadyCheckedIn"

    def __init__(self, user_id: str, day: date):
        super().__init__(
            message="Already checked in today.",
            details={"user_id": user_id, "day": str(day)},
        )

    def to_dict(self) -> dict:
        payload = super().to_dict()
        payload["success"] = False
        payload["reason"] = self.reason
        return payload


class UserNotFoundError(StreakboardException):
    http_status = status.HTTP_404_NOT_FOUND
    code = "USER_NOT_FOUND"

    def __init__(self, user_id: str):
        super().__init__(
            message=f"User {user_id} has no record.",
            details={"user_id": user_id},
        )


class StoreUnavailableError(StreakboardException):
    http_status = status.HTTP_503_SERVICE_UNAVAILABLE
    code = "STORE_UNAVAILABLE"

    def __init__(self, message: str = "The user store is unavailable."):
        super().__init__(message=message)


class InvariantViolationError(StreakboardException):
    http_status = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = "INVARIANT_VIOLATION"

    def __init__(self, user_id: str, invariant: str, detail: str):
        super().__init__(
            message=f"Record for user {user_id} is inconsistent: {detail}",
            details={"user_id": user_id, "invariant": invariant},
        )


# ---------------------------------------------------------------------------
# FastAPI exception handlers
# ---------------------------------------------------------------------------

async def streakboard_exception_handler(
    request: Request, exc: StreakboardException
) -> JSONResponse:
    return JSONResponse(
        status_code=exc.http_status,
        content=exc.to_dict(),
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return structured 422 with machine-readable field errors."""
    field_errors = []
    for error in exc.errors():
        field_errors.append(ErrorDetail(
            field=".".join(str(loc) for loc in error["loc"] if loc != "body"),
            message=error["msg"],
            type=error["type"],
        ).model_dump())
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "code": "VALIDATION_ERROR",
            "message": "Request validation failed.",
            "details": {"errors": field_errors},
        },
    )


async def rate_limit_exceeded_handler(
    request: Request, exc: RateLimitExceeded
) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        content={
            "code": "RATE_LIMITED",
            "message": "Too many requests. Try again later.",
            "details": {"limit": str(exc.detail)},
        },
    )


async def store_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error("Store failure on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=StoreUnavailableError.http_status,
        content=StoreUnavailableError().to_dict(),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "code": "INTERNAL_ERROR",
            "message": "An unexpected error occurred.",
        },
    )
