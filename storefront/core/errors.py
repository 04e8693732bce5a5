# =========================================================
# ERROR TAXONOMY
#
# Every failure leaves the API as JSON: {"error": "..."}
# Field validation adds {"details": [{"field", "message"}]}
# Upstream (database / storage) failures never leak internals
# =========================================================

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Internal server error"


class StorefrontError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(StorefrontError):
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, details: list[dict] | None = None):
        super().__init__(message)
        self.details = details or []


class NotFoundError(StorefrontError):
    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(StorefrontError):
    # The public HTTP surface reports invariant conflicts as 400
    status_code = status.HTTP_400_BAD_REQUEST


class UpstreamError(StorefrontError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


def field_error(field: str, message: str) -> ValidationError:
    return ValidationError(
        "Validation failed",
        details=[{"field": field, "message": message}],
    )


# =========================================================
# EXCEPTION HANDLERS
# =========================================================
async def storefront_error_handler(request: Request, exc: StorefrontError):
    if isinstance(exc, UpstreamError):
        logger.error(f"{request.method} {request.url.path} upstream failure: {exc.message}")
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": GENERIC_ERROR_MESSAGE},
        )

    content = {"error": exc.message}
    if isinstance(exc, ValidationError) and exc.details:
        content["details"] = exc.details

    return JSONResponse(status_code=exc.status_code, content=content)


async def request_validation_handler(request: Request, exc: RequestValidationError):
    details = []
    for err in exc.errors():
        location = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
        details.append({
            "field": ".".join(location) or "body",
            "message": err.get("msg", "Invalid value"),
        })

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Validation failed", "details": details},
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.exception(f"{request.method} {request.url.path} database failure")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": GENERIC_ERROR_MESSAGE},
    )


def register_exception_handlers(app: FastAPI):
    app.add_exception_handler(StorefrontError, storefront_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(SQLAlchemyError, database_error_handler)
