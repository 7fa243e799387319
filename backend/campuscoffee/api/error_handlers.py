"""Error Handlers — global exception handlers for the CampusCoffee API.

Invariants:
    - CampusCoffeeError → structured JSON with error code, message, severity
    - RequestValidationError → 400 VALIDATION_ERROR envelope, one detail per field (location + camelCase name)
    - Exception (catch-all) → never leaks internal details

Design Decisions:
    - Three-layer handler: domain (CampusCoffeeError), validation (Pydantic), catch-all (Exception)
    - Client errors (< 500) logged at WARNING, server errors at ERROR
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from campuscoffee.core.errors import CampusCoffeeError, ErrorSeverity, InputValidationError

logger = logging.getLogger(__name__)

REQUEST_LOCATIONS = ("body", "path", "query", "header", "cookie")


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_domain_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_domain_error_handler(app: FastAPI) -> None:
    """Register CampusCoffee domain/infrastructure error handler."""

    @app.exception_handler(CampusCoffeeError)
    async def campuscoffee_error_handler(request: Request, exc: CampusCoffeeError):
        """Handle all CampusCoffee domain/infrastructure errors."""
        level = logging.WARNING if exc.http_status < 500 else logging.ERROR
        logger.log(
            level,
            f"{type(exc).__name__}: {exc.message}",
            extra={"error_code": exc.code, "path": request.url.path},
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register Pydantic validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle Pydantic validation errors."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
            extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc),
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": "An unexpected error occurred",
                    "category": "internal",
                    "severity": ErrorSeverity.CRITICAL.value,
                },
            },
        )


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    """Domain validation envelope plus one detail per rejected field."""
    details = [_describe_validation_error(e) for e in exc.errors()]
    fields = sorted({d["field"] for d in details if d["field"]})
    message = "Invalid request data"
    if fields:
        message = f"{message}: {', '.join(fields)}"
    body = InputValidationError(
        message, field=fields[0] if len(fields) == 1 else None,
    ).to_response()
    body["error"]["details"] = details
    return body


def _describe_validation_error(error: dict) -> dict:
    """Split FastAPI's loc into request location and the camelCase field path."""
    loc = tuple(error["loc"])
    if loc and loc[0] in REQUEST_LOCATIONS:
        location, path = loc[0], loc[1:]
    else:
        location, path = "body", loc
    return {
        "location": location,
        "field": ".".join(str(part) for part in path),
        "message": error["msg"],
        "type": error["type"],
    }
