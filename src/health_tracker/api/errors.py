"""Map tracker errors to JSON error payloads."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from health_tracker.errors import (
    NotFoundError,
    TrackerError,
    UnauthorizedError,
    ValidationError,
)

_logger = logging.getLogger(__name__)

_LOCATIONS = {"body", "path", "query", "header"}

_STATUS_BY_ERROR: dict[type[TrackerError], int] = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    UnauthorizedError: status.HTTP_401_UNAUTHORIZED,
}


def register_error_handlers(app: FastAPI) -> None:
    """Install handlers producing {message, field?} bodies."""

    @app.exception_handler(TrackerError)
    async def tracker_error(request: Request, exc: TrackerError) -> JSONResponse:
        status_code = _STATUS_BY_ERROR.get(
            type(exc), status.HTTP_500_INTERNAL_SERVER_ERROR
        )
        if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            _logger.error("Unhandled tracker error: %s", exc.message)
        body: dict[str, object] = {"message": exc.message}
        if isinstance(exc, ValidationError) and exc.field:
            body["field"] = exc.field
        return JSONResponse(status_code=status_code, content=body)

    @app.exception_handler(RequestValidationError)
    async def request_validation_error(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        errors = exc.errors()
        first = errors[0] if errors else {}
        location = [
            str(part) for part in first.get("loc", ()) if part not in _LOCATIONS
        ]
        body: dict[str, object] = {"message": first.get("msg", "Invalid request")}
        if location:
            body["field"] = ".".join(location)
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=body)
