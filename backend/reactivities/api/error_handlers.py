"""Error Handlers — framework-level failures routed through the same translator.

Invariants:
    - ReactivitiesError raised outside the boundary (auth dependency) -> its envelope
    - RequestValidationError -> ValidationFailed with one entry per failing field
    - HTTPException: 404 -> NotFound, 401/403 -> Forbidden, other 4xx ->
      ValidationFailed, 5xx -> Unhandled
    - Exception (catch-all) -> Unhandled; never leaks internal details
    - No handler builds a body by hand: all go through translate_envelope /
      translate_exception so the four-kind contract is the only shape emitted

Design Decisions:
    - Extracted from main.py: one register_* helper per failure family
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from reactivities.api.responses import to_json_response
from reactivities.core.errors import ErrorEnvelope, FieldError, ReactivitiesError
from reactivities.services.error_translator import translate_envelope, translate_exception

logger = logging.getLogger(__name__)

_LOCATION_PREFIXES = {"body", "query", "path", "header", "cookie"}


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_reactivities_error_handler(app)
    _register_validation_error_handler(app)
    _register_http_error_handler(app)
    _register_generic_error_handler(app)


def _register_reactivities_error_handler(app: FastAPI) -> None:

    @app.exception_handler(ReactivitiesError)
    async def reactivities_error_handler(request: Request, exc: ReactivitiesError):
        return to_json_response(translate_exception(exc, path=request.url.path))


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        logger.info(
            f"Payload parse error on {request.url.path}: {exc.errors()}",
            extra={"path": request.url.path},
        )
        envelope = ErrorEnvelope.validation_failed(field_errors_from(exc.errors()))
        return to_json_response(translate_envelope(envelope))


def _register_http_error_handler(app: FastAPI) -> None:

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return to_json_response(translate_envelope(envelope_for_http_status(
            exc.status_code, str(exc.detail),
        )))


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        return to_json_response(translate_exception(exc, path=request.url.path))


def field_errors_from(errors: list[dict]) -> list[FieldError]:
    """Pydantic error dicts -> FieldErrors, dropping the location prefix."""
    failures = []
    for e in errors:
        loc = [str(part) for part in e.get("loc", ())]
        if len(loc) > 1 and loc[0] in _LOCATION_PREFIXES:
            loc = loc[1:]
        failures.append(FieldError(".".join(loc) or "request", e.get("msg", "invalid")))
    return failures


def envelope_for_http_status(status_code: int, detail: str) -> ErrorEnvelope:
    if status_code == status.HTTP_404_NOT_FOUND:
        return ErrorEnvelope.not_found("Resource not found")
    if status_code in (status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN):
        return ErrorEnvelope.forbidden()
    if status_code < 500:
        return ErrorEnvelope.validation_failed([FieldError("request", detail)])
    logger.error(f"HTTP {status_code} raised by framework: {detail}")
    return ErrorEnvelope.unhandled()
