"""Response Writing — the only place an Outcome becomes an HTTP response."""

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from reactivities.schemas.activity import ErrorEnvelopeResponse
from reactivities.services.error_translator import Outcome

# OpenAPI documentation for the error contract shared by every activity route.
ERROR_RESPONSES = {
    400: {"model": ErrorEnvelopeResponse, "description": "ValidationFailed"},
    403: {"model": ErrorEnvelopeResponse, "description": "Forbidden"},
    404: {"model": ErrorEnvelopeResponse, "description": "NotFound"},
    500: {"model": ErrorEnvelopeResponse, "description": "Unhandled"},
}


def to_json_response(outcome: Outcome) -> JSONResponse:
    return JSONResponse(
        status_code=outcome.status_code,
        content=jsonable_encoder(outcome.payload),
    )
