"""Error Translator — the single seam where internal failures become the external contract.

Invariants:
    - One OperationBoundary.handle() call per inbound request
    - Stage order per request: policy check -> dispatcher -> behaviors -> handler
    - ValidationFailed / Forbidden / NotFound pass through with kind and payload
    - Anything else is logged with full detail and surfaced ONLY as
      {"kind": "Unhandled", "message": <generic>} with status 500
    - Unhandled failures are caught here exactly once; no inner layer catches them

Design Decisions:
    - Returns an Outcome value (status + payload) instead of writing a response:
      routes turn the Outcome into JSON, so no code path bypasses translation
    - translate_exception is shared with the FastAPI exception handlers for
      failures raised before the boundary runs (auth dependency, payload parsing)
"""

import logging
from dataclasses import dataclass
from typing import Any

from reactivities.core.domain_types import Decision, Policy, Principal
from reactivities.core.errors import ErrorEnvelope, ErrorKind, ReactivitiesError
from reactivities.services.authorization import ResourceAuthorizer
from reactivities.services.dispatcher import Dispatcher

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Outcome:
    """What the caller receives: a status code and a JSON-ready payload."""
    status_code: int
    payload: Any = None


def translate_envelope(envelope: ErrorEnvelope) -> Outcome:
    return Outcome(envelope.status_code, envelope.to_response())


def translate_exception(exc: Exception, **log_context: Any) -> Outcome:
    """Map any failure to an Outcome. Logs Unhandled with traceback."""
    if isinstance(exc, ReactivitiesError) and exc.kind != ErrorKind.UNHANDLED:
        logger.info(
            f"{exc.kind.value}: {exc.message}",
            extra={"error_kind": exc.kind.value, **log_context},
        )
        return translate_envelope(exc.to_envelope())
    logger.error(
        f"Unhandled failure: {exc!r}",
        exc_info=exc,
        extra={"error_kind": ErrorKind.UNHANDLED.value, **log_context},
    )
    return translate_envelope(ErrorEnvelope.unhandled())


class OperationBoundary:
    """Wraps one external operation: authorize, dispatch, translate."""

    def __init__(
        self, dispatcher: Dispatcher, authorizer: ResourceAuthorizer | None = None,
    ):
        self._dispatcher = dispatcher
        self._authorizer = authorizer

    async def handle(
        self,
        request: object,
        principal: Principal,
        policy: Policy | None = None,
        resource_id: str | None = None,
    ) -> Outcome:
        log_context = {
            "request_type": type(request).__name__,
            "principal_id": principal.id,
        }
        try:
            if policy is not None:
                decision = await self._check_policy(policy, principal, resource_id)
                if decision == Decision.DENY:
                    return translate_envelope(ErrorEnvelope.forbidden())
            result = await self._dispatcher.dispatch(request)
        except Exception as exc:
            return translate_exception(exc, **log_context)
        if isinstance(result, ErrorEnvelope):
            return translate_envelope(result)
        return Outcome(200, result)

    async def _check_policy(
        self, policy: Policy, principal: Principal, resource_id: str | None,
    ) -> Decision:
        if self._authorizer is None or resource_id is None:
            # A protected operation wired without a target cannot be allowed.
            raise RuntimeError(f"Policy {policy.value} requires an authorizer and resource id")
        return await self._authorizer.authorize(policy, principal, resource_id)
