"""Pipeline Behaviors — validation and request logging stages around every handler.

Invariants:
    - ValidationBehavior runs ALL validators for the request type before deciding
    - Non-empty failures -> ErrorEnvelope(ValidationFailed) and the handler is skipped
    - Empty failures (or no validators) -> request forwarded unchanged
    - RequestLoggingBehavior never alters the result

Design Decisions:
    - Short-circuit by returning an envelope value, not by raising: the dispatch
      result is either a response or an ErrorEnvelope
"""

import logging
import time
from typing import Any, Mapping, Sequence

from reactivities.core.errors import ErrorEnvelope
from reactivities.core.validation import Validator, run_validators, validators_for
from reactivities.services.dispatcher import NextStage

logger = logging.getLogger(__name__)


class ValidationBehavior:
    """Rejects a request with every failing field, or forwards it."""

    def __init__(self, validators: Mapping[type, Sequence[Validator]]):
        self._validators = dict(validators)

    async def __call__(self, request: object, next_stage: NextStage) -> Any:
        failures = run_validators(request, validators_for(self._validators, request))
        if failures:
            logger.info(
                f"Validation failed for {type(request).__name__}: "
                f"{[f.field for f in failures]}",
                extra={"request_type": type(request).__name__},
            )
            return ErrorEnvelope.validation_failed(failures)
        return await next_stage()


class RequestLoggingBehavior:
    """Logs request type, outcome and duration at DEBUG."""

    async def __call__(self, request: object, next_stage: NextStage) -> Any:
        started = time.perf_counter()
        result = await next_stage()
        duration_ms = round((time.perf_counter() - started) * 1000, 2)
        outcome = result.kind.value if isinstance(result, ErrorEnvelope) else "ok"
        logger.debug(
            f"{type(request).__name__} -> {outcome}",
            extra={
                "request_type": type(request).__name__,
                "duration_ms": duration_ms,
            },
        )
        return result
