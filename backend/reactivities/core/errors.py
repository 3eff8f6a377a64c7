"""Error Hierarchy — typed failures and the external error envelope.

Invariants:
    - Every error has exactly one ErrorKind: ValidationFailed, Forbidden, NotFound
      or Unhandled; these four kinds are the whole external error surface
    - Each kind maps to one fixed HTTP status (400, 403, 404, 500)
    - Unhandled-kind errors never put their message into an envelope
    - to_response() produces {kind, errors?} or {kind, message?}, nothing else

Design Decisions:
    - Single hierarchy with ReactivitiesError base: the boundary catches one type
      for every intentional failure
    - ErrorEnvelope as a frozen dataclass: behaviors can return it as a value
      instead of raising
"""

from dataclasses import dataclass
from enum import Enum


class ErrorKind(str, Enum):
    """The four externally visible failure kinds."""
    VALIDATION_FAILED = "ValidationFailed"
    FORBIDDEN = "Forbidden"
    NOT_FOUND = "NotFound"
    UNHANDLED = "Unhandled"


STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.VALIDATION_FAILED: 400,
    ErrorKind.FORBIDDEN: 403,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.UNHANDLED: 500,
}

GENERIC_FORBIDDEN_MESSAGE = "You are not allowed to perform this operation"
GENERIC_UNHANDLED_MESSAGE = "An unexpected error occurred"


@dataclass(frozen=True)
class FieldError:
    """One failed rule on one request field."""
    field: str
    message: str

    def to_dict(self) -> dict:
        return {"field": self.field, "message": self.message}


@dataclass(frozen=True)
class ErrorEnvelope:
    """Discriminated error result. Exactly one kind per response."""
    kind: ErrorKind
    errors: tuple[FieldError, ...] = ()
    message: str | None = None

    @property
    def status_code(self) -> int:
        return STATUS_BY_KIND[self.kind]

    def to_response(self) -> dict:
        """Convert to the external JSON shape."""
        if self.kind == ErrorKind.VALIDATION_FAILED:
            return {
                "kind": self.kind.value,
                "errors": [e.to_dict() for e in self.errors],
            }
        return {"kind": self.kind.value, "message": self.message}

    @classmethod
    def validation_failed(cls, failures) -> "ErrorEnvelope":
        return cls(ErrorKind.VALIDATION_FAILED, errors=tuple(failures))

    @classmethod
    def forbidden(cls) -> "ErrorEnvelope":
        return cls(ErrorKind.FORBIDDEN, message=GENERIC_FORBIDDEN_MESSAGE)

    @classmethod
    def not_found(cls, message: str) -> "ErrorEnvelope":
        return cls(ErrorKind.NOT_FOUND, message=message)

    @classmethod
    def unhandled(cls) -> "ErrorEnvelope":
        return cls(ErrorKind.UNHANDLED, message=GENERIC_UNHANDLED_MESSAGE)


class ReactivitiesError(Exception):
    """Base exception for all Reactivities errors."""

    def __init__(self, message: str, kind: ErrorKind = ErrorKind.UNHANDLED):
        super().__init__(message)
        self.message = message
        self.kind = kind

    @property
    def http_status(self) -> int:
        return STATUS_BY_KIND[self.kind]

    def to_envelope(self) -> ErrorEnvelope:
        """Convert to the external envelope. Unhandled detail is never exposed."""
        if self.kind == ErrorKind.UNHANDLED:
            return ErrorEnvelope.unhandled()
        return ErrorEnvelope(self.kind, message=self.message)


# ─── Caller Errors (400-level) ──────────────────────────────────

class ValidationFailedError(ReactivitiesError):
    """Request fields failed one or more rules."""
    def __init__(self, failures: list[FieldError]):
        super().__init__(
            f"{len(failures)} field(s) failed validation",
            ErrorKind.VALIDATION_FAILED,
        )
        self.failures = list(failures)

    def to_envelope(self) -> ErrorEnvelope:
        return ErrorEnvelope.validation_failed(self.failures)


class ForbiddenError(ReactivitiesError):
    """Caller is unauthenticated or fails a policy."""
    def __init__(self, reason: str = "forbidden"):
        super().__init__(GENERIC_FORBIDDEN_MESSAGE, ErrorKind.FORBIDDEN)
        # Operator-facing only; the envelope carries the generic message.
        self.reason = reason


class ResourceNotFoundError(ReactivitiesError):
    """Requested resource does not exist."""
    def __init__(self, resource_type: str, resource_id: str):
        super().__init__(
            f"{resource_type} '{resource_id}' not found", ErrorKind.NOT_FOUND,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


# ─── Defects and Collaborator Failures (500-level) ──────────────

class PersistenceError(ReactivitiesError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str):
        super().__init__(f"Database {operation} failed: {message}")
        self.operation = operation


class UnregisteredRequestError(ReactivitiesError):
    """No handler registered for a request type."""
    def __init__(self, request_type: str):
        super().__init__(f"No handler registered for {request_type}")
        self.request_type = request_type


class HandlerReentryError(ReactivitiesError):
    """A behavior tried to invoke the handler a second time."""
    def __init__(self, request_type: str):
        super().__init__(f"Handler for {request_type} invoked more than once")
        self.request_type = request_type


class UnknownPolicyError(ReactivitiesError):
    """Policy name has no registered rule."""
    def __init__(self, policy: str):
        super().__init__(f"No rule registered for policy '{policy}'")
        self.policy = policy
