"""Validator Set — pure rule functions and the validators registered per request type.

Invariants:
    - All functions are PURE: no IO, no async, no side effects (the clock is injected)
    - Rule helpers return a FieldError on violation, None on success
    - run_validators collects EVERY failure and never stops at the first
    - A request type with no validators is valid (empty result), not an error

Design Decisions:
    - Return values (not exceptions): the validation behavior turns a non-empty
      list into an ErrorEnvelope without try/except
    - Validators grouped per request type in one explicit dict built by
      activity_validators(), with no scanning for validator classes
"""

from datetime import datetime
from typing import Any, Callable, Iterable, Mapping, Sequence

from reactivities.core.domain_types import (
    CATEGORY_MAX_LENGTH, CITY_MAX_LENGTH, LIST_LIMIT_MAX, TITLE_MAX_LENGTH,
    VENUE_MAX_LENGTH, ActivityFilter,
)
from reactivities.core.errors import FieldError
from reactivities.core.requests import (
    ActivityFields, CreateActivity, ListActivities, UpdateActivity,
)

Validator = Callable[[Any], list[FieldError]]
Clock = Callable[[], datetime]

REQUIRED = "required"


# ─── Rule Helpers ────────────────────────────────────────────────

def check_required(field: str, value: object) -> FieldError | None:
    """None, empty and whitespace-only strings are missing."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return FieldError(field, REQUIRED)
    return None


def check_max_length(field: str, value: str | None, limit: int) -> FieldError | None:
    if value is not None and len(value) > limit:
        return FieldError(field, f"must not exceed {limit} characters")
    return None


def check_in_future(field: str, value: datetime | None, now: datetime) -> FieldError | None:
    if value is not None and _as_aware(value, now) <= now:
        return FieldError(field, "must be in the future")
    return None


def check_between(
    field: str, value: float | None, low: float, high: float,
) -> FieldError | None:
    """Inclusive range check; a missing value is left to check_required."""
    if value is not None and not low <= value <= high:
        return FieldError(field, f"must be between {low:g} and {high:g}")
    return None


def check_choice(field: str, value: str, choices: Iterable[str]) -> FieldError | None:
    allowed = list(choices)
    if value not in allowed:
        return FieldError(field, f"must be one of: {', '.join(allowed)}")
    return None


def _as_aware(value: datetime, now: datetime) -> datetime:
    """Naive datetimes are read in the clock's timezone."""
    if value.tzinfo is None and now.tzinfo is not None:
        return value.replace(tzinfo=now.tzinfo)
    return value


def _collect(*results: FieldError | None) -> list[FieldError]:
    return [r for r in results if r is not None]


# ─── Request Validators ──────────────────────────────────────────

def validate_activity_fields(fields: ActivityFields, now: datetime) -> list[FieldError]:
    """Rules shared by create and update."""
    return _collect(
        check_required("title", fields.title),
        check_max_length("title", fields.title, TITLE_MAX_LENGTH),
        check_required("description", fields.description),
        check_required("date", fields.date),
        check_in_future("date", fields.date, now),
        check_required("category", fields.category),
        check_max_length("category", fields.category, CATEGORY_MAX_LENGTH),
        check_required("city", fields.city),
        check_max_length("city", fields.city, CITY_MAX_LENGTH),
        check_required("venue", fields.venue),
        check_max_length("venue", fields.venue, VENUE_MAX_LENGTH),
        check_required("latitude", fields.latitude),
        check_between("latitude", fields.latitude, -90, 90),
        check_required("longitude", fields.longitude),
        check_between("longitude", fields.longitude, -180, 180),
    )


def validate_update_identity(request: UpdateActivity) -> list[FieldError]:
    return _collect(check_required("id", request.id))


def validate_list_query(request: ListActivities) -> list[FieldError]:
    failures = _collect(
        check_choice("filter", request.filter, [f.value for f in ActivityFilter]),
        check_between("limit", request.limit, 1, LIST_LIMIT_MAX),
    )
    if request.offset < 0:
        failures.append(FieldError("offset", "must not be negative"))
    return failures


def activity_validators(clock: Clock) -> dict[type, tuple[Validator, ...]]:
    """Build the request type -> validators map. Clock read once per validation."""

    def create_fields(request: CreateActivity) -> list[FieldError]:
        return validate_activity_fields(request.fields, clock())

    def update_fields(request: UpdateActivity) -> list[FieldError]:
        return validate_activity_fields(request.fields, clock())

    return {
        CreateActivity: (create_fields,),
        UpdateActivity: (validate_update_identity, update_fields),
        ListActivities: (validate_list_query,),
    }


def run_validators(request: object, validators: Sequence[Validator]) -> list[FieldError]:
    """Run every validator and concatenate all failures in declaration order."""
    failures: list[FieldError] = []
    for validator in validators:
        failures.extend(validator(request))
    return failures


def validators_for(
    registry: Mapping[type, Sequence[Validator]], request: object,
) -> Sequence[Validator]:
    """Exact-type lookup; unregistered types get no validators."""
    return registry.get(type(request), ())
