"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - ActivityId and UserId wrap strings; never pass bare ids between layers
    - Principal and ResourceRef are immutable; the core never creates a Principal
      from anything but the identity collaborator
    - All valid states encoded as Enums, with no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

ActivityId = NewType("ActivityId", str)
UserId = NewType("UserId", str)


# ─── Limits ──────────────────────────────────────────────────────

# Column widths in models/; validators and identity enforce them before a write.
TITLE_MAX_LENGTH = 100
CATEGORY_MAX_LENGTH = 50
CITY_MAX_LENGTH = 100
VENUE_MAX_LENGTH = 200
USER_ID_MAX_LENGTH = 64
DISPLAY_NAME_MAX_LENGTH = 100
LIST_LIMIT_MAX = 50


def as_utc(value: datetime) -> datetime:
    """Instants are stored and returned in UTC; naive values are read as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


# ─── Enums ───────────────────────────────────────────────────────

class ActivityFilter(str, Enum):
    """List filter relative to the requesting user."""
    ALL = "all"
    GOING = "going"
    HOSTING = "hosting"


class Policy(str, Enum):
    """Named authorization policies applied at the operation boundary."""
    IS_RESOURCE_HOST = "is-resource-host"


class Decision(str, Enum):
    """Outcome of evaluating a policy."""
    ALLOW = "allow"
    DENY = "deny"


class AttendanceChange(str, Enum):
    """What an attend toggle does for a given user."""
    TOGGLE_CANCELLED = "toggle_cancelled"
    LEAVE = "leave"
    JOIN = "join"


# ─── Value Objects ───────────────────────────────────────────────

@dataclass(frozen=True)
class Principal:
    """Authenticated caller. Supplied per request by the identity collaborator."""
    id: UserId
    display_name: str = ""
    roles: frozenset[str] = field(default_factory=frozenset)


@dataclass(frozen=True)
class ResourceRef:
    """A policy target: which object, and who owns (hosts) it."""
    resource_type: str
    resource_id: str
    owner_id: UserId
