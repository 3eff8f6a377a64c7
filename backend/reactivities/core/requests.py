"""Requests — typed commands and queries, one per external operation.

Invariants:
    - Every request is a frozen dataclass: immutable once constructed
    - Exactly one handler per request type (registered in services/composition.py)
    - Requests carry raw caller input; rules are applied by the validation stage

Design Decisions:
    - Fields mirror the HTTP payloads loosely typed (empty strings, None) so that a
      missing value becomes a field failure instead of a parse error
"""

from dataclasses import dataclass
from datetime import datetime

from reactivities.core.domain_types import ActivityFilter, ActivityId, UserId


@dataclass(frozen=True)
class ActivityFields:
    """Editable activity attributes shared by create and update."""
    title: str = ""
    description: str = ""
    category: str = ""
    date: datetime | None = None
    city: str = ""
    venue: str = ""
    latitude: float | None = None
    longitude: float | None = None


# ─── Queries ─────────────────────────────────────────────────────

@dataclass(frozen=True)
class ListActivities:
    """Upcoming activities visible to the requester."""
    requested_by: UserId
    filter: str = ActivityFilter.ALL.value
    start_date: datetime | None = None
    limit: int = 10
    offset: int = 0


@dataclass(frozen=True)
class GetActivityDetails:
    id: ActivityId


# ─── Commands ────────────────────────────────────────────────────

@dataclass(frozen=True)
class CreateActivity:
    """Create an activity hosted by the requester."""
    requested_by: UserId
    fields: ActivityFields
    requester_name: str = ""


@dataclass(frozen=True)
class UpdateActivity:
    """Overwrite the editable fields of an existing activity."""
    id: ActivityId
    fields: ActivityFields


@dataclass(frozen=True)
class DeleteActivity:
    id: ActivityId


@dataclass(frozen=True)
class UpdateAttendance:
    """Join, leave, or (for the host) cancel/reactivate an activity."""
    id: ActivityId
    requested_by: UserId
    requester_name: str = ""
