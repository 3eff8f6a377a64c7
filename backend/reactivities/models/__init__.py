"""ORM Models — SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Activity is the aggregate root for attendees; the host is an attendee row

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from reactivities.models.user import User  # noqa: F401
from reactivities.models.activity import Activity  # noqa: F401
from reactivities.models.activity_attendee import ActivityAttendee  # noqa: F401
