"""Activity Schemas — HTTP payloads for activity routes and the error envelope.

Invariants:
    - ActivityBody accepts empty/missing values: field rules are applied by the
      validation stage, so "title": "" yields a ValidationFailed field error
    - Response models are built from ORM rows via from_activity()
    - Response dates always carry the UTC offset, including rows read back from
      backends that store naive timestamps
"""

from datetime import datetime

from pydantic import BaseModel, Field

from reactivities.core.domain_types import as_utc
from reactivities.core.requests import ActivityFields
from reactivities.models.activity import Activity


class ActivityBody(BaseModel):
    """Create/update payload: types only, rules live in core/validation.py."""
    title: str = ""
    description: str = ""
    category: str = ""
    date: datetime | None = None
    city: str = ""
    venue: str = ""
    latitude: float | None = None
    longitude: float | None = None

    def to_fields(self) -> ActivityFields:
        return ActivityFields(**self.model_dump())


class AttendeeResponse(BaseModel):
    id: str
    display_name: str
    is_host: bool = False


class ActivityResponse(BaseModel):
    """Public activity view with host and attendee profiles."""
    id: str
    title: str
    date: datetime
    description: str
    category: str
    is_cancelled: bool
    city: str
    venue: str
    latitude: float
    longitude: float
    host_id: str | None = None
    host_display_name: str | None = None
    attendees: list[AttendeeResponse] = Field(default_factory=list)

    @classmethod
    def from_activity(cls, activity: Activity) -> "ActivityResponse":
        host = activity.host
        return cls(
            id=activity.id,
            title=activity.title,
            date=as_utc(activity.date),
            description=activity.description,
            category=activity.category,
            is_cancelled=activity.is_cancelled,
            city=activity.city,
            venue=activity.venue,
            latitude=activity.latitude,
            longitude=activity.longitude,
            host_id=host.user_id if host else None,
            host_display_name=host.user.display_name if host else None,
            attendees=[
                AttendeeResponse(
                    id=a.user_id,
                    display_name=a.user.display_name,
                    is_host=a.is_host,
                )
                for a in sorted(activity.attendees, key=lambda a: (not a.is_host, a.user_id))
            ],
        )


class ActivityCreated(BaseModel):
    id: str


class FieldErrorResponse(BaseModel):
    field: str
    message: str


class ErrorEnvelopeResponse(BaseModel):
    """Documented error contract (OpenAPI only; bodies come from ErrorEnvelope)."""
    kind: str
    errors: list[FieldErrorResponse] | None = None
    message: str | None = None
