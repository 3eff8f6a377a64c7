"""Activity Handlers — the only place activity state is read or written.

Invariants:
    - One handler method per request type; each receives an already validated
      (and, where protected, already authorized) request
    - Each command is its own transaction: commit once at the end, nothing on failure
    - Missing activities raise ResourceNotFoundError (NotFound at the boundary)
    - Dates are written and compared in UTC whatever offset the caller used

Design Decisions:
    - Handlers return response models; the boundary decides the status code
    - Attendance decision delegated to core/attendance.py (pure)
"""

from datetime import datetime
from typing import Callable

from reactivities.core.attendance import decide_attendance_change
from reactivities.core.domain_types import ActivityFilter, AttendanceChange, as_utc
from reactivities.core.errors import ResourceNotFoundError
from reactivities.core.requests import (
    ActivityFields, CreateActivity, DeleteActivity, GetActivityDetails,
    ListActivities, UpdateActivity, UpdateAttendance,
)
from reactivities.infrastructure.activity_repository import (
    RESOURCE_TYPE, SqlActivityRepository,
)
from reactivities.models.activity import Activity
from reactivities.models.activity_attendee import ActivityAttendee
from reactivities.schemas.activity import ActivityCreated, ActivityResponse


class ActivityHandlers:
    """Handlers for activity queries and commands."""

    def __init__(
        self, repository: SqlActivityRepository, clock: Callable[[], datetime],
    ):
        self.repository = repository
        self.clock = clock

    async def list_activities(self, request: ListActivities) -> list[ActivityResponse]:
        activities = await self.repository.list_upcoming(
            request.requested_by,
            ActivityFilter(request.filter),
            as_utc(request.start_date or self.clock()),
            request.limit,
            request.offset,
        )
        return [ActivityResponse.from_activity(a) for a in activities]

    async def get_activity_details(self, request: GetActivityDetails) -> ActivityResponse:
        activity = await self._get_or_raise(request.id)
        return ActivityResponse.from_activity(activity)

    async def create_activity(self, request: CreateActivity) -> ActivityCreated:
        host = await self.repository.ensure_user(
            request.requested_by, request.requester_name,
        )
        activity = Activity(
            **_editable(request.fields),
            is_cancelled=False,
            attendees=[ActivityAttendee(user=host, is_host=True)],
        )
        self.repository.add(activity)
        await self.repository.commit()
        return ActivityCreated(id=activity.id)

    async def update_activity(self, request: UpdateActivity) -> ActivityResponse:
        activity = await self._get_or_raise(request.id)
        for name, value in _editable(request.fields).items():
            setattr(activity, name, value)
        await self.repository.commit()
        return ActivityResponse.from_activity(await self._get_or_raise(request.id))

    async def delete_activity(self, request: DeleteActivity) -> None:
        activity = await self._get_or_raise(request.id)
        await self.repository.delete(activity)
        await self.repository.commit()

    async def update_attendance(self, request: UpdateAttendance) -> ActivityResponse:
        activity = await self._get_or_raise(request.id)
        change = decide_attendance_change(activity.attendees, request.requested_by)

        if change == AttendanceChange.TOGGLE_CANCELLED:
            activity.is_cancelled = not activity.is_cancelled
        elif change == AttendanceChange.LEAVE:
            attendee = next(
                a for a in activity.attendees if a.user_id == request.requested_by
            )
            activity.attendees.remove(attendee)
        else:
            user = await self.repository.ensure_user(
                request.requested_by, request.requester_name,
            )
            activity.attendees.append(ActivityAttendee(user=user, is_host=False))

        await self.repository.commit()
        return ActivityResponse.from_activity(await self._get_or_raise(request.id))

    async def _get_or_raise(self, activity_id: str) -> Activity:
        activity = await self.repository.find(activity_id)
        if activity is None:
            raise ResourceNotFoundError(RESOURCE_TYPE, activity_id)
        return activity


def _editable(fields: ActivityFields) -> dict:
    return {
        "title": fields.title.strip(),
        "description": fields.description,
        "category": fields.category,
        "date": as_utc(fields.date) if fields.date else None,
        "city": fields.city,
        "venue": fields.venue,
        "latitude": fields.latitude,
        "longitude": fields.longitude,
    }
