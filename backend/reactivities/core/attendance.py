"""Attendance Rules — decide what an attend toggle does for a user.

Invariants:
    - Pure function: the caller supplies the attendee rows it already loaded
    - The host never "leaves" their own activity; they cancel or reactivate it
"""

from typing import Iterable, Protocol

from reactivities.core.domain_types import AttendanceChange, UserId


class AttendeeLike(Protocol):
    user_id: str
    is_host: bool


def decide_attendance_change(
    attendees: Iterable[AttendeeLike], user_id: UserId,
) -> AttendanceChange:
    for attendee in attendees:
        if attendee.user_id == user_id:
            if attendee.is_host:
                return AttendanceChange.TOGGLE_CANCELLED
            return AttendanceChange.LEAVE
    return AttendanceChange.JOIN
