"""ActivityAttendee ORM — join table between users and activities.

Invariants:
    - (activity_id, user_id) is the primary key: a user attends an activity once
    - is_host marks the owner checked by the is-resource-host policy
"""

from datetime import datetime, timezone

from sqlalchemy import String, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from reactivities.core.domain_types import USER_ID_MAX_LENGTH
from reactivities.db.base import Base


class ActivityAttendee(Base):
    __tablename__ = "activity_attendees"

    activity_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("activities.id", ondelete="CASCADE"),
        primary_key=True,
    )
    user_id: Mapped[str] = mapped_column(
        String(USER_ID_MAX_LENGTH), ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    )
    is_host: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
    date_joined: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    activity: Mapped["Activity"] = relationship(
        "Activity", back_populates="attendees",
    )
    user: Mapped["User"] = relationship(
        "User", lazy="selectin",
    )
