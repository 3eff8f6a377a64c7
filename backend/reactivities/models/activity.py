"""Activity ORM — a hosted event other users can attend.

Invariants:
    - id is a string key (uuid4 by default; external ids are opaque strings)
    - Exactly one attendee row has is_host=True for a created activity
    - Deleting an activity deletes its attendee rows

Design Decisions:
    - Attendees loaded with selectin: every read path returns host + attendees
"""

import uuid
from datetime import datetime

from sqlalchemy import String, Text, Boolean, DateTime, Float
from sqlalchemy.orm import Mapped, mapped_column, relationship

from reactivities.core.domain_types import (
    CATEGORY_MAX_LENGTH, CITY_MAX_LENGTH, TITLE_MAX_LENGTH, VENUE_MAX_LENGTH,
)
from reactivities.db.base import Base


class Activity(Base):
    __tablename__ = "activities"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4()),
    )
    title: Mapped[str] = mapped_column(String(TITLE_MAX_LENGTH), nullable=False)
    date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, index=True,
    )
    description: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str] = mapped_column(String(CATEGORY_MAX_LENGTH), nullable=False)
    is_cancelled: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
    city: Mapped[str] = mapped_column(String(CITY_MAX_LENGTH), nullable=False)
    venue: Mapped[str] = mapped_column(String(VENUE_MAX_LENGTH), nullable=False)
    latitude: Mapped[float] = mapped_column(Float, nullable=False)
    longitude: Mapped[float] = mapped_column(Float, nullable=False)

    attendees: Mapped[list["ActivityAttendee"]] = relationship(
        "ActivityAttendee", back_populates="activity",
        cascade="all, delete-orphan", lazy="selectin",
    )

    @property
    def host(self) -> "ActivityAttendee | None":
        return next((a for a in self.attendees if a.is_host), None)
