"""Activity Repository — SQLAlchemy access to activities, attendees and users.

Invariants:
    - find_resource returns the host as owner, or None when the activity (or its
      host row) does not exist
    - No commit happens implicitly: handlers call commit() at their transaction end
    - Write failures leave as PersistenceError after a rollback; the boundary
      reports them as Unhandled
    - Reads after a write repopulate attendees (populate_existing)

Design Decisions:
    - Thin repository over AsyncSession: queries live here, decisions in core/
"""

from datetime import datetime

from sqlalchemy import and_, select
from sqlalchemy.exc import (
    DBAPIError, IntegrityError, OperationalError, SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import AsyncSession

from reactivities.core.domain_types import (
    DISPLAY_NAME_MAX_LENGTH, ActivityFilter, ResourceRef, UserId,
)
from reactivities.core.errors import PersistenceError
from reactivities.models.activity import Activity
from reactivities.models.activity_attendee import ActivityAttendee
from reactivities.models.user import User

RESOURCE_TYPE = "Activity"


class SqlActivityRepository:
    """Persistence collaborator for activity handlers and the authorizer."""

    def __init__(self, db: AsyncSession):
        self._db = db

    async def find(self, activity_id: str) -> Activity | None:
        result = await self._db.execute(
            select(Activity)
            .where(Activity.id == activity_id)
            .execution_options(populate_existing=True),
        )
        return result.scalar_one_or_none()

    async def find_resource(self, resource_id: str) -> ResourceRef | None:
        result = await self._db.execute(
            select(ActivityAttendee.user_id).where(
                ActivityAttendee.activity_id == resource_id,
                ActivityAttendee.is_host.is_(True),
            ),
        )
        owner_id = result.scalars().first()
        if owner_id is None:
            return None
        return ResourceRef(RESOURCE_TYPE, resource_id, UserId(owner_id))

    async def list_upcoming(
        self,
        user_id: str,
        activity_filter: ActivityFilter,
        start_date: datetime,
        limit: int,
        offset: int,
    ) -> list[Activity]:
        query = (
            select(Activity)
            .where(Activity.date >= start_date)
            .order_by(Activity.date, Activity.id)
        )
        if activity_filter == ActivityFilter.GOING:
            query = query.where(
                Activity.attendees.any(ActivityAttendee.user_id == user_id),
            )
        elif activity_filter == ActivityFilter.HOSTING:
            query = query.where(
                Activity.attendees.any(and_(
                    ActivityAttendee.user_id == user_id,
                    ActivityAttendee.is_host.is_(True),
                )),
            )
        result = await self._db.execute(query.limit(limit).offset(offset))
        return list(result.scalars().all())

    async def ensure_user(self, user_id: str, display_name: str = "") -> User:
        """Get the user row for a principal, creating it on first use."""
        user = await self._db.get(User, user_id)
        if user is None:
            name = (display_name or user_id)[:DISPLAY_NAME_MAX_LENGTH]
            user = User(id=user_id, display_name=name)
            self._db.add(user)
            await self._write(self._db.flush, "flush")
        return user

    def add(self, entity: object) -> None:
        self._db.add(entity)

    async def delete(self, entity: object) -> None:
        await self._db.delete(entity)

    async def commit(self) -> None:
        await self._write(self._db.commit, "commit")

    async def _write(self, operation, name: str) -> None:
        """Run a flush/commit, mapping driver failures to PersistenceError."""
        try:
            await operation()
        except IntegrityError as e:
            await self._db.rollback()
            raise PersistenceError("integrity constraint violated", name) from e
        except OperationalError as e:
            await self._db.rollback()
            raise PersistenceError("connection or operational error", name) from e
        except DBAPIError as e:
            await self._db.rollback()
            raise PersistenceError("driver rejected the statement", name) from e
        except SQLAlchemyError as e:
            await self._db.rollback()
            raise PersistenceError("database operation failed", name) from e
