"""Composition Root — explicit request type -> handler registration and behavior order.

Invariants:
    - Every mapping is visible here; adding a request type requires editing this dict
    - Behavior order: RequestLoggingBehavior (outermost) -> ValidationBehavior -> handler
    - One boundary per request scope (one DB session); nothing shared across requests
"""

from datetime import datetime, timezone
from typing import Callable

from sqlalchemy.ext.asyncio import AsyncSession

from reactivities.core.requests import (
    CreateActivity, DeleteActivity, GetActivityDetails, ListActivities,
    UpdateActivity, UpdateAttendance,
)
from reactivities.core.validation import activity_validators
from reactivities.infrastructure.activity_repository import SqlActivityRepository
from reactivities.services.activity_handlers import ActivityHandlers
from reactivities.services.authorization import ResourceAuthorizer
from reactivities.services.dispatcher import Dispatcher
from reactivities.services.error_translator import OperationBoundary
from reactivities.services.validation_behavior import (
    RequestLoggingBehavior, ValidationBehavior,
)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def build_dispatcher(
    handlers: ActivityHandlers, clock: Callable[[], datetime] = utc_now,
) -> Dispatcher:
    return Dispatcher(
        handlers={
            # Queries
            ListActivities: handlers.list_activities,
            GetActivityDetails: handlers.get_activity_details,
            # Commands
            CreateActivity: handlers.create_activity,
            UpdateActivity: handlers.update_activity,
            DeleteActivity: handlers.delete_activity,
            UpdateAttendance: handlers.update_attendance,
        },
        behaviors=[
            RequestLoggingBehavior(),
            ValidationBehavior(activity_validators(clock)),
        ],
    )


def build_boundary(
    db: AsyncSession, clock: Callable[[], datetime] = utc_now,
) -> OperationBoundary:
    """Wire repository, handlers, dispatcher and authorizer for one request."""
    repository = SqlActivityRepository(db)
    dispatcher = build_dispatcher(ActivityHandlers(repository, clock), clock)
    return OperationBoundary(dispatcher, ResourceAuthorizer(repository))
