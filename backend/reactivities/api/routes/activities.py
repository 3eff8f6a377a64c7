"""Activity Routes — one route per request type, each through the operation boundary.

Invariants:
    - Every route builds exactly one request object and calls boundary.handle() once
    - PUT and DELETE are marked with the is-resource-host policy here, at the
      operation boundary, so the check runs before validation and dispatch
    - Responses are written only by to_json_response(outcome)
"""

import logging
from datetime import datetime

from fastapi import APIRouter, Depends, Query

from reactivities.api.dependencies import get_boundary, get_current_principal
from reactivities.api.responses import ERROR_RESPONSES, to_json_response
from reactivities.core.domain_types import ActivityFilter, ActivityId, Policy, Principal
from reactivities.core.requests import (
    CreateActivity, DeleteActivity, GetActivityDetails, ListActivities,
    UpdateActivity, UpdateAttendance,
)
from reactivities.schemas.activity import ActivityBody
from reactivities.services.error_translator import OperationBoundary

logger = logging.getLogger(__name__)
router = APIRouter(
    prefix="/api/activities", tags=["activities"], responses=ERROR_RESPONSES,
)


@router.get("")
async def list_activities(
    filter_: str = Query(ActivityFilter.ALL.value, alias="filter"),
    start_date: datetime | None = Query(None),
    limit: int = Query(10),
    offset: int = Query(0),
    principal: Principal = Depends(get_current_principal),
    boundary: OperationBoundary = Depends(get_boundary),
):
    """Upcoming activities, optionally only those the caller attends or hosts."""
    request = ListActivities(
        requested_by=principal.id, filter=filter_,
        start_date=start_date, limit=limit, offset=offset,
    )
    return to_json_response(await boundary.handle(request, principal))


@router.get("/{activity_id}")
async def get_activity(
    activity_id: str,
    principal: Principal = Depends(get_current_principal),
    boundary: OperationBoundary = Depends(get_boundary),
):
    request = GetActivityDetails(id=ActivityId(activity_id))
    return to_json_response(await boundary.handle(request, principal))


@router.post("")
async def create_activity(
    body: ActivityBody,
    principal: Principal = Depends(get_current_principal),
    boundary: OperationBoundary = Depends(get_boundary),
):
    """Create an activity hosted by the caller. Returns the new id."""
    request = CreateActivity(
        requested_by=principal.id,
        fields=body.to_fields(),
        requester_name=principal.display_name,
    )
    return to_json_response(await boundary.handle(request, principal))


@router.put("/{activity_id}")
async def update_activity(
    activity_id: str,
    body: ActivityBody,
    principal: Principal = Depends(get_current_principal),
    boundary: OperationBoundary = Depends(get_boundary),
):
    """Host-only edit."""
    request = UpdateActivity(id=ActivityId(activity_id), fields=body.to_fields())
    return to_json_response(await boundary.handle(
        request, principal,
        policy=Policy.IS_RESOURCE_HOST, resource_id=activity_id,
    ))


@router.delete("/{activity_id}")
async def delete_activity(
    activity_id: str,
    principal: Principal = Depends(get_current_principal),
    boundary: OperationBoundary = Depends(get_boundary),
):
    """Host-only delete."""
    request = DeleteActivity(id=ActivityId(activity_id))
    return to_json_response(await boundary.handle(
        request, principal,
        policy=Policy.IS_RESOURCE_HOST, resource_id=activity_id,
    ))


@router.post("/{activity_id}/attend")
async def update_attendance(
    activity_id: str,
    principal: Principal = Depends(get_current_principal),
    boundary: OperationBoundary = Depends(get_boundary),
):
    """Join or leave; for the host, cancel or reactivate."""
    request = UpdateAttendance(
        id=ActivityId(activity_id),
        requested_by=principal.id,
        requester_name=principal.display_name,
    )
    return to_json_response(await boundary.handle(request, principal))
