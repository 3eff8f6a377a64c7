"""Dispatcher — tests for explicit routing and behavior composition.

Tests cover:
    - Request routes to the handler registered for its exact type
    - Unregistered (and subclassed) request types raise
    - Behaviors run in declared order around the handler
    - A behavior can short-circuit; the handler then never runs
    - The handler runs at most once even if a behavior calls next twice
    - The registered activity composition maps every request type
"""

from dataclasses import dataclass

import pytest

from reactivities.core.errors import (
    HandlerReentryError, ResourceNotFoundError, UnregisteredRequestError,
)
from reactivities.core.requests import (
    ActivityFields, CreateActivity, DeleteActivity, GetActivityDetails, ListActivities,
    UpdateActivity, UpdateAttendance,
)
from reactivities.services.composition import build_dispatcher
from reactivities.services.dispatcher import Dispatcher


@dataclass(frozen=True)
class Ping:
    value: int


@dataclass(frozen=True)
class Pong:
    value: int


@dataclass(frozen=True)
class LoudPing(Ping):
    pass


def _recording_handler(log: list, name: str):
    async def handler(request):
        log.append(name)
        return {"handled_by": name, "value": request.value}
    return handler


def _recording_behavior(log: list, name: str):
    async def behavior(request, next_stage):
        log.append(f"{name}:before")
        result = await next_stage()
        log.append(f"{name}:after")
        return result
    return behavior


async def test_dispatch_routes_by_request_type():
    log = []
    dispatcher = Dispatcher({
        Ping: _recording_handler(log, "ping"),
        Pong: _recording_handler(log, "pong"),
    })
    assert await dispatcher.dispatch(Pong(3)) == {"handled_by": "pong", "value": 3}
    assert log == ["pong"]


async def test_dispatch_unregistered_type_raises():
    dispatcher = Dispatcher({Ping: _recording_handler([], "ping")})
    with pytest.raises(UnregisteredRequestError):
        await dispatcher.dispatch(Pong(1))


async def test_dispatch_does_not_match_subclasses():
    dispatcher = Dispatcher({Ping: _recording_handler([], "ping")})
    with pytest.raises(UnregisteredRequestError):
        await dispatcher.dispatch(LoudPing(1))


async def test_behaviors_wrap_handler_in_declared_order():
    log = []
    dispatcher = Dispatcher(
        {Ping: _recording_handler(log, "handler")},
        behaviors=[_recording_behavior(log, "outer"), _recording_behavior(log, "inner")],
    )
    await dispatcher.dispatch(Ping(1))
    assert log == [
        "outer:before", "inner:before", "handler", "inner:after", "outer:after",
    ]


async def test_behavior_short_circuit_skips_later_stages():
    log = []

    async def reject(request, next_stage):
        log.append("reject")
        return "rejected"

    dispatcher = Dispatcher(
        {Ping: _recording_handler(log, "handler")},
        behaviors=[reject, _recording_behavior(log, "inner")],
    )
    assert await dispatcher.dispatch(Ping(1)) == "rejected"
    assert log == ["reject"]


async def test_handler_invoked_at_most_once():
    log = []

    async def greedy(request, next_stage):
        await next_stage()
        return await next_stage()

    dispatcher = Dispatcher({Ping: _recording_handler(log, "handler")}, [greedy])
    with pytest.raises(HandlerReentryError):
        await dispatcher.dispatch(Ping(1))
    assert log == ["handler"]


async def test_dispatcher_is_reusable_across_requests():
    log = []
    dispatcher = Dispatcher({Ping: _recording_handler(log, "handler")})
    first = await dispatcher.dispatch(Ping(5))
    second = await dispatcher.dispatch(Ping(5))
    assert first == second
    assert log == ["handler", "handler"]


async def test_handler_errors_propagate_unchanged():
    async def broken(request):
        raise ValueError("boom")

    dispatcher = Dispatcher({Ping: broken})
    with pytest.raises(ValueError, match="boom"):
        await dispatcher.dispatch(Ping(1))


@pytest.mark.parametrize("request_obj", [
    ListActivities(requested_by="u1"),
    GetActivityDetails(id="missing"),
    CreateActivity(requested_by="u1", fields=ActivityFields()),
    UpdateActivity(id="missing", fields=ActivityFields()),
    DeleteActivity(id="missing"),
    UpdateAttendance(id="missing", requested_by="u1"),
], ids=lambda r: type(r).__name__)
async def test_activity_composition_registers_every_request_type(test_db, request_obj):
    from reactivities.infrastructure.activity_repository import SqlActivityRepository
    from reactivities.services.activity_handlers import ActivityHandlers
    from reactivities.services.composition import utc_now

    dispatcher = build_dispatcher(ActivityHandlers(SqlActivityRepository(test_db), utc_now))
    try:
        await dispatcher.dispatch(request_obj)
    except UnregisteredRequestError:
        pytest.fail(f"{type(request_obj).__name__} has no handler")
    except ResourceNotFoundError:
        pass
