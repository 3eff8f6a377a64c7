"""Dispatcher — explicit routing from request type to handler, wrapped in behaviors.

Invariants:
    - Every request type -> handler mapping is visible, with no reflection or scanning
    - Lookup is by exact type(request); subclasses are not matched
    - Behaviors run in declared order (first = outermost); each may short-circuit
      by returning without calling next_stage
    - Exactly one handler per request, invoked at most once per dispatch
    - The dispatcher itself has no side effects and keeps no per-request state

Design Decisions:
    - Behaviors are plain async callables (request, next_stage) -> result, composed
      around the handler at dispatch time
    - Unregistered request types raise: a missing mapping is a composition defect
"""

import logging
from typing import Any, Awaitable, Callable, Mapping, Sequence

from reactivities.core.errors import HandlerReentryError, UnregisteredRequestError

logger = logging.getLogger(__name__)

Handler = Callable[[Any], Awaitable[Any]]
NextStage = Callable[[], Awaitable[Any]]
Behavior = Callable[[Any, NextStage], Awaitable[Any]]


class Dispatcher:
    """Routes request -> handler through an ordered behavior chain."""

    def __init__(
        self,
        handlers: Mapping[type, Handler],
        behaviors: Sequence[Behavior] = (),
    ):
        self._handlers = dict(handlers)
        self._behaviors = tuple(behaviors)

    async def dispatch(self, request: object) -> Any:
        """Run the behavior chain and, unless short-circuited, the handler."""
        request_type = type(request).__name__
        handler = self._handlers.get(type(request))
        if handler is None:
            raise UnregisteredRequestError(request_type)

        invoked = False

        async def invoke_handler() -> Any:
            nonlocal invoked
            if invoked:
                raise HandlerReentryError(request_type)
            invoked = True
            return await handler(request)

        stage: NextStage = invoke_handler
        for behavior in reversed(self._behaviors):
            stage = _bind(behavior, request, stage)
        return await stage()


def _bind(behavior: Behavior, request: object, next_stage: NextStage) -> NextStage:
    async def run() -> Any:
        return await behavior(request, next_stage)
    return run
