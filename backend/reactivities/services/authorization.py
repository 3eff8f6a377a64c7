"""Resource Authorizer — fetches a policy target and evaluates the named policy.

Invariants:
    - Runs before dispatch: a denied request never reaches validators or handlers
    - Missing resource -> DENY (same signal as "not the host")
    - Lookup failures propagate to the boundary (Unhandled), never ALLOW
"""

import logging

from reactivities.core.domain_types import Decision, Policy, Principal
from reactivities.core.policies import evaluate
from reactivities.core.repository_protocols import ResourceLookup

logger = logging.getLogger(__name__)


class ResourceAuthorizer:
    def __init__(self, lookup: ResourceLookup):
        self._lookup = lookup

    async def authorize(
        self, policy: Policy, principal: Principal, resource_id: str,
    ) -> Decision:
        resource = await self._lookup.find_resource(resource_id)
        decision = evaluate(policy, principal, resource)
        if decision == Decision.DENY:
            # Operator log may say why; the caller only ever sees Forbidden.
            logger.warning(
                f"Policy {policy.value} denied for {principal.id} on {resource_id} "
                f"({'missing' if resource is None else 'not owner'})",
                extra={
                    "policy": policy.value,
                    "principal_id": principal.id,
                    "resource_id": resource_id,
                },
            )
        return decision
