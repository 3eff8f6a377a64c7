"""Policy Rules — pure (principal, resource) -> bool functions behind named policies.

Invariants:
    - All functions are PURE: no IO, no async, no DB
    - evaluate() fails closed: a missing resource is DENY, never ALLOW
    - "resource not found" and "not the host" produce the same DENY, so a denied
      caller learns nothing about whether the resource exists

Design Decisions:
    - Typed Policy enum mapped to a rule in one explicit dict; no requirement
      handler objects, no string-keyed service lookup
"""

from typing import Callable

from reactivities.core.domain_types import Decision, Policy, Principal, ResourceRef
from reactivities.core.errors import UnknownPolicyError

PolicyRule = Callable[[Principal, ResourceRef], bool]


def is_resource_host(principal: Principal, resource: ResourceRef) -> bool:
    """Allow only the identity that owns (hosts) the resource."""
    return resource.owner_id == principal.id


POLICY_RULES: dict[Policy, PolicyRule] = {
    Policy.IS_RESOURCE_HOST: is_resource_host,
}


def evaluate(
    policy: Policy, principal: Principal, resource: ResourceRef | None,
    rules: dict[Policy, PolicyRule] = POLICY_RULES,
) -> Decision:
    """Evaluate a named policy. Unknown policies are a defect, not a denial."""
    rule = rules.get(policy)
    if rule is None:
        raise UnknownPolicyError(str(policy))
    if resource is None:
        return Decision.DENY
    return Decision.ALLOW if rule(principal, resource) else Decision.DENY
