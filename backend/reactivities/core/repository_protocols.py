"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell; dependency arrows point inward only
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, fakes in tests need no base class
    - Async in Protocol: implementations do IO; the pure policy rules that use
      the result are never async themselves
"""

from typing import Protocol

from reactivities.core.domain_types import ResourceRef


class ResourceLookup(Protocol):
    """Resolves a policy target and its owner, implemented by the repository."""
    async def find_resource(self, resource_id: str) -> ResourceRef | None: ...
