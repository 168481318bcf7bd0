"""Context provider protocol.

A provider resolves the PrivilegeContext for a caller. Enforcement points
(the FastAPI adapter, the CLI) depend on this protocol, not on where the
rules come from.
"""

from __future__ import annotations

__all__ = [
    "ContextResolver",
    "PrivilegeContextProvider",
    "resolve_context",
]

import inspect
from collections.abc import Awaitable, Callable
from typing import Protocol, runtime_checkable

from privileged.pdp.context import PrivilegeContext

# Sync or async function mapping a principal (None = anonymous) to its context
ContextResolver = Callable[[str | None], PrivilegeContext | Awaitable[PrivilegeContext]]


@runtime_checkable
class PrivilegeContextProvider(Protocol):
    """Protocol for privilege context providers.

    Example:
        class TenantProvider:
            async def get_context(self, principal: str | None = None) -> PrivilegeContext:
                return await load_rules_for(principal)
    """

    async def get_context(self, principal: str | None = None) -> PrivilegeContext:
        """Resolve the context for a principal.

        Args:
            principal: Caller identity, or None for anonymous callers.

        Returns:
            Context to evaluate the caller's queries against.
        """
        ...


async def resolve_context(resolver: ContextResolver, principal: str | None) -> PrivilegeContext:
    """Call a sync or async resolver and return its context."""
    result = resolver(principal)
    if inspect.isawaitable(result):
        result = await result
    return result
