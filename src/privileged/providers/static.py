"""Provider returning one fixed context for every caller."""

from __future__ import annotations

__all__ = ["StaticContextProvider"]

from privileged.exceptions import InvalidArgumentError
from privileged.pdp.context import PrivilegeContext


class StaticContextProvider:
    """Serves the same context regardless of principal."""

    def __init__(self, context: PrivilegeContext) -> None:
        if context is None:
            raise InvalidArgumentError("Context cannot be None.", argument="context")
        self._context = context

    @property
    def context(self) -> PrivilegeContext:
        return self._context

    async def get_context(self, principal: str | None = None) -> PrivilegeContext:
        return self._context
