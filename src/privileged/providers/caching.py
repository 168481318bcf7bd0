"""Per-principal context cache with TTL.

Wraps a resolver (sync or async function principal -> context) and caches
its result per principal. Keys are case-insensitive ("Alice" and "alice"
share an entry). Anonymous callers (principal None) are never cached; the
resolver is called for them every time.

Entries expire after ttl_seconds, measured with a monotonic clock. Cached
contexts are immutable, so a cached instance can be shared by any number of
concurrent requests.
"""

from __future__ import annotations

__all__ = ["CachedContext", "CachingContextProvider"]

import asyncio
import logging
import time
from collections.abc import Callable
from dataclasses import dataclass

from privileged.constants import (
    DEFAULT_CACHE_TTL_SECONDS,
    MAX_CACHE_TTL_SECONDS,
    MIN_CACHE_TTL_SECONDS,
)
from privileged.exceptions import InvalidArgumentError
from privileged.pdp.context import PrivilegeContext
from privileged.providers.base import ContextResolver, resolve_context

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CachedContext:
    """A resolved context with the monotonic time it was stored."""

    principal: str
    context: PrivilegeContext
    stored_at: float


class CachingContextProvider:
    """Caches resolved contexts per principal for a configurable TTL.

    Concurrency: an asyncio.Lock guards the store, and resolution happens
    under it, so concurrent first requests for a principal resolve once.

    Attributes:
        ttl_seconds: How long a resolved context stays valid.
    """

    def __init__(
        self,
        resolver: ContextResolver,
        ttl_seconds: int = DEFAULT_CACHE_TTL_SECONDS,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the caching provider.

        Args:
            resolver: Function returning the context for a principal.
            ttl_seconds: Entry lifetime, between MIN_CACHE_TTL_SECONDS and
                MAX_CACHE_TTL_SECONDS.
            clock: Monotonic time source.

        Raises:
            InvalidArgumentError: If resolver is None or ttl_seconds is out of range.
        """
        if resolver is None:
            raise InvalidArgumentError("Resolver cannot be None.", argument="resolver")
        if not MIN_CACHE_TTL_SECONDS <= ttl_seconds <= MAX_CACHE_TTL_SECONDS:
            raise InvalidArgumentError(
                f"ttl_seconds must be between {MIN_CACHE_TTL_SECONDS} and "
                f"{MAX_CACHE_TTL_SECONDS}, got {ttl_seconds}.",
                argument="ttl_seconds",
            )

        self._resolver = resolver
        self._ttl_seconds = ttl_seconds
        self._clock = clock
        self._store: dict[str, CachedContext] = {}
        self._lock = asyncio.Lock()

    @property
    def ttl_seconds(self) -> int:
        return self._ttl_seconds

    @property
    def size(self) -> int:
        """Number of stored entries, expired ones included until next lookup."""
        return len(self._store)

    @staticmethod
    def _key(principal: str) -> str:
        return principal.casefold()

    async def get_context(self, principal: str | None = None) -> PrivilegeContext:
        """Return the cached context for principal, resolving it if needed."""
        if principal is None:
            return await resolve_context(self._resolver, None)

        key = self._key(principal)
        async with self._lock:
            entry = self._store.get(key)
            if entry is not None:
                if self._clock() - entry.stored_at <= self._ttl_seconds:
                    return entry.context
                del self._store[key]

            context = await resolve_context(self._resolver, principal)
            self._store[key] = CachedContext(
                principal=principal,
                context=context,
                stored_at=self._clock(),
            )
            logger.debug(
                {
                    "event": "privilege_context_cached",
                    "principal": principal,
                    "rules": context.rule_count,
                }
            )
            return context

    def invalidate(self, principal: str | None = None) -> int:
        """Drop cached contexts.

        Args:
            principal: Principal to drop, or None to drop every entry.

        Returns:
            Number of entries removed.
        """
        if principal is None:
            count = len(self._store)
            self._store.clear()
            return count

        return 1 if self._store.pop(self._key(principal), None) is not None else 0
