"""Context providers - resolve the PrivilegeContext for a caller.

    StaticContextProvider   - one context for everyone
    FileContextProvider     - model file, reloaded when it changes
    CachingContextProvider  - per-principal cache over a resolver
"""

from privileged.providers.base import ContextResolver, PrivilegeContextProvider
from privileged.providers.caching import CachedContext, CachingContextProvider
from privileged.providers.file import FileContextProvider
from privileged.providers.static import StaticContextProvider

__all__ = [
    "CachedContext",
    "CachingContextProvider",
    "ContextResolver",
    "FileContextProvider",
    "PrivilegeContextProvider",
    "StaticContextProvider",
]
