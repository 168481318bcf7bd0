"""FastAPI dependencies for privilege enforcement.

The app owns a context provider on app.state; routes declare the privilege
they need with require_privilege and receive the caller's context.

Usage:
    from privileged.api import require_privilege, setup_privileges

    app = FastAPI()
    setup_privileges(app, FileContextProvider(Path("privileges.json")))

    @app.post("/posts/{post_id}/publish")
    async def publish(
        post_id: int,
        context: PrivilegeContext = Depends(require_privilege("publish", "Post")),
    ) -> dict:
        ...

Authentication happens upstream: the principal is read from a trusted
header (X-Principal by default) set by a gateway or middleware.
"""

from __future__ import annotations

__all__ = [
    # Dependency functions
    "get_decision_logger",
    "get_principal",
    "get_privilege_provider",
    "require_privilege",
    # Type aliases for Annotated pattern
    "DecisionLoggerDep",
    "PrincipalDep",
    "PrivilegeProviderDep",
]

from typing import Annotated, Any, Callable, Coroutine

from fastapi import Depends, HTTPException, Request

from privileged.api.errors import PRIVILEGE_DENIED
from privileged.constants import DEFAULT_PRINCIPAL_HEADER
from privileged.exceptions import PrivilegeDeniedError
from privileged.pdp.context import PrivilegeContext
from privileged.providers.base import PrivilegeContextProvider
from privileged.telemetry.decision_logger import DecisionEventLogger


# =============================================================================
# State getters
# =============================================================================


def get_privilege_provider(request: Request) -> PrivilegeContextProvider:
    """Get the context provider from app.state.

    Raises:
        HTTPException: 503 if no provider is configured.
    """
    provider = getattr(request.app.state, "privilege_provider", None)
    if provider is None:
        raise HTTPException(
            status_code=503,
            detail="Privilege provider not available. App may still be starting.",
        )
    return provider


def get_decision_logger(request: Request) -> DecisionEventLogger | None:
    """Get the optional decision logger from app.state."""
    return getattr(request.app.state, "decision_logger", None)


def get_principal(request: Request) -> str | None:
    """Read the caller's principal from the configured header.

    Returns:
        Header value, or None when the header is absent or blank.
    """
    header = getattr(request.app.state, "principal_header", None) or DEFAULT_PRINCIPAL_HEADER
    value = request.headers.get(header)
    if value is None or not value.strip():
        return None
    return value.strip()


# =============================================================================
# Type aliases for Annotated pattern
# =============================================================================

PrivilegeProviderDep = Annotated[PrivilegeContextProvider, Depends(get_privilege_provider)]
DecisionLoggerDep = Annotated[DecisionEventLogger | None, Depends(get_decision_logger)]
PrincipalDep = Annotated[str | None, Depends(get_principal)]


# =============================================================================
# Enforcement
# =============================================================================


def require_privilege(
    action: str,
    subject: str,
    qualifier: str | None = None,
) -> Callable[..., Coroutine[Any, Any, PrivilegeContext]]:
    """Create a dependency that enforces one privilege.

    Args:
        action: Action the route performs (e.g., "publish").
        subject: Subject the route acts on (e.g., "Post").
        qualifier: Optional qualifier (e.g., a field name).

    Returns:
        Dependency resolving the caller's context. Raises HTTPException 403
        when the action is not allowed.
    """

    async def dependency(
        provider: PrivilegeProviderDep,
        principal: PrincipalDep,
        decision_logger: DecisionLoggerDep,
    ) -> PrivilegeContext:
        context = await provider.get_context(principal)

        if decision_logger is not None:
            allowed = decision_logger.check(context, action, subject, qualifier, principal=principal)
        else:
            allowed = context.allowed(action, subject, qualifier)

        if not allowed:
            denied = PrivilegeDeniedError(action, subject, qualifier)
            raise HTTPException(
                status_code=403,
                detail={"code": PRIVILEGE_DENIED, "message": str(denied)},
            )
        return context

    dependency.__name__ = f"require_{action}_{subject}"
    return dependency
