"""Wire privilege enforcement into a FastAPI app."""

from __future__ import annotations

__all__ = ["setup_privileges"]

import logging

from fastapi import FastAPI

from privileged.api.errors import privilege_denied_handler
from privileged.constants import DEFAULT_PRINCIPAL_HEADER
from privileged.exceptions import PrivilegeDeniedError
from privileged.providers.base import PrivilegeContextProvider
from privileged.telemetry.decision_logger import DecisionEventLogger

logger = logging.getLogger(__name__)


def setup_privileges(
    app: FastAPI,
    provider: PrivilegeContextProvider,
    *,
    principal_header: str = DEFAULT_PRINCIPAL_HEADER,
    decision_logger: DecisionEventLogger | None = None,
) -> None:
    """Store the provider on app.state and register the 403 handler.

    Args:
        app: Application to configure.
        provider: Resolves each caller's context.
        principal_header: Header carrying the caller's principal.
        decision_logger: Optional logger recording every decision.
    """
    app.state.privilege_provider = provider
    app.state.principal_header = principal_header
    app.state.decision_logger = decision_logger
    app.add_exception_handler(PrivilegeDeniedError, privilege_denied_handler)
    logger.debug(
        "Privilege enforcement configured (provider=%s, header=%s)",
        type(provider).__name__,
        principal_header,
    )
