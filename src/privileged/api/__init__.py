"""FastAPI adapter for privilege enforcement.

Import dependencies from here:
    from privileged.api import require_privilege, setup_privileges
"""

from privileged.api.deps import (
    DecisionLoggerDep,
    PrincipalDep,
    PrivilegeProviderDep,
    get_decision_logger,
    get_principal,
    get_privilege_provider,
    require_privilege,
)
from privileged.api.errors import PRIVILEGE_DENIED, privilege_denied_handler
from privileged.api.integration import setup_privileges

__all__ = [
    "DecisionLoggerDep",
    "PRIVILEGE_DENIED",
    "PrincipalDep",
    "PrivilegeProviderDep",
    "get_decision_logger",
    "get_principal",
    "get_privilege_provider",
    "privilege_denied_handler",
    "require_privilege",
    "setup_privileges",
]
