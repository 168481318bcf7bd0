"""privileged: declarative allow/forbid authorization rules.

Usage:
    from privileged import PrivilegeBuilder

    context = PrivilegeBuilder().allow("*", "Post").forbid("publish", "Post").build()
    context.allowed("read", "Post")     # True
    context.allowed("publish", "Post")  # False
"""

from privileged.constants import ACTION_ALL, SUBJECT_ALL
from privileged.exceptions import InvalidArgumentError, PrivilegeDeniedError, PrivilegedError
from privileged.pdp import (
    PrivilegeAlias,
    PrivilegeBuilder,
    PrivilegeContext,
    PrivilegeMatch,
    PrivilegeModel,
    PrivilegeQueryProtocol,
    PrivilegeRule,
    StringComparer,
)

__version__ = "1.0.0"

__all__ = [
    "__version__",
    # Constants
    "ACTION_ALL",
    "SUBJECT_ALL",
    # Engine and models
    "PrivilegeAlias",
    "PrivilegeBuilder",
    "PrivilegeContext",
    "PrivilegeMatch",
    "PrivilegeModel",
    "PrivilegeQueryProtocol",
    "PrivilegeRule",
    "StringComparer",
    # Exceptions
    "InvalidArgumentError",
    "PrivilegeDeniedError",
    "PrivilegedError",
]
