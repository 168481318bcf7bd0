"""Custom exceptions for privileged.

Rule definitions must be well-formed, so invalid construction input fails
immediately at the call site. Runtime queries about absent resources are
NOT errors: they evaluate to "not allowed".

Exceptions:
    - PrivilegedError: Base for all package errors
    - InvalidArgumentError: Caller passed an invalid argument (also a ValueError)
    - PrivilegeDeniedError: Raised by `PrivilegeContext.demand` when a query is denied

Usage:
    from privileged.exceptions import InvalidArgumentError
"""

from __future__ import annotations

__all__ = [
    "InvalidArgumentError",
    "PrivilegeDeniedError",
    "PrivilegedError",
]

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from privileged.pdp.model import PrivilegeRule


class PrivilegedError(Exception):
    """Base exception for privileged."""


class InvalidArgumentError(PrivilegedError, ValueError):
    """Raised when a caller passes an invalid argument.

    Inherits from ValueError so callers can catch it without importing
    this module.

    Attributes:
        argument: Name of the offending argument.
    """

    def __init__(self, message: str, *, argument: str | None = None) -> None:
        """Initialize InvalidArgumentError.

        Args:
            message: Human-readable reason.
            argument: Name of the offending argument.
        """
        super().__init__(message)
        self.argument = argument
        self.message = message

    def __repr__(self) -> str:
        """Return detailed representation for debugging."""
        return f"InvalidArgumentError({self.message!r}, argument={self.argument!r})"


class PrivilegeDeniedError(PrivilegedError):
    """Raised when a demanded privilege is not allowed.

    Attributes:
        action: Requested action.
        subject: Requested subject.
        qualifier: Requested qualifier, if any.
        matched_rules: Rules that matched the query (forbid rules explain the denial,
            an empty list means nothing granted it).
    """

    def __init__(
        self,
        action: str | None,
        subject: str | None,
        qualifier: str | None = None,
        *,
        matched_rules: list["PrivilegeRule"] | None = None,
    ) -> None:
        """Initialize PrivilegeDeniedError.

        Args:
            action: Requested action.
            subject: Requested subject.
            qualifier: Requested qualifier, if any.
            matched_rules: Rules that matched the query.
        """
        self.action = action
        self.subject = subject
        self.qualifier = qualifier
        self.matched_rules = matched_rules or []

        target = f"{subject}.{qualifier}" if qualifier else f"{subject}"
        super().__init__(f"Action '{action}' is not allowed on '{target}'")

    @property
    def forbidden_by(self) -> list["PrivilegeRule"]:
        """Forbid rules among the matched rules."""
        return [rule for rule in self.matched_rules if rule.is_forbid]
