"""Protocol definition for privilege query engines.

Defines the query surface adapters (HTTP dependencies, CLI, templates) rely
on. PrivilegeContext implements it; a test double or a remote-backed engine
can implement it too via structural subtyping, without inheriting from our
code.
"""

from __future__ import annotations

__all__ = [
    "PrivilegeQueryProtocol",
]

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from privileged.pdp.model import PrivilegeRule


@runtime_checkable
class PrivilegeQueryProtocol(Protocol):
    """Protocol for privilege query engines.

    Thread-safety:
    - all methods must be safe for concurrent calls
    - None action or subject must evaluate to "not allowed", never raise
    """

    @property
    def rules(self) -> tuple["PrivilegeRule", ...]:
        """Rules the engine evaluates, in insertion order."""
        ...

    def allowed(self, action: str | None, subject: str | None, qualifier: str | None = None) -> bool:
        """Check if the action is allowed on the subject and qualifier."""
        ...

    def forbidden(self, action: str | None, subject: str | None, qualifier: str | None = None) -> bool:
        """Check if the action is not allowed."""
        ...

    def match_rules(
        self,
        action: str | None,
        subject: str | None,
        qualifier: str | None = None,
    ) -> list["PrivilegeRule"]:
        """Get all rules matching the query, in insertion order."""
        ...
