"""Fluent builder for privilege contexts.

Example:
    context = (
        PrivilegeBuilder()
        .alias("Manage", ["Create", "Update", "Delete"], PrivilegeMatch.ACTION)
        .allow("Manage", "Project")
        .allow("Read", "User")
        .allow("Update", "User", ["Profile", "Settings"])
        .forbid("Delete", "User")
        .build()
    )

`allow` and `forbid` accept one name or an iterable of names for both
actions and subjects; every (action, subject) pair becomes one rule, actions
in the outer loop. Rules are kept in call order and NOT de-duplicated;
`merge` is the only operation that skips rules and aliases already present.

A builder is single-threaded configuration-time state. `build()` snapshots
it, so later calls never affect contexts already built.
"""

from __future__ import annotations

__all__ = ["PrivilegeBuilder"]

import logging
from collections.abc import Iterable

from privileged.exceptions import InvalidArgumentError
from privileged.pdp.comparer import StringComparer
from privileged.pdp.context import PrivilegeContext
from privileged.pdp.match import PrivilegeMatch
from privileged.pdp.model import PrivilegeAlias, PrivilegeModel, PrivilegeRule

logger = logging.getLogger(__name__)

# One name or several
Names = str | Iterable[str]


def _expand_names(names: Names | None, argument: str) -> list[str]:
    """Normalize one-or-many names into a validated list.

    Raises:
        InvalidArgumentError: If names is None, or any name is None/blank.
    """
    label = argument.capitalize()
    if names is None:
        raise InvalidArgumentError(f"{label} cannot be None or whitespace.", argument=argument)

    items = [names] if isinstance(names, str) else list(names)
    for item in items:
        if item is None or not isinstance(item, str) or not item.strip():
            raise InvalidArgumentError(f"{label} cannot be None or whitespace.", argument=argument)
    return items


def _expand_qualifiers(qualifiers: Names | None) -> tuple[str, ...] | None:
    if qualifiers is None:
        return None
    items = [qualifiers] if isinstance(qualifiers, str) else list(qualifiers)
    for item in items:
        if item is None or not isinstance(item, str) or not item.strip():
            raise InvalidArgumentError("Qualifier cannot be None or whitespace.", argument="qualifiers")
    return tuple(items)


class PrivilegeBuilder:
    """Incrementally collect rules and aliases, then build a context."""

    def __init__(self) -> None:
        self._rules: list[PrivilegeRule] = []
        self._aliases: list[PrivilegeAlias] = []

    @property
    def rules(self) -> tuple[PrivilegeRule, ...]:
        """Rules collected so far."""
        return tuple(self._rules)

    @property
    def aliases(self) -> tuple[PrivilegeAlias, ...]:
        """Aliases collected so far."""
        return tuple(self._aliases)

    def allow(self, actions: Names, subjects: Names, qualifiers: Names | None = None) -> "PrivilegeBuilder":
        """Add rules allowing actions on subjects.

        Args:
            actions: Action, alias name or ACTION_ALL; or an iterable of them.
            subjects: Subject, alias name or SUBJECT_ALL; or an iterable of them.
            qualifiers: Optional qualifiers scoping the rules. A single string
                is one qualifier.

        Returns:
            The builder for chaining.

        Raises:
            InvalidArgumentError: If any action or subject is None or whitespace.
                Nothing is added in that case.
        """
        return self._add(actions, subjects, qualifiers, denied=None)

    def forbid(self, actions: Names, subjects: Names, qualifiers: Names | None = None) -> "PrivilegeBuilder":
        """Add rules forbidding actions on subjects.

        Same arguments as `allow`. Forbid rules take precedence over allow
        rules regardless of order.
        """
        return self._add(actions, subjects, qualifiers, denied=True)

    def alias(
        self,
        name: str,
        values: Iterable[str],
        type: PrivilegeMatch = PrivilegeMatch.ACTION,
    ) -> "PrivilegeBuilder":
        """Declare an alias usable in rules of the given type.

        Args:
            name: Alias name referenced from rules.
            values: Values the alias expands to (non-empty).
            type: Rule field the alias applies to.

        Returns:
            The builder for chaining.

        Raises:
            InvalidArgumentError: If name is blank, or values is None/empty
                or contains a blank value.
        """
        if name is None or not name.strip():
            raise InvalidArgumentError("Alias name cannot be None or whitespace.", argument="name")
        if values is None:
            raise InvalidArgumentError("Alias values cannot be None.", argument="values")

        items = _expand_names(values, "values")
        if not items:
            raise InvalidArgumentError("Alias values cannot be empty.", argument="values")

        self._aliases.append(PrivilegeAlias(alias=name, values=tuple(items), type=PrivilegeMatch(type)))
        return self

    def merge(self, other: "PrivilegeModel | PrivilegeContext | PrivilegeBuilder") -> "PrivilegeBuilder":
        """Append another rule set's rules and aliases, skipping duplicates.

        A rule or alias is a duplicate when it is structurally equal to one
        already in this builder (or earlier in the merged set).

        Args:
            other: Model, context or builder to merge in.

        Returns:
            The builder for chaining.

        Raises:
            InvalidArgumentError: If other is None.
        """
        if other is None:
            raise InvalidArgumentError("Cannot merge None.", argument="other")

        seen_rules = set(self._rules)
        for rule in other.rules:
            if rule not in seen_rules:
                self._rules.append(rule)
                seen_rules.add(rule)

        seen_aliases = set(self._aliases)
        for alias in other.aliases:
            if alias not in seen_aliases:
                self._aliases.append(alias)
                seen_aliases.add(alias)

        return self

    def build_model(self) -> PrivilegeModel:
        """Snapshot the collected rules and aliases as a model."""
        return PrivilegeModel(rules=tuple(self._rules), aliases=tuple(self._aliases))

    def build(self, comparer: StringComparer | None = None) -> PrivilegeContext:
        """Create a context from the collected rules and aliases.

        Args:
            comparer: String equality policy. Defaults to StringComparer.IGNORE_CASE.

        Returns:
            Immutable PrivilegeContext.
        """
        logger.debug(
            "Building privilege context with %d rules and %d aliases",
            len(self._rules),
            len(self._aliases),
        )
        return PrivilegeContext(tuple(self._rules), tuple(self._aliases), comparer)

    def _add(
        self,
        actions: Names,
        subjects: Names,
        qualifiers: Names | None,
        *,
        denied: bool | None,
    ) -> "PrivilegeBuilder":
        action_list = _expand_names(actions, "action")
        subject_list = _expand_names(subjects, "subject")
        qualifier_tuple = _expand_qualifiers(qualifiers)

        for action in action_list:
            for subject in subject_list:
                self._rules.append(
                    PrivilegeRule(
                        action=action,
                        subject=subject,
                        qualifiers=qualifier_tuple,
                        denied=denied,
                    )
                )
        return self
