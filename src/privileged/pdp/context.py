"""Privilege context - evaluate queries against an immutable rule set.

This module provides the PrivilegeContext class that answers whether an
(action, subject, qualifier) query is allowed.

Evaluation flow:
1. Missing action or subject → not allowed (no match attempted)
2. Collect all matching rules (see matcher.py)
3. Apply combining algorithm: FORBID > ALLOW
4. No match → not allowed (default deny)

Combining algorithm:
    allowed = (any matching rule allows) AND (no matching rule forbids)

The result does not depend on rule order. A forbid rule cannot be
overridden by any allow rule for the same query, including a more specific
one. Rule order only affects the order of `match_rules` output.

Thread-safety:
    A context is immutable after construction (tuples of frozen models, no
    setters) and queries have no side effects other than debug logging, so
    one instance can be shared by any number of threads or requests.
    To change rules, build a new context.
"""

from __future__ import annotations

__all__ = ["PrivilegeContext", "decide"]

import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from privileged.exceptions import InvalidArgumentError, PrivilegeDeniedError
from privileged.pdp.comparer import StringComparer
from privileged.pdp.matcher import match_rule
from privileged.pdp.model import PrivilegeAlias, PrivilegeModel, PrivilegeRule

logger = logging.getLogger(__name__)


def _coerce_rule(rule: PrivilegeRule | Mapping[str, Any]) -> PrivilegeRule:
    if isinstance(rule, PrivilegeRule):
        return rule
    return PrivilegeRule.model_validate(rule)


def _coerce_alias(alias: PrivilegeAlias | Mapping[str, Any]) -> PrivilegeAlias:
    if isinstance(alias, PrivilegeAlias):
        return alias
    return PrivilegeAlias.model_validate(alias)


def _require_action(action: str | None) -> str:
    if action is None or not action.strip():
        raise InvalidArgumentError("Action cannot be None or whitespace.", argument="action")
    return action


def decide(matched: Sequence[PrivilegeRule]) -> bool:
    """Fold the rules matching one query into a decision.

    Allowed iff at least one rule allows and none forbids.
    """
    # FORBID > ALLOW, no match = deny
    return any(not rule.is_forbid for rule in matched) and not any(rule.is_forbid for rule in matched)


def _require_subjects(subjects: str | Iterable[str | None] | None) -> Iterable[str | None]:
    if subjects is None:
        raise InvalidArgumentError("Subjects cannot be None.", argument="subjects")
    # A bare string is one subject, not its characters
    if isinstance(subjects, str):
        return (subjects,)
    return subjects


class PrivilegeContext:
    """Immutable rule store and privilege evaluation engine.

    Supports:
    - Allow and forbid rules, forbid taking precedence
    - Alias expansion for actions, subjects and qualifiers
    - Wildcard matching with ACTION_ALL / SUBJECT_ALL ("*")
    - Field-level scoping through qualifiers
    - A configurable string comparer (case-insensitive by default)

    Example:
        context = PrivilegeContext(
            [
                PrivilegeRule(action="read", subject="Post"),
                PrivilegeRule(action="write", subject="Post", qualifiers=("title",)),
                PrivilegeRule(action="delete", subject="Post", denied=True),
            ]
        )
        context.allowed("read", "Post")            # True
        context.allowed("write", "Post", "title")  # True
        context.allowed("delete", "Post")          # False

    Attributes:
        rules: Rules in insertion order.
        aliases: Declared aliases.
        comparer: Equality policy used for every comparison.
    """

    __slots__ = ("_rules", "_aliases", "_comparer")

    def __init__(
        self,
        rules: Iterable[PrivilegeRule | Mapping[str, Any]],
        aliases: Iterable[PrivilegeAlias | Mapping[str, Any]] | None = None,
        comparer: StringComparer | None = None,
    ) -> None:
        """Initialize the context.

        Args:
            rules: Rules to evaluate. Required; an empty collection denies everything.
                Mappings are validated into PrivilegeRule.
            aliases: Aliases referenced by rules. Defaults to none.
            comparer: String equality policy. Defaults to StringComparer.IGNORE_CASE.

        Raises:
            InvalidArgumentError: If rules is None.
            pydantic.ValidationError: If a mapping is not a valid rule or alias.
        """
        if rules is None:
            raise InvalidArgumentError("Rules cannot be None.", argument="rules")

        self._rules: tuple[PrivilegeRule, ...] = tuple(_coerce_rule(r) for r in rules)
        self._aliases: tuple[PrivilegeAlias, ...] = tuple(_coerce_alias(a) for a in aliases or ())
        self._comparer = comparer or StringComparer.IGNORE_CASE

    @classmethod
    def from_model(cls, model: PrivilegeModel, comparer: StringComparer | None = None) -> "PrivilegeContext":
        """Create a context from a privilege model.

        Args:
            model: Model holding rules and aliases.
            comparer: String equality policy. Defaults to StringComparer.IGNORE_CASE.

        Returns:
            New PrivilegeContext over the model's rules and aliases.
        """
        if model is None:
            raise InvalidArgumentError("Model cannot be None.", argument="model")
        return cls(model.rules, model.aliases, comparer)

    @classmethod
    def empty(cls, comparer: StringComparer | None = None) -> "PrivilegeContext":
        """Create a context with no rules (denies everything)."""
        return cls((), comparer=comparer)

    # -------------------------------------------------------------------------
    # Rule store
    # -------------------------------------------------------------------------

    @property
    def rules(self) -> tuple[PrivilegeRule, ...]:
        """Rules in insertion order."""
        return self._rules

    @property
    def aliases(self) -> tuple[PrivilegeAlias, ...]:
        """Declared aliases."""
        return self._aliases

    @property
    def comparer(self) -> StringComparer:
        """String equality policy."""
        return self._comparer

    @property
    def rule_count(self) -> int:
        """Number of rules, duplicates included."""
        return len(self._rules)

    def to_model(self) -> PrivilegeModel:
        """Return the serializable model for this context.

        The comparer is not part of the model; pass it again to
        `from_model` when restoring.
        """
        return PrivilegeModel(rules=self._rules, aliases=self._aliases)

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def match_rules(
        self,
        action: str | None,
        subject: str | None,
        qualifier: str | None = None,
    ) -> list[PrivilegeRule]:
        """Find all rules that match the query.

        This is the introspection primitive `allowed` is built on, useful to
        explain a decision ("forbidden by rule X").

        Args:
            action: Action to match (e.g., "read").
            subject: Subject to match (e.g., "Post").
            qualifier: Optional qualifier (e.g., a field name).

        Returns:
            Matching rules in insertion order. Empty if action or subject is None.
        """
        if action is None or subject is None:
            return []

        return [
            rule
            for rule in self._rules
            if match_rule(rule, action, subject, qualifier, self._aliases, self._comparer)
        ]

    def allowed(
        self,
        action: str | None,
        subject: str | None,
        qualifier: str | None = None,
    ) -> bool:
        """Check if the action is allowed on the subject and qualifier.

        Args:
            action: Action to authorize (e.g., "read", "update").
            subject: Subject to authorize (e.g., "Post").
            qualifier: Optional qualifier (e.g., a field name).

        Returns:
            True if at least one matching rule allows and none forbids.
            False if action or subject is None, or nothing matches.
        """
        if action is None or subject is None:
            return False

        matched = self.match_rules(action, subject, qualifier)

        granted = decide(matched)

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                {
                    "event": "privilege_evaluated",
                    "action": action,
                    "subject": subject,
                    "qualifier": qualifier,
                    "allowed": granted,
                    "matched": [rule.describe() for rule in matched],
                }
            )

        return granted

    def forbidden(
        self,
        action: str | None,
        subject: str | None,
        qualifier: str | None = None,
    ) -> bool:
        """Check if the action is NOT allowed.

        This is the plain negation of `allowed`: a query with no matching
        rules is reported as forbidden too, not only explicit forbids.
        """
        return not self.allowed(action, subject, qualifier)

    def demand(
        self,
        action: str | None,
        subject: str | None,
        qualifier: str | None = None,
    ) -> None:
        """Raise if the action is not allowed.

        Raises:
            PrivilegeDeniedError: With the matched rules, if not allowed.
        """
        if not self.allowed(action, subject, qualifier):
            raise PrivilegeDeniedError(
                action,
                subject,
                qualifier,
                matched_rules=self.match_rules(action, subject, qualifier),
            )

    # -------------------------------------------------------------------------
    # Bulk queries
    # -------------------------------------------------------------------------
    # Each subject is checked with no qualifier. Unlike single queries, these
    # are convenience wrappers and reject bad arguments instead of denying.

    def any_allowed(self, action: str, subjects: str | Iterable[str | None]) -> bool:
        """Check if the action is allowed on at least one subject.

        Short-circuits on the first allowed subject.

        Args:
            action: Action to authorize.
            subjects: Subjects to check. A single string is one subject.

        Returns:
            True if any subject is allowed. False for no subjects.

        Raises:
            InvalidArgumentError: If action is None/blank or subjects is None.
        """
        _require_action(action)
        return any(self.allowed(action, subject) for subject in _require_subjects(subjects))

    def all_allowed(self, action: str, subjects: str | Iterable[str | None]) -> bool:
        """Check if the action is allowed on every subject.

        Short-circuits on the first subject that is not allowed.

        Returns:
            True if all subjects are allowed, including for no subjects.

        Raises:
            InvalidArgumentError: If action is None/blank or subjects is None.
        """
        _require_action(action)
        return all(self.allowed(action, subject) for subject in _require_subjects(subjects))

    def none_allowed(self, action: str, subjects: str | Iterable[str | None]) -> bool:
        """Check if the action is allowed on none of the subjects.

        The inverse of `any_allowed`. Short-circuits on the first allowed subject.

        Returns:
            True if no subject is allowed, including for no subjects.

        Raises:
            InvalidArgumentError: If action is None/blank or subjects is None.
        """
        _require_action(action)
        return not any(self.allowed(action, subject) for subject in _require_subjects(subjects))

    def __repr__(self) -> str:
        return (
            f"PrivilegeContext(rules={len(self._rules)}, aliases={len(self._aliases)}, "
            f"comparer={self._comparer.name!r})"
        )
