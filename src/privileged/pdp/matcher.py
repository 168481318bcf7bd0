"""Rule matching for privilege queries.

A rule matches a query (action, subject, qualifier) when ALL of:
- Subject: equal to the query subject, the SUBJECT_ALL wildcard, or the name
  of a SUBJECT alias whose values contain the query subject
- Action: same, with ACTION_ALL and ACTION aliases
- Qualifier: passes when the query has no qualifier or the rule has none;
  otherwise the qualifier must be listed in the rule, or belong to a
  QUALIFIER alias named in the rule

Every string comparison goes through the caller's StringComparer.
Aliases are looked up by name at evaluation time; rules never hold
references to alias objects.
"""

from __future__ import annotations

__all__ = [
    "match_action",
    "match_alias",
    "match_qualifier",
    "match_rule",
    "match_subject",
]

from collections.abc import Iterable, Sequence

from privileged.constants import ACTION_ALL, SUBJECT_ALL
from privileged.pdp.comparer import StringComparer
from privileged.pdp.match import PrivilegeMatch
from privileged.pdp.model import PrivilegeAlias, PrivilegeRule


def match_alias(
    names: str | Iterable[str],
    value: str,
    match_type: PrivilegeMatch,
    aliases: Sequence[PrivilegeAlias],
    comparer: StringComparer,
) -> bool:
    """Check if value belongs to an alias of the given type named in names.

    Args:
        names: Alias name, or several candidate names (rule qualifiers).
        value: Literal value from the query.
        match_type: Only aliases of this type are considered.
        aliases: Aliases declared on the context.
        comparer: Equality policy for names and values.

    Returns:
        True if some alias of match_type named in names lists value.
        False if there are no aliases.
    """
    if not aliases:
        return False

    candidates = [names] if isinstance(names, str) else list(names)

    return any(
        alias.type == match_type
        and comparer.contains(candidates, alias.alias)
        and comparer.contains(alias.values, value)
        for alias in aliases
    )


def match_subject(
    rule: PrivilegeRule,
    subject: str,
    aliases: Sequence[PrivilegeAlias],
    comparer: StringComparer,
) -> bool:
    """Match the rule's subject against the query subject.

    Returns:
        True on literal match, SUBJECT_ALL wildcard, or SUBJECT alias expansion.
    """
    return (
        comparer.equals(rule.subject, subject)
        or comparer.equals(rule.subject, SUBJECT_ALL)
        or match_alias(rule.subject, subject, PrivilegeMatch.SUBJECT, aliases, comparer)
    )


def match_action(
    rule: PrivilegeRule,
    action: str,
    aliases: Sequence[PrivilegeAlias],
    comparer: StringComparer,
) -> bool:
    """Match the rule's action against the query action.

    Returns:
        True on literal match, ACTION_ALL wildcard, or ACTION alias expansion.
    """
    return (
        comparer.equals(rule.action, action)
        or comparer.equals(rule.action, ACTION_ALL)
        or match_alias(rule.action, action, PrivilegeMatch.ACTION, aliases, comparer)
    )


def match_qualifier(
    rule: PrivilegeRule,
    qualifier: str | None,
    aliases: Sequence[PrivilegeAlias],
    comparer: StringComparer,
) -> bool:
    """Match the rule's qualifiers against the query qualifier.

    An unscoped rule or an unscoped query always passes. Note the second
    case: asking "may I read Post?" is answered by a rule scoped to
    ["title"], since some part of Post is readable.

    Returns:
        True if unscoped, or the qualifier is listed directly or through a
        QUALIFIER alias named in the rule's qualifiers.
    """
    if qualifier is None or not rule.qualifiers:
        return True

    return comparer.contains(rule.qualifiers, qualifier) or match_alias(
        rule.qualifiers, qualifier, PrivilegeMatch.QUALIFIER, aliases, comparer
    )


def match_rule(
    rule: PrivilegeRule,
    action: str,
    subject: str,
    qualifier: str | None,
    aliases: Sequence[PrivilegeAlias],
    comparer: StringComparer,
) -> bool:
    """Check if a rule matches the query.

    All three clauses use AND logic. Subject is checked first since it is
    the most selective field in typical rule sets.

    Args:
        rule: Candidate rule.
        action: Query action.
        subject: Query subject.
        qualifier: Query qualifier, or None for an unscoped query.
        aliases: Aliases declared on the context.
        comparer: Equality policy.

    Returns:
        True if subject, action and qualifier all match.
    """
    return (
        match_subject(rule, subject, aliases, comparer)
        and match_action(rule, action, aliases, comparer)
        and match_qualifier(rule, qualifier, aliases, comparer)
    )
