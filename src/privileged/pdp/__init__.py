"""Policy Decision Point (PDP) - privilege evaluation engine.

This package holds the rule store and the matching engine. It is stateless
and side-effect free: no I/O, no caching, no framework code. Loading rule
files lives in utils/privileges, resolving contexts per caller in providers/,
and enforcement in api/ and cli/.

Structure:
    match.py       - PrivilegeMatch enum (alias types)
    comparer.py    - StringComparer equality policies
    model.py       - PrivilegeRule, PrivilegeAlias, PrivilegeModel
    matcher.py     - Rule matching predicates
    context.py     - PrivilegeContext (rule store + evaluation)
    builder.py     - PrivilegeBuilder
    protocol.py    - PrivilegeQueryProtocol
"""

from privileged.pdp.builder import PrivilegeBuilder
from privileged.pdp.comparer import ComparerName, StringComparer
from privileged.pdp.context import PrivilegeContext
from privileged.pdp.match import PrivilegeMatch
from privileged.pdp.model import PrivilegeAlias, PrivilegeModel, PrivilegeRule
from privileged.pdp.protocol import PrivilegeQueryProtocol

__all__ = [
    # Engine
    "PrivilegeContext",
    "PrivilegeQueryProtocol",
    # Builder
    "PrivilegeBuilder",
    # Models
    "PrivilegeAlias",
    "PrivilegeMatch",
    "PrivilegeModel",
    "PrivilegeRule",
    # Comparison
    "ComparerName",
    "StringComparer",
]
