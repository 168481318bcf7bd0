"""Alias match types.

An alias substitutes for exactly one rule field. The match type says which.
"""

from __future__ import annotations

__all__ = ["PrivilegeMatch"]

from enum import Enum


class PrivilegeMatch(str, Enum):
    """Rule field an alias can stand in for.

    Inherits from str for easy serialization and comparison. Parsing is
    case-insensitive so "Action" and "action" both load. Ordinals 0, 1 and
    2 (as ints or digit strings) load as SUBJECT, ACTION and QUALIFIER, the
    numeric form other serializers emit. Output is always the name.

    Attributes:
        SUBJECT: Alias expands to subjects (e.g., resource or entity types).
        ACTION: Alias expands to actions (e.g., read, write, delete).
        QUALIFIER: Alias expands to qualifiers (e.g., field names).
    """

    SUBJECT = "subject"
    ACTION = "action"
    QUALIFIER = "qualifier"

    @classmethod
    def _missing_(cls, value: object) -> "PrivilegeMatch | None":
        if isinstance(value, str):
            text = value.strip().lower()
            if text.isdigit():
                return cls._from_ordinal(int(text))
            for member in cls:
                if member.value == text:
                    return member
        elif isinstance(value, int) and not isinstance(value, bool):
            return cls._from_ordinal(value)
        return None

    @classmethod
    def _from_ordinal(cls, ordinal: int) -> "PrivilegeMatch | None":
        members = list(cls)
        if 0 <= ordinal < len(members):
            return members[ordinal]
        return None
