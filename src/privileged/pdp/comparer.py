"""String equality policies for rule matching.

Every comparison the engine makes (rule values, wildcard sentinels, alias
names, alias values, qualifiers) goes through one StringComparer, so a
context is either case-insensitive throughout or case-sensitive throughout.

Built-in comparers:
- IGNORE_CASE: Unicode case folding (default)
- ORDINAL: exact, case-sensitive comparison
"""

from __future__ import annotations

__all__ = [
    "ComparerName",
    "StringComparer",
]

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import ClassVar, Literal

ComparerName = Literal["ignore_case", "ordinal"]


def _identity(value: str) -> str:
    return value


@dataclass(frozen=True, slots=True)
class StringComparer:
    """Equality policy applied to every string comparison.

    Two strings are equal iff their normalized forms are equal.

    Attributes:
        name: Identifier used in configuration ("ignore_case", "ordinal").
        normalize: Maps a string to its comparison key.
    """

    name: str
    normalize: Callable[[str], str]

    IGNORE_CASE: ClassVar["StringComparer"]
    ORDINAL: ClassVar["StringComparer"]

    def equals(self, left: str | None, right: str | None) -> bool:
        """Compare two strings under this policy.

        None only equals None.
        """
        if left is None or right is None:
            return left is right
        return self.normalize(left) == self.normalize(right)

    def contains(self, values: Iterable[str] | None, item: str) -> bool:
        """Check if any of values equals item under this policy."""
        if not values:
            return False
        key = self.normalize(item)
        return any(self.normalize(v) == key for v in values)

    @classmethod
    def from_name(cls, name: str) -> "StringComparer":
        """Look up a built-in comparer by configuration name.

        Args:
            name: "ignore_case" or "ordinal" (case-insensitive).

        Returns:
            The matching built-in comparer.

        Raises:
            ValueError: If the name is unknown.
        """
        comparers = {c.name: c for c in (cls.IGNORE_CASE, cls.ORDINAL)}
        try:
            return comparers[name.strip().lower()]
        except KeyError:
            raise ValueError(
                f"Unknown string comparer '{name}'. Expected one of: {', '.join(sorted(comparers))}"
            ) from None

    def __repr__(self) -> str:
        return f"StringComparer({self.name!r})"


StringComparer.IGNORE_CASE = StringComparer("ignore_case", str.casefold)
StringComparer.ORDINAL = StringComparer("ordinal", _identity)
