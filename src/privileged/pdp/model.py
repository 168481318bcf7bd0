"""Privilege models: rules, aliases and the serializable rule set.

Model structure:
    PrivilegeModel
    ├── rules: tuple[PrivilegeRule, ...]   (ordered, duplicates allowed)
    │   └── PrivilegeRule
    │       ├── action: "read" | alias name | "*"
    │       ├── subject: "Post" | alias name | "*"
    │       ├── qualifiers: ("title", ...) | None   (None = unscoped)
    │       └── denied: True | None                 (True = forbid rule)
    └── aliases: tuple[PrivilegeAlias, ...]
        └── PrivilegeAlias
            ├── alias: "modify"
            ├── values: ("create", "update", "delete")
            └── type: "action" | "subject" | "qualifier"

All models are frozen. Equality is structural (field by field, qualifier order
matters), which is what `PrivilegeBuilder.merge` de-duplicates on.

JSON shape (None fields omitted):
    {"action": "read", "subject": "Post", "qualifiers": ["title"], "denied": true}
    {"alias": "modify", "values": ["create", "update"], "type": "action"}
"""

from __future__ import annotations

__all__ = [
    "PrivilegeAlias",
    "PrivilegeModel",
    "PrivilegeRule",
]

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from privileged.pdp.match import PrivilegeMatch


def _require_text(value: str, field: str) -> str:
    if not value or not value.strip():
        raise ValueError(f"{field} cannot be empty or whitespace-only")
    return value


class PrivilegeRule(BaseModel):
    """A single allow or forbid rule.

    Attributes:
        action: Action to match, an action alias name, or ACTION_ALL.
        subject: Subject to match, a subject alias name, or SUBJECT_ALL.
        qualifiers: Qualifiers (e.g., field names) the rule is scoped to, may
            include qualifier alias names. None or empty means unscoped.
        denied: True makes this a forbid rule. None/False is an allow rule.
    """

    action: str
    subject: str
    qualifiers: tuple[str, ...] | None = None
    denied: bool | None = None

    model_config = ConfigDict(frozen=True)

    @field_validator("action", "subject", mode="after")
    @classmethod
    def reject_empty(cls, v: str, info: ValidationInfo) -> str:
        """Reject empty or whitespace-only action and subject."""
        return _require_text(v, info.field_name.capitalize())

    @field_validator("qualifiers", mode="after")
    @classmethod
    def reject_empty_qualifiers(cls, v: tuple[str, ...] | None) -> tuple[str, ...] | None:
        """Reject empty or whitespace-only qualifier entries.

        An empty entry would silently never match.
        """
        if v is None:
            return v
        for item in v:
            _require_text(item, "Qualifier")
        return v

    @property
    def is_forbid(self) -> bool:
        """True if this rule forbids rather than allows."""
        return self.denied is True

    @property
    def is_scoped(self) -> bool:
        """True if this rule only applies to specific qualifiers."""
        return bool(self.qualifiers)

    def describe(self) -> str:
        """Short human-readable form, e.g. 'forbid publish Post'."""
        verb = "forbid" if self.is_forbid else "allow"
        text = f"{verb} {self.action} {self.subject}"
        if self.qualifiers:
            text += f" [{', '.join(self.qualifiers)}]"
        return text


class PrivilegeAlias(BaseModel):
    """A named group of values usable in place of a rule field.

    The same alias name may be declared once per match type without conflict;
    aliases are told apart by (alias, type).

    Attributes:
        alias: Name used inside rules (e.g., "modify").
        values: Literal values the alias expands to (non-empty).
        type: Rule field the alias applies to. Defaults to ACTION.
    """

    alias: str
    values: tuple[str, ...] = Field(min_length=1)
    type: PrivilegeMatch = PrivilegeMatch.ACTION

    model_config = ConfigDict(frozen=True)

    @field_validator("type", mode="before")
    @classmethod
    def parse_match_type(cls, v: Any) -> Any:
        """Accept names in any case and the 0/1/2 ordinals."""
        if isinstance(v, (str, int)) and not isinstance(v, (bool, PrivilegeMatch)):
            try:
                return PrivilegeMatch(v)
            except ValueError:
                return v
        return v

    @field_validator("alias", mode="after")
    @classmethod
    def reject_empty_alias(cls, v: str) -> str:
        """Reject empty or whitespace-only alias names."""
        return _require_text(v, "Alias")

    @field_validator("values", mode="after")
    @classmethod
    def reject_empty_values(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        """Reject empty or whitespace-only alias values."""
        for item in v:
            _require_text(item, "Alias value")
        return v


class PrivilegeModel(BaseModel):
    """Serializable rule set: ordered rules plus aliases.

    This is the wire and file form of a privilege context. Build a
    `PrivilegeContext` from it with `PrivilegeContext.from_model`.

    Attributes:
        rules: Rules in evaluation order.
        aliases: Aliases referenced by name from rules.
    """

    rules: tuple[PrivilegeRule, ...] = ()
    aliases: tuple[PrivilegeAlias, ...] = ()

    model_config = ConfigDict(frozen=True)
