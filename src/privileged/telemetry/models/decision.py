"""Pydantic models for decision logs (decisions.jsonl).

The 'time' field is None when an event is created; JsonLineFormatter adds the
timestamp during log serialization, so every logged line carries one.
"""

from __future__ import annotations

__all__ = [
    "DecisionEvent",
    "MatchedRuleLog",
]

from typing import Literal

from pydantic import BaseModel, Field


class MatchedRuleLog(BaseModel):
    """A rule that matched the query, as recorded in the decision log."""

    action: str
    subject: str
    qualifiers: list[str] | None = None
    effect: Literal["allow", "forbid"]


class DecisionEvent(BaseModel):
    """One privilege decision log entry.

    Note: 'time' is None when created, populated by JsonLineFormatter during logging.
    """

    time: str | None = Field(
        None,
        description="ISO 8601 timestamp, added by formatter during serialization",
    )

    event: Literal["privilege_decision"] = "privilege_decision"
    decision: Literal["allow", "deny"]

    # --- query ---
    action: str | None
    subject: str | None
    qualifier: str | None = None

    # --- who asked ---
    principal: str | None = None
    source: str | None = None  # "api", "cli"

    # --- why ---
    matched_rules: list[MatchedRuleLog] = Field(default_factory=list)
    final_rule: str | None = None  # describe() of the deciding rule

    eval_ms: float | None = None
