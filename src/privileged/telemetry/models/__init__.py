"""Pydantic models for telemetry logs."""

from privileged.telemetry.models.decision import DecisionEvent, MatchedRuleLog

__all__ = [
    "DecisionEvent",
    "MatchedRuleLog",
]
