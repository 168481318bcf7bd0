"""Decision logging for privilege enforcement.

Writes one DecisionEvent per authorization decision as JSONL, via a logger
created with setup_jsonl_logger. Used by the FastAPI adapter and the CLI.
"""

from __future__ import annotations

__all__ = [
    "create_decision_logger",
    "DecisionEventLogger",
]

import logging
import time
from pathlib import Path

from privileged.pdp.context import PrivilegeContext, decide
from privileged.pdp.model import PrivilegeRule
from privileged.telemetry.models.decision import DecisionEvent, MatchedRuleLog
from privileged.utils.logging.jsonl import setup_jsonl_logger

DECISION_LOGGER_NAME = "privileged.audit.decisions"


def create_decision_logger(log_path: Path) -> logging.Logger:
    """Create logger for decision events.

    Args:
        log_path: Path to the decisions JSONL file.

    Returns:
        Configured logger instance.
    """
    return setup_jsonl_logger(DECISION_LOGGER_NAME, log_path, log_level=logging.INFO)


def _final_rule(allowed: bool, matched: list[PrivilegeRule]) -> str | None:
    """Describe the rule that decided the outcome.

    A deny is decided by the first forbid rule, or by nothing (default deny).
    An allow is decided by the first allow rule.
    """
    for rule in matched:
        if rule.is_forbid != allowed:
            return rule.describe()
    return None


class DecisionEventLogger:
    """Evaluates queries and logs each decision as a DecisionEvent.

    Decision logs are written at INFO regardless of the library log level.
    """

    def __init__(self, *, logger: logging.Logger, source: str | None = None) -> None:
        """Initialize decision event logger.

        Args:
            logger: Logger for decision events (see create_decision_logger).
            source: Where decisions come from, e.g. "api" or "cli".
        """
        self._logger = logger
        self._source = source

    def log(
        self,
        *,
        action: str | None,
        subject: str | None,
        qualifier: str | None,
        allowed: bool,
        matched_rules: list[PrivilegeRule],
        principal: str | None = None,
        eval_ms: float | None = None,
    ) -> DecisionEvent:
        """Log a decision that has already been made.

        Returns:
            The event that was logged.
        """
        event = DecisionEvent(
            decision="allow" if allowed else "deny",
            action=action,
            subject=subject,
            qualifier=qualifier,
            principal=principal,
            source=self._source,
            matched_rules=[
                MatchedRuleLog(
                    action=rule.action,
                    subject=rule.subject,
                    qualifiers=list(rule.qualifiers) if rule.qualifiers else None,
                    effect="forbid" if rule.is_forbid else "allow",
                )
                for rule in matched_rules
            ],
            final_rule=_final_rule(allowed, matched_rules),
            eval_ms=round(eval_ms, 3) if eval_ms is not None else None,
        )
        self._logger.info(event.model_dump(mode="json", exclude={"time"}, exclude_none=True))
        return event

    def check(
        self,
        context: PrivilegeContext,
        action: str | None,
        subject: str | None,
        qualifier: str | None = None,
        *,
        principal: str | None = None,
    ) -> bool:
        """Evaluate a query against the context and log the decision.

        Returns:
            The same result as context.allowed(action, subject, qualifier).
        """
        start = time.perf_counter()
        matched = context.match_rules(action, subject, qualifier)
        allowed = decide(matched)
        eval_ms = (time.perf_counter() - start) * 1000

        self.log(
            action=action,
            subject=subject,
            qualifier=qualifier,
            allowed=allowed,
            matched_rules=matched,
            principal=principal,
            eval_ms=eval_ms,
        )
        return allowed
