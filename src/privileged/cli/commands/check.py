"""Query commands: check and explain.

Both load a model file, build a context and evaluate one query. When the
group's --log-file is set, the decision is also written to that JSONL file.
"""

from __future__ import annotations

__all__ = ["check", "explain"]

import sys
from pathlib import Path

import click

from privileged.pdp.comparer import StringComparer
from privileged.pdp.context import PrivilegeContext
from privileged.telemetry.decision_logger import DecisionEventLogger, create_decision_logger
from privileged.utils.privileges import load_model

from ..styling import style_decision, style_dim, style_effect, style_error, style_header

# Exit codes for check
EXIT_ALLOWED = 0
EXIT_ERROR = 1
EXIT_FORBIDDEN = 2


def _query_arguments(func):
    func = click.option(
        "--ordinal",
        is_flag=True,
        help="Compare names case-sensitively (default: ignore case)",
    )(func)
    func = click.argument("qualifier", required=False)(func)
    func = click.argument("subject")(func)
    func = click.argument("action")(func)
    func = click.argument(
        "model_path",
        metavar="PATH",
        type=click.Path(dir_okay=False, path_type=Path),
    )(func)
    return func


def _build_context(model_path: Path, ordinal: bool) -> PrivilegeContext:
    try:
        model = load_model(model_path)
    except (OSError, ValueError) as e:
        click.echo(style_error(str(e)), err=True)
        sys.exit(EXIT_ERROR)

    comparer = StringComparer.ORDINAL if ordinal else StringComparer.IGNORE_CASE
    return PrivilegeContext.from_model(model, comparer)


def _decision_logger(ctx: click.Context) -> DecisionEventLogger | None:
    log_file: Path | None = (ctx.obj or {}).get("log_file")
    if log_file is None:
        return None
    try:
        return DecisionEventLogger(logger=create_decision_logger(log_file), source="cli")
    except OSError as e:
        click.echo(style_error(f"Cannot open log file {log_file}: {e}"), err=True)
        sys.exit(EXIT_ERROR)


def _evaluate(
    ctx: click.Context,
    context: PrivilegeContext,
    action: str,
    subject: str,
    qualifier: str | None,
) -> bool:
    decision_logger = _decision_logger(ctx)
    if decision_logger is not None:
        return decision_logger.check(context, action, subject, qualifier)
    return context.allowed(action, subject, qualifier)


def _describe_query(action: str, subject: str, qualifier: str | None) -> str:
    target = f"{subject}.{qualifier}" if qualifier else subject
    return f"{action} {target}"


@click.command("check")
@_query_arguments
@click.pass_context
def check(
    ctx: click.Context,
    model_path: Path,
    action: str,
    subject: str,
    qualifier: str | None,
    ordinal: bool,
) -> None:
    """Check whether ACTION is allowed on SUBJECT [QUALIFIER].

    Exit codes:
        0: Allowed
        1: Error (model missing or invalid)
        2: Forbidden
    """
    context = _build_context(model_path, ordinal)
    allowed = _evaluate(ctx, context, action, subject, qualifier)

    click.echo(f"{_describe_query(action, subject, qualifier)}: {style_decision(allowed)}")
    sys.exit(EXIT_ALLOWED if allowed else EXIT_FORBIDDEN)


@click.command("explain")
@_query_arguments
@click.pass_context
def explain(
    ctx: click.Context,
    model_path: Path,
    action: str,
    subject: str,
    qualifier: str | None,
    ordinal: bool,
) -> None:
    """Show the rules matching a query and the resulting decision.

    A query with no matching rules is forbidden (default deny). Any matching
    forbid rule makes it forbidden regardless of allow rules.
    """
    context = _build_context(model_path, ordinal)
    matched = context.match_rules(action, subject, qualifier)
    allowed = _evaluate(ctx, context, action, subject, qualifier)

    click.echo(style_header("Matching rules"))
    if not matched:
        click.echo(style_dim("  (no rules match)"))
    for rule in matched:
        scope = f" [{', '.join(rule.qualifiers)}]" if rule.qualifiers else ""
        click.echo(f"  {style_effect(rule.is_forbid)} {rule.action} {rule.subject}{scope}")

    click.echo()
    click.echo(f"Decision: {_describe_query(action, subject, qualifier)} is {style_decision(allowed)}")
    if not allowed:
        forbids = [rule for rule in matched if rule.is_forbid]
        if forbids:
            click.echo(style_dim(f"  forbidden by: {forbids[0].describe()}"))
        else:
            click.echo(style_dim("  no rule allows this query"))
