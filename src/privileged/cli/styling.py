"""Terminal styling for privileged output.

Colors carry meaning: green is allowed or ok, red is forbidden or failed,
yellow is a warning, cyan marks structure. Click drops the styling when
output is not a terminal.
"""

from __future__ import annotations

__all__ = [
    "style_decision",
    "style_dim",
    "style_effect",
    "style_error",
    "style_header",
    "style_label",
    "style_success",
    "style_warning",
]

import click

_ALLOW = {"fg": "green", "bold": True}
_DENY = {"fg": "red", "bold": True}
_STRUCTURE = {"fg": "cyan", "bold": True}


def style_header(title: str) -> str:
    """``--- title ---`` in cyan, e.g. above the matching rules in explain."""
    return click.style(f"--- {title} ---", **_STRUCTURE)


def style_label(label: str) -> str:
    """``label:`` in cyan, followed by a value on the same line."""
    return click.style(f"{label}:", **_STRUCTURE)


def style_success(message: str) -> str:
    return click.style(f"✓ {message}", fg="green")


def style_error(message: str) -> str:
    return click.style(f"✗ {message}", fg="red")


def style_warning(message: str) -> str:
    return click.style(f"! {message}", fg="yellow")


def style_dim(message: str) -> str:
    """Secondary text: empty states and explanations."""
    return click.style(message, dim=True)


def style_effect(is_forbid: bool) -> str:
    """Rule effect as FORBID or ALLOW."""
    return click.style("FORBID", **_DENY) if is_forbid else click.style("ALLOW", **_ALLOW)


def style_decision(allowed: bool) -> str:
    """Query outcome as allowed or forbidden."""
    return click.style("allowed", **_ALLOW) if allowed else click.style("forbidden", **_DENY)
