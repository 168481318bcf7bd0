"""Privilege model file commands: validate, show, init, path."""

from __future__ import annotations

__all__ = ["init", "path", "show", "validate"]

import sys
from pathlib import Path

import click

from privileged.pdp.model import PrivilegeModel
from privileged.utils.privileges import (
    create_example_model_file,
    get_model_path,
    load_model,
    model_to_json,
)

from ..styling import style_dim, style_effect, style_error, style_label, style_success, style_warning

_PATH_ARGUMENT = click.argument(
    "model_path",
    metavar="PATH",
    required=False,
    type=click.Path(dir_okay=False, path_type=Path),
)


def _plural(count: int, singular: str, plural: str | None = None) -> str:
    noun = singular if count == 1 else (plural or f"{singular}s")
    return f"{count} {noun}"


def _load_or_exit(model_path: Path) -> PrivilegeModel:
    try:
        return load_model(model_path)
    except (OSError, ValueError) as e:
        click.echo(style_error(str(e)), err=True)
        sys.exit(1)


@click.command("validate")
@_PATH_ARGUMENT
def validate(model_path: Path | None) -> None:
    """Validate a privilege model file.

    Checks JSON syntax and the rule/alias schema. PATH defaults to the
    model file in the app directory.

    Exit codes:
        0: Model is valid
        1: Model is invalid or not found
    """
    model_path = model_path or get_model_path()
    model = _load_or_exit(model_path)

    click.echo(style_success(f"Privilege model valid: {model_path}"))
    click.echo(f"  {_plural(len(model.rules), 'rule')} defined")
    click.echo(f"  {_plural(len(model.aliases), 'alias', 'aliases')} defined")


@click.command("show")
@_PATH_ARGUMENT
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def show(model_path: Path | None, as_json: bool) -> None:
    """Display a privilege model.

    Lists rules in evaluation order and the declared aliases.
    """
    model_path = model_path or get_model_path()
    model = _load_or_exit(model_path)

    if as_json:
        click.echo(model_to_json(model))
        return

    click.echo(style_label("Privilege model") + f" {model_path}")
    click.echo(f"Rules: {len(model.rules)}")
    click.echo(f"Aliases: {len(model.aliases)}")
    click.echo()

    if not model.rules:
        click.echo(style_dim("  (no rules defined)"))
    for i, rule in enumerate(model.rules, 1):
        scope = f" [{', '.join(rule.qualifiers)}]" if rule.qualifiers else ""
        click.echo(f"  {i:>3}. {style_effect(rule.is_forbid)} {rule.action} {rule.subject}{scope}")

    if model.aliases:
        click.echo()
        click.echo(style_label("Aliases"))
        for alias in model.aliases:
            click.echo(f"  {alias.alias} ({alias.type.value}): {', '.join(alias.values)}")


@click.command("init")
@_PATH_ARGUMENT
def init(model_path: Path | None) -> None:
    """Create an example privilege model file.

    Refuses to overwrite an existing file.
    """
    model_path = model_path or get_model_path()

    try:
        model = create_example_model_file(model_path)
    except FileExistsError as e:
        click.echo(style_error(str(e)), err=True)
        sys.exit(1)
    except OSError as e:
        click.echo(style_error(f"Could not write {model_path}: {e}"), err=True)
        sys.exit(1)

    click.echo(style_success(f"Privilege model created: {model_path}"))
    click.echo(f"  {_plural(len(model.rules), 'rule')}, {_plural(len(model.aliases), 'alias', 'aliases')}")


@click.command("path")
def path() -> None:
    """Show the default privilege model path."""
    model_path = get_model_path()
    click.echo(str(model_path))

    if not model_path.exists():
        click.echo(style_warning("file does not exist, run 'privileged init' to create it"), err=True)
