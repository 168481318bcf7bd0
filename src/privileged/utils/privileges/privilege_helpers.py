"""Privilege model I/O - JSON serialization and model files.

A model file is either a full model object or a bare rules array:

    {"rules": [{"action": "read", "subject": "Post"}],
     "aliases": [{"alias": "modify", "values": ["create", "update"], "type": "action"}]}

    [{"action": "read", "subject": "Post"}]

Serialization omits None fields, so an allow rule has no "denied" key and an
unscoped rule has no "qualifiers" key. Serialize → deserialize preserves
evaluation behavior exactly.

Features:
- Atomic writes (temp file + rename), owner-only permissions
- Detailed validation error messages
- SHA256 checksum for change detection (used by FileContextProvider)
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from pydantic import TypeAdapter, ValidationError

from privileged.constants import MODEL_FILE_NAME
from privileged.pdp.builder import PrivilegeBuilder
from privileged.pdp.match import PrivilegeMatch
from privileged.pdp.model import PrivilegeModel, PrivilegeRule
from privileged.utils.file_helpers import (
    ensure_file,
    file_checksum,
    get_app_dir,
    validation_error_lines,
    write_text_atomic,
)

__all__ = [
    "compute_model_checksum",
    "create_example_model",
    "create_example_model_file",
    "get_model_path",
    "load_model",
    "model_exists",
    "model_from_json",
    "model_to_json",
    "rules_from_json",
    "rules_to_json",
    "save_model",
]

logger = logging.getLogger(__name__)

_RULES_ADAPTER: TypeAdapter[tuple[PrivilegeRule, ...]] = TypeAdapter(tuple[PrivilegeRule, ...])


def get_model_path() -> Path:
    """Get the default model file path in the app directory.

    Returns:
        Path to privileges.json in the config directory.
    """
    return get_app_dir() / MODEL_FILE_NAME


# =============================================================================
# JSON serialization
# =============================================================================


def model_to_json(model: PrivilegeModel, *, indent: int | None = 2) -> str:
    """Serialize a model to JSON, omitting None fields."""
    return json.dumps(model.model_dump(mode="json", exclude_none=True), indent=indent)


def rules_to_json(rules: Iterable[PrivilegeRule], *, indent: int | None = 2) -> str:
    """Serialize rules to a JSON array, omitting None fields."""
    data = _RULES_ADAPTER.dump_python(tuple(rules), mode="json", exclude_none=True)
    return json.dumps(data, indent=indent)


def _parse_model_data(data: Any, source: str) -> PrivilegeModel:
    if isinstance(data, list):
        data = {"rules": data}

    try:
        return PrivilegeModel.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Invalid privilege model in {source}:\n{validation_error_lines(e)}") from e


def model_from_json(text: str | bytes) -> PrivilegeModel:
    """Deserialize a model from JSON (model object or bare rules array).

    Raises:
        ValueError: If the text is not valid JSON or not a valid model.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in privilege model: {e}") from e
    return _parse_model_data(data, "JSON input")


def rules_from_json(text: str | bytes) -> tuple[PrivilegeRule, ...]:
    """Deserialize a JSON array of rules.

    Raises:
        ValueError: If the text is not valid JSON or not a valid rules array.
    """
    try:
        return _RULES_ADAPTER.validate_json(text)
    except ValidationError as e:
        if any(err["type"] == "json_invalid" for err in e.errors()):
            raise ValueError(f"Invalid JSON in privilege rules: {e}") from e
        raise ValueError(f"Invalid privilege rules:\n{validation_error_lines(e)}") from e


# =============================================================================
# Model files
# =============================================================================


def compute_model_checksum(model_path: Path) -> str:
    """Compute SHA256 checksum of model file content.

    Returns:
        str: Checksum in format "sha256:<hex_digest>".

    Raises:
        FileNotFoundError: If model file doesn't exist.
    """
    return file_checksum(model_path)


def load_model(path: Path | None = None) -> PrivilegeModel:
    """Load a privilege model from file.

    Args:
        path: Path to the model file. If None, uses default location.

    Returns:
        PrivilegeModel loaded from file.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file contains invalid JSON or schema.
    """
    model_path = path or get_model_path()
    ensure_file(model_path, "privilege model", hint="Run 'privileged init' to create one.")

    try:
        with open(model_path, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in privilege model file {model_path}: {e}") from e

    model = _parse_model_data(data, str(model_path))
    logger.debug(
        "Loaded privilege model from %s (%d rules, %d aliases)",
        model_path,
        len(model.rules),
        len(model.aliases),
    )
    return model


def save_model(model: PrivilegeModel, path: Path | None = None) -> None:
    """Save a privilege model to file atomically.

    Creates parent directories if they don't exist.

    Args:
        model: Model to save.
        path: Path to save to. If None, uses default location.
    """
    model_path = path or get_model_path()
    write_text_atomic(model_path, model_to_json(model) + "\n")


def model_exists(path: Path | None = None) -> bool:
    """Check if a model file exists.

    Args:
        path: Path to check. If None, uses default location.
    """
    model_path = path or get_model_path()
    return model_path.exists()


def create_example_model() -> PrivilegeModel:
    """Build the starter model written by `privileged init`."""
    return (
        PrivilegeBuilder()
        .alias("Manage", ["create", "update", "delete"], PrivilegeMatch.ACTION)
        .alias("PublicFields", ["title", "summary"], PrivilegeMatch.QUALIFIER)
        .allow("read", "Post", ["PublicFields"])
        .allow("Manage", "Post")
        .forbid("delete", "Post")
        .build_model()
    )


def create_example_model_file(path: Path | None = None) -> PrivilegeModel:
    """Create an example model file if it doesn't exist.

    Args:
        path: Path to create. If None, uses default location.

    Returns:
        The PrivilegeModel that was written.

    Raises:
        FileExistsError: If the file already exists.
    """
    model_path = path or get_model_path()

    if model_path.exists():
        raise FileExistsError(f"Privilege model file already exists: {model_path}")

    model = create_example_model()
    save_model(model, model_path)
    return model
