"""Helpers shared by the config and privilege model files.

Both are small JSON documents in the app directory, read whole, validated
with pydantic and replaced whole on save.
"""

from __future__ import annotations

__all__ = [
    "ensure_file",
    "file_checksum",
    "get_app_dir",
    "read_json_model",
    "restrict_permissions",
    "validation_error_lines",
    "write_text_atomic",
]

import hashlib
import json
import os
import sys
import tempfile
from pathlib import Path
from typing import TypeVar

import click
from pydantic import BaseModel, ValidationError

from privileged.constants import APP_NAME

ModelT = TypeVar("ModelT", bound=BaseModel)


def get_app_dir() -> Path:
    """Per-user directory holding config.json and privileges.json."""
    return Path(click.get_app_dir(APP_NAME))


def file_checksum(path: Path) -> str:
    """Return "sha256:<hex>" of the file's bytes.

    Raises:
        OSError: If the file cannot be read.
    """
    return "sha256:" + hashlib.sha256(path.read_bytes()).hexdigest()


def restrict_permissions(path: Path) -> None:
    """Make a file 0600 or a directory 0700. No-op on Windows.

    Filesystems that refuse chmod are tolerated.
    """
    if sys.platform == "win32":
        return
    try:
        path.chmod(0o700 if path.is_dir() else 0o600)
    except OSError:
        pass


def ensure_file(path: Path, what: str, *, hint: str | None = None) -> None:
    """Raise FileNotFoundError naming `what` unless `path` exists."""
    if path.exists():
        return
    message = f"{what.capitalize()} file not found at {path}."
    if hint:
        message += f"\n{hint}"
    raise FileNotFoundError(message)


def validation_error_lines(error: ValidationError) -> str:
    """One '  - loc: msg' line per pydantic error, newline-joined."""
    return "\n".join(
        f"  - {'.'.join(str(part) for part in item['loc'])}: {item['msg']}" for item in error.errors()
    )


def read_json_model(path: Path, model_class: type[ModelT], what: str) -> ModelT:
    """Parse a JSON file into `model_class`.

    Args:
        path: File to read.
        model_class: Pydantic model the document must satisfy.
        what: Noun used in error messages, e.g. "config".

    Raises:
        ValueError: Unreadable file, malformed JSON or failed validation.
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {what} file {path}: {e}") from e
    except OSError as e:
        raise ValueError(f"Could not read {what} file {path}: {e}") from e

    try:
        return model_class.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Invalid {what} in {path}:\n{validation_error_lines(e)}") from e


def write_text_atomic(path: Path, content: str) -> None:
    """Replace `path` with `content` via a synced temp file and os.replace.

    Parent directories are created as needed; the result is owner-only.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(content)
            handle.flush()
            os.fsync(handle.fileno())
        restrict_permissions(tmp_path)
        os.replace(tmp_path, path)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise
