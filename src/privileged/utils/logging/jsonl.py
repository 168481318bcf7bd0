"""JSON Lines file logging.

Each record becomes one JSON object: ``time`` (UTC, millisecond ISO 8601
with a ``Z`` suffix) and ``level`` first, then the record's own fields.
Structured callers log dicts; anything else is wrapped as ``message``.
"""

from __future__ import annotations

__all__ = ["JsonLineFormatter", "setup_jsonl_logger"]

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from privileged.utils.file_helpers import restrict_permissions


def _utc_timestamp(created: float) -> str:
    moment = datetime.fromtimestamp(created, tz=timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _record_fields(record: logging.LogRecord) -> dict[str, Any]:
    msg = record.msg
    if isinstance(msg, dict):
        return msg
    if isinstance(msg, str) and msg.lstrip().startswith("{") and not record.args:
        try:
            parsed = json.loads(msg)
        except json.JSONDecodeError:
            parsed = None
        if isinstance(parsed, dict):
            return parsed
    return {"message": record.getMessage()}


class JsonLineFormatter(logging.Formatter):
    """Format records as single-line JSON objects."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {"time": _utc_timestamp(record.created), "level": record.levelname}
        entry.update(_record_fields(record))
        return json.dumps(entry, default=str)


def setup_jsonl_logger(
    logger_name: str,
    log_file: Path,
    log_level: int | str = logging.INFO,
) -> logging.Logger:
    """Point `logger_name` at `log_file`, appending one JSON object per line.

    The logger stops propagating to the root logger. Calling this again for
    the same name closes the old handler and installs a new one, so a
    logger only ever writes to one file. The log directory is created
    owner-only.

    Raises:
        OSError: If the directory or file cannot be created.
    """
    log_file.parent.mkdir(parents=True, exist_ok=True)
    restrict_permissions(log_file.parent)

    logger = logging.getLogger(logger_name)
    logger.setLevel(log_level)
    logger.propagate = False

    while logger.handlers:
        old = logger.handlers.pop()
        old.close()

    handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
    handler.setFormatter(JsonLineFormatter())
    logger.addHandler(handler)

    restrict_permissions(log_file)
    return logger
