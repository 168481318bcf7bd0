"""Application configuration for privileged.

Config is stored at the OS-appropriate location (via click.get_app_dir) and
names the model file, the string comparer, cache TTL and logging settings.

Typical wiring for a FastAPI app:

    config = PrivilegedConfig.load_from_file(get_config_path())
    setup_privileges(
        app,
        config.create_provider(),
        principal_header=config.principal_header,
        decision_logger=config.create_decision_logger("api"),
    )
"""

from __future__ import annotations

__all__ = [
    "LoggingConfig",
    "PrivilegedConfig",
    "get_config_path",
]

import json
import logging
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field

from privileged.constants import (
    APP_NAME,
    CONFIG_FILE_NAME,
    DEFAULT_CACHE_TTL_SECONDS,
    DEFAULT_PRINCIPAL_HEADER,
    MAX_CACHE_TTL_SECONDS,
    MIN_CACHE_TTL_SECONDS,
)
from privileged.pdp.comparer import ComparerName, StringComparer
from privileged.providers import CachingContextProvider, ContextResolver, FileContextProvider
from privileged.providers.base import PrivilegeContextProvider
from privileged.telemetry.decision_logger import DecisionEventLogger, create_decision_logger
from privileged.utils.file_helpers import (
    ensure_file,
    get_app_dir,
    read_json_model,
    write_text_atomic,
)
from privileged.utils.privileges import get_model_path


def get_config_path() -> Path:
    """Get the default config file path in the app directory."""
    return get_app_dir() / CONFIG_FILE_NAME


class LoggingConfig(BaseModel):
    """Where and how verbosely privileged logs.

    Attributes:
        log_level: Level for the library's module loggers.
        log_file: Decision log (JSONL). None disables decision logging.
    """

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_file: str | None = Field(default=None, min_length=1)


class PrivilegedConfig(BaseModel):
    """Main configuration for privileged.

    Attributes:
        rules_path: Model file. None uses privileges.json in the app directory.
        comparer: String equality policy for every comparison.
        cache_ttl_seconds: Lifetime of per-principal cached contexts.
        principal_header: HTTP header carrying the caller's principal.
        logging: Logging configuration.
    """

    rules_path: str | None = Field(default=None, min_length=1)
    comparer: ComparerName = "ignore_case"
    cache_ttl_seconds: int = Field(
        default=DEFAULT_CACHE_TTL_SECONDS,
        ge=MIN_CACHE_TTL_SECONDS,
        le=MAX_CACHE_TTL_SECONDS,
    )
    principal_header: str = Field(default=DEFAULT_PRINCIPAL_HEADER, min_length=1)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @property
    def model_path(self) -> Path:
        """Resolved model file path."""
        if self.rules_path is None:
            return get_model_path()
        return Path(self.rules_path).expanduser()

    @property
    def string_comparer(self) -> StringComparer:
        return StringComparer.from_name(self.comparer)

    def apply_log_level(self) -> None:
        """Set the level of the package logger ('privileged' and its children)."""
        logging.getLogger(APP_NAME).setLevel(self.logging.log_level)

    def create_provider(self, resolver: ContextResolver | None = None) -> PrivilegeContextProvider:
        """Build the context provider this config describes.

        Args:
            resolver: Per-principal resolver. When given, it is wrapped in a
                CachingContextProvider with cache_ttl_seconds. Otherwise every
                caller shares the rules from model_path.

        Returns:
            FileContextProvider or CachingContextProvider.
        """
        if resolver is not None:
            return CachingContextProvider(resolver, self.cache_ttl_seconds)
        return FileContextProvider(self.model_path, self.string_comparer)

    def create_decision_logger(self, source: str | None = None) -> DecisionEventLogger | None:
        """Build the decision logger, or None if no log_file is configured."""
        if self.logging.log_file is None:
            return None
        logger = create_decision_logger(Path(self.logging.log_file).expanduser())
        return DecisionEventLogger(logger=logger, source=source)

    def save_to_file(self, config_path: Path) -> None:
        """Write the config as indented JSON, replacing any existing file."""
        write_text_atomic(config_path, json.dumps(self.model_dump(), indent=2) + "\n")

    @classmethod
    def load_from_file(cls, config_path: Path) -> "PrivilegedConfig":
        """Read and validate a config file.

        Raises:
            FileNotFoundError: The file is missing.
            ValueError: Malformed JSON or an invalid setting.
        """
        ensure_file(config_path, "configuration")
        return read_json_model(config_path, cls, "config")
