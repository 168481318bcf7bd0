"""Tests for configuration models and load/save behavior."""

import json
import logging
from pathlib import Path

import pytest
from pydantic import ValidationError

from privileged import PrivilegeBuilder, PrivilegeContext, StringComparer
from privileged.config import LoggingConfig, PrivilegedConfig, get_config_path
from privileged.constants import CONFIG_FILE_NAME, DEFAULT_CACHE_TTL_SECONDS, DEFAULT_PRINCIPAL_HEADER
from privileged.providers import CachingContextProvider, FileContextProvider
from privileged.telemetry.decision_logger import DecisionEventLogger
from privileged.utils.privileges import save_model


class TestPrivilegedConfig:
    """Tests for PrivilegedConfig validation."""

    def test_defaults(self) -> None:
        """An empty config uses documented defaults."""
        config = PrivilegedConfig()

        assert config.rules_path is None
        assert config.comparer == "ignore_case"
        assert config.cache_ttl_seconds == DEFAULT_CACHE_TTL_SECONDS
        assert config.principal_header == DEFAULT_PRINCIPAL_HEADER
        assert config.logging == LoggingConfig()

    @pytest.mark.parametrize(
        "ttl",
        [0, 86401],
        ids=["below-min", "above-max"],
    )
    def test_rejects_out_of_range_ttl(self, ttl: int) -> None:
        """Given a TTL outside the bounds, raises ValidationError."""
        with pytest.raises(ValidationError):
            PrivilegedConfig(cache_ttl_seconds=ttl)

    def test_rejects_unknown_comparer(self) -> None:
        """Only the built-in comparer names are accepted."""
        with pytest.raises(ValidationError):
            PrivilegedConfig(comparer="fuzzy")  # type: ignore[arg-type]

    def test_rejects_unknown_log_level(self) -> None:
        """Log level must be a known level name."""
        with pytest.raises(ValidationError):
            LoggingConfig(log_level="TRACE")  # type: ignore[arg-type]

    @pytest.mark.parametrize(
        ("name", "expected"),
        [("ignore_case", StringComparer.IGNORE_CASE), ("ordinal", StringComparer.ORDINAL)],
        ids=["ignore-case", "ordinal"],
    )
    def test_string_comparer(self, name: str, expected: StringComparer) -> None:
        """string_comparer resolves the configured comparer."""
        assert PrivilegedConfig(comparer=name).string_comparer is expected  # type: ignore[arg-type]

    def test_model_path_expands_user(self) -> None:
        """rules_path supports ~."""
        config = PrivilegedConfig(rules_path="~/privileges.json")

        assert config.model_path == Path.home() / "privileges.json"

    def test_apply_log_level(self) -> None:
        """apply_log_level sets the package logger's level."""
        # Arrange
        package_logger = logging.getLogger("privileged")
        previous = package_logger.level
        config = PrivilegedConfig(logging=LoggingConfig(log_level="WARNING"))

        # Act
        try:
            config.apply_log_level()

            # Assert
            assert package_logger.level == logging.WARNING
            assert logging.getLogger("privileged.pdp.context").getEffectiveLevel() == logging.WARNING
        finally:
            package_logger.setLevel(previous)

    def test_config_path_in_app_dir(self) -> None:
        """get_config_path points at config.json in the app directory."""
        assert get_config_path().name == CONFIG_FILE_NAME


class TestLoadSave:
    """Tests for save_to_file / load_from_file."""

    def test_round_trip(self, tmp_path: Path) -> None:
        """A saved config loads back equal."""
        # Arrange
        path = tmp_path / "config.json"
        config = PrivilegedConfig(
            rules_path=str(tmp_path / "privileges.json"),
            comparer="ordinal",
            cache_ttl_seconds=30,
            logging=LoggingConfig(log_level="DEBUG", log_file=str(tmp_path / "decisions.jsonl")),
        )

        # Act
        config.save_to_file(path)

        # Assert
        assert PrivilegedConfig.load_from_file(path) == config

    def test_load_missing(self, tmp_path: Path) -> None:
        """Given a missing file, raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError, match="Configuration file not found"):
            PrivilegedConfig.load_from_file(tmp_path / "config.json")

    def test_load_invalid_json(self, tmp_path: Path) -> None:
        """Given malformed JSON, raises ValueError."""
        path = tmp_path / "config.json"
        path.write_text("{", encoding="utf-8")

        with pytest.raises(ValueError, match="Invalid JSON in config file"):
            PrivilegedConfig.load_from_file(path)

    def test_load_invalid_values(self, tmp_path: Path) -> None:
        """Given an invalid value, raises ValueError naming the field."""
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"cache_ttl_seconds": 0}), encoding="utf-8")

        with pytest.raises(ValueError, match="cache_ttl_seconds"):
            PrivilegedConfig.load_from_file(path)


class TestFactories:
    """Tests for create_provider and create_decision_logger."""

    @pytest.mark.asyncio
    async def test_file_provider(self, tmp_path: Path) -> None:
        """Without a resolver, builds a FileContextProvider with the comparer."""
        # Arrange
        path = tmp_path / "privileges.json"
        save_model(PrivilegeBuilder().allow("read", "Post").build_model(), path)
        config = PrivilegedConfig(rules_path=str(path), comparer="ordinal")

        # Act
        provider = config.create_provider()
        context = await provider.get_context()

        # Assert
        assert isinstance(provider, FileContextProvider)
        assert context.allowed("read", "Post") is True
        assert context.allowed("READ", "Post") is False

    def test_caching_provider(self) -> None:
        """With a resolver, builds a CachingContextProvider using the TTL."""
        config = PrivilegedConfig(cache_ttl_seconds=42)

        provider = config.create_provider(lambda principal: PrivilegeContext.empty())

        assert isinstance(provider, CachingContextProvider)
        assert provider.ttl_seconds == 42

    def test_no_decision_logger_without_log_file(self) -> None:
        """Decision logging is off unless log_file is set."""
        assert PrivilegedConfig().create_decision_logger() is None

    def test_decision_logger(self, tmp_path: Path) -> None:
        """With log_file set, builds a DecisionEventLogger."""
        config = PrivilegedConfig(logging=LoggingConfig(log_file=str(tmp_path / "logs" / "decisions.jsonl")))

        assert isinstance(config.create_decision_logger("api"), DecisionEventLogger)
