"""Unit tests for CLI commands.

Tests CLI behavior using Click's CliRunner for isolated, fast testing.
Tests use the AAA pattern (Arrange-Act-Assert) for clarity.
"""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from privileged import PrivilegeModel, __version__
from privileged.cli import cli
from privileged.utils.privileges import load_model, save_model


@pytest.fixture
def runner() -> CliRunner:
    """Create a CLI runner for testing."""
    return CliRunner()


@pytest.fixture
def model_file(tmp_path: Path, blog_model: PrivilegeModel) -> Path:
    """Model file with aliases, qualifiers and a forbid."""
    path = tmp_path / "privileges.json"
    save_model(blog_model, path)
    return path


class TestVersion:
    """Tests for --version flag."""

    @pytest.mark.parametrize("flag", ["--version", "-v"], ids=["long", "short"])
    def test_version_flag_shows_version(self, runner: CliRunner, flag: str) -> None:
        """Given --version flag, returns version string."""
        result = runner.invoke(cli, [flag])

        assert result.exit_code == 0
        assert result.output.strip() == f"privileged {__version__}"

    def test_no_command_shows_help(self, runner: CliRunner) -> None:
        """Without a subcommand, prints help including the quick start."""
        result = runner.invoke(cli, [])

        assert result.exit_code == 0
        assert "Quick Start" in result.output


class TestValidate:
    """Tests for validate."""

    def test_valid_model(self, runner: CliRunner, model_file: Path) -> None:
        """Given a valid model, exits 0 with counts."""
        # Act
        result = runner.invoke(cli, ["validate", str(model_file)])

        # Assert
        assert result.exit_code == 0
        assert "Privilege model valid" in result.output
        assert "3 rules defined" in result.output
        assert "3 aliases defined" in result.output

    def test_invalid_model(self, runner: CliRunner, write_json) -> None:
        """Given an invalid model, exits 1 with the error location."""
        path = write_json({"rules": [{"action": "read", "subject": " "}]})

        result = runner.invoke(cli, ["validate", str(path)])

        assert result.exit_code == 1
        assert "rules.0.subject" in result.output

    def test_missing_model(self, runner: CliRunner, tmp_path: Path) -> None:
        """Given a missing file, exits 1."""
        result = runner.invoke(cli, ["validate", str(tmp_path / "missing.json")])

        assert result.exit_code == 1
        assert "not found" in result.output


class TestShow:
    """Tests for show."""

    def test_human_output(self, runner: CliRunner, model_file: Path) -> None:
        """Lists rules with effects and the aliases."""
        # Act
        result = runner.invoke(cli, ["show", str(model_file)])

        # Assert
        assert result.exit_code == 0
        assert "Rules: 3" in result.output
        assert "ALLOW read Content [Public, id]" in result.output
        assert "FORBID delete Comment" in result.output
        assert "Manage (action): create, update, delete" in result.output

    def test_json_output(self, runner: CliRunner, model_file: Path, blog_model: PrivilegeModel) -> None:
        """--json prints the model as JSON."""
        result = runner.invoke(cli, ["show", str(model_file), "--json"])

        assert result.exit_code == 0
        assert PrivilegeModel.model_validate(json.loads(result.output)) == blog_model

    def test_empty_model(self, runner: CliRunner, write_json) -> None:
        """An empty model says no rules are defined."""
        path = write_json([])

        result = runner.invoke(cli, ["show", str(path)])

        assert result.exit_code == 0
        assert "(no rules defined)" in result.output


class TestCheck:
    """Tests for check."""

    @pytest.mark.parametrize(
        ("args", "expected_code", "expected_text"),
        [
            (["read", "Post", "title"], 0, "allowed"),
            (["update", "Post"], 0, "allowed"),
            (["read", "Post", "body"], 2, "forbidden"),
            (["delete", "Comment"], 2, "forbidden"),
            (["read", "User"], 2, "forbidden"),
        ],
        ids=["qualifier-alias", "action-alias", "unlisted-qualifier", "forbid", "no-rule"],
    )
    def test_exit_codes(
        self, runner: CliRunner, model_file: Path, args: list[str], expected_code: int, expected_text: str
    ) -> None:
        """Given a query, exits 0 when allowed and 2 when forbidden."""
        result = runner.invoke(cli, ["check", str(model_file), *args])

        assert result.exit_code == expected_code
        assert expected_text in result.output

    def test_ordinal(self, runner: CliRunner, model_file: Path) -> None:
        """--ordinal makes names case-sensitive."""
        default = runner.invoke(cli, ["check", str(model_file), "UPDATE", "post"])
        ordinal = runner.invoke(cli, ["check", str(model_file), "UPDATE", "post", "--ordinal"])

        assert default.exit_code == 0
        assert ordinal.exit_code == 2

    def test_missing_model_exits_1(self, runner: CliRunner, tmp_path: Path) -> None:
        """Given a missing model file, exits 1."""
        result = runner.invoke(cli, ["check", str(tmp_path / "missing.json"), "read", "Post"])

        assert result.exit_code == 1

    def test_log_file(self, runner: CliRunner, model_file: Path, tmp_path: Path) -> None:
        """--log-file appends the decision as JSONL."""
        # Arrange
        log_file = tmp_path / "decisions.jsonl"

        # Act
        result = runner.invoke(cli, ["--log-file", str(log_file), "check", str(model_file), "delete", "Comment"])

        # Assert
        assert result.exit_code == 2
        [entry] = [json.loads(line) for line in log_file.read_text(encoding="utf-8").splitlines()]
        assert entry["decision"] == "deny"
        assert entry["source"] == "cli"
        assert entry["final_rule"] == "forbid delete Comment"


class TestUnreadableModel:
    """An unreadable model file is a styled error, not a traceback."""

    @pytest.mark.parametrize(
        ("module", "args"),
        [
            ("privileged.cli.commands.model", ["validate"]),
            ("privileged.cli.commands.model", ["show"]),
            ("privileged.cli.commands.check", ["check"]),
            ("privileged.cli.commands.check", ["explain"]),
        ],
        ids=["validate", "show", "check", "explain"],
    )
    def test_permission_error_exits_1(
        self,
        runner: CliRunner,
        model_file: Path,
        monkeypatch: pytest.MonkeyPatch,
        module: str,
        args: list[str],
    ) -> None:
        """Given a file that cannot be read, exits 1 with the OS error."""
        # Arrange
        def unreadable(path: Path) -> None:
            raise PermissionError(13, "Permission denied", str(path))

        monkeypatch.setattr(f"{module}.load_model", unreadable)
        query = ["read", "Post"] if args[0] in ("check", "explain") else []

        # Act
        result = runner.invoke(cli, [*args, str(model_file), *query])

        # Assert
        assert result.exit_code == 1
        assert result.exception is None or isinstance(result.exception, SystemExit)
        assert "Permission denied" in result.output


class TestExplain:
    """Tests for explain."""

    def test_lists_matches_and_forbidding_rule(self, runner: CliRunner, model_file: Path) -> None:
        """Shows the matching rules and which forbid decided."""
        # Act
        result = runner.invoke(cli, ["explain", str(model_file), "delete", "Comment"])

        # Assert
        assert result.exit_code == 0
        assert "FORBID delete Comment" in result.output
        assert "is forbidden" in result.output
        assert "forbidden by: forbid delete Comment" in result.output

    def test_no_matches(self, runner: CliRunner, model_file: Path) -> None:
        """With no matching rules, explains the default deny."""
        result = runner.invoke(cli, ["explain", str(model_file), "read", "User"])

        assert "(no rules match)" in result.output
        assert "no rule allows this query" in result.output

    def test_allowed(self, runner: CliRunner, model_file: Path) -> None:
        """An allowed query lists its allow rules."""
        result = runner.invoke(cli, ["explain", str(model_file), "update", "Post"])

        assert "ALLOW Manage Post" in result.output
        assert "is allowed" in result.output


class TestInit:
    """Tests for init."""

    def test_creates_example(self, runner: CliRunner, tmp_path: Path) -> None:
        """Writes a loadable example model."""
        # Arrange
        path = tmp_path / "privileges.json"

        # Act
        result = runner.invoke(cli, ["init", str(path)])

        # Assert
        assert result.exit_code == 0
        assert "Privilege model created" in result.output
        assert load_model(path).rules

    def test_refuses_overwrite(self, runner: CliRunner, model_file: Path, blog_model: PrivilegeModel) -> None:
        """An existing file is left untouched and the command exits 1."""
        result = runner.invoke(cli, ["init", str(model_file)])

        assert result.exit_code == 1
        assert "already exists" in result.output
        assert load_model(model_file) == blog_model
