"""Tests for the CLI."""

import json
from collections.abc import Iterator
from pathlib import Path
from unittest.mock import patch

import pytest
import yaml
from click.testing import CliRunner, Result

from starter_kit import __version__
from starter_kit.answers import LICENSE_DEFAULT
from starter_kit.cli import main
from starter_kit.config.loader import ENV_ANSWERS_FILE, ENV_LOG_LEVEL
from starter_kit.console import console


@pytest.fixture(autouse=True)
def isolated_config(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Iterator[None]:
    """Keep the user's real configuration out of CLI tests."""
    monkeypatch.delenv(ENV_ANSWERS_FILE, raising=False)
    monkeypatch.delenv(ENV_LOG_LEVEL, raising=False)
    with (
        patch(
            "starter_kit.config.loader.get_home_config_path",
            return_value=tmp_path / "home" / "config.yaml",
        ),
        patch(
            "starter_kit.config.loader.get_local_config_path",
            return_value=tmp_path / "local" / "config.yaml",
        ),
    ):
        yield


@pytest.fixture
def answers_path(tmp_path: Path) -> Path:
    return tmp_path / "answers.json"


def _invoke(answers_path: Path, *args: str, input_text: str | None = None) -> Result:
    runner = CliRunner()
    return runner.invoke(
        main, ["--answers-file", str(answers_path), *args], input=input_text
    )


def test_cli_help() -> None:
    """Test that --help exits cleanly."""
    result = CliRunner().invoke(main, ["--help"])
    assert result.exit_code == 0
    assert "starter-kit" in result.output.lower()


def test_cli_version() -> None:
    """Test that --version shows the version."""
    result = CliRunner().invoke(main, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


class TestAnswersCommands:
    """Tests for the answers command group."""

    def test_tokens(self, answers_path: Path) -> None:
        """Test that tokens lists one token per line."""
        result = _invoke(answers_path, "answers", "tokens")
        assert result.exit_code == 0
        lines = result.output.splitlines()
        assert lines[0] == "authorEmail"
        assert lines[-1] == "vendorName"
        assert len(lines) == 25

    def test_show_json_matches_saved_document(self, answers_path: Path) -> None:
        """Test that show --json prints what save_to_file writes."""
        answers_path.write_text('{"vendorName": "acme"}')

        result = _invoke(answers_path, "answers", "show", "--json")

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["vendorName"] == "acme"
        assert data["license"] == LICENSE_DEFAULT

    def test_show_table(self, answers_path: Path) -> None:
        """Test that show renders tokens in a table."""
        result = _invoke(answers_path, "answers", "show")
        assert result.exit_code == 0
        assert "packageKeywords" in result.output
        assert LICENSE_DEFAULT in result.output

    def test_set_string_answer(self, answers_path: Path) -> None:
        """Test that set saves a single value."""
        result = _invoke(answers_path, "answers", "set", "packageName", "acme/widgets")

        assert result.exit_code == 0
        assert json.loads(answers_path.read_text())["packageName"] == "acme/widgets"

    def test_set_keywords(self, answers_path: Path) -> None:
        """Test that list answers take several values."""
        result = _invoke(
            answers_path, "answers", "set", "packageKeywords", "library", "starter"
        )

        assert result.exit_code == 0
        saved = json.loads(answers_path.read_text())
        assert saved["packageKeywords"] == ["library", "starter"]

    def test_set_bool_answer(self, answers_path: Path) -> None:
        """Test that textual booleans are coerced before saving."""
        result = _invoke(answers_path, "answers", "set", "skipPrompts", "yes")

        assert result.exit_code == 0
        assert json.loads(answers_path.read_text())["skipPrompts"] is True

    def test_set_unknown_token(self, answers_path: Path) -> None:
        """Test that an unknown token fails without writing."""
        result = _invoke(answers_path, "answers", "set", "notAField", "x")

        assert result.exit_code == 1
        assert "Unknown answer token" in result.output
        assert not answers_path.exists()

    def test_set_invalid_bool(self, answers_path: Path) -> None:
        """Test that an invalid value fails without writing."""
        result = _invoke(answers_path, "answers", "set", "skipPrompts", "maybe")

        assert result.exit_code == 1
        assert "Invalid value" in result.output
        assert not answers_path.exists()

    def test_set_too_many_values(self, answers_path: Path) -> None:
        """Test that scalar answers refuse several values."""
        result = _invoke(answers_path, "answers", "set", "vendorName", "a", "b")

        assert result.exit_code == 1
        assert "exactly one value" in result.output

    def test_malformed_file_fails(self, answers_path: Path) -> None:
        """Test that a malformed answers file is reported, not ignored."""
        answers_path.write_text('"not a json object"')

        result = _invoke(answers_path, "answers", "show")

        assert result.exit_code == 1
        assert "Cannot decode" in result.output

    def test_invalid_utf8_file_fails(self, answers_path: Path) -> None:
        """Test that an answers file that is not UTF-8 is reported, not raised."""
        answers_path.write_bytes(b'{"vendorName": "\xff"}')

        result = _invoke(answers_path, "answers", "show")

        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
        assert "Cannot decode" in result.output

    def test_paths_are_not_read_as_markup(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test that brackets in the answers path are printed literally."""
        monkeypatch.setattr(console, "width", 1000)
        path = tmp_path / "answers[bold].json"

        result = _invoke(path, "answers", "set", "vendorName", "acme")

        assert result.exit_code == 0
        assert "answers[bold].json" in result.output

    def test_reset_with_confirmation(self, answers_path: Path) -> None:
        """Test that reset overwrites answers after confirming."""
        answers_path.write_text('{"vendorName": "acme"}')

        result = _invoke(answers_path, "answers", "reset", input_text="y\n")

        assert result.exit_code == 0
        assert json.loads(answers_path.read_text())["vendorName"] is None

    def test_reset_declined(self, answers_path: Path) -> None:
        """Test that declining reset leaves the file alone."""
        answers_path.write_text('{"vendorName": "acme"}')

        result = _invoke(answers_path, "answers", "reset", input_text="n\n")

        assert result.exit_code == 0
        assert answers_path.read_text() == '{"vendorName": "acme"}'

    def test_reset_replaces_malformed_file(self, answers_path: Path) -> None:
        """Test that reset --yes works even when the file cannot be decoded."""
        answers_path.write_text("{broken")

        result = _invoke(answers_path, "answers", "reset", "--yes")

        assert result.exit_code == 0
        assert json.loads(answers_path.read_text())["license"] == LICENSE_DEFAULT


class TestConfigCommands:
    """Tests for the config command group."""

    def test_config_show(self, answers_path: Path) -> None:
        """Test that config show displays the effective configuration."""
        result = _invoke(answers_path, "config", "show")

        assert result.exit_code == 0
        assert "Current Effective Configuration" in result.output
        assert "Global config: not found" in result.output

    def test_env_selects_answers_file(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test that STARTER_KIT_ANSWERS_FILE picks the answers file."""
        target = tmp_path / "from-env.json"
        monkeypatch.setenv(ENV_ANSWERS_FILE, str(target))

        result = CliRunner().invoke(main, ["answers", "set", "vendorName", "acme"])

        assert result.exit_code == 0
        assert json.loads(target.read_text())["vendorName"] == "acme"

    def test_config_set_keeps_other_settings(self, tmp_path: Path) -> None:
        """Test that config set updates one key in the project config."""
        local_config = tmp_path / "project" / ".starter-kit" / "config.yaml"
        local_config.parent.mkdir(parents=True)
        local_config.write_text("log_level: INFO\n")

        with patch("starter_kit.cli.get_local_config_path", return_value=local_config):
            result = CliRunner().invoke(
                main, ["config", "set", "answers_file", "answers.json"]
            )

        assert result.exit_code == 0
        assert yaml.safe_load(local_config.read_text()) == {
            "answers_file": "answers.json",
            "log_level": "INFO",
        }

    def test_config_set_global(self, tmp_path: Path) -> None:
        """Test that --global writes the home config, creating its directory."""
        home_config = tmp_path / "userhome" / ".starter-kit" / "config.yaml"

        with patch("starter_kit.cli.get_home_config_path", return_value=home_config):
            result = CliRunner().invoke(
                main, ["config", "set", "--global", "log_level", "debug"]
            )

        assert result.exit_code == 0
        assert yaml.safe_load(home_config.read_text()) == {"log_level": "DEBUG"}

    def test_config_set_invalid_log_level(self, tmp_path: Path) -> None:
        """Test that an unknown log level is refused without writing."""
        local_config = tmp_path / "project" / ".starter-kit" / "config.yaml"

        with patch("starter_kit.cli.get_local_config_path", return_value=local_config):
            result = CliRunner().invoke(main, ["config", "set", "log_level", "loud"])

        assert result.exit_code == 1
        assert "Invalid value for log_level" in result.output
        assert not local_config.exists()
