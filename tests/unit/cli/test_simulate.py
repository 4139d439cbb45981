"""Unit tests for the simulate command."""

import json
from pathlib import Path
from unittest.mock import patch

import pytest
from dotviz.cli.commands.simulate import USAGE_ERROR, _collect_changes
from dotviz.cli.main import app
from dotviz.core.simulate import SimulationRequestError
from typer.testing import CliRunner

runner = CliRunner()


def _invoke(sample_repo: Path, *args: str):
    return runner.invoke(app, ["--local", str(sample_repo), "simulate", *args])


class TestCollectChanges:
    """Tests for merging flags with the --changes document."""

    def test_flags(self) -> None:
        """--enable and --disable become true/false changes."""
        changes, platform = _collect_changes(["vscode"], ["git"], None)
        assert changes == {"vscode": True, "git": False}
        assert platform is None

    def test_document_and_override(self) -> None:
        """Flags override the JSON document."""
        body = json.dumps({"moduleChanges": {"git": True, "shell": False}, "platform": "darwin"})
        changes, platform = _collect_changes([], ["git"], body)
        assert changes == {"git": False, "shell": False}
        assert platform == "darwin"

    def test_document_without_platform(self) -> None:
        """A document without a platform leaves the choice to the caller."""
        _, platform = _collect_changes([], [], '{"moduleChanges": {"git": true}}')
        assert platform is None

    @pytest.mark.parametrize(
        ("enable", "disable", "body", "message"),
        [
            ([], [], None, "No module changes"),
            (["git"], ["git"], None, "both enabled and disabled"),
            ([], [], "{not json", "not valid JSON"),
            ([], [], '{"platform": "linux"}', "moduleChanges"),
            ([], [], '{"moduleChanges": {"git": "yes"}}', "Invalid simulation request"),
        ],
    )
    def test_rejected(
        self, enable: list[str], disable: list[str], body: str | None, message: str
    ) -> None:
        """Malformed or empty requests are rejected."""
        with pytest.raises(SimulationRequestError, match=message):
            _collect_changes(enable, disable, body)


class TestSimulateCommand:
    """Tests for simulate output."""

    def test_enable_json(self, sample_repo: Path) -> None:
        """Enabling vscode adds its settings file."""
        result = _invoke(sample_repo, "--enable", "vscode", "--json")
        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data["platform"] == "linux"
        assert data["module_changes"] == {"vscode": True}
        assert data["summary"] == {
            "added": 1,
            "removed": 0,
            "total_before": 6,
            "total_after": 7,
        }
        assert data["added"][0]["deploy_path"] == "~/.config/Code/User/settings.json"

    def test_disable_shell_warns(self, sample_repo: Path) -> None:
        """Disabling shell removes its files and warns about dependents."""
        result = _invoke(sample_repo, "--disable", "shell", "--json")
        data = json.loads(result.stdout)
        assert data["summary"]["removed"] == 3
        assert data["warnings"] == [
            "Module 'smart_search' depends on 'shell', which is not enabled"
        ]

    def test_changes_document(self, sample_repo: Path) -> None:
        """The JSON request body supplies changes and platform."""
        body = json.dumps({"moduleChanges": {"shell": False}, "platform": "windows"})
        result = _invoke(sample_repo, "--changes", body, "--json")
        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data["platform"] == "windows"

    def test_platform_option_wins(self, sample_repo: Path) -> None:
        """--platform overrides the platform in the request body."""
        body = json.dumps({"moduleChanges": {"shell": False}, "platform": "windows"})
        result = _invoke(sample_repo, "-c", body, "-p", "darwin", "--json")
        assert json.loads(result.stdout)["platform"] == "darwin"

    def test_table_output(self, sample_repo: Path) -> None:
        """Changes are shown with a summary line."""
        result = _invoke(sample_repo, "-e", "vscode")
        assert result.exit_code == 0
        assert "[+]" in result.stdout
        assert "1 added" in result.stdout
        assert "6 -> 7 files" in result.stdout

    def test_no_changes(self, sample_repo: Path) -> None:
        """Toggling a module to its current state changes nothing."""
        result = _invoke(sample_repo, "--enable", "git")
        assert result.exit_code == 0
        assert "No changes" in result.stdout

    def test_unknown_module_warning(self, sample_repo: Path) -> None:
        """Unknown modules are reported and ignored."""
        result = _invoke(sample_repo, "--enable", "emacs")
        assert result.exit_code == 0
        assert "not defined in the configuration" in result.output
        assert "No changes" in result.stdout


class TestSimulateUsageErrors:
    """Tests for malformed requests."""

    def test_no_changes_given(self, sample_repo: Path) -> None:
        """Without changes the command exits with the usage code."""
        result = _invoke(sample_repo)
        assert result.exit_code == USAGE_ERROR
        assert "No module changes" in result.output

    def test_invalid_request_before_fetch(self) -> None:
        """Malformed requests fail before the repository is read."""
        with patch("dotviz.cli.commands.simulate.require_repository") as mock_require:
            result = runner.invoke(app, ["simulate", "--changes", '{"moduleChanges": 1}'])
        assert result.exit_code == USAGE_ERROR
        mock_require.assert_not_called()
