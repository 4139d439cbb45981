"""Unit tests for the ignore command."""

import json
from pathlib import Path

from dotviz.cli.main import app
from typer.testing import CliRunner

runner = CliRunner()


class TestIgnoreCommand:
    """Tests for ignore output."""

    def test_linux_json(self, sample_repo: Path) -> None:
        """Linux activates the non-Windows and disabled-module blocks."""
        result = runner.invoke(app, ["--local", str(sample_repo), "ignore", "--json"])
        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout) == {
            "platform": "linux",
            "patterns": ["README.md", "Documents/PowerShell/**", ".config/Code/**"],
        }

    def test_windows_json(self, sample_repo: Path) -> None:
        """Windows activates the Windows block."""
        result = runner.invoke(
            app, ["--local", str(sample_repo), "ignore", "-p", "windows", "--json"]
        )
        assert json.loads(result.stdout)["patterns"] == [
            "README.md",
            ".bashrc",
            ".zshrc",
            ".config/Code/**",
        ]

    def test_table(self, sample_repo: Path) -> None:
        """Patterns are listed in a table."""
        result = runner.invoke(app, ["--local", str(sample_repo), "ignore"])
        assert result.exit_code == 0
        assert "README.md" in result.stdout

    def test_no_patterns(self, sample_repo: Path) -> None:
        """An empty ignore spec is reported."""
        (sample_repo / ".chezmoiignore").write_text("# nothing\n")
        result = runner.invoke(app, ["--local", str(sample_repo), "ignore"])
        assert result.exit_code == 0
        assert "No ignore patterns" in result.output
