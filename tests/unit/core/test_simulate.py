"""Unit tests for module toggle simulation."""

from collections.abc import Callable

import pytest
from dotviz.core.pathmap import build_file_mapping
from dotviz.core.simulate import (
    SimulationRequestError,
    diff_deployments,
    parse_simulate_request,
    simulate,
)
from dotviz.models.config import DotfilesConfig


class TestParseSimulateRequest:
    """Tests for parse_simulate_request()."""

    def test_valid(self) -> None:
        """A mapping of module names to booleans is accepted."""
        request = parse_simulate_request({"moduleChanges": {"shell": True}, "platform": "darwin"})
        assert request.module_changes == {"shell": True}
        assert request.platform == "darwin"

    def test_default_platform(self) -> None:
        """Platform defaults to linux."""
        assert parse_simulate_request({"moduleChanges": {}}).platform == "linux"

    def test_snake_case_key(self) -> None:
        """The field name is accepted as well as the alias."""
        request = parse_simulate_request({"module_changes": {"git": False}})
        assert request.module_changes == {"git": False}

    @pytest.mark.parametrize(
        "payload",
        [
            None,
            [],
            {},
            {"moduleChanges": None},
            {"moduleChanges": ["shell"]},
            {"moduleChanges": {"shell": "yes"}},
            {"moduleChanges": {"shell": 1}},
            {"moduleChanges": {}, "platform": "beos"},
            {"moduleChanges": {}, "extra": 1},
        ],
    )
    def test_malformed(self, payload: object) -> None:
        """Malformed payloads raise SimulationRequestError."""
        with pytest.raises(SimulationRequestError):
            parse_simulate_request(payload)


class TestDiffDeployments:
    """Tests for diff_deployments()."""

    def test_added_and_removed(self) -> None:
        """Files are compared by deploy path."""
        before = [build_file_mapping("dot_a"), build_file_mapping("dot_b")]
        after = [build_file_mapping("dot_b"), build_file_mapping("dot_c")]
        added, removed = diff_deployments(before, after)
        assert [m.deploy_path for m in added] == ["~/.c"]
        assert [m.deploy_path for m in removed] == ["~/.a"]

    def test_same_deploy_path_is_unchanged(self) -> None:
        """A different source with the same deploy path is not a change."""
        added, removed = diff_deployments(
            [build_file_mapping("dot_profile")], [build_file_mapping("dot_profile.tmpl")]
        )
        assert added == ()
        assert removed == ()


class TestSimulate:
    """Tests for simulate()."""

    def test_enable_shell(self, make_config: Callable[..., DotfilesConfig]) -> None:
        """Enabling shell deploys .bashrc."""
        result = simulate(["dot_bashrc"], make_config(shell=False), "", {"shell": True}, "linux")
        assert [m.deploy_path for m in result.added] == ["~/.bashrc"]
        assert result.added[0].required_modules == ("shell",)
        assert result.removed == ()
        assert result.total_before == 0
        assert result.total_after == 1
        assert result.net_change == 1

    def test_empty_changes(
        self,
        sample_config: DotfilesConfig,
        sample_ignore_text: str,
        sample_source_paths: tuple[str, ...],
    ) -> None:
        """No toggles means no differences."""
        result = simulate(sample_source_paths, sample_config, sample_ignore_text, {}, "linux")
        assert result.has_changes is False
        assert result.total_before == result.total_after

    def test_enable_vscode(
        self,
        sample_config: DotfilesConfig,
        sample_ignore_text: str,
        sample_source_paths: tuple[str, ...],
    ) -> None:
        """Enabling vscode adds its settings file."""
        result = simulate(
            sample_source_paths, sample_config, sample_ignore_text, {"vscode": True}, "linux"
        )
        assert [m.deploy_path for m in result.added] == ["~/.config/Code/User/settings.json"]
        assert result.added[0].required_modules == ("vscode",)
        assert result.total_before == 6
        assert result.total_after == 7

    def test_disable_shell_warns_dependents(
        self,
        sample_config: DotfilesConfig,
        sample_ignore_text: str,
        sample_source_paths: tuple[str, ...],
    ) -> None:
        """Disabling shell removes its files and reports unmet dependencies."""
        result = simulate(
            sample_source_paths, sample_config, sample_ignore_text, {"shell": False}, "linux"
        )
        assert [m.deploy_path for m in result.removed] == [
            "~/.bashrc",
            "~/.zshrc",
            "~/.config/shell/common.sh",
        ]
        assert all("shell" in m.required_modules for m in result.removed)
        assert result.added == ()
        assert result.warnings == (
            "Module 'smart_search' depends on 'shell', which is not enabled",
        )

    def test_totals_balance(
        self,
        sample_config: DotfilesConfig,
        sample_ignore_text: str,
        sample_source_paths: tuple[str, ...],
    ) -> None:
        """added - removed equals the change in totals."""
        for changes in ({"shell": False}, {"vscode": True, "git": False}, {"powershell": True}):
            result = simulate(
                sample_source_paths, sample_config, sample_ignore_text, changes, "windows"
            )
            assert len(result.added) - len(result.removed) == result.net_change

    def test_unknown_module_ignored(self, make_config: Callable[..., DotfilesConfig]) -> None:
        """Changes for unknown modules have no effect."""
        result = simulate(["dot_bashrc"], make_config(shell=True), "", {"nope": True}, "linux")
        assert result.has_changes is False

    def test_base_config_unchanged(self, sample_config: DotfilesConfig) -> None:
        """The base configuration is not mutated."""
        simulate(["dot_bashrc"], sample_config, "", {"shell": False}, "linux")
        assert sample_config.is_module_enabled("shell") is True

    def test_to_dict(self, make_config: Callable[..., DotfilesConfig]) -> None:
        """The result serializes with a summary block."""
        result = simulate(["dot_bashrc"], make_config(shell=False), "", {"shell": True}, "linux")
        data = result.to_dict()
        assert data["summary"] == {"added": 1, "removed": 0, "total_before": 0, "total_after": 1}
        assert data["module_changes"] == {"shell": True}
