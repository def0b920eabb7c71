"""Unit tests for the reset command."""

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from teardownctl.cleanup.errors import UnmountError
from teardownctl.cli.main import app
from teardownctl.core.paths import CONFIG_ENV_VAR
from typer.testing import CliRunner

runner = CliRunner()


@pytest.fixture(autouse=True)
def _no_default_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Point the default config location at a file that does not exist."""
    monkeypatch.setenv(CONFIG_ENV_VAR, str(tmp_path / "absent.toml"))


@pytest.fixture
def mock_step() -> MagicMock:
    """Patch DirectoriesStep and return the mocked instance."""
    with (
        patch("teardownctl.cli.commands.reset.DirectoriesStep") as step_cls,
        patch("teardownctl.cli.commands.reset.SystemMounter") as mounter_cls,
    ):
        mounter_cls.return_value.is_available.return_value = True
        step = step_cls.return_value
        step.name = "remove directories step"
        step.cls = step_cls
        yield step


class TestResetCommand:
    """Tests for teardownctl reset."""

    def test_reset_with_yes(self, mock_step: MagicMock) -> None:
        """--yes skips the prompt and runs the step."""
        result = runner.invoke(app, ["reset", "--yes"])

        assert result.exit_code == 0
        mock_step.run.assert_called_once()
        assert "completed" in result.stdout

    def test_reset_uses_default_target(self, mock_step: MagicMock) -> None:
        """Without config the default directories are torn down."""
        runner.invoke(app, ["reset", "--yes"])

        target = mock_step.cls.call_args[0][0]
        assert target.data_dir == "/var/lib/k0s"
        assert target.run_dir == "/run/k0s"
        assert target.kubelet_dir == "/var/lib/k0s/kubelet"

    def test_reset_overrides(self, mock_step: MagicMock) -> None:
        """Command line options override the configuration."""
        result = runner.invoke(
            app,
            ["reset", "--yes", "--data-dir", "/srv/k0s", "--run-dir", "/run/srv"],
        )

        assert result.exit_code == 0
        target = mock_step.cls.call_args[0][0]
        assert target.data_dir == "/srv/k0s"
        assert target.run_dir == "/run/srv"
        assert target.kubelet_dir == "/srv/k0s/kubelet"

    def test_reset_relative_override_rejected(self, mock_step: MagicMock) -> None:
        """A relative directory override is rejected before anything runs."""
        result = runner.invoke(app, ["reset", "--yes", "--data-dir", "relative"])

        assert result.exit_code == 1
        mock_step.run.assert_not_called()

    def test_reset_from_config_file(self, mock_step: MagicMock, tmp_path: Path) -> None:
        """Directories are read from --config."""
        config_path = tmp_path / "config.toml"
        config_path.write_text('data_dir = "/opt/k0s"\nkubelet_dir = "/var/lib/kubelet"\n')

        result = runner.invoke(app, ["reset", "--yes", "--config", str(config_path)])

        assert result.exit_code == 0
        target = mock_step.cls.call_args[0][0]
        assert target.data_dir == "/opt/k0s"
        assert target.kubelet_dir == "/var/lib/kubelet"

    def test_reset_missing_config_file(self, mock_step: MagicMock, tmp_path: Path) -> None:
        """An explicit missing config file is an error."""
        result = runner.invoke(
            app, ["reset", "--yes", "--config", str(tmp_path / "missing.toml")]
        )

        assert result.exit_code == 1
        mock_step.run.assert_not_called()

    def test_reset_declined(self, mock_step: MagicMock) -> None:
        """Declining the prompt aborts without running the step."""
        result = runner.invoke(app, ["reset"], input="n\n")

        assert result.exit_code == 0
        assert "Aborted" in result.stdout
        mock_step.run.assert_not_called()

    def test_reset_confirmed(self, mock_step: MagicMock) -> None:
        """Confirming the prompt runs the step."""
        result = runner.invoke(app, ["reset"], input="y\n")

        assert result.exit_code == 0
        mock_step.run.assert_called_once()

    def test_reset_failure_exit_code(self, mock_step: MagicMock) -> None:
        """A failing step exits 1 and reports the step name."""
        mock_step.run.side_effect = UnmountError("/var/lib/k0s/kubelet/pods/x", "busy")

        result = runner.invoke(app, ["reset", "--yes"])

        assert result.exit_code == 1
        assert "remove directories step failed" in result.output
        assert "/var/lib/k0s/kubelet/pods/x" in result.output

    def test_reset_shows_plan(self, mock_step: MagicMock) -> None:
        """The teardown plan lists every directory."""
        result = runner.invoke(app, ["reset", "--yes"])

        assert "Teardown Plan" in result.stdout
        assert "/run/k0s" in result.stdout
