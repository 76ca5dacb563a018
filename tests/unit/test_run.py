"""
Unit Tests for run.py Entry Script.

Tests individual functions with mocked dependencies. Subprocess-backed
actions (server, migrate, test) never spawn anything.
"""

import subprocess
import sys
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from click.testing import CliRunner

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from run import PROJECT_ROOT, main, validate_project_root


@pytest.fixture
def runner():
    """Create Click test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def quiet_logging():
    """Keep the CLI from reconfiguring global logging during tests."""
    with patch("run.setup_logging") as mock_setup:
        yield mock_setup


class TestValidateProjectRoot:

    def test_returns_root_when_marker_exists(self, tmp_path):
        (tmp_path / ".project_root").touch()

        with patch("run.PROJECT_ROOT", tmp_path):
            assert validate_project_root() == tmp_path

    def test_exits_when_marker_missing(self, tmp_path):
        with patch("run.PROJECT_ROOT", tmp_path):
            with pytest.raises(SystemExit) as exc_info:
                validate_project_root()
        assert exc_info.value.code == 1


class TestMainCLI:

    def test_help_displays_usage(self, runner):
        result = runner.invoke(main, ["--help"])

        assert result.exit_code == 0
        assert "Beyond NP API Entry Point" in result.output
        for option in ("--action", "--verbose", "--revision", "--test-type", "--coverage"):
            assert option in result.output

    def test_info_action_displays_app_info(self, runner):
        result = runner.invoke(main, ["--action", "info"])

        assert result.exit_code == 0
        assert "Beyond NP API" in result.output
        assert "Available Actions:" in result.output
        assert "--action migrate" in result.output

    def test_default_action_is_info(self, runner):
        result = runner.invoke(main, [])

        assert result.exit_code == 0
        assert "Available Actions:" in result.output

    @pytest.mark.parametrize(
        "flags, level",
        [([], "WARNING"), (["--verbose"], "INFO"), (["-d"], "DEBUG"), (["-v", "-d"], "DEBUG")],
    )
    def test_flags_select_log_level(self, runner, quiet_logging, flags, level):
        runner.invoke(main, ["--action", "info", *flags])

        quiet_logging.assert_called_once_with(level=level, format_type="console")

    def test_invalid_action_shows_error(self, runner):
        result = runner.invoke(main, ["--action", "invalid"])

        assert result.exit_code != 0
        assert "Invalid value" in result.output


class TestConfigAction:

    def test_shows_every_yaml_section(self, runner):
        result = runner.invoke(main, ["--action", "config"])

        assert result.exit_code == 0
        for heading in (
            "Application Settings (application.yaml)",
            "Database Settings (database.yaml)",
            "Logging Settings (logging.yaml)",
            "Security Settings (security.yaml)",
            "Email Settings (email.yaml)",
        ):
            assert heading in result.output
        assert "Beyond NP API" in result.output

    def test_nested_values_are_indented(self, runner):
        result = runner.invoke(main, ["--action", "config"])

        assert "  server:" in result.output
        assert "    port: 8000" in result.output


class TestHealthAction:

    def test_reports_each_check(self, runner):
        result = runner.invoke(main, ["--action", "health"])

        assert result.exit_code == 0
        assert "Health Check Results:" in result.output
        for check in ("Core imports", "YAML configuration", "Database models"):
            assert check in result.output
        assert "PASS" in result.output

    def test_models_check_lists_tables(self, runner):
        result = runner.invoke(main, ["--action", "health"])

        assert "collections" in result.output
        assert "user_shortlists" in result.output


class TestSubprocessActions:

    def test_server_uses_configured_host_and_port(self, runner):
        with patch("run.subprocess.run") as mock_run:
            result = runner.invoke(main, ["--action", "server"])

        assert result.exit_code == 0
        cmd = mock_run.call_args.args[0]
        assert "beyondnp.backend.main:app" in cmd
        assert cmd[cmd.index("--host") + 1] == "127.0.0.1"
        assert cmd[cmd.index("--port") + 1] == "8000"
        assert "--reload" not in cmd

    def test_server_overrides_and_reload(self, runner):
        with patch("run.subprocess.run") as mock_run:
            runner.invoke(
                main,
                ["--action", "server", "--host", "0.0.0.0", "--port", "9000", "--reload"],
            )

        cmd = mock_run.call_args.args[0]
        assert cmd[cmd.index("--host") + 1] == "0.0.0.0"
        assert cmd[cmd.index("--port") + 1] == "9000"
        assert "--reload" in cmd

    def test_server_failure_propagates_exit_code(self, runner):
        error = subprocess.CalledProcessError(returncode=3, cmd="uvicorn")
        with patch("run.subprocess.run", side_effect=error):
            result = runner.invoke(main, ["--action", "server"])

        assert result.exit_code == 3

    def test_migrate_upgrades_to_revision(self, runner):
        with patch("run.subprocess.run", return_value=MagicMock(returncode=0)) as mock_run:
            result = runner.invoke(main, ["--action", "migrate", "--revision", "0001"])

        assert result.exit_code == 0
        cmd = mock_run.call_args.args[0]
        assert cmd[-2:] == ["upgrade", "0001"]
        assert str(PROJECT_ROOT / "alembic.ini") in cmd

    def test_migrate_failure_exits_nonzero(self, runner):
        with patch("run.subprocess.run", return_value=MagicMock(returncode=1)):
            result = runner.invoke(main, ["--action", "migrate"])

        assert result.exit_code == 1

    @pytest.mark.parametrize(
        "test_type, target",
        [("all", "tests/"), ("unit", "tests/unit"), ("integration", "tests/integration")],
    )
    def test_test_action_targets_suite(self, runner, test_type, target):
        with patch("run.subprocess.run", return_value=MagicMock(returncode=0)) as mock_run:
            result = runner.invoke(main, ["--action", "test", "--test-type", test_type])

        assert result.exit_code == 0
        cmd = mock_run.call_args.args[0]
        assert target in cmd
        assert not any(arg.startswith("--cov") for arg in cmd)

    def test_test_action_with_coverage(self, runner):
        with patch("run.subprocess.run", return_value=MagicMock(returncode=0)) as mock_run:
            runner.invoke(main, ["--action", "test", "--coverage"])

        assert "--cov=beyondnp/backend" in mock_run.call_args.args[0]
