"""
Integration Tests for run.py CLI.

Tests the CLI as a whole with real execution paths.
"""

import subprocess
import sys
from pathlib import Path

# Project root for running commands
PROJECT_ROOT = Path(__file__).parent.parent.parent


def run_cli(*args: str) -> subprocess.CompletedProcess:
    return subprocess.run(
        [sys.executable, "run.py", *args],
        cwd=PROJECT_ROOT,
        capture_output=True,
        text=True,
    )


class TestRunCLI:
    """Integration tests for run.py command-line interface."""

    def test_help_returns_zero_exit_code(self):
        result = run_cli("--help")

        assert result.returncode == 0
        assert "Usage:" in result.stdout
        assert "--action" in result.stdout

    def test_info_action_succeeds(self):
        result = run_cli("--action", "info")

        assert result.returncode == 0
        assert "Beyond NP API" in result.stdout
        assert "--action migrate" in result.stdout

    def test_config_action_displays_yaml_settings(self):
        result = run_cli("--action", "config")

        assert result.returncode == 0
        assert "Security Settings (security.yaml)" in result.stdout
        assert "access_token_expire_minutes: 43200" in result.stdout

    def test_config_never_prints_secrets(self):
        result = run_cli("--action", "config")

        assert "jwt_secret" not in result.stdout
        assert "smtp_password" not in result.stdout

    def test_health_action_lists_tables(self):
        result = run_cli("--action", "health")

        assert result.returncode == 0
        assert "Health Check Results:" in result.stdout
        assert "documents" in result.stdout

    def test_invalid_action_fails(self):
        result = run_cli("--action", "nope")

        assert result.returncode != 0
        assert "Invalid value" in result.stderr
