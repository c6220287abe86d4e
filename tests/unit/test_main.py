"""
Unit tests for the command line entry point.

Runs the Typer app with CliRunner; subprocess calls are mocked.
"""

import json
from subprocess import CompletedProcess
from unittest.mock import patch

import pytest

from server_backup.cli.main import app
from server_backup.cores.workspace_registry import WorkspaceRegistry
from server_backup.helpers.logging import log_manager


@pytest.mark.unit
class TestHelp:

    @pytest.mark.parametrize("flag", ["-h", "--help"])
    def test_help_exits_zero(self, cli_runner, flag):
        with patch("subprocess.run") as mock_run:
            result = cli_runner.invoke(app, [flag])

        assert result.exit_code == 0
        assert "--config" in result.stdout
        assert "--verbose" in result.stdout
        mock_run.assert_not_called()


@pytest.mark.unit
class TestRun:

    def test_missing_config_exits_before_run(self, cli_runner, tmp_path):
        with patch("subprocess.run") as mock_run:
            result = cli_runner.invoke(app, ["--config", str(tmp_path / "missing.json")])

        assert result.exit_code == 1
        assert "Configuration file not found" in result.stdout
        mock_run.assert_not_called()

    def test_invalid_log_level(self, cli_runner, tmp_config):
        result = cli_runner.invoke(app, ["-c", str(tmp_config), "--log-level", "LOUD"])

        assert result.exit_code == 1
        assert "Unknown log level" in result.stdout

    def test_success(self, cli_runner, tmp_config):
        with patch("subprocess.run") as mock_run:
            mock_run.return_value = CompletedProcess([], 0, stdout="", stderr=None)
            result = cli_runner.invoke(app, ["-c", str(tmp_config)])

        assert result.exit_code == 0
        assert "Backup /data/app" in result.stdout
        assert " -> s3:b...ok." in result.stdout
        assert result.stdout.rstrip().endswith("Everything succeded =)")
        argv = mock_run.call_args[0][0]
        assert argv[-1] == "s3+http://b/web1/app"
        env = mock_run.call_args.kwargs["env"]
        assert env["PASSPHRASE"] == "test-passphrase"
        assert env["AWS_ACCESS_KEY_ID"] == "AKIDTEST"

    def test_failure(self, cli_runner, tmp_config):
        with patch("subprocess.run") as mock_run:
            mock_run.return_value = CompletedProcess([], 1, stdout="connection refused", stderr=None)
            result = cli_runner.invoke(app, ["-c", str(tmp_config)])

        assert result.exit_code == 1
        assert "data/app->s3:b failed:" in result.stdout
        assert "connection refused" in result.stdout

    def test_verbose_hides_secrets(self, cli_runner, tmp_config):
        with patch("subprocess.run") as mock_run:
            mock_run.return_value = CompletedProcess([], 0, stdout="", stderr=None)
            result = cli_runner.invoke(app, ["-c", str(tmp_config), "-v"])

        assert result.exit_code == 0
        assert "duplicity --s3-use-new-style /data/app s3+http://b/web1/app" in result.stdout
        assert "s3-secret" not in result.stdout
        assert "test-passphrase" not in result.stdout

    def test_empty_plan_warns_and_succeeds(self, cli_runner, tmp_path, config_data):
        config_data["destinations"] = []
        config_file = tmp_path / "config.json"
        config_file.write_text(json.dumps(config_data))

        with patch("subprocess.run") as mock_run:
            result = cli_runner.invoke(app, ["-c", str(config_file)])

        assert result.exit_code == 0
        assert "No sources or no destinations configured" in result.stdout
        mock_run.assert_not_called()

    def test_workspaces_swept_after_run(self, cli_runner, tmp_config, tmp_path):
        leftover = tmp_path / "mysql-backup-leftover"
        leftover.mkdir()
        WorkspaceRegistry.get_instance().register(leftover)

        with patch("subprocess.run") as mock_run:
            mock_run.return_value = CompletedProcess([], 0, stdout="", stderr=None)
            cli_runner.invoke(app, ["-c", str(tmp_config)])

        assert not leftover.exists()

    def test_log_file_receives_log_lines(self, cli_runner, tmp_path, config_data):
        config_data["destinations"] = []
        config_file = tmp_path / "config.json"
        config_file.write_text(json.dumps(config_data))
        log_file = tmp_path / "logs" / "run.log"

        try:
            with patch("subprocess.run"):
                result = cli_runner.invoke(app, ["-c", str(config_file), "--log-file", str(log_file)])
        finally:
            log_manager.configure()

        assert result.exit_code == 0
        assert "WARNING" in log_file.read_text()
        assert "Nothing to do" in log_file.read_text()
