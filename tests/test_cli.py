"""CLI integration tests for pizzaria-deploy."""

import json
import logging
from pathlib import Path
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from pizzaria_deploy import __version__
from pizzaria_deploy.cli import app


@pytest.mark.cli
class TestVersionAndHelp:
    """Tests for --version and --help."""

    def test_version_shows_version(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert f"pizzaria-deploy {__version__}" in result.stdout

    def test_short_help_flag(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["-h"])
        assert result.exit_code == 0
        assert "--status" in result.stdout
        assert "--force" in result.stdout
        assert "init" in result.stdout


@pytest.mark.cli
class TestDeployEntry:
    """Tests for the default deploy invocation."""

    def test_no_flags_runs_conditional_deploy(
        self, runner: CliRunner, config_file: Path
    ) -> None:
        with patch("pizzaria_deploy.commands.deploy.AutoDeployer") as deployer_cls:
            deployer_cls.return_value.run.return_value = 0
            result = runner.invoke(app, ["--config", str(config_file)])
        assert result.exit_code == 0
        deployer_cls.return_value.run.assert_called_once_with(force=False)

    def test_force_flag(self, runner: CliRunner, config_file: Path) -> None:
        with patch("pizzaria_deploy.commands.deploy.AutoDeployer") as deployer_cls:
            deployer_cls.return_value.run.return_value = 0
            result = runner.invoke(app, ["-c", str(config_file), "-f"])
        assert result.exit_code == 0
        deployer_cls.return_value.run.assert_called_once_with(force=True)

    def test_fatal_exit_code_propagates(self, runner: CliRunner, config_file: Path) -> None:
        with patch("pizzaria_deploy.commands.deploy.AutoDeployer") as deployer_cls:
            deployer_cls.return_value.run.return_value = 1
            result = runner.invoke(app, ["--config", str(config_file)])
        assert result.exit_code == 1

    def test_config_from_environment(
        self, runner: CliRunner, config_file: Path, tmp_path: Path
    ) -> None:
        with patch("pizzaria_deploy.commands.deploy.AutoDeployer") as deployer_cls:
            deployer_cls.return_value.run.return_value = 0
            runner.invoke(app, [], env={"PIZZARIA_DEPLOY_CONFIG": str(config_file)})
        config = deployer_cls.call_args[0][0]
        assert config.repository.path == tmp_path / "checkout"

    def test_log_file_written(self, runner: CliRunner, config_file: Path, tmp_path: Path) -> None:
        def fake_run(force: bool) -> int:
            logging.getLogger("pizzaria_deploy.core").info("hello log")
            return 0

        with patch("pizzaria_deploy.commands.deploy.AutoDeployer") as deployer_cls:
            deployer_cls.return_value.run.side_effect = fake_run
            runner.invoke(app, ["--config", str(config_file)])
        assert "hello log" in (tmp_path / "deploy.log").read_text()

    def test_invalid_config_exits_1(self, runner: CliRunner, tmp_path: Path) -> None:
        path = tmp_path / "bad.toml"
        path.write_text("not = [valid")
        result = runner.invoke(app, ["--config", str(path)])
        assert result.exit_code == 1


@pytest.mark.cli
class TestStatusFlag:
    """Tests for --status."""

    def test_status_takes_no_lock(
        self, runner: CliRunner, config_file: Path, tmp_path: Path
    ) -> None:
        with (
            patch("pizzaria_deploy.commands.status.StatusReporter") as reporter_cls,
            patch("pizzaria_deploy.commands.deploy.AutoDeployer") as deployer_cls,
        ):
            result = runner.invoke(app, ["--config", str(config_file), "--status"])
        assert result.exit_code == 0
        reporter_cls.return_value.report.assert_called_once()
        deployer_cls.assert_not_called()
        assert not (tmp_path / "deploy.lock").exists()

    def test_status_json(self, runner: CliRunner, config_file: Path, tmp_path: Path) -> None:
        with patch(
            "pizzaria_deploy.core.status.compose_service.stats_snapshot", return_value=[]
        ):
            result = runner.invoke(app, ["--config", str(config_file), "--json", "-s"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["present"] is False
        assert data["project_dir"] == str(tmp_path / "checkout")


@pytest.mark.cli
class TestInitCommand:
    """Tests for the init subcommand."""

    def test_writes_template(self, runner: CliRunner, tmp_path: Path) -> None:
        path = tmp_path / "etc" / "config.toml"
        with patch("pizzaria_deploy.commands.init.subprocess.run") as mock_run:
            mock_run.return_value.returncode = 0
            result = runner.invoke(app, ["init", "--path", str(path)])
        assert result.exit_code == 0
        assert path.exists()
        assert "Created config template" in result.output

    def test_keeps_existing_config(self, runner: CliRunner, config_file: Path) -> None:
        original = config_file.read_text()
        with patch("pizzaria_deploy.commands.init.subprocess.run") as mock_run:
            mock_run.return_value.returncode = 0
            result = runner.invoke(app, ["init", "--path", str(config_file)])
        assert result.exit_code == 0
        assert "Config already exists" in result.output
        assert config_file.read_text() == original

    def test_missing_tool_exits_2(self, runner: CliRunner, tmp_path: Path) -> None:
        with patch(
            "pizzaria_deploy.commands.init.subprocess.run", side_effect=FileNotFoundError
        ):
            result = runner.invoke(app, ["init", "--path", str(tmp_path / "config.toml")])
        assert result.exit_code == 2
        assert "not found in PATH" in result.output
