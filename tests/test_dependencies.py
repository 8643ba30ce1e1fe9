"""Tests for system dependency installation."""

import subprocess
from unittest.mock import MagicMock, call, patch

import pytest

from pizzaria_deploy.config import DeployConfig
from pizzaria_deploy.core.dependencies import (
    DependencyInstaller,
    dependencies_missing,
    required_executables,
)
from pizzaria_deploy.core.orchestrator import AutoDeployer
from pizzaria_deploy.errors import DependencyError, PrivilegeError
from pizzaria_deploy.services.packages import PackageError
from pizzaria_deploy.services.systemd import ServiceError

MODULE = "pizzaria_deploy.core.dependencies"


@pytest.mark.unit
class TestMissing:
    """Tests for executable detection."""

    def test_required_executables(self, config: DeployConfig) -> None:
        assert required_executables(config) == ["docker", "docker-compose", "git"]

    def test_compose_plugin_not_duplicated(self, config: DeployConfig) -> None:
        config.compose.command = ["docker", "compose"]
        assert required_executables(config) == ["docker", "git"]

    def test_reports_missing(self, config: DeployConfig) -> None:
        with patch(
            f"{MODULE}.shutil.which",
            side_effect=lambda exe: None if exe == "docker-compose" else f"/usr/bin/{exe}",
        ):
            assert dependencies_missing(config) == ["docker-compose"]


@pytest.mark.unit
class TestInstall:
    """Tests for DependencyInstaller.install."""

    def test_requires_root(self, config: DeployConfig) -> None:
        with (
            patch(f"{MODULE}.is_root", return_value=False),
            pytest.raises(PrivilegeError, match="run as root"),
        ):
            DependencyInstaller(config).install()

    def test_installs_only_missing_packages(self, config: DeployConfig) -> None:
        with (
            patch(f"{MODULE}.is_root", return_value=True),
            patch(f"{MODULE}.packages.update_index") as update,
            patch(
                f"{MODULE}.packages.is_installed",
                side_effect=lambda pkg: pkg in {"git", "cron"},
            ),
            patch(f"{MODULE}.packages.install") as install,
            patch(f"{MODULE}.systemd.start") as start,
            patch(f"{MODULE}.systemd.enable") as enable,
        ):
            DependencyInstaller(config).install()

        update.assert_called_once()
        assert install.call_args_list == [call("docker.io"), call("docker-compose")]
        start.assert_called_once_with("docker")
        enable.assert_called_once_with("docker")

    def test_install_failure_is_fatal(self, config: DeployConfig) -> None:
        with (
            patch(f"{MODULE}.is_root", return_value=True),
            patch(f"{MODULE}.packages.update_index"),
            patch(f"{MODULE}.packages.is_installed", return_value=False),
            patch(f"{MODULE}.packages.install", side_effect=PackageError("no candidate")),
            patch(f"{MODULE}.systemd.start") as start,
            pytest.raises(DependencyError, match="Failed to install docker.io"),
        ):
            DependencyInstaller(config).install()
        start.assert_not_called()

    def test_service_start_failure_is_fatal(self, config: DeployConfig) -> None:
        with (
            patch(f"{MODULE}.is_root", return_value=True),
            patch(f"{MODULE}.packages.update_index"),
            patch(f"{MODULE}.packages.is_installed", return_value=True),
            patch(f"{MODULE}.systemd.start", side_effect=ServiceError("masked")),
            pytest.raises(DependencyError, match="Failed to start docker service"),
        ):
            DependencyInstaller(config).install()

    def test_missing_dpkg_is_fatal(self, config: DeployConfig) -> None:
        """A failing package query ends in DependencyError like a failing install."""

        def fake_run(cmd: list[str], **kwargs: object) -> subprocess.CompletedProcess:
            if cmd[0] == "dpkg":
                raise FileNotFoundError(cmd[0])
            return subprocess.CompletedProcess(cmd, 0, stdout="", stderr="")

        with (
            patch(f"{MODULE}.is_root", return_value=True),
            patch("subprocess.run", side_effect=fake_run),
            pytest.raises(DependencyError, match="Executable not found: dpkg"),
        ):
            DependencyInstaller(config).install()

    def test_missing_dpkg_exits_1(self, config: DeployConfig) -> None:
        """The run reports the failure and exits 1 instead of crashing."""
        with (
            patch(f"{MODULE}.is_root", return_value=True),
            patch(f"{MODULE}.shutil.which", return_value=None),
            patch(f"{MODULE}.packages.update_index"),
            patch(f"{MODULE}.packages.is_installed", side_effect=PackageError("no dpkg")),
        ):
            deployer = AutoDeployer(
                config,
                repository=MagicMock(),
                executor=MagicMock(),
                scheduler=MagicMock(),
                reporter=MagicMock(),
            )
            assert deployer.run() == 1
        assert not config.lock_file.exists()
