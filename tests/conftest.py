"""Shared test fixtures for pizzaria-deploy tests."""

import subprocess
from pathlib import Path

import pytest
from typer.testing import CliRunner

from pizzaria_deploy.config import DeployConfig, HealthConfig, ProbeConfig


def git(*args: str, cwd: Path) -> str:
    """Run git in cwd and return stripped stdout."""
    result = subprocess.run(
        ["git", *args],
        cwd=cwd,
        check=True,
        capture_output=True,
        text=True,
    )
    return result.stdout.strip()


def configure_identity(repo: Path) -> None:
    git("config", "user.email", "test@test.com", cwd=repo)
    git("config", "user.name", "Test User", cwd=repo)


def commit_file(repo: Path, name: str, content: str, message: str) -> str:
    """Write a file, commit it and return the new HEAD SHA."""
    (repo / name).write_text(content)
    git("add", name, cwd=repo)
    git("commit", "-m", message, cwd=repo)
    return git("rev-parse", "HEAD", cwd=repo)


@pytest.fixture
def runner() -> CliRunner:
    """Create CLI test runner."""
    return CliRunner()


@pytest.fixture
def remote_repo(tmp_path: Path) -> Path:
    """Create a bare remote with one commit on main, holding a compose manifest.

    Returns the path of a working clone ("upstream") used to push new
    commits; the bare repository sits next to it as remote.git.
    """
    bare = tmp_path / "remote.git"
    subprocess.run(["git", "init", "--bare", str(bare)], check=True, capture_output=True)

    upstream = tmp_path / "upstream"
    upstream.mkdir()
    git("init", cwd=upstream)
    configure_identity(upstream)
    commit_file(upstream, "docker-compose.yml", "services: {}\n", "Initial commit")
    git("branch", "-M", "main", cwd=upstream)
    git("remote", "add", "origin", str(bare), cwd=upstream)
    git("push", "-u", "origin", "main", cwd=upstream)
    git("symbolic-ref", "HEAD", "refs/heads/main", cwd=bare)
    return upstream


@pytest.fixture
def config(tmp_path: Path) -> DeployConfig:
    """Config with every path under tmp_path and no waiting."""
    cfg = DeployConfig(
        log_file=tmp_path / "deploy.log",
        lock_file=tmp_path / "deploy.lock",
        health=HealthConfig(
            delay_seconds=0,
            probes=[ProbeConfig(service="frontend", port=3000)],
        ),
    )
    cfg.repository.path = tmp_path / "checkout"
    cfg.repository.url = str(tmp_path / "remote.git")
    cfg.compose.settle_seconds = 0
    return cfg


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """TOML config pointing log and lock files into tmp_path."""
    path = tmp_path / "config.toml"
    path.write_text(
        f"""log_file = "{tmp_path / 'deploy.log'}"
lock_file = "{tmp_path / 'deploy.lock'}"

[repository]
path = "{tmp_path / 'checkout'}"
url = "{tmp_path / 'remote.git'}"
"""
    )
    return path
