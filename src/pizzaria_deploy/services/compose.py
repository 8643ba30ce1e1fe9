"""Compose and docker CLI integration."""

import re
from pathlib import Path

from ..constants import DOCKER_QUERY_TIMEOUT
from .process import CommandError, run_command

# "0.0.0.0:3000->3000/tcp" -> host port 3000
_PUBLISHED_PORT = re.compile(r":(\d+)->")


class ComposeError(CommandError):
    """Compose or docker command failed."""


class Compose:
    """Runs the compose tool against one manifest.

    Commands run from the manifest's directory so relative build contexts
    and .env files resolve the way they do when invoked by hand.
    """

    def __init__(self, command: list[str], manifest: Path):
        self.command = command
        self.manifest = manifest

    def run(self, *args: str, check: bool = True, timeout: float | None = None) -> str:
        """Run a compose subcommand and return stripped stdout.

        Raises:
            ComposeError: If the tool is missing or fails with check=True
        """
        result = run_command(
            [*self.command, "-f", str(self.manifest), *args],
            cwd=self.manifest.parent,
            timeout=timeout,
            check=check,
            error_class=ComposeError,
        )
        return result.stdout.strip()

    def is_available(self) -> bool:
        """Return True if `ps` works for this manifest."""
        try:
            self.run("ps", "-q", timeout=DOCKER_QUERY_TIMEOUT)
        except ComposeError:
            return False
        return True

    def container_ids(self) -> list[str]:
        """List container IDs of the project."""
        output = self.run("ps", "-q", timeout=DOCKER_QUERY_TIMEOUT)
        return [line for line in output.splitlines() if line.strip()]

    def ps(self) -> str:
        """Human-readable container table."""
        return self.run("ps", timeout=DOCKER_QUERY_TIMEOUT)

    def down(self, remove_images: bool = False) -> None:
        """Stop and remove containers (and optionally all images)."""
        args = ["down"]
        if remove_images:
            args.extend(["--rmi", "all"])
        args.append("--remove-orphans")
        self.run(*args)

    def build(self) -> None:
        """Rebuild images without layer cache, pulling fresh base images."""
        self.run("build", "--no-cache", "--pull")

    def up(self) -> None:
        """Start containers in detached mode."""
        self.run("up", "-d")

    def port(self, service: str, container_port: int) -> int | None:
        """Resolve the host port published for a service's container port."""
        try:
            output = self.run("port", service, str(container_port), timeout=DOCKER_QUERY_TIMEOUT)
        except ComposeError:
            return None
        return parse_host_port(output)


def parse_host_port(output: str) -> int | None:
    """Parse `compose port` output such as "0.0.0.0:32768"."""
    line = output.strip().splitlines()[0] if output.strip() else ""
    _, _, port = line.rpartition(":")
    return int(port) if port.isdigit() else None


def published_ports(ps_output: str) -> list[int]:
    """Host ports published in `compose ps` output, deduplicated in order."""
    ports: list[int] = []
    for match in _PUBLISHED_PORT.finditer(ps_output):
        port = int(match.group(1))
        if port not in ports:
            ports.append(port)
    return ports


def lines_publishing(ps_output: str, ports: list[int]) -> list[str]:
    """Lines of `compose ps` output that publish any of the given host ports."""
    watched = set(ports)
    return [
        line.strip()
        for line in ps_output.splitlines()
        if watched.intersection(int(p) for p in _PUBLISHED_PORT.findall(line))
    ]


def prune_system(docker: str = "docker") -> None:
    """Remove unused docker data (stopped containers, dangling images, networks)."""
    run_command([docker, "system", "prune", "-f"], error_class=ComposeError)


def stats_snapshot(docker: str = "docker", max_lines: int | None = None) -> list[str]:
    """One-shot CPU/memory table from `docker stats`."""
    result = run_command(
        [
            docker,
            "stats",
            "--no-stream",
            "--format",
            "table {{.Container}}\t{{.CPUPerc}}\t{{.MemUsage}}",
        ],
        timeout=DOCKER_QUERY_TIMEOUT,
        error_class=ComposeError,
    )
    lines = result.stdout.strip().splitlines()
    return lines[:max_lines] if max_lines is not None else lines
