"""Init command implementation."""

import subprocess
from pathlib import Path

import typer

from ..config import load_config, write_config_template
from ..constants import CONFIG_ENV_VAR, DEFAULT_CONFIG_PATH, INIT_TOOL_CHECK_TIMEOUT
from ..errors import ConfigError
from ..output import get_output_context


def init(
    path: Path = typer.Option(
        DEFAULT_CONFIG_PATH,
        "--path",
        "-p",
        envvar=CONFIG_ENV_VAR,
        help="Where to write the config template",
    ),
) -> None:
    """Write a config template and check the toolchain."""
    ctx = get_output_context()

    if path.exists():
        ctx.console.print(f"[yellow]Config already exists:[/yellow] {path}")
    else:
        try:
            write_config_template(path)
        except OSError as e:
            ctx.error(f"Cannot write config: {e}")
            raise typer.Exit(1) from None
        ctx.console.print(f"[green]Created config template:[/green] {path}")

    try:
        config = load_config(path)
    except ConfigError as e:
        ctx.error(str(e))
        raise typer.Exit(1) from None

    # Validate toolchain
    tools = {
        "git": ["git", "--version"],
        config.docker_command: [config.docker_command, "--version"],
        " ".join(config.compose.command): [*config.compose.command, "version"],
        "crontab": ["crontab", "-l"],
        "systemctl": ["systemctl", "--version"],
    }

    all_ok = True
    for name, cmd in tools.items():
        try:
            result = subprocess.run(
                cmd, capture_output=True, text=True, timeout=INIT_TOOL_CHECK_TIMEOUT
            )
            # crontab -l exits 1 when the user simply has no crontab yet
            if result.returncode == 0 or name == "crontab":
                ctx.console.print(f"[green]✓[/green] {name}")
            else:
                ctx.console.print(f"[red]✗[/red] {name}: {result.stderr.strip()[:50]}")
                all_ok = False
        except FileNotFoundError:
            ctx.console.print(f"[red]✗[/red] {name}: not found in PATH")
            all_ok = False
        except subprocess.TimeoutExpired:
            ctx.console.print(f"[yellow]?[/yellow] {name}: timed out")

    if not all_ok:
        ctx.console.print(
            "\n[yellow]Warning: Some tools are missing; "
            "the first deploy run as root installs them[/yellow]"
        )
        raise typer.Exit(2)

    ctx.console.print("\n[bold green]pizzaria-deploy initialized successfully![/bold green]")
