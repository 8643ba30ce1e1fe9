"""pizzaria-deploy CLI: auto-deploy the pizzaria app from its git repository."""

from pathlib import Path

import typer

from pizzaria_deploy import __version__

from .commands import init, run_deploy, show_status
from .config import load_config
from .constants import CONFIG_ENV_VAR, DEFAULT_CONFIG_PATH
from .errors import ConfigError
from .logging import configure_logging
from .output import OutputContext, set_output_context


def _version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"pizzaria-deploy {__version__}")
        raise typer.Exit()


app = typer.Typer(
    name="pizzaria-deploy",
    help=(
        "Install dependencies, sync the pizzaria repository, rebuild its containers "
        "and keep it updated from cron. Without options, redeploys only when the "
        "repository changed or no container is running."
    ),
    context_settings={"help_option_names": ["-h", "--help"]},
    add_completion=False,
)

app.command("init")(init)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    status: bool = typer.Option(
        False,
        "--status",
        "-s",
        help="Show application status only",
    ),
    force: bool = typer.Option(
        False,
        "--force",
        "-f",
        help="Force deployment even if up to date",
    ),
    config_path: Path = typer.Option(
        DEFAULT_CONFIG_PATH,
        "--config",
        "-c",
        envvar=CONFIG_ENV_VAR,
        help="Config file (defaults are used if it doesn't exist)",
    ),
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Increase verbosity (-v, -vv)",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Suppress non-error output",
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output status in JSON format for automation",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable colored output",
    ),
) -> None:
    """pizzaria-deploy - automated deployment for the pizzaria application."""
    if ctx.invoked_subcommand is not None:
        console = configure_logging(verbosity=verbose, quiet=quiet, no_color=no_color)
        set_output_context(OutputContext(console=console, json_mode=json_output))
        return

    try:
        config = load_config(config_path)
    except ConfigError as e:
        console = configure_logging(verbosity=verbose, quiet=quiet, no_color=no_color)
        OutputContext(console=console, json_mode=json_output).error(str(e))
        raise typer.Exit(1) from None

    console = configure_logging(
        verbosity=verbose,
        quiet=quiet,
        no_color=no_color,
        log_file=config.log_file,
    )
    set_output_context(OutputContext(console=console, json_mode=json_output))

    if status:
        show_status(config)
        raise typer.Exit(0)

    raise typer.Exit(run_deploy(config, force=force))
