"""speclint CLI - Main entrypoint."""

import typer
from rich.console import Console

from speclint import __version__
from speclint.cli.commands import lint_cmd
from speclint.compiler.config_loader import load_config
from speclint.core.logging import configure_logging
from speclint.kernel.exceptions import ConfigurationError

app = typer.Typer(
    name="speclint",
    help="speclint - validate package spec files before publishing them.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    pretty_exceptions_enable=False,
)

console = Console(stderr=True)

app.command(name="lint", help="Lint package spec files")(lint_cmd.lint)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"speclint {__version__}")
        raise typer.Exit()


@app.callback()
def callback(
    ctx: typer.Context,
    *,
    quiet: bool = typer.Option(False, "-q", "--quiet", help="Only log errors"),
    verbose: bool = typer.Option(False, "-V", "--verbose", help="Enable debug logging"),
    config_path: str | None = typer.Option(
        None, "--config", "-c", help="Path to a speclint TOML configuration file"
    ),
    log_level: str | None = typer.Option(
        None, "--log-level", help="Log level: debug|info|warning|error"
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Show version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """speclint - validate package spec files.

    Global flags are parsed here; the loaded configuration is stored on
    `ctx.obj` for subcommands.
    """
    if ctx.obj is None:
        ctx.obj = {}

    try:
        config = load_config(config_path)
    except ConfigurationError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(2) from e

    level = (log_level or config.logging.level).upper()
    if quiet:
        level = "ERROR"
    elif verbose:
        level = "DEBUG"

    configure_logging(
        level=level,  # type: ignore[arg-type]
        format=config.logging.format,
        output_file=config.logging.output_file,
        use_color=config.logging.use_color,
        include_timestamp=config.logging.include_timestamp,
    )

    ctx.obj.update({
        "config": config,
        "log_level": level,
    })


def main() -> None:
    """Main CLI entrypoint."""
    app()


if __name__ == "__main__":
    main()
