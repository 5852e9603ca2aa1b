from __future__ import annotations

from pathlib import Path

import typer

from octo import __version__
from octo.cli.commands.promote_cmd import promote
from octo.cli.commands.release_cmd import release
from octo.cli.context import GlobalOptions


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-?", "-h", "--help"]},
)


app.command()(release)
app.command()(promote)


def _print_version(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=0)


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        callback=_print_version,
        is_eager=True,
        help="Show version and exit.",
    ),
    config: Path | None = typer.Option(
        None,
        "--config",
        help="Config file (default: ./octo.toml when present).",
    ),
    timeout: float | None = typer.Option(
        None,
        "--timeout",
        min=0.1,
        help="Request timeout in seconds.",
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Show each lookup step."),
) -> None:
    """Create and promote Octopus Deploy releases."""
    del version
    ctx.obj = GlobalOptions(config_path=config, timeout=timeout, verbose=verbose)


def main() -> None:
    app()
