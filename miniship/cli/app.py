from __future__ import annotations

import os
from pathlib import Path

import typer

from miniship import __version__
from miniship.cli.commands.generator_cmd import generator
from miniship.cli.commands.reconcile_cmd import reconcile
from miniship.cli.context import CONFIG_ENV_VAR


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)


app.command()(reconcile)
app.command()(generator)


def _show_version(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=0)


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit.",
        callback=_show_version,
        is_eager=True,
    ),
    config: Path | None = typer.Option(
        None,
        "--config",
        help="Path to miniship.toml (default: ./miniship.toml if present)",
    ),
) -> None:
    if config is not None:
        os.environ[CONFIG_ENV_VAR] = str(config.expanduser())


def main() -> None:
    app()
