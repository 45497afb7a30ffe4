from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

import typer

from miniship.core.config import CONFIG_FILE_NAME, Config, load_config
from miniship.core.errors import ErrorCode
from miniship.core.result import Err
from miniship.output.console import ConsoleProtocol, RichConsole

CONFIG_ENV_VAR = "MINISHIP_CONFIG"


@dataclass(frozen=True, slots=True)
class CLIContext:
    config: Config
    console: ConsoleProtocol


def build_context() -> CLIContext:
    """Load configuration and build the console for a command.

    ``--config`` (via MINISHIP_CONFIG) must load; an implicit
    ./miniship.toml is used only when it parses.
    """
    explicit = os.environ.get(CONFIG_ENV_VAR)
    if explicit:
        path = Path(explicit)
        result = load_config(path)
        if isinstance(result, Err):
            typer.echo(f"error: {result.error.message}", err=True)
            raise typer.Exit(code=int(ErrorCode.ENV_ERROR))
        return CLIContext(config=result.value, console=RichConsole())

    path = Path.cwd() / CONFIG_FILE_NAME
    if path.exists():
        result = load_config(path)
        if not isinstance(result, Err):
            return CLIContext(config=result.value, console=RichConsole())

    return CLIContext(config=Config(), console=RichConsole())
