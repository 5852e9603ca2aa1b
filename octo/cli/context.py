from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer

from octo.core.config import DEFAULT_CONFIG_FILENAME, Config, load_config, load_config_or_default
from octo.core.result import Err
from octo.output.console import ConsoleProtocol, RichConsole
from octo.output.errors import octopus_error_exit_code, print_octopus_error
from octo.services.errors import invalid_config


@dataclass(frozen=True, slots=True)
class GlobalOptions:
    """Options given before the command name."""

    config_path: Path | None = None
    timeout: float | None = None
    verbose: bool = False


@dataclass(frozen=True, slots=True)
class CLIContext:
    config: Config
    console: ConsoleProtocol
    timeout: float


def build_context(options: GlobalOptions | None = None) -> CLIContext:
    options = options or GlobalOptions()
    console = RichConsole(verbose=options.verbose)

    if options.config_path is not None:
        config_result = load_config(options.config_path)
    else:
        config_result = load_config_or_default(Path.cwd() / DEFAULT_CONFIG_FILENAME)

    if isinstance(config_result, Err):
        error = invalid_config(config_result.error.message, config_result.error.path)
        print_octopus_error(error, console)
        raise typer.Exit(code=octopus_error_exit_code(error))

    config = config_result.value
    timeout = options.timeout if options.timeout is not None else config.server.timeout
    return CLIContext(config=config, console=console, timeout=timeout)
