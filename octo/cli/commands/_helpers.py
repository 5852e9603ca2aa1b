"""Shared helpers for CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING, NoReturn, TypeVar

import typer

from octo.core.errors import ErrorCode
from octo.core.result import Err, Result
from octo.output.errors import octopus_error_exit_code, print_octopus_error
from octo.services.errors import OctopusError, missing_parameter

if TYPE_CHECKING:
    from octo.cli.context import CLIContext

T = TypeVar("T")


def require_parameters(ctx: CLIContext, params: list[tuple[str, str | None]]) -> list[str]:
    """Report every missing parameter, then exit once if any was missing.

    Runs before any connection is opened. ``params`` pairs a label
    ("Project Name") with its value; empty strings count as missing.
    Returns the values in order when all are present.
    """
    missing = [label for label, value in params if not value]
    for label in missing:
        ctx.console.error(missing_parameter(label).message)
    if missing:
        exit_with_code(int(ErrorCode.FAILURE))
    return [value for _, value in params if value]


def exit_on_error(
    result: Result[T, OctopusError],
    ctx: CLIContext,
    *,
    operation: str,
) -> None:
    """Print the error and exit if result is Err, otherwise return."""
    if isinstance(result, Err):
        print_octopus_error(result.error, ctx.console, operation=operation)
        exit_with_code(octopus_error_exit_code(result.error))


def exit_with_code(code: int) -> NoReturn:
    raise typer.Exit(code=code)
