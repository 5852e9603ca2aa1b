"""Error presentation for workflow failures."""

from __future__ import annotations

from typing import TYPE_CHECKING

from octo.core.errors import ErrorCode
from octo.output.console import Style

if TYPE_CHECKING:
    from octo.output.console import ConsoleProtocol
    from octo.services.errors import OctopusError

__all__ = ["print_octopus_error", "octopus_error_exit_code"]


def print_octopus_error(
    error: OctopusError,
    console: ConsoleProtocol,
    *,
    operation: str | None = None,
) -> None:
    """Print an error, forwarding the server's diagnostics verbatim.

    Args:
        error: The failure to render
        console: Output target
        operation: Optional title, e.g. "Create Release"
    """
    if operation:
        console.error(f"Octopus Deploy {operation} failed with message:")
        console.print(error.message)
    else:
        console.error(error.message)
    if error.hint:
        console.print(f"hint: {error.hint}", Style.DIM)
    if error.detail:
        for line in error.detail.splitlines():
            console.print(line, Style.DIM)


def octopus_error_exit_code(error: OctopusError) -> int:
    """Exit code for a failed workflow.

    Pipelines only distinguish success from failure, so every kind maps to FAILURE.
    """
    del error
    return int(ErrorCode.FAILURE)
