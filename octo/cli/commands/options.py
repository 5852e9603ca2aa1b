"""Options shared by the release and promote commands."""

from __future__ import annotations

from typing import Any

import typer

SERVER_ENVVAR = "OCTOPUS_SERVER"
API_KEY_ENVVAR = "OCTOPUS_API_KEY"


def server_option() -> Any:
    return typer.Option(
        None,
        "-s",
        "--server",
        envvar=SERVER_ENVVAR,
        show_envvar=True,
        help="URL of the Octopus Deploy server.",
    )


def api_key_option() -> Any:
    return typer.Option(
        None,
        "-k",
        "--api-key",
        envvar=API_KEY_ENVVAR,
        show_envvar=True,
        help="API Key to use to connect to the Octopus Deploy server.",
    )


def project_name_option() -> Any:
    return typer.Option(None, "-p", "--project-name", help="The Project to interact with.")


def sem_ver_option() -> Any:
    return typer.Option(None, "-sv", "--sem-ver", help="The Semantic Version to interact with.")
