from __future__ import annotations

import typer

from octo.cli.commands._helpers import exit_on_error, require_parameters
from octo.cli.commands.options import (
    api_key_option,
    project_name_option,
    sem_ver_option,
    server_option,
)
from octo.cli.context import build_context
from octo.octopus.client import Endpoint, open_client
from octo.services.workflow import ReleaseRequest, create_release


def release(
    ctx: typer.Context,
    server: str | None = server_option(),
    api_key: str | None = api_key_option(),
    project_name: str | None = project_name_option(),
    sem_ver: str | None = sem_ver_option(),
    release_notes: str | None = typer.Option(
        None, "-rn", "--release-notes", help="The Release notes"
    ),
) -> None:
    """Creates an Octopus Deploy release."""
    cli = build_context(ctx.obj)
    server = server or cli.config.server.url
    api_key = api_key or cli.config.server.api_key

    required = require_parameters(
        cli,
        [
            ("Server", server),
            ("API Key", api_key),
            ("Project Name", project_name),
            ("SemVer", sem_ver),
        ],
    )
    server, api_key, project_name, sem_ver = required

    request = ReleaseRequest(
        project_name=project_name,
        version=sem_ver,
        release_notes=release_notes,
    )
    with open_client(Endpoint(server=server, api_key=api_key, timeout=cli.timeout)) as client:
        result = create_release(client, request, console=cli.console)

    exit_on_error(result, cli, operation="Create Release")
    cli.console.success(f"release {result.unwrap().version} created for project {project_name}")
