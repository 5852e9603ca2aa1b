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
from octo.services.workflow import PromotionRequest, promote_release


def promote(
    ctx: typer.Context,
    server: str | None = server_option(),
    api_key: str | None = api_key_option(),
    project_name: str | None = project_name_option(),
    sem_ver: str | None = sem_ver_option(),
    environment: str | None = typer.Option(
        None, "-e", "--environment", help="The environment to promote the release to."
    ),
) -> None:
    """Promotes an Octopus Deploy release."""
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
            ("Environment", environment),
        ],
    )
    server, api_key, project_name, sem_ver, environment = required

    request = PromotionRequest(
        project_name=project_name,
        version=sem_ver,
        environment_name=environment,
    )
    with open_client(Endpoint(server=server, api_key=api_key, timeout=cli.timeout)) as client:
        result = promote_release(client, request, console=cli.console)

    exit_on_error(result, cli, operation="Promote Release")
    cli.console.success(f"release {sem_ver} of {project_name} promoted to {environment}")
