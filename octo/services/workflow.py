"""Release creation and promotion workflows.

Each workflow resolves names, builds one request, submits it, and stops at
the first failing step. At most one create call is made per workflow.
"""

from __future__ import annotations

from dataclasses import dataclass

from octo.core.result import Err, Ok, Result
from octo.octopus.client import OctopusClient
from octo.octopus.model import Deployment, Release
from octo.output.console import ConsoleProtocol
from octo.services.builders import build_deployment, build_release
from octo.services.errors import OctopusError
from octo.services.resolver import find_environment_by_name, find_project_by_name, find_release


@dataclass(frozen=True, slots=True)
class ReleaseRequest:
    project_name: str
    version: str
    release_notes: str | None = None


@dataclass(frozen=True, slots=True)
class PromotionRequest:
    project_name: str
    version: str
    environment_name: str


def create_release(
    client: OctopusClient,
    request: ReleaseRequest,
    *,
    console: ConsoleProtocol,
) -> Result[Release, OctopusError]:
    console.header(
        f"Creating Octopus Deploy Release for project: {request.project_name} {request.version}"
    )

    project = find_project_by_name(client, request.project_name)
    if isinstance(project, Err):
        return project
    console.debug(f"project: {project.value.name} ({project.value.id})")

    release = build_release(
        client,
        project.value,
        request.version,
        request.release_notes,
        console=console,
    )
    if isinstance(release, Err):
        return release

    created = client.create_release(release.value)
    if isinstance(created, Err):
        return created
    console.debug(f"release: {created.value.id}")
    return Ok(created.value)


def promote_release(
    client: OctopusClient,
    request: PromotionRequest,
    *,
    console: ConsoleProtocol,
) -> Result[Deployment, OctopusError]:
    console.header(
        f"Promoting Octopus Deploy Release for project: {request.project_name} "
        f"{request.version} to environment: {request.environment_name}"
    )

    environment = find_environment_by_name(client, request.environment_name)
    if isinstance(environment, Err):
        return environment
    console.debug(f"environment: {environment.value.name} ({environment.value.id})")

    project = find_project_by_name(client, request.project_name)
    if isinstance(project, Err):
        return project
    console.debug(f"project: {project.value.name} ({project.value.id})")

    release = find_release(client, project=project.value, version=request.version)
    if isinstance(release, Err):
        return release
    console.debug(f"release: {release.value.version} ({release.value.id})")

    deployment = build_deployment(release.value, environment.value)

    created = client.create_deployment(deployment)
    if isinstance(created, Err):
        return created
    console.debug(f"deployment: {created.value.id}")
    return Ok(created.value)
