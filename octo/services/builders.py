from __future__ import annotations

from octo.core.result import Err, Ok, Result
from octo.octopus.client import OctopusClient
from octo.octopus.model import (
    Deployment,
    Environment,
    Project,
    Release,
    ReleaseTemplate,
    SelectedPackage,
)
from octo.output.console import ConsoleProtocol
from octo.services.errors import OctopusError, not_found


def release_from_template(
    project: Project,
    template: ReleaseTemplate,
    version: str,
    release_notes: str | None,
) -> Release:
    """Build a release request that pins every template package to ``version``.

    Each action's own version history is ignored; all packages of a project
    ship together at one version.
    """
    selected = tuple(
        SelectedPackage(action_name=package.action_name, version=version)
        for package in template.packages
    )
    return Release(
        id=None,
        project_id=project.id,
        version=version,
        release_notes=release_notes,
        selected_packages=selected,
    )


def build_release(
    client: OctopusClient,
    project: Project,
    version: str,
    release_notes: str | None,
    *,
    console: ConsoleProtocol,
) -> Result[Release, OctopusError]:
    """Fetch the project's release template and build the release request.

    The first channel returned for the project selects the template.
    """
    process = client.get_deployment_process(project.deployment_process_id)
    if isinstance(process, Err):
        return process
    console.debug(f"deployment process: {process.value.id}")

    channels = client.get_channels_for_project(project.id)
    if isinstance(channels, Err):
        return channels
    if not channels.value:
        return Err(not_found("channel", f"for project {project.name}"))
    channel = channels.value[0]
    console.debug(f"channel: {channel.name or channel.id} ({channel.id})")

    template = client.get_release_template(process.value, channel)
    if isinstance(template, Err):
        return template
    console.debug(f"template packages: {len(template.value.packages)}")

    return Ok(release_from_template(project, template.value, version, release_notes))


def build_deployment(release: Release, environment: Environment) -> Deployment:
    """Build the request that deploys ``release`` to ``environment``."""
    if release.id is None:
        raise ValueError("release must be created on the server before it can be deployed")
    return Deployment(
        id=None,
        release_id=release.id,
        project_id=release.project_id,
        environment_id=environment.id,
    )

