"""Resolve human-readable names to Octopus resources.

Names and versions are compared with exact, case-sensitive equality. When
several resources match, the first one in server order wins.
"""

from __future__ import annotations

from collections.abc import Iterable

from octo.core.result import Err, Ok, Result
from octo.octopus.client import OctopusClient
from octo.octopus.model import Environment, Project, Release
from octo.services.errors import OctopusError, not_found

_MAX_HINT_NAMES = 10


def _available(names: Iterable[str]) -> str | None:
    names = list(names)
    if not names:
        return None
    shown = ", ".join(names[:_MAX_HINT_NAMES])
    if len(names) > _MAX_HINT_NAMES:
        shown += f", ... ({len(names) - _MAX_HINT_NAMES} more)"
    return f"available: {shown}"


def find_project_by_name(client: OctopusClient, name: str) -> Result[Project, OctopusError]:
    projects = client.list_projects()
    if isinstance(projects, Err):
        return projects

    for project in projects.value:
        if project.name == name:
            return Ok(project)
    return Err(not_found("project", name, hint=_available(p.name for p in projects.value)))


def find_environment_by_name(
    client: OctopusClient, name: str
) -> Result[Environment, OctopusError]:
    environments = client.list_environments()
    if isinstance(environments, Err):
        return environments

    for environment in environments.value:
        if environment.name == name:
            return Ok(environment)
    return Err(
        not_found("environment", name, hint=_available(e.name for e in environments.value))
    )


def find_release(
    client: OctopusClient, *, project: Project, version: str
) -> Result[Release, OctopusError]:
    """Find the release of ``project`` with exactly ``version``."""
    result = client.find_release(
        lambda release: release.version == version and release.project_id == project.id
    )
    if isinstance(result, Err):
        return result
    if result.value is None:
        return Err(not_found("release", f"{project.name} {version}"))
    return Ok(result.value)
