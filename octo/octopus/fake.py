"""In-memory OctopusClient for tests.

Holds canned resources, records every call, and can be told to fail a
specific operation:

    client = FakeOctopusClient(projects=[Project("Projects-1", "Checkout", "dp-1")])
    client.fail("list_environments", OctopusError(kind="remote_failure", message="boom"))
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field, replace

from octo.core.result import Err, Ok, Result
from octo.octopus.model import (
    Channel,
    Deployment,
    DeploymentProcess,
    Environment,
    Project,
    Release,
    ReleaseTemplate,
)
from octo.services.errors import OctopusError


@dataclass
class FakeOctopusClient:
    projects: list[Project] = field(default_factory=list)
    environments: list[Environment] = field(default_factory=list)
    processes: dict[str, DeploymentProcess] = field(default_factory=dict)
    channels: dict[str, list[Channel]] = field(default_factory=dict)
    # keyed by (process id, channel id)
    templates: dict[tuple[str, str], ReleaseTemplate] = field(default_factory=dict)
    releases: list[Release] = field(default_factory=list)
    deployments: list[Deployment] = field(default_factory=list)
    calls: list[str] = field(default_factory=list)
    failures: dict[str, OctopusError] = field(default_factory=dict)

    def fail(self, operation: str, error: OctopusError) -> None:
        self.failures[operation] = error

    def _enter(self, operation: str) -> OctopusError | None:
        self.calls.append(operation)
        return self.failures.get(operation)

    @property
    def create_calls(self) -> int:
        return sum(1 for c in self.calls if c.startswith("create_"))

    def list_projects(self) -> Result[list[Project], OctopusError]:
        if error := self._enter("list_projects"):
            return Err(error)
        return Ok(list(self.projects))

    def list_environments(self) -> Result[list[Environment], OctopusError]:
        if error := self._enter("list_environments"):
            return Err(error)
        return Ok(list(self.environments))

    def get_deployment_process(self, process_id: str) -> Result[DeploymentProcess, OctopusError]:
        if error := self._enter("get_deployment_process"):
            return Err(error)
        process = self.processes.get(process_id)
        if process is None:
            return Err(
                OctopusError(
                    kind="remote_failure",
                    message=f"HTTP 404: Not Found (/api/deploymentprocesses/{process_id})",
                )
            )
        return Ok(process)

    def get_channels_for_project(self, project_id: str) -> Result[list[Channel], OctopusError]:
        if error := self._enter("get_channels_for_project"):
            return Err(error)
        return Ok(list(self.channels.get(project_id, [])))

    def get_release_template(
        self, process: DeploymentProcess, channel: Channel
    ) -> Result[ReleaseTemplate, OctopusError]:
        if error := self._enter("get_release_template"):
            return Err(error)
        return Ok(self.templates.get((process.id, channel.id), ReleaseTemplate()))

    def create_release(self, release: Release) -> Result[Release, OctopusError]:
        if error := self._enter("create_release"):
            return Err(error)
        created = replace(release, id=f"Releases-{len(self.releases) + 1}")
        self.releases.append(created)
        return Ok(created)

    def find_release(
        self, predicate: Callable[[Release], bool]
    ) -> Result[Release | None, OctopusError]:
        if error := self._enter("find_release"):
            return Err(error)
        return Ok(next((r for r in self.releases if predicate(r)), None))

    def create_deployment(self, deployment: Deployment) -> Result[Deployment, OctopusError]:
        if error := self._enter("create_deployment"):
            return Err(error)
        created = replace(deployment, id=f"Deployments-{len(self.deployments) + 1}")
        self.deployments.append(created)
        return Ok(created)
