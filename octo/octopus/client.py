"""Octopus Deploy client.

``OctopusClient`` is the capability set the workflows need. ``RestOctopusClient``
implements it over an ``HttpClient``; ``open_client`` opens one session per
command invocation and always closes it.
"""

from __future__ import annotations

import json
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Protocol, TypeVar
from urllib.parse import quote

from octo.core.config import DEFAULT_TIMEOUT_SECONDS
from octo.core.result import Err, Ok, Result
from octo.core.structured import as_obj_list, as_str_dict, get_list, get_raw_str, get_table
from octo.octopus.http import HttpClient, HttpError, RealHttpClient
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

T = TypeVar("T")

__all__ = [
    "Endpoint",
    "OctopusClient",
    "RestOctopusClient",
    "open_client",
    "remote_failure",
]


@dataclass(frozen=True, slots=True)
class Endpoint:
    """Server URL and API key, passed through unchanged."""

    server: str
    api_key: str
    timeout: float = DEFAULT_TIMEOUT_SECONDS

    def __repr__(self) -> str:
        return f"Endpoint(server={self.server!r}, api_key='***', timeout={self.timeout!r})"


class OctopusClient(Protocol):
    def list_projects(self) -> Result[list[Project], OctopusError]: ...

    def list_environments(self) -> Result[list[Environment], OctopusError]: ...

    def get_deployment_process(self, process_id: str) -> Result[DeploymentProcess, OctopusError]: ...

    def get_channels_for_project(self, project_id: str) -> Result[list[Channel], OctopusError]: ...

    def get_release_template(
        self, process: DeploymentProcess, channel: Channel
    ) -> Result[ReleaseTemplate, OctopusError]: ...

    def create_release(self, release: Release) -> Result[Release, OctopusError]: ...

    def find_release(
        self, predicate: Callable[[Release], bool]
    ) -> Result[Release | None, OctopusError]:
        """Return the first release matching predicate in server order, or None."""
        ...

    def create_deployment(self, deployment: Deployment) -> Result[Deployment, OctopusError]: ...


def remote_failure(error: HttpError) -> OctopusError:
    """Map a transport error to an OctopusError, keeping the server's diagnostics."""
    server_message: str | None = None
    detail: str | None = None

    body = _parse_error_body(error.body)
    if body is not None:
        server_message = get_raw_str(body, "ErrorMessage")
        errors = [e for e in get_list(body, "Errors") or [] if isinstance(e, str)]
        if errors:
            detail = "\n".join(errors)
    elif error.body:
        detail = error.body.strip() or None

    message = server_message or str(error)
    hint: str | None = None
    if error.status in (401, 403):
        hint = "check the API key and its permissions"
    elif error.status == 0:
        hint = "check the server URL and network connectivity"

    return OctopusError(kind="remote_failure", message=message, hint=hint, detail=detail)


def _parse_error_body(body: str | None) -> dict[str, object] | None:
    if not body:
        return None
    try:
        obj: object = json.loads(body)
    except json.JSONDecodeError:
        return None
    return as_str_dict(obj)


def _bad_payload(what: str, path: str) -> OctopusError:
    return OctopusError(
        kind="remote_failure",
        message=f"unexpected response for {what}",
        hint=path,
    )


class RestOctopusClient:
    """OctopusClient over the REST API."""

    def __init__(self, http: HttpClient) -> None:
        self._http = http

    def _get(self, path: str) -> Result[Any, OctopusError]:
        result = self._http.get_json(path)
        if isinstance(result, Err):
            return Err(remote_failure(result.error))
        return result

    def _post(self, path: str, body: dict[str, Any]) -> Result[Any, OctopusError]:
        result = self._http.post_json(path, body)
        if isinstance(result, Err):
            return Err(remote_failure(result.error))
        return result

    def _get_all(
        self, path: str, what: str, parse: Callable[[object], T | None]
    ) -> Result[list[T], OctopusError]:
        result = self._get(path)
        if isinstance(result, Err):
            return result
        items = as_obj_list(result.value)
        if items is None:
            return Err(_bad_payload(what, path))
        parsed: list[T] = []
        for item in items:
            value = parse(item)
            if value is None:
                return Err(_bad_payload(what, path))
            parsed.append(value)
        return Ok(parsed)

    def list_projects(self) -> Result[list[Project], OctopusError]:
        return self._get_all("/api/projects/all", "projects", Project.from_json)

    def list_environments(self) -> Result[list[Environment], OctopusError]:
        return self._get_all("/api/environments/all", "environments", Environment.from_json)

    def get_deployment_process(self, process_id: str) -> Result[DeploymentProcess, OctopusError]:
        path = f"/api/deploymentprocesses/{quote(process_id)}"
        result = self._get(path)
        if isinstance(result, Err):
            return result
        process = DeploymentProcess.from_json(result.value)
        if process is None:
            return Err(_bad_payload("deployment process", path))
        return Ok(process)

    def get_channels_for_project(self, project_id: str) -> Result[list[Channel], OctopusError]:
        channels: list[Channel] = []
        for page in self._pages(f"/api/projects/{quote(project_id)}/channels", "channels"):
            if isinstance(page, Err):
                return page
            for item in page.value:
                channel = Channel.from_json(item)
                if channel is None:
                    return Err(_bad_payload("channels", project_id))
                channels.append(channel)
        return Ok(channels)

    def get_release_template(
        self, process: DeploymentProcess, channel: Channel
    ) -> Result[ReleaseTemplate, OctopusError]:
        path = f"/api/deploymentprocesses/{quote(process.id)}/template?channel={quote(channel.id)}"
        result = self._get(path)
        if isinstance(result, Err):
            return result
        template = ReleaseTemplate.from_json(result.value)
        if template is None:
            return Err(_bad_payload("release template", path))
        return Ok(template)

    def create_release(self, release: Release) -> Result[Release, OctopusError]:
        result = self._post("/api/releases", release.to_json())
        if isinstance(result, Err):
            return result
        created = Release.from_json(result.value)
        if created is None:
            return Err(_bad_payload("created release", "/api/releases"))
        return Ok(created)

    def find_release(
        self, predicate: Callable[[Release], bool]
    ) -> Result[Release | None, OctopusError]:
        for page in self._pages("/api/releases", "releases"):
            if isinstance(page, Err):
                return page
            for item in page.value:
                release = Release.from_json(item)
                if release is None:
                    return Err(_bad_payload("releases", "/api/releases"))
                if predicate(release):
                    return Ok(release)
        return Ok(None)

    def create_deployment(self, deployment: Deployment) -> Result[Deployment, OctopusError]:
        result = self._post("/api/deployments", deployment.to_json())
        if isinstance(result, Err):
            return result
        created = Deployment.from_json(result.value)
        if created is None:
            return Err(_bad_payload("created deployment", "/api/deployments"))
        return Ok(created)

    def _pages(self, path: str, what: str) -> Iterator[Result[list[object], OctopusError]]:
        """Yield the Items of each page of a collection, following Page.Next links.

        Stops after yielding an Err.
        """
        next_path: str | None = path
        seen: set[str] = set()
        while next_path is not None and next_path not in seen:
            seen.add(next_path)
            result = self._get(next_path)
            if isinstance(result, Err):
                yield result
                return
            data = as_str_dict(result.value)
            items = get_list(data, "Items") if data is not None else None
            if data is None or items is None:
                yield Err(_bad_payload(what, next_path))
                return
            yield Ok(items)
            links = get_table(data, "Links") or {}
            next_path = get_raw_str(links, "Page.Next")


@contextmanager
def open_client(endpoint: Endpoint) -> Iterator[OctopusClient]:
    """Open a session to the server; it is closed when the block exits."""
    http = RealHttpClient(endpoint.server, endpoint.api_key, timeout=endpoint.timeout)
    try:
        yield RestOctopusClient(http)
    finally:
        http.close()
