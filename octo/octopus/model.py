"""Octopus Deploy resources used by the release and promote workflows.

Only the fields the workflows read or send are modelled. ``from_json``
returns None when a payload lacks a required field; unknown keys are ignored.
Server-assigned ids are None on locally built requests.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from octo.core.structured import as_str_dict, get_bool, get_dict_list, get_raw_str


@dataclass(frozen=True, slots=True)
class Project:
    id: str
    name: str
    deployment_process_id: str

    @classmethod
    def from_json(cls, obj: object) -> Project | None:
        data = as_str_dict(obj)
        if data is None:
            return None
        id_ = get_raw_str(data, "Id")
        name = get_raw_str(data, "Name")
        process_id = get_raw_str(data, "DeploymentProcessId")
        if id_ is None or name is None or process_id is None:
            return None
        return cls(id=id_, name=name, deployment_process_id=process_id)


@dataclass(frozen=True, slots=True)
class Environment:
    id: str
    name: str

    @classmethod
    def from_json(cls, obj: object) -> Environment | None:
        data = as_str_dict(obj)
        if data is None:
            return None
        id_ = get_raw_str(data, "Id")
        name = get_raw_str(data, "Name")
        if id_ is None or name is None:
            return None
        return cls(id=id_, name=name)


@dataclass(frozen=True, slots=True)
class Channel:
    """A lifecycle lane of a project; selects which release template applies."""

    id: str
    project_id: str
    name: str
    is_default: bool = False

    @classmethod
    def from_json(cls, obj: object) -> Channel | None:
        data = as_str_dict(obj)
        if data is None:
            return None
        id_ = get_raw_str(data, "Id")
        project_id = get_raw_str(data, "ProjectId")
        if id_ is None or project_id is None:
            return None
        return cls(
            id=id_,
            project_id=project_id,
            name=get_raw_str(data, "Name") or "",
            is_default=get_bool(data, "IsDefault") or False,
        )


@dataclass(frozen=True, slots=True)
class DeploymentAction:
    name: str
    action_type: str | None = None


@dataclass(frozen=True, slots=True)
class DeploymentStep:
    name: str
    actions: tuple[DeploymentAction, ...]


@dataclass(frozen=True, slots=True)
class DeploymentProcess:
    """Ordered steps (and their actions) a project's deployment runs."""

    id: str
    project_id: str
    steps: tuple[DeploymentStep, ...] = ()

    @property
    def actions(self) -> tuple[DeploymentAction, ...]:
        return tuple(action for step in self.steps for action in step.actions)

    @classmethod
    def from_json(cls, obj: object) -> DeploymentProcess | None:
        data = as_str_dict(obj)
        if data is None:
            return None
        id_ = get_raw_str(data, "Id")
        project_id = get_raw_str(data, "ProjectId")
        if id_ is None or project_id is None:
            return None

        steps: list[DeploymentStep] = []
        for step in get_dict_list(data, "Steps") or []:
            actions = tuple(
                DeploymentAction(name=name, action_type=get_raw_str(action, "ActionType"))
                for action in get_dict_list(step, "Actions") or []
                if (name := get_raw_str(action, "Name")) is not None
            )
            steps.append(DeploymentStep(name=get_raw_str(step, "Name") or "", actions=actions))

        return cls(id=id_, project_id=project_id, steps=tuple(steps))


@dataclass(frozen=True, slots=True)
class TemplatePackage:
    """An action of the deployment process that needs a package version."""

    action_name: str
    package_id: str | None = None
    version_selected_last_release: str | None = None


@dataclass(frozen=True, slots=True)
class ReleaseTemplate:
    packages: tuple[TemplatePackage, ...] = ()
    next_version_increment: str | None = None

    @classmethod
    def from_json(cls, obj: object) -> ReleaseTemplate | None:
        data = as_str_dict(obj)
        if data is None:
            return None

        raw_packages = get_dict_list(data, "Packages")
        if raw_packages is None and "Packages" in data and data["Packages"] is not None:
            return None

        packages: list[TemplatePackage] = []
        for raw in raw_packages or []:
            action_name = get_raw_str(raw, "ActionName")
            if action_name is None:
                return None
            packages.append(
                TemplatePackage(
                    action_name=action_name,
                    package_id=get_raw_str(raw, "PackageId"),
                    version_selected_last_release=get_raw_str(raw, "VersionSelectedLastRelease"),
                )
            )

        return cls(
            packages=tuple(packages),
            next_version_increment=get_raw_str(data, "NextVersionIncrement"),
        )


@dataclass(frozen=True, slots=True)
class SelectedPackage:
    action_name: str
    version: str

    def to_json(self) -> dict[str, Any]:
        return {"ActionName": self.action_name, "Version": self.version}


@dataclass(frozen=True, slots=True)
class Release:
    id: str | None
    project_id: str
    version: str
    release_notes: str | None = None
    selected_packages: tuple[SelectedPackage, ...] = ()

    def to_json(self) -> dict[str, Any]:
        return {
            "ProjectId": self.project_id,
            "Version": self.version,
            "ReleaseNotes": self.release_notes,
            "SelectedPackages": [p.to_json() for p in self.selected_packages],
        }

    @classmethod
    def from_json(cls, obj: object) -> Release | None:
        data = as_str_dict(obj)
        if data is None:
            return None
        id_ = get_raw_str(data, "Id")
        project_id = get_raw_str(data, "ProjectId")
        version = get_raw_str(data, "Version")
        if id_ is None or project_id is None or version is None:
            return None

        selected: list[SelectedPackage] = []
        for raw in get_dict_list(data, "SelectedPackages") or []:
            action_name = get_raw_str(raw, "ActionName")
            package_version = get_raw_str(raw, "Version")
            if action_name is not None and package_version is not None:
                selected.append(SelectedPackage(action_name=action_name, version=package_version))

        return cls(
            id=id_,
            project_id=project_id,
            version=version,
            release_notes=get_raw_str(data, "ReleaseNotes"),
            selected_packages=tuple(selected),
        )


@dataclass(frozen=True, slots=True)
class Deployment:
    id: str | None
    release_id: str
    project_id: str
    environment_id: str

    def to_json(self) -> dict[str, Any]:
        return {
            "ReleaseId": self.release_id,
            "ProjectId": self.project_id,
            "EnvironmentId": self.environment_id,
        }

    @classmethod
    def from_json(cls, obj: object) -> Deployment | None:
        data = as_str_dict(obj)
        if data is None:
            return None
        id_ = get_raw_str(data, "Id")
        release_id = get_raw_str(data, "ReleaseId")
        project_id = get_raw_str(data, "ProjectId")
        environment_id = get_raw_str(data, "EnvironmentId")
        if id_ is None or release_id is None or project_id is None or environment_id is None:
            return None
        return cls(
            id=id_,
            release_id=release_id,
            project_id=project_id,
            environment_id=environment_id,
        )
