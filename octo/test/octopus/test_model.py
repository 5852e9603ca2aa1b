"""Tests for octo.octopus.model parsing and request bodies."""

from __future__ import annotations

from octo.octopus.model import (
    Channel,
    Deployment,
    DeploymentProcess,
    Environment,
    Project,
    Release,
    ReleaseTemplate,
    SelectedPackage,
)


def test_project_from_json() -> None:
    project = Project.from_json(
        {
            "Id": "Projects-1",
            "Name": "Checkout",
            "DeploymentProcessId": "deploymentprocess-Projects-1",
            "Slug": "checkout",
        }
    )
    assert project == Project(
        id="Projects-1",
        name="Checkout",
        deployment_process_id="deploymentprocess-Projects-1",
    )


def test_project_missing_required_field() -> None:
    assert Project.from_json({"Id": "Projects-1", "Name": "Checkout"}) is None
    assert Project.from_json(["not", "a", "dict"]) is None


def test_name_is_kept_verbatim() -> None:
    environment = Environment.from_json({"Id": "Environments-1", "Name": " Staging "})
    assert environment is not None
    assert environment.name == " Staging "


def test_channel_defaults() -> None:
    channel = Channel.from_json({"Id": "Channels-1", "ProjectId": "Projects-1"})
    assert channel == Channel(id="Channels-1", project_id="Projects-1", name="", is_default=False)


def test_deployment_process_actions_in_order() -> None:
    process = DeploymentProcess.from_json(
        {
            "Id": "deploymentprocess-Projects-1",
            "ProjectId": "Projects-1",
            "Steps": [
                {"Name": "Web", "Actions": [{"Name": "web", "ActionType": "Octopus.TentaclePackage"}]},
                {"Name": "Background", "Actions": [{"Name": "worker"}, {"Name": "scheduler"}]},
            ],
        }
    )
    assert process is not None
    assert [a.name for a in process.actions] == ["web", "worker", "scheduler"]
    assert process.actions[0].action_type == "Octopus.TentaclePackage"


def test_release_template_packages() -> None:
    template = ReleaseTemplate.from_json(
        {
            "NextVersionIncrement": "1.2.4",
            "Packages": [
                {"ActionName": "web", "PackageId": "Checkout.Web", "VersionSelectedLastRelease": "1.2.3"},
                {"ActionName": "worker", "PackageId": "Checkout.Worker"},
            ],
        }
    )
    assert template is not None
    assert [p.action_name for p in template.packages] == ["web", "worker"]
    assert template.packages[0].version_selected_last_release == "1.2.3"
    assert template.next_version_increment == "1.2.4"


def test_release_template_without_packages() -> None:
    assert ReleaseTemplate.from_json({"Packages": []}) == ReleaseTemplate()
    assert ReleaseTemplate.from_json({}) == ReleaseTemplate()


def test_release_template_rejects_bad_packages() -> None:
    assert ReleaseTemplate.from_json({"Packages": "web"}) is None
    assert ReleaseTemplate.from_json({"Packages": [{"PackageId": "Checkout.Web"}]}) is None


def test_release_to_json() -> None:
    release = Release(
        id=None,
        project_id="Projects-1",
        version="1.2.3",
        release_notes="notes",
        selected_packages=(SelectedPackage("web", "1.2.3"), SelectedPackage("worker", "1.2.3")),
    )
    assert release.to_json() == {
        "ProjectId": "Projects-1",
        "Version": "1.2.3",
        "ReleaseNotes": "notes",
        "SelectedPackages": [
            {"ActionName": "web", "Version": "1.2.3"},
            {"ActionName": "worker", "Version": "1.2.3"},
        ],
    }


def test_release_from_json() -> None:
    release = Release.from_json(
        {
            "Id": "Releases-7",
            "ProjectId": "Projects-1",
            "Version": "1.2.3",
            "ReleaseNotes": None,
            "SelectedPackages": [{"ActionName": "web", "Version": "1.2.3"}],
        }
    )
    assert release == Release(
        id="Releases-7",
        project_id="Projects-1",
        version="1.2.3",
        release_notes=None,
        selected_packages=(SelectedPackage("web", "1.2.3"),),
    )


def test_deployment_round_trip_fields() -> None:
    deployment = Deployment(
        id=None, release_id="Releases-7", project_id="Projects-1", environment_id="Environments-1"
    )
    body = deployment.to_json()
    assert body == {
        "ReleaseId": "Releases-7",
        "ProjectId": "Projects-1",
        "EnvironmentId": "Environments-1",
    }
    assert Deployment.from_json({**body, "Id": "Deployments-3"}) == Deployment(
        id="Deployments-3",
        release_id="Releases-7",
        project_id="Projects-1",
        environment_id="Environments-1",
    )
