from __future__ import annotations

import pytest

from octo.octopus.fake import FakeOctopusClient
from octo.octopus.model import (
    Channel,
    DeploymentAction,
    DeploymentProcess,
    DeploymentStep,
    Environment,
    Project,
    ReleaseTemplate,
    TemplatePackage,
)


@pytest.fixture
def checkout() -> FakeOctopusClient:
    """Server with a "Checkout" project deploying "web" and "worker" packages."""
    project = Project(
        id="Projects-1",
        name="Checkout",
        deployment_process_id="deploymentprocess-Projects-1",
    )
    process = DeploymentProcess(
        id="deploymentprocess-Projects-1",
        project_id="Projects-1",
        steps=(
            DeploymentStep(name="Deploy web", actions=(DeploymentAction(name="web"),)),
            DeploymentStep(name="Deploy worker", actions=(DeploymentAction(name="worker"),)),
        ),
    )
    channel = Channel(id="Channels-1", project_id="Projects-1", name="Default", is_default=True)
    template = ReleaseTemplate(
        packages=(
            TemplatePackage(
                action_name="web",
                package_id="Checkout.Web",
                version_selected_last_release="1.2.2",
            ),
            TemplatePackage(
                action_name="worker",
                package_id="Checkout.Worker",
                version_selected_last_release="1.1.0",
            ),
        )
    )
    return FakeOctopusClient(
        projects=[
            Project(id="Projects-2", name="Billing", deployment_process_id="deploymentprocess-Projects-2"),
            project,
        ],
        environments=[
            Environment(id="Environments-1", name="Staging"),
            Environment(id="Environments-2", name="Production"),
        ],
        processes={process.id: process},
        channels={project.id: [channel]},
        templates={(process.id, channel.id): template},
    )
