"""Octopus Deploy REST client and resource types."""

from .client import Endpoint, OctopusClient, RestOctopusClient, open_client
from .model import (
    Channel,
    Deployment,
    DeploymentAction,
    DeploymentProcess,
    DeploymentStep,
    Environment,
    Project,
    Release,
    ReleaseTemplate,
    SelectedPackage,
    TemplatePackage,
)

__all__ = [
    "Endpoint",
    "OctopusClient",
    "RestOctopusClient",
    "open_client",
    "Channel",
    "Deployment",
    "DeploymentAction",
    "DeploymentProcess",
    "DeploymentStep",
    "Environment",
    "Project",
    "Release",
    "ReleaseTemplate",
    "SelectedPackage",
    "TemplatePackage",
]
