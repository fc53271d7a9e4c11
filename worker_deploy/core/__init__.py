"""Core functionality for worker-version-deploy."""

from worker_deploy.core.exceptions import (
    CommandFailedError,
    ConfigurationError,
    DeployActionError,
    VersionIdNotFoundError,
)
from worker_deploy.core.metadata import collect_metadata
from worker_deploy.core.orchestrator import DeploymentOrchestrator
from worker_deploy.core.outputs import ActionOutputs
from worker_deploy.core.runner import CommandResult, CommandRunner

__all__ = [
    "DeployActionError",
    "CommandFailedError",
    "ConfigurationError",
    "VersionIdNotFoundError",
    "collect_metadata",
    "DeploymentOrchestrator",
    "ActionOutputs",
    "CommandResult",
    "CommandRunner",
]
