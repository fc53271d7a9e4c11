"""Data models for worker-version-deploy."""

from worker_deploy.models.deployment import (
    DeploymentResult,
    DeployPhase,
)
from worker_deploy.models.metadata import (
    DeployMetadata,
    TemplateContext,
)

__all__ = [
    # Metadata models
    "DeployMetadata",
    "TemplateContext",
    # Deployment models
    "DeploymentResult",
    "DeployPhase",
]
