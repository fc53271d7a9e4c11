"""Deployment data models."""

from enum import Enum

from pydantic import BaseModel


class DeployPhase(str, Enum):
    """Orchestrator state."""

    COLLECTING_METADATA = "collecting_metadata"
    RENDERING = "rendering"
    UPLOADING = "uploading"
    PARSING_UPLOAD = "parsing_upload"
    DEPLOYING = "deploying"
    PARSING_DEPLOY = "parsing_deploy"
    DONE = "done"
    UPLOAD_FAILED = "upload_failed"
    DEPLOY_FAILED = "deploy_failed"
    FAILED = "failed"


class DeploymentResult(BaseModel):
    """Result of an upload (and optional deploy) run."""

    only_upload: bool = False
    phase: DeployPhase = DeployPhase.DONE

    version_id: str | None = None
    deployment_url: str | None = None

    message: str = ""
    tag: str = ""

    def outputs(self) -> dict[str, str]:
        """Action outputs to publish; unset values are left out."""
        values = {
            "version_id": self.version_id,
            "deployment_url": self.deployment_url,
            "message": self.message,
            "tag": self.tag,
        }
        return {key: value for key, value in values.items() if value}
