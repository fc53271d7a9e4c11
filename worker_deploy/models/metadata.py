"""Deploy metadata models."""

from pydantic import BaseModel, ConfigDict

TemplateContext = dict[str, str | None]


class DeployMetadata(BaseModel):
    """Repository, commit and run facts used to render templates."""

    model_config = ConfigDict(frozen=True)

    # Repository & commit
    owner: str | None = None
    repo: str | None = None
    ref: str | None = None
    branch: str | None = None
    sha: str | None = None
    short_sha: str | None = None

    # Workflow run
    actor: str | None = None
    run_id: str | None = None
    run_number: str | None = None

    # Last commit on the checkout
    commit_message: str | None = None
    short_commit_message: str | None = None

    def template_context(
        self,
        deployment_url: str | None = None,
        version_id: str | None = None,
    ) -> TemplateContext:
        """Build the template context, including the deployment-phase keys."""
        context: TemplateContext = self.model_dump()
        context["deployment_url"] = deployment_url
        context["version_id"] = version_id
        return context
