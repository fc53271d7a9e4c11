"""Deployment Orchestrator.

Runs ``wrangler versions upload`` and then, unless only uploading,
``wrangler versions deploy`` for the uploaded version, with a message and
tag rendered from run metadata.
"""

import os

from worker_deploy.config import ActionInputs, RunnerEnvironment
from worker_deploy.core.exceptions import (
    CommandFailedError,
    ConfigurationError,
    VersionIdNotFoundError,
)
from worker_deploy.core.metadata import collect_metadata
from worker_deploy.core.outputs import ActionOutputs
from worker_deploy.core.runner import CommandResult, CommandRunner
from worker_deploy.core.templates import (
    build_default_message,
    build_default_tag,
    render_template,
)
from worker_deploy.models.deployment import DeploymentResult, DeployPhase
from worker_deploy.models.metadata import DeployMetadata
from worker_deploy.parsers.args import split_args
from worker_deploy.parsers.wrangler import parse_version_id, parse_wrangler_output
from worker_deploy.utils.logging import get_logger

# Environment variable wrangler reads its API token from
API_TOKEN_ENV = "CLOUDFLARE_API_TOKEN"


class DeploymentOrchestrator:
    """Orchestrates the upload and deploy of a Worker version.

    Phases:
    1. collecting_metadata - Read run facts and the last commit message
    2. rendering - Render the message and tag
    3. uploading - ``wrangler versions upload``
    4. deploying - ``wrangler versions deploy <version_id>`` (skipped with only_upload)
    """

    def __init__(
        self,
        inputs: ActionInputs,
        environment: RunnerEnvironment,
        runner: CommandRunner | None = None,
        outputs: ActionOutputs | None = None,
    ):
        self.inputs = inputs
        self.environment = environment
        self.runner = runner or CommandRunner()
        self.outputs = outputs or ActionOutputs()
        self.logger = get_logger("orchestrator")

        self.phase = DeployPhase.COLLECTING_METADATA

    async def run(self) -> DeploymentResult:
        """Run the upload/deploy flow and publish its outputs.

        Returns:
            The published result

        Raises:
            ConfigurationError: If a required input is missing
            CommandFailedError: If wrangler exits with a non-zero status
            VersionIdNotFoundError: If no version id can be deployed
        """
        command, base_args = self._resolve_command()

        try:
            self.phase = DeployPhase.COLLECTING_METADATA
            metadata = await collect_metadata(self.environment, self.runner)
            self._log_context(metadata)

            self.phase = DeployPhase.RENDERING
            message, tag = self._render(metadata)

            self.phase = DeployPhase.UPLOADING
            upload = await self._invoke(
                "upload",
                command,
                [
                    *base_args,
                    "versions",
                    "upload",
                    *self._config_args(),
                    *split_args(self.inputs.upload_args),
                    f"--message={message}",
                ],
            )
            if not upload.ok:
                self.phase = DeployPhase.UPLOAD_FAILED
                raise CommandFailedError("upload", upload.exit_code)

            self.phase = DeployPhase.PARSING_UPLOAD
            version_id = parse_version_id(upload.stdout)

            if self.inputs.only_upload:
                return self._finish_upload_only(version_id, message, tag)

            if not version_id:
                raise VersionIdNotFoundError()
            self.logger.info("orchestrator.upload.version_parsed", version_id=version_id)

            self.phase = DeployPhase.DEPLOYING
            deploy = await self._invoke(
                "deploy",
                command,
                [
                    *base_args,
                    "versions",
                    "deploy",
                    version_id,
                    "-y",
                    *self._config_args(),
                    *split_args(self.inputs.deploy_args),
                    f"--message={message}",
                ],
            )
            if not deploy.ok:
                self.phase = DeployPhase.DEPLOY_FAILED
                raise CommandFailedError("deploy", deploy.exit_code)

            self.phase = DeployPhase.PARSING_DEPLOY
            deployment_url = parse_wrangler_output(deploy.stdout).deployment_url
            if deployment_url:
                self.logger.info("orchestrator.deploy.url_detected", url=deployment_url)
            else:
                self.logger.info(
                    "orchestrator.deploy.url_missing",
                    hint="If this is unexpected, please open an issue with example logs.",
                )

            self.phase = DeployPhase.DONE
            result = DeploymentResult(
                phase=self.phase,
                version_id=version_id,
                deployment_url=deployment_url,
                message=message,
                tag=tag,
            )
            self._publish(result)
            return result

        except Exception as e:
            self.logger.error(
                "orchestrator.failed",
                phase=self.phase.value,
                error=str(e),
            )
            if self.phase not in (DeployPhase.UPLOAD_FAILED, DeployPhase.DEPLOY_FAILED):
                self.phase = DeployPhase.FAILED
            raise

    def _resolve_command(self) -> tuple[str, list[str]]:
        """Check required inputs and split the wrangler command line."""
        if not self.inputs.api_token:
            raise ConfigurationError(
                "api_token", "Cloudflare API token (api_token) is required."
            )

        command_line = split_args(self.inputs.wrangler_command)
        if not command_line:
            raise ConfigurationError(
                "wrangler_command", "Wrangler command (wrangler_command) is required."
            )

        return command_line[0], command_line[1:]

    def _log_context(self, metadata: DeployMetadata) -> None:
        """Log basic run context (no secrets)."""
        self.logger.info(
            "orchestrator.context",
            repository=f"{metadata.owner or 'unknown'}/{metadata.repo or 'unknown'}",
            branch=metadata.branch or metadata.ref or "unknown",
            sha=metadata.sha or "unknown",
            actor=metadata.actor or "unknown",
            run=f"#{metadata.run_number or '?'} (ID: {metadata.run_id or '?'})",
        )

    def _render(self, metadata: DeployMetadata) -> tuple[str, str]:
        """Render message and tag; no deployment data exists yet."""
        context = metadata.template_context()

        if self.inputs.message_template:
            message = render_template(self.inputs.message_template, context)
        else:
            message = build_default_message(metadata)

        if self.inputs.tag_template:
            tag = render_template(self.inputs.tag_template, context)
        else:
            tag = build_default_tag(metadata)

        self.logger.info("orchestrator.rendered", message=message, tag=tag or None)

        return message, tag

    def _config_args(self) -> list[str]:
        if self.inputs.config:
            return ["--config", self.inputs.config]
        return []

    async def _invoke(
        self, operation: str, command: str, args: list[str]
    ) -> CommandResult:
        """Run one wrangler operation with the API token in its environment."""
        env = {**os.environ, API_TOKEN_ENV: self.inputs.api_token}
        cwd = self.inputs.working_directory

        self.logger.info(
            f"orchestrator.{operation}.started",
            cmd=" ".join([command, *args]),
            cwd=cwd,
        )

        result = await self.runner.run(command, args, env=env, cwd=cwd)

        self.logger.debug(
            f"orchestrator.{operation}.finished",
            exit_code=result.exit_code,
            stdout_len=len(result.stdout),
            stderr_len=len(result.stderr),
        )
        return result

    def _finish_upload_only(
        self, version_id: str | None, message: str, tag: str
    ) -> DeploymentResult:
        """Publish upload results without deploying."""
        if version_id:
            self.logger.info(
                "orchestrator.upload.version_parsed", version_id=version_id, only_upload=True
            )
        else:
            self.logger.info(
                "orchestrator.upload.version_missing",
                only_upload=True,
                reason="no Worker Version ID in upload output; exiting successfully",
            )

        self.phase = DeployPhase.DONE
        result = DeploymentResult(
            only_upload=True,
            phase=self.phase,
            version_id=version_id,
            message=message,
            tag=tag,
        )
        self._publish(result)
        return result

    def _publish(self, result: DeploymentResult) -> None:
        """Expose results as step outputs for downstream steps."""
        for name, value in result.outputs().items():
            self.outputs.set_output(name, value)
