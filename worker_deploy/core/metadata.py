"""Deploy metadata collection.

Collects GitHub Actions run facts and the last commit message from git.
This information is used for rendering message and tag templates.
"""

from worker_deploy.config import RunnerEnvironment
from worker_deploy.core.runner import CommandRunner
from worker_deploy.models.metadata import DeployMetadata
from worker_deploy.utils.logging import get_logger

logger = get_logger(__name__)

BRANCH_REF_PREFIX = "refs/heads/"
SHORT_SHA_LENGTH = 7
DEBUG_VALUE_LIMIT = 140


async def collect_metadata(
    environment: RunnerEnvironment,
    runner: CommandRunner | None = None,
) -> DeployMetadata:
    """Build deploy metadata from the run environment and local git.

    Each fact is optional; a missing one never fails collection.
    """
    runner = runner or CommandRunner()

    owner: str | None = None
    repo: str | None = None
    if environment.repository:
        owner, sep, name = environment.repository.partition("/")
        repo = name if sep else None

    ref = environment.ref
    branch = None
    if ref and ref.startswith(BRANCH_REF_PREFIX):
        branch = ref[len(BRANCH_REF_PREFIX):]

    sha = environment.sha
    short_sha = sha[:SHORT_SHA_LENGTH] if sha else None

    commit_message = await get_last_commit_message(runner)
    short_commit_message = (
        commit_message.split("\n")[0].strip() if commit_message else None
    )

    metadata = DeployMetadata(
        owner=owner,
        repo=repo,
        ref=ref,
        branch=branch,
        sha=sha,
        short_sha=short_sha,
        actor=environment.actor,
        run_id=environment.run_id,
        run_number=environment.run_number,
        commit_message=commit_message,
        short_commit_message=short_commit_message,
    )

    logger.debug(
        "metadata.collected",
        **{
            key: truncate_for_debug(value, DEBUG_VALUE_LIMIT) if value else "n/a"
            for key, value in metadata.model_dump().items()
        },
    )

    return metadata


async def get_last_commit_message(runner: CommandRunner) -> str | None:
    """Fetch the message of the last commit on the current checkout.

    Returns None if git is unavailable, this is not a repository, or the
    message is empty.
    """
    try:
        result = await runner.run("git", ["log", "-1", "--pretty=%B"], silent=True)
    except Exception as e:
        logger.debug("metadata.git_log_unavailable", error=str(e))
        return None

    if not result.ok:
        logger.debug(
            "metadata.git_log_failed",
            exit_code=result.exit_code,
            stderr=result.stderr.strip(),
        )
        return None

    message = result.stdout.strip()
    return message or None


def truncate_for_debug(value: str, limit: int) -> str:
    """Shorten a value for debug output."""
    if len(value) <= limit:
        return value
    return f"{value[:limit]}…"
