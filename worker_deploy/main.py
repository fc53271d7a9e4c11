"""Action entry point."""

import asyncio
import sys

from worker_deploy import __version__
from worker_deploy.config import ActionInputs, RunnerEnvironment, get_settings
from worker_deploy.core.exceptions import DeployActionError
from worker_deploy.core.orchestrator import DeploymentOrchestrator
from worker_deploy.core.outputs import ActionOutputs
from worker_deploy.core.runner import CommandRunner
from worker_deploy.utils.logging import configure_logging, get_logger

logger = get_logger(__name__)


async def run_action(
    inputs: ActionInputs | None = None,
    environment: RunnerEnvironment | None = None,
    runner: CommandRunner | None = None,
    outputs: ActionOutputs | None = None,
) -> int:
    """Run the action once and return the process exit code.

    Every failure is reported through ``outputs.set_failed`` instead of
    propagating.
    """
    outputs = outputs or ActionOutputs()

    try:
        orchestrator = DeploymentOrchestrator(
            inputs=inputs or ActionInputs(),
            environment=environment or RunnerEnvironment(),
            runner=runner,
            outputs=outputs,
        )
        await orchestrator.run()

    except DeployActionError as e:
        outputs.set_failed(e.message)

    except Exception as e:
        logger.error("action.unhandled_exception", error=str(e), exc_info=True)
        outputs.set_failed(str(e) or type(e).__name__)

    return outputs.exit_code


def main() -> None:
    """Console script entry point."""
    try:
        configure_logging(get_settings())
    except Exception as e:
        outputs = ActionOutputs()
        outputs.set_failed(f"Invalid action settings: {e}")
        sys.exit(outputs.exit_code)

    logger.info("action.starting", version=__version__)

    sys.exit(asyncio.run(run_action()))


if __name__ == "__main__":
    main()
