"""Pytest configuration and fixtures."""

import io
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path

import pytest

from worker_deploy.config import ActionInputs, RunnerEnvironment
from worker_deploy.core.outputs import ActionOutputs
from worker_deploy.core.runner import CommandResult, CommandRunner


@dataclass
class RecordedCall:
    """A command invocation seen by the fake runner."""

    command: str
    args: list[str]
    env: Mapping[str, str] | None
    cwd: str | None
    silent: bool


class FakeRunner(CommandRunner):
    """Command runner that replays scripted wrangler results.

    ``git`` calls answer with ``commit_message`` (or raise FileNotFoundError
    when it is None); every other call pops the next scripted result.
    """

    def __init__(
        self,
        results: Sequence[CommandResult] = (),
        commit_message: str | None = "Fix bug\n\nLonger description.",
    ):
        super().__init__()
        self.results = list(results)
        self.commit_message = commit_message
        self.calls: list[RecordedCall] = []

    async def run(
        self,
        command: str,
        args: Sequence[str] = (),
        env: Mapping[str, str] | None = None,
        cwd: str | None = None,
        silent: bool = False,
    ) -> CommandResult:
        self.calls.append(RecordedCall(command, list(args), env, cwd, silent))

        if command == "git":
            if self.commit_message is None:
                raise FileNotFoundError("git")
            return CommandResult(exit_code=0, stdout=f"{self.commit_message}\n")

        if not self.results:
            raise AssertionError(f"Unexpected command: {command} {list(args)}")
        return self.results.pop(0)

    @property
    def wrangler_calls(self) -> list[RecordedCall]:
        return [call for call in self.calls if call.command != "git"]


UPLOAD_OUTPUT = """\
 ⛅️ wrangler 4.2.0
-------------------
Total Upload: 12.34 KiB / gzip: 3.21 KiB
Worker Startup Time: 5 ms
Uploaded my-worker (2.10 sec)
Worker Version ID: 0f3c9b2e-8a41-4c6d-9d1e-5b7a2c4e6f80
Version Preview URL: https://0f3c9b2e-my-worker.example.workers.dev
"""

DEPLOY_OUTPUT = """\
 ⛅️ wrangler 4.2.0
-------------------
╭ Deploy Worker Versions by splitting traffic between multiple versions
│
├ Your version deployment has been created
│
╰  SUCCESS  Deployed my-worker version 0f3c9b2e-8a41-4c6d-9d1e-5b7a2c4e6f80 at 100% (1.85 sec)
Current Version ID: 0f3c9b2e-8a41-4c6d-9d1e-5b7a2c4e6f80
https://my-worker.example.workers.dev
"""


@pytest.fixture
def runner_environment() -> RunnerEnvironment:
    """A push to main."""
    return RunnerEnvironment(
        repository="acme/edge-worker",
        ref="refs/heads/main",
        sha="a1b2c3d4e5f60718293a4b5c6d7e8f9012345678",
        actor="octocat",
        run_id="987654321",
        run_number="42",
    )


@pytest.fixture
def action_inputs() -> ActionInputs:
    return ActionInputs(
        api_token="cf-test-token",
        wrangler_command="npx wrangler",
        config="wrangler.toml",
    )


@pytest.fixture
def output_file(tmp_path: Path) -> Path:
    return tmp_path / "github_output"


@pytest.fixture
def outputs(output_file: Path) -> ActionOutputs:
    return ActionOutputs(output_file=output_file, stream=io.StringIO())


@pytest.fixture
def make_runner():
    """Factory for a FakeRunner replaying the given results."""
    return FakeRunner


@pytest.fixture
def upload_output() -> str:
    return UPLOAD_OUTPUT


@pytest.fixture
def deploy_output() -> str:
    return DEPLOY_OUTPUT
