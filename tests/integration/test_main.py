"""Integration tests for the console script entry point."""

import os
from pathlib import Path

import pytest

from worker_deploy import main as entry_point
from worker_deploy.config import get_settings
from worker_deploy.core import orchestrator
from worker_deploy.core.runner import CommandResult


@pytest.fixture(autouse=True)
def fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def action_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """Inputs for an upload-only run inside a checkout at ``tmp_path``."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("INPUT_API_TOKEN", "cf-test-token")
    monkeypatch.setenv("INPUT_WRANGLER_COMMAND", "wrangler")
    monkeypatch.setenv("INPUT_ONLY_UPLOAD", "true")
    monkeypatch.setenv("GITHUB_OUTPUT", str(tmp_path / "github_output"))
    monkeypatch.delenv("RUNNER_DEBUG", raising=False)
    monkeypatch.delenv("WORKER_DEPLOY_LOG_LEVEL", raising=False)
    monkeypatch.setattr(entry_point, "configure_logging", lambda settings=None: None)
    return tmp_path


class TestMain:
    """Tests for main()."""

    def test_checkout_dotenv_not_forwarded_to_wrangler(
        self,
        monkeypatch: pytest.MonkeyPatch,
        action_env: Path,
        make_runner,
        upload_output: str,
    ):
        (action_env / ".env").write_text(
            "CLOUDFLARE_ACCOUNT_ID=someone-elses-account\n", encoding="utf-8"
        )
        monkeypatch.delenv("CLOUDFLARE_ACCOUNT_ID", raising=False)
        monkeypatch.setenv("LOG_LEVEL", "debug")
        runner = make_runner([CommandResult(exit_code=0, stdout=upload_output)])
        monkeypatch.setattr(orchestrator, "CommandRunner", lambda: runner)

        with pytest.raises(SystemExit) as exc_info:
            entry_point.main()

        assert exc_info.value.code == 0
        (upload,) = runner.wrangler_calls
        assert upload.env["CLOUDFLARE_API_TOKEN"] == "cf-test-token"
        assert "CLOUDFLARE_ACCOUNT_ID" not in upload.env
        assert "CLOUDFLARE_ACCOUNT_ID" not in os.environ

    def test_invalid_settings_reported_as_failure(
        self,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
        action_env: Path,
        make_runner,
    ):
        monkeypatch.setenv("WORKER_DEPLOY_LOG_LEVEL", "verbose")
        runner = make_runner()
        monkeypatch.setattr(orchestrator, "CommandRunner", lambda: runner)

        with pytest.raises(SystemExit) as exc_info:
            entry_point.main()

        assert exc_info.value.code == 1
        assert capsys.readouterr().out.startswith("::error::Invalid action settings")
        assert runner.calls == []
