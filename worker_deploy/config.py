"""Action configuration using pydantic-settings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime settings loaded from environment variables.

    Prefixed with ``WORKER_DEPLOY_`` so a workflow's own ``LOG_LEVEL`` never
    reaches the action.
    """

    model_config = SettingsConfigDict(
        env_prefix="WORKER_DEPLOY_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["console", "json"] = "console"
    log_colors: bool = True

    # Set by GitHub when a workflow is re-run with debug logging enabled
    runner_debug: bool = Field(default=False, validation_alias="RUNNER_DEBUG")

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @field_validator("log_format", mode="before")
    @classmethod
    def _lower(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @property
    def effective_log_level(self) -> str:
        """Log level, forced to DEBUG when the runner asks for it."""
        if self.runner_debug:
            return "DEBUG"
        return self.log_level


class ActionInputs(BaseSettings):
    """Inputs declared in action.yml.

    GitHub exposes every input as an ``INPUT_<NAME>`` environment variable,
    with an empty string for inputs the workflow did not set.
    """

    model_config = SettingsConfigDict(
        env_prefix="INPUT_",
        case_sensitive=False,
        extra="ignore",
    )

    api_token: str = Field(default="", repr=False)
    wrangler_command: str = ""
    working_directory: str | None = None
    config: str | None = None
    upload_args: str = ""
    deploy_args: str = ""
    message_template: str = ""
    tag_template: str = ""
    only_upload: bool = False

    @field_validator("wrangler_command", "api_token", mode="before")
    @classmethod
    def _strip(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip()
        return value

    @field_validator("working_directory", "config", mode="before")
    @classmethod
    def _blank_to_none(cls, value: object) -> object:
        if isinstance(value, str):
            value = value.strip()
            return value or None
        return value

    @field_validator("only_upload", mode="before")
    @classmethod
    def _parse_flag(cls, value: object) -> bool:
        # Only the literal "true" enables the flag, like core.getInput() callers do
        if isinstance(value, bool):
            return value
        if value is None:
            return False
        return str(value).strip().lower() == "true"


class RunnerEnvironment(BaseSettings):
    """Facts about the current workflow run, read once at start-up."""

    model_config = SettingsConfigDict(
        env_prefix="GITHUB_",
        case_sensitive=False,
        extra="ignore",
    )

    repository: str | None = None
    ref: str | None = None
    sha: str | None = None
    actor: str | None = None
    run_id: str | None = None
    run_number: str | None = None

    @field_validator("*", mode="before")
    @classmethod
    def _blank_to_none(cls, value: object) -> object:
        if isinstance(value, str) and not value:
            return None
        return value


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
