"""Custom exceptions for worker-version-deploy."""

from typing import Any


class DeployActionError(Exception):
    """Base exception for the deploy action."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ConfigurationError(DeployActionError):
    """A required input is missing or invalid."""

    def __init__(self, input_name: str, message: str):
        super().__init__(message, {"input": input_name})
        self.input_name = input_name


class CommandFailedError(DeployActionError):
    """A wrangler invocation exited with a non-zero status."""

    def __init__(self, operation: str, exit_code: int):
        super().__init__(
            f"wrangler versions {operation} failed with exit code {exit_code}. "
            "See logs above for details.",
            {"operation": operation, "exit_code": exit_code},
        )
        self.operation = operation
        self.exit_code = exit_code


class VersionIdNotFoundError(DeployActionError):
    """The upload output did not contain a Worker Version ID."""

    def __init__(self) -> None:
        super().__init__(
            "Failed to parse Worker Version ID from wrangler versions upload output."
        )
