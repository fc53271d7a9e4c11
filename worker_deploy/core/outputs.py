"""Workflow commands and step outputs.

Implements the small part of the GitHub Actions runner protocol the action
needs: writing step outputs and reporting a failed run.
"""

import os
import sys
import uuid
from pathlib import Path
from typing import TextIO

from worker_deploy.utils.logging import get_logger

logger = get_logger(__name__)


def escape_data(value: str) -> str:
    """Escape a workflow command message."""
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def escape_property(value: str) -> str:
    """Escape a workflow command property value."""
    return escape_data(value).replace(":", "%3A").replace(",", "%2C")


class ActionOutputs:
    """Publishes step outputs and the run's failure status.

    Outputs go to the ``GITHUB_OUTPUT`` file when the runner provides one.
    Every published value is also kept in ``values`` so callers can inspect
    what was set.
    """

    def __init__(self, output_file: str | Path | None = None, stream: TextIO | None = None):
        if output_file is None:
            output_file = os.environ.get("GITHUB_OUTPUT") or None
        self.output_file = Path(output_file) if output_file else None
        self.stream = stream or sys.stdout

        self.values: dict[str, str] = {}
        self.failed = False
        self.failure_message: str | None = None

    @property
    def exit_code(self) -> int:
        return 1 if self.failed else 0

    def set_output(self, name: str, value: str) -> None:
        """Publish a step output."""
        self.values[name] = value

        if self.output_file is None:
            self._issue(f"set-output name={escape_property(name)}", value)
            return

        delimiter = f"ghadelimiter_{uuid.uuid4()}"
        with open(self.output_file, "a", encoding="utf-8") as f:
            f.write(f"{name}<<{delimiter}\n{value}\n{delimiter}\n")

        logger.debug("outputs.set", name=name)

    def set_failed(self, message: str) -> None:
        """Mark the run as failed and print an error annotation."""
        self.failed = True
        self.failure_message = message
        self._issue("error", message)

    def _issue(self, command: str, message: str) -> None:
        self.stream.write(f"::{command}::{escape_data(message)}\n")
        self.stream.flush()
