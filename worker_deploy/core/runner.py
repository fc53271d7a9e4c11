"""External command execution.

Runs a process to completion, forwarding each line of stdout/stderr to the
log as it arrives while keeping the full text for parsing afterwards.
"""

import asyncio
import codecs
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass

from worker_deploy.utils.logging import get_logger

LineHandler = Callable[[str], None]

# Output is read in fixed-size chunks, so line length is unbounded
READ_CHUNK_SIZE = 65536


@dataclass
class CommandResult:
    """Exit status and captured output of a finished process."""

    exit_code: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.exit_code == 0


class CommandRunner:
    """Runs external commands with streamed, captured output."""

    def __init__(self):
        self.logger = get_logger("runner")

    async def run(
        self,
        command: str,
        args: Sequence[str] = (),
        env: Mapping[str, str] | None = None,
        cwd: str | None = None,
        silent: bool = False,
    ) -> CommandResult:
        """Run ``command`` with ``args`` and wait for it to exit.

        Args:
            command: Executable name or path
            args: Arguments passed positionally
            env: Full environment for the child; inherits ours when None
            cwd: Working directory override
            silent: Capture output without forwarding it to the log

        Returns:
            The exit code and the complete stdout/stderr text

        Raises:
            FileNotFoundError: If the executable does not exist
        """
        process = await asyncio.create_subprocess_exec(
            command,
            *args,
            cwd=cwd,
            env=dict(env) if env is not None else None,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )

        stdout_handler = None if silent else self._log_stdout
        stderr_handler = None if silent else self._log_stderr

        drains = [
            asyncio.ensure_future(self._drain(process.stdout, stdout_handler)),
            asyncio.ensure_future(self._drain(process.stderr, stderr_handler)),
        ]
        try:
            stdout, stderr = await asyncio.gather(*drains)
        except BaseException:
            for task in drains:
                task.cancel()
            await asyncio.gather(*drains, return_exceptions=True)
            if process.returncode is None:
                process.kill()
            raise
        finally:
            exit_code = await process.wait()

        return CommandResult(exit_code=exit_code, stdout=stdout, stderr=stderr)

    async def _drain(
        self, stream: asyncio.StreamReader | None, handler: LineHandler | None
    ) -> str:
        """Read a stream to EOF, passing each complete line to ``handler``."""
        if stream is None:
            return ""

        decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        chunks: list[str] = []
        pending = ""

        while True:
            data = await stream.read(READ_CHUNK_SIZE)
            text = decoder.decode(data, final=not data)
            if text:
                chunks.append(text)
                if handler:
                    *lines, pending = (pending + text).split("\n")
                    for line in lines:
                        handler(line.rstrip())
            if not data:
                break

        if handler and pending:
            handler(pending.rstrip())

        return "".join(chunks)

    def _log_stdout(self, line: str) -> None:
        self.logger.info(line)

    def _log_stderr(self, line: str) -> None:
        self.logger.error(line)
