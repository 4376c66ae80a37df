"""
Command runners used to annotate lines.

The CommandRunner protocol is the seam between the model and process
execution. The model only ever calls run(); production code injects
ShellCommandRunner, tests inject a deterministic double.

Contract:
- run() blocks until the command finishes
- run() never raises; any failure yields an empty string
"""

import logging
import shlex
import subprocess
from typing import Protocol, runtime_checkable

logger = logging.getLogger(__name__)


@runtime_checkable
class CommandRunner(Protocol):
    """
    Protocol for executing an annotation command against one line.

    Implementations receive the command bound to a filter and the full text
    of the matching line, and return whatever the command printed.
    """

    def run(self, command: str, line: str) -> str:
        """
        Run command for a line.

        Args:
            command: Command line bound to the filter
            line: Full text of the matching line

        Returns:
            Captured output, or "" on any failure
        """
        ...


class ShellCommandRunner:
    """
    Runs commands as child processes.

    The command string is split with shlex and the whole line is appended
    as the last argument, so the line is never interpreted by a shell.

    Example:
        runner = ShellCommandRunner(timeout=5.0)
        runner.run("echo seen:", "hello world")  # "seen: hello world"
    """

    def __init__(self, timeout: float | None = None) -> None:
        """
        Initialize runner.

        Args:
            timeout: Seconds before a command is killed, None to wait forever
        """
        self.timeout = timeout

    def run(self, command: str, line: str) -> str:
        try:
            args = shlex.split(command)
        except ValueError as e:
            logger.warning(f"Cannot parse command {command!r}: {e}")
            return ""
        if not args:
            return ""

        logger.debug(f"Executing: {command} {line!r}")
        try:
            result = subprocess.run(
                [*args, line],
                capture_output=True,
                text=True,
                errors="replace",
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired:
            logger.warning(f"Command {command!r} timed out after {self.timeout}s")
            return ""
        except (OSError, subprocess.SubprocessError) as e:
            logger.warning(f"Command {command!r} failed to start: {e}")
            return ""

        if result.returncode != 0:
            logger.warning(
                f"Command {command!r} exited with {result.returncode}: "
                f"{result.stderr.strip()}"
            )
            return ""
        return result.stdout.rstrip("\n")
