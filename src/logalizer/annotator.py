"""
Annotator for command-bound filters.

When a line lands in a filter that has a command, the Annotator runs the
command through the injected CommandRunner and records non-empty output as
the line's comment.

Execution is synchronous: annotate() returns only after the command has
finished and its output has been recorded. The caller is the ingesting
source thread, so a slow command delays that source only.
"""

import logging
from typing import Callable

from logalizer.runner import CommandRunner

logger = logging.getLogger(__name__)


class Annotator:
    """
    Runs bound commands and records their output as comments.

    There is no deduplication: every call runs the command once.

    Example:
        annotator = Annotator(runner, record=store_comment)
        annotator.annotate(7, "whois", "connection from 10.0.0.1")
    """

    def __init__(
        self,
        runner: CommandRunner,
        record: Callable[[int, str], None],
    ) -> None:
        """
        Initialize annotator.

        Args:
            runner: Command runner used for every invocation
            record: Callback storing (line_id, comment) in the comment index
        """
        self.runner = runner
        self._record = record

    def annotate(self, line_id: int, command: str, text: str) -> str | None:
        """
        Run command for a line and record its output.

        Args:
            line_id: Id of the matching line
            command: Command bound to the filter
            text: Full line text, passed to the command

        Returns:
            The recorded comment, or None if the command produced nothing
        """
        try:
            output = self.runner.run(command, text)
        except Exception:
            logger.exception(f"Command runner raised for line {line_id}")
            return None

        if not output:
            return None

        self._record(line_id, output)
        logger.debug(f"Added comment ({line_id}) {output}")
        return output
