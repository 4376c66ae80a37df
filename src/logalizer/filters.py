"""
FilterEngine for classifying lines by ordered regex filters.

Filters are evaluated in registration order and the first one whose pattern
matches the whole line wins. There is no best-match or longest-match logic:
an earlier, broader filter shadows any later one.

FilterEngine is not thread-safe on its own; DataModel calls it while holding
the model lock.
"""

import logging
import re

from logalizer.errors import ConfigurationError, FilterNotFoundError
from logalizer.types import Filter

logger = logging.getLogger(__name__)


class FilterEngine:
    """
    Ordered collection of named filters.

    Example:
        engine = FilterEngine()
        engine.add(Filter(1, "apple", FilterEngine.compile("apple", ".*apple.*")))
        engine.classify("red apple").name  # "apple"
    """

    def __init__(self) -> None:
        self._filters: list[Filter] = []

    @staticmethod
    def compile(name: str, pattern: str) -> re.Pattern[str]:
        """
        Compile a filter pattern.

        Args:
            name: Filter name, used in the error message
            pattern: Regular expression source

        Returns:
            Compiled pattern

        Raises:
            ConfigurationError: If the pattern is not a valid regex
        """
        try:
            return re.compile(pattern)
        except re.error as e:
            raise ConfigurationError(name, f"bad pattern {pattern!r}: {e}") from e

    def add(self, flt: Filter) -> None:
        """
        Append a filter at the lowest priority.

        Raises:
            ConfigurationError: If a filter with the same name exists
        """
        if self.get(flt.name) is not None:
            raise ConfigurationError(flt.name, "duplicate filter name")
        self._filters.append(flt)
        logger.debug(f"Filter {flt.name} ({flt.tab_id})")

    def get(self, name: str) -> Filter | None:
        """Look up a filter by name."""
        for flt in self._filters:
            if flt.name == name:
                return flt
        return None

    def bind_command(self, name: str, command: str) -> Filter:
        """
        Attach a command to an existing filter.

        Args:
            name: Filter name
            command: Command line to run for matching lines

        Returns:
            The updated filter

        Raises:
            FilterNotFoundError: If no filter has that name
        """
        flt = self.get(name)
        if flt is None:
            raise FilterNotFoundError(name)
        flt.command = command
        return flt

    def classify(self, text: str) -> Filter | None:
        """Return the first filter matching text, or None."""
        for flt in self._filters:
            if flt.matches(text):
                return flt
        return None
