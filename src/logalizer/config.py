"""
Configuration for the log viewer.

This module provides:
- Settings: Environment-based tunables (LOGALIZER_ prefix)
- FilterSpec / CommandBinding: Parsed "name:value" command-line options
- ViewerConfig: Inputs, filters and command bindings for one run
- Session / build_model: Wire a DataModel and its line sources from a config

Registration order matters: filters are registered before any source so
that the very first line read is already classified, and command bindings
are applied before reading starts so no matching line goes unannotated.
"""

import functools
import logging
import threading
from dataclasses import dataclass, field
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError
from pydantic_settings import BaseSettings

from logalizer.errors import ConfigurationError, FilterNotFoundError
from logalizer.model import DataModel
from logalizer.runner import CommandRunner
from logalizer.sources import LineSource

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Viewer configuration.

    All settings can be overridden via environment variables with
    LOGALIZER_ prefix. For example:
        LOGALIZER_COMMAND_TIMEOUT=5
        LOGALIZER_LOG_FILE=/tmp/logalizer.log
    """

    # Line sources
    poll_interval: float = 0.25
    join_timeout: float = 1.0

    # Rendering
    refresh_interval: float = 0.25
    show_comments: bool = True
    tab_name_width: int = 16

    # Annotation commands, None waits forever
    command_timeout: float | None = None

    # Logging
    log_level: str = "WARNING"
    log_file: Path | None = None

    model_config = {"env_prefix": "LOGALIZER_"}


def _split_option(raw: str) -> tuple[str, str]:
    """Split "name:value" at the first colon."""
    name, sep, value = raw.partition(":")
    if not sep:
        raise ConfigurationError(raw, "expected <name>:<value>")
    return name, value


class FilterSpec(BaseModel):
    """A filter definition from the command line."""

    name: str = Field(min_length=1, description="Filter and tab name")
    pattern: str = Field(description="Regex matched against whole lines")

    @classmethod
    def parse(cls, raw: str) -> "FilterSpec":
        """
        Parse "name:regex".

        Raises:
            ConfigurationError: If the separator or name is missing
        """
        name, pattern = _split_option(raw)
        try:
            return cls(name=name, pattern=pattern)
        except ValidationError as e:
            raise ConfigurationError(raw, "filter name must not be empty") from e


class CommandBinding(BaseModel):
    """A command bound to a filter by name."""

    name: str = Field(min_length=1, description="Name of an existing filter")
    command: str = Field(min_length=1, description="Command run per matching line")

    @classmethod
    def parse(cls, raw: str) -> "CommandBinding":
        """
        Parse "name:command".

        Raises:
            ConfigurationError: If the separator, name or command is missing
        """
        name, command = _split_option(raw)
        try:
            return cls(name=name, command=command)
        except ValidationError as e:
            raise ConfigurationError(raw, "name and command must not be empty") from e


class ViewerConfig(BaseModel):
    """Everything needed to build a model for one run."""

    inputs: list[str] = Field(default_factory=list)
    filters: list[FilterSpec] = Field(default_factory=list)
    commands: list[CommandBinding] = Field(default_factory=list)
    follow: bool = False


@dataclass
class Session:
    """
    A configured model with its line sources.

    Attributes:
        model: The shared data model
        sources: One LineSource per input, not yet started
        stop: Cancellation token shared by all sources
        unbound: Command bindings whose filter name did not exist
    """

    model: DataModel
    sources: list[LineSource]
    stop: threading.Event
    unbound: list[CommandBinding] = field(default_factory=list)

    def start(self) -> None:
        """Start reading every input."""
        for source in self.sources:
            source.start()

    def shutdown(self, timeout: float = 1.0) -> list[LineSource]:
        """
        Signal and join all sources.

        Args:
            timeout: Seconds to wait for each source

        Returns:
            Sources still blocked in a read after the timeout
        """
        self.stop.set()
        stuck = []
        for source in self.sources:
            if not source.join(timeout):
                logger.warning(f"Source {source.path} did not stop within {timeout}s")
                stuck.append(source)
        return stuck


def build_model(
    config: ViewerConfig,
    runner: CommandRunner,
    settings: Settings | None = None,
    stop: threading.Event | None = None,
) -> Session:
    """
    Create a DataModel and its sources from a config.

    Args:
        config: Inputs, filters and command bindings
        runner: Command runner injected into the model
        settings: Tunables, defaults if None
        stop: Cancellation token, a new one if None

    Returns:
        Session with unstarted sources

    Raises:
        ConfigurationError: If a filter pattern is invalid or a name repeats
    """
    settings = settings if settings is not None else Settings()
    stop = stop if stop is not None else threading.Event()
    model = DataModel(runner=runner)

    for spec in config.filters:
        model.add_filter(spec.name, spec.pattern)

    unbound = []
    for binding in config.commands:
        try:
            model.bind_command(binding.name, binding.command)
        except FilterNotFoundError as e:
            logger.warning(f"Ignoring command for {binding.name}: {e}")
            unbound.append(binding)

    sources = []
    for path in config.inputs:
        tab_id = model.add_source(path)
        sources.append(
            LineSource(
                path,
                on_line=functools.partial(model.add_line, origin_tab_id=tab_id),
                stop=stop,
                follow=config.follow,
                poll_interval=settings.poll_interval,
            )
        )

    return Session(model=model, sources=sources, stop=stop, unbound=unbound)
