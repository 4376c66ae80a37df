"""
Interactive multi-source log viewer.

This package tails several text streams concurrently, sorts each line into a
tab with ordered regex filters, and lets an operator scroll the filtered
history and show or hide tabs live. Lines matching a command-bound filter
are annotated with the command's output.

Key classes:
- DataModel: Thread-safe model shared by line sources and the renderer
- LineSource: Threaded reader feeding one input into the model
- CommandRunner: Protocol for annotation commands
- ShellCommandRunner: CommandRunner that spawns child processes

Key types:
- LineView: A visible line with its optional comment
- Tab: Snapshot of a tab's name, state and counters
"""

from logalizer.errors import (
    ConfigurationError,
    FilterNotFoundError,
    PreconditionViolation,
)
from logalizer.model import DataModel
from logalizer.runner import CommandRunner, ShellCommandRunner
from logalizer.sources import LineSource
from logalizer.types import Filter, Line, LineView, Tab

__all__ = [
    # Model
    "DataModel",
    "LineSource",
    # Command execution
    "CommandRunner",
    "ShellCommandRunner",
    # Data types
    "Filter",
    "Line",
    "LineView",
    "Tab",
    # Errors
    "ConfigurationError",
    "FilterNotFoundError",
    "PreconditionViolation",
]
