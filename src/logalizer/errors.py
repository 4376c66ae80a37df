"""
Exception classes for the log viewer data model.

This module defines the errors raised while configuring and feeding the model:
- ConfigurationError: Invalid filter definition or option string
- FilterNotFoundError: Command bound to a filter name that does not exist
- PreconditionViolation: Line ingested for a tab id that was never registered

Command runner failures are not represented here. They never surface as
exceptions; a missing comment is the only observable result.
"""


class ConfigurationError(ValueError):
    """
    Raised when a filter or option cannot be registered.

    Nothing is created when this is raised: no filter, no tab.

    Attributes:
        name: Name of the filter or option being configured
        reason: Why it was rejected
    """

    def __init__(self, name: str, reason: str) -> None:
        self.name = name
        self.reason = reason
        super().__init__(f"Invalid configuration for '{name}': {reason}")


class FilterNotFoundError(LookupError):
    """
    Raised when binding a command to an unknown filter name.

    Attributes:
        filter_name: The name that was looked up
    """

    def __init__(self, filter_name: str) -> None:
        self.filter_name = filter_name
        super().__init__(f"No filter named '{filter_name}'")


class PreconditionViolation(ValueError):
    """
    Raised when a line is ingested for a tab id that does not exist.

    Attributes:
        tab_id: The offending origin tab id
        tab_count: Number of registered tabs at the time of the call
    """

    def __init__(self, tab_id: int, tab_count: int) -> None:
        self.tab_id = tab_id
        self.tab_count = tab_count
        super().__init__(
            f"Origin tab {tab_id} does not exist "
            f"(registered tabs: {tab_count})"
        )
