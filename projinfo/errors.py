"""Exception types for the project info pass."""

import logging

mylogger = logging.getLogger(__name__)


class ProjectInfoError(Exception):
    """Base exception with a message, optionally logged when raised."""
    def __init__(self, message="A project info error occurred", log=False):
        self.message = message
        super().__init__(self.message)
        if log:
            mylogger.error(message)


class EnumerationError(ProjectInfoError):
    """The provider could not be reached. Fatal for the whole pass."""


class QueryFault(ProjectInfoError):
    """A provider call raised while querying one node. Fatal for that node only."""
    def __init__(self, node_label: str, cause: BaseException, log=False):
        self.node_label = node_label
        self.cause = cause
        super().__init__(str(cause) or cause.__class__.__name__, log=log)


class SinkUnavailable(ProjectInfoError):
    """The output channel could not be fetched or created."""
    def __init__(self, channel_name: str, message: str | None = None, log=False):
        self.channel_name = channel_name
        super().__init__(message or f"Output channel '{channel_name}' is unavailable", log=log)


class FieldUnsupported(ProjectInfoError):
    """Raised when reading the value of a field the node did not supply."""
    def __init__(self, field: str):
        self.field = field
        super().__init__(f"Field '{field}' is not available for this node")


class PassCancelled(ProjectInfoError):
    """The host asked the pass to stop."""
