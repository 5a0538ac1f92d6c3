from enum import Enum
from typing import Protocol, Any, Iterable, Sequence, runtime_checkable
from box import Box


class HostStatus(str, Enum):
    """Per-field status code reported by the host for one slot of a batched query."""
    OK = "ok"
    UNSUPPORTED = "unsupported"


# One slot of a batched query: the value is meaningful only when status is OK.
FieldSlot = tuple[Any, HostStatus]


class NodeHandle(Protocol):
    """
    Protocol for an opaque project node handed out by the host.
    The core never looks inside a handle; it only asks whether the handle
    also satisfies QueryableNode. A handle is valid for one enumeration pass.
    """
    @property
    def label(self) -> str: ...
    "short human readable label, used in log messages only"


@runtime_checkable
class QueryableNode(Protocol):
    """
    Extended capability of a node: batched attribute queries.
    Both calls return one slot per requested field, in request order.
    A field the node cannot answer comes back as HostStatus.UNSUPPORTED;
    the call itself raises only on a genuine provider fault.
    """
    def query_scalar(self, fields: Sequence[str]) -> list[FieldSlot]: ...
    def query_identity(self, fields: Sequence[str]) -> list[FieldSlot]: ...


class ProjectProvider(Protocol):
    """
    Protocol for the host's project tree.
    enumerate() raises when the provider cannot be reached (no open workspace).
    Order of the returned handles is provider defined.
    """
    def enumerate(self) -> Iterable[NodeHandle]: ...

    @property
    def info(self) -> Box:
        """
        Returns information about the provider as a Box. Must carry
        "type" and "workspace"; the enumerator logs them when a pass opens.
        """
        ...


class OutputPane(Protocol):
    """Protocol for an append-only text pane owned by the host."""
    @property
    def name(self) -> str: ...
    def activate(self) -> None: ...
    def append_text(self, text: str) -> None: ...


class OutputWindow(Protocol):
    """
    Protocol for the host's output sink.
    get_pane returns None when no pane with that name exists (NotFound).
    create_pane returns the new pane, or None when the host refuses to create it.
    """
    def get_pane(self, name: str) -> OutputPane | None: ...
    def create_pane(self, name: str, visible: bool, clear_on_reset: bool) -> OutputPane | None: ...
