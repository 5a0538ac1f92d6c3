"""Forward-only cursor over the provider's project nodes."""

from __future__ import annotations

import logging
from typing import Any, Iterator

from connectors.host_interface import NodeHandle, ProjectProvider

from .errors import EnumerationError

logger = logging.getLogger(__name__)


class _End:
    def __repr__(self) -> str:
        return "END"


END: Any = _End()
"Returned by Cursor.next once the provider has no more nodes."


class Cursor:
    """Single-use, forward-only cursor. No rewind."""

    def __init__(self, nodes: Iterator[NodeHandle]) -> None:
        self._nodes = nodes
        self._done = False

    def next(self) -> NodeHandle | _End:
        if self._done:
            return END
        try:
            return next(self._nodes)
        except StopIteration:
            self._done = True
            return END
        except Exception as exc:
            self._done = True
            raise EnumerationError(f"Project enumeration failed: {exc}") from exc

    def __iter__(self) -> Iterator[NodeHandle]:
        while (node := self.next()) is not END:
            yield node


class NodeEnumerator:
    """Opens cursors over ``provider.enumerate()``."""

    def __init__(self, provider: ProjectProvider) -> None:
        self.provider = provider

    def open(self) -> Cursor:
        try:
            nodes = iter(self.provider.enumerate())
        except Exception as exc:
            raise EnumerationError(f"Cannot enumerate projects: {exc}") from exc
        info = self.provider.info
        logger.info(f"Enumerating projects of {info.type} workspace '{info.workspace}'")
        return Cursor(nodes)


__all__ = ["Cursor", "END", "NodeEnumerator"]
