"""
Coordinating context and cancellation.

All provider and channel calls must run on one designated thread. The
CoordinatingContext owns that thread; ``run`` is the transfer primitive and
is a plain call when the caller is already on it.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, TypeVar

from .errors import PassCancelled

logger = logging.getLogger(__name__)

T = TypeVar("T")


class CoordinatingContext:
    """Single-threaded execution context that every host call funnels through."""

    def __init__(self, name: str = "projinfo-coordinator") -> None:
        self.name = name
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix=name)
        self._thread_ident: int = self._executor.submit(threading.get_ident).result()
        self._closed = False

    @property
    def thread_ident(self) -> int:
        return self._thread_ident

    def is_current(self) -> bool:
        return threading.get_ident() == self._thread_ident

    def run(self, fn: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        """Run ``fn`` on the coordinating thread and return its result.

        Exceptions raised by ``fn`` propagate to the caller.
        """
        if self.is_current():
            return fn(*args, **kwargs)
        if self._closed:
            raise RuntimeError(f"Coordinating context '{self.name}' is closed")
        return self._executor.submit(fn, *args, **kwargs).result()

    def require(self) -> None:
        """Raise if the caller is not on the coordinating thread."""
        if not self.is_current():
            raise RuntimeError(
                f"Call made from thread '{threading.current_thread().name}' "
                f"outside coordinating context '{self.name}'"
            )

    def close(self) -> None:
        if not self._closed:
            self._closed = True
            self._executor.shutdown(wait=True)

    def __enter__(self) -> CoordinatingContext:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class CancellationToken:
    """Host shutdown signal; checked between provider calls."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        if not self._event.is_set():
            logger.info("Cancellation requested")
        self._event.set()

    @property
    def is_cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise PassCancelled("Project info pass cancelled")


__all__ = ["CancellationToken", "CoordinatingContext"]
