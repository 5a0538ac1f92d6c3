"""Runs one project info pass: enumerate, inspect, report."""

from __future__ import annotations

import contextlib
import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Optional

from connectors.host_interface import OutputWindow, ProjectProvider

from .context import CancellationToken, CoordinatingContext
from .enumerator import NodeEnumerator
from .errors import EnumerationError, PassCancelled
from .inspector import PropertyInspector
from .models import PassSummary, ReportSettings, coerce_settings
from .report_writer import ReportWriter

logger = logging.getLogger(__name__)


class ProjectInfoPass:
    """One full, unordered traversal of the provider's projects.

    Only one pass may be in flight; ``run`` may be called from any thread and
    transfers to the coordinating context before touching the provider.
    """

    def __init__(
        self,
        provider: ProjectProvider,
        window: OutputWindow,
        context: CoordinatingContext,
        settings: Any = None,
        cancellation: Optional[CancellationToken] = None,
        inspector: Optional[PropertyInspector] = None,
    ) -> None:
        self.context = context
        self.settings: ReportSettings = coerce_settings(settings)
        self.cancellation = cancellation or CancellationToken()
        self.enumerator = NodeEnumerator(provider)
        self.inspector = inspector or PropertyInspector()
        self.writer = ReportWriter(window, context, self.settings)
        self._in_flight = threading.Lock()

    def run(self) -> PassSummary:
        if not self._in_flight.acquire(blocking=False):
            raise RuntimeError("A project info pass is already running")
        try:
            return self.context.run(self._run_on_context)
        finally:
            self._in_flight.release()

    def _run_on_context(self) -> PassSummary:
        self.context.require()
        summary = PassSummary()
        try:
            self.cancellation.raise_if_cancelled()
            cursor = self.enumerator.open()
            for node in cursor:
                self.cancellation.raise_if_cancelled()
                summary.visited += 1
                inspection = self.inspector.inspect(node, self.cancellation)
                if inspection.cancelled:
                    self.cancellation.raise_if_cancelled()
                if not inspection.queryable:
                    summary.skipped += 1
                else:
                    if inspection.fault is not None:
                        summary.faults += 1
                    logger.debug(f"Reporting project '{inspection.label}'")
                    if self.writer.write_report(inspection):
                        summary.reported += 1
                # checked before the cursor is advanced again
                self.cancellation.raise_if_cancelled()
        except PassCancelled:
            summary.cancelled = True
            logger.info(f"Project info pass cancelled after {summary.visited} projects")
            return summary
        except EnumerationError as e:
            summary.error = e.message
            logger.error(f"Project info pass aborted after {summary.visited} projects: {e.message}")
            return summary

        summary.completed = True
        if self.settings.completion_marker:
            self.writer.write(self.settings.completion_marker)
        logger.info(
            f"Project info pass completed: {summary.visited} projects, "
            f"{summary.reported} reported, {summary.skipped} skipped, {summary.faults} faults"
        )
        return summary


class ProjectInfoPackage(contextlib.AbstractContextManager["ProjectInfoPackage"]):
    """Staged startup around a ProjectInfoPass.

    Setup runs wherever the caller is and touches no host object. The
    coordinated phase is entered explicitly through the context and runs the
    pass there.
    """

    def __init__(
        self,
        provider: ProjectProvider,
        window: OutputWindow,
        settings: Any = None,
        context: Optional[CoordinatingContext] = None,
    ) -> None:
        self._provider = provider
        self._window = window
        self._settings = settings
        self._owns_context = context is None
        self._context = context
        self._pass: Optional[ProjectInfoPass] = None

    @property
    def context(self) -> CoordinatingContext:
        if self._context is None:
            raise RuntimeError("Package not set up. Call initialize() first.")
        return self._context

    def initialize(self, cancellation: Optional[CancellationToken] = None) -> PassSummary:
        self._setup(cancellation or CancellationToken())
        return self.context.run(self._coordinated_phase)

    def initialize_async(self, cancellation: Optional[CancellationToken] = None) -> Future[PassSummary]:
        """Start ``initialize`` on a background worker."""
        executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="projinfo-init")
        future = executor.submit(self.initialize, cancellation)
        executor.shutdown(wait=False)
        return future

    def _setup(self, cancellation: CancellationToken) -> None:
        settings = coerce_settings(self._settings)
        if self._context is None:
            self._context = CoordinatingContext()
        self._pass = ProjectInfoPass(
            self._provider, self._window, self._context, settings=settings, cancellation=cancellation
        )
        logger.debug(f"Package set up for channel '{settings.channel_name}'")

    def _coordinated_phase(self) -> PassSummary:
        assert self._pass is not None
        self.context.require()
        return self._pass.run()

    def close(self) -> None:
        if self._owns_context and self._context is not None:
            self._context.close()
            self._context = None

    def __exit__(self, exc_type, exc, tb) -> Optional[bool]:
        self.close()
        return None


__all__ = ["ProjectInfoPackage", "ProjectInfoPass"]
