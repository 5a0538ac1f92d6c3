"""Formats node inspections and appends them to the output channel."""

from __future__ import annotations

import logging
from typing import Any

from connectors.channels_manager import get_or_create_channel
from connectors.host_interface import OutputPane, OutputWindow

from .context import CoordinatingContext
from .errors import SinkUnavailable
from .models import NodeInspection, ProjectField, ReportSettings, coerce_settings

logger = logging.getLogger(__name__)

# Fixed line order of one project report.
REPORT_LINES: list[tuple[str, str]] = [
    (ProjectField.NAME.value, "\tProject name: "),
    (ProjectField.DIRECTORY.value, "\tProject dir : "),
    (ProjectField.INSTANCE_ID.value, "\tProject id  : "),
    (ProjectField.TYPE_ID.value, "\tProject type: "),
]
EXCEPTION_PREFIX = "\tException: "


def format_report(inspection: NodeInspection) -> str:
    """Render one node. Opaque nodes render as the empty string.

    A faulted node keeps the lines obtained before the fault, then an
    exception line, and gets no blank separator.
    """
    if not inspection.queryable:
        return ""
    values = inspection.values()
    lines = [f"{prefix}{values[field]}\n" for field, prefix in REPORT_LINES if field in values]
    if inspection.fault is not None:
        lines.append(f"{EXCEPTION_PREFIX}{inspection.fault.message}\n")
    else:
        lines.append("\n")
    return "".join(lines)


class ReportWriter:
    """Appends text to the configured channel from the coordinating context."""

    def __init__(self, window: OutputWindow, context: CoordinatingContext, settings: Any = None) -> None:
        self.window = window
        self.context = context
        self.settings: ReportSettings = coerce_settings(settings)

    def channel(self) -> OutputPane | None:
        return self.context.run(self._resolve_channel)

    def write(self, text: str) -> bool:
        """Append ``text``; returns False when the write was dropped."""
        return self.context.run(self._write_on_context, text)

    def write_report(self, inspection: NodeInspection) -> bool:
        text = format_report(inspection)
        if not text:
            return False
        return self.write(text)

    def _resolve_channel(self) -> OutputPane | None:
        s = self.settings
        return get_or_create_channel(self.window, s.channel_name, s.pane_visible, s.clear_on_reset)

    def _write_on_context(self, text: str) -> bool:
        self.context.require()
        pane = self._resolve_channel()
        if pane is None:
            err = SinkUnavailable(self.settings.channel_name)
            logger.warning(f"Dropping {len(text)} characters: {err.message}")
            return False
        if self.settings.activate_pane:
            try:
                pane.activate()
            except Exception as e:
                logger.warning(f"Could not activate output channel '{self.settings.channel_name}': {e}")
        try:
            pane.append_text(text)
        except Exception as e:
            logger.warning(f"Write to output channel '{self.settings.channel_name}' failed: {e}")
            return False
        return True


__all__ = ["EXCEPTION_PREFIX", "REPORT_LINES", "ReportWriter", "format_report"]
