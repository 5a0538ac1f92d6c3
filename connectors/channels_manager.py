# channels_manager.py
"""
channels_manager.py
-------------------
Manages output channels (host panes).

Holds the process-scoped registry of channels already resolved.

Fetches a channel from the host first and creates it only when the host
has none with that name.
Reuses resolved channels, so there is at most one live pane per name.

"""

import logging

from connectors.host_interface import OutputPane, OutputWindow

logger = logging.getLogger(__name__)

######################### Channels #########################


## the manager is this module itself

# variable to hold resolved channels:

_active_channels: dict[str, tuple[OutputWindow, OutputPane]] = {}
# key: channel name
# value: (window, pane) tuple
# The window is kept so a different host window never gets another window's pane.

# get a channel. If it already exists (here or in the host), return it.
def get_or_create_channel(window: OutputWindow, name: str, visible: bool = True, clear_on_reset: bool = True) -> OutputPane | None:
    """
    Get or create the output channel called ``name``.
    Returns None when the host can neither supply nor create it (SinkUnavailable);
    the caller drops its write.
    """
    cached = _active_channels.get(name)
    if cached is not None and cached[0] is window:
        return cached[1]

    try:
        pane = window.get_pane(name)
        if pane is None:
            logger.info(f"Creating output channel '{name}'")
            pane = window.create_pane(name, visible, clear_on_reset)
            if pane is None:
                # the host may create without returning the handle
                pane = window.get_pane(name)
    except Exception as e:
        logger.warning(f"Output channel '{name}' unavailable: {e}")
        return None

    if pane is None:
        logger.warning(f"Output channel '{name}' unavailable: host did not create it")
        return None

    _active_channels[name] = (window, pane)
    return pane


def forget_channels() -> None:
    """Drop every resolved channel. The host still owns and keeps the panes."""
    _active_channels.clear()
