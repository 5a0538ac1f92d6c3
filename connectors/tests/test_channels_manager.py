import pytest

from connectors.channels_manager import forget_channels, get_or_create_channel
from connectors.mock_host_connector import MockOutputWindow, MockPane


@pytest.fixture
def window():
    return MockOutputWindow()


def test_get_or_create_is_idempotent(window):
    first = get_or_create_channel(window, "General")
    second = get_or_create_channel(window, "General")
    assert first is second
    assert window.created == 1
    assert window.call_log.operations().count("create_pane") == 1


def test_existing_host_pane_is_reused(window):
    existing = window.create_pane("General", visible=False, clear_on_reset=False)
    pane = get_or_create_channel(window, "General")
    assert pane is existing
    assert window.created == 1


def test_create_passes_flags(window):
    pane = get_or_create_channel(window, "Build", visible=False, clear_on_reset=False)
    assert pane.name == "Build"
    assert pane.visible is False
    assert pane.clear_on_reset is False


def test_refused_creation_returns_none_and_is_not_cached(window):
    window.refuse_create = True
    assert get_or_create_channel(window, "General") is None
    window.refuse_create = False
    pane = get_or_create_channel(window, "General")
    assert pane is not None
    assert window.created == 1


def test_create_without_handle_falls_back_to_lookup():
    class QuietWindow(MockOutputWindow):
        def create_pane(self, name, visible, clear_on_reset):
            super().create_pane(name, visible, clear_on_reset)
            return None

    window = QuietWindow()
    pane = get_or_create_channel(window, "General")
    assert isinstance(pane, MockPane)
    assert pane is window.panes["General"]


def test_host_error_means_unavailable():
    class BrokenWindow(MockOutputWindow):
        def get_pane(self, name):
            raise RuntimeError("output window service not available")

    assert get_or_create_channel(BrokenWindow(), "General") is None


def test_windows_do_not_share_panes():
    first, second = MockOutputWindow(), MockOutputWindow()
    pane_a = get_or_create_channel(first, "General")
    pane_b = get_or_create_channel(second, "General")
    assert pane_a is not pane_b
    assert first.created == 1 and second.created == 1


def test_forget_channels_keeps_host_panes(window):
    pane = get_or_create_channel(window, "General")
    forget_channels()
    again = get_or_create_channel(window, "General")
    assert again is pane
    assert window.created == 1
    assert window.call_log.operations().count("get_pane") == 2
