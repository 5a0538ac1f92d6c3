import pytest

from connectors.channels_manager import forget_channels


@pytest.fixture(autouse=True)
def fresh_channels():
    """Channels are process scoped; start every test without resolved ones."""
    forget_channels()
    yield
    forget_channels()
