"""
Unit tests for the connection selector.
"""
import pytest

from connection_setup.connections.client import TransportError
from connection_setup.connections.schemas import Connection
from connection_setup.connections.selector import ConnectionSelector
from connection_setup.ui import NEW_CONNECTION_VIEW, Severity


@pytest.fixture
def selector(api, notifier, navigator) -> ConnectionSelector:
    return ConnectionSelector(api, notifier, navigator)


@pytest.mark.asyncio()
async def test_load_lists_connections(selector, api, connection):
    api.get_connections.return_value = [connection]

    assert await selector.load() is True

    assert selector.connections == [connection]


@pytest.mark.asyncio()
async def test_load_failure_notifies(selector, api, notifier):
    api.get_connections.side_effect = TransportError("Network error: refused", kind="network")

    assert await selector.load() is False

    notifier.notify.assert_called_once_with(Severity.ERROR, "Network error: refused")
    assert selector.connections == []


def test_routes(selector, navigator):
    selector.open_editor("c1")
    selector.new_connection()

    assert [call.args[0] for call in navigator.navigate.call_args_list] == [
        "/connection/c1",
        NEW_CONNECTION_VIEW,
    ]


def test_enabled_table_count(connection):
    assert ConnectionSelector.enabled_table_count(connection) == 1
    assert ConnectionSelector.enabled_table_count(Connection(id="x", name="x")) == 0
