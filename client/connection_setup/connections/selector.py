"""
Connection Selector

Lists the user's connections and routes to the editor or the
new-connection form.

Starting a conversation from a connection card belongs to the chat
client, so it is not handled here; open_editor covers the settings link
on each card.
"""

import logging

from connection_setup.connections.client import ConnectionsAPI, TransportError
from connection_setup.connections.schemas import Connection
from connection_setup.connections.selection import enabled_tables
from connection_setup.ui import NEW_CONNECTION_VIEW, Navigator, Notifier, Severity, connection_view

logger = logging.getLogger(__name__)


class ConnectionSelector:
    """Connection list shown on the landing view."""

    def __init__(self, api: ConnectionsAPI, notifier: Notifier, navigator: Navigator) -> None:
        self._api = api
        self._notifier = notifier
        self._navigator = navigator
        self.connections: list[Connection] = []

    async def load(self) -> bool:
        try:
            self.connections = await self._api.get_connections()
        except TransportError as e:
            self._notifier.notify(Severity.ERROR, e.message)
            return False
        logger.debug(f"Loaded {len(self.connections)} connections")
        return True

    def open_editor(self, connection_id: str) -> None:
        self._navigator.navigate(connection_view(connection_id))

    def new_connection(self) -> None:
        self._navigator.navigate(NEW_CONNECTION_VIEW)

    @staticmethod
    def enabled_table_count(connection: Connection) -> int:
        """Tables the assistant can currently see for this connection."""
        if connection.options is None:
            return 0
        return len(enabled_tables(connection.options))
