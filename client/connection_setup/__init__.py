"""Connection setup workflow for an AI-assisted data analysis client."""

from connection_setup.connections.client import HttpConnectionsAPI, TransportError
from connection_setup.connections.selector import ConnectionSelector
from connection_setup.creation.controller import CreationController
from connection_setup.creation.draft import ConnectionDraft
from connection_setup.editing.controller import EditController

__all__ = [
    "ConnectionDraft",
    "ConnectionSelector",
    "CreationController",
    "EditController",
    "HttpConnectionsAPI",
    "TransportError",
]
