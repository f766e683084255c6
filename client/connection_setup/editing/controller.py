"""
Connection Editing

Loads an existing connection into editable fields, tracks unsaved
changes, and submits partial updates, schema refreshes and deletion.
"""

import asyncio
import logging
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict

from connection_setup.config import Settings, get_settings
from connection_setup.connections.client import ConnectionsAPI, TransportError
from connection_setup.connections.schemas import (
    Connection,
    ConnectionOptions,
    ConnectionUpdate,
    ConversationRef,
)
from connection_setup.connections.selection import set_schema_enabled, set_table_enabled
from connection_setup.ui import DEFAULT_VIEW, Navigator, Notifier, Severity
from connection_setup.validation.rules import require_system_prompt

logger = logging.getLogger(__name__)

MISSING_ID_MESSAGE = "No connection id provided - something went wrong"


class ConfirmationKind(str, Enum):
    """What an open confirmation prompt will do when accepted."""

    DISCARD = "discard"
    DELETE = "delete"


class Confirmation(BaseModel):
    """A yes/no prompt waiting for the user."""

    model_config = ConfigDict(frozen=True)

    kind: ConfirmationKind
    title: str
    message: str
    ok_text: str


class EditController:
    """
    Edit session for a single connection.

    The loaded connection is kept as the baseline; local fields diverge
    from it until the update is submitted or the edits are discarded.
    """

    def __init__(
        self,
        api: ConnectionsAPI,
        notifier: Notifier,
        navigator: Navigator,
        connection_id: str | None,
        settings: Settings | None = None,
    ) -> None:
        self._api = api
        self._notifier = notifier
        self._navigator = navigator
        self._settings = settings or get_settings()
        self.connection_id = connection_id or None

        self.baseline: Connection | None = None
        self.name = ""
        self.dsn = ""
        self.system_prompt = ""
        self.options: ConnectionOptions | None = None
        self.related_conversations: list[ConversationRef] = []
        self.pending_confirmation: Confirmation | None = None

        self._dirty = False
        self._loading = False
        self._updating = False
        self._deleting = False
        self._refreshing = False
        self._closed = False

        if self.connection_id is None:
            self._notifier.notify(Severity.ERROR, MISSING_ID_MESSAGE)

    @property
    def is_dirty(self) -> bool:
        return self._dirty

    @property
    def is_loading(self) -> bool:
        return self._loading

    @property
    def is_pending(self) -> bool:
        """Whether an update is in flight."""
        return self._updating

    @property
    def is_deleting(self) -> bool:
        return self._deleting

    @property
    def is_refreshing(self) -> bool:
        return self._refreshing

    def close(self) -> None:
        """Mark the view as torn down. Later completions are ignored."""
        self._closed = True

    # ==========================================================================
    # Loading
    # ==========================================================================

    async def load(self) -> bool:
        """Fetch the connection and its conversations, then seed the fields."""
        if self.connection_id is None or self._loading:
            return False

        self._loading = True
        try:
            connection, conversations = await asyncio.gather(
                self._api.get_connection(self.connection_id),
                self._api.get_conversations(),
            )
        except TransportError as e:
            if not self._closed:
                self._notifier.notify(Severity.ERROR, e.message)
            return False
        finally:
            self._loading = False

        if self._closed:
            return False

        self.baseline = connection
        self.name = connection.name
        self.dsn = connection.dsn or ""
        self.system_prompt = connection.system_prompt or ""
        self.options = connection.options
        self.related_conversations = [
            conversation
            for conversation in conversations
            if conversation.connection_id == self.connection_id
        ]
        self._dirty = False
        return True

    # ==========================================================================
    # Field edits
    # ==========================================================================

    def set_name(self, name: str) -> None:
        self.name = name
        self._dirty = True

    def set_dsn(self, dsn: str) -> None:
        self.dsn = dsn
        self._dirty = True

    def set_system_prompt(self, system_prompt: str) -> None:
        self.system_prompt = system_prompt
        self._dirty = True

    def set_schema_enabled(self, schema_index: int, enabled: bool) -> None:
        self.options = set_schema_enabled(self._require_options(), schema_index, enabled)
        self._dirty = True

    def set_table_enabled(self, schema_index: int, table_index: int, enabled: bool) -> None:
        self.options = set_table_enabled(self._require_options(), schema_index, table_index, enabled)
        self._dirty = True

    def _require_options(self) -> ConnectionOptions:
        if self.options is None:
            raise ValueError("connection has no schema options loaded")
        return self.options

    # ==========================================================================
    # Update
    # ==========================================================================

    def build_update(self) -> ConnectionUpdate:
        """
        Partial payload for the current edits.

        Name and options are always sent; dsn and system prompt only when
        they differ from the loaded connection.
        """
        baseline_dsn = (self.baseline.dsn if self.baseline else None) or ""
        baseline_prompt = (self.baseline.system_prompt if self.baseline else None) or ""

        fields: dict[str, Any] = {"name": self.name}
        if self.options is not None:
            fields["options"] = self.options
        if self.dsn != baseline_dsn:
            fields["dsn"] = self.dsn
        if self.system_prompt != baseline_prompt:
            fields["system_prompt"] = self.system_prompt
        return ConnectionUpdate(**fields)

    async def submit(self) -> bool:
        """
        Save the edits, or just leave when nothing changed.

        Returns True when the view was left.
        """
        if not self._dirty:
            self._navigator.navigate(DEFAULT_VIEW)
            return True

        if self.connection_id is None:
            return False
        if self._updating:
            logger.debug("Update already in flight, dropping submit")
            return False

        failure = require_system_prompt(
            self.system_prompt, self._settings.system_prompt_min_length
        )
        if failure is not None:
            self._notifier.notify(Severity.ERROR, failure.message)
            return False

        payload = self.build_update()
        self._updating = True
        try:
            connection = await self._api.update_connection(self.connection_id, payload)
        except TransportError as e:
            if not self._closed:
                self._notifier.notify(Severity.ERROR, e.message)
            return False
        finally:
            self._updating = False

        logger.info(f"Updated connection {self.connection_id}")
        if self._closed:
            return True
        self.baseline = connection
        self._dirty = False
        self._navigator.navigate(DEFAULT_VIEW)
        return True

    # ==========================================================================
    # Delete
    # ==========================================================================

    async def request_delete(self) -> bool:
        """
        Delete the connection, asking first when conversations depend on it.

        Returns True when the delete was carried out.
        """
        if self.connection_id is None:
            return False

        count = len(self.related_conversations)
        if count > 0:
            self.pending_confirmation = Confirmation(
                kind=ConfirmationKind.DELETE,
                title="Delete Connection?",
                message=f"This will delete {count} related conversation(s)!",
                ok_text="Delete",
            )
            return False
        return await self._delete()

    async def _delete(self) -> bool:
        if self._deleting:
            logger.debug("Delete already in flight, dropping request")
            return False

        self._deleting = True
        try:
            await self._api.delete_connection(self.connection_id)
        except TransportError as e:
            if not self._closed:
                self._notifier.notify(Severity.ERROR, e.message)
            return False
        finally:
            self._deleting = False

        logger.info(f"Deleted connection {self.connection_id}")
        if not self._closed:
            self._navigator.navigate(DEFAULT_VIEW)
        return True

    # ==========================================================================
    # Leaving the view
    # ==========================================================================

    def handle_back(self) -> bool:
        """
        Leave the editor (cancel, close or Escape).

        With unsaved changes this opens a discard prompt instead.
        Returns True when the view was left.
        """
        if self._dirty:
            self.pending_confirmation = Confirmation(
                kind=ConfirmationKind.DISCARD,
                title="Discard Unsaved Changes?",
                message="You have unsaved changes. Discard changes?",
                ok_text="OK",
            )
            return False
        self._navigator.navigate(DEFAULT_VIEW)
        return True

    async def confirm(self) -> bool:
        """Accept the open prompt."""
        confirmation = self.pending_confirmation
        self.pending_confirmation = None
        if confirmation is None:
            return False

        if confirmation.kind is ConfirmationKind.DELETE:
            return await self._delete()

        self._discard_edits()
        self._navigator.navigate(DEFAULT_VIEW)
        return True

    def cancel(self) -> None:
        """Dismiss the open prompt; the editor keeps its state."""
        self.pending_confirmation = None

    def _discard_edits(self) -> None:
        if self.baseline is not None:
            self.name = self.baseline.name
            self.dsn = self.baseline.dsn or ""
            self.system_prompt = self.baseline.system_prompt or ""
            self.options = self.baseline.options
        self._dirty = False

    # ==========================================================================
    # Schema refresh
    # ==========================================================================

    async def refresh_schema(self) -> bool:
        """
        Replace the local schema options with the live tree.

        Toggles made since the last load or refresh are dropped.
        """
        if self.connection_id is None:
            return False
        if self._refreshing:
            logger.debug("Schema refresh already in flight, dropping request")
            return False

        self._refreshing = True
        try:
            options = await self._api.refresh_connection_schema(self.connection_id)
        except TransportError as e:
            if not self._closed:
                self._notifier.notify(Severity.ERROR, e.message)
            return False
        finally:
            self._refreshing = False

        if self._closed:
            return False
        self.options = options
        logger.info(f"Refreshed schema for connection {self.connection_id}")
        return True
