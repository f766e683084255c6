"""
Connection Creation

Validates a draft and submits it to the matching create endpoint.
"""

import logging
from typing import Literal

from connection_setup.config import Settings, get_settings
from connection_setup.connections.client import ConnectionsAPI, TransportError
from connection_setup.connections.schemas import Connection
from connection_setup.creation.draft import (
    ConnectionDraft,
    DatabaseMode,
    FileMode,
    SampleMode,
    UnsetMode,
)
from connection_setup.ui import DEFAULT_VIEW, Navigator, Notifier, Severity

logger = logging.getLogger(__name__)

Source = Literal["custom", "sample"]

SAMPLES_UNAVAILABLE_MESSAGE = "Sample datasets are not available"


class CreationController:
    """
    Drives the new-connection form.

    At most one create call is in flight; a submit while one is pending is
    dropped, not queued. On failure the draft is left exactly as entered.
    """

    def __init__(
        self,
        api: ConnectionsAPI,
        notifier: Notifier,
        navigator: Navigator,
        settings: Settings | None = None,
        draft: ConnectionDraft | None = None,
    ) -> None:
        self._api = api
        self._notifier = notifier
        self._navigator = navigator
        self._settings = settings or get_settings()
        self.draft = draft or ConnectionDraft()
        self.source: Source | None = None
        self._pending = False
        self._closed = False

    @property
    def is_pending(self) -> bool:
        """Whether a create call is in flight. The submit action is disabled meanwhile."""
        return self._pending

    @property
    def available_sources(self) -> list[Source]:
        if self._settings.show_sample_datasets:
            return ["sample", "custom"]
        return ["custom"]

    def select_source(self, source: Source) -> bool:
        """Choose between a sample dataset and a custom connection."""
        if source not in self.available_sources:
            self._notifier.notify(Severity.INFO, SAMPLES_UNAVAILABLE_MESSAGE)
            return False
        if source != self.source and not isinstance(self.draft.mode, UnsetMode):
            self.draft.mode = UnsetMode()
        self.source = source
        return True

    def close(self) -> None:
        """Mark the view as torn down. Later completions are ignored."""
        self._closed = True

    async def submit(self) -> bool:
        """
        Validate the draft and create the connection.

        Returns True when the connection was created.
        """
        if self._pending:
            logger.debug("Create already in flight, dropping submit")
            return False

        if isinstance(self.draft.mode, SampleMode) and not self._settings.show_sample_datasets:
            self._notifier.notify(Severity.INFO, SAMPLES_UNAVAILABLE_MESSAGE)
            return False

        failure = self.draft.validate_for_submit(
            max_file_size=self._settings.max_upload_bytes,
            min_prompt_length=self._settings.system_prompt_min_length,
        )
        if failure is not None:
            self._notifier.notify(Severity.INFO, failure.message)
            return False

        self._pending = True
        try:
            connection = await self._create()
        except TransportError as e:
            if not self._closed:
                self._notifier.notify(Severity.ERROR, e.message)
            return False
        finally:
            self._pending = False

        logger.info(f"Created connection {connection.id} ({connection.name})")
        if self._closed:
            return True
        self._notifier.notify(Severity.SUCCESS, "Connection created")
        self._navigator.navigate(DEFAULT_VIEW)
        return True

    async def _create(self) -> Connection:
        draft = self.draft
        match draft.mode:
            case DatabaseMode(dsn=dsn):
                return await self._api.create_connection(
                    dsn=dsn, name=draft.name, system_prompt=draft.system_prompt
                )
            case FileMode(type=file_type, file=file):
                return await self._api.create_file_connection(
                    file=file, name=draft.name, type=file_type, system_prompt=draft.system_prompt
                )
            case SampleMode(sample=sample):
                return await self._api.create_sample_connection(
                    sample=sample, name=draft.name, system_prompt=draft.system_prompt
                )
            case UnsetMode():
                # validate_for_submit rejects unset drafts
                raise ValueError("cannot create a connection without a data source type")
