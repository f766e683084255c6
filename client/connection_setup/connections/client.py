"""
Connections API Client

The backend operations the connection workflow depends on, and an HTTP
implementation of them.

Usage:
    async with HttpConnectionsAPI() as api:
        connection = await api.get_connection("c1")
"""

import logging
from typing import Any, Protocol, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from connection_setup.config import Settings, get_settings
from connection_setup.connections.schemas import (
    Connection,
    ConnectionOptions,
    ConnectionUpdate,
    ConversationRef,
    DatabaseFileType,
    SampleName,
)
from connection_setup.creation.files import UploadedFile

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class TransportError(Exception):
    """A backend call failed. The message is safe to show to the user."""

    def __init__(self, message: str, kind: str = "http", status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.kind = kind
        self.status_code = status_code


class ConnectionsAPI(Protocol):
    """Backend operations used by the connection controllers."""

    async def create_connection(
        self, dsn: str, name: str, system_prompt: str, is_sample: bool = False
    ) -> Connection: ...

    async def create_file_connection(
        self, file: UploadedFile, name: str, type: DatabaseFileType, system_prompt: str
    ) -> Connection: ...

    async def create_sample_connection(
        self, sample: SampleName, name: str, system_prompt: str
    ) -> Connection: ...

    async def get_connection(self, connection_id: str) -> Connection: ...

    async def get_connections(self) -> list[Connection]: ...

    async def update_connection(self, connection_id: str, payload: ConnectionUpdate) -> Connection: ...

    async def delete_connection(self, connection_id: str) -> None: ...

    async def refresh_connection_schema(self, connection_id: str) -> ConnectionOptions: ...

    async def get_conversations(self) -> list[ConversationRef]: ...


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("detail"):
        detail = body["detail"]
        return detail if isinstance(detail, str) else str(detail)
    return f"Request failed with status {response.status_code}"


def _unwrap_connection(data: Any) -> Any:
    if isinstance(data, dict) and isinstance(data.get("connection"), dict):
        return data["connection"]
    return data


def _decode(model: type[ModelT], data: Any) -> ModelT:
    """Validate a response payload, reporting bad or empty bodies as TransportError."""
    if data is None:
        raise TransportError("Empty response from server", kind="decode")
    try:
        return model.model_validate(data)
    except ValidationError as e:
        logger.warning(f"Could not decode {model.__name__}: {e}")
        raise TransportError("Invalid response from server", kind="decode") from e


def _decode_list(model: type[ModelT], items: Any) -> list[ModelT]:
    if not isinstance(items, list):
        raise TransportError("Invalid response from server", kind="decode")
    return [_decode(model, item) for item in items]


class HttpConnectionsAPI:
    """HTTP client for the connection endpoints of the backend."""

    def __init__(
        self,
        settings: Settings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        base_url: str | None = None,
    ) -> None:
        """
        Args:
            settings: Client settings. Defaults to the cached environment settings.
            transport: Optional httpx transport, used by tests.
            base_url: Overrides the configured backend URL.
        """
        self._settings = settings or get_settings()
        self._client = httpx.AsyncClient(
            base_url=base_url or self._settings.api_base_url,
            timeout=self._settings.request_timeout_seconds,
            transport=transport,
        )

    async def __aenter__(self) -> "HttpConnectionsAPI":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, url: str, **kwargs: Any) -> Any:
        logger.debug(f"{method} {url}")
        try:
            response = await self._client.request(method, url, **kwargs)
        except httpx.TimeoutException as e:
            logger.warning(f"{method} {url} timed out: {e}")
            raise TransportError("The request timed out", kind="timeout") from e
        except httpx.RequestError as e:
            logger.warning(f"{method} {url} failed: {e}")
            raise TransportError(f"Network error: {e}", kind="network") from e

        if response.is_error:
            message = _error_message(response)
            logger.warning(f"{method} {url} returned {response.status_code}: {message}")
            raise TransportError(message, kind="http", status_code=response.status_code)

        if not response.content:
            return None
        try:
            body = response.json()
        except ValueError as e:
            raise TransportError("Invalid response from server", kind="decode") from e
        return body.get("data") if isinstance(body, dict) else body

    async def create_connection(
        self, dsn: str, name: str, system_prompt: str, is_sample: bool = False
    ) -> Connection:
        data = await self._request(
            "POST",
            "/connect",
            json={"dsn": dsn, "name": name, "is_sample": is_sample, "system_prompt": system_prompt},
        )
        return _decode(Connection, _unwrap_connection(data))

    async def create_file_connection(
        self, file: UploadedFile, name: str, type: DatabaseFileType, system_prompt: str
    ) -> Connection:
        with file.open() as stream:
            data = await self._request(
                "POST",
                "/connect/file",
                files={"file": (file.filename, stream)},
                data={"name": name, "type": type.value, "system_prompt": system_prompt},
                timeout=self._settings.upload_timeout_seconds,
            )
        return _decode(Connection, _unwrap_connection(data))

    async def create_sample_connection(
        self, sample: SampleName, name: str, system_prompt: str
    ) -> Connection:
        data = await self._request(
            "POST",
            "/connect/sample",
            json={"sample_name": sample.value, "connection_name": name, "system_prompt": system_prompt},
        )
        return _decode(Connection, _unwrap_connection(data))

    async def get_connection(self, connection_id: str) -> Connection:
        data = await self._request("GET", f"/connection/{connection_id}")
        return _decode(Connection, _unwrap_connection(data))

    async def get_connections(self) -> list[Connection]:
        data = await self._request("GET", "/connections")
        items = data.get("connections") if isinstance(data, dict) else data
        return _decode_list(Connection, items)

    async def update_connection(self, connection_id: str, payload: ConnectionUpdate) -> Connection:
        data = await self._request(
            "PATCH",
            f"/connection/{connection_id}",
            json=payload.model_dump(mode="json", include=payload.model_fields_set),
        )
        return _decode(Connection, _unwrap_connection(data))

    async def delete_connection(self, connection_id: str) -> None:
        await self._request("DELETE", f"/connection/{connection_id}")

    async def refresh_connection_schema(self, connection_id: str) -> ConnectionOptions:
        data = await self._request("PATCH", f"/connection/schema/refresh/{connection_id}")
        connection = _unwrap_connection(data)
        if not isinstance(connection, dict):
            raise TransportError("Empty response from server", kind="decode")
        return _decode(ConnectionOptions, connection.get("options") or {})

    async def get_conversations(self) -> list[ConversationRef]:
        data = await self._request("GET", "/conversations")
        return _decode_list(ConversationRef, data)
