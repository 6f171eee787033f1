"""Remote JSON file store client.

This module reads and writes JSON documents through a repository
contents API. Every operation resolves its own configuration and opens
its own HTTP session, so no state is shared between calls. Updates use
the host's revision check as an optimistic-concurrency precondition.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

import httpx

from core.config import StoreConfig, resolve_store_config
from core.constants import HTTP_NOT_FOUND
from core.errors import DecodeError, RemoteFetchError, RemoteWriteError
from core.logging_config import get_logger
from core.types import JSONValue, KeyValueSource, RemoteFile
from store.content_codec import decode_json_content, encode_json_content
from store.contents_api import (
    auth_headers,
    build_update_body,
    contents_url,
    error_reason,
    parse_file_payload,
    parse_updated_revision,
    status_text,
    update_headers,
)

_LOGGER = get_logger(__name__)


class FileStoreClient:
    """Async client for JSON documents stored in a remote repository."""

    def __init__(
        self,
        source: KeyValueSource | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Create a store client.

        Args:
            source: Key-value source used when no explicit config is passed.
                Defaults to the process environment.
            http_client: Optional caller-owned HTTP client. When omitted each
                operation opens and closes its own client.
        """
        self._source = source
        self._http_client = http_client

    async def read(self, path: str, config: StoreConfig | None = None) -> JSONValue:
        """Read and decode a JSON document.

        Args:
            path: Repository-relative file path.
            config: Optional explicit addressing parameters.

        Returns:
            Decoded JSON value.

        Raises:
            ConfigurationError: If config cannot be resolved.
            RemoteFetchError: If the host does not return the file.
            DecodeError: If stored content is not valid JSON.
        """
        remote_file = await self.fetch(path, config)
        return remote_file.content

    async def fetch(self, path: str, config: StoreConfig | None = None) -> RemoteFile:
        """Read a JSON document together with its revision tag.

        Args:
            path: Repository-relative file path.
            config: Optional explicit addressing parameters.

        Returns:
            Decoded file with the host revision tag.

        Raises:
            ConfigurationError: If config cannot be resolved.
            RemoteFetchError: If the host does not return the file.
            DecodeError: If stored content is not valid JSON.
        """
        store_config = resolve_store_config(config, self._source)
        response = await self._get(path, store_config)
        if not response.is_success:
            raise RemoteFetchError(path, response.status_code, status_text(response))
        try:
            content_b64, revision_tag = parse_file_payload(response)
        except ValueError as error:
            raise DecodeError(path, str(error)) from error
        content = decode_json_content(path, content_b64)
        _LOGGER.info(
            "file_fetched",
            owner=store_config.owner,
            repo=store_config.repo,
            branch=store_config.branch,
            path=path,
            revision_tag=revision_tag,
        )
        return RemoteFile(path=path, revision_tag=revision_tag, content=content)

    async def lookup_revision(self, path: str, config: StoreConfig | None = None) -> str | None:
        """Return the current revision tag of a file, or None if it does not exist.

        Only a not-found response is treated as absence; any other failure
        status is raised so outages are not mistaken for missing files.

        Raises:
            ConfigurationError: If config cannot be resolved.
            RemoteFetchError: If the host fails with a status other than 404.
        """
        store_config = resolve_store_config(config, self._source)
        response = await self._get(path, store_config)
        if response.status_code == HTTP_NOT_FOUND:
            _LOGGER.info(
                "revision_lookup_missing",
                owner=store_config.owner,
                repo=store_config.repo,
                branch=store_config.branch,
                path=path,
            )
            return None
        if not response.is_success:
            raise RemoteFetchError(path, response.status_code, status_text(response))
        try:
            _, revision_tag = parse_file_payload(response)
        except ValueError as error:
            raise RemoteFetchError(path, response.status_code, str(error)) from error
        return revision_tag

    async def write(
        self,
        path: str,
        value: JSONValue,
        message: str,
        config: StoreConfig | None = None,
    ) -> None:
        """Create or replace a JSON document.

        Looks up the current revision tag first and presents it with the
        update. A concurrent writer landing between the lookup and the
        update makes the host reject the update.

        Args:
            path: Repository-relative file path.
            value: JSON-serializable value to store.
            message: Commit message.
            config: Optional explicit addressing parameters.

        Raises:
            ConfigurationError: If config cannot be resolved.
            RemoteFetchError: If the revision lookup fails with a non-404 status.
            EncodeError: If value is not JSON-serializable.
            RemoteWriteError: If the host rejects the update.
        """
        store_config = resolve_store_config(config, self._source)
        revision_tag = await self.lookup_revision(path, store_config)
        await self.put(path, value, message, revision_tag, store_config)

    async def put(
        self,
        path: str,
        value: JSONValue,
        message: str,
        revision_tag: str | None,
        config: StoreConfig | None = None,
    ) -> str | None:
        """Submit an update guarded by an explicit revision tag.

        Args:
            path: Repository-relative file path.
            value: JSON-serializable value to store.
            message: Commit message.
            revision_tag: Last observed tag, or None to create a new file.
            config: Optional explicit addressing parameters.

        Returns:
            New revision tag reported by the host, when present.

        Raises:
            ConfigurationError: If config cannot be resolved.
            EncodeError: If value is not JSON-serializable.
            RemoteWriteError: If the host rejects the update.
        """
        store_config = resolve_store_config(config, self._source)
        body = build_update_body(
            message=message,
            content_b64=encode_json_content(path, value),
            branch=store_config.branch,
            revision_tag=revision_tag,
        )
        try:
            async with self._session() as client:
                response = await client.put(
                    contents_url(store_config, path),
                    headers=update_headers(store_config),
                    json=body,
                )
        except httpx.RequestError as error:
            raise RemoteWriteError(path, None, f"request failed ({error})") from error
        if not response.is_success:
            raise RemoteWriteError(path, response.status_code, error_reason(response))
        new_revision_tag = parse_updated_revision(response)
        _LOGGER.info(
            "file_saved",
            owner=store_config.owner,
            repo=store_config.repo,
            branch=store_config.branch,
            path=path,
            created=revision_tag is None,
            revision_tag=new_revision_tag,
        )
        return new_revision_tag

    async def _get(self, path: str, config: StoreConfig) -> httpx.Response:
        try:
            async with self._session() as client:
                return await client.get(
                    contents_url(config, path),
                    params={"ref": config.branch},
                    headers=auth_headers(config),
                )
        except httpx.RequestError as error:
            raise RemoteFetchError(path, None, f"request failed ({error})") from error

    @asynccontextmanager
    async def _session(self) -> AsyncIterator[httpx.AsyncClient]:
        if self._http_client is not None:
            yield self._http_client
            return
        async with httpx.AsyncClient(timeout=None) as client:
            yield client


async def read_json(
    path: str,
    config: StoreConfig | None = None,
    source: KeyValueSource | None = None,
) -> JSONValue:
    """Read a JSON document with a one-off client."""
    return await FileStoreClient(source=source).read(path, config)


async def write_json(
    path: str,
    value: JSONValue,
    message: str,
    config: StoreConfig | None = None,
    source: KeyValueSource | None = None,
) -> None:
    """Create or replace a JSON document with a one-off client."""
    await FileStoreClient(source=source).write(path, value, message, config)
