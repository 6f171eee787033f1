"""Caller-side read-modify-write loop.

This module layers an opt-in retry policy on top of the store client.
The client itself never retries; this helper re-reads the file and
re-applies the caller's transform when the host reports a conflict.
"""

from __future__ import annotations

from copy import deepcopy
from typing import Callable

from core.config import StoreConfig
from core.constants import DEFAULT_MAX_ATTEMPTS, HTTP_NOT_FOUND, HTTP_UNPROCESSABLE
from core.errors import RemoteFetchError, RemoteWriteError
from core.logging_config import get_logger
from core.types import JSONValue
from store.file_store import FileStoreClient

_LOGGER = get_logger(__name__)

Transform = Callable[[JSONValue], JSONValue]

_MISSING = object()


async def modify_json(
    client: FileStoreClient,
    path: str,
    transform: Transform,
    message: str,
    config: StoreConfig | None = None,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    default: JSONValue = _MISSING,
) -> JSONValue:
    """Apply a transform to a stored JSON document.

    Args:
        client: Store client.
        path: Repository-relative file path.
        transform: Function mapping the current value to the new value.
            It may run once per attempt and must not have side effects.
        message: Commit message.
        config: Optional explicit addressing parameters.
        max_attempts: Total attempts, including the first one.
        default: Starting value when the file does not exist. Without it a
            missing file raises RemoteFetchError.

    Returns:
        The value that was stored.

    Raises:
        ValueError: If max_attempts is less than 1.
        RemoteFetchError: If the file cannot be read.
        RemoteWriteError: If the update fails, or still conflicts on the last attempt.
    """
    if max_attempts < 1:
        raise ValueError(f"max_attempts must be at least 1, got {max_attempts}.")
    attempt = 1
    while True:
        current, revision_tag = await _read_current(client, path, config, default)
        updated = transform(current)
        try:
            await client.put(path, updated, message, revision_tag, config)
        except RemoteWriteError as error:
            if not _is_retryable(error, revision_tag) or attempt >= max_attempts:
                raise
            _LOGGER.warning(
                "write_conflict_retry",
                path=path,
                attempt=attempt,
                max_attempts=max_attempts,
                reason=error.reason,
            )
            attempt += 1
            continue
        return updated


async def _read_current(
    client: FileStoreClient,
    path: str,
    config: StoreConfig | None,
    default: JSONValue,
) -> tuple[JSONValue, str | None]:
    try:
        remote_file = await client.fetch(path, config)
    except RemoteFetchError as error:
        if default is _MISSING or error.status_code != HTTP_NOT_FOUND:
            raise
        return deepcopy(default), None
    return remote_file.content, remote_file.revision_tag


def _is_retryable(error: RemoteWriteError, revision_tag: str | None) -> bool:
    # A create without sha is rejected with 422 once another writer created the file.
    if revision_tag is None and error.status_code == HTTP_UNPROCESSABLE:
        return True
    return error.is_conflict
