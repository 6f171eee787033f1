"""Public API of the content store.

This module provides a stable import path for callers.
It re-exports the client, config model and error taxonomy.
"""

from __future__ import annotations

from core.config import StoreConfig, resolve_store_config
from core.errors import (
    ConfigurationError,
    ContentStoreError,
    DecodeError,
    EncodeError,
    RemoteFetchError,
    RemoteWriteError,
)
from core.settings_source import EnvironmentSource, MappingSource, SettingsFileSource
from core.types import KeyValueSource, RemoteFile
from store.file_store import FileStoreClient, read_json, write_json
from store.read_modify_write import modify_json

__all__ = [
    "ConfigurationError",
    "ContentStoreError",
    "DecodeError",
    "EncodeError",
    "EnvironmentSource",
    "FileStoreClient",
    "KeyValueSource",
    "MappingSource",
    "RemoteFetchError",
    "RemoteFile",
    "RemoteWriteError",
    "SettingsFileSource",
    "StoreConfig",
    "modify_json",
    "read_json",
    "resolve_store_config",
    "write_json",
]
