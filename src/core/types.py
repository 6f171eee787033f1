"""Shared typed models.

This module defines immutable data models used by the config,
codec and client layers to keep interfaces explicit and stable.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol

JSONValue = Any


class KeyValueSource(Protocol):
    """Read-only string key-value source for addressing parameters."""

    def get(self, key: str) -> str | None:
        """Return the stored value for key, or None when absent."""
        ...


@dataclass(frozen=True)
class RemoteFile:
    """Transient per-call copy of a stored JSON document.

    Attributes:
        path: Repository-relative, slash-separated file path.
        revision_tag: Host-assigned blob sha identifying the stored bytes.
        content: Decoded JSON value.
    """

    path: str
    revision_tag: str
    content: JSONValue
