"""Content store exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each failure point raises a specific error type carrying the file path.
"""

from __future__ import annotations


class ContentStoreError(Exception):
    """Base exception for all content store failures."""


class ConfigurationError(ContentStoreError):
    """Raised when required addressing parameters are missing or unreadable."""


class RemoteFetchError(ContentStoreError):
    """Raised when the contents API rejects or fails a retrieval request.

    Attributes:
        path: Repository-relative file path.
        status_code: HTTP status code, or None for transport failures.
        reason: Host status text or transport error description.
    """

    def __init__(self, path: str, status_code: int | None, reason: str) -> None:
        self.path = path
        self.status_code = status_code
        self.reason = reason
        super().__init__(f"Failed to fetch file {path}: {reason}")


class DecodeError(ContentStoreError):
    """Raised when stored content is not valid base64, UTF-8 or JSON."""

    def __init__(self, path: str, detail: str) -> None:
        self.path = path
        self.detail = detail
        super().__init__(
            f"Failed to decode file {path}: {detail}. "
            "Check that the path points at a JSON document."
        )


class EncodeError(ContentStoreError):
    """Raised when a value cannot be serialized to JSON."""

    def __init__(self, path: str, detail: str) -> None:
        self.path = path
        self.detail = detail
        super().__init__(f"Failed to encode value for file {path}: {detail}.")


class RemoteWriteError(ContentStoreError):
    """Raised when the contents API rejects or fails an update request.

    Attributes:
        path: Repository-relative file path.
        status_code: HTTP status code, or None for transport failures.
        reason: Host-reported message or transport error description.
    """

    def __init__(self, path: str, status_code: int | None, reason: str) -> None:
        self.path = path
        self.status_code = status_code
        self.reason = reason
        super().__init__(f"Failed to save file {path}: {reason}")

    @property
    def is_conflict(self) -> bool:
        """Return whether the host rejected a stale revision tag."""
        return self.status_code == 409
