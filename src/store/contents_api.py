"""Contents API wire helpers.

This module isolates URL building, request headers, request payloads
and response parsing for the repository contents endpoint.
"""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

import httpx

from core.config import StoreConfig
from core.constants import GITHUB_ACCEPT_HEADER, JSON_CONTENT_TYPE


def contents_url(config: StoreConfig, path: str) -> str:
    """Build the contents endpoint URL for one file.

    Args:
        config: Store addressing parameters.
        path: Repository-relative, slash-separated file path.

    Returns:
        Absolute endpoint URL without query string.
    """
    owner = quote(config.owner, safe="")
    repo = quote(config.repo, safe="")
    file_path = quote(path.strip("/"), safe="/")
    return f"{config.api_url.rstrip('/')}/repos/{owner}/{repo}/contents/{file_path}"


def auth_headers(config: StoreConfig) -> dict[str, str]:
    """Return headers for an authenticated retrieval request."""
    return {
        "Authorization": f"token {config.token}",
        "Accept": GITHUB_ACCEPT_HEADER,
    }


def update_headers(config: StoreConfig) -> dict[str, str]:
    """Return headers for an authenticated update request."""
    return {**auth_headers(config), "Content-Type": JSON_CONTENT_TYPE}


def build_update_body(
    message: str,
    content_b64: str,
    branch: str,
    revision_tag: str | None,
) -> dict[str, str]:
    """Build the update request payload.

    The ``sha`` field is present only when a revision tag is known,
    which tells the host to create rather than replace the file.

    Args:
        message: Commit message.
        content_b64: Base64 encoded file content.
        branch: Target branch reference.
        revision_tag: Last observed revision tag, or None for a new file.

    Returns:
        JSON-serializable request body.
    """
    body = {
        "message": message,
        "content": content_b64,
        "branch": branch,
    }
    if revision_tag:
        body["sha"] = revision_tag
    return body


def status_text(response: httpx.Response) -> str:
    """Return the host status description for a response."""
    return response.reason_phrase or f"HTTP {response.status_code}"


def error_reason(response: httpx.Response) -> str:
    """Extract the host-reported failure reason from an error response.

    Falls back to the status text when the body is not a JSON object
    with a ``message`` field.
    """
    try:
        payload = response.json()
    except ValueError:
        return status_text(response)
    if isinstance(payload, dict) and payload.get("message"):
        return str(payload["message"])
    return status_text(response)


def parse_file_payload(response: httpx.Response) -> tuple[str, str]:
    """Return ``(content_b64, sha)`` from a retrieval response.

    Raises:
        ValueError: If the body is not a file object with content and sha.
    """
    payload: Any = response.json()
    if not isinstance(payload, dict):
        raise ValueError("expected a file object, got a directory listing or scalar")
    content = payload.get("content")
    sha = payload.get("sha")
    if not isinstance(content, str) or not isinstance(sha, str):
        raise ValueError("response is missing string 'content' and 'sha' fields")
    return content, sha


def parse_updated_revision(response: httpx.Response) -> str | None:
    """Return the new revision tag reported by an update response, if any."""
    try:
        payload = response.json()
    except ValueError:
        return None
    if not isinstance(payload, dict):
        return None
    content = payload.get("content")
    if isinstance(content, dict) and isinstance(content.get("sha"), str):
        return content["sha"]
    if isinstance(payload.get("sha"), str):
        return payload["sha"]
    return None
