"""JSON content transcoding for the contents API.

This module converts JSON values to and from the base64 text that
the contents API carries in its ``content`` field.
"""

from __future__ import annotations

import base64
import binascii
import json

from core.constants import CONTENT_ENCODING, JSON_INDENT
from core.errors import DecodeError, EncodeError
from core.types import JSONValue


def encode_json_content(path: str, value: JSONValue) -> str:
    """Serialize a JSON value into base64 content text.

    Args:
        path: File path used in error messages.
        value: JSON-serializable value.

    Returns:
        Base64 ASCII string of the indented UTF-8 JSON text.

    Raises:
        EncodeError: If value is not JSON-serializable.
    """
    try:
        json_text = json.dumps(value, indent=JSON_INDENT, ensure_ascii=False, allow_nan=False)
    except (TypeError, ValueError) as error:
        raise EncodeError(path, str(error)) from error
    return base64.b64encode(json_text.encode(CONTENT_ENCODING)).decode("ascii")


def decode_json_content(path: str, content_b64: str) -> JSONValue:
    """Decode base64 content text into a JSON value.

    The host wraps base64 payloads across lines, so whitespace is
    dropped before strict decoding.

    Args:
        path: File path used in error messages.
        content_b64: Base64 text from the ``content`` field.

    Returns:
        Parsed JSON value.

    Raises:
        DecodeError: If content is not base64, UTF-8 or JSON.
    """
    compact = "".join(content_b64.split())
    try:
        raw = base64.b64decode(compact.encode("ascii"), validate=True)
    except (binascii.Error, UnicodeEncodeError) as error:
        raise DecodeError(path, f"invalid base64 payload ({error})") from error
    try:
        text = raw.decode(CONTENT_ENCODING)
    except UnicodeDecodeError as error:
        raise DecodeError(path, f"invalid UTF-8 payload ({error.reason})") from error
    try:
        return json.loads(text)
    except json.JSONDecodeError as error:
        raise DecodeError(
            path, f"invalid JSON at line {error.lineno} column {error.colno} ({error.msg})"
        ) from error
