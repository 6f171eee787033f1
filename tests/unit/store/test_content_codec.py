"""Unit tests for JSON content transcoding."""

from __future__ import annotations

import base64

import pytest

from core.errors import DecodeError, EncodeError
from store.content_codec import decode_json_content, encode_json_content


def _b64(text: str) -> str:
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


def test_encode_uses_two_space_indentation() -> None:
    """Encoded content should be stable, indented JSON text."""
    encoded = encode_json_content("kas.json", {"balance": 100})

    assert base64.b64decode(encoded).decode("utf-8") == '{\n  "balance": 100\n}'


def test_encode_keeps_non_ascii_text_as_utf8() -> None:
    """Non-ASCII characters should be stored as UTF-8, not escaped."""
    encoded = encode_json_content("kas.json", {"note": "kas café lunas"})

    assert "lunas" in base64.b64decode(encoded).decode("utf-8")
    assert "\\u" not in base64.b64decode(encoded).decode("utf-8")


def test_encode_rejects_non_serializable_value() -> None:
    """Values json cannot represent should raise EncodeError."""
    with pytest.raises(EncodeError) as error_info:
        encode_json_content("kas.json", {"when": object()})

    assert error_info.value.path == "kas.json"


def test_encode_rejects_nan() -> None:
    """NaN is not valid JSON and must not be stored."""
    with pytest.raises(EncodeError):
        encode_json_content("kas.json", {"balance": float("nan")})


def test_decode_tolerates_wrapped_base64_lines() -> None:
    """Host payloads wrap base64 across lines."""
    encoded = _b64('{"entries": [1, 2, 3], "label": "' + "x" * 80 + '"}')
    wrapped = "\n".join(encoded[i : i + 60] for i in range(0, len(encoded), 60)) + "\n"

    decoded = decode_json_content("kas.json", wrapped)

    assert decoded["entries"] == [1, 2, 3]


def test_decode_plain_text_raises_decode_error() -> None:
    """Content that is not JSON should raise DecodeError."""
    with pytest.raises(DecodeError, match="invalid JSON"):
        decode_json_content("kas.json", _b64("not json"))


def test_decode_invalid_base64_raises_decode_error() -> None:
    """Corrupt base64 should raise DecodeError instead of binascii errors."""
    with pytest.raises(DecodeError, match="base64"):
        decode_json_content("kas.json", "@@not-base64@@")


def test_decode_invalid_utf8_raises_decode_error() -> None:
    """Binary content should raise DecodeError."""
    content = base64.b64encode(b"\xff\xfe\x00").decode("ascii")

    with pytest.raises(DecodeError, match="UTF-8"):
        decode_json_content("kas.json", content)
