"""Payload decoding and encoding."""

from typing import Any

import msgspec
import orjson


class JSONParseError(Exception):
    """JSON parsing failed."""

    def __init__(self, message: str, original: Exception | None = None) -> None:
        super().__init__(message)
        self.original = original


_decoder = msgspec.json.Decoder()
_wide_encoder = msgspec.json.Encoder(enc_hook=str, order="sorted")


def decode_payload(body: bytes | str) -> Any:
    """
    Decode a server response body.

    Args:
        body: Raw response body

    Returns:
        Decoded JSON value (any JSON type)

    Raises:
        JSONParseError: If the body is not valid JSON
    """
    if isinstance(body, str):
        body = body.encode("utf-8")

    if not body.strip():
        raise JSONParseError("Empty response body")

    try:
        return _decoder.decode(body)
    except msgspec.DecodeError as e:
        raise JSONParseError(f"Invalid JSON: {e}", e) from e


def canonical_json(obj: Any) -> bytes:
    """
    Encode object with sorted keys so equal values encode identically.

    Values orjson cannot serialize natively fall back to ``str``. Integers
    beyond 64 bits, which msgspec decodes from valid payloads, are encoded
    by msgspec instead.
    """
    try:
        return orjson.dumps(obj, default=str, option=orjson.OPT_SORT_KEYS)
    except orjson.JSONEncodeError:
        return _wide_encoder.encode(obj)


__all__ = ["JSONParseError", "decode_payload", "canonical_json"]
