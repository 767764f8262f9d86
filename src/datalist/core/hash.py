"""Digests for sub-model change detection and cache keys."""

import hashlib
from enum import Enum
from typing import Any, Callable

import xxhash

from .json import canonical_json


class Algorithm(str, Enum):
    XXHASH64 = "xxhash64"  # non-cryptographic
    SHA256 = "sha256"


_DIGESTS: dict[Algorithm, Callable[[bytes], str]] = {
    Algorithm.XXHASH64: lambda data: xxhash.xxh64(data).hexdigest(),
    Algorithm.SHA256: lambda data: hashlib.sha256(data).hexdigest(),
}


def digest(data: bytes, algorithm: Algorithm = Algorithm.XXHASH64) -> str:
    """
    Hex digest of raw bytes.

    Raises:
        ValueError: If algorithm is unknown
    """
    try:
        return _DIGESTS[Algorithm(algorithm)](data)
    except (KeyError, ValueError):
        raise ValueError(f"Unknown algorithm: {algorithm}") from None


def hash_string(
    text: str,
    algorithm: Algorithm = Algorithm.XXHASH64,
    truncate: int | None = None,
) -> str:
    """
    Hash a string, e.g. a bundle URL used as a cache key.

    Args:
        text: String to hash
        algorithm: Hash algorithm
        truncate: Optional digest length
    """
    value = digest(text.encode("utf-8"), algorithm)
    return value[:truncate] if truncate else value


def fingerprint(value: Any, algorithm: Algorithm = Algorithm.XXHASH64) -> str:
    """
    Stable digest of a JSON-like payload slice.

    Mappings are compared regardless of key order, so a reordered but equal
    slice does not count as a change.

    Examples:
        >>> fingerprint({"a": 1, "b": 2}) == fingerprint({"b": 2, "a": 1})
        True
    """
    return digest(canonical_json(value), algorithm)


__all__ = ["Algorithm", "digest", "hash_string", "fingerprint"]
