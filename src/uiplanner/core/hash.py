"""Fast hashing for cache keys.

xxhash64 is the default; SHA-256 is available when a digest has to be
reproducible by tooling that lacks xxhash.
"""

from typing import Protocol
from enum import Enum
import hashlib

import xxhash


class Algorithm(str, Enum):
    """Supported hash algorithms."""

    XXHASH64 = "xxhash64"
    SHA256 = "sha256"


class Hasher(Protocol):
    """Protocol for hash implementations."""

    def digest(self, data: bytes) -> str:
        """Compute hex digest of data."""
        ...


class XXHasher:
    """Non-cryptographic hasher."""

    def digest(self, data: bytes) -> str:
        return xxhash.xxh64(data).hexdigest()


class SHA256Hasher:
    """Cryptographic hasher."""

    def digest(self, data: bytes) -> str:
        return hashlib.sha256(data).hexdigest()


_HASHERS: dict[Algorithm, Hasher] = {
    Algorithm.XXHASH64: XXHasher(),
    Algorithm.SHA256: SHA256Hasher(),
}


def create_hasher(algorithm: Algorithm = Algorithm.XXHASH64) -> Hasher:
    """
    Look up the hasher for an algorithm.

    Raises:
        ValueError: If the algorithm is unknown
    """
    try:
        return _HASHERS[Algorithm(algorithm)]
    except ValueError:
        raise ValueError(f"Unknown algorithm: {algorithm}") from None


def hash_string(
    text: str,
    algorithm: Algorithm = Algorithm.XXHASH64,
    truncate: int | None = None,
) -> str:
    """
    Hash string to hex digest.

    Args:
        text: String to hash
        algorithm: Hash algorithm (default: xxhash64)
        truncate: Optional length to truncate digest (e.g., 16 for cache keys)

    Returns:
        Hex digest string
    """
    digest = create_hasher(algorithm).digest(text.encode("utf-8"))
    return digest[:truncate] if truncate else digest


def hash_fields(*fields: str, algorithm: Algorithm = Algorithm.XXHASH64) -> str:
    """
    Hash multiple fields together (deterministic).

    Fields are joined with a NUL separator so ("ab", "c") and ("a", "bc")
    produce different digests.
    """
    return hash_string("\x00".join(fields), algorithm)


__all__ = [
    "Algorithm",
    "Hasher",
    "create_hasher",
    "hash_string",
    "hash_fields",
]
