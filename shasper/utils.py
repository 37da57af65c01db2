"""Numeric and byte helpers shared by the beacon chain types."""

from __future__ import annotations

import math
from typing import Callable, TypeVar

T = TypeVar("T")

_U64_MAX = 2**64 - 1
_HASH_LENGTH = 32
_VERSION_LENGTH = 4


def _check_u64(value: int, name: str) -> None:
    if not 0 <= value <= _U64_MAX:
        raise ValueError(f"{name} must fit in an unsigned 64-bit integer, got {value}")


def fixed_vec(length: int, factory: Callable[[], T]) -> list[T]:
    """Return a list of ``length`` fresh default values built by ``factory``."""
    if length < 0:
        raise ValueError(f"length must not be negative, got {length}")
    return [factory() for _ in range(length)]


def to_bytes(value: int) -> bytes:
    """Encode a 64-bit integer little-endian into the start of a 32-byte hash."""
    _check_u64(value, "value")
    return value.to_bytes(8, "little").ljust(_HASH_LENGTH, b"\x00")


def to_uint(data: bytes) -> int:
    """Decode exactly eight little-endian bytes into an integer."""
    if len(data) != 8:
        raise ValueError(f"expected 8 bytes, got {len(data)}")
    return int.from_bytes(data, "little")


def integer_squareroot(n: int) -> int:
    """Return the largest integer whose square does not exceed ``n``."""
    if n < 0:
        raise ValueError(f"n must not be negative, got {n}")
    return math.isqrt(n)


def compare_hash(a: bytes, b: bytes) -> int:
    """Compare two 32-byte hashes byte by byte; return -1, 0 or 1."""
    if len(a) != _HASH_LENGTH or len(b) != _HASH_LENGTH:
        raise ValueError("both hashes must be 32 bytes long")
    a, b = bytes(a), bytes(b)
    return (a > b) - (a < b)


def raw_domain(domain_type: int, fork_version: bytes) -> int:
    """Combine a 4-byte fork version and the low four bytes of a domain type."""
    if len(fork_version) != _VERSION_LENGTH:
        raise ValueError(f"fork version must be 4 bytes, got {len(fork_version)}")
    _check_u64(domain_type, "domain_type")
    raw = bytes(fork_version) + domain_type.to_bytes(8, "little")[:4]
    return int.from_bytes(raw, "little")