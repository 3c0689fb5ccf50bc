"""Digest helpers: hash-to-point and the Fiat-Shamir challenge."""

from __future__ import annotations

import hashlib
from typing import Iterable

from .constants import COORDINATE_SIZE, N
from .curve import CurvePoint, base_mul
from .errors import CryptoOperationError


def h256(data: bytes) -> bytes:
    return hashlib.sha3_256(data).digest()


def h512(data: bytes) -> bytes:
    return hashlib.sha3_512(data).digest()


def serialize_point(point: CurvePoint) -> bytes:
    """Fixed 64 byte encoding: big-endian ``x`` followed by big-endian ``y``."""

    return point.x.to_bytes(COORDINATE_SIZE, "big") + point.y.to_bytes(COORDINATE_SIZE, "big")


def pubkeys_digest(ring: Iterable[CurvePoint]) -> bytes:
    """Digest of the ring members concatenated in ring order."""

    return h256(b"".join(serialize_point(member) for member in ring))


def hash_to_point(data: bytes) -> CurvePoint:
    """Map ``data`` to ``k*G`` where ``k`` is the first half of SHA3-512 mod N.

    The discrete log of the result with respect to G is therefore known to
    anyone holding ``data``. Existing signatures depend on this exact mapping.
    """

    k = int.from_bytes(h512(data)[:32], "big") % N
    if k == 0:
        raise CryptoOperationError("Input hashed to the zero scalar")
    return base_mul(k)


def challenge(
    ring_digest: bytes,
    key_image: CurvePoint,
    message_digest: bytes,
    first: CurvePoint,
    second: CurvePoint,
) -> bytes:
    buffer = b"".join(
        (
            ring_digest,
            serialize_point(key_image),
            serialize_point(first),
            serialize_point(second),
            message_digest,
        )
    )
    return h256(buffer)


__all__ = ["challenge", "h256", "h512", "hash_to_point", "pubkeys_digest", "serialize_point"]
