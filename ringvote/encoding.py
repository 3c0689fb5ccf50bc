"""Byte, hex and PEM encodings for points and scalars."""

from __future__ import annotations

import base64
import binascii
import re
import textwrap
from typing import Sequence, Type

from .constants import COORDINATE_SIZE, N, POINT_SIZE, SCALAR_SIZE
from .curve import CurvePoint, validate
from .errors import InputValidationError, InvalidPointError, InvalidPublicKey
from .hashing import serialize_point

_PEM_PATTERN = re.compile(
    r"-----BEGIN (PUBLIC|PRIVATE) KEY-----\n([A-Za-z0-9+/=\n]+)\n-----END \1 KEY-----"
)


def point_to_bytes(point: CurvePoint) -> bytes:
    return serialize_point(point)


def point_from_bytes(data: bytes, *, error: Type[InvalidPointError] = InvalidPublicKey) -> CurvePoint:
    """Decode a 64 byte ``x || y`` value, rejecting anything off the curve."""

    if len(data) != POINT_SIZE:
        raise InputValidationError(f"Expected {POINT_SIZE} bytes for a point, got {len(data)}")
    point = CurvePoint(
        x=int.from_bytes(data[:COORDINATE_SIZE], "big"),
        y=int.from_bytes(data[COORDINATE_SIZE:], "big"),
    )
    if not validate(point):
        raise error("Point is not on secp256k1", details=data.hex())
    return point


def point_to_hex(point: CurvePoint) -> str:
    return point_to_bytes(point).hex()


def point_from_hex(value: str, *, error: Type[InvalidPointError] = InvalidPublicKey) -> CurvePoint:
    try:
        data = bytes.fromhex(value)
    except ValueError as exc:
        raise InputValidationError("Point must be hex encoded") from exc
    return point_from_bytes(data, error=error)


def scalar_to_bytes(value: int) -> bytes:
    if not 0 <= value < N:
        raise InputValidationError("Scalar outside of [0, N)")
    return value.to_bytes(SCALAR_SIZE, "big")


def scalar_from_bytes(data: bytes) -> int:
    if len(data) != SCALAR_SIZE:
        raise InputValidationError(f"Expected {SCALAR_SIZE} bytes for a scalar, got {len(data)}")
    value = int.from_bytes(data, "big")
    if value >= N:
        raise InputValidationError("Scalar outside of [0, N)")
    return value


def _to_pem(kind: str, body: bytes) -> str:
    lines = "\n".join(textwrap.wrap(base64.b64encode(body).decode("ascii"), 64))
    return f"-----BEGIN {kind} KEY-----\n{lines}\n-----END {kind} KEY-----"


def _from_pem(pem: str, kind: str) -> bytes:
    match = _PEM_PATTERN.search(pem)
    if match is None or match.group(1) != kind:
        raise InputValidationError(f"Invalid PEM format, expected a {kind.lower()} key")
    try:
        return base64.b64decode(match.group(2).replace("\n", ""), validate=True)
    except binascii.Error as exc:
        raise InputValidationError("Invalid PEM body") from exc


def private_key_to_pem(private_key: int) -> str:
    return _to_pem("PRIVATE", scalar_to_bytes(private_key))


def public_key_to_pem(public_key: CurvePoint) -> str:
    return _to_pem("PUBLIC", point_to_bytes(public_key))


def pem_to_private_key(pem: str) -> int:
    body = _from_pem(pem, "PRIVATE")
    if len(body) > SCALAR_SIZE:
        raise InputValidationError("Private key body is too long")
    value = int.from_bytes(body, "big")
    if not 0 < value < N:
        raise InputValidationError("Private key must lie in [1, N-1]")
    return value


def pem_to_public_key(pem: str) -> CurvePoint:
    return point_from_bytes(_from_pem(pem, "PUBLIC"))


def armor(pem: str) -> str:
    """Wrap a PEM document in base64 for transport inside JSON payloads."""

    return base64.b64encode(pem.encode("ascii")).decode("ascii")


def dearmor(value: str) -> str:
    try:
        return base64.b64decode(value, validate=True).decode("ascii")
    except ValueError as exc:
        raise InputValidationError("Armoured key is not valid base64") from exc


def find_signer_index(ring: Sequence[CurvePoint], public_key: CurvePoint) -> int:
    """Position of ``public_key`` in ``ring`` or ``-1``."""

    for index, member in enumerate(ring):
        if member == public_key:
            return index
    return -1


__all__ = [
    "armor",
    "dearmor",
    "find_signer_index",
    "pem_to_private_key",
    "pem_to_public_key",
    "point_from_bytes",
    "point_from_hex",
    "point_to_bytes",
    "point_to_hex",
    "private_key_to_pem",
    "public_key_to_pem",
    "scalar_from_bytes",
    "scalar_to_bytes",
]
