"""Linkable ring signatures (LSAG style) over secp256k1.

A signature proves that one member of an ordered ring of public keys signed a
message without revealing which one. The key image attached to each signature
is a deterministic function of the signer's private key, the ring (in order)
and a case identifier: two signatures made with the same key for the same
ring and case carry the same key image, which is how double voting is
detected by the caller.
"""

from __future__ import annotations

import hmac
from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple, Union

from .constants import CHECKSUM_SIZE, MIN_RING_SIZE, N, SCALAR_SIZE
from .curve import CurvePoint, add, base_mul, scalar_mul, validate
from .encoding import point_from_hex, point_to_hex, scalar_from_bytes, scalar_to_bytes
from .errors import CryptoOperationError, InputValidationError, InvalidKeyImage, InvalidPublicKey
from .hashing import challenge, h256, hash_to_point, pubkeys_digest
from .keys import random_scalar

BytesLike = Union[bytes, bytearray, str]


def _as_bytes(value: BytesLike) -> bytes:
    if isinstance(value, str):
        return value.encode("utf-8")
    return bytes(value)


@dataclass(frozen=True)
class RingSignature:
    """Key image, first challenge and one response scalar per ring member."""

    key_image: CurvePoint
    checksum: bytes
    signatures: Tuple[int, ...]

    def to_bytes(self) -> bytes:
        """Wire form ``checksum || s_0 || ... || s_{n-1}``; the key image travels separately."""

        return self.checksum + b"".join(scalar_to_bytes(value) for value in self.signatures)

    @staticmethod
    def from_bytes(data: bytes, key_image: CurvePoint, ring_size: int) -> "RingSignature":
        expected = CHECKSUM_SIZE + ring_size * SCALAR_SIZE
        if ring_size < MIN_RING_SIZE or len(data) != expected:
            raise InputValidationError(
                f"Signature of {len(data)} bytes does not match a ring of {ring_size}"
            )
        scalars = tuple(
            scalar_from_bytes(data[offset : offset + SCALAR_SIZE])
            for offset in range(CHECKSUM_SIZE, expected, SCALAR_SIZE)
        )
        return RingSignature(key_image=key_image, checksum=data[:CHECKSUM_SIZE], signatures=scalars)

    def to_dict(self) -> Dict[str, object]:
        return {
            "key_image": point_to_hex(self.key_image),
            "checksum": self.checksum.hex(),
            "signatures": [scalar_to_bytes(value).hex() for value in self.signatures],
        }

    @staticmethod
    def from_dict(data: Dict[str, object]) -> "RingSignature":
        try:
            checksum = bytes.fromhex(data["checksum"])  # type: ignore[arg-type]
            raw_scalars = [bytes.fromhex(value) for value in data["signatures"]]  # type: ignore[union-attr]
            key_image_hex = str(data["key_image"])
        except (KeyError, TypeError, ValueError) as exc:
            raise InputValidationError("Malformed signature payload") from exc
        return RingSignature(
            key_image=point_from_hex(key_image_hex, error=InvalidKeyImage),
            checksum=checksum,
            signatures=tuple(scalar_from_bytes(value) for value in raw_scalars),
        )


def _check_ring(ring: Sequence[CurvePoint]) -> List[CurvePoint]:
    members = list(ring)
    if len(members) < MIN_RING_SIZE:
        raise InputValidationError(f"Ring size must be at least {MIN_RING_SIZE}")
    for index, member in enumerate(members):
        if not validate(member):
            raise InvalidPublicKey(f"Invalid public key at index {index}", details=index)
    return members


def _check_private_key(private_key: int) -> None:
    if not isinstance(private_key, int) or not 0 < private_key < N:
        raise InputValidationError("Private key must lie in [1, N-1]")


def _base_point(ring_digest: bytes, case_id: bytes) -> CurvePoint:
    return hash_to_point(ring_digest + case_id)


def _image(base: CurvePoint, private_key: int) -> CurvePoint:
    key_image = scalar_mul(base, private_key)
    if not validate(key_image):
        raise InvalidKeyImage("Generated key image is not a valid curve point")
    return key_image


def _commitments(
    member: CurvePoint,
    base: CurvePoint,
    key_image: CurvePoint,
    response: int,
    digest: bytes,
) -> Tuple[CurvePoint, CurvePoint]:
    c = int.from_bytes(digest, "big")
    first = add(base_mul(response), scalar_mul(member, c))
    second = add(scalar_mul(base, response), scalar_mul(key_image, c))
    return first, second


def create_key_image(private_key: int, ring: Sequence[CurvePoint], case_id: BytesLike) -> CurvePoint:
    """Linkability tag for ``private_key`` scoped to ``ring`` (in order) and ``case_id``.

    Re-ordering the ring changes the tag, so callers must present members in
    one canonical order for every signing session of a case.
    """

    members = _check_ring(ring)
    _check_private_key(private_key)
    return _image(_base_point(pubkeys_digest(members), _as_bytes(case_id)), private_key)


def create_ring_signature(
    message: BytesLike,
    ring: Sequence[CurvePoint],
    private_key: int,
    signer_index: int,
    case_id: BytesLike,
) -> RingSignature:
    """Sign ``message`` on behalf of ``ring``.

    ``ring[signer_index]`` is expected to be the public key of
    ``private_key``. When it is not, a signature is still produced but it
    will not verify.
    """

    members = _check_ring(ring)
    size = len(members)
    if not isinstance(signer_index, int) or not 0 <= signer_index < size:
        raise InputValidationError("Invalid signer index", details=signer_index)
    _check_private_key(private_key)

    try:
        ring_digest = pubkeys_digest(members)
        base = _base_point(ring_digest, _as_bytes(case_id))
        key_image = _image(base, private_key)
        message_digest = h256(_as_bytes(message))

        challenges: List[bytes] = [b""] * size
        responses: List[int] = [0] * size

        nonce = random_scalar()
        challenges[(signer_index + 1) % size] = challenge(
            ring_digest, key_image, message_digest, base_mul(nonce), scalar_mul(base, nonce)
        )

        for step in range(1, size):
            index = (signer_index + step) % size
            responses[index] = random_scalar()
            first, second = _commitments(members[index], base, key_image, responses[index], challenges[index])
            challenges[(index + 1) % size] = challenge(ring_digest, key_image, message_digest, first, second)

        signer_challenge = int.from_bytes(challenges[signer_index], "big")
        responses[signer_index] = (nonce - private_key * signer_challenge) % N
    except (ArithmeticError, OSError) as exc:
        raise CryptoOperationError("Failed to create ring signature") from exc

    return RingSignature(key_image=key_image, checksum=challenges[0], signatures=tuple(responses))


def verify_ring_signature(
    message: BytesLike,
    ring: Sequence[CurvePoint],
    signature: RingSignature,
    case_id: BytesLike,
) -> bool:
    """Return ``True`` when ``signature`` closes the ring for ``message``.

    Malformed input raises a :class:`CryptoOperationError` subclass; a
    well-formed but wrong signature simply yields ``False``.
    """

    members = _check_ring(ring)
    size = len(members)
    if len(signature.signatures) != size:
        raise InputValidationError(
            "Invalid ring size or signature count mismatch",
            details={"ring": size, "signatures": len(signature.signatures)},
        )
    if len(signature.checksum) != CHECKSUM_SIZE:
        raise InputValidationError(f"Checksum must be {CHECKSUM_SIZE} bytes")
    if any(not isinstance(value, int) or not 0 <= value < N for value in signature.signatures):
        raise InputValidationError("Signature scalar outside of [0, N)")
    if not validate(signature.key_image):
        raise InvalidKeyImage("Key image is not a valid curve point")

    ring_digest = pubkeys_digest(members)
    message_digest = h256(_as_bytes(message))
    base = _base_point(ring_digest, _as_bytes(case_id))

    current = bytes(signature.checksum)
    for index in range(size):
        try:
            first, second = _commitments(
                members[index], base, signature.key_image, signature.signatures[index], current
            )
        except CryptoOperationError:
            return False
        current = challenge(ring_digest, signature.key_image, message_digest, first, second)
    return hmac.compare_digest(current, bytes(signature.checksum))


__all__ = [
    "RingSignature",
    "create_key_image",
    "create_ring_signature",
    "verify_ring_signature",
]
