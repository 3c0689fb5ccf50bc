"""High level helpers that exchange armoured keys and encoded signatures."""

from __future__ import annotations

import base64
import logging
from typing import Dict, List

from .config import get_settings
from .constants import MIN_RING_SIZE
from .curve import CurvePoint
from .encoding import (
    armor,
    dearmor,
    find_signer_index,
    pem_to_private_key,
    pem_to_public_key,
    point_from_hex,
    point_to_bytes,
    point_to_hex,
    private_key_to_pem,
    public_key_to_pem,
)
from .errors import InputValidationError, InvalidKeyImage, SignerNotInRing
from .keys import derive_public_key, generate_key_pair
from .ring import RingSignature, create_ring_signature, verify_ring_signature
from .store import KeyImageStore

logger = logging.getLogger(__name__)


def generate_keys() -> Dict[str, str]:
    key_pair = generate_key_pair()
    coordinates = point_to_hex(key_pair.public_key)
    return {
        "publicKey": armor(public_key_to_pem(key_pair.public_key)),
        "privateKey": armor(private_key_to_pem(key_pair.private_key)),
        "status": "success",
        "digest": format(int.from_bytes(point_to_bytes(key_pair.public_key), "big"), "x"),
        "keyCoordinate": coordinates,
    }


def decode_ring(public_keys: List[str], max_ring_size: int | None = None) -> List[CurvePoint]:
    limit = max_ring_size if max_ring_size is not None else get_settings().max_ring_size
    if not MIN_RING_SIZE <= len(public_keys) <= limit:
        raise InputValidationError(
            f"Ring must contain between {MIN_RING_SIZE} and {limit} public keys",
            details=len(public_keys),
        )
    return [pem_to_public_key(dearmor(value)) for value in public_keys]


def _decode_signature(signature: str, key_image: str, ring_size: int) -> RingSignature:
    try:
        raw = base64.b64decode(signature, validate=True)
    except ValueError as exc:
        raise InputValidationError("Signature must be base64 encoded") from exc
    return RingSignature.from_bytes(raw, point_from_hex(key_image, error=InvalidKeyImage), ring_size)


def sign_vote(
    private_key: str,
    public_keys: List[str],
    message: str,
    case_id: str,
    *,
    max_ring_size: int | None = None,
) -> Dict[str, str]:
    ring = decode_ring(public_keys, max_ring_size)
    secret = pem_to_private_key(dearmor(private_key))
    signer_index = find_signer_index(ring, derive_public_key(secret))
    if signer_index == -1:
        raise SignerNotInRing("Private key does not match any public key")

    signature = create_ring_signature(message, ring, secret, signer_index, case_id)
    return {
        "signature": base64.b64encode(signature.to_bytes()).decode("ascii"),
        "keyImage": point_to_hex(signature.key_image),
    }


def verify_vote(
    public_keys: List[str],
    signature: str,
    key_image: str,
    message: str,
    case_id: str,
    *,
    max_ring_size: int | None = None,
) -> bool:
    ring = decode_ring(public_keys, max_ring_size)
    decoded = _decode_signature(signature, key_image, len(ring))
    valid = verify_ring_signature(message, ring, decoded, case_id)
    if not valid:
        logger.warning("Ring signature failed verification for case %s", case_id)
    return valid


def cast_vote(
    store: KeyImageStore,
    public_keys: List[str],
    signature: str,
    key_image: str,
    message: str,
    case_id: str,
    *,
    max_ring_size: int | None = None,
) -> Dict[str, object]:
    """Verify a signed vote and spend its key image.

    Raises :class:`~ringvote.errors.KeyImageReused` when the key image was
    already recorded for ``case_id``.
    """

    if not verify_vote(public_keys, signature, key_image, message, case_id, max_ring_size=max_ring_size):
        return {"accepted": False, "reason": "invalid-signature"}

    record = store.record(case_id, point_from_hex(key_image, error=InvalidKeyImage))
    logger.info("Accepted vote for case %s", case_id)
    return {"accepted": True, "keyImage": point_to_hex(record.key_image), "recordedAt": record.recorded_at}


__all__ = ["cast_vote", "decode_ring", "generate_keys", "sign_vote", "verify_vote"]
