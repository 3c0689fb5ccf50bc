"""Linkable ring signatures on secp256k1 for anonymous one-time voting keys."""

from .ballot import cast_vote, generate_keys, sign_vote, verify_vote
from .curve import CurvePoint, G, add, scalar_mul, validate
from .errors import (
    CryptoOperationError,
    InputValidationError,
    InvalidKeyImage,
    InvalidPublicKey,
    KeyImageReused,
    RingSignatureError,
    SignerNotInRing,
)
from .keys import KeyPair, derive_public_key, generate_key_pair
from .ring import RingSignature, create_key_image, create_ring_signature, verify_ring_signature
from .store import KeyImageRecord, KeyImageStore

__all__ = [
    "cast_vote",
    "generate_keys",
    "sign_vote",
    "verify_vote",
    "CurvePoint",
    "G",
    "add",
    "scalar_mul",
    "validate",
    "CryptoOperationError",
    "InputValidationError",
    "InvalidKeyImage",
    "InvalidPublicKey",
    "KeyImageReused",
    "RingSignatureError",
    "SignerNotInRing",
    "KeyPair",
    "derive_public_key",
    "generate_key_pair",
    "RingSignature",
    "create_key_image",
    "create_ring_signature",
    "verify_ring_signature",
    "KeyImageRecord",
    "KeyImageStore",
]
