"""Exception hierarchy raised by the ring signature routines."""

from __future__ import annotations

from typing import Any, Optional


class RingSignatureError(Exception):
    """Base class carrying a machine readable ``code``."""

    code = "SIGNATURE_SYSTEM_ERROR"

    def __init__(self, message: str, *, details: Optional[Any] = None) -> None:
        super().__init__(message)
        self.details = details


class CryptoOperationError(RingSignatureError):
    """Arithmetic or randomness failure, or any malformed input."""


class InputValidationError(CryptoOperationError, ValueError):
    """Ring size, signer index or length constraints were violated."""

    code = "SIGNATURE_INVALID_FORMAT"


class InvalidPointError(CryptoOperationError, ValueError):
    """A value expected to be a curve point is not on secp256k1."""

    code = "SIGNATURE_INVALID_FORMAT"


class InvalidPublicKey(InvalidPointError):
    pass


class InvalidKeyImage(InvalidPointError):
    pass


class SignerNotInRing(InputValidationError):
    """The signing key does not correspond to any ring member."""


class KeyImageReused(RingSignatureError):
    """The key image was already recorded for the case."""

    code = "KEY_IMAGE_REUSED"


__all__ = [
    "CryptoOperationError",
    "InputValidationError",
    "InvalidKeyImage",
    "InvalidPointError",
    "InvalidPublicKey",
    "KeyImageReused",
    "RingSignatureError",
    "SignerNotInRing",
]
