"""Key pair sampling for ring members."""

from __future__ import annotations

import secrets
from dataclasses import dataclass

from .constants import N
from .curve import CurvePoint, base_mul
from .errors import InputValidationError


@dataclass(frozen=True)
class KeyPair:
    """Private scalar together with its public point."""

    private_key: int
    public_key: CurvePoint

    def __repr__(self) -> str:
        return f"KeyPair(public_key={self.public_key!r})"


def random_scalar() -> int:
    """Uniform scalar in ``[1, N-1]`` drawn from the OS CSPRNG."""

    return secrets.randbelow(N - 1) + 1


def derive_public_key(private_key: int) -> CurvePoint:
    if not isinstance(private_key, int) or not 0 < private_key < N:
        raise InputValidationError("Private key must lie in [1, N-1]")
    return base_mul(private_key)


def generate_key_pair() -> KeyPair:
    private_key = random_scalar()
    return KeyPair(private_key=private_key, public_key=base_mul(private_key))


__all__ = ["KeyPair", "derive_public_key", "generate_key_pair", "random_scalar"]
