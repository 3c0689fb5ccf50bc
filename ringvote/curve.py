"""Group operations on secp256k1.

The rest of the package only sees :class:`CurvePoint` values; the ``ecdsa``
package is an implementation detail confined to this module.
"""

from __future__ import annotations

from dataclasses import dataclass

from ecdsa import SECP256k1
from ecdsa.ellipticcurve import INFINITY, PointJacobi

from .constants import CURVE_B, N, P
from .errors import CryptoOperationError

_CURVE = SECP256k1.curve
_GENERATOR = SECP256k1.generator


@dataclass(frozen=True)
class CurvePoint:
    """Affine point with integer coordinates."""

    x: int
    y: int

    def __repr__(self) -> str:
        return f"CurvePoint(x={self.x:#066x}, y={self.y:#066x})"


G = CurvePoint(x=_GENERATOR.x(), y=_GENERATOR.y())


def validate(point: CurvePoint) -> bool:
    """Return ``True`` when ``point`` lies on secp256k1.

    The cofactor is 1, so the curve equation also implies membership of the
    prime order subgroup.
    """

    if not isinstance(point, CurvePoint):
        return False
    x, y = point.x, point.y
    if not isinstance(x, int) or not isinstance(y, int):
        return False
    if not (0 <= x < P and 0 <= y < P):
        return False
    return (y * y - (x * x * x + CURVE_B)) % P == 0


def _lift(point: CurvePoint) -> PointJacobi:
    if point == G:
        return _GENERATOR
    return PointJacobi(_CURVE, point.x, point.y, 1, N)


def _lower(point) -> CurvePoint:
    if point == INFINITY:
        raise CryptoOperationError("Operation produced the point at infinity")
    return CurvePoint(x=point.x(), y=point.y())


def add(first: CurvePoint, second: CurvePoint) -> CurvePoint:
    if first == second:
        return _lower(_lift(first).double())
    return _lower(_lift(first) + _lift(second))


def scalar_mul(point: CurvePoint, scalar: int) -> CurvePoint:
    """Compute ``scalar * point``; the scalar is reduced modulo the group order."""

    k = scalar % N
    if k == 0:
        raise CryptoOperationError("Scalar is congruent to zero modulo the group order")
    return _lower(_lift(point) * k)


def base_mul(scalar: int) -> CurvePoint:
    return scalar_mul(G, scalar)


__all__ = ["CurvePoint", "G", "N", "P", "add", "base_mul", "scalar_mul", "validate"]
