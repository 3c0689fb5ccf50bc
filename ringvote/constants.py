"""Curve parameters and wire sizes shared across the package."""

from __future__ import annotations

# secp256k1 field prime and group order.
P = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEFFFFFC2F
N = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141

CURVE_B = 7

COORDINATE_SIZE = 32
POINT_SIZE = 2 * COORDINATE_SIZE
SCALAR_SIZE = 32
CHECKSUM_SIZE = 32

MIN_RING_SIZE = 2
