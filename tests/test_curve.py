import unittest

from ringvote.constants import N, P
from ringvote.curve import CurvePoint, G, add, base_mul, scalar_mul, validate
from ringvote.errors import CryptoOperationError

TWO_G = CurvePoint(
    x=0xC6047F9441ED7D6D3045406E95C07CD85C778E4B8CEF3CA7ABAC09B95C709EE5,
    y=0x1AE168FEA63DC339A3C58419466CEAEEF7F632653266D0E1236431A950CFE52A,
)


class TestCurveProvider(unittest.TestCase):
    def test_generator_is_valid(self) -> None:
        self.assertTrue(validate(G))

    def test_doubling_matches_known_point(self) -> None:
        self.assertEqual(add(G, G), TWO_G)
        self.assertEqual(scalar_mul(G, 2), TWO_G)
        self.assertEqual(base_mul(2), TWO_G)

    def test_scalar_reduced_modulo_order(self) -> None:
        self.assertEqual(scalar_mul(G, N + 2), TWO_G)

    def test_scalar_mul_distributes_over_add(self) -> None:
        left = scalar_mul(add(G, TWO_G), 5)
        right = add(scalar_mul(G, 5), scalar_mul(TWO_G, 5))
        self.assertEqual(left, right)

    def test_validate_rejects_off_curve_and_out_of_range(self) -> None:
        self.assertFalse(validate(CurvePoint(x=G.x, y=(G.y + 1) % P)))
        self.assertFalse(validate(CurvePoint(x=G.x + P, y=G.y)))
        self.assertFalse(validate(CurvePoint(x=-1, y=G.y)))
        self.assertFalse(validate((G.x, G.y)))  # type: ignore[arg-type]

    def test_negated_point_is_valid(self) -> None:
        self.assertTrue(validate(CurvePoint(x=G.x, y=P - G.y)))

    def test_zero_scalar_rejected(self) -> None:
        with self.assertRaises(CryptoOperationError):
            scalar_mul(G, 0)
        with self.assertRaises(CryptoOperationError):
            scalar_mul(G, N)

    def test_adding_inverse_rejected(self) -> None:
        with self.assertRaises(CryptoOperationError):
            add(G, CurvePoint(x=G.x, y=P - G.y))


if __name__ == "__main__":
    unittest.main()
