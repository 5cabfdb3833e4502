"""Tests for the pairing contract.

The discrete-log oracle on the toy curve runs in the default suite; the
BN254 optimal ate pairing is marked slow.
"""

import pytest

from primitives.bn254 import G1Point, G2Point
from primitives.bn254_pairing import BN254Pairing, Fq12
from primitives.errors import DivideByZeroError, InvalidParameterError
from primitives.extension_field import ToyFq2
from primitives.field import ToyFq
from primitives.pairing import DiscreteLogPairing
from primitives.toy_curve import TOY_CURVE_ORDER, TOY_GT_GENERATOR, ToyG1Point, ToyG2Point


@pytest.fixture(scope="module")
def toy_pairing() -> DiscreteLogPairing:
    return DiscreteLogPairing(ToyG1Point, ToyG2Point, TOY_GT_GENERATOR)


@pytest.fixture(scope="module")
def bn254_pairing() -> BN254Pairing:
    return BN254Pairing()


class TestToyTargetGroup:
    """The GT generator used by the oracle."""

    def test_gt_generator_has_order_r(self) -> None:
        assert TOY_GT_GENERATOR ** TOY_CURVE_ORDER == ToyFq2.one()
        assert TOY_GT_GENERATOR != ToyFq2.one()


class TestDiscreteLogPairing:
    """Bilinearity, identity and non-degeneracy of the oracle."""

    @pytest.mark.parametrize("a,b", [(1, 1), (2, 3), (5, 7), (100108, 2), (12345, 67890)])
    def test_bilinearity(self, toy_pairing, a: int, b: int) -> None:
        g1, g2 = ToyG1Point.generator(), ToyG2Point.generator()
        base = toy_pairing.pair(g1, g2)
        assert toy_pairing.pair(g1 * a, g2 * b) == base ** (a * b)
        assert toy_pairing.pair(g1 * a, g2 * b) == toy_pairing.pair(g1 * (a * b), g2)

    def test_identity(self, toy_pairing) -> None:
        g1, g2 = ToyG1Point.generator(), ToyG2Point.generator()
        assert toy_pairing.pair(ToyG1Point.identity(), g2) == toy_pairing.gt_one()
        assert toy_pairing.pair(g1, ToyG2Point.identity()) == toy_pairing.gt_one()

    def test_non_degenerate(self, toy_pairing) -> None:
        assert toy_pairing.pair(ToyG1Point.generator(), ToyG2Point.generator()) != toy_pairing.gt_one()

    def test_multi_pair_is_product(self, toy_pairing) -> None:
        g1, g2 = ToyG1Point.generator(), ToyG2Point.generator()
        pairs = [(g1 * 3, g2 * 4), (g1 * 10, g2), (ToyG1Point.identity(), g2 * 9)]
        expected = toy_pairing.gt_one()
        for p, q in pairs:
            expected = expected * toy_pairing.pair(p, q)
        assert toy_pairing.multi_pair(pairs) == expected
        # e(aP, Q) * e(-aP, Q) == 1
        assert toy_pairing.multi_pair([(g1 * 5, g2), (-(g1 * 5), g2)]) == toy_pairing.gt_one()

    @pytest.mark.parametrize("k", [0, 1, 316, 317, 318, 99999, TOY_CURVE_ORDER - 1])
    def test_discrete_log(self, toy_pairing, k: int) -> None:
        assert toy_pairing.discrete_log(ToyG1Point.generator() * k) == k
        assert toy_pairing.discrete_log(ToyG2Point.generator() * k) == k

    def test_point_outside_subgroup_rejected(self, toy_pairing) -> None:
        p = ToyG1Point.from_affine(ToyFq(0), ToyFq(955300))
        with pytest.raises(InvalidParameterError):
            toy_pairing.pair(p, ToyG2Point.generator())

    def test_argument_types_checked(self, toy_pairing) -> None:
        with pytest.raises(TypeError):
            toy_pairing.pair(ToyG2Point.generator(), ToyG1Point.generator())


class TestFq12:
    """Degree-12 extension arithmetic (fast)."""

    def test_inverse(self) -> None:
        a = Fq12([i * i + 3 for i in range(12)])
        assert a * a.inv() == Fq12.one()
        assert (a / a).is_one()

    def test_invert_zero_raises(self) -> None:
        with pytest.raises(DivideByZeroError):
            Fq12.zero().inv()

    def test_modulus_relation(self) -> None:
        """w^12 == 18 w^6 - 82."""
        w = Fq12([0, 1])
        assert w ** 12 == Fq12([-82, 0, 0, 0, 0, 0, 18])

    def test_distributive(self) -> None:
        a, b, c = Fq12([1, 2, 3]), Fq12([0] * 11 + [5]), Fq12([7] * 12)
        assert a * (b + c) == a * b + a * c


@pytest.mark.slow
class TestBN254Pairing:
    """Optimal ate pairing on BN254."""

    def test_bilinearity(self, bn254_pairing) -> None:
        g1, g2 = G1Point.generator(), G2Point.generator()
        base = bn254_pairing.pair(g1, g2)
        assert bn254_pairing.pair(g1 * 2, g2) == base * base
        assert bn254_pairing.pair(g1, g2 * 2) == base * base

    def test_non_degenerate_and_order(self, bn254_pairing) -> None:
        base = bn254_pairing.pair(G1Point.generator(), G2Point.generator())
        assert base != Fq12.one()
        assert base ** G1Point.ORDER == Fq12.one()

    def test_identity(self, bn254_pairing) -> None:
        assert bn254_pairing.pair(G1Point.identity(), G2Point.generator()).is_one()

    def test_multi_pair_cancels(self, bn254_pairing) -> None:
        g1, g2 = G1Point.generator(), G2Point.generator()
        assert bn254_pairing.multi_pair([(g1 * 3, g2 * 5), (-(g1 * 15), g2)]).is_one()
