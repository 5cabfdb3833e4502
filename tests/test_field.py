"""Tests for prime field arithmetic.

Covers the field axioms, both inversion routes, exponent edge cases, type
separation between fields, Montgomery batch inversion and roots of unity.
"""

import random

import numpy as np
import pytest

from primitives.errors import DivideByZeroError, InvalidParameterError
from primitives.field import (
    Fq,
    Fr,
    PrimeField,
    ToyFq,
    ToyFr,
    batch_inverse,
    batch_inverse_elements,
    from_gf,
    inv_mod,
    inv_mod_euclid,
    make_field_type,
    pow_mod,
    root_of_unity,
    roots_of_unity,
    to_gf,
)

F101 = make_field_type(PrimeField(modulus=101, name="F101", generator=2))

FIELDS = [F101, ToyFr, ToyFq, Fr, Fq]


def _samples(field, rng, n=5):
    return [field.random(rng) for _ in range(n)]


class TestFieldAxioms:
    """Ring and field laws on random elements."""

    @pytest.mark.parametrize("field", FIELDS)
    def test_additive_group(self, field, rng) -> None:
        """Addition is associative, commutative, has 0 and inverses."""
        a, b, c = _samples(field, rng, 3)
        assert (a + b) + c == a + (b + c)
        assert a + b == b + a
        assert a + field.zero() == a
        assert a + (-a) == field.zero()
        assert a - b == a + (-b)

    @pytest.mark.parametrize("field", FIELDS)
    def test_multiplicative_laws(self, field, rng) -> None:
        """Multiplication is associative, commutative, distributive, has 1."""
        a, b, c = _samples(field, rng, 3)
        assert (a * b) * c == a * (b * c)
        assert a * b == b * a
        assert a * (b + c) == a * b + a * c
        assert a * field.one() == a
        assert a * field.zero() == field.zero()

    @pytest.mark.parametrize("field", FIELDS)
    def test_inverse(self, field, rng) -> None:
        """a * a^-1 == 1 and Fermat agrees with extended Euclid."""
        for _ in range(5):
            a = field.random_nonzero(rng)
            assert a * a.inv() == field.one()
            assert a.inv() == a.inv_euclid()
            assert a / a == field.one()

    @pytest.mark.parametrize("field", FIELDS)
    def test_values_normalized(self, field) -> None:
        """Construction reduces into [0, p)."""
        p = field.MODULUS
        assert field(p).value == 0
        assert field(-1).value == p - 1
        assert field(2 * p + 5).value == 5
        assert (field(p - 1) + field(2)).value == 1


class TestFieldEdgeCases:
    """Zero handling, exponents and type separation."""

    def test_invert_zero_raises(self) -> None:
        """Inverting zero raises DivideByZeroError, which is a ZeroDivisionError."""
        with pytest.raises(DivideByZeroError):
            F101.zero().inv()
        with pytest.raises(ZeroDivisionError):
            F101.zero().inv_euclid()
        with pytest.raises(DivideByZeroError):
            F101(3) / F101(0)

    def test_pow(self) -> None:
        """pow handles zero, negative and oversized exponents."""
        a = F101(7)
        assert a ** 0 == 1
        assert a ** 1 == a
        assert a ** 3 == a * a * a
        assert a ** -1 == a.inv()
        assert a ** -2 == (a * a).inv()
        assert a ** 100 == 1  # Fermat
        assert a ** 205 == a ** 5
        assert F101.zero() ** 5 == 0
        assert F101.zero() ** 0 == 1

    def test_int_coercion(self) -> None:
        """Plain ints mix with field elements on either side."""
        a = F101(50)
        assert a + 60 == F101(9)
        assert 60 + a == F101(9)
        assert 1 - a == F101(52)
        assert 3 * a == F101(49)
        assert 1 / F101(2) == F101(51)
        assert a == 151
        assert int(a) == 50

    def test_fields_do_not_mix(self) -> None:
        """Elements of different fields refuse arithmetic and compare unequal."""
        with pytest.raises(TypeError):
            F101(1) + ToyFr(1)
        with pytest.raises(TypeError):
            Fr(2) * Fq(2)
        with pytest.raises(TypeError):
            Fr(Fq(5))
        assert Fr(1) != Fq(1)

    def test_hash_consistent_with_eq(self) -> None:
        """Equal elements hash equally."""
        assert hash(F101(3)) == hash(F101(104))
        assert len({F101(3), F101(104), F101(4)}) == 2

    def test_repr(self) -> None:
        assert repr(F101(5)) == "F101(5)"


class TestIntegerHelpers:
    """Module-level modular helpers."""

    @pytest.mark.parametrize("x", [1, 2, 57, 100])
    def test_inv_mod_routes_agree(self, x: int) -> None:
        assert inv_mod(x, 101) == inv_mod_euclid(x, 101)
        assert (x * inv_mod(x, 101)) % 101 == 1

    def test_pow_mod_matches_builtin(self) -> None:
        p = Fr.MODULUS
        for base, exp in [(3, 0), (5, 12345), (p - 1, p - 2)]:
            assert pow_mod(base, exp, p) == pow(base, exp, p)

    def test_inv_mod_zero_raises(self) -> None:
        with pytest.raises(DivideByZeroError):
            inv_mod(0, 101)
        with pytest.raises(DivideByZeroError):
            inv_mod_euclid(202, 101)


class TestBatchInverse:
    """Montgomery batch inversion."""

    @pytest.mark.parametrize("field", [F101, ToyFr, Fr])
    @pytest.mark.parametrize("n", [1, 2, 7, 32])
    def test_matches_individual_inverses(self, field, n: int) -> None:
        """batch_inverse(a)[i] == a[i]^-1."""
        rng = random.Random(n)
        elements = [field.random_nonzero(rng) for _ in range(n)]
        inverses = batch_inverse_elements(elements)
        assert inverses == [e.inv() for e in elements]

    def test_galois_array_interface(self) -> None:
        """Works directly on galois arrays."""
        gf = ToyFr.FIELD.gf
        values = gf([2, 3, 5, 7])
        result = batch_inverse(values)
        assert np.array_equal(result * values, gf.Ones(4))

    def test_zero_raises(self) -> None:
        with pytest.raises(DivideByZeroError):
            batch_inverse_elements([F101(1), F101(0), F101(3)])

    def test_empty(self) -> None:
        assert batch_inverse_elements([]) == []

    def test_gf_round_trip(self) -> None:
        elements = [Fr(1), Fr(-1), Fr(12345)]
        assert from_gf(Fr, to_gf(Fr, elements)) == elements


class TestRootsOfUnity:
    """Roots of unity from the configured generator."""

    @pytest.mark.parametrize("field,n", [(F101, 4), (F101, 25), (ToyFr, 4), (Fr, 1 << 10), (Fr, 1 << 28)])
    def test_primitive(self, field, n: int) -> None:
        """omega^n == 1 and omega^(n/q) != 1 for the prime 2 (and 5)."""
        omega = root_of_unity(field, n)
        assert omega ** n == 1
        if n % 2 == 0:
            assert omega ** (n // 2) != 1
        if n % 5 == 0:
            assert omega ** (n // 5) != 1

    def test_non_divisor_raises(self) -> None:
        with pytest.raises(InvalidParameterError):
            root_of_unity(F101, 3)
        with pytest.raises(InvalidParameterError):
            root_of_unity(ToyFr, 8)

    def test_subgroup(self) -> None:
        roots = roots_of_unity(Fr, 8)
        assert len(set(roots)) == 8
        assert all(r ** 8 == 1 for r in roots)

    def test_two_adicity(self) -> None:
        assert Fr.FIELD.two_adicity == 28
        assert ToyFr.FIELD.two_adicity == 2
        assert F101.FIELD.two_adicity == 2
