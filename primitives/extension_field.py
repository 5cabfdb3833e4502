"""Quadratic extension fields Fp2 = Fp[u] / (u^2 - NON_RESIDUE).

Elements are c0 + c1*u with c0, c1 in the base FieldElement subclass. Every
shipped extension uses u^2 = -1, which is irreducible because both base
primes are congruent to 3 mod 4.
"""

from typing import Tuple

from primitives.errors import DivideByZeroError
from primitives.field import FieldElement, Fq, ToyFq


class QuadraticExtensionElement:
    """Element c0 + c1*u of a quadratic extension.

    Subclasses set BASE (the coordinate FieldElement subclass) and
    NON_RESIDUE (the value of u^2, as an int).
    """

    BASE: type
    NON_RESIDUE: int = -1

    __slots__ = ("c0", "c1")

    def __init__(self, c0=0, c1=0) -> None:
        base = self.BASE
        self.c0 = c0 if type(c0) is base else base(c0)
        self.c1 = c1 if type(c1) is base else base(c1)

    @classmethod
    def zero(cls):
        return cls(cls.BASE.zero(), cls.BASE.zero())

    @classmethod
    def one(cls):
        return cls(cls.BASE.one(), cls.BASE.zero())

    @classmethod
    def random(cls, rng=None):
        return cls(cls.BASE.random(rng), cls.BASE.random(rng))

    def is_zero(self) -> bool:
        return self.c0.is_zero() and self.c1.is_zero()

    def is_one(self) -> bool:
        return self.c0.is_one() and self.c1.is_zero()

    def coeffs(self) -> Tuple[int, int]:
        return (self.c0.value, self.c1.value)

    def _coerce(self, other):
        if type(other) is type(self):
            return other
        if isinstance(other, int) or type(other) is self.BASE:
            return type(self)(other, 0)
        return None

    # --- Arithmetic ---

    def __add__(self, other):
        o = self._coerce(other)
        if o is None:
            return NotImplemented
        return type(self)(self.c0 + o.c0, self.c1 + o.c1)

    __radd__ = __add__

    def __sub__(self, other):
        o = self._coerce(other)
        if o is None:
            return NotImplemented
        return type(self)(self.c0 - o.c0, self.c1 - o.c1)

    def __rsub__(self, other):
        o = self._coerce(other)
        if o is None:
            return NotImplemented
        return o - self

    def __neg__(self):
        return type(self)(-self.c0, -self.c1)

    def __mul__(self, other):
        if type(other) is self.BASE or isinstance(other, int):
            # scalar multiplication by a base-field element
            return type(self)(self.c0 * other, self.c1 * other)
        if type(other) is not type(self):
            return NotImplemented
        a0, a1 = self.c0, self.c1
        b0, b1 = other.c0, other.c1
        # (a0 + a1 u)(b0 + b1 u) = a0 b0 + nr a1 b1 + (a0 b1 + a1 b0) u
        return type(self)(a0 * b0 + a1 * b1 * self.NON_RESIDUE, a0 * b1 + a1 * b0)

    __rmul__ = __mul__

    def square(self):
        return self * self

    def conjugate(self):
        return type(self)(self.c0, -self.c1)

    def norm(self) -> FieldElement:
        """c0^2 - nr * c1^2 (= c0^2 + c1^2 for u^2 = -1)."""
        return self.c0 * self.c0 - self.c1 * self.c1 * self.NON_RESIDUE

    def inv(self):
        """conjugate / norm.

        Raises:
            DivideByZeroError: If self is zero
        """
        if self.is_zero():
            raise DivideByZeroError(f"cannot invert zero in {type(self).__name__}")
        n_inv = self.norm().inv()
        return type(self)(self.c0 * n_inv, -self.c1 * n_inv)

    def frobenius(self):
        """x -> x^p, which for a quadratic extension is conjugation."""
        return self.conjugate()

    def __truediv__(self, other):
        o = self._coerce(other)
        if o is None:
            return NotImplemented
        return self * o.inv()

    def __rtruediv__(self, other):
        o = self._coerce(other)
        if o is None:
            return NotImplemented
        return o * self.inv()

    def __pow__(self, exponent: int):
        exponent = int(exponent)
        if exponent < 0:
            return self.inv() ** (-exponent)
        result = self.one()
        base = self
        while exponent > 0:
            if exponent & 1:
                result = result * base
            exponent >>= 1
            if exponent:
                base = base * base
        return result

    # --- Comparison ---

    def __eq__(self, other):
        o = self._coerce(other)
        if o is None:
            return NotImplemented
        return self.c0 == o.c0 and self.c1 == o.c1

    def __hash__(self):
        return hash((self.c0.value, self.c1.value))

    def __repr__(self):
        return f"{type(self).__name__}({self.c0.value}, {self.c1.value})"


class Fq2(QuadraticExtensionElement):
    """BN254 G2 coordinate field Fq[u] / (u^2 + 1)."""
    BASE = Fq
    NON_RESIDUE = -1
    __slots__ = ()


class ToyFq2(QuadraticExtensionElement):
    """Toy curve extension ToyFq[u] / (u^2 + 1); also hosts the toy GT."""
    BASE = ToyFq
    NON_RESIDUE = -1
    __slots__ = ()
