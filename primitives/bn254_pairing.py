"""Textbook optimal ate pairing on BN254.

GT lives in Fq12 = Fq[w] / (w^12 - 18 w^6 + 82). G2 points are untwisted into
E(Fq12) by x -> x' w^2, y -> y' w^3 (after rewriting Fq2 = Fq[u]/(u^2 + 1)
in the w basis, where u = w^6 - 9), G1 points are embedded as constants, and
the Miller loop runs on affine coordinates over Fq12. A single final
exponentiation by (q^12 - 1) / r is shared by every pair of a multi_pair.

Nothing here is optimized: no tower arithmetic, no cyclotomic squaring, no
hard/easy split of the final exponent.
"""

from typing import Iterable, Optional, Tuple

from primitives.bn254 import G1Point, G2Point
from primitives.curve import CurvePoint
from primitives.errors import DivideByZeroError
from primitives.field import BN254_SCALAR_FIELD, Fq, inv_mod
from primitives.pairing import Pairing
from primitives.polynomial import Polynomial

FIELD_MODULUS = Fq.MODULUS
CURVE_ORDER = BN254_SCALAR_FIELD.modulus

ATE_LOOP_COUNT = 29793968203157093288  # 6x + 2
LOG_ATE_LOOP_COUNT = 63

FINAL_EXPONENT = (FIELD_MODULUS ** 12 - 1) // CURVE_ORDER

# w^12 = 18 w^6 - 82
FQ12_MODULUS_COEFFS = (82, 0, 0, 0, 0, 0, -18, 0, 0, 0, 0, 0)


# --- Fq12 ---

class Fq12:
    """Element of Fq[w] / (w^12 - 18 w^6 + 82), stored as 12 ints mod q."""

    DEGREE = 12

    __slots__ = ("coeffs",)

    def __init__(self, coeffs) -> None:
        cs = [int(c) % FIELD_MODULUS for c in coeffs]
        if len(cs) > self.DEGREE:
            raise ValueError(f"Fq12 takes at most {self.DEGREE} coefficients, got {len(cs)}")
        self.coeffs = tuple(cs + [0] * (self.DEGREE - len(cs)))

    @classmethod
    def one(cls) -> "Fq12":
        return cls([1])

    @classmethod
    def zero(cls) -> "Fq12":
        return cls([])

    def is_zero(self) -> bool:
        return not any(self.coeffs)

    def is_one(self) -> bool:
        return self.coeffs[0] == 1 and not any(self.coeffs[1:])

    def _coerce(self, other) -> Optional["Fq12"]:
        if isinstance(other, Fq12):
            return other
        if isinstance(other, (int, Fq)):
            return Fq12([int(other)])
        return None

    def __add__(self, other):
        o = self._coerce(other)
        if o is None:
            return NotImplemented
        return Fq12([a + b for a, b in zip(self.coeffs, o.coeffs)])

    __radd__ = __add__

    def __sub__(self, other):
        o = self._coerce(other)
        if o is None:
            return NotImplemented
        return Fq12([a - b for a, b in zip(self.coeffs, o.coeffs)])

    def __rsub__(self, other):
        o = self._coerce(other)
        if o is None:
            return NotImplemented
        return o - self

    def __neg__(self):
        return Fq12([-c for c in self.coeffs])

    def __mul__(self, other):
        if isinstance(other, (int, Fq)):
            k = int(other)
            return Fq12([c * k for c in self.coeffs])
        if not isinstance(other, Fq12):
            return NotImplemented
        n = self.DEGREE
        prod = [0] * (2 * n - 1)
        for i, a in enumerate(self.coeffs):
            if a == 0:
                continue
            for j, b in enumerate(other.coeffs):
                prod[i + j] += a * b
        # Reduce with w^12 = 18 w^6 - 82
        for k in range(2 * n - 2, n - 1, -1):
            top = prod[k]
            if top:
                prod[k - 6] += 18 * top
                prod[k - 12] -= 82 * top
        return Fq12(prod[:n])

    __rmul__ = __mul__

    def inv(self) -> "Fq12":
        """Inverse by extended Euclid over Fq[w].

        Raises:
            DivideByZeroError: If self is zero
        """
        if self.is_zero():
            raise DivideByZeroError("cannot invert zero in Fq12")
        modulus = Polynomial(list(FQ12_MODULUS_COEFFS) + [1], Fq)
        old_r, r = modulus, Polynomial(self.coeffs, Fq)
        old_s, s = Polynomial.zero(Fq), Polynomial.one(Fq)
        while not r.is_zero():
            q, rem = divmod(old_r, r)
            old_r, r = r, rem
            old_s, s = s, old_s - q * s
        # old_r is a non-zero constant since the modulus is irreducible
        scale = inv_mod(old_r[0].value, FIELD_MODULUS)
        inverse = (old_s * scale) % modulus
        return Fq12([c.value for c in inverse.coeffs])

    def __truediv__(self, other):
        o = self._coerce(other)
        if o is None:
            return NotImplemented
        return self * o.inv()

    def __pow__(self, exponent: int) -> "Fq12":
        exponent = int(exponent)
        if exponent < 0:
            return self.inv() ** (-exponent)
        result = Fq12.one()
        base = self
        while exponent > 0:
            if exponent & 1:
                result = result * base
            exponent >>= 1
            if exponent:
                base = base * base
        return result

    def __eq__(self, other):
        o = self._coerce(other)
        if o is None:
            return NotImplemented
        return self.coeffs == o.coeffs

    def __hash__(self):
        return hash(self.coeffs)

    def __repr__(self):
        return f"Fq12({list(self.coeffs)})"


W = Fq12([0, 1])
W2 = W * W
W3 = W2 * W

AffinePoint12 = Tuple[Fq12, Fq12]


# --- Embeddings ---

def twist(point: G2Point) -> Optional[AffinePoint12]:
    """Map a G2 point on the twist into E(Fq12)."""
    affine = point.to_affine()
    if affine is None:
        return None
    x, y = affine
    # Fq2 element a + b u becomes (a - 9b) + b w^6
    nx = Fq12([x.c0.value - 9 * x.c1.value, 0, 0, 0, 0, 0, x.c1.value])
    ny = Fq12([y.c0.value - 9 * y.c1.value, 0, 0, 0, 0, 0, y.c1.value])
    return (nx * W2, ny * W3)


def cast_g1(point: G1Point) -> Optional[AffinePoint12]:
    """Embed a G1 point into E(Fq12)."""
    affine = point.to_affine()
    if affine is None:
        return None
    return (Fq12([affine[0].value]), Fq12([affine[1].value]))


# --- Affine Arithmetic over Fq12 ---

def _double(p: Optional[AffinePoint12]) -> Optional[AffinePoint12]:
    if p is None or p[1].is_zero():
        return None
    x, y = p
    m = (x * x * 3) / (y * 2)
    nx = m * m - x * 2
    return (nx, m * (x - nx) - y)


def _add(p: Optional[AffinePoint12], q: Optional[AffinePoint12]) -> Optional[AffinePoint12]:
    if p is None:
        return q
    if q is None:
        return p
    x1, y1 = p
    x2, y2 = q
    if x1 == x2:
        return _double(p) if y1 == y2 else None
    m = (y2 - y1) / (x2 - x1)
    nx = m * m - x1 - x2
    return (nx, m * (x1 - nx) - y1)


def _linefunc(p1: AffinePoint12, p2: AffinePoint12, t: AffinePoint12) -> Fq12:
    """Line through p1 and p2 (tangent when equal) evaluated at t."""
    x1, y1 = p1
    x2, y2 = p2
    xt, yt = t
    if x1 != x2:
        m = (y2 - y1) / (x2 - x1)
        return m * (xt - x1) - (yt - y1)
    if y1 == y2:
        m = (x1 * x1 * 3) / (y1 * 2)
        return m * (xt - x1) - (yt - y1)
    return xt - x1


def _frobenius(p: AffinePoint12) -> AffinePoint12:
    return (p[0] ** FIELD_MODULUS, p[1] ** FIELD_MODULUS)


# --- Miller Loop ---

def miller_loop(q: Optional[AffinePoint12], p: Optional[AffinePoint12]) -> Fq12:
    """f_{6x+2, Q}(P) times the two Frobenius correction lines."""
    if q is None or p is None:
        return Fq12.one()
    r, f = q, Fq12.one()
    for i in range(LOG_ATE_LOOP_COUNT, -1, -1):
        f = f * f * _linefunc(r, r, p)
        r = _double(r)
        if ATE_LOOP_COUNT & (1 << i):
            f = f * _linefunc(r, q, p)
            r = _add(r, q)
    q1 = _frobenius(q)
    nq2 = _frobenius(q1)
    nq2 = (nq2[0], -nq2[1])
    f = f * _linefunc(r, q1, p)
    r = _add(r, q1)
    f = f * _linefunc(r, nq2, p)
    return f


def final_exponentiate(f: Fq12) -> Fq12:
    return f ** FINAL_EXPONENT


class BN254Pairing(Pairing):
    """Optimal ate pairing e: G1 x G2 -> mu_r in Fq12."""

    G1 = G1Point
    G2 = G2Point

    def gt_one(self) -> Fq12:
        return Fq12.one()

    def pair(self, p: CurvePoint, q: CurvePoint) -> Fq12:
        return self.multi_pair([(p, q)])

    def multi_pair(self, pairs: Iterable[Tuple[CurvePoint, CurvePoint]]) -> Fq12:
        f = Fq12.one()
        for p, q in pairs:
            self._check_types(p, q)
            if p.is_identity() or q.is_identity():
                continue
            f = f * miller_loop(twist(q), cast_g1(p))
        return final_exponentiate(f)
