"""Dense univariate polynomials over a prime field.

Coefficients are stored in ascending order [c0, c1, ..., cd] and kept in
canonical form: no trailing zeros except for the zero polynomial, which is
the single coefficient [0] and has degree -1.

Hot loops (multiplication, division, interpolation) run on raw ints modulo p
and wrap the result once; multi-point evaluation and batch inversion use the
field's galois array class.
"""

from typing import List, Optional, Sequence, Tuple

from primitives.errors import (
    DimensionMismatchError,
    DivideByZeroError,
    EmptyInputError,
    InvalidParameterError,
    NonExactDivisionError,
)
from primitives.field import FieldElement, batch_inverse, from_gf, inv_mod, to_gf
from primitives.ntt import NTT, next_power_of_two


class Polynomial:
    """Immutable polynomial with coefficients in one FieldElement subclass."""

    __slots__ = ("field", "coeffs")

    def __init__(self, coeffs: Sequence, field: Optional[type] = None) -> None:
        coeffs = list(coeffs)
        if field is None:
            field = next((type(c) for c in coeffs if isinstance(c, FieldElement)), None)
            if field is None:
                raise TypeError("field must be given when no coefficient is a FieldElement")
        cs = [c if type(c) is field else field(c) for c in coeffs]
        while len(cs) > 1 and cs[-1].is_zero():
            cs.pop()
        if not cs:
            cs = [field.zero()]
        self.field = field
        self.coeffs: Tuple[FieldElement, ...] = tuple(cs)

    @classmethod
    def _from_ints(cls, values: Sequence[int], field: type) -> "Polynomial":
        """Build from ints already reduced modulo p."""
        return cls([field._unchecked(v) for v in values], field)

    # --- Constructors ---

    @classmethod
    def zero(cls, field: type) -> "Polynomial":
        return cls([field.zero()], field)

    @classmethod
    def one(cls, field: type) -> "Polynomial":
        return cls([field.one()], field)

    @classmethod
    def constant(cls, c, field: Optional[type] = None) -> "Polynomial":
        return cls([c], field)

    @classmethod
    def monomial(cls, n: int, field: type) -> "Polynomial":
        """x^n."""
        if n < 0:
            raise InvalidParameterError(f"monomial degree must be non-negative, got {n}")
        return cls([field.zero()] * n + [field.one()], field)

    @classmethod
    def vanishing(cls, points: Sequence, field: Optional[type] = None) -> "Polynomial":
        """prod_i (x - points[i]); the constant 1 for no points."""
        if field is None:
            if not points:
                raise EmptyInputError("field must be given for an empty point set")
            field = type(points[0])
        p = field.MODULUS
        acc = [1]
        for pt in points:
            a = int(field(pt)) if not isinstance(pt, field) else pt.value
            nxt = [0] * (len(acc) + 1)
            for i, c in enumerate(acc):
                nxt[i + 1] = (nxt[i + 1] + c) % p
                nxt[i] = (nxt[i] - a * c) % p
            acc = nxt
        return cls._from_ints(acc, field)

    # --- Properties ---

    @property
    def degree(self) -> int:
        if self.is_zero():
            return -1
        return len(self.coeffs) - 1

    @property
    def leading_coefficient(self) -> FieldElement:
        return self.coeffs[-1]

    def is_zero(self) -> bool:
        return len(self.coeffs) == 1 and self.coeffs[0].is_zero()

    def is_constant(self) -> bool:
        return len(self.coeffs) == 1

    def is_monic(self) -> bool:
        return not self.is_zero() and self.leading_coefficient.is_one()

    def __getitem__(self, i: int) -> FieldElement:
        """Coefficient of x^i (zero beyond the degree)."""
        if i < 0:
            raise IndexError("negative coefficient index")
        return self.coeffs[i] if i < len(self.coeffs) else self.field.zero()

    def __len__(self) -> int:
        return len(self.coeffs)

    def __iter__(self):
        return iter(self.coeffs)

    def _ints(self) -> List[int]:
        return [c.value for c in self.coeffs]

    def _coerce(self, other) -> Optional["Polynomial"]:
        if isinstance(other, Polynomial):
            if other.field is not self.field:
                raise TypeError(
                    f"cannot combine polynomials over {self.field.__name__} and {other.field.__name__}"
                )
            return other
        if isinstance(other, (int, self.field)):
            return Polynomial.constant(self.field(other) if isinstance(other, int) else other, self.field)
        return None

    # --- Arithmetic ---

    def __add__(self, other):
        o = self._coerce(other)
        if o is None:
            return NotImplemented
        p = self.field.MODULUS
        a, b = self._ints(), o._ints()
        if len(a) < len(b):
            a, b = b, a
        out = list(a)
        for i, c in enumerate(b):
            out[i] = (out[i] + c) % p
        return Polynomial._from_ints(out, self.field)

    __radd__ = __add__

    def __neg__(self):
        p = self.field.MODULUS
        return Polynomial._from_ints([(-c) % p for c in self._ints()], self.field)

    def __sub__(self, other):
        o = self._coerce(other)
        if o is None:
            return NotImplemented
        return self + (-o)

    def __rsub__(self, other):
        o = self._coerce(other)
        if o is None:
            return NotImplemented
        return o + (-self)

    def __mul__(self, other):
        if isinstance(other, (int, FieldElement)) and not isinstance(other, Polynomial):
            if isinstance(other, FieldElement) and type(other) is not self.field:
                return NotImplemented
            p = self.field.MODULUS
            k = int(other) % p
            return Polynomial._from_ints([(c * k) % p for c in self._ints()], self.field)
        o = self._coerce(other)
        if o is None:
            return NotImplemented
        if self.is_zero() or o.is_zero():
            return Polynomial.zero(self.field)
        p = self.field.MODULUS
        a, b = self._ints(), o._ints()
        out = [0] * (len(a) + len(b) - 1)
        for i, x in enumerate(a):
            if x == 0:
                continue
            for j, y in enumerate(b):
                out[i + j] += x * y
        return Polynomial._from_ints([c % p for c in out], self.field)

    __rmul__ = __mul__

    def mul_ntt(self, other: "Polynomial") -> "Polynomial":
        """Product through a radix-2 NTT.

        Falls back to schoolbook multiplication when the field lacks the
        roots of unity for the required transform size.
        """
        o = self._coerce(other)
        if o is None:
            raise TypeError(f"cannot multiply a polynomial by {type(other).__name__}")
        if self.is_zero() or o.is_zero():
            return Polynomial.zero(self.field)
        size = next_power_of_two(len(self.coeffs) + len(o.coeffs) - 1)
        if size.bit_length() - 1 > self.field.FIELD.two_adicity:
            return self * o
        engine = NTT(self.field, size)
        evals = engine.ntt(to_gf(self.field, self.coeffs)) * engine.ntt(to_gf(self.field, o.coeffs))
        return Polynomial(from_gf(self.field, engine.intt(evals)), self.field)

    def __pow__(self, n: int):
        if n < 0:
            raise InvalidParameterError(f"polynomial exponent must be non-negative, got {n}")
        result = Polynomial.one(self.field)
        base = self
        while n > 0:
            if n & 1:
                result = result * base
            n >>= 1
            if n:
                base = base * base
        return result

    def __divmod__(self, other: "Polynomial") -> Tuple["Polynomial", "Polynomial"]:
        """Schoolbook long division: returns (quotient, remainder)."""
        o = self._coerce(other)
        if o is None:
            return NotImplemented
        if o.is_zero():
            raise DivideByZeroError("division by the zero polynomial")
        p = self.field.MODULUS
        da, db = self.degree, o.degree
        if da < db:
            return Polynomial.zero(self.field), self
        rem = self._ints()
        divisor = o._ints()
        lead_inv = inv_mod(divisor[-1], p)
        quotient = [0] * (da - db + 1)
        for k in range(da - db, -1, -1):
            coef = (rem[db + k] * lead_inv) % p
            quotient[k] = coef
            if coef:
                for i, d in enumerate(divisor):
                    rem[k + i] = (rem[k + i] - coef * d) % p
        return (
            Polynomial._from_ints(quotient, self.field),
            Polynomial._from_ints(rem[:db] if db > 0 else [0], self.field),
        )

    def __floordiv__(self, other):
        return divmod(self, other)[0]

    def __mod__(self, other):
        return divmod(self, other)[1]

    @staticmethod
    def exact_divide(dividend: "Polynomial", divisor: "Polynomial") -> "Polynomial":
        """Quotient of an exact division.

        Raises:
            DivideByZeroError: If divisor is the zero polynomial
            NonExactDivisionError: If the remainder is not zero
        """
        quotient, remainder = divmod(dividend, divisor)
        if not remainder.is_zero():
            raise NonExactDivisionError(
                f"remainder of degree {remainder.degree} dividing degree {dividend.degree} "
                f"by degree {divisor.degree}"
            )
        return quotient

    # --- Evaluation ---

    def evaluate(self, x) -> FieldElement:
        """Horner's method."""
        xv = x.value if type(x) is self.field else self.field(x).value
        p = self.field.MODULUS
        acc = 0
        for c in reversed(self.coeffs):
            acc = (acc * xv + c.value) % p
        return self.field._unchecked(acc)

    __call__ = evaluate

    def evaluate_many(self, points: Sequence) -> List[FieldElement]:
        """Evaluate at every point at once (Horner over a galois array)."""
        if len(points) == 0:
            return []
        gf = self.field.FIELD.gf
        xs = to_gf(self.field, [x if type(x) is self.field else self.field(x) for x in points])
        acc = gf.Zeros(len(xs))
        for c in reversed(self.coeffs):
            acc = acc * xs + gf(c.value)
        return from_gf(self.field, acc)

    def derivative(self) -> "Polynomial":
        """Formal derivative: coefficient i is (i + 1) * c[i + 1]."""
        if len(self.coeffs) == 1:
            return Polynomial.zero(self.field)
        p = self.field.MODULUS
        return Polynomial._from_ints(
            [(i * c) % p for i, c in enumerate(self._ints()) if i > 0], self.field
        )

    # --- Interpolation ---

    @staticmethod
    def interpolate(points: Sequence, values: Sequence, field: Optional[type] = None) -> "Polynomial":
        """Lagrange interpolation through (points[i], values[i]).

        Uses barycentric weights w_i = 1 / prod_{j != i}(x_i - x_j), inverted
        together with batch_inverse, and divides the full vanishing polynomial
        by (x - x_i) synthetically for each basis polynomial.

        Raises:
            DimensionMismatchError: If points and values differ in length
            EmptyInputError: If no points are given
            InvalidParameterError: If a point is repeated
        """
        if len(points) != len(values):
            raise DimensionMismatchError(
                f"{len(points)} interpolation points but {len(values)} values"
            )
        if len(points) == 0:
            raise EmptyInputError("cannot interpolate through zero points")
        if field is None:
            field = next(
                (type(v) for v in list(points) + list(values) if isinstance(v, FieldElement)), None
            )
            if field is None:
                raise TypeError("field must be given when no point or value is a FieldElement")
        p = field.MODULUS
        xs = [field(x).value if not isinstance(x, field) else x.value for x in points]
        ys = [field(y).value if not isinstance(y, field) else y.value for y in values]
        if len(set(xs)) != len(xs):
            raise InvalidParameterError("interpolation points must be distinct")
        n = len(xs)
        if n == 1:
            return Polynomial._from_ints([ys[0]], field)

        denominators = []
        for i, xi in enumerate(xs):
            d = 1
            for j, xj in enumerate(xs):
                if i != j:
                    d = (d * (xi - xj)) % p
            denominators.append(d)
        weights = [int(w) for w in batch_inverse(field.FIELD.gf(denominators))]

        full = Polynomial.vanishing([field._unchecked(x) for x in xs], field)._ints()
        out = [0] * n
        for xi, yi, wi in zip(xs, ys, weights):
            scale = (yi * wi) % p
            if scale == 0:
                continue
            # synthetic division of full by (x - xi)
            basis = [0] * n
            basis[n - 1] = full[n]
            for k in range(n - 1, 0, -1):
                basis[k - 1] = (full[k] + xi * basis[k]) % p
            for k in range(n):
                out[k] = (out[k] + scale * basis[k]) % p
        return Polynomial._from_ints(out, field)

    # --- Comparison ---

    def __eq__(self, other):
        if not isinstance(other, Polynomial):
            return NotImplemented
        return self.field is other.field and self.coeffs == other.coeffs

    def __hash__(self):
        return hash((self.field.__name__, self.coeffs))

    def __repr__(self):
        return f"Polynomial[{self.field.__name__}]({[c.value for c in self.coeffs]})"
