"""Prime fields GF(p) bound to a modulus descriptor.

Every concrete field is a subclass of FieldElement carrying one PrimeField.
Elements of different subclasses never mix: arithmetic between them raises
TypeError and equality is False, so a BN254 scalar can't silently leak into
base-field coordinates.

Scalar arithmetic stays on Python ints (arbitrary precision, so products
never overflow before reduction). Vectorized work such as batch inversion
and multi-point evaluation goes through the galois field class exposed by
PrimeField.gf.
"""

import secrets
from dataclasses import dataclass
from functools import cached_property
from typing import List, Optional, Sequence

import galois
import numpy as np

from primitives.errors import DivideByZeroError, InvalidParameterError

_SYSTEM_RANDOM = secrets.SystemRandom()


# --- Field Descriptors ---

@dataclass(frozen=True)
class PrimeField:
    """Modulus descriptor shared by all elements of one prime field.

    Attributes:
        modulus: The prime p.
        name: Human readable field name, used in reprs and errors.
        generator: Generator of the multiplicative group GF(p)*. Needed to
            derive roots of unity; galois searches for one when it is None,
            which is only practical for small moduli.
    """
    modulus: int
    name: str
    generator: Optional[int] = None

    @cached_property
    def gf(self) -> type:
        """galois FieldArray class for this modulus."""
        if self.generator is None:
            return galois.GF(self.modulus)
        # verify=False skips factoring p - 1, which is hopeless for 254-bit primes
        return galois.GF(self.modulus, primitive_element=self.generator, verify=False)

    @cached_property
    def two_adicity(self) -> int:
        """Largest s such that 2^s divides p - 1."""
        m, s = self.modulus - 1, 0
        while m % 2 == 0:
            m //= 2
            s += 1
        return s


BN254_SCALAR_FIELD = PrimeField(
    modulus=21888242871839275222246405745257275088548364400416034343698204186575808495617,
    name="BN254_Fr",
    generator=5,
)
"""Scalar field of BN254: the order r of G1, G2 and GT."""

BN254_BASE_FIELD = PrimeField(
    modulus=21888242871839275222246405745257275088696311157297823662689037894645226208583,
    name="BN254_Fq",
    generator=3,
)
"""Base field of BN254: coordinates of G1 points."""

TOY_SCALAR_FIELD = PrimeField(modulus=100109, name="Toy_Fr", generator=2)
"""Order of the prime subgroup of the toy test curve."""

TOY_BASE_FIELD = PrimeField(modulus=1201307, name="Toy_Fq", generator=2)
"""Base field of the toy test curve (q = 12 * 100109 - 1)."""


# --- Integer Helpers ---

def pow_mod(base: int, exp: int, mod: int) -> int:
    """Modular exponentiation by binary square-and-multiply."""
    result = 1
    base = base % mod
    while exp > 0:
        if exp & 1:
            result = (result * base) % mod
        exp >>= 1
        base = (base * base) % mod
    return result


def inv_mod(x: int, mod: int) -> int:
    """Modular inverse using Fermat's little theorem (mod must be prime)."""
    if x % mod == 0:
        raise DivideByZeroError(f"cannot invert 0 modulo {mod}")
    return pow_mod(x, mod - 2, mod)


def inv_mod_euclid(x: int, mod: int) -> int:
    """Modular inverse using the extended Euclidean algorithm."""
    a = x % mod
    if a == 0:
        raise DivideByZeroError(f"cannot invert 0 modulo {mod}")
    old_r, r = a, mod
    old_s, s = 1, 0
    while r != 0:
        q = old_r // r
        old_r, r = r, old_r - q * r
        old_s, s = s, old_s - q * s
    # old_r is gcd(a, mod), which is 1 for prime mod
    return old_s % mod


# --- Field Elements ---

class FieldElement:
    """Element of GF(p) for the PrimeField bound to the subclass.

    Subclasses set FIELD; the value is always normalized into [0, p).
    Plain ints are accepted as operands and coerced into the field.
    """

    FIELD: PrimeField
    MODULUS: int

    __slots__ = ("value",)

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        field = cls.__dict__.get("FIELD")
        if field is None:
            return
        if field.modulus < 2:
            raise InvalidParameterError(f"modulus must be a prime, got {field.modulus}")
        cls.MODULUS = field.modulus

    def __init__(self, value: int = 0) -> None:
        if isinstance(value, FieldElement) and type(value) is not type(self):
            raise TypeError(f"cannot convert {type(value).__name__} to {type(self).__name__}")
        self.value = int(value) % self.MODULUS

    @classmethod
    def _unchecked(cls, value: int) -> "FieldElement":
        """Wrap a value already reduced into [0, p)."""
        obj = object.__new__(cls)
        obj.value = value
        return obj

    @classmethod
    def zero(cls) -> "FieldElement":
        return cls._unchecked(0)

    @classmethod
    def one(cls) -> "FieldElement":
        return cls._unchecked(1)

    @classmethod
    def random(cls, rng=None) -> "FieldElement":
        """Uniform element drawn from rng (anything with randrange)."""
        rng = rng or _SYSTEM_RANDOM
        return cls._unchecked(rng.randrange(cls.MODULUS))

    @classmethod
    def random_nonzero(cls, rng=None) -> "FieldElement":
        rng = rng or _SYSTEM_RANDOM
        return cls._unchecked(rng.randrange(1, cls.MODULUS))

    def is_zero(self) -> bool:
        return self.value == 0

    def is_one(self) -> bool:
        return self.value == 1

    def _coerce(self, other) -> Optional["FieldElement"]:
        if type(other) is type(self):
            return other
        if isinstance(other, (int, np.integer)):
            return type(self)(int(other))
        return None

    # --- Arithmetic ---

    def __add__(self, other):
        o = self._coerce(other)
        if o is None:
            return NotImplemented
        v = self.value + o.value
        return self._unchecked(v - self.MODULUS if v >= self.MODULUS else v)

    __radd__ = __add__

    def __sub__(self, other):
        o = self._coerce(other)
        if o is None:
            return NotImplemented
        v = self.value - o.value
        return self._unchecked(v + self.MODULUS if v < 0 else v)

    def __rsub__(self, other):
        o = self._coerce(other)
        if o is None:
            return NotImplemented
        return o - self

    def __neg__(self):
        return self if self.value == 0 else self._unchecked(self.MODULUS - self.value)

    def __mul__(self, other):
        o = self._coerce(other)
        if o is None:
            return NotImplemented
        return self._unchecked((self.value * o.value) % self.MODULUS)

    __rmul__ = __mul__

    def inv(self) -> "FieldElement":
        """Multiplicative inverse via Fermat: a^(p-2)."""
        if self.value == 0:
            raise DivideByZeroError(f"cannot invert zero in {self.FIELD.name}")
        return self._unchecked(inv_mod(self.value, self.MODULUS))

    def inv_euclid(self) -> "FieldElement":
        """Multiplicative inverse via extended Euclid; agrees with inv()."""
        if self.value == 0:
            raise DivideByZeroError(f"cannot invert zero in {self.FIELD.name}")
        return self._unchecked(inv_mod_euclid(self.value, self.MODULUS))

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
        if exponent == 0:
            return self.one()
        if self.value == 0:
            return self.zero()
        # a^(p-1) = 1 for a != 0
        return self._unchecked(pow_mod(self.value, exponent % (self.MODULUS - 1), self.MODULUS))

    # --- Comparison and conversion ---

    def __eq__(self, other):
        if type(other) is type(self):
            return self.value == other.value
        if isinstance(other, (int, np.integer)) and not isinstance(other, bool):
            return self.value == int(other) % self.MODULUS
        return NotImplemented

    def __hash__(self):
        return hash(self.value)

    def __int__(self):
        return self.value

    def __repr__(self):
        return f"{type(self).__name__}({self.value})"


def make_field_type(field: PrimeField, name: Optional[str] = None) -> type:
    """Create a FieldElement subclass bound to `field`."""
    return type(name or field.name, (FieldElement,), {"FIELD": field, "__slots__": ()})


class Fr(FieldElement):
    """BN254 scalar field."""
    FIELD = BN254_SCALAR_FIELD
    __slots__ = ()


class Fq(FieldElement):
    """BN254 base field."""
    FIELD = BN254_BASE_FIELD
    __slots__ = ()


class ToyFr(FieldElement):
    """Scalar field of the toy test curve."""
    FIELD = TOY_SCALAR_FIELD
    __slots__ = ()


class ToyFq(FieldElement):
    """Base field of the toy test curve."""
    FIELD = TOY_BASE_FIELD
    __slots__ = ()


# --- galois Interop ---

def to_gf(field_type: type, elements: Sequence[FieldElement]) -> galois.FieldArray:
    """Pack FieldElements into a galois array of the same field."""
    return field_type.FIELD.gf([int(e) for e in elements])


def from_gf(field_type: type, array: galois.FieldArray) -> List[FieldElement]:
    """Unpack a galois array into FieldElements."""
    return [field_type._unchecked(int(x)) for x in array]


# --- Montgomery Batch Inversion ---

def batch_inverse(values):
    """Montgomery batch inversion for any galois array.

    Converts N field inversions into 3N-3 multiplications + 1 inversion.

    Algorithm:
    1. Forward pass: prefix products cumprods[i] = a[0] * a[1] * ... * a[i]
    2. Single inversion: inv_total = cumprods[N-1]^(-1)
    3. Backward pass: peel individual inverses off the prefix products

    Args:
        values: galois FieldArray to invert

    Returns:
        galois FieldArray where result[i] = values[i]^(-1)

    Raises:
        DivideByZeroError: If any element is zero
    """
    n = len(values)
    if n == 0:
        return values
    if np.any(values == 0):
        raise DivideByZeroError("batch inversion input contains zero")
    if n == 1:
        return values ** -1

    field_type = type(values)

    cumprods = field_type.Zeros(n)
    cumprods[0] = values[0]
    for i in range(1, n):
        cumprods[i] = cumprods[i - 1] * values[i]

    inv_total = cumprods[n - 1] ** -1

    results = field_type.Zeros(n)
    z = inv_total
    for i in range(n - 1, 0, -1):
        results[i] = z * cumprods[i - 1]
        z = z * values[i]
    results[0] = z

    return results


def batch_inverse_elements(elements: Sequence[FieldElement]) -> List[FieldElement]:
    """Batch inversion with a FieldElement list interface."""
    if len(elements) == 0:
        return []
    field_type = type(elements[0])
    return from_gf(field_type, batch_inverse(to_gf(field_type, elements)))


# --- Roots of Unity ---

def root_of_unity(field_type: type, n: int) -> FieldElement:
    """Primitive n-th root of unity: generator^((p-1)/n).

    Raises:
        InvalidParameterError: If n does not divide p - 1
    """
    p = field_type.MODULUS
    if n < 1 or (p - 1) % n != 0:
        raise InvalidParameterError(f"{n} does not divide p - 1 in {field_type.FIELD.name}")
    generator = field_type.FIELD.generator
    if generator is None:
        generator = int(field_type.FIELD.gf.primitive_element)
    return field_type(generator) ** ((p - 1) // n)


def roots_of_unity(field_type: type, n: int) -> List[FieldElement]:
    """The n-element multiplicative subgroup [1, w, w^2, ..., w^(n-1)]."""
    omega = root_of_unity(field_type, n)
    roots = [field_type.one()]
    for _ in range(1, n):
        roots.append(roots[-1] * omega)
    return roots
