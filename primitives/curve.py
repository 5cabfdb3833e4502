"""Short Weierstrass curves y^2 = x^3 + b in Jacobian coordinates.

A Jacobian triple (X, Y, Z) represents the affine point (X/Z^2, Y/Z^3).
The point at infinity has Z = 0 and is stored as (1, 1, 0). Coordinates may
live in a prime field (G1) or a quadratic extension (G2); the formulas only
need ring operations plus one inversion in to_affine.

Formulas (a = 0):
    double: S = 4XY^2, M = 3X^2, X' = M^2 - 2S, Y' = M(S - X') - 8Y^4, Z' = 2YZ
    add:    U1 = X1 Z2^2, U2 = X2 Z1^2, S1 = Y1 Z2^3, S2 = Y2 Z1^3,
            H = U2 - U1, I = (2H)^2, J = H I, r = 2(S2 - S1), V = U1 I,
            X3 = r^2 - J - 2V, Y3 = r(V - X3) - 2 S1 J,
            Z3 = ((Z1 + Z2)^2 - Z1^2 - Z2^2) H
"""

from typing import Optional, Tuple

from primitives.errors import InvalidParameterError
from primitives.group import GroupElement, scalar_mul


class CurvePoint(GroupElement):
    """Jacobian point on y^2 = x^3 + B over FIELD.

    Subclasses bind:
        FIELD: coordinate field class (FieldElement or extension subclass)
        B: curve coefficient, an element of FIELD
        GENERATOR: affine (x, y) of the subgroup generator
        ORDER: prime order r of the generated subgroup
        SCALAR_FIELD: FieldElement subclass of integers mod r
    """

    FIELD: type
    B: object
    GENERATOR: Tuple[object, object]
    ORDER: int
    SCALAR_FIELD: type

    __slots__ = ("x", "y", "z")

    def __init__(self, x, y, z=None) -> None:
        F = self.FIELD
        self.x = x if type(x) is F else F(x)
        self.y = y if type(y) is F else F(y)
        self.z = F.one() if z is None else (z if type(z) is F else F(z))

    # --- Constructors ---

    @classmethod
    def identity(cls) -> "CurvePoint":
        return cls(cls.FIELD.one(), cls.FIELD.one(), cls.FIELD.zero())

    @classmethod
    def generator(cls) -> "CurvePoint":
        return cls.from_affine(*cls.GENERATOR)

    @classmethod
    def from_affine(cls, x, y, check: bool = False) -> "CurvePoint":
        """Lift affine (x, y) with Z = 1.

        Raises:
            InvalidParameterError: If check is set and the point is off the curve
        """
        point = cls(x, y, cls.FIELD.one())
        if check and not point.is_on_curve():
            raise InvalidParameterError(f"({x}, {y}) is not on {cls.__name__}")
        return point

    # --- Predicates ---

    def is_identity(self) -> bool:
        return self.z.is_zero()

    def is_on_curve(self) -> bool:
        """Y^2 == X^3 + B Z^6 (the identity is on the curve)."""
        if self.is_identity():
            return True
        z2 = self.z * self.z
        z6 = z2 * z2 * z2
        return self.y * self.y == self.x * self.x * self.x + self.B * z6

    def is_in_subgroup(self) -> bool:
        """On the curve and killed by the subgroup order."""
        return self.is_on_curve() and scalar_mul(self, self.ORDER).is_identity()

    def to_affine(self) -> Optional[Tuple[object, object]]:
        """(X/Z^2, Y/Z^3), or None for the identity."""
        if self.is_identity():
            return None
        z_inv = self.z.inv()
        z_inv2 = z_inv * z_inv
        return (self.x * z_inv2, self.y * z_inv2 * z_inv)

    # --- Group Law ---

    def negate(self) -> "CurvePoint":
        return type(self)(self.x, -self.y, self.z)

    def double(self) -> "CurvePoint":
        if self.is_identity() or self.y.is_zero():
            return self.identity()
        x, y, z = self.x, self.y, self.z
        yy = y * y
        s = x * yy * 4
        m = x * x * 3
        x3 = m * m - s * 2
        y3 = m * (s - x3) - yy * yy * 8
        z3 = y * z * 2
        return type(self)(x3, y3, z3)

    def add(self, other: "CurvePoint") -> "CurvePoint":
        if type(other) is not type(self):
            raise TypeError(f"cannot add {type(self).__name__} and {type(other).__name__}")
        if self.is_identity():
            return other
        if other.is_identity():
            return self

        z1z1 = self.z * self.z
        z2z2 = other.z * other.z
        u1 = self.x * z2z2
        u2 = other.x * z1z1
        s1 = self.y * other.z * z2z2
        s2 = other.y * self.z * z1z1

        if u1 == u2:
            if s1 == s2:
                return self.double()
            return self.identity()

        h = u2 - u1
        i = (h * 2) * (h * 2)
        j = h * i
        r = (s2 - s1) * 2
        v = u1 * i
        x3 = r * r - j - v * 2
        y3 = r * (v - x3) - s1 * j * 2
        zz = self.z + other.z
        z3 = (zz * zz - z1z1 - z2z2) * h
        return type(self)(x3, y3, z3)

    # --- Comparison ---

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        if self.is_identity() or other.is_identity():
            return self.is_identity() and other.is_identity()
        # X1 Z2^2 == X2 Z1^2 and Y1 Z2^3 == Y2 Z1^3
        z1z1 = self.z * self.z
        z2z2 = other.z * other.z
        if self.x * z2z2 != other.x * z1z1:
            return False
        return self.y * other.z * z2z2 == other.y * self.z * z1z1

    def __hash__(self):
        return hash((type(self).__name__, self.to_affine()))

    def __repr__(self):
        affine = self.to_affine()
        if affine is None:
            return f"{type(self).__name__}(infinity)"
        return f"{type(self).__name__}({affine[0]!r}, {affine[1]!r})"
