"""Small supersingular curve with an exactly bilinear test pairing.

E: y^2 = x^3 + 3 over Fq with q = 1201307. Since q = 11 mod 12 the curve is
supersingular with #E(Fq) = q + 1 = 12 * r, r = 100109 prime, and embedding
degree 2, so G1, G2 and GT all sit over Fq or Fq2 = Fq[u]/(u^2 + 1).

G2 is the image of G1 under the distortion map (x, y) -> (zeta x, y), with
zeta = (-1 + sqrt(-3)) / 2 a primitive cube root of unity in Fq2. The two
groups are independent, which keeps the pairing non-degenerate.

r is small enough that discrete logarithms are instant, which is what lets
DiscreteLogPairing stand in for a real pairing. Nothing built on this curve
is secure.
"""

from primitives.curve import CurvePoint
from primitives.extension_field import ToyFq2
from primitives.field import TOY_SCALAR_FIELD, ToyFq, ToyFr

# --- Parameters ---

TOY_CURVE_ORDER = TOY_SCALAR_FIELD.modulus
TOY_COFACTOR = 12

TOY_B = 3

TOY_G1_GENERATOR = (ToyFq(97523), ToyFq(158569))

TOY_G2_GENERATOR = (ToyFq2(551892, 1182025), ToyFq2(158569, 0))

TOY_GT_GENERATOR = ToyFq2(567786, 425646)
"""Generator of the order-r subgroup of ToyFq2*: (2 + u)^((q - 1) * 12)."""


# --- Groups ---

class ToyG1Point(CurvePoint):
    """Order-r subgroup of E(Fq)."""
    FIELD = ToyFq
    B = ToyFq(TOY_B)
    GENERATOR = TOY_G1_GENERATOR
    ORDER = TOY_CURVE_ORDER
    SCALAR_FIELD = ToyFr
    __slots__ = ()


class ToyG2Point(CurvePoint):
    """Distortion image of ToyG1Point inside E(Fq2)."""
    FIELD = ToyFq2
    B = ToyFq2(TOY_B, 0)
    GENERATOR = TOY_G2_GENERATOR
    ORDER = TOY_CURVE_ORDER
    SCALAR_FIELD = ToyFr
    __slots__ = ()
