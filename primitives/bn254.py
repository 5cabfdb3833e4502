"""BN254 (alt_bn128) curve parameters and the G1/G2 point classes.

G1: y^2 = x^3 + 3 over Fq.
G2: y^2 = x^3 + 3/(9 + u) over Fq2 (the sextic D-twist).
Both groups have prime order r, the modulus of Fr.
"""

from primitives.curve import CurvePoint
from primitives.extension_field import Fq2
from primitives.field import BN254_SCALAR_FIELD, Fq, Fr

# --- Parameters ---

CURVE_ORDER = BN254_SCALAR_FIELD.modulus
FIELD_MODULUS = Fq.MODULUS

B1 = Fq(3)
B2 = Fq2(3, 0) / Fq2(9, 1)

G1_GENERATOR = (Fq(1), Fq(2))

G2_GENERATOR = (
    Fq2(
        10857046999023057135944570762232829481370756359578518086990519993285655852781,
        11559732032986387107991004021392285783925812861821192530917403151452391805634,
    ),
    Fq2(
        8495653923123431417604973247489272438418190587263600148770280649306958101930,
        4082367875863433681332203403145435568316851327593401208105741076214120093531,
    ),
)


# --- Groups ---

class G1Point(CurvePoint):
    """BN254 G1 point."""
    FIELD = Fq
    B = B1
    GENERATOR = G1_GENERATOR
    ORDER = CURVE_ORDER
    SCALAR_FIELD = Fr
    __slots__ = ()


class G2Point(CurvePoint):
    """BN254 G2 point on the twist."""
    FIELD = Fq2
    B = B2
    GENERATOR = G2_GENERATOR
    ORDER = CURVE_ORDER
    SCALAR_FIELD = Fr
    __slots__ = ()
