"""Example circuits.

multiplication_circuit proves knowledge of r = x * y * z * u with wires
[1, r, x, y, z, u, v1, v2] and constraints
    v1 = x * y
    v2 = z * u
    r  = v1 * v2
All of 1, r, x, y, z, u are public; v1 and v2 are private.
"""

from primitives.field import Fr
from protocol.r1cs import R1CS, Witness, create_r1cs, create_witness

NUM_VARS = 8
NUM_PUBLIC = 6

# Wire indices
ONE, R_OUT, X, Y, Z, U, V1, V2 = range(NUM_VARS)


def _row(index: int) -> list:
    row = [0] * NUM_VARS
    row[index] = 1
    return row


def multiplication_circuit(field: type = Fr) -> R1CS:
    """R1CS for r = x * y * z * u."""
    L = [_row(X), _row(Z), _row(V1)]
    R = [_row(Y), _row(U), _row(V2)]
    O = [_row(V1), _row(V2), _row(R_OUT)]
    return create_r1cs(L, R, O, NUM_PUBLIC, field)


def multiplication_witness(x: int, y: int, z: int, u: int, field: type = Fr) -> Witness:
    """Satisfying witness [1, r, x, y, z, u, x*y, z*u]."""
    v1 = x * y
    v2 = z * u
    return create_witness([1, v1 * v2, x, y, z, u, v1, v2], field)
