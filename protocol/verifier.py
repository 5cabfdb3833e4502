"""Groth16 verification.

Simplified variant:  e(A, B) == e(C, g2)
Full variant:        e(A, B) == e(alpha, beta) * e(IC, gamma) * e(C, delta)
                     with IC = ic_0 + sum_j x_j ic_j over the public inputs x.

The full check runs as one multi-pairing of
    e(-A, B) * e(IC, gamma) * e(C, delta)
compared against e(alpha, beta)^-1, so implementations that share the final
exponentiation pay for it once.
"""

from typing import Sequence

from primitives.curve import CurvePoint
from primitives.errors import DimensionMismatchError
from primitives.group import multi_scalar_mul
from protocol.config import Variant
from protocol.proof import Proof
from protocol.setup import CRS


# --- Main Entry Point ---

def verify(crs: CRS, proof: Proof, public_inputs: Sequence, verbose: bool = False) -> bool:
    """Check a Groth16 proof.

    Args:
        crs: Reference string the proof was produced against
        proof: The proof to check
        public_inputs: Public wire values excluding the constant wire
            (num_public - 1 values, ints or scalar-field elements)
        verbose: Print the failed check before returning False

    Returns:
        True if the proof is valid, False otherwise

    Raises:
        DimensionMismatchError: If public_inputs has the wrong length
    """
    vk = crs.verifying_key
    suite = crs.suite
    F = suite.scalar_field

    expected = vk.num_public - 1
    if len(public_inputs) != expected:
        raise DimensionMismatchError(
            f"expected {expected} public inputs, got {len(public_inputs)}"
        )
    xs = [x if type(x) is F else F(x) for x in public_inputs]

    # --- Proof well-formedness ---
    for name, point, group in (("A", proof.A, suite.g1), ("B", proof.B, suite.g2), ("C", proof.C, suite.g1)):
        if not _in_group(point, group):
            if verbose:
                print(f"ERROR: Proof element {name} is not a point of {group.__name__}")
            return False

    pairing = suite.pairing

    if crs.variant is Variant.SIMPLIFIED:
        # Public inputs are not bound in this variant
        if pairing.pair(proof.A, proof.B) != pairing.pair(proof.C, vk.g2):
            if verbose:
                print("ERROR: Pairing check e(A, B) == e(C, g2) failed")
            return False
        return True

    ic = multi_scalar_mul(list(vk.ic), [F.one()] + xs)
    product = pairing.multi_pair([
        (proof.A.negate(), proof.B),
        (ic, vk.gamma_g2),
        (proof.C, vk.delta_g2),
    ])
    if product * vk.alpha_beta != pairing.gt_one():
        if verbose:
            print("ERROR: Pairing check e(A, B) == e(alpha, beta) e(IC, gamma) e(C, delta) failed")
        return False
    return True


def _in_group(point: CurvePoint, group: type) -> bool:
    return type(point) is group and point.is_in_subgroup()
