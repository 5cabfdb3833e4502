"""Groth16 prover."""

import secrets
from typing import Sequence

from primitives.curve import CurvePoint
from primitives.errors import DimensionMismatchError
from primitives.group import multi_scalar_mul
from protocol.config import Variant
from protocol.proof import Proof
from protocol.qap import QAP, compute_h
from protocol.r1cs import Witness
from protocol.setup import CRS

_SYSTEM_RANDOM = secrets.SystemRandom()


def _msm(points: Sequence[CurvePoint], scalars: Sequence, group: type) -> CurvePoint:
    """multi_scalar_mul that returns the identity for empty input."""
    if len(points) == 0:
        return group.identity()
    return multi_scalar_mul(points, scalars)


def prove(crs: CRS, qap: QAP, witness: Witness, rng=None) -> Proof:
    """Produce a proof that witness satisfies qap.

    Args:
        crs: Output of setup for this QAP
        qap: The circuit
        witness: Full wire assignment, constant wire first
        rng: Source of the blinding scalars r, s (full variant only)

    Returns:
        Proof (A, B, C)

    Raises:
        DimensionMismatchError: If the witness or CRS do not match the QAP
        InvalidWitnessError: If witness[0] != 1
        NonExactDivisionError: If the witness does not satisfy the circuit
    """
    pk = crs.proving_key
    G1, G2 = crs.suite.g1, crs.suite.g2
    if len(pk.u_g1) != qap.num_vars:
        raise DimensionMismatchError(
            f"CRS encodes {len(pk.u_g1)} wires, QAP has {qap.num_vars}"
        )

    # --- Quotient ---
    h = compute_h(qap, witness)
    if len(h.coeffs) > len(pk.h_query) and not h.is_zero():
        raise DimensionMismatchError(
            f"quotient has {len(h.coeffs)} coefficients, CRS h-query has {len(pk.h_query)}"
        )
    h_coeffs = h.coeffs[: len(pk.h_query)]
    h_term = _msm(pk.h_query[: len(h_coeffs)], h_coeffs, G1)

    w = witness.values
    a_sum = _msm(pk.u_g1, w, G1)
    b_sum = _msm(pk.v_g2, w, G2)

    if crs.variant is Variant.SIMPLIFIED:
        # C = [W(tau)]_1 + [h(tau) t(tau)]_1
        c = _msm(pk.w_g1, w, G1).add(h_term)
        return Proof(A=a_sum, B=b_sum, C=c)

    # --- Full Groth16 with blinding ---
    rng = rng or _SYSTEM_RANDOM
    F = qap.field
    r = F.random(rng)
    s = F.random(rng)

    a = pk.alpha_g1.add(a_sum).add(pk.delta_g1 * r)
    b = pk.beta_g2.add(b_sum).add(pk.delta_g2 * s)
    b_g1 = pk.beta_g1.add(_msm(pk.v_g1, w, G1)).add(pk.delta_g1 * s)

    private = _msm(pk.l_query, w[qap.num_public :], G1)
    c = (
        private.add(h_term)
        .add(a * s)
        .add(b_g1 * r)
        .add(pk.delta_g1 * (-(r * s)))
    )
    return Proof(A=a, B=b, C=c)
