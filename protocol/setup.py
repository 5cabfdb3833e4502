"""Groth16 trusted setup.

setup samples the toxic waste (tau, and alpha/beta/gamma/delta for the full
variant), encodes everything the prover and verifier need as group elements,
and lets the secrets go out of scope. No field of the returned CRS holds a
secret scalar.

Proving-key layout (both variants):
    tau_powers_g1/g2  [tau^i]_1, [tau^i]_2 for i = 0..n
    u_g1, v_g1, w_g1  [u_j(tau)]_1, [v_j(tau)]_1, [w_j(tau)]_1 per wire
    v_g2              [v_j(tau)]_2 per wire
    t_g1              [t(tau)]_1
    h_query           [tau^i t(tau) / delta]_1 for i = 0..n-2 (delta = 1 in
                      the simplified variant)
Full variant only:
    alpha_g1, beta_g1, beta_g2, delta_g1, delta_g2
    l_query           [(beta u_j + alpha v_j + w_j)(tau) / delta]_1, private wires
Verifying key (full variant):
    alpha_g1, beta_g2, gamma_g2, delta_g2, e(alpha, beta), and
    ic                [(beta u_j + alpha v_j + w_j)(tau) / gamma]_1, public wires
"""

import secrets
from dataclasses import dataclass
from typing import Any, Optional, Tuple

from primitives.curve import CurvePoint
from primitives.errors import InvalidParameterError
from primitives.group import batch_scalar_mul
from protocol.config import CurveSuite, Groth16Config, Variant, suite_for_field
from protocol.qap import QAP

_SYSTEM_RANDOM = secrets.SystemRandom()


# --- CRS Types ---

@dataclass(frozen=True)
class ProvingKey:
    """Group elements used by prove."""
    tau_powers_g1: Tuple[CurvePoint, ...]
    tau_powers_g2: Tuple[CurvePoint, ...]
    u_g1: Tuple[CurvePoint, ...]
    v_g1: Tuple[CurvePoint, ...]
    w_g1: Tuple[CurvePoint, ...]
    v_g2: Tuple[CurvePoint, ...]
    t_g1: CurvePoint
    h_query: Tuple[CurvePoint, ...]
    alpha_g1: Optional[CurvePoint] = None
    beta_g1: Optional[CurvePoint] = None
    beta_g2: Optional[CurvePoint] = None
    delta_g1: Optional[CurvePoint] = None
    delta_g2: Optional[CurvePoint] = None
    l_query: Tuple[CurvePoint, ...] = ()


@dataclass(frozen=True)
class VerifyingKey:
    """Group elements used by verify.

    Attributes:
        g1: G1 generator
        g2: G2 generator
        num_public: Public wires, constant wire included
        alpha_g1: [alpha]_1 (full variant)
        beta_g2: [beta]_2 (full variant)
        gamma_g2: [gamma]_2 (full variant)
        delta_g2: [delta]_2 (full variant)
        alpha_beta: e([alpha]_1, [beta]_2) (full variant)
        ic: Public-input commitments (full variant)
    """
    g1: CurvePoint
    g2: CurvePoint
    num_public: int
    alpha_g1: Optional[CurvePoint] = None
    beta_g2: Optional[CurvePoint] = None
    gamma_g2: Optional[CurvePoint] = None
    delta_g2: Optional[CurvePoint] = None
    alpha_beta: Any = None
    ic: Tuple[CurvePoint, ...] = ()


@dataclass(frozen=True)
class CRS:
    """Common reference string of one circuit."""
    suite: CurveSuite
    variant: Variant
    proving_key: ProvingKey
    verifying_key: VerifyingKey

    @property
    def tau_powers_g1(self) -> Tuple[CurvePoint, ...]:
        return self.proving_key.tau_powers_g1

    @property
    def tau_powers_g2(self) -> Tuple[CurvePoint, ...]:
        return self.proving_key.tau_powers_g2


# --- Setup ---

def _resolve_suite(qap: QAP, config: Groth16Config) -> CurveSuite:
    if config.domain_kind is not None and config.domain_kind is not qap.domain_kind:
        raise InvalidParameterError(
            f"config expects a {config.domain_kind.value} domain, "
            f"QAP was built over {qap.domain_kind.value}"
        )
    suite = config.suite or suite_for_field(qap.field)
    if suite.scalar_field is not qap.field:
        raise InvalidParameterError(
            f"QAP over {qap.field.__name__} cannot use suite {suite.name} "
            f"(scalar field {suite.scalar_field.__name__})"
        )
    return suite


def _sample_tau(qap: QAP, rng):
    """tau in [1, r) with t(tau) != 0."""
    while True:
        tau = qap.field.random_nonzero(rng)
        if not qap.t.evaluate(tau).is_zero():
            return tau


def setup(qap: QAP, rng=None, config: Optional[Groth16Config] = None) -> CRS:
    """Run the trusted setup for qap.

    Args:
        qap: Circuit as a QAP
        rng: Randomness source with randrange (default: secrets.SystemRandom)
        config: Suite, variant and worker count (default: full Groth16 on the
            suite matching the QAP's field, single-threaded)

    Returns:
        CRS holding only group elements

    Raises:
        InvalidParameterError: If no suite matches the QAP's field, or the
            QAP's domain differs from config.domain_kind
    """
    config = config or Groth16Config()
    rng = rng or _SYSTEM_RANDOM
    suite = _resolve_suite(qap, config)
    F = qap.field
    g1 = suite.g1.generator()
    g2 = suite.g2.generator()
    workers = config.workers

    def enc1(scalars):
        return tuple(batch_scalar_mul(g1, scalars, workers))

    def enc2(scalars):
        return tuple(batch_scalar_mul(g2, scalars, workers))

    tau = _sample_tau(qap, rng)
    n = qap.degree

    powers = [F.one()]
    for _ in range(n):
        powers.append(powers[-1] * tau)
    u_tau = [p.evaluate(tau) for p in qap.u]
    v_tau = [p.evaluate(tau) for p in qap.v]
    w_tau = [p.evaluate(tau) for p in qap.w]
    t_tau = qap.t.evaluate(tau)

    common = dict(
        tau_powers_g1=enc1(powers),
        tau_powers_g2=enc2(powers),
        u_g1=enc1(u_tau),
        v_g1=enc1(v_tau),
        w_g1=enc1(w_tau),
        v_g2=enc2(v_tau),
        t_g1=enc1([t_tau])[0],
    )
    h_len = max(n - 1, 0)

    if config.variant is Variant.SIMPLIFIED:
        proving_key = ProvingKey(h_query=enc1([powers[i] * t_tau for i in range(h_len)]), **common)
        verifying_key = VerifyingKey(g1=g1, g2=g2, num_public=qap.num_public)
        return CRS(suite, config.variant, proving_key, verifying_key)

    alpha = F.random_nonzero(rng)
    beta = F.random_nonzero(rng)
    gamma = F.random_nonzero(rng)
    delta = F.random_nonzero(rng)
    gamma_inv = gamma.inv()
    delta_inv = delta.inv()

    k = [beta * u + alpha * v + w for u, v, w in zip(u_tau, v_tau, w_tau)]
    ic = enc1([kj * gamma_inv for kj in k[: qap.num_public]])
    l_query = enc1([kj * delta_inv for kj in k[qap.num_public :]])
    h_query = enc1([powers[i] * t_tau * delta_inv for i in range(h_len)])

    alpha_g1, beta_g1, delta_g1 = enc1([alpha, beta, delta])
    beta_g2, gamma_g2, delta_g2 = enc2([beta, gamma, delta])

    proving_key = ProvingKey(
        h_query=h_query,
        alpha_g1=alpha_g1,
        beta_g1=beta_g1,
        beta_g2=beta_g2,
        delta_g1=delta_g1,
        delta_g2=delta_g2,
        l_query=l_query,
        **common,
    )
    verifying_key = VerifyingKey(
        g1=g1,
        g2=g2,
        num_public=qap.num_public,
        alpha_g1=alpha_g1,
        beta_g2=beta_g2,
        gamma_g2=gamma_g2,
        delta_g2=delta_g2,
        alpha_beta=suite.pairing.pair(alpha_g1, beta_g2),
        ic=ic,
    )
    return CRS(suite, config.variant, proving_key, verifying_key)
