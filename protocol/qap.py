"""R1CS to QAP reduction.

Each R1CS column j becomes three polynomials u_j, v_j, w_j interpolating the
column of L, R, O over an evaluation domain of one point per constraint. With
U = sum w_j u_j (and V, W likewise), the witness satisfies the R1CS exactly
when the target polynomial t(x) = prod(x - d_i) divides U V - W.
"""

from dataclasses import dataclass
from typing import Tuple

from primitives.errors import DimensionMismatchError, InvalidWitnessError, NonExactDivisionError
from primitives.field import FieldElement, from_gf
from primitives.ntt import NTT, next_power_of_two
from primitives.polynomial import Polynomial
from protocol.config import DomainKind
from protocol.r1cs import R1CS, Witness


@dataclass(frozen=True)
class QAP:
    """Quadratic arithmetic program.

    Attributes:
        domain: Evaluation points, one per (possibly padded) constraint
        t: Target polynomial, zero exactly on the domain
        u: Per-wire left polynomials
        v: Per-wire right polynomials
        w: Per-wire output polynomials
        num_vars: Number of wires (constant wire included)
        num_public: Number of public wires (constant wire included)
        field: Coefficient field
        domain_kind: How the domain was chosen
    """
    domain: Tuple[FieldElement, ...]
    t: Polynomial
    u: Tuple[Polynomial, ...]
    v: Tuple[Polynomial, ...]
    w: Tuple[Polynomial, ...]
    num_vars: int
    num_public: int
    field: type
    domain_kind: DomainKind = DomainKind.INTEGERS

    @property
    def degree(self) -> int:
        """Size of the domain (= deg t)."""
        return len(self.domain)

    def _check_witness(self, witness: Witness) -> None:
        if len(witness) != self.num_vars:
            raise DimensionMismatchError(
                f"witness has {len(witness)} values, QAP has {self.num_vars} variables"
            )
        if not witness[0].is_one():
            raise InvalidWitnessError(f"witness[0] must be 1, got {witness[0]!r}")

    def combine(self, witness: Witness) -> Tuple[Polynomial, Polynomial, Polynomial]:
        """(U, V, W) = witness-weighted sums of u_j, v_j, w_j."""
        self._check_witness(witness)
        return (
            _weighted_sum(self.u, witness, self.field),
            _weighted_sum(self.v, witness, self.field),
            _weighted_sum(self.w, witness, self.field),
        )


def _weighted_sum(polys, witness: Witness, field: type) -> Polynomial:
    acc = Polynomial.zero(field)
    for poly, coeff in zip(polys, witness):
        if not coeff.is_zero() and not poly.is_zero():
            acc = acc + poly * coeff
    return acc


# --- Reduction ---

def r1cs_to_qap(r1cs: R1CS, domain_kind: DomainKind = DomainKind.INTEGERS) -> QAP:
    """Interpolate every column of L, R, O over the chosen domain.

    INTEGERS uses the points 1..n. ROOTS_OF_UNITY pads the system with empty
    constraints up to a power of two n and uses the n-th roots of unity, so
    that t(x) = x^n - 1 and columns come out of one inverse NTT each.

    Raises:
        InvalidParameterError: If the field lacks the required roots of unity
    """
    field = r1cs.field
    n = r1cs.num_constraints

    if domain_kind is DomainKind.ROOTS_OF_UNITY:
        size = next_power_of_two(n)
        engine = NTT(field, size)
        domain = tuple(engine.domain())
        t = Polynomial.monomial(size, field) - Polynomial.one(field)
        pad = [field.zero()] * (size - n)

        def column(matrix, j):
            evals = [matrix[i][j] for i in range(n)] + pad
            coeffs = engine.intt(field.FIELD.gf([e.value for e in evals]))
            return Polynomial(from_gf(field, coeffs), field)
    else:
        domain = tuple(field(i) for i in range(1, n + 1))
        t = Polynomial.vanishing(domain, field)

        def column(matrix, j):
            return Polynomial.interpolate(domain, [matrix[i][j] for i in range(n)], field)

    u, v, w = [], [], []
    for j in range(r1cs.num_vars):
        u.append(column(r1cs.L, j))
        v.append(column(r1cs.R, j))
        w.append(column(r1cs.O, j))

    return QAP(
        domain=domain,
        t=t,
        u=tuple(u),
        v=tuple(v),
        w=tuple(w),
        num_vars=r1cs.num_vars,
        num_public=r1cs.num_public,
        field=field,
        domain_kind=domain_kind,
    )


# --- Witness Evaluation ---

def evaluate_qap(qap: QAP, witness: Witness, x) -> Tuple[FieldElement, FieldElement, FieldElement]:
    """(sum w_j u_j(x), sum w_j v_j(x), sum w_j w_j(x))."""
    qap._check_witness(witness)
    x = x if type(x) is qap.field else qap.field(x)
    zero = qap.field.zero()
    a, b, c = zero, zero, zero
    for j, coeff in enumerate(witness):
        if coeff.is_zero():
            continue
        a = a + coeff * qap.u[j].evaluate(x)
        b = b + coeff * qap.v[j].evaluate(x)
        c = c + coeff * qap.w[j].evaluate(x)
    return a, b, c


def compute_h(qap: QAP, witness: Witness) -> Polynomial:
    """h = (U V - W) / t.

    Raises:
        DimensionMismatchError: If the witness length is wrong
        InvalidWitnessError: If witness[0] != 1
        NonExactDivisionError: If t does not divide U V - W, i.e. the witness
            does not satisfy the underlying R1CS
    """
    U, V, W = qap.combine(witness)
    return Polynomial.exact_divide(U * V - W, qap.t)


def is_satisfied_qap(qap: QAP, witness: Witness) -> bool:
    """compute_h succeeds."""
    try:
        compute_h(qap, witness)
    except NonExactDivisionError:
        return False
    return True
