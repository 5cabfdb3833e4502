"""Curve suites and Groth16 run configuration.

A CurveSuite bundles everything the protocol needs from the algebra layer:
the scalar field the QAP lives in, the two source groups and a pairing.
"""

from dataclasses import dataclass
from enum import Enum
from functools import cached_property
from typing import Callable, Dict, Optional

from primitives.bn254 import G1Point, G2Point
from primitives.errors import InvalidParameterError
from primitives.field import Fr, ToyFr
from primitives.pairing import DiscreteLogPairing, Pairing
from primitives.toy_curve import TOY_GT_GENERATOR, ToyG1Point, ToyG2Point


class Variant(Enum):
    """Groth16 flavour.

    SIMPLIFIED: no alpha/beta/gamma/delta and no blinding; checks
        e(A, B) == e(C, g2). Neither zero-knowledge nor bound to the public
        inputs.
    FULL: the complete protocol with blinding and public-input binding.
    """
    SIMPLIFIED = "simplified"
    FULL = "full"


class DomainKind(Enum):
    """Evaluation domain of the QAP."""
    INTEGERS = "integers"
    ROOTS_OF_UNITY = "roots_of_unity"


@dataclass(frozen=True)
class CurveSuite:
    """Scalar field, source groups and pairing of one curve.

    Attributes:
        name: Registry key, also written into serialized proofs
        scalar_field: FieldElement subclass of integers mod the group order
        g1: CurvePoint subclass for G1
        g2: CurvePoint subclass for G2
        pairing_factory: Zero-argument callable building the pairing
    """
    name: str
    scalar_field: type
    g1: type
    g2: type
    pairing_factory: Callable[[], Pairing]

    @cached_property
    def pairing(self) -> Pairing:
        return self.pairing_factory()


def _bn254_pairing() -> Pairing:
    # Imported lazily: building Fq12 constants is not free
    from primitives.bn254_pairing import BN254Pairing
    return BN254Pairing()


BN254_SUITE = CurveSuite(
    name="bn254",
    scalar_field=Fr,
    g1=G1Point,
    g2=G2Point,
    pairing_factory=_bn254_pairing,
)

TOY_SUITE = CurveSuite(
    name="toy",
    scalar_field=ToyFr,
    g1=ToyG1Point,
    g2=ToyG2Point,
    pairing_factory=lambda: DiscreteLogPairing(ToyG1Point, ToyG2Point, TOY_GT_GENERATOR),
)

SUITES: Dict[str, CurveSuite] = {s.name: s for s in (BN254_SUITE, TOY_SUITE)}


def suite_for_field(field_type: type) -> CurveSuite:
    """Suite whose scalar field is field_type.

    Raises:
        InvalidParameterError: If no registered suite uses that field
    """
    for suite in SUITES.values():
        if suite.scalar_field is field_type:
            return suite
    raise InvalidParameterError(f"no curve suite has scalar field {field_type.__name__}")


@dataclass(frozen=True)
class Groth16Config:
    """Knobs consumed by setup.

    Attributes:
        suite: Curve suite; None picks the one matching the QAP's field
        variant: Protocol flavour
        domain_kind: Domain the QAP must be built over; None accepts either
        workers: Thread count for fixed-base CRS generation
    """
    suite: Optional[CurveSuite] = None
    variant: Variant = Variant.FULL
    domain_kind: Optional[DomainKind] = None
    workers: int = 1

    def __post_init__(self):
        if self.workers < 1:
            raise InvalidParameterError(f"workers must be at least 1, got {self.workers}")
