"""Primitives - Prime fields, polynomials, elliptic curves and pairings."""

from primitives.curve import CurvePoint
from primitives.errors import (
    AlgebraError,
    DimensionMismatchError,
    DivideByZeroError,
    EmptyInputError,
    InvalidParameterError,
    InvalidWitnessError,
    NonExactDivisionError,
)
from primitives.extension_field import Fq2, QuadraticExtensionElement, ToyFq2
from primitives.field import (
    FieldElement,
    Fq,
    Fr,
    PrimeField,
    ToyFq,
    ToyFr,
    batch_inverse,
    make_field_type,
    root_of_unity,
    roots_of_unity,
)
from primitives.bn254 import G1Point, G2Point
from primitives.group import (
    GroupElement,
    batch_scalar_mul,
    multi_scalar_mul,
    multi_scalar_mul_parallel,
    scalar_mul,
    scalar_mul_wnaf,
    wnaf_encode,
)
from primitives.ntt import NTT
from primitives.pairing import DiscreteLogPairing, Pairing
from primitives.polynomial import Polynomial
from primitives.toy_curve import ToyG1Point, ToyG2Point

__all__ = [
    # Errors
    "AlgebraError",
    "DivideByZeroError",
    "InvalidWitnessError",
    "DimensionMismatchError",
    "NonExactDivisionError",
    "EmptyInputError",
    "InvalidParameterError",
    # Field
    "PrimeField",
    "FieldElement",
    "Fr",
    "Fq",
    "ToyFr",
    "ToyFq",
    "make_field_type",
    "batch_inverse",
    "root_of_unity",
    "roots_of_unity",
    # NTT
    "NTT",
    # Polynomial
    "Polynomial",
    # Extension field
    "QuadraticExtensionElement",
    "Fq2",
    "ToyFq2",
    # Groups
    "GroupElement",
    "CurvePoint",
    "G1Point",
    "G2Point",
    "ToyG1Point",
    "ToyG2Point",
    "scalar_mul",
    "scalar_mul_wnaf",
    "wnaf_encode",
    "multi_scalar_mul",
    "multi_scalar_mul_parallel",
    "batch_scalar_mul",
    # Pairing
    "Pairing",
    "DiscreteLogPairing",
]
