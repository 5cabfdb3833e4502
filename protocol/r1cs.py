"""Rank-1 constraint systems.

An R1CS is three matrices L, R, O of shape num_constraints x num_vars over a
prime field. A witness w (with w[0] = 1, the constant wire) satisfies it when
(L w)[i] * (R w)[i] == (O w)[i] for every row i.

Wire layout: [1, public_1, ..., public_{num_public - 1}, private...].
"""

from dataclasses import dataclass
from typing import Sequence, Tuple

from primitives.errors import DimensionMismatchError, InvalidParameterError, InvalidWitnessError
from primitives.field import FieldElement

Matrix = Tuple[Tuple[FieldElement, ...], ...]


# --- Data Types ---

@dataclass(frozen=True)
class R1CS:
    """Constraint matrices and wire counts.

    Attributes:
        L: Left matrix, one row per constraint
        R: Right matrix
        O: Output matrix
        num_vars: Number of wires, including the constant wire
        num_public: Number of public wires, including the constant wire
        field: FieldElement subclass of every entry
    """
    L: Matrix
    R: Matrix
    O: Matrix
    num_vars: int
    num_public: int
    field: type

    def __post_init__(self):
        for name, matrix in (("L", self.L), ("R", self.R), ("O", self.O)):
            if len(matrix) != self.num_constraints:
                raise DimensionMismatchError(
                    f"{name} has {len(matrix)} rows, expected {self.num_constraints}"
                )
            for i, row in enumerate(matrix):
                if len(row) != self.num_vars:
                    raise DimensionMismatchError(
                        f"{name} row {i} has {len(row)} entries, expected {self.num_vars}"
                    )
        if not 1 <= self.num_public <= self.num_vars:
            raise InvalidParameterError(
                f"num_public must be in [1, {self.num_vars}], got {self.num_public}"
            )

    @property
    def num_constraints(self) -> int:
        return len(self.L)

    def public_inputs(self, witness: "Witness") -> Tuple[FieldElement, ...]:
        """Public wire values, excluding the constant wire."""
        return tuple(witness.values[1 : self.num_public])


@dataclass(frozen=True)
class Witness:
    """Wire assignment; values[0] is the constant wire."""
    values: Tuple[FieldElement, ...]

    def __len__(self) -> int:
        return len(self.values)

    def __getitem__(self, i):
        return self.values[i]

    def __iter__(self):
        return iter(self.values)

    def replace(self, index: int, value) -> "Witness":
        """Copy with values[index] set to value (coerced into the field)."""
        values = list(self.values)
        values[index] = type(values[index])(value)
        return Witness(tuple(values))


# --- Entry Points ---

def _to_matrix(rows: Sequence[Sequence], field: type) -> Matrix:
    return tuple(tuple(v if type(v) is field else field(v) for v in row) for row in rows)


def create_r1cs(L, R, O, num_public: int, field: type) -> R1CS:
    """Build an R1CS from nested sequences of ints or FieldElements.

    Raises:
        DimensionMismatchError: If the matrices disagree in shape
        InvalidParameterError: If num_public is outside [1, num_vars]
    """
    if not L:
        raise DimensionMismatchError("R1CS needs at least one constraint")
    num_vars = len(L[0])
    return R1CS(
        L=_to_matrix(L, field),
        R=_to_matrix(R, field),
        O=_to_matrix(O, field),
        num_vars=num_vars,
        num_public=num_public,
        field=field,
    )


def create_witness(values: Sequence, field: type) -> Witness:
    """Wrap wire values, coercing ints into field."""
    return Witness(tuple(v if type(v) is field else field(v) for v in values))


def matrix_vector_product(matrix: Matrix, vector: Sequence[FieldElement]) -> Tuple[FieldElement, ...]:
    """Row-wise dot products over the field."""
    if not matrix:
        return ()
    field = type(vector[0])
    p = field.MODULUS
    ws = [v.value for v in vector]
    out = []
    for row in matrix:
        if len(row) != len(ws):
            raise DimensionMismatchError(f"row of length {len(row)} times vector of length {len(ws)}")
        out.append(field._unchecked(sum(a.value * b for a, b in zip(row, ws)) % p))
    return tuple(out)


def is_satisfied(r1cs: R1CS, witness: Witness) -> bool:
    """True iff (L w) * (R w) == O w row by row.

    Raises:
        DimensionMismatchError: If len(witness) != num_vars
        InvalidWitnessError: If witness[0] != 1
    """
    if len(witness) != r1cs.num_vars:
        raise DimensionMismatchError(
            f"witness has {len(witness)} values, R1CS has {r1cs.num_vars} variables"
        )
    if not witness[0].is_one():
        raise InvalidWitnessError(f"witness[0] must be 1, got {witness[0]!r}")

    lw = matrix_vector_product(r1cs.L, witness.values)
    rw = matrix_vector_product(r1cs.R, witness.values)
    ow = matrix_vector_product(r1cs.O, witness.values)
    return all(a * b == c for a, b, c in zip(lw, rw, ow))
