"""Tests for R1CS construction and satisfaction."""

import pytest

from primitives.errors import DimensionMismatchError, InvalidParameterError, InvalidWitnessError
from primitives.field import Fr, ToyFr
from protocol.circuits import NUM_PUBLIC, NUM_VARS, R_OUT, multiplication_circuit, multiplication_witness
from protocol.r1cs import create_r1cs, create_witness, is_satisfied, matrix_vector_product


class TestMultiplicationCircuit:
    """r = x * y * z * u with x=3, y=5, z=7, u=11."""

    @pytest.mark.parametrize("field", [Fr, ToyFr])
    def test_witness_values(self, field) -> None:
        w = multiplication_witness(3, 5, 7, 11, field)
        assert [v.value for v in w] == [1, 1155, 3, 5, 7, 11, 15, 77]

    @pytest.mark.parametrize("field", [Fr, ToyFr])
    def test_satisfied(self, field) -> None:
        r1cs = multiplication_circuit(field)
        assert r1cs.num_constraints == 3
        assert r1cs.num_vars == NUM_VARS
        assert r1cs.num_public == NUM_PUBLIC
        assert is_satisfied(r1cs, multiplication_witness(3, 5, 7, 11, field))

    def test_wrong_output_not_satisfied(self) -> None:
        """Setting r = 0 breaks the last constraint."""
        r1cs = multiplication_circuit()
        bad = multiplication_witness(3, 5, 7, 11).replace(R_OUT, 0)
        assert not is_satisfied(r1cs, bad)

    def test_public_inputs(self) -> None:
        r1cs = multiplication_circuit()
        w = multiplication_witness(3, 5, 7, 11)
        assert r1cs.public_inputs(w) == tuple(Fr(v) for v in (1155, 3, 5, 7, 11))


class TestSatisfactionErrors:
    """Malformed witnesses raise instead of returning False."""

    def test_wrong_length(self) -> None:
        r1cs = multiplication_circuit()
        with pytest.raises(DimensionMismatchError):
            is_satisfied(r1cs, create_witness([1, 2, 3], Fr))

    def test_constant_wire_must_be_one(self) -> None:
        r1cs = multiplication_circuit()
        bad = multiplication_witness(3, 5, 7, 11).replace(0, 2)
        with pytest.raises(InvalidWitnessError):
            is_satisfied(r1cs, bad)


class TestConstruction:
    """create_r1cs validation."""

    def test_shape_mismatch(self) -> None:
        with pytest.raises(DimensionMismatchError):
            create_r1cs([[1, 0]], [[1, 0]], [[1, 0, 0]], 1, Fr)
        with pytest.raises(DimensionMismatchError):
            create_r1cs([[1, 0]], [[1, 0], [0, 1]], [[1, 0]], 1, Fr)

    @pytest.mark.parametrize("num_public", [0, 3])
    def test_num_public_range(self, num_public: int) -> None:
        with pytest.raises(InvalidParameterError):
            create_r1cs([[1, 0]], [[1, 0]], [[1, 0]], num_public, Fr)

    def test_entries_coerced(self) -> None:
        r1cs = create_r1cs([[1, -1]], [[0, 1]], [[2, 0]], 1, ToyFr)
        assert r1cs.L[0][1] == ToyFr(-1)
        assert r1cs.field is ToyFr

    def test_matrix_vector_product(self) -> None:
        r1cs = create_r1cs([[1, 2], [3, 4]], [[0, 0], [0, 0]], [[0, 0], [0, 0]], 1, Fr)
        assert matrix_vector_product(r1cs.L, (Fr(5), Fr(6))) == (Fr(17), Fr(39))
