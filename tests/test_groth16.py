"""End-to-end Groth16 tests.

The toy suite (discrete-log pairing) runs both variants and both QAP domains
quickly; the BN254 run is marked slow.
"""

import random
from dataclasses import fields

import pytest

from primitives.curve import CurvePoint
from primitives.errors import DimensionMismatchError, InvalidParameterError, NonExactDivisionError
from primitives.field import Fr, ToyFq, ToyFr
from primitives.toy_curve import ToyG1Point
from protocol.circuits import R_OUT, multiplication_circuit, multiplication_witness
from protocol.config import BN254_SUITE, TOY_SUITE, DomainKind, Groth16Config, Variant
from protocol.proof import Proof
from protocol.prover import prove
from protocol.qap import r1cs_to_qap
from protocol.setup import setup
from protocol.verifier import verify

X, Y, Z, U = 3, 5, 7, 11
PUBLIC = [1155, 3, 5, 7, 11]

VARIANTS = [Variant.FULL, Variant.SIMPLIFIED]
DOMAINS = [DomainKind.INTEGERS, DomainKind.ROOTS_OF_UNITY]


def _toy_instance(variant: Variant, kind: DomainKind = DomainKind.INTEGERS, seed: int = 1, workers: int = 1):
    r1cs = multiplication_circuit(ToyFr)
    qap = r1cs_to_qap(r1cs, kind)
    config = Groth16Config(suite=TOY_SUITE, variant=variant, domain_kind=kind, workers=workers)
    crs = setup(qap, random.Random(seed), config)
    return r1cs, qap, crs


class TestToyEndToEnd:
    """setup -> prove -> verify on the toy suite."""

    @pytest.mark.parametrize("variant", VARIANTS)
    @pytest.mark.parametrize("kind", DOMAINS)
    def test_valid_proof_verifies(self, variant, kind) -> None:
        _, qap, crs = _toy_instance(variant, kind)
        witness = multiplication_witness(X, Y, Z, U, ToyFr)
        proof = prove(crs, qap, witness, random.Random(2))
        assert verify(crs, proof, PUBLIC)
        assert verify(crs, proof, [ToyFr(v) for v in PUBLIC])

    @pytest.mark.parametrize("variant", VARIANTS)
    def test_unsatisfied_witness_cannot_prove(self, variant) -> None:
        """r = 0 fails at the quotient step."""
        _, qap, crs = _toy_instance(variant)
        bad = multiplication_witness(X, Y, Z, U, ToyFr).replace(R_OUT, 0)
        with pytest.raises(NonExactDivisionError):
            prove(crs, qap, bad)

    @pytest.mark.parametrize("variant", VARIANTS)
    def test_forged_proof_rejected(self, variant) -> None:
        _, qap, crs = _toy_instance(variant)
        g1, g2 = ToyG1Point.generator(), crs.suite.g2.generator()
        forged = Proof(A=g1 * 3, B=g2 * 5, C=g1 * 7)
        assert not verify(crs, forged, PUBLIC)

    @pytest.mark.parametrize("variant", VARIANTS)
    def test_tampered_proof_rejected(self, variant) -> None:
        _, qap, crs = _toy_instance(variant)
        proof = prove(crs, qap, multiplication_witness(X, Y, Z, U, ToyFr), random.Random(3))
        tampered = Proof(A=proof.A, B=proof.B, C=proof.C + ToyG1Point.generator())
        assert not verify(crs, tampered, PUBLIC)

    def test_wrong_public_inputs_rejected(self) -> None:
        """The full variant binds the public wires, r = 0 included."""
        _, qap, crs = _toy_instance(Variant.FULL)
        proof = prove(crs, qap, multiplication_witness(X, Y, Z, U, ToyFr), random.Random(4))
        assert not verify(crs, proof, [0, 3, 5, 7, 11])
        assert not verify(crs, proof, [1155, 3, 5, 7, 12])

    def test_public_input_count_checked(self) -> None:
        _, qap, crs = _toy_instance(Variant.FULL)
        proof = prove(crs, qap, multiplication_witness(X, Y, Z, U, ToyFr))
        with pytest.raises(DimensionMismatchError):
            verify(crs, proof, PUBLIC[:-1])
        with pytest.raises(DimensionMismatchError):
            verify(crs, proof, [1] + PUBLIC)

    def test_off_curve_point_rejected(self, capsys) -> None:
        _, qap, crs = _toy_instance(Variant.FULL)
        proof = prove(crs, qap, multiplication_witness(X, Y, Z, U, ToyFr))
        bogus = ToyG1Point.from_affine(ToyFq(1), ToyFq(1))
        assert not verify(crs, Proof(A=bogus, B=proof.B, C=proof.C), PUBLIC, verbose=True)
        assert "ERROR: Proof element A" in capsys.readouterr().out

    def test_small_subgroup_point_rejected(self) -> None:
        _, qap, crs = _toy_instance(Variant.FULL)
        proof = prove(crs, qap, multiplication_witness(X, Y, Z, U, ToyFr))
        low_order = ToyG1Point.from_affine(ToyFq(0), ToyFq(955300))
        assert not verify(crs, Proof(A=proof.A, B=proof.B, C=low_order), PUBLIC)

    def test_verbose_reports_failed_pairing(self, capsys) -> None:
        _, qap, crs = _toy_instance(Variant.FULL)
        proof = prove(crs, qap, multiplication_witness(X, Y, Z, U, ToyFr))
        assert not verify(crs, proof, [1, 1, 1, 1, 1], verbose=True)
        assert "ERROR: Pairing check" in capsys.readouterr().out

    def test_proofs_are_blinded(self) -> None:
        """Two full proofs of the same witness differ but both verify."""
        _, qap, crs = _toy_instance(Variant.FULL)
        witness = multiplication_witness(X, Y, Z, U, ToyFr)
        p1 = prove(crs, qap, witness, random.Random(10))
        p2 = prove(crs, qap, witness, random.Random(11))
        assert p1 != p2
        assert verify(crs, p1, PUBLIC) and verify(crs, p2, PUBLIC)


class TestSetup:
    """CRS shape and secrecy."""

    @pytest.mark.parametrize("variant", VARIANTS)
    def test_crs_holds_no_scalars(self, variant) -> None:
        """Every CRS entry is a group element (or the precomputed GT value)."""
        _, _, crs = _toy_instance(variant)
        for key in (crs.proving_key, crs.verifying_key):
            for f in fields(key):
                value = getattr(key, f.name)
                if f.name in ("num_public", "alpha_beta"):
                    continue
                items = value if isinstance(value, tuple) else (value,)
                assert all(v is None or isinstance(v, CurvePoint) for v in items), f.name

    def test_crs_sizes(self) -> None:
        _, qap, crs = _toy_instance(Variant.FULL)
        pk, vk = crs.proving_key, crs.verifying_key
        n = qap.degree
        assert len(crs.tau_powers_g1) == n + 1
        assert len(crs.tau_powers_g2) == n + 1
        assert len(pk.h_query) == n - 1
        assert len(vk.ic) == qap.num_public
        assert len(pk.l_query) == qap.num_vars - qap.num_public
        assert len(pk.u_g1) == len(pk.v_g2) == qap.num_vars

    def test_tau_powers_consistent(self) -> None:
        """e([tau^i]_1, [tau]_2) == e([tau^(i+1)]_1, g2)."""
        _, _, crs = _toy_instance(Variant.SIMPLIFIED)
        pairing = crs.suite.pairing
        g2 = crs.verifying_key.g2
        t1, t2 = crs.tau_powers_g1, crs.tau_powers_g2
        for i in range(len(t1) - 1):
            assert pairing.pair(t1[i], t2[1]) == pairing.pair(t1[i + 1], g2)

    def test_deterministic_and_parallel(self) -> None:
        """Same seed gives the same CRS regardless of worker count."""
        _, _, crs1 = _toy_instance(Variant.FULL, seed=9, workers=1)
        _, _, crs2 = _toy_instance(Variant.FULL, seed=9, workers=3)
        assert crs1.proving_key == crs2.proving_key
        assert crs1.verifying_key == crs2.verifying_key

    def test_suite_inferred_from_field(self) -> None:
        qap = r1cs_to_qap(multiplication_circuit(ToyFr))
        crs = setup(qap, random.Random(5))
        assert crs.suite is TOY_SUITE
        assert crs.variant is Variant.FULL

    def test_suite_field_mismatch(self) -> None:
        qap = r1cs_to_qap(multiplication_circuit(ToyFr))
        with pytest.raises(InvalidParameterError):
            setup(qap, random.Random(5), Groth16Config(suite=BN254_SUITE))

    def test_domain_kind_must_match_qap(self) -> None:
        qap = r1cs_to_qap(multiplication_circuit(ToyFr), DomainKind.INTEGERS)
        with pytest.raises(InvalidParameterError):
            setup(qap, random.Random(5), Groth16Config(domain_kind=DomainKind.ROOTS_OF_UNITY))
        crs = setup(qap, random.Random(5), Groth16Config(domain_kind=DomainKind.INTEGERS))
        assert crs.suite is TOY_SUITE

    def test_workers_validated(self) -> None:
        with pytest.raises(InvalidParameterError):
            Groth16Config(workers=0)


@pytest.mark.slow
class TestBN254EndToEnd:
    """Full Groth16 over BN254 with the optimal ate pairing."""

    def test_valid_and_invalid(self) -> None:
        qap = r1cs_to_qap(multiplication_circuit(Fr))
        crs = setup(qap, random.Random(1))
        assert crs.suite is BN254_SUITE
        proof = prove(crs, qap, multiplication_witness(X, Y, Z, U, Fr), random.Random(2))
        assert verify(crs, proof, PUBLIC)
        assert not verify(crs, proof, [0, 3, 5, 7, 11])
