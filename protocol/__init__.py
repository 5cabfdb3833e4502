"""Protocol - R1CS, QAP and the Groth16 setup/prove/verify pipeline."""

from protocol.circuits import multiplication_circuit, multiplication_witness
from protocol.config import (
    BN254_SUITE,
    SUITES,
    TOY_SUITE,
    CurveSuite,
    DomainKind,
    Groth16Config,
    Variant,
    suite_for_field,
)
from protocol.proof import Proof, proof_from_json, proof_to_json, verifying_key_to_json
from protocol.prover import prove
from protocol.qap import QAP, compute_h, evaluate_qap, is_satisfied_qap, r1cs_to_qap
from protocol.r1cs import R1CS, Witness, create_r1cs, create_witness, is_satisfied
from protocol.setup import CRS, ProvingKey, VerifyingKey, setup
from protocol.verifier import verify

__all__ = [
    # R1CS
    "R1CS",
    "Witness",
    "create_r1cs",
    "create_witness",
    "is_satisfied",
    # QAP
    "QAP",
    "r1cs_to_qap",
    "evaluate_qap",
    "compute_h",
    "is_satisfied_qap",
    # Groth16
    "CRS",
    "ProvingKey",
    "VerifyingKey",
    "Proof",
    "setup",
    "prove",
    "verify",
    # Serialization
    "proof_to_json",
    "proof_from_json",
    "verifying_key_to_json",
    # Configuration
    "CurveSuite",
    "Groth16Config",
    "Variant",
    "DomainKind",
    "SUITES",
    "BN254_SUITE",
    "TOY_SUITE",
    "suite_for_field",
    # Circuits
    "multiplication_circuit",
    "multiplication_witness",
]
