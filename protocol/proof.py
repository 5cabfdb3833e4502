"""Groth16 proof container and JSON serialization.

Points are written as affine coordinates in decimal strings:
    G1: ["x", "y"]
    G2: [["x0", "x1"], ["y0", "y1"]]   (c0 + c1*u)
and the identity as null. Loading rejects points that are not on the curve.
"""

import json
from dataclasses import dataclass
from typing import Any, Optional

from primitives.curve import CurvePoint
from primitives.errors import InvalidParameterError
from primitives.extension_field import QuadraticExtensionElement
from protocol.config import SUITES, CurveSuite, Variant


@dataclass(frozen=True)
class Proof:
    """Groth16 proof (A in G1, B in G2, C in G1)."""
    A: CurvePoint
    B: CurvePoint
    C: CurvePoint


# --- Point Encoding ---

def _coord_to_json(c) -> Any:
    if isinstance(c, QuadraticExtensionElement):
        return [str(c.c0.value), str(c.c1.value)]
    return str(int(c))


def point_to_json(point: CurvePoint) -> Optional[list]:
    affine = point.to_affine()
    if affine is None:
        return None
    return [_coord_to_json(affine[0]), _coord_to_json(affine[1])]


def point_from_json(data: Optional[list], group: type) -> CurvePoint:
    """Decode a point of `group`, validating curve membership.

    Raises:
        InvalidParameterError: If the encoding is malformed or off the curve
    """
    if data is None:
        return group.identity()
    try:
        x_raw, y_raw = data
        if issubclass(group.FIELD, QuadraticExtensionElement):
            x = group.FIELD(int(x_raw[0]), int(x_raw[1]))
            y = group.FIELD(int(y_raw[0]), int(y_raw[1]))
        else:
            x = group.FIELD(int(x_raw))
            y = group.FIELD(int(y_raw))
    except (TypeError, ValueError) as e:
        raise InvalidParameterError(f"malformed {group.__name__} encoding: {data!r}") from e
    return group.from_affine(x, y, check=True)


# --- JSON Serialization ---

def _suite_of(point: CurvePoint) -> CurveSuite:
    for suite in SUITES.values():
        if suite.g1 is type(point):
            return suite
    raise InvalidParameterError(f"no curve suite uses {type(point).__name__} as G1")


def proof_to_json(proof: Proof) -> dict[str, Any]:
    """Convert proof to a JSON-serializable dictionary."""
    return {
        "curve": _suite_of(proof.A).name,
        "A": point_to_json(proof.A),
        "B": point_to_json(proof.B),
        "C": point_to_json(proof.C),
    }


def proof_from_json(data: dict[str, Any]) -> Proof:
    """Inverse of proof_to_json.

    Raises:
        InvalidParameterError: On an unknown curve, a missing field or an
            off-curve point
    """
    suite = SUITES.get(data.get("curve"))
    if suite is None:
        raise InvalidParameterError(f"unknown curve {data.get('curve')!r}")
    try:
        a, b, c = data["A"], data["B"], data["C"]
    except KeyError as e:
        raise InvalidParameterError(f"proof is missing {e.args[0]}") from e
    return Proof(
        A=point_from_json(a, suite.g1),
        B=point_from_json(b, suite.g2),
        C=point_from_json(c, suite.g1),
    )


def load_proof_from_json(path: str) -> Proof:
    """Load a proof written by save_proof_to_json."""
    with open(path) as f:
        data = json.load(f)
    return proof_from_json(data)


def save_proof_to_json(proof: Proof, path: str) -> None:
    with open(path, "w") as f:
        json.dump(proof_to_json(proof), f, indent=2)


def verifying_key_to_json(crs) -> dict[str, Any]:
    """Public verification data of a CRS.

    The precomputed e(alpha, beta) is omitted since a verifier can recompute
    it from alpha_g1 and beta_g2.
    """
    vk = crs.verifying_key
    j: dict[str, Any] = {
        "curve": crs.suite.name,
        "variant": crs.variant.value,
        "num_public": vk.num_public,
        "g1": point_to_json(vk.g1),
        "g2": point_to_json(vk.g2),
    }
    if crs.variant is Variant.FULL:
        j["alpha_g1"] = point_to_json(vk.alpha_g1)
        j["beta_g2"] = point_to_json(vk.beta_g2)
        j["gamma_g2"] = point_to_json(vk.gamma_g2)
        j["delta_g2"] = point_to_json(vk.delta_g2)
        j["ic"] = [point_to_json(p) for p in vk.ic]
    return j
