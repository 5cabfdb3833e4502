"""Bilinear pairing contract and the discrete-log test oracle.

A pairing e: G1 x G2 -> GT must satisfy
    e(aP, bQ) == e(P, Q)^(ab)       (bilinearity)
    e(O, Q) == e(P, O) == 1         (identity)
    e(G1, G2) != 1                  (non-degeneracy)

GT is written multiplicatively; gt_one() is its identity.
"""

from abc import ABC, abstractmethod
from math import isqrt
from typing import Dict, Iterable, Tuple

from primitives.curve import CurvePoint
from primitives.errors import InvalidParameterError


class Pairing(ABC):
    """Abstract bilinear map between two curve groups."""

    G1: type
    G2: type

    @abstractmethod
    def pair(self, p: CurvePoint, q: CurvePoint):
        """e(p, q)."""

    @abstractmethod
    def gt_one(self):
        """Identity of GT."""

    def multi_pair(self, pairs: Iterable[Tuple[CurvePoint, CurvePoint]]):
        """prod e(p_i, q_i). Implementations may share work across pairs."""
        result = self.gt_one()
        for p, q in pairs:
            result = result * self.pair(p, q)
        return result

    def _check_types(self, p, q) -> None:
        if type(p) is not self.G1 or type(q) is not self.G2:
            raise TypeError(
                f"{type(self).__name__} pairs {self.G1.__name__} x {self.G2.__name__}, "
                f"got {type(p).__name__} x {type(q).__name__}"
            )


class DiscreteLogPairing(Pairing):
    """Exactly bilinear pairing for groups of small prime order.

    Recovers a = log(P) in G1 and b = log(Q) in G2 with baby-step giant-step
    and returns gt^(ab). This is a correctness oracle only: anyone can take
    the same logarithms, so a Groth16 instance running on it has neither
    zero-knowledge nor soundness.

    Args:
        g1_type: CurvePoint subclass for the first argument
        g2_type: CurvePoint subclass for the second argument
        gt_generator: Generator of the order-r target group
    """

    def __init__(self, g1_type: type, g2_type: type, gt_generator) -> None:
        if g1_type.ORDER != g2_type.ORDER:
            raise InvalidParameterError("G1 and G2 must have the same order")
        self.G1 = g1_type
        self.G2 = g2_type
        self.order = g1_type.ORDER
        self.gt_generator = gt_generator
        self._step = isqrt(self.order - 1) + 1
        self._tables = {g1_type: self._baby_steps(g1_type), g2_type: self._baby_steps(g2_type)}

    def _baby_steps(self, group: type) -> Dict:
        """affine(j * G) -> j for j in [0, step)."""
        table = {}
        point = group.identity()
        gen = group.generator()
        for j in range(self._step):
            table[point.to_affine()] = j
            point = point.add(gen)
        return table

    def discrete_log(self, point: CurvePoint) -> int:
        """k in [0, r) with k * G == point.

        Raises:
            InvalidParameterError: If point is not in the generated subgroup
        """
        group = type(point)
        table = self._tables[group]
        giant = (group.generator() * self._step).negate()
        current = point
        for i in range(self._step + 1):
            j = table.get(current.to_affine())
            if j is not None:
                return (i * self._step + j) % self.order
            current = current.add(giant)
        raise InvalidParameterError(f"{point!r} is not in the subgroup generated by {group.__name__}")

    def gt_one(self):
        return self.gt_generator.one()

    def pair(self, p: CurvePoint, q: CurvePoint):
        self._check_types(p, q)
        if p.is_identity() or q.is_identity():
            return self.gt_one()
        a = self.discrete_log(p)
        b = self.discrete_log(q)
        return self.gt_generator ** ((a * b) % self.order)

    def multi_pair(self, pairs):
        # Exponents add, so a single exponentiation covers all pairs
        exponent = 0
        for p, q in pairs:
            self._check_types(p, q)
            if p.is_identity() or q.is_identity():
                continue
            exponent += self.discrete_log(p) * self.discrete_log(q)
        return self.gt_generator ** (exponent % self.order)
