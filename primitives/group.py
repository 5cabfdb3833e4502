"""Abstract additive group interface and generic scalar multiplication.

Every algorithm here only relies on the GroupElement operations (add,
negate, double, identity, is_identity), so the same code drives BN254 G1/G2,
the toy curve, and any test-only cyclic group.
"""

from abc import ABC, abstractmethod
from concurrent.futures import Executor, ThreadPoolExecutor
from typing import List, Optional, Sequence

from primitives.errors import DimensionMismatchError, EmptyInputError, InvalidParameterError


# --- Group Interface ---

class GroupElement(ABC):
    """Element of an additive abelian group.

    Concrete classes implement add, negate, identity and is_identity; double
    defaults to self + self. Operators +, -, unary -, and * by an integer
    (on either side) are derived from those.
    """

    __slots__ = ()

    @abstractmethod
    def add(self, other: "GroupElement") -> "GroupElement":
        ...

    @abstractmethod
    def negate(self) -> "GroupElement":
        ...

    @classmethod
    @abstractmethod
    def identity(cls) -> "GroupElement":
        ...

    @abstractmethod
    def is_identity(self) -> bool:
        ...

    def double(self) -> "GroupElement":
        return self.add(self)

    def __add__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self.add(other)

    def __neg__(self):
        return self.negate()

    def __sub__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self.add(other.negate())

    def __mul__(self, k):
        if isinstance(k, GroupElement):
            return NotImplemented
        return scalar_mul(self, k)

    __rmul__ = __mul__


def _as_int(k) -> int:
    """Scalars may be plain ints or FieldElements."""
    return int(k)


# --- Scalar Multiplication ---

def scalar_mul(point: GroupElement, k) -> GroupElement:
    """k * point by MSB-first double-and-add. Negative k negates first."""
    k = _as_int(k)
    if k == 0:
        return point.identity()
    if k < 0:
        return scalar_mul(point.negate(), -k)
    if k == 1:
        return point

    result = point.identity()
    for bit in bin(k)[2:]:
        result = result.double()
        if bit == "1":
            result = result.add(point)
    return result


def wnaf_encode(k: int, w: int = 4) -> List[int]:
    """Windowed non-adjacent form of k, least significant digit first.

    Every digit is 0 or odd with |d| < 2^(w-1), and sum(d_i * 2^i) == k.

    Raises:
        InvalidParameterError: If w < 2
    """
    if w < 2:
        raise InvalidParameterError(f"w-NAF window must be at least 2, got {w}")
    k = _as_int(k)
    if k == 0:
        return [0]

    naf = []
    rest = abs(k)
    window = 1 << w
    half = 1 << (w - 1)
    while rest > 0:
        if rest & 1:
            digit = rest & (window - 1)
            if digit >= half:
                digit -= window
            rest -= digit
        else:
            digit = 0
        naf.append(digit)
        rest >>= 1
    return naf if k > 0 else [-d for d in naf]


def scalar_mul_wnaf(point: GroupElement, k, w: int = 4) -> GroupElement:
    """k * point using w-NAF digits and precomputed odd multiples.

    Produces exactly the same element as scalar_mul.
    """
    k = _as_int(k)
    if k == 0:
        return point.identity()
    if k == 1:
        return point
    if k == -1:
        return point.negate()

    naf = wnaf_encode(k, w)

    # Precompute odd multiples: P, 3P, 5P, ..., (2^(w-1) - 1)P
    max_odd = (1 << (w - 1)) - 1
    odd_multiples = [point]
    if max_odd > 1:
        twice = point.double()
        for _ in range(1, max_odd):
            odd_multiples.append(odd_multiples[-1].add(twice))

    result = point.identity()
    for digit in reversed(naf):
        result = result.double()
        if digit > 0:
            result = result.add(odd_multiples[(digit - 1) // 2])
        elif digit < 0:
            result = result.add(odd_multiples[(-digit - 1) // 2].negate())
    return result


def multi_scalar_mul(points: Sequence[GroupElement], scalars: Sequence) -> GroupElement:
    """sum(scalars[i] * points[i]) by Straus' simultaneous double-and-add.

    Raises:
        DimensionMismatchError: If points and scalars differ in length
        EmptyInputError: If both are empty (no group to take the identity from)
    """
    if len(points) != len(scalars):
        raise DimensionMismatchError(f"{len(points)} points but {len(scalars)} scalars")
    if len(points) == 0:
        raise EmptyInputError("multi-scalar multiplication of empty vectors")
    ks = [_as_int(s) for s in scalars]
    if len(points) == 1:
        return scalar_mul(points[0], ks[0])

    # Signed scalars contribute their negated point
    signed = [(p if k > 0 else p.negate(), abs(k)) for p, k in zip(points, ks) if k != 0]
    max_bits = max((k.bit_length() for _, k in signed), default=0)
    result = points[0].identity()
    for bit in range(max_bits - 1, -1, -1):
        result = result.double()
        for p, k in signed:
            if (k >> bit) & 1:
                result = result.add(p)
    return result


# --- Parallel Helpers ---

def _shards(n: int, workers: int) -> List[range]:
    """Split range(n) into at most `workers` contiguous chunks."""
    workers = max(1, min(workers, n))
    size = -(-n // workers)
    return [range(start, min(start + size, n)) for start in range(0, n, size)]


def multi_scalar_mul_parallel(
    points: Sequence[GroupElement],
    scalars: Sequence,
    workers: int = 4,
    executor: Optional[Executor] = None,
) -> GroupElement:
    """Straus MSM with index ranges sharded across an executor.

    Each shard produces a partial sum; partials are combined with the group
    law, so the result equals multi_scalar_mul(points, scalars).

    Args:
        points: Group elements
        scalars: Matching scalars (ints or FieldElements)
        workers: Number of shards (and pool threads when no executor is given)
        executor: Optional executor to reuse instead of a fresh thread pool

    Raises:
        DimensionMismatchError: If points and scalars differ in length
        EmptyInputError: If both are empty
        InvalidParameterError: If workers < 1
    """
    if len(points) != len(scalars):
        raise DimensionMismatchError(f"{len(points)} points but {len(scalars)} scalars")
    if len(points) == 0:
        raise EmptyInputError("multi-scalar multiplication of empty vectors")
    if workers < 1:
        raise InvalidParameterError(f"workers must be at least 1, got {workers}")
    shards = _shards(len(points), workers)
    if len(shards) == 1:
        return multi_scalar_mul(points, scalars)

    def partial(idx: range) -> GroupElement:
        return multi_scalar_mul([points[i] for i in idx], [scalars[i] for i in idx])

    if executor is None:
        with ThreadPoolExecutor(max_workers=len(shards)) as pool:
            partials = list(pool.map(partial, shards))
    else:
        partials = list(executor.map(partial, shards))

    result = partials[0]
    for p in partials[1:]:
        result = result.add(p)
    return result


def batch_scalar_mul(base: GroupElement, scalars: Sequence, workers: int = 1) -> List[GroupElement]:
    """[k * base for k in scalars], optionally across a thread pool.

    Fixed-base helper for CRS generation; results keep the input order.
    """
    if workers < 1:
        raise InvalidParameterError(f"workers must be at least 1, got {workers}")
    if workers == 1 or len(scalars) <= 1:
        return [scalar_mul_wnaf(base, k) for k in scalars]

    def chunk(idx: range) -> List[GroupElement]:
        return [scalar_mul_wnaf(base, scalars[i]) for i in idx]

    results: List[GroupElement] = []
    with ThreadPoolExecutor(max_workers=workers) as pool:
        futures = [pool.submit(chunk, r) for r in _shards(len(scalars), workers)]
        for f in futures:
            results.extend(f.result())
    return results
