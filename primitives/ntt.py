"""Number Theoretic Transform over prime fields with 2-adic roots of unity."""

import galois
import numpy as np

from primitives.errors import InvalidParameterError

# --- NTT Engine ---

class NTT:
    """Radix-2 NTT engine for one field and one power-of-two domain size.

    The transform itself is galois.ntt / galois.intt. The evaluation domain is
    the subgroup generated by the root galois transforms with, in natural
    order: ntt(c)[k] = c(omega^k).
    """

    def __init__(self, field_type: type, domain_size: int) -> None:
        if domain_size < 1 or domain_size & (domain_size - 1):
            raise InvalidParameterError(f"NTT domain size must be a power of 2, got {domain_size}")
        n_bits = _log2(domain_size)
        if n_bits > field_type.FIELD.two_adicity:
            raise InvalidParameterError(
                f"{field_type.FIELD.name} has no 2^{n_bits}-th roots of unity "
                f"(2-adicity {field_type.FIELD.two_adicity})"
            )

        self.field_type = field_type
        self.gf = field_type.FIELD.gf
        self.modulus = field_type.MODULUS
        self.n = domain_size
        self.n_bits = n_bits

        # galois.ntt works in GF(p) with its default primitive element
        omega = galois.GF(self.modulus).primitive_root_of_unity(domain_size)
        self.omega = field_type(int(omega))
        self.roots = _precompute_roots(self.gf, int(omega), domain_size)

    def domain(self) -> list:
        """Domain points as FieldElements."""
        return [self.field_type._unchecked(int(r)) for r in self.roots]

    def ntt(self, coeffs: galois.FieldArray) -> galois.FieldArray:
        """Forward NTT: coefficients -> evaluations (input zero-padded to n)."""
        evals = galois.ntt(self._as_ints(coeffs), size=self.n, modulus=self.modulus)
        return self.gf(evals.view(np.ndarray))

    def intt(self, evals: galois.FieldArray) -> galois.FieldArray:
        """Inverse NTT: evaluations -> coefficients."""
        coeffs = galois.intt(self._as_ints(evals), size=self.n, modulus=self.modulus)
        return self.gf(coeffs.view(np.ndarray))

    def _as_ints(self, arr: galois.FieldArray) -> np.ndarray:
        if len(arr) > self.n:
            raise InvalidParameterError(f"input of length {len(arr)} exceeds NTT size {self.n}")
        if len(arr) == 0:
            return self.gf.Zeros(1).view(np.ndarray)
        return arr.view(np.ndarray)


# --- Helpers ---

def _log2(size: int) -> int:
    """Exponent of a power-of-two size."""
    return size.bit_length() - 1


def _precompute_roots(gf: type, omega: int, count: int) -> galois.FieldArray:
    """Successive powers omega^0 .. omega^(count-1) as a field array."""
    step = gf(omega)
    powers = gf.Ones(count)
    for k in range(1, count):
        powers[k] = powers[k - 1] * step
    return powers


def next_power_of_two(n: int) -> int:
    """Smallest power of two >= n (1 for n <= 1)."""
    size = 1
    while size < n:
        size <<= 1
    return size
