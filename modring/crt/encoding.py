"""
Residue-number-system encode / decode on top of ModularValue.

rns_encode splits an integer into its residues modulo each modulus;
rns_decode reconstructs it with crt(). Decoding is exact as long as the
original integer lies in [0, M) (or the centered range when signed=True),
M being the product of the moduli.
"""

from typing import Any, Iterable, List, Sequence

from ..value import ModularValue
from .combine import crt


def rns_encode(x: int, moduli: Iterable[int], dtype: Any = None) -> List[ModularValue]:
    """Residues of x, one ModularValue per modulus."""
    return [ModularValue(x, m, dtype) for m in moduli]


def rns_decode(residues: Sequence[ModularValue], signed: bool = False) -> int:
    """Reconstruct the integer encoded by `residues`.

    Args:
        residues: ModularValues over pairwise-coprime moduli.
        signed: If True, interpret as signed integer in [-(M//2), M - M//2).

    Returns:
        Reconstructed Python int.
    """
    z = crt(residues)
    return z.centered() if signed else z.value
