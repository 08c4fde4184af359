"""
Big-int helpers for the CRT tests: prime generation and a Garner-style
CRT on plain Python ints, independent of ModularValue.
"""

from math import gcd
from typing import List, Sequence

from modring.errors import NonCoprimeModuli
from modring.rns.reference import inv_mod


def is_prime(n: int) -> bool:
    """Trial division; fine for 31-bit candidates (sqrt ~ 46340 iterations max)."""
    if n < 2:
        return False
    if n == 2 or n == 3:
        return True
    if n % 2 == 0 or n % 3 == 0:
        return False
    i = 5
    while i * i <= n:
        if n % i == 0 or n % (i + 2) == 0:
            return False
        i += 6
    return True


def generate_primes(K: int, bits: int = 31) -> List[int]:
    """Generate the K largest primes below 2^bits, sorted."""
    prime_max = (1 << bits) - 1
    prime_min = 1 << (bits - 1)

    primes: List[int] = []
    candidate = prime_max if prime_max % 2 else prime_max - 1
    while len(primes) < K and candidate >= prime_min:
        if is_prime(candidate):
            primes.append(candidate)
        candidate -= 2  # only odd candidates
    if len(primes) < K:
        raise RuntimeError(
            f"Could not find {K} primes in [{prime_min}, {prime_max}]"
        )
    return sorted(primes)


def crt_reconstruct(residues: Sequence[int], moduli: Sequence[int]) -> int:
    """x in [0, prod(moduli)) from residues over pairwise-coprime moduli."""
    x, M = 0, 1
    for a_i, m_i in zip(residues, moduli):
        a_i, m_i = int(a_i), int(m_i)
        if gcd(M, m_i) != 1:
            raise NonCoprimeModuli(
                f"modulus {m_i} shares a factor with running product {M}"
            )
        if m_i == 1:
            continue

        t = ((a_i - x) % m_i) * inv_mod(M % m_i, m_i) % m_i
        x = x + M * t
        M = M * m_i

    return x


def crt_reconstruct_signed(residues: Sequence[int], moduli: Sequence[int]) -> int:
    """Signed reconstruction, result in [-(M//2), M - M//2)."""
    x = crt_reconstruct(residues, moduli)
    M = 1
    for m in moduli:
        M *= int(m)
    if x >= M - M // 2:
        x -= M
    return x
