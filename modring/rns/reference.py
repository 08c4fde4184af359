"""
Pure-Python modular arithmetic on plain ints.

Arbitrary precision, so nothing here overflows. ModularValue uses these
for floor-modulo construction, for inversion at every width, and for
powers of unbounded (dtype None) values.
"""

from typing import Tuple

from ..errors import NotInvertible


def floor_mod(a: int, m: int) -> int:
    """a mod m with the result in [0, m) for m > 0, whatever the sign of a."""
    return int(a) % int(m)


def gcdx(a: int, b: int) -> Tuple[int, int, int]:
    """Extended Euclidean algorithm.

    Returns (g, s, t) with g = gcd(a, b) >= 0 and s*a + t*b == g.
    """
    old_r, r = int(a), int(b)
    old_s, s = 1, 0
    old_t, t = 0, 1
    while r != 0:
        q = old_r // r
        old_r, r = r, old_r - q * r
        old_s, s = s, old_s - q * s
        old_t, t = t, old_t - q * t
    if old_r < 0:
        old_r, old_s, old_t = -old_r, -old_s, -old_t
    return old_r, old_s, old_t


def inv_mod(a: int, m: int) -> int:
    """Modular inverse a^{-1} mod m via the extended Euclidean algorithm.

    Raises NotInvertible when gcd(a, m) != 1 or m == 1.
    """
    a, m = int(a), int(m)
    g, s, _ = gcdx(a, m)
    if g != 1 or m == 1:
        raise NotInvertible(f"{a} is not invertible modulo {m}")
    return s % m


def pow_mod(base: int, exp: int, m: int) -> int:
    """base^exp mod m via Python built-in three-arg pow.

    Negative exponents invert first; x^0 is 1 mod m.
    """
    base, exp, m = int(base), int(exp), int(m)
    if exp < 0:
        return pow(inv_mod(base, m), -exp, m)
    return pow(base, exp, m)
