"""
Chinese Remainder Theorem combination of ModularValues.

crt() folds left to right with crt_pairwise(). Each step checks the next
modulus against the running combined modulus, so a factor shared with any
earlier modulus is caught at the step that introduces it.

The combined modulus can outgrow the inputs' storage width. The result is
then stored one or more rungs up the widening ladder (see rns.native),
ending at Python int.
"""

import logging
from math import gcd
from typing import Iterable, Union

from ..errors import NonCoprimeModuli
from ..rns.native import describe, promote_pair, to_native, widening_product
from ..value import ModularValue, _storage, invert

logger = logging.getLogger(__name__)


def crt_pairwise(x: ModularValue, y: ModularValue) -> ModularValue:
    """Combine x (mod n) and y (mod m) into z (mod n*m).

    A modulus-1 operand carries no information, so it is absorbed without
    taking an inverse: crt_pairwise(x, ModularValue(0, 1)) == x, at any
    position of a crt() fold, instead of raising NotInvertible.

    Raises:
        NonCoprimeModuli: gcd(n, m) != 1.
    """
    n, m = int(x.modulus), int(y.modulus)
    if gcd(n, m) != 1:
        raise NonCoprimeModuli(
            f"Moduli must be pairwise relatively prime: {x!r}, {y!r}"
        )
    dtype = promote_pair(x.dtype, y.dtype)

    # k = n^{-1} * (b - a) mod m; the trivial ring has only k = 0
    if m == 1:
        k = 0
    else:
        k = (invert(ModularValue(n, m, _storage(dtype))) * (y - x.residue)).residue

    nm, out_dtype = widening_product(n, m, dtype)
    # a < n and k < m, so a + k*n < n*m fits wherever n*m does
    z = to_native(x.residue, out_dtype) + to_native(k, out_dtype) * to_native(n, out_dtype)

    logger.debug("crt step: %r + %r -> %d mod %d (%s)",
                 x, y, int(z), int(nm), describe(out_dtype))
    return ModularValue(z, nm, _storage(out_dtype))


def crt(*values: Union[ModularValue, Iterable[ModularValue]]) -> ModularValue:
    """Chinese Remainder Theorem over pairwise-coprime moduli.

    Accepts the values either spread out or as one iterable::

        >>> crt(ModularValue(4, 11), ModularValue(8, 14))
        ModularValue(92,154)
        >>> crt([ModularValue(4, 11), ModularValue(8, 14)])
        ModularValue(92,154)

    The empty combination is ModularValue(0, 1), the identity of the fold.
    """
    if len(values) == 1 and not isinstance(values[0], ModularValue):
        values = tuple(values[0])
    if not values:
        return ModularValue(0, 1)

    for v in values:
        if not isinstance(v, ModularValue):
            raise TypeError(f"crt expects ModularValue arguments, got {v!r}")

    result = values[0]
    for v in values[1:]:
        result = crt_pairwise(result, v)
    return result
