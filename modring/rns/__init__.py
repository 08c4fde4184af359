"""
Integer arithmetic backends for modring.

Provides:
1. Pure Python modular arithmetic on unbounded ints (reference)
2. numpy fixed-width handling with overflow escalation (native)
"""

from .reference import floor_mod, gcdx, inv_mod, pow_mod
from .native import (
    IntDType, normalize_dtype, promote_dtypes, promote_pair, widen,
    checked_add, checked_mul,
    widening_add_mod, widening_mul_mod, widening_pow_mod, widening_product,
)

__all__ = [
    "floor_mod", "gcdx", "inv_mod", "pow_mod",
    "IntDType", "normalize_dtype", "promote_dtypes", "promote_pair", "widen",
    "checked_add", "checked_mul",
    "widening_add_mod", "widening_mul_mod", "widening_pow_mod", "widening_product",
]
