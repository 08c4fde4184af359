"""
Native integer widths for modular arithmetic.

A ModularValue stores its residue and modulus either as numpy fixed-width
scalars (int8 ... int64, uint8 ... uint64) or as plain Python ints
("unbounded", dtype None). This module owns everything width-related:

  - dtype normalization and promotion
  - checked add / multiply that report overflow instead of wrapping
  - the widening ladder used when a checked operation overflows:
        8 -> 16 -> 32 -> 64 bits (numpy), 64 bits -> Python int
    numpy has no 128-bit integer, so Python int is the 64-bit fallback.
  - wide modular add / multiply / power, narrowed back to the native width

Checked operations take residues, i.e. non-negative operands.
"""

import logging
from typing import Any, Optional, Tuple

import numpy as np

logger = logging.getLogger(__name__)

IntDType = Optional[np.dtype]   # None = Python int (unbounded)


# ---------------------------------------------------------------------------
# dtype handling
# ---------------------------------------------------------------------------

def normalize_dtype(dtype: Any) -> IntDType:
    """Return a numpy integer dtype, or None for Python int.

    Accepts anything np.dtype() accepts; ``None`` and the builtin ``int``
    both mean unbounded. Raises ValueError for non-integer dtypes.
    """
    if dtype is None or dtype is int:
        return None
    try:
        dt = np.dtype(dtype)
    except TypeError as exc:
        raise ValueError(f"not a numpy integer dtype: {dtype!r}") from exc
    if dt.kind not in "iu":
        raise ValueError(f"not a numpy integer dtype: {dtype!r}")
    return dt


def describe(dtype: IntDType) -> str:
    return "int" if dtype is None else dtype.name


def is_integer(value: Any) -> bool:
    return isinstance(value, (int, np.integer))


def promote_pair(a: IntDType, b: IntDType) -> IntDType:
    """Common storage type of two dtypes.

    Unbounded absorbs everything; combinations numpy can only express as a
    float (int64 with uint64) also fall back to unbounded.
    """
    if a is None or b is None:
        return None
    dt = np.promote_types(a, b)
    return dt if dt.kind in "iu" else None


def promote_dtypes(*values: Any, default: IntDType = None) -> IntDType:
    """Storage type for a set of integer inputs.

    numpy scalars carry their dtype; Python ints are weak and adopt the
    numpy type of the other inputs. All-Python-int input gives `default`.
    """
    dtypes = [v.dtype for v in values if isinstance(v, np.integer)]
    if not dtypes:
        return default
    result = dtypes[0]
    for dt in dtypes[1:]:
        result = promote_pair(result, dt)
    return result


def fits(value: int, dtype: IntDType) -> bool:
    if dtype is None:
        return True
    info = np.iinfo(dtype)
    return info.min <= int(value) <= info.max


def to_native(value: Any, dtype: IntDType):
    """Narrow (or widen) an integer to `dtype`.

    Raises OverflowError if the value is out of range for the dtype.
    """
    value = int(value)
    if dtype is None:
        return value
    if not fits(value, dtype):
        raise OverflowError(f"{value} does not fit in {describe(dtype)}")
    return dtype.type(value)


def widen(dtype: IntDType) -> IntDType:
    """Next rung of the widening ladder (same signedness, double width)."""
    if dtype is None or dtype.itemsize >= 8:
        return None
    return np.dtype(f"{dtype.kind}{dtype.itemsize * 2}")


# ---------------------------------------------------------------------------
# Checked arithmetic in native width
# ---------------------------------------------------------------------------

def checked_add(a, b, dtype: IntDType) -> Tuple[Any, bool]:
    """a + b in `dtype`. Returns (sum, False), or (None, True) on overflow."""
    if dtype is None:
        return int(a) + int(b), False
    a, b = dtype.type(a), dtype.type(b)
    if a > dtype.type(np.iinfo(dtype).max) - b:
        return None, True
    return a + b, False


def checked_mul(a, b, dtype: IntDType) -> Tuple[Any, bool]:
    """a * b in `dtype`. Returns (product, False), or (None, True) on overflow."""
    if dtype is None:
        return int(a) * int(b), False
    a, b = dtype.type(a), dtype.type(b)
    if a == 0 or b == 0:
        return dtype.type(0), False
    if b > dtype.type(np.iinfo(dtype).max) // a:
        return None, True
    return a * b, False


# ---------------------------------------------------------------------------
# Wide modular arithmetic
# ---------------------------------------------------------------------------

def widening_add_mod(a, b, m, dtype: IntDType):
    """(a + b) mod m computed one rung up the ladder, narrowed to `dtype`."""
    wide = widen(dtype)
    logger.debug("add overflowed %s; recomputing in %s", describe(dtype), describe(wide))
    s = to_native(a, wide) + to_native(b, wide)
    return to_native(s % to_native(m, wide), dtype)


def widening_mul_mod(a, b, m, dtype: IntDType):
    """(a * b) mod m computed one rung up the ladder, narrowed to `dtype`."""
    wide = widen(dtype)
    logger.debug("multiply overflowed %s; recomputing in %s", describe(dtype), describe(wide))
    p = to_native(a, wide) * to_native(b, wide)
    return to_native(p % to_native(m, wide), dtype)


def widening_pow_mod(base, exp: int, m, dtype: IntDType):
    """base^exp mod m by repeated squaring, for exp >= 0.

    The loop runs entirely in the widened type, where the product of two
    residues always fits, and narrows once at the end.
    """
    wide = widen(dtype)
    mw = to_native(m, wide)
    b = to_native(base, wide) % mw
    result = to_native(1 % int(m), wide)
    exp = int(exp)
    while exp > 0:
        if exp & 1:
            result = result * b % mw
        exp >>= 1
        if exp:
            b = b * b % mw
    return to_native(result, dtype)


def widening_product(a, b, dtype: IntDType) -> Tuple[Any, IntDType]:
    """a * b in the narrowest rung, starting at `dtype`, that holds it.

    Returns (product, dtype_used).
    """
    while True:
        p, overflow = checked_mul(to_native(a, dtype), to_native(b, dtype), dtype)
        if not overflow:
            return p, dtype
        wide = widen(dtype)
        logger.debug("product %d * %d overflowed %s; escalating to %s",
                     int(a), int(b), describe(dtype), describe(wide))
        dtype = wide
