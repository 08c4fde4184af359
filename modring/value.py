"""
ModularValue: an immutable element of the ring Z/mZ.

    >>> x = ModularValue(10, 23)
    >>> x * 5
    ModularValue(4,23)
    >>> x / ModularValue(5, 23)
    ModularValue(2,23)

Residue and modulus share one storage type: a numpy integer dtype or
Python int (see rns.native). Add and multiply run checked in that width
and only recompute wider when the checked operation overflows.

The named functions (add, subtract, multiply, divide, negate, power,
invert, is_invertible, equals) are the primary API; the operator
overloads on ModularValue delegate to them. A raw integer on either side
of an operator is first converted to a ModularValue with the other
operand's modulus and storage type.
"""

from math import gcd
from typing import Any, Union

from .config import get_config
from .errors import IncompatibleModuli, InvalidModulus, NotInvertible
from .rns.native import (
    IntDType, checked_add, checked_mul, describe, fits, is_integer,
    normalize_dtype, promote_dtypes, promote_pair, to_native,
    widen, widening_add_mod, widening_mul_mod, widening_pow_mod,
)
from .rns.reference import floor_mod, inv_mod, pow_mod

IntegerLike = Any   # int or numpy integer scalar


def _storage(dtype: IntDType):
    """dtype argument that reproduces `dtype` exactly, unbounded included."""
    return int if dtype is None else dtype


class ModularValue:
    """Residue class `value mod modulus`.

    Args:
        value: any integer (Python or numpy); reduced with floor-modulo.
        modulus: integer >= 1.
        dtype: storage type. None infers it from the inputs (numpy types
            promote, Python ints adopt the other input's type, two Python
            ints use the configured default), then widens until the
            modulus fits. ``int`` forces Python ints.

    Raises:
        InvalidModulus: modulus < 1, or modulus does not fit an explicitly
            requested `dtype`.

    A value compares equal to any integer congruent to its residue
    (``ModularValue(2, 23) == 25``) but hashes as the pair (residue,
    modulus), so it never hashes like that integer. Do not mix values and
    raw integers as keys of one dict or set.
    """

    __slots__ = ("_residue", "_modulus", "_dtype")

    # numpy scalars defer to our reflected operators
    __array_ufunc__ = None

    def __init__(self, value: IntegerLike, modulus: IntegerLike, dtype: Any = None):
        if not is_integer(value) or not is_integer(modulus):
            raise TypeError(
                f"ModularValue expects integers, got {value!r} and {modulus!r}"
            )
        m = int(modulus)
        if m < 1:
            raise InvalidModulus(f"Modulus must be at least 1, got {m}")

        if dtype is None:
            default = normalize_dtype(get_config().default_dtype)
            dt = promote_dtypes(value, modulus, default=default)
            # an inferred width grows until the modulus fits
            while not fits(m, dt):
                dt = widen(dt)
        else:
            dt = normalize_dtype(dtype)
            if not fits(m, dt):
                raise InvalidModulus(f"Modulus {m} does not fit in {describe(dt)}")

        object.__setattr__(self, "_residue", to_native(floor_mod(value, m), dt))
        object.__setattr__(self, "_modulus", to_native(m, dt))
        object.__setattr__(self, "_dtype", dt)

    @classmethod
    def zero(cls, modulus: IntegerLike, dtype: Any = None) -> "ModularValue":
        return cls(0, modulus, dtype)

    @classmethod
    def one(cls, modulus: IntegerLike, dtype: Any = None) -> "ModularValue":
        return cls(1, modulus, dtype)

    def _new(self, value: IntegerLike) -> "ModularValue":
        """Same modulus and storage, new value."""
        return ModularValue(value, self._modulus, _storage(self._dtype))

    # -- fields -------------------------------------------------------------

    @property
    def residue(self):
        return self._residue

    @property
    def modulus(self):
        return self._modulus

    @property
    def dtype(self) -> IntDType:
        return self._dtype

    @property
    def value(self) -> int:
        """Residue as a Python int."""
        return int(self._residue)

    def centered(self) -> int:
        """Signed representative in [-(m // 2), m - m // 2)."""
        r, m = int(self._residue), int(self._modulus)
        return r - m if r >= m - m // 2 else r

    def astype(self, dtype: Any) -> "ModularValue":
        """Re-store under another width; None or int means Python int."""
        return ModularValue(self._residue, self._modulus,
                            _storage(normalize_dtype(dtype)))

    def is_invertible(self) -> bool:
        return is_invertible(self)

    def inverse(self) -> "ModularValue":
        return invert(self)

    # -- immutability -------------------------------------------------------

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __reduce__(self):
        return (ModularValue,
                (int(self._residue), int(self._modulus), _storage(self._dtype)))

    # -- glue ---------------------------------------------------------------

    def __repr__(self) -> str:
        return f"ModularValue({int(self._residue)},{int(self._modulus)})"

    def __int__(self) -> int:
        return int(self._residue)

    def __hash__(self) -> int:
        # through Python int so the storage width does not matter
        return hash((int(self._residue), int(self._modulus)))

    def __eq__(self, other):
        if isinstance(other, ModularValue) or is_integer(other):
            return equals(self, other)
        return NotImplemented

    # -- operators ----------------------------------------------------------

    def __neg__(self):
        return negate(self)

    def __add__(self, other):
        if not _is_operand(other):
            return NotImplemented
        return add(self, other)

    def __radd__(self, other):
        if not _is_operand(other):
            return NotImplemented
        return add(other, self)

    def __sub__(self, other):
        if not _is_operand(other):
            return NotImplemented
        return subtract(self, other)

    def __rsub__(self, other):
        if not _is_operand(other):
            return NotImplemented
        return subtract(other, self)

    def __mul__(self, other):
        if not _is_operand(other):
            return NotImplemented
        return multiply(self, other)

    def __rmul__(self, other):
        if not _is_operand(other):
            return NotImplemented
        return multiply(other, self)

    def __truediv__(self, other):
        if not _is_operand(other):
            return NotImplemented
        return divide(self, other)

    def __rtruediv__(self, other):
        if not _is_operand(other):
            return NotImplemented
        return divide(other, self)

    def __pow__(self, k, mod=None):
        if mod is not None or not is_integer(k):
            return NotImplemented
        return power(self, k)


Operand = Union[ModularValue, int]


def _same_dtype(a: IntDType, b: IntDType) -> bool:
    if a is None or b is None:
        return a is b
    return a == b


def _is_operand(value: Any) -> bool:
    return isinstance(value, ModularValue) or is_integer(value)


def _operands(x: Operand, y: Operand):
    """Normalize a binary operation's inputs to two compatible ModularValues.

    A raw integer takes the other side's modulus and storage type; two
    ModularValues of different widths are moved to their common type.
    """
    if not isinstance(x, ModularValue):
        if not isinstance(y, ModularValue) or not is_integer(x):
            raise TypeError(f"unsupported operands: {x!r}, {y!r}")
        x = y._new(x)
    elif not isinstance(y, ModularValue):
        if not is_integer(y):
            raise TypeError(f"unsupported operands: {x!r}, {y!r}")
        y = x._new(y)

    if int(x.modulus) != int(y.modulus):
        raise IncompatibleModuli(
            f"Cannot operate on {x!r} and {y!r}: moduli differ"
        )
    if not _same_dtype(x.dtype, y.dtype):
        dt = _storage(promote_pair(x.dtype, y.dtype))
        x, y = x.astype(dt), y.astype(dt)
    return x, y


# ---------------------------------------------------------------------------
# Ring operations
# ---------------------------------------------------------------------------

def equals(x: Operand, y: Operand) -> bool:
    """Same modulus and residue; against a raw integer k, k mod m == residue."""
    if isinstance(x, ModularValue) and isinstance(y, ModularValue):
        return (int(x.modulus) == int(y.modulus)
                and int(x.residue) == int(y.residue))
    if isinstance(y, ModularValue):
        x, y = y, x
    if isinstance(x, ModularValue) and is_integer(y):
        return floor_mod(y, x.modulus) == int(x.residue)
    return False


def add(x: Operand, y: Operand) -> ModularValue:
    x, y = _operands(x, y)
    s, overflow = checked_add(x.residue, y.residue, x.dtype)
    if overflow:
        s = widening_add_mod(x.residue, y.residue, x.modulus, x.dtype)
    return x._new(s)


def negate(x: ModularValue) -> ModularValue:
    # Python int keeps unsigned storage from wrapping
    return x._new(-int(x.residue))


def subtract(x: Operand, y: Operand) -> ModularValue:
    x, y = _operands(x, y)
    return add(x, negate(y))


def multiply(x: Operand, y: Operand) -> ModularValue:
    x, y = _operands(x, y)
    p, overflow = checked_mul(x.residue, y.residue, x.dtype)
    if overflow:
        p = widening_mul_mod(x.residue, y.residue, x.modulus, x.dtype)
    return x._new(p)


def is_invertible(x: ModularValue) -> bool:
    """gcd(residue, modulus) == 1, and modulus 1 has no units."""
    m = int(x.modulus)
    return m > 1 and gcd(int(x.residue), m) == 1


def invert(x: ModularValue) -> ModularValue:
    """Multiplicative inverse via the extended Euclidean algorithm."""
    try:
        s = inv_mod(x.residue, x.modulus)
    except NotInvertible as exc:
        raise NotInvertible(f"{x!r} is not invertible") from exc
    return x._new(s)


def divide(x: Operand, y: Operand) -> ModularValue:
    x, y = _operands(x, y)
    return multiply(x, invert(y))


def power(x: ModularValue, k: IntegerLike) -> ModularValue:
    """x^k. k == 0 gives 1 for every x; k < 0 requires x invertible."""
    if not is_integer(k):
        raise TypeError(f"exponent must be an integer, got {k!r}")
    k = int(k)
    if k > 0:
        if x.dtype is None:
            return x._new(pow_mod(x.residue, k, x.modulus))
        return x._new(widening_pow_mod(x.residue, k, x.modulus, x.dtype))
    if k == 0:
        return x._new(1)
    return power(invert(x), -k)
