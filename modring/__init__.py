"""
modring: exact modular integer arithmetic over Z/mZ.

  x = ModularValue(v, m)        residue v mod m, immutable
  x + y, x - y, x * y, x / y    same modulus required; ints mix freely
  x ** k                        k < 0 inverts first
  crt(x1, x2, ...)              Chinese Remainder Theorem, pairwise-coprime moduli

Values are stored as numpy fixed-width integers or Python ints. Fixed-width
add/multiply escalate to a wider type only when the native operation would
overflow, so results always equal the unbounded computation.
"""

__version__ = "0.1.0"

from .errors import (
    ModularArithmeticError, InvalidModulus, IncompatibleModuli,
    NotInvertible, NonCoprimeModuli,
)
from .config import ArithmeticConfig, get_config, set_config, use_config
from .value import (
    ModularValue,
    add, subtract, multiply, divide, negate, equals,
    is_invertible, invert, power,
)
from .crt import crt, crt_pairwise, rns_encode, rns_decode

__all__ = [
    "ModularArithmeticError", "InvalidModulus", "IncompatibleModuli",
    "NotInvertible", "NonCoprimeModuli",
    "ArithmeticConfig", "get_config", "set_config", "use_config",
    "ModularValue",
    "add", "subtract", "multiply", "divide", "negate", "equals",
    "is_invertible", "invert", "power",
    "crt", "crt_pairwise", "rns_encode", "rns_decode",
]
