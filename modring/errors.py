"""
Error taxonomy for modular arithmetic.

Every error is a caller-input error. Each one derives from
ModularArithmeticError and from the builtin exception closest in meaning,
so ``except ValueError`` / ``except ZeroDivisionError`` keep working.
"""


class ModularArithmeticError(ArithmeticError):
    """Base class for all modring errors."""


class InvalidModulus(ModularArithmeticError, ValueError):
    """Modulus below 1, or too large for the requested integer width."""


class IncompatibleModuli(ModularArithmeticError, ValueError):
    """Binary operation on two values with different moduli."""


class NotInvertible(ModularArithmeticError, ZeroDivisionError):
    """Inversion of a value that shares a factor with its modulus."""


class NonCoprimeModuli(ModularArithmeticError, ValueError):
    """CRT combination of moduli sharing a common factor > 1."""
