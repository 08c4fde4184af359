"""
Package configuration.

The only setting is the storage width used when a ModularValue is built
from two plain Python ints. It defaults to unbounded (Python int) and can
be preset through the MODRING_DEFAULT_DTYPE environment variable, e.g.::

    MODRING_DEFAULT_DTYPE=int64 python my_script.py
"""

import os
import warnings
from contextlib import contextmanager
from dataclasses import dataclass, replace
from typing import Iterator, Optional

from .rns.native import normalize_dtype

ENV_DEFAULT_DTYPE = "MODRING_DEFAULT_DTYPE"


@dataclass(frozen=True)
class ArithmeticConfig:
    """Configuration for value construction."""
    default_dtype: Optional[str] = None   # None = Python int (unbounded)

    def validate(self) -> "ArithmeticConfig":
        """Raise ValueError if default_dtype is not a numpy integer dtype."""
        normalize_dtype(self.default_dtype)
        return self


def load_config() -> ArithmeticConfig:
    """Build the configuration from the environment.

    An unusable dtype name in the environment is reported with a
    RuntimeWarning and ignored.
    """
    name = os.environ.get(ENV_DEFAULT_DTYPE, "").strip()
    if not name or name.lower() in ("none", "int", "python"):
        return ArithmeticConfig()
    try:
        return ArithmeticConfig(default_dtype=name).validate()
    except ValueError as exc:
        warnings.warn(
            f"{ENV_DEFAULT_DTYPE}={name!r} is not usable ({exc}); "
            "falling back to unbounded Python ints.",
            RuntimeWarning,
        )
        return ArithmeticConfig()


_config = load_config()


def get_config() -> ArithmeticConfig:
    return _config


def set_config(config: Optional[ArithmeticConfig] = None, **changes) -> ArithmeticConfig:
    """Replace the active configuration and return the previous one.

    Either pass a full ArithmeticConfig or keyword changes applied on top
    of the current one.
    """
    global _config
    previous = _config
    new = config if config is not None else _config
    if changes:
        new = replace(new, **changes)
    _config = new.validate()
    return previous


@contextmanager
def use_config(config: Optional[ArithmeticConfig] = None, **changes) -> Iterator[ArithmeticConfig]:
    """Temporarily switch configuration::

        with use_config(default_dtype="int64"):
            x = ModularValue(-2, 23)   # stored as int64
    """
    previous = set_config(config, **changes)
    try:
        yield _config
    finally:
        set_config(previous)
