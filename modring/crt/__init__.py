"""
CRT (Chinese Remainder Theorem) module.

  - combine: crt_pairwise / crt over ModularValues
  - encoding: rns_encode / rns_decode for plain integers
"""

from .combine import crt, crt_pairwise
from .encoding import rns_decode, rns_encode

__all__ = [
    "crt", "crt_pairwise",
    "rns_encode", "rns_decode",
]
