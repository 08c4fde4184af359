"""
Tests for the native-width layer (numpy dtypes, checked ops, widening).

Run with: pytest modring/rns/tests/test_native.py -v
"""

import random

import numpy as np
import pytest
import sys
import os

# Add repository root to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(os.path.abspath(__file__)), "..", "..", ".."))

from modring.rns.native import (
    normalize_dtype, promote_pair, promote_dtypes, fits, to_native, widen,
    checked_add, checked_mul,
    widening_add_mod, widening_mul_mod, widening_pow_mod, widening_product,
)

ALL_DTYPES = [np.int8, np.int16, np.int32, np.int64,
              np.uint8, np.uint16, np.uint32, np.uint64]


class TestDtypes:
    def test_normalize_unbounded(self):
        assert normalize_dtype(None) is None
        assert normalize_dtype(int) is None

    def test_normalize_numpy(self):
        assert normalize_dtype("int32") == np.dtype(np.int32)
        assert normalize_dtype(np.uint64) == np.dtype(np.uint64)

    @pytest.mark.parametrize("bad", ["float64", np.float32, "nonsense", bool])
    def test_normalize_rejects(self, bad):
        with pytest.raises(ValueError):
            normalize_dtype(bad)

    def test_promote_pair(self):
        assert promote_pair(np.dtype(np.int32), np.dtype(np.int64)) == np.dtype(np.int64)
        assert promote_pair(np.dtype(np.uint8), np.dtype(np.int8)) == np.dtype(np.int16)
        assert promote_pair(np.dtype(np.int64), np.dtype(np.uint64)) is None
        assert promote_pair(None, np.dtype(np.int32)) is None

    def test_promote_python_ints_are_weak(self):
        assert promote_dtypes(np.int32(1), 5) == np.dtype(np.int32)
        assert promote_dtypes(np.int8(1), np.int64(2)) == np.dtype(np.int64)
        assert promote_dtypes(5, 7) is None
        assert promote_dtypes(5, 7, default=np.dtype(np.int64)) == np.dtype(np.int64)

    def test_widen_ladder(self):
        dt = np.dtype(np.int8)
        seen = []
        while dt is not None:
            seen.append(dt.name)
            dt = widen(dt)
        assert seen == ["int8", "int16", "int32", "int64"]
        assert widen(np.dtype(np.uint32)) == np.dtype(np.uint64)
        assert widen(None) is None

    def test_to_native(self):
        v = to_native(-5, np.dtype(np.int16))
        assert isinstance(v, np.int16) and v == -5
        assert to_native(np.uint64(7), None) == 7
        with pytest.raises(OverflowError):
            to_native(128, np.dtype(np.int8))
        assert fits(2**200, None)
        assert not fits(-1, np.dtype(np.uint8))


class TestCheckedArithmetic:
    def test_add_boundary_int8(self):
        dt = np.dtype(np.int8)
        assert checked_add(100, 27, dt) == (127, False)
        assert checked_add(100, 28, dt) == (None, True)

    def test_add_boundary_uint64(self):
        dt = np.dtype(np.uint64)
        top = 2**64 - 1
        s, overflow = checked_add(top - 1, 1, dt)
        assert not overflow and int(s) == top
        assert checked_add(top - 1, 2, dt) == (None, True)

    def test_mul_boundary_int8(self):
        dt = np.dtype(np.int8)
        assert checked_mul(11, 11, dt) == (121, False)
        assert checked_mul(12, 11, dt) == (None, True)
        assert checked_mul(0, 127, dt) == (0, False)

    def test_mul_boundary_int64(self):
        dt = np.dtype(np.int64)
        s, overflow = checked_mul(2**31, 2**31 - 1, dt)
        assert not overflow and int(s) == 2**31 * (2**31 - 1)
        assert checked_mul(2**32, 2**31, dt) == (None, True)

    def test_unbounded_never_overflows(self):
        assert checked_add(2**64, 2**64, None) == (2**65, False)
        assert checked_mul(2**64, 2**64, None) == (2**128, False)


class TestWideningOps:
    """Overflow path must agree with Python big-int arithmetic."""

    @pytest.fixture
    def rng(self):
        return random.Random(2024)

    @pytest.mark.parametrize("dtype", ALL_DTYPES)
    def test_add_mul_near_max(self, dtype, rng):
        dt = np.dtype(dtype)
        top = int(np.iinfo(dt).max)
        for m in [top, top - 1, top - 12]:
            for _ in range(50):
                a = rng.randint(m // 2, m - 1)
                b = rng.randint(m // 2, m - 1)
                s = widening_add_mod(a, b, m, dt)
                p = widening_mul_mod(a, b, m, dt)
                assert isinstance(s, dt.type) and isinstance(p, dt.type)
                assert int(s) == (a + b) % m
                assert int(p) == (a * b) % m

    @pytest.mark.parametrize("dtype", ALL_DTYPES + [None])
    def test_pow_mod(self, dtype, rng):
        dt = normalize_dtype(dtype)
        top = int(np.iinfo(dt).max) if dt is not None else 2**100
        for _ in range(30):
            m = rng.randint(2, top)
            base = rng.randint(0, m - 1)
            exp = rng.randint(0, 10**6)
            assert int(widening_pow_mod(base, exp, m, dt)) == pow(base, exp, m)

    def test_pow_mod_trivial_ring(self):
        assert widening_pow_mod(0, 5, 1, np.dtype(np.int32)) == 0

    def test_product_escalates(self):
        p, dt = widening_product(100, 2, np.dtype(np.int8))
        assert int(p) == 200 and dt == np.dtype(np.int16)
        p, dt = widening_product(3, 5, np.dtype(np.int32))
        assert int(p) == 15 and dt == np.dtype(np.int32)
        p, dt = widening_product(2**62, 4, np.dtype(np.int64))
        assert p == 2**64 and dt is None
