"""Tests for Mersenne31 field helpers."""

import pytest

from primitives.errors import DivisionByZero, InvalidInput
from primitives.field import FF, MERSENNE31_PRIME, ONE, ZERO, div, from_u32, inv


class TestFromU32:
    """Canonical embedding of unsigned 32-bit integers."""

    def test_small_values(self) -> None:
        """Small integers embed as themselves."""
        assert from_u32(0) == ZERO
        assert from_u32(1) == ONE
        assert int(from_u32(12345)) == 12345

    def test_largest_canonical(self) -> None:
        """p - 1 is the largest accepted value."""
        assert int(from_u32(MERSENNE31_PRIME - 1)) == MERSENNE31_PRIME - 1

    @pytest.mark.parametrize("value", [MERSENNE31_PRIME, 2**32 - 1])
    def test_non_canonical_rejected(self, value) -> None:
        """Values in [p, 2^32) would alias and are rejected."""
        with pytest.raises(InvalidInput):
            from_u32(value)

    @pytest.mark.parametrize("value", [-1, 2**32, 1.5, "7", True])
    def test_non_u32_rejected(self, value) -> None:
        """Negative, oversized and non-integer inputs are rejected."""
        with pytest.raises(InvalidInput):
            from_u32(value)


class TestDivision:
    """inv/div and the DivisionByZero contract."""

    def test_inverse(self) -> None:
        """a * inv(a) == 1."""
        a = FF(987654321)
        assert a * inv(a) == ONE

    def test_div(self) -> None:
        """div undoes multiplication."""
        a, b = FF(1234567), FF(7654321)
        assert div(a * b, b) == a

    def test_inverse_of_zero(self) -> None:
        """Inverting zero raises DivisionByZero."""
        with pytest.raises(DivisionByZero):
            inv(ZERO)

    def test_division_by_zero(self) -> None:
        """Dividing by zero raises DivisionByZero, which is a ZeroDivisionError."""
        with pytest.raises(ZeroDivisionError):
            div(ONE, ZERO)

    def test_minus_one_wraps(self) -> None:
        """p - 1 is -1."""
        assert FF(MERSENNE31_PRIME - 1) + ONE == ZERO
