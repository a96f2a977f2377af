"""Tests for WAD fixed-point arithmetic.

Rounding direction is the property the pool relies on, so most cases pin
the exact result of a division that does not come out even.
"""

from decimal import Decimal

import pytest

from g3m.errors import ArithmeticOverflow, DomainError
from g3m.math.fixed_point import (
    UINT256_MAX,
    WAD,
    div_down,
    div_trunc,
    div_up,
    exp_wad,
    from_wad,
    ln_wad,
    mul_div_down,
    mul_div_up,
    mul_down,
    mul_up,
    pow_wad,
    to_wad,
)

# e = 2.718281828459045235...
E_WAD = 2_718281828459045235


class TestMulDiv:
    """Tests for rounding-aware multiply and divide."""

    def test_mul_exact(self):
        """2 * 3 = 6 with no rounding in either direction."""
        assert mul_down(2 * WAD, 3 * WAD) == 6 * WAD
        assert mul_up(2 * WAD, 3 * WAD) == 6 * WAD

    def test_mul_rounding(self):
        """1 wei * 1 wei truncates to 0 and rounds up to 1."""
        assert mul_down(1, 1) == 0
        assert mul_up(1, 1) == 1

    def test_div_rounding(self):
        """1 / 3 differs by one wei between directions."""
        assert div_down(WAD, 3 * WAD) == 333_333_333_333_333_333
        assert div_up(WAD, 3 * WAD) == 333_333_333_333_333_334

    def test_div_up_of_zero(self):
        """Rounding up never turns zero into one."""
        assert div_up(0, 7) == 0
        assert mul_up(0, WAD) == 0

    def test_mul_div_single_rounding(self):
        """a * b / c is computed in full precision before rounding."""
        assert mul_div_down(10, 10, 3) == 33
        assert mul_div_up(10, 10, 3) == 34

    def test_mul_div_wide_intermediate(self):
        """A product wider than 256 bits is fine if the result fits."""
        assert mul_div_down(UINT256_MAX, UINT256_MAX, UINT256_MAX) == UINT256_MAX

    def test_division_by_zero(self):
        """Dividing by zero is a domain error."""
        with pytest.raises(DomainError):
            div_down(WAD, 0)
        with pytest.raises(DomainError):
            mul_div_up(1, 1, 0)

    def test_negative_operand(self):
        """Fixed-point operands are unsigned."""
        with pytest.raises(DomainError):
            mul_down(-1, WAD)

    def test_result_overflow(self):
        """A result above uint256 raises ArithmeticOverflow."""
        with pytest.raises(ArithmeticOverflow):
            mul_down(UINT256_MAX, 2 * WAD)

    def test_overflow_is_arithmetic_error(self):
        """ArithmeticOverflow can be caught as a builtin ArithmeticError."""
        with pytest.raises(ArithmeticError):
            mul_up(UINT256_MAX, UINT256_MAX)

    def test_div_trunc_rounds_toward_zero(self):
        """Signed division truncates; floor division would round -7 / 3 to -3."""
        assert div_trunc(7, 3) == 2
        assert div_trunc(-7, 3) == -2
        assert div_trunc(7, -3) == -2
        assert div_trunc(-6, 3) == -2
        with pytest.raises(DomainError):
            div_trunc(1, 0)


class TestLnExp:
    """Tests for the natural logarithm and exponential."""

    def test_ln_of_one(self):
        """ln(1) = 0 exactly."""
        assert ln_wad(WAD) == 0

    def test_ln_of_e(self):
        """ln(e) is 1 to within a few wei."""
        assert abs(ln_wad(E_WAD) - WAD) < 10**4

    def test_ln_below_one_is_negative(self):
        """ln(0.5) = -ln(2)."""
        assert ln_wad(WAD // 2) < 0
        assert abs(ln_wad(WAD // 2) + ln_wad(2 * WAD)) < 10**4

    def test_ln_near_one(self):
        """Inputs near 1 use the 36-decimal series."""
        # ln(1.05) = 0.0487901641694320...
        assert abs(ln_wad(105 * WAD // 100) - 48_790_164_169_432_000) < 10**5

    def test_ln_non_positive(self):
        """ln is undefined at and below zero."""
        with pytest.raises(DomainError):
            ln_wad(0)
        with pytest.raises(DomainError):
            ln_wad(-WAD)

    def test_exp_of_zero(self):
        """e^0 = 1 exactly."""
        assert exp_wad(0) == WAD

    def test_exp_of_one(self):
        """e^1 matches e to within a few wei."""
        assert abs(exp_wad(WAD) - E_WAD) < 10**4

    def test_exp_negative(self):
        """e^-1 = 1/e."""
        # 1/e = 0.367879441171442321...
        assert abs(exp_wad(-WAD) - 367_879_441_171_442_321) < 10**4

    def test_exp_underflow_is_zero(self):
        """Exponents below -41 round to zero."""
        assert exp_wad(-42 * WAD) == 0

    def test_exp_overflow(self):
        """Exponents above 130 overflow."""
        with pytest.raises(ArithmeticOverflow):
            exp_wad(131 * WAD)


class TestPow:
    """Tests for pow_wad."""

    def test_square_root(self):
        """4^0.5 = 2."""
        assert abs(pow_wad(4 * WAD, WAD // 2) - 2 * WAD) < 10**6

    def test_identity_exponent(self):
        """x^1 = x."""
        x = 123 * WAD + 456
        assert abs(pow_wad(x, WAD) - x) < 10**6

    def test_negative_exponent(self):
        """2^-1 = 0.5."""
        assert abs(pow_wad(2 * WAD, -WAD) - WAD // 2) < 10**4

    def test_zero_exponent(self):
        """x^0 = 1 for any positive x."""
        assert pow_wad(5 * WAD, 0) == WAD

    def test_one_to_any_power(self):
        """1^y = 1 exactly."""
        assert pow_wad(WAD, WAD // 3) == WAD

    def test_zero_base(self):
        """0^y = 0 for positive y, undefined otherwise."""
        assert pow_wad(0, WAD) == 0
        with pytest.raises(DomainError):
            pow_wad(0, 0)
        with pytest.raises(DomainError):
            pow_wad(0, -WAD)

    def test_negative_base(self):
        """A negative base is a domain error."""
        with pytest.raises(DomainError):
            pow_wad(-WAD, WAD)

    def test_result_overflow(self):
        """A result beyond e^130 overflows."""
        with pytest.raises(ArithmeticOverflow):
            pow_wad(10**6 * WAD, 100 * WAD)


class TestConversions:
    """Tests for Decimal <-> WAD conversions."""

    def test_to_wad(self):
        """Decimal strings scale by 1e18."""
        assert to_wad("1.5") == 3 * WAD // 2
        assert to_wad(Decimal("0.000000000000000001")) == 1

    def test_to_wad_rounds_half_up(self):
        """Half a wei rounds up."""
        assert to_wad("0.0000000000000000005") == 1

    def test_to_wad_negative(self):
        """Negative quantities are rejected."""
        with pytest.raises(DomainError):
            to_wad("-1")

    def test_from_wad(self):
        """WAD values convert back to exact decimals."""
        assert from_wad(3 * WAD // 2) == Decimal("1.5")
