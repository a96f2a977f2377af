"""WAD fixed-point math library.

All values are integers scaled by 10^18 ("WAD"). Multiplication and division
compute the exact full-precision product or quotient and round once, at the
final rescale, in the requested direction:

- ``*_up`` rounds toward +infinity
- ``*_down`` truncates

The logarithm and exponential use the digit-extraction tables and series
expansions of Balancer's LogExpMath.sol:
https://github.com/balancer-labs/balancer-v2-monorepo/blob/6c9e24e22d0c46cca6dd15861d3d33da61a60b98/pkg/solidity-utils/contracts/math/LogExpMath.sol

Results must fit an unsigned 256-bit word and intermediates a 512-bit one;
anything larger raises ArithmeticOverflow.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, localcontext

from g3m.errors import ArithmeticOverflow, DomainError

__all__ = [
    # Arithmetic
    "mul_down",
    "mul_up",
    "div_down",
    "div_up",
    "mul_div_down",
    "mul_div_up",
    # Log/exp
    "ln_wad",
    "exp_wad",
    "pow_wad",
    # Conversions
    "to_wad",
    "from_wad",
    # Signed helpers
    "div_trunc",
    # Constants
    "WAD",
    "ONE_20",
    "ONE_36",
    "UINT256_MAX",
    "UINT512_MAX",
]

# =============================================================================
# Constants
# =============================================================================

WAD = 10**18
ONE_20 = 10**20
ONE_36 = 10**36

UINT256_MAX = 2**256 - 1
UINT512_MAX = 2**512 - 1

MAX_NATURAL_EXPONENT = 130 * WAD  # e^130 is the max we can handle
MIN_NATURAL_EXPONENT = -41 * WAD  # below e^-41 the result rounds to zero

LN_36_LOWER_BOUND = WAD - 10**17  # 0.9
LN_36_UPPER_BOUND = WAD + 10**17  # 1.1

# 2^254 / ONE_20 - bounds the exponent so y * ln(x) cannot overflow
MILD_EXPONENT_BOUND = (1 << 254) // ONE_20

# x values are exponents (powers of 2), a values are e^x

# 18-decimal precision constants (for large values)
X_18 = {
    0: 128 * WAD,  # 2^7
    1: 64 * WAD,  # 2^6
}
A_18 = {
    0: 38877084059945950922200000000000000000000000000000000000,  # e^128
    1: 6235149080811616882910000000,  # e^64
}

# 20-decimal precision constants (for medium values)
X_20 = {
    2: 3_200_000_000_000_000_000_000,  # 2^5
    3: 1_600_000_000_000_000_000_000,  # 2^4
    4: 800_000_000_000_000_000_000,  # 2^3
    5: 400_000_000_000_000_000_000,  # 2^2
    6: 200_000_000_000_000_000_000,  # 2^1
    7: 100_000_000_000_000_000_000,  # 2^0
    8: 50_000_000_000_000_000_000,  # 2^-1
    9: 25_000_000_000_000_000_000,  # 2^-2
    10: 12_500_000_000_000_000_000,  # 2^-3
    11: 6_250_000_000_000_000_000,  # 2^-4
}
A_20 = {
    2: 7_896_296_018_268_069_516_100_000_000_000_000,  # e^32
    3: 888_611_052_050_787_263_676_000_000,  # e^16
    4: 298_095_798_704_172_827_474_000,  # e^8
    5: 5_459_815_003_314_423_907_810,  # e^4
    6: 738_905_609_893_065_022_723,  # e^2
    7: 271_828_182_845_904_523_536,  # e^1
    8: 164_872_127_070_012_814_685,  # e^0.5
    9: 128_402_541_668_774_148_407,  # e^0.25
    10: 113_314_845_306_682_631_683,  # e^0.125
    11: 106_449_445_891_785_942_956,  # e^0.0625
}


# =============================================================================
# Guards
# =============================================================================


def _check_operands(*values: int) -> None:
    """Reject operands outside the unsigned 256-bit range."""
    for v in values:
        if v < 0:
            raise DomainError(f"Fixed-point operand must be non-negative, got {v}")
        if v > UINT256_MAX:
            raise ArithmeticOverflow(f"Operand {v} exceeds uint256")


def _check_intermediate(value: int) -> int:
    if value > UINT512_MAX:
        raise ArithmeticOverflow(f"Intermediate {value} exceeds 512 bits")
    return value


def _check_result(value: int) -> int:
    if value > UINT256_MAX:
        raise ArithmeticOverflow(f"Result {value} exceeds uint256")
    return value


def div_trunc(a: int, b: int) -> int:
    """Integer division truncating toward zero.

    Python's // floors toward -inf; the log/exp series work on signed values
    and need truncation for negative intermediates.

    Examples:
        -7 // 3 = -3, div_trunc(-7, 3) = -2
    """
    if b == 0:
        raise DomainError("Division by zero in div_trunc")
    if (a >= 0) == (b >= 0):
        return a // b
    return -(abs(a) // abs(b))


# =============================================================================
# Rounding-aware multiply / divide
# =============================================================================


def mul_down(a: int, b: int) -> int:
    """Multiply with truncation: (a * b) // WAD"""
    return mul_div_down(a, b, WAD)


def mul_up(a: int, b: int) -> int:
    """Multiply with ceiling rounding."""
    return mul_div_up(a, b, WAD)


def div_down(a: int, b: int) -> int:
    """Divide with truncation: (a * WAD) // b"""
    return mul_div_down(a, WAD, b)


def div_up(a: int, b: int) -> int:
    """Divide with ceiling rounding."""
    return mul_div_up(a, WAD, b)


def mul_div_down(a: int, b: int, denominator: int) -> int:
    """Compute a * b / denominator in full precision, truncated.

    Raises:
        DomainError: If denominator is zero or any operand is negative
        ArithmeticOverflow: If the product exceeds 512 bits or the result 256 bits
    """
    _check_operands(a, b, denominator)
    if denominator == 0:
        raise DomainError("Fixed-point division by zero")
    product = _check_intermediate(a * b)
    return _check_result(product // denominator)


def mul_div_up(a: int, b: int, denominator: int) -> int:
    """Compute a * b / denominator in full precision, rounded up.

    Raises:
        DomainError: If denominator is zero or any operand is negative
        ArithmeticOverflow: If the product exceeds 512 bits or the result 256 bits
    """
    _check_operands(a, b, denominator)
    if denominator == 0:
        raise DomainError("Fixed-point division by zero")
    product = _check_intermediate(a * b)
    if product == 0:
        return 0
    return _check_result((product - 1) // denominator + 1)


# =============================================================================
# Logarithm and exponential
# =============================================================================


def _ln(a: int) -> int:
    """Natural logarithm of a positive WAD value, by digit extraction.

    Uses the arctanh series for the remaining fraction:
    ln(a) = 2 * (z + z^3/3 + z^5/5 + ...) with z = (a-1)/(a+1).
    """
    if a < WAD:
        # ln(a) = -ln(1/a)
        return -_ln((WAD * WAD) // a)

    sum_val = 0

    for i in range(2):
        if a >= A_18[i] * WAD:
            a //= A_18[i]
            sum_val += X_18[i]

    # Scale up to 20-decimal precision
    sum_val *= 100
    a *= 100

    for i in range(2, 12):
        if a >= A_20[i]:
            a = (a * ONE_20) // A_20[i]
            sum_val += X_20[i]

    z = ((a - ONE_20) * ONE_20) // (a + ONE_20)
    z_squared = (z * z) // ONE_20

    num = z
    series_sum = num

    for i in range(3, 12, 2):
        num = (num * z_squared) // ONE_20
        series_sum += num // i

    series_sum *= 2

    return (sum_val + series_sum) // 100


def _ln_36(x: int) -> int:
    """Natural logarithm with 36-decimal output, for x close to 1 WAD."""
    x *= WAD

    # z is negative when x < 1
    z = div_trunc((x - ONE_36) * ONE_36, x + ONE_36)
    z_squared = div_trunc(z * z, ONE_36)

    num = z
    series_sum = num

    for i in range(3, 16, 2):
        num = div_trunc(num * z_squared, ONE_36)
        series_sum += div_trunc(num, i)

    return series_sum * 2


def ln_wad(x: int) -> int:
    """Signed natural logarithm of a positive WAD value.

    Raises:
        DomainError: If x <= 0
        ArithmeticOverflow: If x does not fit a signed 256-bit word
    """
    if x <= 0:
        raise DomainError(f"ln undefined for non-positive input {x}")
    if x >= (1 << 255):
        raise ArithmeticOverflow(f"ln input {x} too large")
    if LN_36_LOWER_BOUND < x < LN_36_UPPER_BOUND:
        return div_trunc(_ln_36(x), WAD)
    return _ln(x)


def exp_wad(x: int) -> int:
    """Compute e^x for a signed WAD exponent.

    Exponents below MIN_NATURAL_EXPONENT underflow to zero.

    Raises:
        ArithmeticOverflow: If x > MAX_NATURAL_EXPONENT
    """
    if x > MAX_NATURAL_EXPONENT:
        raise ArithmeticOverflow(f"Exponent {x} exceeds e^130")
    if x < MIN_NATURAL_EXPONENT:
        return 0

    if x < 0:
        # e^-x = 1 / e^x
        return (WAD * WAD) // exp_wad(-x)

    if x >= X_18[0]:
        x -= X_18[0]
        first_an = A_18[0]
    elif x >= X_18[1]:
        x -= X_18[1]
        first_an = A_18[1]
    else:
        first_an = 1

    # Scale to 20-decimal precision
    x *= 100

    product = ONE_20
    for i in range(2, 10):
        if x >= X_20[i]:
            x -= X_20[i]
            product = (product * A_20[i]) // ONE_20

    # Taylor series: 1 + x + x^2/2! + ... + x^12/12!
    series_sum = ONE_20
    term = x
    series_sum += term

    for i in range(2, 13):
        term = ((term * x) // ONE_20) // i
        series_sum += term

    return (((product * series_sum) // ONE_20) * first_an) // 100


def pow_wad(base: int, exponent: int) -> int:
    """Compute base^exponent as exp(exponent * ln(base)).

    The exponent is a signed WAD value, so fractional and reciprocal powers
    are both supported: pow_wad(x, -WAD) is 1/x.

    Args:
        base: Non-negative WAD base
        exponent: Signed WAD exponent

    Returns:
        base^exponent as a WAD value

    Raises:
        DomainError: If base is negative, or zero with a non-positive exponent
        ArithmeticOverflow: If base or exponent is too large, or the result
            exceeds e^130
    """
    if base < 0:
        raise DomainError(f"pow base must be non-negative, got {base}")
    if base == 0:
        if exponent <= 0:
            raise DomainError(f"0 raised to non-positive exponent {exponent}")
        return 0
    if exponent == 0:
        return WAD

    if base >= (1 << 255):
        raise ArithmeticOverflow(f"Base {base} too large")
    if abs(exponent) >= MILD_EXPONENT_BOUND:
        raise ArithmeticOverflow(f"Exponent {exponent} exceeds bound")

    # Near 1 the 36-decimal logarithm keeps the small result precise
    if LN_36_LOWER_BOUND < base < LN_36_UPPER_BOUND:
        ln_36_x = _ln_36(base)
        quotient = div_trunc(ln_36_x, WAD)
        remainder = ln_36_x - quotient * WAD
        logx_times_y = quotient * exponent + div_trunc(remainder * exponent, WAD)
    else:
        logx_times_y = _ln(base) * exponent

    logx_times_y = div_trunc(logx_times_y, WAD)

    return _check_result(exp_wad(logx_times_y))


# =============================================================================
# Conversions
# =============================================================================


def to_wad(d: Decimal | int | str) -> int:
    """Convert a decimal quantity to WAD, rounding half up.

    Raises:
        DomainError: If the value is negative
    """
    value = Decimal(d)
    if value < 0:
        raise DomainError(f"to_wad requires non-negative input, got {value}")
    with localcontext() as ctx:
        ctx.prec = 80
        scaled = (value * WAD).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return int(scaled)


def from_wad(value: int) -> Decimal:
    """Convert a WAD value to Decimal for display."""
    return Decimal(value) / Decimal(WAD)
