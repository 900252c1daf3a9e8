"""Checked uint256 arithmetic used by the valuation and fee math"""
from .constants import UINT256_MAX
from .errors import ArithmeticOverflowError


def checked_add(a: int, b: int) -> int:
    """Add with overflow checking"""
    result = a + b
    if result > UINT256_MAX:
        raise ArithmeticOverflowError("Arithmetic overflow in addition")
    return result


def checked_sub(a: int, b: int) -> int:
    """Subtract with underflow checking"""
    if b > a:
        raise ArithmeticOverflowError("Arithmetic underflow in subtraction")
    return a - b


def checked_mul(a: int, b: int) -> int:
    """Multiply with overflow checking"""
    result = a * b
    if result > UINT256_MAX:
        raise ArithmeticOverflowError("Arithmetic overflow in multiplication")
    return result


def checked_div(a: int, b: int) -> int:
    """Divide with zero checking"""
    if b == 0:
        raise ArithmeticOverflowError("Division by zero")
    return a // b


def saturating_sub(a: int, b: int) -> int:
    """a - b, clamped at zero"""
    return a - b if a > b else 0


def mul_div(a: int, b: int, denominator: int) -> int:
    """a * b / denominator rounded down"""
    return checked_div(checked_mul(a, b), denominator)


def mul_div_up(a: int, b: int, denominator: int) -> int:
    """a * b / denominator rounded up"""
    product = checked_mul(a, b)
    if denominator == 0:
        raise ArithmeticOverflowError("Division by zero")
    return -(-product // denominator)


def percent_of(amount: int, rate: int, one_hundred_percent: int) -> int:
    """Fee style percentage: amount * rate / 100%"""
    # amount * rate / ONE_HUNDRED_PERCENT
    return mul_div(amount, rate, one_hundred_percent)
