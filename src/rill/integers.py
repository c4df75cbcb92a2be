INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1

_MODULUS = 2 ** 64


def wrap_int64(value: int) -> int:
    """Reduce an arbitrary Python int to a signed 64-bit two's-complement value."""
    return (value - INT64_MIN) % _MODULUS + INT64_MIN


def truncating_divide(dividend: int, divisor: int) -> int:
    # Python's // floors; integer division in Rill rounds toward zero.
    quotient = abs(dividend) // abs(divisor)
    if (dividend < 0) != (divisor < 0):
        quotient = -quotient
    return wrap_int64(quotient)
