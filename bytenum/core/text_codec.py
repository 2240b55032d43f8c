"""
Decimal and hexadecimal text conversion for magnitudes.

Decimal output divides by ten with the long-division kernel and the shared
`10 << 0..7` cache, one digit per pass, least significant digit first.
Decimal input runs the other way: multiply the accumulator by ten, add the
next digit.
"""

from __future__ import annotations

from typing import Final, Iterator

from ..errors import InvalidDigitError
from ..kernels.bytewise import add_into, significant_length
from ..kernels.divide import divide_into, tens_cache
from ..kernels.multiply import mul_small_into
from ..state.magnitude import Magnitude

# log10(256), rounded up: decimal digits needed per byte of magnitude.
DIGITS_PER_BYTE: Final[float] = 2.40824

_ZERO: Final[int] = ord("0")


def parse_decimal(text: str, length: int | None = None) -> tuple[Magnitude, bool]:
    """
    Parse an optionally signed decimal literal.

    Only the first `length` characters are read when `length` is given.
    Returns `(magnitude, is_negative)`; a zero value is never negative.

    Raises:
        InvalidDigitError: On a non-digit character, or when there are no digits.
    """
    if not isinstance(text, str):
        raise TypeError(f"text must be a str, got {type(text).__name__}")
    if length is not None:
        if not 0 <= length <= len(text):
            raise ValueError(f"length must be in [0, {len(text)}]: {length}")
        text = text[:length]

    negative = text.startswith("-")
    start = 1 if negative or text.startswith("+") else 0
    if start == len(text):
        raise InvalidDigitError(text, len(text))

    # Two decimal digits always fit in one byte (99 < 256).
    buf_len = (len(text) - start + 1) // 2
    buf = bytearray(buf_len)
    digit = bytearray(1)
    for pos in range(start, len(text)):
        value = ord(text[pos]) - _ZERO
        if not 0 <= value <= 9:
            raise InvalidDigitError(text, pos)
        mul_small_into(buf, buf_len, 10)
        digit[0] = value
        add_into(buf, buf_len, digit, 1, buf, buf_len)

    magnitude = Magnitude.take(buf)
    return magnitude, negative and not magnitude.is_zero


def iter_decimal_digits(magnitude: Magnitude) -> Iterator[int]:
    """Yield the decimal digits of `magnitude`, least significant first."""
    q_len = magnitude.length
    tens = tens_cache()
    remain = bytearray(q_len + 1)
    remain[:q_len] = magnitude.data[:q_len]
    quotient = bytearray(q_len + 1)
    while q_len > 0:
        divide_into(tens, quotient, q_len, remain)
        yield remain[0]
        # The remainder is below 10, so clearing byte 0 leaves a zeroed buffer
        # ready to collect the next quotient.
        remain[0] = 0
        remain, quotient = quotient, remain
        q_len = significant_length(remain, q_len)


def format_decimal(magnitude: Magnitude, negative: bool = False) -> str:
    if magnitude.is_zero:
        return "0"
    bound = int((magnitude.length + 1) * DIGITS_PER_BYTE) + 1
    out = bytearray(bound)
    index = bound
    for digit in iter_decimal_digits(magnitude):
        index -= 1
        out[index] = _ZERO + digit
    text = out[index:].decode("ascii")
    return "-" + text if negative else text


def format_hex(magnitude: Magnitude, negative: bool = False) -> str:
    """Uppercase hex, two digits per byte, most significant byte first."""
    if magnitude.is_zero:
        return "00"
    data = magnitude.data
    text = "".join(f"{data[i]:02X}" for i in range(magnitude.length - 1, -1, -1))
    return "-" + text if negative else text


def digit_at(magnitude: Magnitude, index: int) -> int:
    """
    Decimal digit at `index` (0 = least significant).

    Costs one division pass per position up to `index`. Positions past the
    most significant digit read as 0.
    """
    if index < 0:
        raise IndexError(f"digit index must be non-negative: {index}")
    for position, digit in enumerate(iter_decimal_digits(magnitude)):
        if position == index:
            return digit
    return 0
