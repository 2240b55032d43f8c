"""
Binary long division kernels.

The quotient is produced one byte at a time, most significant first, and
within each byte one bit at a time from bit 7 down to bit 0. Instead of
re-shifting the divisor for every bit, the eight shifts `divisor << 0..7`
are computed once (`ShiftedDivisorCache`) and compared against the working
remainder at byte offset `i`; together the byte offset and the cached bit
shift address every bit position of the quotient.

Decimal conversion divides by the constant 10 with the same machinery; its
cache is built once per process by `tens_cache()`.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache

from ..errors import DivisionByZeroError
from .bytewise import Buffer, MutableBuffer, greater, shift_bits, significant_length, sub_into


@dataclass(frozen=True)
class ShiftedDivisorCache:
    """
    The divisor left-shifted by 0..7 bits.

    Every variant is stored `width` bytes wide, one byte wider than the
    divisor, so a bit shifted past the divisor's top byte stays inside the
    comparison window.
    """

    variants: tuple[bytes, ...]
    width: int

    def __post_init__(self) -> None:
        if len(self.variants) != 8:
            raise ValueError(f"expected 8 shifted variants, got {len(self.variants)}")
        for v in self.variants:
            if len(v) != self.width:
                raise ValueError(f"variant width {len(v)} != {self.width}")

    @classmethod
    def build(cls, divisor: Buffer, divisor_len: int) -> "ShiftedDivisorCache":
        if divisor_len <= 0:
            raise ValueError("cannot build a shifted cache for a zero-length divisor")
        variants = []
        for shift in range(8):
            buf, _ = shift_bits(shift, divisor, divisor_len)
            variants.append(bytes(buf))
        return cls(variants=tuple(variants), width=divisor_len + 1)


@lru_cache(maxsize=1)
def tens_cache() -> ShiftedDivisorCache:
    """`10 << 0..7`, built on first use and shared read-only afterwards."""
    return ShiftedDivisorCache.build(b"\x0a", 1)


def divide_into(
    cache: ShiftedDivisorCache,
    quotient: MutableBuffer,
    q_len: int,
    remain: bytearray,
) -> None:
    """
    Divide `remain` by the cached divisor, in place.

    On entry `remain` holds the dividend; on return it holds the remainder
    and the quotient bits have been OR-ed into `quotient[:q_len]` (pass a
    zeroed buffer). `remain` must be at least `q_len - 1 + cache.width` bytes
    long, which leaves one byte of headroom above a dividend of
    `q_len + divisor_len - 1` bytes.
    """
    width = cache.width
    if len(remain) < q_len - 1 + width:
        raise ValueError(f"remainder buffer too short: {len(remain)} < {q_len - 1 + width}")

    variants = cache.variants
    with memoryview(remain) as view:
        for i in range(q_len - 1, -1, -1):
            window = view[i:i + width]
            for j in range(7, -1, -1):
                shifted = variants[j]
                if greater(window, shifted, width, equal=True):
                    quotient[i] |= 1 << j
                    sub_into(window, width, shifted, width, window)
            window.release()


def divide(
    dividend: Buffer,
    dividend_len: int,
    divisor: Buffer,
    divisor_len: int,
) -> tuple[bytearray, int, bytearray, int]:
    """
    Unsigned long division.

    Returns `(quotient, quotient_len, remainder, remainder_len)`; lengths are
    the allocated sizes, trim them with `significant_length`.

    Raises:
        DivisionByZeroError: If the divisor is zero.
    """
    dividend_len = significant_length(dividend, dividend_len)
    divisor_len = significant_length(divisor, divisor_len)
    if divisor_len == 0:
        raise DivisionByZeroError()

    if divisor_len > dividend_len or (
        divisor_len == dividend_len and greater(divisor, dividend, divisor_len)
    ):
        # |divisor| > |dividend|: quotient 0, remainder is the dividend itself.
        remainder = bytearray(dividend[:dividend_len])
        return bytearray(), 0, remainder, dividend_len

    remainder, remainder_len = shift_bits(0, dividend, dividend_len)
    q_len = dividend_len - divisor_len + 1
    quotient = bytearray(q_len)
    divide_into(ShiftedDivisorCache.build(divisor, divisor_len), quotient, q_len, remainder)
    return quotient, q_len, remainder, remainder_len
