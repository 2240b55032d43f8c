"""
Byte-wise magnitude kernels: compare, add, subtract, shift.

All buffers are little-endian (index 0 is the least significant byte) and
carry no sign. Lengths are passed explicitly because a buffer may be longer
than the part of it that holds the value; a `memoryview` slice stands in for
"pointer + offset" wherever a kernel must operate on the middle of a buffer.

Carries are computed with plain widened ints: a byte-sum never exceeds
0x1FF and the carry is simply `acc >> 8`.
"""

from __future__ import annotations

from typing import Final, Union

Buffer = Union[bytes, bytearray, memoryview]
MutableBuffer = Union[bytearray, memoryview]

BYTE_MASK: Final[int] = 0xFF

# Shared read-only operand for increment/decrement.
ONE: Final[bytes] = b"\x01"


def significant_length(buf: Buffer, length: int) -> int:
    """Length of `buf[:length]` without its most-significant zero bytes."""
    while length > 0 and buf[length - 1] == 0:
        length -= 1
    return length


def greater(a: Buffer, b: Buffer, length: int, equal: bool = False) -> bool:
    """
    True when `a[:length] > b[:length]` as unsigned integers.

    Returns `equal` when both windows hold the same value, which lets callers
    ask for ">=" without a second pass.
    """
    for i in range(length - 1, -1, -1):
        x = a[i]
        y = b[i]
        if x > y:
            return True
        if x < y:
            return False
    return equal


def compare(a: Buffer, len_a: int, b: Buffer, len_b: int) -> int:
    """Three-way compare of two trimmed magnitudes: -1, 0 or 1."""
    if len_a != len_b:
        return 1 if len_a > len_b else -1
    for i in range(len_a - 1, -1, -1):
        x = a[i]
        y = b[i]
        if x != y:
            return 1 if x > y else -1
    return 0


def add_into(
    a: Buffer,
    len_a: int,
    b: Buffer,
    len_b: int,
    out: MutableBuffer,
    out_len: int,
) -> int:
    """
    Write `a + b` into `out` and return the carry left over.

    `len_a` must be >= `len_b`. When `out_len > len_a` the final carry is
    stored at `out[len_a]` (and 0 is returned); otherwise it is returned so
    the caller can react to the overflow. `out` may alias `a` or `b`.
    """
    acc = 0
    for i in range(len_b):
        acc += a[i] + b[i]
        out[i] = acc & BYTE_MASK
        acc >>= 8
    for i in range(len_b, len_a):
        acc += a[i]
        out[i] = acc & BYTE_MASK
        acc >>= 8
    if out_len > len_a:
        out[len_a] = acc
        return 0
    return acc


def add(a: Buffer, len_a: int, b: Buffer, len_b: int) -> tuple[bytearray, int]:
    """
    Return a fresh buffer holding `a + b` and its allocated length.

    The result always reserves one byte more than the longer operand for the
    final carry; trim it with `significant_length`.
    """
    if len_a < len_b:
        a, len_a, b, len_b = b, len_b, a, len_a
    out_len = len_a + 1
    out = bytearray(out_len)
    add_into(a, len_a, b, len_b, out, out_len)
    return out, out_len


def sub_into(a: Buffer, len_a: int, b: Buffer, len_b: int, out: MutableBuffer) -> int:
    """
    Write `a - b` into `out[:len_a]` and return the final borrow.

    Requires `a >= b` and `len_a >= len_b`; a non-zero return value means the
    precondition was violated and `out` holds the value modulo 256**len_a.
    `out` may alias `a` or `b`.
    """
    borrow = 0
    for i in range(len_b):
        diff = a[i] - borrow - b[i]
        out[i] = diff & BYTE_MASK
        # diff >> 8 is -1 on underflow, 0 otherwise.
        borrow = -(diff >> 8)
    for i in range(len_b, len_a):
        diff = a[i] - borrow
        out[i] = diff & BYTE_MASK
        borrow = -(diff >> 8)
    return borrow


def sub(a: Buffer, len_a: int, b: Buffer, len_b: int) -> tuple[bytearray, int]:
    """Return a fresh buffer holding `a - b` (no extra byte: the result is <= `a`)."""
    if len_a < len_b:
        raise ValueError(f"minuend is shorter than subtrahend: {len_a} < {len_b}")
    out = bytearray(len_a)
    if sub_into(a, len_a, b, len_b, out):
        raise ValueError("minuend is smaller than subtrahend")
    return out, len_a


def shift_bits(offset: int, a: Buffer, len_a: int) -> tuple[bytearray, int]:
    """
    Shift `a[:len_a]` by `offset` bits into a fresh buffer.

    Positive offsets shift left (multiply by 2**offset), negative offsets
    shift right. An offset of 0 returns a copy with one extra zero byte of
    headroom, which division uses for its working remainder.
    """
    if offset > 0:
        off_bytes, off_bits = divmod(offset, 8)
        spill = 8 - off_bits
        out_len = len_a + off_bytes + 1
        out = bytearray(out_len)
        for i in range(len_a):
            byte = a[i]
            out[i + off_bytes] |= (byte << off_bits) & BYTE_MASK
            # The high bits that no longer fit are carried into the next byte.
            out[i + off_bytes + 1] = byte >> spill
        return out, out_len

    if offset < 0:
        off_bytes, off_bits = divmod(-offset, 8)
        out_len = len_a - off_bytes
        if out_len <= 0:
            return bytearray(), 0
        spill = 8 - off_bits
        out = bytearray(out_len)
        for i in range(off_bytes, len_a - 1):
            out[i - off_bytes] = ((a[i] >> off_bits) | (a[i + 1] << spill)) & BYTE_MASK
        out[out_len - 1] = a[len_a - 1] >> off_bits
        return out, out_len

    out = bytearray(len_a + 1)
    out[:len_a] = a[:len_a]
    return out, len_a + 1
