"""
Schoolbook multiplication kernels.

`multiply` is long multiplication done in base 256: one partial product per
byte of the first operand, each added into the running total at that byte's
offset. There is deliberately no Karatsuba or other asymptotic speed-up.
"""

from __future__ import annotations

from .bytewise import BYTE_MASK, Buffer, MutableBuffer, add_into


def mul_small_into(buf: MutableBuffer, length: int, factor: int) -> int:
    """
    Multiply `buf[:length]` in place by a single-byte `factor`.

    Returns the carry that did not fit in `length` bytes.
    """
    if not 0 <= factor <= BYTE_MASK:
        raise ValueError(f"factor must fit in one byte: {factor}")
    acc = 0
    for i in range(length):
        acc += buf[i] * factor
        buf[i] = acc & BYTE_MASK
        acc >>= 8
    return acc


def multiply(a: Buffer, len_a: int, b: Buffer, len_b: int) -> tuple[bytearray, int]:
    """
    Return a fresh buffer holding `a * b` and its allocated length.

    The result is sized `len_a + len_b + 1`; trim it with `significant_length`.
    """
    total_len = len_a + len_b
    result = bytearray(total_len + 1)
    partial = bytearray(total_len)

    for i in range(len_a):
        digit = a[i]
        acc = 0
        for j in range(len_b):
            acc += digit * b[j]
            partial[i + j] = acc & BYTE_MASK
            acc >>= 8
        partial[i + len_b] = acc

        add_into(partial, total_len, result, total_len, result, total_len + 1)

        # Clear this row so the next partial product starts from zero.
        partial[i:i + len_b + 1] = bytes(len_b + 1)

    return result, total_len + 1
