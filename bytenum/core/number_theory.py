"""
Integer square root and trial-division primality on magnitudes.

Both routines work on raw buffers and reuse the kernels directly instead of
going through `BigInt`, so the inner loops allocate as little as possible.

`is_prime` is exact but exponential in the input size: it tries every odd
divisor up to the square root. It is meant for exploration, not for
cryptographic-size values.
"""

from __future__ import annotations

import logging
from typing import Final

from ..kernels.bytewise import BYTE_MASK, add_into, compare, greater, sub_into
from ..kernels.divide import ShiftedDivisorCache, divide_into
from ..state.magnitude import Magnitude

logger = logging.getLogger(__name__)

_TWO: Final[bytes] = b"\x02"


def _leading_pair(top_byte: int) -> int:
    """Index (0..3) of the highest non-zero 2-bit group of a non-zero byte."""
    pair = 3
    while pair > 0 and top_byte < 1 << (2 * pair):
        pair -= 1
    return pair


def isqrt(magnitude: Magnitude) -> Magnitude:
    """
    floor(sqrt(magnitude)), digit by digit in base 4.

    Root bits are decided from the most significant down. With `r` the root
    so far and `p` the trial bit, keeping the bit costs
    `(r + 2**p)**2 - r**2 == (2*r + 2**p) * 2**p`; the running value `2*r` is
    kept in `twice_root` so that cost is one short multiply per bit.
    """
    n = magnitude.length
    if n == 0:
        return Magnitude.zero()

    remain = bytearray(n + 1)
    remain[:n] = magnitude.data[:n]

    top_bit = (n - 1) * 4 + _leading_pair(remain[n - 1])
    root_len = (n + 1) // 2
    root = bytearray(root_len)
    twice_root = bytearray(root_len + 1)

    byte_index, bit_offset = divmod(top_bit, 8)
    with memoryview(remain) as remain_view, memoryview(twice_root) as twice_view:
        while byte_index >= 0:
            while bit_offset >= 0:
                bit = 1 << bit_offset
                twice_root[byte_index] |= bit

                # trial = (2*r + 2**p) * 2**p; its low 2*byte_index bytes are zero.
                trial = bytearray(n + root_len + 2)
                acc = 0
                for j in range(byte_index, root_len + 1):
                    acc += twice_root[j] * bit
                    trial[byte_index + j] = acc & BYTE_MASK
                    acc >>= 8

                base = 2 * byte_index
                width = n - base
                window = remain_view[base:base + width]
                cost = trial[base:base + width]
                if greater(window, cost, width, equal=True):
                    sub_into(window, width, cost, width, window)
                    # 2*r gains 2**(p+1); the carry can reach the next byte only.
                    pair = twice_view[byte_index:byte_index + 2]
                    add_into(pair, 2, bytes((bit,)), 1, pair, 2)
                    pair.release()
                    root[byte_index] |= bit
                else:
                    twice_root[byte_index] ^= bit
                window.release()
                bit_offset -= 1
            byte_index -= 1
            bit_offset = 7

    return Magnitude.take(root)


def is_prime(magnitude: Magnitude, *, warn_bytes: int | None = None) -> bool:
    """
    Deterministic trial division by 3, 5, 7, ... up to isqrt(magnitude).

    Emits a warning through `logging` when the value is longer than
    `warn_bytes` bytes, since the running time grows with the square root of
    the value.
    """
    n = magnitude.length
    data = magnitude.data
    if n == 0:
        return False
    if n == 1 and data[0] <= 2:
        return data[0] == 2
    if data[0] % 2 == 0:
        return False

    if warn_bytes is not None and n > warn_bytes:
        logger.warning(
            "trial-division primality test on a %d-byte value; this may take a very long time",
            n,
        )

    limit = isqrt(magnitude)
    candidate = bytearray(limit.length + 2)
    candidate[0] = 3
    cand_len = 1
    q_len = n - cand_len + 1

    remain = bytearray(n + 1)
    quotient = bytearray(q_len)
    tried = 0
    while compare(limit.data, limit.length, candidate, cand_len) >= 0:
        remain[:n] = data[:n]
        remain[n] = 0
        quotient[:] = bytes(len(quotient))
        divide_into(ShiftedDivisorCache.build(candidate, cand_len), quotient, q_len, remain)
        tried += 1
        if not any(remain[:cand_len]):
            logger.debug("composite: divisor found after %d trial divisions", tried)
            return False

        add_into(candidate, cand_len, _TWO, 1, candidate, cand_len + 1)
        if candidate[cand_len]:
            cand_len += 1
            q_len -= 1

    logger.debug("prime: %d trial divisions up to a %d-byte limit", tried, limit.length)
    return True
