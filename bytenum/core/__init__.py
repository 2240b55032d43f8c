"""
Signed arithmetic and number theory built on the kernel layer.
"""

from .bigint import BigInt
from .number_theory import is_prime, isqrt
from .text_codec import digit_at, format_decimal, format_hex, parse_decimal

__all__ = [
    "BigInt",
    "is_prime",
    "isqrt",
    "digit_at",
    "format_decimal",
    "format_hex",
    "parse_decimal",
]
