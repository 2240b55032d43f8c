"""
Arbitrary-precision signed integer on top of byte buffers.

`BigInt` pairs a `Magnitude` with a sign flag and implements the signed
operators by dispatching to the sign-unaware kernels:

    this  other  op    magnitude rule        result sign
    +     +      add   |a| + |b|             +
    -     -      add   |a| + |b|             -
    +/-   -/+    add   larger - smaller      sign of the larger magnitude

Subtraction is addition with the second operand's sign flipped.

Division truncates toward zero and the remainder takes the dividend's sign,
as `decimal.Decimal` does; `//` and `/` both return that quotient.

Every operator returns a new value with its own buffer. Compound assignments
(`+=`, `<<=`, ...) and `increment()` / `decrement()` mutate the left operand
instead, so `BigInt` is unhashable.
"""

from __future__ import annotations

from typing import Optional

from ..config import get_config
from ..errors import DivisionByZeroError, NegativeSquareRootError
from ..kernels.bytewise import Buffer, add, shift_bits, sub
from ..kernels.divide import divide
from ..kernels.multiply import multiply
from ..state.magnitude import Magnitude
from . import number_theory, text_codec


def _coerce(value: object) -> Optional["BigInt"]:
    if isinstance(value, BigInt):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return BigInt(value)
    return None


def _require_shift(bits: object) -> int:
    if not isinstance(bits, int) or isinstance(bits, bool):
        raise TypeError(f"shift count must be an int, got {type(bits).__name__}")
    if bits < 0:
        raise ValueError(f"negative shift count: {bits}")
    return bits


# -- magnitude-level sign rules ----------------------------------------------

def _add_signed(a: Magnitude, a_neg: bool, b: Magnitude, b_neg: bool) -> tuple[Magnitude, bool]:
    if a.is_zero:
        return b.copy(), b_neg
    if b.is_zero:
        return a.copy(), a_neg

    if a_neg == b_neg:
        buf, _ = add(a.data, a.length, b.data, b.length)
        return Magnitude.take(buf), a_neg

    if a.compare(b) > 0:
        buf, _ = sub(a.data, a.length, b.data, b.length)
        return Magnitude.take(buf), a_neg
    buf, _ = sub(b.data, b.length, a.data, a.length)
    return Magnitude.take(buf), b_neg


def _mul_signed(a: Magnitude, a_neg: bool, b: Magnitude, b_neg: bool) -> tuple[Magnitude, bool]:
    if a.is_zero or b.is_zero:
        return Magnitude.zero(), False
    buf, _ = multiply(a.data, a.length, b.data, b.length)
    return Magnitude.take(buf), a_neg != b_neg


def _divmod_signed(
    a: Magnitude, a_neg: bool, b: Magnitude, b_neg: bool
) -> tuple[tuple[Magnitude, bool], tuple[Magnitude, bool]]:
    if b.is_zero:
        raise DivisionByZeroError()
    q_buf, _, r_buf, _ = divide(a.data, a.length, b.data, b.length)
    return (Magnitude.take(q_buf), a_neg != b_neg), (Magnitude.take(r_buf), a_neg)


class BigInt:
    __slots__ = ("_magnitude", "_negative")

    def __init__(self, value: int = 0) -> None:
        if not isinstance(value, int) or isinstance(value, bool):
            raise TypeError(f"value must be an int, got {type(value).__name__}")
        self._magnitude = Magnitude.from_int(-value if value < 0 else value)
        self._negative = value < 0

    # -- constructors --------------------------------------------------------

    @classmethod
    def _adopt(cls, magnitude: Magnitude, negative: bool) -> "BigInt":
        obj = cls.__new__(cls)
        obj._magnitude = magnitude
        obj._negative = negative and not magnitude.is_zero
        return obj

    @classmethod
    def from_int(cls, value: int) -> "BigInt":
        return cls(value)

    @classmethod
    def from_bytes(cls, data: Buffer, negative: bool = False) -> "BigInt":
        """Copy a little-endian magnitude; the caller keeps its buffer."""
        return cls._adopt(Magnitude.from_bytes(data), bool(negative))

    @classmethod
    def from_owned_buffer(cls, buf: bytearray, negative: bool = False) -> "BigInt":
        """
        Build a value on `buf` without copying it.

        Ownership moves to the new value; the caller must drop every reference
        to `buf`. Use `from_bytes` for data the caller still needs.
        """
        if not isinstance(buf, bytearray):
            raise TypeError(f"buf must be a bytearray, got {type(buf).__name__}")
        return cls._adopt(Magnitude.take(buf), bool(negative))

    @classmethod
    def with_capacity(cls, capacity: int) -> "BigInt":
        """Zero, with `capacity` bytes already allocated."""
        return cls._adopt(Magnitude.with_capacity(capacity), False)

    @classmethod
    def from_decimal(cls, text: str, length: Optional[int] = None) -> "BigInt":
        """
        Parse a signed decimal string (optionally only its first `length` chars).

        Raises:
            InvalidDigitError: If the text contains anything but an optional
                leading sign followed by at least one digit.
        """
        magnitude, negative = text_codec.parse_decimal(text, length)
        return cls._adopt(magnitude, negative)

    # -- accessors -----------------------------------------------------------

    @property
    def is_negative(self) -> bool:
        return self._negative

    @property
    def is_zero(self) -> bool:
        return self._magnitude.is_zero

    @property
    def byte_length(self) -> int:
        """Allocated bytes, which may exceed the significant length."""
        return self._magnitude.capacity

    @property
    def significant_length(self) -> int:
        return self._magnitude.length

    def raw_bytes(self) -> bytes:
        """Little-endian magnitude without superfluous zero bytes."""
        return self._magnitude.significant()

    def copy(self) -> "BigInt":
        return BigInt._adopt(self._magnitude.copy(), self._negative)

    __copy__ = copy

    def __deepcopy__(self, memo: dict) -> "BigInt":
        return self.copy()

    def _assign(self, result: tuple[Magnitude, bool]) -> "BigInt":
        magnitude, negative = result
        self._magnitude = magnitude
        self._negative = negative and not magnitude.is_zero
        return self

    # -- arithmetic ----------------------------------------------------------

    def __neg__(self) -> "BigInt":
        return BigInt._adopt(self._magnitude.copy(), not self._negative)

    def __pos__(self) -> "BigInt":
        return self.copy()

    def __abs__(self) -> "BigInt":
        return BigInt._adopt(self._magnitude.copy(), False)

    def __add__(self, other: object) -> "BigInt":
        rhs = _coerce(other)
        if rhs is None:
            return NotImplemented
        return BigInt._adopt(*_add_signed(self._magnitude, self._negative, rhs._magnitude, rhs._negative))

    __radd__ = __add__

    def __sub__(self, other: object) -> "BigInt":
        rhs = _coerce(other)
        if rhs is None:
            return NotImplemented
        return BigInt._adopt(*_add_signed(self._magnitude, self._negative, rhs._magnitude, not rhs._negative))

    def __rsub__(self, other: object) -> "BigInt":
        lhs = _coerce(other)
        if lhs is None:
            return NotImplemented
        return lhs - self

    def __mul__(self, other: object) -> "BigInt":
        rhs = _coerce(other)
        if rhs is None:
            return NotImplemented
        return BigInt._adopt(*_mul_signed(self._magnitude, self._negative, rhs._magnitude, rhs._negative))

    __rmul__ = __mul__

    def __divmod__(self, other: object) -> tuple["BigInt", "BigInt"]:
        rhs = _coerce(other)
        if rhs is None:
            return NotImplemented
        q, r = _divmod_signed(self._magnitude, self._negative, rhs._magnitude, rhs._negative)
        return BigInt._adopt(*q), BigInt._adopt(*r)

    def __rdivmod__(self, other: object) -> tuple["BigInt", "BigInt"]:
        lhs = _coerce(other)
        if lhs is None:
            return NotImplemented
        return divmod(lhs, self)

    def __floordiv__(self, other: object) -> "BigInt":
        rhs = _coerce(other)
        if rhs is None:
            return NotImplemented
        q, _ = _divmod_signed(self._magnitude, self._negative, rhs._magnitude, rhs._negative)
        return BigInt._adopt(*q)

    def __rfloordiv__(self, other: object) -> "BigInt":
        lhs = _coerce(other)
        if lhs is None:
            return NotImplemented
        return lhs // self

    __truediv__ = __floordiv__
    __rtruediv__ = __rfloordiv__

    def __mod__(self, other: object) -> "BigInt":
        rhs = _coerce(other)
        if rhs is None:
            return NotImplemented
        _, r = _divmod_signed(self._magnitude, self._negative, rhs._magnitude, rhs._negative)
        return BigInt._adopt(*r)

    def __rmod__(self, other: object) -> "BigInt":
        lhs = _coerce(other)
        if lhs is None:
            return NotImplemented
        return lhs % self

    def __lshift__(self, bits: int) -> "BigInt":
        bits = _require_shift(bits)
        if bits == 0 or self.is_zero:
            return self.copy()
        buf, _ = shift_bits(bits, self._magnitude.data, self._magnitude.length)
        return BigInt._adopt(Magnitude.take(buf), self._negative)

    def __rshift__(self, bits: int) -> "BigInt":
        """Shift the magnitude right, keeping the sign: -5 >> 1 == -2."""
        bits = _require_shift(bits)
        if bits == 0 or self.is_zero:
            return self.copy()
        buf, _ = shift_bits(-bits, self._magnitude.data, self._magnitude.length)
        return BigInt._adopt(Magnitude.take(buf), self._negative)

    def square(self) -> "BigInt":
        return self * self

    # -- compound assignment -------------------------------------------------

    def __iadd__(self, other: object) -> "BigInt":
        rhs = _coerce(other)
        if rhs is None:
            return NotImplemented
        return self._assign(_add_signed(self._magnitude, self._negative, rhs._magnitude, rhs._negative))

    def __isub__(self, other: object) -> "BigInt":
        rhs = _coerce(other)
        if rhs is None:
            return NotImplemented
        return self._assign(_add_signed(self._magnitude, self._negative, rhs._magnitude, not rhs._negative))

    def __imul__(self, other: object) -> "BigInt":
        rhs = _coerce(other)
        if rhs is None:
            return NotImplemented
        return self._assign(_mul_signed(self._magnitude, self._negative, rhs._magnitude, rhs._negative))

    def __ifloordiv__(self, other: object) -> "BigInt":
        rhs = _coerce(other)
        if rhs is None:
            return NotImplemented
        q, _ = _divmod_signed(self._magnitude, self._negative, rhs._magnitude, rhs._negative)
        return self._assign(q)

    __itruediv__ = __ifloordiv__

    def __imod__(self, other: object) -> "BigInt":
        rhs = _coerce(other)
        if rhs is None:
            return NotImplemented
        _, r = _divmod_signed(self._magnitude, self._negative, rhs._magnitude, rhs._negative)
        return self._assign(r)

    def __ilshift__(self, bits: int) -> "BigInt":
        shifted = self << bits
        return self._assign((shifted._magnitude, shifted._negative))

    def __irshift__(self, bits: int) -> "BigInt":
        shifted = self >> bits
        return self._assign((shifted._magnitude, shifted._negative))

    def increment(self) -> "BigInt":
        """`++x`: add one in place and return the updated value."""
        if self._negative:
            self._magnitude.sub_one()
            self._negative = not self._magnitude.is_zero
        else:
            self._magnitude.add_one()
        return self

    def decrement(self) -> "BigInt":
        """`--x`: subtract one in place and return the updated value."""
        if self._negative or self.is_zero:
            self._magnitude.add_one()
            self._negative = True
        else:
            self._magnitude.sub_one()
        return self

    def post_increment(self) -> "BigInt":
        """`x++`: add one in place and return a snapshot of the previous value."""
        previous = self.copy()
        self.increment()
        return previous

    def post_decrement(self) -> "BigInt":
        """`x--`: subtract one in place and return a snapshot of the previous value."""
        previous = self.copy()
        self.decrement()
        return previous

    # -- number theory -------------------------------------------------------

    def sqrt(self, ignore_sign: bool = False, *, policy: Optional[str] = None) -> "BigInt":
        """
        floor(sqrt(self)).

        With `ignore_sign` the root of |self| is returned. Otherwise a negative
        value follows `policy` (default: the configured
        `negative_sqrt_policy`): "zero" returns 0, "raise" raises
        NegativeSquareRootError.
        """
        if self._negative and not ignore_sign:
            policy = policy or get_config().negative_sqrt_policy
            if policy == "raise":
                raise NegativeSquareRootError(f"square root of a negative value: {self}")
            if policy != "zero":
                raise ValueError(f"unknown negative_sqrt_policy: {policy!r}")
            return BigInt()
        return BigInt._adopt(number_theory.isqrt(self._magnitude), False)

    def is_prime(self) -> bool:
        """
        Trial-division primality. Values below 2 (including every negative
        value) are not prime.

        WARNING: exact but exponential in the number of bytes; do not use on
        cryptographic-size values.
        """
        if self._negative:
            return False
        return number_theory.is_prime(self._magnitude, warn_bytes=get_config().prime_warn_bytes)

    # -- comparison ----------------------------------------------------------

    def _compare(self, other: "BigInt") -> int:
        if self._negative != other._negative:
            return -1 if self._negative else 1
        c = self._magnitude.compare(other._magnitude)
        return -c if self._negative else c

    def __eq__(self, other: object) -> bool:
        rhs = _coerce(other)
        if rhs is None:
            return NotImplemented
        return self._compare(rhs) == 0

    def __lt__(self, other: object) -> bool:
        rhs = _coerce(other)
        if rhs is None:
            return NotImplemented
        return self._compare(rhs) < 0

    def __le__(self, other: object) -> bool:
        rhs = _coerce(other)
        if rhs is None:
            return NotImplemented
        return self._compare(rhs) <= 0

    def __gt__(self, other: object) -> bool:
        rhs = _coerce(other)
        if rhs is None:
            return NotImplemented
        return self._compare(rhs) > 0

    def __ge__(self, other: object) -> bool:
        rhs = _coerce(other)
        if rhs is None:
            return NotImplemented
        return self._compare(rhs) >= 0

    __hash__ = None  # type: ignore[assignment]

    def __bool__(self) -> bool:
        return not self._magnitude.is_zero

    # -- conversion ----------------------------------------------------------

    def __int__(self) -> int:
        value = self._magnitude.to_int()
        return -value if self._negative else value

    def to_decimal(self) -> str:
        return text_codec.format_decimal(self._magnitude, self._negative)

    def to_hex(self) -> str:
        """Signed uppercase hex, two digits per byte: 255 -> "FF", -10 -> "-0A", 0 -> "00"."""
        return text_codec.format_hex(self._magnitude, self._negative)

    def digit(self, index: int) -> int:
        """Decimal digit at `index`, 0 being the least significant. Slow: O(index * length)."""
        if not isinstance(index, int) or isinstance(index, bool):
            raise TypeError(f"digit index must be an int, got {type(index).__name__}")
        return text_codec.digit_at(self._magnitude, index)

    __getitem__ = digit
    # Digits past the top read as 0, so the legacy sequence protocol would never stop.
    __iter__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        return self.to_decimal()

    def __repr__(self) -> str:
        return f"BigInt({self.to_decimal()})"
