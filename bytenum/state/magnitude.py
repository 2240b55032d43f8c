"""
Magnitude buffer: the unsigned part of a `BigInt`.

A magnitude owns a little-endian `bytearray` (its capacity) and tracks how
many of those bytes are significant. Bytes at or above `length` carry no
value; `length == 0` is the only representation of zero.

Ownership is explicit. `Magnitude.take()` adopts a buffer the caller has
just allocated and will not touch again (kernel results); every other
constructor copies.
"""

from __future__ import annotations

from ..kernels.bytewise import BYTE_MASK, ONE, Buffer, add_into, compare, significant_length, sub_into


class Magnitude:
    __slots__ = ("_data", "_length")

    def __init__(self, data: bytearray, length: int) -> None:
        if not isinstance(data, bytearray):
            raise TypeError(f"data must be a bytearray, got {type(data).__name__}")
        if not 0 <= length <= len(data):
            raise ValueError(f"length must be in [0, {len(data)}]: {length}")
        self._data = data
        self._length = length

    # -- constructors --------------------------------------------------------

    @classmethod
    def zero(cls) -> "Magnitude":
        return cls(bytearray(), 0)

    @classmethod
    def with_capacity(cls, capacity: int) -> "Magnitude":
        """A zero magnitude with `capacity` zeroed bytes reserved."""
        if capacity < 0:
            raise ValueError(f"capacity must be non-negative: {capacity}")
        return cls(bytearray(capacity), 0)

    @classmethod
    def take(cls, buf: bytearray, length: int | None = None) -> "Magnitude":
        """
        Adopt `buf` without copying and derive its significant length.

        The caller transfers ownership: it must not read or write `buf`
        afterwards.
        """
        if length is None:
            length = len(buf)
        return cls(buf, significant_length(buf, length))

    @classmethod
    def from_bytes(cls, data: Buffer) -> "Magnitude":
        """Copy little-endian `data`, dropping its most-significant zero bytes."""
        length = significant_length(data, len(data))
        return cls(bytearray(data[:length]), length)

    @classmethod
    def from_int(cls, value: int) -> "Magnitude":
        if not isinstance(value, int) or isinstance(value, bool):
            raise TypeError("value must be an int")
        if value < 0:
            raise ValueError(f"magnitude must be non-negative: {value}")
        out = bytearray()
        while value:
            out.append(value & BYTE_MASK)
            value >>= 8
        return cls(out, len(out))

    # -- accessors -----------------------------------------------------------

    @property
    def data(self) -> bytearray:
        """The backing buffer. Only bytes below `length` are meaningful."""
        return self._data

    @property
    def length(self) -> int:
        return self._length

    @property
    def capacity(self) -> int:
        return len(self._data)

    @property
    def is_zero(self) -> bool:
        return self._length == 0

    def significant(self) -> bytes:
        return bytes(self._data[:self._length])

    def copy(self) -> "Magnitude":
        """Deep copy sized to the significant length."""
        return Magnitude(bytearray(self._data[:self._length]), self._length)

    def to_int(self) -> int:
        return int.from_bytes(self._data[:self._length], "little")

    def compare(self, other: "Magnitude") -> int:
        return compare(self._data, self._length, other._data, other._length)

    # -- mutation ------------------------------------------------------------

    def normalize(self) -> None:
        """Re-derive `length` after the buffer was written in place."""
        self._length = significant_length(self._data, len(self._data))

    def add_one(self) -> None:
        """Increase by one in place, growing only when the carry needs a new byte."""
        if self._length == 0:
            if not self._data:
                self._data = bytearray(1)
            self._data[0] = 1
            self._length = 1
            return
        carry = add_into(self._data, self._length, ONE, 1, self._data, self._length)
        if not carry:
            return
        # Every byte wrapped to zero: 0xFFFF + 1 == 0x01_0000.
        if self.capacity > self._length:
            self._data[self._length] = 1
        else:
            grown = bytearray(self._length + 1)
            grown[self._length] = 1
            self._data = grown
        self._length += 1

    def sub_one(self) -> None:
        """Decrease a non-zero magnitude by one in place."""
        if self._length == 0:
            raise ValueError("cannot decrement a zero magnitude")
        sub_into(self._data, self._length, ONE, 1, self._data)
        # Only the leading byte can become zero: 0x01_0000 - 1 == 0xFFFF.
        if self._data[self._length - 1] == 0:
            self._length -= 1

    # -- dunder --------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Magnitude):
            return NotImplemented
        return self.compare(other) == 0

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Magnitude(le={self.significant().hex()!r}, length={self._length}, capacity={self.capacity})"
