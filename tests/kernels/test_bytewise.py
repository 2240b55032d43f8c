"""Tests for bytenum/kernels/bytewise.py: compare, add, subtract, shift."""

from __future__ import annotations

import pytest
import hypothesis.strategies as st
from hypothesis import given

from bytenum.kernels.bytewise import (
    add,
    add_into,
    compare,
    greater,
    shift_bits,
    significant_length,
    sub,
    sub_into,
)


def _le(value: int, length: int) -> bytes:
    return value.to_bytes(length, "little")


# ---------------------------------------------------------------------------
# significant_length / greater / compare
# ---------------------------------------------------------------------------

class TestSignificantLength:
    def test_trims_high_zero_bytes(self):
        assert significant_length(b"\x01\x00\x00", 3) == 1

    def test_all_zero(self):
        assert significant_length(b"\x00\x00", 2) == 0

    def test_respects_given_length(self):
        # Byte 2 is outside the window and must not be looked at.
        assert significant_length(b"\x00\x00\x07", 2) == 0


class TestGreater:
    def test_high_byte_decides(self):
        assert greater(b"\x00\x02", b"\xff\x01", 2) is True
        assert greater(b"\xff\x01", b"\x00\x02", 2) is False

    def test_equal_returns_flag(self):
        assert greater(b"\x05\x05", b"\x05\x05", 2) is False
        assert greater(b"\x05\x05", b"\x05\x05", 2, equal=True) is True

    def test_works_on_memoryview_windows(self):
        buf = bytearray(b"\x00\x09\x01")
        with memoryview(buf) as view:
            window = view[1:3]
            assert greater(window, b"\x08\x01", 2)
            window.release()


class TestCompare:
    def test_longer_is_larger(self):
        assert compare(b"\x00\x01", 2, b"\xff", 1) == 1
        assert compare(b"\xff", 1, b"\x00\x01", 2) == -1

    def test_same_length(self):
        assert compare(b"\x01\x02", 2, b"\x02\x02", 2) == -1
        assert compare(b"\x01\x02", 2, b"\x01\x02", 2) == 0

    def test_both_zero(self):
        assert compare(b"", 0, b"", 0) == 0


# ---------------------------------------------------------------------------
# Addition
# ---------------------------------------------------------------------------

class TestAdd:
    def test_carry_grows_result(self):
        out, length = add(b"\xff", 1, b"\x01", 1)
        assert out == bytearray(b"\x00\x01")
        assert length == 2

    def test_shorter_first_operand_is_swapped(self):
        out, length = add(b"\x01", 1, b"\xff\xff", 2)
        assert out == bytearray(b"\x00\x00\x01")
        assert length == 3

    def test_add_into_returns_carry_without_headroom(self):
        buf = bytearray(b"\xff")
        assert add_into(buf, 1, b"\x01", 1, buf, 1) == 1
        assert buf == bytearray(b"\x00")

    def test_add_into_stores_carry_with_headroom(self):
        out = bytearray(3)
        assert add_into(b"\xff\xff", 2, b"\x01", 1, out, 3) == 0
        assert out == bytearray(b"\x00\x00\x01")

    @given(st.integers(min_value=0, max_value=2**96), st.integers(min_value=0, max_value=2**96))
    def test_matches_int(self, a, b):
        la = max(1, (a.bit_length() + 7) // 8)
        lb = max(1, (b.bit_length() + 7) // 8)
        out, _ = add(_le(a, la), la, _le(b, lb), lb)
        assert int.from_bytes(out, "little") == a + b


# ---------------------------------------------------------------------------
# Subtraction
# ---------------------------------------------------------------------------

class TestSub:
    def test_borrow_across_bytes(self):
        out, length = sub(b"\x00\x01", 2, b"\x01", 1)
        assert out == bytearray(b"\xff\x00")
        assert length == 2

    def test_equal_operands_give_zero(self):
        out, _ = sub(b"\x34\x12", 2, b"\x34\x12", 2)
        assert not any(out)

    def test_smaller_minuend_rejected(self):
        with pytest.raises(ValueError, match="smaller"):
            sub(b"\x01", 1, b"\x02", 1)

    def test_shorter_minuend_rejected(self):
        with pytest.raises(ValueError, match="shorter"):
            sub(b"\x01", 1, b"\x01\x01", 2)

    def test_sub_into_in_place(self):
        buf = bytearray(b"\x10\x27")  # 10000
        assert sub_into(buf, 2, b"\xe8\x03", 2, buf) == 0  # - 1000
        assert int.from_bytes(buf, "little") == 9000

    def test_sub_into_reports_borrow(self):
        out = bytearray(1)
        assert sub_into(b"\x00", 1, b"\x01", 1, out) == 1
        assert out == bytearray(b"\xff")


# ---------------------------------------------------------------------------
# Shifts
# ---------------------------------------------------------------------------

class TestShiftBits:
    def test_left_spills_into_new_byte(self):
        out, length = shift_bits(1, b"\x80", 1)
        assert out == bytearray(b"\x00\x01")
        assert length == 2

    def test_left_by_more_than_a_byte(self):
        out, length = shift_bits(9, b"\x01", 1)
        assert out == bytearray(b"\x00\x02\x00")
        assert length == 3

    def test_right_pulls_bits_down(self):
        out, length = shift_bits(-1, b"\x00\x01", 2)
        assert out == bytearray(b"\x80\x00")
        assert length == 2

    def test_right_by_whole_bytes(self):
        out, length = shift_bits(-8, b"\x01\x02", 2)
        assert out == bytearray(b"\x02")
        assert length == 1

    def test_right_past_the_value_is_empty(self):
        assert shift_bits(-16, b"\x01\x02", 2) == (bytearray(), 0)
        assert shift_bits(-40, b"\x01", 1) == (bytearray(), 0)

    def test_zero_offset_copies_with_headroom(self):
        src = bytearray(b"\x05")
        out, length = shift_bits(0, src, 1)
        assert out == bytearray(b"\x05\x00")
        assert length == 2
        out[0] = 9
        assert src == bytearray(b"\x05")

    @given(st.integers(min_value=1, max_value=2**80), st.integers(min_value=-90, max_value=90))
    def test_matches_int(self, a, offset):
        la = (a.bit_length() + 7) // 8
        out, _ = shift_bits(offset, _le(a, la), la)
        expected = a << offset if offset >= 0 else a >> -offset
        assert int.from_bytes(out, "little") == expected
