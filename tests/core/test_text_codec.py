"""Tests for bytenum/core/text_codec.py: decimal/hex conversion and digit access."""

import pytest

from bytenum.core.text_codec import (
    digit_at,
    format_decimal,
    format_hex,
    iter_decimal_digits,
    parse_decimal,
)
from bytenum.errors import InvalidDigitError
from bytenum.state.magnitude import Magnitude


# ---------------------------------------------------------------------------
# parse_decimal
# ---------------------------------------------------------------------------

class TestParseDecimal:
    def test_plain(self):
        m, neg = parse_decimal("12345")
        assert m.to_int() == 12345
        assert neg is False

    def test_negative(self):
        m, neg = parse_decimal("-256")
        assert m.to_int() == 256
        assert neg is True

    def test_explicit_plus(self):
        m, neg = parse_decimal("+42")
        assert (m.to_int(), neg) == (42, False)

    def test_negative_zero_is_zero(self):
        m, neg = parse_decimal("-000")
        assert m.is_zero
        assert neg is False

    def test_leading_zeros(self):
        m, _ = parse_decimal("000123")
        assert m.to_int() == 123
        assert m.length == 1

    def test_large(self):
        text = "123456789012345678901234567890"
        m, _ = parse_decimal(text)
        assert m.to_int() == int(text)

    def test_all_nines_fit_the_buffer(self):
        m, _ = parse_decimal("9" * 41)
        assert m.to_int() == 10**41 - 1

    def test_prefix_length(self):
        m, _ = parse_decimal("12345", 3)
        assert m.to_int() == 123

    def test_prefix_length_out_of_range(self):
        with pytest.raises(ValueError):
            parse_decimal("12", 3)

    def test_invalid_digit_position(self):
        with pytest.raises(InvalidDigitError) as info:
            parse_decimal("12a4")
        assert info.value.position == 2
        assert info.value.text == "12a4"

    def test_invalid_digit_is_value_error(self):
        with pytest.raises(ValueError):
            parse_decimal("1 2")

    def test_non_ascii_digit_rejected(self):
        with pytest.raises(InvalidDigitError):
            parse_decimal("1٣")

    @pytest.mark.parametrize("text", ["", "-", "+"])
    def test_no_digits(self, text):
        with pytest.raises(InvalidDigitError, match="no digits") as info:
            parse_decimal(text)
        assert info.value.position == len(text)

    def test_sign_only_inside_prefix(self):
        with pytest.raises(InvalidDigitError):
            parse_decimal("-5", 1)

    def test_requires_str(self):
        with pytest.raises(TypeError):
            parse_decimal(b"12")  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------

class TestFormatDecimal:
    def test_zero(self):
        assert format_decimal(Magnitude.zero()) == "0"

    def test_zero_never_signed(self):
        assert format_decimal(Magnitude.zero(), negative=True) == "0"

    def test_value(self):
        assert format_decimal(Magnitude.from_int(1234567890123)) == "1234567890123"

    def test_negative(self):
        assert format_decimal(Magnitude.from_int(7), negative=True) == "-7"

    def test_powers_of_256(self):
        for k in range(1, 12):
            assert format_decimal(Magnitude.from_int(256**k)) == str(256**k)

    def test_digits_least_significant_first(self):
        assert list(iter_decimal_digits(Magnitude.from_int(120))) == [0, 2, 1]

    def test_digits_of_zero(self):
        assert list(iter_decimal_digits(Magnitude.zero())) == []

    def test_does_not_mutate_input(self):
        m = Magnitude.from_int(987654321)
        format_decimal(m)
        assert m.to_int() == 987654321


class TestFormatHex:
    def test_single_byte(self):
        assert format_hex(Magnitude.from_int(255)) == "FF"

    def test_two_digits_per_byte(self):
        assert format_hex(Magnitude.from_int(256)) == "0100"
        assert format_hex(Magnitude.from_int(10), negative=True) == "-0A"

    def test_zero(self):
        assert format_hex(Magnitude.zero()) == "00"


class TestDigitAt:
    def test_positions(self):
        m = Magnitude.from_int(12345)
        assert [digit_at(m, i) for i in range(5)] == [5, 4, 3, 2, 1]

    def test_past_the_top_is_zero(self):
        assert digit_at(Magnitude.from_int(12345), 5) == 0
        assert digit_at(Magnitude.from_int(12345), 50) == 0

    def test_zero_value(self):
        assert digit_at(Magnitude.zero(), 0) == 0

    def test_negative_index(self):
        with pytest.raises(IndexError):
            digit_at(Magnitude.from_int(1), -1)
