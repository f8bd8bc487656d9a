"""Unit tests for segment classification and encoding."""

import pytest

from qrpay.segments import (Mode, get_total_bits, make_alphanumeric, make_bytes, make_eci,
                            make_numeric, make_segments)


def _bits(text: str):
    return tuple(int(c) for c in text.replace(" ", ""))


class TestMode:
    """Test mode constants."""

    def test_mode_indicators(self):
        assert Mode.NUMERIC.mode_bits == 0x1
        assert Mode.ALPHANUMERIC.mode_bits == 0x2
        assert Mode.BYTE.mode_bits == 0x4
        assert Mode.KANJI.mode_bits == 0x8
        assert Mode.ECI.mode_bits == 0x7

    @pytest.mark.parametrize("mode,version,expected", [
        (Mode.NUMERIC, 1, 10), (Mode.NUMERIC, 9, 10), (Mode.NUMERIC, 10, 12),
        (Mode.NUMERIC, 26, 12), (Mode.NUMERIC, 27, 14), (Mode.NUMERIC, 40, 14),
        (Mode.ALPHANUMERIC, 1, 9), (Mode.ALPHANUMERIC, 20, 11), (Mode.ALPHANUMERIC, 40, 13),
        (Mode.BYTE, 9, 8), (Mode.BYTE, 10, 16), (Mode.BYTE, 40, 16),
        (Mode.KANJI, 1, 8), (Mode.ECI, 40, 0),
    ])
    def test_char_count_bits_by_tier(self, mode, version, expected):
        assert mode.num_char_count_bits(version) == expected


class TestClassification:
    """Test that text is classified into exactly one mode."""

    def test_empty_text_has_no_segments(self):
        assert make_segments("") == []

    @pytest.mark.parametrize("text,mode", [
        ("0123456789", Mode.NUMERIC),
        ("HELLO WORLD", Mode.ALPHANUMERIC),
        ("AC-42", Mode.ALPHANUMERIC),
        ("$%*+-./:", Mode.ALPHANUMERIC),
        ("hello", Mode.BYTE),
        ("12a", Mode.BYTE),
        ("ST00012|Name=ООО", Mode.BYTE),
        ("٣", Mode.BYTE),  # non-ASCII digit
    ])
    def test_single_segment_mode(self, text, mode):
        segments = make_segments(text)
        assert len(segments) == 1
        assert segments[0].mode is mode

    def test_byte_segment_counts_utf8_bytes(self):
        seg = make_segments("é")[0]
        assert seg.num_chars == 2
        assert seg.bit_data == _bits("11000011 10101001")


class TestNumeric:
    """Test numeric packing."""

    def test_groups_of_three(self):
        seg = make_numeric("01234567")
        assert seg.num_chars == 8
        assert seg.bit_data == _bits("0000001100 0101011001 1000011")

    def test_single_trailing_digit(self):
        assert make_numeric("1234").bit_data == _bits("0001111011 0100")

    def test_rejects_non_digits(self):
        with pytest.raises(ValueError):
            make_numeric("12a")


class TestAlphanumeric:
    """Test alphanumeric packing."""

    def test_pairs_and_trailing_char(self):
        seg = make_alphanumeric("AC-42")
        assert seg.num_chars == 5
        assert seg.bit_data == _bits("00111001110 11100111001 000010")

    def test_even_length(self):
        assert make_alphanumeric("HE").bit_length == 11

    def test_rejects_lowercase(self):
        with pytest.raises(ValueError):
            make_alphanumeric("abc")


class TestBytesAndEci:
    """Test byte and ECI segments."""

    def test_bytes(self):
        seg = make_bytes(b"\x00\xff")
        assert seg.mode is Mode.BYTE
        assert seg.bit_data == _bits("00000000 11111111")

    def test_eci_forms(self):
        assert make_eci(26).bit_data == _bits("00011010")
        assert make_eci(200).bit_length == 16
        assert make_eci(200).bit_data[:2] == (1, 0)
        assert make_eci(999999).bit_length == 24
        assert make_eci(999999).bit_data[:3] == (1, 1, 0)

    @pytest.mark.parametrize("value", [-1, 1000000])
    def test_eci_out_of_range(self, value):
        with pytest.raises(ValueError):
            make_eci(value)

    def test_segment_is_immutable(self):
        seg = make_numeric("1")
        with pytest.raises(AttributeError):
            seg.num_chars = 2


class TestTotalBits:
    """Test header-inclusive bit counting."""

    def test_numeric_example(self):
        assert get_total_bits(make_segments("01234567"), 1) == 4 + 10 + 27

    def test_empty(self):
        assert get_total_bits([], 1) == 0

    def test_count_overflow_rejects_version(self):
        segments = [make_bytes(bytes(256))]
        assert get_total_bits(segments, 9) is None
        assert get_total_bits(segments, 10) == 4 + 16 + 256 * 8
