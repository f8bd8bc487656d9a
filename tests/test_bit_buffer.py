"""Unit tests for the bit emitter."""

import pytest

from qrpay.bit_buffer import append_bits, bits_to_codewords


class TestAppendBits:
    """Test appending fixed-width values."""

    def test_msb_first(self):
        bits = []
        append_bits(5, 4, bits)
        assert bits == [0, 1, 0, 1]

    def test_appends_to_existing_buffer(self):
        bits = [1]
        append_bits(0b10, 2, bits)
        assert bits == [1, 1, 0]

    def test_zero_width(self):
        bits = []
        append_bits(0, 0, bits)
        assert bits == []

    def test_full_width(self):
        bits = []
        append_bits((1 << 31) - 1, 31, bits)
        assert bits == [1] * 31

    @pytest.mark.parametrize("value,length", [(16, 4), (1, 0), (0, 32), (0, -1), (-1, 8)])
    def test_rejects_out_of_range(self, value, length):
        with pytest.raises(ValueError):
            append_bits(value, length, [])


class TestBitsToCodewords:
    """Test MSB-first byte packing."""

    def test_whole_bytes(self):
        bits = []
        append_bits(0xEC, 8, bits)
        append_bits(0x11, 8, bits)
        assert bits_to_codewords(bits) == [0xEC, 0x11]

    def test_partial_byte_is_zero_filled(self):
        assert bits_to_codewords([1, 0, 1]) == [0b10100000]

    def test_empty(self):
        assert bits_to_codewords([]) == []
