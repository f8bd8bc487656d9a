# -*- coding: utf-8 -*-
"""
Bit Buffer Module

Helpers for building the QR data bit stream. A bit stream is a plain list of
ints (0 or 1), most significant bit first.

Functions:
    append_bits: Append an unsigned integer of a fixed bit width
    bits_to_codewords: Pack a bit stream into 8-bit codewords
"""

from typing import List, Sequence


def append_bits(value: int, length: int, buffer: List[int]) -> None:
    """
    Append ``value`` to ``buffer`` as ``length`` bits, MSB first.

    Args:
        value (int): Non-negative integer to append
        length (int): Bit width, 0..31
        buffer (List[int]): Bit stream to extend in place

    Raises:
        ValueError: If the width is out of range or the value does not fit

    Example:
        >>> bb = []
        >>> append_bits(5, 4, bb)
        >>> bb
        [0, 1, 0, 1]
    """
    if length < 0 or length > 31 or value < 0 or value >> length != 0:
        raise ValueError(f"Value {value} out of range for {length} bits")
    for i in range(length - 1, -1, -1):
        buffer.append((value >> i) & 1)


def bits_to_codewords(bits: Sequence[int]) -> List[int]:
    """Pack bits into bytes, MSB first. A trailing partial byte is zero-filled."""
    codewords = [0] * ((len(bits) + 7) // 8)
    for i, bit in enumerate(bits):
        codewords[i >> 3] |= bit << (7 - (i & 7))
    return codewords
