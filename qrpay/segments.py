# -*- coding: utf-8 -*-
"""
QR Segments Module

Classifies input text into a single encoding mode and packs it into a segment
bit stream according to ISO/IEC 18004:2015 section 7.4.

The whole input always becomes one segment: numeric if it is made of ASCII
digits only, alphanumeric if every character is in the 45-symbol alphabet,
byte (UTF-8) otherwise. Mixed-mode splitting is not attempted.

Functions:
    make_segments: Classify text and return the segment list
    make_numeric: Encode a digit string
    make_alphanumeric: Encode an alphanumeric string
    make_bytes: Encode raw bytes
    make_eci: Build an ECI designator segment
    get_total_bits: Bits needed by a segment list at a given version
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from .bit_buffer import append_bits


ALPHANUMERIC_CHARSET = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ $%*+-./:"

_NUMERIC_RE = re.compile(r"[0-9]*")
_ALPHANUMERIC_RE = re.compile(r"[A-Z0-9 $%*+./:-]*")


class Mode(Enum):
    """
    Segment encoding mode.

    Each member carries its 4-bit mode indicator and the character count field
    widths for versions 1-9, 10-26 and 27-40.
    """

    NUMERIC = (0x1, (10, 12, 14))
    ALPHANUMERIC = (0x2, (9, 11, 13))
    BYTE = (0x4, (8, 16, 16))
    KANJI = (0x8, (8, 10, 12))
    ECI = (0x7, (0, 0, 0))

    def __init__(self, mode_bits: int, char_count_bits: Tuple[int, int, int]):
        self.mode_bits = mode_bits
        self.char_count_bits = char_count_bits

    def num_char_count_bits(self, version: int) -> int:
        """Width of the character count field at ``version`` (1-40)."""
        return self.char_count_bits[(version + 7) // 17]


@dataclass(frozen=True)
class Segment:
    """An encoded run of data: mode, character count and payload bits."""

    mode: Mode
    num_chars: int
    bit_data: Tuple[int, ...]

    @property
    def bit_length(self) -> int:
        return len(self.bit_data)


def is_numeric(text: str) -> bool:
    return _NUMERIC_RE.fullmatch(text) is not None


def is_alphanumeric(text: str) -> bool:
    return _ALPHANUMERIC_RE.fullmatch(text) is not None


def make_numeric(digits: str) -> Segment:
    """
    Encode a string of ASCII digits.

    Digits are taken in groups of three from the left; a group of n digits is
    written as its decimal value in 3n+1 bits.

    Raises:
        ValueError: If the string contains anything but ASCII digits
    """
    if not is_numeric(digits):
        raise ValueError("String contains non-numeric characters")
    bits: List[int] = []
    i = 0
    while i < len(digits):
        n = min(len(digits) - i, 3)
        append_bits(int(digits[i:i + n]), n * 3 + 1, bits)
        i += n
    return Segment(Mode.NUMERIC, len(digits), tuple(bits))


def make_alphanumeric(text: str) -> Segment:
    """
    Encode text from the 45-character alphanumeric alphabet.

    Characters are paired: ``45 * index(c1) + index(c2)`` in 11 bits, a trailing
    unpaired character in 6 bits.

    Raises:
        ValueError: If a character is outside the alphabet
    """
    if not is_alphanumeric(text):
        raise ValueError("String contains unencodable characters in alphanumeric mode")
    bits: List[int] = []
    for i in range(0, len(text) - 1, 2):
        value = ALPHANUMERIC_CHARSET.index(text[i]) * 45
        value += ALPHANUMERIC_CHARSET.index(text[i + 1])
        append_bits(value, 11, bits)
    if len(text) % 2 == 1:
        append_bits(ALPHANUMERIC_CHARSET.index(text[-1]), 6, bits)
    return Segment(Mode.ALPHANUMERIC, len(text), tuple(bits))


def make_bytes(data: bytes) -> Segment:
    """Encode raw bytes, 8 bits each."""
    bits: List[int] = []
    for b in data:
        append_bits(b, 8, bits)
    return Segment(Mode.BYTE, len(data), tuple(bits))


def make_eci(assign_value: int) -> Segment:
    """
    Build an Extended Channel Interpretation designator segment.

    Example:
        >>> make_eci(26).bit_length  # UTF-8 designator
        8
    """
    bits: List[int] = []
    if assign_value < 0:
        raise ValueError("ECI assignment value out of range")
    elif assign_value < (1 << 7):
        append_bits(assign_value, 8, bits)
    elif assign_value < (1 << 14):
        append_bits(0b10, 2, bits)
        append_bits(assign_value, 14, bits)
    elif assign_value < 1000000:
        append_bits(0b110, 3, bits)
        append_bits(assign_value, 21, bits)
    else:
        raise ValueError("ECI assignment value out of range")
    return Segment(Mode.ECI, 0, tuple(bits))


def make_segments(text: str) -> List[Segment]:
    """
    Classify ``text`` and encode it as a single segment.

    Args:
        text (str): Data to encode

    Returns:
        List[Segment]: Empty for empty text, otherwise exactly one segment

    Example:
        >>> [seg.mode for seg in make_segments("HELLO WORLD")]
        [<Mode.ALPHANUMERIC: (2, (9, 11, 13))>]
    """
    if text == "":
        return []
    if is_numeric(text):
        return [make_numeric(text)]
    if is_alphanumeric(text):
        return [make_alphanumeric(text)]
    return [make_bytes(text.encode("utf-8"))]


def get_total_bits(segments: Sequence[Segment], version: int) -> Optional[int]:
    """
    Number of bits the segments occupy at ``version``, headers included.

    Returns None when a segment's character count does not fit its count field
    at this version, which makes the version unusable.
    """
    total = 0
    for seg in segments:
        cc_bits = seg.mode.num_char_count_bits(version)
        if seg.num_chars >= (1 << cc_bits):
            return None
        total += 4 + cc_bits + seg.bit_length
    return total
