# -*- coding: utf-8 -*-
"""
QR Capacity Module

Error correction levels, the block structure tables of ISO/IEC 18004:2015
(Table 9) and the version / error correction level selection built on them.

Functions:
    get_num_raw_data_modules: Data + ECC modules available in a version
    get_num_data_codewords: Data codewords available at a version and level
    select_version: Smallest version that fits the segments
    boost_error_level: Highest level that still fits at a fixed version
    build_data_codewords: Final padded data codeword sequence
"""

import logging
from enum import Enum
from functools import total_ordering
from typing import List, Sequence, Tuple

from .bit_buffer import append_bits, bits_to_codewords
from .exceptions import DataOverflowError
from .segments import Segment, get_total_bits

logger = logging.getLogger(__name__)

MIN_VERSION = 1
MAX_VERSION = 40


@total_ordering
class Ecc(Enum):
    """
    Error correction level: (table ordinal, 2-bit format indicator).

    Recovery capability: LOW ~7%, MEDIUM ~15%, QUARTILE ~25%, HIGH ~30%.
    """

    LOW = (0, 1)
    MEDIUM = (1, 0)
    QUARTILE = (2, 3)
    HIGH = (3, 2)

    def __init__(self, ordinal: int, format_bits: int):
        self.ordinal = ordinal
        self.format_bits = format_bits

    def __lt__(self, other: "Ecc") -> bool:
        if not isinstance(other, Ecc):
            return NotImplemented
        return self.ordinal < other.ordinal

    @property
    def letter(self) -> str:
        return self.name[0]

    @classmethod
    def from_code(cls, code: str) -> "Ecc":
        """
        Parse an error correction level from 'L', 'M', 'Q' or 'H' (any case).

        Raises:
            ValueError: If the code is not a known level
        """
        code = (code or "").strip().upper()
        for level in cls:
            if level.letter == code:
                return level
        raise ValueError(f"Unknown error correction level: {code!r}")


# Indexed by [Ecc.ordinal][version]; index 0 is unused.
ECC_CODEWORDS_PER_BLOCK: Tuple[Tuple[int, ...], ...] = (
    # Version: (note that index 0 is for padding, and is set to an illegal value)
    #  0,  1,  2,  3,  4,  5,  6,  7,  8,  9, 10, 11, 12, 13, 14, 15, 16, 17, 18, 19, 20, 21, 22, 23, 24, 25, 26, 27, 28, 29, 30, 31, 32, 33, 34, 35, 36, 37, 38, 39, 40
    (-1,  7, 10, 15, 20, 26, 18, 20, 24, 30, 18, 20, 24, 26, 30, 22, 24, 28, 30, 28, 28, 28, 28, 30, 30, 26, 28, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30),  # Low
    (-1, 10, 16, 26, 18, 24, 16, 18, 22, 22, 26, 30, 22, 22, 24, 24, 28, 28, 26, 26, 26, 26, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28),  # Medium
    (-1, 13, 22, 18, 26, 18, 24, 18, 22, 20, 24, 28, 26, 24, 20, 30, 24, 28, 28, 26, 30, 28, 30, 30, 30, 30, 28, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30),  # Quartile
    (-1, 17, 28, 22, 16, 22, 28, 26, 26, 24, 28, 24, 28, 22, 24, 24, 30, 28, 28, 26, 28, 30, 24, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30),  # High
)

NUM_ERROR_CORRECTION_BLOCKS: Tuple[Tuple[int, ...], ...] = (
    #  0, 1, 2, 3, 4, 5, 6, 7, 8, 9,10, 11, 12, 13, 14, 15, 16, 17, 18, 19, 20, 21, 22, 23, 24, 25, 26, 27, 28, 29, 30, 31, 32, 33, 34, 35, 36, 37, 38, 39, 40
    (-1, 1, 1, 1, 1, 1, 2, 2, 2, 2, 4,  4,  4,  4,  4,  6,  6,  6,  6,  7,  8,  8,  9,  9, 10, 12, 12, 12, 13, 14, 15, 16, 17, 18, 19, 19, 20, 21, 22, 24, 25),  # Low
    (-1, 1, 1, 1, 2, 2, 4, 4, 4, 5, 5,  5,  8,  9,  9, 10, 10, 11, 13, 14, 16, 17, 17, 18, 20, 21, 23, 25, 26, 28, 29, 31, 33, 35, 37, 38, 40, 43, 45, 47, 49),  # Medium
    (-1, 1, 1, 2, 2, 4, 4, 6, 6, 8, 8,  8, 10, 12, 16, 12, 17, 16, 18, 21, 20, 23, 23, 25, 27, 29, 34, 34, 35, 38, 40, 43, 45, 48, 51, 53, 56, 59, 62, 65, 68),  # Quartile
    (-1, 1, 1, 2, 4, 4, 4, 5, 6, 8, 8, 11, 11, 16, 16, 18, 16, 19, 21, 25, 25, 25, 34, 30, 32, 35, 37, 40, 42, 45, 48, 51, 54, 57, 60, 63, 66, 70, 74, 77, 81),  # High
)


def check_version(version: int) -> None:
    if not (MIN_VERSION <= version <= MAX_VERSION):
        raise ValueError(f"Version {version} out of range [{MIN_VERSION}, {MAX_VERSION}]")


def get_num_raw_data_modules(version: int) -> int:
    """
    Number of modules left for data and ECC once function patterns are drawn.

    Includes the remainder bits, so the result is not always a multiple of 8.

    Example:
        >>> get_num_raw_data_modules(1)
        208
    """
    check_version(version)
    result = (16 * version + 128) * version + 64
    if version >= 2:
        num_align = version // 7 + 2
        result -= (25 * num_align - 10) * num_align - 55
        if version >= 7:
            result -= 36
    return result


def get_num_data_codewords(version: int, ecc: Ecc) -> int:
    """Data codewords (8-bit) a symbol of ``version`` holds at level ``ecc``."""
    return (get_num_raw_data_modules(version) // 8
            - ECC_CODEWORDS_PER_BLOCK[ecc.ordinal][version]
            * NUM_ERROR_CORRECTION_BLOCKS[ecc.ordinal][version])


def select_version(
    segments: Sequence[Segment],
    ecc: Ecc,
    min_version: int = MIN_VERSION,
    max_version: int = MAX_VERSION
) -> Tuple[int, int]:
    """
    Find the smallest version in [min_version, max_version] that fits the segments.

    Args:
        segments (Sequence[Segment]): Segments to encode
        ecc (Ecc): Error correction level
        min_version (int): Smallest version to consider
        max_version (int): Largest version to consider

    Returns:
        Tuple[int, int]: (version, used_bits)

    Raises:
        ValueError: If the version range is invalid
        DataOverflowError: If the data does not fit at max_version
    """
    if not (MIN_VERSION <= min_version <= max_version <= MAX_VERSION):
        raise ValueError(f"Invalid version range [{min_version}, {max_version}]")
    for version in range(min_version, max_version + 1):
        capacity_bits = get_num_data_codewords(version, ecc) * 8
        used_bits = get_total_bits(segments, version)
        if used_bits is not None and used_bits <= capacity_bits:
            logger.debug(f"Selected version {version} ({used_bits}/{capacity_bits} bits, ecc={ecc.letter})")
            return version, used_bits
    raise DataOverflowError(
        f"Data too long for version {max_version} at error correction level {ecc.letter}"
    )


def boost_error_level(version: int, ecc: Ecc, used_bits: int) -> Ecc:
    """
    Raise the error correction level as far as the data still fits at ``version``.

    Levels are tried MEDIUM, QUARTILE, HIGH in order; the requested level is
    never lowered.
    """
    for candidate in (Ecc.MEDIUM, Ecc.QUARTILE, Ecc.HIGH):
        if candidate.ordinal > ecc.ordinal and used_bits <= get_num_data_codewords(version, candidate) * 8:
            ecc = candidate
    return ecc


def build_data_codewords(segments: Sequence[Segment], version: int, ecc: Ecc) -> List[int]:
    """
    Concatenate the segments and pad them to the data capacity of the symbol.

    Layout: per segment the mode indicator, character count and payload; then
    a terminator of up to 4 zero bits, zero bits up to a byte boundary, and pad
    codewords alternating 0xEC and 0x11.

    Raises:
        DataOverflowError: If the segments exceed the capacity
    """
    capacity_bits = get_num_data_codewords(version, ecc) * 8
    bits: List[int] = []
    for seg in segments:
        append_bits(seg.mode.mode_bits, 4, bits)
        append_bits(seg.num_chars, seg.mode.num_char_count_bits(version), bits)
        bits.extend(seg.bit_data)
    if len(bits) > capacity_bits:
        raise DataOverflowError(f"Data too long for version {version}-{ecc.letter}")

    append_bits(0, min(4, capacity_bits - len(bits)), bits)
    append_bits(0, -len(bits) % 8, bits)
    pad = 0xEC
    while len(bits) < capacity_bits:
        append_bits(pad, 8, bits)
        pad ^= 0xEC ^ 0x11
    return bits_to_codewords(bits)
