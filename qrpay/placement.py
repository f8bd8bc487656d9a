# -*- coding: utf-8 -*-
"""
Codeword Placement Module

Splits the data codewords into error correction blocks, appends the
Reed-Solomon codewords, interleaves the blocks and places the result into
the symbol, then applies data masks.

Functions:
    add_ecc_and_interleave: Final codeword sequence for a symbol
    draw_codewords: Place codeword bits into the non-function modules
    apply_mask: XOR a mask pattern over the non-function modules
"""

from typing import Callable, List, Sequence

from . import reed_solomon
from .capacity import (ECC_CODEWORDS_PER_BLOCK, NUM_ERROR_CORRECTION_BLOCKS, Ecc,
                       get_num_data_codewords, get_num_raw_data_modules)
from .exceptions import CodewordCountError
from .grid import ModuleGrid

# ISO/IEC 18004:2015 Table 10, indexed by mask number; x is the column, y the row.
MASK_PATTERNS: List[Callable[[int, int], bool]] = [
    lambda x, y: (x + y) % 2 == 0,
    lambda x, y: y % 2 == 0,
    lambda x, y: x % 3 == 0,
    lambda x, y: (x + y) % 3 == 0,
    lambda x, y: (x // 3 + y // 2) % 2 == 0,
    lambda x, y: x * y % 2 + x * y % 3 == 0,
    lambda x, y: (x * y % 2 + x * y % 3) % 2 == 0,
    lambda x, y: ((x + y) % 2 + x * y % 3) % 2 == 0,
]


def add_ecc_and_interleave(data: Sequence[int], version: int, ecc: Ecc) -> List[int]:
    """
    Build the final codeword sequence: data and ECC codewords of all blocks, interleaved.

    The data is split into blocks; the first ``num_short_blocks`` blocks carry
    one data codeword less than the others. Codewords are then read column by
    column across the blocks, data first and ECC after.

    Args:
        data (Sequence[int]): Data codewords, exactly the capacity of the symbol
        version (int): QR code version (1-40)
        ecc (Ecc): Error correction level

    Returns:
        List[int]: floor(raw_modules / 8) codewords in placement order
    """
    if len(data) != get_num_data_codewords(version, ecc):
        raise ValueError("Data codeword count does not match the symbol capacity")

    num_blocks = NUM_ERROR_CORRECTION_BLOCKS[ecc.ordinal][version]
    block_ecc_len = ECC_CODEWORDS_PER_BLOCK[ecc.ordinal][version]
    raw_codewords = get_num_raw_data_modules(version) // 8
    num_short_blocks = num_blocks - raw_codewords % num_blocks
    short_block_len = raw_codewords // num_blocks

    divisor = reed_solomon.compute_divisor(block_ecc_len)
    blocks = []
    k = 0
    for i in range(num_blocks):
        length = short_block_len - block_ecc_len + (0 if i < num_short_blocks else 1)
        block_data = list(data[k:k + length])
        k += length
        block_ecc = reed_solomon.compute_remainder(block_data, divisor)
        if i < num_short_blocks:
            # placeholder so every block has the same length; skipped below
            block_data.append(0)
        blocks.append(block_data + block_ecc)

    result = []
    placeholder = short_block_len - block_ecc_len
    for i in range(len(blocks[0])):
        for j, block in enumerate(blocks):
            if i != placeholder or j >= num_short_blocks:
                result.append(block[i])
    return result


def draw_codewords(grid: ModuleGrid, codewords: Sequence[int]) -> None:
    """
    Place the codeword bits into the data area, MSB first.

    Columns are walked in pairs from the right edge in a zigzag, upward and
    downward alternately; column 6 (vertical timing pattern) is skipped.
    Remainder modules left over at the end stay light.

    Raises:
        CodewordCountError: If the number of codewords does not fill the symbol
    """
    expected = get_num_raw_data_modules(grid.version) // 8
    if len(codewords) != expected:
        raise CodewordCountError(f"Expected {expected} codewords, got {len(codewords)}")

    size = grid.size
    total_bits = len(codewords) * 8
    i = 0
    right = size - 1
    while right >= 1:
        if right == 6:
            right = 5
        upward = (right + 1) & 2 == 0
        for vert in range(size):
            y = size - 1 - vert if upward else vert
            for x in (right, right - 1):
                if not grid.is_function[y][x] and i < total_bits:
                    grid.modules[y][x] = (codewords[i >> 3] >> (7 - (i & 7))) & 1 == 1
                    i += 1
        right -= 2


def apply_mask(grid: ModuleGrid, mask: int) -> None:
    """
    Invert every non-function module selected by mask pattern ``mask``.

    Masks are involutions: applying the same mask twice restores the grid.
    """
    if not (0 <= mask <= 7):
        raise ValueError(f"Mask {mask} out of range [0, 7]")
    predicate = MASK_PATTERNS[mask]
    for y in range(grid.size):
        row = grid.modules[y]
        func_row = grid.is_function[y]
        for x in range(grid.size):
            if not func_row[x] and predicate(x, y):
                row[x] = not row[x]
