# -*- coding: utf-8 -*-
"""
QR Code Functional Areas Module

This module draws the function patterns of a QR symbol according to
ISO/IEC 18004:2015: timing patterns, finder patterns (with separators),
alignment patterns, format information and version information.
Function modules are marked in the grid so that data placement and masking
leave them alone.

Functions:
    compute_alignment_centers: Alignment pattern center coordinates for a version
    format_bits: 15-bit format information word (BCH coded and masked)
    version_bits: 18-bit version information word (BCH coded)
    draw_function_patterns: Draw every function pattern into a grid
    draw_format_bits: (Re)draw both copies of the format information
    build_function_mask: Function-module mask for a version
"""

from typing import List

from .capacity import Ecc, check_version
from .grid import ModuleGrid

FORMAT_GENERATOR = 0x537
FORMAT_MASK = 0x5412
VERSION_GENERATOR = 0x1F25


def compute_alignment_centers(version: int) -> List[int]:
    """
    Calculate the center positions of alignment patterns for a given QR version.

    The same list is used for rows and columns. Version 1 has no alignment
    patterns. The first center is always 6 and the last always ``size - 7``;
    the ones in between are spaced by an even step counted back from the last.

    Args:
        version (int): QR code version (1-40)

    Returns:
        List[int]: Ascending center coordinates

    Example:
        >>> compute_alignment_centers(7)
        [6, 22, 38]
        >>> compute_alignment_centers(32)
        [6, 34, 60, 86, 112, 138]
    """
    check_version(version)
    if version == 1:
        return []
    size = version * 4 + 17
    num = version // 7 + 2
    step = (version * 8 + num * 3 + 5) // (num * 4 - 4) * 2
    return [6] + [size - 7 - i * step for i in range(num - 2, -1, -1)]


def format_bits(ecc: Ecc, mask: int) -> int:
    """
    Build the 15-bit format information word.

    Five data bits (level indicator and mask number) followed by their 10-bit
    BCH remainder (generator 0x537), XORed with 0x5412.

    Example:
        >>> hex(format_bits(Ecc.LOW, 0))
        '0x77c4'
    """
    data = (ecc.format_bits << 3) | mask
    rem = data
    for _ in range(10):
        rem = (rem << 1) ^ ((rem >> 9) * FORMAT_GENERATOR)
    # ISO/IEC 18004 7.9.1 format mask; the word is never written unmasked
    return ((data << 10) | rem) ^ FORMAT_MASK


def version_bits(version: int) -> int:
    """18-bit version information word: version number and 12-bit BCH remainder (0x1F25)."""
    rem = version
    for _ in range(12):
        rem = (rem << 1) ^ ((rem >> 11) * VERSION_GENERATOR)
    return (version << 12) | rem


def _get_bit(value: int, i: int) -> bool:
    return (value >> i) & 1 != 0


def _draw_finder_pattern(grid: ModuleGrid, x: int, y: int) -> None:
    # 7x7 finder plus its 1-module light separator, clipped at the symbol edge
    for dy in range(-4, 5):
        for dx in range(-4, 5):
            xx, yy = x + dx, y + dy
            if 0 <= xx < grid.size and 0 <= yy < grid.size:
                dist = max(abs(dx), abs(dy))
                grid.set_function_module(xx, yy, dist not in (2, 4))


def _draw_alignment_pattern(grid: ModuleGrid, x: int, y: int) -> None:
    for dy in range(-2, 3):
        for dx in range(-2, 3):
            grid.set_function_module(x + dx, y + dy, max(abs(dx), abs(dy)) != 1)


def draw_format_bits(grid: ModuleGrid, ecc: Ecc, mask: int) -> None:
    """
    Draw both copies of the format information for ``ecc`` and ``mask``.

    The first copy wraps the top-left finder along row 8 and column 8, the
    second is split between the bottom-left (column 8) and the top-right
    (row 8). Also sets the dark module at (8, size - 8).
    """
    bits = format_bits(ecc, mask)
    size = grid.size

    # First copy
    for i in range(0, 6):
        grid.set_function_module(8, i, _get_bit(bits, i))
    grid.set_function_module(8, 7, _get_bit(bits, 6))
    grid.set_function_module(8, 8, _get_bit(bits, 7))
    grid.set_function_module(7, 8, _get_bit(bits, 8))
    for i in range(9, 15):
        grid.set_function_module(14 - i, 8, _get_bit(bits, i))

    # Second copy
    for i in range(0, 8):
        grid.set_function_module(size - 1 - i, 8, _get_bit(bits, i))
    for i in range(8, 15):
        grid.set_function_module(8, size - 15 + i, _get_bit(bits, i))
    grid.set_function_module(8, size - 8, True)


def _draw_version(grid: ModuleGrid) -> None:
    if grid.version < 7:
        return
    bits = version_bits(grid.version)
    for i in range(18):
        a = grid.size - 11 + i % 3
        b = i // 3
        dark = _get_bit(bits, i)
        grid.set_function_module(a, b, dark)
        grid.set_function_module(b, a, dark)


def draw_function_patterns(grid: ModuleGrid, ecc: Ecc) -> None:
    """
    Draw all function patterns of ``grid``.

    Order: timing patterns, the three finder patterns, alignment patterns,
    a placeholder format area (mask 0, redrawn once the mask is known) and
    the version information for versions 7 and up.
    """
    size = grid.size

    # Timing patterns along row 6 and column 6
    for i in range(size):
        grid.set_function_module(6, i, i % 2 == 0)
        grid.set_function_module(i, 6, i % 2 == 0)

    _draw_finder_pattern(grid, 3, 3)
    _draw_finder_pattern(grid, size - 4, 3)
    _draw_finder_pattern(grid, 3, size - 4)

    centers = compute_alignment_centers(grid.version)
    last = len(centers) - 1
    for i, cx in enumerate(centers):
        for j, cy in enumerate(centers):
            # corners taken by finder patterns
            if (i, j) in ((0, 0), (0, last), (last, 0)):
                continue
            _draw_alignment_pattern(grid, cx, cy)

    draw_format_bits(grid, ecc, 0)
    _draw_version(grid)


def build_function_mask(version: int) -> List[List[bool]]:
    """
    Build the mask of function modules for a version.

    Args:
        version (int): QR code version (1-40)

    Returns:
        List[List[bool]]: ``mask[y][x]`` is True for function modules

    Example:
        >>> mask = build_function_mask(1)
        >>> sum(not v for row in mask for v in row)  # data + ECC modules
        208
    """
    grid = ModuleGrid(version)
    draw_function_patterns(grid, Ecc.LOW)
    return grid.is_function
