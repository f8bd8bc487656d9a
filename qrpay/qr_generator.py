# -*- coding: utf-8 -*-
"""
QR Code Generator Module

This module provides the public entry points of the encoder. Text is turned
into a single segment, the smallest fitting version is selected (optionally
boosting the error correction level), Reed-Solomon codewords are computed and
interleaved, and the symbol matrix is built with the best mask according to
the ISO/IEC 18004 penalty rules.

Classes:
    QrSymbol: Immutable encoded symbol

Functions:
    encode_text: Encode text into a symbol
    encode_segments: Encode explicit segments into a symbol
    make_qr: Encode text with string-friendly parameters
    evaluate_all_masks: Score all mask patterns for a symbol's content
"""

import logging
from typing import Dict, Optional, Sequence, Tuple, Union

from .capacity import (MAX_VERSION, MIN_VERSION, Ecc, boost_error_level,
                       build_data_codewords, select_version)
from .functional_areas import draw_format_bits, draw_function_patterns
from .grid import ModuleGrid
from .penalties import compute_mask_penalty
from .placement import add_ecc_and_interleave, apply_mask, draw_codewords
from .segments import Segment, make_segments

logger = logging.getLogger(__name__)

AUTO_MASK = -1


class QrSymbol:
    """
    An encoded QR symbol.

    Attributes:
        version (int): 1-40
        ecc (Ecc): Final error correction level (after boosting)
        mask (int): Applied mask pattern, 0-7
        size (int): Modules per side, ``version * 4 + 17``
    """

    __slots__ = ("version", "ecc", "mask", "size", "_modules", "_is_function", "_unmasked")

    def __init__(self, grid: ModuleGrid, ecc: Ecc, mask: int, unmasked: ModuleGrid):
        self.version = grid.version
        self.ecc = ecc
        self.mask = mask
        self.size = grid.size
        self._modules, self._is_function = grid.freeze()
        self._unmasked = unmasked.freeze()

    def __repr__(self) -> str:
        return f"QrSymbol(version={self.version}, ecc={self.ecc.letter}, mask={self.mask})"

    def get_module(self, x: int, y: int) -> bool:
        """Color of module (x, y), True for dark. Out-of-range coordinates are light."""
        return 0 <= x < self.size and 0 <= y < self.size and self._modules[y][x]

    def is_function_module(self, x: int, y: int) -> bool:
        return 0 <= x < self.size and 0 <= y < self.size and self._is_function[y][x]

    @property
    def matrix(self) -> Tuple[Tuple[bool, ...], ...]:
        """Module rows, top to bottom (True = dark)."""
        return self._modules

    @property
    def function_mask(self) -> Tuple[Tuple[bool, ...], ...]:
        return self._is_function

    def _unmasked_grid(self) -> ModuleGrid:
        return ModuleGrid.thaw(self.version, self._unmasked)

    def masked_matrix(self, mask: int) -> Tuple[Tuple[bool, ...], ...]:
        """The same content with mask ``mask`` and matching format information."""
        candidate = _masked_candidate(self._unmasked_grid(), self.ecc, mask)
        return candidate.freeze()[0]

    def mask_scores(self) -> Dict[int, int]:
        """Penalty score of every mask pattern applied to this symbol's content."""
        return _score_masks(self._unmasked_grid(), self.ecc)


def _masked_candidate(unmasked: ModuleGrid, ecc: Ecc, mask: int) -> ModuleGrid:
    candidate = unmasked.copy()
    apply_mask(candidate, mask)
    draw_format_bits(candidate, ecc, mask)
    return candidate


def _score_masks(unmasked: ModuleGrid, ecc: Ecc) -> Dict[int, int]:
    return {
        mask: compute_mask_penalty(_masked_candidate(unmasked, ecc, mask).modules)
        for mask in range(8)
    }


def _best_mask(scores: Dict[int, int]) -> int:
    # strict minimum: ties keep the lower mask number
    best_mask = 0
    for mask in range(1, 8):
        if scores[mask] < scores[best_mask]:
            best_mask = mask
    return best_mask


def _check_arguments(min_version: int, max_version: int, mask: int) -> None:
    if not (MIN_VERSION <= min_version <= max_version <= MAX_VERSION):
        raise ValueError(f"Invalid version range [{min_version}, {max_version}]")
    if not (AUTO_MASK <= mask <= 7):
        raise ValueError(f"Mask {mask} out of range [-1, 7]")


def encode_segments(
    segments: Sequence[Segment],
    ecc: Ecc,
    min_version: int = MIN_VERSION,
    max_version: int = MAX_VERSION,
    mask: int = AUTO_MASK,
    boost_ecl: bool = True
) -> QrSymbol:
    """
    Encode segments into a QR symbol.

    Args:
        segments (Sequence[Segment]): Segments to encode, in order
        ecc (Ecc): Minimum error correction level
        min_version (int): Smallest version allowed (1-40)
        max_version (int): Largest version allowed (1-40)
        mask (int): Mask pattern 0-7, or -1 to select the best one
        boost_ecl (bool): Raise the level if it fits in the selected version

    Returns:
        QrSymbol: The encoded symbol

    Raises:
        ValueError: If the version range or mask is invalid
        DataOverflowError: If the data does not fit at max_version
    """
    _check_arguments(min_version, max_version, mask)
    version, used_bits = select_version(segments, ecc, min_version, max_version)
    if boost_ecl:
        boosted = boost_error_level(version, ecc, used_bits)
        if boosted is not ecc:
            logger.debug(f"Boosted error correction {ecc.letter} -> {boosted.letter}")
        ecc = boosted

    data_codewords = build_data_codewords(segments, version, ecc)
    grid = ModuleGrid(version)
    draw_function_patterns(grid, ecc)
    draw_codewords(grid, add_ecc_and_interleave(data_codewords, version, ecc))

    if mask == AUTO_MASK:
        scores = _score_masks(grid, ecc)
        mask = _best_mask(scores)
        logger.debug(f"Mask scores {scores}, selected {mask}")

    final = _masked_candidate(grid, ecc, mask)
    return QrSymbol(final, ecc, mask, unmasked=grid)


def encode_text(
    text: str,
    ecc: Ecc,
    min_version: int = MIN_VERSION,
    max_version: int = MAX_VERSION,
    mask: int = AUTO_MASK,
    boost_ecl: bool = True
) -> QrSymbol:
    """
    Encode text into a QR symbol.

    The whole text becomes a single numeric, alphanumeric or byte (UTF-8)
    segment; see :func:`qrpay.segments.make_segments`.

    Example:
        >>> qr = encode_text("HELLO WORLD", Ecc.QUARTILE)
        >>> qr.version, qr.size
        (1, 21)
    """
    return encode_segments(make_segments(text), ecc, min_version, max_version, mask, boost_ecl)


def make_qr(
    text: str,
    ecc: Union[str, Ecc] = 'M',
    version: Optional[Union[int, str]] = 'auto',
    mask: Union[str, int] = 'auto',
    boost_error: bool = True
) -> QrSymbol:
    """
    Generate a QR code symbol from loosely typed parameters.

    Args:
        text (str): The data to encode
        ecc (Union[str, Ecc]): Error correction level ('L', 'M', 'Q', 'H')
        version (Optional[Union[int, str]]): QR code version (1-40) or 'auto'
            - 'auto' / None: Select minimum version that fits the data
            - int: Force a specific version
        mask (Union[str, int]): 'auto' for penalty-based selection, or 0-7
        boost_error (bool): Increase the ECC level if space allows

    Returns:
        QrSymbol: Generated QR code symbol

    Raises:
        ValueError: If parameters are invalid
        DataOverflowError: If the data doesn't fit

    Example:
        >>> qr = make_qr("ST00012|Name=...", ecc='M', mask=2)
        >>> qr.mask
        2
    """
    level = ecc if isinstance(ecc, Ecc) else Ecc.from_code(ecc)

    if version in (None, '', 'auto'):
        min_version, max_version = MIN_VERSION, MAX_VERSION
    else:
        min_version = max_version = int(version)

    mask_arg = AUTO_MASK if mask in (None, '', 'auto') else int(mask)

    return encode_text(text, level, min_version, max_version, mask_arg, boost_error)


def evaluate_all_masks(symbol: QrSymbol) -> Tuple[int, int, Dict[int, int]]:
    """
    Evaluate all mask patterns (0-7) for the content of ``symbol``.

    Each mask is applied to a copy of the unmasked symbol, together with the
    matching format information, and scored with the penalty rules.

    Returns:
        Tuple[int, int, Dict[int, int]]: (best_mask, best_score, all_scores)
            - best_mask: Lowest-penalty mask, the lowest number on ties
            - best_score: Penalty score of the best mask
            - all_scores: Dictionary mapping mask -> penalty score

    Example:
        >>> best_mask, best_score, scores = evaluate_all_masks(make_qr("HELLO"))
        >>> best_mask == make_qr("HELLO").mask
        True
    """
    scores = symbol.mask_scores()
    best_mask = _best_mask(scores)
    return best_mask, scores[best_mask], scores
