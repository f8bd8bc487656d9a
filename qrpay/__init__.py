# -*- coding: utf-8 -*-
"""
QR Payment Generator - Core Package

QR Code symbol encoder (ISO/IEC 18004:2015) and the helpers that turn payment
details into a printable code.

Modules:
    qr_generator: Public encoding entry points and the symbol object
    segments: Mode classification and segment bit packing
    capacity: Error correction levels, capacity tables, version selection
    reed_solomon: GF(256) arithmetic and ECC codeword computation
    functional_areas: Finder, timing, alignment, format and version patterns
    placement: Block interleaving, codeword placement and data masks
    penalties: Mask pattern evaluation algorithms
    renderer: PNG and SVG output
    payment: Payment string and instruction lines
"""

__version__ = "1.0.0"

from .capacity import Ecc
from .exceptions import CodewordCountError, DataOverflowError
from .qr_generator import QrSymbol, encode_segments, encode_text, evaluate_all_masks, make_qr
from .segments import Mode, Segment, make_segments
from .penalties import compute_mask_penalty
from .payment import build_payment_text, payment_instruction_lines
from .renderer import render_png_from_symbol, render_svg_from_symbol

__all__ = [
    'Ecc',
    'Mode',
    'Segment',
    'QrSymbol',
    'DataOverflowError',
    'CodewordCountError',
    'encode_text',
    'encode_segments',
    'make_qr',
    'make_segments',
    'evaluate_all_masks',
    'compute_mask_penalty',
    'build_payment_text',
    'payment_instruction_lines',
    'render_png_from_symbol',
    'render_svg_from_symbol',
]
