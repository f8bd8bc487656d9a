# -*- coding: utf-8 -*-
"""
QR Code Renderer Module

This module rasterizes encoded symbols. PNG output is drawn with Pillow and
can carry a band of payment instruction text under the code; SVG output is a
plain list of rectangles.

Modules are read through ``QrSymbol.get_module``, which reports light outside
the symbol, so the quiet zone needs no special handling.

Functions:
    render_png_image: Draw a symbol into a Pillow image
    render_png_bytes: PNG file content for a symbol
    render_png_from_symbol: Base64 PNG plus symbol metrics
    render_svg_from_symbol: SVG file content for a symbol
"""

import base64
from io import BytesIO
from typing import Any, Dict, Optional, Sequence, Tuple

from PIL import Image, ImageDraw, ImageFont

from .qr_generator import QrSymbol

DEFAULT_SCALE = 6
DEFAULT_BORDER = 2
DEFAULT_LIGHT = "#FFFFFF"
DEFAULT_DARK = "#000000"

CAPTION_HEIGHT = 100
CAPTION_FONT_SIZE = 12
CAPTION_LINE_HEIGHT = 14.4
CAPTION_MARGIN = 10


def _load_font(size: int):
    try:
        return ImageFont.truetype("DejaVuSans.ttf", size)
    except OSError:
        return ImageFont.load_default(size=size)


def symbol_metrics(symbol: QrSymbol, border: int) -> Dict[str, Any]:
    """
    Module counts of a symbol.

    Example:
        >>> symbol_metrics(make_qr("HELLO WORLD", ecc='Q'), border=2)['data_modules']
        208
    """
    size = symbol.size
    total_modules = size * size
    functional = sum(1 for row in symbol.function_mask for v in row if v)
    return {
        'size': size,
        'version': symbol.version,
        'ecc': symbol.ecc.letter,
        'mask': symbol.mask,
        'modules': total_modules,
        'dark_modules': sum(1 for row in symbol.matrix for v in row if v),
        'functional_modules': functional,
        'data_modules': total_modules - functional,
        'border': border,
    }


def render_png_image(
    symbol: QrSymbol,
    border: int = DEFAULT_BORDER,
    scale: int = DEFAULT_SCALE,
    light: str = DEFAULT_LIGHT,
    dark: str = DEFAULT_DARK,
    caption_lines: Optional[Sequence[str]] = None
) -> Image.Image:
    """
    Draw ``symbol`` into a new RGB image.

    Args:
        symbol (QrSymbol): Encoded symbol
        border (int): Quiet zone size in modules
        scale (int): Pixel size per module
        light (str): Light module color
        dark (str): Dark module color (also used for the caption text)
        caption_lines (Optional[Sequence[str]]): Text printed under the code;
            when given the image is CAPTION_HEIGHT pixels taller

    Returns:
        Image.Image: The rendered image
    """
    if border < 0 or scale < 1:
        raise ValueError("Border must be >= 0 and scale >= 1")
    width = (symbol.size + border * 2) * scale
    height = width + (CAPTION_HEIGHT if caption_lines else 0)
    img = Image.new('RGB', (width, height), light)
    draw = ImageDraw.Draw(img)

    for y in range(-border, symbol.size + border):
        for x in range(-border, symbol.size + border):
            if symbol.get_module(x, y):
                x0 = (x + border) * scale
                y0 = (y + border) * scale
                draw.rectangle([x0, y0, x0 + scale - 1, y0 + scale - 1], fill=dark)

    if caption_lines:
        font = _load_font(CAPTION_FONT_SIZE)
        text_y = width + CAPTION_MARGIN
        for line in caption_lines:
            draw.text((CAPTION_MARGIN, int(round(text_y))), line, fill=dark, font=font)
            text_y += CAPTION_LINE_HEIGHT
    return img


def render_png_bytes(symbol: QrSymbol, **kwargs) -> bytes:
    """PNG file content; keyword arguments as for :func:`render_png_image`."""
    buf = BytesIO()
    render_png_image(symbol, **kwargs).save(buf, format='PNG')
    return buf.getvalue()


def render_png_from_symbol(
    symbol: QrSymbol,
    border: int = DEFAULT_BORDER,
    scale: int = DEFAULT_SCALE,
    light: str = DEFAULT_LIGHT,
    dark: str = DEFAULT_DARK,
    caption_lines: Optional[Sequence[str]] = None
) -> Tuple[str, Dict[str, Any]]:
    """
    Render a symbol as a base64-encoded PNG for inline display.

    Returns:
        Tuple[str, Dict[str, Any]]: (base64_png, metrics_dict)
    """
    png = render_png_bytes(symbol, border=border, scale=scale, light=light, dark=dark,
                           caption_lines=caption_lines)
    b64 = base64.b64encode(png).decode('ascii')
    return b64, symbol_metrics(symbol, border)


def render_svg_from_symbol(
    symbol: QrSymbol,
    border: int = 4,
    scale: int = 10,
    light: str = DEFAULT_LIGHT,
    dark: str = DEFAULT_DARK
) -> bytes:
    """
    Render a symbol as SVG, one rectangle per dark module.

    Returns:
        bytes: UTF-8 encoded SVG content

    Example:
        >>> svg = render_svg_from_symbol(make_qr("HELLO"))
        >>> svg.startswith(b'<?xml')
        True
    """
    if border < 0 or scale < 1:
        raise ValueError("Border must be >= 0 and scale >= 1")
    px = (symbol.size + 2 * border) * scale
    out = []
    out.append('<?xml version="1.0" encoding="UTF-8"?>')
    out.append(f'<svg xmlns="http://www.w3.org/2000/svg" width="{px}" height="{px}" viewBox="0 0 {px} {px}">')
    out.append(f'<rect width="{px}" height="{px}" fill="{light}"/>')
    for y in range(symbol.size):
        for x in range(symbol.size):
            if symbol.get_module(x, y):
                out.append(f'<rect x="{(x + border) * scale}" y="{(y + border) * scale}" '
                           f'width="{scale}" height="{scale}" fill="{dark}"/>')
    out.append('</svg>')
    return "\n".join(out).encode("utf-8")
