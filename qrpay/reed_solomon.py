# -*- coding: utf-8 -*-
"""Reed-Solomon error correction coding over GF(2^8) with reduction polynomial 0x11D."""

from typing import List, Sequence

PRIMITIVE_POLY = 0x11D


def multiply(x: int, y: int) -> int:
    """
    Multiply two field elements (carry-less multiply, reduced modulo 0x11D).

    Raises:
        ValueError: If either operand is not a byte
    """
    if x >> 8 != 0 or y >> 8 != 0 or x < 0 or y < 0:
        raise ValueError("Byte out of range")
    z = 0
    for i in range(7, -1, -1):
        z = (z << 1) ^ ((z >> 7) * PRIMITIVE_POLY)
        z ^= ((y >> i) & 1) * x
    return z


def compute_divisor(degree: int) -> List[int]:
    """
    Generator polynomial of the given degree, product of (x - 2^i) for i < degree.

    The leading 1 coefficient is implied; the returned list holds the remaining
    ``degree`` coefficients from highest to lowest power.

    Example:
        >>> compute_divisor(2)
        [3, 2]
    """
    if degree < 1 or degree > 255:
        raise ValueError("Degree out of range")
    result = [0] * (degree - 1) + [1]
    root = 1
    for _ in range(degree):
        for j in range(degree):
            result[j] = multiply(result[j], root)
            if j + 1 < degree:
                result[j] ^= result[j + 1]
        root = multiply(root, 0x02)
    return result


def compute_remainder(data: Sequence[int], divisor: Sequence[int]) -> List[int]:
    """Remainder of ``data`` * x^len(divisor) divided by the generator: the ECC codewords."""
    result = [0] * len(divisor)
    for b in data:
        factor = b ^ result.pop(0)
        result.append(0)
        for i, coef in enumerate(divisor):
            result[i] ^= multiply(coef, factor)
    return result


def evaluate(poly: Sequence[int], x: int) -> int:
    """Evaluate a polynomial (highest power first) at ``x`` using Horner's rule."""
    result = 0
    for coef in poly:
        result = multiply(result, x) ^ coef
    return result


def syndromes(codewords: Sequence[int], degree: int) -> List[int]:
    """Syndromes of a data+ECC block at the generator roots 2^0 .. 2^(degree-1)."""
    result = []
    root = 1
    for _ in range(degree):
        result.append(evaluate(codewords, root))
        root = multiply(root, 0x02)
    return result
