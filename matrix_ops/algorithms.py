"""
Numerical kernels for square matrices.

All functions operate on a flat row-major buffer (``list[float]``) plus the
matrix size, so they can be tested independently of the value type.
"""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np

from .core.logging import get_context_logger

logger = get_context_logger(__name__, component="algorithms")


def element_sum(elements: Sequence[float]) -> float:
    """Sum of all elements, accumulated left to right in row-major order."""
    total = 0.0
    for value in elements:
        total += value
    return total


def nonnegative_modulo(a: float, b: int) -> float:
    """
    Remainder of ``a`` divided by ``b`` that is never negative for ``b > 0``.

    The quotient is truncated toward zero and then corrected downward by one
    when ``a`` is negative and not an exact multiple of ``b``.

    Non-finite dividends (inf, NaN) have no remainder and give NaN. A tiny
    negative dividend can round ``a - b * q`` up to exactly ``b``; that case
    is reported as 0.0 so the result stays in ``[0, b)``.

    Args:
        a: Dividend
        b: Positive integer divisor

    Returns:
        ``a - b * q`` in ``[0, b)``

    Examples:
        >>> nonnegative_modulo(5.5, 3)
        2.5
        >>> nonnegative_modulo(-2.5, 3)
        0.5
        >>> nonnegative_modulo(-6.0, 3)
        0.0
    """
    if not math.isfinite(a):
        return math.nan
    q = math.trunc(a / b)
    if a < 0 and a != b * q:
        q -= 1
    r = a - b * q
    if r >= b:
        return 0.0
    return r


def minor(elements: Sequence[float], size: int, row: int, col: int) -> list[float]:
    """
    Buffer of the (size-1)x(size-1) minor obtained by deleting ``row`` and ``col``.
    """
    return [
        elements[i * size + j]
        for i in range(size)
        if i != row
        for j in range(size)
        if j != col
    ]


def cofactor_determinant(elements: Sequence[float], size: int) -> float:
    """
    Determinant by Laplace expansion along the first row.

    Runs in O(n!) time; intended for small matrices only.

    Args:
        elements: Row-major buffer of length size*size
        size: Matrix size (>= 1)

    Returns:
        The determinant
    """
    if size == 1:
        return elements[0]
    if size == 2:
        return elements[0] * elements[3] - elements[1] * elements[2]

    det = 0.0
    sign = 1
    for j in range(size):
        sub = minor(elements, size, 0, j)
        det += sign * elements[j] * cofactor_determinant(sub, size - 1)
        sign = -sign
    return det


def numpy_determinant(elements: Sequence[float], size: int) -> float:
    """Determinant via LU factorisation in numpy.linalg."""
    array = np.asarray(elements, dtype=float).reshape(size, size)
    return float(np.linalg.det(array))


def determinant(elements: Sequence[float], size: int, method: str, warn_size: int) -> float:
    """
    Dispatch to the requested determinant method.

    Raises:
        ValueError: If method is unknown
    """
    if method == "cofactor":
        if size > warn_size:
            logger.warning(
                "Cofactor expansion on a large matrix",
                extra_data={"size": size, "warn_size": warn_size},
            )
        return cofactor_determinant(elements, size)
    if method == "numpy":
        return numpy_determinant(elements, size)
    raise ValueError(f"Unknown determinant method {method!r}")
