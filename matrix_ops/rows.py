"""Bounds-checked row view returned by ``SquareMatrix.__getitem__``."""

from __future__ import annotations

import numbers
from typing import Iterator

from .core.errors import IndexOutOfRangeError


def check_index(index: int, size: int, axis: str) -> int:
    """
    Validate a row or column index against ``[0, size)``.

    Negative indices are rejected rather than counted from the end.

    Raises:
        TypeError: If index is not an int
        IndexOutOfRangeError: If index is outside [0, size)
    """
    if isinstance(index, bool) or not isinstance(index, numbers.Integral):
        raise TypeError(f"{axis.capitalize()} index must be an int, got {type(index).__name__}")
    index = int(index)
    if index < 0 or index >= size:
        raise IndexOutOfRangeError(axis, index, size)
    return index


class RowAccessor:
    """
    View over one row of a matrix's buffer.

    The accessor does not own storage: writes go straight into the parent
    buffer. It is meant to be used within the expression that produced it,
    e.g. ``m[1][2] = 5.0``.
    """

    __slots__ = ("_buffer", "_offset", "_size")

    def __init__(self, buffer: list[float], row: int, size: int):
        self._buffer = buffer
        self._offset = row * size
        self._size = size

    def __getitem__(self, col: int) -> float:
        check_index(col, self._size, "column")
        return self._buffer[self._offset + col]

    def __setitem__(self, col: int, value: float) -> None:
        check_index(col, self._size, "column")
        self._buffer[self._offset + col] = float(value)

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[float]:
        return iter(self._buffer[self._offset:self._offset + self._size])

    def to_list(self) -> list[float]:
        """Copy of the row's values."""
        return self._buffer[self._offset:self._offset + self._size]

    def __repr__(self) -> str:
        return f"RowAccessor({self.to_list()})"
