"""
SquareMatrix: an n x n dense value type with a full operator surface.

Storage is a single row-major ``list[float]`` owned by the matrix. Every
operator that returns a matrix returns a fresh one; in-place operators
validate their operand before touching the buffer, so a rejected operation
leaves the receiver unchanged.

Operator map:

    a + b, a - b, -a, +a        element-wise
    a * b, a @ b                matrix product
    a * s, s * a                scaling
    a % b                       element-wise (Hadamard) product
    a % n                       non-negative modulo by a positive int
    a / s                       scalar division
    a ** p, a ^ p               integer power
    ~a                          transpose
    ==, !=, <, >, <=, >=        compare the sums of all elements
"""

from __future__ import annotations

import numbers
import sys
from typing import Any, Callable, Iterable, Iterator, TextIO

import numpy as np
from pydantic import BaseModel, ConfigDict, model_validator

from . import algorithms, formatting
from .core.config import get_settings
from .core.errors import (
    DimensionMismatchError,
    DivisionByZeroError,
    InvalidScalarError,
    InvalidSizeError,
    NotSquareError,
)
from .core.logging import get_logger
from .rows import RowAccessor, check_index
from .value import MathValue, ToleranceMode, values_close

logger = get_logger(__name__)


def _is_scalar(value: Any) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def _is_integer(value: Any) -> bool:
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


def _check_size(size: Any, operation: str) -> int:
    if not _is_integer(size):
        raise TypeError(f"Matrix size must be an int, got {type(size).__name__}")
    if size <= 0:
        raise InvalidSizeError(int(size), operation)
    return int(size)


class SquareMatrix(BaseModel, MathValue):
    """
    Square matrix of floats with bounds-checked access.

    Indexing is two-level: ``m[row]`` returns a RowAccessor and
    ``m[row][col]`` reads or writes one element. ``m[row, col]`` is
    equivalent. Negative indices are out of range.

    Equality and ordering compare the sum of all elements, so two
    structurally different matrices with the same sum are equal. Use
    ``compare`` for an element-wise check.

    Instances are not thread-safe; callers sharing one matrix between
    threads must synchronize access themselves.
    """

    model_config = ConfigDict(extra="forbid")

    size: int
    elements: list[float]

    # Keep numpy scalars from broadcasting over a matrix in ``np.float64(2) * m``.
    __array_ufunc__ = None

    def __init__(self, size: int, elements: list[float] | None = None, **kwargs: Any) -> None:
        """
        Create a size x size matrix.

        Args:
            size: Number of rows and columns (must be positive)
            elements: Optional row-major buffer of size*size values;
                the matrix is zero-filled when omitted
        """
        size = _check_size(size, "construction")
        if elements is None:
            elements = [0.0] * (size * size)
        super().__init__(size=size, elements=elements, **kwargs)

    @model_validator(mode="after")
    def _validate_buffer(self) -> SquareMatrix:
        if self.size <= 0:
            raise ValueError(f"Matrix size must be positive, got {self.size}")
        if len(self.elements) != self.size * self.size:
            raise ValueError(
                f"Buffer of length {len(self.elements)} does not fit a "
                f"{self.size}x{self.size} matrix"
            )
        return self

    # Construction

    @classmethod
    def _from_buffer(cls, size: int, elements: list[float]) -> SquareMatrix:
        """Wrap an already-validated buffer without copying it."""
        return cls.model_construct(size=size, elements=elements)

    @classmethod
    def identity(cls, size: int) -> SquareMatrix:
        """Identity matrix: 1.0 on the main diagonal, 0.0 elsewhere."""
        size = _check_size(size, "identity")
        elements = [0.0] * (size * size)
        for i in range(size):
            elements[i * size + i] = 1.0
        return cls._from_buffer(size, elements)

    @classmethod
    def from_rows(cls, rows: Iterable[Iterable[Any]]) -> SquareMatrix:
        """
        Build a matrix from a square nested sequence.

        Args:
            rows: Rows of numeric values; there must be as many values per
                row as there are rows

        Returns:
            New SquareMatrix

        Raises:
            InvalidSizeError: If rows is empty
            NotSquareError: If any row length differs from the row count
        """
        materialized = [list(row) for row in rows]
        size = len(materialized)
        if size == 0:
            raise InvalidSizeError(0, "from_rows")
        elements: list[float] = []
        for row in materialized:
            if len(row) != size:
                raise NotSquareError((size, len(row)))
            elements.extend(float(value) for value in row)
        return cls._from_buffer(size, elements)

    @classmethod
    def from_numpy(cls, array: np.ndarray) -> SquareMatrix:
        """Build a matrix from a square two-dimensional array."""
        array = np.asarray(array, dtype=float)
        if array.ndim != 2:
            raise NotSquareError(tuple(array.shape))
        if array.shape[0] == 0:
            raise InvalidSizeError(0, "from_numpy")
        if array.shape[0] != array.shape[1]:
            raise NotSquareError(tuple(array.shape))
        return cls._from_buffer(int(array.shape[0]), array.ravel().tolist())

    @classmethod
    def from_matrix(cls, other: SquareMatrix) -> SquareMatrix:
        """Deep copy of another matrix."""
        return cls._from_buffer(other.size, list(other.elements))

    def copy(self) -> SquareMatrix:
        """
        Create a deep copy of the matrix.

        Returns:
            New SquareMatrix with its own buffer
        """
        return self.from_matrix(self)

    def __copy__(self) -> SquareMatrix:
        return self.copy()

    def __deepcopy__(self, memo: dict | None = None) -> SquareMatrix:
        return self.copy()

    def assign(self, other: SquareMatrix) -> SquareMatrix:
        """
        Replace this matrix's size and contents with a copy of ``other``.

        Assigning a matrix to itself leaves it untouched.

        Returns:
            self
        """
        self._require_matrix(other, "assignment")
        if other is self:
            return self
        elements = list(other.elements)
        self.size = other.size
        self.elements = elements
        return self

    # Inspection

    @property
    def shape(self) -> tuple[int, int]:
        """Matrix dimensions (size, size)."""
        return (self.size, self.size)

    def __len__(self) -> int:
        return self.size

    def rows(self) -> Iterator[list[float]]:
        """Yield a copy of each row in order."""
        n = self.size
        for i in range(n):
            yield self.elements[i * n:(i + 1) * n]

    def __iter__(self) -> Iterator[RowAccessor]:
        for i in range(self.size):
            yield RowAccessor(self.elements, i, self.size)

    def to_python(self) -> list[list[float]]:
        """Convert to a nested list of floats."""
        return list(self.rows())

    def to_numpy(self) -> np.ndarray:
        """Convert to a NumPy array of shape (size, size)."""
        return np.array(self.elements, dtype=float).reshape(self.size, self.size)

    def sum(self) -> float:
        """Sum of all elements."""
        return algorithms.element_sum(self.elements)

    def trace(self) -> float:
        """Sum of the main diagonal."""
        n = self.size
        return algorithms.element_sum(self.elements[i * n + i] for i in range(n))

    # Element access

    def __getitem__(self, index: int | tuple[int, int]) -> RowAccessor | float:
        """Row accessor for ``m[row]``, element for ``m[row, col]``."""
        if isinstance(index, tuple):
            row, col = index
            check_index(row, self.size, "row")
            check_index(col, self.size, "column")
            return self.elements[row * self.size + col]
        check_index(index, self.size, "row")
        return RowAccessor(self.elements, index, self.size)

    def __setitem__(self, index: tuple[int, int], value: float) -> None:
        """Write one element with ``m[row, col] = value``."""
        if not isinstance(index, tuple):
            raise TypeError("Assign elements with m[row][col] = value or m[row, col] = value")
        row, col = index
        check_index(row, self.size, "row")
        check_index(col, self.size, "column")
        self.elements[row * self.size + col] = float(value)

    # Internal helpers

    @staticmethod
    def _require_matrix(other: Any, operation: str) -> None:
        if not isinstance(other, SquareMatrix):
            raise TypeError(
                f"{operation} requires a SquareMatrix, got {type(other).__name__}"
            )

    def _require_same_size(self, other: SquareMatrix, operation: str) -> None:
        if self.size != other.size:
            raise DimensionMismatchError(operation, self.size, other.size)

    def _map(self, func: Callable[[float], float]) -> list[float]:
        return [func(value) for value in self.elements]

    def _zip_with(self, other: SquareMatrix, func: Callable[[float, float], float]) -> list[float]:
        return [func(a, b) for a, b in zip(self.elements, other.elements)]

    def _product_buffer(self, other: SquareMatrix) -> list[float]:
        n = self.size
        a = self.elements
        b = other.elements
        result = [0.0] * (n * n)
        for i in range(n):
            for j in range(n):
                total = 0.0
                for k in range(n):
                    total += a[i * n + k] * b[k * n + j]
                result[i * n + j] = total
        return result

    @staticmethod
    def _check_modulus(scalar: int) -> None:
        if scalar <= 0:
            raise InvalidScalarError("modulo", scalar, "divisor must be positive")

    # Named operations

    def add(self, other: SquareMatrix) -> SquareMatrix:
        """Element-wise sum."""
        self._require_matrix(other, "addition")
        self._require_same_size(other, "addition")
        return self._from_buffer(self.size, self._zip_with(other, lambda a, b: a + b))

    def subtract(self, other: SquareMatrix) -> SquareMatrix:
        """Element-wise difference."""
        self._require_matrix(other, "subtraction")
        self._require_same_size(other, "subtraction")
        return self._from_buffer(self.size, self._zip_with(other, lambda a, b: a - b))

    def negate(self) -> SquareMatrix:
        """Element-wise negation."""
        return self._from_buffer(self.size, self._map(lambda a: -a))

    def multiply(self, other: SquareMatrix) -> SquareMatrix:
        """Matrix product: result[i][j] = sum_k self[i][k] * other[k][j]."""
        self._require_matrix(other, "multiplication")
        self._require_same_size(other, "multiplication")
        return self._from_buffer(self.size, self._product_buffer(other))

    def scale(self, scalar: float) -> SquareMatrix:
        """Multiply every element by a scalar."""
        if not _is_scalar(scalar):
            raise TypeError(f"Scale factor must be a real number, got {type(scalar).__name__}")
        factor = float(scalar)
        return self._from_buffer(self.size, self._map(lambda a: a * factor))

    def elementwise_multiply(self, other: SquareMatrix) -> SquareMatrix:
        """Hadamard product."""
        self._require_matrix(other, "element-wise multiplication")
        self._require_same_size(other, "element-wise multiplication")
        return self._from_buffer(self.size, self._zip_with(other, lambda a, b: a * b))

    def modulo(self, scalar: int) -> SquareMatrix:
        """
        Non-negative remainder of every element divided by ``scalar``.

        Raises:
            InvalidScalarError: If scalar <= 0
        """
        if not _is_integer(scalar):
            raise TypeError(f"Modulus must be an int, got {type(scalar).__name__}")
        self._check_modulus(scalar)
        modulus = int(scalar)
        return self._from_buffer(
            self.size, self._map(lambda a: algorithms.nonnegative_modulo(a, modulus))
        )

    def divide(self, scalar: float) -> SquareMatrix:
        """
        Divide every element by a scalar.

        Raises:
            DivisionByZeroError: If scalar == 0
        """
        if not _is_scalar(scalar):
            raise TypeError(f"Divisor must be a real number, got {type(scalar).__name__}")
        if scalar == 0.0:
            raise DivisionByZeroError()
        divisor = float(scalar)
        return self._from_buffer(self.size, self._map(lambda a: a / divisor))

    def power(self, exponent: int) -> SquareMatrix:
        """
        Raise the matrix to a non-negative integer power.

        The result is built by ``exponent - 1`` successive multiplications by
        this matrix. Power 0 is the identity and power 1 a copy.

        Raises:
            InvalidScalarError: If exponent is negative (no inverse support)
        """
        if not _is_integer(exponent):
            raise TypeError(f"Exponent must be an int, got {type(exponent).__name__}")
        if exponent < 0:
            raise InvalidScalarError(
                "power", exponent, "negative powers are not supported (inverse not implemented)"
            )
        if exponent == 0:
            return self.identity(self.size)

        logger.debug(
            "Raising matrix to power",
            extra={"extra_data": {"size": self.size, "exponent": exponent}},
        )
        result = self.copy()
        for _ in range(exponent - 1):
            result = self._from_buffer(self.size, result._product_buffer(self))
        return result

    def transpose(self) -> SquareMatrix:
        """Return the transpose: result[i][j] = self[j][i]."""
        n = self.size
        elements = [self.elements[j * n + i] for i in range(n) for j in range(n)]
        return self._from_buffer(n, elements)

    def determinant(self, method: str | None = None) -> float:
        """
        Determinant of the matrix.

        Args:
            method: "cofactor" (Laplace expansion, exact for integer-valued
                input) or "numpy" (LU based). Defaults to the configured
                DETERMINANT_METHOD.

        Returns:
            The determinant as a float
        """
        settings = get_settings()
        method = (method or settings.DETERMINANT_METHOD).lower()
        logger.debug(
            "Computing determinant",
            extra={"extra_data": {"size": self.size, "method": method}},
        )
        return algorithms.determinant(
            self.elements, self.size, method, settings.COFACTOR_WARN_SIZE
        )

    def increment(self) -> SquareMatrix:
        """Add 1.0 to every element in place and return self (pre-increment)."""
        for i, value in enumerate(self.elements):
            self.elements[i] = value + 1.0
        return self

    def decrement(self) -> SquareMatrix:
        """Subtract 1.0 from every element in place and return self (pre-decrement)."""
        for i, value in enumerate(self.elements):
            self.elements[i] = value - 1.0
        return self

    def post_increment(self) -> SquareMatrix:
        """Return a copy of the current state, then increment in place."""
        previous = self.copy()
        self.increment()
        return previous

    def post_decrement(self) -> SquareMatrix:
        """Return a copy of the current state, then decrement in place."""
        previous = self.copy()
        self.decrement()
        return previous

    # Arithmetic operators

    def __add__(self, other: Any) -> SquareMatrix:
        if not isinstance(other, SquareMatrix):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other: Any) -> SquareMatrix:
        if not isinstance(other, SquareMatrix):
            return NotImplemented
        return self.subtract(other)

    def __neg__(self) -> SquareMatrix:
        return self.negate()

    def __pos__(self) -> SquareMatrix:
        return self.copy()

    def __mul__(self, other: Any) -> SquareMatrix:
        if isinstance(other, SquareMatrix):
            return self.multiply(other)
        if _is_scalar(other):
            return self.scale(other)
        return NotImplemented

    def __rmul__(self, other: Any) -> SquareMatrix:
        if _is_scalar(other):
            return self.scale(other)
        return NotImplemented

    def __matmul__(self, other: Any) -> SquareMatrix:
        if not isinstance(other, SquareMatrix):
            return NotImplemented
        return self.multiply(other)

    def __mod__(self, other: Any) -> SquareMatrix:
        if isinstance(other, SquareMatrix):
            return self.elementwise_multiply(other)
        if _is_integer(other):
            return self.modulo(other)
        return NotImplemented

    def __truediv__(self, other: Any) -> SquareMatrix:
        if not _is_scalar(other):
            return NotImplemented
        return self.divide(other)

    def __pow__(self, other: Any) -> SquareMatrix:
        if not _is_integer(other):
            return NotImplemented
        return self.power(other)

    # Caret spelling of the power operator.
    __xor__ = __pow__

    def __invert__(self) -> SquareMatrix:
        return self.transpose()

    # In-place operators

    def __iadd__(self, other: Any) -> SquareMatrix:
        if not isinstance(other, SquareMatrix):
            return NotImplemented
        self._require_same_size(other, "+=")
        for i, value in enumerate(other.elements):
            self.elements[i] += value
        return self

    def __isub__(self, other: Any) -> SquareMatrix:
        if not isinstance(other, SquareMatrix):
            return NotImplemented
        self._require_same_size(other, "-=")
        for i, value in enumerate(other.elements):
            self.elements[i] -= value
        return self

    def __imul__(self, other: Any) -> SquareMatrix:
        if isinstance(other, SquareMatrix):
            self._require_same_size(other, "*=")
            self.elements[:] = self._product_buffer(other)
            return self
        if _is_scalar(other):
            factor = float(other)
            for i, value in enumerate(self.elements):
                self.elements[i] = value * factor
            return self
        return NotImplemented

    def __imatmul__(self, other: Any) -> SquareMatrix:
        if not isinstance(other, SquareMatrix):
            return NotImplemented
        self._require_same_size(other, "@=")
        self.elements[:] = self._product_buffer(other)
        return self

    def __imod__(self, other: Any) -> SquareMatrix:
        if isinstance(other, SquareMatrix):
            self._require_same_size(other, "%=")
            for i, value in enumerate(other.elements):
                self.elements[i] *= value
            return self
        if _is_integer(other):
            self._check_modulus(other)
            modulus = int(other)
            self.elements[:] = self._map(lambda a: algorithms.nonnegative_modulo(a, modulus))
            return self
        return NotImplemented

    def __itruediv__(self, other: Any) -> SquareMatrix:
        if not _is_scalar(other):
            return NotImplemented
        if other == 0.0:
            raise DivisionByZeroError("/=")
        divisor = float(other)
        for i, value in enumerate(self.elements):
            self.elements[i] = value / divisor
        return self

    # Comparison by element sum

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, SquareMatrix):
            return NotImplemented
        return self.sum() == other.sum()

    def __ne__(self, other: Any) -> bool:
        if not isinstance(other, SquareMatrix):
            return NotImplemented
        return self.sum() != other.sum()

    def __lt__(self, other: Any) -> bool:
        if not isinstance(other, SquareMatrix):
            return NotImplemented
        return self.sum() < other.sum()

    def __gt__(self, other: Any) -> bool:
        if not isinstance(other, SquareMatrix):
            return NotImplemented
        return self.sum() > other.sum()

    def __le__(self, other: Any) -> bool:
        if not isinstance(other, SquareMatrix):
            return NotImplemented
        return self.sum() <= other.sum()

    def __ge__(self, other: Any) -> bool:
        if not isinstance(other, SquareMatrix):
            return NotImplemented
        return self.sum() >= other.sum()

    __hash__ = None

    def compare(
        self,
        other: Any,
        tolerance: float | None = None,
        mode: str = ToleranceMode.RELATIVE,
    ) -> bool:
        """Element-wise comparison within a tolerance."""
        if not isinstance(other, SquareMatrix) or other.size != self.size:
            return False
        if tolerance is None:
            tolerance = get_settings().COMPARE_TOLERANCE
        return all(
            values_close(a, b, tolerance, mode)
            for a, b in zip(self.elements, other.elements)
        )

    # Rendering

    def to_string(self) -> str:
        """Pipe-delimited rows, one line per row."""
        return formatting.render_text(self.rows(), get_settings().FORMAT_SPEC)

    def to_tex(self) -> str:
        """Convert to LaTeX (pmatrix)."""
        return formatting.render_tex(self.rows(), get_settings().FORMAT_SPEC)

    def write(self, stream: TextIO | None = None) -> TextIO:
        """Write the text rendering to ``stream`` (stdout by default)."""
        stream = stream if stream is not None else sys.stdout
        return formatting.write_rows(stream, self.rows(), get_settings().FORMAT_SPEC)

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"SquareMatrix.from_rows({self.to_python()!r})"
