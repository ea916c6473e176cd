"""
matrix_ops - square matrix value type

Dense n x n matrices of floats with:
- Bounds-checked two-level indexing
- Operator overloading (arithmetic, element-wise, power, transpose)
- Cofactor-expansion determinant
- Comparison by element sum
"""

from .core.errors import (
    DimensionMismatchError,
    DivisionByZeroError,
    IndexOutOfRangeError,
    InvalidScalarError,
    InvalidSizeError,
    MatrixError,
    NotSquareError,
)
from .rows import RowAccessor
from .square import SquareMatrix
from .value import MathValue, ToleranceMode

__version__ = "1.0.0"

__all__ = [
    "SquareMatrix",
    "RowAccessor",
    "MathValue",
    "ToleranceMode",
    "MatrixError",
    "InvalidSizeError",
    "IndexOutOfRangeError",
    "DimensionMismatchError",
    "NotSquareError",
    "InvalidScalarError",
    "DivisionByZeroError",
]
