"""
Matrix exceptions.

Defines the error taxonomy raised by matrix construction, indexing and
arithmetic. Every error carries a message and a details dict describing the
offending operands, and also derives from the closest built-in exception so
callers catching ``ValueError``/``IndexError`` keep working.
"""

from typing import Any, Dict, Optional


class MatrixError(Exception):
    """Base exception for matrix errors"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class InvalidSizeError(MatrixError, ValueError):
    """Raised when a matrix is requested with a non-positive size"""

    def __init__(self, size: int, operation: str = "construction"):
        super().__init__(
            message=f"Matrix size must be positive, got {size}",
            details={"operation": operation, "size": size},
        )


class IndexOutOfRangeError(MatrixError, IndexError):
    """Raised when a row or column index falls outside [0, size)"""

    def __init__(self, axis: str, index: int, size: int):
        super().__init__(
            message=f"{axis.capitalize()} index {index} out of range for size {size}",
            details={"axis": axis, "index": index, "size": size},
        )


class DimensionMismatchError(MatrixError, ValueError):
    """Raised when a binary operation receives matrices of different sizes"""

    def __init__(self, operation: str, left_size: int, right_size: int):
        super().__init__(
            message=(
                f"Matrix sizes do not match for {operation}: "
                f"{left_size}x{left_size} vs {right_size}x{right_size}"
            ),
            details={
                "operation": operation,
                "left_size": left_size,
                "right_size": right_size,
            },
        )


class NotSquareError(DimensionMismatchError):
    """Raised when input data does not describe a square matrix"""

    def __init__(self, shape: tuple):
        MatrixError.__init__(
            self,
            message=f"Matrix data must be square, got shape {shape}",
            details={"operation": "construction", "shape": shape},
        )


class InvalidScalarError(MatrixError, ValueError):
    """Raised for a scalar operand outside the operation's domain"""

    def __init__(self, operation: str, scalar: Any, reason: str):
        super().__init__(
            message=f"Invalid scalar {scalar!r} for {operation}: {reason}",
            details={"operation": operation, "scalar": scalar},
        )


class DivisionByZeroError(InvalidScalarError, ZeroDivisionError):
    """Raised when a matrix is divided by zero"""

    def __init__(self, operation: str = "division"):
        super().__init__(operation, 0.0, "cannot divide by zero")
