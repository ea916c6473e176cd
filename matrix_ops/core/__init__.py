"""Configuration, logging and error taxonomy shared by the matrix modules."""

from .config import Settings, get_settings, settings
from .errors import (
    DimensionMismatchError,
    DivisionByZeroError,
    IndexOutOfRangeError,
    InvalidScalarError,
    InvalidSizeError,
    MatrixError,
    NotSquareError,
)
from .logging import get_context_logger, get_logger, setup_logging

__all__ = [
    "Settings",
    "get_settings",
    "settings",
    "MatrixError",
    "InvalidSizeError",
    "IndexOutOfRangeError",
    "DimensionMismatchError",
    "NotSquareError",
    "InvalidScalarError",
    "DivisionByZeroError",
    "get_logger",
    "get_context_logger",
    "setup_logging",
]
