"""
Base MathValue class for matrix value objects.

This module provides the conversion and comparison contract shared by the
value types of the package:
- Fuzzy comparison with tolerances
- Multiple output formats (string, TeX, Python natives)
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from typing import Any


class ToleranceMode:
    """Modes for fuzzy comparison."""

    RELATIVE = "relative"  # |a - b| <= tol * max(|a|, |b|)
    ABSOLUTE = "absolute"  # |a - b| <= tol

    ALL = (RELATIVE, ABSOLUTE)


def values_close(a: float, b: float, tolerance: float, mode: str = ToleranceMode.RELATIVE) -> bool:
    """
    Compare two floats within a tolerance.

    Relative mode falls back to an absolute check of the same tolerance so
    that values near zero still compare equal.

    Args:
        a: First value
        b: Second value
        tolerance: Allowed difference (relative or absolute)
        mode: One of ToleranceMode.ALL

    Returns:
        True if the values agree within tolerance

    Raises:
        ValueError: If mode is unknown
    """
    if mode == ToleranceMode.ABSOLUTE:
        return abs(a - b) <= tolerance
    if mode == ToleranceMode.RELATIVE:
        return math.isclose(a, b, rel_tol=tolerance, abs_tol=tolerance)
    raise ValueError(f"Unknown tolerance mode {mode!r}")


class MathValue(ABC):
    """
    Base class for mathematical value objects.

    Subclasses must implement the conversions and the fuzzy ``compare``.

    Note: Concrete subclasses should inherit from both BaseModel and MathValue,
    e.g., ``class SquareMatrix(BaseModel, MathValue):``. MathValue itself is
    abstract and does not inherit from BaseModel to avoid MRO conflicts.
    """

    @abstractmethod
    def compare(
        self,
        other: Any,
        tolerance: float | None = None,
        mode: str = ToleranceMode.RELATIVE,
    ) -> bool:
        """
        Fuzzy structural comparison with tolerance.

        Args:
            other: Value to compare against
            tolerance: Tolerance for comparison (None for the configured default)
            mode: Tolerance mode (relative, absolute)

        Returns:
            True if values are equal within tolerance
        """
        pass

    @abstractmethod
    def to_string(self) -> str:
        """Convert to human-readable string."""
        pass

    @abstractmethod
    def to_tex(self) -> str:
        """Convert to LaTeX representation."""
        pass

    @abstractmethod
    def to_python(self) -> Any:
        """Convert to Python native types."""
        pass

    def __str__(self) -> str:
        """String representation (uses to_string)."""
        return self.to_string()
