"""Command line tour of the SquareMatrix operations."""

from __future__ import annotations

import argparse
import io
import sys
from typing import TextIO

from .core.config import get_settings
from .core.errors import MatrixError
from .core.logging import get_logger, setup_logging
from .square import SquareMatrix

logger = get_logger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Print a walk-through of square matrix operations."
    )
    parser.add_argument(
        "--size",
        type=int,
        default=3,
        help="Size of the demo matrices (default: 3).",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Override the configured log level (e.g. DEBUG).",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Only print the final status line.",
    )
    return parser


def _sequential(size: int, start: float = 1.0, step: float = 1.0) -> SquareMatrix:
    """Matrix filled row by row with start, start + step, ..."""
    matrix = SquareMatrix(size)
    value = start
    for i in range(size):
        for j in range(size):
            matrix[i][j] = value
            value += step
    return matrix


def _section(out: TextIO, title: str, body: object) -> None:
    out.write(f"{title}\n")
    if isinstance(body, SquareMatrix):
        body.write(out)
        out.write("\n")
    else:
        out.write(f"{body}\n\n")


def run_demo(size: int, out: TextIO) -> None:
    """Write the operation tour for ``size`` x ``size`` matrices to ``out``."""
    m1 = _sequential(size)
    m2 = _sequential(size, start=float(size * size), step=-1.0)

    out.write("SquareMatrix Demo\n")
    out.write("=================\n\n")
    _section(out, "m1:", m1)
    _section(out, "m2:", m2)
    _section(out, "Matrix addition (m1 + m2):", m1 + m2)
    _section(out, "Matrix subtraction (m1 - m2):", m1 - m2)
    _section(out, "Matrix multiplication (m1 * m2):", m1 * m2)
    _section(out, "Element-wise multiplication (m1 % m2):", m1 % m2)
    _section(out, "Scalar multiplication (m1 * 2):", m1 * 2)
    _section(out, "Scalar division (m1 / 2):", m1 / 2)
    _section(out, "Transpose of m1 (~m1):", ~m1)
    # cofactor expansion is O(n!); large demos fall back to LU
    method = "numpy" if size > get_settings().COFACTOR_WARN_SIZE else None
    _section(out, "Determinant of m1:", m1.determinant(method=method))
    _section(out, "m1 raised to power 2 (m1 ** 2):", m1 ** 2)
    _section(out, f"{size}x{size} identity matrix:", SquareMatrix.identity(size))

    _section(out, "m1 == m2:", m1 == m2)
    _section(out, "m1 != m2:", m1 != m2)
    _section(out, "m1 < m2:", m1 < m2)
    _section(out, "m1 > m2:", m1 > m2)

    _section(out, "Pre-increment (m1.increment()):", m1.increment())
    _section(out, "Post-increment returns (m1.post_increment()):", m1.post_increment())
    _section(out, "After post-increment, m1:", m1)
    _section(out, "Pre-decrement (m1.decrement()):", m1.decrement())
    _section(out, "Post-decrement returns (m1.post_decrement()):", m1.post_decrement())
    _section(out, "After post-decrement, m1:", m1)

    m1 += m2
    _section(out, "Compound assignment (m1 += m2):", m1)
    m1 *= 2
    _section(out, "Compound assignment (m1 *= 2):", m1)
    m1 %= 3
    _section(out, "Compound assignment (m1 %= 3):", m1)
    m1 /= 2
    _section(out, "Compound assignment (m1 /= 2):", m1)

    _section(out, "Modulo operation (m1 % 3):", m1 % 3)
    _section(out, "Accessing m1[0][0]:", m1[0][0])
    m1[0][0] = 42
    _section(out, "After setting m1[0][0] = 42:", m1)


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    settings = get_settings()
    if args.log_level:
        settings = settings.model_copy(update={"LOG_LEVEL": args.log_level})
    setup_logging(settings, stream=sys.stderr)

    try:
        if args.quiet:
            run_demo(args.size, io.StringIO())
        else:
            run_demo(args.size, sys.stdout)
    except MatrixError as exc:
        logger.error(
            f"Demo failed: {exc}",
            extra={"extra_data": {"error_type": exc.__class__.__name__, **exc.details}},
        )
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print("Demo completed successfully!")
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
