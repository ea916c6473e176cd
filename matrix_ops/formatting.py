"""
Text renderings of square matrices.

The pipe layout mirrors the classic stream output: every line opens with
``"|  "``, prints each value followed by a space and closes with ``" |"``.
"""

from __future__ import annotations

from typing import Iterable, Sequence, TextIO


def format_value(value: float, spec: str = "g") -> str:
    """Format a single element; integral floats lose their trailing ``.0`` with ``g``."""
    return format(value, spec)


def render_rows(rows: Iterable[Sequence[float]], spec: str = "g") -> list[str]:
    """One pipe-delimited line per row."""
    lines = []
    for row in rows:
        body = "".join(f"{format_value(value, spec)} " for value in row)
        lines.append(f"|  {body} |")
    return lines


def render_text(rows: Iterable[Sequence[float]], spec: str = "g") -> str:
    """Multi-line rendering, each line terminated by a newline."""
    return "".join(f"{line}\n" for line in render_rows(rows, spec))


def render_tex(rows: Iterable[Sequence[float]], spec: str = "g") -> str:
    """LaTeX pmatrix rendering."""
    rows_tex = " \\\\ ".join(
        " & ".join(format_value(value, spec) for value in row) for row in rows
    )
    return f"\\begin{{pmatrix}} {rows_tex} \\end{{pmatrix}}"


def write_rows(stream: TextIO, rows: Iterable[Sequence[float]], spec: str = "g") -> TextIO:
    """Write the text rendering to a caller-supplied stream and return it."""
    stream.write(render_text(rows, spec))
    return stream
