from __future__ import annotations

from collections.abc import Sequence as _SequenceABC
from typing import Any

import numpy as np

from .errors import ShapeError


def is_sequence_like(value: Any) -> bool:
    return isinstance(value, _SequenceABC) and not isinstance(value, (str, bytes, bytearray))


def _rows_cols(candidate: Any) -> tuple[int, int] | None:
    rows_attr: Any = getattr(candidate, "rows", None)
    cols_attr: Any = getattr(candidate, "cols", None)
    if callable(rows_attr) and callable(cols_attr):
        return int(rows_attr()), int(cols_attr())
    return None


def coerce_sequence_rows(candidate: Any) -> list[Any]:
    rows = list(candidate)
    if not rows:
        raise ShapeError("Matrix data must not be empty.")
    size = len(rows)
    for row in rows:
        if not (is_sequence_like(row) or isinstance(row, np.ndarray)):
            raise ShapeError("Each matrix row must be a sequence of entries.")
        if len(row) != size:
            raise ShapeError(
                "Matrix data must describe a square matrix (same number of rows and columns)."
            )
    return rows


def _from_matrix_like(candidate: Any, rows: int, cols: int) -> list[list[Any]]:
    if rows != cols:
        raise ShapeError(f"matrix must be square, got shape ({rows}, {cols})")
    get_attr: Any = getattr(candidate, "get", None)
    if not callable(get_attr):
        raise TypeError("matrix-like input must provide get(i, j)")
    return [[get_attr(i, j) for j in range(cols)] for i in range(rows)]


def _check_square(array: np.ndarray) -> None:
    if array.ndim != 2:
        raise ShapeError(f"Matrix input must be a 2D square structure, got {array.ndim}D.")
    rows, cols = array.shape
    if rows == 0 or cols == 0:
        raise ShapeError("Matrix data must not be empty.")
    if rows != cols:
        raise ShapeError(f"matrix must be square, got shape ({rows}, {cols})")


def _check_numeric(array: np.ndarray) -> None:
    if array.dtype.kind not in "biufc":
        raise TypeError(f"Matrix entries must be numeric, got dtype {array.dtype}.")


def coerce_square_matrix(candidate: Any) -> np.ndarray:
    """Return a private, read-only 2-D copy of `candidate`.

    Accepts NumPy arrays (and anything `np.asarray` understands), nested
    sequences and matrix-like objects exposing `rows()`, `cols()` and
    `get(i, j)`. Raises `ShapeError` for anything that is not a non-empty
    square matrix and `TypeError` for non-numeric entries.
    """

    if isinstance(candidate, np.ndarray):
        array = np.array(candidate, copy=True)
    else:
        shape = _rows_cols(candidate)
        if shape is not None:
            data: Any = _from_matrix_like(candidate, *shape)
        elif is_sequence_like(candidate):
            data = coerce_sequence_rows(candidate)
        else:
            data = candidate
        array = np.array(data, copy=True)

    _check_square(array)
    _check_numeric(array)
    array.setflags(write=False)
    return array


def freeze(value: Any) -> np.ndarray:
    """Read-only array for `value`; writable inputs are copied first."""

    array = np.asarray(value)
    if array.flags.writeable:
        array = np.array(array, copy=True)
        array.setflags(write=False)
    return array
