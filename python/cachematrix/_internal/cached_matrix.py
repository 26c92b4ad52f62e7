from __future__ import annotations

import enum
from typing import Any

import numpy as np

from . import coercion as _coercion
from . import formatting as _formatting


class CacheState(str, enum.Enum):
    EMPTY = "empty"
    FRESH = "fresh"
    STALE = "stale"


def _default_matrix() -> np.ndarray:
    return _coercion.coerce_square_matrix(np.zeros((1, 1), dtype=np.float64))


class CachedMatrix:
    """A square matrix together with its last computed inverse.

    Every matrix write (`set_matrix`, `set`, `__setitem__`) drops the stored
    inverse and marks the holder dirty in the same step, so a stored inverse
    is valid exactly when `is_stale()` is False. The matrix is kept as a
    private read-only copy; edits must go through the holder.

    The holder never computes an inverse itself; see `InverseResolver`.
    """

    def __init__(self, matrix: Any = None) -> None:
        self._matrix: np.ndarray = (
            _default_matrix() if matrix is None else _coercion.coerce_square_matrix(matrix)
        )
        self._inverse: np.ndarray | None = None
        self._dirty = True
        self._version = 0

    # -- matrix ---------------------------------------------------------

    def set_matrix(self, value: Any) -> None:
        # Validation happens before any field is touched.
        matrix = _coercion.coerce_square_matrix(value)
        self._replace(matrix)

    def get_matrix(self) -> np.ndarray:
        return self._matrix

    def _replace(self, matrix: np.ndarray) -> None:
        self._matrix = matrix
        self._inverse = None
        self._dirty = True
        self._version += 1

    def set(self, i: int, j: int, value: Any) -> None:
        """Write one entry in place; invalidates the cached inverse."""

        current = self._matrix
        scalar = np.asarray(value)
        if scalar.ndim != 0:
            raise TypeError("matrix entries must be scalars")
        if scalar.dtype.kind not in "biufc":
            raise TypeError(f"Matrix entries must be numeric, got dtype {scalar.dtype}.")
        updated = np.array(current, dtype=np.result_type(current.dtype, scalar.dtype), copy=True)
        updated[int(i), int(j)] = scalar
        updated.setflags(write=False)
        self._replace(updated)

    def get(self, i: int, j: int) -> Any:
        return self._matrix[int(i), int(j)].item()

    def __getitem__(self, key: Any) -> Any:
        if not (isinstance(key, tuple) and len(key) == 2):
            raise TypeError("matrix indices must be provided as [row, col]")
        i, j = key
        return self.get(i, j)

    def __setitem__(self, key: Any, value: Any) -> None:
        if not (isinstance(key, tuple) and len(key) == 2):
            raise TypeError("matrix indices must be provided as [row, col]")
        i, j = key
        self.set(i, j, value)

    # -- inverse --------------------------------------------------------

    def set_inverse(self, value: Any) -> None:
        # Trusted write-back: no check that `value` inverts the current matrix.
        self._inverse = _coercion.freeze(value)
        self._dirty = False

    def get_inverse(self) -> np.ndarray | None:
        return self._inverse

    def is_stale(self) -> bool:
        return self._dirty

    def invalidate(self) -> None:
        """Drop the cached inverse, keeping the matrix."""

        self._inverse = None
        self._dirty = True

    def inverse(self) -> np.ndarray:
        """Inverse via the process-wide default resolver."""

        from .resolver import cache_solve

        return cache_solve(self)

    # -- introspection --------------------------------------------------

    @property
    def state(self) -> CacheState:
        if self._inverse is None:
            return CacheState.EMPTY
        if self._dirty:
            return CacheState.STALE
        return CacheState.FRESH

    @property
    def version(self) -> int:
        return self._version

    def rows(self) -> int:
        return int(self._matrix.shape[0])

    def cols(self) -> int:
        return int(self._matrix.shape[1])

    def size(self) -> int:
        return self.rows()

    @property
    def shape(self) -> tuple[int, int]:
        return (self.rows(), self.cols())

    @property
    def dtype(self) -> np.dtype:
        return self._matrix.dtype

    def __array__(self, dtype: Any = None, copy: Any = None) -> np.ndarray:
        # Always a copy; handing out the stored array would bypass invalidation.
        if copy is False:
            raise ValueError("CachedMatrix cannot be converted to an array without a copy")
        if dtype is None:
            return np.array(self._matrix, copy=True)
        return np.array(self._matrix, dtype=dtype, copy=True)

    def __str__(self) -> str:
        return _formatting.cached_matrix_str(self)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} shape={self.shape} state={self.state.value}>"
