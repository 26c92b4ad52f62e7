"""Warnings raised while computing cached inverses.

`CacheMatrixConditionWarning` fires when a freshly inverted matrix is badly
conditioned; the inverse is still cached. Filter on `CacheMatrixWarning` to
silence everything this package emits.
"""


class CacheMatrixWarning(UserWarning):
    """Base warning category for all cachematrix user-facing warnings."""


class CacheMatrixConditionWarning(CacheMatrixWarning):
    """The freshly computed inverse belongs to an ill-conditioned matrix."""
