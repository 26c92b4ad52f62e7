from __future__ import annotations

import numpy as np


class ShapeError(ValueError):
    """Matrix data is not a non-empty square 2-D structure."""


class SingularMatrixError(np.linalg.LinAlgError):
    """The inversion collaborator could not produce a usable inverse."""
