"""Memoized matrix inverses with dirty-flag invalidation."""
from __future__ import annotations

from importlib import metadata as _metadata

try:
    __version__ = _metadata.version("cachematrix")
except _metadata.PackageNotFoundError:
    __version__ = "unknown"

from typing import Any

from ._internal import config as _config
from ._internal import formatting as _formatting
from ._internal import trace as _trace
from ._internal.cached_matrix import CachedMatrix, CacheState
from ._internal.config import ResolverConfig
from ._internal.errors import ShapeError, SingularMatrixError
from ._internal.resolver import InverseResolver, cache_solve, default_resolver
from ._internal.trace import CacheTrace
from ._internal.warnings import CacheMatrixConditionWarning, CacheMatrixWarning


def make_cache_matrix(value: Any = None) -> CachedMatrix:
    """Wrap `value` (default: 1x1 zero matrix) in a CachedMatrix."""

    return CachedMatrix(value)


def last_cache_trace(event: str | None = None) -> dict[str, Any] | None:
    return _trace.default_instance().last(event)


def clear_cache_traces() -> None:
    _trace.default_instance().clear()


def cache_trace_counts() -> dict[str, int]:
    return _trace.default_instance().counts()


def get_condition_warn_threshold() -> float | None:
    return default_resolver().config.condition_warn_threshold


def set_condition_warn_threshold(value: float | None) -> float | None:
    cfg = default_resolver().config
    cfg.condition_warn_threshold = _config.check_threshold("condition_warn_threshold", value)
    return cfg.condition_warn_threshold


def get_condition_limit() -> float | None:
    return default_resolver().config.condition_limit


def set_condition_limit(value: float | None) -> float | None:
    cfg = default_resolver().config
    cfg.condition_limit = _config.check_threshold("condition_limit", value)
    return cfg.condition_limit


def set_print_edge_items(count: int) -> None:
    """Rows/columns shown at each edge before `str()` truncates a matrix."""

    _formatting.configure(edge_items=count)


__all__ = [
    "CachedMatrix",
    "CacheState",
    "CacheTrace",
    "CacheMatrixConditionWarning",
    "CacheMatrixWarning",
    "InverseResolver",
    "ResolverConfig",
    "ShapeError",
    "SingularMatrixError",
    "cache_solve",
    "cache_trace_counts",
    "clear_cache_traces",
    "default_resolver",
    "get_condition_limit",
    "get_condition_warn_threshold",
    "last_cache_trace",
    "make_cache_matrix",
    "set_condition_limit",
    "set_condition_warn_threshold",
    "set_print_edge_items",
]
