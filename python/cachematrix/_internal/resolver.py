from __future__ import annotations

import logging
import warnings
from typing import Any, Callable

import numpy as np

from . import trace as _trace
from .config import ResolverConfig
from .errors import SingularMatrixError
from .warnings import CacheMatrixConditionWarning

logger = logging.getLogger(__name__)

Invert = Callable[[Any], Any]


def condition_estimate(matrix: np.ndarray, inverse: np.ndarray) -> float:
    """1-norm condition number from a matrix and its computed inverse."""

    return float(np.linalg.norm(matrix, 1) * np.linalg.norm(inverse, 1))


class InverseResolver:
    """Return a valid inverse for a `CachedMatrix`, computing it only on a miss.

    `invert` is the external linear-algebra collaborator (default
    `numpy.linalg.inv`). A cache hit is decided purely from the holder's
    dirty flag; the matrix contents are never compared.

    Not thread-safe: callers sharing one holder across threads must serialize
    `resolve` calls themselves.
    """

    def __init__(
        self,
        invert: Invert | None = None,
        *,
        trace: _trace.CacheTrace | None = None,
        config: ResolverConfig | None = None,
    ) -> None:
        self._invert: Invert = np.linalg.inv if invert is None else invert
        self.trace = _trace.default_instance() if trace is None else trace
        self.config = ResolverConfig() if config is None else config
        self._stats = {"hits": 0, "misses": 0, "errors": 0}

    def _emit(self, event: str, cache: Any, detail: str | None = None) -> None:
        if self.config.trace_enabled:
            self.trace.emit(event, cache, detail=detail)

    def _fail(self, cache: Any, message: str) -> SingularMatrixError:
        self._stats["errors"] += 1
        self._emit(_trace.ERROR, cache, detail=message)
        logger.warning("inverse computation failed: %s", message)
        return SingularMatrixError(message)

    def _compute(self, cache: Any) -> np.ndarray:
        data = cache.get_matrix()
        try:
            result = self._invert(data)
        except SingularMatrixError as exc:
            raise self._fail(cache, str(exc)) from exc
        except (np.linalg.LinAlgError, ZeroDivisionError) as exc:
            raise self._fail(cache, f"matrix is not invertible: {exc}") from exc

        inv = np.asarray(result)
        if inv.shape != data.shape:
            raise self._fail(
                cache, f"inverse has shape {inv.shape}, expected {data.shape}"
            )
        if inv.dtype.kind not in "biufc":
            raise self._fail(cache, f"inverse has non-numeric dtype {inv.dtype}")
        if not np.all(np.isfinite(inv)):
            raise self._fail(cache, "inverse contains non-finite values (matrix is singular)")

        limit = self.config.condition_limit
        warn_at = self.config.condition_warn_threshold
        if limit is not None or warn_at is not None:
            cond = condition_estimate(data, inv)
            if limit is not None and cond > limit:
                raise self._fail(
                    cache, f"matrix is ill-conditioned (condition estimate {cond:.3g} > {limit:.3g})"
                )
            if warn_at is not None and cond > warn_at:
                warnings.warn(
                    f"inverting an ill-conditioned matrix (condition estimate {cond:.3g}); "
                    "the cached inverse may be inaccurate",
                    CacheMatrixConditionWarning,
                    stacklevel=3,
                )

        inv.setflags(write=False)
        return inv

    def resolve(self, cache: Any) -> np.ndarray:
        inverse = cache.get_inverse()
        stale = cache.is_stale()
        if inverse is not None and not stale:
            self._stats["hits"] += 1
            logger.debug("getting cached data")
            self._emit(_trace.HIT, cache)
            return inverse

        self._stats["misses"] += 1
        self._emit(_trace.MISS, cache)
        inv = self._compute(cache)
        cache.set_inverse(inv)
        self._emit(_trace.STORE, cache)
        return inv

    __call__ = resolve

    def stats(self) -> dict[str, Any]:
        hits = self._stats["hits"]
        misses = self._stats["misses"]
        total = hits + misses
        return {
            "hits": hits,
            "misses": misses,
            "errors": self._stats["errors"],
            "total_requests": total,
            "hit_rate_percent": round(hits / total * 100, 1) if total else 0.0,
        }

    def reset_stats(self) -> None:
        self._stats = {"hits": 0, "misses": 0, "errors": 0}


_default_resolver: InverseResolver | None = None


def default_resolver() -> InverseResolver:
    global _default_resolver
    if _default_resolver is None:
        _default_resolver = InverseResolver(config=ResolverConfig.from_env())
    return _default_resolver


def cache_solve(cache: Any) -> np.ndarray:
    """Inverse of `cache` through the process-wide default resolver."""

    return default_resolver().resolve(cache)
