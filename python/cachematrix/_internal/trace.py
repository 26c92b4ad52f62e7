from __future__ import annotations

import logging
import time
from dataclasses import asdict, dataclass
from typing import Any, Dict, Tuple

logger = logging.getLogger(__name__)

HIT = "hit"
MISS = "miss"
STORE = "store"
ERROR = "error"

EVENTS: Tuple[str, ...] = (HIT, MISS, STORE, ERROR)


@dataclass
class CacheRecord:
    op: str
    event: str
    trace_tag: str
    shape: Tuple[int, int] | None
    version: int | None
    state: str | None
    detail: str | None
    timestamp: float


def _shape(obj: Any) -> Tuple[int, int] | None:
    try:
        return int(obj.rows()), int(obj.cols())
    except Exception:
        pass
    shape_attr = getattr(obj, "shape", None)
    if isinstance(shape_attr, tuple) and len(shape_attr) == 2:
        return int(shape_attr[0]), int(shape_attr[1])
    return None


def _state_label(obj: Any) -> str | None:
    state = getattr(obj, "state", None)
    if state is None:
        return None
    return str(getattr(state, "value", state))


class CacheTrace:
    """Side channel recording what the resolver did with each request.

    Keeps the latest record overall and per event kind, plus running counts.
    Nothing here feeds back into resolution; a disabled trace only stops
    recording.
    """

    def __init__(self, *, enabled: bool = True) -> None:
        self.enabled = bool(enabled)
        self._counter = 0
        self._counts: Dict[str, int] = {name: 0 for name in EVENTS}
        self._last: dict[str, dict[str, Any]] = {}

    def clear(self) -> None:
        self._last.clear()
        self._counts = {name: 0 for name in EVENTS}

    def _record(self, record: CacheRecord) -> dict[str, Any]:
        payload = asdict(record)
        self._last["__latest__"] = payload
        self._last[record.event] = payload
        self._counts[record.event] = self._counts.get(record.event, 0) + 1
        return payload

    def emit(
        self,
        event: str,
        cache: Any,
        *,
        op: str = "resolve",
        detail: str | None = None,
    ) -> dict[str, Any] | None:
        if event not in EVENTS:
            raise ValueError(f"unknown cache trace event {event!r}")
        if not self.enabled:
            return None

        self._counter += 1
        version = getattr(cache, "version", None)
        record = CacheRecord(
            op=op,
            event=event,
            trace_tag=f"{op}:{event}:{self._counter}",
            shape=_shape(cache),
            version=int(version) if version is not None else None,
            state=_state_label(cache),
            detail=detail,
            timestamp=time.time(),
        )
        logger.debug("cache %s (%s) shape=%s", event, record.trace_tag, record.shape)
        return self._record(record)

    def last(self, event: str | None = None) -> dict[str, Any] | None:
        key = event or "__latest__"
        payload = self._last.get(key)
        if payload is None:
            return None
        return dict(payload)

    def counts(self) -> dict[str, int]:
        return dict(self._counts)


# Module-level singleton helpers (optional convenience)
_default_trace = CacheTrace()


def default_instance() -> CacheTrace:
    return _default_trace
